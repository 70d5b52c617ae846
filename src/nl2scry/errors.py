"""
Translation Error Taxonomy

Failures the pipeline can raise. A resolver miss is not among them: it is
an ordinary tool result fed back to the model.
"""

from __future__ import annotations


class TranslationError(Exception):
    """Base class for failures that end a translation."""

    kind = "translation_error"


class ConfigurationError(TranslationError):
    """Missing or invalid provider configuration. Never retried."""

    kind = "configuration_error"


class TransientProviderError(TranslationError):
    """Network, rate-limit or server-side provider failure. Retried."""

    kind = "transient_provider_error"


class UnrecoverableProviderError(TranslationError):
    """Provider rejected the request (e.g. bad credentials). Never retried."""

    kind = "unrecoverable_provider_error"
