"""
Scryfall search syntax reference.

Embedded verbatim in the system prompt. Nothing in this package parses it.
"""

SCRYFALL_SYNTAX_REFERENCE = """\
Colors: c: or color: (w, u, r, b, g, colorless, multicolor, guild/shard names)
Color identity: id: or identity:
Card types: t: or type:
Oracle text: o: or oracle: (use quotes for phrases, ~ for card name)
Full oracle: fo: or fulloracle:
Keywords: keyword: or kw:
Mana costs: m: or mana: (e.g. m:2WW, m:{G}{U})
Mana value: mv or manavalue (with comparisons like mv=5, mv>=3)
Power: pow or power (pow>=8, pow>tou)
Toughness: tou or toughness
Loyalty: loy or loyalty
Multi-faced: is:split, is:flip, is:transform, is:meld, is:dfc, is:mdfc
Spells/permanents: is:spell, is:permanent, is:historic, is:vanilla
Rarity: r: or rarity: (common, uncommon, rare, mythic, special, bonus)
Sets: s:, e:, set:, edition: (three-letter set codes)
Collector number: cn: or number:
Blocks: b: or block:
Set types: st:core, st:expansion, st:masters, st:commander, etc.
Cubes: cube: (vintage, modern, legacy, etc.)
Format legality: f: or format: (standard, modern, legacy, vintage, commander, pioneer, pauper, etc.)
Banned/restricted: banned:, restricted:
Commander: is:commander, is:brawler, is:companion
Reserved list: is:reserved
Prices: usd, eur, tix (with comparisons like usd>=0.50)
Cheapest: cheapest:usd, cheapest:eur, cheapest:tix
Artist: a: or artist:
Flavor text: ft: or flavor:
Watermark: wm: or watermark:
New printings: new:art, new:artist, new:flavor, new:frame, new:rarity, new:language
Border: border: (black, white, silver, borderless)
Frame: frame: (1993, 1997, 2003, 2015, future, legendary, etc.)
Foil: is:foil, is:nonfoil, is:etched, is:glossy
Full art: is:full
High-res: is:hires
Games: game: (paper, mtgo, arena)
Promos: is:promo, is:spotlight
Year/date: year, date (with comparisons, e.g. year<=1994, date>=2015-08-18)
Art tags: art: or atag:
Oracle tags: function: or otag:
Reprints: is:reprint, not:reprint, is:unique, prints=, sets=
Languages: lang: or language: (lang:any for all)
Land nicknames: is:dual, is:fetchland, is:shockland, is:checkland, etc.
Negation: prefix with - (e.g. -t:creature), or use not: instead of is:
OR: use "or" between terms (e.g. t:fish or t:bird)
Nesting: use parentheses (e.g. t:legendary (t:goblin or t:elf))
Exact names: prefix with ! (e.g. !"Lightning Bolt")
Regex: use /regex/ with type:, oracle:, flavor:, name:
Display: unique:cards/prints/art, display:grid/checklist/full/text
Sorting: order:name/cmc/power/usd/rarity/color/released/edhrec, direction:asc/desc
Preferences: prefer:oldest/newest/usd-low/usd-high
Devotion: devotion: (e.g. devotion:{u/b}{u/b}{u/b})
Produces: produces: (e.g. produces=wu)
Include extras: include:extras"""
