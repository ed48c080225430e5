import numpy as np
from typing import Dict, List, Sequence
from .world_map import TerrainType, BiomeType
TERRAIN_PREFIXES: Dict[str, List[str]] = {
    "ocean": ["Deep", "Grey Waters of"],
    "shore": ["Shores of", "Coast of", "Strand of"],
    "plains": ["Plains of", "Meadows of", "Fields of"],
    "forest": ["Woods of", "Forest of", "Thicket of"],
    "hills": ["Hills of", "Downs of", "Rises of"],
    "mountains": ["Mountains of", "Heights of", "Crags of"],
    "swamp": ["Marshes of", "Fens of", "Bogs of"],
    "desert": ["Sands of", "Dunes of", "Wastes of"],
    "tundra": ["Barrens of", "Steppes of"],
    "glacier": ["Ice of", "Glaciers of"],
    "peak": ["Spires of", "Summits of"],
    "default": ["Lands of", "Reaches of"],
}
BIOME_SUFFIXES: Dict[str, List[str]] = {
    "temperate": ["Verdance", "the Green Vale", "Hollowmere"],
    "tropical": ["Emberleaf", "the Sunken Sun", "Palmreach"],
    "arctic": ["Frostholm", "the White Silence", "Rimeward"],
    "arid": ["Ashdune", "the Burning Eye", "Drymoor"],
    "coastal": ["Saltwind", "the Tides", "Gullhaven"],
    "volcanic": ["Cinderfall", "the Smoking Throne", "Emberpit"],
}
TERRAIN_DESCRIPTIONS: Dict[str, List[str]] = {
    "shore": ["Pale beaches give way to dune grass.", "Waves break on a rocky shoreline."],
    "plains": ["Open grassland stretches to the horizon.", "Rolling meadows dotted with wildflowers."],
    "forest": ["Dense trees filter the light into green shadow.", "Old oaks crowd a winding trail."],
    "hills": ["Gentle slopes rise and fall under the wind.", "Grassy knolls hide narrow valleys."],
    "mountains": ["Jagged ridges climb toward the clouds.", "Steep passes wind between granite walls."],
    "swamp": ["Murky water pools among twisted roots.", "Mist hangs over reeds and stagnant pools."],
    "desert": ["Endless sand shimmers in the heat.", "Wind-carved rocks rise from cracked earth."],
    "tundra": ["A frozen plain under a pale sky.", "Hardy moss clings to frozen ground."],
    "default": ["An untamed land awaiting travellers.", "A quiet country with few roads."],
}
BIOME_FLAVOUR: Dict[str, str] = {
    "temperate": "The air is mild and the seasons gentle.",
    "tropical": "Heavy, humid air carries the scent of blossoms.",
    "arctic": "A biting cold settles over everything.",
    "arid": "Water is scarce and the sun unforgiving.",
    "coastal": "Salt spray drifts in from the sea.",
    "volcanic": "The ground is warm and smells of sulphur.",
}
SETTLEMENT_PREFIXES: Dict[str, List[str]] = {
    "temperate": ["Oak", "Elm", "Green", "Ash"],
    "tropical": ["Palm", "Sun", "Jade", "Orchid"],
    "arctic": ["Frost", "Snow", "Ice", "Winter"],
    "arid": ["Sand", "Dust", "Copper", "Mirage"],
    "coastal": ["Gull", "Salt", "Tide", "Anchor"],
    "volcanic": ["Cinder", "Ember", "Obsidian", "Ash"],
}
SETTLEMENT_SUFFIXES = ["bury", "ford", "haven", "wick", "stead", "mouth", "field", "cross", "holm", "gate"]
TOWN_DESCRIPTIONS = [
    "A bustling town with a walled market square.",
    "A prosperous town where caravans trade their wares.",
    "A busy crossroads town with a watchful guard.",
]
VILLAGE_DESCRIPTIONS = [
    "A handful of cottages clustered around a well.",
    "A quiet hamlet of farmers and herders.",
    "A small village with a single dusty street.",
]
DUNGEON_PREFIXES: Dict[str, List[str]] = {
    "mountains": ["Cavern", "Deep Mine", "Forgotten Hall"],
    "hills": ["Barrow", "Burrow", "Sunken Keep"],
    "forest": ["Overgrown Ruin", "Hollow", "Witch Den"],
    "default": ["Crypt", "Vault", "Lair"],
}
DUNGEON_SUFFIXES = ["of Shadows", "of the Lost", "of Whispers", "of the Old King", "of Bones"]
DUNGEON_DESCRIPTIONS: Dict[str, List[str]] = {
    "mountains": ["A dark opening bores into the mountainside.", "Abandoned mine shafts echo with strange sounds."],
    "hills": ["A grassy mound hides a stone doorway.", "Ruined walls sink into the hillside."],
    "forest": ["Roots have split the stones of an ancient ruin.", "Something stirs beneath the trees."],
    "default": ["A crumbling entrance leads underground.", "Few who enter return."],
}
LANDMARK_PREFIXES: Dict[str, List[str]] = {
    "mountains": ["Eagle Rock", "Skyward Arch"],
    "forest": ["Elder Tree", "Fairy Ring"],
    "plains": ["Standing Stones", "Lone Obelisk"],
    "shore": ["Lighthouse", "Wreck"],
    "desert": ["Sunken Statue", "Oasis"],
    "default": ["Ancient Monument", "Weathered Shrine"],
}
LANDMARK_ADJECTIVES = ["the Ancients", "the Forgotten", "Dawn", "the Moon", "the Wanderer"]
LANDMARK_DESCRIPTIONS = [
    "Travellers leave offerings here for luck.",
    "Old carvings cover every surface.",
    "It can be seen from miles around.",
]
def _pick(options: Sequence[str], rng: np.random.Generator) -> str:
    return options[int(rng.integers(0, len(options)))]
def _for(table: Dict[str, List[str]], key: str) -> List[str]:
    return table.get(key, table["default"])
def region_name(terrain: TerrainType, biome: BiomeType, rng: np.random.Generator) -> str:
    return f"{_pick(_for(TERRAIN_PREFIXES, terrain.value), rng)} {_pick(BIOME_SUFFIXES[biome.value], rng)}"
def region_description(terrain: TerrainType, biome: BiomeType, rng: np.random.Generator) -> str:
    return f"{_pick(_for(TERRAIN_DESCRIPTIONS, terrain.value), rng)} {BIOME_FLAVOUR[biome.value]}"
def settlement_name(biome: BiomeType, rng: np.random.Generator) -> str:
    return _pick(SETTLEMENT_PREFIXES[biome.value], rng) + _pick(SETTLEMENT_SUFFIXES, rng)
def settlement_description(is_town: bool, biome: BiomeType, rng: np.random.Generator) -> str:
    text = _pick(TOWN_DESCRIPTIONS if is_town else VILLAGE_DESCRIPTIONS, rng)
    return f"{text} {BIOME_FLAVOUR[biome.value]}"
def dungeon_name(terrain: TerrainType, rng: np.random.Generator) -> str:
    return f"{_pick(_for(DUNGEON_PREFIXES, terrain.value), rng)} {_pick(DUNGEON_SUFFIXES, rng)}"
def dungeon_description(terrain: TerrainType, rng: np.random.Generator) -> str:
    return _pick(_for(DUNGEON_DESCRIPTIONS, terrain.value), rng)
def landmark_name(terrain: TerrainType, rng: np.random.Generator) -> str:
    return f"{_pick(_for(LANDMARK_PREFIXES, terrain.value), rng)} of {_pick(LANDMARK_ADJECTIVES, rng)}"
def landmark_description(terrain: TerrainType, biome: BiomeType, rng: np.random.Generator) -> str:
    return f"{_pick(LANDMARK_DESCRIPTIONS, rng)} {BIOME_FLAVOUR[biome.value]}"
