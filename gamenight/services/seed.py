"""Default club inventory written on first start."""
import logging

from gamenight.core.ids import game_system_id
from gamenight.schemas import TableSize, TerrainCategory

logger = logging.getLogger(__name__)

BASE_IMG = "/images/terrain"

INITIAL_TABLES = [
    {"id": f"L{i}", "name": f"Large Table {i}", "size": TableSize.LARGE.value}
    for i in range(1, 17)
] + [
    {"id": f"S{i}", "name": f"Small Table {i}", "size": TableSize.SMALL.value}
    for i in range(1, 7)
]

# Image files on disk do not all follow the naming pattern
IMAGE_OVERRIDES = {
    "SCIFI-4": "Scifi4.jpg",
    "HIST-1": "Historical!.jpg",
}

# (id, category, name, image file)
_TERRAIN = [
    *[(f"SCIFI-{i}", TerrainCategory.SCIFI, f"Sci-Fi Box {i}", f"SciFi{i}.jpg") for i in range(1, 11)],
    *[(f"HIST-{i}", TerrainCategory.HISTORICAL, f"Historical Box {i}", f"Historical{i}.jpg") for i in range(1, 5)],
    ("FANT-1", TerrainCategory.FANTASY, "Fantasy Box 1", "Fantasy1.jpg"),
    ("FANT-2", TerrainCategory.FANTASY, "Fantasy Box 2", "Fantasy2.jpg"),
    ("AOS-1", TerrainCategory.AOS, "AoS Box 1", "AoS_01.jpg"),
    ("AOS-2", TerrainCategory.AOS, "AoS Box 2", "AoS_02.jpg"),
    ("40K-1", TerrainCategory.WARHAMMER_40K, "40k Comp Box 1", "40kComp1.jpg"),
    ("40K-2", TerrainCategory.WARHAMMER_40K, "40k Comp Box 2", "40kComp2.jpg"),
    ("HILLS-1", TerrainCategory.FANTASY, "Hills Box 1", "Hills.jpg"),
    ("POSTAPOC-1", TerrainCategory.SCIFI, "Post-Apoc Box 1", "PostApoc1.jpg"),
]

INITIAL_TERRAIN_BOXES = [
    {
        "id": box_id,
        "category": category.value,
        "name": name,
        "image_url": f"{BASE_IMG}/{IMAGE_OVERRIDES.get(box_id, image)}",
    }
    for box_id, category, name, image in _TERRAIN
]


INITIAL_GAME_SYSTEMS = [
    "Warhammer 40,000",
    "Age of Sigmar",
    "Blood Bowl",
    "The Old World",
    "Heresy",
    "Kill Team",
    "Necromunda",
    "Middle Earth",
    "Warcry",
    "Malifaux",
    "BattleTech",
    "Infinity",
    "Zeo Genesis",
    "A Song of Ice and Fire",
    "OPR Sci Fi",
    "OPR Fantasy",
    "Untitled Pirate Game",
    "Frostgrave",
    "Stargrave",
    "Silver Bayonet",
    "Bolt Action",
    "Lion Rampant",
    "Pillage",
]


async def seed_inventory(store) -> bool:
    """
    Write the default inventory and game systems into empty collections.

    Tables and terrain boxes are written when the store has no tables yet;
    game systems when it has no game systems yet.

    Returns:
        True if anything was written
    """
    seeded = False

    if await store.list("tables"):
        logger.debug("Inventory already present, skipping seed")
    else:
        logger.info(
            f"Seeding {len(INITIAL_TABLES)} tables and {len(INITIAL_TERRAIN_BOXES)} terrain boxes"
        )
        for table in INITIAL_TABLES:
            data = dict(table)
            await store.set("tables", data.pop("id"), data)
        for box in INITIAL_TERRAIN_BOXES:
            data = dict(box)
            await store.set("terrain_boxes", data.pop("id"), data)
        seeded = True

    if await store.list("game_systems"):
        logger.debug("Game systems already present, skipping seed")
    else:
        logger.info(f"Seeding {len(INITIAL_GAME_SYSTEMS)} game systems")
        for name in INITIAL_GAME_SYSTEMS:
            await store.set("game_systems", game_system_id(name), {"name": name})
        seeded = True

    return seeded
