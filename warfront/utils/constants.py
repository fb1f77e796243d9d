"""Game configuration constants.

Cost and upkeep tables are owned by the economy layer; the engine and AI
heuristics only read them.
"""

# Unit classes in effectiveness-matrix order
UNIT_TYPES = ("frigate", "cruiser", "battleship")
STRUCTURE_TYPES = ("reactor", "mine")
BUILDABLE_TYPES = UNIT_TYPES + STRUCTURE_TYPES

# Composition field name for each unit class
UNIT_FIELDS = {
    "frigate": "frigates",
    "cruiser": "cruisers",
    "battleship": "battleships",
}

UNIT_STATS = {
    "frigate": {
        "build_time": 1,
        "build_cost": {"metal": 4, "energy": 2},
        "upkeep_cost": {"metal": 2, "energy": 1},
        "effectiveness": {"frigate": 1.0, "cruiser": 1.5, "battleship": 0.7},
    },
    "cruiser": {
        "build_time": 2,
        "build_cost": {"metal": 10, "energy": 6},
        "upkeep_cost": {"metal": 5, "energy": 3},
        "effectiveness": {"frigate": 0.7, "cruiser": 1.0, "battleship": 1.5},
    },
    "battleship": {
        "build_time": 4,
        "build_cost": {"metal": 20, "energy": 12},
        "upkeep_cost": {"metal": 10, "energy": 6},
        "effectiveness": {"frigate": 1.5, "cruiser": 0.7, "battleship": 1.0},
    },
}

STRUCTURE_STATS = {
    "reactor": {
        "build_time": 1,
        "build_cost": {"metal": 900, "energy": 1200},
        "income_bonus": {"metal": 0, "energy": 500},
    },
    "mine": {
        "build_time": 1,
        "build_cost": {"metal": 1500, "energy": 600},
        "income_bonus": {"metal": 500, "energy": 0},
    },
}

SCAN_TYPES = ("basic", "deep", "advanced")
SCAN_COSTS = {"basic": 1000, "deep": 2500, "advanced": 4000}  # Energy

# Fleet composition bounds
MAX_UNITS_PER_TYPE = 1_000_000

# Movement timing (turns after creation)
TRANSIT_TURNS = 1  # Outbound leg
RETURN_CYCLE_TURNS = 3  # Outbound + engagement + return leg

# Combat
RANDOM_FACTOR_RANGE = (0.8, 1.2)
DECISIVE_RATIO = 2.0
CLOSE_BATTLE_CASUALTIES = (0.4, 0.6)
DECISIVE_WINNER_CASUALTIES = (0.1, 0.3)
DECISIVE_LOSER_CASUALTIES = (0.7, 0.9)

# AI value weights (coarse heuristic, not the combat matrix)
FLEET_VALUE_WEIGHTS = {"frigate": 1.0, "cruiser": 2.5, "battleship": 5.0}

# Starting state
STARTING_RESOURCES = {
    "metal": 10000,
    "energy": 10000,
    "metal_income": 10000,
    "energy_income": 10000,
}

# Player identifiers
PLAYER_SIDE = "player"
AI_SIDE = "ai"
SIDES = (PLAYER_SIDE, AI_SIDE)

# Default attack targets
PLAYER_HOME = "player_home"
AI_HOME = "ai_home"

# Testing
RNG_SEED_DEFAULT = 42
