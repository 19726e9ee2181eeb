"""Game-wide constants for Tritium Defense.

Screen dimensions, colors, font sizes, the wave economy tuning knobs
(budget, population cap, boss quota), phase timings, spawn geometry,
the enemy roster, and logging configuration.
"""
import os

WIDTH, HEIGHT = 960, 540           # 16:9 playfield
FPS = 60                           # target frame rate
BG_COLOR = (18, 20, 26)            # dark background
TEXT_COLOR = (235, 235, 235)       # light text
MARKER_COLOR = (255, 120, 60)      # spawn point marker
MARKER_RING = (90, 40, 25)         # subtle ring for markers
FLASH_COLOR = (255, 235, 90)       # hit flash accent
BASE_COLOR = (90, 170, 255)        # defended structure
BASE_DAMAGED_COLOR = (255, 90, 90)
HUD_PADDING = 12
FONT_NAME = "freesansbold.ttf"

# Font Size Constants
FONT_SIZE_SMALL = 14
FONT_SIZE_MEDIUM = 16
FONT_SIZE_LARGE = 22

# World -> screen mapping (world origin sits at the screen centre)
PIXELS_PER_UNIT = 13.0

# Threat budget: INITIAL_BUDGET + BUDGET_INCREMENT_FACTOR * round^2 / 2
INITIAL_BUDGET = 50
BUDGET_INCREMENT_FACTOR = 20

# Population cap: max(FLOOR, round(BASE * round / DIVISOR))
POPULATION_CAP_BASE = 100
POPULATION_CAP_FLOOR = 10
POPULATION_CAP_DIVISOR = 20

BOSS_ROUND_INTERVAL = 5            # bosses every Nth round (once unlocked)
SPAWN_POINT_ROUND_INTERVAL = 5     # one more spawn point every N rounds

# Phase Settings
BUILD_PHASE_MIN_DURATION_MS = 5000     # before the defense phase may start
DEFENSE_PHASE_END_DELAY_MS = 2000      # after the last unit resolves

# Spawn geometry (world units)
SPAWNER_CIRCLE_RADIUS = 18.0
SPAWN_SCATTER_RADIUS = 2.5
MIN_SPAWN_DELAY_MS = 800
MAX_SPAWN_DELAY_MS = 2000

# Economy
STARTING_TRITIUM = 100
TRITIUM_PER_ROUND = 50

# Defended structures
BASE_MAX_HEALTH = 500.0
BASE_RADIUS = 1.2
CLICK_DAMAGE = 40.0

REGULAR = "regular"
BOSS = "boss"

# Enemy roster. "cost" is both the threat cost and the kill reward.
UNIT_TYPES = {
    "regular": {
        "cost": 10,
        "unlock_round": 1,
        "max_health": 100.0,
        "speed": 2.0,
        "damage": 50.0,
        "color": (200, 200, 200),
    },
    "fast": {
        "cost": 15,
        "unlock_round": 2,
        "max_health": 60.0,
        "speed": 3.6,
        "damage": 30.0,
        "color": (255, 230, 90),
    },
    "attack": {
        "cost": 20,
        "unlock_round": 3,
        "max_health": 90.0,
        "speed": 2.2,
        "damage": 80.0,
        "color": (255, 140, 60),
    },
    "armored": {
        "cost": 25,
        "unlock_round": 4,
        "max_health": 240.0,
        "speed": 1.4,
        "damage": 60.0,
        "color": (140, 150, 170),
    },
    "exploder": {
        "cost": 20,
        "unlock_round": 5,
        "max_health": 70.0,
        "speed": 2.6,
        "damage": 120.0,
        "color": (255, 70, 70),
    },
    "teleporter": {
        "cost": 30,
        "unlock_round": 6,
        "max_health": 110.0,
        "speed": 2.4,
        "damage": 60.0,
        "color": (170, 90, 255),
    },
    "boss": {
        "cost": 100,
        "unlock_round": 7,
        "max_health": 900.0,
        "speed": 1.0,
        "damage": 250.0,
        "color": (255, 40, 160),
    },
}

# Log file settings
LOG_FILE = os.path.join(os.path.dirname(os.path.dirname(__file__)), "log.md")
