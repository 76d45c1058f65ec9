"""Application-wide constants for Starlanes."""

# --- Display ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 800
FPS = 60
TITLE = "Starlanes"
APP_NAME = "starlanes"
APP_VERSION = "0.3.0"

# --- Colors (RGB) ---
WHITE = (255, 255, 255)
BACKGROUND = (17, 24, 39)
LIGHT_GREY = (180, 180, 190)
LABEL_GREY = (178, 185, 197)
DIM_GREY = (108, 117, 125)
RING_GREY = (45, 55, 72)

# UI accent colors
AMBER = (255, 191, 0)
CYAN = (0, 200, 220)
RED_ALERT = (200, 40, 40)

# --- Node colors (hex, keyed by role) ---
CAPITAL_COLOR = "#FFD700"
FOREIGN_COLONY_COLOR = "#FF00FF"
UNINHABITED_COLOR = "#9BA5B7"

# (minimum population in millions, color), checked top to bottom
POPULATION_TIERS: list[tuple[float, str]] = [
    (100.0, "#FF5733"),
    (10.0, "#FFC300"),
    (1.0, "#33A8FF"),
]
MINOR_COLONY_COLOR = "#85C1E9"

# --- Edge colors ---
GATE_COLOR = "#FFA500"
LANE_COLOR = "#8B95A5"

# --- UI Panel ---
PANEL_BG = (31, 41, 55, 230)
PANEL_BORDER = (60, 60, 80)

# --- Layout ---
BASE_RADIUS = 100.0
LEVEL_SPACING = 150.0
SECTOR_COUNT = 8
ITERATIONS = 50
REPULSION_CONSTANT = 1000.0
REPULSION_THRESHOLD = 50.0
MIN_DISTANCE = 0.1
ROOT_SYSTEM_NAME = "Sol"

# --- Viewport ---
MIN_SCALE = 0.1
MAX_SCALE = 5.0
WHEEL_ZOOM_IN = 1.1
WHEEL_ZOOM_OUT = 0.9
BUTTON_ZOOM_IN = 1.2
BUTTON_ZOOM_OUT = 0.8

# --- Search ---
MAX_SEARCH_RESULTS = 5

# --- Faction colors ---
MIN_CONTRAST_RATIO = 4.5
