"""
settings.py — Global constants for DotQuest.

Every tunable number and colour lives here. Other modules import what
they need by name:
    from settings import COLOR, SCREEN_W, ...
"""

import os

# ── Screen ────────────────────────────────────────────────────────────────────
SCREEN_W = 360
SCREEN_H = 640
FPS = 60
TITLE = "DotQuest"

# ── Colors ────────────────────────────────────────────────────────────────────
COLOR = {
    "background":  (255, 255, 255),   # #FFFFFF
    "panel":       (242, 242, 247),   # iOS systemGray6
    "panel_border":(220, 220, 226),
    "primary":     ( 34,  54,  86),   # #223656
    "secondary":   ( 74, 111, 165),   # #4A6FA5
    "text":        ( 20,  20,  20),
    "text_muted":  (142, 142, 147),   # gray
    "text_light":  (255, 255, 255),
    "star":        (255, 215,   0),   # #FFD700
    "streak":      (255, 107,  53),   # #FF6B35
    "pass":        ( 52, 199,  89),   # green flash on completion
    "fail":        (234,  67,  53),   # red flash on failure
    "overlay":     (  0,   0,   0),
    "gold":        (255, 215,   0),
    "silver":      (192, 192, 192),
    "bronze":      (205, 127,  50),
}

# ── Dot palette ───────────────────────────────────────────────────────────────
# Order matters: a level with N colours takes the first N entries.
DOT_COLORS_HEX = [
    "#223656",
    "#4A6FA5",
    "#7FB3D5",
    "#96C5F7",
    "#E74C3C",
    "#9B59B6",
    "#F39C12",
    "#27AE60",
]

# ── Board geometry ────────────────────────────────────────────────────────────
DOT_SPACING    = 60    # px between neighbouring dot centres
BOARD_MARGIN   = 30    # px, minimum gap between outer dot centres and screen edge
BOARD_OFFSET_Y = 150   # px, centre of row 0
DOT_RADIUS     = 18
TOUCH_RADIUS   = 30    # drag must land strictly inside this to hit a dot
PATH_WIDTH     = 8

# ── Level generation ──────────────────────────────────────────────────────────
MAX_GRID_SIZE     = 7
DAILY_LEVEL_CYCLE = 20    # daily challenge cycles through levels 1..20
INFINITE_MAX_STEP = 50

# ── Timing ────────────────────────────────────────────────────────────────────
COMPLETE_DELAY_S = 0.5    # flash before the result overlay appears

# ── UI Layout (relative to 360×640) ──────────────────────────────────────────
HEADER_H       = 72
HUD_H          = 44
BUTTON_H       = 48
BOTTOM_PANEL_H = 120
LEVEL_PICKER_COUNT = 5

# ── Fonts ─────────────────────────────────────────────────────────────────────
# pygame.font.Font(None, size) uses the bundled default face, so no
# system font lookup happens on WASM or in headless tests.
FONT_SIZE_XL = 34
FONT_SIZE_LG = 26
FONT_SIZE_MD = 20
FONT_SIZE_SM = 16

# ── Persistence ───────────────────────────────────────────────────────────────
SAVE_PATH = os.environ.get(
    "DOTQUEST_SAVE",
    os.path.join(os.path.expanduser("~"), ".dotquest", "save.json"),
)

# ── Leaderboard ───────────────────────────────────────────────────────────────
LEADERBOARD_LIMIT = 100
PLAYER_NAME       = "Player"

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL  = os.environ.get("DOTQUEST_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
