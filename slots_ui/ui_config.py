FPS_MS = 16

GRID_TOP_RATIO = 0.18
GRID_SIDE_RATIO = 0.62
CELL_GAP_RATIO = 0.025
TILE_PADDING_RATIO = 0.1
PANEL_WIDTH_RATIO = 0.34
LOG_LINES = 12

TILE_STYLE_ORDER = ("Drawn", "Assets")
THEME_ORDER = ("Casino", "Midnight", "Neon")
FONT_SCALE_ORDER = ("Small", "Normal", "Large", "X-Large")
FONT_SCALE_FACTOR = {
    "Small": 0.9,
    "Normal": 1.0,
    "Large": 1.2,
    "X-Large": 1.4,
}

# RGB colours used when drawing symbol tiles with Pillow.
SYMBOL_COLORS = {
    "crown": (234, 179, 8),
    "diamond": (56, 189, 248),
    "present": (219, 39, 119),
    "seven": (220, 38, 38),
    "bar": (30, 41, 59),
    "cherry": (190, 18, 60),
    "jewel": (16, 185, 129),
    "bomb": (17, 24, 39),
}

THEMES = {
    "Casino": {
        "bg_base": "#0b0b0c",
        "panel": "#141416",
        "panel_border": "#2a2a2e",
        "hud_text": "#f5f5f5",
        "hud_subtext": "#a8a8b3",
        "cell_fill": "#ffffff",
        "cell_empty": "#3a3a40",
        "cell_select": "#facc15",
        "button": "#24242a",
        "button_primary": "#e9e9ee",
        "button_draw": "#36d399",
        "button_disabled": "#3f3f46",
        "overlay": "#000000",
        "tile_bg": (255, 255, 255),
        "tile_back": (36, 36, 42),
    },
    "Midnight": {
        "bg_base": "#0f172a",
        "panel": "#1e293b",
        "panel_border": "#334155",
        "hud_text": "#e2e8f0",
        "hud_subtext": "#94a3b8",
        "cell_fill": "#f8fafc",
        "cell_empty": "#334155",
        "cell_select": "#38bdf8",
        "button": "#1e293b",
        "button_primary": "#e2e8f0",
        "button_draw": "#22d3ee",
        "button_disabled": "#475569",
        "overlay": "#020617",
        "tile_bg": (248, 250, 252),
        "tile_back": (30, 58, 138),
    },
    "Neon": {
        "bg_base": "#1a0b2e",
        "panel": "#2d1b4e",
        "panel_border": "#6d28d9",
        "hud_text": "#fdf4ff",
        "hud_subtext": "#e9d5ff",
        "cell_fill": "#fffbeb",
        "cell_empty": "#3b0764",
        "cell_select": "#f472b6",
        "button": "#3b0764",
        "button_primary": "#fdf4ff",
        "button_draw": "#a3e635",
        "button_disabled": "#4c1d95",
        "overlay": "#0f0518",
        "tile_bg": (255, 251, 235),
        "tile_back": (88, 28, 135),
    },
}
