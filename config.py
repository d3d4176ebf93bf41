"""
SciCalc Configuration Settings
"""
import json
import os

# Application Settings
APP_NAME = "SciCalc Scientific Calculator"
VERSION = "1.0.0"

# Display Settings
WINDOW_WIDTH = 360
WINDOW_HEIGHT = 560
SCIENTIFIC_WINDOW_WIDTH = 600
DISPLAY_FONT = ("Consolas", 30, "bold")
BUTTON_FONT = ("Segoe UI", 14)
LABEL_FONT = ("Segoe UI", 11)

# ── Palettes ────────────────────────────────────────────────────────────────

NEU_LIGHT = {
    "bg":           "#DDE6ED",
    "bg_dark":      "#C8D4DF",
    "shadow_dark":  "#B2BFC8",
    "display_bg":   "#C8D4DF",
    "display_fg":   "#1A2332",
    "btn_bg":       "#DDE6ED",
    "btn_fg":       "#2B3A4A",
    "operator_fg":  "#1E7A56",
    "equals_bg":    "#2E8B57",
    "equals_fg":    "#FFFFFF",
    "accent":       "#2E8B57",
    "text":         "#2B3A4A",
    "subtext":      "#6E8090",
    "danger":       "#B03A2E",
}

NEU_DARK = {
    "bg":           "#1E2530",
    "bg_dark":      "#161C26",
    "shadow_dark":  "#10161E",
    "display_bg":   "#161C26",
    "display_fg":   "#9ADDB0",   # LCD green-on-dark
    "btn_bg":       "#1E2530",
    "btn_fg":       "#BDD0E0",
    "operator_fg":  "#4DB888",
    "equals_bg":    "#2D8A58",
    "equals_fg":    "#FFFFFF",
    "accent":       "#4DB888",
    "text":         "#BDD0E0",
    "subtext":      "#4E6070",
    "danger":       "#E55A4E",
}


def get_theme(dark: bool) -> dict:
    """Return the active colour palette."""
    return NEU_DARK if dark else NEU_LIGHT


# Calculator Settings
DISPLAY_ERROR = "Error"
BINARY_OPERATORS = "+−×÷^"
SIGNIFICANT_DIGITS = 15
MAX_NESTING_DEPTH = 100   # brackets, signs and exponents inside one another
DEFAULT_ANGLE_MODE = "deg"

# History Settings
MAX_HISTORY_ITEMS = 50

# Preference persistence (buffer and history are never written to disk)
SETTINGS_PATH = os.environ.get(
    "SCICALC_SETTINGS",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "settings.json"),
)
DEFAULT_SETTINGS = {
    "dark_mode": False,
    "scientific": False,
    "angle_mode": DEFAULT_ANGLE_MODE,
}


def load_settings(path=None):
    """Load saved UI preferences, falling back to defaults"""
    settings = dict(DEFAULT_SETTINGS)
    try:
        with open(path or SETTINGS_PATH, "r") as f:
            saved = json.load(f)
    except (OSError, ValueError):
        return settings
    if isinstance(saved, dict):
        settings.update({k: v for k, v in saved.items() if k in DEFAULT_SETTINGS})
    return settings


def save_settings(data, path=None):
    """Merge data into the saved preferences"""
    existing = load_settings(path)
    existing.update(data)
    with open(path or SETTINGS_PATH, "w") as f:
        json.dump(existing, f, indent=2)
    return existing


# Web API settings
WEB_HOST = os.environ.get("SCICALC_WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("SCICALC_WEB_PORT", "8888"))
MAX_SESSIONS = 100   # oldest calculator session is dropped beyond this
