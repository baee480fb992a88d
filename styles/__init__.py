"""Shared style constants for music-hood."""

COLORS = {
    "accent": "#00ffbf",
    "accent2": "#8c19ff",
    "background": "#0f0f0f",
    "surface": "#212121",
    "text": "#ebebeb",
    "muted": "#a6a6a6",
    "dim": "#555555",
    "inactive": "#333333",
}

COLOR_ACCENT = COLORS["accent"]
COLOR_ACCENT2 = COLORS["accent2"]
COLOR_BACKGROUND = COLORS["background"]
COLOR_SURFACE = COLORS["surface"]
COLOR_TEXT = COLORS["text"]
COLOR_MUTED = COLORS["muted"]
COLOR_DIM = COLORS["dim"]
COLOR_INACTIVE = COLORS["inactive"]
