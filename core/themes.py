"""
core/themes.py — Unlockable colour themes for DotQuest.

A theme recolours the menu and HUD chrome (not the dots). Themes unlock
by campaign level: finishing level N unlocks every theme whose
required_level is N or lower.
"""

from __future__ import annotations
from dataclasses import dataclass

from utils.color import RGBColor, hex_to_rgb


@dataclass(frozen=True)
class GameTheme:
    id:             str
    name:           str
    primary:        str
    secondary:      str
    background:     str
    required_level: int

    def rgb(self) -> dict[str, RGBColor]:
        """Return the theme colours ready for pygame."""
        return {
            "primary":    hex_to_rgb(self.primary),
            "secondary":  hex_to_rgb(self.secondary),
            "background": hex_to_rgb(self.background),
        }


ALL_THEMES: tuple[GameTheme, ...] = (
    GameTheme("default", "Classic Blue",  "#223656", "#4A6FA5", "#FFFFFF",  1),
    GameTheme("sunset",  "Sunset Orange", "#FF6B35", "#F7931E", "#FFF5E6",  5),
    GameTheme("forest",  "Forest Green",  "#2D5016", "#87A96B", "#F0F8F0", 10),
    GameTheme("royal",   "Royal Purple",  "#5B2C6F", "#A569BD", "#F8F3FF", 15),
    GameTheme("ocean",   "Deep Ocean",    "#154360", "#5DADE2", "#EBF5FB", 20),
)

DEFAULT_THEME_ID = "default"


def theme_by_id(theme_id: str) -> GameTheme:
    """Return the theme with the given id.

    Raises:
        ValueError: If no theme has that id.
    """
    for theme in ALL_THEMES:
        if theme.id == theme_id:
            return theme
    raise ValueError(f"Unknown theme '{theme_id}'")


def themes_unlocked_by(level_number: int) -> list[GameTheme]:
    """Return every theme a player who finished level_number has earned."""
    return [t for t in ALL_THEMES if level_number >= t.required_level]
