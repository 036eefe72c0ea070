import pytest

from core.themes import ALL_THEMES, theme_by_id, themes_unlocked_by


def test_lookup():
    assert theme_by_id("forest").name == "Forest Green"
    with pytest.raises(ValueError):
        theme_by_id("neon")


def test_unlocks_by_level():
    assert [t.id for t in themes_unlocked_by(1)] == ["default"]
    assert [t.id for t in themes_unlocked_by(10)] == ["default", "sunset", "forest"]
    assert len(themes_unlocked_by(20)) == len(ALL_THEMES)


def test_rgb_palette():
    assert theme_by_id("default").rgb() == {
        "primary": (34, 54, 86),
        "secondary": (74, 111, 165),
        "background": (255, 255, 255),
    }
