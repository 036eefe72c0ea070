from utils.color import clamp, darker, hex_to_rgb, lighter, with_alpha


def test_hex_to_rgb_six_digits():
    assert hex_to_rgb("#223656") == (34, 54, 86)
    assert hex_to_rgb("4A6FA5") == (74, 111, 165)


def test_hex_to_rgb_short_form_doubles_nibbles():
    assert hex_to_rgb("#F80") == (255, 136, 0)


def test_hex_to_rgb_drops_alpha_byte():
    assert hex_to_rgb("#80FF0000") == (255, 0, 0)


def test_hex_to_rgb_invalid_is_black():
    assert hex_to_rgb("#nothex") == (0, 0, 0)
    assert hex_to_rgb("#12345") == (0, 0, 0)
    assert hex_to_rgb("") == (0, 0, 0)


def test_shading_clamps():
    assert lighter((250, 10, 100), 20) == (255, 30, 120)
    assert darker((250, 10, 100), 20) == (230, 0, 80)
    assert clamp(300) == 255
    assert with_alpha((1, 2, 3), 400) == (1, 2, 3, 255)
