import uuid

from core.board import Board, Dot, TapResult


def make_dot(col, row, color_index=0, spacing=60):
    return Dot(col=col, row=row, x=col * spacing, y=row * spacing,
               color_index=color_index, color=(0, 0, 0))


def _board():
    # 3x3, colour 1 only in the middle column
    dots = [make_dot(c, r, 1 if c == 1 else 0) for r in range(3) for c in range(3)]
    return Board(dots, touch_radius=30), {(d.col, d.row): d for d in dots}


def test_first_tap_starts_path():
    board, at = _board()
    assert board.tap(at[0, 0].id) is TapResult.STARTED
    assert board.path == [at[0, 0].id]
    assert at[0, 0].connected


def test_tapping_last_dot_again_is_ignored():
    board, at = _board()
    board.tap(at[0, 0].id)
    assert board.tap(at[0, 0].id) is TapResult.IGNORED
    assert len(board.path) == 1


def test_extends_with_adjacent_same_colour_including_diagonals():
    board, at = _board()
    board.tap(at[0, 0].id)
    assert board.tap(at[0, 1].id) is TapResult.EXTENDED
    assert board.tap(at[1, 1].id) is TapResult.REJECTED      # different colour
    board.clear_path()
    board.tap(at[1, 0].id)
    assert board.tap(at[1, 1].id) is TapResult.EXTENDED
    assert board.tap(at[1, 2].id) is TapResult.EXTENDED
    board.clear_path()
    board.tap(at[0, 1].id)
    assert board.tap(at[2, 1].id) is TapResult.REJECTED      # two columns away


def test_diagonal_neighbour_is_adjacent():
    _, at = _board()
    assert Board.is_adjacent(at[0, 0], at[1, 1])
    assert not Board.is_adjacent(at[0, 0], at[0, 0])
    assert not Board.is_adjacent(at[0, 0], at[2, 2])


def test_tapping_earlier_dot_trims_path():
    board, at = _board()
    for key in [(0, 0), (0, 1), (0, 2)]:
        board.tap(at[key].id)
    assert board.tap(at[0, 0].id) is TapResult.TRIMMED
    assert board.path == [at[0, 0].id]
    assert not at[0, 1].connected
    assert not at[0, 2].connected


def test_unknown_id_is_ignored():
    board, _ = _board()
    assert board.tap(uuid.uuid4()) is TapResult.IGNORED
    assert board.path == []


def test_clear_path_disconnects_everything():
    board, at = _board()
    board.tap(at[0, 0].id)
    board.tap(at[0, 1].id)
    board.clear_path()
    assert board.path == []
    assert not any(d.connected for d in board.dots)


def test_touch_radius_is_strict():
    board, at = _board()
    assert board.dot_at(29, 0) is at[0, 0]
    assert board.dot_at(30, 0) is None     # exactly on the radius of two dots
    assert board.dot_at(0, 30) is None
    assert board.touch(-40, -40) is TapResult.IGNORED


def test_touch_hits_dot_under_pointer():
    board, at = _board()
    assert board.touch(62, 3) is TapResult.STARTED
    assert board.path_dots() == [at[1, 0]]
