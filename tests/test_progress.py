import datetime

import pytest

from core.difficulty import Difficulty, DifficultyLockedError
from core.progress import GameProgress, ProgressService


def test_fresh_progress(store):
    state = ProgressService(store).state
    assert state.current_level == 1
    assert state.unlocked_themes == ["default"]
    assert state.selected_theme == "default"
    assert state.difficulty is Difficulty.NORMAL
    assert not state.daily_challenge_completed


def test_complete_level_advances_and_persists(store):
    service = ProgressService(store)
    service.complete_level(1, stars=2)
    assert service.state.current_level == 2
    assert service.state.completed_levels == {1}
    assert service.state.total_games_played == 1

    reloaded = ProgressService(store).state
    assert reloaded.current_level == 2
    assert reloaded.stars_earned == {1: 2}


def test_replaying_earlier_level_keeps_frontier_and_best_stars(store):
    service = ProgressService(store)
    for number in (1, 2, 3):
        service.complete_level(number, stars=3)
    service.complete_level(1, stars=1)
    assert service.state.current_level == 4
    assert service.state.stars_earned[1] == 3
    assert service.total_stars() == 9


def test_score_and_high_score(store):
    service = ProgressService(store)
    service.update_score(120)
    service.update_score(30)
    assert service.state.high_score == 150
    service.reset_current_score()
    assert service.state.score == 0
    assert service.state.high_score == 150


def test_theme_unlock_and_select(store):
    service = ProgressService(store)
    assert service.unlock_theme("sunset")
    assert not service.unlock_theme("sunset")
    service.select_theme("sunset")
    assert ProgressService(store).state.selected_theme == "sunset"


def test_theme_errors(store):
    service = ProgressService(store)
    with pytest.raises(ValueError):
        service.unlock_theme("neon")
    with pytest.raises(ValueError):
        service.select_theme("ocean")


def test_difficulty_is_gated_by_level(store):
    service = ProgressService(store)
    with pytest.raises(DifficultyLockedError):
        service.set_difficulty(Difficulty.HARD)
    service.set_difficulty(Difficulty.EASY)
    assert service.state.difficulty is Difficulty.EASY

    service.state.current_level = 10
    service.set_difficulty(Difficulty.HARD)
    assert ProgressService(store).state.difficulty is Difficulty.HARD


def test_best_streak_only_grows(store):
    service = ProgressService(store)
    service.update_best_streak(4)
    service.update_best_streak(2)
    assert service.state.best_streak == 4


def test_daily_challenge_reopens_next_day(store, today):
    service = ProgressService(store, today)
    service.complete_daily_challenge(today)
    service.check_daily_challenge(today)
    assert service.state.daily_challenge_completed

    tomorrow = today + datetime.timedelta(days=1)
    assert not ProgressService(store, tomorrow).state.daily_challenge_completed


def test_round_trip_through_dict():
    progress = GameProgress(
        current_level=7,
        completed_levels={1, 2, 3},
        difficulty=Difficulty.EASY,
        daily_challenge_date=datetime.date(2026, 1, 2),
        stars_earned={1: 3, 2: 1},
    )
    assert GameProgress.from_dict(progress.to_dict()) == progress


@pytest.mark.parametrize("raw", [
    {"difficulty": "Impossible"},
    {"completed_levels": 5},
    {"daily_challenge_date": "yesterday"},
])
def test_corrupt_progress_falls_back_to_defaults(store, raw):
    store.save_section("progress", raw)
    assert ProgressService(store).state == GameProgress()


def test_reset_game(store):
    service = ProgressService(store)
    service.complete_level(1)
    service.reset_game()
    assert ProgressService(store).state.current_level == 1
