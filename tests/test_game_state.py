"""Tests for pairup.core.game.GameState – the selection/resolution state machine."""

from __future__ import annotations

from random import Random

import pytest

from pairup.core.config import GameRules
from pairup.core.deck import Tile
from pairup.core.game import Feedback, GameState, Progression, SelectResult


def _state(*image_ids: str, level: int = 1, score: int = 0, rules: GameRules = GameRules()) -> GameState:
    tiles = [Tile(id=i, image_id=image_id) for i, image_id in enumerate(image_ids)]
    return GameState(tiles=tiles, level=level, category="flower", score=score, rules=rules)


def _snapshot(state: GameState) -> tuple:
    return (
        [(t.flipped, t.matched) for t in state.tiles],
        list(state.selection),
        state.locked,
        state.score,
        state.feedback,
    )


# ---------------------------------------------------------------------------
# Initial state
# ---------------------------------------------------------------------------

class TestInitialState:
    def test_idle(self):
        s = _state("A", "B", "A", "B")
        assert s.selection == []
        assert s.locked is False
        assert s.score == 0
        assert s.feedback is Feedback.NONE
        assert s.feedback.text == ""

    def test_not_complete(self):
        assert not _state("A", "B", "A", "B").is_level_complete()


# ---------------------------------------------------------------------------
# First pick
# ---------------------------------------------------------------------------

class TestFirstPick:
    def test_flips_and_records(self):
        s = _state("A", "B", "A", "B")
        assert s.select(2) is SelectResult.FLIPPED
        assert s.tiles[2].flipped is True
        assert s.selection == [2]
        assert s.locked is False

    def test_feedback_untouched(self):
        s = _state("A", "B", "A", "B")
        s.feedback = Feedback.MATCH
        s.select(0)
        assert s.feedback is Feedback.MATCH

    def test_same_tile_twice_is_ignored(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        before = _snapshot(s)
        assert s.select(0) is SelectResult.IGNORED
        assert _snapshot(s) == before


# ---------------------------------------------------------------------------
# Matching pair
# ---------------------------------------------------------------------------

class TestMatch:
    def test_marks_both_matched(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        assert s.select(2) is SelectResult.MATCHED
        assert s.tiles[0].matched and s.tiles[2].matched
        assert s.tiles[0].flipped and s.tiles[2].flipped

    def test_scores_ten_and_clears_selection(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(2)
        assert s.score == 10
        assert s.selection == []
        assert s.locked is False
        assert s.feedback is Feedback.MATCH
        assert s.feedback.text == "🌟 Great job! You found a match!"

    def test_can_keep_playing_immediately(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(2)
        assert s.select(1) is SelectResult.FLIPPED

    def test_matched_tile_is_ignored(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(2)
        before = _snapshot(s)
        assert s.select(0) is SelectResult.IGNORED
        assert _snapshot(s) == before

    def test_custom_points(self):
        s = _state("A", "A", rules=GameRules(match_points=25))
        s.select(0)
        s.select(1)
        assert s.score == 25


# ---------------------------------------------------------------------------
# Mismatch and deferred revert
# ---------------------------------------------------------------------------

class TestMismatch:
    def test_locks_and_penalises_immediately(self):
        s = _state("A", "B", "A", "B", score=10)
        s.select(0)
        assert s.select(1) is SelectResult.MISMATCHED
        assert s.locked is True
        assert s.score == 8
        assert s.feedback is Feedback.RETRY
        assert s.feedback.text == "🌀 Try again!"

    def test_tiles_stay_up_until_resolved(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(1)
        assert s.tiles[0].flipped and s.tiles[1].flipped
        assert s.selection == [0, 1]

    def test_score_floors_at_zero(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(1)
        assert s.score == 0

    def test_penalty_larger_than_score(self):
        s = _state("A", "B", "A", "B", score=1)
        s.select(0)
        s.select(1)
        assert s.score == 0

    def test_locked_board_ignores_input(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(1)
        before = _snapshot(s)
        assert s.select(2) is SelectResult.IGNORED
        assert s.select(3) is SelectResult.IGNORED
        assert _snapshot(s) == before

    def test_resolve_turns_pair_back(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(1)
        s.resolve_mismatch()
        assert not s.tiles[0].flipped
        assert not s.tiles[1].flipped
        assert s.selection == []
        assert s.locked is False

    def test_resolve_keeps_penalty_and_feedback(self):
        s = _state("A", "B", "A", "B", score=6)
        s.select(0)
        s.select(1)
        s.resolve_mismatch()
        assert s.score == 4
        assert s.feedback is Feedback.RETRY

    def test_resolve_leaves_matched_tiles_alone(self):
        s = _state("A", "B", "A", "B", "C", "C", level=1)
        s.select(0)
        s.select(2)  # A matched
        s.select(1)
        s.select(4)  # B vs C
        s.resolve_mismatch()
        assert s.tiles[0].matched and s.tiles[0].flipped
        assert s.tiles[2].matched and s.tiles[2].flipped

    def test_accepts_input_after_resolve(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(1)
        s.resolve_mismatch()
        assert s.select(0) is SelectResult.FLIPPED


# ---------------------------------------------------------------------------
# Index handling
# ---------------------------------------------------------------------------

class TestIndex:
    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_out_of_range(self, index):
        s = _state("A", "B", "A", "B")
        with pytest.raises(IndexError):
            s.select(index)

    def test_out_of_range_changes_nothing(self):
        s = _state("A", "B", "A", "B")
        before = _snapshot(s)
        with pytest.raises(IndexError):
            s.select(-1)
        assert _snapshot(s) == before


# ---------------------------------------------------------------------------
# Derived queries
# ---------------------------------------------------------------------------

class TestDerived:
    def test_complete_after_all_pairs(self):
        s = _state("A", "B", "A", "B")
        s.select(0)
        s.select(2)
        assert not s.is_level_complete()
        s.select(1)
        s.select(3)
        assert s.is_level_complete()
        assert s.score == 20

    def test_complete_iff_all_matched(self):
        s = _state("A", "A", "B", "B")
        for tile in s.tiles[:3]:
            tile.flipped = tile.matched = True
        assert not s.is_level_complete()
        s.tiles[3].flipped = s.tiles[3].matched = True
        assert s.is_level_complete()

    def test_single_pair_deck_completes_after_one_match(self):
        s = _state("A", "A")
        s.select(1)
        s.select(0)
        assert s.score == 10
        assert s.is_level_complete()

    def test_flipped_is_not_matched(self):
        s = _state("A", "B", "A", "B")
        for tile in s.tiles:
            tile.flipped = True
        assert not s.is_level_complete()

    def test_pair_counts(self):
        s = _state("A", "B", "A", "B")
        assert (s.matched_pairs(), s.total_pairs()) == (0, 2)
        s.select(0)
        s.select(2)
        assert (s.matched_pairs(), s.total_pairs()) == (1, 2)

    @pytest.mark.parametrize("count,columns", [(2, 2), (4, 2), (8, 3), (12, 4)])
    def test_grid_columns(self, count, columns):
        s = _state(*[str(i // 2) for i in range(count)])
        assert s.grid_columns() == columns


class TestProgression:
    def _cleared(self, level: int) -> GameState:
        s = _state("A", "A", level=level)
        s.select(0)
        s.select(1)
        return s

    def test_in_progress(self):
        assert _state("A", "B", "A", "B").progression() is Progression.IN_PROGRESS

    @pytest.mark.parametrize("level", [1, 2])
    def test_next_level(self, level):
        assert self._cleared(level).progression() is Progression.NEXT_LEVEL

    def test_game_complete_at_top_level(self):
        assert self._cleared(3).progression() is Progression.GAME_COMPLETE


# ---------------------------------------------------------------------------
# Score never negative over random play
# ---------------------------------------------------------------------------

class TestRandomPlay:
    def test_score_never_negative(self):
        rng = Random(2024)
        s = _state("A", "B", "C", "A", "B", "C", "D", "D")
        for _ in range(500):
            result = s.select(rng.randrange(len(s.tiles)))
            assert s.score >= 0
            assert len(s.selection) <= 2
            if result is SelectResult.MISMATCHED:
                s.resolve_mismatch()
            for tile in s.tiles:
                assert not tile.matched or tile.flipped
