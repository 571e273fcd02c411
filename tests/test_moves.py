"""Test move list generation"""

import random

import pytest

from spot_sorter.reorder.models import Move
from spot_sorter.reorder.moves import (
    apply_move,
    compact_positions,
    generate_moves,
    plan_moves,
    recalculate_indexes,
)


def simulate(target, moves):
    """Apply moves to the original order and return the result"""
    live = list(range(len(target)))
    for move in moves:
        apply_move(live, move.source, move.destination)
    return live


class TestApplyMove:
    """Test apply_move()"""

    def test_move_up(self):
        items = ["a", "b", "c", "d"]
        apply_move(items, 3, 1)
        assert items == ["a", "d", "b", "c"]

    def test_move_down(self):
        """Destination is the final index after removal"""
        items = ["a", "b", "c", "d"]
        apply_move(items, 0, 2)
        assert items == ["b", "c", "a", "d"]

    def test_same_position(self):
        items = ["a", "b"]
        apply_move(items, 1, 1)
        assert items == ["a", "b"]

    def test_out_of_range(self):
        with pytest.raises(IndexError):
            apply_move(["a", "b"], 0, 2)
        with pytest.raises(IndexError):
            apply_move(["a", "b"], -1, 0)


class TestRecalculateIndexes:
    """Test recalculate_indexes()"""

    def test_shifts_entries_passed_over(self):
        working = [1, 4, 0, 2, 3]
        recalculate_indexes(working, 0)
        assert working == [1, 4, 1, 2, 3]

    def test_second_step(self):
        working = [0, 4, 1, 2, 3]
        recalculate_indexes(working, 1)
        assert working == [0, 4, 2, 3, 4]


class TestPlanMoves:
    """Test plan_moves() and generate_moves()"""

    def test_flat_example(self):
        """Two moves sort banana, apple, cherry, date, apple"""
        assert plan_moves([1, 4, 0, 2, 3]) == [
            Move(source=1, destination=0),
            Move(source=4, destination=1),
        ]

    def test_grouped_example(self):
        assert plan_moves([3, 0, 1, 2]) == [Move(source=3, destination=0)]

    def test_identity_needs_no_moves(self):
        assert plan_moves(list(range(10))) == []

    def test_empty(self):
        assert plan_moves([]) == []

    def test_first_entry_belongs_last(self):
        """Slots are filled left to right, so the others move up one by one"""
        assert plan_moves([1, 2, 3, 0]) == [
            Move(source=1, destination=0),
            Move(source=2, destination=1),
            Move(source=3, destination=2),
        ]

    def test_reverse(self):
        target = [4, 3, 2, 1, 0]
        moves = plan_moves(target)
        assert len(moves) == 4
        assert simulate(target, moves) == target

    @pytest.mark.parametrize("seed", range(20))
    def test_moves_reach_target(self, seed):
        """Applying the moves to the original order yields the target"""
        rng = random.Random(seed)
        target = list(range(rng.randint(1, 60)))
        rng.shuffle(target)

        moves = plan_moves(target)

        assert simulate(target, moves) == target

    @pytest.mark.parametrize("seed", range(10))
    def test_no_noop_moves(self, seed):
        """Every move changes the order, and none exceeds the slot count"""
        rng = random.Random(seed)
        target = list(range(40))
        rng.shuffle(target)

        moves = plan_moves(target)

        assert all(move.source != move.destination for move in moves)
        assert len(moves) < len(target)

    def test_generate_moves_is_lazy(self):
        moves = generate_moves([1, 0, 2])
        assert next(moves) == Move(source=1, destination=0)
        assert list(moves) == []

    def test_not_a_permutation(self):
        with pytest.raises(ValueError):
            plan_moves([0, 0, 1])
        with pytest.raises(ValueError):
            plan_moves([1, 2])

    def test_size_mismatch(self):
        """Validation happens before any move is produced"""
        with pytest.raises(ValueError):
            generate_moves([0, 1], size=3)


class TestCompactPositions:
    """Test compact_positions()"""

    def test_skips_placeholders(self):
        assert compact_positions([3, 0, 1], placeholders=[2]) == [2, 0, 1]

    def test_no_placeholders(self):
        assert compact_positions([2, 0, 1], placeholders=[]) == [2, 0, 1]

    def test_several_placeholders(self):
        assert compact_positions([5, 1, 3], placeholders=[0, 2, 4]) == [2, 0, 1]
