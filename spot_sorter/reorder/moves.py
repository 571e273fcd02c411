"""
Turn a target permutation into single-entry moves against a live container.

The container applies each move immediately: the entry is removed from its
slot and reinserted at the destination, shifting everything in between by
one. Every move therefore changes the live position of entries that have
not been placed yet, and the remaining target references are corrected
after each one.

Usage:
    from spot_sorter.reorder.moves import plan_moves

    plan_moves([1, 4, 0, 2, 3])
    # [Move(source=1, destination=0), Move(source=4, destination=1)]
"""

from bisect import bisect_left
from typing import Iterable, Iterator, MutableSequence, Sequence, TypeVar

from spot_sorter.reorder.models import Move

T = TypeVar("T")


def apply_move(sequence: MutableSequence[T], source: int, destination: int) -> None:
    """
    Apply one move to `sequence` in place, with container semantics.

    The element at `source` is removed and reinserted so that it ends up
    at index `destination`; elements in between shift by one.

    Raises:
        IndexError: If either index is outside the sequence.
    """
    size = len(sequence)
    if not (0 <= source < size and 0 <= destination < size):
        raise IndexError(
            f"Move {source} -> {destination} out of range for {size} entries"
        )
    if source == destination:
        return
    element = sequence.pop(source)
    sequence.insert(destination, element)


def recalculate_indexes(working: list[int], moved: int) -> None:
    """
    Correct pending live positions after working[moved] was moved to slot `moved`.

    Every entry that sat before the moved entry's old position, from the
    destination onwards, has been pushed one slot to the right.
    """
    original_index = working[moved]
    for j in range(moved, len(working)):
        if working[j] < original_index:
            working[j] += 1


def generate_moves(target: Sequence[int], size: int | None = None) -> Iterator[Move]:
    """
    Lazily yield the moves that rearrange a live container into `target` order.

    Destination slots are filled left to right. A slot whose entry is
    already in place produces no move; otherwise the entry is moved there
    and the pending positions are recalculated.

    Args:
        target: target[i] is the current position of the entry that must
                end up at slot i. Must be a permutation of range(len(target)).
        size: Live container length, if known; must equal len(target).

    Returns:
        Iterator of Move records, in the order they must be applied.

    Raises:
        ValueError: If target is not a permutation or size does not match.
    """
    _validate_permutation(target, size)
    return _iter_moves(list(target))


def _iter_moves(working: list[int]) -> Iterator[Move]:
    for i in range(len(working)):
        if working[i] == i:
            continue
        yield Move(source=working[i], destination=i)
        recalculate_indexes(working, i)


def plan_moves(target: Sequence[int], size: int | None = None) -> list[Move]:
    """Return the complete move list for `target` (see generate_moves)."""
    return list(generate_moves(target, size))


def _validate_permutation(target: Sequence[int], size: int | None) -> None:
    if size is not None and size != len(target):
        raise ValueError(
            f"Target covers {len(target)} positions but the container has {size}"
        )
    if sorted(target) != list(range(len(target))):
        raise ValueError(
            f"Target is not a permutation of 0..{len(target) - 1}"
        )


def compact_positions(target: Iterable[int], placeholders: Iterable[int]) -> list[int]:
    """
    Map original positions to positions in a container without placeholders.

    Each position drops by the number of placeholder positions before it.

    Example:
        compact_positions([3, 0, 1], placeholders=[2])  # [2, 0, 1]
    """
    skipped = sorted(placeholders)
    return [position - bisect_left(skipped, position) for position in target]
