"""
One reorder pass: snapshot the container, plan, then issue the moves.

The pass is synchronous and run-to-completion. The whole target order and
move list are computed before the first move is issued, so a failure while
planning (unbalanced folders, unloaded playlists, memory) never leaves the
container partially reordered.

Usage:
    from spot_sorter.reorder.engine import reorder_container

    plan = reorder_container(container, placeholder_mode="absent")
    print(f"{plan.move_count} moves applied")
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from spot_sorter.core.config import PLACEHOLDER_MODES
from spot_sorter.core.exceptions import AllocationError, NotReadyError
from spot_sorter.core.logger import get_logger, log_move
from spot_sorter.reorder.flatten import flatten_tree
from spot_sorter.reorder.models import Entry, EntryKind, Move
from spot_sorter.reorder.moves import apply_move, compact_positions, plan_moves
from spot_sorter.reorder.sorter import sort_tree
from spot_sorter.reorder.tree import build_tree

if TYPE_CHECKING:
    from spot_sorter.container.base import PlaylistContainer
    from spot_sorter.core.progress import BaseProgressBar

logger = get_logger(__name__)


@dataclass
class ReorderPlan:
    """
    Result of planning a reorder pass.

    Attributes:
        entries: Snapshot the plan was computed from.
        target: Target permutation in live positions.
        moves: Moves to apply, in order.
        placeholder_mode: 'absent' or 'trailing' (see plan_reorder).
    """
    entries: list[Entry]
    target: list[int]
    moves: list[Move]
    placeholder_mode: str

    @property
    def move_count(self) -> int:
        return len(self.moves)

    @property
    def is_sorted(self) -> bool:
        """True when the container is already in order."""
        return not self.moves

    def live_entries(self) -> list[Entry]:
        """Entries occupying live container slots, in current order."""
        if self.placeholder_mode == "trailing":
            return list(self.entries)
        return [e for e in self.entries if e.kind is not EntryKind.PLACEHOLDER]


def snapshot_entries(container: "PlaylistContainer") -> list[Entry]:
    """
    Read every entry of the container into an Entry list.

    Names are only queried for playlists and folder starts, and the
    loaded flag only for playlists.
    """
    entries = []
    for i in range(container.count()):
        kind = container.entry_kind(i)
        name = None
        loaded = True
        if kind in (EntryKind.ITEM, EntryKind.GROUP_START):
            name = container.entry_name(i)
        if kind is EntryKind.ITEM:
            loaded = container.is_loaded(i)
        entries.append(Entry(i, kind, name, loaded))
    return entries


def plan_reorder(entries: list[Entry], placeholder_mode: str = "absent") -> ReorderPlan:
    """
    Compute the sorted order and the moves that produce it.

    Args:
        entries: Container snapshot, in position order.
        placeholder_mode: How placeholders relate to live positions.
            'absent': placeholders are not live slots; positions are
                      compacted before moves are computed.
            'trailing': placeholders occupy live slots and are collected,
                        in their current relative order, after all
                        sorted entries.

    Returns:
        ReorderPlan with the target permutation and move list.

    Raises:
        NotReadyError: If any playlist is not loaded (nothing is built).
        StructuralError: If folder markers are unbalanced.
        AllocationError: If memory runs out while planning.
        ValueError: If placeholder_mode is unknown.
    """
    if placeholder_mode not in PLACEHOLDER_MODES:
        raise ValueError(f"Unknown placeholder mode: {placeholder_mode!r}")

    unloaded = sum(1 for e in entries if e.kind is EntryKind.ITEM and not e.loaded)
    if unloaded:
        raise NotReadyError(
            f"{unloaded} playlists could not be loaded",
            unloaded=unloaded,
            details={"unloaded": unloaded, "total": len(entries)}
        )

    placeholders = [e.position for e in entries if e.kind is EntryKind.PLACEHOLDER]

    try:
        forest = sort_tree(build_tree(entries))
        target = flatten_tree(forest)

        if placeholder_mode == "trailing":
            target.extend(placeholders)
        else:
            target = compact_positions(target, placeholders)

        live_count = len(entries)
        if placeholder_mode == "absent":
            live_count -= len(placeholders)
        moves = plan_moves(target, size=live_count)
    except MemoryError as e:
        raise AllocationError(
            "Out of memory while planning the reorder",
            details={"entries": len(entries)}
        ) from e

    logger.debug(
        f"Planned {len(moves)} moves for {len(target)} live entries "
        f"({len(placeholders)} placeholders, mode={placeholder_mode})"
    )

    return ReorderPlan(
        entries=list(entries),
        target=target,
        moves=moves,
        placeholder_mode=placeholder_mode
    )


def apply_plan(
    container: "PlaylistContainer",
    plan: ReorderPlan,
    progress: "BaseProgressBar | None" = None
) -> None:
    """
    Issue the plan's moves to the container, in order.

    A local copy of the live order is kept in step with the container so
    that each move can be logged with the name of the entry it moves.
    """
    live = plan.live_entries()

    for move in plan.moves:
        entry = live[move.source]
        container.move(move.source, move.destination)
        apply_move(live, move.source, move.destination)

        log_move(
            logger,
            move.source,
            move.destination,
            name=entry.name,
            is_folder=entry.kind in (EntryKind.GROUP_START, EntryKind.GROUP_END)
        )
        if progress is not None:
            progress.update()


def reorder_container(
    container: "PlaylistContainer",
    placeholder_mode: str = "absent",
    dry_run: bool = False,
    progress_factory: "Callable[[int], BaseProgressBar] | None" = None
) -> ReorderPlan:
    """
    Run a full reorder pass against `container`.

    Args:
        container: The playlist container to sort.
        placeholder_mode: See plan_reorder().
        dry_run: Plan only; do not call container.move().
        progress_factory: Called with the move count to create a progress
                          bar, used as a context manager while moves are applied.

    Returns:
        The executed (or, for a dry run, planned) ReorderPlan.

    Raises:
        NotReadyError, StructuralError, AllocationError: Before any move.
    """
    entries = snapshot_entries(container)
    logger.info(
        f"Reordering {len(entries)} playlists and playlist folders in {container.describe()}"
    )

    plan = plan_reorder(entries, placeholder_mode)

    if plan.is_sorted:
        logger.info("Already in order, nothing to move")
        return plan

    if dry_run:
        logger.info(f"Dry run: {plan.move_count} moves planned, none applied")
        return plan

    logger.info(f"{plan.move_count} of {len(plan.target)} entries need to move")

    if progress_factory is None:
        apply_plan(container, plan)
    else:
        with progress_factory(plan.move_count) as progress:
            apply_plan(container, plan, progress)

    logger.info(f"Done: {plan.move_count} moves applied")
    return plan
