"""
Reorder engine for spot-sorter.

Sorts a flat playlist container, folders included, into alphabetical
order at every nesting level and computes the moves that get it there.

Pipeline (each step only depends on the previous one):
    tree.build_tree       flat entries -> folder tree
    sorter.sort_tree      sort every level by name (stable)
    flatten.flatten_tree  sorted tree -> target permutation
    moves.plan_moves      target permutation -> single-entry moves
    engine                snapshot, plan, apply against a container

Usage:
    from spot_sorter.reorder import plan_reorder, Entry, EntryKind

    plan = plan_reorder([
        Entry(0, EntryKind.ITEM, "banana"),
        Entry(1, EntryKind.ITEM, "apple"),
    ])
    plan.moves  # [Move(source=1, destination=0)]
"""

from spot_sorter.reorder.engine import (
    PLACEHOLDER_MODES,
    ReorderPlan,
    apply_plan,
    plan_reorder,
    reorder_container,
    snapshot_entries,
)
from spot_sorter.reorder.flatten import flatten_tree
from spot_sorter.reorder.models import Entry, EntryKind, Move, Node
from spot_sorter.reorder.moves import (
    apply_move,
    compact_positions,
    generate_moves,
    plan_moves,
    recalculate_indexes,
)
from spot_sorter.reorder.sorter import merge_sort, sort_tree
from spot_sorter.reorder.tree import build_tree

__all__ = [
    # Models
    "Entry",
    "EntryKind",
    "Node",
    "Move",
    # Pipeline steps
    "build_tree",
    "merge_sort",
    "sort_tree",
    "flatten_tree",
    "apply_move",
    "recalculate_indexes",
    "generate_moves",
    "plan_moves",
    "compact_positions",
    # Engine
    "PLACEHOLDER_MODES",
    "ReorderPlan",
    "snapshot_entries",
    "plan_reorder",
    "apply_plan",
    "reorder_container",
]
