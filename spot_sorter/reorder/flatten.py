"""
Flatten the sorted tree back into a target order of container positions.
"""

from spot_sorter.reorder.models import Node


def flatten_tree(forest: list[Node]) -> list[int]:
    """
    Return original positions in the order the sorted tree lays them out.

    Each node contributes its own position; a folder is followed by its
    members and then by the position of its end marker, so the folder
    brackets come out exactly as in the container encoding.

    Args:
        forest: Sorted root-level nodes.

    Returns:
        The target permutation: target[i] is the original position of the
        entry that must end up at slot i.
    """
    target: list[int] = []
    _flatten_into(forest, target)
    return target


def _flatten_into(nodes: list[Node], target: list[int]) -> None:
    for node in nodes:
        target.append(node.origin_position)
        if node.is_group:
            _flatten_into(node.children, target)
            target.append(node.end_position)
