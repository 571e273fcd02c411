"""
Sort every level of the folder tree by name.

Names compare case-sensitively by code point, which is the same order as
comparing their UTF-8 bytes ("Zebra" sorts before "apple"). Equal names
keep their container order so that sorting an already sorted container
is a no-op.
"""

from spot_sorter.reorder.models import Node


def merge_sort(nodes: list[Node]) -> list[Node]:
    """
    Return a new list with `nodes` in name order.

    Top-down merge sort; on equal names the node from the left run,
    which came first in the container, is taken first.
    """
    if len(nodes) <= 1:
        return list(nodes)

    middle = len(nodes) // 2
    return _merge(merge_sort(nodes[:middle]), merge_sort(nodes[middle:]))


def _merge(left: list[Node], right: list[Node]) -> list[Node]:
    merged: list[Node] = []
    i = j = 0

    while i < len(left) and j < len(right):
        if right[j].name < left[i].name:
            merged.append(right[j])
            j += 1
        else:
            merged.append(left[i])
            i += 1

    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def sort_tree(forest: list[Node]) -> list[Node]:
    """
    Sort the forest and, recursively, the members of every folder.

    Folder contents are sorted before the folder takes its place among its
    siblings. Child lists are replaced in place on each folder node; the
    sorted root list is returned.

    Args:
        forest: Root-level nodes from build_tree().

    Returns:
        The root-level nodes in name order.
    """
    for node in forest:
        if node.is_group and node.children:
            node.children = sort_tree(node.children)

    return merge_sort(forest)
