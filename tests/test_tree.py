"""Test folder tree rebuilding"""

import pytest

from conftest import folder, make_entries
from spot_sorter.core.exceptions import StructuralError
from spot_sorter.reorder.tree import build_tree


class TestBuildTree:
    """Test build_tree()"""

    def test_flat_items(self):
        """Items without folders become root leaves in container order"""
        forest = build_tree(make_entries("b", "a", "c"))

        assert [node.name for node in forest] == ["b", "a", "c"]
        assert [node.origin_position for node in forest] == [0, 1, 2]
        assert not any(node.is_group for node in forest)

    def test_folder_owns_members(self):
        """A folder records both markers and owns its members"""
        forest = build_tree(make_entries(*folder("B", "x"), "a"))

        assert len(forest) == 2
        group, leaf = forest
        assert group.is_group
        assert (group.origin_position, group.end_position) == (0, 2)
        assert [child.name for child in group.children] == ["x"]
        assert leaf.name == "a" and leaf.origin_position == 3

    def test_nested_folders(self, library_entries):
        """Nested folders are attached to the innermost open folder"""
        forest = build_tree(library_entries)

        assert [node.name for node in forest] == [
            "Road Trip", "Workout", "Acoustic", "Empty", "Zebra", "apple"
        ]
        workout = forest[1]
        assert [child.name for child in workout.children] == ["Running", "Cardio", "Yoga"]
        yoga = workout.children[2]
        assert (yoga.origin_position, yoga.end_position) == (4, 7)
        assert [child.name for child in yoga.children] == ["Stretch", "Breath"]
        assert workout.end_position == 8

    def test_empty_folder(self, library_entries):
        """An empty folder is still a group and keeps its end marker"""
        empty = build_tree(library_entries)[3]

        assert empty.is_group
        assert empty.children == []
        assert (empty.origin_position, empty.end_position) == (11, 12)

    def test_playlists_are_leaves(self, library_entries):
        """Playlists have no end marker and never become groups"""
        road_trip = build_tree(library_entries)[0]

        assert not road_trip.is_group
        assert road_trip.end_position is None
        assert road_trip.children == []

    def test_placeholders_are_skipped(self):
        """Placeholders produce no node"""
        forest = build_tree(make_entries("a", ("placeholder", None), "b"))
        assert [node.origin_position for node in forest] == [0, 2]

    def test_empty_container(self):
        """An empty container yields an empty forest"""
        assert build_tree([]) == []

    def test_unmatched_folder_end(self):
        """A folder end with nothing open is rejected"""
        with pytest.raises(StructuralError) as exc_info:
            build_tree(make_entries("a", ("folder_end", None)))

        assert exc_info.value.details["position"] == 1

    def test_unclosed_folder(self):
        """A folder still open at the end is rejected"""
        with pytest.raises(StructuralError) as exc_info:
            build_tree(make_entries(("folder_start", "Open"), "a"))

        assert "Open" in exc_info.value.message

    def test_missing_name(self):
        """Playlists and folders must have a name"""
        with pytest.raises(StructuralError):
            build_tree(make_entries(("playlist", None)))
