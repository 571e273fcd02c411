"""Test the reorder pass"""

import random

import pytest

from conftest import folder, make_entries
from spot_sorter.container import MemoryContainer
from spot_sorter.core.config import PLACEHOLDER_MODES
from spot_sorter.core.exceptions import AllocationError, NotReadyError, StructuralError
from spot_sorter.reorder import engine
from spot_sorter.reorder.engine import plan_reorder, reorder_container, snapshot_entries
from spot_sorter.reorder.models import EntryKind, Move


class RecordingProgress:
    """Stand-in for ReorderProgressBar"""

    def __init__(self, total):
        self.total = total
        self.updates = 0
        self.entered = False
        self.exited = False

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.exited = True

    def update(self):
        self.updates += 1


def sorted_names(container):
    return [name for name in container.names() if name is not None]


LIBRARY_ORDER = [
    "Acoustic", "Empty", "Road Trip", "Workout", "Cardio", "Running",
    "Yoga", "Breath", "Stretch", "Zebra", "apple",
]


class TestPlanReorder:
    """Test plan_reorder()"""

    def test_flat_example(self, fruit_entries):
        plan = plan_reorder(fruit_entries)

        assert plan.target == [1, 4, 0, 2, 3]
        assert plan.moves == [Move(1, 0), Move(4, 1)]
        assert plan.move_count == 2
        assert not plan.is_sorted

    def test_already_sorted(self):
        plan = plan_reorder(make_entries(*folder("B", "x"), "a"))
        assert plan.is_sorted
        assert plan.moves == []

    def test_unloaded_playlists(self):
        """Nothing is planned while playlists are loading"""
        entries = make_entries(("playlist", "b", False), "a", ("playlist", "c", False))

        with pytest.raises(NotReadyError) as exc_info:
            plan_reorder(entries)

        assert exc_info.value.unloaded == 2
        assert exc_info.value.details["total"] == 3

    def test_structure_error_propagates(self):
        with pytest.raises(StructuralError):
            plan_reorder(make_entries(("folder_start", "x")))

    def test_placeholders_absent(self, library_entries):
        """Placeholders are left out of the live positions"""
        plan = plan_reorder(library_entries, placeholder_mode="absent")

        assert plan.target == [9, 10, 11, 0, 1, 3, 2, 4, 6, 5, 7, 8, 12, 13]
        assert len(plan.live_entries()) == 14

    def test_placeholders_trailing(self, library_entries):
        """Placeholders are live slots collected after everything else"""
        plan = plan_reorder(library_entries, placeholder_mode="trailing")

        assert plan.target == [10, 11, 12, 0, 1, 3, 2, 4, 6, 5, 7, 8, 13, 14, 9]
        assert len(plan.live_entries()) == 15

    def test_trailing_keeps_placeholder_order(self):
        entries = make_entries(("placeholder", None), "b", ("placeholder", None), "a")
        plan = plan_reorder(entries, placeholder_mode="trailing")
        assert plan.target == [3, 1, 0, 2]

    def test_unknown_placeholder_mode(self, fruit_entries):
        with pytest.raises(ValueError):
            plan_reorder(fruit_entries, placeholder_mode="first")

    def test_out_of_memory(self, fruit_entries, monkeypatch):
        def exhausted(entries):
            raise MemoryError()

        monkeypatch.setattr(engine, "build_tree", exhausted)

        with pytest.raises(AllocationError) as exc_info:
            plan_reorder(fruit_entries)

        assert isinstance(exc_info.value.__cause__, MemoryError)


class TestReorderContainer:
    """Test reorder_container() against a MemoryContainer"""

    def test_snapshot_entries(self, library_container, library_entries):
        assert snapshot_entries(library_container) == library_entries

    def test_sorts_library(self, library_container):
        plan = reorder_container(library_container)

        assert sorted_names(library_container) == LIBRARY_ORDER
        assert library_container.moves_applied == plan.move_count

    def test_placeholder_stays_in_its_slot(self, library_container):
        reorder_container(library_container, placeholder_mode="absent")
        assert library_container.entry_kind(9) is EntryKind.PLACEHOLDER

    def test_second_pass_moves_nothing(self, library_container):
        reorder_container(library_container)
        second = reorder_container(library_container)

        assert second.is_sorted
        assert sorted_names(library_container) == LIBRARY_ORDER

    def test_trailing_mode(self, library_entries):
        container = MemoryContainer(library_entries, placeholder_mode="trailing")

        reorder_container(container, placeholder_mode="trailing")

        assert container.entry_kind(container.count() - 1) is EntryKind.PLACEHOLDER
        assert sorted_names(container) == LIBRARY_ORDER
        assert reorder_container(container, placeholder_mode="trailing").is_sorted

    def test_dry_run(self, library_container, library_entries):
        plan = reorder_container(library_container, dry_run=True)

        assert plan.move_count > 0
        assert library_container.moves_applied == 0
        assert library_container.entries() == library_entries

    def test_not_ready_moves_nothing(self):
        container = MemoryContainer(make_entries("b", ("playlist", "a", False)))

        with pytest.raises(NotReadyError):
            reorder_container(container)

        assert container.moves_applied == 0

    def test_progress_factory(self, fruit_entries):
        container = MemoryContainer(fruit_entries)
        bars = []

        def factory(total):
            bars.append(RecordingProgress(total))
            return bars[-1]

        reorder_container(container, progress_factory=factory)

        assert len(bars) == 1
        assert bars[0].total == 2
        assert bars[0].updates == 2
        assert bars[0].entered and bars[0].exited

    def test_no_progress_bar_when_sorted(self):
        container = MemoryContainer(make_entries("a", "b"))
        factory_calls = []

        reorder_container(container, progress_factory=factory_calls.append)

        assert factory_calls == []


NAMES = ["a", "A", "b", "B", "apple", "Apple", "Zebra", "zebra", "10", "2", "Été"]


def random_rows(rng, depth=0):
    """Random balanced folder rows with duplicate and mixed-case names"""
    rows = []
    for _ in range(rng.randint(0, 6)):
        roll = rng.random()
        if roll < 0.15:
            rows.append(("placeholder", None))
        elif roll < 0.4 and depth < 3:
            rows.extend(folder(rng.choice(NAMES), *random_rows(rng, depth + 1)))
        else:
            rows.append(rng.choice(NAMES))
    return rows


def sibling_levels(entries):
    """(name, original position) lists, one per folder level, in current order"""
    levels = []
    open_levels = [[]]
    for entry in entries:
        if entry.kind is EntryKind.GROUP_START:
            open_levels[-1].append((entry.name, entry.position))
            open_levels.append([])
        elif entry.kind is EntryKind.GROUP_END:
            levels.append(open_levels.pop())
        elif entry.kind is EntryKind.ITEM:
            open_levels[-1].append((entry.name, entry.position))
    levels.append(open_levels.pop())
    return levels


def enclosing_folders(entries):
    """Original position of each entry -> original position of its folder start"""
    result = {}
    open_folders = []
    for entry in entries:
        if entry.kind is EntryKind.PLACEHOLDER:
            continue
        if entry.kind is EntryKind.GROUP_END:
            result[entry.position] = open_folders.pop()
            continue
        result[entry.position] = open_folders[-1] if open_folders else None
        if entry.kind is EntryKind.GROUP_START:
            open_folders.append(entry.position)
    return result


class TestRandomContainers:
    """Reorder seeded-random nested containers in both placeholder modes"""

    @pytest.mark.parametrize("mode", PLACEHOLDER_MODES)
    @pytest.mark.parametrize("seed", range(100))
    def test_random_library(self, seed, mode):
        entries = make_entries(*random_rows(random.Random(seed)))
        container = MemoryContainer(entries, placeholder_mode=mode)

        reorder_container(container, placeholder_mode=mode)
        after = container.entries()

        for level in sibling_levels(after):
            for (name, position), (next_name, next_position) in zip(level, level[1:]):
                assert name < next_name or (name == next_name and position < next_position)

        assert sorted(after, key=lambda e: e.position) == entries
        assert enclosing_folders(after) == enclosing_folders(entries)

        placeholder_slots = [i for i, e in enumerate(after) if e.kind is EntryKind.PLACEHOLDER]
        if mode == "absent":
            assert placeholder_slots == [
                i for i, e in enumerate(entries) if e.kind is EntryKind.PLACEHOLDER
            ]
        else:
            assert placeholder_slots == list(range(len(after) - len(placeholder_slots), len(after)))

        assert reorder_container(container, placeholder_mode=mode).is_sorted


class TestPlaceholderModes:
    """Placeholder mode names shared by config and engine"""

    def test_engine_accepts_every_config_mode(self, fruit_entries):
        for mode in PLACEHOLDER_MODES:
            assert plan_reorder(fruit_entries, placeholder_mode=mode).move_count == 2


class TestLiveLengthCheck:
    """The planned target must cover every live slot"""

    def test_lost_entry_is_rejected(self, fruit_entries, monkeypatch):
        monkeypatch.setattr(engine, "flatten_tree", lambda forest: [0, 1, 2, 3])

        with pytest.raises(ValueError, match="container has 5"):
            plan_reorder(fruit_entries)

    def test_live_length_excludes_absent_placeholders(self):
        entries = make_entries("b", ("placeholder", None), "a")

        assert plan_reorder(entries, placeholder_mode="absent").target == [1, 0]
        assert plan_reorder(entries, placeholder_mode="trailing").target == [2, 0, 1]
