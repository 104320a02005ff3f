import pytest

from lsms.config.levels import Level, LEVELS, ROLL_RANGES
from lsms.exceptions import RangeViolation
from lsms.students.partitions import PartitionStore


def test_absent_partition_reads_empty(store):
    assert PartitionStore(store).read(Level.L300) == []


def test_non_list_partition_reads_empty(store):
    store.write("students lv 200.json", {"oops": True})
    assert PartitionStore(store).read(Level.L200) == []


def test_write_creates_partition_and_round_trips(store):
    partitions = PartitionStore(store)
    records = [{"student_name": "Ada", "roll_number": 5, "level": "200"}]
    partitions.write(Level.L200, records)
    assert store.exists("students lv 200.json")
    assert partitions.read(Level.L200) == records


def test_upsert_adds_level_and_roll(store):
    partitions = PartitionStore(store)
    record = partitions.upsert(Level.L200, 50, {"student_name": "Ada", "SWE210_mark": 80})
    assert record == {"student_name": "Ada", "SWE210_mark": 80, "roll_number": 50, "level": "200"}
    assert partitions.read(Level.L200) == [record]


def test_upsert_replaces_same_roll_and_newest_wins(store):
    partitions = PartitionStore(store)
    partitions.upsert(Level.L200, 10, {"student_name": "Old"})
    partitions.upsert(Level.L200, 11, {"student_name": "Other"})
    partitions.upsert(Level.L200, 10, {"student_name": "New"})

    records = partitions.read(Level.L200)
    assert [r["student_name"] for r in records] == ["Other", "New"]
    assert partitions.find(Level.L200, 10)["student_name"] == "New"


def test_upsert_matches_rolls_stored_as_strings(store):
    partitions = PartitionStore(store)
    partitions.write(Level.L300, [{"student_name": "Legacy", "roll_number": "210"}])
    partitions.upsert(Level.L300, 210, {"student_name": "Fresh"})
    assert partitions.read(Level.L300) == [{"student_name": "Fresh", "roll_number": 210, "level": "300"}]


def test_partitions_are_isolated(store):
    partitions = PartitionStore(store)
    partitions.upsert(Level.L200, 1, {"student_name": "A"})
    partitions.upsert(Level.L400, 300, {"student_name": "B"})
    assert [level for level, records in partitions.partitions() if records] == [Level.L200, Level.L400]
    assert partitions.find(Level.L300, 1) is None


def test_labels():
    assert PartitionStore.label(Level.L300) == "students lv 300.json"
    assert PartitionStore.level_for_label("students lv 400.json") == Level.L400
    assert PartitionStore.level_for_label("../Lecturer.json") is None
    assert PartitionStore.level_for_label("") is None


@pytest.mark.parametrize("level", LEVELS)
def test_upsert_rejects_rolls_outside_the_level(store, level):
    partitions = PartitionStore(store)
    min_roll, max_roll = ROLL_RANGES[level]
    for roll in (min_roll - 1, max_roll + 1):
        with pytest.raises(RangeViolation) as exc_info:
            partitions.upsert(level, roll, {"student_name": "Ada"})
        assert exc_info.value.message == f"Roll number for level {level.value} must be between {min_roll} and {max_roll}."
    assert partitions.read(level) == []
    assert not store.exists(PartitionStore.label(level))


def test_upsert_parses_submitted_roll(store):
    record = PartitionStore(store).upsert(Level.L300, " 205 ", {"student_name": "Bo"})
    assert record["roll_number"] == 205


def test_non_object_entries_are_skipped(store):
    store.write("students lv 200.json", [None, "stray", 7, {"student_name": "Ada", "roll_number": 5}])
    partitions = PartitionStore(store)
    assert partitions.read(Level.L200) == [{"student_name": "Ada", "roll_number": 5}]
    assert partitions.find(Level.L200, 5)["student_name"] == "Ada"

    partitions.upsert(Level.L200, 6, {"student_name": "Bo"})
    assert [r["roll_number"] for r in store.read("students lv 200.json")] == [5, 6]
