import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from fastapi import Depends

from lsms.config.levels import Level, LEVELS, PARTITION_FILES
from lsms.storage import JsonStore, get_store
from lsms.students.validation import coerce_roll, parse_roll_number

logger = logging.getLogger(__name__)

_LABEL_TO_LEVEL = {label: level for level, label in PARTITION_FILES.items()}


class PartitionStore:
    """Student records, one JSON array per academic level, keyed by roll number."""

    def __init__(self, store: JsonStore):
        self.store = store

    @staticmethod
    def label(level: Level) -> str:
        return PARTITION_FILES[level]

    @staticmethod
    def level_for_label(label: str) -> Optional[Level]:
        return _LABEL_TO_LEVEL.get(label.strip()) if label else None

    def read(self, level: Level) -> List[Dict[str, Any]]:
        records = self.store.read(self.label(level), default=[])
        if not isinstance(records, list):
            logger.warning(f"Partition {self.label(level)} is not a list, treating as empty")
            return []
        objects = [record for record in records if isinstance(record, dict)]
        if len(objects) != len(records):
            logger.warning(f"Partition {self.label(level)} has {len(records) - len(objects)} non-object entries, skipping them")
        return objects

    def write(self, level: Level, records: List[Dict[str, Any]]) -> None:
        self.store.write(self.label(level), records)

    def upsert(self, level: Level, roll_number: Any, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert or replace the record for `roll_number`.

        Raises RangeViolation if the roll number lies outside the level's range.

        Any existing record whose roll number has the same integer value is dropped,
        and the new record goes to the end of the partition.
        """
        roll_number = parse_roll_number(level, roll_number)
        record = {**fields, "roll_number": roll_number, "level": level.value}
        with self.store.lock:
            records = [
                existing for existing in self.read(level)
                if coerce_roll(existing.get("roll_number")) != roll_number
            ]
            records.append(record)
            self.write(level, records)
        logger.info(f"Upserted roll {roll_number} in level {level.value} ({len(records)} records)")
        return record

    def find(self, level: Level, roll_number: int) -> Optional[Dict[str, Any]]:
        for record in self.read(level):
            if coerce_roll(record.get("roll_number")) == roll_number:
                return record
        return None

    def partitions(self) -> Iterator[Tuple[Level, List[Dict[str, Any]]]]:
        """Every partition in scan order 200, 300, 400."""
        for level in LEVELS:
            yield level, self.read(level)


def get_partition_store(store: JsonStore = Depends(get_store)) -> PartitionStore:
    return PartitionStore(store)
