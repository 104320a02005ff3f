from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends

from lsms.config.levels import Level
from lsms.exceptions import ValidationError, NotFoundError
from lsms.students.partitions import PartitionStore, get_partition_store
from lsms.students.validation import compute_average

logger = logging.getLogger(__name__)

SUCCESS = "success"
ROLL_MISMATCH = "roll_mismatch"
NOT_FOUND = "not_found"
INVALID = "invalid"


@dataclass
class VerifyResult:
    status: str
    matched_partition: Optional[str] = None
    level: Optional[Level] = None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


class IdentityService:
    """Cross-checks a claimed (name, roll number) pair against every level partition."""

    def __init__(self, partitions: PartitionStore):
        self.partitions = partitions

    def verify(self, name: Any, roll_number: Any) -> VerifyResult:
        """
        Linear scan of partitions 200, 300, 400, stopping at the first record
        whose name (case-insensitive) and roll number both match.

        A record sharing only the name, or only the roll number, yields
        `roll_mismatch` when no exact pair exists anywhere.
        """
        wanted_name = _text(name).lower()
        wanted_roll = _text(roll_number)
        if not wanted_name or not wanted_roll:
            return VerifyResult(status=INVALID)

        partial_match = False
        for level, records in self.partitions.partitions():
            for record in records:
                name_matches = _text(record.get("student_name")).lower() == wanted_name
                roll_matches = _text(record.get("roll_number")) == wanted_roll
                if name_matches and roll_matches:
                    label = self.partitions.label(level)
                    logger.info(f"Identity verified in {label}")
                    return VerifyResult(status=SUCCESS, matched_partition=label, level=level)
                if name_matches or roll_matches:
                    partial_match = True

        return VerifyResult(status=ROLL_MISMATCH if partial_match else NOT_FOUND)

    def _resolve(self, label: Optional[str]) -> Level:
        level = self.partitions.level_for_label(label or "")
        if level is None:
            raise NotFoundError("File not found")
        return level

    def find_in_partition(self, label: Optional[str], roll_number: Any) -> Dict[str, Any]:
        """Record whose roll number, as trimmed text, equals `roll_number` in the named partition."""
        wanted_roll = _text(roll_number)
        if not wanted_roll or not _text(label):
            raise ValidationError("Missing data")
        level = self._resolve(label)
        for record in self.partitions.read(level):
            if _text(record.get("roll_number")) == wanted_roll:
                return record
        raise NotFoundError("Student not found")

    def average_in_partition(self, label: Optional[str], roll_number: Any) -> float:
        return compute_average(self.find_in_partition(label, roll_number))

    def class_list(self, label: Optional[str]) -> List[Dict[str, Any]]:
        """Name and roll number of every complete record in the named partition."""
        if not _text(label):
            raise ValidationError("File parameter is required.")
        level = self._resolve(label)
        return [
            {"student_name": record["student_name"], "roll_number": record["roll_number"]}
            for record in self.partitions.read(level)
            if record.get("student_name") and record.get("roll_number")
        ]


def get_identity_service(partitions: PartitionStore = Depends(get_partition_store)) -> IdentityService:
    return IdentityService(partitions)
