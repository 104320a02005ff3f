from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, List, Optional
import logging

from lsms.exceptions import NotFoundError
from lsms.students.partitions import PartitionStore, get_partition_store
from lsms.students.schemas import StudentUpsertRequest, MessageResponse, AverageResponse
from lsms.students.validation import parse_level, parse_roll_number, compute_average

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/students",
    tags=["students"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=MessageResponse)
def upsert_student(
    request: StudentUpsertRequest,
    partitions: PartitionStore = Depends(get_partition_store),
):
    """
    Add a student record, or replace the one already stored under the same roll number.
    The roll number must fall inside the level's range.
    """
    level = parse_level(request.level)
    roll = parse_roll_number(level, request.roll_number)

    fields = request.model_dump(exclude={"level", "roll_number"}, exclude_none=True)
    partitions.upsert(level, roll, fields)
    return {"message": f"Student record added/updated for level {level.value}."}


@router.get("", response_model=List[Dict[str, Any]])
def list_students(
    level: Optional[str] = Query(None, description="Academic level: 200, 300 or 400"),
    partitions: PartitionStore = Depends(get_partition_store),
):
    return partitions.read(parse_level(level))


def _get_student(partitions: PartitionStore, roll_number: str, level: Optional[str]) -> Dict[str, Any]:
    parsed_level = parse_level(level)
    roll = parse_roll_number(parsed_level, roll_number)
    student = partitions.find(parsed_level, roll)
    if student is None:
        raise NotFoundError("Student not found")
    return student


@router.get("/{roll_number}", response_model=Dict[str, Any])
def get_student(
    roll_number: str,
    level: Optional[str] = Query(None, description="Academic level: 200, 300 or 400"),
    partitions: PartitionStore = Depends(get_partition_store),
):
    return _get_student(partitions, roll_number, level)


@router.get("/{roll_number}/average", response_model=AverageResponse)
def get_student_average(
    roll_number: str,
    level: Optional[str] = Query(None, description="Academic level: 200, 300 or 400"),
    partitions: PartitionStore = Depends(get_partition_store),
):
    """Average of the tracked subject marks for one student."""
    student = _get_student(partitions, roll_number, level)
    return {"average": compute_average(student)}
