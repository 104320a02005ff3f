from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, List, Optional

from lsms.identity.schemas import VerifyRequest, VerifyResponse, PartitionLookupRequest, ClassListEntry
from lsms.identity.service import IdentityService, get_identity_service
from lsms.students.schemas import AverageResponse

router = APIRouter(
    prefix="/api",
    tags=["identity"],
)


@router.post("/student-validate", response_model=VerifyResponse, response_model_exclude_none=True)
def validate_student(request: VerifyRequest, identity: IdentityService = Depends(get_identity_service)):
    """
    Check that a student's name and roll number belong together.
    On success the response names the partition the student lives in.
    """
    result = identity.verify(request.name, request.roll_number)
    return VerifyResponse(
        status=result.status,
        matched_partition=result.matched_partition,
        level=result.level.value if result.level else None,
    )


@router.post("/student-search-file", response_model=Dict[str, Any])
def search_student_in_partition(
    request: PartitionLookupRequest,
    identity: IdentityService = Depends(get_identity_service),
):
    return identity.find_in_partition(request.file, request.roll_number)


@router.post("/student-average-file", response_model=AverageResponse)
def student_average_in_partition(
    request: PartitionLookupRequest,
    identity: IdentityService = Depends(get_identity_service),
):
    return {"average": identity.average_in_partition(request.file, request.roll_number)}


@router.get("/class-list", response_model=List[ClassListEntry])
def class_list(
    file: Optional[str] = Query(None, description="Partition name, e.g. 'students lv 200.json'"),
    identity: IdentityService = Depends(get_identity_service),
):
    """Return all students (name and roll number) of a partition."""
    return identity.class_list(file)
