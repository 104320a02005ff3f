from fastapi import APIRouter
from typing import Any, Dict
from lsms.config.levels import LEVELS, ROLL_RANGES, PARTITION_FILES, TRACKED_MARK_FIELDS

router = APIRouter(
    prefix="/api/config",
    tags=["configuration"]
)

@router.get("/levels")
async def get_level_options() -> Dict[str, Any]:
    """
    Get available levels with their roll number ranges and partition names.
    Used to populate dropdowns in the frontend.
    """
    return {
        "levels": [
            {
                "level": level.value,
                "min": ROLL_RANGES[level][0],
                "max": ROLL_RANGES[level][1],
                "file": PARTITION_FILES[level],
            }
            for level in LEVELS
        ],
        "subjects": TRACKED_MARK_FIELDS,
    }
