from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.schemas.schedule import (
    BlockValidation,
    BlockValidationRequest,
    ConflictScan,
    ConsolidatedRange,
    ScheduleOverview,
    ScheduleRequest,
)
from app.services.schedule_rules import (
    build_overview,
    find_conflicts,
    group_consecutive,
    validate_new_block,
)

router = APIRouter()


@router.post("/conflicts", response_model=ConflictScan)
def detect_conflicts(payload: ScheduleRequest) -> ConflictScan:
    return find_conflicts(payload.blocks)


@router.post("/validate", response_model=BlockValidation)
def validate_block(
    payload: BlockValidationRequest,
    settings: Settings = Depends(get_settings),
) -> BlockValidation:
    # Rule violations come back as a 200 with valid=false so forms can show them inline.
    return validate_new_block(
        payload.candidate,
        payload.existing,
        min_minutes=settings.min_class_minutes,
        max_minutes=settings.max_class_minutes,
    )


@router.post("/consolidate", response_model=list[ConsolidatedRange])
def consolidate_blocks(payload: ScheduleRequest) -> list[ConsolidatedRange]:
    return group_consecutive(payload.blocks)


@router.post("/overview", response_model=ScheduleOverview)
def schedule_overview(payload: ScheduleRequest) -> ScheduleOverview:
    return build_overview(payload.blocks)
