from fastapi import APIRouter

from schemas import AchievementActionRequest
from services.achievement_service import default_achievements, process_achievements

router = APIRouter(prefix="/api/achievements")


@router.get("")
def list_defaults():
    return default_achievements()


@router.post("/process")
def process_action(payload: AchievementActionRequest):
    # a client without saved state starts from the defaults
    if payload.achievements is None:
        current = default_achievements()
    else:
        current = [a.model_dump(by_alias=True) for a in payload.achievements]
    data = payload.data.model_dump(by_alias=True, exclude_none=True) if payload.data else {}
    return process_achievements(payload.action, data, current)
