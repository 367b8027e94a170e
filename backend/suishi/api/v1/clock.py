# backend/suishi/api/v1/clock.py
"""時鐘 API 路由"""

from fastapi import APIRouter, Depends

from suishi.dependencies import get_clock
from suishi.schemas.common import ApiResponse
from suishi.services.clock import Clock, format_clock_face

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[dict],
    summary="取得目前時間",
    description="環形中央顯示的 24 小時制時間 (HH:MM:SS)"
)
async def get_clock_face(clock: Clock = Depends(get_clock)):
    """取得目前時間"""
    now = clock.now()
    return ApiResponse(
        success=True,
        data={"time": format_clock_face(now), "date": now.date().isoformat()}
    )
