# backend/suishi/api/v1/insight.py
"""節氣詩詞 API 路由"""

from fastapi import APIRouter, Depends, Path

from suishi.config import settings
from suishi.dependencies import get_table
from suishi.schemas.common import ApiResponse
from suishi.schemas.term import InsightResponse, InsightStatusResponse
from suishi.services.ai_engine import generate_term_insight, is_ai_available
from suishi.services.term_table import Term, get_term_by_id

router = APIRouter()


@router.get(
    "/status",
    response_model=ApiResponse[InsightStatusResponse],
    summary="檢查 AI 服務狀態",
)
async def check_status():
    """檢查 AI 服務狀態"""
    available = is_ai_available()
    return ApiResponse(
        success=True,
        data=InsightStatusResponse(
            available=available,
            model=settings.gemini_model if available else "N/A",
            message="AI 服務正常運作" if available else "AI 服務不可用（未設定 GEMINI_API_KEY），將使用預設內容"
        )
    )


@router.get(
    "/{term_id}",
    response_model=ApiResponse[InsightResponse],
    summary="生成節氣詩詞",
    description="生成詩詞、養生建議與時令食材；AI 不可用時返回預設內容"
)
async def get_insight(
    term_id: int = Path(..., description="節氣序號 (1-24)"),
    table: tuple[Term, ...] = Depends(get_table),
):
    """生成節氣詩詞"""
    term = get_term_by_id(term_id, table)
    if not term:
        return ApiResponse(success=False, error=f"找不到節氣：{term_id}")

    insight = await generate_term_insight(term)
    return ApiResponse(
        success=True,
        data=InsightResponse(
            term_id=term.id,
            term_name=term.name,
            **insight.to_dict(),
        )
    )
