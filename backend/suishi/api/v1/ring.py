# backend/suishi/api/v1/ring.py
"""節氣環佈局 API 路由"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from suishi.dependencies import get_clock, get_table, resolve_query_date
from suishi.schemas.common import ApiResponse
from suishi.schemas.ring import RingLayoutResponse
from suishi.services.clock import Clock, format_clock_face
from suishi.services.interaction import InteractionState
from suishi.services.ring_layout import RingLayout, build_ring_layout
from suishi.services.ring_svg import render_ring_svg
from suishi.services.term_resolver import resolve_current_term
from suishi.services.term_table import Term, get_term_by_id

router = APIRouter()


def _layout_for(
    table: tuple[Term, ...],
    clock: Clock,
    date_str: Optional[str],
    focus: Optional[int],
    selected: Optional[int],
) -> Optional[RingLayout]:
    """依查詢參數產生佈局；選取的節氣不存在時返回 None"""
    query_date = resolve_query_date(date_str, clock)
    current = resolve_current_term(query_date, table)

    state = InteractionState(current.id)
    if selected is not None:
        term = get_term_by_id(selected, table)
        if term is None:
            return None
        state.on_select_term(term)
    if focus is not None:
        state.on_hover_enter(focus)

    today_month = query_date.month - 1
    return build_ring_layout(
        table,
        state.effective_focus_month(current, today_month, table),
        today_month,
        query_date.day,
        state.selected_term_id,
    )


@router.get(
    "/layout",
    response_model=ApiResponse[RingLayoutResponse],
    summary="取得節氣環佈局",
    description="取得十二個月份扇區、節氣標籤與展開月份刻度的幾何資料"
)
async def get_layout(
    focus: Optional[int] = Query(None, ge=0, le=11, description="懸停展開的月份索引"),
    selected: Optional[int] = Query(None, description="選取的節氣序號，預設為當前節氣"),
    date_str: Optional[str] = Query(None, alias="date", description="公曆日期 (YYYY-MM-DD)"),
    table: tuple[Term, ...] = Depends(get_table),
    clock: Clock = Depends(get_clock),
):
    """取得節氣環佈局"""
    layout = _layout_for(table, clock, date_str, focus, selected)
    if layout is None:
        return ApiResponse(success=False, error=f"找不到節氣：{selected}")
    return ApiResponse(success=True, data=RingLayoutResponse.from_layout(layout))


@router.get(
    "/svg",
    summary="繪製節氣環 SVG",
    response_class=Response,
)
async def get_svg(
    focus: Optional[int] = Query(None, ge=0, le=11, description="懸停展開的月份索引"),
    selected: Optional[int] = Query(None, description="選取的節氣序號"),
    date_str: Optional[str] = Query(None, alias="date", description="公曆日期 (YYYY-MM-DD)"),
    table: tuple[Term, ...] = Depends(get_table),
    clock: Clock = Depends(get_clock),
):
    """繪製節氣環 SVG；選取的節氣不存在時返回 404"""
    layout = _layout_for(table, clock, date_str, focus, selected)
    if layout is None:
        return JSONResponse(
            status_code=404,
            content=ApiResponse(success=False, error=f"找不到節氣：{selected}").model_dump(),
        )
    svg = render_ring_svg(layout, format_clock_face(clock.now()))
    return Response(content=svg, media_type="image/svg+xml")
