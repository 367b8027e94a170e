# backend/suishi/api/v1/view.py
"""互動檢視 API 路由

每個 session 保存自己的懸停月份與選取節氣，事件端點回傳更新後的佈局。
"""

import asyncio

from fastapi import APIRouter, Depends, Path

from suishi.dependencies import get_registry
from suishi.schemas.common import ApiResponse
from suishi.schemas.ring import RingLayoutResponse, ViewResponse
from suishi.schemas.term import PanelResponse, TermResponse
from suishi.services.interaction import SessionRegistry, ViewSession
from suishi.services.term_table import get_term_by_id

router = APIRouter()


def _view(session_id: str, session: ViewSession) -> ViewResponse:
    hover, _ = session.state.snapshot()
    selected = session.selected_term
    return ViewResponse(
        session_id=session_id,
        hover=hover,
        focus_month=session.focus_month,
        current_term=TermResponse.from_term(session.current_term),
        selected_term=TermResponse.from_term(selected),
        is_current=selected.id == session.current_term.id,
        layout=RingLayoutResponse.from_layout(session.layout()),
    )


@router.get(
    "/{session_id}",
    response_model=ApiResponse[ViewResponse],
    summary="取得檢視狀態",
)
async def get_view(
    session_id: str = Path(..., min_length=1, max_length=64),
    registry: SessionRegistry = Depends(get_registry),
):
    """取得檢視狀態（不存在時建立）"""
    session = registry.get(session_id)
    return ApiResponse(success=True, data=_view(session_id, session))


@router.post(
    "/{session_id}/hover/{month}",
    response_model=ApiResponse[ViewResponse],
    summary="懸停月份",
)
async def hover_month(
    session_id: str = Path(..., min_length=1, max_length=64),
    month: int = Path(..., ge=0, le=11, description="月份索引 (0 = 一月)"),
    registry: SessionRegistry = Depends(get_registry),
):
    """滑鼠進入月份扇區"""
    session = registry.get(session_id)
    session.hover(month)
    return ApiResponse(success=True, data=_view(session_id, session))


@router.post(
    "/{session_id}/leave/{month}",
    response_model=ApiResponse[ViewResponse],
    summary="離開月份",
)
async def leave_month(
    session_id: str = Path(..., min_length=1, max_length=64),
    month: int = Path(..., ge=0, le=11, description="月份索引 (0 = 一月)"),
    registry: SessionRegistry = Depends(get_registry),
):
    """滑鼠離開月份扇區"""
    session = registry.get(session_id)
    session.leave(month)
    return ApiResponse(success=True, data=_view(session_id, session))


@router.post(
    "/{session_id}/select/{term_id}",
    response_model=ApiResponse[ViewResponse],
    summary="選取節氣",
)
async def select_term(
    session_id: str = Path(..., min_length=1, max_length=64),
    term_id: int = Path(..., description="節氣序號 (1-24)"),
    registry: SessionRegistry = Depends(get_registry),
):
    """選取節氣"""
    session = registry.get(session_id)
    term = get_term_by_id(term_id, session.table)
    if term is None:
        return ApiResponse(success=False, error=f"找不到節氣：{term_id}")
    session.select(term)
    return ApiResponse(success=True, data=_view(session_id, session))


@router.post(
    "/{session_id}/tick/{month}/{day}",
    response_model=ApiResponse[ViewResponse],
    summary="點選日刻度",
    description="僅展開月份的節氣日刻度可選取節氣"
)
async def click_tick(
    session_id: str = Path(..., min_length=1, max_length=64),
    month: int = Path(..., ge=0, le=11, description="月份索引 (0 = 一月)"),
    day: int = Path(..., ge=1, le=31, description="日期"),
    registry: SessionRegistry = Depends(get_registry),
):
    """點選日刻度"""
    session = registry.get(session_id)
    term = session.click_tick(month, day)
    if term is None:
        return ApiResponse(success=False, error=f"{month + 1}月{day}日 不是可選取的節氣日")
    return ApiResponse(success=True, data=_view(session_id, session))


@router.post(
    "/{session_id}/insight",
    response_model=ApiResponse[PanelResponse],
    summary="載入選取節氣的詩詞",
)
async def load_insight(
    session_id: str = Path(..., min_length=1, max_length=64),
    registry: SessionRegistry = Depends(get_registry),
):
    """為目前選取的節氣載入詩詞

    同一 session 的新請求會取消仍在進行的舊請求，舊請求返回面板的最新狀態。
    """
    session = registry.get(session_id)
    await asyncio.wait([session.panel.request(session.selected_term)])
    return ApiResponse(success=True, data=PanelResponse(**session.panel.snapshot()))


@router.delete(
    "/{session_id}",
    response_model=ApiResponse[bool],
    summary="結束檢視",
)
async def drop_view(
    session_id: str = Path(..., min_length=1, max_length=64),
    registry: SessionRegistry = Depends(get_registry),
):
    """結束檢視"""
    return ApiResponse(success=True, data=registry.drop(session_id))
