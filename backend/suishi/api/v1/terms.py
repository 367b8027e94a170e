# backend/suishi/api/v1/terms.py
"""節氣 API 路由"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from suishi.dependencies import get_clock, get_table, resolve_query_date
from suishi.schemas.common import ApiResponse
from suishi.schemas.term import CurrentTermResponse, TermResponse
from suishi.services.clock import Clock
from suishi.services.term_resolver import (
    days_until_next_term,
    resolve_current_term,
    resolve_next_term,
)
from suishi.services.term_table import (
    Season,
    Term,
    get_term_by_id,
    get_term_by_name,
    get_terms_by_season,
    terms_for_month,
)

router = APIRouter()


@router.get(
    "/all",
    response_model=ApiResponse[list[TermResponse]],
    summary="取得所有節氣",
    description="依儲存順序（自立春起）取得二十四節氣"
)
async def get_all_terms(table: tuple[Term, ...] = Depends(get_table)):
    """取得所有節氣"""
    return ApiResponse(
        success=True,
        data=[TermResponse.from_term(t) for t in table]
    )


@router.get(
    "/current",
    response_model=ApiResponse[CurrentTermResponse],
    summary="取得當前節氣",
    description="取得指定日期（預設今天）所處的節氣、下一個節氣與距離天數"
)
async def get_current_term(
    date_str: Optional[str] = Query(
        None,
        alias="date",
        description="公曆日期 (YYYY-MM-DD 格式)，預設為今天",
        examples=["2026-02-04"],
    ),
    table: tuple[Term, ...] = Depends(get_table),
    clock: Clock = Depends(get_clock),
):
    """取得當前節氣"""
    query_date = resolve_query_date(date_str, clock)
    current = resolve_current_term(query_date, table)
    nxt = resolve_next_term(query_date, table)

    return ApiResponse(
        success=True,
        data=CurrentTermResponse(
            date=query_date.isoformat(),
            current=TermResponse.from_term(current),
            next=TermResponse.from_term(nxt),
            days_to_next=days_until_next_term(query_date, table),
            today_is_term_day=current.anchor == (query_date.month, query_date.day),
        )
    )


@router.get(
    "/by-id/{term_id}",
    response_model=ApiResponse[TermResponse],
    summary="依序號查詢節氣",
)
async def get_term(
    term_id: int = Path(..., description="節氣序號 (1-24)"),
    table: tuple[Term, ...] = Depends(get_table),
):
    """依序號查詢節氣"""
    term = get_term_by_id(term_id, table)
    if not term:
        return ApiResponse(
            success=False,
            error=f"找不到節氣：{term_id}"
        )
    return ApiResponse(success=True, data=TermResponse.from_term(term))


@router.get(
    "/by-name/{name}",
    response_model=ApiResponse[TermResponse],
    summary="依名稱查詢節氣",
)
async def get_term_named(
    name: str = Path(..., description="節氣名稱（如：立春、雨水）"),
    table: tuple[Term, ...] = Depends(get_table),
):
    """依名稱查詢節氣"""
    term = get_term_by_name(name, table)
    if not term:
        return ApiResponse(
            success=False,
            error=f"找不到節氣：{name}"
        )
    return ApiResponse(success=True, data=TermResponse.from_term(term))


@router.get(
    "/by-season/{season}",
    response_model=ApiResponse[list[TermResponse]],
    summary="依季節查詢節氣",
)
async def get_terms_in_season(
    season: str = Path(..., description="季節 (Spring/Summer/Autumn/Winter)"),
    table: tuple[Term, ...] = Depends(get_table),
):
    """依季節查詢節氣"""
    valid = [s.value for s in Season]
    if season not in valid:
        return ApiResponse(
            success=False,
            error=f"無效的季節：{season}，有效選項：{', '.join(valid)}"
        )
    terms = get_terms_by_season(Season(season), table)
    return ApiResponse(success=True, data=[TermResponse.from_term(t) for t in terms])


@router.get(
    "/month/{month_index}",
    response_model=ApiResponse[list[TermResponse]],
    summary="取得某月份的節氣",
)
async def get_terms_in_month(
    month_index: int = Path(..., ge=0, le=11, description="月份索引 (0 = 一月)"),
    table: tuple[Term, ...] = Depends(get_table),
):
    """取得某月份的節氣"""
    terms = terms_for_month(table, month_index)
    return ApiResponse(success=True, data=[TermResponse.from_term(t) for t in terms])
