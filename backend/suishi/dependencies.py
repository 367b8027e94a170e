# backend/suishi/dependencies.py
"""FastAPI 依賴注入

時鐘、節氣資料表與檢視 session 皆經由依賴取得，測試時可覆蓋。
"""

from datetime import date, datetime
from functools import lru_cache
from typing import Optional

from fastapi import HTTPException

from suishi.config import settings
from suishi.services.clock import Clock, SystemClock
from suishi.services.interaction import SessionRegistry
from suishi.services.term_table import Term, get_term_table


def get_clock() -> Clock:
    """取得時間來源"""
    return SystemClock(settings.utc_offset_hours)


def get_table() -> tuple[Term, ...]:
    """取得節氣資料表"""
    return get_term_table()


@lru_cache(maxsize=1)
def _registry() -> SessionRegistry:
    return SessionRegistry(
        get_term_table(),
        SystemClock(settings.utc_offset_hours),
        max_sessions=settings.max_view_sessions,
    )


def get_registry() -> SessionRegistry:
    """取得檢視 session 儲存區"""
    return _registry()


def resolve_query_date(date_str: Optional[str], clock: Clock) -> date:
    """解析 YYYY-MM-DD，未提供時使用時鐘的今天"""
    if not date_str:
        return clock.now().date()
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"日期格式錯誤，請使用 YYYY-MM-DD 格式: {date_str}"
        )
