# backend/suishi/services/clock.py
"""時鐘服務

提供可注入的時間來源，以及環形中央的 24 小時制時鐘字串。
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class Clock(Protocol):
    """時間來源"""

    def now(self) -> datetime:
        ...


class SystemClock:
    """系統時鐘（固定時區偏移）"""

    def __init__(self, utc_offset_hours: int = 8):
        self.tz = timezone(timedelta(hours=utc_offset_hours))

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """固定時間的時鐘，測試用"""

    def __init__(self, dt: datetime):
        self.dt = dt

    def now(self) -> datetime:
        return self.dt

    def advance(self, **kwargs) -> None:
        self.dt = self.dt + timedelta(**kwargs)


def format_clock_face(dt: datetime) -> str:
    """格式化為 HH:MM:SS（24 小時制）"""
    return dt.strftime("%H:%M:%S")


async def run_clock_ticker(
    clock: Clock,
    on_tick: Callable[[str], None],
    interval: float = 1.0,
    ticks: Optional[int] = None,
) -> int:
    """每隔 interval 秒以最新時鐘字串呼叫 on_tick

    Args:
        clock: 時間來源
        on_tick: 接收時鐘字串的回呼
        interval: 間隔秒數
        ticks: 執行次數，None 表示持續執行直到被取消

    Returns:
        實際執行次數
    """
    count = 0
    while ticks is None or count < ticks:
        on_tick(format_clock_face(clock.now()))
        count += 1
        if ticks is not None and count >= ticks:
            break
        await asyncio.sleep(interval)
    logger.debug("時鐘停止，共 %d 次", count)
    return count
