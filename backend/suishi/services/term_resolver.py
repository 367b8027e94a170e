# backend/suishi/services/term_resolver.py
"""節氣判定服務

依日期判定所處節氣：
- 當前節氣：起始日不晚於該日的最近一個節氣
- 下一個節氣與距離天數

節氣以固定月日為準，年份不參與計算。資料表的儲存順序自立春（二月）開始，
因此判定前需先依公曆先後重新排序，並以環狀方式處理跨年。
"""

from bisect import bisect_right
from datetime import date
from typing import Sequence

from suishi.services.term_table import MONTH_DAYS, Term


def canonical_date_value(month: int, day: int) -> int:
    """將月日轉為可比較的數值（月 * 100 + 日）"""
    return month * 100 + day


def chronological_terms(table: Sequence[Term]) -> list[Term]:
    """依公曆先後（一月在前）排序節氣"""
    return sorted(table, key=lambda t: t.canonical_value)


def _active_index(today: date, chrono: list[Term]) -> int:
    current_val = canonical_date_value(today.month, today.day)
    values = [t.canonical_value for t in chrono]
    # 第一個大於當日的節氣之前一個即為當前節氣；
    # i == 0 時 (i - 1) % n 環回上一輪最後一個節氣
    i = bisect_right(values, current_val)
    return (i - 1) % len(chrono)


def resolve_current_term(today: date, table: Sequence[Term]) -> Term:
    """取得指定日期所處的節氣

    Args:
        today: 日期（僅使用月、日）
        table: 節氣資料表

    Returns:
        當前節氣
    """
    chrono = chronological_terms(table)
    return chrono[_active_index(today, chrono)]


def resolve_next_term(today: date, table: Sequence[Term]) -> Term:
    """取得指定日期之後的下一個節氣（環狀）"""
    chrono = chronological_terms(table)
    return chrono[(_active_index(today, chrono) + 1) % len(chrono)]


def _day_of_year(month: int, day: int) -> int:
    """固定平年下的年內序日 (1-365)"""
    return sum(MONTH_DAYS[: month - 1]) + min(day, MONTH_DAYS[month - 1])


def days_until_next_term(today: date, table: Sequence[Term]) -> int:
    """距離下一個節氣的天數（以 365 天環狀計算）"""
    nxt = resolve_next_term(today, table)
    delta = _day_of_year(nxt.month, nxt.day) - _day_of_year(today.month, today.day)
    return delta if delta > 0 else delta + 365
