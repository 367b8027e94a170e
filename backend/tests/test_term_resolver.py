"""節氣判定測試"""

from datetime import date, datetime, timedelta

import pytest

from suishi.services.term_resolver import (
    canonical_date_value,
    chronological_terms,
    days_until_next_term,
    resolve_current_term,
    resolve_next_term,
)
from suishi.services.term_table import get_term_table


@pytest.fixture
def table():
    return get_term_table()


class TestResolveCurrentTerm:
    """測試當前節氣判定"""

    @pytest.mark.parametrize(
        "day, name, term_id",
        [
            (date(2026, 2, 4), "立春", 1),
            (date(2026, 2, 3), "大寒", 24),
            (date(2026, 3, 21), "春分", 4),
            (date(2026, 3, 20), "春分", 4),
            (date(2026, 3, 19), "惊蛰", 3),
            (date(2026, 1, 5), "小寒", 23),
            (date(2026, 1, 20), "大寒", 24),
            (date(2026, 12, 21), "冬至", 22),
            (date(2026, 12, 31), "冬至", 22),
        ],
    )
    def test_known_dates(self, table, day, name, term_id):
        """測試已知日期"""
        term = resolve_current_term(day, table)
        assert term.name == name
        assert term.id == term_id

    def test_before_first_anchor_wraps(self, table):
        """測試一月五日前環回上一輪最後一個節氣"""
        term = resolve_current_term(date(2026, 1, 1), table)
        assert term == chronological_terms(table)[-1]
        assert term.name == "冬至"

    def test_year_is_ignored(self, table):
        """測試年份不影響結果"""
        a = resolve_current_term(date(1999, 7, 30), table)
        b = resolve_current_term(datetime(2031, 7, 30, 23, 59), table)
        assert a == b
        assert a.name == "大暑"

    def test_leap_day(self, table):
        """測試閏日落在雨水"""
        assert resolve_current_term(date(2024, 2, 29), table).name == "雨水"

    def test_greatest_anchor_not_after_date(self, table):
        """測試全年每一天都落在不晚於該日的最近節氣"""
        start = date(2025, 1, 1)
        for offset in range(365):
            day = start + timedelta(days=offset)
            value = canonical_date_value(day.month, day.day)
            earlier = [t for t in table if t.canonical_value <= value]
            candidates = earlier or list(table)
            expected = max(candidates, key=lambda t: t.canonical_value)
            assert resolve_current_term(day, table) == expected, day

    def test_storage_order_untouched(self, table):
        """測試排序不影響原資料表順序"""
        chronological_terms(table)
        assert table[0].name == "立春"


class TestNextTerm:
    """測試下一個節氣"""

    def test_next_term(self, table):
        """測試下一個節氣與天數"""
        assert resolve_next_term(date(2026, 2, 4), table).name == "雨水"
        assert days_until_next_term(date(2026, 2, 4), table) == 15
        assert days_until_next_term(date(2026, 3, 21), table) == 14

    def test_next_term_wraps_year(self, table):
        """測試跨年"""
        assert resolve_next_term(date(2026, 12, 25), table).name == "小寒"
        assert days_until_next_term(date(2026, 12, 25), table) == 11

    def test_day_before_anchor(self, table):
        """測試節氣前一天"""
        assert days_until_next_term(date(2026, 2, 3), table) == 1
