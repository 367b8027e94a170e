"""節氣資料表測試"""

import pytest

from suishi.services.term_table import (
    MONTH_DAYS,
    RAW_TERMS,
    Season,
    TermTableError,
    get_term_by_id,
    get_term_by_name,
    get_term_table,
    get_terms_by_season,
    load_term_table,
    parse_anchor,
    terms_for_month,
)


class TestParseAnchor:
    """測試起始日解析"""

    def test_parse_valid(self):
        """測試正常格式"""
        assert parse_anchor("Feb 4") == (2, 4)
        assert parse_anchor("Dec 21") == (12, 21)

    @pytest.mark.parametrize("text", ["Feb", "Feb 4 2026", "Foo 3", "Feb x", "Feb 0", "Feb 29", "Apr 31", ""])
    def test_parse_malformed(self, text):
        """測試格式錯誤應立即失敗"""
        with pytest.raises(TermTableError):
            parse_anchor(text)


class TestLoadTermTable:
    """測試資料表載入與驗證"""

    def test_static_table(self):
        """測試內建資料表"""
        table = get_term_table()

        assert len(table) == 24
        assert [t.id for t in table] == list(range(1, 25))
        assert table[0].name == "立春"
        assert table[0].anchor == (2, 4)
        assert table[-1].name == "大寒"

    def test_anchors_unique_and_ordered(self):
        """測試起始日依公曆排序後嚴格遞增"""
        values = sorted(t.canonical_value for t in get_term_table())
        assert len(set(values)) == 24
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_table_is_cached(self):
        """測試資料表只載入一次"""
        assert get_term_table() is get_term_table()

    def test_empty_table(self):
        """測試空資料表"""
        with pytest.raises(TermTableError):
            load_term_table([])

    def test_duplicate_id(self):
        """測試序號重複"""
        records = [dict(RAW_TERMS[0]), dict(RAW_TERMS[1], id=1)]
        with pytest.raises(TermTableError):
            load_term_table(records)

    def test_duplicate_anchor(self):
        """測試起始日重複"""
        records = [dict(RAW_TERMS[0]), dict(RAW_TERMS[1], anchor="Feb 4")]
        with pytest.raises(TermTableError):
            load_term_table(records)

    def test_missing_field(self):
        """測試缺少欄位"""
        record = dict(RAW_TERMS[0])
        del record["anchor"]
        with pytest.raises(TermTableError):
            load_term_table([record])

    def test_unknown_season(self):
        """測試未知季節"""
        with pytest.raises(TermTableError):
            load_term_table([dict(RAW_TERMS[0], season="Monsoon")])


class TestLookups:
    """測試查詢函式"""

    def test_by_id_and_name(self):
        """測試依序號與名稱查詢"""
        assert get_term_by_id(4).name == "春分"
        assert get_term_by_name("大寒").id == 24
        assert get_term_by_id(99) is None
        assert get_term_by_name("不存在") is None

    def test_terms_for_month(self):
        """測試依月份取得節氣"""
        table = get_term_table()
        assert [t.name for t in terms_for_month(table, 1)] == ["立春", "雨水"]
        assert [t.name for t in terms_for_month(table, 0)] == ["小寒", "大寒"]
        assert all(len(terms_for_month(table, i)) == 2 for i in range(12))

    def test_by_season(self):
        """測試依季節查詢"""
        winter = get_terms_by_season(Season.WINTER)
        assert len(winter) == 6
        assert {t.name for t in winter} >= {"冬至", "大寒"}

    def test_february_is_never_leap(self):
        """測試二月固定 28 天"""
        assert MONTH_DAYS[1] == 28
        assert sum(MONTH_DAYS) == 365
