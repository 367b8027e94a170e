"""節氣環佈局測試"""

import pytest

from suishi.services.ring_layout import (
    DEFAULT_GEOMETRY,
    LabelEmphasis,
    TickStyle,
    build_ring_layout,
    select_tick,
    wedge_angles,
)
from suishi.services.term_table import MONTH_DAYS, get_term_table


@pytest.fixture
def table():
    return get_term_table()


def _layout(table, focus=1, today_month=1, today_day=10, selected=1):
    return build_ring_layout(table, focus, today_month, today_day, selected)


class TestWedges:
    """測試月份扇區"""

    def test_twelve_wedges_cover_full_circle(self, table):
        """測試十二個扇區無縫覆蓋 360°"""
        layout = _layout(table)
        wedges = layout.wedges

        assert len(wedges) == 12
        assert sum(w.arc.span for w in wedges) == pytest.approx(360)
        for a, b in zip(wedges, wedges[1:]):
            assert a.arc.end_angle == pytest.approx(b.arc.start_angle)
        assert wedges[-1].arc.end_angle - wedges[0].arc.start_angle == pytest.approx(360)

    def test_february_starts_at_top(self, table):
        """測試二月起始於 0°，一月位於其逆時針側"""
        assert wedge_angles(1) == (0, 30)
        assert wedge_angles(0) == (-30, 0)

    def test_exactly_one_expanded(self, table):
        """測試只有焦點月份展開"""
        for focus in range(12):
            layout = _layout(table, focus=focus)
            expanded = [w for w in layout.wedges if w.is_expanded]
            assert [w.index for w in expanded] == [focus]
            assert expanded[0].arc.outer_radius == DEFAULT_GEOMETRY.expanded_outer_radius
            assert all(
                w.arc.outer_radius == DEFAULT_GEOMETRY.base_outer_radius
                for w in layout.wedges if not w.is_expanded
            )

    def test_ticks_only_on_expanded(self, table):
        """測試只有展開月份有刻度，數量等於該月天數"""
        for focus in range(12):
            layout = _layout(table, focus=focus)
            for w in layout.wedges:
                expected = MONTH_DAYS[w.index] if w.index == focus else 0
                assert len(w.ticks) == expected

    def test_month_label(self, table):
        """測試月份標籤位於扇區中央"""
        layout = _layout(table, focus=5, today_month=1)
        feb = layout.wedge(1)
        assert feb.month_label.text == "2月"
        assert feb.month_label.angle == pytest.approx(15)
        assert feb.month_label.emphasis == LabelEmphasis.CURRENT
        assert layout.wedge(5).month_label.emphasis == LabelEmphasis.EXPANDED
        assert layout.wedge(8).month_label.emphasis == LabelEmphasis.REST

    def test_out_of_range_focus(self, table):
        """測試焦點月份超出範圍"""
        with pytest.raises(ValueError):
            _layout(table, focus=12)
        with pytest.raises(ValueError):
            _layout(table, focus=-1)

    def test_memoized(self, table):
        """測試相同輸入返回同一佈局"""
        assert _layout(table) is _layout(table)
        assert _layout(table) is not _layout(table, focus=2)


class TestTermLabels:
    """測試節氣標籤"""

    def test_splay(self, table):
        """測試同月兩個節氣左右錯開 7°"""
        feb = _layout(table, focus=4).wedge(1)
        angles = [lb.angle for lb in feb.term_labels]
        assert [lb.text for lb in feb.term_labels] == ["立春", "雨水"]
        assert angles == [pytest.approx(8), pytest.approx(22)]

    def test_label_radius(self, table):
        """測試展開時標籤往外推"""
        layout = _layout(table, focus=1)
        g = DEFAULT_GEOMETRY
        expanded = layout.wedge(1).term_labels[0]
        resting = layout.wedge(2).term_labels[0]

        def radius(label):
            return ((label.position.x - g.cx) ** 2 + (label.position.y - g.cy) ** 2) ** 0.5

        assert radius(expanded) == pytest.approx(g.expanded_outer_radius + g.expanded_term_label_offset)
        assert radius(resting) == pytest.approx(g.base_outer_radius + g.term_label_offset)

    def test_rotation_flips_on_left_half(self, table):
        """測試左半圓標籤翻轉"""
        layout = _layout(table)
        aug = layout.wedge(7).term_labels[0]
        mar = layout.wedge(2).term_labels[0]
        assert aug.rotation == pytest.approx(aug.angle + 90)
        assert mar.rotation == pytest.approx(mar.angle - 90)


class TestDayTicks:
    """測試逐日刻度"""

    def test_tick_angles(self, table):
        """測試刻度均分並置中於每日區間"""
        ticks = _layout(table, focus=1).wedge(1).ticks
        per_day = 30 / 28
        assert ticks[0].angle == pytest.approx(per_day / 2)
        assert ticks[-1].angle == pytest.approx(30 - per_day / 2)

    def test_anchor_ticks(self, table):
        """測試節氣日刻度"""
        ticks = {t.day: t for t in _layout(table, focus=1, today_month=5).wedge(1).ticks}

        assert ticks[4].style == TickStyle.ANCHOR
        assert ticks[4].term_id == 1
        assert ticks[4].numeral.text == "4"
        assert ticks[4].length == DEFAULT_GEOMETRY.anchor_tick_length
        assert ticks[19].term_id == 2
        assert ticks[5].style == TickStyle.PLAIN
        assert ticks[5].numeral is None
        assert ticks[5].term_id is None
        assert ticks[5].length == DEFAULT_GEOMETRY.plain_tick_length

    def test_today_tick(self, table):
        """測試今日刻度僅在今日月份出現"""
        ticks = {t.day: t for t in _layout(table, focus=2, today_month=2, today_day=21, selected=4).wedge(2).ticks}
        assert ticks[21].style == TickStyle.TODAY
        assert ticks[21].is_today
        assert ticks[21].length == DEFAULT_GEOMETRY.today_tick_length
        assert ticks[20].style == TickStyle.ANCHOR
        assert ticks[20].is_selected

        other = _layout(table, focus=3, today_month=2, today_day=21, selected=4).wedge(3).ticks
        assert not any(t.is_today for t in other)

    def test_anchor_and_today(self, table):
        """測試節氣日與今日重疊"""
        ticks = {t.day: t for t in _layout(table, focus=1, today_month=1, today_day=4).wedge(1).ticks}
        assert ticks[4].style == TickStyle.ANCHOR_TODAY
        assert ticks[4].is_today
        assert ticks[4].numeral is not None

    def test_rotation_continuous_within_wedge(self, table):
        """測試同一扇區內刻度數字不會出現翻轉斷點"""
        for focus in range(12):
            ticks = _layout(table, focus=focus).wedge(focus).ticks
            flipped = {180 < t.angle % 360 < 360 for t in ticks}
            assert len(flipped) == 1

    def test_select_tick(self, table):
        """測試只有節氣日刻度可選取"""
        layout = _layout(table, focus=1)
        assert select_tick(layout, 1, 4) == 1
        assert select_tick(layout, 1, 19) == 2
        assert select_tick(layout, 1, 5) is None
        assert select_tick(layout, 2, 5) is None
        assert select_tick(layout, 12, 1) is None
