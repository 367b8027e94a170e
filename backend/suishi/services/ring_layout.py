# backend/suishi/services/ring_layout.py
"""節氣環形佈局引擎

將月份、節氣與焦點月份轉為極座標幾何描述：
- 十二個等寬扇區（每月 30°，二月起始於正上方）
- 每個扇區外側的節氣標籤
- 展開月份的逐日刻度、節氣日與今日標記

輸出為與繪圖後端無關的幾何資料，任何 2D 繪圖介面皆可使用。
佈局為純函式，以輸入值做快取，不持有可變狀態。
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Sequence

from suishi.services.geometry import (
    Point,
    describe_arc,
    polar_to_cartesian,
    upright_rotation,
)
from suishi.services.term_table import MONTH_DAYS, Term, terms_for_month

MONTH_COUNT = 12

# 顯示用月份名稱
DISPLAY_MONTHS = tuple(f"{i}月" for i in range(1, MONTH_COUNT + 1))


@dataclass(frozen=True)
class RingGeometry:
    """環形尺寸設定（SVG 座標，500x500 畫布）"""
    cx: float = 250
    cy: float = 250
    inner_radius: float = 110
    base_outer_radius: float = 230
    expanded_outer_radius: float = 255
    rotation_offset: float = -30       # 一月自 -30° 起，二月起始於正上方
    wedge_span: float = 30
    term_label_offset: float = 15
    expanded_term_label_offset: float = 25
    term_splay: float = 7              # 同月兩個節氣的標籤左右錯開角度
    plain_tick_length: float = 4
    today_tick_length: float = 6
    anchor_tick_length: float = 8
    numeral_inset: float = 8


DEFAULT_GEOMETRY = RingGeometry()


class TickStyle(str, Enum):
    """刻度樣式"""
    PLAIN = "plain"
    TODAY = "today"
    ANCHOR = "anchor"
    ANCHOR_TODAY = "anchor-today"


class LabelEmphasis(str, Enum):
    """標籤強調程度"""
    REST = "rest"
    EXPANDED = "expanded"
    CURRENT = "current"


@dataclass(frozen=True)
class WedgeArc:
    """環形扇區"""
    cx: float
    cy: float
    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    path: str

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class TextLabel:
    """已定位並旋轉的文字"""
    text: str
    position: Point
    angle: float                 # 所在角度
    rotation: float              # 文字旋轉角度
    emphasis: LabelEmphasis = LabelEmphasis.REST
    term_id: Optional[int] = None


@dataclass(frozen=True)
class DayTick:
    """單日刻度"""
    day: int
    angle: float
    inner: Point
    outer: Point
    length: float
    stroke_width: float
    style: TickStyle
    is_today: bool = False
    is_selected: bool = False
    term_id: Optional[int] = None          # 僅節氣日刻度有值
    numeral: Optional[TextLabel] = None    # 僅節氣日刻度有日期數字

    @property
    def selectable(self) -> bool:
        return self.term_id is not None


@dataclass(frozen=True)
class MonthWedge:
    """單一月份扇區"""
    index: int
    display: str
    arc: WedgeArc
    month_label: TextLabel
    term_labels: tuple[TextLabel, ...]
    ticks: tuple[DayTick, ...]
    is_expanded: bool
    is_current_month: bool


@dataclass(frozen=True)
class RingLayout:
    """整個環形的幾何描述"""
    wedges: tuple[MonthWedge, ...]
    focus_month: int
    today_month: int
    today_day: int
    selected_term_id: int
    geometry: RingGeometry = DEFAULT_GEOMETRY

    def wedge(self, month_index: int) -> MonthWedge:
        return self.wedges[month_index]


def wedge_angles(month_index: int, geometry: RingGeometry = DEFAULT_GEOMETRY) -> tuple[float, float]:
    """月份扇區的起訖角度"""
    start = month_index * geometry.wedge_span + geometry.rotation_offset
    return start, start + geometry.wedge_span


def _splay_offsets(count: int, splay: float) -> list[float]:
    if count <= 1:
        return [0.0] * count
    return [splay * (2 * i - (count - 1)) / (count - 1) for i in range(count)]


def _term_labels(
    terms: list[Term],
    mid_angle: float,
    outer_r: float,
    is_expanded: bool,
    g: RingGeometry,
) -> tuple[TextLabel, ...]:
    # 展開時標籤再往外推，避開刻度
    label_r = outer_r + (g.expanded_term_label_offset if is_expanded else g.term_label_offset)
    emphasis = LabelEmphasis.EXPANDED if is_expanded else LabelEmphasis.REST

    labels = []
    for term, offset in zip(terms, _splay_offsets(len(terms), g.term_splay)):
        angle = mid_angle + offset
        labels.append(
            TextLabel(
                text=term.name,
                position=polar_to_cartesian(g.cx, g.cy, label_r, angle),
                angle=angle,
                rotation=upright_rotation(angle),
                emphasis=emphasis,
                term_id=term.id,
            )
        )
    return tuple(labels)


def _day_ticks(
    month_index: int,
    terms: list[Term],
    start_angle: float,
    outer_r: float,
    today_day: Optional[int],
    selected_term_id: int,
    g: RingGeometry,
) -> tuple[DayTick, ...]:
    days_in_month = MONTH_DAYS[month_index]
    per_day = g.wedge_span / days_in_month
    anchors = {t.day: t for t in terms}

    ticks = []
    for day in range(1, days_in_month + 1):
        angle = start_angle + (day - 1) * per_day + per_day / 2
        term = anchors.get(day)
        is_today = today_day == day

        if term is not None:
            style = TickStyle.ANCHOR_TODAY if is_today else TickStyle.ANCHOR
            length = g.anchor_tick_length
        elif is_today:
            style = TickStyle.TODAY
            length = g.today_tick_length
        else:
            style = TickStyle.PLAIN
            length = g.plain_tick_length

        inner_r = outer_r - length
        inner = polar_to_cartesian(g.cx, g.cy, inner_r, angle)
        numeral = None
        if term is not None:
            numeral = TextLabel(
                text=str(day),
                position=polar_to_cartesian(g.cx, g.cy, inner_r - g.numeral_inset, angle),
                angle=angle,
                rotation=upright_rotation(angle),
                emphasis=LabelEmphasis.CURRENT,
                term_id=term.id,
            )

        ticks.append(
            DayTick(
                day=day,
                angle=angle,
                inner=inner,
                outer=polar_to_cartesian(g.cx, g.cy, outer_r, angle),
                length=length,
                stroke_width=2 if style is not TickStyle.PLAIN else 1,
                style=style,
                is_today=is_today,
                is_selected=term is not None and term.id == selected_term_id,
                term_id=term.id if term is not None else None,
                numeral=numeral,
            )
        )
    return tuple(ticks)


def _build_wedge(
    table: tuple[Term, ...],
    index: int,
    focus_month: int,
    today_month: int,
    today_day: int,
    selected_term_id: int,
    g: RingGeometry,
) -> MonthWedge:
    is_expanded = index == focus_month
    is_current_month = index == today_month
    terms = terms_for_month(table, index)

    start_angle, end_angle = wedge_angles(index, g)
    mid_angle = start_angle + g.wedge_span / 2
    outer_r = g.expanded_outer_radius if is_expanded else g.base_outer_radius

    arc = WedgeArc(
        cx=g.cx,
        cy=g.cy,
        inner_radius=g.inner_radius,
        outer_radius=outer_r,
        start_angle=start_angle,
        end_angle=end_angle,
        path=describe_arc(g.cx, g.cy, g.inner_radius, outer_r, start_angle, end_angle),
    )

    if is_current_month:
        month_emphasis = LabelEmphasis.CURRENT
    elif is_expanded:
        month_emphasis = LabelEmphasis.EXPANDED
    else:
        month_emphasis = LabelEmphasis.REST
    month_label = TextLabel(
        text=DISPLAY_MONTHS[index],
        position=polar_to_cartesian(g.cx, g.cy, (g.inner_radius + outer_r) / 2, mid_angle),
        angle=mid_angle,
        rotation=upright_rotation(mid_angle),
        emphasis=month_emphasis,
    )

    ticks: tuple[DayTick, ...] = ()
    if is_expanded:
        ticks = _day_ticks(
            index,
            terms,
            start_angle,
            outer_r,
            today_day if is_current_month else None,
            selected_term_id,
            g,
        )

    return MonthWedge(
        index=index,
        display=DISPLAY_MONTHS[index],
        arc=arc,
        month_label=month_label,
        term_labels=_term_labels(terms, mid_angle, outer_r, is_expanded, g),
        ticks=ticks,
        is_expanded=is_expanded,
        is_current_month=is_current_month,
    )


@lru_cache(maxsize=64)
def _build_ring_layout(
    table: tuple[Term, ...],
    focus_month: int,
    today_month: int,
    today_day: int,
    selected_term_id: int,
    geometry: RingGeometry,
) -> RingLayout:
    wedges = tuple(
        _build_wedge(table, i, focus_month, today_month, today_day, selected_term_id, geometry)
        for i in range(MONTH_COUNT)
    )
    return RingLayout(
        wedges=wedges,
        focus_month=focus_month,
        today_month=today_month,
        today_day=today_day,
        selected_term_id=selected_term_id,
        geometry=geometry,
    )


def build_ring_layout(
    table: Sequence[Term],
    focus_month: int,
    today_month: int,
    today_day: int,
    selected_term_id: int,
    geometry: RingGeometry = DEFAULT_GEOMETRY,
) -> RingLayout:
    """產生環形佈局

    Args:
        table: 節氣資料表
        focus_month: 展開的月份索引 (0-11)
        today_month: 今日所在月份索引 (0-11)
        today_day: 今日日期 (1-31)
        selected_term_id: 目前選取的節氣序號
        geometry: 尺寸設定

    Returns:
        RingLayout

    Raises:
        ValueError: 月份索引或日期超出範圍（呼叫端錯誤）
    """
    if not 0 <= focus_month < MONTH_COUNT:
        raise ValueError(f"focus_month 超出範圍：{focus_month}")
    if not 0 <= today_month < MONTH_COUNT:
        raise ValueError(f"today_month 超出範圍：{today_month}")
    if not 1 <= today_day <= 31:
        raise ValueError(f"today_day 超出範圍：{today_day}")

    return _build_ring_layout(
        tuple(table), focus_month, today_month, today_day, selected_term_id, geometry
    )


def select_tick(layout: RingLayout, month_index: int, day: int) -> Optional[int]:
    """點選刻度，返回該節氣日的節氣序號

    僅展開月份的節氣日刻度可點選，其餘返回 None。
    """
    if not 0 <= month_index < MONTH_COUNT:
        return None
    for tick in layout.wedge(month_index).ticks:
        if tick.day == day:
            return tick.term_id
    return None
