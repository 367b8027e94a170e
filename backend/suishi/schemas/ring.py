# backend/suishi/schemas/ring.py
"""節氣環佈局 API Schema"""

from typing import Optional

from pydantic import BaseModel, Field

from suishi.schemas.term import TermResponse
from suishi.services.geometry import Point
from suishi.services.ring_layout import DayTick, MonthWedge, RingLayout, TextLabel


class PointModel(BaseModel):
    """平面座標"""
    x: float
    y: float

    @classmethod
    def from_point(cls, p: Point) -> "PointModel":
        return cls(x=round(p.x, 3), y=round(p.y, 3))


class ArcModel(BaseModel):
    """環形扇區"""
    cx: float
    cy: float
    inner_radius: float
    outer_radius: float
    start_angle: float = Field(..., description="起始角度（0° 為正上方，順時針）")
    end_angle: float = Field(..., description="結束角度")
    path: str = Field(..., description="SVG path")


class LabelModel(BaseModel):
    """文字標籤"""
    text: str
    position: PointModel
    angle: float
    rotation: float = Field(..., description="文字旋轉角度")
    emphasis: str
    term_id: Optional[int] = None

    @classmethod
    def from_label(cls, label: TextLabel) -> "LabelModel":
        return cls(
            text=label.text,
            position=PointModel.from_point(label.position),
            angle=round(label.angle, 3),
            rotation=round(label.rotation, 3),
            emphasis=label.emphasis.value,
            term_id=label.term_id,
        )


class TickModel(BaseModel):
    """單日刻度"""
    day: int
    angle: float
    inner: PointModel
    outer: PointModel
    length: float
    stroke_width: float
    style: str = Field(..., description="plain / today / anchor / anchor-today")
    is_today: bool
    is_selected: bool
    term_id: Optional[int] = Field(None, description="節氣日刻度的節氣序號")
    numeral: Optional[LabelModel] = None

    @classmethod
    def from_tick(cls, tick: DayTick) -> "TickModel":
        return cls(
            day=tick.day,
            angle=round(tick.angle, 3),
            inner=PointModel.from_point(tick.inner),
            outer=PointModel.from_point(tick.outer),
            length=tick.length,
            stroke_width=tick.stroke_width,
            style=tick.style.value,
            is_today=tick.is_today,
            is_selected=tick.is_selected,
            term_id=tick.term_id,
            numeral=LabelModel.from_label(tick.numeral) if tick.numeral else None,
        )


class WedgeModel(BaseModel):
    """月份扇區"""
    index: int = Field(..., description="月份索引 (0 = 一月)")
    display: str
    arc: ArcModel
    month_label: LabelModel
    term_labels: list[LabelModel]
    ticks: list[TickModel]
    is_expanded: bool
    is_current_month: bool

    @classmethod
    def from_wedge(cls, wedge: MonthWedge) -> "WedgeModel":
        arc = wedge.arc
        return cls(
            index=wedge.index,
            display=wedge.display,
            arc=ArcModel(
                cx=arc.cx,
                cy=arc.cy,
                inner_radius=arc.inner_radius,
                outer_radius=arc.outer_radius,
                start_angle=arc.start_angle,
                end_angle=arc.end_angle,
                path=arc.path,
            ),
            month_label=LabelModel.from_label(wedge.month_label),
            term_labels=[LabelModel.from_label(lb) for lb in wedge.term_labels],
            ticks=[TickModel.from_tick(t) for t in wedge.ticks],
            is_expanded=wedge.is_expanded,
            is_current_month=wedge.is_current_month,
        )


class RingLayoutResponse(BaseModel):
    """節氣環佈局回應"""
    focus_month: int
    today_month: int
    today_day: int
    selected_term_id: int
    wedges: list[WedgeModel]

    @classmethod
    def from_layout(cls, layout: RingLayout) -> "RingLayoutResponse":
        return cls(
            focus_month=layout.focus_month,
            today_month=layout.today_month,
            today_day=layout.today_day,
            selected_term_id=layout.selected_term_id,
            wedges=[WedgeModel.from_wedge(w) for w in layout.wedges],
        )


class ViewResponse(BaseModel):
    """檢視狀態回應"""
    session_id: str
    hover: Optional[int] = Field(None, description="懸停的月份索引")
    focus_month: int = Field(..., description="展開的月份索引")
    current_term: TermResponse
    selected_term: TermResponse
    is_current: bool = Field(..., description="選取的是否為當前節氣")
    layout: RingLayoutResponse
