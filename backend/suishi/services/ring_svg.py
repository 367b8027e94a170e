# backend/suishi/services/ring_svg.py
"""SVG 節氣環繪製

將 RingLayout 轉為獨立的 SVG 文件（viewBox 0 0 500 500）。
顏色與字型僅為呈現用常數，不影響佈局。
"""

from html import escape

from suishi.services.ring_layout import (
    DayTick,
    LabelEmphasis,
    MonthWedge,
    RingLayout,
    TextLabel,
    TickStyle,
)

_BG = "#fafaf9"
_HUB = "#0c0a09"
_HUB_STROKE = "#333333"
_CLOCK_COLOR = "#4ade80"
_WEDGE_FILL = "#fcfbf8"
_WEDGE_STROKE = "#e5e5e5"
_EXPANDED_FILL = "#ffffff"
_ANCHOR_COLOR = "#ef4444"
_TODAY_COLOR = "#16a34a"
_PLAIN_TICK = "#a8a29e"

_LABEL_FILL = {
    LabelEmphasis.REST: "#d6d3d1",
    LabelEmphasis.EXPANDED: "#a8a29e",
    LabelEmphasis.CURRENT: "#dc2626",
}
_TERM_FILL = {
    LabelEmphasis.REST: "#a8a29e",
    LabelEmphasis.EXPANDED: "#292524",
    LabelEmphasis.CURRENT: "#292524",
}
_TICK_COLOR = {
    TickStyle.PLAIN: _PLAIN_TICK,
    TickStyle.TODAY: _TODAY_COLOR,
    TickStyle.ANCHOR: _ANCHOR_COLOR,
    TickStyle.ANCHOR_TODAY: _ANCHOR_COLOR,
}


def _text(label: TextLabel, size: int, fill: str, weight: str = "bold", css: str = "") -> str:
    x, y = label.position.x, label.position.y
    attrs = f' class="{css}"' if css else ""
    if label.term_id is not None:
        attrs += f' data-term-id="{label.term_id}"'
    return (
        f'<text x="{x:.2f}" y="{y:.2f}" text-anchor="middle" dominant-baseline="middle"'
        f' font-size="{size}" font-weight="{weight}" fill="{fill}"'
        f' transform="rotate({label.rotation:.2f}, {x:.2f}, {y:.2f})"{attrs}>'
        f"{escape(label.text)}</text>"
    )


def _tick(tick: DayTick) -> list[str]:
    cursor = ' cursor="pointer"' if tick.selectable else ""
    parts = [
        f'<line x1="{tick.inner.x:.2f}" y1="{tick.inner.y:.2f}"'
        f' x2="{tick.outer.x:.2f}" y2="{tick.outer.y:.2f}"'
        f' stroke="{_TICK_COLOR[tick.style]}" stroke-width="{tick.stroke_width}"'
        f' data-day="{tick.day}"{cursor} class="tick tick-{tick.style.value}"/>'
    ]
    # 今日：刻度根部的綠點
    if tick.is_today:
        parts.append(
            f'<circle cx="{tick.inner.x:.2f}" cy="{tick.inner.y:.2f}" r="3" fill="{_TODAY_COLOR}"/>'
        )
    if tick.numeral is not None:
        parts.append(_text(tick.numeral, 9, _ANCHOR_COLOR, css="numeral"))
    if tick.is_selected:
        parts.append(
            f'<circle cx="{tick.outer.x:.2f}" cy="{tick.outer.y:.2f}" r="3" fill="{_ANCHOR_COLOR}"/>'
        )
    return parts


def _wedge(wedge: MonthWedge) -> str:
    fill = _EXPANDED_FILL if wedge.is_expanded else _WEDGE_FILL
    stroke = _EXPANDED_FILL if wedge.is_expanded else _WEDGE_STROKE
    width = 3 if wedge.is_expanded else 1

    parts = [
        f'<g class="month" data-month="{wedge.index}">',
        f'<path d="{wedge.arc.path}" fill="{fill}" stroke="{stroke}" stroke-width="{width}"/>',
        _text(wedge.month_label, 12, _LABEL_FILL[wedge.month_label.emphasis], css="month-label"),
    ]
    for label in wedge.term_labels:
        weight = "bold" if label.emphasis is LabelEmphasis.EXPANDED else "normal"
        parts.append(_text(label, 10, _TERM_FILL[label.emphasis], weight, css="term-label"))
    for tick in wedge.ticks:
        parts.extend(_tick(tick))
    parts.append("</g>")
    return "\n  ".join(parts)


def render_ring_svg(layout: RingLayout, clock_text: str = "") -> str:
    """繪製節氣環

    Args:
        layout: 環形佈局
        clock_text: 中央時鐘字串（HH:MM:SS），空字串則不顯示

    Returns:
        SVG 文件字串
    """
    g = layout.geometry
    wedges_svg = "\n  ".join(_wedge(w) for w in layout.wedges)
    clock_svg = ""
    if clock_text:
        clock_svg = (
            f'<text x="{g.cx}" y="{g.cy}" text-anchor="middle" dominant-baseline="central"'
            f' font-size="40" font-family="monospace" fill="{_CLOCK_COLOR}">'
            f"{escape(clock_text)}</text>"
        )

    return f"""<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 500 500" overflow="visible">
  <circle cx="{g.cx}" cy="{g.cy}" r="{g.base_outer_radius}" fill="{_BG}" opacity="0.5"/>
  {wedges_svg}
  <circle cx="{g.cx}" cy="{g.cy}" r="{g.inner_radius - 10}" fill="{_HUB}" stroke="{_HUB_STROKE}" stroke-width="2"/>
  {clock_svg}
</svg>
"""
