# backend/suishi/services/geometry.py
"""極座標幾何工具

角度一律以度為單位，0° 位於圓的正上方，順時針遞增。
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """平面座標點"""
    x: float
    y: float


def polar_to_cartesian(cx: float, cy: float, radius: float, angle: float) -> Point:
    """極座標轉平面座標（y 軸向下）"""
    rad = math.radians(angle - 90)
    return Point(x=cx + radius * math.cos(rad), y=cy + radius * math.sin(rad))


def describe_arc(
    cx: float,
    cy: float,
    inner_r: float,
    outer_r: float,
    start_angle: float,
    end_angle: float,
) -> str:
    """產生環形扇區的 SVG path

    外弧自 end 逆行至 start，接直線至內弧，再以內弧順行回 end 後封閉。
    """
    start = polar_to_cartesian(cx, cy, outer_r, end_angle)
    end = polar_to_cartesian(cx, cy, outer_r, start_angle)
    inner_start = polar_to_cartesian(cx, cy, inner_r, end_angle)
    inner_end = polar_to_cartesian(cx, cy, inner_r, start_angle)

    large_arc = "0" if end_angle - start_angle <= 180 else "1"

    return " ".join(
        str(v) for v in [
            "M", _fmt(start.x), _fmt(start.y),
            "A", _fmt(outer_r), _fmt(outer_r), 0, large_arc, 0, _fmt(end.x), _fmt(end.y),
            "L", _fmt(inner_end.x), _fmt(inner_end.y),
            "A", _fmt(inner_r), _fmt(inner_r), 0, large_arc, 1, _fmt(inner_start.x), _fmt(inner_start.y),
            "Z",
        ]
    )


def upright_rotation(angle: float) -> float:
    """文字旋轉角度，使文字在圓的左右兩半都保持正向

    正規化角度落在 (180, 360) 時多轉 180°。
    """
    normalized = angle % 360
    if 180 < normalized < 360:
        return angle + 90
    return angle - 90


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
