"""Геометрия направляющей: векторы, смещение ломаной, операции над вершинами."""

from glazing_layout.geometry.offset_chain import (
    angle_between_segments,
    calculate_offset_points,
    line_line_intersection_2d,
    perpendicular,
)
from glazing_layout.geometry.vectors import interpolate_from_table, round_to

__all__ = [
    "angle_between_segments",
    "calculate_offset_points",
    "line_line_intersection_2d",
    "perpendicular",
    "interpolate_from_table",
    "round_to",
]
