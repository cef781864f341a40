"""
Модель смещений кромки.

Отображает (угол поворота в вершине, признак стыка со стеной) в
(смещение кромки, смещение профиля). Ветви проверяются строго по порядку:

  1. угол 0            — прямой участок / торец у стены
  2. стена, 88°..99°   — прямоугольный стык со стеной
  3. стена, 99°..157°  — интерполяция по таблице углов
  4. угол > 0          — выпуклый угол остекления
  5. угол < 0          — вогнутый угол остекления
"""

import math

from glazing_layout.config import DEFAULT_SPEC, ManufacturingSpec
from glazing_layout.geometry.vectors import interpolate_from_table
from glazing_layout.model import OffsetResult


def _half_angle_tan(angle: float) -> float:
    return math.tan(math.radians((180.0 - angle) / 2.0))


def calculate_offset(
    angle: float,
    is_wall_connected: bool,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> OffsetResult:
    """Вычислить смещение конца кромки по углу в вершине.

    Args:
        angle: угол в вершине (градусы); 0 — нет соседней кромки.
        is_wall_connected: соседняя кромка — стена.
        spec: производственные константы.

    Returns:
        OffsetResult(offset, profile_offset) в мм.
    """
    cfg = spec.offsets
    abs_angle = abs(angle)

    if angle == 0:
        return OffsetResult(cfg.zero_angle_offset, 0.0)

    if is_wall_connected and cfg.wall_square_min_angle <= abs_angle <= cfg.wall_square_max_angle:
        return OffsetResult(cfg.wall_square_offset, cfg.wall_square_profile_offset)

    if is_wall_connected and cfg.wall_square_max_angle < abs_angle <= cfg.wall_wide_max_angle:
        # wall_offset в смещение кромки не входит, см. wall_offset_for_angle
        glazing_offset = interpolate_from_table(
            abs_angle, cfg.interpolation_angles, cfg.glazing_offsets,
        )
        offset = cfg.glazing_profile_base + cfg.cover_depth - glazing_offset - cfg.joint_gap
        profile_offset = -cfg.cover_depth + glazing_offset - cfg.joint_gap
        return OffsetResult(offset, profile_offset)

    factor = cfg.positive_angle_factor if angle > 0 else cfg.negative_angle_factor
    return OffsetResult(_half_angle_tan(angle) * factor + cfg.offset_addend, 0.0)


def wall_offset_for_angle(angle: float, spec: ManufacturingSpec = DEFAULT_SPEC) -> float:
    """Табличное смещение профиля стены для угла стыка (мм)."""
    cfg = spec.offsets
    return interpolate_from_table(abs(angle), cfg.interpolation_angles, cfg.wall_offsets)
