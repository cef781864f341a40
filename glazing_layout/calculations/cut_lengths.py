"""
Длины реза алюминиевых профилей кромки.

Четыре профиля ограничивают блок остекления: нижняя шина (underskena),
верхняя шина (overskena), верхний держатель (overhallare) и накладной
профиль (coverprofile). Резы «на ус» удлиняют или укорачивают профиль
в зависимости от угла в вершине.
"""

import math

from glazing_layout.config import DEFAULT_SPEC, ManufacturingSpec
from glazing_layout.model import CutLengths


def offset_due_to_miter(distance: float, angle: float) -> float:
    """Поправка длины профиля для реза «на ус».

    Args:
        distance: расстояние от оси реза до профиля (мм).
        angle: угол в вершине (градусы); 0 — прямой торец.

    Returns:
        distance * tan((180 - angle) / 2), либо 0 для угла 0.
    """
    if angle == 0:
        return 0.0
    return distance * math.tan(math.radians((180.0 - angle) / 2.0))


def calculate_cut_lengths(
    edge_length: float,
    profile_offset_left: float,
    profile_offset_right: float,
    start_angle: float,
    end_angle: float,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> CutLengths:
    """Вычислить длины реза четырёх профилей (без округления)."""
    cfg = spec.cut_lengths
    underskena = edge_length + profile_offset_left + profile_offset_right

    def mitered(distance: float) -> float:
        return (
            underskena
            + offset_due_to_miter(distance, start_angle)
            + offset_due_to_miter(distance, end_angle)
        )

    wall_bonus = sum(cfg.cover_wall_bonus for angle in (start_angle, end_angle) if angle == 0)

    return CutLengths(
        underskena=underskena,
        overskena=mitered(cfg.overskena),
        overhallare=mitered(cfg.overhallare),
        coverprofile=mitered(cfg.coverprofile) + wall_bonus,
    )
