"""Размещение панелей вдоль кромки в координатах плана."""

import math
from dataclasses import dataclass
from typing import List, Sequence

from glazing_layout.config import DEFAULT_SPEC, ManufacturingSpec
from glazing_layout.calculations.edges import EdgeConfigLike, compute_edge_data
from glazing_layout.model import (
    LockSymbol,
    PanelFittingResult,
    Point2D,
    PointLike,
    coerce_edge_configs,
    coerce_guide,
)


@dataclass(frozen=True)
class PositionedPanel:
    """Панель, размещённая на кромке.

    Attributes:
        index: индекс панели на кромке.
        center_along_edge: расстояние от начала кромки до центра панели (мм).
        center: центр панели в плане (мм).
        rotation_deg: направление кромки (градусы, atan2(dy, dx)).
        width: ширина панели (мм).
        has_lock: у панели есть замок '|' или '||'.
        fitting: рассчитанная фурнитура.
    """
    index: int
    center_along_edge: float
    center: Point2D
    rotation_deg: float
    width: float
    has_lock: bool
    fitting: PanelFittingResult


def position_panels(
    guide: Sequence[PointLike],
    edge_configs: Sequence[EdgeConfigLike],
    seg_index: int,
    frame_height: float,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> List[PositionedPanel]:
    """Разместить панели кромки seg_index вдоль её направления.

    Курсор сдвигается на offset_left, центр панели — cursor + length / 2,
    затем курсор сдвигается на length + offset_right.

    Returns:
        Список размещённых панелей; пустой для стены, кромки без панелей
        или кромки нулевой длины.
    """
    pts = coerce_guide(guide)
    configs = coerce_edge_configs(edge_configs)
    if seg_index < 0 or seg_index >= min(len(pts) - 1, len(configs)):
        return []
    edge = configs[seg_index]
    if edge.is_wall or not edge.panels:
        return []

    start, end = pts[seg_index], pts[seg_index + 1]
    dx, dy = end.x - start.x, end.y - start.y
    length = math.hypot(dx, dy)
    if length < 1e-6:
        return []
    ux, uy = dx / length, dy / length
    rotation = math.degrees(math.atan2(dy, dx))

    data = compute_edge_data(pts, configs, seg_index, frame_height, spec)
    placed = []
    cursor = 0.0
    for i, (panel, fitting) in enumerate(zip(edge.panels, data.panel_fittings)):
        cursor += panel.offset_left
        along = cursor + panel.length / 2.0
        placed.append(PositionedPanel(
            index=i,
            center_along_edge=along,
            center=Point2D(start.x + ux * along, start.y + uy * along),
            rotation_deg=rotation,
            width=panel.length,
            has_lock=panel.lock in (LockSymbol.SINGLE, LockSymbol.DOUBLE),
            fitting=fitting,
        ))
        cursor += panel.length + panel.offset_right
    return placed
