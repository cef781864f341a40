"""
Операции над направляющей (ломаной периметра балкона).

Все функции чистые: принимают вершины направляющей и возвращают новые
значения / новые списки вершин, не изменяя аргументы.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Union

from glazing_layout.config import DEFAULT_SPEC, ManufacturingSpec
from glazing_layout.geometry.offset_chain import angle_between_segments, calculate_offset_points
from glazing_layout.geometry.vectors import distance_2d
from glazing_layout.model import EdgeConfig, Point2D, PointLike, coerce_edge_configs, coerce_guide


@dataclass(frozen=True)
class EdgeSegment:
    """Кромка направляющей: индекс, начало, конец, длина (мм)."""
    index: int
    start: Point2D
    end: Point2D
    length: float


@dataclass(frozen=True)
class CornerAngle:
    """Внутренний угол во внутренней вершине направляющей."""
    index: int
    vertex: Point2D
    angle: float


def edge_segments(guide: Sequence[PointLike]) -> List[EdgeSegment]:
    pts = coerce_guide(guide)
    return [
        EdgeSegment(i, a, b, distance_2d(a.x, a.y, b.x, b.y))
        for i, (a, b) in enumerate(zip(pts[:-1], pts[1:]))
    ]


def corner_angles(guide: Sequence[PointLike]) -> List[CornerAngle]:
    pts = coerce_guide(guide)
    return [
        CornerAngle(i, pts[i], angle_between_segments(pts[i - 1], pts[i], pts[i + 1]))
        for i in range(1, len(pts) - 1)
    ]


def guide_overlay(guide: Sequence[PointLike], spec: ManufacturingSpec = DEFAULT_SPEC) -> List[Point2D]:
    """Смещённый оверлей направляющей, укороченный у концов."""
    cfg = spec.guide
    return calculate_offset_points(guide, cfg.overlay_offset, cfg.start_inset, cfg.end_inset)


def snap_to_angle(
    target: PointLike,
    origin: Optional[PointLike],
    enabled: bool = True,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> Point2D:
    """Привязать направление origin → target к ближайшему кратному 45°.

    Привязка срабатывает в пределах snap_threshold_deg; длина сохраняется.
    """
    point = Point2D.coerce(target)
    if not enabled or origin is None:
        return point
    base = Point2D.coerce(origin)

    dx, dy = point.x - base.x, point.y - base.y
    dist = math.hypot(dx, dy)
    if dist < 1e-6:
        return point
    raw = math.degrees(math.atan2(dy, dx))

    def angular_diff(snap: float) -> float:
        # разность в диапазоне [-180, 180)
        return abs((raw - snap + 180.0) % 360.0 - 180.0)

    best = min(spec.guide.snap_angles, key=angular_diff)
    if angular_diff(best) > spec.guide.snap_threshold_deg:
        return point

    rad = math.radians(best)
    return Point2D(base.x + math.cos(rad) * dist, base.y + math.sin(rad) * dist)


def with_segment_length(
    guide: Sequence[PointLike],
    seg_index: int,
    new_length: float,
) -> List[Point2D]:
    """Изменить длину кромки, переместив её конечную вершину.

    Остальные вершины не сдвигаются. Для вырожденной кромки или индекса
    вне диапазона возвращается копия направляющей.
    """
    pts = coerce_guide(guide)
    if seg_index < 0 or seg_index >= len(pts) - 1:
        return pts
    start, end = pts[seg_index], pts[seg_index + 1]
    dx, dy = end.x - start.x, end.y - start.y
    current = math.hypot(dx, dy)
    if current < 1e-10:
        return pts
    scale = new_length / current
    pts[seg_index + 1] = Point2D(start.x + dx * scale, start.y + dy * scale)
    return pts


def with_corner_angle(
    guide: Sequence[PointLike],
    vertex_index: int,
    angle: float,
) -> List[Point2D]:
    """Задать внутренний угол во внутренней вершине.

    Исходящая кромка поворачивается вокруг вершины с сохранением длины
    и направления поворота (левый / правый).
    """
    pts = coerce_guide(guide)
    if vertex_index <= 0 or vertex_index >= len(pts) - 1:
        return pts
    prev, curr, nxt = pts[vertex_index - 1], pts[vertex_index], pts[vertex_index + 1]

    in_dx, in_dy = curr.x - prev.x, curr.y - prev.y
    out_dx, out_dy = nxt.x - curr.x, nxt.y - curr.y
    in_angle = math.atan2(in_dy, in_dx)
    cross = in_dx * out_dy - in_dy * out_dx

    rad = math.radians(angle)
    if cross >= 0:
        out_angle = in_angle + math.pi - rad
    else:
        out_angle = in_angle - math.pi + rad

    out_len = math.hypot(out_dx, out_dy)
    pts[vertex_index + 1] = Point2D(
        curr.x + math.cos(out_angle) * out_len,
        curr.y + math.sin(out_angle) * out_len,
    )
    return pts


def fit_segment_to_panels(
    guide: Sequence[PointLike],
    edge_configs: Sequence[Union[EdgeConfig, Mapping[str, Any]]],
    seg_index: int,
) -> List[Point2D]:
    """Подогнать длину кромки под суммарную длину модуля её панелей."""
    pts = coerce_guide(guide)
    configs = coerce_edge_configs(edge_configs)
    if seg_index < 0 or seg_index >= min(len(pts) - 1, len(configs)):
        return pts
    total = sum(p.footprint for p in configs[seg_index].panels)
    if total <= 0:
        return pts
    return with_segment_length(pts, seg_index, total)
