"""
Параллельное смещение ломаной с угловым соединением «на ус».

Каждый отрезок сдвигается по своей нормали; внутренние вершины результата —
пересечения соседних сдвинутых отрезков. Крайние точки дополнительно
подтягиваются внутрь вдоль своих отрезков (оверлей направляющей не доходит
до истинных углов).
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np
from numpy.linalg import norm

from glazing_layout.model import Point2D, PointLike, coerce_guide

logger = logging.getLogger(__name__)

# Порог параллельности / вырожденности
EPS = 1e-10


def line_line_intersection_2d(
    p1: PointLike,
    d1: PointLike,
    p2: PointLike,
    d2: PointLike,
) -> Optional[Point2D]:
    """Пересечение двух бесконечных прямых (точка + направление).

    Returns:
        Точка пересечения или None, если прямые параллельны
        (|d1 × d2| < EPS).
    """
    a = Point2D.coerce(p1).as_array()
    da = Point2D.coerce(d1).as_array()
    b = Point2D.coerce(p2).as_array()
    db = Point2D.coerce(d2).as_array()

    denom = float(da[0] * db[1] - da[1] * db[0])
    if abs(denom) < EPS:
        return None

    w = b - a
    t = float(w[0] * db[1] - w[1] * db[0]) / denom
    return Point2D.from_array(a + t * da)


def perpendicular(dx: float, dy: float) -> Point2D:
    """Единичная левая нормаль вектора (dx, dy); нулевой вектор для нулевой длины."""
    length = math.hypot(dx, dy)
    if length < EPS:
        return Point2D(0.0, 0.0)
    return Point2D(-dy / length, dx / length)


def calculate_offset_points(
    points: Sequence[PointLike],
    offset_distance: float,
    start_inset: float,
    end_inset: float,
) -> List[Point2D]:
    """Сместить ломаную параллельно с соединением углов «на ус».

    Args:
        points: вершины исходной ломаной (мм).
        offset_distance: расстояние смещения по левой нормали
            (отрицательное — вправо).
        start_inset: укорочение в начале вдоль первого отрезка.
        end_inset: укорочение в конце вдоль последнего отрезка.

    Returns:
        Вершины смещённой ломаной той же длины, что и исходная;
        пустой список при менее чем двух точках.
    """
    pts = [p.as_array() for p in coerce_guide(points)]
    if len(pts) < 2:
        return []

    # Сдвинутые отрезки: (начало, конец, направление)
    segments = []
    for p_a, p_b in zip(pts[:-1], pts[1:]):
        direction = p_b - p_a
        normal = perpendicular(float(direction[0]), float(direction[1])).as_array()
        shift = normal * offset_distance
        segments.append((p_a + shift, p_b + shift, direction))

    result: List[Point2D] = []

    first_start, _, first_dir = segments[0]
    first_len = float(norm(first_dir))
    if first_len > EPS:
        result.append(Point2D.from_array(first_start + first_dir / first_len * start_inset))
    else:
        result.append(Point2D.from_array(first_start))

    for (s1, e1, d1), (s2, _, d2) in zip(segments[:-1], segments[1:]):
        hit = line_line_intersection_2d(s1, d1, s2, d2)
        if hit is None:
            # Соседние отрезки параллельны: берём конец первого
            logger.debug("Parallel offset segments, using segment end point")
            result.append(Point2D.from_array(e1))
        else:
            result.append(hit)

    _, last_end, last_dir = segments[-1]
    last_len = float(norm(last_dir))
    if last_len > EPS:
        result.append(Point2D.from_array(last_end - last_dir / last_len * end_inset))
    else:
        result.append(Point2D.from_array(last_end))

    return result


def angle_between_segments(p1: PointLike, vertex: PointLike, p3: PointLike) -> float:
    """Внутренний угол в вершине между лучами к p1 и p3.

    Returns:
        Угол в градусах [0, 180]; 180 если один из лучей вырожден
        («без поворота»).
    """
    v = Point2D.coerce(vertex).as_array()
    v1 = Point2D.coerce(p1).as_array() - v
    v2 = Point2D.coerce(p3).as_array() - v

    len1 = float(norm(v1))
    len2 = float(norm(v2))
    if len1 < EPS or len2 < EPS:
        return 180.0

    cos_angle = float(np.clip(np.dot(v1, v2) / (len1 * len2), -1.0, 1.0))
    return math.degrees(math.acos(cos_angle))
