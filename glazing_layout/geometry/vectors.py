"""
Векторные и угловые утилиты в 2D.

Содержит:
- расстояние между точками и угол между векторами
- кусочно-линейную интерполяцию по таблице с отсечкой вне диапазона
- ограничение, линейную интерполяцию и округление «половина вверх»
"""

import math
from typing import Sequence

import numpy as np


def deg_to_rad(degrees: float) -> float:
    return degrees * (math.pi / 180.0)


def rad_to_deg(radians: float) -> float:
    return radians * (180.0 / math.pi)


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def round_to(value: float, decimals: int = 1) -> float:
    """Округлить с правилом «половина вверх» (как в производственных таблицах).

    Встроенный round() округляет банковски (2.25 → 2.2), а производственные
    значения исторически округлялись вверх: floor(v * 10^d + 0.5) / 10^d.

    Args:
        value: исходное значение.
        decimals: число знаков после запятой.

    Returns:
        Округлённое значение.
    """
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def distance_2d(x1: float, y1: float, x2: float, y2: float) -> float:
    return float(np.hypot(x2 - x1, y2 - y1))


def angle_between_vectors_2d(ax: float, ay: float, bx: float, by: float) -> float:
    """Знаковый угол от вектора a к вектору b (градусы, -180..180)."""
    dot = ax * bx + ay * by
    cross = ax * by - ay * bx
    return rad_to_deg(math.atan2(cross, dot))


def interpolate_from_table(
    angle: float,
    angles: Sequence[float],
    values: Sequence[float],
) -> float:
    """Кусочно-линейная интерполяция значения по таблице углов.

    Таблица углов отсортирована по убыванию. Вне диапазона таблицы
    возвращается крайнее значение (первое — выше диапазона, последнее —
    ниже).

    Args:
        angle: угол (градусы).
        angles: углы таблицы, по убыванию.
        values: значения, соответствующие углам.

    Returns:
        Интерполированное значение.
    """
    # np.interp требует возрастающих узлов и сам отсекает края
    xp = np.asarray(angles, dtype=float)[::-1]
    fp = np.asarray(values, dtype=float)[::-1]
    return float(np.interp(angle, xp, fp))
