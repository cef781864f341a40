"""
Автоматический раскрой кромки на стеклянные панели.

Алгоритм:
  1. смещения углов по модели смещений
  2. доступная длина = длина кромки - смещения углов
  3. число панелей = ceil(доступная / максимальная ширина)
  4. одна панель — привязка к стандартному ряду 430..700 (шаг 30)
  5. средняя ширина < 400 — «свободная ширина», равные панели
  6. иначе — перебор сочетаний двух соседних стандартных ширин

Панели строятся от меньших к большим (раскладка по умолчанию для
открывания вправо), затем замки назначаются по направлениям открывания.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from glazing_layout.config import DEFAULT_SPEC, ManufacturingSpec
from glazing_layout.calculations.offsets import calculate_offset
from glazing_layout.geometry.vectors import round_to
from glazing_layout.model import LockSymbol, Opening, Panel, coerce_panels

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def _js_round(value: float) -> float:
    return float(math.floor(value + 0.5))


def _corner_offsets(
    start_angle: float,
    end_angle: float,
    start_wall: bool,
    end_wall: bool,
    spec: ManufacturingSpec,
) -> Tuple[float, float]:
    left = calculate_offset(start_angle, start_wall, spec).offset
    right = calculate_offset(end_angle, end_wall, spec).offset
    return left, right


def snap_to_standard_size(width: float, spec: ManufacturingSpec = DEFAULT_SPEC) -> float:
    """Привязать ширину к ближайшему значению стандартного ряда.

    Ниже минимума ряда возвращается округлённое исходное значение
    (но не меньше минимальной длины панели).
    """
    cfg = spec.panels
    if width < cfg.min_standard_width:
        return max(cfg.min_panel_length, _js_round(width))
    # при равенстве min() берёт первый, т.е. меньшую ширину
    return min(cfg.standard_sizes, key=lambda size: abs(width - size))


def auto_assign_locks(panels: Sequence[Panel]) -> List[Panel]:
    """Назначить замки по направлениям открывания.

    Первая панель с открыванием «<» и последняя с «>» получают
    одинарный замок; двойные замки не понижаются, прочие сбрасываются.

    Returns:
        Новый список панелей.
    """
    result = [
        p if p.lock == LockSymbol.DOUBLE else p.with_changes(lock=LockSymbol.NONE)
        for p in coerce_panels(panels)
    ]

    first_left = next((i for i, p in enumerate(result) if p.opening == Opening.LEFT), None)
    last_right = next(
        (i for i in range(len(result) - 1, -1, -1) if result[i].opening == Opening.RIGHT),
        None,
    )

    for idx in (first_left, last_right):
        if idx is not None and result[idx].lock != LockSymbol.DOUBLE:
            result[idx] = result[idx].with_changes(lock=LockSymbol.SINGLE)
    return result


def _build_panels(
    total: int,
    large_size: float,
    small_size: float,
    num_small: int,
    left_offset: float,
    right_offset: float,
    spec: ManufacturingSpec,
) -> List[Panel]:
    """Построить панели: сначала num_small малых, затем большие."""
    cfg = spec.panels
    panels = []
    for i in range(total):
        width = small_size if i < num_small else large_size
        panels.append(Panel(
            name=str(i + 1),
            length=max(cfg.min_panel_length, width),
            opening=Opening.RIGHT,
            lock=LockSymbol.NONE,
            offset_left=round_to(left_offset) if i == 0 else cfg.middle_offset,
            offset_right=round_to(right_offset) if i == total - 1 else cfg.middle_offset,
        ))
    return auto_assign_locks(panels)


def _find_best_split(
    num_panels: int,
    base_size: float,
    smaller_size: float,
    available_for_glass: float,
    tolerance: float,
) -> Optional[Tuple[int, int]]:
    """Подобрать (число больших, число малых) панелей.

    Предпочтение — сочетание с отклонением >= -tolerance и минимальным
    |отклонением|; иначе — минимальное |отклонение| любого знака.

    Returns:
        (num_large, num_small) или None, если перебор пуст.
    """
    best: Optional[Tuple[int, int]] = None
    best_diff = math.inf
    best_valid = False

    for num_large in range(num_panels + 1):
        num_small = num_panels - num_large
        diff = num_large * base_size + num_small * smaller_size - available_for_glass
        valid = diff >= -tolerance
        abs_diff = abs(diff)

        if valid and (not best_valid or abs_diff < best_diff):
            best, best_diff, best_valid = (num_large, num_small), abs_diff, True
        elif not best_valid and abs_diff < best_diff:
            best, best_diff = (num_large, num_small), abs_diff

    return best


def _single_panel(width: float, left: float, right: float) -> List[Panel]:
    """Одна панель без автоназначения замков."""
    return [Panel(
        name="1",
        length=width,
        opening=Opening.RIGHT,
        lock=LockSymbol.NONE,
        offset_left=round_to(left),
        offset_right=round_to(right),
    )]


def _degenerate_panel(available: float, left: float, right: float, spec: ManufacturingSpec) -> List[Panel]:
    logger.debug("Edge too short for glazing, available=%.1f mm", available)
    return _single_panel(max(spec.panels.min_panel_length, _js_round(available)), left, right)


# ---------------------------------------------------------------------------
# Генераторы
# ---------------------------------------------------------------------------

def auto_generate_panels_for_edge(
    edge_length: float,
    start_angle: float,
    end_angle: float,
    start_wall: bool,
    end_wall: bool,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> List[Panel]:
    """Раскроить кромку на панели стандартных ширин.

    Args:
        edge_length: длина кромки (мм).
        start_angle: угол в начальной вершине (0 — нет соседа).
        end_angle: угол в конечной вершине.
        start_wall: начало примыкает к стене.
        end_wall: конец примыкает к стене.
        spec: производственные константы.

    Returns:
        Список панелей (не пустой).
    """
    cfg = spec.panels
    left, right = _corner_offsets(start_angle, end_angle, start_wall, end_wall, spec)

    available = edge_length - left - right
    if available < cfg.min_available_length:
        return _degenerate_panel(available, left, right, spec)

    num_panels = max(1, math.ceil(available / cfg.max_panel_width))
    between_offsets = (num_panels - 1) * cfg.middle_offset * 2
    available_for_glass = available - between_offsets
    avg_length = available_for_glass / num_panels

    if num_panels == 1:
        return _single_panel(snap_to_standard_size(avg_length, spec), left, right)

    if avg_length < cfg.free_width_threshold:
        width = _js_round(avg_length)
        return _build_panels(num_panels, width, width, 0, left, right, spec)

    base_size = next((s for s in cfg.standard_sizes if s >= avg_length), cfg.max_panel_width)
    smaller_size = max(cfg.min_standard_width, base_size - cfg.panel_step)

    split = _find_best_split(
        num_panels, base_size, smaller_size, available_for_glass, cfg.combo_tolerance,
    )
    if split is None:
        logger.debug("No panel split found, falling back to free width")
        width = _js_round(avg_length)
        return _build_panels(num_panels, width, width, 0, left, right, spec)

    num_large, num_small = split
    logger.debug(
        "Panel split: %d x %.0f + %d x %.0f for %.1f mm of glass",
        num_small, smaller_size, num_large, base_size, available_for_glass,
    )
    return _build_panels(num_panels, base_size, smaller_size, num_small, left, right, spec)


def even_distribute_panels_for_edge(
    edge_length: float,
    start_angle: float,
    end_angle: float,
    start_wall: bool,
    end_wall: bool,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> List[Panel]:
    """Раскроить кромку на равные панели свободной ширины («fritt glasmått»).

    Без стандартного ряда: каждая панель — равная доля длины под стекло,
    округлённая до 0.1 мм.
    """
    cfg = spec.panels
    left, right = _corner_offsets(start_angle, end_angle, start_wall, end_wall, spec)

    available = edge_length - left - right
    if available < cfg.min_available_length:
        return _degenerate_panel(available, left, right, spec)

    num_panels = max(1, math.ceil(available / cfg.max_panel_width))
    available_for_glass = available - (num_panels - 1) * cfg.middle_offset * 2
    width = round_to(available_for_glass / num_panels)
    return _build_panels(num_panels, width, width, 0, left, right, spec)


# ---------------------------------------------------------------------------
# Пересчёт зазоров существующих панелей
# ---------------------------------------------------------------------------

def _between_offset(panels: Sequence[Panel], a: int, b: int, spec: ManufacturingSpec) -> float:
    """Зазор на границе панелей a и b: у глухого стекла — увеличенный."""
    if panels[a].is_fixed or panels[b].is_fixed:
        return spec.panels.passruta_offset
    return spec.panels.middle_offset


def recalc_panel_offsets(
    panels: Sequence[Panel],
    start_angle: float,
    end_angle: float,
    start_wall: bool,
    end_wall: bool,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> List[Panel]:
    """Пересчитать зазоры панелей, не меняя их ширин.

    Returns:
        Новый список панелей с обновлёнными offset_left / offset_right.
    """
    items = coerce_panels(panels)
    if not items:
        return []

    left, right = _corner_offsets(start_angle, end_angle, start_wall, end_wall, spec)
    last = len(items) - 1

    return [
        p.with_changes(
            offset_left=round_to(left) if i == 0 else _between_offset(items, i - 1, i, spec),
            offset_right=round_to(right) if i == last else _between_offset(items, i, i + 1, spec),
        )
        for i, p in enumerate(items)
    ]
