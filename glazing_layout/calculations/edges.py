"""
Сводный расчёт кромки направляющей.

compute_edge_data собирает для одной кромки углы, стыки со стенами,
смещения профилей, фурнитуру панелей, длину модуля, «спел» и длины реза.
Вспомогательные функции поддерживают согласованность списка конфигураций
кромок с направляющей; все они возвращают новые списки и не изменяют
аргументы.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from glazing_layout.config import DEFAULT_SPEC, ManufacturingSpec
from glazing_layout.calculations.cut_lengths import calculate_cut_lengths
from glazing_layout.calculations.fittings import calculate_panel_fittings
from glazing_layout.calculations.offsets import calculate_offset
from glazing_layout.calculations.panels import (
    auto_generate_panels_for_edge,
    even_distribute_panels_for_edge,
)
from glazing_layout.geometry.offset_chain import angle_between_segments
from glazing_layout.geometry.vectors import distance_2d, round_to
from glazing_layout.logging_config import timed
from glazing_layout.model import (
    ComputedEdgeData,
    CutLengths,
    EdgeConfig,
    EdgeStatus,
    Panel,
    PointLike,
    coerce_edge_configs,
    coerce_guide,
)

logger = logging.getLogger(__name__)

EdgeConfigLike = Union[EdgeConfig, Mapping[str, Any]]


def is_connected_to_wall(
    edge_configs: Sequence[EdgeConfigLike],
    seg_index: int,
    side: str,
) -> bool:
    """Примыкает ли кромка со стороны side ('start' / 'end') к стене.

    Крайние кромки направляющей со свободной стороны считаются
    не примыкающими.
    """
    configs = coerce_edge_configs(edge_configs)
    if side == "start":
        neighbour = seg_index - 1
    elif side == "end":
        neighbour = seg_index + 1
    else:
        raise ValueError(f"side must be 'start' or 'end', got {side!r}")

    if 0 <= neighbour < len(configs):
        return configs[neighbour].is_wall
    return False


def edge_angles(guide: Sequence[PointLike], seg_index: int) -> Tuple[float, float]:
    """Углы в начальной и конечной вершинах кромки (0 у свободного конца).

    Для индекса вне диапазона возвращается (0.0, 0.0).
    """
    pts = coerce_guide(guide)
    if seg_index < 0 or seg_index >= len(pts) - 1:
        return 0.0, 0.0
    start_angle = 0.0
    end_angle = 0.0
    if seg_index > 0:
        start_angle = angle_between_segments(pts[seg_index - 1], pts[seg_index], pts[seg_index + 1])
    if seg_index + 2 < len(pts):
        end_angle = angle_between_segments(pts[seg_index], pts[seg_index + 1], pts[seg_index + 2])
    return start_angle, end_angle


def _edge_length(pts: Sequence, seg_index: int) -> float:
    start, end = pts[seg_index], pts[seg_index + 1]
    return distance_2d(start.x, start.y, end.x, end.y)


def compute_edge_data(
    guide: Sequence[PointLike],
    edge_configs: Sequence[EdgeConfigLike],
    seg_index: int,
    frame_height: float,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> Optional[ComputedEdgeData]:
    """Рассчитать все данные кромки seg_index.

    Args:
        guide: вершины направляющей.
        edge_configs: конфигурации кромок (len(guide) - 1 шт.).
        seg_index: индекс кромки.
        frame_height: высота рамы (мм).
        spec: производственные константы.

    Returns:
        ComputedEdgeData с округлёнными до 0.1 значениями, или None
        для индекса вне диапазона.
    """
    pts = coerce_guide(guide)
    if seg_index < 0 or seg_index >= len(pts) - 1:
        return None
    configs = coerce_edge_configs(edge_configs)

    edge_length = _edge_length(pts, seg_index)
    start_angle, end_angle = edge_angles(pts, seg_index)
    start_wall = is_connected_to_wall(configs, seg_index, "start")
    end_wall = is_connected_to_wall(configs, seg_index, "end")

    left = calculate_offset(start_angle, start_wall, spec)
    right = calculate_offset(end_angle, end_wall, spec)

    edge = configs[seg_index] if seg_index < len(configs) else EdgeConfig()
    if edge.is_wall:
        panels: Tuple[Panel, ...] = ()
        fittings = []
    else:
        panels = edge.panels
        fittings = calculate_panel_fittings(panels, start_angle, end_angle, frame_height, spec)

    total_module_length = sum(p.footprint for p in panels)
    cut = calculate_cut_lengths(
        edge_length, left.profile_offset, right.profile_offset, start_angle, end_angle, spec,
    )

    return ComputedEdgeData(
        side_number=seg_index + 1,
        edge_length=round_to(edge_length),
        start_angle=round_to(start_angle),
        end_angle=round_to(end_angle),
        start_connected_to_wall=start_wall,
        end_connected_to_wall=end_wall,
        profile_offset_left=round_to(left.profile_offset),
        profile_offset_right=round_to(right.profile_offset),
        total_module_length=round_to(total_module_length),
        spel_guide=round_to(edge_length - total_module_length),
        cut_lengths=CutLengths(
            underskena=round_to(cut.underskena),
            overskena=round_to(cut.overskena),
            overhallare=round_to(cut.overhallare),
            coverprofile=round_to(cut.coverprofile),
        ),
        panel_fittings=fittings,
    )


@timed(operation="compute all edges")
def compute_all_edges(
    guide: Sequence[PointLike],
    edge_configs: Sequence[EdgeConfigLike],
    frame_height: float,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> List[ComputedEdgeData]:
    """Рассчитать данные всех кромок направляющей по порядку."""
    pts = coerce_guide(guide)
    configs = coerce_edge_configs(edge_configs)
    results = []
    for i in range(len(pts) - 1):
        data = compute_edge_data(pts, configs, i, frame_height, spec)
        if data is not None:
            results.append(data)
    return results


# ---------------------------------------------------------------------------
# Согласование конфигураций кромок
# ---------------------------------------------------------------------------

def sync_edge_configs(
    guide: Sequence[PointLike],
    edge_configs: Sequence[EdgeConfigLike],
) -> List[EdgeConfig]:
    """Привести число конфигураций к len(guide) - 1.

    Недостающие кромки дополняются пустым остеклением, лишние отбрасываются.
    """
    seg_count = max(len(guide) - 1, 0)
    configs = coerce_edge_configs(edge_configs)[:seg_count]
    configs.extend(EdgeConfig() for _ in range(seg_count - len(configs)))
    return configs


def set_edge_status(
    edge_configs: Sequence[EdgeConfigLike],
    seg_index: int,
    status: Union[EdgeStatus, str],
) -> List[EdgeConfig]:
    """Сменить классификацию кромки; стена теряет все панели."""
    configs = coerce_edge_configs(edge_configs)
    if not 0 <= seg_index < len(configs):
        return configs
    status = EdgeStatus(status)
    panels = () if status == EdgeStatus.WALL else configs[seg_index].panels
    configs[seg_index] = EdgeConfig(status=status, panels=panels)
    return configs


def generate_panels_for_edge(
    guide: Sequence[PointLike],
    edge_configs: Sequence[EdgeConfigLike],
    seg_index: int,
    free_glass_width: bool = False,
    spec: ManufacturingSpec = DEFAULT_SPEC,
) -> List[Panel]:
    """Сгенерировать панели для кромки по её геометрии и соседям-стенам.

    Args:
        free_glass_width: равные панели свободной ширины вместо
            стандартного ряда.

    Returns:
        Новые панели; пустой список для стены, индекса вне диапазона
        или слишком короткой кромки.
    """
    pts = coerce_guide(guide)
    if seg_index < 0 or seg_index >= len(pts) - 1:
        return []
    configs = coerce_edge_configs(edge_configs)
    if seg_index < len(configs) and configs[seg_index].is_wall:
        return []

    edge_length = _edge_length(pts, seg_index)
    if edge_length < spec.panels.min_available_length:
        logger.debug("Skipping panel generation for short edge %d (%.1f mm)", seg_index, edge_length)
        return []

    start_angle, end_angle = edge_angles(pts, seg_index)
    start_wall = is_connected_to_wall(configs, seg_index, "start")
    end_wall = is_connected_to_wall(configs, seg_index, "end")

    generator = even_distribute_panels_for_edge if free_glass_width else auto_generate_panels_for_edge
    return generator(edge_length, start_angle, end_angle, start_wall, end_wall, spec)
