"""
glazing_layout — расчёт раскладки балконного остекления по направляющей.

Из ломаной периметра и классификации кромок (стена / остекление)
вычисляет смещения углов, раскрой панелей, фурнитуру и длины реза профилей.
"""

from glazing_layout.logging_config import (
    setup_logging,
    get_logger,
    configure_default_logging,
    log_timing,
    timed,
)
from glazing_layout.config import DEFAULT_SPEC, ManufacturingSpec
from glazing_layout.model import (
    ComputedEdgeData,
    EdgeConfig,
    EdgeStatus,
    LockSymbol,
    LockType,
    Opening,
    Panel,
    PanelFittingResult,
    Point2D,
)
from glazing_layout.calculations import (
    auto_generate_panels_for_edge,
    calculate_panel_fittings,
    compute_all_edges,
    compute_edge_data,
    even_distribute_panels_for_edge,
    recalc_panel_offsets,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "configure_default_logging",
    "log_timing",
    "timed",
    "DEFAULT_SPEC",
    "ManufacturingSpec",
    "ComputedEdgeData",
    "EdgeConfig",
    "EdgeStatus",
    "LockSymbol",
    "LockType",
    "Opening",
    "Panel",
    "PanelFittingResult",
    "Point2D",
    "auto_generate_panels_for_edge",
    "calculate_panel_fittings",
    "compute_all_edges",
    "compute_edge_data",
    "even_distribute_panels_for_edge",
    "recalc_panel_offsets",
]
