"""
Производственные расчёты кромки.

Модули:
  - offsets:     модель смещений угла кромки
  - panels:      раскрой кромки на панели, пересчёт зазоров
  - fittings:    классификация фурнитуры панелей
  - cut_lengths: длины реза профилей
  - edges:       сводный расчёт кромки
  - layout:      размещение панелей вдоль кромки
"""

from glazing_layout.calculations.cut_lengths import calculate_cut_lengths, offset_due_to_miter
from glazing_layout.calculations.edges import (
    compute_all_edges,
    compute_edge_data,
    generate_panels_for_edge,
    is_connected_to_wall,
)
from glazing_layout.calculations.fittings import FITTING_RULES, calculate_panel_fittings
from glazing_layout.calculations.offsets import calculate_offset
from glazing_layout.calculations.panels import (
    auto_generate_panels_for_edge,
    even_distribute_panels_for_edge,
    recalc_panel_offsets,
)

__all__ = [
    'calculate_offset',
    'auto_generate_panels_for_edge',
    'even_distribute_panels_for_edge',
    'recalc_panel_offsets',
    'calculate_panel_fittings',
    'FITTING_RULES',
    'calculate_cut_lengths',
    'offset_due_to_miter',
    'compute_edge_data',
    'compute_all_edges',
    'generate_panels_for_edge',
    'is_connected_to_wall',
]
