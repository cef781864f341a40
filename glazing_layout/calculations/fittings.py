"""
Классификация фурнитуры панелей.

Для каждой панели рабочая запись (FittingDraft) проходит упорядоченный
список правил FITTING_RULES; каждое следующее правило может переопределить
результат предыдущего:

  1. edge_start_lock_rule   — левые углы первой панели по начальному углу
  2. edge_end_lock_rule     — правые углы последней панели по конечному углу
  3. fixed_glass_rule       — переход к глухому стеклу → переменная заглушка
  4. lock_symbol_rule       — замок панели по символу '|' / '||'
  5. unique_direction_rule  — единственная панель направления → D-замок

По умолчанию на всех внутренних границах — ответный замок (мама слева,
папа справа).
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from glazing_layout.config import DEFAULT_SPEC, FittingSpec, ManufacturingSpec
from glazing_layout.geometry.vectors import round_to
from glazing_layout.model import (
    LockSymbol,
    LockType,
    Opening,
    Panel,
    PanelFittingResult,
    coerce_panels,
)


@dataclass
class FittingDraft:
    """Рабочая запись фурнитуры одной панели (изменяется только правилами)."""
    top_left: Optional[LockType] = LockType.MEETING_LOCK_FEMALE
    bottom_left: Optional[LockType] = LockType.MEETING_LOCK_FEMALE
    top_right: Optional[LockType] = LockType.MEETING_LOCK_MALE
    bottom_right: Optional[LockType] = LockType.MEETING_LOCK_MALE
    top_lock: Optional[LockType] = None
    bottom_lock: Optional[LockType] = None

    def set_left(self, lock: LockType) -> None:
        self.top_left = self.bottom_left = lock

    def set_right(self, lock: LockType) -> None:
        self.top_right = self.bottom_right = lock


@dataclass(frozen=True)
class PanelContext:
    """Положение панели на кромке и геометрия концов кромки."""
    panels: Tuple[Panel, ...]
    index: int
    start_angle: float
    end_angle: float
    left_count: int
    right_count: int
    spec: FittingSpec

    @property
    def panel(self) -> Panel:
        return self.panels[self.index]

    @property
    def previous(self) -> Optional[Panel]:
        return self.panels[self.index - 1] if self.index > 0 else None

    @property
    def following(self) -> Optional[Panel]:
        return self.panels[self.index + 1] if self.index < len(self.panels) - 1 else None

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == len(self.panels) - 1


FittingRule = Callable[[PanelContext, FittingDraft], None]


def _is_square(angle: float, spec: FittingSpec) -> bool:
    return spec.square_lock_min_angle < abs(angle) < spec.square_lock_max_angle


def lock_at_edge_start(angle: float, spec: FittingSpec = DEFAULT_SPEC.fittings) -> LockType:
    """Замок в начале кромки: торцевой, 90° или переменная заглушка (мама)."""
    if angle == 0:
        return LockType.END_LOCK_FEMALE
    if _is_square(angle, spec):
        return LockType.SQUARE_LOCK_FEMALE
    return LockType.VARIABLE_END_CAP


def lock_at_edge_end(angle: float, spec: FittingSpec = DEFAULT_SPEC.fittings) -> LockType:
    """Замок в конце кромки (папа)."""
    if angle == 0:
        return LockType.END_LOCK_MALE
    if _is_square(angle, spec):
        return LockType.SQUARE_LOCK_MALE
    return LockType.VARIABLE_END_CAP


# ---------------------------------------------------------------------------
# Правила
# ---------------------------------------------------------------------------

def edge_start_lock_rule(ctx: PanelContext, draft: FittingDraft) -> None:
    if ctx.is_first:
        draft.set_left(lock_at_edge_start(ctx.start_angle, ctx.spec))


def edge_end_lock_rule(ctx: PanelContext, draft: FittingDraft) -> None:
    if ctx.is_last:
        draft.set_right(lock_at_edge_end(ctx.end_angle, ctx.spec))


def fixed_glass_rule(ctx: PanelContext, draft: FittingDraft) -> None:
    """Глухое стекло несовместимо с защёлкивающейся фурнитурой."""
    panel, prev, nxt = ctx.panel, ctx.previous, ctx.following
    if prev is not None and (prev.is_fixed or (panel.is_fixed and not prev.is_fixed)):
        draft.set_left(LockType.VARIABLE_END_CAP)
    if nxt is not None and (nxt.is_fixed or (panel.is_fixed and not nxt.is_fixed)):
        draft.set_right(LockType.VARIABLE_END_CAP)


def lock_symbol_rule(ctx: PanelContext, draft: FittingDraft) -> None:
    lock = ctx.panel.lock
    if lock == LockSymbol.DOUBLE:
        draft.top_lock, draft.bottom_lock = LockType.DOUBLE_OVERLOCK, LockType.TURN_LOCK
    elif lock == LockSymbol.SINGLE:
        draft.top_lock, draft.bottom_lock = LockType.OVERLOCK, LockType.TURN_LOCK


def unique_direction_rule(ctx: PanelContext, draft: FittingDraft) -> None:
    opening = ctx.panel.opening
    if opening == Opening.LEFT and ctx.left_count == 1:
        draft.top_lock, draft.bottom_lock = LockType.D_LEFT, LockType.D_TURN_LOCK
    elif opening == Opening.RIGHT and ctx.right_count == 1:
        draft.top_lock, draft.bottom_lock = LockType.D_RIGHT, LockType.D_TURN_LOCK


FITTING_RULES: Tuple[FittingRule, ...] = (
    edge_start_lock_rule,
    edge_end_lock_rule,
    fixed_glass_rule,
    lock_symbol_rule,
    unique_direction_rule,
)


# ---------------------------------------------------------------------------
# Расчёт
# ---------------------------------------------------------------------------

def hardware_width(lock: Optional[LockType], spec: FittingSpec = DEFAULT_SPEC.fittings) -> float:
    """Ширина фурнитуры (мм); неизвестная или отсутствующая — 0."""
    if lock is None:
        return 0.0
    return spec.lock_widths.get(lock.value, 0.0)


_OPENING_LABELS = {Opening.LEFT: "Vanster", Opening.RIGHT: "Hoger"}


def calculate_panel_fittings(
    panels: Sequence[Panel],
    start_angle: float,
    end_angle: float,
    frame_height: float,
    spec: ManufacturingSpec = DEFAULT_SPEC,
    rules: Sequence[FittingRule] = FITTING_RULES,
) -> List[PanelFittingResult]:
    """Подобрать фурнитуру и чистые размеры стекла для панелей кромки.

    Args:
        panels: панели кромки по порядку.
        start_angle: угол в начальной вершине кромки (градусы).
        end_angle: угол в конечной вершине.
        frame_height: высота рамы (мм).
        spec: производственные константы.
        rules: упорядоченный список правил.

    Returns:
        По одному PanelFittingResult на панель.
    """
    items = tuple(coerce_panels(panels))
    if not items:
        return []

    cfg = spec.fittings
    left_count = sum(1 for p in items if p.opening == Opening.LEFT)
    right_count = sum(1 for p in items if p.opening == Opening.RIGHT)

    results = []
    for i, panel in enumerate(items):
        ctx = PanelContext(items, i, start_angle, end_angle, left_count, right_count, cfg)
        draft = FittingDraft()
        for rule in rules:
            rule(ctx, draft)

        glass_width = (
            panel.length - hardware_width(draft.top_left, cfg) - hardware_width(draft.top_right, cfg)
        )
        results.append(PanelFittingResult(
            top_left=draft.top_left,
            top_right=draft.top_right,
            bottom_left=draft.bottom_left,
            bottom_right=draft.bottom_right,
            top_lock=draft.top_lock,
            bottom_lock=draft.bottom_lock,
            glass_width=round_to(glass_width),
            glass_height=round_to(frame_height - cfg.glass_height_offset),
            glass_module_height=round_to(frame_height - cfg.glass_module_height_offset),
            offset_left=panel.offset_left,
            offset_right=panel.offset_right,
            opening_label=_OPENING_LABELS.get(panel.opening),
        ))
    return results
