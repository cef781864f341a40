"""
Производственные константы остекления.

Все «магические» числа производства собраны здесь как именованные таблицы
и неизменяемые dataclass-секции. Движок получает их явным аргументом
``spec`` (по умолчанию DEFAULT_SPEC), поэтому альтернативный набор
допусков подставляется без изменения глобального состояния.

Секции:
  - OffsetModelSpec — отступы от угла кромки (модель смещений)
  - PanelSizingSpec — раскрой кромки на панели, стандартный ряд ширин
  - CutLengthSpec   — длины реза алюминиевых профилей
  - FittingSpec     — ширины фурнитуры, высоты стекла
  - GuideSpec       — оверлей направляющей, привязка углов
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


# ---------------------------------------------------------------------------
# Модель смещений кромки
# ---------------------------------------------------------------------------

# Таблица интерполяции для стыка со стеной (углы по убыванию)
INTERPOLATION_ANGLES: Tuple[float, ...] = (
    145.0, 140.0, 135.0, 130.0, 125.0, 120.0, 115.0, 110.0, 105.0, 100.0, 95.0, 90.0,
)
WALL_OFFSETS: Tuple[float, ...] = (
    83.65, 78.39, 75.21, 73.2, 72.26, 72.17, 72.8, 74.08, 75.94, 78.38, 81.39, 85.0,
)
GLAZING_OFFSETS: Tuple[float, ...] = (
    42.6, 28.44, 21.36, 12.58, 4.58, 2.89, -10.02, -16.95, -23.81, -30.71, -37.74, -45.0,
)

DEFAULT_OFFSET_ANGLE_ZERO = 46.5    # мм, прямой участок / торец
DEFAULT_OFFSET_WALL_90 = 91.5       # мм, 50.5 + 45 - 4
DEFAULT_PROFILE_OFFSET_WALL_90 = -45.0
WALL_SQUARE_MIN_ANGLE = 88.0
WALL_SQUARE_MAX_ANGLE = 99.0
WALL_WIDE_MAX_ANGLE = 157.0
GLAZING_PROFILE_BASE = 50.5
COVER_DEPTH = 10.0
JOINT_GAP = 4.0
POSITIVE_ANGLE_FACTOR = 67.89
NEGATIVE_ANGLE_FACTOR = 57.11
OFFSET_ADDEND = 5.0                 # 2.0 + 3.0


# ---------------------------------------------------------------------------
# Раскрой панелей
# ---------------------------------------------------------------------------

MAX_PANEL_WIDTH = 700.0
MIN_STANDARD_WIDTH = 430.0
PANEL_STEP = 30.0
FREE_WIDTH_THRESHOLD = 400.0
COMBO_TOLERANCE = 5.0
MIDDLE_PANEL_OFFSET = 2.0           # мм на сторону между панелями
PASSRUTA_PANEL_OFFSET = 6.0         # мм на сторону у глухого стекла
MIN_AVAILABLE_LENGTH = 50.0
MIN_PANEL_LENGTH = 100.0


# ---------------------------------------------------------------------------
# Длины реза профилей
# ---------------------------------------------------------------------------

MITER_DISTANCE_OVERSKENA = 80.5
MITER_DISTANCE_OVERHALLARE = -37.1
MITER_DISTANCE_COVERPROFILE = -88.09
COVER_PROFILE_WALL_OFFSET = 54.0


# ---------------------------------------------------------------------------
# Фурнитура
# ---------------------------------------------------------------------------

# Компенсация ширины фурнитуры (мм) по каталожному названию
LOCK_WIDTHS: Mapping[str, float] = MappingProxyType({
    '90 graderslock hane': 11.5,
    '90 graderslock hona': 11.5,
    'Variabelt andlock': 7.9,
    'Slutlock hane': 25.0,
    'Slutlock hona': 25.0,
    'Moteslock hane': 5.0,
    'Moteslock hona': 5.0,
    'Overlas dubbel': 30.0,
    'Overlas': 30.0,
    'Undre las dubbel': 5.0,
    'Undre las': 5.0,
})

SQUARE_LOCK_MIN_ANGLE = 86.0
SQUARE_LOCK_MAX_ANGLE = 94.0
GLASS_HEIGHT_OFFSET = 210.3
GLASS_MODULE_HEIGHT_OFFSET = 170.3


# ---------------------------------------------------------------------------
# Направляющая
# ---------------------------------------------------------------------------

GUIDE_OFFSET_DISTANCE = -10.0
GUIDE_START_INSET = 20.0
GUIDE_END_INSET = 20.0
SNAP_THRESHOLD_DEG = 5.0
SNAP_ANGLES: Tuple[float, ...] = (0.0, 45.0, 90.0, 135.0, 180.0, 225.0, 270.0, 315.0)


# ---------------------------------------------------------------------------
# Секции спецификации
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OffsetModelSpec:
    """Параметры модели смещений угла кромки."""
    zero_angle_offset: float = DEFAULT_OFFSET_ANGLE_ZERO
    wall_square_offset: float = DEFAULT_OFFSET_WALL_90
    wall_square_profile_offset: float = DEFAULT_PROFILE_OFFSET_WALL_90
    wall_square_min_angle: float = WALL_SQUARE_MIN_ANGLE
    wall_square_max_angle: float = WALL_SQUARE_MAX_ANGLE
    wall_wide_max_angle: float = WALL_WIDE_MAX_ANGLE
    interpolation_angles: Tuple[float, ...] = INTERPOLATION_ANGLES
    wall_offsets: Tuple[float, ...] = WALL_OFFSETS
    glazing_offsets: Tuple[float, ...] = GLAZING_OFFSETS
    glazing_profile_base: float = GLAZING_PROFILE_BASE
    cover_depth: float = COVER_DEPTH
    joint_gap: float = JOINT_GAP
    positive_angle_factor: float = POSITIVE_ANGLE_FACTOR
    negative_angle_factor: float = NEGATIVE_ANGLE_FACTOR
    offset_addend: float = OFFSET_ADDEND


@dataclass(frozen=True)
class PanelSizingSpec:
    """Параметры раскроя кромки на панели."""
    max_panel_width: float = MAX_PANEL_WIDTH
    min_standard_width: float = MIN_STANDARD_WIDTH
    panel_step: float = PANEL_STEP
    free_width_threshold: float = FREE_WIDTH_THRESHOLD
    combo_tolerance: float = COMBO_TOLERANCE
    middle_offset: float = MIDDLE_PANEL_OFFSET
    passruta_offset: float = PASSRUTA_PANEL_OFFSET
    min_available_length: float = MIN_AVAILABLE_LENGTH
    min_panel_length: float = MIN_PANEL_LENGTH

    @property
    def standard_sizes(self) -> Tuple[float, ...]:
        """Стандартный ряд ширин: min_standard_width..max_panel_width с шагом panel_step."""
        count = int(round((self.max_panel_width - self.min_standard_width) / self.panel_step))
        return tuple(self.min_standard_width + i * self.panel_step for i in range(count + 1))


@dataclass(frozen=True)
class CutLengthSpec:
    """Расстояния торцевой подрезки профилей (мм)."""
    overskena: float = MITER_DISTANCE_OVERSKENA
    overhallare: float = MITER_DISTANCE_OVERHALLARE
    coverprofile: float = MITER_DISTANCE_COVERPROFILE
    cover_wall_bonus: float = COVER_PROFILE_WALL_OFFSET


@dataclass(frozen=True)
class FittingSpec:
    """Ширины фурнитуры и вычеты высоты стекла."""
    lock_widths: Mapping[str, float] = field(default_factory=lambda: LOCK_WIDTHS)
    square_lock_min_angle: float = SQUARE_LOCK_MIN_ANGLE
    square_lock_max_angle: float = SQUARE_LOCK_MAX_ANGLE
    glass_height_offset: float = GLASS_HEIGHT_OFFSET
    glass_module_height_offset: float = GLASS_MODULE_HEIGHT_OFFSET


@dataclass(frozen=True)
class GuideSpec:
    """Оверлей направляющей и привязка направлений."""
    overlay_offset: float = GUIDE_OFFSET_DISTANCE
    start_inset: float = GUIDE_START_INSET
    end_inset: float = GUIDE_END_INSET
    snap_threshold_deg: float = SNAP_THRESHOLD_DEG
    snap_angles: Tuple[float, ...] = SNAP_ANGLES


@dataclass(frozen=True)
class ManufacturingSpec:
    """Полный набор производственных констант движка."""
    offsets: OffsetModelSpec = field(default_factory=OffsetModelSpec)
    panels: PanelSizingSpec = field(default_factory=PanelSizingSpec)
    cut_lengths: CutLengthSpec = field(default_factory=CutLengthSpec)
    fittings: FittingSpec = field(default_factory=FittingSpec)
    guide: GuideSpec = field(default_factory=GuideSpec)


DEFAULT_SPEC = ManufacturingSpec()
