"""
Модель данных движка остекления.

Входные структуры (владеет хост): Point2D, Panel, EdgeConfig.
Выходные структуры (вычисляются заново при каждом запросе):
OffsetResult, CutLengths, PanelFittingResult, ComputedEdgeData.

Все записи сериализуются в JSON-совместимые словари (to_dict) с ключами
хоста в camelCase. Методы coerce принимают как объекты модели, так и их
«сырые» JSON-формы, поэтому данные после JSON-round-trip не требуют
отдельной регидратации.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np


# ---------------------------------------------------------------------------
# Перечисления
# ---------------------------------------------------------------------------

class Opening(str, Enum):
    """Направление открывания панели."""
    RIGHT = ">"
    LEFT = "<"
    FIXED = "X"


class LockSymbol(str, Enum):
    """Символ замка панели: нет / одинарный / двойной."""
    NONE = "-"
    SINGLE = "|"
    DOUBLE = "||"

    @classmethod
    def parse(cls, value: Union[str, 'LockSymbol', None]) -> 'LockSymbol':
        """Разобрать символ замка; пустая строка старых сохранений → NONE."""
        if value is None or value == "":
            return cls.NONE
        return cls(value)


class EdgeStatus(str, Enum):
    """Классификация кромки."""
    WALL = "wall"
    GLAZING = "glazing"


class LockType(str, Enum):
    """Каталог фурнитуры (значения — торговые названия производителя)."""
    MEETING_LOCK_FEMALE = "Moteslock hona"
    MEETING_LOCK_MALE = "Moteslock hane"
    END_LOCK_FEMALE = "Slutlock hona"
    END_LOCK_MALE = "Slutlock hane"
    SQUARE_LOCK_FEMALE = "90 graderslock hona"
    SQUARE_LOCK_MALE = "90 graderslock hane"
    VARIABLE_END_CAP = "Variabelt andlock"
    OVERLOCK = "Overlas"
    DOUBLE_OVERLOCK = "Overlas dubbel"
    LOWER_LOCK = "Undre las"
    DOUBLE_LOWER_LOCK = "Undre las dubbel"
    TURN_LOCK = "Vridlas"
    D_LEFT = "D-Vanster"
    D_RIGHT = "D-Hoger"
    D_TURN_LOCK = "D-Vridlas"


# ---------------------------------------------------------------------------
# Входные структуры
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Point2D:
    """Точка плана в миллиметрах."""
    x: float
    y: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'Point2D':
        return cls(float(arr[0]), float(arr[1]))

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def coerce(cls, value: 'PointLike') -> 'Point2D':
        """Привести Point2D, словарь {x, y} или пару (x, y) к Point2D."""
        if isinstance(value, Point2D):
            return value
        if isinstance(value, Mapping):
            return cls(float(value["x"]), float(value["y"]))
        x, y = value
        return cls(float(x), float(y))


PointLike = Union[Point2D, Mapping[str, float], Sequence[float]]


def coerce_guide(guide: Sequence[PointLike]) -> List[Point2D]:
    """Привести последовательность вершин направляющей к списку Point2D."""
    return [Point2D.coerce(p) for p in guide]


@dataclass(frozen=True)
class Panel:
    """Одна стеклянная панель на кромке.

    Attributes:
        name: порядковое имя ("1", "2", ...).
        length: ширина панели (мм).
        opening: направление открывания.
        lock: символ замка.
        offset_left: зазор слева (мм).
        offset_right: зазор справа (мм).
    """
    name: str
    length: float
    opening: Opening = Opening.RIGHT
    lock: LockSymbol = LockSymbol.NONE
    offset_left: float = 0.0
    offset_right: float = 0.0

    @property
    def footprint(self) -> float:
        """Длина модуля панели вместе с зазорами."""
        return self.length + self.offset_left + self.offset_right

    @property
    def is_fixed(self) -> bool:
        return self.opening == Opening.FIXED

    def with_changes(self, **changes: Any) -> 'Panel':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "length": self.length,
            "opening": self.opening.value,
            "lock": self.lock.value,
            "offsetLeft": self.offset_left,
            "offsetRight": self.offset_right,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Panel':
        return cls(
            name=str(data.get("name", "")),
            length=float(data["length"]),
            opening=Opening(data.get("opening", Opening.RIGHT.value)),
            lock=LockSymbol.parse(data.get("lock")),
            offset_left=float(data.get("offsetLeft", 0.0)),
            offset_right=float(data.get("offsetRight", 0.0)),
        )

    @classmethod
    def coerce(cls, value: Union['Panel', Mapping[str, Any]]) -> 'Panel':
        if isinstance(value, Panel):
            return value
        return cls.from_dict(value)


def coerce_panels(panels: Sequence[Union[Panel, Mapping[str, Any]]]) -> List[Panel]:
    return [Panel.coerce(p) for p in panels]


@dataclass(frozen=True)
class EdgeConfig:
    """Сохраняемая конфигурация одной кромки."""
    status: EdgeStatus = EdgeStatus.GLAZING
    panels: Tuple[Panel, ...] = ()

    @property
    def is_wall(self) -> bool:
        return self.status == EdgeStatus.WALL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wallOrGlazingStatus": self.status.value,
            "panels": [p.to_dict() for p in self.panels],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'EdgeConfig':
        return cls(
            status=EdgeStatus(data.get("wallOrGlazingStatus", EdgeStatus.GLAZING.value)),
            panels=tuple(coerce_panels(data.get("panels") or ())),
        )

    @classmethod
    def coerce(cls, value: Union['EdgeConfig', Mapping[str, Any]]) -> 'EdgeConfig':
        if isinstance(value, EdgeConfig):
            return value
        return cls.from_dict(value)


def coerce_edge_configs(
    edge_configs: Sequence[Union[EdgeConfig, Mapping[str, Any]]],
) -> List[EdgeConfig]:
    return [EdgeConfig.coerce(e) for e in edge_configs]


# ---------------------------------------------------------------------------
# Выходные структуры
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OffsetResult:
    """Смещение на конце кромки (мм) и смещение профиля."""
    offset: float
    profile_offset: float


@dataclass(frozen=True)
class CutLengths:
    """Длины реза четырёх профилей, ограничивающих блок остекления."""
    underskena: float
    overskena: float
    overhallare: float
    coverprofile: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "underskena": self.underskena,
            "overskena": self.overskena,
            "overhallare": self.overhallare,
            "coverprofile": self.coverprofile,
        }


def _lock_value(lock: Optional[LockType]) -> Optional[str]:
    return lock.value if lock is not None else None


@dataclass(frozen=True)
class PanelFittingResult:
    """Фурнитура и чистые размеры стекла одной панели."""
    top_left: Optional[LockType]
    top_right: Optional[LockType]
    bottom_left: Optional[LockType]
    bottom_right: Optional[LockType]
    top_lock: Optional[LockType]
    bottom_lock: Optional[LockType]
    glass_width: float
    glass_height: float
    glass_module_height: float
    offset_left: float
    offset_right: float
    opening_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topLeft": _lock_value(self.top_left),
            "topRight": _lock_value(self.top_right),
            "bottomLeft": _lock_value(self.bottom_left),
            "bottomRight": _lock_value(self.bottom_right),
            "topLock": _lock_value(self.top_lock),
            "bottomLock": _lock_value(self.bottom_lock),
            "glassWidth": self.glass_width,
            "glassHeight": self.glass_height,
            "glassModuleHeight": self.glass_module_height,
            "offsetLeft": self.offset_left,
            "offsetRight": self.offset_right,
            "openingLabel": self.opening_label,
        }


@dataclass(frozen=True)
class ComputedEdgeData:
    """Агрегированный результат расчёта одной кромки."""
    side_number: int
    edge_length: float
    start_angle: float
    end_angle: float
    start_connected_to_wall: bool
    end_connected_to_wall: bool
    profile_offset_left: float
    profile_offset_right: float
    total_module_length: float
    spel_guide: float
    cut_lengths: CutLengths
    panel_fittings: List[PanelFittingResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sideNumber": self.side_number,
            "edgeLength": self.edge_length,
            "startAngle": self.start_angle,
            "endAngle": self.end_angle,
            "startConnectedToWall": self.start_connected_to_wall,
            "endConnectedToWall": self.end_connected_to_wall,
            "profileOffsetLeft": self.profile_offset_left,
            "profileOffsetRight": self.profile_offset_right,
            "totalModuleLength": self.total_module_length,
            "spelGuide": self.spel_guide,
            "cutLengths": self.cut_lengths.to_dict(),
            "panelFittings": [f.to_dict() for f in self.panel_fittings],
        }
