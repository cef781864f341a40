"""
Layout input validation.

The engine is defined only over structurally valid input and never raises
for it. This module lets the host check guide / edge-config data before
calling the engine:
- Guide length (at least two points)
- Edge config count matches the number of guide edges
- Degenerate (zero-length) edges
- Wall edges carrying panels
- Non-positive panel lengths and negative offsets
- Negative frame height

Problems are reported, not raised; warnings don't block calculation.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Union

from glazing_layout.model import EdgeConfig, PointLike, coerce_edge_configs, coerce_guide

logger = logging.getLogger(__name__)

DEGENERATE_EDGE_LENGTH = 1e-6


class ValidationSeverity(Enum):
    """Severity level of validation issues."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationIssue:
    """A single problem found in the layout input."""
    code: str
    severity: ValidationSeverity
    message: str
    count: int = 1
    details: List[int] = field(default_factory=list)  # edge indices

    def __str__(self) -> str:
        if self.count > 1:
            return f"[{self.severity.value.upper()}] {self.code}: {self.message} ({self.count} occurrences)"
        return f"[{self.severity.value.upper()}] {self.code}: {self.message}"


@dataclass
class ValidationReport:
    """Complete validation report for one guide + edge configuration."""
    n_points: int
    n_edges: int
    n_edge_configs: int
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Layout Validation Report",
            "=" * 40,
            f"Guide points: {self.n_points}",
            f"Edges: {self.n_edges}",
            f"Edge configs: {self.n_edge_configs}",
        ]
        if self.issues:
            lines.append("")
            lines.append("Issues:")
            for issue in self.issues:
                lines.append(f"  - {issue}")
        lines.append("")
        lines.append(f"Overall: {'VALID' if self.is_valid else 'INVALID'}")
        return "\n".join(lines)


def _collect(
    issues: List[ValidationIssue],
    indices: List[int],
    code: str,
    severity: ValidationSeverity,
    message: str,
) -> None:
    if indices:
        issues.append(ValidationIssue(code, severity, message, len(indices), indices))


def validate_layout_input(
    guide: Sequence[PointLike],
    edge_configs: Sequence[Union[EdgeConfig, Mapping[str, Any]]],
    frame_height: Optional[float] = None,
) -> ValidationReport:
    """Check guide and edge configuration for structural problems.

    Args:
        guide: Guide vertices
        edge_configs: Per-edge configuration
        frame_height: Optional frame height (mm) to check as well

    Returns:
        ValidationReport with all issues found
    """
    pts = coerce_guide(guide)
    configs = coerce_edge_configs(edge_configs)
    n_edges = max(len(pts) - 1, 0)
    report = ValidationReport(n_points=len(pts), n_edges=n_edges, n_edge_configs=len(configs))
    issues = report.issues

    if len(pts) < 2:
        issues.append(ValidationIssue(
            "GUIDE_TOO_SHORT", ValidationSeverity.ERROR,
            f"Guide needs at least 2 points, got {len(pts)}",
        ))

    if len(configs) != n_edges:
        issues.append(ValidationIssue(
            "EDGE_COUNT_MISMATCH", ValidationSeverity.ERROR,
            f"Expected {n_edges} edge configs, got {len(configs)}",
        ))

    non_finite = [i for i, p in enumerate(pts) if not (math.isfinite(p.x) and math.isfinite(p.y))]
    _collect(issues, non_finite, "NON_FINITE_POINT", ValidationSeverity.ERROR,
             "Guide point has non-finite coordinates")

    degenerate = [
        i for i in range(n_edges)
        if math.hypot(pts[i + 1].x - pts[i].x, pts[i + 1].y - pts[i].y) < DEGENERATE_EDGE_LENGTH
    ]
    _collect(issues, degenerate, "DEGENERATE_EDGE", ValidationSeverity.WARNING,
             "Edge has zero length")

    wall_with_panels = [i for i, e in enumerate(configs) if e.is_wall and e.panels]
    _collect(issues, wall_with_panels, "WALL_EDGE_HAS_PANELS", ValidationSeverity.WARNING,
             "Wall edge carries panels; they are ignored")

    bad_length = [i for i, e in enumerate(configs) if any(p.length <= 0 for p in e.panels)]
    _collect(issues, bad_length, "NON_POSITIVE_PANEL_LENGTH", ValidationSeverity.ERROR,
             "Panel length must be positive")

    bad_offset = [
        i for i, e in enumerate(configs)
        if any(p.offset_left < 0 or p.offset_right < 0 for p in e.panels)
    ]
    _collect(issues, bad_offset, "NEGATIVE_PANEL_OFFSET", ValidationSeverity.WARNING,
             "Panel offset is negative")

    empty_glazing = [i for i, e in enumerate(configs) if not e.is_wall and not e.panels]
    _collect(issues, empty_glazing, "GLAZING_EDGE_WITHOUT_PANELS", ValidationSeverity.INFO,
             "Glazing edge has no panels yet")

    if frame_height is not None and frame_height < 0:
        issues.append(ValidationIssue(
            "NEGATIVE_FRAME_HEIGHT", ValidationSeverity.ERROR,
            f"Frame height must not be negative, got {frame_height}",
        ))

    if issues:
        logger.debug("Layout validation found %d issue(s)", len(issues), extra={"codes": report.codes()})
    return report
