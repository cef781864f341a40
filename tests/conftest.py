"""
Pytest configuration and fixtures for the glazing layout engine.

Provides:
- Guide fixtures (straight run, U-shaped balcony between two walls)
- Edge configuration fixtures
- Manufacturing spec fixture
"""

from pathlib import Path
from typing import List

import pytest

from glazing_layout.config import DEFAULT_SPEC, ManufacturingSpec
from glazing_layout.model import EdgeConfig, EdgeStatus, Opening, LockSymbol, Panel, Point2D

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


# ============================================================================
# Spec Fixtures
# ============================================================================

@pytest.fixture
def spec() -> ManufacturingSpec:
    """Default manufacturing constants."""
    return DEFAULT_SPEC


# ============================================================================
# Guide Fixtures
# ============================================================================

@pytest.fixture
def straight_guide() -> List[Point2D]:
    """A single 3000 mm edge along the X axis."""
    return [Point2D(0.0, 0.0), Point2D(3000.0, 0.0)]


@pytest.fixture
def u_guide() -> List[Point2D]:
    """U-shaped balcony: 1000 mm wall, 3000 mm front, 1000 mm wall, 90° corners."""
    return [
        Point2D(0.0, 0.0),
        Point2D(0.0, 1000.0),
        Point2D(3000.0, 1000.0),
        Point2D(3000.0, 0.0),
    ]


@pytest.fixture
def u_edge_configs() -> List[EdgeConfig]:
    """Walls on both sides, empty glazing front."""
    return [
        EdgeConfig(status=EdgeStatus.WALL),
        EdgeConfig(status=EdgeStatus.GLAZING),
        EdgeConfig(status=EdgeStatus.WALL),
    ]


@pytest.fixture
def two_panels() -> List[Panel]:
    """Two 400 mm panels on a straight edge, lock on the last one."""
    return [
        Panel("1", 400.0, Opening.RIGHT, LockSymbol.NONE, 46.5, 2.0),
        Panel("2", 400.0, Opening.RIGHT, LockSymbol.SINGLE, 2.0, 46.5),
    ]
