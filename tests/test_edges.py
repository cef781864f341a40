"""
Unit tests for glazing_layout.calculations.edges module.

Tests:
- Wall adjacency
- Edge angles
- Aggregated edge data
- Edge config helpers (sync, status, per-edge panel generation)
"""

import logging
from io import StringIO

import pytest

from glazing_layout.calculations.edges import (
    compute_all_edges,
    compute_edge_data,
    edge_angles,
    generate_panels_for_edge,
    is_connected_to_wall,
    set_edge_status,
    sync_edge_configs,
)
from glazing_layout.model import EdgeConfig, EdgeStatus, LockType, Opening, LockSymbol, Panel


class TestIsConnectedToWall:
    """Tests for is_connected_to_wall function."""

    def test_front_between_walls(self, u_edge_configs):
        """Test the front edge touches walls on both sides."""
        assert is_connected_to_wall(u_edge_configs, 1, "start")
        assert is_connected_to_wall(u_edge_configs, 1, "end")

    def test_terminal_sides(self, u_edge_configs):
        """Test the free ends of the guide are never wall-connected."""
        assert not is_connected_to_wall(u_edge_configs, 0, "start")
        assert not is_connected_to_wall(u_edge_configs, 2, "end")

    def test_glazing_neighbour(self, u_edge_configs):
        """Test a glazing neighbour is not a wall."""
        assert not is_connected_to_wall(u_edge_configs, 0, "end")

    def test_invalid_side(self, u_edge_configs):
        """Test an unknown side name raises."""
        with pytest.raises(ValueError):
            is_connected_to_wall(u_edge_configs, 1, "middle")


class TestEdgeAngles:
    """Tests for edge_angles function."""

    def test_terminal_edges(self, u_guide):
        """Test terminal ends report angle 0."""
        assert edge_angles(u_guide, 0) == pytest.approx((0.0, 90.0))
        assert edge_angles(u_guide, 2) == pytest.approx((90.0, 0.0))

    def test_middle_edge(self, u_guide):
        """Test both ends of the front edge are 90 degrees."""
        assert edge_angles(u_guide, 1) == pytest.approx((90.0, 90.0))

    def test_single_edge(self, straight_guide):
        """Test a one-edge guide has no corners."""
        assert edge_angles(straight_guide, 0) == (0.0, 0.0)

    @pytest.mark.parametrize("seg_index", [-1, 2, 5])
    def test_out_of_range(self, seg_index):
        """Test invalid indices give (0, 0) instead of raising or wrapping."""
        guide = [(0, 0), (1000, 0), (1000, 1000)]
        assert edge_angles(guide, seg_index) == (0.0, 0.0)


class TestComputeEdgeData:
    """Tests for compute_edge_data function."""

    def test_out_of_range(self, u_guide, u_edge_configs):
        """Test invalid index gives None."""
        assert compute_edge_data(u_guide, u_edge_configs, 3, 1000) is None
        assert compute_edge_data(u_guide, u_edge_configs, -1, 1000) is None

    def test_front_edge_between_walls(self, u_guide, u_edge_configs):
        """Test generated front edge: offsets, spel, cut lengths and fittings."""
        configs = list(u_edge_configs)
        configs[1] = EdgeConfig(panels=tuple(generate_panels_for_edge(u_guide, configs, 1)))

        data = compute_edge_data(u_guide, configs, 1, 1000)

        assert data.side_number == 2
        assert data.edge_length == 3000.0
        assert data.start_angle == 90.0
        assert data.end_angle == 90.0
        assert data.start_connected_to_wall
        assert data.end_connected_to_wall
        assert data.profile_offset_left == -45.0
        assert data.profile_offset_right == -45.0
        assert data.total_module_length == 3009.0
        assert data.spel_guide == -9.0
        assert data.cut_lengths.underskena == 2910.0
        assert data.cut_lengths.overskena == 3071.0
        assert data.cut_lengths.overhallare == 2835.8
        assert data.cut_lengths.coverprofile == 2733.8

        assert len(data.panel_fittings) == 5
        assert data.panel_fittings[0].top_left == LockType.SQUARE_LOCK_FEMALE
        assert data.panel_fittings[0].glass_width == 533.5
        assert data.panel_fittings[-1].top_right == LockType.SQUARE_LOCK_MALE
        assert data.panel_fittings[-1].top_lock == LockType.OVERLOCK

    def test_wall_edge(self, u_guide, u_edge_configs):
        """Test a wall edge: no panels, free start, glazing corner at the end."""
        data = compute_edge_data(u_guide, u_edge_configs, 0, 1000)

        assert data.panel_fittings == []
        assert data.total_module_length == 0.0
        assert data.spel_guide == 1000.0
        assert not data.start_connected_to_wall
        assert not data.end_connected_to_wall
        assert data.cut_lengths.underskena == 1000.0
        assert data.cut_lengths.overskena == 1080.5
        assert data.cut_lengths.coverprofile == 965.9

    def test_wall_edge_panels_ignored(self, straight_guide):
        """Test panels left on a wall edge do not count."""
        configs = [EdgeConfig(EdgeStatus.WALL, (Panel("1", 500),))]
        data = compute_edge_data(straight_guide, configs, 0, 1000)

        assert data.panel_fittings == []
        assert data.total_module_length == 0.0

    def test_missing_config_is_empty_glazing(self, straight_guide):
        """Test a missing edge config behaves like an empty glazing edge."""
        data = compute_edge_data(straight_guide, [], 0, 1000)

        assert data.panel_fittings == []
        assert data.spel_guide == 3000.0

    def test_null_panels_in_json(self):
        """Test a persisted config with "panels": null is an empty edge."""
        configs = [{"wallOrGlazingStatus": "glazing", "panels": None}]
        data = compute_edge_data([(0, 0), (1000, 0)], configs, 0, 1000)

        assert data.panel_fittings == []
        assert data.spel_guide == 1000.0

    def test_plain_json_input(self):
        """Test plain dict / list input as persisted by the host."""
        guide = [{"x": 0, "y": 0}, {"x": 1000, "y": 0}]
        configs = [{
            "wallOrGlazingStatus": "glazing",
            "panels": [
                {"name": "1", "length": 451.5, "opening": ">", "lock": "-", "offsetLeft": 46.5, "offsetRight": 2},
                {"name": "2", "length": 451.5, "opening": ">", "lock": "|", "offsetLeft": 2, "offsetRight": 46.5},
            ],
        }]
        data = compute_edge_data(guide, configs, 0, 1000)

        assert data.total_module_length == 1000.0
        assert data.spel_guide == 0.0
        assert data.to_dict()["panelFittings"][1]["topLock"] == "Overlas"


class TestComputeAllEdges:
    """Tests for compute_all_edges function."""

    def test_one_record_per_edge(self, u_guide, u_edge_configs):
        """Test results are in edge order."""
        results = compute_all_edges(u_guide, u_edge_configs, 1000)
        assert [r.side_number for r in results] == [1, 2, 3]

    def test_timing_logged(self, u_guide, u_edge_configs):
        """Test the recomputation is timed at DEBUG level."""
        logger = logging.getLogger("glazing_layout.calculations.edges")
        old_level = logger.level
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setLevel(logging.DEBUG)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        try:
            compute_all_edges(u_guide, u_edge_configs, 1000)
        finally:
            logger.removeHandler(handler)
            logger.setLevel(old_level)

        output = stream.getvalue()
        assert "Completed: compute all edges" in output

    def test_short_guide(self):
        """Test a guide with one point has no edges."""
        assert compute_all_edges([(0, 0)], [], 1000) == []


class TestSyncEdgeConfigs:
    """Tests for sync_edge_configs function."""

    def test_pads_with_glazing(self, u_guide):
        """Test missing configs are added as empty glazing."""
        result = sync_edge_configs(u_guide, [EdgeConfig(EdgeStatus.WALL)])

        assert len(result) == 3
        assert result[0].is_wall
        assert result[1] == EdgeConfig()
        assert result[2] == EdgeConfig()

    def test_truncates(self, straight_guide, u_edge_configs):
        """Test extra configs are dropped."""
        result = sync_edge_configs(straight_guide, u_edge_configs)
        assert result == [u_edge_configs[0]]


class TestSetEdgeStatus:
    """Tests for set_edge_status function."""

    def test_wall_clears_panels(self):
        """Test switching to wall removes panels."""
        configs = [EdgeConfig(panels=(Panel("1", 500),))]
        result = set_edge_status(configs, 0, "wall")

        assert result[0].is_wall
        assert result[0].panels == ()
        assert configs[0].panels  # original untouched

    def test_glazing_keeps_panels(self):
        """Test switching to glazing keeps existing panels."""
        configs = [EdgeConfig(panels=(Panel("1", 500),))]
        result = set_edge_status(configs, 0, EdgeStatus.GLAZING)
        assert len(result[0].panels) == 1

    def test_out_of_range(self, u_edge_configs):
        """Test invalid index returns an unchanged copy."""
        assert set_edge_status(u_edge_configs, 7, "wall") == u_edge_configs


class TestGeneratePanelsForEdge:
    """Tests for generate_panels_for_edge function."""

    def test_front_edge(self, u_guide, u_edge_configs):
        """Test panels use the wall joints of the neighbours."""
        panels = generate_panels_for_edge(u_guide, u_edge_configs, 1)

        assert [p.length for p in panels] == [550, 550, 550, 580, 580]
        assert panels[0].offset_left == 91.5
        assert panels[-1].lock == LockSymbol.SINGLE

    def test_free_glass_width(self, u_guide, u_edge_configs):
        """Test the even distribution mode."""
        panels = generate_panels_for_edge(u_guide, u_edge_configs, 1, free_glass_width=True)
        assert [p.length for p in panels] == [560.2] * 5

    def test_wall_edge(self, u_guide, u_edge_configs):
        """Test wall edges get no panels."""
        assert generate_panels_for_edge(u_guide, u_edge_configs, 0) == []

    def test_short_edge(self):
        """Test edges under 50 mm get no panels."""
        assert generate_panels_for_edge([(0, 0), (30, 0)], [EdgeConfig()], 0) == []

    def test_out_of_range(self, u_guide, u_edge_configs):
        """Test invalid index gives no panels."""
        assert generate_panels_for_edge(u_guide, u_edge_configs, 5) == []

    def test_all_openings_right(self, straight_guide):
        """Test generated panels open right."""
        panels = generate_panels_for_edge(straight_guide, [EdgeConfig()], 0)
        assert all(p.opening == Opening.RIGHT for p in panels)
