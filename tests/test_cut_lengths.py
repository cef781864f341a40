"""
Unit tests for glazing_layout.calculations.cut_lengths module.
"""

import math

import pytest

from glazing_layout.calculations.cut_lengths import calculate_cut_lengths, offset_due_to_miter


class TestOffsetDueToMiter:
    """Tests for offset_due_to_miter function."""

    def test_zero_angle(self):
        """Test square cut has no miter offset."""
        assert offset_due_to_miter(80.5, 0) == 0.0

    def test_right_angle(self):
        """Test 90 degree miter equals the distance."""
        assert offset_due_to_miter(80.5, 90) == pytest.approx(80.5)

    def test_obtuse_angle(self):
        """Test 135 degree miter."""
        assert offset_due_to_miter(-37.1, 135) == pytest.approx(-37.1 * math.tan(math.radians(22.5)))


class TestCalculateCutLengths:
    """Tests for calculate_cut_lengths function."""

    def test_free_ends(self):
        """Test straight edge with free ends gets the cover profile wall bonus twice."""
        cut = calculate_cut_lengths(1000, 0, 0, 0, 0)

        assert cut.underskena == pytest.approx(1000)
        assert cut.overskena == pytest.approx(1000)
        assert cut.overhallare == pytest.approx(1000)
        assert cut.coverprofile == pytest.approx(1108)

    def test_square_wall_joints(self):
        """Test 3000 mm edge between two 90 degree wall joints."""
        cut = calculate_cut_lengths(3000, -45, -45, 90, 90)

        assert cut.underskena == pytest.approx(2910)
        assert cut.overskena == pytest.approx(2910 + 2 * 80.5)
        assert cut.overhallare == pytest.approx(2910 - 2 * 37.1)
        assert cut.coverprofile == pytest.approx(2910 - 2 * 88.09)

    def test_one_free_end(self):
        """Test the wall bonus applies per zero-angle end."""
        cut = calculate_cut_lengths(1000, 0, 0, 0, 90)
        assert cut.coverprofile == pytest.approx(1000 - 88.09 + 54)
