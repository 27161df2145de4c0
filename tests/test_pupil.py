"""Tests for pupil mask generation."""

import numpy as np
import pytest

from aolib import TelescopeConfig, make_pupil, piston


class TestPiston:
    """Tests for the centered disk indicator."""

    def test_shape_and_values(self):
        disk = piston(32)
        assert disk.shape == (32, 32)
        assert set(np.unique(disk)) == {0.0, 1.0}

    def test_area(self):
        """Disk area approaches π(N/2)² pixels."""
        disk = piston(64)
        assert np.isclose(disk.sum(), np.pi * 32**2, rtol=0.02)

    def test_symmetric(self):
        disk = piston(33)
        assert np.array_equal(disk, disk[::-1, :])
        assert np.array_equal(disk, disk.T)

    def test_spans_grid(self):
        """A full-size disk touches the middle of each edge."""
        disk = piston(32)
        assert disk[0, 15] == 1.0 and disk[31, 16] == 1.0
        assert disk[0, 0] == 0.0

    def test_embedded(self):
        """A smaller disk sits centered in a larger grid."""
        disk = piston(8, 32)
        assert disk.shape == (32, 32)
        rows, cols = np.nonzero(disk)
        assert np.isclose(rows.mean(), 15.5)
        assert np.isclose(cols.mean(), 15.5)
        assert disk.sum() < 8 * 8


class TestMakePupil:
    """Tests for annular pupil masks."""

    def test_no_resolution(self):
        assert make_pupil(None, 0.3) is None

    def test_full_aperture_matches_piston(self):
        assert np.array_equal(make_pupil(48), piston(48))

    def test_annulus(self):
        """Center is blocked and the outer disk is intact."""
        pupil = make_pupil(64, obstruction_ratio=0.3)
        assert pupil[31, 31] == 0.0 and pupil[32, 32] == 0.0
        assert pupil[32, 2] == 1.0
        assert set(np.unique(pupil)) == {0.0, 1.0}

    def test_obstructed_fill_fraction(self):
        """D=1, ρ=0.14, N=64: on-pixel fraction ≈ π/4 (1-ρ²)."""
        tel = TelescopeConfig(diameter=1.0, obstruction_ratio=0.14, resolution=64)
        fraction = tel.get_pupil().mean()
        expected = np.pi / 4 * (1 - 0.14**2)
        assert fraction == pytest.approx(expected, rel=0.03)

    @pytest.mark.parametrize("ratio", [0.0, 0.1, 0.5])
    def test_fill_fraction_tracks_obstruction(self, ratio):
        pupil = make_pupil(128, obstruction_ratio=ratio)
        expected = np.pi / 4 * (1 - ratio**2)
        assert pupil.mean() == pytest.approx(expected, rel=0.03)

    def test_tiny_obstruction_ignored(self):
        """An obstruction smaller than half a pixel leaves the pupil full."""
        assert np.array_equal(make_pupil(33, 0.01), piston(33))
