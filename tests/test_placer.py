"""
Tests for even-spaced curve placement.

Validates separation, acceptance and determinism of the placed curve set.
"""

import math

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from even_spaced_curves.analysis import spacing_violations
from even_spaced_curves.config import CurveConfig
from even_spaced_curves.constants import d_test
from even_spaced_curves.density_grid import DensityGrid
from even_spaced_curves.placer import EvenSpacedCurvesSolver, even_spaced_curves
from even_spaced_curves.vector_field import VectorField


def swirl_noise(seed, x, y):
    """Smooth deterministic stand-in for a noise function."""
    return 0.15 * math.sin(4.0 * x + seed) + 0.1 * math.cos(3.0 * y)


def place(flow_field, d_sep=1.0, n_curves=200, n_steps=30, min_steps_allowed=5,
          step_length=0.5, start=(20.0, 20.0), capacity=50, stats=None):
    grid = DensityGrid(d_sep, flow_field.width, flow_field.height, capacity)
    curves = even_spaced_curves(
        start[0], start[1], n_curves, n_steps, min_steps_allowed,
        step_length, d_sep, flow_field, grid, stats=stats
    )
    return curves, grid


class TestSwirlField:
    """Properties of a placement over a smooth field."""

    D_SEP = 1.0
    MIN_STEPS = 5

    @pytest.fixture(scope="class")
    def field(self):
        return VectorField(3, 40, 40, noise=swirl_noise)

    @pytest.fixture(scope="class")
    def placement(self, field):
        return place(field, d_sep=self.D_SEP, min_steps_allowed=self.MIN_STEPS)

    def test_places_many_curves(self, placement):
        curves, grid = placement

        assert 1 < len(curves) <= 200
        assert grid.dropped_points == 0

    def test_minimum_separation(self, placement):
        curves, _ = placement

        assert spacing_violations(curves, d_test(self.D_SEP)) == []

    def test_minimum_length(self, placement):
        curves, _ = placement

        for curve in curves[1:]:
            assert curve.steps_taken >= self.MIN_STEPS

    def test_samples_inside_field(self, placement):
        curves, _ = placement

        for curve in curves:
            assert np.all((curve.x > 0) & (curve.x < 40))
            assert np.all((curve.y > 0) & (curve.y < 40))

    def test_ids_follow_acceptance_order(self, placement):
        curves, _ = placement

        assert [c.curve_id for c in curves] == list(range(len(curves)))

    def test_first_curve_starts_at_start_point(self, placement):
        curves, _ = placement

        assert (curves[0].x[0], curves[0].y[0]) == (20.0, 20.0)

    def test_every_accepted_sample_committed(self, placement):
        curves, grid = placement

        assert grid.total_points == sum(c.steps_taken for c in curves)

    def test_deterministic(self, field, placement):
        curves, _ = placement
        again, _ = place(field, d_sep=self.D_SEP, min_steps_allowed=self.MIN_STEPS)

        assert len(again) == len(curves)
        for a, b in zip(curves, again):
            assert a.curve_id == b.curve_id
            np.testing.assert_array_equal(a.x, b.x)
            np.testing.assert_array_equal(a.y, b.y)
            np.testing.assert_array_equal(a.direction, b.direction)

    def test_curve_budget(self, field):
        curves, _ = place(field, n_curves=3)

        assert len(curves) == 3


class TestUniformField:
    """A constant field fills the domain with parallel lines d_sep apart."""

    @pytest.fixture
    def placement(self):
        field = VectorField.uniform(20, 20, 0.0)
        stats = {}
        curves, grid = place(
            field, d_sep=1.0, n_curves=1000, n_steps=100, min_steps_allowed=2,
            step_length=0.5, start=(10.0, 10.5), capacity=16, stats=stats
        )
        return curves, grid, stats

    def test_parallel_lines(self, placement):
        curves, _, _ = placement

        assert len(curves) == 20
        for curve in curves:
            assert np.all(curve.y == curve.y[0])
        rows = sorted(float(c.y[0]) for c in curves)
        np.testing.assert_allclose(rows, 0.5 + np.arange(20))

    def test_left_seed_before_right_seed(self, placement):
        curves, _, _ = placement

        assert curves[1].y[0] == 11.5
        assert curves[2].y[0] == 9.5

    def test_lines_span_the_field(self, placement):
        curves, _, _ = placement

        for curve in curves:
            assert curve.x.min() == pytest.approx(0.5)
            assert curve.x.max() == pytest.approx(19.5)

    def test_overlapping_seeds_rejected(self, placement):
        _, _, stats = placement

        assert stats["seeds_rejected"] > 0
        assert stats["curves_discarded"] == 0


class TestAcceptance:
    """Test curve discarding."""

    @pytest.fixture
    def short_field(self):
        return VectorField.uniform(10, 10, 0.0)

    def test_first_curve_always_accepted(self, short_field):
        stats = {}
        curves, grid = place(
            short_field, d_sep=1.0, n_curves=100, n_steps=6,
            min_steps_allowed=5, step_length=1.0, start=(9.5, 5.0), stats=stats
        )

        assert len(curves) == 1
        assert curves[0].steps_taken == 3
        assert stats["curves_discarded"] > 0

    def test_discarded_curves_not_committed(self, short_field):
        curves, grid = place(
            short_field, d_sep=1.0, n_curves=100, n_steps=6,
            min_steps_allowed=5, step_length=1.0, start=(9.5, 5.0)
        )

        assert grid.total_points == curves[0].steps_taken

    @pytest.mark.parametrize("start", [(-5.0, 30.0), (0.0, 5.0), (5.0, 10.0)])
    def test_start_off_field_raises(self, short_field, start):
        grid = DensityGrid(1.0, 10, 10, 8)

        with pytest.raises(ValueError):
            even_spaced_curves(*start, 10, 6, 2, 1.0, 1.0, short_field, grid)
        assert grid.total_points == 0


class TestSolver:
    """Test the configuration-driven solver."""

    @pytest.fixture
    def config(self):
        return CurveConfig(
            field_width=30, field_height=20, n_steps=20, min_steps_allowed=4,
            n_curves=60, step_length=0.5, d_sep=1.25, density_cell_capacity=32,
            noise_seed=7, start_x=15.0, start_y=10.0,
        )

    def test_run(self, config):
        solver = EvenSpacedCurvesSolver(config, noise=swirl_noise)

        curves = solver.run(verbose=False)

        assert curves is solver.curves
        assert 1 < solver.curves_accepted <= 60
        assert solver.dropped_points == 0
        assert solver.flow_field.angles.shape == (20, 30)
        assert solver.density_grid.shape == (16, 24)

    def test_rerun_gives_same_curves(self, config):
        solver = EvenSpacedCurvesSolver(config, noise=swirl_noise)
        first = [c.points().copy() for c in solver.run(verbose=False)]
        second = [c.points() for c in solver.run(verbose=False)]

        assert len(first) == len(second)
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)

    def test_verbose_summary(self, config, capsys):
        EvenSpacedCurvesSolver(config, noise=swirl_noise).run(verbose=True)

        out = capsys.readouterr().out
        assert "Accepted curves" in out
        assert "Rejected seeds" in out

    def test_precomputed_field(self, config):
        field = VectorField.uniform(30, 20, 0.0)

        solver = EvenSpacedCurvesSolver(config, flow_field=field)

        assert solver.flow_field is field

    def test_field_size_mismatch(self, config):
        with pytest.raises(ValueError):
            EvenSpacedCurvesSolver(config, flow_field=VectorField.uniform(10, 10, 0.0))

    def test_driver(self, config, capsys):
        from simulations.noise_flow_field import run_even_spaced_curves

        solver = run_even_spaced_curves(config, noise=swirl_noise, verbose=True)

        out = capsys.readouterr().out
        assert "Minimum separation" in out
        assert solver.curves_accepted > 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
