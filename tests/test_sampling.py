"""Tests for the Monte Carlo coverage sampler."""
import math

import numpy as np
import pytest

from vastu_zone.errors import DegenerateGeometryError, InvalidBoundaryError
from vastu_zone.geometry import (
    Ring,
    find_zone_for_point,
    generate_32_zones,
    partition_boundary,
    zone_by_number,
)
from vastu_zone.sampling import (
    CoverageSampler,
    SamplingMode,
    make_rng,
    spawn_rngs,
    theoretical_sector_area,
)

SQUARE = [(0, 0), (100, 0), (100, 100), (0, 100)]


def _regular_polygon(cx, cy, radius, sides=360):
    return [
        (cx + radius * math.cos(2 * math.pi * k / sides), cy + radius * math.sin(2 * math.pi * k / sides))
        for k in range(sides)
    ]


# --- random sources ---

class TestRandomSource:
    def test_same_seed_same_stream(self):
        assert make_rng(5).random(4).tolist() == make_rng(5).random(4).tolist()

    def test_generator_passes_through(self):
        rng = make_rng(1)
        assert make_rng(rng) is rng

    def test_spawned_children_reproducible(self):
        a = [g.random() for g in spawn_rngs(9, 3)]
        b = [g.random() for g in spawn_rngs(9, 3)]
        assert a == b
        assert len(set(a)) == 3

    def test_spawn_from_generator(self):
        children = spawn_rngs(make_rng(3), 2)
        assert len(children) == 2
        assert all(isinstance(c, np.random.Generator) for c in children)

    def test_negative_count(self):
        with pytest.raises(ValueError):
            spawn_rngs(1, -1)


# --- coverage ---

class TestSampleZoneCoverage:
    def test_zone_inside_inscribed_circle_is_fully_covered(self, rng):
        partition = generate_32_zones(50, 50, 50)
        for zone in partition:
            sample = CoverageSampler.sample_zone_coverage(
                zone, SQUARE, partition.center, partition.radius,
                Ring("outer", 0.9, 1.0), 500, rng=rng,
            )
            assert sample.coverage == 100.0
            assert sample.inside_count == 500

    def test_coverage_is_inside_over_count(self, rng):
        partition = generate_32_zones(50, 50, 50)
        sample = CoverageSampler.sample_zone_coverage(
            partition.zones[3], [(0, 0), (100, 0), (60, 60)],
            partition.center, partition.radius, sample_count=333, rng=rng,
        )
        assert 0.0 <= sample.coverage <= 100.0
        assert sample.coverage == sample.inside_count / 333 * 100
        assert 0.0 <= sample.fraction <= 1.0

    def test_zone_outside_boundary_is_empty(self, rng):
        # Boundary lies entirely North of the center; the South zone never hits it
        partition = generate_32_zones(50, 50, 50)
        sample = CoverageSampler.sample_zone_coverage(
            partition.zones[16], [(0, 0), (100, 0), (100, 40), (0, 40)],
            partition.center, partition.radius, sample_count=500, rng=rng,
        )
        assert sample.coverage == 0.0

    def test_half_plane_zone_straddling_south(self, rng):
        # Rotated so zone 16 spans 174.375-185.625; the boundary keeps x < 50 only
        partition = generate_32_zones(50, 50, 50, north_rotation=5.625)
        zone = partition.zones[15]
        assert zone.start_angle == 174.375
        sample = CoverageSampler.sample_zone_coverage(
            zone, [(0, 0), (50, 0), (50, 100), (0, 100)],
            partition.center, partition.radius, sample_count=10000, rng=rng,
        )
        assert abs(sample.coverage - 50.0) < 3.0

    def test_ring_beyond_inscribed_circle_matches_analytic_fraction(self, rng):
        # Circumscribed radius: the outer ring leaves the square near the axes
        radius = 50 * math.sqrt(2)
        ring = Ring("edge", 0.9, 1.0)
        partition = generate_32_zones(50, 50, radius)
        r_in, r_out = ring.inner_radius * radius, ring.outer_radius * radius

        for zone in (partition.zones[0], partition.zones[3], partition.zones[4]):
            theta = np.radians(zone.start_angle + np.linspace(0, zone.width, 20001))
            limit = 50 / np.maximum(np.abs(np.sin(theta)), np.abs(np.cos(theta)))
            r_max = np.clip(limit, r_in, r_out)
            expected = 100 * np.mean((r_max ** 2 - r_in ** 2) / (r_out ** 2 - r_in ** 2))

            sample = CoverageSampler.sample_zone_coverage(
                zone, SQUARE, partition.center, radius, ring, 5000, rng=rng,
            )
            assert abs(sample.coverage - expected) < 3.0

    def test_linear_radius_over_weights_center(self, rng):
        # Inner disc of half the radius: 25% of the area, 50% of the radius range
        partition = generate_32_zones(50, 50, 50)
        inner_disc = _regular_polygon(50, 50, 25)
        zone = partition.zones[7]

        area = CoverageSampler.sample_zone_coverage(
            zone, inner_disc, partition.center, partition.radius,
            sample_count=4000, rng=rng, mode=SamplingMode.AREA_UNIFORM,
        )
        linear = CoverageSampler.sample_zone_coverage(
            zone, inner_disc, partition.center, partition.radius,
            sample_count=4000, rng=rng, mode=SamplingMode.LINEAR_RADIUS,
        )
        assert abs(area.coverage - 25.0) < 3.0
        assert abs(linear.coverage - 50.0) < 3.0
        assert linear.mode is SamplingMode.LINEAR_RADIUS

    def test_same_seed_same_result(self):
        partition = generate_32_zones(50, 50, 50)
        boundary = [(0, 0), (100, 0), (30, 80)]
        first = CoverageSampler.sample_zone_coverage(
            partition.zones[5], boundary, partition.center, 50, rng=make_rng(99),
        )
        second = CoverageSampler.sample_zone_coverage(
            partition.zones[5], boundary, partition.center, 50, rng=make_rng(99),
        )
        assert first == second

    def test_sample_count_below_one(self, rng):
        zone = generate_32_zones(0, 0, 10).zones[0]
        with pytest.raises(ValueError):
            CoverageSampler.sample_zone_coverage(zone, SQUARE, (0, 0), 10, sample_count=0, rng=rng)

    def test_too_few_boundary_points(self, rng):
        zone = generate_32_zones(0, 0, 10).zones[0]
        with pytest.raises(InvalidBoundaryError):
            CoverageSampler.sample_zone_coverage(zone, [(0, 0), (1, 1)], (0, 0), 10, rng=rng)

    def test_non_positive_radius(self, rng):
        zone = generate_32_zones(0, 0, 10).zones[0]
        with pytest.raises(DegenerateGeometryError):
            CoverageSampler.sample_zone_coverage(zone, SQUARE, (0, 0), 0, rng=rng)

    def test_rng_required(self):
        zone = generate_32_zones(0, 0, 10).zones[0]
        with pytest.raises(TypeError):
            CoverageSampler.sample_zone_coverage(zone, SQUARE, (0, 0), 10, rng=None)


class TestDrawPoints:
    def test_points_stay_in_zone_and_ring(self, rng):
        partition = generate_32_zones(0, 0, 10, north_rotation=350)
        ring = Ring("middle", 0.3, 0.6)
        for zone in (partition.zones[0], partition.zones[20]):
            xs, ys = CoverageSampler.draw_points(zone, partition.center, 10, ring, 300, rng=rng)
            distances = np.hypot(xs, ys)
            assert distances.min() >= 3.0 - 1e-9
            assert distances.max() <= 6.0 + 1e-9
            for x, y in zip(xs, ys):
                assert find_zone_for_point(x, y, partition) == zone


# --- absolute area ---

def test_theoretical_sector_area():
    expected = 0.5 * 50 ** 2 * math.radians(11.25)
    assert abs(theoretical_sector_area(50) - expected) < 1e-9
    assert abs(theoretical_sector_area(50, Ring("outer", 0.5, 1.0)) - 0.75 * expected) < 1e-9


def test_absolute_area_of_fully_covered_zone(rng):
    partition = generate_32_zones(50, 50, 50)
    estimate = CoverageSampler.sample_absolute_area(
        partition.zones[10], SQUARE, partition.center, partition.radius,
        sample_count=200, rng=rng,
    )
    assert estimate.coverage == 100.0
    assert abs(estimate.estimated_area - theoretical_sector_area(50)) < 1e-9


# --- end to end ---

class TestSquarePlan:
    def test_north_zone_of_square_fully_covered(self):
        partition = partition_boundary(SQUARE, north_rotation=0)
        assert (partition.center_x, partition.center_y, partition.radius) == (50, 50, 50)

        north = zone_by_number(1, partition)
        assert north.direction_code == "N"
        assert (north.start_angle, north.end_angle) == (0.0, 11.25)

        sample = CoverageSampler.sample_zone_coverage(
            north, SQUARE, center=(partition.center_x, partition.center_y),
            radius=partition.radius, sample_count=5000, rng=make_rng(2024),
        )
        assert sample.sample_count == 5000
        assert sample.coverage >= 97.0
