"""Tests for the coverage analysis pipeline."""
import threading

import pytest

from vastu_zone import (
    AnalysisBuilder,
    AnalysisCancelledError,
    DegenerateGeometryError,
    FULL_DISC,
    Ring,
    SamplingMode,
)


def _inside_counts(coverage):
    return [z.sample.inside_count for ring in coverage.rings for z in ring.zones]


class TestAnalysisBuilder:
    def test_boundary_required(self):
        with pytest.raises(ValueError, match="Boundary is required"):
            AnalysisBuilder().build()

    def test_defaults(self, square_boundary):
        analysis = AnalysisBuilder().with_boundary(square_boundary).build()
        assert analysis.config.rings == (FULL_DISC,)
        assert analysis.config.sample_count == 1000
        assert analysis.config.mode is SamplingMode.AREA_UNIFORM
        assert analysis.config.workers == 1

    def test_duplicate_ring_names(self, square_boundary):
        builder = (
            AnalysisBuilder()
            .with_boundary(square_boundary)
            .add_ring("a", 0.0, 0.5)
            .add_ring("a", 0.5, 1.0)
        )
        with pytest.raises(ValueError, match="unique"):
            builder.build()

    def test_invalid_ring(self):
        with pytest.raises(ValueError):
            AnalysisBuilder().add_ring("bad", 0.8, 0.2)

    @pytest.mark.parametrize("sample_count", [0, -5, 2.5])
    def test_invalid_sample_count(self, square_boundary, sample_count):
        builder = AnalysisBuilder().with_boundary(square_boundary).with_sample_count(sample_count)
        with pytest.raises(ValueError):
            builder.build()

    def test_invalid_workers(self, square_boundary):
        with pytest.raises(ValueError):
            AnalysisBuilder().with_boundary(square_boundary).with_workers(0).build()

    def test_accepts_point_sequence(self):
        analysis = AnalysisBuilder().with_boundary([(0, 0), (10, 0), (10, 10)]).build()
        assert len(analysis.config.boundary) == 3


class TestCoverageAnalysis:
    def test_square_plan_fully_covered(self, square_boundary):
        coverage = (
            AnalysisBuilder()
            .with_plan_id("square")
            .with_boundary(square_boundary)
            .add_ring("core", 0.0, 0.4)
            .add_ring("outer", 0.4, 1.0)
            .with_sample_count(200)
            .with_seed(1)
            .build()
            .run()
        )
        assert coverage.plan_id == "square"
        assert [r.name for r in coverage.rings] == ["core", "outer"]
        for ring in coverage.rings:
            assert len(ring.zones) == 32
            assert ring.average == 100.0
            assert ring.uniformity == 100.0
        assert coverage.partition.radius == 50
        assert coverage.bounding_box.width == 100
        assert set(coverage.sector_coverage().values()) == {100.0}

    def test_l_shape_missing_quadrant(self, l_boundary):
        coverage = (
            AnalysisBuilder()
            .with_boundary(l_boundary)
            .with_sample_count(300)
            .with_seed(2)
            .build()
            .run()
        )
        by_zone = coverage.rings[0].coverage_by_zone()
        for number in range(9, 17):
            assert by_zone[number] == 0.0
        for number in list(range(1, 9)) + list(range(17, 33)):
            assert by_zone[number] == 100.0

        sectors = coverage.sector_coverage()
        assert sectors["East"] == 0.0
        assert sectors["Southeast"] == 0.0
        assert sectors["Northwest"] == 100.0

        balances = {b.sector: b.balance for b in coverage.axis_balances()}
        assert balances["East"] == 0.0
        assert balances["North"] == 100.0

    def test_ring_lookup(self, square_boundary):
        coverage = (
            AnalysisBuilder()
            .with_boundary(square_boundary)
            .with_rings([Ring("inner", 0.0, 0.5)])
            .with_sample_count(50)
            .with_seed(3)
            .build()
            .run()
        )
        assert coverage.ring("inner") is coverage.rings[0]
        assert coverage.ring("missing") is None
        assert coverage.sector_coverage("missing") == {}

    def test_same_seed_reproducible(self):
        analysis = (
            AnalysisBuilder()
            .with_boundary([(0, 0), (100, 0), (100, 60), (40, 100), (0, 70)])
            .with_north_rotation(17)
            .add_ring("outer", 0.5, 1.0)
            .with_sample_count(100)
            .with_seed(11)
            .build()
        )
        assert _inside_counts(analysis.run()) == _inside_counts(analysis.run())

    def test_results_independent_of_worker_count(self):
        def run(workers):
            return (
                AnalysisBuilder()
                .with_boundary([(0, 0), (100, 0), (100, 60), (40, 100), (0, 70)])
                .add_ring("core", 0.0, 0.3)
                .add_ring("outer", 0.3, 1.0)
                .with_sample_count(150)
                .with_seed(42)
                .with_workers(workers)
                .build()
                .run()
            )

        sequential = run(1)
        assert _inside_counts(run(4)) == _inside_counts(sequential)
        assert _inside_counts(run(3)) == _inside_counts(sequential)

    def test_seed_recorded_when_not_given(self, square_boundary):
        coverage = AnalysisBuilder().with_boundary(square_boundary).with_sample_count(10).build().run()
        assert isinstance(coverage.seed, int)

    def test_linear_mode_recorded(self, square_boundary):
        coverage = (
            AnalysisBuilder()
            .with_boundary(square_boundary)
            .with_sampling_mode(SamplingMode.LINEAR_RADIUS)
            .with_sample_count(10)
            .with_seed(0)
            .build()
            .run()
        )
        assert coverage.mode is SamplingMode.LINEAR_RADIUS
        assert coverage.rings[0].zones[0].sample.mode is SamplingMode.LINEAR_RADIUS

    def test_degenerate_boundary(self):
        analysis = AnalysisBuilder().with_boundary([(0, 0), (10, 0), (20, 0)]).build()
        with pytest.raises(DegenerateGeometryError):
            analysis.run()

    @pytest.mark.parametrize("workers", [1, 4])
    def test_cancelled_before_start(self, square_boundary, workers):
        cancel = threading.Event()
        cancel.set()
        analysis = (
            AnalysisBuilder()
            .with_boundary(square_boundary)
            .with_sample_count(10)
            .with_seed(0)
            .with_workers(workers)
            .build()
        )
        with pytest.raises(AnalysisCancelledError):
            analysis.run(cancel_event=cancel)
