"""Shared test fixtures for the zone kernel and advisor tests."""
import pytest
import yaml

from vastu_zone import BoundaryPolygon, make_rng
from vastu_report.logging import create_logger


SQUARE = [(0, 0), (100, 0), (100, 100), (0, 100)]

# Square with the bottom-right quadrant (x > 50, y > 50) removed.
# Seen from (50, 50) that quadrant spans bearings 90-180 (East to South).
L_SHAPE = [(0, 0), (100, 0), (100, 50), (50, 50), (50, 100), (0, 100)]


@pytest.fixture(scope="session", autouse=True)
def structured_loggers():
    """Create the shared JSON loggers before any test swaps sys.stderr."""
    return create_logger("analysis"), create_logger("advisor")


@pytest.fixture(scope="session")
def square_boundary():
    """100 x 100 square; inscribed circle centered (50, 50), radius 50."""
    return BoundaryPolygon.from_points(SQUARE)


@pytest.fixture(scope="session")
def l_boundary():
    return BoundaryPolygon.from_points(L_SHAPE)


@pytest.fixture
def rng():
    """Fresh seeded generator per test."""
    return make_rng(12345)


@pytest.fixture
def plan_data():
    """Plan configuration dict (square plan, two rings, two rule modules)."""
    return {
        "plan_id": "square_plan",
        "boundary": [list(p) for p in SQUARE],
        "north_rotation": 0.0,
        "sampling": {"sample_count": 200, "seed": 7, "mode": "area_uniform", "workers": 1},
        "rings": [
            {"name": "core", "inner_radius": 0.0, "outer_radius": 0.5},
            {"name": "outer", "inner_radius": 0.5, "outer_radius": 1.0},
        ],
        "rule_modules": [
            {
                "name": "sectors",
                "kind": "sector",
                "ring": "outer",
                "ideals": {
                    name: {"ideal": 100, "weight": 0.125}
                    for name in (
                        "North", "Northeast", "East", "Southeast",
                        "South", "Southwest", "West", "Northwest",
                    )
                },
            },
            {
                "name": "rings",
                "kind": "ring",
                "ideals": {
                    "core": {"ideal": 100, "weight": 0.6},
                    "outer": {"ideal": 90, "weight": 0.4},
                },
            },
        ],
    }


@pytest.fixture
def write_plan(tmp_path):
    """Write a plan dict to YAML and return the path."""
    def _write(data, name="plan.yaml"):
        path = tmp_path / name
        with open(path, "w") as f:
            yaml.safe_dump(data, f)
        return path
    return _write
