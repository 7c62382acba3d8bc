"""Tests for vastu_advisor/config.py YAML loading and validation."""
import copy

import pytest

from vastu_advisor.config import AdvisorConfig, IdealEntry, RingConfig, SamplingConfig


class TestFromYaml:
    def test_round_trip(self, plan_data, write_plan):
        config = AdvisorConfig.from_yaml(write_plan(plan_data))
        assert config.plan_id == "square_plan"
        assert config.boundary == [(0.0, 0.0), (100.0, 0.0), (100.0, 100.0), (0.0, 100.0)]
        assert config.sampling == SamplingConfig(sample_count=200, seed=7, mode="area_uniform", workers=1)
        assert [r.name for r in config.rings] == ["core", "outer"]
        assert config.rings[1] == RingConfig(name="outer", inner_radius=0.5, outer_radius=1.0)

        sectors, rings = config.rule_modules
        assert sectors.kind == "sector"
        assert sectors.ring == "outer"
        assert sectors.ideals["North"] == IdealEntry(ideal=100.0, weight=0.125)
        assert rings.kind == "ring"
        assert rings.ideals["core"].weight == 0.6

    def test_defaults(self, write_plan):
        config = AdvisorConfig.from_yaml(write_plan({
            "plan_id": "minimal",
            "boundary": [[0, 0], [10, 0], [10, 10]],
        }))
        assert config.north_rotation == 0.0
        assert config.sampling.sample_count == 1000
        assert config.sampling.seed is None
        assert [r.name for r in config.rings] == ["full"]
        assert config.rule_modules == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AdvisorConfig.from_yaml(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValueError, match="mapping"):
            AdvisorConfig.from_yaml(path)


class TestValidation:
    def test_missing_plan_id(self, plan_data):
        del plan_data["plan_id"]
        with pytest.raises(ValueError, match="plan_id"):
            AdvisorConfig.from_dict(plan_data)

    def test_too_few_boundary_points(self, plan_data):
        plan_data["boundary"] = [[0, 0], [1, 1]]
        with pytest.raises(ValueError, match="at least 3"):
            AdvisorConfig.from_dict(plan_data)

    def test_unknown_sampling_mode(self, plan_data):
        plan_data["sampling"]["mode"] = "gaussian"
        with pytest.raises(ValueError, match="sampling mode"):
            AdvisorConfig.from_dict(plan_data)

    def test_unknown_sampling_key(self, plan_data):
        plan_data["sampling"]["samples"] = 10
        with pytest.raises(ValueError):
            AdvisorConfig.from_dict(plan_data)

    def test_sample_count_below_one(self, plan_data):
        plan_data["sampling"]["sample_count"] = 0
        with pytest.raises(ValueError):
            AdvisorConfig.from_dict(plan_data)

    def test_invalid_ring_bounds(self, plan_data):
        plan_data["rings"][0]["outer_radius"] = 1.5
        with pytest.raises(ValueError, match="core"):
            AdvisorConfig.from_dict(plan_data)

    def test_duplicate_ring_names(self, plan_data):
        plan_data["rings"][1]["name"] = "core"
        with pytest.raises(ValueError, match="unique"):
            AdvisorConfig.from_dict(plan_data)

    def test_unknown_module_kind(self, plan_data):
        plan_data["rule_modules"][0]["kind"] = "planet"
        with pytest.raises(ValueError, match="kind"):
            AdvisorConfig.from_dict(plan_data)

    def test_duplicate_module_names(self, plan_data):
        plan_data["rule_modules"].append(copy.deepcopy(plan_data["rule_modules"][0]))
        with pytest.raises(ValueError, match="unique"):
            AdvisorConfig.from_dict(plan_data)

    def test_ring_module_references_unknown_ring(self, plan_data):
        plan_data["rule_modules"][1]["ideals"]["middle"] = {"ideal": 50, "weight": 0.1}
        with pytest.raises(ValueError, match="middle"):
            AdvisorConfig.from_dict(plan_data)

    def test_sector_module_references_unknown_ring(self, plan_data):
        plan_data["rule_modules"][0]["ring"] = "middle"
        with pytest.raises(ValueError, match="middle"):
            AdvisorConfig.from_dict(plan_data)

    def test_ideal_out_of_range(self, plan_data):
        plan_data["rule_modules"][0]["ideals"]["North"]["ideal"] = 120
        with pytest.raises(ValueError, match="ideal"):
            AdvisorConfig.from_dict(plan_data)

    def test_bad_weights_are_accepted_until_evaluation(self, plan_data):
        plan_data["rule_modules"][1]["ideals"]["outer"]["weight"] = 0.1
        config = AdvisorConfig.from_dict(plan_data)
        assert config.rule_modules[1].ideals["outer"].weight == 0.1

    def test_sector_module_rejects_unknown_sector_name(self, plan_data):
        ideals = plan_data["rule_modules"][0]["ideals"]
        ideals["Northest"] = ideals.pop("Northeast")
        with pytest.raises(ValueError, match="Northest"):
            AdvisorConfig.from_dict(plan_data)

    def test_sector_module_rejects_direction_codes(self, plan_data):
        plan_data["rule_modules"][0]["ideals"] = {"NE": {"ideal": 100, "weight": 1.0}}
        with pytest.raises(ValueError, match="unknown sectors"):
            AdvisorConfig.from_dict(plan_data)

    @pytest.mark.parametrize("seed", [1.5, "42", -1, True])
    def test_seed_must_be_non_negative_int(self, plan_data, seed):
        plan_data["sampling"]["seed"] = seed
        with pytest.raises(ValueError, match="seed"):
            AdvisorConfig.from_dict(plan_data)

    @pytest.mark.parametrize("workers", [2.0, "4", True])
    def test_workers_must_be_int(self, plan_data, workers):
        plan_data["sampling"]["workers"] = workers
        with pytest.raises(ValueError, match="workers"):
            AdvisorConfig.from_dict(plan_data)
