"""Tests for the vastu-cli entry point."""
import json

import pytest

from vastu_cli.cli import main


def test_classify(capsys):
    main(["classify", "12"])
    assert capsys.readouterr().out.strip() == "good"


def test_classify_negative(capsys):
    main(["classify", "-60"])
    assert capsys.readouterr().out.strip() == "critical"


def test_zones(capsys):
    main(["zones", "--rotation", "5.625"])
    zones = json.loads(capsys.readouterr().out)
    assert len(zones) == 32
    assert zones[0]['direction_code'] == "N"
    assert zones[0]['start_angle'] == 5.625


def test_analyze_to_file(plan_data, write_plan, tmp_path):
    output = tmp_path / "report.json"
    main(["analyze", str(write_plan(plan_data)), "--output", str(output), "--seed", "3"])
    with open(output) as f:
        report = json.load(f)
    assert report['plan_id'] == "square_plan"
    assert report['seed'] == 3
    assert [m['name'] for m in report['modules']] == ["sectors", "rings"]


def test_analyze_to_stdout(plan_data, write_plan, capsys):
    main(["analyze", str(write_plan(plan_data)), "--workers", "2"])
    report = json.loads(capsys.readouterr().out)
    assert report['sample_count'] == 200


def test_missing_config(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["analyze", str(tmp_path / "missing.yaml")])
    assert exc.value.code == 1
    assert "Error" in capsys.readouterr().err


def test_invalid_config(plan_data, write_plan, capsys):
    plan_data["sampling"]["mode"] = "gaussian"
    with pytest.raises(SystemExit) as exc:
        main(["analyze", str(write_plan(plan_data))])
    assert exc.value.code == 1


def test_no_command():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1


def test_float_seed_in_config_exits_cleanly(plan_data, write_plan, capsys):
    plan_data["sampling"]["seed"] = 1.5
    with pytest.raises(SystemExit) as exc:
        main(["analyze", str(write_plan(plan_data))])
    assert exc.value.code == 1
    assert "seed" in capsys.readouterr().err
