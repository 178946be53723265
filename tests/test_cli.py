from __future__ import annotations

import json
from pathlib import Path

import pytest

from rasterbmp.bmp import file_size
from rasterbmp.cli import main
from rasterbmp.parameters import GradientParameters


def test_cli_writes_bitmap(tmp_path: Path, capsys):
    output = tmp_path / "gradient.bmp"
    assert main([str(output), "--height", "3", "--width", "5", "--workers", "2"]) == 0
    assert capsys.readouterr().out.strip() == "Image exported successfully"
    assert output.stat().st_size == file_size(3, 5)


def test_cli_reports_export_failure(tmp_path: Path, capsys):
    output = tmp_path / "missing" / "gradient.bmp"
    assert main([str(output), "--height", "2", "--width", "2"]) == 1
    assert capsys.readouterr().out.startswith("Failed to export image:")


def test_cli_reads_params_file(tmp_path: Path):
    output = tmp_path / "from_json.bmp"
    params_path = tmp_path / "params.json"
    params_path.write_text(json.dumps({"height": 2, "width": 6, "output": str(output)}))
    assert main(["--params", str(params_path), "--height", "4"]) == 0
    assert output.stat().st_size == file_size(4, 6)


def test_cli_rejects_negative_dimensions(tmp_path: Path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "x.bmp"), "--height", "-1"])
    assert excinfo.value.code == 2


def test_parameters_defaults():
    params = GradientParameters()
    assert (params.height, params.width) == (1000, 1000)
    assert params.output == Path("gradient.bmp")
    assert params.as_dict()["output"] == "gradient.bmp"


def test_cli_reports_oversized_image(tmp_path: Path, capsys):
    output = tmp_path / "huge.bmp"
    assert main([str(output), "--height", "0", "--width", str(2**31)]) == 1
    assert capsys.readouterr().out.startswith("Failed to export image:")
    assert not output.exists()
