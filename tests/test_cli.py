"""
Tests for the sfxgen command line entry point.
Run from project root: python -m pytest tests/test_cli.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from sfxgen.export import exporter
from sfxgen.main import main


def test_list(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out.split()
    assert "explosion" in out
    assert "bgm" in out


def test_render_subset(tmp_path, capsys):
    code = main(["--output-dir", str(tmp_path), "--only", "walk", "--only", "menu-select", "--seed", "5"])
    assert code == 0
    assert (tmp_path / "walk.wav").exists()
    assert (tmp_path / "menu-select.wav").exists()
    assert not (tmp_path / "bgm.wav").exists()
    out = capsys.readouterr().out
    assert "walk.wav" in out
    assert "KB" in out


def test_render_with_qc(tmp_path, capsys):
    assert main(["--output-dir", str(tmp_path), "--only", "countdown-tick", "--qc"]) == 0
    assert "PASSED" in capsys.readouterr().out


def test_unknown_asset(tmp_path, capsys):
    assert main(["--output-dir", str(tmp_path), "--only", "nope"]) == 2
    assert "Available assets" in capsys.readouterr().out


def test_unknown_asset_is_rejected_before_rendering(tmp_path, monkeypatch):
    rendered = []
    monkeypatch.setitem(exporter.ASSETS, "walk", lambda config: rendered.append(config))
    assert main(["--output-dir", str(tmp_path), "--only", "walk", "--only", "nope"]) == 2
    assert rendered == []


def test_key_error_inside_recipe_is_not_reported_as_unknown_asset(tmp_path, monkeypatch, capsys):
    def broken(config):
        raise KeyError("missing table entry")

    monkeypatch.setitem(exporter.ASSETS, "walk", broken)
    with pytest.raises(KeyError, match="missing table entry"):
        main(["--output-dir", str(tmp_path), "--only", "walk"])
    assert "Available assets" not in capsys.readouterr().out


def test_unwritable_output_dir(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    assert main(["--output-dir", str(blocker), "--only", "walk"]) == 1
