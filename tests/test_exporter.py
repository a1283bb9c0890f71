"""
Tests for asset export: files on disk, naming, failure handling, QC hook.
Run from project root: python -m pytest tests/test_exporter.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
import soundfile as sf
from sfxgen.core.config import RenderConfig
from sfxgen.effects import SOUND_EFFECTS
from sfxgen.export.exporter import (
    ASSETS,
    Exporter,
    asset_names,
    expected_samples,
    render_asset,
    target_peak,
)

CONFIG = RenderConfig()


def test_registry_covers_effects_and_music():
    names = asset_names()
    assert len(names) == 14
    assert names[-1] == "bgm"
    assert set(SOUND_EFFECTS) < set(ASSETS)


def test_target_peak_per_asset():
    assert target_peak("bgm", CONFIG) == CONFIG.music_peak
    assert target_peak("walk", CONFIG) == CONFIG.peak


def test_expected_samples():
    assert expected_samples("explosion", CONFIG) == 35280
    assert expected_samples("menu-select", CONFIG) == 4410


def test_unknown_asset_raises():
    with pytest.raises(KeyError):
        render_asset("no-such-sound", CONFIG)


def test_export_writes_named_wav_files(tmp_path):
    config = CONFIG.with_output_dir(tmp_path / "sounds")
    reports = Exporter(config, seed=7).export_all(["menu-select", "walk"])
    assert [r.name for r in reports] == ["menu-select", "walk"]
    for report in reports:
        path = tmp_path / "sounds" / f"{report.name}.wav"
        assert report.path == path
        assert path.exists()
        assert path.stat().st_size == 44 + report.num_samples * 2
        assert report.size_bytes == path.stat().st_size
        info = sf.info(str(path))
        assert info.frames == expected_samples(report.name, config)
        assert info.samplerate == 44100


def test_export_overwrites_existing_file(tmp_path):
    stale = tmp_path / "walk.wav"
    stale.write_bytes(b"stale")
    Exporter(CONFIG.with_output_dir(tmp_path), seed=1).export_all(["walk"])
    assert stale.read_bytes()[:4] == b"RIFF"


def test_export_reports_progress(tmp_path):
    seen = []
    Exporter(CONFIG.with_output_dir(tmp_path)).export_all(["countdown-tick"], on_report=seen.append)
    assert [r.name for r in seen] == ["countdown-tick"]
    assert seen[0].elapsed_ms >= 0.0


def test_unknown_name_writes_nothing(tmp_path):
    out = tmp_path / "sounds"
    with pytest.raises(KeyError):
        Exporter(CONFIG.with_output_dir(out)).export_all(["walk", "nope"])
    assert not out.exists()


def test_filesystem_failure_propagates(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    with pytest.raises(OSError):
        Exporter(CONFIG.with_output_dir(blocker)).export_all(["walk"])


def test_qc_attached_when_enabled(tmp_path):
    reports = Exporter(CONFIG.with_output_dir(tmp_path), seed=3, qc=True).export_all(["menu-click"])
    qc = reports[0].qc_result
    assert qc is not None
    assert qc["status"] == "PASS", qc
    assert qc["metrics"]["num_samples"] == expected_samples("menu-click", CONFIG)
