"""
Tests for sfxgen/qc.
Run from project root: python -m pytest tests/test_qc.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import math

import torch
from sfxgen.core.io import AudioIO
from sfxgen.dsp.mixer import normalize
from sfxgen.qc import analyze, verify_file

SR = 44100


def _tone(n=4410):
    t = torch.arange(n, dtype=torch.float64) / SR
    return normalize(torch.sin(2 * math.pi * 440 * t), 0.95)


def test_mastered_tone_passes():
    result = analyze(_tone(), SR, "tone", 0.95, expected_samples=4410)
    assert result["status"] == "PASS"
    assert result["failures"] == []
    assert abs(result["metrics"]["peak_linear"] - 0.95) < 1e-12


def test_peak_over_target_fails():
    result = analyze(_tone() * 1.1, SR, "hot", 0.95)
    assert result["status"] == "FAIL"


def test_non_finite_fails():
    audio = _tone()
    audio[10] = float("nan")
    result = analyze(audio, SR, "nan", 0.95)
    assert result["status"] == "FAIL"
    assert any("NaN" in f for f in result["failures"])


def test_silent_buffer_warns():
    result = analyze(torch.zeros(100, dtype=torch.float64), SR, "silent", 0.95)
    assert result["status"] == "WARN"


def test_wrong_length_fails():
    result = analyze(_tone(100), SR, "short", 0.95, expected_samples=4410)
    assert result["status"] == "FAIL"


def test_verify_file(tmp_path):
    asset = AudioIO.encode("tone", _tone(), SR)
    path = AudioIO.save_wav(asset, tmp_path)
    assert verify_file(path, 4410, SR)["status"] == "PASS"
    result = verify_file(path, 4411, 48000)
    assert result["status"] == "FAIL"
    assert len(result["failures"]) == 2
