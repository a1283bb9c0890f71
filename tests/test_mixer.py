"""
Tests for sfxgen/dsp/mixer: mix, gain, normalize, LayerSpec, LayerMixer.
Run from project root: python -m pytest tests/test_mixer.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import torch
from sfxgen.dsp.mixer import LayerMixer, LayerSpec, gain, mix, normalize, peak


def _t(*values):
    return torch.tensor(values, dtype=torch.float64)


# -----------------------------------------------------------------------------
# mix / gain
# -----------------------------------------------------------------------------

def test_mix_pads_shorter_with_silence():
    out = mix(_t(1.0, 1.0, 1.0), _t(1.0))
    torch.testing.assert_close(out, _t(2.0, 1.0, 1.0))


def test_mix_has_no_gain_compensation():
    out = mix(_t(0.8, -0.8), _t(0.8, -0.8), _t(0.8, -0.8))
    torch.testing.assert_close(out, _t(2.4, -2.4))


def test_mix_does_not_modify_inputs():
    a = _t(1.0, 2.0)
    b = _t(3.0)
    mix(a, b)
    torch.testing.assert_close(a, _t(1.0, 2.0))
    torch.testing.assert_close(b, _t(3.0))


def test_mix_nothing_is_empty():
    assert mix().shape == (0,)


def test_gain_scales():
    torch.testing.assert_close(gain(_t(1.0, -0.5), 0.5), _t(0.5, -0.25))


# -----------------------------------------------------------------------------
# normalize
# -----------------------------------------------------------------------------

def test_normalize_sets_peak():
    out = normalize(_t(0.1, -0.4, 0.2), 0.95)
    assert abs(peak(out) - 0.95) < 1e-12
    torch.testing.assert_close(out, _t(0.1, -0.4, 0.2) * (0.95 / 0.4))


def test_normalize_is_idempotent():
    once = normalize(_t(0.3, -2.0, 1.1), 0.95)
    twice = normalize(once, 0.95)
    torch.testing.assert_close(once, twice)


def test_normalize_silent_buffer_unchanged():
    zeros = torch.zeros(100, dtype=torch.float64)
    out = normalize(zeros)
    assert torch.equal(out, zeros)
    assert torch.isfinite(out).all()


def test_normalize_empty_buffer():
    assert normalize(torch.zeros(0, dtype=torch.float64)).shape == (0,)


def test_normalize_subnormal_peak_stays_finite():
    # 0.95 / 1e-320 overflows float64
    tiny = _t(0.0, 1e-320, -5e-321)
    out = normalize(tiny, 0.95)
    assert torch.isfinite(out).all()
    assert torch.equal(out, tiny)


def test_normalize_small_normal_peak_still_scales():
    out = normalize(_t(0.0, 1e-300, -5e-301), 0.95)
    assert torch.isfinite(out).all()
    assert abs(peak(out) - 0.95) < 1e-12


# -----------------------------------------------------------------------------
# LayerMixer
# -----------------------------------------------------------------------------

def test_layer_default_gain_unchanged():
    mixer = LayerMixer()
    sig = torch.ones(100, dtype=torch.float64)
    mixer.add("a", sig)
    torch.testing.assert_close(mixer.mix(), sig)


def test_layer_gain_applied():
    mixer = LayerMixer()
    sig = torch.ones(100, dtype=torch.float64)
    mixer.add("a", sig, LayerSpec("a", gain=0.7))
    torch.testing.assert_close(mixer.mix(), sig * 0.7)


def test_layers_sum_after_gain():
    mixer = LayerMixer()
    mixer.add("layer_a", torch.ones(100, dtype=torch.float64))
    mixer.add("layer_b", torch.ones(100, dtype=torch.float64) * 2.0, LayerSpec("layer_b", gain=0.5))
    torch.testing.assert_close(mixer.mix(), torch.full((100,), 2.0, dtype=torch.float64))


def test_layer_same_name_overwrites():
    mixer = LayerMixer()
    mixer.add("a", torch.ones(10, dtype=torch.float64))
    mixer.add("a", torch.ones(10, dtype=torch.float64) * 0.25)
    torch.testing.assert_close(mixer.mix(), torch.full((10,), 0.25, dtype=torch.float64))


def test_layers_of_different_length_are_padded():
    mixer = LayerMixer()
    mixer.add("long", torch.ones(10, dtype=torch.float64))
    mixer.add("short", torch.ones(4, dtype=torch.float64))
    master = mixer.mix()
    assert master.shape == (10,)
    assert float(master[0]) == 2.0
    assert float(master[9]) == 1.0


def test_empty_mixer():
    assert LayerMixer().mix().shape == (0,)


def test_layer_spec_defaults():
    spec = LayerSpec("sub")
    assert spec.name == "sub"
    assert spec.gain == 1.0
