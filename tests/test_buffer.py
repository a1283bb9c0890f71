"""
Tests for sfxgen/dsp/buffer: sample counts and time axis.
Run from project root: python -m pytest tests/test_buffer.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import torch
from sfxgen.core.config import RenderConfig
from sfxgen.dsp.buffer import generate, time_axis

CONFIG = RenderConfig()


def test_zero_duration_is_empty():
    out = generate(0, lambda t, i: t, CONFIG)
    assert out.shape == (0,)


def test_length_is_floor_of_duration_times_rate():
    assert generate(0.8, lambda t, i: t, CONFIG).shape == (35280,)
    # 10.6 samples: floor gives 10 where round/ceil would give 11
    duration = 10.6 / CONFIG.sample_rate
    assert generate(duration, lambda t, i: t, CONFIG).shape == (10,)


def test_time_and_index_passed_to_fn():
    t, i = time_axis(0.01, CONFIG)
    assert int(i[100]) == 100
    assert float(t[100]) == 100 / CONFIG.sample_rate

    out = generate(0.01, lambda t, i: i.to(torch.float64), CONFIG)
    torch.testing.assert_close(out, torch.arange(441, dtype=torch.float64))


def test_constant_fn_fills_buffer():
    out = generate(0.001, lambda t, i: 0.5, CONFIG)
    assert out.shape == (44,)
    assert out.dtype == torch.float64
    assert bool((out == 0.5).all())


def test_custom_sample_rate():
    out = generate(1.0, lambda t, i: t, RenderConfig(sample_rate=8000))
    assert out.shape == (8000,)


if __name__ == "__main__":
    test_zero_duration_is_empty()
    test_length_is_floor_of_duration_times_rate()
    test_time_and_index_passed_to_fn()
    test_constant_fn_fills_buffer()
    test_custom_sample_rate()
    print("All buffer tests passed.")
