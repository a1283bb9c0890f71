"""
Materialise a continuous-time function into a sample buffer.
Sample i holds fn(i / sample_rate, i); length is floor(duration * sample_rate).
"""
from typing import Callable, Tuple, Union

import torch

from sfxgen.core.config import DTYPE, RenderConfig

SignalFn = Callable[[torch.Tensor, torch.Tensor], Union[torch.Tensor, float]]


def time_axis(duration: float, config: RenderConfig) -> Tuple[torch.Tensor, torch.Tensor]:
    """Returns (t, i): time in seconds and integer sample index for every sample."""
    n = config.num_samples(duration)
    i = torch.arange(n, dtype=torch.long)
    t = i.to(DTYPE) / config.sample_rate
    return t, i


def generate(duration: float, fn: SignalFn, config: RenderConfig) -> torch.Tensor:
    """
    Evaluate fn over the whole time axis at once.
    fn receives tensors and may return a tensor or a constant.
    """
    t, i = time_axis(duration, config)
    out = fn(t, i)
    if not isinstance(out, torch.Tensor):
        return torch.full_like(t, float(out))
    out = out.to(DTYPE)
    if out.shape != t.shape:
        out = torch.broadcast_to(out, t.shape).clone()
    return out
