"""
Instantaneous-value oscillators.
Each takes a frequency (scalar or tensor, Hz) and absolute time t (tensor, seconds)
and returns the waveform value at t. Phase is always 0 at t = 0.
"""

import numpy as np
import torch

TWO_PI = 2 * np.pi


def _phase(frequency, t: torch.Tensor) -> torch.Tensor:
    """Fractional part of t * frequency (t >= 0)."""
    return torch.remainder(t * frequency, 1.0)


class Oscillator:
    @staticmethod
    def sine(frequency, t: torch.Tensor) -> torch.Tensor:
        """Standard sinusoid sin(2*pi*f*t)."""
        return torch.sin(TWO_PI * frequency * t)

    @staticmethod
    def saw(frequency, t: torch.Tensor) -> torch.Tensor:
        """Linear ramp from -1 to 1 over each period."""
        return 2 * _phase(frequency, t) - 1

    @staticmethod
    def square(frequency, t: torch.Tensor, duty: float = 0.5) -> torch.Tensor:
        """
        Pulse wave: +1 while the fractional phase is below `duty`, else -1.
        duty=0.5 gives a square wave; smaller values give narrower pulses.
        """
        phase = _phase(frequency, t)
        return torch.where(phase < duty, torch.ones_like(phase), -torch.ones_like(phase))
