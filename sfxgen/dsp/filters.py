"""
One-pole low-pass filter and saturation.
The low-pass is causal and single pass; its state is local to each call.
"""

import numpy as np
import torch
import torchaudio.functional as F


class Filter:
    @staticmethod
    def lowpass_coefficient(cutoff_hz: float, sample_rate: int) -> float:
        """alpha = dt / (rc + dt), rc = 1 / (2*pi*cutoff), dt = 1 / sample_rate."""
        rc = 1.0 / (2 * np.pi * cutoff_hz)
        dt = 1.0 / sample_rate
        return dt / (rc + dt)

    @staticmethod
    def lowpass(waveform: torch.Tensor, sample_rate: int, cutoff_hz: float) -> torch.Tensor:
        """
        One-pole IIR low-pass:
            y[0] = x[0]
            y[i] = y[i-1] + alpha * (x[i] - y[i-1])
        Runs through lfilter on the signal offset by x[0], which starts the
        recurrence from rest and reproduces y[0] = x[0] exactly.
        """
        x = waveform.reshape(-1)
        if x.numel() == 0:
            return x.clone()
        alpha = Filter.lowpass_coefficient(cutoff_hz, sample_rate)
        a_coeffs = torch.tensor([1.0, alpha - 1.0], dtype=x.dtype)
        b_coeffs = torch.tensor([alpha, 0.0], dtype=x.dtype)
        x0 = x[0]
        y = F.lfilter(x - x0, a_coeffs, b_coeffs, clamp=False)
        return y + x0


class Effects:
    @staticmethod
    def soft_clip(waveform: torch.Tensor, drive: float = 2.0) -> torch.Tensor:
        """Soft clipping: tanh(x * drive). Output stays inside (-1, 1)."""
        return torch.tanh(waveform * drive)
