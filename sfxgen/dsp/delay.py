"""
Feedback comb filter and the reverb built on it.
feedback must stay below 1 for the recursion to decay; this is not checked here.
"""
import math

import torch

from sfxgen.dsp.envelopes import ms_to_s


def comb_feedback(waveform: torch.Tensor, delay_samples: int, feedback: float) -> torch.Tensor:
    """
    w[i] = x[i] + feedback * w[i - delay_samples], recursion starting once
    delay_samples of history exist.

    Processed one delay-length block at a time: every block only reads the
    previous, already final, block.
    """
    x = waveform.reshape(-1)
    n = x.shape[-1]
    if delay_samples <= 0:
        # Zero delay feeds each sample back onto itself once
        return x * (1.0 + feedback)
    wet = x.clone()
    for start in range(delay_samples, n, delay_samples):
        end = min(start + delay_samples, n)
        wet[start:end] = x[start:end] + wet[start - delay_samples:end - delay_samples] * feedback
    return wet


def reverb(
    waveform: torch.Tensor,
    sample_rate: int,
    delay_ms: float = 80.0,
    feedback: float = 0.3,
    mix_amount: float = 0.25,
) -> torch.Tensor:
    """
    Comb-filter reverb: dry * (1 - mix_amount) + wet * mix_amount,
    delay = floor(delay_ms / 1000 * sample_rate) samples.
    """
    delay_samples = int(math.floor(ms_to_s(delay_ms) * sample_rate))
    dry = waveform.reshape(-1)
    wet = comb_feedback(dry, delay_samples, feedback)
    return dry * (1.0 - mix_amount) + wet * mix_amount
