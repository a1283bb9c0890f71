import torch
from typing import Union

Number = Union[float, torch.Tensor]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def ms_to_s(ms: float) -> float:
    """Convert milliseconds to seconds."""
    return ms / 1000.0


def lerp(a: Number, b: Number, x: Number) -> Number:
    """Linear interpolation from a (x=0) to b (x=1)."""
    return a + (b - a) * x


# -----------------------------------------------------------------------------
# Envelopes: pure time -> multiplier mappings
# -----------------------------------------------------------------------------

class Envelope:
    @staticmethod
    def exponential_decay(t: torch.Tensor, rate: float) -> torch.Tensor:
        """
        exp(-rate * t). Higher rate decays faster. t is expected to be >= 0.
        """
        return torch.exp(-rate * t)

    @staticmethod
    def adsr(
        t: torch.Tensor,
        attack: float,
        decay: float,
        sustain: float,
        release: float,
        duration: float,
    ) -> torch.Tensor:
        """
        Piecewise-linear ADSR over [0, duration).

        Attack ramps 0 -> 1, decay ramps 1 -> sustain, sustain holds until
        duration - release, release ramps sustain -> 0 at duration. Zero at and
        beyond duration.

        Segment boundaries are clamped so that
        attack_end <= decay_end <= release_start <= duration; when
        attack + decay exceeds duration the later segments simply never start.
        Zero-length segments are skipped, so the result is always finite.
        """
        t = torch.as_tensor(t, dtype=torch.float64)
        attack_end = min(max(attack, 0.0), duration)
        decay_end = min(max(attack + decay, attack_end), duration)
        release_start = min(max(duration - release, decay_end), duration)

        # Build back to front so earlier segments take precedence
        env = torch.zeros_like(t)
        if release > 0:
            release_val = sustain * (duration - t) / release
            env = torch.where(t < duration, release_val, env)
        env = torch.where(t < release_start, torch.full_like(t, sustain), env)
        if decay > 0:
            decay_val = 1.0 - (1.0 - sustain) * ((t - attack) / decay)
            env = torch.where(t < decay_end, decay_val, env)
        if attack > 0:
            env = torch.where(t < attack_end, t / attack, env)
        return env
