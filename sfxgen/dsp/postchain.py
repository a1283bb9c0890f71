"""
Shared mastering chain, run once at the end of every asset:
optional low-pass -> optional soft clip -> optional reverb -> normalize.
Normalization is always last, so every emitted buffer peaks at the target.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import torch

from sfxgen.core.config import DTYPE, RenderConfig
from sfxgen.dsp.delay import reverb
from sfxgen.dsp.filters import Effects, Filter
from sfxgen.dsp.mixer import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReverbSpec:
    delay_ms: float = 80.0
    feedback: float = 0.3
    mix_amount: float = 0.25


class PostChain:

    @staticmethod
    def _check_finite(buffer: torch.Tensor, name: str) -> None:
        if not bool(torch.isfinite(buffer).all()):
            raise ValueError(f"{name}: buffer contains non-finite samples")

    @classmethod
    def process(
        cls,
        buffer: torch.Tensor,
        config: RenderConfig,
        name: str = "asset",
        lowpass_hz: Optional[float] = None,
        drive: Optional[float] = None,
        reverb_spec: Optional[ReverbSpec] = None,
        peak: Optional[float] = None,
    ) -> torch.Tensor:
        """
        Run the chain. `peak` defaults to config.peak.
        Raises ValueError if any stage produced NaN or infinity.
        """
        x = buffer.reshape(-1).to(DTYPE)

        if lowpass_hz is not None:
            x = Filter.lowpass(x, config.sample_rate, lowpass_hz)

        if drive is not None:
            x = Effects.soft_clip(x, drive)

        if reverb_spec is not None:
            x = reverb(
                x,
                config.sample_rate,
                delay_ms=reverb_spec.delay_ms,
                feedback=reverb_spec.feedback,
                mix_amount=reverb_spec.mix_amount,
            )

        cls._check_finite(x, name)

        target = config.peak if peak is None else peak
        x = normalize(x, target)
        cls._check_finite(x, name)
        logger.debug("%s: mastered %d samples to peak %.3f", name, x.shape[-1], target)
        return x
