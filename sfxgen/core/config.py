"""
Render configuration shared by every synthesis, mastering and encoding call.
Immutable; pass it explicitly instead of reading module globals.
"""
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Union

import torch

SAMPLE_RATE = 44100
DEFAULT_PEAK = 0.95
MUSIC_PEAK = 0.85
DEFAULT_OUTPUT_DIR = Path("public") / "sounds"

# All buffers are float64 tensors
DTYPE = torch.float64


@dataclass(frozen=True)
class RenderConfig:
    sample_rate: int = SAMPLE_RATE
    peak: float = DEFAULT_PEAK
    music_peak: float = MUSIC_PEAK
    output_dir: Path = DEFAULT_OUTPUT_DIR

    def num_samples(self, duration: float) -> int:
        """Sample count for a duration: floor(duration * sample_rate), never negative."""
        if duration <= 0:
            return 0
        return int(math.floor(duration * self.sample_rate))

    def with_output_dir(self, output_dir: Union[str, Path]) -> "RenderConfig":
        return replace(self, output_dir=Path(output_dir))


DEFAULT_CONFIG = RenderConfig()
