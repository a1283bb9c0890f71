"""
Bus utilities: mix, gain, normalize, and a named-layer mixer for multi-track buses.
All functions return new tensors; inputs are never modified.
"""
import math
from dataclasses import dataclass
from typing import Dict, Optional

import torch

from sfxgen.core.config import DTYPE


def _pad_to(buffer: torch.Tensor, length: int) -> torch.Tensor:
    """Right-pad with silence up to length."""
    n = buffer.shape[-1]
    if n >= length:
        return buffer
    return torch.nn.functional.pad(buffer, (0, length - n))


def mix(*buffers: torch.Tensor) -> torch.Tensor:
    """
    Sum buffers sample by sample. Output length is the longest input; shorter
    inputs contribute silence past their end. No gain compensation.
    """
    if not buffers:
        return torch.zeros(0, dtype=DTYPE)
    length = max(b.shape[-1] for b in buffers)
    out = torch.zeros(length, dtype=DTYPE)
    for b in buffers:
        out = out + _pad_to(b.to(DTYPE), length)
    return out


def gain(buffer: torch.Tensor, g: float) -> torch.Tensor:
    return buffer * g


def peak(buffer: torch.Tensor) -> float:
    """Maximum absolute sample value (0.0 for an empty buffer)."""
    if buffer.numel() == 0:
        return 0.0
    return float(torch.max(torch.abs(buffer)))


def normalize(buffer: torch.Tensor, target: float = 0.95) -> torch.Tensor:
    """
    Scale so max(|x|) == target. A silent, empty or near-silent buffer whose
    scale factor would overflow is returned as is.
    """
    current = peak(buffer)
    if current == 0.0:
        return buffer
    scale = target / current
    if not math.isfinite(scale):
        return buffer
    return buffer * scale


# -----------------------------------------------------------------------------
# Layer mixer
# -----------------------------------------------------------------------------

@dataclass
class LayerSpec:
    """Linear gain for a named layer."""
    name: str
    gain: float = 1.0


class LayerMixer:
    """
    Mix named layers with per-layer linear gain.
    Layers of different lengths are padded to the longest.
    """

    def __init__(self):
        self._layers: Dict[str, torch.Tensor] = {}
        self._specs: Dict[str, LayerSpec] = {}

    def add(self, name: str, audio: torch.Tensor, spec: Optional[LayerSpec] = None) -> None:
        """Register a layer. Same name overwrites."""
        self._layers[name] = audio
        self._specs[name] = spec or LayerSpec(name)

    def mix(self) -> torch.Tensor:
        """Sum all layers after applying their gain."""
        if not self._layers:
            return torch.zeros(0, dtype=DTYPE)
        return mix(*(
            gain(layer.reshape(-1).to(DTYPE), self._specs[name].gain)
            for name, layer in self._layers.items()
        ))
