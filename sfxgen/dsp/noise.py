from typing import Optional

import torch


class Noise:
    @staticmethod
    def white(t: torch.Tensor, generator: Optional[torch.Generator] = None) -> torch.Tensor:
        """Uniform white noise in [-1, 1), one independent draw per sample of t."""
        u = torch.rand(t.shape, dtype=t.dtype, device=t.device, generator=generator)
        return u * 2 - 1

    @staticmethod
    def gate(t: torch.Tensor, probability: float, generator: Optional[torch.Generator] = None) -> torch.Tensor:
        """
        Random on/off mask: 1 with the given probability, else 0, per sample.
        Used for crackle textures.
        """
        u = torch.rand(t.shape, dtype=t.dtype, device=t.device, generator=generator)
        return (u < probability).to(t.dtype)
