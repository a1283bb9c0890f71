from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class EncodedAsset:
    name: str
    data: bytes  # complete RIFF/WAVE file
    num_samples: int
    sample_rate: int

    @property
    def filename(self) -> str:
        return f"{self.name}.wav"

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass
class RenderReport:
    name: str
    path: Path
    size_bytes: int
    elapsed_ms: float
    num_samples: int
    qc_result: Optional[dict] = None

    @property
    def size_kb(self) -> float:
        return self.size_bytes / 1024.0
