"""
RIFF/WAVE container encoding (16-bit PCM, mono) and read-back.
The 44-byte header is packed field by field so the layout is exact:
RIFF size | WAVE | fmt (16, PCM=1, 1 ch, rate, byte rate, align 2, 16 bit) | data.
"""
import logging
import struct
from pathlib import Path
from typing import Tuple, Union

import numpy as np
import soundfile as sf
import torch

from sfxgen.core.types import EncodedAsset

logger = logging.getLogger(__name__)

PCM_FORMAT = 1
NUM_CHANNELS = 1
BITS_PER_SAMPLE = 16
BLOCK_ALIGN = NUM_CHANNELS * BITS_PER_SAMPLE // 8
INT16_MAX = 32767
HEADER_SIZE = 44


class AudioIO:
    @staticmethod
    def to_pcm16(waveform: Union[torch.Tensor, np.ndarray]) -> np.ndarray:
        """Clamp to [-1, 1], scale by 32767 and round to nearest. Returns little-endian int16."""
        if isinstance(waveform, torch.Tensor):
            data = waveform.detach().cpu().double().numpy()
        else:
            data = np.asarray(waveform, dtype=np.float64)
        data = np.clip(data.reshape(-1), -1.0, 1.0)
        return np.rint(data * INT16_MAX).astype("<i2")

    @staticmethod
    def wav_header(num_samples: int, sample_rate: int) -> bytes:
        data_size = num_samples * BLOCK_ALIGN
        byte_rate = sample_rate * BLOCK_ALIGN
        return b"".join((
            b"RIFF",
            struct.pack("<I", 36 + data_size),
            b"WAVE",
            b"fmt ",
            struct.pack("<I", 16),
            struct.pack("<H", PCM_FORMAT),
            struct.pack("<H", NUM_CHANNELS),
            struct.pack("<I", sample_rate),
            struct.pack("<I", byte_rate),
            struct.pack("<H", BLOCK_ALIGN),
            struct.pack("<H", BITS_PER_SAMPLE),
            b"data",
            struct.pack("<I", data_size),
        ))

    @staticmethod
    def to_bytes(waveform: Union[torch.Tensor, np.ndarray], sample_rate: int) -> bytes:
        """Returns a complete WAV file as bytes."""
        pcm = AudioIO.to_pcm16(waveform)
        return AudioIO.wav_header(len(pcm), sample_rate) + pcm.tobytes()

    @staticmethod
    def encode(name: str, waveform: torch.Tensor, sample_rate: int) -> EncodedAsset:
        data = AudioIO.to_bytes(waveform, sample_rate)
        num_samples = (len(data) - HEADER_SIZE) // BLOCK_ALIGN
        return EncodedAsset(name=name, data=data, num_samples=num_samples, sample_rate=sample_rate)

    @staticmethod
    def save_wav(asset: EncodedAsset, directory: Union[str, Path]) -> Path:
        """Writes the asset as <directory>/<name>.wav, overwriting any existing file."""
        path = Path(directory) / asset.filename
        path.write_bytes(asset.data)
        logger.debug("wrote %s (%d bytes)", path, asset.size_bytes)
        return path

    @staticmethod
    def read_wav(path: Union[str, Path]) -> Tuple[np.ndarray, int]:
        """Reads a WAV file back as int16 samples."""
        data, sample_rate = sf.read(str(path), dtype="int16")
        return data, sample_rate
