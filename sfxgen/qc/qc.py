"""
Quality control for rendered assets.
Checks the mastered buffer (finite, peak at target, length) and the encoded
file as a reader sees it (frames, sample rate, subtype, channels).
"""
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
import soundfile as sf
import torch

from sfxgen.qc.thresholds import QC_THRESHOLDS


def _db(x: float) -> float:
    """Convert linear to dB."""
    if x <= 0:
        return -np.inf
    return 20.0 * np.log10(abs(x))


def _status(failures, warnings) -> str:
    if failures:
        return "FAIL"
    if warnings:
        return "WARN"
    return "PASS"


def analyze(
    audio: torch.Tensor,
    sample_rate: int,
    name: str,
    target_peak: float,
    expected_samples: Optional[int] = None,
) -> Dict:
    """
    Analyze a mastered buffer.

    Returns:
        Dict with metrics and pass/fail flags
    """
    audio = audio.reshape(-1).double()
    failures = []
    warnings = []

    n = int(audio.shape[-1])
    finite = bool(torch.isfinite(audio).all()) if n else True
    peak = float(torch.max(torch.abs(audio))) if n and finite else 0.0
    rms = float(torch.sqrt(torch.mean(audio ** 2) + 1e-12)) if n and finite else 0.0

    metrics = {
        "num_samples": n,
        "duration_s": n / sample_rate,
        "peak_linear": peak,
        "peak_dbfs": _db(peak),
        "rms_linear": rms,
        "rms_dbfs": _db(rms),
        "crest_factor": peak / (rms + 1e-12),
    }

    if not finite:
        failures.append("Buffer contains NaN or Inf samples")

    tolerance = QC_THRESHOLDS["peak_tolerance"]
    if peak > target_peak + tolerance:
        failures.append(f"Peak too high: {peak:.6f} > {target_peak:.6f}")
    elif finite and n and peak < target_peak * QC_THRESHOLDS["peak_min_ratio"]:
        if peak == 0.0:
            warnings.append("Buffer is silent")
        else:
            warnings.append(f"Peak low: {peak:.4f} (target {target_peak:.4f})")

    if expected_samples is not None:
        diff = abs(n - expected_samples)
        if diff > QC_THRESHOLDS["duration_tolerance_samples"]:
            failures.append(f"Length {n} samples, expected {expected_samples}")

    return {
        "name": name,
        "status": _status(failures, warnings),
        "metrics": metrics,
        "failures": failures,
        "warnings": warnings,
    }


def verify_file(path: Union[str, Path], expected_frames: int, sample_rate: int) -> Dict:
    """Read an encoded file's header back with soundfile and check it."""
    failures = []
    info = sf.info(str(path))
    if info.frames != expected_frames:
        failures.append(f"File has {info.frames} frames, expected {expected_frames}")
    if info.samplerate != sample_rate:
        failures.append(f"File sample rate {info.samplerate}, expected {sample_rate}")
    if info.channels != QC_THRESHOLDS["channels"]:
        failures.append(f"File has {info.channels} channels")
    if info.subtype != QC_THRESHOLDS["subtype"]:
        failures.append(f"File subtype {info.subtype}, expected {QC_THRESHOLDS['subtype']}")
    return {
        "path": str(path),
        "status": _status(failures, []),
        "failures": failures,
        "warnings": [],
    }
