"""
Render, encode and write assets.
Every asset is rendered fully in memory, encoded, then written as
<output_dir>/<name>.wav. The first filesystem error aborts the run.
"""
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import torch

from sfxgen.core.config import RenderConfig
from sfxgen.core.io import AudioIO
from sfxgen.core.types import RenderReport
from sfxgen.effects import EFFECT_DURATIONS, SOUND_EFFECTS, Recipe
from sfxgen.music.composer import BGM, bgm
from sfxgen.qc import analyze, verify_file

logger = logging.getLogger(__name__)

ASSETS: Dict[str, Recipe] = {**SOUND_EFFECTS, "bgm": bgm}
MUSIC_ASSETS = frozenset({"bgm"})


def asset_names() -> List[str]:
    return list(ASSETS)


def target_peak(name: str, config: RenderConfig) -> float:
    return config.music_peak if name in MUSIC_ASSETS else config.peak


def expected_samples(name: str, config: RenderConfig) -> int:
    if name == "bgm":
        return config.num_samples(BGM.duration)
    return config.num_samples(EFFECT_DURATIONS[name])


def render_asset(name: str, config: RenderConfig, seed: Optional[int] = None) -> torch.Tensor:
    """
    Render one asset to a mastered buffer. Raises KeyError for an unknown name.
    With a seed, noise layers are reproducible on the same platform.
    """
    recipe = ASSETS[name]
    if seed is not None:
        torch.manual_seed(seed)
    return recipe(config)


class Exporter:
    def __init__(self, config: RenderConfig, seed: Optional[int] = None, qc: bool = False):
        self.config = config
        self.seed = seed
        self.qc = qc

    def prepare_output_dir(self) -> Path:
        out = Path(self.config.output_dir)
        try:
            out.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.error("cannot create output directory %s", out)
            raise
        return out

    def export_asset(self, name: str) -> RenderReport:
        start = time.perf_counter()
        audio = render_asset(name, self.config, self.seed)
        asset = AudioIO.encode(name, audio, self.config.sample_rate)
        try:
            path = AudioIO.save_wav(asset, self.config.output_dir)
        except OSError:
            logger.error("failed to write %s to %s", asset.filename, self.config.output_dir)
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        qc_result = None
        if self.qc:
            qc_result = analyze(
                audio,
                self.config.sample_rate,
                name,
                target_peak(name, self.config),
                expected_samples(name, self.config),
            )
            file_result = verify_file(path, asset.num_samples, self.config.sample_rate)
            qc_result["failures"].extend(file_result["failures"])
            if file_result["failures"]:
                qc_result["status"] = "FAIL"

        logger.info("%s: %d samples, %d bytes, %.0f ms", name, asset.num_samples, asset.size_bytes, elapsed_ms)
        return RenderReport(
            name=name,
            path=path,
            size_bytes=asset.size_bytes,
            elapsed_ms=elapsed_ms,
            num_samples=asset.num_samples,
            qc_result=qc_result,
        )

    def export_all(
        self,
        names: Optional[Iterable[str]] = None,
        on_report: Optional[Callable[[RenderReport], None]] = None,
    ) -> List[RenderReport]:
        """
        Export the named assets (all by default) in registry order.
        Unknown names raise KeyError before anything is written.
        """
        selected = asset_names() if names is None else list(names)
        unknown = [n for n in selected if n not in ASSETS]
        if unknown:
            raise KeyError(f"unknown asset(s): {', '.join(unknown)}")

        self.prepare_output_dir()
        reports = []
        for name in selected:
            report = self.export_asset(name)
            reports.append(report)
            if on_report is not None:
                on_report(report)
        return reports
