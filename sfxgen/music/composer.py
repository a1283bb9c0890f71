"""
Beat/bar sequencer for the background loop.

Five tracks (bass, melody, arpeggio, drums, sub-bass) are rendered
independently over the whole composition. Each looks up its pattern entry for
the current beat,

    beat_index(t) = floor(t / beat_length) mod total_beats

and applies an envelope keyed to the position inside that beat. Tracks only
meet on the master bus: bass and sub-bass are low-passed, melody and arpeggio
are turned down, then the bus is soft clipped, reverberated and normalized.
"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple, Union

import torch

from sfxgen.core.config import DTYPE, RenderConfig
from sfxgen.dsp.buffer import generate
from sfxgen.dsp.envelopes import Envelope
from sfxgen.dsp.filters import Filter
from sfxgen.dsp.mixer import LayerMixer, LayerSpec
from sfxgen.dsp.noise import Noise
from sfxgen.dsp.oscillators import Oscillator
from sfxgen.dsp.postchain import PostChain, ReverbSpec
from sfxgen.music import patterns

logger = logging.getLogger(__name__)

sin = Oscillator.sine
square = Oscillator.square
adsr = Envelope.adsr
decay = Envelope.exponential_decay
noise = Noise.white

BASS_CUTOFF_HZ = 800.0
SUB_BASS_CUTOFF_HZ = 200.0
MASTER_DRIVE = 1.3
MASTER_REVERB = ReverbSpec(delay_ms=50, feedback=0.15, mix_amount=0.15)

LAYER_SPECS: Dict[str, LayerSpec] = {
    "bass": LayerSpec("bass", gain=1.0),
    "melody": LayerSpec("melody", gain=0.8),
    "arpeggio": LayerSpec("arpeggio", gain=0.7),
    "drums": LayerSpec("drums", gain=1.0),
    "sub_bass": LayerSpec("sub_bass", gain=1.0),
}

TimeLike = Union[float, torch.Tensor]


@dataclass(frozen=True)
class Composition:
    """Tempo, length and per-beat pattern tables for one looping track."""
    bpm: float
    bars: int
    beats_per_bar: int
    bass_notes: Tuple[float, ...]
    melody_notes: Tuple[float, ...]
    drum_pattern: Tuple[int, ...]
    arp_ratios: Tuple[float, ...] = patterns.ARP_RATIOS

    def __post_init__(self):
        for name in ("bass_notes", "melody_notes", "drum_pattern"):
            size = len(getattr(self, name))
            if size != self.total_beats:
                raise ValueError(f"{name} has {size} entries, expected {self.total_beats}")

    @property
    def beat_length(self) -> float:
        return 60.0 / self.bpm

    @property
    def total_beats(self) -> int:
        return self.bars * self.beats_per_bar

    @property
    def duration(self) -> float:
        return self.total_beats * self.beat_length

    def beat_index(self, t: TimeLike) -> TimeLike:
        """Pattern slot for time t, wrapping around after total_beats."""
        if isinstance(t, torch.Tensor):
            return torch.remainder(torch.floor(t / self.beat_length).long(), self.total_beats)
        return int(math.floor(t / self.beat_length)) % self.total_beats

    def bar_index(self, beat_idx: TimeLike) -> TimeLike:
        return beat_idx // self.beats_per_bar

    def local_time(self, t: TimeLike) -> TimeLike:
        """Seconds since the start of the current beat."""
        if isinstance(t, torch.Tensor):
            return torch.remainder(t, self.beat_length)
        return t % self.beat_length

    def table(self, values: Sequence) -> torch.Tensor:
        return torch.tensor(values, dtype=DTYPE)


BGM = Composition(
    bpm=patterns.BPM,
    bars=patterns.BARS,
    beats_per_bar=patterns.BEATS_PER_BAR,
    bass_notes=patterns.BASS_NOTES,
    melody_notes=patterns.MELODY_NOTES,
    drum_pattern=patterns.DRUM_PATTERN,
)


# -----------------------------------------------------------------------------
# Tracks
# -----------------------------------------------------------------------------

def bass_track(comp: Composition, config: RenderConfig) -> torch.Tensor:
    """Punchy pulse bass, retriggered every beat."""
    bass = comp.table(comp.bass_notes)

    def fn(t, i):
        freq = bass[comp.beat_index(t)]
        env = adsr(comp.local_time(t), 0.005, 0.05, 0.7, 0.05, comp.beat_length)
        return square(freq, t, 0.35) * env * 0.25

    return generate(comp.duration, fn, config)


def melody_track(comp: Composition, config: RenderConfig) -> torch.Tensor:
    """Pulse + sine lead with light vibrato; rests are silent."""
    melody = comp.table(comp.melody_notes)
    gate = comp.beat_length * 0.9

    def fn(t, i):
        freq = melody[comp.beat_index(t)]
        vib = 1 + 0.003 * sin(5, t)
        env = adsr(comp.local_time(t), 0.01, 0.08, 0.6, 0.1, gate)
        voice = (square(freq * vib, t, 0.25) * 0.3 + sin(freq * vib, t) * 0.2) * env
        return torch.where(freq > 0, voice, torch.zeros_like(voice))

    return generate(comp.duration, fn, config)


def arpeggio_track(comp: Composition, config: RenderConfig) -> torch.Tensor:
    """Four arpeggio steps per beat over the first bass note of the bar."""
    bass = comp.table(comp.bass_notes)
    ratios = comp.table(comp.arp_ratios)
    steps = len(comp.arp_ratios)
    step_len = comp.beat_length / steps

    def fn(t, i):
        bar = comp.bar_index(comp.beat_index(t))
        root = bass[bar * comp.beats_per_bar]
        step = torch.remainder(torch.floor(comp.local_time(t) / step_len).long(), steps)
        local_t = torch.remainder(t, step_len)
        env = adsr(local_t, 0.003, 0.02, 0.4, 0.02, step_len * 0.8)
        return sin(root * ratios[step], t) * env * 0.12

    return generate(comp.duration, fn, config)


def drum_track(comp: Composition, config: RenderConfig) -> torch.Tensor:
    """Kick, snare and hi-hat voices selected per beat by bit flags and summed."""
    drums = torch.tensor(comp.drum_pattern, dtype=torch.long)

    def fn(t, i):
        hits = drums[comp.beat_index(t)]
        local_t = comp.local_time(t)
        zero = torch.zeros_like(t)

        kick_freq = 150 * torch.exp(-local_t * 25)
        kick = sin(kick_freq, local_t) * decay(local_t, 12) * 0.5 + noise(t) * decay(local_t, 40) * 0.1
        snare = noise(t) * decay(local_t, 15) * 0.3 + sin(200, local_t) * decay(local_t, 20) * 0.15
        hihat = noise(t) * decay(local_t, 35) * 0.15

        out = torch.where((hits & patterns.KICK) != 0, kick, zero)
        out = out + torch.where((hits & patterns.SNARE) != 0, snare, zero)
        out = out + torch.where((hits & patterns.HIHAT) != 0, hihat, zero)
        return out

    return generate(comp.duration, fn, config)


def sub_bass_track(comp: Composition, config: RenderConfig) -> torch.Tensor:
    """Sine one octave under the bass line."""
    sub = comp.table(comp.bass_notes) / 2

    def fn(t, i):
        freq = sub[comp.beat_index(t)]
        env = adsr(comp.local_time(t), 0.01, 0.1, 0.5, 0.05, comp.beat_length)
        return sin(freq, t) * env * 0.15

    return generate(comp.duration, fn, config)


# -----------------------------------------------------------------------------
# Master bus
# -----------------------------------------------------------------------------

def render_tracks(comp: Composition, config: RenderConfig) -> Dict[str, torch.Tensor]:
    """Every track as it enters the bus, bass and sub-bass already low-passed."""
    sr = config.sample_rate
    return {
        "bass": Filter.lowpass(bass_track(comp, config), sr, BASS_CUTOFF_HZ),
        "melody": melody_track(comp, config),
        "arpeggio": arpeggio_track(comp, config),
        "drums": drum_track(comp, config),
        "sub_bass": Filter.lowpass(sub_bass_track(comp, config), sr, SUB_BASS_CUTOFF_HZ),
    }


def compose(comp: Composition, config: RenderConfig) -> torch.Tensor:
    logger.debug(
        "composing %d beats at %.0f BPM (%.3f s)", comp.total_beats, comp.bpm, comp.duration
    )
    mixer = LayerMixer()
    for name, audio in render_tracks(comp, config).items():
        mixer.add(name, audio, LAYER_SPECS[name])
    master = mixer.mix()
    return PostChain.process(
        master,
        config,
        "bgm",
        drive=MASTER_DRIVE,
        reverb_spec=MASTER_REVERB,
        peak=config.music_peak,
    )


def bgm(config: RenderConfig) -> torch.Tensor:
    """The game's background loop."""
    return compose(BGM, config)
