"""
Tonal cues: power-up arpeggio, victory fanfare, defeat, ready-set-go.
"""
from dataclasses import dataclass
from typing import Sequence

import torch

from sfxgen.core.config import DTYPE, RenderConfig
from sfxgen.dsp.buffer import generate
from sfxgen.dsp.envelopes import Envelope
from sfxgen.dsp.oscillators import Oscillator
from sfxgen.dsp.postchain import PostChain, ReverbSpec

sin = Oscillator.sine
adsr = Envelope.adsr
decay = Envelope.exponential_decay

POWERUP_DURATION = 0.45
VICTORY_DURATION = 2.0
DEFEAT_DURATION = 1.2
GAME_START_DURATION = 1.3

VICTORY_REVERB = ReverbSpec(delay_ms=100, feedback=0.2, mix_amount=0.3)


@dataclass(frozen=True)
class NoteEvent:
    """A note sounding from `start` for `length` seconds."""
    freq: float
    start: float
    length: float

    def active(self, t: torch.Tensor) -> torch.Tensor:
        return (t >= self.start) & (t < self.start + self.length)


def _render_events(t: torch.Tensor, events: Sequence[NoteEvent], voice) -> torch.Tensor:
    """Sum voice(event, local_t) over events, each gated to its own window."""
    out = torch.zeros_like(t)
    for event in events:
        local_t = t - event.start
        out = out + torch.where(event.active(t), voice(event, t, local_t), torch.zeros_like(t))
    return out


POWERUP_NOTES = (523.0, 659.0, 784.0, 1047.0)  # C5 E5 G5 C6


def powerup(config: RenderConfig) -> torch.Tensor:
    """Sparkly ascending arpeggio, one ADSR per note."""
    dur = POWERUP_DURATION
    notes = torch.tensor(POWERUP_NOTES, dtype=DTYPE)
    note_len = dur / len(POWERUP_NOTES)

    def arpeggio(t, i):
        idx = torch.clamp(torch.floor(t / note_len).long(), max=len(POWERUP_NOTES) - 1)
        local_t = t - idx.to(DTYPE) * note_len
        freq = notes[idx]
        env = adsr(local_t, 0.005, 0.05, 0.6, 0.05, note_len)
        partials = sin(freq, t) * 0.5 + sin(freq * 2, t) * 0.2 + sin(freq * 3, t) * 0.1
        return partials * env * 0.7

    return PostChain.process(generate(dur, arpeggio, config), config, "powerup")


VICTORY_NOTES = (
    # Rising C major arpeggio
    NoteEvent(523, 0.0, 0.25),
    NoteEvent(659, 0.15, 0.25),
    NoteEvent(784, 0.3, 0.3),
    NoteEvent(1047, 0.5, 0.5),
    # Sustained chord
    NoteEvent(523, 0.8, 1.2),
    NoteEvent(659, 0.8, 1.2),
    NoteEvent(784, 0.8, 1.2),
    NoteEvent(1047, 0.8, 1.2),
)


def victory(config: RenderConfig) -> torch.Tensor:
    """Triumphant fanfare: arpeggio into a held chord, with reverb."""
    dur = VICTORY_DURATION

    def voice(note, t, local_t):
        env = adsr(local_t, 0.01, 0.1, 0.7, 0.15, note.length)
        return (
            sin(note.freq, t) * 0.4
            + sin(note.freq * 2, t) * 0.15
            + sin(note.freq * 0.5, t) * 0.1
        ) * env

    fanfare = generate(dur, lambda t, i: _render_events(t, VICTORY_NOTES, voice) * 0.5, config)
    return PostChain.process(
        fanfare,
        config,
        "victory",
        reverb_spec=VICTORY_REVERB,
    )


def defeat(config: RenderConfig) -> torch.Tensor:
    """Sad glide down an octave every half second, over a low rumble."""
    dur = DEFEAT_DURATION

    def sad(t, i):
        freq = 400 * torch.pow(0.5, t * 2)
        env = decay(t, 1.5)
        main = sin(freq, t) * env * 0.4
        bass = sin(80, t) * decay(t, 2) * 0.3
        dissonant = sin(freq * 1.06, t) * env * 0.15
        return main + bass + dissonant

    return PostChain.process(generate(dur, sad, config), config, "defeat")


GAME_START_BEEPS = (
    NoteEvent(440, 0.0, 0.15),  # Ready
    NoteEvent(440, 0.4, 0.15),  # Set
    NoteEvent(880, 0.8, 0.4),   # Go
)


def game_start(config: RenderConfig) -> torch.Tensor:
    """Ready... Set... GO! beeps, the last one higher and longer."""
    dur = GAME_START_DURATION

    def voice(beep, t, local_t):
        env = adsr(local_t, 0.005, 0.02, 0.8, 0.05, beep.length)
        return sin(beep.freq, t) * env * 0.6 + sin(beep.freq * 2, t) * env * 0.15

    beeps = generate(dur, lambda t, i: _render_events(t, GAME_START_BEEPS, voice), config)
    return PostChain.process(beeps, config, "game-start")
