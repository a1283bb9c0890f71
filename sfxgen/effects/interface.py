"""Menu and HUD sounds."""
import torch

from sfxgen.core.config import RenderConfig
from sfxgen.dsp.buffer import generate
from sfxgen.dsp.envelopes import Envelope
from sfxgen.dsp.noise import Noise
from sfxgen.dsp.oscillators import Oscillator
from sfxgen.dsp.postchain import PostChain

sin = Oscillator.sine
decay = Envelope.exponential_decay
noise = Noise.white

MENU_SELECT_DURATION = 0.1
MENU_CLICK_DURATION = 0.15
COUNTDOWN_TICK_DURATION = 0.08


def menu_select(config: RenderConfig) -> torch.Tensor:
    """Quick bright blip for moving the selection."""
    dur = MENU_SELECT_DURATION

    def blip(t, i):
        env = Envelope.adsr(t, 0.003, 0.03, 0.4, 0.04, dur)
        return sin(660, t) * env * 0.5 + sin(1320, t) * env * 0.2

    return PostChain.process(generate(dur, blip, config), config, "menu-select")


def menu_click(config: RenderConfig) -> torch.Tensor:
    """Snappy confirm: tonal pop + noise click."""
    dur = MENU_CLICK_DURATION

    def click(t, i):
        pop = sin(1200, t) * decay(t, 25) * 0.4
        return pop + noise(t) * decay(t, 50) * 0.3

    return PostChain.process(generate(dur, click, config), config, "menu-click")


def countdown_tick(config: RenderConfig) -> torch.Tensor:
    dur = COUNTDOWN_TICK_DURATION
    tick = generate(dur, lambda t, i: (sin(1000, t) * 0.4 + noise(t) * 0.2) * decay(t, 30), config)
    return PostChain.process(tick, config, "countdown-tick")
