"""
Impact and movement sounds: bomb placement, explosion, hit, kick, throw, footstep.
Each recipe renders its layers over a fixed duration, sums them and masters
the result through PostChain.
"""
import logging

import torch

from sfxgen.core.config import RenderConfig
from sfxgen.dsp.buffer import generate
from sfxgen.dsp.envelopes import Envelope, lerp
from sfxgen.dsp.mixer import mix
from sfxgen.dsp.noise import Noise
from sfxgen.dsp.oscillators import Oscillator
from sfxgen.dsp.postchain import PostChain, ReverbSpec

logger = logging.getLogger(__name__)

sin = Oscillator.sine
decay = Envelope.exponential_decay
noise = Noise.white

BOMB_PLACE_DURATION = 0.25
EXPLOSION_DURATION = 0.8
DEATH_DURATION = 0.5
KICK_DURATION = 0.3
THROW_DURATION = 0.35
WALK_DURATION = 0.12

EXPLOSION_REVERB = ReverbSpec(delay_ms=60, feedback=0.25, mix_amount=0.2)


def bomb_place(config: RenderConfig) -> torch.Tensor:
    """Chunky placement: falling thud + noise click + short tone."""
    dur = BOMB_PLACE_DURATION
    thud = generate(dur, lambda t, i: sin(120 * decay(t, 15), t) * decay(t, 8) * 0.7, config)
    click = generate(dur, lambda t, i: noise(t) * decay(t, 60) * 0.4, config)
    tone = generate(dur, lambda t, i: sin(300, t) * decay(t, 20) * 0.3, config)
    return PostChain.process(mix(thud, click, tone), config, "bomb-place")


def _crackle_env(t: torch.Tensor) -> torch.Tensor:
    # 50 ms linear rise, then exponential fall
    return torch.where(t < 0.05, t / 0.05, decay(t - 0.05, 5))


def explosion(config: RenderConfig) -> torch.Tensor:
    """Noise burst + low rumble + gated crackle, darkened, saturated and reverberated."""
    dur = EXPLOSION_DURATION
    burst = generate(dur, lambda t, i: noise(t) * decay(t, 4) * 0.8, config)
    rumble = generate(
        dur,
        lambda t, i: sin(60 + 40 * decay(t, 3), t) * decay(t, 2.5) * 0.6,
        config,
    )
    crackle = generate(
        dur,
        lambda t, i: noise(t) * _crackle_env(t) * 0.5 * Noise.gate(t, 0.7),
        config,
    )
    cutoff = 3000.0 + 2000.0 * float(torch.rand(1))
    logger.debug("explosion: low-pass cutoff %.1f Hz", cutoff)
    return PostChain.process(
        mix(burst, rumble, crackle),
        config,
        "explosion",
        lowpass_hz=cutoff,
        drive=1.5,
        reverb_spec=EXPLOSION_REVERB,
    )


def death(config: RenderConfig) -> torch.Tensor:
    """Damage hit: noise impact + falling ring + low thud."""
    dur = DEATH_DURATION
    impact = generate(dur, lambda t, i: noise(t) * decay(t, 12) * 0.6, config)
    ring = generate(dur, lambda t, i: sin(800 - 400 * t, t) * decay(t, 6) * 0.4, config)
    thud = generate(dur, lambda t, i: sin(100 * decay(t, 10), t) * decay(t, 8) * 0.5, config)
    return PostChain.process(mix(impact, ring, thud), config, "death", lowpass_hz=4000)


def kick(config: RenderConfig) -> torch.Tensor:
    """Foot hitting the bomb: noise swoosh + pitched impact + snap."""
    dur = KICK_DURATION
    swoosh = generate(
        dur,
        lambda t, i: noise(t) * Envelope.adsr(t, 0.01, 0.1, 0.3, 0.1, dur) * 0.4,
        config,
    )
    impact = generate(dur, lambda t, i: sin(200 * decay(t, 12), t) * decay(t, 10) * 0.7, config)
    snap = generate(dur, lambda t, i: noise(t) * decay(t, 40) * 0.5, config)
    return PostChain.process(mix(swoosh, impact, snap), config, "kick", lowpass_hz=5000)


def throw(config: RenderConfig) -> torch.Tensor:
    """Whoosh: Gaussian-enveloped noise with a rising tonal component."""
    dur = THROW_DURATION
    center = 0.15
    width = 0.06

    def whoosh(t, i):
        env = torch.exp(-((t - center) ** 2) / (2 * width ** 2))
        tonal = sin(lerp(300, 800, t / dur), t) * env * 0.2
        return noise(t) * env * 0.6 + tonal

    return PostChain.process(generate(dur, whoosh, config), config, "throw")


def walk(config: RenderConfig) -> torch.Tensor:
    """Soft footstep."""
    dur = WALK_DURATION
    step = generate(dur, lambda t, i: (noise(t) * 0.5 + sin(200, t) * 0.2) * decay(t, 20), config)
    return PostChain.process(step, config, "walk")
