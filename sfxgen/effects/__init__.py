"""
Sound effect recipes, keyed by asset id (also the output file stem).
"""
from typing import Callable, Dict

import torch

from sfxgen.core.config import RenderConfig
from sfxgen.dsp.postchain import ReverbSpec
from sfxgen.effects import impacts, interface, jingles
from sfxgen.effects.impacts import bomb_place, death, explosion, kick, throw, walk
from sfxgen.effects.interface import countdown_tick, menu_click, menu_select
from sfxgen.effects.jingles import defeat, game_start, powerup, victory

Recipe = Callable[[RenderConfig], torch.Tensor]

SOUND_EFFECTS: Dict[str, Recipe] = {
    "bomb-place": bomb_place,
    "explosion": explosion,
    "powerup": powerup,
    "victory": victory,
    "defeat": defeat,
    "game-start": game_start,
    "death": death,
    "menu-select": menu_select,
    "menu-click": menu_click,
    "kick": kick,
    "throw": throw,
    "countdown-tick": countdown_tick,
    "walk": walk,
}

# Nominal duration (seconds) of every recipe
EFFECT_DURATIONS: Dict[str, float] = {
    "bomb-place": impacts.BOMB_PLACE_DURATION,
    "explosion": impacts.EXPLOSION_DURATION,
    "powerup": jingles.POWERUP_DURATION,
    "victory": jingles.VICTORY_DURATION,
    "defeat": jingles.DEFEAT_DURATION,
    "game-start": jingles.GAME_START_DURATION,
    "death": impacts.DEATH_DURATION,
    "menu-select": interface.MENU_SELECT_DURATION,
    "menu-click": interface.MENU_CLICK_DURATION,
    "kick": impacts.KICK_DURATION,
    "throw": impacts.THROW_DURATION,
    "countdown-tick": interface.COUNTDOWN_TICK_DURATION,
    "walk": impacts.WALK_DURATION,
}

# Reverb settings used by the recipes that have one
EFFECT_REVERBS: Dict[str, ReverbSpec] = {
    "explosion": impacts.EXPLOSION_REVERB,
    "victory": jingles.VICTORY_REVERB,
}

__all__ = ["SOUND_EFFECTS", "EFFECT_DURATIONS", "EFFECT_REVERBS", "Recipe"]
