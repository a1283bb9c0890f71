from sfxgen.music.composer import BGM, Composition, bgm, compose

__all__ = ["BGM", "Composition", "bgm", "compose"]
