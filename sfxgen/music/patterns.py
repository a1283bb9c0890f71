"""
Pattern tables for the background loop: 140 BPM, 16 bars of 4 beats, A minor.
One entry per beat. The values are fixed arrangement constants.
"""

BPM = 140
BARS = 16
BEATS_PER_BAR = 4

# Drum voice bit flags; a beat may combine several
KICK = 1
SNARE = 2
HIHAT = 4

REST = 0

# A=220, C=131, E=165, F=175, G=196
BASS_NOTES = (
    # Bars 1-4: Am - Am - F - G
    220, 220, 220, 220,   220, 220, 220, 220,
    175, 175, 175, 175,   196, 196, 196, 196,
    # Bars 5-8: Am - Am - F - E
    220, 220, 220, 220,   220, 220, 220, 220,
    175, 175, 175, 175,   165, 165, 165, 165,
    # Bars 9-12: C - G - Am - Am
    131, 131, 131, 131,   196, 196, 196, 196,
    220, 220, 220, 220,   220, 220, 220, 220,
    # Bars 13-16: F - G - Am - E
    175, 175, 175, 175,   196, 196, 196, 196,
    220, 220, 220, 220,   165, 165, 165, 165,
)

MELODY_NOTES = (
    # Bars 1-4: motif
    440, REST, 523, REST,   494, 440, REST, 392,
    349, REST, 330, REST,   392, REST, REST, REST,
    # Bars 5-8: variation
    440, REST, 523, 587,    523, 494, 440, REST,
    349, 392, 349, 330,     330, REST, REST, REST,
    # Bars 9-12: development
    523, REST, 494, REST,   392, REST, 440, REST,
    440, 523, 587, 523,     440, REST, 392, REST,
    # Bars 13-16: resolution
    349, REST, 349, 392,    392, 440, 494, REST,
    440, REST, REST, 523,   440, REST, REST, REST,
)

_KH = KICK | HIHAT
_SH = SNARE | HIHAT
_H = HIHAT

DRUM_PATTERN = (
    _KH, _H, _SH, _H,   _KH, _H, _SH, _H,
    _KH, _H, _SH, _H,   _KH, _H, _SH, _KH,
    _KH, _H, _SH, _H,   _KH, _H, _SH, _H,
    _KH, _H, _SH, _H,   _KH, _H, _SH, _KH,
    _KH, _H, _SH, _H,   _KH, _H, _SH, _H,
    _KH, _H, _SH, _H,   _KH, _H, _SH, _KH,
    _KH, _H, _SH, _H,   _KH, _H, _SH, _H,
    # Fill on the last bar
    _KH, _H, _SH, _H,   _KH, _SH, _SH, _KH,
)

# Arpeggio ratios over the bar's bass note: octave, ~minor tenth, twelfth, two octaves
ARP_RATIOS = (2.0, 2.4, 3.0, 4.0)
