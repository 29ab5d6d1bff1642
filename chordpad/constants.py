"""Limits and defaults shared by the chordpad engine.

Tempo values are whole beats per minute. Time values (arp stagger, note
length) are in seconds, because the note trigger capability works in seconds.
"""

# Tempo

MIN_BPM = 40
MAX_BPM = 240
DEFAULT_BPM = 120
TEMPO_STEP = 10
METRONOME_TEMPO_STEP = 5

# Pad settings

MIN_OCTAVE = 2
MAX_OCTAVE = 6
DEFAULT_OCTAVE = 4
MAX_INVERSION = 2

DEFAULT_ARP_SPEED = 0.15
DEFAULT_NOTE_LENGTH = 0.5

# Sequencer

ROW_LENGTH = 8
REST_LABEL = "REST"
SEQUENCER_ARP_STAGGER = 0.1

PLAY_MODE_CHORD = "chord"
PLAY_MODE_ARP = "arp"
PLAY_MODES = (PLAY_MODE_CHORD, PLAY_MODE_ARP)

# Metronome

METRONOME_ACCENT_NOTE = "C5"
METRONOME_CLICK_NOTE = "C4"
METRONOME_TIME_SIGNATURES = (3, 4, 5, 6)


def clamp_bpm (bpm: float) -> int:

	"""Round a tempo to a whole BPM inside the supported range."""

	return int(max(MIN_BPM, min(MAX_BPM, round(bpm))))
