import logging
import random
import typing

import chordpad.arpeggiator
import chordpad.chords
import chordpad.constants
import chordpad.event_emitter
import chordpad.metronome
import chordpad.player
import chordpad.scales
import chordpad.sequencer
import chordpad.transport
import chordpad.voicings


logger = logging.getLogger(__name__)

# Digit keys 1-7 play degrees I-vii.
DEGREE_KEYS: typing.Dict[str, int] = {str(i + 1): i for i in range(chordpad.scales.DEGREE_COUNT)}


class ChordPad:

	"""
	The playable chord pad.

	Holds the live settings (key, octave, inversion, modifier, play mode and
	arpeggio options), plays chords on scale degrees through the injected
	note trigger, and captures them into the sequencer when a slot is armed.

	Example:
		```python
		pad = chordpad.ChordPad(trigger, key="G")
		pad.set_modifier("seventh")
		pad.play_degree(4)          # D Major 7th
		pad.last_label              # "D Major 7th"
		```
	"""

	def __init__ (
		self,
		trigger: chordpad.player.NoteTrigger,
		key: str = "C",
		octave: int = chordpad.constants.DEFAULT_OCTAVE,
		bpm: float = chordpad.constants.DEFAULT_BPM,
		rng: typing.Optional[random.Random] = None
	) -> None:

		"""Create a pad and its sequencer, transport and metronome.

		Parameters:
			trigger: Note trigger capability shared by every component.
			key: Initial key.
			octave: Initial octave, clamped to 2-6.
			bpm: Initial tempo of the sequencer and metronome.
			rng: Random source for the ``"random"`` arpeggio pattern.
		"""

		self.player = chordpad.player.NotePlayer(trigger)
		self.sequencer = chordpad.sequencer.Sequencer(player=self.player, bpm=bpm)
		self.transport = chordpad.transport.Transport(self.sequencer)
		self.metronome = chordpad.metronome.Metronome(self.player, bpm=bpm)
		self.events = chordpad.event_emitter.EventEmitter()
		self.rng = rng

		self.key = chordpad.scales.normalize_key(key)
		self.octave = chordpad.constants.DEFAULT_OCTAVE
		self.inversion = 0
		self.modifier = chordpad.chords.PLAIN
		self.play_mode = chordpad.constants.PLAY_MODE_CHORD
		self.arp_pattern = chordpad.arpeggiator.UP
		self.arp_speed = chordpad.constants.DEFAULT_ARP_SPEED
		self.note_length = chordpad.constants.DEFAULT_NOTE_LENGTH

		self.last_label = ""
		self.last_notes: typing.List[str] = []

		self.set_octave(octave)


	# Settings

	def set_key (self, key: str) -> None:

		self.key = chordpad.scales.normalize_key(key)
		logger.debug(f"Key: {self.key}")


	def set_octave (self, octave: int) -> int:

		"""Set the octave, clamped to 2-6. Returns the stored value."""

		self.octave = max(chordpad.constants.MIN_OCTAVE, min(chordpad.constants.MAX_OCTAVE, int(octave)))

		return self.octave


	def shift_inversion (self, delta: int) -> int:

		"""Move the inversion up or down, clamped to 0-2."""

		self.inversion = max(0, min(chordpad.constants.MAX_INVERSION, self.inversion + delta))

		return self.inversion


	def set_modifier (self, modifier: str) -> None:

		"""Select the chord modifier. Names outside ``MODIFIERS`` play the root alone."""

		if modifier not in chordpad.chords.MODIFIERS:
			logger.debug(f"Unknown modifier {modifier!r} - chords will play the root only")

		self.modifier = modifier


	def set_play_mode (self, play_mode: str) -> None:

		if play_mode not in chordpad.constants.PLAY_MODES:
			raise ValueError(f"Unknown play mode {play_mode!r}. Expected one of {chordpad.constants.PLAY_MODES}")

		self.play_mode = play_mode


	def set_arp_pattern (self, pattern: str) -> None:

		if pattern not in chordpad.arpeggiator.ARP_ORDERS:
			raise ValueError(f"Unknown arpeggio pattern {pattern!r}. Expected one of {chordpad.arpeggiator.ARP_ORDERS}")

		self.arp_pattern = pattern


	def set_arp_speed (self, seconds: float) -> None:

		"""Gap between arpeggio notes, in seconds."""

		if seconds <= 0:
			raise ValueError("Arpeggio speed must be positive")

		self.arp_speed = seconds


	def set_note_length (self, seconds: float) -> None:

		if seconds <= 0:
			raise ValueError("Note length must be positive")

		self.note_length = seconds


	# Playing

	def button_labels (self) -> typing.List[str]:

		"""Numerals for the seven degree buttons."""

		return list(chordpad.scales.ROMAN_NUMERALS)


	def chord_for (self, degree: int) -> chordpad.chords.Chord:

		"""Build the chord a degree button would play with the current settings."""

		chord = chordpad.chords.build_chord(self.key, degree, self.modifier, self.octave)

		return chordpad.voicings.invert_chord(chord, self.inversion)


	def play_degree (self, degree: int) -> chordpad.chords.Chord:

		"""Play the chord on a scale degree.

		The chord is shown as the last played chord, captured into the armed
		sequencer slot if there is one, and triggered as a chord or arpeggio.
		"""

		chord = self.chord_for(degree)

		self.last_label = chord.label
		self.last_notes = chord.names()
		self.events.emit("chord_played", chord.label, chord.names())

		self.sequencer.capture_chord(chord, self.octave, self.play_mode)
		self.player.dispatch(self.trigger_events(chord))

		return chord


	def play_numeral (self, text: str) -> chordpad.chords.Chord:

		"""Play by numeral (``"IV"``, ``"vi"``). Unknown numerals play the tonic."""

		return self.play_degree(chordpad.scales.degree_from_numeral(text))


	def handle_key (self, key: str) -> typing.Optional[chordpad.chords.Chord]:

		"""Play the degree bound to a digit key, or return ``None`` for other keys."""

		degree = DEGREE_KEYS.get(key)

		if degree is None:
			return None

		return self.play_degree(degree)


	def trigger_events (self, chord: chordpad.chords.Chord) -> typing.List[chordpad.player.TriggerEvent]:

		"""Trigger events for live play with the current play mode."""

		if self.play_mode == chordpad.constants.PLAY_MODE_ARP:
			ordered = chordpad.arpeggiator.arpeggiate(chord.pitches(), self.arp_pattern, self.rng)
			return chordpad.player.arpeggio_events(ordered, self.note_length, self.arp_speed)

		return chordpad.player.chord_events(chord.pitches(), self.note_length)


	def keyboard (self) -> typing.List[chordpad.scales.KeyInfo]:

		"""Scale visualiser data for the current key and last played notes."""

		return chordpad.scales.describe_keyboard(self.key, self.last_notes)


	async def close (self) -> None:

		"""Stop the transport and metronome and drop every pending trigger."""

		await self.transport.stop()
		await self.metronome.stop()
		self.player.cancel_pending()
