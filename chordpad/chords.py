"""Chord construction from a key, a scale degree and a modifier.

A chord is always built in the key's major scale. Diatonic modifiers (triad,
seventh, ninth, sus2, sus4) take every tone from the scale so the key
signature is preserved. Chromatic modifiers (diminished, augmented) stack fixed
semitone offsets on the root, and the dominant seventh mixes the two: diatonic
third and fifth with a flat seventh ten semitones above the root.

All tones share the requested octave except the ninth of a ninth chord, which
is raised one octave. No wrap correction is applied, so the fifth of a chord
built high in the scale may sit below its root.

Module-level constants:
- `MODIFIERS`: All modifier names in pad order
- `MODIFIER_SHORT_NAMES`: Button captions for each modifier
- `CHORD_TONES`: Maps modifier names to tone functions

Example:
	```python
	chord = build_chord("C", 0, "dominant_7th", octave=4)
	chord.pitches()  # ["C4", "E4", "G4", "A#4"]
	chord.label      # "C Dominant 7th"
	```
"""

import dataclasses
import logging
import re
import typing

import chordpad.scales


logger = logging.getLogger(__name__)

NOTE_PATTERN = re.compile(r"^([A-G][#b]?)(-?\d+)$")

PLAIN = "plain"
TRIAD = "triad"
DIMINISHED = "diminished"
AUGMENTED = "augmented"
DOMINANT_7TH = "dominant_7th"
SEVENTH = "seventh"
NINTH = "ninth"
SUS2 = "sus2"
SUS4 = "sus4"

MODIFIERS: typing.Tuple[str, ...] = (PLAIN, TRIAD, DIMINISHED, AUGMENTED, DOMINANT_7TH, SEVENTH, NINTH, SUS2, SUS4)

MODIFIER_SHORT_NAMES: typing.Dict[str, str] = {
	PLAIN: "neutral",
	TRIAD: "min/maj",
	DIMINISHED: "dim",
	AUGMENTED: "aug",
	DOMINANT_7TH: "7th",
	SEVENTH: "maj7",
	NINTH: "add9",
	SUS2: "sus2",
	SUS4: "sus4",
}

# A tone is a pitch class name and an octave offset from the chord's octave.
Tone = typing.Tuple[str, int]
ToneFunction = typing.Callable[[str, int], typing.List[Tone]]


@dataclasses.dataclass(frozen=True)
class Note:

	"""
	A pitch class in a specific octave. ``str(Note("C#", 5)) == "C#5"``.
	"""

	pitch_class: str
	octave: int


	@classmethod
	def parse (cls, text: str) -> "Note":

		"""Parse ``"C#5"`` style text. Flat spellings are normalised to sharps.

		Raises:
			ValueError: If the text is not a pitch class followed by an octave.
		"""

		match = NOTE_PATTERN.match(text.strip())

		if match is None:
			raise ValueError(f"Invalid note: {text!r}. Expected e.g. 'C4', 'F#5'.")

		return cls(chordpad.scales.normalize_key(match.group(1)), int(match.group(2)))


	@property
	def midi (self) -> int:

		"""MIDI note number with C4 = 60. Not clamped to 0-127."""

		return (self.octave + 1) * 12 + chordpad.scales.key_name_to_pc(self.pitch_class)


	def shifted (self, octaves: int) -> "Note":

		"""Return the same pitch class moved by a number of octaves."""

		return Note(self.pitch_class, self.octave + octaves)


	def __str__ (self) -> str:

		return f"{self.pitch_class}{self.octave}"


@dataclasses.dataclass(frozen=True)
class Chord:

	"""
	An ordered voicing of notes with a display label.
	"""

	notes: typing.Tuple[Note, ...]
	label: str


	def __post_init__ (self) -> None:

		if not self.notes:
			raise ValueError("A chord needs at least one note")


	def names (self) -> typing.List[str]:

		"""Pitch class names for display, without octaves."""

		return [note.pitch_class for note in self.notes]


	def pitches (self) -> typing.List[str]:

		"""Full note names for playback (``"C4"``)."""

		return [str(note) for note in self.notes]


def _chromatic (root: str, offset: int) -> str:

	return chordpad.scales.CHROMATIC_SCALE[(chordpad.scales.key_name_to_pc(root) + offset) % 12]


def _diatonic_tones (*offsets: int) -> ToneFunction:

	"""Return a tone function that stacks scale degrees above the chord root."""

	def tones (key: str, degree: int) -> typing.List[Tone]:
		return [(chordpad.scales.note_in_key(key, degree + offset), 0) for offset in (0,) + offsets]

	return tones


def _chromatic_tones (*semitones: int) -> ToneFunction:

	"""Return a tone function that stacks fixed semitone offsets on the chord root."""

	def tones (key: str, degree: int) -> typing.List[Tone]:
		root = chordpad.scales.note_in_key(key, degree)
		return [(_chromatic(root, 0), 0)] + [(_chromatic(root, s), 0) for s in semitones]

	return tones


def _dominant_7th_tones (key: str, degree: int) -> typing.List[Tone]:

	root = chordpad.scales.note_in_key(key, degree)
	tones = _diatonic_tones(2, 4)(key, degree)

	return tones + [(_chromatic(root, 10), 0)]


def _ninth_tones (key: str, degree: int) -> typing.List[Tone]:

	tones = _diatonic_tones(2, 4, 6)(key, degree)

	return tones + [(chordpad.scales.note_in_key(key, degree + 1), 1)]


def _root_only (key: str, degree: int) -> typing.List[Tone]:

	return [(chordpad.scales.note_in_key(key, degree), 0)]


CHORD_TONES: typing.Dict[str, ToneFunction] = {
	PLAIN: _root_only,
	TRIAD: _diatonic_tones(2, 4),
	DIMINISHED: _chromatic_tones(3, 6),
	AUGMENTED: _chromatic_tones(4, 8),
	DOMINANT_7TH: _dominant_7th_tones,
	SEVENTH: _diatonic_tones(2, 4, 6),
	NINTH: _ninth_tones,
	SUS2: _diatonic_tones(1, 4),
	SUS4: _diatonic_tones(3, 4),
}


def chord_label (key: str, degree: int, modifier: str) -> str:

	"""Return the display label for a chord, e.g. ``"A Minor 7th"``.

	Major or minor is decided by the degree's numeral (lowercase = minor), so
	the leading-tone chord of a ninth or seventh is labelled minor as well.
	"""

	root = chordpad.scales.note_in_key(key, degree)
	quality = "Minor" if chordpad.scales.is_minor_degree(degree) else "Major"

	suffixes = {
		TRIAD: quality,
		DIMINISHED: "Diminished",
		AUGMENTED: "Augmented",
		DOMINANT_7TH: "Dominant 7th",
		SEVENTH: f"{quality} 7th",
		NINTH: f"{quality} 9th",
		SUS2: "Sus2",
		SUS4: "Sus4",
	}

	if modifier not in suffixes:
		return root

	return f"{root} {suffixes[modifier]}"


def build_chord (key: str, degree: int, modifier: str = TRIAD, octave: int = 4) -> Chord:

	"""Build a chord on a degree of a key's major scale.

	Parameters:
		key: Key name (e.g. ``"C"``).
		degree: Scale degree 0-6 (reduced mod 7).
		modifier: One of ``MODIFIERS``. Unknown names produce the root alone.
		octave: Octave for the chord tones. Any integer is accepted; callers
			clamp it to the playable range.

	Returns:
		A new ``Chord`` in root position.

	Example:
		```python
		build_chord("C", 0, "triad", 4).pitches()   # ["C4", "E4", "G4"]
		build_chord("C", 1, "ninth", 4).pitches()   # ["D4", "F4", "A4", "C4", "E5"]
		```
	"""

	tone_function = CHORD_TONES.get(modifier)

	if tone_function is None:
		logger.debug(f"Unknown chord modifier {modifier!r} - using root only")
		tone_function = _root_only

	notes = tuple(Note(name, octave + offset) for name, offset in tone_function(key, degree))

	return Chord(notes=notes, label=chord_label(key, degree, modifier))
