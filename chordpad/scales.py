"""Major-scale lookups and pitch class utilities.

Every key is one of the twelve chromatic pitch classes and every chord on the
pad is built from the seven degrees of that key's major scale. Lookups are
table driven: the degree indexes ``MAJOR_SCALE_INTERVALS`` and the result is
reduced mod 12 back into ``CHROMATIC_SCALE``.

Module-level constants:
- `CHROMATIC_SCALE`: The twelve pitch class names, sharps only, starting at C
- `NOTE_NAME_TO_PC`: Maps note names (including flat spellings) to pitch classes
- `MAJOR_SCALE_INTERVALS`: Semitones above the root for degrees 0-6
- `ROMAN_NUMERALS`: Display numerals for degrees 0-6 (lowercase = minor)
"""

import dataclasses
import typing


CHROMATIC_SCALE: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]

NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
}

MAJOR_SCALE_INTERVALS: typing.List[int] = [0, 2, 4, 5, 7, 9, 11]

ROMAN_NUMERALS: typing.List[str] = ["I", "ii", "iii", "IV", "V", "vi", "vii"]

DEGREE_COUNT = len(MAJOR_SCALE_INTERVALS)


def key_name_to_pc (key_name: str) -> int:

	"""Validate a key name and return its pitch class (0–11).

	Parameters:
		key_name: Note name (e.g. ``"C"``, ``"F#"``, ``"Bb"``).

	Raises:
		ValueError: If the key name is not recognised.

	Example:
		```python
		key_name_to_pc("C")   # → 0
		key_name_to_pc("Bb")  # → 10
		```
	"""

	if key_name not in NOTE_NAME_TO_PC:
		raise ValueError(
			f"Unknown key name: {key_name!r}. Expected e.g. 'C', 'F#', 'Bb'."
		)

	return NOTE_NAME_TO_PC[key_name]


def normalize_key (key_name: str) -> str:

	"""Return the sharp spelling used throughout the engine (``"Bb"`` → ``"A#"``)."""

	return CHROMATIC_SCALE[key_name_to_pc(key_name)]


def note_in_key (key: str, degree: int) -> str:

	"""Return the pitch class name at a degree of a key's major scale.

	The degree is reduced mod 7, so callers may pass offsets such as
	``degree + 4`` without wrapping them first.

	Parameters:
		key: Key name (e.g. ``"G"``).
		degree: Scale degree, 0 = tonic.

	Example:
		```python
		note_in_key("C", 4)  # → "G"
		note_in_key("G", 6)  # → "F#"
		```
	"""

	root_pc = key_name_to_pc(key)
	interval = MAJOR_SCALE_INTERVALS[degree % DEGREE_COUNT]

	return CHROMATIC_SCALE[(root_pc + interval) % 12]


def scale_notes (key: str) -> typing.List[str]:

	"""Return the seven pitch class names of a key's major scale, tonic first."""

	return [note_in_key(key, degree) for degree in range(DEGREE_COUNT)]


def degree_of (key: str, note_name: str) -> typing.Optional[int]:

	"""Return the scale degree of a pitch class in a key, or ``None`` if it is chromatic."""

	pc = key_name_to_pc(note_name)
	names = scale_notes(key)

	for degree, name in enumerate(names):
		if NOTE_NAME_TO_PC[name] == pc:
			return degree

	return None


def is_in_scale (key: str, note_name: str) -> bool:

	"""Return True when the pitch class belongs to the key's major scale."""

	return degree_of(key, note_name) is not None


def numeral (degree: int) -> str:

	"""Return the roman numeral shown on the pad button for a degree."""

	return ROMAN_NUMERALS[degree % DEGREE_COUNT]


def is_minor_degree (degree: int) -> bool:

	"""Lowercase numerals (ii, iii, vi, vii) are labelled as minor chords."""

	text = numeral(degree)

	return text == text.lower()


def degree_from_numeral (text: str) -> int:

	"""Map a roman numeral to its degree, case-insensitively.

	Unrecognised text maps to the tonic (0), matching the pad's behaviour for
	buttons without a numeral.
	"""

	upper = [name.upper() for name in ROMAN_NUMERALS]

	if text.upper() in upper:
		return upper.index(text.upper())

	return 0


@dataclasses.dataclass(frozen=True)
class KeyInfo:

	"""
	One chromatic key of a scale visualiser.
	"""

	name: str
	in_scale: bool
	playing: bool
	numeral: typing.Optional[str]
	is_black: bool


def describe_keyboard (key: str, playing: typing.Iterable[str] = ()) -> typing.List[KeyInfo]:

	"""Describe all twelve pitch classes relative to a key.

	Parameters:
		key: Key name.
		playing: Note names currently sounding. Octave suffixes are ignored, so
			``"C#5"`` marks ``"C#"`` as playing.

	Returns:
		Twelve ``KeyInfo`` entries in chromatic order starting at C.
	"""

	playing_pcs = {key_name_to_pc(name.rstrip("-0123456789")) for name in playing}
	info: typing.List[KeyInfo] = []

	for pc, name in enumerate(CHROMATIC_SCALE):
		degree = degree_of(key, name)

		info.append(KeyInfo(
			name = name,
			in_scale = degree is not None,
			playing = pc in playing_pcs,
			numeral = numeral(degree) if degree is not None else None,
			is_black = "#" in name
		))

	return info
