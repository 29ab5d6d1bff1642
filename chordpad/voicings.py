"""Chord inversions.

An inversion moves the lowest notes of a voicing up an octave, one at a time.
Each displaced note keeps its own octave and gains one, independent of the
octaves of the notes around it, so the result is a rotation with octave
bookkeeping rather than a plain list rotation.

Example:
	```python
	from chordpad.voicings import apply_inversion
	apply_inversion(["C4", "E4", "G4"], 1)  # ["E4", "G4", "C5"]
	apply_inversion(["C4", "E4", "G4"], 4)  # same as inversion 1
	```
"""

import typing

import chordpad.chords


NoteLike = typing.TypeVar("NoteLike", chordpad.chords.Note, str)


def _raise_octave (note: NoteLike) -> NoteLike:

	if isinstance(note, chordpad.chords.Note):
		return note.shifted(1)

	return str(chordpad.chords.Note.parse(note).shifted(1))


def apply_inversion (notes: typing.Sequence[NoteLike], inversion: int) -> typing.List[NoteLike]:

	"""Invert a voicing by moving its first note(s) up an octave.

	Inversion 0 is root position. Inversions wrap around the number of notes,
	so inversion ``k`` equals inversion ``k % len(notes)``.

	Parameters:
		notes: ``Note`` objects or note strings (``"C#4"``), lowest-intended first.
		inversion: Non-negative inversion number.

	Returns:
		A new list of the same element type as the input.
	"""

	result = list(notes)

	if inversion == 0 or not result:
		return result

	for _ in range(inversion % len(result)):
		result.append(_raise_octave(result.pop(0)))

	return result


def invert_chord (chord: chordpad.chords.Chord, inversion: int) -> chordpad.chords.Chord:

	"""Return a new chord with the same label and an inverted voicing."""

	return chordpad.chords.Chord(notes=tuple(apply_inversion(chord.notes, inversion)), label=chord.label)
