"""Arpeggio orderings for a chord's notes.

Orders:
- ``"up"``: ascending by pitch (octave first, then pitch class), stable for
  duplicates
- ``"down"``: ``"up"`` reversed
- ``"up_down"``: ascending then descending without repeating the top note, so
  ``n`` notes give ``2n - 1`` steps
- ``"random"``: a new shuffle on every call

Only ``"random"`` is non-deterministic. Pass an ``rng`` (``random.Random``)
to make it repeatable.
"""

import random
import typing

import chordpad.chords


UP = "up"
DOWN = "down"
UP_DOWN = "up_down"
RANDOM = "random"

ARP_ORDERS: typing.Tuple[str, ...] = (UP, DOWN, UP_DOWN, RANDOM)

NoteLike = typing.TypeVar("NoteLike", chordpad.chords.Note, str)

_default_rng = random.Random()


def _pitch_key (note: typing.Union[chordpad.chords.Note, str]) -> int:

	if isinstance(note, chordpad.chords.Note):
		return note.midi

	return chordpad.chords.Note.parse(note).midi


def arpeggiate (notes: typing.Sequence[NoteLike], order: str = UP, rng: typing.Optional[random.Random] = None) -> typing.List[NoteLike]:

	"""Reorder notes into an arpeggio playback sequence.

	Parameters:
		notes: ``Note`` objects or note strings with octaves.
		order: One of ``ARP_ORDERS``. Unknown orders play ``"up"``.
		rng: Random source for ``"random"``. Defaults to a module-level generator.

	Example:
		```python
		arpeggiate(["G4", "C4", "E4"], "up_down")  # ["C4", "E4", "G4", "E4", "C4"]
		```
	"""

	if order == RANDOM:
		shuffled = list(notes)
		(rng or _default_rng).shuffle(shuffled)
		return shuffled

	ascending = sorted(notes, key=_pitch_key)

	if order == DOWN:
		return ascending[::-1]

	if order == UP_DOWN:
		return ascending + ascending[:-1][::-1]

	return ascending
