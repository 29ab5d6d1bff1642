import dataclasses
import logging
import typing

import chordpad.chords
import chordpad.constants
import chordpad.event_emitter
import chordpad.player


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class SequencerSlot:

	"""
	One step of the sequencer.

	An empty slot has a blank label. A rest carries the ``"REST"`` label so the
	cursor stops on it, but it never sounds. Any other labelled slot is filled
	and plays its stored notes with its stored play mode.
	"""

	chord_label: str = ""
	notes: typing.Tuple[chordpad.chords.Note, ...] = ()
	octave: int = chordpad.constants.DEFAULT_OCTAVE
	play_mode: str = chordpad.constants.PLAY_MODE_CHORD
	is_rest: bool = False
	is_tied: bool = False


	@classmethod
	def rest (cls) -> "SequencerSlot":

		"""A silent step."""

		return cls(chord_label=chordpad.constants.REST_LABEL, is_rest=True)


	@classmethod
	def from_chord (cls, chord: chordpad.chords.Chord, octave: int, play_mode: str) -> "SequencerSlot":

		"""Capture a chord together with the octave and play mode it was played with."""

		return cls(chord_label=chord.label, notes=chord.notes, octave=octave, play_mode=play_mode)


	@property
	def is_empty (self) -> bool:

		return not self.chord_label


	@property
	def is_filled (self) -> bool:

		return not self.is_empty and not self.is_rest


	def display_notes (self) -> typing.List[str]:

		"""Pitch class names without octaves."""

		return [note.pitch_class for note in self.notes]


	def pitches (self) -> typing.List[str]:

		"""Full note names for playback."""

		return [str(note) for note in self.notes]


EMPTY_SLOT = SequencerSlot()


@dataclasses.dataclass(frozen=True)
class SequencerState:

	"""
	Read-only snapshot of the sequencer for display collaborators.
	"""

	slots: typing.Tuple[SequencerSlot, ...]
	recording_index: typing.Optional[int]
	playing_index: typing.Optional[int]
	loop: bool
	bpm: int


	@property
	def rows (self) -> typing.List[typing.Tuple[SequencerSlot, ...]]:

		"""Slots grouped into rows of eight."""

		size = chordpad.constants.ROW_LENGTH

		return [self.slots[i:i + size] for i in range(0, len(self.slots), size)]


class Sequencer:

	"""
	The step sequencer state machine.

	The sequencer owns its slots, the recording cursor (at most one armed slot)
	and the playing cursor (``None`` = before the first step). Every operation
	is synchronous, so a transport tick always completes before the next
	command is applied.

	Slot indices outside the collection raise ``IndexError`` on every
	operation that takes one.
	"""

	def __init__ (
		self,
		player: typing.Optional[chordpad.player.NotePlayer] = None,
		bpm: float = chordpad.constants.DEFAULT_BPM,
		rows: int = 1,
		loop: bool = False
	) -> None:

		"""Create an empty sequencer.

		Parameters:
			player: Receives the trigger events of played slots. When ``None``,
				``play_slot`` only computes the events.
			bpm: Tempo, clamped to 40-240.
			rows: Initial number of rows of eight slots (at least one).
			loop: Initial loop mode, read by the transport.
		"""

		self.player = player
		self.slots: typing.List[SequencerSlot] = [EMPTY_SLOT] * (chordpad.constants.ROW_LENGTH * max(1, rows))
		self.recording_index: typing.Optional[int] = None
		self.playing_index: typing.Optional[int] = None
		self.loop = loop
		self.bpm = chordpad.constants.clamp_bpm(bpm)
		self.events = chordpad.event_emitter.EventEmitter()


	def __len__ (self) -> int:

		return len(self.slots)


	@property
	def rows (self) -> int:

		return len(self.slots) // chordpad.constants.ROW_LENGTH


	@property
	def beat_duration (self) -> float:

		"""Seconds per beat at the current tempo."""

		return 60.0 / self.bpm


	def on_event (self, event_name: str, callback: typing.Callable[..., typing.Any]) -> None:

		"""Register a listener for ``"cursor"`` or ``"slot_played"``."""

		self.events.on(event_name, callback)


	def snapshot (self) -> SequencerState:

		"""Return the current state as an immutable value."""

		return SequencerState(
			slots = tuple(self.slots),
			recording_index = self.recording_index,
			playing_index = self.playing_index,
			loop = self.loop,
			bpm = self.bpm
		)


	def set_bpm (self, bpm: float) -> int:

		"""Set the tempo, clamped to 40-240 whole BPM. Returns the stored value."""

		self.bpm = chordpad.constants.clamp_bpm(bpm)
		logger.info(f"Sequencer BPM set to {self.bpm}")

		return self.bpm


	def toggle_loop (self) -> bool:

		self.loop = not self.loop

		return self.loop


	# Editing

	def arm_recording (self, index: int) -> None:

		"""Arm a slot for the next captured chord. Arming the armed slot disarms it."""

		self._check_index(index)

		if self.recording_index == index:
			self.recording_index = None
		else:
			self.recording_index = index

		self._emit_cursor()


	def capture_chord (self, chord: chordpad.chords.Chord, octave: int, play_mode: str = chordpad.constants.PLAY_MODE_CHORD) -> bool:

		"""Write a chord into the armed slot and disarm recording.

		Returns:
			True when a slot was written, False when nothing was armed.
		"""

		if self.recording_index is None:
			return False

		index = self.recording_index
		self.slots[index] = SequencerSlot.from_chord(chord, octave, play_mode)
		self.recording_index = None

		logger.debug(f"Captured {chord.label!r} into slot {index}")
		self._emit_cursor()

		return True


	def set_rest (self, index: int) -> None:

		self._check_index(index)
		self.slots[index] = SequencerSlot.rest()


	def delete (self, index: int) -> None:

		self._check_index(index)
		self.slots[index] = EMPTY_SLOT


	def toggle_tie (self, index: int) -> bool:

		"""Flip the tie-to-next flag of a filled slot.

		The next slot is not inspected; ``can_tie`` tells a caller whether the
		tie would have any effect. Empty and rest slots cannot be tied.

		Returns:
			The new tie flag.
		"""

		self._check_index(index)
		slot = self.slots[index]

		if not slot.is_filled:
			logger.debug(f"Slot {index} is not filled - tie ignored")
			return False

		self.slots[index] = dataclasses.replace(slot, is_tied=not slot.is_tied)

		return not slot.is_tied


	def can_tie (self, index: int) -> bool:

		"""True when the slot and the next one are filled with the same chord."""

		self._check_index(index)

		if index + 1 >= len(self.slots):
			return False

		slot = self.slots[index]
		following = self.slots[index + 1]

		return slot.is_filled and following.is_filled and following.chord_label == slot.chord_label


	def copy_slot (self, index: int) -> typing.Optional[SequencerSlot]:

		"""Return the slot for pasting, or ``None`` if it is empty."""

		self._check_index(index)
		slot = self.slots[index]

		return None if slot.is_empty else slot


	def paste_slot (self, index: int, slot: SequencerSlot) -> None:

		self._check_index(index)
		self.slots[index] = dataclasses.replace(slot)


	def add_row (self) -> None:

		self.slots.extend([EMPTY_SLOT] * chordpad.constants.ROW_LENGTH)


	def remove_row (self) -> bool:

		"""Drop the last row of eight slots. The first row is never removed.

		Cursors pointing into the removed row are cleared.

		Returns:
			True when a row was removed.
		"""

		if len(self.slots) <= chordpad.constants.ROW_LENGTH:
			logger.debug("Cannot remove the last sequencer row")
			return False

		del self.slots[-chordpad.constants.ROW_LENGTH:]

		changed = False

		if self.recording_index is not None and self.recording_index >= len(self.slots):
			self.recording_index = None
			changed = True

		if self.playing_index is not None and self.playing_index >= len(self.slots):
			self.playing_index = None
			changed = True

		if changed:
			self._emit_cursor()

		return True


	def clear (self) -> None:

		"""Empty every slot and reset both cursors. The row count is kept."""

		self.slots = [EMPTY_SLOT] * len(self.slots)
		self.recording_index = None
		self.playing_index = None
		self._emit_cursor()


	# Playback

	def has_any_filled (self) -> bool:

		"""True when any slot carries a label (rests included)."""

		return any(not slot.is_empty for slot in self.slots)


	def has_next_filled (self) -> bool:

		"""True when a labelled slot follows the playing cursor."""

		if self.playing_index is None:
			return False

		return any(not slot.is_empty for slot in self.slots[self.playing_index + 1:])


	def step_first (self) -> None:

		"""Move the cursor back before the first step."""

		self.playing_index = None
		self._emit_cursor()


	def step_next (self) -> typing.Optional[int]:

		"""Play the next labelled slot, wrapping to the start.

		Returns:
			The index played, or ``None`` when there is nothing to play.
		"""

		n = len(self.slots)

		if self.playing_index is None:
			order: typing.Iterable[int] = range(n)
		else:
			start = self.playing_index + 1
			order = [(start + i) % n for i in range(n)]

		return self._play_first_labelled(order)


	def step_prev (self) -> typing.Optional[int]:

		"""Play the previous labelled slot, wrapping to the end."""

		n = len(self.slots)

		if self.playing_index is None:
			order: typing.Iterable[int] = range(n - 1, -1, -1)
		else:
			start = self.playing_index - 1
			order = [(start - i) % n for i in range(n)]

		return self._play_first_labelled(order)


	def is_tied_from_previous (self, index: int) -> bool:

		"""True when the previous slot ties into this one with the same chord."""

		self._check_index(index)

		if index == 0:
			return False

		previous = self.slots[index - 1]

		return previous.is_tied and previous.chord_label == self.slots[index].chord_label


	def tie_chain_length (self, index: int) -> int:

		"""Count the slots sustained by a trigger at ``index``.

		The chain continues while the next slot has the same label and the slot
		before it is tied.
		"""

		self._check_index(index)
		slot = self.slots[index]
		length = 1

		if not slot.is_tied:
			return length

		next_index = index + 1

		while next_index < len(self.slots):

			if self.slots[next_index].chord_label != slot.chord_label or not self.slots[next_index - 1].is_tied:
				break

			length += 1
			next_index += 1

		return length


	def play_slot (self, index: int) -> typing.List[chordpad.player.TriggerEvent]:

		"""Move the cursor to a slot and trigger it.

		Empty slots are ignored. Rests move the cursor silently. A slot tied
		from the previous one sustains without a new attack. Otherwise the
		slot's notes sound for ``60 / bpm`` seconds times the tie chain length,
		as one chord or as an arpeggio staggered by 0.1 seconds, using the
		octave and play mode stored when the chord was captured.

		Returns:
			The trigger events produced (already handed to the player).
		"""

		self._check_index(index)
		slot = self.slots[index]

		if slot.is_empty:
			return []

		self.playing_index = index
		self._emit_cursor()

		events: typing.List[chordpad.player.TriggerEvent] = []

		if slot.is_rest:
			logger.debug(f"Slot {index}: rest")

		elif self.is_tied_from_previous(index):
			logger.debug(f"Slot {index}: sustaining tie from slot {index - 1}")

		else:
			duration = self.beat_duration * self.tie_chain_length(index)

			if slot.play_mode == chordpad.constants.PLAY_MODE_ARP:
				events = chordpad.player.arpeggio_events(slot.pitches(), duration, chordpad.constants.SEQUENCER_ARP_STAGGER)
			else:
				events = chordpad.player.chord_events(slot.pitches(), duration)

			logger.debug(f"Slot {index}: {slot.chord_label!r} for {duration:.3f}s ({slot.play_mode})")

		if events and self.player is not None:
			self.player.dispatch(events)

		self.events.emit("slot_played", index, slot, events)

		return events


	def _play_first_labelled (self, order: typing.Iterable[int]) -> typing.Optional[int]:

		for index in order:
			if not self.slots[index].is_empty:
				self.play_slot(index)
				return index

		return None


	def _check_index (self, index: int) -> None:

		if not 0 <= index < len(self.slots):
			raise IndexError(f"Slot index {index} out of range (0-{len(self.slots) - 1})")


	def _emit_cursor (self) -> None:

		self.events.emit("cursor", self.recording_index, self.playing_index)
