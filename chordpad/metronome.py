import asyncio
import logging
import typing

import chordpad.constants
import chordpad.player


logger = logging.getLogger(__name__)


class Metronome:

	"""
	A click on every beat, accented on the first beat of each measure.

	The click runs as its own asyncio task, independent of the sequencer
	transport. A tempo change while running replaces the task so the new
	interval applies from the next beat.
	"""

	def __init__ (
		self,
		player: chordpad.player.NotePlayer,
		bpm: float = chordpad.constants.DEFAULT_BPM,
		beats_per_measure: int = 4
	) -> None:

		self.player = player
		self.bpm = chordpad.constants.clamp_bpm(bpm)
		self.beats_per_measure = 4
		self.current_beat = 0
		self.running = False
		self.task: typing.Optional[asyncio.Task] = None
		self._beat_count = 0

		self.set_beats_per_measure(beats_per_measure)


	@property
	def click_duration (self) -> float:

		"""A thirty-second note at the current tempo."""

		return 60.0 / self.bpm / 8


	def set_beats_per_measure (self, beats: int) -> None:

		"""Choose the time signature: 3, 4, 5 or 6 beats per measure.

		Raises:
			ValueError: For any other value.
		"""

		if beats not in chordpad.constants.METRONOME_TIME_SIGNATURES:
			raise ValueError(f"Unsupported beats per measure: {beats}. Expected one of {chordpad.constants.METRONOME_TIME_SIGNATURES}")

		self.beats_per_measure = beats


	def set_bpm (self, bpm: float) -> int:

		self.bpm = chordpad.constants.clamp_bpm(bpm)
		logger.info(f"Metronome BPM set to {self.bpm}")

		if self.running:
			if self.task is not None:
				self.task.cancel()
			self.task = asyncio.get_running_loop().create_task(self._run_loop(click_first=False))

		return self.bpm


	def adjust_bpm (self, delta: int = chordpad.constants.METRONOME_TEMPO_STEP) -> int:

		return self.set_bpm(self.bpm + delta)


	def click (self) -> chordpad.player.TriggerEvent:

		"""Sound the current beat and advance the measure position."""

		self.current_beat = self._beat_count % self.beats_per_measure

		if self.current_beat == 0:
			note = chordpad.constants.METRONOME_ACCENT_NOTE
		else:
			note = chordpad.constants.METRONOME_CLICK_NOTE

		event = chordpad.player.TriggerEvent(delay=0.0, pitches=(note,), duration=self.click_duration)
		self.player.dispatch([event])
		self._beat_count += 1

		return event


	async def start (self) -> None:

		if self.running:
			return

		self.running = True
		self._beat_count = 0
		self.current_beat = 0
		self.task = asyncio.get_running_loop().create_task(self._run_loop())

		logger.info(f"Metronome started at {self.bpm} BPM, {self.beats_per_measure} beats per measure")


	async def stop (self) -> None:

		task = self.task
		self.task = None
		self.running = False
		self.current_beat = 0

		if task is None:
			return

		task.cancel()

		try:
			await task
		except asyncio.CancelledError:
			pass

		logger.info("Metronome stopped")


	async def _run_loop (self, click_first: bool = True) -> None:

		interval = 60.0 / self.bpm

		if not click_first:
			await asyncio.sleep(interval)

		while True:
			self.click()
			await asyncio.sleep(interval)
