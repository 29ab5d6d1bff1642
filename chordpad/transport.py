import asyncio
import logging
import typing

import chordpad.constants
import chordpad.event_emitter
import chordpad.player
import chordpad.sequencer


logger = logging.getLogger(__name__)


class Transport:

	"""
	Drives sequencer playback at a tempo-derived interval.

	One ``asyncio.Task`` runs the tick loop while playing; its only suspension
	point is the sleep between ticks. Starting, stopping and tempo changes
	always cancel the current task before a new one is created, so a
	sequencer is never stepped by two loops at once.
	"""

	def __init__ (self, sequencer: chordpad.sequencer.Sequencer, player: typing.Optional[chordpad.player.NotePlayer] = None) -> None:

		"""Attach a transport to a sequencer.

		Parameters:
			sequencer: The sequencer to step.
			player: Player whose pending triggers are cancelled on stop.
				Defaults to the sequencer's player.
		"""

		self.sequencer = sequencer
		self.player = player if player is not None else sequencer.player
		self.task: typing.Optional[asyncio.Task] = None
		self.running = False
		self.events = chordpad.event_emitter.EventEmitter()


	@property
	def interval (self) -> float:

		"""Seconds between ticks: one beat at the sequencer tempo."""

		return 60.0 / self.sequencer.bpm


	@property
	def interval_ms (self) -> float:

		return 60000.0 / self.sequencer.bpm


	def on_event (self, event_name: str, callback: typing.Callable[..., typing.Any]) -> None:

		"""Register a listener for ``"start"`` or ``"stop"``."""

		self.events.on(event_name, callback)


	async def start (self) -> None:

		"""Start playback.

		From a stopped cursor the first labelled slot plays immediately; the
		loop then steps once per beat.
		"""

		if self.running:
			return

		self.running = True

		if self.sequencer.playing_index is None:
			self.sequencer.step_next()

		self._start_task()

		logger.info(f"Transport started at {self.sequencer.bpm} BPM")
		self.events.emit("start")


	async def stop (self) -> None:

		"""Stop playback and cancel every pending trigger.

		Pending triggers are cancelled even when playback already ended.
		"""

		if self.player is not None:
			self.player.cancel_pending()

		if not self.running and self.task is None:
			return

		self.running = False
		await self._cancel_task()

		logger.info("Transport stopped")
		self.events.emit("stop")


	async def toggle (self) -> bool:

		"""Start when stopped, stop when playing. Returns the new running state."""

		if self.running:
			await self.stop()
		else:
			await self.start()

		return self.running


	def toggle_loop (self) -> bool:

		return self.sequencer.toggle_loop()


	def set_bpm (self, bpm: float) -> int:

		"""Change tempo. A running loop is replaced by one at the new interval.

		Returns:
			The clamped tempo.
		"""

		bpm = self.sequencer.set_bpm(bpm)

		if self.running:
			if self.task is not None:
				self.task.cancel()
			self._start_task()

		return bpm


	def adjust_tempo (self, delta: int = chordpad.constants.TEMPO_STEP) -> int:

		"""Nudge the tempo by ``delta`` BPM (the +/- buttons use 10)."""

		return self.set_bpm(self.sequencer.bpm + delta)


	def tick (self) -> bool:

		"""Advance the sequencer by one step.

		Returns:
			False when playback has reached the end and should stop.
		"""

		sequencer = self.sequencer

		if sequencer.playing_index is None:
			return True

		if sequencer.has_next_filled() or (sequencer.loop and sequencer.has_any_filled()):
			sequencer.step_next()
			return True

		return sequencer.loop


	def _start_task (self) -> None:

		self.task = asyncio.get_running_loop().create_task(self._run_loop(self.interval))


	async def _cancel_task (self) -> None:

		task = self.task
		self.task = None

		if task is None or task is asyncio.current_task():
			return

		task.cancel()

		try:
			await task
		except asyncio.CancelledError:
			pass


	async def _run_loop (self, interval: float) -> None:

		"""Tick every ``interval`` seconds until cancelled or finished."""

		try:
			while True:
				await asyncio.sleep(interval)

				# Replaced or stopped from inside a tick listener.
				if self.task is not asyncio.current_task():
					return

				if not self.tick():
					break

		except Exception:
			logger.exception("Transport tick failed - stopping playback")

		self.task = None
		self.running = False

		if self.player is not None:
			self.player.cancel_pending()

		logger.info("Transport reached the end of the sequence")
		self.events.emit("stop")
