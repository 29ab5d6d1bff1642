"""Delivery of note triggers to the synthesis collaborator.

The engine never makes sound itself. It produces ``TriggerEvent`` instructions
(a delay, the pitches, and a duration) and hands them to a ``NotePlayer``,
which calls the injected ``NoteTrigger`` capability either immediately or via
``loop.call_later`` for staggered arpeggio notes. Pending deliveries are
tracked so a stop can cancel every one of them.
"""

import asyncio
import dataclasses
import logging
import typing


logger = logging.getLogger(__name__)


@typing.runtime_checkable
class NoteTrigger (typing.Protocol):

	"""
	Capability that sounds a set of pitches for a duration.
	"""

	def trigger_notes (self, pitches: typing.List[str], duration: float) -> None:

		"""
		Fire-and-forget: start the pitches and release them after ``duration`` seconds.
		"""

		...


@dataclasses.dataclass(frozen=True, order=True)
class TriggerEvent:

	"""
	A logical instruction to trigger pitches after a delay (seconds).
	"""

	delay: float
	pitches: typing.Tuple[str, ...] = dataclasses.field(compare=False)
	duration: float = dataclasses.field(compare=False)


def chord_events (pitches: typing.Sequence[str], duration: float) -> typing.List[TriggerEvent]:

	"""All pitches at once, as a single trigger."""

	if not pitches:
		return []

	return [TriggerEvent(delay=0.0, pitches=tuple(pitches), duration=duration)]


def arpeggio_events (pitches: typing.Sequence[str], duration: float, stagger: float) -> typing.List[TriggerEvent]:

	"""One trigger per pitch, each ``stagger`` seconds after the previous one."""

	return [
		TriggerEvent(delay=i * stagger, pitches=(pitch,), duration=duration)
		for i, pitch in enumerate(pitches)
	]


class RecordingTrigger:

	"""
	A ``NoteTrigger`` that remembers every call. Used for dry runs and tests.
	"""

	def __init__ (self) -> None:

		self.calls: typing.List[typing.Tuple[typing.List[str], float]] = []


	def trigger_notes (self, pitches: typing.List[str], duration: float) -> None:

		"""Record the call."""

		self.calls.append((list(pitches), duration))


class NotePlayer:

	"""
	Dispatches trigger events and owns the handles of delayed ones.
	"""

	def __init__ (self, trigger: NoteTrigger) -> None:

		"""Wrap a note trigger capability."""

		self.trigger = trigger
		self._pending: typing.Set[asyncio.TimerHandle] = set()


	@property
	def pending (self) -> int:

		"""Number of delayed triggers not yet delivered."""

		return len(self._pending)


	def dispatch (self, events: typing.Iterable[TriggerEvent]) -> None:

		"""Deliver events now (delay 0) or schedule them on the running loop.

		Raises:
			RuntimeError: If a delayed event is dispatched outside a running event loop.
		"""

		for event in sorted(events):

			if event.delay <= 0:
				self._deliver(event)

			else:
				self._schedule(event)


	def cancel_pending (self) -> None:

		"""Cancel every delayed trigger that has not fired yet."""

		if self._pending:
			logger.debug(f"Cancelling {len(self._pending)} pending note triggers")

		for handle in self._pending:
			handle.cancel()

		self._pending.clear()


	def _schedule (self, event: TriggerEvent) -> None:

		loop = asyncio.get_running_loop()
		handle: typing.Optional[asyncio.TimerHandle] = None

		def fire () -> None:
			self._pending.discard(handle)  # type: ignore[arg-type]
			self._deliver(event)

		handle = loop.call_later(event.delay, fire)
		self._pending.add(handle)


	def _deliver (self, event: TriggerEvent) -> None:

		self.trigger.trigger_notes(list(event.pitches), event.duration)
