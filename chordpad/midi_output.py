"""A ``NoteTrigger`` that plays through a MIDI output port.

``MidiNoteTrigger`` sends a note_on for every pitch straight away and
schedules the matching note_off on the running event loop after the
requested duration. Pitches outside the MIDI range are clamped to 0-127.
"""

import asyncio
import logging
import typing

import mido

import chordpad.chords


logger = logging.getLogger(__name__)


def select_output_device (device_name: typing.Optional[str] = None) -> typing.Tuple[typing.Optional[str], typing.Optional[typing.Any]]:

	"""Select and open a MIDI output device.

	If ``device_name`` is provided, opens that device. Otherwise the only
	available device is used; with several devices the first one is chosen and
	the alternatives are logged.

	Returns:
		A tuple of (device_name, midi_out_object) or (None, None) on failure.
	"""

	try:
		outputs = mido.get_output_names()
		logger.info(f"Available MIDI outputs: {outputs}")

		if not outputs:
			logger.error("No MIDI output devices found.")
			return None, None

		if device_name is not None:
			if device_name not in outputs:
				logger.error(
					f"MIDI output device '{device_name}' not found. "
					f"Available devices: {outputs}"
				)
				return None, None

			selected_name = device_name

		else:
			selected_name = outputs[0]

			if len(outputs) > 1:
				logger.warning(f"Several MIDI outputs found - using '{selected_name}'. Set midi.device_name to choose another.")

		midi_out = mido.open_output(selected_name)
		logger.info(f"Opened MIDI output: {selected_name}")

		return selected_name, midi_out

	except Exception as e:
		logger.error(f"Failed to open MIDI output: {e}")
		return None, None


def pitch_to_midi (pitch: str) -> int:

	"""Convert ``"C4"`` style text to a MIDI note number clamped to 0-127."""

	return max(0, min(127, chordpad.chords.Note.parse(pitch).midi))


class MidiNoteTrigger:

	"""
	Sound note triggers on a MIDI channel.
	"""

	def __init__ (self, port: typing.Any, channel: int = 0, velocity: int = 100) -> None:

		"""
		Parameters:
			port: An open mido output port (anything with ``send`` and ``close``).
			channel: MIDI channel 0-15.
			velocity: Note-on velocity 1-127.
		"""

		if not 0 <= channel <= 15:
			raise ValueError(f"MIDI channel must be 0-15, got {channel}")

		self.port = port
		self.channel = channel
		self.velocity = max(1, min(127, velocity))
		self.active_notes: typing.Dict[int, int] = {}
		self._releases: typing.Set[asyncio.TimerHandle] = set()


	def trigger_notes (self, pitches: typing.List[str], duration: float) -> None:

		"""Start the pitches now and release them after ``duration`` seconds.

		Raises:
			RuntimeError: If called outside a running event loop.
		"""

		loop = asyncio.get_running_loop()
		notes = [pitch_to_midi(pitch) for pitch in pitches]

		for note in notes:
			self._send("note_on", note, self.velocity)
			self.active_notes[note] = self.active_notes.get(note, 0) + 1

		handle: typing.Optional[asyncio.TimerHandle] = None

		def release () -> None:
			self._releases.discard(handle)  # type: ignore[arg-type]
			self._release(notes)

		handle = loop.call_later(max(0.0, duration), release)
		self._releases.add(handle)


	def close (self) -> None:

		"""Cancel pending releases, silence sounding notes and close the port."""

		for handle in self._releases:
			handle.cancel()

		self._releases.clear()

		for note in list(self.active_notes):
			self._send("note_off", note, 0)

		self.active_notes.clear()

		if self.port is not None:
			self.port.close()
			self.port = None


	def _release (self, notes: typing.List[int]) -> None:

		for note in notes:
			count = self.active_notes.get(note, 0) - 1

			# Retriggered notes stay on until their last release.
			if count > 0:
				self.active_notes[note] = count
				continue

			self.active_notes.pop(note, None)
			self._send("note_off", note, 0)


	def _send (self, message_type: str, note: int, velocity: int) -> None:

		if self.port is None:
			return

		try:
			self.port.send(mido.Message(message_type, channel=self.channel, note=note, velocity=velocity))
		except Exception:
			logger.exception(f"Failed to send MIDI {message_type}")
