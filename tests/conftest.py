import typing

import mido
import pytest

import chordpad.player


class FakeMidiOut:

	"""MIDI output stub that keeps every message it is sent."""

	def __init__ (self) -> None:

		"""Start with no messages and an open port."""

		self.messages: typing.List[mido.Message] = []
		self.closed = False


	def send (self, message: mido.Message) -> None:

		"""Store the outgoing message."""

		self.messages.append(message)


	def close (self) -> None:

		"""Mark the fake device closed."""

		self.closed = True


def _fake_get_output_names () -> typing.List[str]:

	"""Return a fixed list of MIDI output names for tests."""

	return ["Dummy MIDI"]


def _fake_open_output (name: str) -> FakeMidiOut:

	"""Return a fake MIDI output regardless of the name."""

	return FakeMidiOut()


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Patch mido to use a fake MIDI output for tests that open a device."""

	monkeypatch.setattr(mido, "get_output_names", _fake_get_output_names)
	monkeypatch.setattr(mido, "open_output", _fake_open_output)


@pytest.fixture
def trigger () -> chordpad.player.RecordingTrigger:

	"""A note trigger that records every call."""

	return chordpad.player.RecordingTrigger()


@pytest.fixture
def player (trigger: chordpad.player.RecordingTrigger) -> chordpad.player.NotePlayer:

	"""A note player wrapping the recording trigger."""

	return chordpad.player.NotePlayer(trigger)


@pytest.fixture
def midi_port () -> FakeMidiOut:

	"""An open fake MIDI output port."""

	return FakeMidiOut()
