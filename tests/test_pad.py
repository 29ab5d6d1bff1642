import asyncio
import typing
import random

import pytest

import chordpad.pad
import chordpad.player


@pytest.fixture
def pad (trigger: chordpad.player.RecordingTrigger) -> chordpad.pad.ChordPad:

	"""A pad in C at octave 4."""

	return chordpad.pad.ChordPad(trigger, key="C")


def test_defaults (pad: chordpad.pad.ChordPad) -> None:

	"""A new pad plays plain root notes in chord mode."""

	assert pad.octave == 4
	assert pad.inversion == 0
	assert pad.modifier == "plain"
	assert pad.play_mode == "chord"
	assert pad.button_labels() == ["I", "ii", "iii", "IV", "V", "vi", "vii"]


def test_octave_and_inversion_are_clamped (pad: chordpad.pad.ChordPad) -> None:

	"""Octave stays in 2-6 and inversion in 0-2."""

	assert pad.set_octave(9) == 6
	assert pad.set_octave(0) == 2
	assert pad.shift_inversion(5) == 2
	assert pad.shift_inversion(-1) == 1
	assert pad.shift_inversion(-4) == 0


def test_play_plain_degree (pad: chordpad.pad.ChordPad, trigger: chordpad.player.RecordingTrigger) -> None:

	"""The default modifier plays the root for the note length."""

	pad.play_degree(0)

	assert trigger.calls == [(["C4"], 0.5)]
	assert pad.last_label == "C"


def test_play_with_inversion (pad: chordpad.pad.ChordPad, trigger: chordpad.player.RecordingTrigger) -> None:

	"""The inversion is applied before triggering."""

	pad.set_modifier("triad")
	pad.shift_inversion(1)

	chord = pad.play_degree(0)

	assert chord.pitches() == ["E4", "G4", "C5"]
	assert trigger.calls == [(["E4", "G4", "C5"], 0.5)]


def test_last_chord_display (pad: chordpad.pad.ChordPad) -> None:

	"""The last chord label and note names are kept for display."""

	labels: typing.List[str] = []
	pad.events.on("chord_played", lambda label, names: labels.append(label))
	pad.set_modifier("seventh")

	pad.play_degree(5)

	assert pad.last_label == "A Minor 7th"
	assert pad.last_notes == ["A", "C", "E", "G"]
	assert labels == ["A Minor 7th"]


def test_play_captures_into_armed_slot (pad: chordpad.pad.ChordPad) -> None:

	"""Playing while a slot is armed records the chord with its settings."""

	pad.set_modifier("triad")
	pad.set_octave(3)
	pad.sequencer.arm_recording(2)

	pad.play_degree(4)

	slot = pad.sequencer.slots[2]

	assert slot.chord_label == "G Major"
	assert slot.pitches() == ["G3", "B3", "D3"]
	assert slot.octave == 3
	assert slot.play_mode == "chord"
	assert pad.sequencer.recording_index is None


def test_sequencer_playback_ignores_later_settings (pad: chordpad.pad.ChordPad, trigger: chordpad.player.RecordingTrigger) -> None:

	"""Slots keep the voicing they were recorded with."""

	pad.set_modifier("triad")
	pad.sequencer.arm_recording(0)
	pad.play_degree(0)

	pad.set_octave(6)
	pad.set_key("F")
	pad.sequencer.play_slot(0)

	assert trigger.calls[-1] == (["C4", "E4", "G4"], 0.5)


def test_handle_key_and_numerals (pad: chordpad.pad.ChordPad) -> None:

	"""Digit keys and numerals select degrees."""

	pad.set_modifier("triad")

	assert pad.handle_key("5").label == "G Major"
	assert pad.handle_key("x") is None
	assert pad.play_numeral("vi").label == "A Minor"


def test_invalid_settings (pad: chordpad.pad.ChordPad) -> None:

	"""Play mode, arpeggio pattern and timings are validated."""

	with pytest.raises(ValueError):
		pad.set_play_mode("strum")

	with pytest.raises(ValueError):
		pad.set_arp_pattern("sideways")

	with pytest.raises(ValueError):
		pad.set_arp_speed(0)

	with pytest.raises(ValueError):
		pad.set_note_length(-1)

	with pytest.raises(ValueError):
		pad.set_key("H")


def test_flat_key_is_normalised (pad: chordpad.pad.ChordPad) -> None:

	"""Keys are stored with sharp spellings."""

	pad.set_key("Bb")

	assert pad.key == "A#"


def test_random_arpeggio_is_seedable (trigger: chordpad.player.RecordingTrigger) -> None:

	"""The pad passes its random source to the arpeggiator."""

	pad = chordpad.pad.ChordPad(trigger, rng=random.Random(5))
	pad.set_modifier("ninth")
	pad.set_play_mode("arp")
	pad.set_arp_pattern("random")

	expected = ["C4", "E4", "G4", "B4", "D5"]
	random.Random(5).shuffle(expected)

	events = pad.trigger_events(pad.chord_for(0))

	assert [event.pitches[0] for event in events] == expected


def test_keyboard_marks_played_notes (pad: chordpad.pad.ChordPad) -> None:

	"""The scale view highlights the last played chord."""

	pad.set_modifier("triad")
	pad.play_degree(0)

	playing = [info.name for info in pad.keyboard() if info.playing]

	assert playing == ["C", "E", "G"]


@pytest.mark.asyncio
async def test_arp_mode_live_play (pad: chordpad.pad.ChordPad, trigger: chordpad.player.RecordingTrigger) -> None:

	"""Arp mode plays the chosen pattern with the arp speed gap."""

	pad.set_modifier("triad")
	pad.set_play_mode("arp")
	pad.set_arp_pattern("down")
	pad.set_arp_speed(0.01)
	pad.set_note_length(0.2)

	pad.play_degree(0)
	await asyncio.sleep(0.05)

	assert trigger.calls == [(["G4"], 0.2), (["E4"], 0.2), (["C4"], 0.2)]


@pytest.mark.asyncio
async def test_close_stops_everything (pad: chordpad.pad.ChordPad, trigger: chordpad.player.RecordingTrigger) -> None:

	"""Closing the pad stops playback, the metronome and pending notes."""

	pad.set_modifier("triad")
	pad.set_play_mode("arp")
	pad.sequencer.arm_recording(0)
	pad.play_degree(0)

	await pad.transport.start()
	await pad.metronome.start()
	await pad.close()

	assert not pad.transport.running
	assert not pad.metronome.running
	assert pad.player.pending == 0
