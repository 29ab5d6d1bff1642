import asyncio

import pytest

import chordpad.constants
import chordpad.metronome
import chordpad.player


def test_accent_on_downbeat (player: chordpad.player.NotePlayer, trigger: chordpad.player.RecordingTrigger) -> None:

	"""The first beat of each measure is accented."""

	metronome = chordpad.metronome.Metronome(player, bpm=120, beats_per_measure=3)
	beats = []

	for _ in range(4):
		metronome.click()
		beats.append(metronome.current_beat)

	assert [pitches for pitches, _ in trigger.calls] == [["C5"], ["C4"], ["C4"], ["C5"]]
	assert beats == [0, 1, 2, 0]
	assert trigger.calls[0][1] == 0.0625


def test_time_signatures (player: chordpad.player.NotePlayer) -> None:

	"""Only 3, 4, 5 and 6 beats per measure are offered."""

	metronome = chordpad.metronome.Metronome(player)
	metronome.set_beats_per_measure(6)

	assert metronome.beats_per_measure == 6

	with pytest.raises(ValueError):
		metronome.set_beats_per_measure(7)


def test_bpm_clamp (player: chordpad.player.NotePlayer) -> None:

	"""Metronome tempo uses the same limits as the sequencer."""

	metronome = chordpad.metronome.Metronome(player, bpm=235)

	assert metronome.adjust_bpm(10) == 240
	assert metronome.set_bpm(12) == 40


def test_adjust_bpm_steps_by_five (player: chordpad.player.NotePlayer) -> None:

	"""The metronome +/- buttons move the tempo by five."""

	metronome = chordpad.metronome.Metronome(player, bpm=120)

	assert metronome.adjust_bpm() == 125
	assert metronome.adjust_bpm(-chordpad.constants.METRONOME_TEMPO_STEP) == 120


@pytest.mark.asyncio
async def test_start_and_stop (player: chordpad.player.NotePlayer, trigger: chordpad.player.RecordingTrigger) -> None:

	"""The metronome clicks immediately and stops cleanly."""

	metronome = chordpad.metronome.Metronome(player, bpm=120)

	await metronome.start()
	await asyncio.sleep(0.01)

	assert metronome.running
	assert trigger.calls == [(["C5"], 0.0625)]

	await metronome.stop()

	assert not metronome.running
	assert metronome.task is None
	assert metronome.current_beat == 0


@pytest.mark.asyncio
async def test_tempo_change_replaces_task (player: chordpad.player.NotePlayer) -> None:

	"""Changing tempo while running swaps the click task."""

	metronome = chordpad.metronome.Metronome(player, bpm=60)

	await metronome.start()
	old_task = metronome.task

	metronome.set_bpm(120)
	await asyncio.sleep(0.01)

	assert old_task is not None and old_task.cancelled()
	assert metronome.task is not old_task

	await metronome.stop()
