import pathlib

import chordpad.__main__
import chordpad.pad
import chordpad.player


def test_build_demo (trigger: chordpad.player.RecordingTrigger) -> None:

	"""The demo progression is recorded with the repeated chord tied and a closing rest."""

	pad = chordpad.pad.ChordPad(trigger, key="C")
	chordpad.__main__.build_demo(pad)

	slots = pad.sequencer.slots

	assert [slot.chord_label for slot in slots[:6]] == ["C", "G", "A", "A", "F", "REST"]
	assert slots[2].is_tied
	assert not any(slot.is_tied for index, slot in enumerate(slots) if index != 2)
	assert pad.sequencer.tie_chain_length(2) == 2
	assert pad.sequencer.recording_index is None


def test_load_config_missing_file (tmp_path: pathlib.Path) -> None:

	"""A missing config file gives an empty configuration."""

	assert chordpad.__main__.load_config(str(tmp_path / "missing.yaml")) == {}


def test_load_config (tmp_path: pathlib.Path) -> None:

	"""Sections are read from YAML."""

	path = tmp_path / "config.yaml"
	path.write_text("pad:\n  key: G\nsequencer:\n  bpm: 90\n  loop: false\n")

	assert chordpad.__main__.load_config(str(path)) == {
		"pad": {"key": "G"},
		"sequencer": {"bpm": 90, "loop": False},
	}
