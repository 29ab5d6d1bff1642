import asyncio
import logging
import os
import typing

import yaml

import chordpad.chords
import chordpad.midi_output
import chordpad.pad
import chordpad.player


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# I - V - vi - IV, with the vi held for two steps.
DEMO_PROGRESSION: typing.List[int] = [0, 4, 5, 5, 3]


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def build_demo (pad: chordpad.pad.ChordPad) -> None:

	"""
	Record the demo progression into the sequencer, tying repeated chords.
	"""

	for index, degree in enumerate(DEMO_PROGRESSION):
		pad.sequencer.arm_recording(index)
		pad.sequencer.capture_chord(pad.chord_for(degree), pad.octave, pad.play_mode)

	for index in range(len(DEMO_PROGRESSION) - 1):
		if pad.sequencer.can_tie(index):
			pad.sequencer.toggle_tie(index)

	pad.sequencer.set_rest(len(DEMO_PROGRESSION))


async def run (config: dict) -> None:

	"""
	Play the demo through MIDI, or log the triggers when no device is available.
	"""

	pad_config = config.get('pad', {})
	sequencer_config = config.get('sequencer', {})
	midi_config = config.get('midi', {})

	device_name, port = chordpad.midi_output.select_output_device(midi_config.get('device_name'))

	trigger: typing.Any

	if port is not None:
		trigger = chordpad.midi_output.MidiNoteTrigger(port, channel=midi_config.get('channel', 0))
	else:
		logger.warning("No MIDI output - running without sound")
		trigger = chordpad.player.RecordingTrigger()

	pad = chordpad.pad.ChordPad(
		trigger,
		key = pad_config.get('key', 'C'),
		octave = pad_config.get('octave', 4),
		bpm = sequencer_config.get('bpm', 120)
	)

	pad.set_modifier(pad_config.get('modifier', chordpad.chords.TRIAD))
	pad.set_play_mode(pad_config.get('play_mode', 'chord'))

	build_demo(pad)

	pad.sequencer.loop = sequencer_config.get('loop', True)
	beats = sequencer_config.get('beats', 16)

	logger.info(f"Playing {beats} beats in {pad.key} ({device_name or 'silent'})")

	await pad.transport.start()

	try:
		await asyncio.sleep(beats * pad.transport.interval)
	finally:
		await pad.close()

		if isinstance(trigger, chordpad.midi_output.MidiNoteTrigger):
			trigger.close()
		else:
			for pitches, duration in trigger.calls:
				logger.info(f"{' '.join(pitches)} for {duration:.2f}s")


def main () -> None:

	"""
	Main entry point for the chordpad demo.
	"""

	logger.info("chordpad starting...")

	config = load_config()

	try:
		asyncio.run(run(config))
	except KeyboardInterrupt:
		logger.info("Stopping...")


if __name__ == "__main__":
	main()
