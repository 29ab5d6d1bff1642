"""
chordpad - Record and play a progression

Builds a short progression on the pad, records it into the sequencer and
plays it once through a MIDI output.

How it works
────────────
Each chord is played on the pad while a sequencer slot is armed, so the
slot captures the chord exactly as voiced (key, modifier, inversion and
octave at that moment). Changing the pad afterwards does not change what
was recorded.

  Slot │ Chord          │ Notes
  ─────┼────────────────┼───────────────────────────────
  0    │ ii  Minor 7th  │ recorded in arp mode
  1    │ V   Dom. 7th   │ first inversion
  2    │ I   Major      │ tied into slot 3
  3    │ I   Major      │ sustained, no new attack
  4    │ REST           │

How to run
──────────
1. Set MIDI_DEVICE below to your MIDI interface name (or None).
2. Run: python examples/progression.py
"""

import asyncio
import logging

import chordpad
import chordpad.midi_output


logging.basicConfig(level=logging.INFO)

MIDI_DEVICE = None
CHANNEL = 0


async def main () -> None:

	name, port = chordpad.midi_output.select_output_device(MIDI_DEVICE)

	if port is None:
		return

	trigger = chordpad.midi_output.MidiNoteTrigger(port, channel=CHANNEL)
	pad = chordpad.ChordPad(trigger, key="F", bpm=96)

	pad.set_modifier("seventh")
	pad.set_play_mode("arp")
	pad.sequencer.arm_recording(0)
	pad.play_degree(1)

	pad.set_modifier("dominant_7th")
	pad.set_play_mode("chord")
	pad.shift_inversion(1)
	pad.sequencer.arm_recording(1)
	pad.play_degree(4)

	pad.set_modifier("triad")
	pad.shift_inversion(-1)

	for index in (2, 3):
		pad.sequencer.arm_recording(index)
		pad.play_degree(0)

	pad.sequencer.toggle_tie(2)
	pad.sequencer.set_rest(4)

	await asyncio.sleep(1.0)

	await pad.transport.start()

	while pad.transport.running:
		await asyncio.sleep(0.1)

	await asyncio.sleep(pad.sequencer.beat_duration)
	await pad.close()
	trigger.close()


if __name__ == "__main__":

	asyncio.run(main())
