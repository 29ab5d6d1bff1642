"""
chordpad - a chord pad and step sequencer engine for Python.

Pick a key, press a scale degree, and chordpad works out the chord: diatonic
triads, sevenths and ninths that stay in the key, chromatic diminished and
augmented shapes, suspended chords, inversions and arpeggios. Chords can be
played straight away or captured into an eight-step-per-row sequencer with
rests and ties, then played back at a tempo with optional looping.

chordpad makes no sound itself. Everything it plays goes through a note
trigger - any object with ``trigger_notes(pitches, duration)`` - such as the
bundled ``MidiNoteTrigger`` or your own synth binding.

Minimal example:

    ```python
    import asyncio
    import chordpad

    async def main ():
        trigger = chordpad.RecordingTrigger()
        pad = chordpad.ChordPad(trigger, key="G")
        pad.set_modifier("triad")

        pad.sequencer.arm_recording(0)
        pad.play_degree(0)             # G Major, captured into slot 0
        pad.sequencer.arm_recording(1)
        pad.play_degree(4)             # D Major, captured into slot 1

        pad.sequencer.loop = True
        await pad.transport.start()
        await asyncio.sleep(4)
        await pad.close()

    asyncio.run(main())
    ```

Package-level exports: ``ChordPad``, ``NotePlayer``, ``RecordingTrigger``,
``Sequencer``, ``Transport``, ``build_chord``, ``note_in_key``.
"""

import chordpad.chords
import chordpad.pad
import chordpad.player
import chordpad.scales
import chordpad.sequencer
import chordpad.transport


ChordPad = chordpad.pad.ChordPad
NotePlayer = chordpad.player.NotePlayer
RecordingTrigger = chordpad.player.RecordingTrigger
Sequencer = chordpad.sequencer.Sequencer
Transport = chordpad.transport.Transport
build_chord = chordpad.chords.build_chord
note_in_key = chordpad.scales.note_in_key
