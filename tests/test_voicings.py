import chordpad.chords
import chordpad.voicings


def test_root_position_identity () -> None:

	"""Inversion 0 returns the notes unchanged."""

	assert chordpad.voicings.apply_inversion(["C4", "E4", "G4"], 0) == ["C4", "E4", "G4"]


def test_first_and_second_inversion () -> None:

	"""Each inversion moves the lowest note up an octave."""

	assert chordpad.voicings.apply_inversion(["C4", "E4", "G4"], 1) == ["E4", "G4", "C5"]
	assert chordpad.voicings.apply_inversion(["C4", "E4", "G4"], 2) == ["G4", "C5", "E5"]


def test_inversion_wraps_around () -> None:

	"""Inversion k behaves like k mod n in pitch class order."""

	notes = ["C4", "E4", "G4"]

	assert [n[:-1] for n in chordpad.voicings.apply_inversion(notes, 3)] == ["C", "E", "G"]
	assert chordpad.voicings.apply_inversion(notes, 4) == chordpad.voicings.apply_inversion(notes, 1)


def test_empty_notes () -> None:

	"""Empty input stays empty."""

	assert chordpad.voicings.apply_inversion([], 0) == []
	assert chordpad.voicings.apply_inversion([], 2) == []


def test_displaced_note_keeps_its_own_octave () -> None:

	"""A note already an octave up is raised from its own octave."""

	ninth = ["D4", "F4", "A4", "C4", "E5"]

	assert chordpad.voicings.apply_inversion(ninth, 1) == ["F4", "A4", "C4", "E5", "D5"]
	assert chordpad.voicings.apply_inversion(ninth, 4) == ["E5", "D5", "F5", "A5", "C5"]


def test_inversion_is_cyclic () -> None:

	"""Inverting by k then n - k restores the pitch class order."""

	notes = chordpad.chords.build_chord("C", 1, "ninth").pitches()
	n = len(notes)

	for k in range(12):
		once = chordpad.voicings.apply_inversion(notes, k)
		back = chordpad.voicings.apply_inversion(once, (n - k) % n)

		assert [chordpad.chords.Note.parse(x).pitch_class for x in back] == [chordpad.chords.Note.parse(x).pitch_class for x in notes]


def test_note_objects_and_input_untouched () -> None:

	"""Note objects are supported and the input list is not modified."""

	notes = [chordpad.chords.Note("C", 4), chordpad.chords.Note("E", 4)]
	result = chordpad.voicings.apply_inversion(notes, 1)

	assert result == [chordpad.chords.Note("E", 4), chordpad.chords.Note("C", 5)]
	assert notes == [chordpad.chords.Note("C", 4), chordpad.chords.Note("E", 4)]


def test_invert_chord_keeps_label () -> None:

	"""Inverting a chord keeps its label."""

	chord = chordpad.chords.build_chord("C", 0, "triad")
	inverted = chordpad.voicings.invert_chord(chord, 2)

	assert inverted.label == "C Major"
	assert inverted.pitches() == ["G4", "C5", "E5"]
