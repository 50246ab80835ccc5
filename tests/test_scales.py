import pytest

import tejido.scales


def test_scale_tables () -> None:

	"""Every documented scale and chord is available."""

	assert len(tejido.scales.list_scales()) == 13
	assert "blues" in tejido.scales.list_scales()
	assert "half_diminished7" in tejido.scales.list_chords()
	assert tejido.scales.scale_degrees("minor") == [0, 2, 3, 5, 7, 8, 10]
	assert tejido.scales.chord_intervals("dominant7") == [0, 4, 7, 10]


def test_unknown_names () -> None:

	"""Unknown scale, chord and note names raise."""

	with pytest.raises(ValueError):
		tejido.scales.scale_degrees("nonexistent")

	with pytest.raises(ValueError):
		tejido.scales.chord_intervals("nonexistent")

	with pytest.raises(ValueError):
		tejido.scales.note_name_to_semitone("H")


def test_note_name_to_semitone () -> None:

	"""Sharps and flats spell the same pitch class."""

	assert tejido.scales.note_name_to_semitone("C") == 0
	assert tejido.scales.note_name_to_semitone("F#") == 6
	assert tejido.scales.note_name_to_semitone("Gb") == 6
	assert tejido.scales.note_name_to_semitone("B") == 11


def test_degree_to_semitone () -> None:

	"""Degrees are 1-based and wrap into neighbouring octaves."""

	assert tejido.scales.degree_to_semitone(1, "major") == 0
	assert tejido.scales.degree_to_semitone(5, "major") == 7
	assert tejido.scales.degree_to_semitone(8, "major") == 12
	assert tejido.scales.degree_to_semitone(0, "major") == -1
	assert tejido.scales.degree_to_semitone(3, "pentatonic_minor") == 5


def test_scale_pattern () -> None:

	"""Degree tapes become semitone tapes; rests stay."""

	assert tejido.scales.scale_pattern("1 3 5", "major") == "0 4 7"
	assert tejido.scales.scale_pattern("1 - 5", "minor") == "0 - 7"


def test_to_midi () -> None:

	"""C4 is MIDI 60."""

	assert tejido.scales.to_midi_note(0, "C", 4) == 60
	assert tejido.scales.to_midi_note(4, "G", 3) == 59
	assert tejido.scales.to_midi_pattern("0 4 7", "C", 4) == "60 64 67"
	assert tejido.scales.to_midi_pattern("0 - 7", "A", 2) == "45 - 52"


def test_chord () -> None:

	"""Chords are interval tapes."""

	assert tejido.scales.chord("major7", "C") == "0 4 7 11"
	assert tejido.scales.chord("minor") == "0 3 7"


def test_parse_chords () -> None:

	"""Roman numerals: upper case major, lower case minor, unknown as I."""

	assert tejido.scales.parse_chords("I IV V", "major") == "0 4 7 5 9 12 7 11 14"
	assert tejido.scales.parse_chords("ii", "major") == "2 5 9"
	assert tejido.scales.parse_chords("X", "major") == "0 4 7"


def test_note_to_midi () -> None:

	"""Note names with octaves convert to MIDI numbers."""

	assert tejido.scales.note_to_midi("C4") == 60
	assert tejido.scales.note_to_midi("F#3") == 54
	assert tejido.scales.note_to_midi("Bb2") == 46
	assert tejido.scales.note_to_midi("C-1") == 0


def test_note_to_midi_invalid () -> None:

	"""Malformed names raise."""

	for name in ("C", "H4", "c4", "C#x"):
		with pytest.raises(ValueError):
			tejido.scales.note_to_midi(name)


def test_midi_to_note () -> None:

	"""MIDI numbers are spelled with sharps."""

	assert tejido.scales.midi_to_note(60) == "C4"
	assert tejido.scales.midi_to_note(66) == "F#4"
	assert tejido.scales.midi_to_note(0) == "C-1"


def test_tape_conversions_pass_through () -> None:

	"""Rests and unreadable elements are kept as they are."""

	assert tejido.scales.notes_to_midi("C4 - E4 foo") == "60 - 64 foo"
	assert tejido.scales.midi_to_notes("60 - 64 x") == "C4 - E4 x"
