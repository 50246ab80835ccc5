"""Scale and chord definitions, and note name / MIDI conversion.

Tapes of scale degrees map to tapes of semitone offsets, and semitone tapes
map to absolute MIDI note numbers given a key and octave. MIDI octaves
follow the C4 = 60 convention.
"""

import re
import typing

import tejido.sequence_utils
import tejido.transforms


SCALES: typing.Dict[str, typing.List[int]] = {
	"major": [0, 2, 4, 5, 7, 9, 11],
	"minor": [0, 2, 3, 5, 7, 8, 10],
	"dorian": [0, 2, 3, 5, 7, 9, 10],
	"phrygian": [0, 1, 3, 5, 7, 8, 10],
	"lydian": [0, 2, 4, 6, 7, 9, 11],
	"mixolydian": [0, 2, 4, 5, 7, 9, 10],
	"locrian": [0, 1, 3, 5, 6, 8, 10],
	"harmonic_minor": [0, 2, 3, 5, 7, 8, 11],
	"melodic_minor": [0, 2, 3, 5, 7, 9, 11],
	"chromatic": [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11],
	"pentatonic_major": [0, 2, 4, 7, 9],
	"pentatonic_minor": [0, 3, 5, 7, 10],
	"blues": [0, 3, 5, 6, 7, 10],
}

CHORDS: typing.Dict[str, typing.List[int]] = {
	"major": [0, 4, 7],
	"minor": [0, 3, 7],
	"diminished": [0, 3, 6],
	"augmented": [0, 4, 8],
	"sus2": [0, 2, 7],
	"sus4": [0, 5, 7],
	"major7": [0, 4, 7, 11],
	"minor7": [0, 3, 7, 10],
	"dominant7": [0, 4, 7, 10],
	"diminished7": [0, 3, 6, 9],
	"half_diminished7": [0, 3, 6, 10],
	"augmented7": [0, 4, 8, 10],
}

NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
}

PC_TO_NOTE_NAME: typing.List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

ROMAN_NUMERALS: typing.Dict[str, int] = {
	"i": 1,
	"ii": 2,
	"iii": 3,
	"iv": 4,
	"v": 5,
	"vi": 6,
	"vii": 7,
}

_NOTE_NAME_PATTERN = re.compile(r"([A-G][#b]?)(-?\d+)")


def list_scales () -> typing.List[str]:

	"""Names of all available scales."""

	return sorted(SCALES)


def list_chords () -> typing.List[str]:

	"""Names of all available chord types."""

	return sorted(CHORDS)


def scale_degrees (name: str) -> typing.List[int]:

	"""
	Return the semitone offsets of a named scale.

	Example:
		```python
		scale_degrees("minor")  # [0, 2, 3, 5, 7, 8, 10]
		```
	"""

	if name not in SCALES:
		raise ValueError(f"Unknown scale: {name!r}. Available: {list_scales()}")

	return list(SCALES[name])


def chord_intervals (name: str) -> typing.List[int]:

	"""Return the semitone offsets of a named chord type."""

	if name not in CHORDS:
		raise ValueError(f"Unknown chord type: {name!r}. Available: {list_chords()}")

	return list(CHORDS[name])


def note_name_to_semitone (name: str) -> int:

	"""Validate a note name (e.g. ``"F#"``, ``"Bb"``) and return its pitch class (0-11)."""

	if name not in NOTE_NAME_TO_PC:
		raise ValueError(f"Unknown note name: {name!r}. Expected e.g. 'C', 'F#', 'Bb'.")

	return NOTE_NAME_TO_PC[name]


def degree_to_semitone (degree: int, scale: str) -> int:

	"""Convert a 1-based scale degree to a semitone offset, wrapping into higher octaves.

	Degrees below 1 continue downward (0 is the scale's last step, one octave down).

	Example:
		```python
		degree_to_semitone(5, "major")  # 7
		degree_to_semitone(8, "major")  # 12
		```
	"""

	steps = scale_degrees(scale)
	octave, index = divmod(degree - 1, len(steps))

	return octave * 12 + steps[index]


def scale_pattern (pattern: str, scale: str) -> str:

	"""Map a tape of scale degrees to semitone offsets.

	Example:
		```python
		scale_pattern("1 3 5", "major")  # "0 4 7"
		```
	"""

	scale_degrees(scale)

	return tejido.transforms.map_integers(pattern, lambda degree: degree_to_semitone(degree, scale))


def to_midi_note (semitone: int, key: str, octave: int = 4) -> int:

	"""Return the MIDI note ``semitone`` steps above ``key`` in ``octave``.

	Example:
		```python
		to_midi_note(0, "C", 4)  # 60
		to_midi_note(4, "G", 3)  # 59
		```
	"""

	return (octave + 1) * 12 + note_name_to_semitone(key) + semitone


def to_midi_pattern (pattern: str, key: str, octave: int = 4) -> str:

	"""Map a tape of semitone offsets to MIDI notes in ``key`` and ``octave``."""

	note_name_to_semitone(key)

	return tejido.transforms.map_integers(pattern, lambda semitone: to_midi_note(semitone, key, octave))


def chord (chord_type: str, root: str = "C") -> str:

	"""Return the semitone tape of a chord type, relative to its root."""

	note_name_to_semitone(root)

	return " ".join(str(interval) for interval in chord_intervals(chord_type))


def parse_chord_symbol (symbol: str) -> typing.Tuple[int, str]:

	"""
	Read a roman numeral into ``(degree, chord_type)``.

	Upper case is major, lower case minor. Unrecognized symbols read as ``I``.
	"""

	degree = ROMAN_NUMERALS.get(symbol.lower())

	if degree is None:
		return 1, "major"

	if symbol.isupper():
		return degree, "major"

	return degree, "minor"


def parse_chords (progression: str, scale: str, root: str = "C") -> str:

	"""Expand a roman-numeral progression to a flat tape of chord semitones.

	Example:
		```python
		parse_chords("I IV V", "major")  # "0 4 7 5 9 12 7 11 14"
		```
	"""

	note_name_to_semitone(root)

	semitones: typing.List[int] = []

	for symbol in progression.split():
		degree, chord_type = parse_chord_symbol(symbol)
		base = degree_to_semitone(degree, scale)
		semitones.extend(base + interval for interval in chord_intervals(chord_type))

	return " ".join(str(value) for value in semitones)


def parse_note_name (name: str) -> typing.Tuple[str, int]:

	"""Split ``"F#3"`` into ``("F#", 3)``."""

	match = _NOTE_NAME_PATTERN.fullmatch(name)

	if match is None:
		raise ValueError(f"Invalid note name: {name!r}. Expected e.g. 'C4', 'F#3', 'Bb2'.")

	return match.group(1), int(match.group(2))


def note_to_midi (name: str) -> int:

	"""
	Convert a note name with octave to a MIDI note number.

	Example:
		```python
		note_to_midi("C4")   # 60
		note_to_midi("F#3")  # 54
		```
	"""

	note, octave = parse_note_name(name)

	return (octave + 1) * 12 + NOTE_NAME_TO_PC[note]


def midi_to_note (midi: int) -> str:

	"""Convert a MIDI note number to a sharp-spelled name, e.g. ``66 -> "F#4"``."""

	octave, pc = divmod(midi, 12)

	return f"{PC_TO_NOTE_NAME[pc]}{octave - 1}"


def notes_to_midi (pattern: str) -> str:

	"""Convert a tape of note names to MIDI numbers. Rests and unknown names pass through."""

	def convert (element: str) -> str:

		if element == "-":
			return element

		try:
			return str(note_to_midi(element))
		except ValueError:
			return element

	return " ".join(convert(element) for element in pattern.split())


def midi_to_notes (pattern: str) -> str:

	"""Convert a tape of MIDI numbers to note names. Rests and non-integers pass through."""

	def convert (element: str) -> str:

		value = tejido.sequence_utils.parse_int(element)

		return element if value is None else midi_to_note(value)

	return " ".join(convert(element) for element in pattern.split())
