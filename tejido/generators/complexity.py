"""
Complexity-scaled generators.

A single 0-10 ``complexity`` setting controls how adventurous the output
is: leap size and frequency in melodies, passing tones in walking bass,
and the density of rests.
"""

import math
import random
import re
import typing

import tejido.context
import tejido.scales
import tejido.sequence_utils


COMMON_MOVES = [1, 1, 2, 2, -1, -1, -2]
COMPLEX_MOVES = [3, 4, 5, -3, -4, 6, -5]

MAX_DEGREE = 15
BASS_STYLES = ("walking", "arpeggiated", "repeated")

# Non-chord tones allowed when tension is high: 2nd, 4th and 6th.
TENSION_EXTENSIONS = [2, 5, 9]
HIGH_TENSION = 5

_CHORD_SYMBOL_PATTERN = re.compile(r"([A-G][#b]?)(maj7|m7|7|m|dim|aug|sus)?")

_CHORD_SUFFIXES: typing.Dict[str, str] = {
	"": "major",
	"maj7": "major7",
	"m7": "minor7",
	"7": "dominant7",
	"m": "minor",
	"dim": "diminished",
	"aug": "augmented",
	"sus": "sus4",
}


def _clamp (value: float) -> float:

	return max(0, min(10, value))


def parse_chord_name (symbol: str) -> typing.Tuple[str, str]:

	"""
	Split a chord symbol into ``(root, chord_type)``.

	Example:
		```python
		parse_chord_name("Am")    # ("A", "minor")
		parse_chord_name("Bb7")   # ("Bb", "dominant7")
		parse_chord_name("F")     # ("F", "major")
		```
	"""

	match = _CHORD_SYMBOL_PATTERN.fullmatch(symbol)

	if match is None:
		raise ValueError(f"Unknown chord symbol: {symbol!r}. Expected e.g. 'C', 'Am', 'G7', 'Fmaj7'.")

	root, suffix = match.groups()

	return root, _CHORD_SUFFIXES[suffix or ""]


def chord_tones (symbol: str, octave: int) -> typing.List[int]:

	"""MIDI notes of a chord symbol with its root in ``octave``."""

	root, chord_type = parse_chord_name(symbol)
	base = (octave + 1) * 12 + tejido.scales.note_name_to_semitone(root)

	return [base + interval for interval in tejido.scales.chord_intervals(chord_type)]


def _add_rests (notes: typing.Iterable[str], complexity: float, rng: random.Random) -> str:

	rest_probability = complexity * 0.03

	return " ".join("-" if rng.random() < rest_probability else note for note in notes)


def generate_melody (
	scale: str = "major",
	root: str = "C",
	octave: int = 4,
	length: int = 8,
	complexity: float = 5,
	seed: typing.Optional[int] = None,
	rng: typing.Optional[random.Random] = None,
) -> str:

	"""
	Generate a melody whose leaps and rests grow with ``complexity``.

	Each step moves by a common move (mostly steps) or, with probability
	``complexity / 10``, a complex move (leaps of 3-6 degrees). Degrees stay
	within 1-15 by folding an octave of degrees back.

	Example:
		```python
		generate_melody(scale="dorian", root="D", complexity=2, seed=1)
		```
	"""

	if length < 1:
		raise ValueError(f"length must be at least 1, got {length}")

	source = tejido.context.seeded_rng(seed, rng)
	complexity = _clamp(complexity)
	complex_ratio = complexity / 10

	degrees = [1]

	for _ in range(length - 1):

		move = source.choice(COMPLEX_MOVES) if source.random() < complex_ratio else source.choice(COMMON_MOVES)
		degree = degrees[-1] + move

		if degree < 1:
			degree += 7
		elif degree > MAX_DEGREE:
			degree -= 7

		degrees.append(degree)

	semitones = tejido.scales.scale_pattern(" ".join(str(degree) for degree in degrees), scale)
	notes = tejido.scales.to_midi_pattern(semitones, root, octave).split()

	return _add_rests(notes, complexity, source)


def generate_bassline (
	chord_progression: str = "C F G Am",
	octave: int = 2,
	notes_per_chord: int = 4,
	complexity: float = 3,
	style: str = "walking",
	seed: typing.Optional[int] = None,
	rng: typing.Optional[random.Random] = None,
) -> str:

	"""
	Generate a bassline over a progression of chord symbols.

	Styles:
	- ``repeated`` - the chord root on every note
	- ``arpeggiated`` - chord tones in order, cycled
	- ``walking`` - starts on the root, moves between chord tones with
	  passing tones (probability ``complexity / 10``), and usually lands on
	  the fifth at the end of each chord

	Example:
		```python
		generate_bassline("Am F C G", style="arpeggiated", complexity=0)
		# "45 48 52 45 41 45 48 41 36 40 43 36 43 47 50 43"
		```
	"""

	if style not in BASS_STYLES:
		raise ValueError(f"Unknown bass style: {style!r}. Available: {list(BASS_STYLES)}")

	if notes_per_chord < 1:
		raise ValueError(f"notes_per_chord must be at least 1, got {notes_per_chord}")

	source = tejido.context.seeded_rng(seed, rng)
	complexity = _clamp(complexity)
	notes: typing.List[int] = []

	for symbol in chord_progression.split():

		tones = chord_tones(symbol, octave)

		if style == "repeated":
			notes.extend([tones[0]] * notes_per_chord)
		elif style == "arpeggiated":
			notes.extend(tejido.sequence_utils.cycle_to(tones, notes_per_chord))
		else:
			notes.extend(_walking_bass(tones, notes_per_chord, complexity, source))

	return _add_rests((str(note) for note in notes), complexity, source)


def _walking_bass (tones: typing.List[int], count: int, complexity: float, rng: random.Random) -> typing.List[int]:

	line = [tones[0]]

	for i in range(1, count):

		current = line[-1]

		if i == count - 1:
			# Land on the fifth (or the top tone of a smaller chord) most of the time.
			line.append(tones[min(len(tones) - 1, 2)] if rng.random() < 0.7 else rng.choice(tones))

		elif rng.random() < complexity / 10:
			line.append(current + rng.choice([-2, -1, 1, 2]))

		else:
			line.append(rng.choice(tones))

	return line


def constrain_to_chords (pattern: str, chord_progression: str, tension: float = 3) -> str:

	"""
	Move notes onto the chord sounding beneath them.

	The pattern is divided evenly across the chords (``ceil(len / chords)``
	elements each). Each note takes the next permitted chord tone at or
	above its pitch class, kept within the note's octave; with ``tension`` above 5 the 2nd, 4th and 6th are
	permitted too. Rests and non-integer elements pass through.

	Example:
		```python
		constrain_to_chords("60 62 64 65 67 69", "C F")  # "60 64 64 65 69 69"
		```
	"""

	chords = chord_progression.split()
	notes = pattern.split()

	if not chords:
		raise ValueError("Chord progression cannot be empty")

	if not notes:
		return ""

	tension = _clamp(tension)
	per_chord = math.ceil(len(notes) / len(chords))
	result: typing.List[str] = []

	for index, symbol in enumerate(chords):

		group = notes[index * per_chord:(index + 1) * per_chord]

		if not group:
			break

		root, chord_type = parse_chord_name(symbol)
		root_pc = tejido.scales.note_name_to_semitone(root)
		permitted = tejido.scales.chord_intervals(chord_type)

		if tension > HIGH_TENSION:
			permitted = permitted + TENSION_EXTENSIONS

		for note in group:

			pitch = tejido.sequence_utils.parse_int(note)

			if pitch is None:
				result.append(note)
				continue

			octave, pc = divmod(pitch, 12)
			distance = (pc - root_pc) % 12
			closest = min(permitted, key=lambda interval: (interval - distance) % 12)

			result.append(str(octave * 12 + (root_pc + closest) % 12))

	return " ".join(result)
