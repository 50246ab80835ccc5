"""
Contour-driven melody generation and motivic development.

:func:`generate` builds a melody in four passes over scale degrees, each
scaled by a 0-10 setting:

1. A contour (ascending, descending, arch, valley or a random walk).
2. Interval complexity - occasional leaps of 2-5 degrees.
3. Repetition - occasionally repeat the previous degree.
4. Consonance - occasionally pull a degree to the nearest chord tone.

Degrees are then mapped through the scale to MIDI notes, and rhythm
complexity and syncopation replace some notes with rests. The result
always contains only integers and ``-``.

:func:`develop` applies classical development techniques (inversion,
retrograde, augmentation, diminution, sequence, fragmentation) to an
existing tape.
"""

import logging
import random
import typing

import tejido.context
import tejido.rhythm
import tejido.scales
import tejido.sequence_utils


logger = logging.getLogger(__name__)

CONTOURS = ("ascending", "descending", "arch", "valley", "random")
TECHNIQUES = ("inversion", "retrograde", "augmentation", "diminution", "sequence", "fragmentation", "development")

# Techniques combined by "development".
_DEVELOPMENT_STEPS = ("inversion", "retrograde", "sequence")

_WALK_STEPS = [-2, -1, 1, 2]


def clamp_setting (value: float) -> float:

	"""Clamp a complexity-style setting into 0-10."""

	return max(0, min(10, value))


def generate (
	scale: str = "major",
	root: str = "C",
	octave: int = 4,
	length: int = 8,
	seed: typing.Optional[int] = None,
	rng: typing.Optional[random.Random] = None,
	contour: str = "random",
	interval_complexity: float = 5,
	rhythm_complexity: float = 5,
	consonance: float = 5,
	repetition: float = 5,
	syncopation: float = 5,
	chord_notes: typing.Sequence[int] = (1, 3, 5),
	range_constraint: typing.Tuple[int, int] = (-7, 7),
) -> str:

	"""
	Generate a melody tape.

	Parameters:
		scale: Scale name from :data:`tejido.scales.SCALES`
		root: Key note name (e.g. ``"C"``, ``"F#"``)
		octave: Octave of the tonic (C4 = 60)
		length: Number of elements to generate
		seed: Seed for a private random stream
		rng: Random source used when no seed is given
		contour: One of :data:`CONTOURS`
		interval_complexity: 0-10, how often the line leaps
		rhythm_complexity: 0-10, how often notes become rests
		consonance: 0-10, how often degrees snap to ``chord_notes``
		repetition: 0-10, how often a degree repeats
		syncopation: 0-10, how often strong beats are dropped (above 3)
		chord_notes: Scale degrees treated as chord tones
		range_constraint: ``(low, high)`` degree offsets allowed around the average degree

	Example:
		```python
		generate(scale="minor", root="A", contour="arch", seed=3)
		```
	"""

	if length < 1:
		raise ValueError(f"length must be at least 1, got {length}")

	if contour not in CONTOURS:
		raise ValueError(f"Unknown contour: {contour!r}. Available: {list(CONTOURS)}")

	if not chord_notes:
		raise ValueError("chord_notes cannot be empty")

	source = tejido.context.seeded_rng(seed, rng)
	scale_size = len(tejido.scales.scale_degrees(scale))

	degrees = _contour(contour, length, scale_size, source)
	degrees = _apply_interval_complexity(degrees, clamp_setting(interval_complexity), scale_size, range_constraint, source)
	degrees = _apply_repetition(degrees, clamp_setting(repetition), source)
	degrees = _apply_consonance(degrees, clamp_setting(consonance), chord_notes, scale_size, source)

	semitones = tejido.scales.scale_pattern(" ".join(str(degree) for degree in degrees), scale)
	notes = tejido.scales.to_midi_pattern(semitones, root, octave).split()

	elements = _apply_rhythm_variations(notes, clamp_setting(rhythm_complexity), clamp_setting(syncopation), source)

	return " ".join(element if tejido.sequence_utils.parse_int(element) is not None else "-" for element in elements)


def _contour (contour: str, length: int, scale_size: int, rng: random.Random) -> typing.List[int]:

	def rise (count: int) -> typing.List[int]:
		return [1 + (i * scale_size) // count for i in range(count)]

	def fall (count: int) -> typing.List[int]:
		return [1 + scale_size - (i * scale_size) // count for i in range(count)]

	half = length // 2

	if contour == "ascending":
		return rise(length)

	if contour == "descending":
		return fall(length)

	if contour == "arch":
		return rise(half) + fall(length - half)

	if contour == "valley":
		return fall(half) + rise(length - half)

	degrees = [1]

	for _ in range(length - 1):
		degrees.append(max(1, min(scale_size * 2, degrees[-1] + rng.choice(_WALK_STEPS))))

	return degrees


def _apply_interval_complexity (degrees: typing.List[int], complexity: float, scale_size: int, range_constraint: typing.Tuple[int, int], rng: random.Random) -> typing.List[int]:

	leap_probability = complexity / 15.0
	result = [1]

	for degree in degrees[1:]:

		if rng.random() < leap_probability:
			leap = rng.randint(2, 5) * rng.choice([1, -1])
			result.append(max(1, min(scale_size * 2, result[-1] + leap)))
		else:
			result.append(degree)

	return _constrain_range(result, *range_constraint)


def _constrain_range (degrees: typing.List[int], low: int, high: int) -> typing.List[int]:

	average = sum(degrees) // len(degrees)

	return [max(average + low, min(average + high, degree)) for degree in degrees]


def _apply_repetition (degrees: typing.List[int], repetition: float, rng: random.Random) -> typing.List[int]:

	repeat_probability = repetition / 25.0
	result = [degrees[0]]

	for degree in degrees[1:]:
		result.append(result[-1] if rng.random() < repeat_probability else degree)

	return result


def _apply_consonance (degrees: typing.List[int], consonance: float, chord_notes: typing.Sequence[int], scale_size: int, rng: random.Random) -> typing.List[int]:

	chord_probability = consonance / 15.0
	result: typing.List[int] = []

	for degree in degrees:

		if rng.random() < chord_probability:
			octave, step = divmod(degree - 1, scale_size)
			nearest = min(chord_notes, key=lambda tone: abs(step + 1 - tone))
			result.append(nearest + octave * scale_size)
		else:
			result.append(degree)

	return result


def _apply_rhythm_variations (notes: typing.List[str], rhythm_complexity: float, syncopation: float, rng: random.Random) -> typing.List[str]:

	rest_probability = rhythm_complexity * 0.03
	syncopation_probability = syncopation * 0.04
	result: typing.List[str] = []

	for index, note in enumerate(notes):

		if rng.random() < rest_probability:
			result.append("-")

		elif syncopation > 3 and index % 4 == 0 and rng.random() < syncopation_probability:
			result.append("-")

		else:
			result.append(note)

	return result


def develop (
	pattern: str,
	technique: str = "development",
	amount: float = 5,
	seed: typing.Optional[int] = None,
	rng: typing.Optional[random.Random] = None,
	pivot_index: int = 0,
	count: int = 2,
	interval: int = 2,
) -> str:

	"""
	Transform a melody with a development technique.

	Techniques:
	- ``inversion`` - mirror every note around the note at ``pivot_index``
	- ``retrograde`` - play backwards
	- ``augmentation`` - repeat each element ``max(2, round(amount / 2))`` times
	- ``diminution`` - keep each element with probability ``max(0.3, 1 - amount / 10)``
	- ``sequence`` - ``count`` copies, each ``interval`` semitones higher
	- ``fragmentation`` - drop rests, cut into fragments, repeat each once or twice
	- ``development`` - ``1 + round(amount / 3)`` random picks of inversion, retrograde and sequence

	Non-integer elements are treated as rests; the result holds only
	integers and ``-``.

	Example:
		```python
		develop("60 62 64 67 69", "inversion")              # "60 58 56 53 51"
		develop("60 62 64 67 69", "sequence", interval=3)   # "60 62 64 67 69 63 65 67 70 72"
		```
	"""

	if technique not in TECHNIQUES:
		raise ValueError(f"Unknown technique: {technique!r}. Available: {list(TECHNIQUES)}")

	source = tejido.context.seeded_rng(seed, rng)
	amount = clamp_setting(amount)
	notes: typing.List[typing.Optional[int]] = [tejido.sequence_utils.parse_int(element) for element in pattern.split()]

	if technique == "inversion":
		notes = _invert(notes, pivot_index)

	elif technique == "retrograde":
		notes = notes[::-1]

	elif technique == "augmentation":
		factor = max(2, tejido.sequence_utils.round_half_away(amount / 2))
		notes = [note for note in notes for _ in range(factor)]

	elif technique == "diminution":
		keep_probability = max(0.3, 1.0 - amount / 10)
		notes = [note for note in notes if source.random() < keep_probability]

	elif technique == "sequence":
		notes = _sequence(notes, count, interval)

	elif technique == "fragmentation":
		notes = _fragment(notes, amount, source)

	else:
		notes = _develop(notes, amount, pivot_index, source)

	return " ".join("-" if note is None else str(note) for note in notes)


def _invert (notes: typing.List[typing.Optional[int]], pivot_index: int) -> typing.List[typing.Optional[int]]:

	pivot = notes[pivot_index] if -len(notes) <= pivot_index < len(notes) else None

	if pivot is None:
		# Fall back to the first sounding note.
		pivot = next((note for note in notes if note is not None), None)

	if pivot is None:
		return list(notes)

	return [None if note is None else 2 * pivot - note for note in notes]


def _sequence (notes: typing.List[typing.Optional[int]], count: int, interval: int) -> typing.List[typing.Optional[int]]:

	return [None if note is None else note + i * interval for i in range(count) for note in notes]


def _fragment (notes: typing.List[typing.Optional[int]], amount: float, rng: random.Random) -> typing.List[typing.Optional[int]]:

	size = max(2, tejido.sequence_utils.round_half_away(10 - amount / 2))
	sounding = [note for note in notes if note is not None]
	result: typing.List[typing.Optional[int]] = []

	# Only whole fragments survive.
	for start in range(0, len(sounding) - size + 1, size):
		result.extend(sounding[start:start + size] * rng.randint(1, 2))

	if not result:
		logger.debug(f"Fragmentation produced nothing: {len(sounding)} notes for fragments of {size}")

	return result


def _develop (notes: typing.List[typing.Optional[int]], amount: float, pivot_index: int, rng: random.Random) -> typing.List[typing.Optional[int]]:

	if all(note is None for note in notes):
		return []

	steps = [rng.choice(_DEVELOPMENT_STEPS) for _ in range(1 + tejido.sequence_utils.round_half_away(amount / 3))]

	for step in steps:

		if step == "inversion":
			notes = _invert(notes, pivot_index)
		elif step == "retrograde":
			notes = notes[::-1]
		else:
			notes = _sequence(notes, 2, 2)

	return notes


def swing_melody (swing: float = 0.5, **options: typing.Any) -> str:

	"""Generate a melody and apply :func:`tejido.rhythm.swing`; accepts every :func:`generate` option."""

	return tejido.rhythm.swing(generate(**options), swing)


def with_rhythm (pattern: str, rhythm: str) -> str:

	"""Pair a melody with slash durations, e.g. ``with_rhythm("60 64 67", "/4 /8 /8")``."""

	return tejido.rhythm.expand_rhythm(pattern, rhythm)
