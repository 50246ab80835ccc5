"""Slash notation for note durations, and duration pairing.

Durations are whole beats (4/4, quarter note = 1) rounded half away from zero:

- ``/1`` = 4, ``/2`` = 2, ``/4`` = 1, ``/8`` = 1, ``/16`` = 0, ``/32`` = 0
- a trailing ``.`` dots the value (x1.5): ``/8.`` = 2
- a trailing ``t`` makes it a triplet (x2/3): ``/4t`` = 1

Paired tapes use ``note:duration`` elements, e.g. ``"60:1 64:2 -:1"``.
"""

import re
import typing

import tejido.sequence_utils


BASE_DURATIONS: typing.Dict[int, int] = {
	1: 4,
	2: 2,
	4: 1,
	8: 1,
	16: 0,
	32: 0,
}

DEFAULT_DURATION = 1
STRONG_SWING_THRESHOLD = 0.3

_RHYTHM_PATTERN = re.compile(r"/(\d+)(\.)?(t)?")


def parse_rhythm (token: str) -> typing.Optional[typing.Tuple[int, bool, bool]]:

	"""Split ``"/8.t"`` into ``(8, dotted, triplet)``, or None when it is not slash notation."""

	match = _RHYTHM_PATTERN.fullmatch(token)

	if match is None:
		return None

	return int(match.group(1)), match.group(2) is not None, match.group(3) is not None


def duration (token: str) -> int:

	"""
	Convert one slash-notation token to a duration in beats.

	Unparseable tokens and unknown bases count as a quarter note.

	Example:
		```python
		duration("/1")   # 4
		duration("/8.")  # 2
		```
	"""

	parsed = parse_rhythm(token)

	if parsed is None:
		return DEFAULT_DURATION

	base, dotted, triplet = parsed
	value: float = BASE_DURATIONS.get(base, DEFAULT_DURATION)

	if dotted:
		value *= 1.5

	if triplet:
		value *= 2 / 3

	return tejido.sequence_utils.round_half_away(value)


def parse (rhythm: str) -> str:

	"""Convert a tape of slash-notation tokens to a tape of durations.

	Example:
		```python
		parse("/1 /2 /4 /8 /16")  # "4 2 1 1 0"
		```
	"""

	return " ".join(str(duration(token)) for token in rhythm.split())


def expand_rhythm (notes: str, rhythm: str) -> str:

	"""Pair a note tape with slash durations as ``note:duration`` elements.

	The result is as long as the longer input; the shorter one cycles.

	Example:
		```python
		expand_rhythm("60", "/4 /8 /8 /4")          # "60:1 60:1 60:1 60:1"
		expand_rhythm("60 64 67", "/4. /8 /16")     # "60:2 64:1 67:0"
		```
	"""

	note_tokens = notes.split()
	durations = [duration(token) for token in rhythm.split()]

	if not note_tokens or not durations:
		raise ValueError("Notes and rhythm must both contain at least one element")

	length = max(len(note_tokens), len(durations))

	return " ".join(
		f"{note}:{beats}" for note, beats in zip(
			tejido.sequence_utils.cycle_to(note_tokens, length),
			tejido.sequence_utils.cycle_to(durations, length),
		)
	)


def swing (pattern: str, amount: float) -> str:

	"""Give each element an integer duration for a swung feel.

	Light swing (``amount < 0.3``) keeps every element at 2. Strong swing
	alternates 2 on the beat and 0 off the beat.

	Example:
		```python
		swing("1 2 3 4", 0.1)  # "1:2 2:2 3:2 4:2"
		swing("1 2 3 4", 0.5)  # "1:2 2:0 3:2 4:0"
		```
	"""

	elements = pattern.split()

	if amount < STRONG_SWING_THRESHOLD:
		return " ".join(f"{element}:2" for element in elements)

	return " ".join(
		f"{element}:{2 if index % 2 == 0 else 0}" for index, element in enumerate(elements)
	)


def split_element (element: str) -> typing.Tuple[str, typing.Optional[str]]:

	"""Split ``"60:2"`` into ``("60", "2")``; a bare element has no duration."""

	note, separator, beats = element.partition(":")

	return note, (beats if separator else None)
