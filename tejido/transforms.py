"""Tape composition helpers.

Every helper accepts tape notation, expands it with
:func:`tejido.notation.parse`, and returns a new tape. Rests are ``-``;
elements that are not integers pass through arithmetic unchanged.
"""

import typing

import tejido.notation
import tejido.sequence_utils
import tejido.tokens


def elements (pattern: str) -> typing.List[str]:

	"""Expand ``pattern`` and split it into tape elements."""

	return tejido.notation.parse(pattern).split()


def raw_or_parsed_elements (pattern: str) -> typing.List[str]:

	"""
	Split verbatim when the pattern contains words outside the notation
	(e.g. ``"a b c"``), otherwise expand it first.
	"""

	lexemes = pattern.split()

	if any(isinstance(tejido.notation.parse_token(lexeme), tejido.tokens.Unknown) for lexeme in lexemes):
		return lexemes

	return elements(pattern)


def transform (pattern: str, fn: typing.Callable[[str], str]) -> str:

	"""Apply ``fn`` to each element of the expanded pattern.

	Example:
		```python
		transform("1 - 3", lambda n: n if n == "-" else str(int(n) * 2))  # "2 - 6"
		```
	"""

	return " ".join(fn(element) for element in elements(pattern))


def map_integers (pattern: str, fn: typing.Callable[[int], typing.Any]) -> str:

	"""Apply ``fn`` to integer elements only; rests and other text pass through."""

	def apply (element: str) -> str:

		value = tejido.sequence_utils.parse_int(element)

		return element if value is None else str(fn(value))

	return transform(pattern, apply)


def transpose (pattern: str, amount: int) -> str:

	"""Add ``amount`` to every note.

	Example:
		```python
		transpose("60 - 64 -", -12)  # "48 - 52 -"
		```
	"""

	return map_integers(pattern, lambda value: value + amount)


def scale (pattern: str, factor: float) -> str:

	"""Multiply every note by ``factor``, rounding halves away from zero."""

	return map_integers(pattern, lambda value: tejido.sequence_utils.round_half_away(value * factor))


def _combine (first: str, second: str, fn: typing.Callable[[str, str], str]) -> str:

	left = elements(first)
	right = elements(second)

	if not left or not right:
		raise ValueError("Cannot combine an empty pattern")

	length = max(len(left), len(right))

	return " ".join(
		fn(a, b) for a, b in zip(
			tejido.sequence_utils.cycle_to(left, length),
			tejido.sequence_utils.cycle_to(right, length),
		)
	)


def add (first: str, second: str) -> str:

	"""Add two patterns element by element, cycling the shorter one.

	A rest takes the other pattern's element.

	Example:
		```python
		add("1 2 3 4", "10 20")  # "11 22 13 24"
		add("1 - 3", "10 20 30")  # "11 20 33"
		```
	"""

	def add_pair (a: str, b: str) -> str:

		if a == "-":
			return b

		if b == "-":
			return a

		x = tejido.sequence_utils.parse_int(a)
		y = tejido.sequence_utils.parse_int(b)

		return a if x is None or y is None else str(x + y)

	return _combine(first, second, add_pair)


def multiply (first: str, second: str) -> str:

	"""Multiply two patterns element by element. A rest in either gives a rest."""

	def multiply_pair (a: str, b: str) -> str:

		if a == "-" or b == "-":
			return "-"

		x = tejido.sequence_utils.parse_int(a)
		y = tejido.sequence_utils.parse_int(b)

		return a if x is None or y is None else str(x * y)

	return _combine(first, second, multiply_pair)


def cat (patterns: typing.Iterable[str]) -> str:

	"""Concatenate expanded patterns."""

	return " ".join(tejido.notation.parse(pattern) for pattern in patterns if pattern.strip())


def interleave (patterns: typing.Sequence[str]) -> str:

	"""Take one element from each pattern in turn, cycling shorter patterns.

	Example:
		```python
		interleave(["1 2 3", "a b c", "x y z"])  # "1 a x 2 b y 3 c z"
		```
	"""

	split = [raw_or_parsed_elements(pattern) for pattern in patterns]

	if not split or any(not parts for parts in split):
		raise ValueError("Cannot interleave empty patterns")

	longest = max(len(parts) for parts in split)

	return " ".join(parts[i % len(parts)] for i in range(longest) for parts in split)


def rotate (pattern: str, steps: int) -> str:

	"""Rotate left by ``steps`` (negative rotates right).

	Example:
		```python
		rotate("1 2 3 4", 1)   # "2 3 4 1"
		rotate("1 2 3 4", -1)  # "4 1 2 3"
		```
	"""

	parts = elements(pattern)

	if not parts:
		raise ValueError("Cannot rotate an empty pattern")

	shift = steps % len(parts)

	return " ".join(parts[shift:] + parts[:shift])


def reverse (pattern: str) -> str:

	"""Reverse the expanded pattern."""

	return " ".join(reversed(elements(pattern)))


def repeat (pattern: str, n: int) -> str:

	"""Repeat the expanded pattern ``n`` times."""

	if n <= 0:
		raise ValueError(f"Repeat count must be positive, got {n}")

	tape = tejido.notation.parse(pattern)

	if not tape:
		raise ValueError("Cannot repeat an empty pattern")

	return " ".join([tape] * n)


def map_range (pattern: str, in_min: float, in_max: float, out_min: float, out_max: float) -> str:

	"""Linearly map notes from ``[in_min, in_max]`` to ``[out_min, out_max]``.

	Example:
		```python
		map_range("1 5 10", 1, 10, 0, 100)  # "0 44 100"
		```
	"""

	if in_min == in_max:
		raise ValueError(f"Input range cannot be zero-width ({in_min} == {in_max})")

	return map_integers(
		pattern,
		lambda value: tejido.sequence_utils.round_half_away((value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min)
	)
