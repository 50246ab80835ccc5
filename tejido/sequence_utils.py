import math
import random
import typing

T = typing.TypeVar("T")


def generate_euclidean_sequence (steps: int, pulses: int) -> typing.List[int]:

	"""
	Distribute ``pulses`` hits across ``steps`` as a binary sequence.

	With no more hits than rests, each hit is followed by a single rest and
	the spare rests trail. With more hits than rests, Bjorklund's algorithm
	spreads the rests among the hits. The sequence always starts with a hit
	when ``pulses > 0``.

	Example:
		```python
		generate_euclidean_sequence(8, 3)  # [1, 0, 1, 0, 1, 0, 0, 0]
		generate_euclidean_sequence(8, 5)  # [1, 0, 1, 1, 0, 1, 1, 0]
		```
	"""

	if steps < 0 or pulses < 0:
		raise ValueError(f"Pulses ({pulses}) and steps ({steps}) must be non-negative")

	if pulses > steps:
		raise ValueError(f"Pulses ({pulses}) cannot be greater than steps ({steps})")

	if pulses == 0:
		return [0] * steps

	rests = steps - pulses

	if pulses <= rests:
		return [1, 0] * pulses + [0] * (rests - pulses)

	return _bjorklund(steps, pulses)


def _bjorklund (steps: int, pulses: int) -> typing.List[int]:

	sequence: typing.List[int] = []
	counts: typing.List[int] = []
	remainders = [pulses]
	divisor = steps - pulses
	level = 0

	while True:
		counts.append(divisor // remainders[level])
		remainders.append(divisor % remainders[level])
		divisor = remainders[level]
		level += 1
		if remainders[level] <= 1:
			break

	counts.append(divisor)

	def build (level: int) -> None:
		if level == -1:
			sequence.append(0)
		elif level == -2:
			sequence.append(1)
		else:
			for _ in range(counts[level]):
				build(level - 1)
			if remainders[level] != 0:
				build(level - 2)

	build(level)

	# Start on a hit.
	i = sequence.index(1)
	return sequence[i:] + sequence[:i]


def spread (elements: typing.Sequence[T], length: int) -> typing.List[T]:

	"""Stretch or compress a sequence to exactly ``length`` items.

	Stretching duplicates every item ``ceil(length / len(elements))`` times
	and truncates, so earlier items may repeat more often than later ones.
	Compressing keeps the item at ``floor(i * len(elements) / length)`` for
	each output index.

	Parameters:
		elements: Source items, in order.
		length: Target length (must be positive).

	Example:
		```python
		spread(["1", "2", "3"], 6)       # ["1", "1", "2", "2", "3", "3"]
		spread(["1", "2", "3", "4"], 2)  # ["1", "3"]
		```
	"""

	if length <= 0:
		raise ValueError(f"Spread length must be positive, got {length}")

	count = len(elements)

	if count == 0:
		raise ValueError("Cannot spread an empty sequence")

	if length == count:
		return list(elements)

	if length > count:
		copies = math.ceil(length / count)
		stretched = [item for item in elements for _ in range(copies)]
		return stretched[:length]

	stride = count / length

	return [elements[math.floor(i * stride)] for i in range(length)]


def round_half_away (value: float) -> int:

	"""Round to the nearest integer, with halves rounded away from zero."""

	return int(math.copysign(math.floor(abs(value) + 0.5), value))


def parse_int (text: str) -> typing.Optional[int]:

	"""Return ``text`` as an integer when it is an optionally signed run of digits, else None."""

	body = text[1:] if text[:1] in ("+", "-") else text

	if not body or not body.isascii() or not body.isdigit():
		return None

	try:
		return int(text)
	except ValueError:
		# Past the interpreter's integer string limit.
		return None


def cycle_to (elements: typing.Sequence[T], length: int) -> typing.List[T]:

	"""Repeat ``elements`` cyclically until exactly ``length`` items."""

	if not elements:
		raise ValueError("Cannot cycle an empty sequence")

	return [elements[i % len(elements)] for i in range(length)]


def lcm (*values: int) -> int:

	"""Least common multiple of positive integers."""

	result = 1

	for value in values:
		result = result * value // math.gcd(result, value)

	return result


def weighted_choice (options: typing.Sequence[typing.Tuple[T, float]], rng: random.Random) -> T:

	"""Pick one item from a list of (value, weight) pairs.

	Weights are relative - they don't need to sum to 1.0. Higher weight means
	higher probability of selection.

	Parameters:
		options: List of `(value, weight)` tuples
		rng: Random number generator instance

	Example:
		```python
		note = tejido.sequence_utils.weighted_choice([
			("60", 0.5),   # 50%
			("67", 0.3),   # 30%
			("-", 0.2),    # 20%
		], rng)
		```
	"""

	if not options:
		raise ValueError("Options list cannot be empty")

	total = sum(weight for _, weight in options)

	if total <= 0:
		raise ValueError("Total weight must be positive")

	threshold = rng.random() * total
	cumulative = 0.0

	for value, weight in options:
		cumulative += weight
		if cumulative >= threshold:
			return value

	return options[-1][0]
