"""Structural pattern generators.

These operate on tape notation and return tapes; nothing here knows about
pitch.
"""

import random
import typing

import tejido.context
import tejido.sequence_utils
import tejido.transforms


def palindrome (pattern: str, include_middle: bool = False) -> str:

	"""Mirror a pattern, optionally repeating the middle element.

	Example:
		```python
		palindrome("1 2 3")                       # "1 2 3 2 1"
		palindrome("1 2 3", include_middle=True)  # "1 2 3 3 2 1"
		```
	"""

	forward = tejido.transforms.elements(pattern)
	backward = forward[::-1] if include_middle else forward[-2::-1]

	return " ".join(forward + backward)


def stutter (pattern: str, repeats: typing.Union[int, typing.Sequence[int]]) -> str:

	"""
	Repeat each element in place.

	``repeats`` is either one count for every element or a list of counts
	cycled across the elements.

	Example:
		```python
		stutter("1 - 3", 2)           # "1 1 - - 3 3"
		stutter("1 2 3", [3, 2, 1])   # "1 1 1 2 2 3"
		```
	"""

	if isinstance(repeats, int):
		counts: typing.Sequence[int] = [repeats]
	else:
		counts = list(repeats)

	if not counts:
		raise ValueError("Repeat counts cannot be empty")

	result: typing.List[str] = []

	for index, element in enumerate(tejido.transforms.elements(pattern)):
		result.extend([element] * max(0, counts[index % len(counts)]))

	return " ".join(result)


def expand_stutter (pattern: str) -> str:

	"""Expand ``element!n`` into ``n`` copies; a missing or bad count means one copy.

	Example:
		```python
		expand_stutter("1!3 - 3!2")  # "1 1 1 - 3 3"
		```
	"""

	result: typing.List[str] = []

	for element in pattern.split():

		note, bang, count_text = element.partition("!")
		count = tejido.sequence_utils.parse_int(count_text) if bang else None

		result.extend([note] * (count if count is not None and count > 0 else 1))

	return " ".join(result)


def weighted_choice (
	choices: typing.Sequence[typing.Tuple[str, float]],
	count: int = 1,
	seed: typing.Optional[int] = None,
	rng: typing.Optional[random.Random] = None,
) -> str:

	"""Draw ``count`` elements, each with probability proportional to its weight.

	Example:
		```python
		weighted_choice([("-", 0.2), ("60", 0.5), ("67", 0.3)], count=4, seed=7)
		```
	"""

	if count < 0:
		raise ValueError(f"count must be non-negative, got {count}")

	source = tejido.context.seeded_rng(seed, rng)

	return " ".join(tejido.sequence_utils.weighted_choice(choices, source) for _ in range(count))


def l_system (axiom: str, rules: typing.Union[typing.Mapping[str, str], typing.Sequence[typing.Tuple[str, str]]], iterations: int) -> str:

	"""
	Rewrite ``axiom`` ``iterations`` times; elements without a rule are kept.

	Example:
		```python
		l_system("1", [("1", "1 2"), ("2", "2 1")], 2)  # "1 2 2 1"
		l_system("a", {"a": "a b", "b": "a"}, 3)         # "a b a a b"
		```
	"""

	if iterations < 0:
		raise ValueError(f"iterations must be non-negative, got {iterations}")

	rule_map = dict(rules)
	current = axiom.split()

	for _ in range(iterations):
		current = " ".join(rule_map.get(element, element) for element in current).split()

	return " ".join(current)


def polyrhythm (patterns: typing.Sequence[str], cycles: typing.Sequence[int]) -> str:

	"""
	Merge several patterns, each played ``cycles[i]`` times per bar, into one
	tape ordered by onset time.

	Onsets sit on a grid of ``lcm(cycles)`` steps. Pattern ``i`` sounds every
	``lcm / cycles[i]`` steps, cycling through its elements. Simultaneous
	onsets keep the order of ``patterns``.

	Example:
		```python
		polyrhythm(["1 2 3 4", "a b c"], [4, 3])  # "1 a 2 b 3 c 4"
		```
	"""

	if len(patterns) != len(cycles):
		raise ValueError(f"Got {len(patterns)} patterns but {len(cycles)} cycle counts")

	if any(cycle <= 0 for cycle in cycles):
		raise ValueError(f"Cycle counts must be positive, got {list(cycles)}")

	if not patterns:
		return ""

	grid = tejido.sequence_utils.lcm(*cycles)
	onsets: typing.List[typing.Tuple[int, int, str]] = []

	for voice, (pattern, cycle) in enumerate(zip(patterns, cycles)):

		voice_elements = tejido.transforms.raw_or_parsed_elements(pattern)

		if not voice_elements:
			continue

		step = grid // cycle

		for hit in range(cycle):
			onsets.append((hit * step, voice, voice_elements[hit % len(voice_elements)]))

	onsets.sort(key=lambda onset: (onset[0], onset[1]))

	return " ".join(element for _, _, element in onsets)
