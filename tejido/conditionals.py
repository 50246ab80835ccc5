"""Pattern selection driven by counters, beats, phases and chance.

These helpers choose between tapes; they never modify them.
"""

import operator
import random
import re
import typing

import tejido.context
import tejido.sequence_utils


_COMPARISONS: typing.Dict[str, typing.Callable[[float, float], bool]] = {
	"==": operator.eq,
	"!=": operator.ne,
	"<=": operator.le,
	">=": operator.ge,
	"<": operator.lt,
	">": operator.gt,
}

_COMPARISON_PATTERN = re.compile(r"\s*(-?\d+(?:\.\d+)?)\s*(==|!=|<=|>=|<|>)\s*(-?\d+(?:\.\d+)?)\s*")

OTHER = "other"


def evaluate_condition (condition: typing.Union[bool, str]) -> bool:

	"""
	Evaluate a bool, ``"true"``/``"false"``, or a numeric comparison such as ``"2 > 1"``.

	Anything else is false. No code is ever evaluated.
	"""

	if isinstance(condition, bool):
		return condition

	text = condition.strip().lower()

	if text in ("true", "false"):
		return text == "true"

	match = _COMPARISON_PATTERN.fullmatch(text)

	if match is None:
		return False

	left, op, right = match.groups()

	return _COMPARISONS[op](float(left), float(right))


def when (condition: typing.Union[bool, str], true_pattern: str, false_pattern: str) -> str:

	"""Choose ``true_pattern`` when the condition holds, else ``false_pattern``.

	Example:
		```python
		when("2 > 1", "1 2 3", "4 5 6")  # "1 2 3"
		```
	"""

	return true_pattern if evaluate_condition(condition) else false_pattern


def every (n: int, true_pattern: str, false_pattern: str, counter: int = 1) -> str:

	"""Choose ``true_pattern`` on every ``n``th repetition."""

	if n <= 0:
		raise ValueError(f"n must be positive, got {n}")

	return true_pattern if counter % n == 0 else false_pattern


def switch (state: typing.Any, patterns: typing.Sequence[str]) -> str:

	"""Choose ``patterns[state]``, wrapping around. Non-integer states pick the first."""

	if not patterns:
		raise ValueError("Patterns cannot be empty")

	index = state if isinstance(state, int) and not isinstance(state, bool) else 0

	return patterns[index % len(patterns)]


def sequence (patterns: typing.Sequence[str], counter: int = 0) -> str:

	"""Step through ``patterns`` one per repetition."""

	if not patterns:
		raise ValueError("Patterns cannot be empty")

	return patterns[counter % len(patterns)]


def on_beat (beat_patterns: typing.Mapping[typing.Any, str], beat: int = 1) -> str:

	"""Choose the pattern mapped to ``beat``, falling back to the ``"other"`` key or ``""``.

	Example:
		```python
		on_beat({1: "60 62 64", 3: "67 69", "other": "70"}, beat=2)  # "70"
		```
	"""

	if beat in beat_patterns:
		return beat_patterns[beat]

	return beat_patterns.get(OTHER, "")


def on_phase (phase_patterns: typing.Mapping[typing.Any, str], phase: float = 0.0) -> str:

	"""Choose the pattern whose ``(low, high)`` key contains ``phase`` (inclusive)."""

	for key, pattern in phase_patterns.items():
		if isinstance(key, tuple) and len(key) == 2 and key[0] <= phase <= key[1]:
			return pattern

	return phase_patterns.get(OTHER, "")


def weighted (weighted_patterns: typing.Mapping[str, float], rng: typing.Optional[random.Random] = None) -> str:

	"""Choose one pattern with probability proportional to its weight."""

	return tejido.sequence_utils.weighted_choice(list(weighted_patterns.items()), tejido.context.resolve_rng(rng))
