import random

import pytest

import tejido.generators.patterns


def test_palindrome () -> None:

	"""Mirror with or without repeating the middle."""

	assert tejido.generators.patterns.palindrome("1 2 3") == "1 2 3 2 1"
	assert tejido.generators.patterns.palindrome("1 2 3", include_middle=True) == "1 2 3 3 2 1"
	assert tejido.generators.patterns.palindrome("1") == "1"


def test_palindrome_expands_notation () -> None:

	"""The pattern is expanded before mirroring."""

	assert tejido.generators.patterns.palindrome("[ 1 2 ]*2") == "1 2 1 2 1 2 1"


def test_stutter () -> None:

	"""Fixed or cycled repeat counts."""

	assert tejido.generators.patterns.stutter("1 2 3", 2) == "1 1 2 2 3 3"
	assert tejido.generators.patterns.stutter("1 2 3", [3, 2, 1]) == "1 1 1 2 2 3"
	assert tejido.generators.patterns.stutter("1 - 3", 2) == "1 1 - - 3 3"
	assert tejido.generators.patterns.stutter("1 2 3 4", [2, 0]) == "1 1 3 3"


def test_stutter_needs_counts () -> None:

	"""An empty count list is rejected."""

	with pytest.raises(ValueError):
		tejido.generators.patterns.stutter("1 2", [])


def test_expand_stutter () -> None:

	"""``!n`` repeats an element; bad counts mean once."""

	assert tejido.generators.patterns.expand_stutter("1!3 2!2 3") == "1 1 1 2 2 3"
	assert tejido.generators.patterns.expand_stutter("1!3 - 3!2") == "1 1 1 - 3 3"
	assert tejido.generators.patterns.expand_stutter("1!x 2!0 3!") == "1 2 3"


def test_weighted_choice_count () -> None:

	"""Draws the requested number of elements."""

	assert tejido.generators.patterns.weighted_choice([("60", 1.0)], count=3) == "60 60 60"
	assert tejido.generators.patterns.weighted_choice([("60", 1.0)], count=0) == ""


def test_weighted_choice_seed () -> None:

	"""The same seed repeats the same draws."""

	choices = [("-", 0.2), ("60", 0.5), ("67", 0.3)]

	first = tejido.generators.patterns.weighted_choice(choices, count=16, seed=456)
	second = tejido.generators.patterns.weighted_choice(choices, count=16, seed=456)

	assert first == second
	assert set(first.split()) <= {"-", "60", "67"}


def test_weighted_choice_rng (rng: random.Random) -> None:

	"""An injected generator is used when no seed is given."""

	result = tejido.generators.patterns.weighted_choice([("a", 1.0), ("b", 1.0)], count=8, rng=rng)

	assert len(result.split()) == 8


def test_l_system () -> None:

	"""Rules rewrite every element each iteration."""

	assert tejido.generators.patterns.l_system("1", [("1", "1 2"), ("2", "2 1")], 2) == "1 2 2 1"
	assert tejido.generators.patterns.l_system("a", {"a": "a b", "b": "a"}, 3) == "a b a a b"
	assert tejido.generators.patterns.l_system("x y", {"x": "y"}, 0) == "x y"


def test_l_system_negative_iterations () -> None:

	"""Negative iteration counts are rejected."""

	with pytest.raises(ValueError):
		tejido.generators.patterns.l_system("1", {}, -1)


def test_polyrhythm () -> None:

	"""Onsets from each pattern merge in time order."""

	assert tejido.generators.patterns.polyrhythm(["1 2 3 4", "a b c"], [4, 3]) == "1 a 2 b 3 c 4"
	assert tejido.generators.patterns.polyrhythm(["1 2", "a b c d"], [2, 4]) == "1 a b 2 c d"


def test_polyrhythm_cycles_elements () -> None:

	"""Patterns shorter than their cycle count wrap around."""

	assert tejido.generators.patterns.polyrhythm(["1 2"], [4]) == "1 2 1 2"


def test_polyrhythm_invalid () -> None:

	"""Counts must match and be positive."""

	with pytest.raises(ValueError):
		tejido.generators.patterns.polyrhythm(["1"], [1, 2])

	with pytest.raises(ValueError):
		tejido.generators.patterns.polyrhythm(["1"], [0])
