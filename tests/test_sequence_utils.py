import random

import pytest

import tejido.sequence_utils


# --- generate_euclidean_sequence ---


def test_euclidean_three_in_eight () -> None:

	"""Three hits in eight steps pair each hit with a rest."""

	assert tejido.sequence_utils.generate_euclidean_sequence(steps=8, pulses=3) == [1, 0, 1, 0, 1, 0, 0, 0]


def test_euclidean_more_hits_than_rests () -> None:

	"""With more hits than rests, the rests are spread among the hits."""

	assert tejido.sequence_utils.generate_euclidean_sequence(steps=8, pulses=5) == [1, 0, 1, 1, 0, 1, 1, 0]
	assert tejido.sequence_utils.generate_euclidean_sequence(steps=8, pulses=6) == [1, 1, 1, 0, 1, 1, 1, 0]
	assert tejido.sequence_utils.generate_euclidean_sequence(steps=5, pulses=4) == [1, 1, 1, 1, 0]


def test_euclidean_starts_on_a_hit () -> None:

	"""Every sequence with at least one pulse begins with a hit."""

	for steps in range(1, 17):
		for pulses in range(1, steps + 1):
			assert tejido.sequence_utils.generate_euclidean_sequence(steps, pulses)[0] == 1


def test_euclidean_length_and_count () -> None:

	"""Every valid input gives ``steps`` values with ``pulses`` hits."""

	for steps in range(0, 17):
		for pulses in range(0, steps + 1):
			sequence = tejido.sequence_utils.generate_euclidean_sequence(steps, pulses)
			assert len(sequence) == steps
			assert sum(sequence) == pulses


def test_euclidean_invalid () -> None:

	"""Negative values and too many pulses are rejected."""

	with pytest.raises(ValueError):
		tejido.sequence_utils.generate_euclidean_sequence(steps=3, pulses=5)

	with pytest.raises(ValueError):
		tejido.sequence_utils.generate_euclidean_sequence(steps=-1, pulses=0)


# --- spread ---


def test_spread_identity () -> None:

	"""Spreading to the same length changes nothing."""

	assert tejido.sequence_utils.spread(["a", "b"], 2) == ["a", "b"]


def test_spread_uneven_stretch () -> None:

	"""Uneven stretches favour earlier elements."""

	assert tejido.sequence_utils.spread(["1", "2", "3"], 4) == ["1", "1", "2", "2"]


def test_spread_uneven_compress () -> None:

	"""Compression samples at floor(i * stride)."""

	assert tejido.sequence_utils.spread(["1", "2", "3", "4", "5"], 2) == ["1", "3"]


def test_spread_invalid () -> None:

	"""Non-positive lengths and empty input are rejected."""

	with pytest.raises(ValueError):
		tejido.sequence_utils.spread(["1"], 0)

	with pytest.raises(ValueError):
		tejido.sequence_utils.spread([], 3)


# --- numbers ---


def test_round_half_away () -> None:

	"""Halves round away from zero in both directions."""

	assert tejido.sequence_utils.round_half_away(2.5) == 3
	assert tejido.sequence_utils.round_half_away(-2.5) == -3
	assert tejido.sequence_utils.round_half_away(1.4) == 1
	assert tejido.sequence_utils.round_half_away(-1.6) == -2


def test_parse_int () -> None:

	"""Only optionally signed ASCII digit runs are integers."""

	assert tejido.sequence_utils.parse_int("42") == 42
	assert tejido.sequence_utils.parse_int("-3") == -3
	assert tejido.sequence_utils.parse_int("+3") == 3
	assert tejido.sequence_utils.parse_int("3.0") is None
	assert tejido.sequence_utils.parse_int("") is None
	assert tejido.sequence_utils.parse_int("-") is None
	assert tejido.sequence_utils.parse_int("٣") is None


def test_cycle_to () -> None:

	"""Cycling repeats and truncates."""

	assert tejido.sequence_utils.cycle_to([1, 2], 5) == [1, 2, 1, 2, 1]

	with pytest.raises(ValueError):
		tejido.sequence_utils.cycle_to([], 2)


def test_lcm () -> None:

	"""Least common multiple of several values."""

	assert tejido.sequence_utils.lcm(4, 3) == 12
	assert tejido.sequence_utils.lcm(2, 4, 6) == 12
	assert tejido.sequence_utils.lcm() == 1


# --- weighted_choice ---


def test_weighted_choice_basic () -> None:

	"""Should return one of the provided options."""

	rng = random.Random(42)
	result = tejido.sequence_utils.weighted_choice([("a", 1.0), ("b", 1.0)], rng)

	assert result in ("a", "b")


def test_weighted_choice_dominant_weight () -> None:

	"""An option with all the weight is always chosen."""

	rng = random.Random(0)

	for _ in range(50):
		assert tejido.sequence_utils.weighted_choice([("a", 0.0), ("b", 3.0)], rng) == "b"


def test_weighted_choice_invalid () -> None:

	"""Empty options and non-positive totals are rejected."""

	rng = random.Random(0)

	with pytest.raises(ValueError):
		tejido.sequence_utils.weighted_choice([], rng)

	with pytest.raises(ValueError):
		tejido.sequence_utils.weighted_choice([("a", 0.0)], rng)
