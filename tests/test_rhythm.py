import pytest

import tejido.rhythm


def test_base_durations () -> None:

	"""Slash values map to whole beats."""

	assert [tejido.rhythm.duration(token) for token in ("/1", "/2", "/4", "/8", "/16", "/32")] == [4, 2, 1, 1, 0, 0]


def test_dotted_and_triplet () -> None:

	"""Dots multiply by 1.5, triplets by 2/3, then round half away from zero."""

	assert tejido.rhythm.duration("/8.") == 2
	assert tejido.rhythm.duration("/2.") == 3
	assert tejido.rhythm.duration("/4t") == 1
	assert tejido.rhythm.duration("/1t") == 3


def test_unknown_durations_default_to_one () -> None:

	"""Unknown bases and unreadable tokens count as one beat."""

	assert tejido.rhythm.duration("/3") == 1
	assert tejido.rhythm.duration("quarter") == 1
	assert tejido.rhythm.parse_rhythm("quarter") is None


def test_parse () -> None:

	"""A tape of slash tokens becomes a tape of durations."""

	assert tejido.rhythm.parse("/1 /2 /4 /8 /16") == "4 2 1 1 0"


def test_expand_rhythm () -> None:

	"""Notes and durations pair up, cycling the shorter tape."""

	assert tejido.rhythm.expand_rhythm("60 64 67", "/4. /8 /16") == "60:2 64:1 67:0"
	assert tejido.rhythm.expand_rhythm("60", "/4 /8 /8 /4") == "60:1 60:1 60:1 60:1"
	assert tejido.rhythm.expand_rhythm("60 62 64", "/2") == "60:2 62:2 64:2"


def test_expand_rhythm_empty () -> None:

	"""Both tapes need at least one element."""

	with pytest.raises(ValueError):
		tejido.rhythm.expand_rhythm("", "/4")

	with pytest.raises(ValueError):
		tejido.rhythm.expand_rhythm("60", "")


def test_light_swing () -> None:

	"""Light swing gives every element two beats."""

	assert tejido.rhythm.swing("1 2 3 4", 0.1) == "1:2 2:2 3:2 4:2"


def test_strong_swing () -> None:

	"""Strong swing alternates long and short."""

	assert tejido.rhythm.swing("1 2 3 4", 0.5) == "1:2 2:0 3:2 4:0"
	assert tejido.rhythm.swing("1 2 3", 0.3) == "1:2 2:0 3:2"


def test_split_element () -> None:

	"""Durations are optional."""

	assert tejido.rhythm.split_element("60:2") == ("60", "2")
	assert tejido.rhythm.split_element("60") == ("60", None)
