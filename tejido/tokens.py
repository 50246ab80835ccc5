"""Token vocabulary produced by the tape notation tokenizer.

Every token is derived from exactly one whitespace-delimited lexeme:

- ``Rest(count)`` - ``-`` or ``-*n``
- ``Note(text)`` - an integer lexeme, kept as text
- ``GroupStart`` / ``GroupEnd`` - ``[`` and ``]``
- ``GroupEndRepeat(count)`` - ``]*n``
- ``Random`` - ``?``
- ``RandomRange(minimum, maximum)`` - ``?<a-b>``
- ``Unknown(raw)`` - anything else (dropped during expansion)
"""

import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class Rest:

	"""``count`` consecutive single-beat rests."""

	count: int = 1


@dataclasses.dataclass(frozen=True)
class Note:

	"""A literal integer lexeme, stored as text to preserve its formatting."""

	text: str


@dataclasses.dataclass(frozen=True)
class GroupStart:
	pass


@dataclasses.dataclass(frozen=True)
class GroupEnd:
	pass


@dataclasses.dataclass(frozen=True)
class GroupEndRepeat:

	"""Closes a group and replays its content ``count`` times."""

	count: int


@dataclasses.dataclass(frozen=True)
class Random:

	"""Draws one value from the active note pool."""


@dataclasses.dataclass(frozen=True)
class RandomRange:

	"""Draws one integer uniformly from ``[minimum, maximum]``."""

	minimum: int = 1
	maximum: int = 127


@dataclasses.dataclass(frozen=True)
class Unknown:

	"""A lexeme matching no rule. Kept for diagnostics only."""

	raw: str


Token = typing.Union[Rest, Note, GroupStart, GroupEnd, GroupEndRepeat, Random, RandomRange, Unknown]
