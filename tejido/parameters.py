"""Per-element parameters: ``note@velocity:duration``.

- ``60@0.8`` - note with velocity
- ``60:2`` - note with duration in beats
- ``60@0.8:2`` - both
"""

import dataclasses
import typing


PARAMETER_NAMES = ("notes", "velocities", "durations")
DEFAULT_VELOCITY = "1.0"
DEFAULT_DURATION = "1.0"


@dataclasses.dataclass
class ParameterTape:

	"""
	Parallel tapes split out of a parameterized pattern.

	``velocities`` and ``durations`` are None when no element carried them.
	"""

	notes: str
	velocities: typing.Optional[str] = None
	durations: typing.Optional[str] = None


def parse_element (element: str) -> typing.Tuple[str, typing.Optional[str], typing.Optional[str]]:

	"""Split one element into ``(note, velocity, duration)``."""

	note, at, rest = element.partition("@")

	if at:
		velocity, colon, beats = rest.partition(":")
		return note, velocity, (beats if colon else None)

	note, colon, beats = element.partition(":")

	return note, None, (beats if colon else None)


def parse (pattern: str) -> ParameterTape:

	"""
	Split a parameterized pattern into parallel tapes.

	When some elements carry a parameter, the others get its default
	(``1.0``).

	Example:
		```python
		parse("60@0.8:2 64@0.6:1")
		# ParameterTape(notes="60 64", velocities="0.8 0.6", durations="2 1")
		```
	"""

	parsed = [parse_element(element) for element in pattern.split()]

	notes = " ".join(note for note, _, _ in parsed)
	velocities: typing.Optional[str] = None
	durations: typing.Optional[str] = None

	if any(velocity is not None for _, velocity, _ in parsed):
		velocities = " ".join(velocity if velocity is not None else DEFAULT_VELOCITY for _, velocity, _ in parsed)

	if any(beats is not None for _, _, beats in parsed):
		durations = " ".join(beats if beats is not None else DEFAULT_DURATION for _, _, beats in parsed)

	return ParameterTape(notes=notes, velocities=velocities, durations=durations)


def format (params: ParameterTape) -> str:

	"""Join parallel tapes back into ``note@velocity:duration`` elements."""

	notes = params.notes.split()
	velocities: typing.List[typing.Optional[str]] = list(params.velocities.split()) if params.velocities is not None else [None] * len(notes)
	durations: typing.List[typing.Optional[str]] = list(params.durations.split()) if params.durations is not None else [None] * len(notes)

	elements: typing.List[str] = []

	for note, velocity, beats in zip(notes, velocities, durations):

		element = note

		if velocity is not None:
			element += f"@{velocity}"

		if beats is not None:
			element += f":{beats}"

		elements.append(element)

	return " ".join(elements)


def _check_name (name: str) -> None:

	if name not in PARAMETER_NAMES:
		raise ValueError(f"Unknown parameter: {name!r}. Available: {list(PARAMETER_NAMES)}")


def get_param (pattern: str, name: str) -> str:

	"""Return one parameter's tape, or ``""`` when no element carries it."""

	_check_name(name)

	value = getattr(parse(pattern), name)

	return value if value is not None else ""


def transform_param (pattern: str, name: str, fn: typing.Callable[[str], str]) -> str:

	"""Apply ``fn`` to one parameter's tape and reassemble the pattern.

	Example:
		```python
		transform_param("60@0.8:2 64@0.6:1", "notes", lambda t: tejido.transpose(t, 12))
		# "72@0.8:2 76@0.6:1"
		```
	"""

	_check_name(name)

	params = parse(pattern)
	current = getattr(params, name)

	if current is None:
		return format(params)

	return format(dataclasses.replace(params, **{name: fn(current)}))
