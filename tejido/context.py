"""Per-call pattern configuration and the process-wide random source.

A :class:`PatternContext` is immutable. It carries the note pool used by
``?``, the ``range`` the default pool is built from, and predefined
variables. Variables defined inside a pattern never leak back into it.

Randomness comes from a single module-level ``random.Random``. Calling
:func:`seed` reseeds it for the whole process; callers that need isolated,
reproducible streams pass their own ``rng`` to the functions that draw.
"""

import builtins
import dataclasses
import random
import types
import typing


DEFAULT_RANGE: typing.Tuple[int, int] = (1, 127)
DEFAULT_NOTES: typing.Tuple[str, ...] = tuple(str(n) for n in range(DEFAULT_RANGE[0], DEFAULT_RANGE[1] + 1))

_rng = random.Random()


def get_rng () -> random.Random:

	"""Return the process-wide random generator."""

	return _rng


def seed (value: typing.Optional[int] = None) -> None:

	"""Reseed the process-wide random generator.

	Reseeding is global. Concurrent callers sharing one process must
	serialize their use of the generator if they rely on repeatable output.

	Example:
		```python
		tejido.seed(42)
		tejido.parse("? ? ?")  # same three notes on every run
		```
	"""

	_rng.seed(value)


def resolve_rng (rng: typing.Optional[random.Random] = None) -> random.Random:

	"""Return ``rng`` when given, otherwise the process-wide generator."""

	return rng if rng is not None else _rng


def seeded_rng (seed: typing.Optional[int] = None, rng: typing.Optional[random.Random] = None) -> random.Random:

	"""
	Return a fresh generator for ``seed``; without a seed, fall back to
	:func:`resolve_rng`.

	A seed gives a private stream so seeded generators never disturb the
	process-wide one.
	"""

	if seed is not None:
		return random.Random(seed)

	return resolve_rng(rng)


@dataclasses.dataclass(frozen=True)
class PatternContext:

	"""
	Immutable configuration consumed read-only by the expander.

	Attributes:
		notes: Ordered, non-empty pool of values drawn by ``?``.
		range: ``(min, max)`` pair the default note pool is built from.
		vars: Predefined variables (name -> already-expanded text).
	"""

	notes: typing.Tuple[str, ...] = DEFAULT_NOTES
	range: typing.Tuple[int, int] = DEFAULT_RANGE
	vars: typing.Mapping[str, str] = dataclasses.field(default_factory=lambda: types.MappingProxyType({}))

	def __post_init__ (self) -> None:

		if not self.notes:
			raise ValueError("PatternContext notes cannot be empty")

		low, high = self.range

		if low > high:
			raise ValueError(f"Invalid range: min ({low}) must be <= max ({high})")

	@classmethod
	def create (
		cls,
		notes: typing.Optional[typing.Iterable[typing.Any]] = None,
		range: typing.Tuple[int, int] = DEFAULT_RANGE,
		vars: typing.Optional[typing.Mapping[str, str]] = None,
	) -> "PatternContext":

		"""Build a context, deriving the note pool from ``range`` when ``notes`` is omitted.

		Parameters:
			notes: Values drawn by ``?`` (stringified). Defaults to every
				integer in ``range``.
			range: ``(min, max)`` inclusive pair (default ``(1, 127)``).
			vars: Predefined variables available to every pattern parsed
				with this context.

		Example:
			```python
			# One octave around middle C
			ctx = PatternContext.create(range=(60, 72))
			tejido.parse("? ? ?", ctx)
			```
		"""

		low, high = range

		if notes is None:
			pool = tuple(str(n) for n in builtins.range(low, high + 1))
		else:
			pool = tuple(str(n) for n in notes)

		return cls(
			notes=pool,
			range=(low, high),
			vars=types.MappingProxyType(dict(vars or {})),
		)

	@classmethod
	def from_options (cls, options: typing.Union["PatternContext", typing.Mapping[str, typing.Any], None]) -> "PatternContext":

		"""Accept an existing context, a mapping of ``create()`` keyword options, or ``None``."""

		if options is None:
			return DEFAULT_CONTEXT

		if isinstance(options, PatternContext):
			return options

		unknown = set(options) - {"notes", "range", "vars"}

		if unknown:
			raise ValueError(f"Unknown pattern options: {sorted(unknown)}")

		return cls.create(**options)


DEFAULT_CONTEXT = PatternContext()
