"""Tape notation compiler.

A pattern string is rewritten, tokenized and expanded into a flat "tape":
space-separated note and rest tokens that every other part of Tejido reads.

**Syntax:**
- `-`: A single-beat rest. `-*3` is three rests.
- `60`: Any integer lexeme is a note, kept exactly as written.
- `[ 1 2 ]`: A group. `[ 1 2 ]*3` replays the group three times.
- `?`: A random value from the context's note pool.
- `?<1-5>`: A random integer between 1 and 5 inclusive.
- `E(3,8)`: A Euclidean rhythm of 3 hits over 8 steps (`1` hits, `-` rests).
- `spread(1 2 3, 6)`: A fully expanded sub-pattern stretched or compressed
  to the given length.
- `$name = 1 2 3` defines a variable, `$name` inserts it.

Brackets, repeats and lexemes are whitespace-delimited: `[ 1 2 ]*2`, not `[1 2]*2`.

Parsing is fail-soft. Unrecognized lexemes are dropped, an unmatched `]` ends
the open scope, an unclosed `[` is closed at the end of input, and malformed
function calls are left in place. `E()` calls, `spread()` lengths and repeat
counts above `MAX_STEPS` are not expanded.
"""

import logging
import random
import re
import typing

import tejido.context
import tejido.sequence_utils
import tejido.tokens


logger = logging.getLogger(__name__)

MAX_SPREAD_DEPTH = 32

# Largest E() step count, spread() length and -*n or ]*n repeat that is expanded.
MAX_STEPS = 4096

# Longest run of elements a single group may expand to.
MAX_TAPE_LENGTH = 65536

_EUCLID_PATTERN = re.compile(r"E\((\d+)\s*,\s*(\d+)\)")
_ASSIGNMENT_PATTERN = re.compile(r"\$(\w+)\s*=\s*([^$]*)")
_VARIABLE_PATTERN = re.compile(r"\$(\w+)")
_RANDOM_RANGE_PATTERN = re.compile(r"\?<(\d+)-(\d+)>")
_SPREAD_CALL = "spread("

ContextOptions = typing.Union[tejido.context.PatternContext, typing.Mapping[str, typing.Any], None]


class NotationError (ValueError):
	pass


def parse (pattern: str, context: ContextOptions = None, rng: typing.Optional[random.Random] = None) -> str:

	"""
	Parse a pattern string into a tape.

	Runs preprocess -> tokenize -> expand -> format. Never raises for
	malformed notation; the result is the best-effort expansion.

	Parameters:
		pattern: Tape notation text.
		context: A :class:`~tejido.context.PatternContext`, or a mapping with
			any of ``notes``, ``range`` and ``vars``.
		rng: Random source for ``?`` and ``?<a-b>`` (defaults to the
			process-wide generator).

	Example:
		```python
		parse("- -*2 [ 1 2 4 ]*2")  # "- - - 1 2 4 1 2 4"
		parse("E(3,8)")             # "1 - 1 - 1 - - -"
		parse("$x = 1 2 3 $x")      # "1 2 3"
		```
	"""

	ctx = tejido.context.PatternContext.from_options(context)

	return _parse(pattern, ctx, tejido.context.resolve_rng(rng), 0)


def _parse (pattern: str, ctx: tejido.context.PatternContext, rng: random.Random, depth: int) -> str:

	text = _preprocess(pattern, ctx, rng, depth)

	return format_output(expand(tokenize(text), ctx, rng))


def preprocess (pattern: str, context: ContextOptions = None, rng: typing.Optional[random.Random] = None) -> str:

	"""Expand function calls, then substitute variables."""

	ctx = tejido.context.PatternContext.from_options(context)

	return _preprocess(pattern, ctx, tejido.context.resolve_rng(rng), 0)


def _preprocess (pattern: str, ctx: tejido.context.PatternContext, rng: random.Random, depth: int) -> str:

	text = _expand_functions(pattern, ctx, rng, depth)

	return substitute_variables(text, ctx)


def expand_functions (pattern: str, context: ContextOptions = None, rng: typing.Optional[random.Random] = None) -> str:

	"""
	Replace every ``E(k,n)`` call, then every ``spread(pattern, length)`` call.
	"""

	ctx = tejido.context.PatternContext.from_options(context)

	return _expand_functions(pattern, ctx, tejido.context.resolve_rng(rng), 0)


def _expand_functions (pattern: str, ctx: tejido.context.PatternContext, rng: random.Random, depth: int) -> str:

	text = _EUCLID_PATTERN.sub(_replace_euclid, pattern)

	return _expand_spreads(text, ctx, rng, depth)


def _replace_euclid (match: re.Match) -> str:

	pulses = tejido.sequence_utils.parse_int(match.group(1))
	steps = tejido.sequence_utils.parse_int(match.group(2))

	if pulses is None or steps is None:
		logger.warning(f"Leaving {match.group(0)!r} unexpanded: arguments are not integers")
		return match.group(0)

	if steps > MAX_STEPS:
		logger.warning(f"Leaving {match.group(0)!r} unexpanded: more than {MAX_STEPS} steps")
		return match.group(0)

	try:
		return euclidean_rhythm(pulses, steps)
	except ValueError as e:
		logger.warning(f"Leaving {match.group(0)!r} unexpanded: {e}")
		return match.group(0)


def euclidean_rhythm (pulses: int, steps: int) -> str:

	"""Render ``E(pulses, steps)`` as a tape of ``1`` hits and ``-`` rests.

	Example:
		```python
		euclidean_rhythm(3, 8)  # "1 - 1 - 1 - - -"
		euclidean_rhythm(0, 4)  # "- - - -"
		```
	"""

	sequence = tejido.sequence_utils.generate_euclidean_sequence(steps, pulses)

	return " ".join("1" if hit else "-" for hit in sequence)


def _expand_spreads (text: str, ctx: tejido.context.PatternContext, rng: random.Random, depth: int) -> str:

	"""
	Rewrite each top-level ``spread(...)`` call, matching balanced parentheses.
	"""

	pieces: typing.List[str] = []
	position = 0

	while True:

		start = text.find(_SPREAD_CALL, position)

		if start < 0:
			break

		open_index = start + len(_SPREAD_CALL) - 1
		close_index = _find_closing_paren(text, open_index)

		if close_index is None:
			logger.warning(f"Unbalanced spread call at offset {start}: {text[start:]!r}")
			break

		pieces.append(text[position:start])
		pieces.append(_expand_spread_call(text[start:close_index + 1], text[open_index + 1:close_index], ctx, rng, depth))
		position = close_index + 1

	pieces.append(text[position:])

	return "".join(pieces)


def _find_closing_paren (text: str, open_index: int) -> typing.Optional[int]:

	level = 0

	for index in range(open_index, len(text)):

		char = text[index]

		if char == "(":
			level += 1

		elif char == ")":
			level -= 1
			if level == 0:
				return index

	return None


def _split_arguments (arguments: str) -> typing.Optional[typing.Tuple[str, str]]:

	"""Split on the first comma outside parentheses; ``None`` unless exactly two arguments."""

	level = 0
	commas: typing.List[int] = []

	for index, char in enumerate(arguments):

		if char == "(":
			level += 1
		elif char == ")":
			level -= 1
		elif char == "," and level == 0:
			commas.append(index)

	if len(commas) != 1:
		return None

	split_at = commas[0]

	return arguments[:split_at], arguments[split_at + 1:]


def _expand_spread_call (call: str, arguments: str, ctx: tejido.context.PatternContext, rng: random.Random, depth: int) -> str:

	split = _split_arguments(arguments)

	if split is None:
		logger.warning(f"Leaving {call!r} unexpanded: expected spread(<pattern>, <length>)")
		return call

	subpattern, length_text = split
	length = tejido.sequence_utils.parse_int(length_text.strip())

	if length is None:
		logger.warning(f"Leaving {call!r} unexpanded: length {length_text.strip()!r} is not an integer")
		return call

	if length > MAX_STEPS:
		logger.warning(f"Leaving {call!r} unexpanded: length above {MAX_STEPS}")
		return call

	if depth >= MAX_SPREAD_DEPTH:
		logger.warning(f"Leaving {call!r} unexpanded: spread nesting deeper than {MAX_SPREAD_DEPTH}")
		return call

	try:
		return _spread_tape(_parse(subpattern, ctx, rng, depth + 1), length)
	except ValueError as e:
		logger.warning(f"Leaving {call!r} unexpanded: {e}")
		return call


def spread_pattern (pattern: str, length: int, context: ContextOptions = None, rng: typing.Optional[random.Random] = None) -> str:

	"""Parse ``pattern`` fully, then stretch or compress it to ``length`` elements.

	Raises:
		ValueError: If ``length`` is not positive.

	Example:
		```python
		spread_pattern("1 2 3", 6)    # "1 1 2 2 3 3"
		spread_pattern("1 2 3 4", 2)  # "1 3"
		```
	"""

	return _spread_tape(parse(pattern, context, rng), length)


def _spread_tape (tape: str, length: int) -> str:

	elements = tape.split()

	if length > 0 and not elements:
		return format_output([""] * length)

	return " ".join(tejido.sequence_utils.spread(elements, length))


def substitute_variables (pattern: str, context: ContextOptions = None) -> str:

	"""
	Strip ``$name = value`` assignments, then replace every ``$name`` reference.

	A value runs up to the next ``$`` or the end of the pattern and is
	trimmed. Assignments are recorded left to right, so a later assignment
	overwrites an earlier one. References are resolved only after every
	assignment has been removed; undefined names become empty text.
	Definitions start from ``context.vars`` and are never written back to it.

	Example:
		```python
		substitute_variables("$a = 1 - $b = 5 6 $b $a")  # "5 6 1 -"
		```
	"""

	ctx = tejido.context.PatternContext.from_options(context)
	variables: typing.Dict[str, str] = dict(ctx.vars)

	def record (match: re.Match) -> str:
		variables[match.group(1)] = match.group(2).strip()
		return ""

	stripped = _ASSIGNMENT_PATTERN.sub(record, pattern)

	return _VARIABLE_PATTERN.sub(lambda match: variables.get(match.group(1), ""), stripped)


def tokenize (pattern: str) -> typing.List[tejido.tokens.Token]:

	"""
	Convert a preprocessed string into one token per whitespace-delimited lexeme.
	"""

	return [parse_token(lexeme) for lexeme in pattern.split()]


def tokenize_strict (pattern: str) -> typing.List[tejido.tokens.Token]:

	"""Like :func:`tokenize`, but raise :class:`NotationError` on the first unrecognized lexeme."""

	tokens = tokenize(pattern)

	for token in tokens:
		if isinstance(token, tejido.tokens.Unknown):
			raise NotationError(f"Unrecognized lexeme: {token.raw!r}")

	return tokens


def parse_token (lexeme: str) -> tejido.tokens.Token:

	"""Map a single lexeme to its token."""

	if lexeme == "-":
		return tejido.tokens.Rest(1)

	if lexeme == "[":
		return tejido.tokens.GroupStart()

	if lexeme == "]":
		return tejido.tokens.GroupEnd()

	if lexeme == "?":
		return tejido.tokens.Random()

	if lexeme.startswith("-*"):
		count = _parse_count(lexeme[2:])
		return tejido.tokens.Rest(count) if count is not None else tejido.tokens.Unknown(lexeme)

	if lexeme.startswith("]*"):
		count = _parse_count(lexeme[2:])
		return tejido.tokens.GroupEndRepeat(count) if count is not None else tejido.tokens.Unknown(lexeme)

	if lexeme.startswith("?<"):
		return _parse_random_range(lexeme)

	if tejido.sequence_utils.parse_int(lexeme) is not None:
		return tejido.tokens.Note(lexeme)

	return tejido.tokens.Unknown(lexeme)


def _parse_count (text: str) -> typing.Optional[int]:

	if not text.isascii() or not text.isdigit():
		return None

	count = tejido.sequence_utils.parse_int(text)

	if count is None or count > MAX_STEPS:
		logger.debug(f"Repeat count {count} is above {MAX_STEPS}, dropping")
		return None

	return count


def _parse_random_range (lexeme: str) -> tejido.tokens.Token:

	match = _RANDOM_RANGE_PATTERN.fullmatch(lexeme)

	if match is None:
		return tejido.tokens.Unknown(lexeme)

	low = int(match.group(1))
	high = int(match.group(2))

	if low < high and low >= 0 and high <= 127:
		return tejido.tokens.RandomRange(low, high)

	logger.debug(f"Random range {lexeme!r} is out of bounds, using 1-127")

	return tejido.tokens.RandomRange(1, 127)


def expand (tokens: typing.Sequence[tejido.tokens.Token], context: ContextOptions = None, rng: typing.Optional[random.Random] = None) -> typing.List[str]:

	"""
	Expand tokens into a flat list of elements: ``""`` for a rest, text for a note.

	Groups are tracked with an explicit stack of scope accumulators, so
	nesting depth is limited only by the input length. Each ``[`` pushes a
	scope; ``]`` pops it into its parent and ``]*n`` pops it repeated ``n``
	times. A group's random draws happen once and are replayed, not redrawn.
	Replays are cut back so no repeated group grows past ``MAX_TAPE_LENGTH``.
	"""

	ctx = tejido.context.PatternContext.from_options(context)
	rng = tejido.context.resolve_rng(rng)

	stack: typing.List[typing.List[str]] = [[]]

	for index, token in enumerate(tokens):

		if isinstance(token, tejido.tokens.Rest):
			stack[-1].extend([""] * token.count)

		elif isinstance(token, tejido.tokens.Note):
			stack[-1].append(token.text)

		elif isinstance(token, tejido.tokens.Random):
			stack[-1].append(rng.choice(ctx.notes))

		elif isinstance(token, tejido.tokens.RandomRange):
			stack[-1].append(str(rng.randint(token.minimum, token.maximum)))

		elif isinstance(token, tejido.tokens.GroupStart):
			stack.append([])

		elif isinstance(token, (tejido.tokens.GroupEnd, tejido.tokens.GroupEndRepeat)):

			times = token.count if isinstance(token, tejido.tokens.GroupEndRepeat) else 1
			scope = stack.pop()

			if times > 1 and len(scope) * times > MAX_TAPE_LENGTH:
				fitting = max(1, MAX_TAPE_LENGTH // len(scope))
				logger.warning(f"Group of {len(scope)} elements repeated {times} times exceeds {MAX_TAPE_LENGTH} elements, repeating {fitting} times")
				times = fitting

			scope = scope * times

			if not stack:
				# Unmatched close at the top level ends the pattern.
				remaining = len(tokens) - index - 1
				if remaining:
					logger.debug(f"Unmatched group close, discarding {remaining} trailing tokens")
				return scope

			stack[-1].extend(scope)

	# Unclosed groups end with the input.
	while len(stack) > 1:
		scope = stack.pop()
		stack[-1].extend(scope)

	return stack[0]


def format_output (elements: typing.Iterable[str]) -> str:

	"""Join elements with single spaces, rendering empty elements as ``-``."""

	return " ".join(element if element else "-" for element in elements)
