"""Interactive console for generating tapes and sending them live.

Usage::

    python -m tejido
    python -m tejido 7001

Commands::

    kick complex(5)          # kick pattern, complexity 5
    bass complex(8, 12)      # bass line, complexity 8, length 12
    melody minor(C, 3, 7)    # C minor melody, complexity 3, length 7
    melody swing(D, 4, 8)    # swung D major melody, complexity 4, length 8
    lead = [ 60 64 ]*2 ?     # any tape notation, sent to "lead"
    save riff.mid            # write the last tape to a MIDI file
    exit                     # quit (also: quit, Ctrl+D)
"""

import logging
import random
import re
import typing

import tejido.context
import tejido.generators.melody
import tejido.midi_export
import tejido.notation
import tejido.rhythm


logger = logging.getLogger(__name__)

PROMPT = "> "
EXIT_COMMANDS = ("exit", "quit")

DEFAULT_COMPLEXITY = 5
DEFAULT_LENGTH = 8

HELP_TEXT = """Commands:
  kick complex(5)          # kick pattern with complexity 5
  bass complex(8, 12)      # bass pattern with complexity 8 and length 12
  melody minor(C, 3, 7)    # C minor melody, complexity 3, length 7
  melody swing(D, 4, 8)    # swung D major melody, complexity 4, length 8
  <target> = <notation>    # send any tape, e.g. lead = [ 60 64 ]*2 ?
  save <file.mid>          # write the last tape to a MIDI file
  exit                     # quit"""

_KICK_COMMAND = re.compile(r"kick\s+complex\((\d+)(?:,\s*(\d+))?\)")
_BASS_COMMAND = re.compile(r"bass\s+complex\((\d+)(?:,\s*(\d+))?\)")
_MELODY_COMMAND = re.compile(r"melody\s+(major|minor)\(([A-G][#b]?),\s*(\d+)(?:,\s*(\d+))?\)")
_SWING_COMMAND = re.compile(r"melody\s+swing\(([A-G][#b]?),\s*(\d+)(?:,\s*(\d+))?\)")
_ASSIGN_COMMAND = re.compile(r"(\w+)\s*=\s*(.+)")
_SAVE_COMMAND = re.compile(r"save\s+(\S+)")


class Sender (typing.Protocol):

	"""Anything that can deliver a tape to a named target."""

	def send (self, target: str, tape: str) -> None: ...

	def describe (self) -> str: ...

	def close (self) -> None: ...


def _length (text: typing.Optional[str]) -> int:

	return int(text) if text is not None else DEFAULT_LENGTH


def kick_pattern (complexity: int, length: int, rng: typing.Optional[random.Random] = None) -> str:

	"""
	Generate a kick tape of ``1`` and ``-``.

	The first step always hits; the others hit with probability
	``max(0.8, 1 - complexity / 20)``. Above complexity 5 the tape is swung.
	"""

	source = tejido.context.resolve_rng(rng)
	beat_probability = max(0.8, 1 - complexity / 20)

	tape = " ".join("1" if i == 0 or source.random() < beat_probability else "-" for i in range(length))

	if complexity > 5:
		return tejido.rhythm.swing(tape, min(1.0, complexity / 10))

	return tape


def parse_command (line: str, rng: typing.Optional[random.Random] = None) -> typing.Optional[typing.Tuple[str, str]]:

	"""
	Turn a console command into ``(target, tape)``, or ``None`` when the
	line is not a generation command.

	Example:
		```python
		parse_command("lead = 60 [ 62 64 ]*2")  # ("lead", "60 62 64 62 64")
		parse_command("kick complex(2, 4)")      # ("kick", "1 1 1 1") most of the time
		```
	"""

	line = line.strip()
	source = tejido.context.resolve_rng(rng)

	match = _KICK_COMMAND.fullmatch(line)

	if match:
		complexity, length = match.groups()
		return "kick", kick_pattern(int(complexity), _length(length), source)

	match = _BASS_COMMAND.fullmatch(line)

	if match:
		complexity, length = match.groups()
		tape = tejido.generators.melody.generate(
			scale="minor",
			contour="random",
			interval_complexity=int(complexity),
			rhythm_complexity=int(complexity),
			length=_length(length),
			octave=2,
			rng=source,
		)
		return "bass", tape

	match = _MELODY_COMMAND.fullmatch(line)

	if match:
		scale, root, complexity, length = match.groups()
		tape = tejido.generators.melody.generate(
			scale=scale,
			root=root,
			interval_complexity=int(complexity),
			rhythm_complexity=int(complexity),
			repetition=int(complexity),
			length=_length(length),
			octave=4,
			rng=source,
		)
		return "melody", tape

	match = _SWING_COMMAND.fullmatch(line)

	if match:
		root, complexity, length = match.groups()
		tape = tejido.generators.melody.swing_melody(
			swing=0.5,
			scale="major",
			root=root,
			interval_complexity=int(complexity),
			rhythm_complexity=int(complexity),
			length=_length(length),
			octave=4,
			rng=source,
		)
		return "melody", tape

	match = _ASSIGN_COMMAND.fullmatch(line)

	if match:
		target, notation = match.groups()
		return target, tejido.notation.parse(notation, rng=source)

	return None


class Console:

	"""Read commands, generate tapes and send them until the input ends."""

	def __init__ (self, sender: Sender, bpm: float = 120, rng: typing.Optional[random.Random] = None) -> None:

		self.sender = sender
		self.bpm = bpm
		self.rng = rng
		self.last_tape: typing.Optional[str] = None

	def run (self, input_fn: typing.Callable[[str], str] = input) -> None:

		"""Run the read-send loop. Returns on EOF, ``exit`` or ``quit``."""

		print("=== Tejido Pattern Generator ===")
		print(f"Sending to {self.sender.describe()}")
		print()
		print(HELP_TEXT)

		logger.info("Console started")

		while True:

			try:
				line = input_fn(PROMPT)
			except KeyboardInterrupt:
				print()
				continue
			except EOFError:
				print()
				print("EOF received, exiting...")
				break

			line = line.strip()

			if not line:
				continue

			if line in EXIT_COMMANDS:
				print("Exiting...")
				break

			self.handle(line)

		logger.info("Console stopped")

	def handle (self, line: str) -> None:

		"""Execute one non-empty command line."""

		save = _SAVE_COMMAND.fullmatch(line)

		if save:
			self.save(save.group(1))
			return

		try:
			command = parse_command(line, self.rng)
		except ValueError as e:
			print(f"Error: {e}")
			return

		if command is None:
			print(f"Unknown command: {line}")
			print(HELP_TEXT)
			return

		target, tape = command

		try:
			self.sender.send(target, tape)
		except OSError as e:
			logger.warning(f"Send failed: {e}")
			print(f"Send failed: {e}")
			return

		self.last_tape = tape
		print(f"Sent to {target}: {tape}")

	def save (self, filename: str) -> None:

		"""Write the last sent tape to a MIDI file."""

		if self.last_tape is None:
			print("Nothing to save yet.")
			return

		try:
			tejido.midi_export.tape_to_midi(self.last_tape, filename, bpm=self.bpm)
		except OSError as e:
			logger.warning(f"Failed to save {filename}: {e}")
			print(f"Failed to save {filename}: {e}")
			return

		print(f"Saved {filename}")
