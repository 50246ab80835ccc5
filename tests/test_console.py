import pathlib
import random

import pytest

import tejido.console
import tejido.sequence_utils

from conftest import FailingSender, FakeSender, scripted_input


def test_assignment_command () -> None:

	"""``target = notation`` sends the expanded tape."""

	assert tejido.console.parse_command("lead = 60 [ 62 64 ]*2") == ("lead", "60 62 64 62 64")


def test_kick_command (rng: random.Random) -> None:

	"""Kick tapes start on a hit and hold only hits and rests."""

	target, tape = tejido.console.parse_command("kick complex(2, 4)", rng)

	assert target == "kick"
	assert tape.split()[0] == "1"
	assert len(tape.split()) == 4
	assert set(tape.split()) <= {"1", "-"}


def test_kick_command_swings_when_complex (rng: random.Random) -> None:

	"""Above complexity 5 the kick is swung."""

	_, tape = tejido.console.parse_command("kick complex(8)", rng)

	assert len(tape.split()) == 8
	assert all(":" in element for element in tape.split())


def test_bass_command (rng: random.Random) -> None:

	"""Bass lines are low melodies of the requested length."""

	target, tape = tejido.console.parse_command("bass complex(3, 6)", rng)

	assert target == "bass"
	assert len(tape.split()) == 6
	assert all(element == "-" or int(element) < 72 for element in tape.split())


def test_melody_command (rng: random.Random) -> None:

	"""Scale melodies take root, complexity and length."""

	target, tape = tejido.console.parse_command("melody minor(A, 3, 7)", rng)

	assert target == "melody"
	assert len(tape.split()) == 7
	assert all(element == "-" or tejido.sequence_utils.parse_int(element) is not None for element in tape.split())


def test_swing_command (rng: random.Random) -> None:

	"""Swung melodies default to eight elements with durations."""

	target, tape = tejido.console.parse_command("melody swing(D, 4)", rng)

	assert target == "melody"
	assert len(tape.split()) == 8
	assert all(":" in element for element in tape.split())


def test_unknown_commands () -> None:

	"""Anything else is not a command."""

	assert tejido.console.parse_command("hello") is None
	assert tejido.console.parse_command("melody major(H, 3)") is None
	assert tejido.console.parse_command("kick complex()") is None


def test_console_sends_and_exits (fake_sender: FakeSender, capsys: pytest.CaptureFixture) -> None:

	"""Commands are sent until ``exit``; unknown lines print help."""

	console = tejido.console.Console(fake_sender)
	console.run(scripted_input(["lead = 1 2", "", "bogus", "exit", "never = 3"]))

	output = capsys.readouterr().out

	assert fake_sender.sent == [("lead", "1 2")]
	assert "Unknown command: bogus" in output
	assert "Sent to lead: 1 2" in output
	assert "Exiting..." in output


def test_console_exits_on_eof (fake_sender: FakeSender, capsys: pytest.CaptureFixture) -> None:

	"""End of input stops the loop."""

	tejido.console.Console(fake_sender).run(scripted_input(["quit"]))
	tejido.console.Console(fake_sender).run(scripted_input([]))

	assert "EOF received, exiting..." in capsys.readouterr().out


def test_console_reports_generator_errors (fake_sender: FakeSender, capsys: pytest.CaptureFixture) -> None:

	"""Invalid generator arguments are reported and the loop continues."""

	console = tejido.console.Console(fake_sender)
	console.run(scripted_input(["bass complex(3, 0)", "a = 1"]))

	assert "Error:" in capsys.readouterr().out
	assert fake_sender.sent == [("a", "1")]


def test_console_survives_send_failures (capsys: pytest.CaptureFixture) -> None:

	"""Transport errors are reported and the loop continues."""

	console = tejido.console.Console(FailingSender())
	console.run(scripted_input(["a = 1", "b = 2"]))

	assert capsys.readouterr().out.count("Send failed") == 2
	assert console.last_tape is None


def test_console_save (fake_sender: FakeSender, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture) -> None:

	"""``save`` writes the last sent tape to a MIDI file."""

	path = tmp_path / "last.mid"

	console = tejido.console.Console(fake_sender, bpm=90)
	console.run(scripted_input([f"save {path}", "lead = 60 62", f"save {path}"]))

	output = capsys.readouterr().out

	assert "Nothing to save yet." in output
	assert path.exists()
