import socket

import pytest

import tejido.sender


def test_format_message () -> None:

	"""Messages end in exactly one ``;\\n``."""

	assert tejido.sender.format_message("kick 1 - 1 -") == b"kick 1 - 1 -;\n"
	assert tejido.sender.format_message("kick 1 - 1 -;") == b"kick 1 - 1 -;\n"
	assert tejido.sender.format_message("kick 1 - 1 -;\n") == b"kick 1 - 1 -;\n"


def test_tape_sender_sends_target_and_tape (udp_receiver: socket.socket) -> None:

	"""The datagram carries the target followed by the tape."""

	port = udp_receiver.getsockname()[1]

	with tejido.sender.TapeSender("127.0.0.1", port) as sender:
		sender.send("kick", "1 - 1 -")

	assert udp_receiver.recv(4096) == b"kick 1 - 1 -;\n"


def test_tape_sender_reuses_socket (udp_receiver: socket.socket) -> None:

	"""Several sends go out over one socket."""

	port = udp_receiver.getsockname()[1]

	sender = tejido.sender.TapeSender("127.0.0.1", port)
	sender.send("a", "1")
	sender.send("b", "2")
	sender.close()

	assert udp_receiver.recv(4096) == b"a 1;\n"
	assert udp_receiver.recv(4096) == b"b 2;\n"


def test_send_pattern (udp_receiver: socket.socket) -> None:

	"""One-shot sends work with and without a target."""

	port = udp_receiver.getsockname()[1]

	tejido.sender.send_pattern("60 62", port=port)
	tejido.sender.send_pattern("60 62", port=port, target="lead")

	assert udp_receiver.recv(4096) == b"60 62;\n"
	assert udp_receiver.recv(4096) == b"lead 60 62;\n"


def test_send_pattern_reraises_socket_errors (monkeypatch: pytest.MonkeyPatch) -> None:

	"""Transport errors surface to the caller."""

	def fail (self: tejido.sender.TapeSender, target: str, tape: str) -> None:
		raise OSError("Network is unreachable")

	monkeypatch.setattr(tejido.sender.TapeSender, "send", fail)

	with pytest.raises(OSError):
		tejido.sender.send_pattern("1")


def test_describe () -> None:

	"""The destination is shown as a URL."""

	assert tejido.sender.TapeSender("10.0.0.1", 9000).describe() == "udp://10.0.0.1:9000"
