import socket

import pythonosc.osc_message

import tejido.osc


def test_address () -> None:

	"""Targets hang off the prefix."""

	assert tejido.osc.OscTapeSender().address("kick") == "/tejido/kick"
	assert tejido.osc.OscTapeSender(prefix="pd/").address("bass") == "/pd/bass"
	assert tejido.osc.OscTapeSender(prefix="").address("bass") == "/bass"


def test_send (udp_receiver: socket.socket) -> None:

	"""The tape travels as a single string argument."""

	port = udp_receiver.getsockname()[1]

	with tejido.osc.OscTapeSender("127.0.0.1", port) as sender:
		sender.send("kick", "1 - 1 -")

	message = pythonosc.osc_message.OscMessage(udp_receiver.recv(4096))

	assert message.address == "/tejido/kick"
	assert message.params == ["1 - 1 -"]


def test_describe () -> None:

	"""The destination is shown as a URL."""

	assert tejido.osc.OscTapeSender("127.0.0.1", 57120, "/sc").describe() == "osc://127.0.0.1:57120/sc"
