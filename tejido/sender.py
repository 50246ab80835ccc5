"""
UDP transport for tapes, speaking the FUDI message format Pure Data's
``[netreceive -u]`` understands.

Each datagram is one ASCII message, ``<target> <tape>;\\n``. A ``[route]``
object on the receiving side splits messages by target.

Example::

    with tejido.sender.TapeSender(port=7000) as sender:
        sender.send("kick", tejido.parse("E(3,8)"))
"""

import logging
import socket
import typing


logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7000


def format_message (text: str) -> bytes:

	"""Terminate a message with ``;\\n``, replacing any existing terminator.

	Example:
		```python
		format_message("kick 1 - 1 -")    # b"kick 1 - 1 -;\\n"
		format_message("kick 1 - 1 -;")   # b"kick 1 - 1 -;\\n"
		```
	"""

	return (text.rstrip("\n;") + ";\n").encode("ascii")


class TapeSender:

	"""Sends tapes to one UDP destination over a single socket."""

	def __init__ (self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:

		"""Store the destination; the socket opens on first use."""

		self.host = host
		self.port = port
		self._sock: typing.Optional[socket.socket] = None

	def __enter__ (self) -> "TapeSender":

		self.open()
		return self

	def __exit__ (self, *exc_info: typing.Any) -> None:

		self.close()

	def open (self) -> None:

		"""Open the UDP socket if it is not already open."""

		if self._sock is None:
			self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
			logger.debug(f"UDP socket open for {self.host}:{self.port}")

	def close (self) -> None:

		"""Close the socket."""

		if self._sock is not None:
			self._sock.close()
			self._sock = None

	def send (self, target: str, tape: str) -> None:

		"""Send ``tape`` addressed to ``target``. An empty target sends the bare tape."""

		self.open()

		assert self._sock is not None

		message = f"{target} {tape}" if target else tape
		self._sock.sendto(format_message(message), (self.host, self.port))

		logger.info(f"Sent to {target or self.host}:{self.port} - {tape}")

	def describe (self) -> str:

		"""Human-readable destination."""

		return f"udp://{self.host}:{self.port}"


def send_pattern (tape: str, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, target: str = "") -> None:

	"""
	Send one tape and close the socket.

	Socket errors are logged and re-raised.
	"""

	try:
		with TapeSender(host, port) as sender:
			sender.send(target, tape)

	except OSError as e:
		logger.warning(f"Failed to send to {host}:{port}: {e}")
		raise
