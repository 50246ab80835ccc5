"""
OSC transport for tapes.

An alternative to :mod:`tejido.sender` for receivers that speak OSC
(SuperCollider, Max, TouchDesigner, Pd with ``[oscparse]``). Each tape goes
out as one message whose address is ``<prefix>/<target>`` and whose single
argument is the tape string.
"""

import logging
import typing

import pythonosc.udp_client


logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "/tejido"


class OscTapeSender:

	"""Sends tapes as OSC messages to one UDP destination."""

	def __init__ (self, host: str = "127.0.0.1", port: int = 7000, prefix: str = DEFAULT_PREFIX) -> None:

		self.host = host
		self.port = port
		self.prefix = "/" + prefix.strip("/") if prefix.strip("/") else ""
		self._client = pythonosc.udp_client.SimpleUDPClient(host, port)

	def __enter__ (self) -> "OscTapeSender":

		return self

	def __exit__ (self, *exc_info: typing.Any) -> None:

		self.close()

	def address (self, target: str) -> str:

		"""OSC address for a target, e.g. ``/tejido/kick``."""

		return f"{self.prefix}/{target}" if target else (self.prefix or "/")

	def send (self, target: str, tape: str) -> None:

		"""Send ``tape`` to ``<prefix>/<target>``."""

		address = self.address(target)
		self._client.send_message(address, tape)

		logger.info(f"Sent OSC {address} - {tape}")

	def close (self) -> None:

		"""Nothing to release; the client's socket closes with the process."""

	def describe (self) -> str:

		"""Human-readable destination."""

		return f"osc://{self.host}:{self.port}{self.prefix}"
