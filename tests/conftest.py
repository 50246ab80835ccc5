import random
import socket
import typing

import pytest


class FakeSender:

	"""Records tapes instead of sending them."""

	def __init__ (self) -> None:

		self.sent: typing.List[typing.Tuple[str, str]] = []
		self.closed = False


	def send (self, target: str, tape: str) -> None:

		"""Remember what would have been sent."""

		self.sent.append((target, tape))


	def describe (self) -> str:

		"""Fixed destination label."""

		return "fake://test"


	def close (self) -> None:

		"""Mark the sender closed."""

		self.closed = True


class FailingSender (FakeSender):

	"""A sender whose network is down."""

	def send (self, target: str, tape: str) -> None:

		"""Always fail like an unreachable socket."""

		raise OSError("Network is unreachable")


def scripted_input (lines: typing.Iterable[str]) -> typing.Callable[[str], str]:

	"""Return an ``input()`` replacement that replays ``lines`` and then raises EOFError."""

	remaining = iter(lines)

	def fake_input (prompt: str) -> str:

		try:
			return next(remaining)
		except StopIteration:
			raise EOFError

	return fake_input


@pytest.fixture
def rng () -> random.Random:

	"""A seeded random source for reproducible draws."""

	return random.Random(42)


@pytest.fixture
def fake_sender () -> FakeSender:

	"""A sender that records instead of sending."""

	return FakeSender()


@pytest.fixture
def udp_receiver () -> typing.Iterator[socket.socket]:

	"""A loopback UDP socket on a free port."""

	sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
	sock.bind(("127.0.0.1", 0))
	sock.settimeout(2.0)

	yield sock

	sock.close()
