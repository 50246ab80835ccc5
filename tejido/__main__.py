import argparse
import dataclasses
import logging
import os
import typing

import yaml

import tejido.console
import tejido.context
import tejido.osc
import tejido.sender


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "tejido.yaml"
PROTOCOLS = ("fudi", "osc")


@dataclasses.dataclass
class Settings:

	"""Resolved runtime settings: defaults, then config file, then command line."""

	protocol: str = "fudi"
	host: str = tejido.sender.DEFAULT_HOST
	port: int = tejido.sender.DEFAULT_PORT
	osc_prefix: str = tejido.osc.DEFAULT_PREFIX
	seed: typing.Optional[int] = None
	bpm: float = 120
	log_level: str = "INFO"


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def build_parser () -> argparse.ArgumentParser:

	"""Command-line options; every one overrides the config file."""

	parser = argparse.ArgumentParser(prog="tejido", description="Tejido pattern console")
	parser.add_argument("port_arg", nargs="?", type=int, metavar="PORT", help="Destination port (same as --port)")
	parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help=f"YAML config file (default: {DEFAULT_CONFIG_PATH})")
	parser.add_argument("--host", help="Destination host (default: 127.0.0.1)")
	parser.add_argument("--port", type=int, help="Destination port (default: 7000)")
	parser.add_argument("--protocol", choices=PROTOCOLS, help="Message format (default: fudi)")
	parser.add_argument("--seed", type=int, help="Seed the random generator for repeatable output")
	parser.add_argument("--log-level", help="Logging level (default: INFO)")

	return parser


def resolve_settings (config: typing.Mapping[str, typing.Any], args: argparse.Namespace) -> Settings:

	"""Merge config file values and command-line overrides into :class:`Settings`."""

	transport = config.get('transport', {}) or {}
	generator = config.get('generator', {}) or {}
	midi = config.get('midi', {}) or {}
	logging_config = config.get('logging', {}) or {}

	defaults = Settings()

	port = args.port if args.port is not None else args.port_arg

	settings = Settings(
		protocol=args.protocol or transport.get('protocol', defaults.protocol),
		host=args.host or transport.get('host', defaults.host),
		port=port if port is not None else int(transport.get('port', defaults.port)),
		osc_prefix=transport.get('osc_prefix', defaults.osc_prefix),
		seed=args.seed if args.seed is not None else generator.get('seed'),
		bpm=float(midi.get('bpm', defaults.bpm)),
		log_level=(args.log_level or logging_config.get('level', defaults.log_level)).upper(),
	)

	if settings.protocol not in PROTOCOLS:
		raise ValueError(f"Unknown protocol: {settings.protocol!r}. Expected one of {list(PROTOCOLS)}")

	if not 0 < settings.port < 65536:
		raise ValueError(f"Port must be within 1-65535, got {settings.port}")

	if not isinstance(logging.getLevelName(settings.log_level), int):
		raise ValueError(f"Unknown log level: {settings.log_level!r}")

	return settings


def create_sender (settings: Settings) -> tejido.console.Sender:

	"""Build the transport named by ``settings.protocol``."""

	if settings.protocol == "osc":
		return tejido.osc.OscTapeSender(settings.host, settings.port, settings.osc_prefix)

	return tejido.sender.TapeSender(settings.host, settings.port)


def main (argv: typing.Optional[typing.Sequence[str]] = None) -> None:

	"""
	Main entry point for the tejido console.
	"""

	parser = build_parser()
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.INFO)

	config = load_config(args.config)

	try:
		settings = resolve_settings(config, args)
	except ValueError as e:
		parser.error(str(e))

	logging.getLogger().setLevel(settings.log_level)

	if settings.seed is not None:
		tejido.context.seed(settings.seed)
		logger.info(f"Random generator seeded with {settings.seed}")

	sender = create_sender(settings)

	try:
		tejido.console.Console(sender, bpm=settings.bpm).run()
	finally:
		sender.close()


if __name__ == "__main__":
	main()
