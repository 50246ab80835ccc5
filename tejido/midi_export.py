"""Render tapes to Standard MIDI Files with mido.

Every element occupies its own duration in beats, one beat unless it
carries a ``:duration``. Rests only advance time. ``@velocity`` (0.0-1.0)
scales the note velocity.

Example::

    tejido.midi_export.tape_to_midi("60:2 - 64@0.5 67", "riff.mid", bpm=100)
"""

import logging
import typing

import mido

import tejido.parameters
import tejido.sequence_utils


logger = logging.getLogger(__name__)

TICKS_PER_BEAT = 480
DEFAULT_VELOCITY = 100
REST = "-"


def _beats (text: typing.Optional[str]) -> float:

	if text is None:
		return 1.0

	try:
		return max(0.0, float(text))
	except ValueError:
		logger.debug(f"Unreadable duration {text!r}, using one beat")
		return 1.0


def _velocity (text: typing.Optional[str], default: int) -> int:

	if text is None:
		return default

	try:
		scaled = float(text) * 127
	except ValueError:
		return default

	return max(1, min(127, tejido.sequence_utils.round_half_away(scaled)))


def tape_to_midi (
	tape: str,
	filename: typing.Optional[str] = None,
	bpm: float = 120,
	channel: int = 0,
	velocity: int = DEFAULT_VELOCITY,
	ticks_per_beat: int = TICKS_PER_BEAT,
) -> mido.MidiFile:

	"""
	Build a one-track MIDI file from a tape and optionally save it.

	Parameters:
		tape: Expanded tape (``"60 - 64:2 67@0.8:1"``)
		filename: Where to save; ``None`` only builds the file
		bpm: Tempo written to the file
		channel: MIDI channel (0-15)
		velocity: Velocity for elements without ``@velocity``
		ticks_per_beat: File resolution

	Elements that are not MIDI note numbers (0-127) are treated as rests.
	Zero-length notes still sound for one tick.
	"""

	events: typing.List[typing.Tuple[int, int, mido.Message]] = []
	beat = 0.0

	for element in tape.split():

		note_text, velocity_text, duration_text = tejido.parameters.parse_element(element)
		beats = _beats(duration_text)
		start = tejido.sequence_utils.round_half_away(beat * ticks_per_beat)
		beat += beats

		if note_text == REST:
			continue

		note = tejido.sequence_utils.parse_int(note_text)

		if note is None or not 0 <= note <= 127:
			logger.debug(f"Skipping {element!r}: not a MIDI note")
			continue

		end = max(start + 1, tejido.sequence_utils.round_half_away(beat * ticks_per_beat))
		note_velocity = _velocity(velocity_text, velocity)

		events.append((start, 1, mido.Message("note_on", channel=channel, note=note, velocity=note_velocity)))
		events.append((end, 0, mido.Message("note_off", channel=channel, note=note, velocity=0)))

	# Note-offs sort before note-ons on the same tick.
	events.sort(key=lambda event: (event[0], event[1]))

	mid = mido.MidiFile(type=1, ticks_per_beat=ticks_per_beat)
	track = mido.MidiTrack()
	mid.tracks.append(track)

	track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm), time=0))

	last_tick = 0

	for tick, _, message in events:
		message.time = tick - last_tick
		track.append(message)
		last_tick = tick

	track.append(mido.MetaMessage("end_of_track", time=0))

	if filename is not None:
		mid.save(filename)
		logger.info(f"Saved {len(events) // 2} notes to {filename}")

	return mid
