import pathlib
import typing

import mido

import tejido.midi_export


def _note_events (mid: mido.MidiFile) -> typing.List[typing.Tuple[str, int, int]]:

	"""Return ``(type, note, absolute_tick)`` for every note message."""

	events = []
	tick = 0

	for message in mid.tracks[0]:
		tick += message.time
		if message.type in ("note_on", "note_off"):
			events.append((message.type, message.note, tick))

	return events


def test_rests_advance_time () -> None:

	"""Plain elements last one beat; rests only move time on."""

	mid = tejido.midi_export.tape_to_midi("60 - 64:2")

	assert _note_events(mid) == [
		("note_on", 60, 0),
		("note_off", 60, 480),
		("note_on", 64, 960),
		("note_off", 64, 1920),
	]


def test_tempo_and_resolution () -> None:

	"""The file carries the requested tempo at 480 ticks per beat."""

	mid = tejido.midi_export.tape_to_midi("60", bpm=100)
	tempo = [message for message in mid.tracks[0] if message.type == "set_tempo"]

	assert mid.ticks_per_beat == 480
	assert tempo[0].tempo == mido.bpm2tempo(100)


def test_velocity_parameter () -> None:

	"""``@velocity`` scales 0.0-1.0 to MIDI velocity."""

	mid = tejido.midi_export.tape_to_midi("60@0.5 62")
	velocities = [message.velocity for message in mid.tracks[0] if message.type == "note_on"]

	assert velocities == [64, 100]


def test_zero_length_notes_still_sound () -> None:

	"""A zero duration note lasts one tick and does not advance time."""

	mid = tejido.midi_export.tape_to_midi("60:0 62")

	assert _note_events(mid) == [
		("note_on", 60, 0),
		("note_on", 62, 0),
		("note_off", 60, 1),
		("note_off", 62, 480),
	]


def test_non_notes_are_skipped () -> None:

	"""Elements that are not MIDI notes take time but make no sound."""

	mid = tejido.midi_export.tape_to_midi("C4 200 60")

	assert _note_events(mid) == [("note_on", 60, 960), ("note_off", 60, 1440)]


def test_save_and_reload (tmp_path: pathlib.Path) -> None:

	"""Saved files load back with the same notes."""

	path = tmp_path / "riff.mid"

	tejido.midi_export.tape_to_midi("60 62 64", str(path), bpm=90)

	loaded = mido.MidiFile(str(path))

	assert [message.note for message in loaded.tracks[0] if message.type == "note_on"] == [60, 62, 64]
