"""Harmonic constraints over note tapes.

Each constraint snaps integer elements to the nearest allowed MIDI pitch.
When two allowed pitches are equally near, the upper one wins. Rests and
non-integer elements are left alone.
"""

import math
import typing

import tejido.scales
import tejido.sequence_utils
import tejido.transforms


CONSONANT_INTERVALS: typing.List[int] = [0, 4, 7, 12, 16, 19]
DISSONANT_INTERVALS: typing.List[int] = [1, 6, 10, 13, 18, 22]

VOICING_STYLES = ("close", "spread", "drop2")


def nearest_pitch (pitch: int, pitch_classes: typing.Collection[int]) -> int:

	"""
	Snap a MIDI pitch to the nearest pitch whose class is in ``pitch_classes``.

	Searches outward in semitone steps; upward wins a tie.

	Example:
		```python
		nearest_pitch(61, [0, 4, 7])  # 60
		nearest_pitch(62, [0, 4, 7])  # 64 (tie between 60 and 64)
		```
	"""

	if not pitch_classes:
		raise ValueError("Pitch class set cannot be empty")

	classes = {pc % 12 for pc in pitch_classes}

	for offset in range(0, 7):
		if (pitch + offset) % 12 in classes:
			return pitch + offset
		if (pitch - offset) % 12 in classes:
			return pitch - offset

	return pitch


def _pitch_classes (root: str, intervals: typing.Iterable[int]) -> typing.Set[int]:

	root_pc = tejido.scales.note_name_to_semitone(root)

	return {(root_pc + interval) % 12 for interval in intervals}


def constrain_to_scale (pattern: str, scale: str, root: str) -> str:

	"""Snap every note to the nearest tone of ``scale`` on ``root``.

	Example:
		```python
		constrain_to_scale("60 61 66", "major", "C")  # "60 62 67"
		```
	"""

	classes = _pitch_classes(root, tejido.scales.scale_degrees(scale))

	return tejido.transforms.map_integers(pattern, lambda pitch: nearest_pitch(pitch, classes))


def constrain_to_chord (pattern: str, chord_type: str, root: str) -> str:

	"""Snap every note to the nearest tone of a chord."""

	classes = _pitch_classes(root, tejido.scales.chord_intervals(chord_type))

	return tejido.transforms.map_integers(pattern, lambda pitch: nearest_pitch(pitch, classes))


def harmonic_sequence (pattern: str, chords: typing.Sequence[typing.Tuple[str, str]], position: int = 0) -> str:

	"""Constrain to the chord at ``position`` in a looping ``(root, chord_type)`` sequence.

	Example:
		```python
		chords = [("C", "major"), ("F", "major"), ("G", "dominant7")]
		harmonic_sequence("60 63 67", chords, position=1)  # "60 65 69"
		```
	"""

	if not chords:
		raise ValueError("Chord sequence cannot be empty")

	root, chord_type = chords[position % len(chords)]

	return constrain_to_chord(pattern, chord_type, root)


def constrain_to_intervals (pattern: str, base_note: int, intervals: typing.Iterable[int]) -> str:

	"""
	Snap notes to the nearest pitch ``base_note + interval + 12 * k``.

	Intervals are not reduced to pitch classes, so ``[0, 4, 7, 12]`` and
	``[0, 4, 7]`` allow the same pitches, but intervals beyond an octave
	still only repeat every octave from their own position.
	"""

	offsets = sorted(set(intervals))

	if not offsets:
		raise ValueError("Intervals cannot be empty")

	def snap (pitch: int) -> int:

		candidates = [base_note + offset + 12 * octave for offset in offsets for octave in range(-11, 12)]

		return min(candidates, key=lambda candidate: (abs(candidate - pitch), -candidate))

	return tejido.transforms.map_integers(pattern, snap)


def mix_intervals (primary: typing.Sequence[int], secondary: typing.Sequence[int], ratio: float) -> typing.List[int]:

	"""Take ``floor((1 - ratio) * len)`` of ``primary`` and ``ceil(ratio * len)`` of ``secondary``."""

	primary_count = math.floor((1 - ratio) * len(primary))
	secondary_count = math.ceil(ratio * len(secondary))

	return list(primary[:primary_count]) + list(secondary[:secondary_count])


def tension (pattern: str, base_note: int, amount: float) -> str:

	"""Pull notes toward consonant (0.0) or dissonant (1.0) intervals from ``base_note``.

	In between, the allowed set keeps the first ``(1 - amount)`` share of the
	consonant intervals and the first ``amount`` share of the dissonant ones.

	Example:
		```python
		tension("60 62 65 67", 60, 0.0)  # only unison, 3rds, 5ths and octaves
		```
	"""

	if not 0.0 <= amount <= 1.0:
		raise ValueError(f"Tension amount must be within 0.0-1.0, got {amount}")

	intervals = mix_intervals(CONSONANT_INTERVALS, DISSONANT_INTERVALS, amount)

	return constrain_to_intervals(pattern, base_note, intervals)


def voice_leading (pattern: str, scale: str, root: str) -> str:

	"""Snap notes to a scale, choosing the nearest tone to the previous note on ties.

	With no previous note (or no tie) this is :func:`constrain_to_scale`.
	"""

	classes = _pitch_classes(root, tejido.scales.scale_degrees(scale))
	previous: typing.Optional[int] = None
	result: typing.List[str] = []

	for element in tejido.transforms.elements(pattern):

		pitch = tejido.sequence_utils.parse_int(element)

		if pitch is None:
			result.append(element)
			continue

		snapped = nearest_pitch(pitch, classes)
		distance = abs(snapped - pitch)
		mirror = pitch - (snapped - pitch)

		# A tie leaves two candidates; keep the line smooth.
		if previous is not None and distance and mirror % 12 in classes:
			snapped = min((snapped, mirror), key=lambda candidate: (abs(candidate - previous), -candidate))

		result.append(str(snapped))
		previous = snapped

	return " ".join(result)


def chord_voicing (root: str, chord_type: str, style: str = "close") -> str:

	"""Voice a chord in octave 4.

	Styles:
	- ``close``: intervals stacked from the root.
	- ``spread``: bass down an octave, top up an octave.
	- ``drop2``: second voice from the top dropped an octave (four or more notes).

	Example:
		```python
		chord_voicing("C", "major7", "close")   # "60 64 67 71"
		chord_voicing("C", "major7", "spread")  # "48 64 67 83"
		chord_voicing("C", "major7", "drop2")   # "55 60 64 71"
		```
	"""

	if style not in VOICING_STYLES:
		raise ValueError(f"Unknown voicing style: {style!r}. Available: {list(VOICING_STYLES)}")

	root_midi = tejido.scales.note_to_midi(f"{root}4")
	notes = [root_midi + interval for interval in tejido.scales.chord_intervals(chord_type)]

	if style == "spread" and len(notes) >= 2:
		notes = [notes[0] - 12] + notes[1:-1] + [notes[-1] + 12]

	elif style == "drop2" and len(notes) > 3:
		dropped = notes.pop(-2) - 12
		notes = sorted(notes + [dropped])

	return " ".join(str(note) for note in notes)
