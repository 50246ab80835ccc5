"""
Tejido - a pattern language for weaving note tapes.

A pattern is a short line of text; expanding it produces a *tape*: a flat,
space-separated sequence of elements that a sequencer, Pure Data patch or
synth can play step by step.

Notation at a glance:

- ``60 62 64`` - literal elements
- ``-`` and ``-*4`` - rests
- ``[ 1 2 ]*3`` - repeated groups, nestable
- ``?`` and ``?<40-60>`` - random notes
- ``E(3,8)`` - Euclidean rhythms
- ``spread(1 2 3, 6)`` - stretch or compress a sub-pattern
- ``$a = 1 2 $a $a`` - pattern variables

Around the parser sit tape transforms (transpose, rotate, interleave...),
scales and harmony, rhythm and element parameters, conditional selection,
melody generators, UDP/OSC transports and MIDI file export.

Minimal example:

    ```python
    import tejido

    tejido.seed(7)
    tape = tejido.parse("E(3,8) [ 60 ? ]*2", {"range": (60, 72)})
    tejido.transpose(tape, 12)
    ```

Package-level exports: ``parse``, ``PatternContext``, ``seed``, ``NotationError``
and the tape helpers of :mod:`tejido.transforms`.
"""

import tejido.context
import tejido.notation
import tejido.transforms


parse = tejido.notation.parse
NotationError = tejido.notation.NotationError
PatternContext = tejido.context.PatternContext
seed = tejido.context.seed

transform = tejido.transforms.transform
transpose = tejido.transforms.transpose
scale = tejido.transforms.scale
add = tejido.transforms.add
multiply = tejido.transforms.multiply
cat = tejido.transforms.cat
interleave = tejido.transforms.interleave
rotate = tejido.transforms.rotate
reverse = tejido.transforms.reverse
repeat = tejido.transforms.repeat
map_range = tejido.transforms.map_range
