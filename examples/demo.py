import logging

import tejido
import tejido.generators.complexity as complexity
import tejido.generators.melody as melody
import tejido.harmony
import tejido.midi_export
import tejido.sender

logging.basicConfig(level=logging.INFO)

PORT = 7000

tejido.seed(7)

# Drums: a Euclidean kick against a rotated hat.
kick = tejido.parse("E(3,8)")
hats = tejido.rotate(tejido.parse("[ 1 - ]*4"), 1)

# Bass walks over a short progression; the lead is kept on the same chords.
progression = "Am F C G"
bass = complexity.generate_bassline(progression, style="walking", complexity=4)
lead = melody.generate(scale="minor", root="A", contour="arch", length=16)
lead = complexity.constrain_to_chords(lead, progression, tension=3)

with tejido.sender.TapeSender(port=PORT) as sender:
	sender.send("kick", kick)
	sender.send("hats", hats)
	sender.send("bass", bass)
	sender.send("lead", lead)

tejido.midi_export.tape_to_midi(lead, "lead.mid", bpm=100)
