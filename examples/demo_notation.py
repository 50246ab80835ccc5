import tejido
import tejido.conditionals
import tejido.generators.patterns as patterns
import tejido.rhythm

# Repetition and random notes drawn from one octave.
context = tejido.PatternContext.create(range=(60, 72))

phrase = tejido.parse("[ 60 64 67 ]*2 ? - ?<1-5>", context)
print(phrase)

# Bar-by-bar variation.
for bar in range(4):
	fill = tejido.conditionals.every(4, "1 1 1 1", "1 - 1 -", counter=bar)
	print(bar, fill)

print(patterns.l_system("1", {"1": "1 2", "2": "2 1"}, 3))
print(patterns.polyrhythm(["1 2 3", "a b"], [3, 2]))
print(tejido.rhythm.swing(phrase, 0.5))
