"""
Algorithmic tape generators.

- ``tejido.generators.patterns`` - palindromes, stutters, L-systems, polyrhythms
- ``tejido.generators.melody`` - contour-driven melodies and melodic development
- ``tejido.generators.complexity`` - complexity-scaled melodies and basslines
"""
