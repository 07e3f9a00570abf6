"""Arena-backed tree with a bijective path index.

This package holds the data structures produced by a walk: the arena owning the
nodes, the path index, the assembler wiring them together, and the read-only
WalkTree query surface.
"""
