"""Exception taxonomy.

Structural problems are raised as exceptions as soon as they are detected.
Falseness is never raised: it is reported as data by
:mod:`ringproof.falseness` and :mod:`ringproof.parts`.
"""


class RingProofError (Exception):

	"""Base class for every error raised by ringproof."""


class InvalidChange (RingProofError, ValueError):

	"""Malformed permutation data: bad places, overlapping swaps or mismatched stages."""


class MalformedTouch (RingProofError):

	"""A touch definition whose blocks and calls cannot be played."""


class InvalidPartStructure (RingProofError):

	"""A part-head generator or part count that cannot describe a multi-part composition."""
