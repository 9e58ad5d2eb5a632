"""Constants for ringproof.

- ``BELL_NAMES`` - the conventional one-character names for bells, treble first.
- ``STAGE_NAMES`` - the ringing names for each number of bells.
- ``DEFAULT_MAX_ROWS`` - the generator's safety bound when no config is given.
"""

import typing


BELL_NAMES = "1234567890ETABCDFGHJKLMNPRSUVWXYZ"

MAX_STAGE = len(BELL_NAMES)

STAGE_NAMES: typing.Dict[int, str] = {
	3: "Singles",
	4: "Minimus",
	5: "Doubles",
	6: "Minor",
	7: "Triples",
	8: "Major",
	9: "Caters",
	10: "Royal",
	11: "Cinques",
	12: "Maximus",
	13: "Sextuples",
	14: "Fourteen",
	15: "Septuples",
	16: "Sixteen",
}

MINIMUS = 4
DOUBLES = 5
MINOR = 6
TRIPLES = 7
MAJOR = 8
CATERS = 9
ROYAL = 10
CINQUES = 11
MAXIMUS = 12

DEFAULT_MAX_ROWS = 1_000_000


def is_bell_name (name: str) -> bool:

	"""Return True if ``name`` is a single recognised bell character."""

	return len(name) == 1 and name.upper() in BELL_NAMES


def name_to_bell (name: str) -> int:

	"""
	Convert a bell character to its zero-based bell number.

	Raises:
		ValueError: If the character is not a bell name.

	Example:
		```python
		name_to_bell("1")  # → 0
		name_to_bell("0")  # → 9
		name_to_bell("T")  # → 11
		```
	"""

	if not is_bell_name(name):
		raise ValueError(f"Unknown bell name: {name!r}")

	return BELL_NAMES.index(name.upper())


def bell_to_name (bell: int) -> str:

	"""Convert a zero-based bell number to its character."""

	if bell < 0 or bell >= MAX_STAGE:
		raise ValueError(f"Bell number {bell} is outside 0..{MAX_STAGE - 1}")

	return BELL_NAMES[bell]


def stage_name (stage: int) -> str:

	"""Return the ringing name of a stage, or a plain count for unnamed stages."""

	return STAGE_NAMES.get(stage, f"{stage} bells")
