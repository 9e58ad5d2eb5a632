"""Build touch definitions from the compact strings composers write.

A spliced composition is written as method abbreviations with calls after the
lead they apply to, e.g. ``"B-P Co Ca-"``: a bobbed lead of B, plain leads of
P and Co, and a bobbed lead of Ca.  Abbreviations may be several characters
long; the longest matching abbreviation wins.  Characters that are neither an
abbreviation nor a call are ignored between leads, so spaces and other
padding are free.
"""

import logging
import typing

import ringproof.block
import ringproof.call
import ringproof.errors
import ringproof.touch


logger = logging.getLogger(__name__)


def single_method_touch (
	block: ringproof.block.Block,
	calls: typing.Sequence[typing.Sequence[ringproof.call.Call]],
	**kwargs: typing.Any
) -> ringproof.touch.TouchDefinition:

	"""
	Return a touch of ``len(calls)`` leads of ``block``, with ``calls[i]`` applied to lead ``i``.

	Example:
		```python
		# Bob, plain, bob
		single_method_touch(plain_bob, [[bob], [], [bob]])
		```
	"""

	leads = [ringproof.touch.Lead(block, tuple(lead_calls)) for lead_calls in calls]
	return ringproof.touch.TouchDefinition(leads=tuple(leads), **kwargs)


def parse_spliced (
	text: str,
	methods: typing.Mapping[str, ringproof.block.Block],
	calls: typing.Mapping[str, ringproof.call.Call]
) -> typing.List[ringproof.touch.Lead]:

	"""
	Split a spliced composition string into leads.

	Parameters:
		text: The composition, e.g. ``"B-P Co Ca-"``.
		methods: Blocks keyed by abbreviation.
		calls: Calls keyed by their one-character symbol.

	Raises:
		MalformedTouch: If a call comes before any lead, the string ends
			part-way through an abbreviation, or an abbreviation clashes with
			a call symbol.
	"""

	if not methods:
		raise ringproof.errors.MalformedTouch("At least one method is needed")

	for symbol in calls:

		if len(symbol) != 1:
			raise ringproof.errors.MalformedTouch(f"Call symbol {symbol!r} must be a single character")

		if any(abbreviation.startswith(symbol) for abbreviation in methods):
			raise ringproof.errors.MalformedTouch(f"Call symbol {symbol!r} also starts a method abbreviation")

	abbreviations = sorted(methods, key=len, reverse=True)
	starts = {abbreviation[0] for abbreviation in abbreviations if abbreviation}

	leads: typing.List[typing.Tuple[ringproof.block.Block, typing.List[ringproof.call.Call]]] = []
	position = 0

	while position < len(text):

		c = text[position]

		if c in calls:

			if not leads:
				raise ringproof.errors.MalformedTouch(f"Call {c!r} at position {position} comes before any lead")

			leads[-1][1].append(calls[c])
			position += 1
			continue

		if c not in starts:
			# Padding between leads.
			position += 1
			continue

		match = next((a for a in abbreviations if a and text.startswith(a, position)), None)

		if match is None:
			raise ringproof.errors.MalformedTouch(f"Unknown method abbreviation at position {position} of {text!r}")

		leads.append((methods[match], []))
		position += len(match)

	logger.debug(f"Parsed {len(leads)} leads from {text!r}")

	return [ringproof.touch.Lead(block, tuple(lead_calls)) for block, lead_calls in leads]


def spliced_touch (
	text: str,
	methods: typing.Mapping[str, ringproof.block.Block],
	calls: typing.Mapping[str, ringproof.call.Call],
	**kwargs: typing.Any
) -> ringproof.touch.TouchDefinition:

	"""
	Return the touch written as ``text``.

	Extra keyword arguments (``termination``, ``start``, ``name`` ...) are
	passed to :class:`~ringproof.touch.TouchDefinition`.
	"""

	leads = parse_spliced(text, methods, calls)

	if not leads:
		raise ringproof.errors.MalformedTouch(f"No leads found in {text!r}")

	return ringproof.touch.TouchDefinition(leads=tuple(leads), **kwargs)
