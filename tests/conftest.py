import dataclasses

import pytest

import ringproof.block
import ringproof.call
import ringproof.change


X = []


def places (text: str) -> list[int]:

	"""Turn place characters such as ``"16"`` into zero-based places."""

	return [int(c) - 1 for c in text]


@pytest.fixture
def plain_bob_minor () -> ringproof.block.Block:

	"""Plain Bob Minor: x16x16x16x16x16x12."""

	return ringproof.block.Block.from_places([X, places("16")] * 5 + [X, places("12")], 6, name="Plain Bob")


@pytest.fixture
def plain_bob_major () -> ringproof.block.Block:

	"""Plain Bob Major, built from its half lead: x18x18x18x18,12."""

	half = [ringproof.change.Change.from_places(p, 8) for p in [X, places("18")] * 4]
	lead_end = ringproof.change.Change.from_places(places("12"), 8)

	return ringproof.block.Block.symmetric(half, lead_end, name="Plain Bob")


@pytest.fixture
def minor_bob () -> ringproof.call.Call:

	"""A 14 bob on six bells."""

	return ringproof.call.Call.lead_end("-", ringproof.change.Change.from_places(places("14"), 6))


@pytest.fixture
def minor_single () -> ringproof.call.Call:

	"""A 1234 single on six bells."""

	return ringproof.call.Call.lead_end("s", ringproof.change.Change.from_places(places("1234"), 6))


@pytest.fixture
def other_minor (plain_bob_minor: ringproof.block.Block) -> ringproof.block.Block:

	"""Plain Bob Minor under another name, for splicing tests."""

	return dataclasses.replace(plain_bob_minor, name="Other Bob")

