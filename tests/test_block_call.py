import pytest

import ringproof.block
import ringproof.call
import ringproof.change
import ringproof.errors
import ringproof.row


def test_plain_bob_minor_lead_head (plain_bob_minor: ringproof.block.Block) -> None:

	"""A plain lead of Plain Bob Minor has lead head 135264."""

	assert plain_bob_minor.is_explicit
	assert plain_bob_minor.length == 12
	assert plain_bob_minor.span == 12
	assert str(plain_bob_minor.lead_head) == "135264"


def test_symmetric_blocks (plain_bob_major: ringproof.block.Block) -> None:

	"""Palindromic leads are built from their half lead."""

	assert plain_bob_major.length == 16
	assert str(plain_bob_major.lead_head) == "13527486"

	seven, one, one_two_seven = [6], [0], [0, 1, 6]
	half = [ringproof.change.Change.from_places(p, 7) for p in [seven, one, seven, one, seven, one, seven]]
	lead_end = ringproof.change.Change.from_places(one_two_seven, 7)
	triples = ringproof.block.Block.symmetric(half, lead_end)

	assert triples.length == 14
	assert str(triples.lead_head) == "1352746"


def test_empty_block_raises () -> None:

	with pytest.raises(ringproof.errors.MalformedTouch):
		ringproof.block.Block.explicit([])


def test_mixed_stage_block_raises () -> None:

	changes = [ringproof.change.Change.cross(6), ringproof.change.Change.cross(8)]

	with pytest.raises(ringproof.errors.InvalidChange):
		ringproof.block.Block.explicit(changes)


def test_boundary_block (plain_bob_minor: ringproof.block.Block) -> None:

	"""A boundary block emits one row but stands for the whole lead."""

	boundary = plain_bob_minor.as_boundary()

	assert not boundary.is_explicit
	assert boundary.kind == ringproof.block.BOUNDARY
	assert boundary.length == 1
	assert boundary.span == 12
	assert boundary.lead_head == plain_bob_minor.lead_head
	assert boundary.name == "Plain Bob"

	with pytest.raises(ringproof.errors.MalformedTouch):
		ringproof.block.Block.boundary(ringproof.row.Row.rounds(6), 0)


def test_lead_end_call_resolves_to_last_change (plain_bob_minor: ringproof.block.Block, minor_bob: ringproof.call.Call) -> None:

	assert minor_bob.span == 1
	assert minor_bob.resolve(plain_bob_minor) == (11, 12)


def test_apply_calls_marks_called_changes (plain_bob_minor: ringproof.block.Block, minor_bob: ringproof.call.Call) -> None:

	"""The called change replaces the lead end and carries the call's name."""

	changes = ringproof.call.apply_calls(plain_bob_minor, [minor_bob])

	assert len(changes) == 12
	assert changes[-1] == (minor_bob.replacement[0], "-")
	assert all(name is None for _, name in changes[:-1])
	assert str(ringproof.block.lead_head_of((c for c, _ in changes), 6)) == "123564"


def test_overlapping_calls_raise (
	plain_bob_minor: ringproof.block.Block,
	minor_bob: ringproof.call.Call,
	minor_single: ringproof.call.Call
) -> None:

	with pytest.raises(ringproof.errors.MalformedTouch):
		ringproof.call.apply_calls(plain_bob_minor, [minor_bob, minor_single])


def test_out_of_range_call_raises (plain_bob_minor: ringproof.block.Block) -> None:

	far = ringproof.call.Call(name="-", index=12, replacement=(ringproof.change.Change.cross(6),))

	with pytest.raises(ringproof.errors.MalformedTouch):
		far.resolve(plain_bob_minor)


def test_call_stage_must_match_block (plain_bob_minor: ringproof.block.Block) -> None:

	major_bob = ringproof.call.Call.lead_end("-", ringproof.change.Change.from_places([0, 3], 8))

	with pytest.raises(ringproof.errors.MalformedTouch):
		major_bob.resolve(plain_bob_minor)


def test_call_on_boundary_block_raises (plain_bob_minor: ringproof.block.Block, minor_bob: ringproof.call.Call) -> None:

	with pytest.raises(ringproof.errors.MalformedTouch):
		minor_bob.resolve(plain_bob_minor.as_boundary())


def test_fixed_length_call_span_must_match () -> None:

	"""A call that changes the lead length has to say so."""

	with pytest.raises(ringproof.errors.MalformedTouch):
		ringproof.call.Call(name="-", index=-1, replacement=(ringproof.change.Change.cross(6),), span=2)


def test_variable_length_call_shortens_lead (plain_bob_minor: ringproof.block.Block) -> None:

	"""A variable-length call may replace two changes with one."""

	twelve = ringproof.change.Change.from_places([0, 1], 6)
	short = ringproof.call.Call(name="x", index=10, replacement=(twelve,), variable_length=True, span=2)

	changes = ringproof.call.apply_calls(plain_bob_minor, [short])

	assert len(changes) == 11
	assert changes[-1] == (twelve, "x")
