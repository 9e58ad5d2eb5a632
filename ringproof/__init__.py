
"""
ringproof - generate and prove change ringing touches.

A touch is a sequence of rows (orders of the bells) produced by ringing the
changes of one or more methods, modified here and there by calls.  It is true
if no row is rung twice before it comes back to rounds.  ringproof generates
the rows lazily and proves them as they stream past, so long touches never
need to be held in memory.

What it covers:

- **Row algebra.** ``Row`` is an immutable permutation with composition,
  inverse, powers, parity, order and a canonical integer key.  ``Change``
  is a set of disjoint swaps, adjacent or not, so discontinuous methods need
  no special handling.
- **Blocks and calls.** A ``Block`` is one lead, either an explicit list of
  changes or a boundary-only summary (just the lead head).  A ``Call``
  swaps in different changes for one lead only.
- **Lazy generation.** ``TouchGenerator`` yields one row per change, ends at a
  declared length, at the next rounds, or after one pass of the leads, and
  refuses touches that would run past a configurable safety bound.
- **Falseness.** ``FalsenessEngine`` marks every row true, false (with the
  index it repeats), boundary (unprovable) or closure, and groups repeats for
  printers.  ``prove()`` does both steps at once.
- **Multi-part proofs.** ``MultiPartProver`` proves a k-part composition from
  its first part alone, checking the other parts by key lookups under the
  part heads.
- **Consumers.** Music scorers plug in through the ``Scorer`` protocol.
  ``render_rows()`` turns a touch into a ``mido.MidiFile`` for listening.
- **Coursing orders.** ``CoursingOrder`` reads the coursing order off a lead
  head and names the runs it brings together.

Minimal example:

    ```python
    import ringproof

    x, sixteen, twelve, fourteen = [], [0, 5], [0, 1], [0, 3]
    plain_bob = ringproof.Block.from_places([x, sixteen] * 5 + [x, twelve], 6, name="Plain Bob")
    bob = ringproof.Call.lead_end("-", ringproof.Change.from_places(fourteen, 6))

    touch = ringproof.TouchDefinition.repeat(plain_bob, 3, calls={0: bob, 1: bob, 2: bob})
    report = ringproof.prove(touch)
    print(report.summary())   # 37 rows, true
    ```

Package-level exports: ``Row``, ``Change``, ``Block``, ``Call``, ``Lead``,
``TouchDefinition``, ``TouchGenerator``, ``FalsenessEngine``, ``prove``,
``annotate``, ``PartGroup``, ``MultiPartProver``, ``ProverConfig``,
``load_config``, ``Scorer``, ``total_score``, ``render_rows``,
``spliced_touch``, ``CoursingOrder``.
"""

import ringproof.block
import ringproof.call
import ringproof.change
import ringproof.composition
import ringproof.config
import ringproof.coursing_order
import ringproof.errors
import ringproof.falseness
import ringproof.generator
import ringproof.midi
import ringproof.parts
import ringproof.row
import ringproof.scoring
import ringproof.touch


Row = ringproof.row.Row
Change = ringproof.change.Change
Block = ringproof.block.Block
Call = ringproof.call.Call
Lead = ringproof.touch.Lead
TouchDefinition = ringproof.touch.TouchDefinition
TouchGenerator = ringproof.generator.TouchGenerator
FalsenessEngine = ringproof.falseness.FalsenessEngine
prove = ringproof.falseness.prove
annotate = ringproof.falseness.annotate
PartGroup = ringproof.parts.PartGroup
MultiPartProver = ringproof.parts.MultiPartProver
ProverConfig = ringproof.config.ProverConfig
load_config = ringproof.config.load_config
Scorer = ringproof.scoring.Scorer
total_score = ringproof.scoring.total_score
render_rows = ringproof.midi.render_rows
spliced_touch = ringproof.composition.spliced_touch
CoursingOrder = ringproof.coursing_order.CoursingOrder

InvalidChange = ringproof.errors.InvalidChange
MalformedTouch = ringproof.errors.MalformedTouch
InvalidPartStructure = ringproof.errors.InvalidPartStructure
