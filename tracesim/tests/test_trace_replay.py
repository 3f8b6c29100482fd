"""Tests for record dispatch in CacheSimulator (L / S / M / ignored kinds)."""
import pytest
from tracesim.core.geometry import derive_geometry
from tracesim.core.simulator import CacheSimulator, Operation, TraceRecord


def make_sim(s, E, b):
    return CacheSimulator(derive_geometry(s, b, E))


def counts(sim):
    return sim.stats.hits, sim.stats.misses, sim.stats.evictions


def test_operation_lookup():
    assert Operation.from_kind('L') is Operation.LOAD
    assert Operation.from_kind('S') is Operation.STORE
    assert Operation.from_kind('M') is Operation.MODIFY
    assert Operation.from_kind('I') is None
    assert Operation.MODIFY.accesses == 2
    assert Operation.LOAD.accesses == 1


@pytest.mark.parametrize("kind", ['L', 'S'])
def test_load_and_store_are_single_accesses(kind):
    sim = make_sim(1, 1, 1)
    outcomes = sim.replay_record(TraceRecord(kind, 0x10, 4))
    assert len(outcomes) == 1
    assert counts(sim) == (0, 1, 0)


def test_modify_on_new_address_is_miss_then_hit():
    sim = make_sim(1, 1, 1)
    outcomes = sim.replay_record(TraceRecord('M', 0x20, 1))
    assert [o.hit for o in outcomes] == [False, True]
    assert counts(sim) == (1, 1, 0)


def test_modify_on_resident_address_hits_twice():
    sim = make_sim(1, 1, 1)
    sim.replay_record(TraceRecord('L', 0x20, 1))
    outcomes = sim.replay_record(TraceRecord('M', 0x20, 1))
    assert [o.hit for o in outcomes] == [True, True]


def test_unknown_kinds_are_ignored():
    sim = make_sim(1, 1, 1)
    assert sim.replay_record(TraceRecord('I', 0x400000, 8)) is None
    assert sim.replay_record(TraceRecord('X', 0, 1)) is None
    assert counts(sim) == (0, 0, 0)
    assert sim.ignored == 2
    assert sim.clock.value == 1


def test_size_field_has_no_effect():
    a = make_sim(2, 2, 2)
    b = make_sim(2, 2, 2)
    a.replay([TraceRecord('L', addr, 1) for addr in (0, 16, 32, 0)])
    b.replay([TraceRecord('L', addr, 4096) for addr in (0, 16, 32, 0)])
    assert counts(a) == counts(b)


def test_end_to_end_two_sets_direct_mapped():
    # (s=1, E=1, b=1): 0 and 4 share set 0 with tags 0 and 1, 2 goes to set 1
    sim = make_sim(1, 1, 1)
    sim.replay([TraceRecord('L', 0, 1), TraceRecord('L', 2, 1), TraceRecord('L', 4, 1)])
    assert counts(sim) == (0, 3, 1)


def test_yi_trace_records():
    # verbose reference: L miss / M miss hit / L hit / S hit / L miss eviction /
    # L miss eviction / M miss eviction hit
    records = [
        TraceRecord('L', 0x10, 1),
        TraceRecord('M', 0x20, 1),
        TraceRecord('L', 0x22, 1),
        TraceRecord('S', 0x18, 1),
        TraceRecord('L', 0x110, 1),
        TraceRecord('L', 0x210, 1),
        TraceRecord('M', 0x12, 1),
    ]
    sim = make_sim(4, 1, 4)
    seen = []
    sim.replay(records, lambda rec, outs: seen.append([(o.hit, o.eviction) for o in outs]))
    assert counts(sim) == (4, 5, 3)
    assert seen[-1] == [(False, True), (True, False)]


def test_accesses_match_dispatch_count():
    records = [TraceRecord(k, a, 1) for k, a in
               [('L', 0), ('M', 8), ('S', 64), ('I', 0), ('M', 128), ('L', 8), ('S', 1024)]]
    sim = make_sim(2, 2, 3)
    sim.replay(records)
    expected = sum(Operation.from_kind(r.kind).accesses for r in records if Operation.from_kind(r.kind))
    assert expected == 8
    assert sim.stats.accesses == expected


def test_step_and_run_all():
    sim = make_sim(1, 1, 1)
    sim.load_records([TraceRecord('L', 0, 1), TraceRecord('I', 0, 1), TraceRecord('M', 4, 1)])
    infos = []
    sim.run_all(infos.append)
    assert [i['ignored'] for i in infos] == [False, True, False]
    assert len(infos[2]['outcomes']) == 2
    assert infos[2]['stats'] == {'hits': 1, 'misses': 2, 'evictions': 1}
    assert sim.has_next() is False
    assert sim.step() is None


def test_reset_rewinds_everything():
    sim = make_sim(1, 1, 1)
    sim.load_records([TraceRecord('L', 0, 1), TraceRecord('L', 0, 1)])
    sim.run_all()
    assert counts(sim) == (1, 1, 0)
    sim.reset()
    assert counts(sim) == (0, 0, 0)
    assert not any(line.valid for s in sim.store.sets for line in s)
    sim.run_all()
    assert counts(sim) == (1, 1, 0)
