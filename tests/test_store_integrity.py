"""
Tests for integrity validation.

check_integrity must report nothing for any snapshot reachable through
store operations, and must flag each kind of broken reference when a
snapshot is built by hand.
"""
import dataclasses

import pytest

from models.store import (
    PanelStore, StoreState, EntityCollection, DancerSelection, HandSelection, check_integrity
)


def _kinds(issues):
    return sorted(issue['kind'] for issue in issues)


# ══════════════════════════════════════════════════════════════════════════
# Operations preserve integrity
# ══════════════════════════════════════════════════════════════════════════

def test_operation_sequence_stays_consistent(sequential_ids):
    store = PanelStore(id_factory=sequential_ids)
    a = store.get_panel_ids()[0]
    b = store.add_panel()
    c = store.clone_panel(a)
    store.move_panel(c, a)
    dancer = store.get_panel(c)['dancers'][0]
    store.select_dancer(c, dancer)
    store.select_hand(c, dancer, 'left')
    store.update_dancer(dancer, {'x': 10})
    store.add_lock(b, [{'dancerId': d, 'side': 'left'} for d in store.get_panel(b)['dancers']])
    d = store.clone_panel(b)
    store.remove_panel(a)
    store.remove_panel(c)
    store.reset_panels()
    store.clone_panel(store.get_panel_ids()[0])

    assert store.validate_integrity() == []
    assert d not in store.get_panel_ids()


def test_empty_state_is_consistent():
    assert check_integrity(StoreState()) == []


# ══════════════════════════════════════════════════════════════════════════
# Broken snapshots are reported
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def base(seeded_store):
    return seeded_store.get_state()


def test_dangling_reference(base):
    panel = {**base.panels.by_id['id-1'], 'dancers': ['id-2', 'id-3', 'ghost']}
    state = StoreState(panels=EntityCollection({'id-1': panel}, ('id-1',)),
                       dancers=base.dancers, shapes=base.shapes)
    assert _kinds(check_integrity(state)) == ['dangling_reference']


def test_orphan(base):
    dancers = EntityCollection({**base.dancers.by_id, 'lost': {'id': 'lost'}},
                               base.dancers.all_ids + ('lost',))
    state = StoreState(panels=base.panels, dancers=dancers, shapes=base.shapes)
    issues = check_integrity(state)
    assert _kinds(issues) == ['orphan']
    assert issues[0]['id'] == 'lost'


def test_shared_child(base):
    other = {'id': 'p2', 'dancers': ['id-2'], 'shapes': []}
    panels = EntityCollection({**base.panels.by_id, 'p2': other}, ('id-1', 'p2'))
    state = StoreState(panels=panels, dancers=base.dancers, shapes=base.shapes)
    issues = check_integrity(state)
    assert _kinds(issues) == ['shared_child']
    assert issues[0]['panel_ids'] == ['id-1', 'p2']


def test_collection_mismatches(base):
    by_id = dict(base.shapes.by_id)
    by_id['unlisted'] = {'id': 'unlisted'}
    by_id['wrong-key'] = {'id': 'other'}
    shapes = EntityCollection(by_id, ('id-4', 'id-4', 'missing', 'wrong-key'))
    panel = {**base.panels.by_id['id-1'], 'shapes': ['id-4', 'unlisted', 'wrong-key']}
    state = StoreState(panels=EntityCollection({'id-1': panel}, ('id-1',)),
                       dancers=base.dancers, shapes=shapes)

    kinds = _kinds(check_integrity(state))
    assert 'duplicate_id' in kinds
    assert 'missing_entity' in kinds
    assert 'unlisted_entity' in kinds
    assert 'id_mismatch' in kinds


def test_stale_selection(base):
    state = dataclasses.replace(
        base,
        selected_panel_id='gone',
        selected_dancer=DancerSelection(dancer_id='ghost', panel_id='id-1'),
        selected_hand=HandSelection(panel_id='gone', dancer_id='id-2', hand_side='left'),
    )
    issues = check_integrity(state)
    assert sorted(issue['field'] for issue in issues) == [
        'selected_dancer', 'selected_hand', 'selected_panel_id']
    assert {issue['kind'] for issue in issues} == {'stale_selection'}
