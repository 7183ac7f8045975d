"""
Tests for dancer and shape leaf updates.

Covers:
- Merge semantics (only named attributes change)
- Isolation: other entities, panels and selection are untouched
- The id attribute cannot be rewritten
- Unknown ids and unchanged values are no-ops
"""
import pytest


@pytest.fixture
def seed(fresh_store, seed_ids):
    panel_id, dancer_ids, shape_ids = seed_ids
    return fresh_store, panel_id, dancer_ids, shape_ids


class TestUpdateDancer:

    def test_merges_attributes(self, seed):
        store, _, dancer_ids, _ = seed
        store.update_dancer(dancer_ids[0], {'x': 120, 'rotation': 90})
        dancer = store.get_dancer(dancer_ids[0])
        assert dancer['x'] == 120
        assert dancer['rotation'] == 90
        assert dancer['colour'] == 'red'

    def test_other_entities_untouched(self, seed):
        store, _, dancer_ids, _ = seed
        before = store.get_state()
        store.update_dancer(dancer_ids[0], {'x': 1})
        after = store.get_state()

        assert after.dancers.by_id[dancer_ids[1]] is before.dancers.by_id[dancer_ids[1]]
        assert after.dancers.all_ids == before.dancers.all_ids
        assert after.panels is before.panels
        assert after.shapes is before.shapes

    def test_old_snapshot_keeps_old_version(self, seed):
        store, _, dancer_ids, _ = seed
        before = store.get_state()
        store.update_dancer(dancer_ids[0], {'leftHandPos': {'x': 5, 'y': 5}})
        assert before.dancers.by_id[dancer_ids[0]]['leftHandPos'] == {'x': -30, 'y': -40}

    def test_update_values_are_copied(self, seed):
        store, _, dancer_ids, _ = seed
        hand_shape = {'left': 'Fist', 'right': 'Waist'}
        store.update_dancer(dancer_ids[0], {'handShape': hand_shape})
        hand_shape['left'] = 'Changed'
        assert store.get_dancer(dancer_ids[0])['handShape']['left'] == 'Fist'

    def test_id_cannot_change(self, seed):
        store, _, dancer_ids, _ = seed
        store.update_dancer(dancer_ids[0], {'id': 'renamed', 'x': 3})
        assert store.get_dancer(dancer_ids[0])['id'] == dancer_ids[0]
        assert store.get_dancer('renamed') is None
        assert store.validate_integrity() == []

    def test_selection_untouched(self, seed):
        store, panel_id, dancer_ids, _ = seed
        store.select_dancer(panel_id, dancer_ids[0])
        selection = store.get_state().selected_dancer
        store.update_dancer(dancer_ids[0], {'x': 42})
        assert store.get_state().selected_dancer == selection

    def test_unknown_dancer_is_noop(self, seed):
        store = seed[0]
        before = store.get_state()
        store.update_dancer('ghost', {'x': 1})
        assert store.get_state() is before

    def test_unchanged_values_are_noop(self, seed):
        store, _, dancer_ids, _ = seed
        before = store.get_state()
        store.update_dancer(dancer_ids[0], {'x': before.dancers.by_id[dancer_ids[0]]['x']})
        assert store.get_state() is before


class TestUpdateShape:

    def test_merges_attributes(self, seed):
        store, _, _, shape_ids = seed
        store.update_shape(shape_ids[0], {'rotation': 45, 'x': 10})
        shape = store.get_shape(shape_ids[0])
        assert shape['rotation'] == 45
        assert shape['x'] == 10
        assert shape['text'] == 'X'

    def test_dancers_untouched(self, seed):
        store, _, _, shape_ids = seed
        before = store.get_state()
        store.update_shape(shape_ids[0], {'y': 0})
        assert store.get_state().dancers is before.dancers

    def test_unknown_shape_is_noop(self, seed):
        store = seed[0]
        before = store.get_state()
        store.update_shape('ghost', {'x': 1})
        assert store.get_state() is before

    def test_dancer_id_is_not_a_shape(self, seed):
        store, _, dancer_ids, _ = seed
        before = store.get_state()
        store.update_shape(dancer_ids[0], {'x': 1})
        assert store.get_state() is before
