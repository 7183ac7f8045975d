"""
Tests for the PanelStore query API and display settings.

Covers:
- Entity lookups and panel contents in reference order
- Ownership lookups
- Queries never raise for unknown ids
- set_panel_size / toggle_opacity
"""
import pytest

from models.store import PanelStore, EntityCollection, OpacitySetting
from utils.config import StoreConfig


class TestLookups:

    def test_get_entities(self, seeded_store):
        assert seeded_store.get_panel('id-1')['id'] == 'id-1'
        assert seeded_store.get_dancer('id-2')['colour'] == 'red'
        assert seeded_store.get_shape('id-4')['text'] == 'X'

    def test_unknown_ids_return_none(self, seeded_store):
        assert seeded_store.get_panel('id-2') is None
        assert seeded_store.get_dancer('id-4') is None
        assert seeded_store.get_shape('missing') is None

    def test_panel_children_in_reference_order(self, seeded_store):
        seeded_store.update_panel_state('id-1', lambda p: p)
        assert [d['id'] for d in seeded_store.get_panel_dancers('id-1')] == ['id-2', 'id-3']
        assert [s['id'] for s in seeded_store.get_panel_shapes('id-1')] == ['id-4']

    def test_children_of_unknown_panel(self, seeded_store):
        assert seeded_store.get_panel_dancers('nope') == []
        assert seeded_store.get_panel_shapes('nope') == []

    def test_dangling_children_skipped(self, seeded_store):
        panel = {**seeded_store.get_panel('id-1'), 'dancers': ['id-2', 'ghost', 'id-3']}
        seeded_store.set_state({'panels': EntityCollection({'id-1': panel}, ('id-1',))})
        assert [d['id'] for d in seeded_store.get_panel_dancers('id-1')] == ['id-2', 'id-3']

    def test_find_owner(self, seeded_store):
        second = seeded_store.add_panel()
        assert seeded_store.find_panel_for_dancer('id-3') == 'id-1'
        assert seeded_store.find_panel_for_shape('id-8') == second
        assert seeded_store.find_panel_for_dancer('ghost') is None

    def test_panel_ids_in_display_order(self, seeded_store):
        second = seeded_store.add_panel()
        seeded_store.move_panel(second, 'id-1')
        assert seeded_store.get_panel_ids() == (second, 'id-1')


class TestDisplaySettings:

    def test_default_panel_size(self, fresh_store):
        assert fresh_store.get_state().panel_size == {'width': 300, 'height': 300}

    def test_set_panel_size(self, fresh_store):
        fresh_store.set_panel_size(640, 480)
        assert fresh_store.get_state().panel_size == {'width': 640, 'height': 480}

    @pytest.mark.parametrize('width, height', [
        (0, 100), (100, -1), (float('nan'), 100), (100, float('nan')),
    ])
    def test_invalid_size_raises(self, fresh_store, width, height):
        with pytest.raises(ValueError):
            fresh_store.set_panel_size(width, height)

    def test_toggle_opacity_round_trip(self, fresh_store):
        fresh_store.toggle_opacity('dancers')
        opacity = fresh_store.get_state().opacity
        assert opacity['dancers'] == OpacitySetting(value=0.5, disabled=True)
        assert opacity['symbols'] == OpacitySetting()

        fresh_store.toggle_opacity('dancers')
        assert fresh_store.get_state().opacity['dancers'] == OpacitySetting()

    def test_toggle_unknown_kind_raises(self, fresh_store):
        with pytest.raises(ValueError):
            fresh_store.toggle_opacity('walls')

    def test_config_defaults_applied(self):
        store = PanelStore(config=StoreConfig(panel_width=500, panel_height=250, symbol_opacity=0.5))
        state = store.get_state()
        assert state.panel_size == {'width': 500, 'height': 250}
        assert state.opacity['symbols'] == OpacitySetting(value=0.5, disabled=True)
        assert state.opacity['dancers'] == OpacitySetting()
