"""
Shared fixtures for Choreo Editor tests.

Provides reusable PanelStore instances and a deterministic id factory.
"""
import sys
import os
import itertools
import pytest

# Run Qt headless so the suite works without a display server
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: 'id-1', 'id-2', ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def fresh_store():
    """Fresh default PanelStore (UUID ids), set as the active store"""
    from models.store import PanelStore
    store = PanelStore()
    PanelStore.set_active(store)
    yield store
    PanelStore.set_active(None)


@pytest.fixture
def seeded_store(sequential_ids):
    """PanelStore with predictable ids (seed panel is 'id-1')"""
    from models.store import PanelStore
    return PanelStore(id_factory=sequential_ids)


@pytest.fixture
def three_panel_store(fresh_store):
    """Store holding the seed panel plus two added panels"""
    fresh_store.add_panel()
    fresh_store.add_panel()
    return fresh_store


@pytest.fixture
def seed_ids(fresh_store):
    """(panel_id, dancer_ids, shape_ids) of the seed panel"""
    state = fresh_store.get_state()
    panel_id = state.panels.all_ids[0]
    panel = state.panels.by_id[panel_id]
    return panel_id, list(panel['dancers']), list(panel['shapes'])
