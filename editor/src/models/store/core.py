"""
Choreo Editor - Panel Store

THE MODEL in the MVC architecture. Owns every panel, dancer and shape, and
all operations that change them.

This class handles:
- Three normalized collections (panels, dancers, shapes) keyed by UUID
- Panel lifecycle (add, remove with cascade, clone with rekeying, reorder)
- Leaf updates for dancers and shapes
- Selection state and its invalidation when panels disappear
- Display settings (panel size, layer opacity)
- Query API and integrity validation (for UI and tests)
- Change notification (listeners receive each new snapshot)

The store is INDEPENDENT of UI:
- No Qt imports (services.store_signals bridges to Qt)
- No rendering logic
- No persistence, no undo stack

Every operation is one atomic transition from a consistent snapshot to the
next. Snapshots are immutable; operations on unknown ids are silent no-ops.

Usage:
    store = PanelStore()
    PanelStore.set_active(store)

    panel_id = store.add_panel()
    copy_id = store.clone_panel(panel_id)
    store.move_panel(copy_id, panel_id)
    store.remove_panel(panel_id)

    state = store.get_state()
    for panel in state.panels:
        dancers = store.get_panel_dancers(panel['id'])
"""

import dataclasses
import logging
import threading
from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Callable, List, Optional, Union

from constants import OPACITY_FULL

from ._internal.entity_collection import new_entity_id
from ._internal.panel_factory import build_initial_state
from ._internal.state import (
    StoreState, DancerSelection, ShapeSelection, HandSelection, OpacitySetting
)
from .panel_mixin import PanelLifecycleMixin
from .entity_mixin import EntityUpdateMixin
from .selection_mixin import SelectionMixin
from .display_mixin import DisplayMixin
from .query_mixin import StoreQueryMixin

StateListener = Callable[[StoreState], None]

_STATE_FIELDS = {f.name for f in dataclasses.fields(StoreState)}

_SELECTION_TYPES = {
    'selected_dancer': DancerSelection,
    'selected_shape': ShapeSelection,
    'selected_hand': HandSelection,
}


class PanelStore(PanelLifecycleMixin, EntityUpdateMixin, SelectionMixin, DisplayMixin, StoreQueryMixin):
    """Normalized panel/dancer/shape store with integrity-preserving operations

    Active Instance Pattern:
        PanelStore.set_active(store) - Set the process-wide default store
        PanelStore.get_active() - Get the default store
        PanelStore.has_active() - Check if a default store is set

    Code that can take an explicit store should; the active instance exists
    for UI glue that has no other way to reach it.
    """

    _active_instance = None  # Class variable for the default store

    @classmethod
    def set_active(cls, instance: Optional['PanelStore']):
        """Set the active store instance

        Args:
            instance: PanelStore to make active, or None to clear
        """
        cls._active_instance = instance

    @classmethod
    def get_active(cls) -> 'PanelStore':
        """Get the active store instance

        Returns:
            Active PanelStore

        Raises:
            RuntimeError: If no active instance set
        """
        if cls._active_instance is None:
            raise RuntimeError("No active PanelStore set. Call PanelStore.set_active() first.")
        return cls._active_instance

    @classmethod
    def has_active(cls) -> bool:
        """Check if an active store instance exists"""
        return cls._active_instance is not None

    def __init__(self, id_factory: Optional[Callable[[], str]] = None, config=None):
        """Create a store holding the seed panel

        Args:
            id_factory: Zero-argument callable returning fresh unique ids
                (defaults to UUID4 strings)
            config: Optional utils.config.StoreConfig for display defaults
        """
        self._logger = logging.getLogger('PanelStore')
        self._id_factory = id_factory or new_entity_id
        self._lock = threading.RLock()
        self._listeners: List[StateListener] = []

        settings = {}
        if config is not None:
            settings['panel_size'] = {'width': config.panel_width, 'height': config.panel_height}
            settings['opacity'] = {
                'dancers': _opacity_from_value(config.dancer_opacity),
                'symbols': _opacity_from_value(config.symbol_opacity),
            }

        self._initial_state = build_initial_state(self._id_factory, **settings)
        self._state = self._initial_state

        self._logger.debug("Created new PanelStore")

    # ========================================
    # Snapshot API
    # ========================================

    def get_state(self) -> StoreState:
        """Get the current snapshot (immutable)"""
        return self._state

    def get_initial_state(self) -> StoreState:
        """Get a copy of the seed snapshot this store started from

        Independent of every mutation applied since construction.
        """
        return deepcopy(self._initial_state)

    def set_state(self, partial: Union[StoreState, Mapping, Callable[[StoreState], Any]]):
        """Replace part or all of the snapshot

        Escape hatch for test setup and direct selection writes. Bypasses the
        integrity-preserving operations: callers are responsible for
        consistency.

        Args:
            partial: A full StoreState, a mapping of StoreState field names to
                new values, or a callable taking the current state and
                returning either of those. Selection fields also accept
                mappings of their record fields.

        Raises:
            ValueError: If a mapping names an unknown field
            TypeError: If partial is none of the accepted forms
        """
        with self._lock:
            if callable(partial) and not isinstance(partial, StoreState):
                partial = partial(self._state)

            if isinstance(partial, StoreState):
                new_state = partial
            elif isinstance(partial, Mapping):
                unknown = set(partial) - _STATE_FIELDS
                if unknown:
                    raise ValueError(f"Unknown state fields: {sorted(unknown)}")
                changes = {key: _coerce_selection(key, value) for key, value in partial.items()}
                new_state = dataclasses.replace(self._state, **changes)
            else:
                raise TypeError(f"set_state expects a StoreState, mapping or callable, got {type(partial)}")

            self._commit(new_state, "set_state")

    # ========================================
    # Listeners
    # ========================================

    def add_listener(self, callback: StateListener):
        """Add a listener called with each new snapshot

        Args:
            callback: Function receiving the new StoreState
        """
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener):
        """Remove a listener"""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self, state: StoreState):
        """Notify all listeners of a state change"""
        for callback in list(self._listeners):
            try:
                callback(state)
            except Exception:
                self._logger.exception(f"Error notifying listener {callback!r}")

    # ========================================
    # Helper Methods (Internal)
    # ========================================

    def _commit(self, new_state: StoreState, description: str) -> bool:
        """Publish new_state as the current snapshot

        Must be called while holding self._lock.

        Returns:
            True if the snapshot changed, False if new_state is the current one
        """
        if new_state is self._state:
            return False
        self._state = new_state
        self._logger.debug(description)
        self._notify_listeners(new_state)
        return True

    def __repr__(self) -> str:
        """String representation for debugging"""
        state = self._state
        return (f"PanelStore(panels={len(state.panels)}, dancers={len(state.dancers)}, "
                f"shapes={len(state.shapes)})")


def _opacity_from_value(value: float) -> OpacitySetting:
    return OpacitySetting(value=value, disabled=value < OPACITY_FULL)


def _coerce_selection(key: str, value: Any) -> Any:
    """Accept plain mappings for selection records"""
    record_type = _SELECTION_TYPES.get(key)
    if record_type is not None and isinstance(value, Mapping):
        return record_type(**value)
    return value
