"""
PanelStore Panel Lifecycle Mixin

This mixin provides every operation that creates, destroys or reorders
panels, plus panel-level attributes.

Methods:
    Panel Lifecycle:
        - add_panel
        - remove_panel
        - clone_panel
        - move_panel
        - reset_panels

    Panel Attributes:
        - update_panel_state
        - update_panel_notes
        - add_lock
        - delete_lock

Dancers and shapes are only ever created here (as part of a new or cloned
panel) and only ever destroyed here (cascading from their panel).
"""

import dataclasses
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, List, Optional

from constants import HAND_SIDES, MIN_LOCK_MEMBERS

from ._internal.entity_collection import (
    add_entities, remove_entities, clone_entities, put_entity
)
from ._internal.panel_factory import create_initial_panel, build_initial_collections

# Panel keys an updater function may not rewrite
PINNED_PANEL_KEYS = ('id', 'dancers', 'shapes')


class PanelLifecycleMixin:
    """Mixin providing panel lifecycle operations for PanelStore

    This mixin assumes the parent class has:
        - self._state: current StoreState
        - self._lock: re-entrant lock guarding transitions
        - self._commit(new_state, description)
        - self._id_factory: fresh id generator
        - self._selection_without_panel(state, panel_id) (SelectionMixin)
    """

    # ========================================
    # Panel Lifecycle
    # ========================================

    def add_panel(self) -> str:
        """Add a template panel (two dancers, one stage marker) at the end

        Returns:
            Id of the new panel
        """
        with self._lock:
            panel, dancers, shapes = create_initial_panel(self._id_factory)
            state = self._state
            new_state = dataclasses.replace(
                state,
                panels=add_entities(state.panels, [panel]),
                dancers=add_entities(state.dancers, dancers),
                shapes=add_entities(state.shapes, shapes),
            )
            self._commit(new_state, f"Added panel: {panel['id']}")
            return panel['id']

    def remove_panel(self, panel_id: str):
        """Remove a panel and, in cascade, every dancer and shape it references

        References to dancers/shapes that do not exist are ignored, so a
        malformed panel is removed cleanly. Any selection tied to the panel
        is cleared. No-op if the panel does not exist.

        Args:
            panel_id: Panel id
        """
        with self._lock:
            state = self._state
            panel = state.panels.get(panel_id)
            if panel is None:
                return

            new_state = dataclasses.replace(
                state,
                panels=remove_entities(state.panels, [panel_id]),
                dancers=remove_entities(state.dancers, panel.get('dancers') or ()),
                shapes=remove_entities(state.shapes, panel.get('shapes') or ()),
                **self._selection_without_panel(state, panel_id)
            )
            self._commit(new_state, f"Removed panel: {panel_id}")

    def clone_panel(self, panel_id: str) -> Optional[str]:
        """Clone a panel with all its dancers and shapes under fresh ids

        The clone is appended after every existing panel. Its reference lists
        name the new dancer/shape ids in the original order, and its hand locks
        are rekeyed to the cloned dancers. Nothing is shared with the source,
        and selection is untouched.

        Args:
            panel_id: Panel id to clone

        Returns:
            Id of the new panel, or None if the source does not exist
        """
        with self._lock:
            state = self._state
            original = state.panels.get(panel_id)
            if original is None:
                return None

            cloned_dancers, dancer_id_map = clone_entities(
                state.dancers.by_id, original.get('dancers') or (), self._id_factory)
            cloned_shapes, shape_id_map = clone_entities(
                state.shapes.by_id, original.get('shapes') or (), self._id_factory)

            new_panel_id = self._id_factory()
            for entity in cloned_dancers + cloned_shapes:
                entity['panel'] = new_panel_id

            cloned_panel = deepcopy(original)
            cloned_panel['id'] = new_panel_id
            cloned_panel['dancers'] = list(dancer_id_map.values())
            cloned_panel['shapes'] = list(shape_id_map.values())
            cloned_panel['locks'] = self._rekey_locks(original.get('locks') or [], dancer_id_map)

            new_state = dataclasses.replace(
                state,
                panels=add_entities(state.panels, [cloned_panel]),
                dancers=add_entities(state.dancers, cloned_dancers),
                shapes=add_entities(state.shapes, cloned_shapes),
            )
            self._commit(new_state, f"Cloned panel {panel_id} -> {new_panel_id}")
            return new_panel_id

    def move_panel(self, dragged_id: str, target_id: str):
        """Move a panel to the position currently held by another

        The dragged panel ends up at the target's original index; every other
        panel keeps its relative order. No-op if either id is unknown or both
        are the same.

        Args:
            dragged_id: Panel being dragged
            target_id: Panel whose position it takes
        """
        with self._lock:
            state = self._state
            ids = list(state.panels.all_ids)
            if dragged_id == target_id or dragged_id not in ids or target_id not in ids:
                return

            from_index = ids.index(dragged_id)
            to_index = ids.index(target_id)
            ids.pop(from_index)
            ids.insert(to_index, dragged_id)

            panels = dataclasses.replace(state.panels, all_ids=tuple(ids))
            self._commit(dataclasses.replace(state, panels=panels),
                         f"Moved panel {dragged_id}: {from_index} -> {to_index}")

    def reset_panels(self):
        """Replace every panel with a single fresh template panel

        Clears selection; display settings are kept.
        """
        with self._lock:
            new_state = dataclasses.replace(
                self._state,
                selected_panel_id=None,
                selected_dancer=None,
                selected_hand=None,
                selected_shape=None,
                **build_initial_collections(self._id_factory)
            )
            self._commit(new_state, "Reset panels")

    # ========================================
    # Panel Attributes
    # ========================================

    def update_panel_state(self, panel_id: str, updater: Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]):
        """Apply an update function to a panel's own attributes

        The updater receives a private copy of the panel and returns the new
        version (or None after editing the copy in place). The panel's id and
        its dancer/shape reference lists are pinned: changes to them are
        discarded. Referenced dancers and shapes are never touched.
        No-op if the panel does not exist.

        Args:
            panel_id: Panel id
            updater: Function taking and returning a panel dict
        """
        with self._lock:
            state = self._state
            panel = state.panels.get(panel_id)
            if panel is None:
                return

            draft = deepcopy(panel)
            result = updater(draft)
            updated = dict(draft if result is None else result)
            for key in PINNED_PANEL_KEYS:
                if key in panel:
                    updated[key] = panel[key]
                else:
                    updated.pop(key, None)

            if updated == panel:
                return

            new_state = dataclasses.replace(state, panels=put_entity(state.panels, updated))
            self._commit(new_state, f"Updated panel: {panel_id}")

    def update_panel_notes(self, panel_id: str, notes: str):
        """Set a panel's free-text notes

        Args:
            panel_id: Panel id
            notes: New notes text
        """
        self.update_panel_state(panel_id, lambda panel: {**panel, 'notes': notes})

    def add_lock(self, panel_id: str, members: Iterable[Dict[str, str]]) -> Optional[str]:
        """Lock a group of hands within one panel so they move together

        Repeated members, hands already in a lock of this panel and hands of
        dancers outside the panel are dropped. If fewer than two members
        remain, nothing is created.

        Args:
            panel_id: Panel id
            members: Hands as {'dancerId': ..., 'side': 'left'|'right'}

        Returns:
            Id of the new lock, or None if nothing was created

        Raises:
            ValueError: If a member names an unknown hand side
        """
        members = list(members)
        for member in members:
            if member.get('side') not in HAND_SIDES:
                raise ValueError(f"Hand side must be one of {HAND_SIDES}, got {member.get('side')!r}")

        with self._lock:
            panel = self._state.panels.get(panel_id)
            if panel is None:
                return None

            panel_dancers = set(panel.get('dancers') or ())
            taken = {(m.get('dancerId'), m.get('side'))
                     for lock in panel.get('locks') or [] for m in lock.get('members') or []}

            filtered = []
            for member in members:
                key = (member.get('dancerId'), member['side'])
                if key in taken or key[0] not in panel_dancers:
                    continue
                taken.add(key)
                filtered.append({'dancerId': key[0], 'side': key[1]})

            if len(filtered) < MIN_LOCK_MEMBERS:
                return None

            lock = {'id': self._id_factory(), 'members': filtered}
            self.update_panel_state(
                panel_id, lambda p: {**p, 'locks': list(p.get('locks') or []) + [lock]})
            return lock['id']

    def delete_lock(self, panel_id: str, lock_id: str):
        """Remove a lock from a panel (no-op if either is unknown)"""
        self.update_panel_state(
            panel_id,
            lambda p: {**p, 'locks': [lock for lock in p.get('locks') or [] if lock.get('id') != lock_id]})

    # ========================================
    # Helper Methods (Internal)
    # ========================================

    def _rekey_locks(self, locks: List[Dict[str, Any]], dancer_id_map: Dict[str, str]) -> List[Dict[str, Any]]:
        """Translate lock members to cloned dancer ids under fresh lock ids

        Members whose dancer was not cloned are dropped, and so are locks left
        with fewer than two members.
        """
        rekeyed = []
        for lock in locks:
            members = [
                {**deepcopy(member), 'dancerId': dancer_id_map[member.get('dancerId')]}
                for member in lock.get('members') or []
                if member.get('dancerId') in dancer_id_map
            ]
            if len(members) < MIN_LOCK_MEMBERS:
                continue
            rekeyed.append({**deepcopy(lock), 'id': self._id_factory(), 'members': members})
        return rekeyed
