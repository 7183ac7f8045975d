"""
PanelStore Query Mixin

Read-only access for the UI and tests:
- Entity lookups by id
- Panel contents in reference order
- Ownership lookups (which panel holds a dancer/shape)
- Integrity validation of a snapshot

Queries never change the store and never raise for unknown ids.
"""

from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from ._internal.entity_collection import Entity
from ._internal.state import StoreState

CHILD_KINDS = ('dancers', 'shapes')


class StoreQueryMixin:
    """Mixin providing query methods for PanelStore

    This mixin assumes the parent class has:
        - self._state: current StoreState
    """

    # ========================================
    # Lookups
    # ========================================

    def get_panel(self, panel_id: str) -> Optional[Entity]:
        return self._state.panels.get(panel_id)

    def get_dancer(self, dancer_id: str) -> Optional[Entity]:
        return self._state.dancers.get(dancer_id)

    def get_shape(self, shape_id: str) -> Optional[Entity]:
        return self._state.shapes.get(shape_id)

    def get_panel_ids(self) -> Tuple[str, ...]:
        """Get panel ids in display order"""
        return self._state.panels.all_ids

    def get_panel_dancers(self, panel_id: str) -> List[Entity]:
        """Get a panel's dancers in reference order

        Dangling references are skipped; an unknown panel has no dancers.
        """
        return self._panel_children(panel_id, 'dancers')

    def get_panel_shapes(self, panel_id: str) -> List[Entity]:
        """Get a panel's shapes in reference order

        Dangling references are skipped; an unknown panel has no shapes.
        """
        return self._panel_children(panel_id, 'shapes')

    def find_panel_for_dancer(self, dancer_id: str) -> Optional[str]:
        """Get the id of the panel referencing a dancer, or None"""
        return self._find_owner(dancer_id, 'dancers')

    def find_panel_for_shape(self, shape_id: str) -> Optional[str]:
        """Get the id of the panel referencing a shape, or None"""
        return self._find_owner(shape_id, 'shapes')

    def get_lock_for_hand(self, panel_id: str, dancer_id: str, side: str) -> Optional[Dict[str, Any]]:
        """Get the lock containing a dancer's hand, or None"""
        panel = self._state.panels.get(panel_id)
        if panel is None:
            return None
        for lock in panel.get('locks') or []:
            for member in lock.get('members') or []:
                if member.get('dancerId') == dancer_id and member.get('side') == side:
                    return lock
        return None

    # ========================================
    # Integrity
    # ========================================

    def validate_integrity(self) -> List[Dict[str, Any]]:
        """Validate the current snapshot (see check_integrity)"""
        return check_integrity(self._state)

    # ========================================
    # Helper Methods (Internal)
    # ========================================

    def _panel_children(self, panel_id: str, kind: str) -> List[Entity]:
        state = self._state
        panel = state.panels.get(panel_id)
        if panel is None:
            return []
        collection = getattr(state, kind)
        children = [collection.get(child_id) for child_id in panel.get(kind) or ()]
        return [child for child in children if child is not None]

    def _find_owner(self, entity_id: str, kind: str) -> Optional[str]:
        for panel in self._state.panels:
            if entity_id in (panel.get(kind) or ()):
                return panel['id']
        return None


def check_integrity(state: StoreState) -> List[Dict[str, Any]]:
    """Check every identifier and reference invariant of a snapshot

    Covers, for each collection: duplicate ids in all_ids, all_ids/by_id
    mismatches, entities stored under a key other than their own id. Across
    collections: panel references to missing dancers/shapes, dancers/shapes
    referenced by more than one panel or by none, and selections pointing
    at entities that no longer exist.

    Args:
        state: Snapshot to check

    Returns:
        List of issue dicts, each with a 'kind' key; empty when consistent
    """
    issues = []

    for name in ('panels',) + CHILD_KINDS:
        collection = getattr(state, name)
        counts = Counter(collection.all_ids)
        for entity_id, count in counts.items():
            if count > 1:
                issues.append({'kind': 'duplicate_id', 'collection': name, 'id': entity_id})
            if entity_id not in collection.by_id:
                issues.append({'kind': 'missing_entity', 'collection': name, 'id': entity_id})
        for entity_id, entity in collection.by_id.items():
            if entity_id not in counts:
                issues.append({'kind': 'unlisted_entity', 'collection': name, 'id': entity_id})
            if entity.get('id') != entity_id:
                issues.append({'kind': 'id_mismatch', 'collection': name, 'id': entity_id,
                               'entity_id': entity.get('id')})

    for kind in CHILD_KINDS:
        collection = getattr(state, kind)
        owners: Dict[str, List[str]] = {}
        for panel_id, panel in state.panels.by_id.items():
            for child_id in panel.get(kind) or ():
                if child_id not in collection:
                    issues.append({'kind': 'dangling_reference', 'panel_id': panel_id,
                                   'collection': kind, 'id': child_id})
                owners.setdefault(child_id, []).append(panel_id)

        for child_id, panel_ids in owners.items():
            if len(panel_ids) > 1:
                issues.append({'kind': 'shared_child', 'collection': kind, 'id': child_id,
                               'panel_ids': panel_ids})
        for child_id in collection.by_id:
            if child_id not in owners:
                issues.append({'kind': 'orphan', 'collection': kind, 'id': child_id})

    issues.extend(_stale_selections(state))
    return issues


def _stale_selections(state: StoreState) -> List[Dict[str, Any]]:
    stale = []
    if state.selected_panel_id is not None and state.selected_panel_id not in state.panels:
        stale.append({'kind': 'stale_selection', 'field': 'selected_panel_id',
                      'id': state.selected_panel_id})

    targets = (
        ('selected_dancer', 'dancers', 'dancer_id'),
        ('selected_hand', 'dancers', 'dancer_id'),
        ('selected_shape', 'shapes', 'shape_id'),
    )
    for field_name, kind, id_attr in targets:
        selection = getattr(state, field_name)
        if selection is None:
            continue
        entity_id = getattr(selection, id_attr, None)
        if selection.panel_id not in state.panels or entity_id not in getattr(state, kind):
            stale.append({'kind': 'stale_selection', 'field': field_name, 'id': entity_id})
    return stale
