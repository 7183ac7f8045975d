"""
PanelStore Entity Update Mixin

Leaf updates for dancers and shapes. An update merges attributes into one
entity as a new version; every other entity, and every panel reference
list, is left as it was.
"""

import dataclasses
from copy import deepcopy
from typing import Any, Dict

from ._internal.entity_collection import put_entity


class EntityUpdateMixin:
    """Mixin providing dancer/shape updates for PanelStore

    This mixin assumes the parent class has:
        - self._state, self._lock, self._commit (see PanelStore)
    """

    def update_dancer(self, dancer_id: str, updates: Dict[str, Any]):
        """Merge attributes into a dancer (e.g. {'x': 120, 'rotation': 90})

        Args:
            dancer_id: Dancer id
            updates: Attributes to set; an 'id' key is ignored

        No-op if the dancer does not exist.
        """
        self._update_entity('dancers', dancer_id, updates)

    def update_shape(self, shape_id: str, updates: Dict[str, Any]):
        """Merge attributes into a shape (e.g. {'rotation': 45})

        Args:
            shape_id: Shape id
            updates: Attributes to set; an 'id' key is ignored

        No-op if the shape does not exist.
        """
        self._update_entity('shapes', shape_id, updates)

    def _update_entity(self, collection_name: str, entity_id: str, updates: Dict[str, Any]):
        with self._lock:
            state = self._state
            collection = getattr(state, collection_name)
            entity = collection.get(entity_id)
            if entity is None:
                return

            updated = {**entity, **deepcopy(updates)}
            updated['id'] = entity.get('id', entity_id)
            if updated == entity:
                return

            new_collection = put_entity(collection, updated, entity_id)
            self._commit(dataclasses.replace(state, **{collection_name: new_collection}),
                         f"Updated {collection_name[:-1]} {entity_id}: {sorted(updates)}")
