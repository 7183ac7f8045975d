"""PanelStore model package"""

from .panel_mixin import PanelLifecycleMixin
from .entity_mixin import EntityUpdateMixin
from .selection_mixin import SelectionMixin
from .display_mixin import DisplayMixin
from .query_mixin import StoreQueryMixin, check_integrity
from .core import PanelStore
from ._internal.entity_collection import (
    EntityCollection, add_entities, remove_entities, clone_entities, put_entity, new_entity_id
)
from ._internal.state import (
    StoreState, DancerSelection, ShapeSelection, HandSelection, OpacitySetting
)

__all__ = [
    'PanelStore',
    'StoreState',
    'DancerSelection',
    'ShapeSelection',
    'HandSelection',
    'OpacitySetting',
    'EntityCollection',
    'add_entities',
    'remove_entities',
    'clone_entities',
    'put_entity',
    'new_entity_id',
    'check_integrity',
    'PanelLifecycleMixin',
    'EntityUpdateMixin',
    'SelectionMixin',
    'DisplayMixin',
    'StoreQueryMixin',
]
