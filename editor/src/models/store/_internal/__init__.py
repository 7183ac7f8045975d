"""
PanelStore Internal Package - DO NOT IMPORT FROM HERE

This package contains INTERNAL implementation for the store model:
- entity_collection.py: EntityCollection and its add/remove/clone primitives
- state.py: StoreState snapshot and selection records
- panel_factory.py: Template panel and seed state

FORBIDDEN: Do not import from models.store._internal.* directly
CORRECT: Import from models.store (the public API)

Example:
    from models.store import PanelStore, EntityCollection, add_entities
"""

# This package is internal - do not populate __all__
# External code must use models.store
