"""
Choreo Editor - Normalized Entity Collection

Provides the normalized collection shape shared by panels, dancers and
shapes, plus the pure primitives that transform it:
- add_entities: append a batch of entities
- remove_entities: drop ids (unknown ids are ignored)
- clone_entities: deep-copy entities under fresh ids
- put_entity: swap in a new version of one entity

The primitives know nothing about panels, dancers or shapes. They never
mutate their inputs; every call returns a new collection (copy-on-write),
so a collection held by an old snapshot never changes.

Usage:
    dancers = EntityCollection.from_entities([{'id': 'd1', 'x': 10}])
    dancers = add_entities(dancers, [{'id': 'd2', 'x': 20}])
    dancers = remove_entities(dancers, ['d1'])

    clones, id_map = clone_entities(dancers.by_id, ['d2'])
"""

import logging
import uuid as uuid_module
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

_logger = logging.getLogger('EntityCollection')

Entity = Dict[str, Any]


def new_entity_id() -> str:
    """Generate a fresh, globally unique entity id"""
    return str(uuid_module.uuid4())


@dataclass(frozen=True)
class EntityCollection:
    """Keyed lookup plus authoritative ordering

    Invariants (maintained by the primitives, given their preconditions):
        - all_ids holds no duplicates
        - every id in all_ids is a key of by_id and vice versa
        - all_ids order is the display/iteration order
    """

    by_id: Dict[str, Entity] = field(default_factory=dict)
    all_ids: Tuple[str, ...] = ()

    @classmethod
    def from_entities(cls, entities: Iterable[Entity]) -> 'EntityCollection':
        """Build a collection from entities in display order"""
        return add_entities(cls(), entities)

    def get(self, entity_id: str) -> Optional[Entity]:
        """Get entity by id, or None if absent (or not a valid id at all)"""
        try:
            return self.by_id.get(entity_id)
        except TypeError:
            return None

    def __contains__(self, entity_id: object) -> bool:
        return self.get(entity_id) is not None

    def __len__(self) -> int:
        return len(self.all_ids)

    def __iter__(self) -> Iterator[Entity]:
        """Iterate entities in all_ids order"""
        return (self.by_id[entity_id] for entity_id in self.all_ids)


def add_entities(collection: EntityCollection, new_entities: Iterable[Entity]) -> EntityCollection:
    """Insert entities keyed by their own id, appending ids in input order

    Args:
        collection: Existing collection (left untouched)
        new_entities: Entities to add, each with an 'id' key

    Returns:
        New EntityCollection

    Raises:
        ValueError: If an id repeats within the batch or already exists
    """
    new_entities = list(new_entities)

    seen = set()
    for entity in new_entities:
        entity_id = entity['id']
        if entity_id in collection.by_id or entity_id in seen:
            raise ValueError(f"Entity with id '{entity_id}' already exists")
        seen.add(entity_id)

    by_id = dict(collection.by_id)
    all_ids = list(collection.all_ids)
    for entity in new_entities:
        by_id[entity['id']] = entity
        all_ids.append(entity['id'])

    return EntityCollection(by_id=by_id, all_ids=tuple(all_ids))


def remove_entities(collection: EntityCollection, ids_to_remove: Iterable[str]) -> EntityCollection:
    """Delete ids from by_id and all_ids

    Ids that are not present are ignored, so removing a dangling reference
    is always safe.

    Args:
        collection: Existing collection (left untouched)
        ids_to_remove: Ids to drop

    Returns:
        New EntityCollection
    """
    doomed = set(ids_to_remove)
    by_id = {entity_id: entity for entity_id, entity in collection.by_id.items()
             if entity_id not in doomed}
    all_ids = tuple(entity_id for entity_id in collection.all_ids if entity_id not in doomed)
    return EntityCollection(by_id=by_id, all_ids=all_ids)


def put_entity(collection: EntityCollection, entity: Entity,
               entity_id: Optional[str] = None) -> EntityCollection:
    """Replace an existing entity with a new version, keeping its position

    Args:
        collection: Existing collection (left untouched)
        entity: New version
        entity_id: Key to store it under (defaults to entity['id']); must
            already be in the collection

    Returns:
        New EntityCollection

    Raises:
        KeyError: If the entity's id is not in the collection
    """
    if entity_id is None:
        entity_id = entity['id']
    if entity_id not in collection.by_id:
        raise KeyError(entity_id)

    by_id = dict(collection.by_id)
    by_id[entity_id] = entity
    return EntityCollection(by_id=by_id, all_ids=collection.all_ids)


def clone_entities(by_id: Dict[str, Entity], source_ids: Iterable[str],
                   id_factory: Optional[Callable[[], str]] = None) -> Tuple[List[Entity], Dict[str, str]]:
    """Deep-copy entities under freshly generated ids

    The copy is deep: nested attributes (hand positions, shapes of hands)
    are not shared with the source, so mutating either side never leaks
    into the other.

    Repeated source ids are cloned once (first occurrence wins). Ids
    missing from by_id are skipped and do not appear in the id map.

    Args:
        by_id: Source lookup
        source_ids: Ids to clone, in output order
        id_factory: Zero-argument callable returning a fresh id
            (defaults to new_entity_id)

    Returns:
        (clones, id_map): clones in input order, and old id -> new id
    """
    id_factory = id_factory or new_entity_id
    clones = []
    id_map = {}

    for source_id in source_ids:
        if source_id in id_map:
            continue
        source = by_id.get(source_id)
        if source is None:
            continue

        clone = deepcopy(source)
        clone['id'] = id_factory()
        clones.append(clone)
        id_map[source_id] = clone['id']

    _logger.debug(f"Cloned {len(clones)} entities")
    return clones, id_map
