"""
Choreo Editor - Panel Factory

Builds the fixed panel template: one panel holding two dancers (red
facing down-stage, blue facing up-stage) and a stage-centre marker.
Every call allocates fresh ids, so two panels never share entities.
"""

from copy import deepcopy
from typing import Callable, Dict, List, Tuple

from constants import DANCER_TEMPLATE, SEED_DANCERS, SEED_SHAPES, DEFAULT_PANEL_NOTES

from .entity_collection import Entity, EntityCollection, add_entities
from .state import StoreState


def create_initial_panel(id_factory: Callable[[], str]) -> Tuple[Entity, List[Entity], List[Entity]]:
    """Create a template panel with its dancers and shapes

    Args:
        id_factory: Zero-argument callable returning a fresh id

    Returns:
        (panel, dancers, shapes) - the panel references the dancer and
        shape ids in order; dancers and shapes carry their owning panel id
    """
    panel_id = id_factory()

    dancers = []
    for overrides in SEED_DANCERS:
        dancer = deepcopy(DANCER_TEMPLATE)
        dancer.update(deepcopy(overrides))
        dancer['id'] = id_factory()
        dancer['panel'] = panel_id
        dancers.append(dancer)

    shapes = []
    for template in SEED_SHAPES:
        shape = deepcopy(template)
        shape['id'] = id_factory()
        shape['panel'] = panel_id
        shapes.append(shape)

    panel = {
        'id': panel_id,
        'dancers': [dancer['id'] for dancer in dancers],
        'shapes': [shape['id'] for shape in shapes],
        'notes': DEFAULT_PANEL_NOTES,
        'locks': [],
    }
    return panel, dancers, shapes


def build_initial_collections(id_factory: Callable[[], str]) -> Dict[str, EntityCollection]:
    """Create the seed collections: one template panel

    Returns:
        Dict with 'panels', 'dancers' and 'shapes' collections, ready to be
        passed to dataclasses.replace on a StoreState
    """
    panel, dancers, shapes = create_initial_panel(id_factory)
    return {
        'panels': add_entities(EntityCollection(), [panel]),
        'dancers': add_entities(EntityCollection(), dancers),
        'shapes': add_entities(EntityCollection(), shapes),
    }


def build_initial_state(id_factory: Callable[[], str], **settings) -> StoreState:
    """Create the seed snapshot

    Args:
        id_factory: Zero-argument callable returning a fresh id
        **settings: Optional StoreState display fields (panel_size, opacity)

    Returns:
        StoreState with one template panel and no selection
    """
    return StoreState(**build_initial_collections(id_factory), **settings)
