"""
Choreo Editor - Store Snapshot Structures

Immutable records making up one store snapshot:
- StoreState: the three entity collections, selection and display settings
- DancerSelection / ShapeSelection / HandSelection: weak references from
  the UI to a highlighted entity, tagged with the owning panel id
- OpacitySetting: per-layer display opacity

Selections are not owning references. They are cleared explicitly by the
store whenever the panel they are tied to goes away.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from constants import DEFAULT_PANEL_WIDTH, DEFAULT_PANEL_HEIGHT, OPACITY_FULL

from .entity_collection import EntityCollection


@dataclass(frozen=True)
class DancerSelection:
    """Selected dancer and the panel it was selected in"""
    dancer_id: str
    panel_id: str


@dataclass(frozen=True)
class ShapeSelection:
    """Selected shape and the panel it was selected in"""
    shape_id: str
    panel_id: str


@dataclass(frozen=True)
class HandSelection:
    """Selected hand ('left' or 'right') of a dancer"""
    panel_id: str
    dancer_id: str
    hand_side: str


@dataclass(frozen=True)
class OpacitySetting:
    value: float = OPACITY_FULL
    disabled: bool = False


def _default_panel_size() -> Dict[str, float]:
    return {'width': DEFAULT_PANEL_WIDTH, 'height': DEFAULT_PANEL_HEIGHT}


def _default_opacity() -> Dict[str, OpacitySetting]:
    return {'dancers': OpacitySetting(), 'symbols': OpacitySetting()}


@dataclass(frozen=True)
class StoreState:
    """One complete, consistent snapshot of the store

    Snapshots are never modified: every store transition builds a new one
    with dataclasses.replace. Entity dicts inside the collections must be
    treated as read-only by callers.
    """

    panels: EntityCollection = field(default_factory=EntityCollection)
    dancers: EntityCollection = field(default_factory=EntityCollection)
    shapes: EntityCollection = field(default_factory=EntityCollection)

    selected_panel_id: Optional[str] = None
    selected_dancer: Optional[DancerSelection] = None
    selected_hand: Optional[HandSelection] = None
    selected_shape: Optional[ShapeSelection] = None

    panel_size: Dict[str, float] = field(default_factory=_default_panel_size)
    opacity: Dict[str, OpacitySetting] = field(default_factory=_default_opacity)
