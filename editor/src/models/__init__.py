"""
Choreo Editor - Data Models

This module contains the data model for choreography panels.
This is the MODEL in MVC architecture.

Public API: Import PanelStore, StoreState and the selection records from
models.store. The models/store/_internal/ subdirectory contains internal
implementation only.
"""

from .store import (
    PanelStore, StoreState, DancerSelection, ShapeSelection, HandSelection,
    EntityCollection, check_integrity
)

__all__ = [
    'PanelStore',
    'StoreState',
    'DancerSelection',
    'ShapeSelection',
    'HandSelection',
    'EntityCollection',
    'check_integrity',
]
