"""
PanelStore Selection Mixin

Selection is a set of weak references from the UI into the store: the
selected panel, dancer, hand and shape. Writes go through methods that
check the referent exists; deletions clear every selection tied to the
deleted panel (see _selection_without_panel).

The selected dancer and hand are also the targets of the head and hand
shape setters.
"""

import dataclasses
from typing import Any, Dict

from constants import HAND_SIDES

from ._internal.state import DancerSelection, ShapeSelection, HandSelection, StoreState


class SelectionMixin:
    """Mixin providing selection writes and invalidation for PanelStore

    This mixin assumes the parent class has:
        - self._state, self._lock, self._commit (see PanelStore)
        - self.update_dancer (EntityUpdateMixin)
    """

    def select_panel(self, panel_id: str):
        """Select a panel, clearing dancer, hand and shape selection

        No-op if the panel does not exist.
        """
        with self._lock:
            state = self._state
            if panel_id not in state.panels:
                return
            self._commit(dataclasses.replace(
                state,
                selected_panel_id=panel_id,
                selected_dancer=None,
                selected_hand=None,
                selected_shape=None,
            ), f"Selected panel: {panel_id}")

    def select_dancer(self, panel_id: str, dancer_id: str):
        """Toggle selection of a dancer (and select its panel)

        Selecting the currently selected dancer clears the dancer selection;
        the panel stays selected. No-op unless the dancer exists and belongs
        to the panel.
        """
        with self._lock:
            state = self._state
            if not self._owns(state, panel_id, 'dancers', dancer_id):
                return

            dancer = DancerSelection(dancer_id=dancer_id, panel_id=panel_id)
            if state.selected_dancer == dancer:
                dancer = None
            self._commit(dataclasses.replace(state, selected_panel_id=panel_id, selected_dancer=dancer),
                         f"Selected dancer: {dancer}")

    def select_shape(self, panel_id: str, shape_id: str):
        """Select a shape (and its panel)

        No-op unless the shape exists and belongs to the panel.
        """
        with self._lock:
            state = self._state
            if not self._owns(state, panel_id, 'shapes', shape_id):
                return
            self._commit(dataclasses.replace(
                state,
                selected_panel_id=panel_id,
                selected_shape=ShapeSelection(shape_id=shape_id, panel_id=panel_id),
            ), f"Selected shape: {shape_id}")

    def select_hand(self, panel_id: str, dancer_id: str, hand_side: str):
        """Toggle selection of a dancer's hand

        Selecting the currently selected hand clears it. No-op unless the
        dancer exists and belongs to the panel.

        Raises:
            ValueError: If hand_side is not 'left' or 'right'
        """
        if hand_side not in HAND_SIDES:
            raise ValueError(f"hand_side must be one of {HAND_SIDES}, got {hand_side!r}")

        with self._lock:
            state = self._state
            if not self._owns(state, panel_id, 'dancers', dancer_id):
                return

            hand = HandSelection(panel_id=panel_id, dancer_id=dancer_id, hand_side=hand_side)
            if state.selected_hand == hand:
                hand = None
            self._commit(dataclasses.replace(state, selected_panel_id=panel_id, selected_hand=hand),
                         f"Selected hand: {hand}")

    def clear_selection(self):
        """Clear panel, dancer, hand and shape selection"""
        with self._lock:
            state = self._state
            if (state.selected_panel_id is None and state.selected_dancer is None
                    and state.selected_hand is None and state.selected_shape is None):
                return
            self._commit(dataclasses.replace(
                state,
                selected_panel_id=None,
                selected_dancer=None,
                selected_hand=None,
                selected_shape=None,
            ), "Cleared selection")

    # ========================================
    # Selected Dancer Attributes
    # ========================================

    def set_selected_head_shape(self, shape: str):
        """Set the head shape of the selected dancer (no-op if none selected)"""
        with self._lock:
            selection = self._state.selected_dancer
            if selection is None:
                return
            self.update_dancer(selection.dancer_id, {'headShape': shape})

    def set_selected_hand_shape(self, shape: str):
        """Set the shape of the selected hand (no-op if none selected)

        Only the selected side changes; the other hand keeps its shape.
        """
        with self._lock:
            selection = self._state.selected_hand
            if selection is None:
                return
            dancer = self._state.dancers.get(selection.dancer_id)
            if dancer is None:
                return
            current = dancer.get('handShape')
            hand_shape = dict(current) if isinstance(current, dict) else {}
            hand_shape[selection.hand_side] = shape
            self.update_dancer(selection.dancer_id, {'handShape': hand_shape})

    # ========================================
    # Helper Methods (Internal)
    # ========================================

    @staticmethod
    def _owns(state: StoreState, panel_id: str, kind: str, entity_id: str) -> bool:
        """Check that entity_id exists and is referenced by the panel"""
        panel = state.panels.get(panel_id)
        if panel is None or entity_id not in getattr(state, kind):
            return False
        return entity_id in (panel.get(kind) or ())

    @staticmethod
    def _selection_without_panel(state: StoreState, panel_id: str) -> Dict[str, Any]:
        """Selection fields to reset because panel_id is going away

        Matches by panel association only: a dancer, hand or shape selection
        tied to the panel is cleared whether or not its entity id is valid.

        Returns:
            Mapping of StoreState field -> None, for dataclasses.replace
        """
        cleared = {}
        if state.selected_panel_id == panel_id:
            cleared['selected_panel_id'] = None
        for field_name in ('selected_dancer', 'selected_hand', 'selected_shape'):
            selection = getattr(state, field_name)
            if selection is not None and getattr(selection, 'panel_id', None) == panel_id:
                cleared[field_name] = None
        return cleared
