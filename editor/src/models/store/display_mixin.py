"""
PanelStore Display Settings Mixin

Store-wide display settings shared by every panel: the panel (stage) size
and the opacity of the dancer and symbol layers.
"""

import dataclasses

from constants import OPACITY_KINDS, OPACITY_FULL, OPACITY_DIMMED

from ._internal.state import OpacitySetting


class DisplayMixin:
    """Mixin providing display settings for PanelStore

    This mixin assumes the parent class has:
        - self._state, self._lock, self._commit (see PanelStore)
    """

    def set_panel_size(self, width: float, height: float):
        """Set the size every panel is drawn at

        Raises:
            ValueError: If width or height is not positive
        """
        if not (width > 0 and height > 0):
            raise ValueError(f"Panel size must be positive, got {width}x{height}")

        with self._lock:
            size = {'width': width, 'height': height}
            if self._state.panel_size == size:
                return
            self._commit(dataclasses.replace(self._state, panel_size=size),
                         f"Set panel size: {width}x{height}")

    def toggle_opacity(self, kind: str):
        """Toggle a layer between fully visible and dimmed (disabled)

        Args:
            kind: 'dancers' or 'symbols'

        Raises:
            ValueError: If kind is unknown
        """
        if kind not in OPACITY_KINDS:
            raise ValueError(f"Opacity kind must be one of {OPACITY_KINDS}, got {kind!r}")

        with self._lock:
            current = self._state.opacity.get(kind, OpacitySetting())
            if current.value == OPACITY_FULL:
                toggled = OpacitySetting(value=OPACITY_DIMMED, disabled=True)
            else:
                toggled = OpacitySetting(value=OPACITY_FULL, disabled=False)

            opacity = dict(self._state.opacity)
            opacity[kind] = toggled
            self._commit(dataclasses.replace(self._state, opacity=opacity),
                         f"Toggled {kind} opacity: {toggled.value}")
