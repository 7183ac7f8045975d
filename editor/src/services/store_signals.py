"""
Qt bridge for PanelStore change notifications

The store is Qt-free; the canvas and sidebar widgets want signals. This
QObject subscribes to a store's listeners and re-emits each new snapshot:

    signals = StoreSignals()
    signals.stateChanged.connect(canvas.on_state_changed)
    signals.panelsChanged.connect(sidebar.rebuild_panel_list)
    signals.attach(store)

Signals are emitted synchronously on the thread that ran the store
operation.
"""

import logging

from PyQt5.QtCore import QObject, pyqtSignal


class StoreSignals(QObject):
    """Re-emits PanelStore snapshots as Qt signals"""

    stateChanged = pyqtSignal(object)  # Emits the new StoreState
    panelsChanged = pyqtSignal(list)  # Emits panel ids in display order when they change

    def __init__(self, parent=None):
        super().__init__(parent)
        self._logger = logging.getLogger('StoreSignals')
        self._store = None
        self._panel_ids = None

    @property
    def store(self):
        """Attached PanelStore, or None"""
        return self._store

    def attach(self, store):
        """Start forwarding changes from store (detaches any previous store)"""
        self.detach()
        self._store = store
        self._panel_ids = store.get_state().panels.all_ids
        store.add_listener(self._on_state_changed)
        self._logger.debug(f"Attached to {store!r}")

    def detach(self):
        """Stop forwarding changes"""
        if self._store is None:
            return
        self._store.remove_listener(self._on_state_changed)
        self._logger.debug(f"Detached from {self._store!r}")
        self._store = None
        self._panel_ids = None

    def _on_state_changed(self, state):
        self.stateChanged.emit(state)

        panel_ids = state.panels.all_ids
        if panel_ids != self._panel_ids:
            self._panel_ids = panel_ids
            self.panelsChanged.emit(list(panel_ids))
