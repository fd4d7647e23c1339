"""Qt list model mirroring a :class:`CollectionController`.

Views attached to this model get the Qt-native ``canFetchMore`` /
``fetchMore`` pagination: when a view reaches the last loaded row it calls
``fetchMore`` which issues the controller's continuation fetch.  State
snapshots are turned into row inserts (appended pages) or model resets
(replacement pages) so views keep their scroll position while paging.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt, Signal

from ...domain.models import CollectionState
from ..viewmodels.collection_controller import CollectionController

logger = logging.getLogger(__name__)

ItemRole = Qt.UserRole + 1


class CollectionListModel(QAbstractListModel):
    """Expose the controller's items as rows of a ``QAbstractListModel``."""

    # Emits the new CollectionState snapshot
    stateChanged = Signal(object)
    # Emits (ErrorKind value, message)
    errorOccurred = Signal(str, str)
    loadingChanged = Signal(bool)

    def __init__(
        self,
        controller: CollectionController,
        display: Optional[Callable[[Any], str]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._display = display or str
        self._state: CollectionState = controller.get_state()
        self._unsubscribe = controller.subscribe(self._on_state_changed)
        self._controller.error_occurred.connect(self._on_error)

    # ------------------------------------------------------------------
    # QAbstractListModel API
    # ------------------------------------------------------------------
    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._state.items)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._state.items)):
            return None
        item = self._state.items[index.row()]
        if role == Qt.DisplayRole:
            return self._display(item)
        if role == ItemRole:
            return item
        return None

    def roleNames(self) -> dict[int, bytes]:
        names = dict(super().roleNames())
        names[ItemRole] = b"item"
        return names

    def canFetchMore(self, parent: QModelIndex = QModelIndex()) -> bool:
        if parent.isValid():
            return False
        return self._controller.can_load_more

    def fetchMore(self, parent: QModelIndex = QModelIndex()) -> None:
        if parent.isValid():
            return
        self._controller.on_sentinel_visible()

    # ------------------------------------------------------------------
    # Controller callbacks
    # ------------------------------------------------------------------
    def _on_state_changed(self, state: CollectionState) -> None:
        previous = self._state
        old_items, new_items = previous.items, state.items
        if new_items is old_items:
            self._state = state
        elif (
            state.generation == previous.generation
            and len(new_items) > len(old_items)
            and new_items[: len(old_items)] == old_items
        ):
            self.beginInsertRows(QModelIndex(), len(old_items), len(new_items) - 1)
            self._state = state
            self.endInsertRows()
        else:
            self.beginResetModel()
            self._state = state
            self.endResetModel()

        if previous.is_loading != state.is_loading:
            self.loadingChanged.emit(state.is_loading)
        self.stateChanged.emit(state)

    def _on_error(self, exc: Exception, kind: Any) -> None:
        logger.debug("Forwarding %s error to Qt: %s", kind, exc)
        self.errorOccurred.emit(kind.value, str(exc))

    def dispose(self) -> None:
        self._unsubscribe()
        self._controller.error_occurred.disconnect(self._on_error)
