from __future__ import annotations
from typing import Dict, List, Optional, Type

from .base_view import BaseView
from .broadcaster import SelectionBroadcaster
from .dataset import DatasetStore
from .viewport import Viewport


class ViewRegistry:
    """
    Ordered catalogue of the dashboard's view classes.

    The app context walks `all_classes()` to build every panel, so the
    registration order is also the order in which linked views subscribe
    to the selection broadcaster.

    Rules:
        * only {@link BaseView} subclasses are accepted
        * view ids are unique
    """

    def __init__(self):
        self._views: Dict[str, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        Add a view class under its `id`.

        Raises:
            TypeError: view_cls is not a {@link BaseView} subclass
            ValueError: the id is taken
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"Cannot register {view_cls!r}: not a BaseView subclass")

        if view_cls.id in self._views:
            raise ValueError(f"View id '{view_cls.id}' is already registered")

        self._views[view_cls.id] = view_cls

    def create(
        self,
        view_id: str,
        store: DatasetStore,
        viewport: Viewport,
        broadcaster: Optional[SelectionBroadcaster] = None,
    ) -> BaseView:
        """
        Build the view registered as `view_id` over the dataset named by its `dataset_key`.

        Raises:
            KeyError: unknown view id, or its dataset is not in the store
        """
        if view_id not in self._views:
            raise KeyError(f"View '{view_id}' not found")
        cls = self._views[view_id]
        return cls(store[cls.dataset_key], viewport, broadcaster)

    def all_classes(self) -> List[Type[BaseView]]:
        return list(self._views.values())
