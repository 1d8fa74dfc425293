"""Create/read/update/delete namespace shared by the content collections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from .._types import Envelope
from ._utils import _segment

if TYPE_CHECKING:
    from .._http import HTTPClient

M = TypeVar("M")


class CollectionResource(Generic[M]):
    """Standard ``/<collection>`` and ``/<collection>/:id`` endpoints."""

    path: ClassVar[str]
    model: ClassVar[Any]

    def __init__(self, http: HTTPClient):
        self._http = http

    def _item_path(self, item_id: str) -> str:
        return f"{self.path}/{_segment(item_id)}"

    def _list(self, params: dict) -> Envelope[list[M]]:
        return Envelope.from_dict(self._http.get(self.path, params), self.model.from_dict)

    def get(self, item_id: str) -> Envelope[M]:
        return Envelope.from_dict(self._http.get(self._item_path(item_id)), self.model.from_dict)

    def create(self, data: dict) -> Envelope[M]:
        return Envelope.from_dict(self._http.post(self.path, data), self.model.from_dict)

    def update(self, item_id: str, data: dict) -> Envelope[M]:
        return Envelope.from_dict(
            self._http.put(self._item_path(item_id), data), self.model.from_dict
        )

    def delete(self, item_id: str) -> Envelope[None]:
        return Envelope.from_dict(self._http.delete(self._item_path(item_id)))
