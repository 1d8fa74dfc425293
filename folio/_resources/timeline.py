"""Timeline resource: work, education and achievement entries."""

from __future__ import annotations

from .._types import Envelope, TimelineItem
from ._base import CollectionResource
from ._utils import _build_params


class Timeline(CollectionResource[TimelineItem]):
    """client.timeline"""

    path = "/timeline"
    model = TimelineItem

    def list(
        self, *, page: int | None = None, limit: int | None = None
    ) -> Envelope[list[TimelineItem]]:
        return self._list(_build_params(page=page, limit=limit))
