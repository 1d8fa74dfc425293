"""Skills resource."""

from __future__ import annotations

from .._types import Envelope, Skill
from ._base import CollectionResource
from ._utils import _build_params


class Skills(CollectionResource[Skill]):
    """client.skills: named skills with a 0-100 level and a category."""

    path = "/skills"
    model = Skill

    def list(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        category: str | None = None,
    ) -> Envelope[list[Skill]]:
        return self._list(_build_params(page=page, limit=limit, category=category))
