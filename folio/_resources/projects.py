"""Projects resource: portfolio projects, looked up by id or slug."""

from __future__ import annotations

from collections.abc import Iterable

from .._types import Envelope, Project
from ._base import CollectionResource
from ._utils import _build_params


class Projects(CollectionResource[Project]):
    """client.projects: list, create, update, delete, reorder projects."""

    path = "/projects"
    model = Project

    def list(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        featured: bool | None = None,
        tag: str | None = None,
    ) -> Envelope[list[Project]]:
        """List projects, optionally only featured ones or those carrying ``tag``."""
        return self._list(_build_params(page=page, limit=limit, featured=featured, tag=tag))

    def reorder(self, items: Iterable[tuple[str, int]]) -> list[Envelope[Project]]:
        """Persist a new display order, one PUT per ``(project_id, order)`` pair."""
        return [self.update(project_id, {"order": order}) for project_id, order in items]
