"""Certificates resource."""

from __future__ import annotations

from .._types import Certificate, Envelope
from ._base import CollectionResource
from ._utils import _build_params


class Certificates(CollectionResource[Certificate]):
    """client.certificates: credentials and courses."""

    path = "/certificates"
    model = Certificate

    def list(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        organization: str | None = None,
        tag: str | None = None,
    ) -> Envelope[list[Certificate]]:
        params = _build_params(page=page, limit=limit, organization=organization, tag=tag)
        return self._list(params)
