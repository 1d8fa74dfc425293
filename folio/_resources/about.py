"""About resource: profile variants, one of which is active."""

from __future__ import annotations

from .._types import About, Envelope
from ._base import CollectionResource


class AboutProfiles(CollectionResource[About]):
    """client.about: the public profile and its admin-managed variants."""

    path = "/about"
    model = About

    def active(self) -> Envelope[About]:
        """The profile currently shown on the public site."""
        return Envelope.from_dict(self._http.get(self.path), About.from_dict)

    def list(self) -> Envelope[list[About]]:
        """Every profile, active or not."""
        return Envelope.from_dict(self._http.get(f"{self.path}/all"), About.from_dict)

    def activate(self, about_id: str) -> Envelope[About]:
        """Make ``about_id`` the active profile."""
        return Envelope.from_dict(
            self._http.put(f"{self._item_path(about_id)}/activate"), About.from_dict
        )
