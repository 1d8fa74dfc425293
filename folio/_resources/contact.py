"""Contact resource: public submissions and the admin inbox."""

from __future__ import annotations

from .._types import ContactMessage, Envelope
from ._base import CollectionResource
from ._utils import _build_params


class Contact(CollectionResource[ContactMessage]):
    """client.contact: submit messages, list them, mark them read."""

    path = "/contact"
    model = ContactMessage

    def submit(
        self, *, name: str, email: str, message: str, subject: str | None = None
    ) -> Envelope[ContactMessage]:
        """Send a message from the public contact form."""
        payload = {"name": name, "email": email, "message": message}
        if subject:
            payload["subject"] = subject
        return self.create(payload)

    def list(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        read: bool | None = None,
    ) -> Envelope[list[ContactMessage]]:
        return self._list(_build_params(page=page, limit=limit, read=read))

    def mark_read(self, message_id: str) -> Envelope[ContactMessage]:
        return Envelope.from_dict(
            self._http.put(f"{self._item_path(message_id)}/read"), ContactMessage.from_dict
        )
