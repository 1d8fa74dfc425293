"""Dataclass models mirroring the portfolio API response schemas."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class PageMeta:
    """Pagination block of list responses."""

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def from_dict(cls, data: dict) -> PageMeta:
        return cls(
            page=data.get("page", 1),
            limit=data.get("limit", 0),
            total=data.get("total", 0),
            total_pages=data.get("totalPages", 0),
        )


@dataclass
class Envelope(Generic[T]):
    """Standard ``{success, data, message, error, errors, meta}`` wrapper.

    ``raw`` keeps the decoded body exactly as the server sent it.
    """

    success: bool
    data: T | None = None
    message: str | None = None
    error: str | None = None
    errors: list[str] = field(default_factory=list)
    meta: PageMeta | None = None
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, body: Any, parse: Callable[[Any], Any] | None = None) -> Envelope:
        """
        Wrap a decoded body, converting ``data`` with ``parse``.

        ``parse`` is applied per item when ``data`` is a list.
        """
        if not isinstance(body, dict):
            return cls(success=True, data=body, raw={"data": body})
        data = body.get("data")
        if parse is not None and data is not None:
            data = [parse(d) for d in data] if isinstance(data, list) else parse(data)
        meta = body.get("meta")
        return cls(
            success=bool(body.get("success", True)),
            data=data,
            message=body.get("message"),
            error=body.get("error"),
            errors=list(body.get("errors") or []),
            meta=PageMeta.from_dict(meta) if isinstance(meta, dict) else None,
            raw=body,
        )


def _id(data: dict) -> str:
    return str(data.get("_id") or data.get("id") or "")


@dataclass
class Project:
    id: str
    title: str
    slug: str
    description: str
    long_description: str | None
    tags: list[str]
    links: dict[str, str]
    images: list[str]
    featured: bool
    order: int
    created_at: str
    updated_at: str

    @classmethod
    def from_dict(cls, data: dict) -> Project:
        return cls(
            id=_id(data),
            title=data.get("title", ""),
            slug=data.get("slug", ""),
            description=data.get("description", ""),
            long_description=data.get("longDescription"),
            tags=data.get("tags", []),
            links=data.get("links") or {},
            images=data.get("images", []),
            featured=data.get("featured", False),
            order=data.get("order", 0),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )


@dataclass
class Certificate:
    id: str
    title: str
    organization: str
    issue_date: str
    credential_id: str | None
    url: str | None
    image: str | None
    tags: list[str]
    description: str | None
    created_at: str

    @classmethod
    def from_dict(cls, data: dict) -> Certificate:
        return cls(
            id=_id(data),
            title=data.get("title", ""),
            organization=data.get("organization", ""),
            issue_date=data.get("issueDate", ""),
            credential_id=data.get("credentialId"),
            url=data.get("url") or None,
            image=data.get("image") or None,
            tags=data.get("tags", []),
            description=data.get("description"),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class TimelineItem:
    """A work, education, or achievement entry."""

    id: str
    title: str
    start_date: str
    end_date: str | None
    description: str
    bullets: list[str]
    type: str
    company: str | None
    location: str | None
    icon: str | None
    skills: list[str]

    @classmethod
    def from_dict(cls, data: dict) -> TimelineItem:
        return cls(
            id=_id(data),
            title=data.get("title", ""),
            start_date=data.get("startDate", ""),
            end_date=data.get("endDate") or None,
            description=data.get("description", ""),
            bullets=data.get("bullets", []),
            type=data.get("type", "work"),
            company=data.get("company"),
            location=data.get("location"),
            icon=data.get("icon"),
            skills=data.get("skills", []),
        )


@dataclass
class Skill:
    id: str
    name: str
    level: int
    category: str

    @classmethod
    def from_dict(cls, data: dict) -> Skill:
        return cls(
            id=_id(data),
            name=data.get("name", ""),
            level=data.get("level", 0),
            category=data.get("category", "Other"),
        )


@dataclass
class About:
    """An "about" profile; exactly one is active at a time."""

    id: str
    title: str
    subtitle: str | None
    description: str
    highlights: list[str]
    personal_info: dict
    social_links: dict
    fun_facts: list[dict]
    is_active: bool

    @classmethod
    def from_dict(cls, data: dict) -> About:
        return cls(
            id=_id(data),
            title=data.get("title", ""),
            subtitle=data.get("subtitle") or None,
            description=data.get("description", ""),
            highlights=data.get("highlights", []),
            personal_info=data.get("personalInfo") or {},
            social_links=data.get("socialLinks") or {},
            fun_facts=data.get("funFacts", []),
            is_active=data.get("isActive", False),
        )


@dataclass
class ContactMessage:
    id: str
    name: str
    email: str
    message: str
    subject: str | None
    read: bool
    created_at: str

    @classmethod
    def from_dict(cls, data: dict) -> ContactMessage:
        return cls(
            id=_id(data),
            name=data.get("name", ""),
            email=data.get("email", ""),
            message=data.get("message", ""),
            subject=data.get("subject") or None,
            read=data.get("read", False),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class UploadedFile:
    """A media asset stored by the upload service."""

    public_id: str
    secure_url: str
    url: str
    format: str | None
    resource_type: str | None
    bytes: int
    width: int | None = None
    height: int | None = None
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> UploadedFile:
        return cls(
            public_id=data["public_id"],
            secure_url=data.get("secure_url", ""),
            url=data.get("url", ""),
            format=data.get("format"),
            resource_type=data.get("resource_type"),
            bytes=data.get("bytes", 0),
            width=data.get("width"),
            height=data.get("height"),
            created_at=data.get("created_at"),
        )


@dataclass
class AuthUser:
    id: str
    email: str
    name: str | None
    role: str | None

    @classmethod
    def from_dict(cls, data: dict) -> AuthUser:
        return cls(
            id=_id(data),
            email=data.get("email", ""),
            name=data.get("name"),
            role=data.get("role"),
        )


@dataclass
class LoginResult:
    token: str
    user: AuthUser | None
    refresh_token: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> LoginResult:
        user = data.get("user")
        return cls(
            token=data["token"],
            user=AuthUser.from_dict(user) if isinstance(user, dict) else None,
            refresh_token=data.get("refreshToken"),
        )
