"""Data models for a single check (watch input, readiness, result)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from core.models import ScrapeResultType

if TYPE_CHECKING:
    from playwright.async_api import ElementHandle

    from core.models import Watch


@dataclass(slots=True)
class WatchSpec:
    """
    What a check reads from a watch record.

    Only ``thumbnail`` is written back by the check itself; everything
    else is the caller's.
    """

    tenant_id: str
    user_id: str
    name: str
    url: str
    css_selector: str
    current_text: str = ""
    dom_element_property: str | None = None
    thumbnail: str | None = None
    keep_active: bool = False
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError("watch url must be non-empty")
        if not self.css_selector or not self.css_selector.strip():
            raise ValueError("watch css_selector must be non-empty")
        if self.current_text is None:
            self.current_text = ""
        if self.dom_element_property is not None and not self.dom_element_property.strip():
            self.dom_element_property = None

    @classmethod
    def from_record(cls, record: Watch) -> WatchSpec:
        return cls(
            id=record.id,
            tenant_id=record.tenant_id,
            user_id=record.user_id,
            name=record.name,
            url=record.url,
            css_selector=record.css_selector,
            current_text=record.current_text or "",
            dom_element_property=record.dom_element_property,
            thumbnail=record.thumbnail,
            keep_active=record.keep_active,
        )


@dataclass(frozen=True, slots=True)
class WatchSettings:
    """Per-tenant check settings."""

    timeout: int  # seconds to wait for the selector


class Readiness(StrEnum):
    """Three-way outcome of the element/timeout race."""

    FOUND = "FOUND"              # selector attached within the timeout
    ABSENT = "ABSENT"            # timed out, but the network settled: element is gone
    INCONCLUSIVE = "INCONCLUSIVE"  # timed out and the page never settled


@dataclass(frozen=True, slots=True)
class ReadinessOutcome:
    state: Readiness
    element: ElementHandle | None = None


@dataclass(frozen=True, slots=True)
class ScrapeResult:
    """Terminal outcome of one check. Built once, never mutated."""

    watch: WatchSpec
    type: ScrapeResultType
    text: str | None = None       # raw extracted text/attribute, when extraction ran
    thumbnail: str | None = None  # icon discovered during this check

    @property
    def changed(self) -> bool:
        return self.type is ScrapeResultType.CHANGE
