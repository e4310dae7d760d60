"""
Change Classifier — maps what a check saw to a ScrapeResultType.

Text rule: both sides are lower-cased and trimmed, and the check passes
when the baseline is *contained* in the extracted text (not equality),
so surrounding copy may change without firing an alert.
"""

from __future__ import annotations

from core.models import ScrapeResultType
from workers.dom_watch.models import Readiness


def normalize(text: str) -> str:
    return text.lower().strip()


def contains_baseline(extracted: str, baseline: str) -> bool:
    return normalize(baseline) in normalize(extracted)


def classify(extracted: str | None, baseline: str, initial: bool = False) -> ScrapeResultType:
    """
    | extracted | contains baseline | initial | result         |
    |-----------|-------------------|---------|----------------|
    | None      | -                 | yes     | TEXT_NOT_FOUND |
    | None      | -                 | no      | CHANGE         |
    | str       | yes               | -       | NO_CHANGE      |
    | str       | no                | -       | CHANGE         |
    """
    if extracted is None:
        return ScrapeResultType.TEXT_NOT_FOUND if initial else ScrapeResultType.CHANGE
    if contains_baseline(extracted, baseline):
        return ScrapeResultType.NO_CHANGE
    return ScrapeResultType.CHANGE


def classify_readiness(state: Readiness, initial: bool = False) -> ScrapeResultType | None:
    """
    Result for a race that did not find the element, or None when it did.

    A missing element on a settled page is a misconfiguration on the
    first check and a change on every later one.
    """
    if state is Readiness.FOUND:
        return None
    if state is Readiness.INCONCLUSIVE:
        return ScrapeResultType.TIMEOUT
    return ScrapeResultType.ELEMENT_NOT_FOUND if initial else ScrapeResultType.CHANGE
