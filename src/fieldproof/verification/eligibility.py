"""Verification eligibility for profile field values.

A value is eligible for an ownership check when it is an exact,
non-deceptive reference to a single URL:

- **Local** values are plain text; the whole trimmed value must be one URL.
- **Remote** values are sanitized HTML; the whole fragment must be one
  anchor whose link text equals its ``href``.

In both cases the URL must use an accepted scheme and must not carry a
userinfo component. Classification is total: it never raises, and anything
malformed is simply ineligible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.config import CoreSettings, get_config
from ..core.logging import DecisionLogger
from .anchors import extract_sole_link
from .urls import has_userinfo, parse_url

logger = logging.getLogger(__name__)
decisions = DecisionLogger(logger)


class IneligibilityReason(StrEnum):
    """Why a value cannot be used for verification."""

    EMPTY = "empty"  # Blank or whitespace-only value
    NOT_A_URL = "not_a_url"  # Not exactly one valid absolute URL
    UNSUPPORTED_SCHEME = "unsupported_scheme"  # Scheme outside the accepted list
    USERINFO = "userinfo"  # Authority carries user[:password]@
    NOT_SOLE_LINK = "not_sole_link"  # Remote markup is not exactly one anchor
    TEXT_MISMATCH = "text_mismatch"  # Remote link text differs from its href


@dataclass(frozen=True)
class Eligibility:
    """Outcome of classifying one field value."""

    eligible: bool
    reason: IneligibilityReason | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "eligible": self.eligible,
            "reason": self.reason.value if self.reason else None,
            "url": self.url,
        }


def _ineligible(value: Any, reason: IneligibilityReason, is_local: bool) -> Eligibility:
    decisions.log_decision(value, is_local, reason=reason.value)
    return Eligibility(eligible=False, reason=reason)


def value_for_verification(value: str, is_local: bool, settings: CoreSettings | None = None) -> str | None:
    """Return the URL text a value stands for, before any URL checks.

    For local values this is the trimmed value itself. For remote values it
    is the ``href`` of the sole anchor, and only when the anchor's link text
    reproduces it exactly.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    candidate = value.strip()
    if is_local:
        return candidate

    settings = settings or get_config()
    link = extract_sole_link(candidate, invisible_class=settings.invisible_class)
    if link is None or link.visible_text != link.href:
        return None
    return link.href


def classify(value: str, is_local: bool, settings: CoreSettings | None = None) -> Eligibility:
    """Classify a field value, reporting the reason when it is ineligible."""
    settings = settings or get_config()

    if not isinstance(value, str) or not value.strip():
        return _ineligible(value, IneligibilityReason.EMPTY, is_local)

    candidate = value.strip()
    if is_local:
        url = candidate
    else:
        link = extract_sole_link(candidate, invisible_class=settings.invisible_class)
        if link is None:
            return _ineligible(value, IneligibilityReason.NOT_SOLE_LINK, is_local)
        if link.visible_text != link.href:
            return _ineligible(value, IneligibilityReason.TEXT_MISMATCH, is_local)
        url = link.href

    if has_userinfo(url):
        return _ineligible(value, IneligibilityReason.USERINFO, is_local)

    components = parse_url(url)
    if components is None:
        return _ineligible(value, IneligibilityReason.NOT_A_URL, is_local)
    if components.scheme not in settings.scheme_set:
        return _ineligible(value, IneligibilityReason.UNSUPPORTED_SCHEME, is_local)

    decisions.log_decision(value, is_local, url=url)
    return Eligibility(eligible=True, url=url)


def verifiable(value: str, is_local: bool, settings: CoreSettings | None = None) -> bool:
    """Whether ``value`` may be used for an out-of-band ownership check."""
    return classify(value, is_local, settings).eligible
