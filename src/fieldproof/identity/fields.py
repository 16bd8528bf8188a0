# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Profile field entity.

A field is a name/value pair attached to an identity. It is *verifiable*
when its value plausibly proves control of a linked URL, and *verified*
once an out-of-band check has confirmed that proof.

The field wraps the mapping it was built from and writes its verification
timestamp back into it, so whoever persists the owning record sees the
change without further bookkeeping.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol, runtime_checkable

from ..core.config import CoreSettings, get_config
from ..core.exceptions import ValidationException
from ..verification.eligibility import Eligibility, classify, verifiable

logger = logging.getLogger(__name__)


@runtime_checkable
class IdentityCapability(Protocol):
    """What a field needs from the identity that owns it."""

    @property
    def is_local(self) -> bool:
        """True when field values are plain text, False when they are remote HTML."""
        ...


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a stored verification timestamp.

    Accepts None, an empty string, an ISO-8601 string or a datetime. Naive
    datetimes are taken to be UTC.

    Raises:
        ValidationException: If the value cannot be read as a timestamp.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise ValidationException(f"Invalid verification timestamp: {e}", field="verified_at", value=value) from e
    else:
        raise ValidationException("Verification timestamp must be a string or datetime", field="verified_at", value=value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _clean_text(attributes: MutableMapping[str, Any], key: str) -> str:
    value = attributes.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationException(f"Field {key} must be a string", field=key, value=value)
    return value.strip()


class Field:
    """A single profile field backed by a mutable mapping.

    Args:
        identity: The owning identity; only its ``is_local`` flag is read.
        attributes: Backing mapping with ``name``, ``value`` and optional
            ``verified_at`` keys. Kept by reference.
        settings: Settings override, mainly for tests.
    """

    def __init__(
        self,
        identity: IdentityCapability,
        attributes: MutableMapping[str, Any],
        settings: CoreSettings | None = None,
    ):
        self.identity = identity
        self._attributes = attributes
        self._settings = settings or get_config()

        limit = self._settings.value_limit(identity.is_local)
        self.name = _clean_text(attributes, "name")[:limit]
        # Eligibility is judged on the whole stored value, never the truncated copy
        self._full_value = _clean_text(attributes, "value")
        self.value = self._full_value[:limit]
        self.verified_at = parse_timestamp(attributes.get("verified_at"))

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, value={self.value!r}, verified_at={self.verified_at!r})"

    @property
    def is_verified(self) -> bool:
        return self.verified_at is not None

    @property
    def is_verifiable(self) -> bool:
        """Whether the value is eligible for an ownership check."""
        return verifiable(self._full_value, self.identity.is_local, self._settings)

    def eligibility(self) -> Eligibility:
        """Full eligibility result for the value, including the reason when ineligible."""
        return classify(self._full_value, self.identity.is_local, self._settings)

    def mark_verified(self) -> datetime:
        """Record that ownership of the linked URL has been confirmed.

        Does not re-check eligibility; callers confirm ownership first. The
        new timestamp is always later than the previous one, and it is
        written back to the backing mapping as an ISO-8601 string.
        """
        now = datetime.now(UTC)
        if self.verified_at is not None and now <= self.verified_at:
            now = self.verified_at + timedelta(microseconds=1)

        self.verified_at = now
        self._attributes["verified_at"] = now.isoformat()
        logger.info(f"Marked field {self.name!r} verified at {now.isoformat()}")
        return now

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "value": self.value,
            "verified_at": self.verified_at.isoformat() if self.verified_at else None,
        }
