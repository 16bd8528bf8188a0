"""Profile records: an identity together with its stored fields.

``raw_fields`` is the storage representation (a list of plain dicts, as it
would sit inside a serialized account row). :attr:`Profile.fields` wraps
those dicts in :class:`~fieldproof.identity.fields.Field` objects by
reference, so marking a field verified updates ``raw_fields`` directly.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.config import CoreSettings, get_config
from ..core.exceptions import ValidationException
from .fields import Field


@dataclass
class Profile:
    """An identity and its profile fields.

    Attributes:
        handle: Account handle, e.g. ``"alice"`` or ``"bob@remote.example"``.
        is_local: Whether field values are plain text entered on this server
            (True) or HTML rendered by a remote server (False).
        raw_fields: Stored field dicts with ``name``, ``value`` and optional
            ``verified_at`` keys.
    """

    handle: str
    is_local: bool = True
    raw_fields: list[dict[str, Any]] = field(default_factory=list)

    @property
    def fields(self) -> list[Field]:
        return [Field(self, attributes) for attributes in self.raw_fields]

    def verifiable_fields(self) -> list[Field]:
        """Fields whose values are eligible for an ownership check."""
        return [f for f in self.fields if f.is_verifiable]

    def set_fields(self, pairs: Iterable[Mapping[str, Any]], settings: CoreSettings | None = None) -> None:
        """Replace the stored fields with new name/value pairs.

        Pairs with a blank name are dropped. A new pair whose value matches a
        currently verified field keeps that field's ``verified_at``; every
        other pair starts out unverified.

        Raises:
            ValidationException: If a name or value is not a string, or more
                than ``max_fields`` pairs remain.
        """
        settings = settings or get_config()

        verified_by_value = {
            attributes.get("value"): attributes["verified_at"]
            for attributes in self.raw_fields
            if attributes.get("verified_at")
        }

        entries: list[dict[str, Any]] = []
        for pair in pairs:
            name = pair.get("name") or ""
            value = pair.get("value") or ""
            if not isinstance(name, str) or not isinstance(value, str):
                raise ValidationException("Field name and value must be strings", field="fields", value=pair)
            if not name.strip():
                continue

            entry: dict[str, Any] = {"name": name, "value": value}
            if value in verified_by_value:
                entry["verified_at"] = verified_by_value[value]
            entries.append(entry)

        if len(entries) > settings.max_fields:
            raise ValidationException(
                f"Too many profile fields: {len(entries)} (maximum {settings.max_fields})",
                field="fields",
                value=len(entries),
            )

        self.raw_fields = entries

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "handle": self.handle,
            "is_local": self.is_local,
            "fields": [dict(attributes) for attributes in self.raw_fields],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Profile:
        """Create from dictionary.

        Raises:
            ValidationException: If the handle is missing, is_local is not a
                boolean, or the fields are not a list of objects.
        """
        handle = data.get("handle")
        if not isinstance(handle, str) or not handle:
            raise ValidationException("Profile handle is required", field="handle", value=handle)

        is_local = data.get("is_local", True)
        if not isinstance(is_local, bool):
            raise ValidationException("Profile is_local must be a boolean", field="is_local", value=is_local)

        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, list) or not all(isinstance(item, dict) for item in raw_fields):
            raise ValidationException("Profile fields must be a list of objects", field="fields")

        return cls(
            handle=handle,
            is_local=is_local,
            raw_fields=[dict(item) for item in raw_fields],
        )
