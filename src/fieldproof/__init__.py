# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""fieldproof - ownership verification for profile fields.

Profile fields are name/value pairs attached to an identity. A field whose
value is a single, honest link to a URL can be proven by an out-of-band
check (the linked page links back), after which the field is marked
verified.

This package decides *eligibility* for that check and records its outcome:
  Field value
    → local (plain text) or remote (sanitized HTML)
    → sole URL / sole anchor extraction
    → authority analysis (no userinfo spoofing)
    → eligible / ineligible with a reason

It never fetches anything itself.

CLI entry point: ``fieldproof``
"""

__version__ = "0.1.0"

from .identity import Field, IdentityCapability, Profile
from .verification import classify, verifiable

__all__ = [
    "Field",
    "IdentityCapability",
    "Profile",
    "classify",
    "verifiable",
]
