"""Identity records and their profile fields.

Key concepts:
- **IdentityCapability**: the one thing a field reads from its owner,
  whether values are local plain text or remote HTML.
- **Field**: a name/value pair with verification state.
- **Profile**: an identity holding the stored field dicts.
"""

from fieldproof.identity.fields import Field, IdentityCapability, parse_timestamp
from fieldproof.identity.profile import Profile

__all__ = [
    "Field",
    "IdentityCapability",
    "Profile",
    "parse_timestamp",
]
