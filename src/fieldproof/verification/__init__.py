"""Verification eligibility for profile field values.

Key pieces:
- **parse_url / has_userinfo**: RFC 3986 authority analysis and
  userinfo-spoofing detection.
- **extract_sole_link**: checks that remote markup is exactly one anchor.
- **classify / verifiable**: the eligibility decision for a field value.
"""

from .anchors import SoleLink, extract_sole_link
from .eligibility import (
    Eligibility,
    IneligibilityReason,
    classify,
    value_for_verification,
    verifiable,
)
from .fragment import CommentNode, ElementNode, TextNode, parse_fragment
from .urls import UrlComponents, authority_of, has_userinfo, parse_url

__all__ = [
    "CommentNode",
    "Eligibility",
    "ElementNode",
    "IneligibilityReason",
    "SoleLink",
    "TextNode",
    "UrlComponents",
    "authority_of",
    "classify",
    "extract_sole_link",
    "has_userinfo",
    "parse_fragment",
    "parse_url",
    "value_for_verification",
    "verifiable",
]
