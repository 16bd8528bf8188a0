"""URL analysis for profile field verification.

Splits a candidate string into scheme, userinfo, host and the remainder,
following the RFC 3986 authority grammar rather than naive ``@`` splitting.

Any URL whose authority contains a userinfo component is treated as an
authority-spoofing attempt: ``https://victim.com   @attacker.one`` shows
``victim.com`` to a reader while the real host is ``attacker.one``.
"""

from __future__ import annotations

import ipaddress
import re
import unicodedata
from dataclasses import dataclass
from urllib.parse import urlsplit

# RFC 3986: scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")

# Browsers silently drop these before parsing
_TAB_NEWLINE = str.maketrans("", "", "\t\n\r")

# ...and strip these from the front
_C0_OR_SPACE = "".join(chr(c) for c in range(0x21))

# Authority ends at the first path, query or fragment delimiter
_AUTHORITY_END_RE = re.compile(r"[/?#]")

# Never valid anywhere in a URL
_FORBIDDEN_RE = re.compile(r"[\s\x00-\x1f\x7f\\]")

_LABEL_RE = re.compile(r"^[a-z0-9_](?:[a-z0-9_\-]{0,61}[a-z0-9_])?$")

_MAX_HOST_LENGTH = 253


@dataclass(frozen=True)
class UrlComponents:
    """The parts of an absolute URL.

    Attributes:
        scheme: Lower-cased scheme, e.g. ``"https"``.
        userinfo: The ``user[:password]`` segment, or None. Only ever set
            when parsing with ``allow_userinfo=True``.
        host: Lower-cased host; IDNA-encoded for internationalised names,
            without brackets for IPv6 literals.
        port: Explicit port, or None.
        rest: Everything after the authority (path, query and fragment),
            exactly as written.
    """

    scheme: str
    userinfo: str | None
    host: str
    port: int | None
    rest: str


def authority_of(text: str) -> str | None:
    """Return the raw authority section of ``text``, or None if it has none.

    Tab and newline characters are removed first, and both ``/`` and ``\\``
    are accepted after the scheme, so the result is never narrower than what
    a browser would treat as the authority.
    """
    text = text.translate(_TAB_NEWLINE).lstrip(_C0_OR_SPACE)
    match = _SCHEME_RE.match(text)
    if match is None:
        return None
    rest = text[match.end() :]
    stripped = rest.lstrip("/\\")
    if len(stripped) == len(rest):
        return None
    end = _AUTHORITY_END_RE.search(stripped)
    return stripped[: end.start()] if end else stripped


def has_userinfo(text: str) -> bool:
    """Whether ``text`` carries a userinfo component in its authority.

    The authority is NFKC-normalised before looking for the delimiter, so
    lookalikes such as FULLWIDTH COMMERCIAL AT are caught too. Whitespace
    between the apparent host and the ``@`` makes no difference.
    """
    if not isinstance(text, str):
        return False
    authority = authority_of(text)
    if authority is None:
        return False
    return "@" in unicodedata.normalize("NFKC", authority)


def _normalize_host(hostname: str, bracketed: bool) -> str | None:
    if bracketed:
        try:
            ipaddress.IPv6Address(hostname)
        except ValueError:
            return None
        return hostname

    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError:
            return None
        hostname = hostname.lower()

    name = hostname[:-1] if hostname.endswith(".") else hostname
    if not name or len(name) > _MAX_HOST_LENGTH:
        return None
    if all(_LABEL_RE.match(label) for label in name.split(".")):
        return hostname
    return None


def parse_url(text: str, *, allow_userinfo: bool = False) -> UrlComponents | None:
    """Parse ``text`` as a single absolute URL with an authority.

    Returns None when ``text`` is not a syntactically valid absolute URL
    (including any whitespace or control character anywhere in it), when the
    host is missing or malformed, or, unless ``allow_userinfo`` is set, when
    the authority carries a userinfo component.
    """
    if not isinstance(text, str) or not text or _FORBIDDEN_RE.search(text):
        return None
    if not allow_userinfo and has_userinfo(text):
        return None

    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError:
        return None

    if not parts.scheme or not parts.netloc or not _SCHEME_RE.fullmatch(parts.scheme + ":"):
        return None

    userinfo, _, hostport = parts.netloc.rpartition("@")
    if not hostport or parts.hostname is None:
        return None

    host = _normalize_host(parts.hostname, hostport.startswith("["))
    if host is None:
        return None

    return UrlComponents(
        scheme=parts.scheme,
        userinfo=userinfo if "@" in parts.netloc else None,
        host=host,
        port=port,
        rest=text[len(parts.scheme) + 3 + len(parts.netloc) :],
    )
