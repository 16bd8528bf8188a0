"""Global test fixtures for the fieldproof test suite."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest

from fieldproof.core.config import clear_config_cache

# ============================================================================
# Environment
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all FIELDPROOF_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("FIELDPROOF_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_config(clean_env):
    """Every test starts from default settings and a fresh config singleton."""
    clear_config_cache()
    yield
    clear_config_cache()


# ============================================================================
# Identity doubles
# ============================================================================


@pytest.fixture
def local_identity():
    """Identity whose field values are plain text."""
    return MagicMock(is_local=True)


@pytest.fixture
def remote_identity():
    """Identity whose field values are sanitized HTML from a remote server."""
    return MagicMock(is_local=False)


# ============================================================================
# Shared values
# ============================================================================

# Long whitespace run between the apparent host and the real one
SPOOF_GAP = " " * 92

PATREON_LINK = (
    '<a href="https://www.patreon.com/mastodon" target="_blank" rel="nofollow noopener noreferrer me">'
    '<span class="invisible">https://www.</span><span class="">patreon.com/mastodon</span>'
    '<span class="invisible"></span></a>'
)


@pytest.fixture
def patreon_link() -> str:
    return PATREON_LINK


@pytest.fixture
def spoofed_url() -> str:
    return f"https://spacex.com{SPOOF_GAP}@h.43z.one"


@pytest.fixture
def spoofed_link() -> str:
    return (
        f'<a href="https://google.com{SPOOF_GAP}@h.43z.one" target="_blank" rel="nofollow noopener noreferrer me">'
        f'<span class="invisible">https://</span><span class="">google.com</span>'
        f'<span class="invisible">{SPOOF_GAP}@h.43z.one</span></a>'
    )
