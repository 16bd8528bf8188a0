"""Tests for verification eligibility of field values."""

from __future__ import annotations

import logging

import pytest

from fieldproof.core.config import CoreSettings
from fieldproof.verification.eligibility import (
    Eligibility,
    IneligibilityReason,
    classify,
    value_for_verification,
    verifiable,
)

# ============================================================================
# Local (plain text) values
# ============================================================================


class TestLocalValues:
    """Local identities store field values as plain text."""

    def test_url(self):
        assert verifiable("https://example.com", is_local=True) is True

    def test_url_with_surrounding_whitespace(self):
        result = classify("  https://example.com/me \n", is_local=True)
        assert result.eligible
        assert result.url == "https://example.com/me"

    def test_profile_url_with_at_in_path(self):
        assert verifiable("https://mastodon.social/@Gargron", is_local=True) is True

    def test_text_that_is_not_a_url(self):
        result = classify("Hello world", is_local=True)
        assert result == Eligibility(eligible=False, reason=IneligibilityReason.NOT_A_URL)

    def test_text_that_contains_a_url(self):
        result = classify("Hello https://example.com world", is_local=True)
        assert not result.eligible
        assert result.reason == IneligibilityReason.NOT_A_URL

    def test_url_with_misleading_authentication(self, spoofed_url):
        result = classify(spoofed_url, is_local=True)
        assert not result.eligible
        assert result.reason == IneligibilityReason.USERINFO

    def test_url_with_plain_userinfo(self):
        assert classify("https://admin@example.com", is_local=True).reason == IneligibilityReason.USERINFO

    def test_html_is_not_interpreted(self, patreon_link):
        assert verifiable(patreon_link, is_local=True) is False

    @pytest.mark.parametrize("value", ["", "   ", "\n\t", None])
    def test_blank(self, value):
        assert classify(value, is_local=True).reason == IneligibilityReason.EMPTY

    @pytest.mark.parametrize("value", ["ftp://example.com/file", "gopher://example.com/"])
    def test_unsupported_scheme(self, value):
        assert classify(value, is_local=True).reason == IneligibilityReason.UNSUPPORTED_SCHEME

    @pytest.mark.parametrize("value", ["javascript:alert(1)", "example.com", "/relative/path"])
    def test_not_absolute(self, value):
        assert classify(value, is_local=True).reason == IneligibilityReason.NOT_A_URL

    def test_scheme_case_insensitive(self):
        assert verifiable("HTTPS://EXAMPLE.COM", is_local=True) is True


# ============================================================================
# Remote (HTML) values
# ============================================================================


class TestRemoteValues:
    """Remote identities store field values as sanitized HTML."""

    def test_link(self, patreon_link):
        result = classify(patreon_link, is_local=False)
        assert result.eligible
        assert result.url == "https://www.patreon.com/mastodon"

    def test_plain_anchor(self):
        assert verifiable('<a href="https://example.com">https://example.com</a>', is_local=False) is True

    def test_link_with_misleading_authentication(self, spoofed_link):
        result = classify(spoofed_link, is_local=False)
        assert not result.eligible
        assert result.reason == IneligibilityReason.USERINFO

    def test_html_that_has_more_than_just_a_link(self):
        value = (
            '<a href="https://google.com" target="_blank" rel="nofollow noopener noreferrer me">'
            '<span class="invisible">https://</span><span class="">google.com</span>'
            '<span class="invisible"></span></a>' + " " * 92 + "@h.43z.one"
        )
        result = classify(value, is_local=False)
        assert not result.eligible
        assert result.reason == IneligibilityReason.NOT_SOLE_LINK

    def test_link_with_different_visible_text(self):
        result = classify('<a href="https://google.com/bar">https://example.com/foo</a>', is_local=False)
        assert not result.eligible
        assert result.reason == IneligibilityReason.TEXT_MISMATCH

    def test_link_followed_by_comment(self):
        result = classify('<a href="https://e.com">https://e.com</a><!-- x -->', is_local=False)
        assert not result.eligible
        assert result.reason == IneligibilityReason.NOT_SOLE_LINK

    def test_text_that_is_a_url_but_is_not_linked(self):
        result = classify("https://example.com/foo", is_local=False)
        assert not result.eligible
        assert result.reason == IneligibilityReason.NOT_SOLE_LINK

    def test_relative_href(self):
        result = classify('<a href="/about">/about</a>', is_local=False)
        assert result.reason == IneligibilityReason.NOT_A_URL

    def test_unsupported_scheme_href(self):
        value = '<a href="ftp://example.com/file">ftp://example.com/file</a>'
        assert classify(value, is_local=False).reason == IneligibilityReason.UNSUPPORTED_SCHEME

    def test_surrounding_whitespace_trimmed(self):
        assert verifiable('  <a href="https://example.com">https://example.com</a>\n', is_local=False) is True

    def test_blank(self):
        assert classify("  ", is_local=False).reason == IneligibilityReason.EMPTY


# ============================================================================
# Settings and determinism
# ============================================================================


class TestClassifierBehaviour:
    """Cross-cutting classifier behaviour."""

    def test_repeated_classification_is_stable(self, patreon_link, spoofed_url):
        for value, is_local in [(patreon_link, False), (spoofed_url, True), ("Hello", True)]:
            assert classify(value, is_local) == classify(value, is_local)

    def test_accepted_schemes_from_settings(self, monkeypatch):
        monkeypatch.setenv("FIELDPROOF_ACCEPTED_SCHEMES", "https")
        settings = CoreSettings()
        assert verifiable("https://example.com", True, settings) is True
        assert classify("http://example.com", True, settings).reason == IneligibilityReason.UNSUPPORTED_SCHEME

    def test_accepted_schemes_from_global_config(self, monkeypatch):
        monkeypatch.setenv("FIELDPROOF_ACCEPTED_SCHEMES", "gemini")
        assert verifiable("gemini://example.com/", is_local=True) is True
        assert verifiable("https://example.com/", is_local=True) is False

    def test_invisible_class_from_settings(self, monkeypatch):
        monkeypatch.setenv("FIELDPROOF_INVISIBLE_CLASS", "hidden")
        settings = CoreSettings()
        value = '<a href="https://example.com"><span class="hidden">https://example.com</span></a>'
        assert classify(value, False, settings).reason == IneligibilityReason.NOT_SOLE_LINK

    def test_rejections_logged_at_debug(self, caplog, spoofed_url):
        with caplog.at_level(logging.DEBUG, logger="fieldproof.verification.eligibility"):
            classify(spoofed_url, is_local=True)
        assert any("userinfo" in record.getMessage() for record in caplog.records)

    def test_logged_value_is_previewed(self, caplog, spoofed_url):
        with caplog.at_level(logging.DEBUG, logger="fieldproof.verification.eligibility"):
            classify(spoofed_url, is_local=True)
        (record,) = caplog.records
        assert record.extra_data["value"] == "https://spacex.com[92 whitespace]@h.43z.one"
        assert record.extra_data["reason"] == "userinfo"

    def test_to_dict(self):
        assert classify("https://example.com", True).to_dict() == {
            "eligible": True,
            "reason": None,
            "url": "https://example.com",
        }
        assert classify("nope", True).to_dict() == {
            "eligible": False,
            "reason": "not_a_url",
            "url": None,
        }


class TestValueForVerification:
    """Tests for value_for_verification."""

    def test_local_value_trimmed(self):
        assert value_for_verification("  https://example.com ", True) == "https://example.com"

    def test_local_value_returned_even_if_not_a_url(self):
        assert value_for_verification("Hello world", True) == "Hello world"

    def test_remote_value_is_href(self, patreon_link):
        assert value_for_verification(patreon_link, False) == "https://www.patreon.com/mastodon"

    def test_remote_mismatch(self):
        assert value_for_verification('<a href="https://a.example">https://b.example</a>', False) is None

    def test_blank(self):
        assert value_for_verification("", True) is None
        assert value_for_verification("   ", False) is None
