"""Tests for URL resolution against a page base."""
import pytest

from page_assets.errors import InvalidBaseURLError
from page_assets.urls import parse_absolute_url, require_base_url, resolve_url

BASE = "https://x.test/articles/post.html"


class TestResolveUrl:
    def test_root_relative(self):
        assert resolve_url(BASE, "/a.png") == "https://x.test/a.png"

    def test_document_relative(self):
        assert resolve_url(BASE, "img/b.jpg") == "https://x.test/articles/img/b.jpg"

    def test_parent_relative(self):
        assert resolve_url(BASE, "../c.gif") == "https://x.test/c.gif"

    def test_protocol_relative(self):
        assert resolve_url(BASE, "//cdn.test/d.png") == "https://cdn.test/d.png"

    def test_absolute_value_wins(self):
        assert resolve_url(BASE, "http://other.test/e.png") == "http://other.test/e.png"

    def test_empty_value_resolves_to_base(self):
        assert resolve_url(BASE, "") == BASE

    def test_surrounding_whitespace_is_trimmed(self):
        assert resolve_url(BASE, "  /a.png\n") == "https://x.test/a.png"

    def test_spaces_are_percent_encoded(self):
        assert resolve_url(BASE, "/my image.png") == "https://x.test/my%20image.png"

    def test_existing_escapes_are_kept(self):
        assert resolve_url(BASE, "/my%20image.png") == "https://x.test/my%20image.png"

    @pytest.mark.parametrize(
        "value",
        [
            "http://[::1",
            "http://",
            "http://x.test:notaport/a.png",
            "http://x.test:99999/a.png",
            "http://exa mple.test/a.png",
        ],
    )
    def test_malformed_values_return_none(self, value):
        assert resolve_url(BASE, value) is None

    def test_unicode_host_is_punycoded(self):
        assert resolve_url(BASE, "https://bücher.test/a.png") == "https://xn--bcher-kva.test/a.png"

    def test_unicode_host_keeps_userinfo_and_port(self):
        assert (
            resolve_url(BASE, "https://user:pw@bücher.test:8443/a.png")
            == "https://user:pw@xn--bcher-kva.test:8443/a.png"
        )

    def test_unicode_host_and_path(self):
        assert (
            resolve_url(BASE, "https://münchen.test/straße.png")
            == "https://xn--mnchen-3ya.test/stra%C3%9Fe.png"
        )

    def test_protocol_relative_unicode_host(self):
        assert resolve_url(BASE, "//bücher.test/a.png") == "https://xn--bcher-kva.test/a.png"

    def test_non_http_scheme_is_kept(self):
        assert resolve_url(BASE, "data:image/png;base64,AAAA") == "data:image/png;base64,AAAA"


class TestParseAbsoluteUrl:
    def test_absolute_url(self):
        assert parse_absolute_url("https://docs.test/a.pdf") == "https://docs.test/a.pdf"

    def test_unicode_host(self):
        assert parse_absolute_url("https://münchen.test/doc.pdf") == "https://xn--mnchen-3ya.test/doc.pdf"

    def test_relative_url_is_not_absolute(self):
        assert parse_absolute_url("files/a.pdf") is None

    def test_root_relative_is_not_absolute(self):
        assert parse_absolute_url("/files/a.pdf") is None

    def test_malformed_absolute_url(self):
        assert parse_absolute_url("http://[broken/a.pdf") is None


class TestRequireBaseUrl:
    def test_accepts_http_base(self):
        assert require_base_url("https://x.test/") == "https://x.test/"

    def test_accepts_file_base(self):
        assert require_base_url("file:///tmp/page.html") == "file:///tmp/page.html"

    @pytest.mark.parametrize("base", ["", "/relative/page.html", "page.html", "mailto:a@x.test", "https://"])
    def test_rejects_non_absolute_base(self, base):
        with pytest.raises(InvalidBaseURLError):
            require_base_url(base)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            require_base_url("not a url")
