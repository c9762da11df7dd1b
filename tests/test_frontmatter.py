"""Tests for sitecheck.services.frontmatter.parse_frontmatter."""

from sitecheck.services.frontmatter import Frontmatter, _unquote, parse_frontmatter


def _doc(*lines: str, body: str = "Body text.") -> str:
    return "\n".join(["---", *lines, "---", "", body])


class TestDelimiters:
    def test_no_frontmatter_is_empty(self):
        assert parse_frontmatter("# Just a heading\n\nslug: nope\n") == Frontmatter()

    def test_empty_document_is_empty(self):
        assert parse_frontmatter("") == Frontmatter()

    def test_delimiter_must_be_first_line(self):
        text = "\n---\nslug: late\n---\n"
        assert parse_frontmatter(text).slug is None

    def test_unterminated_block_is_empty(self):
        text = "---\nslug: open\naliases:\n  - /a/\n"
        assert parse_frontmatter(text) == Frontmatter()

    def test_keys_after_block_are_ignored(self):
        text = _doc("title: Hello", body="slug: from-body\naliases:\n  - /body/")
        fm = parse_frontmatter(text)
        assert fm.slug is None
        assert fm.aliases == ()

    def test_byte_order_mark_tolerated(self):
        text = "\ufeff" + _doc("slug: bom")
        assert parse_frontmatter(text).slug == "bom"

    def test_crlf_line_endings(self):
        text = "---\r\nslug: windows\r\naliases:\r\n  - /win/\r\n---\r\n"
        fm = parse_frontmatter(text)
        assert fm.slug == "windows"
        assert fm.aliases == ("/win/",)


class TestSlug:
    def test_slug_is_trimmed(self):
        assert parse_frontmatter(_doc("slug:    my-post   ")).slug == "my-post"

    def test_quoted_slug_is_unquoted(self):
        assert parse_frontmatter(_doc('slug: "quoted-post"')).slug == "quoted-post"
        assert parse_frontmatter(_doc("slug: 'single'")).slug == "single"

    def test_empty_slug_is_unset(self):
        assert parse_frontmatter(_doc("slug:")).slug is None

    def test_indented_slug_is_ignored(self):
        assert parse_frontmatter(_doc("params:", "  slug: nested")).slug is None


class TestAliases:
    def test_collects_list_items(self):
        fm = parse_frontmatter(_doc("aliases:", "  - /old/one/", "  - /old/two"))
        assert fm.aliases == ("/old/one/", "/old/two")

    def test_quoted_items(self):
        fm = parse_frontmatter(_doc("aliases:", '  - "/quoted/"', "  - '/single/'"))
        assert fm.aliases == ("/quoted/", "/single/")

    def test_unindented_list_items(self):
        fm = parse_frontmatter(_doc("aliases:", "- /flush/"))
        assert fm.aliases == ("/flush/",)

    def test_items_without_leading_slash_are_skipped(self):
        fm = parse_frontmatter(_doc("aliases:", "  - relative/path", "  - /kept/"))
        assert fm.aliases == ("/kept/",)

    def test_next_top_level_key_closes_list(self):
        fm = parse_frontmatter(_doc("aliases:", "  - /a/", "tags:", "  - /not-an-alias/"))
        assert fm.aliases == ("/a/",)

    def test_slug_line_closes_list(self):
        fm = parse_frontmatter(_doc("aliases:", "  - /a/", "slug: post", "  - /b/"))
        assert fm.slug == "post"
        assert fm.aliases == ("/a/",)

    def test_blank_and_indented_lines_keep_list_open(self):
        fm = parse_frontmatter(_doc("aliases:", "  - /a/", "", "  # comment", "  - /b/"))
        assert fm.aliases == ("/a/", "/b/")

    def test_slug_and_aliases_together(self):
        fm = parse_frontmatter(
            _doc("title: Post", "slug: post", "aliases:", "  - /p/", "date: 2024-01-01")
        )
        assert fm == Frontmatter(slug="post", aliases=("/p/",))


class TestUnquote:
    def test_mismatched_quotes_kept(self):
        assert _unquote("\"half'") == "\"half'"

    def test_bare_value_unchanged(self):
        assert _unquote("plain") == "plain"
