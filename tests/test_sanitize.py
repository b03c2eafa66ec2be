"""Tests for escaping helpers."""

from drop_lookup.sanitize import escape, sanitize_version_name


class TestEscape:
    """Tests for escape."""

    def test_escapes_markup_characters(self):
        """Should replace all five HTML-significant characters."""
        assert escape("<a href=\"x\">Tom's & Co</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom&#x27;s &amp; Co&lt;/a&gt;"
        )

    def test_plain_text_unchanged(self):
        """Should leave other text alone."""
        assert escape("Fire Sword 火焰剑") == "Fire Sword 火焰剑"

    def test_ampersand_not_double_escaped_in_one_pass(self):
        """Each character should be escaped exactly once."""
        assert escape("&lt;") == "&amp;lt;"

    def test_non_string_input(self):
        """Non-string input should yield an empty string."""
        assert escape(None) == ""
        assert escape(42) == ""
        assert escape(["<"]) == ""


class TestSanitizeVersionName:
    """Tests for sanitize_version_name."""

    def test_keeps_word_characters(self):
        """Should keep ASCII letters, digits and underscores."""
        assert sanitize_version_name("season_3") == "season_3"

    def test_strips_path_characters(self):
        """Should strip separators and dots."""
        assert sanitize_version_name("../etc/passwd") == "etcpasswd"

    def test_keeps_cjk(self):
        """Should keep CJK ideographs."""
        assert sanitize_version_name("传奇 v1.0") == "传奇v10"

    def test_non_string_input(self):
        """Non-string input should yield an empty string."""
        assert sanitize_version_name(None) == ""
