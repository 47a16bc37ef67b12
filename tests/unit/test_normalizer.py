"""Tests for text normalization."""

from companion.safety.normalizer import normalize_text


class TestNormalizeText:
    """Test normalization applied before marker matching."""

    def test_lowercases(self):
        """Test text is lower-cased."""
        assert normalize_text("I WANT TO DIE") == "i want to die"

    def test_strips_zero_width_characters(self):
        """Test zero-width characters cannot split a marker."""
        assert normalize_text("kill\u200b my\u200dself") == "kill myself"
        assert normalize_text("sui\u200bcide") == "suicide"

    def test_folds_typographic_quotes(self):
        """Test curly apostrophes become ASCII so markers match."""
        assert normalize_text("I don\u2019t want to be here") == "i don't want to be here"
        assert normalize_text("\u201cI want to die\u201d") == '"i want to die"'

    def test_collapses_whitespace(self):
        """Test runs of whitespace collapse to one space."""
        assert normalize_text("  my   dog\n\tdied  ") == "my dog died"

    def test_empty_and_non_string(self):
        """Test empty and non-string input normalizes to empty string."""
        assert normalize_text("") == ""
        assert normalize_text(None) == ""
        assert normalize_text(42) == ""

    def test_idempotent(self):
        """Test normalizing twice changes nothing."""
        once = normalize_text("My Dog\u2019s  GONE")
        assert normalize_text(once) == once
