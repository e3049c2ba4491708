"""Tests for title, author, lede and tag normalization."""

from __future__ import annotations

import logging

from pageattrs.normalize import (
    MIN_COMMON_TITLE_LENGTH,
    clean_author,
    clean_tag,
    longest_common_substring,
    normalize_author,
    normalize_lede,
    select_common_title,
    split_title,
    truncate_lede,
)
from pageattrs.resolver import Many, Single

# ---------------------------------------------------------------------------
# Titles
# ---------------------------------------------------------------------------

class TestSplitTitle:
    def test_equal_parts_keep_first(self):
        assert split_title("My Post : My Site") == "My Post"

    def test_longest_part_wins(self):
        assert split_title("Home | A much longer article headline") == "A much longer article headline"

    def test_dash_separators(self):
        assert split_title("Foo Bar - Site") == "Foo Bar"
        assert split_title("Foo Bar \u2014 Site") == "Foo Bar"

    def test_final_quote_separator(self):
        assert split_title("Example \u00bb Reading the news today") == "Reading the news today"

    def test_hyphenated_words_are_not_split(self):
        assert split_title("Well-known facts") == "Well-known facts"


class TestCommonTitle:
    def test_longest_common_substring(self):
        assert longest_common_substring(["Foo Bar - Site", "Foo Bar"]) == "Foo Bar"

    def test_single_string(self):
        assert longest_common_substring(["Only"]) == "Only"

    def test_nothing_shared(self):
        assert longest_common_substring(["abc", "xyz"]) == ""

    def test_select_common_title(self):
        winner = select_common_title([Single("Foo Bar - Site"), Single("Foo Bar")])
        assert winner == Single("Foo Bar")

    def test_short_overlap_falls_back_to_first(self):
        # Only "a " is shared; shorter than the threshold
        winner = select_common_title([Single("a cat sat"), Single("zebra walk")])
        assert MIN_COMMON_TITLE_LENGTH == 3
        assert winner == Single("a cat sat")

    def test_no_candidates(self):
        assert select_common_title([]) is None


# ---------------------------------------------------------------------------
# Authors
# ---------------------------------------------------------------------------

class TestAuthor:
    def test_by_prefix_keeps_initials(self):
        assert clean_author("By Jane Q. Public") == "Jane Q. Public"

    def test_posted_by_prefix(self):
        assert clean_author("Posted by: John Smith") == "John Smith"

    def test_trailing_noise_is_cut(self):
        assert clean_author("John Smith -- Staff Writer") == "John Smith"

    def test_plain_name_unchanged(self):
        assert clean_author("Ada Lovelace") == "Ada Lovelace"

    def test_normalize_single(self):
        assert normalize_author(Single("by Ada Lovelace")) == Single("Ada Lovelace")

    def test_normalize_many_strips_prefix_per_value(self):
        result = normalize_author(Many.of(["By Ada", "Grace Hopper", "By Ada"]))
        assert result == Many(("Ada", "Grace Hopper"))

    def test_unknown_shape_dropped_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pageattrs.normalize"):
            assert normalize_author(["not", "a", "candidate"]) is None
        assert "Dropping author candidate" in caplog.text


# ---------------------------------------------------------------------------
# Ledes & tags
# ---------------------------------------------------------------------------

class TestLede:
    def test_truncates_to_three_sentences(self):
        text = "One is here. Two is here. Three is here. Four is here."
        assert truncate_lede(text) == "One is here. Two is here. Three is here."

    def test_short_text_unchanged(self):
        assert truncate_lede("Just one sentence without a stop") == "Just one sentence without a stop"

    def test_question_and_exclamation(self):
        assert truncate_lede("Why? Because! Then. More. Even more.") == "Why? Because! Then."

    def test_normalize_lede(self):
        assert normalize_lede(Single("A. B. C. D.")) == Single("A. B. C.")


class TestTag:
    def test_hash_prefix(self):
        assert clean_tag("#funny") == "funny"

    def test_whitespace(self):
        assert clean_tag("  web  scraping ") == "web scraping"

    def test_plain(self):
        assert clean_tag("python") == "python"
