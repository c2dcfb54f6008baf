"""Tests for content normalization."""

import pytest

from feed_sync.ingestion.normalizer import (
    CONTENT_PLACEHOLDER,
    GAZETTEER,
    SUMMARY_PLACEHOLDER,
    infer_locality,
    sanitize,
    strip_tags,
    summarize,
)


class TestSanitize:
    """Tests for sanitize()."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input_returns_placeholder(self, value):
        assert sanitize(value) == CONTENT_PLACEHOLDER

    def test_removes_script_keeps_surrounding_text(self):
        html = "<p>Avant</p><script>alert('x');</script><p>Après</p>"
        assert sanitize(html) == "<p>Avant</p><p>Après</p>"

    def test_removes_script_with_attributes_and_markup_inside(self):
        html = '<p>A</p><script type="text/javascript">if (a < b) { document.write("<b>x</b>"); }</script><p>B</p>'
        assert sanitize(html) == "<p>A</p><p>B</p>"

    def test_script_removal_is_case_insensitive(self):
        assert sanitize("x<SCRIPT>evil()</SCRIPT>y") == "xy"

    def test_removes_multiple_scripts_non_greedy(self):
        html = "a<script>1</script>b<script>2</script>c"
        assert sanitize(html) == "abc"

    def test_removes_style_blocks(self):
        html = "<style>.x { color: red; }</style><p>Texte</p>"
        assert sanitize(html) == "<p>Texte</p>"

    def test_removes_multiline_comments(self):
        html = "<p>Un</p><!-- wp:paragraph\n  {\"a\": 1}\n--><p>Deux</p>"
        assert sanitize(html) == "<p>Un</p><p>Deux</p>"

    def test_keeps_other_markup_and_trims(self):
        html = '   <p>Le <a href="https://x.fr">lien</a> &amp; plus</p>\n'
        assert sanitize(html) == '<p>Le <a href="https://x.fr">lien</a> &amp; plus</p>'

    def test_reference_body(self):
        assert sanitize("<p>Hi</p><script>evil()</script>") == "<p>Hi</p>"


class TestStripTags:
    def test_strips_all_tags(self):
        assert strip_tags('<p>Un <b>deux</b><br/>trois</p>') == "Un deuxtrois"


class TestSummarize:
    """Tests for summarize()."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input_returns_placeholder(self, value):
        assert summarize(value) == SUMMARY_PLACEHOLDER

    def test_short_text_returned_unchanged(self):
        assert summarize("<p>  Une belle adresse.  </p>") == "Une belle adresse."

    @pytest.mark.parametrize("length", [1, 150, 199, 200])
    def test_text_up_to_limit_has_no_ellipsis(self, length):
        text = "a" * length
        assert summarize(f"<div>{text}</div>") == text

    def test_long_text_cut_at_last_space_after_150(self):
        # Words of 9 letters + space: spaces at 9, 19, ..., 189, 199
        text = " ".join(["abcdefghi"] * 30)
        result = summarize(text)

        assert result.endswith("...")
        assert len(result) <= 203
        # Last space in the first 200 chars is at index 199
        assert result == text[:199] + "..."

    def test_long_text_without_late_space_is_hard_cut(self):
        text = "x" * 100 + " " + "y" * 200
        result = summarize(text)

        assert result == text[:200] + "..."
        assert len(result) == 203

    def test_space_exactly_at_150_is_not_used(self):
        text = "x" * 150 + " " + "y" * 100
        assert summarize(text) == text[:200] + "..."

    def test_space_at_151_is_used(self):
        text = "x" * 151 + " " + "y" * 100
        assert summarize(text) == "x" * 151 + "..."

    def test_tags_stripped_before_measuring(self):
        text = "z" * 190
        html = "<p>" + "<b></b>" * 20 + text + "</p>"
        assert summarize(html) == text

    @pytest.mark.parametrize("length", [201, 250, 1000])
    def test_long_output_bounded_and_ends_with_ellipsis(self, length):
        text = ("mot " * length)[:length]
        result = summarize(text)

        assert len(result) <= 203
        assert result.endswith("...")


class TestInferLocality:
    """Tests for infer_locality()."""

    def test_finds_city(self):
        assert infer_locality("<p>Un nouvel hôtel à Bordeaux</p>") == "Bordeaux"

    def test_returns_none_without_match(self):
        assert infer_locality("<p>Un village du Vercors</p>") is None

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value):
        assert infer_locality(value) is None

    def test_first_gazetteer_entry_wins_over_text_order(self):
        # Lyon appears first in the text but Paris is declared first
        assert infer_locality("De Lyon à Paris en TGV") == "Paris"

    def test_case_sensitive(self):
        assert infer_locality("paris et lyon") is None

    def test_substring_match_without_word_boundary(self):
        # Known imprecision: "Nice" inside another word still matches
        assert infer_locality("The Nicest view") == "Nice"

    def test_ignores_text_inside_tags(self):
        assert infer_locality('<img alt="x" src="/Paris.jpg"><p>Toulouse</p>') == "Toulouse"

    def test_accented_and_compound_names(self):
        assert infer_locality("Week-end à Saint-Étienne") == "Saint-Étienne"
        assert infer_locality("Escapade vers Aix-en-Provence") == "Aix-en-Provence"

    def test_custom_gazetteer(self):
        assert infer_locality("Séjour à Annecy", gazetteer=("Chamonix", "Annecy")) == "Annecy"

    def test_gazetteer_order(self):
        assert GAZETTEER[0] == "Paris"
        assert GAZETTEER[-1] == "Aix-en-Provence"
        assert len(GAZETTEER) == 20
