"""Unit tests for KB text normalization, tokenizing and sentence splitting."""
import pytest
from navlearn.kb.text import normalize_text, tokenize, split_sentences


class TestNormalizeText:
    """Test text normalization."""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize_text("The Skull, protects (the) BRAIN!") == "the skull protects the brain"

    def test_collapses_whitespace_and_trims(self):
        assert normalize_text("  bone\t\tis \n hard  ") == "bone is hard"

    def test_none_is_empty(self):
        assert normalize_text(None) == ""

    def test_only_symbols(self):
        assert normalize_text("?!...---") == ""

    def test_keeps_digits(self):
        assert normalize_text("C1-C7 vertebrae") == "c1 c7 vertebrae"

    @pytest.mark.parametrize("text", [
        "Hello, World!",
        "  Mixed CASE\twith\n\nnewlines  ",
        "Émile's café #42",
        "",
    ])
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once


class TestTokenize:
    """Test tokenizing."""

    def test_drops_short_words(self):
        assert tokenize("a an catalog") == ["catalog"]

    def test_three_letter_words_are_kept(self):
        assert tokenize("a an the catalog") == ["the", "catalog"]

    def test_preserves_order_and_duplicates(self):
        assert tokenize("Brain, spine and brain.") == ["brain", "spine", "and", "brain"]

    def test_empty(self):
        assert tokenize("") == []
        assert tokenize(None) == []

    def test_no_token_shorter_than_three(self):
        tokens = tokenize("I am at my PC on it, ok? The MRI of an ear")
        assert all(len(t) > 2 for t in tokens)
        assert tokens == ["the", "mri", "ear"]


class TestSplitSentences:
    """Test sentence splitting."""

    def test_basic_split(self):
        assert split_sentences("Bone is hard. Cartilage is soft!") == [
            "Bone is hard.",
            "Cartilage is soft!",
        ]

    def test_question_mark_and_newlines(self):
        text = "What is bone?\n\nBone is   tissue.\nIt heals."
        assert split_sentences(text) == ["What is bone?", "Bone is tissue.", "It heals."]

    def test_no_terminal_punctuation(self):
        assert split_sentences("bone   is\nhard") == ["bone is hard"]

    def test_punctuation_without_whitespace_does_not_split(self):
        assert split_sentences("Use v1.2 of the tool. Done.") == ["Use v1.2 of the tool.", "Done."]

    def test_drops_empty_fragments(self):
        assert split_sentences("   ") == []
        assert split_sentences("") == []
        assert split_sentences(None) == []

    def test_trailing_whitespace(self):
        assert split_sentences("One. Two.   ") == ["One.", "Two."]
