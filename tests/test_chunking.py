"""
Tests for chunking module.

Tests sentence splitting, greedy packing and the chunk length bound.
"""

import pytest
from config import settings
from core.chunking import SentenceChunker, get_chunker, split_into_chunks, split_sentences
from core.exceptions import InvalidChunkLength


@pytest.fixture
def repeated_text():
    """Create a long text of identical sentences."""
    return ("This is a test document. " * 100).strip()  # 24 chars per sentence


class TestSplitSentences:
    """Test sentence boundary detection."""

    def test_keeps_terminal_punctuation(self):
        """Test terminators stay attached to their sentence."""
        assert split_sentences("Really? Yes! Done.") == ["Really?", "Yes!", "Done."]

    def test_requires_whitespace_after_terminator(self):
        """Test a period inside a token is not a boundary."""
        assert split_sentences("Version 1.2 is out. Upgrade now.") == [
            "Version 1.2 is out.",
            "Upgrade now.",
        ]

    def test_newline_is_a_boundary(self):
        """Test newlines after a terminator split sentences."""
        assert split_sentences("First line.\n   Second line.") == ["First line.", "Second line."]

    def test_blank_input(self):
        """Test empty and whitespace-only input yields no sentences."""
        assert split_sentences("") == []
        assert split_sentences(" \n\t ") == []


class TestSplitIntoChunks:
    """Test greedy sentence packing."""

    def test_three_short_sentences(self):
        """Test sentences that cannot be combined become separate chunks."""
        chunks = split_into_chunks("A cat sat. A dog ran. A bird flew.", 20)

        assert chunks == ["A cat sat.", "A dog ran.", "A bird flew."]

    def test_sentences_are_combined_when_they_fit(self):
        """Test multiple sentences share a chunk under the bound."""
        chunks = split_into_chunks("One. Two. Three.", 100)

        assert chunks == ["One. Two. Three."]

    def test_join_uses_single_space(self):
        """Test the joining space counts towards the bound."""
        # "A cat sat. A dog ran." is 21 characters
        assert split_into_chunks("A cat sat. A dog ran.", 21) == ["A cat sat. A dog ran."]
        assert split_into_chunks("A cat sat. A dog ran.", 20) == ["A cat sat.", "A dog ran."]

    def test_long_sentence_emitted_whole(self):
        """Test a sentence longer than the bound is not truncated."""
        long_sentence = "x" * 50 + "."
        chunks = split_into_chunks(f"Short. {long_sentence} End.", 20)

        assert chunks == ["Short.", long_sentence, "End."]

    def test_long_first_sentence(self):
        """Test an oversized opening sentence is closed before the next one."""
        long_sentence = "y" * 30 + "!"
        chunks = split_into_chunks(f"{long_sentence} Ok.", 10)

        assert chunks == [long_sentence, "Ok."]

    def test_length_bound(self, repeated_text):
        """Test every multi-sentence chunk respects the bound."""
        chunks = split_into_chunks(repeated_text, 60)

        assert len(chunks) == 50
        assert all(len(chunk) <= 60 for chunk in chunks)

    def test_no_content_dropped(self, repeated_text):
        """Test joining the chunks reproduces the input."""
        chunks = split_into_chunks(repeated_text, 60)

        assert " ".join(chunks) == repeated_text

    @pytest.mark.parametrize("max_length", [12, 30, 64])
    @pytest.mark.parametrize("text", [
        "Hi! How are you today? I am fine. This sentence is much longer than any "
        "of the sentences around it. Ok? Yes! Short one. Why not?",
        " ".join(
            ("word " * n).strip() + terminator
            for n, terminator in zip([1, 7, 3, 12, 2, 5, 9, 1], ".!?.?!.?")
        ),
    ])
    def test_mixed_sentence_lengths(self, text, max_length):
        """Test bound, greedy packing and completeness on varied sentences."""
        chunks = split_into_chunks(text, max_length)

        assert " ".join(chunks) == text
        for chunk in chunks:
            assert len(chunk) <= max_length or len(split_sentences(chunk)) == 1
        for current, following in zip(chunks, chunks[1:]):
            assert len(current) + 1 + len(split_sentences(following)[0]) > max_length

    def test_no_terminal_punctuation(self):
        """Test text without terminators becomes a single chunk."""
        text = "no punctuation here at all and it keeps going"

        assert split_into_chunks(text, 10) == [text]

    def test_deterministic(self, repeated_text):
        """Test identical input yields identical output."""
        assert split_into_chunks(repeated_text, 77) == split_into_chunks(repeated_text, 77)


class TestSentenceChunker:
    """Test the chunker class."""

    def test_initialization(self):
        """Test chunker initialization with a custom bound."""
        chunker = SentenceChunker(max_length=120)

        assert chunker.max_length == 120

    def test_default_from_settings(self):
        """Test the bound defaults to settings."""
        assert SentenceChunker().max_length == settings.MAX_CHUNK_LENGTH

    def test_split(self):
        """Test split delegates with the configured bound."""
        chunker = SentenceChunker(max_length=20)

        assert chunker.split("A cat sat. A dog ran.") == ["A cat sat.", "A dog ran."]

    def test_get_stats(self):
        """Test statistics generation."""
        chunker = SentenceChunker(max_length=10)

        stats = chunker.get_stats("Tiny. This sentence is far too long.")

        assert stats["total_chunks"] == 2
        assert stats["total_characters"] == len("Tiny.") + len("This sentence is far too long.")
        assert stats["oversized_chunks"] == 1
        assert stats["max_chunk_length"] == 10

    def test_factory(self):
        """Test factory returns a configured chunker."""
        chunker = get_chunker(max_length=42)

        assert isinstance(chunker, SentenceChunker)
        assert chunker.max_length == 42


class TestEdgeCases:
    """Test edge cases and error handling."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t  \n"])
    def test_blank_document(self, text):
        """Test blank input yields no chunks."""
        assert split_into_chunks(text, 10) == []

    @pytest.mark.parametrize("max_length", [0, -1, -500])
    def test_non_positive_max_length(self, max_length):
        """Test non-positive bounds fail fast."""
        with pytest.raises(InvalidChunkLength):
            split_into_chunks("Some text.", max_length)

    def test_invalid_max_length_is_value_error(self):
        """Test InvalidChunkLength can be caught as ValueError."""
        with pytest.raises(ValueError):
            SentenceChunker(max_length=0)

    @pytest.mark.parametrize("max_length", [1.5, "10", True])
    def test_non_integer_max_length(self, max_length):
        """Test non-integer bounds are rejected."""
        with pytest.raises(InvalidChunkLength):
            SentenceChunker(max_length=max_length)

    def test_invalid_length_checked_before_blank_input(self):
        """Test validation happens even when there is nothing to chunk."""
        with pytest.raises(InvalidChunkLength):
            split_into_chunks("", 0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
