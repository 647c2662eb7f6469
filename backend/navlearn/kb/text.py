"""Text normalization, tokenizing and sentence splitting."""
import re

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")

MIN_TOKEN_LENGTH = 3


def normalize_text(text: str | None) -> str:
    """Lower-case, keep only [a-z0-9] and single spaces, trim."""
    text = (text or "").lower()
    text = _NON_ALNUM.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str | None) -> list[str]:
    """
    Split text into normalized words longer than two characters.

    Order and duplicates are preserved.
    """
    return [t for t in normalize_text(text).split(" ") if len(t) >= MIN_TOKEN_LENGTH]


def split_sentences(text: str | None) -> list[str]:
    """
    Split raw text after '.', '!' or '?' followed by whitespace.

    The punctuation stays on the preceding sentence. Text without any
    terminal punctuation comes back as a single sentence.
    """
    collapsed = _WHITESPACE.sub(" ", text or "")
    return [s.strip() for s in _SENTENCE_BREAK.split(collapsed) if s.strip()]
