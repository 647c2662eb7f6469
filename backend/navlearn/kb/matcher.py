"""Keyword-overlap answer matching over the knowledge store."""
import logging
from typing import Iterable

from navlearn.core.tracing import get_tracer, safe_span_attributes
from navlearn.kb.text import split_sentences, tokenize
from navlearn.models.knowledge import KnowledgeEntry, MatchResult

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

NO_MATERIAL_REPLY = (
    "No training material is available yet. "
    "Please ask an administrator to upload documents."
)
NO_MATCH_REPLY = (
    "Sorry, I could not find a relevant answer in the training material. "
    "Try rephrasing your question."
)


def overlap_score(question_tokens: list[str], sentence_tokens: Iterable[str]) -> int:
    """
    Count question tokens present in the sentence.

    A token repeated in the question counts once per repetition.
    """
    present = set(sentence_tokens)
    return sum(1 for token in question_tokens if token in present)


def answer(question: str | None, entries: Iterable[KnowledgeEntry]) -> MatchResult:
    """
    Find the sentence sharing the most tokens with the question.

    Every sentence of every entry is scanned in store order. Only a strictly
    higher score replaces the current best, so ties keep the first sentence
    seen, and a sentence needs at least one shared token to be picked.

    Args:
        question: Free-text question
        entries: Knowledge entries in store order (anything with `text` and `title`)

    Returns:
        MatchResult with the winning sentence, or a fallback reply
    """
    entries = list(entries)

    with tracer.start_as_current_span("kb.answer") as span:
        span.set_attributes(safe_span_attributes(
            question=question,
            entries_count=len(entries),
        ))

        if not entries:
            logger.info("Chat question asked with no training material loaded")
            return MatchResult(score=0, reply=NO_MATERIAL_REPLY)

        question_tokens = tokenize(question)
        best_score = 0
        best_sentence: str | None = None
        best_title: str | None = None
        sentences_scanned = 0

        for entry in entries:
            for sentence in split_sentences(entry.text):
                sentences_scanned += 1
                score = overlap_score(question_tokens, tokenize(sentence))
                if score > best_score:
                    best_score = score
                    best_sentence = sentence
                    best_title = entry.title

        span.set_attribute("sentences_scanned", sentences_scanned)
        span.set_attribute("score", best_score)

        if best_sentence is None:
            logger.info(f"No relevant answer among {sentences_scanned} sentences")
            return MatchResult(score=0, reply=NO_MATCH_REPLY)

        best_sentence = best_sentence.strip()
        logger.info(f"Answered from '{best_title}' with score {best_score}")
        return MatchResult(
            score=best_score,
            sentence=best_sentence,
            source_title=best_title,
            reply=best_sentence,
        )
