"""
Synthesis of the negative "none" intent.

Users never provide out-of-scope examples, so they are made up from what the
corpus offers: its stop-words, its least informative words, and junk words that
look like its vocabulary.
"""
import logging
from typing import List, Sequence

from ._utils import clamp, round_half_up
from .constants import (NONE_INTENT, NONE_UTTERANCES_MAX, NONE_UTTERANCES_MIN, SMALL_TFIDF,
                        SPACE_RATIO_THRESHOLD)
from .seeded_random import SeededRandom
from .types import Intent, Token, Utterance

logger = logging.getLogger(__name__)

SPACE = " "


def nb_none_utterances(nb_utterances: int) -> int:
    """Number of synthetic utterances per batch for a corpus of ``nb_utterances``."""
    return int(clamp(round_half_up(nb_utterances * 2 / 3), NONE_UTTERANCES_MIN, NONE_UTTERANCES_MAX))


def low_signal_vocabulary(tokens: Sequence[Token]) -> List[str]:
    """Distinct lowercase tokens whose term weight is at most ``SMALL_TFIDF``, sorted."""
    return sorted({t.value for t in tokens if t.tfidf <= SMALL_TFIDF})


def join_character(tokens: Sequence[Token]) -> str:
    """A space if the corpus looks space-delimited, nothing otherwise."""
    if not tokens:
        return SPACE
    nb_spaces = sum(1 for t in tokens if t.is_space)
    return SPACE if nb_spaces / len(tokens) >= SPACE_RATIO_THRESHOLD else ""


def make_none_intent(utterances: Sequence[Utterance], language: str, tools, rng: SeededRandom) -> Intent:
    """
    Builds the synthetic none intent for a training corpus.

    Three batches of ``nb_none_utterances`` texts are sampled: stop-words mixed
    with low-signal vocabulary, junk words alone, and junk words mixed with
    stop-words. Every stop-word is also added as a one-word utterance. Each
    sample holds between 1 and twice the average utterance length words.

    :param utterances: Every training utterance.
    :type utterances: Sequence[Utterance]
    :param language: Language of the corpus.
    :type language: str
    :param tools: Provides stop-words, junk words and the utterance builder.
    :type tools: Tools
    :param rng: Source of every random draw. The same seed gives the same intent.
    :type rng: SeededRandom
    :return: The none intent, without contexts nor slots.
    :rtype: Intent
    """
    tokens = [t for u in utterances for t in u.tokens]
    vocab = list(dict.fromkeys(t.value for t in tokens))

    junk_words = tools.junk_words.generate(vocab, language)
    avg_tokens = sum(len(u.tokens) for u in utterances) / len(utterances) if utterances else 0.0
    n = nb_none_utterances(len(utterances))
    stop_words = tools.lexicon.get_stop_words(language)
    vocab_words = low_signal_vocabulary(tokens)
    joiner = join_character(tokens)

    def sample_texts(pool: List[str]) -> List[str]:
        texts = []
        for _ in range(n):
            nb_words = round_half_up(rng.uniform(1, avg_tokens * 2))
            texts.append(joiner.join(rng.sample(pool, nb_words)))
        return texts

    vocab_utts = sample_texts(list(dict.fromkeys(stop_words + vocab_words)))
    junk_utts = sample_texts(junk_words)
    mixed_utts = sample_texts(junk_words + stop_words)

    texts = mixed_utts + vocab_utts + junk_utts + stop_words
    logger.info(
        f"Synthesized {len(texts)} none utterances ({n} per batch, {len(stop_words)} stop words, "
        f"{len(junk_words)} junk words, {len(vocab_words)} low-signal words, joined by {joiner!r})."
    )
    return Intent(
        name=NONE_INTENT,
        utterances=tools.utterance_builder.build(texts, language),
        contexts=[],
        slot_definitions=[],
    )
