"""
Default utterance building: tokenization, entity tagging and term weights.
"""
import logging
import math
import re
from dataclasses import replace
from typing import List, Sequence

from sklearn.feature_extraction.text import TfidfVectorizer

from .errors import TrainingDataError
from .schema import ListEntity, PatternEntity
from .types import Intent, Token, Utterance

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]")


def tokenize(text: str) -> List[Token]:
    """
    Splits text into word runs, whitespace runs and single punctuation or symbol characters.

    Joining the surface text of the tokens gives back the original text.
    """
    tokens = []
    for match in _TOKEN_RE.finditer(text):
        piece = match.group()
        if piece.isspace():
            tokens.append(Token(piece, is_word=False, is_space=True))
        else:
            tokens.append(Token(piece, is_word=any(ch.isalnum() for ch in piece)))
    return tokens


class RegexUtteranceBuilder:
    """Default :class:`~oos_intent.tools.UtteranceBuilder`."""

    def build(self, texts: Sequence[str], language: str,
              list_entities: Sequence[ListEntity] = (),
              pattern_entities: Sequence[PatternEntity] = ()) -> List[Utterance]:
        matchers = _compile_entities(list_entities, pattern_entities)
        utterances = []
        for text in texts:
            entities = tuple(name for name, regex in matchers if regex.search(text))
            utterances.append(Utterance(tuple(tokenize(text)), language, entities))
        return utterances


def _compile_entities(list_entities: Sequence[ListEntity],
                      pattern_entities: Sequence[PatternEntity]) -> List[tuple]:
    matchers = []
    for entity in list_entities:
        values = sorted({v for v in entity.all_values() if v.strip()}, key=len, reverse=True)
        if values:
            alternatives = "|".join(re.escape(v) for v in values)
            matchers.append((entity.name, re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)))
    for entity in pattern_entities:
        flags = 0 if entity.case_sensitive else re.IGNORECASE
        try:
            matchers.append((entity.name, re.compile(entity.pattern, flags)))
        except re.error as e:
            raise TrainingDataError(f"Invalid pattern for entity '{entity.name}': {e}") from e
    return matchers


def _identity(words: List[str]) -> List[str]:
    return words


def compute_term_weights(intents: Sequence[Intent]) -> List[Intent]:
    """
    Weights every word token by how specific it is to a few intents.

    Each intent is one document. A word's weight is ``(idf - 1) / ln(n_intents)``
    with an unsmoothed idf: 0 for a word used by every intent, 1 for a word used by
    a single intent. With a single intent every word weighs 0.

    :param intents: The intents, whose utterances are not modified.
    :return: Copies of the intents with re-weighted tokens.
    """
    documents = [[t.value for u in intent.utterances for t in u.words] for intent in intents]
    if not any(documents):
        return list(intents)

    vectorizer = TfidfVectorizer(analyzer=_identity, lowercase=False, smooth_idf=False)
    vectorizer.fit(documents)
    idf = dict(zip(vectorizer.get_feature_names_out(), vectorizer.idf_))
    n = len(intents)

    def weight(value: str) -> float:
        return float((idf[value] - 1.0) / math.log(n)) if n > 1 else 0.0

    def reweight(utterance: Utterance) -> Utterance:
        tokens = tuple(replace(t, tfidf=weight(t.value)) if t.is_word else t for t in utterance.tokens)
        return replace(utterance, tokens=tokens)

    logger.debug(f"Computed term weights for {len(idf)} words over {n} intents.")
    return [replace(intent, utterances=[reweight(u) for u in intent.utterances]) for intent in intents]
