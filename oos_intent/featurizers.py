"""
Feature extraction for the in-scope and out-of-scope classifiers.
"""
from typing import Collection, List, Sequence, Tuple

import numpy as np
from sklearn.utils import murmurhash3_32

from .constants import IN_SCOPE_LABEL, OOS_LABEL_PREFIX
from .svm import Point
from .types import Utterance

N_HASH_FEATURES = 512
N_CHAR_FEATURES = 32


def _hashed(feature: str, n_features: int) -> Tuple[int, float]:
    h = murmurhash3_32(feature, seed=0)
    return abs(h) % n_features, (1.0 if h >= 0 else -1.0)


def _l2_normalize(vector: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vector)
    return vector / norm if norm > 0 else vector


def get_intent_features(utterance: Utterance, entity_names: Sequence[str]) -> np.ndarray:
    """
    Featurizes an utterance for the in-scope classifier.

    A signed hashed bag of lowercase word unigrams and bigrams, L2-normalized,
    followed by one indicator per entity name.

    :param utterance: The utterance to featurize.
    :type utterance: Utterance
    :param entity_names: Names of the configured list and pattern entities.
    :type entity_names: Sequence[str]
    :return: A vector of size ``N_HASH_FEATURES + len(entity_names)``.
    :rtype: np.ndarray
    """
    words = [t.value for t in utterance.words]
    bag = np.zeros(N_HASH_FEATURES)
    grams = [f"w:{w}" for w in words] + [f"b:{a} {b}" for a, b in zip(words, words[1:])]
    for gram in grams:
        index, sign = _hashed(gram, N_HASH_FEATURES)
        bag[index] += sign
    entities = np.array([1.0 if name in utterance.entities else 0.0 for name in entity_names])
    return np.concatenate([_l2_normalize(bag), entities])


def get_utterance_features(utterance: Utterance, vocab: Collection[str]) -> np.ndarray:
    """
    Featurizes an utterance for the out-of-scope classifier.

    Measures how much the utterance looks like training data: vocabulary
    coverage, word shape statistics and a hashed histogram of character bigrams.

    :param utterance: The utterance to featurize.
    :param vocab: Lowercase training tokens. A set is used as is.
    :return: A fixed-size vector.
    :rtype: np.ndarray
    """
    if not isinstance(vocab, (set, frozenset)):
        vocab = set(vocab)
    words = utterance.words
    non_space = [t for t in utterance.tokens if not t.is_space]
    chars = "".join(t.text for t in non_space)

    n_words = len(words)
    in_vocab = sum(t.value in vocab for t in words) / n_words if n_words else 0.0
    mean_length = float(np.mean([len(t.text) for t in words])) / 10.0 if n_words else 0.0
    alpha_ratio = sum(ch.isalpha() for ch in chars) / len(chars) if chars else 0.0
    punct_ratio = (len(non_space) - n_words) / len(non_space) if non_space else 0.0

    bigrams = np.zeros(N_CHAR_FEATURES)
    for t in words:
        padded = f"^{t.value}$"
        for a, b in zip(padded, padded[1:]):
            index, _ = _hashed(a + b, N_CHAR_FEATURES)
            bigrams[index] += 1.0

    stats = np.array([
        min(n_words, 20) / 20.0,
        in_vocab,
        mean_length,
        alpha_ratio,
        punct_ratio,
        1.0 if n_words == 0 else 0.0,
    ])
    return np.concatenate([stats, _l2_normalize(bigrams)])


def featurize_in_scope_utterances(utterances: Sequence[Utterance], vocab: Collection[str]) -> List[Point]:
    vocab = frozenset(vocab)
    return [Point(IN_SCOPE_LABEL, get_utterance_features(u, vocab)) for u in utterances]


def featurize_oos_utterances(utterances: Sequence[Utterance], vocab: Collection[str]) -> List[Point]:
    vocab = frozenset(vocab)
    return [Point(OOS_LABEL_PREFIX, get_utterance_features(u, vocab)) for u in utterances]
