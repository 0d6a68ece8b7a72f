"""
Default junk-word generator: pseudo-words that look like the vocabulary but are
not part of it.
"""
import logging
from typing import List, Sequence

import numpy as np
from sklearn.utils import murmurhash3_32

logger = logging.getLogger(__name__)


class CharacterJunkWordGenerator:
    """
    Draws pseudo-words of similar length from the vocabulary's own alphabet.

    The generator is seeded from the vocabulary itself, so the same vocabulary
    always yields the same junk words.

    :param words_per_word: Number of junk words generated per distinct vocabulary word.
    :type words_per_word: int
    """

    def __init__(self, words_per_word: int = 2):
        self.words_per_word = words_per_word

    def generate(self, vocabulary: Sequence[str], language: str) -> List[str]:
        words = sorted({w for w in vocabulary if any(ch.isalnum() for ch in w)})
        if not words:
            return []
        alphabet = sorted({ch for w in words for ch in w if ch.isalpha()}) \
            or sorted({ch for w in words for ch in w if ch.isalnum()})
        seed = murmurhash3_32("\n".join([language] + words), positive=True)
        rng = np.random.default_rng(seed)

        known = set(words)
        junk = []
        for word in words:
            for _ in range(self.words_per_word):
                length = max(1, len(word) + int(rng.integers(-1, 2)))
                candidate = "".join(alphabet[i] for i in rng.integers(0, len(alphabet), size=length))
                if candidate not in known:
                    junk.append(candidate)
        junk = list(dict.fromkeys(junk))
        logger.debug(f"Generated {len(junk)} junk words from {len(words)} vocabulary words.")
        return junk
