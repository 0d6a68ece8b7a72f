"""
Constants shared by the none-intent synthesizer and the classifiers.
"""

NONE_INTENT = "none"
"""Reserved name of the synthetic negative intent. Callers must never supply it."""

MIN_NB_UTTERANCES = 3
"""Intents with fewer utterances are left out of the in-scope classifier."""

NONE_UTTERANCES_MIN = 20
NONE_UTTERANCES_MAX = 200
"""Bounds on the number of synthetic none-utterances generated per batch."""

NONE_UTTERANCE_RATIO = 2.5
"""Size of the none class relative to the average trainable intent size."""

MIN_NONE_WORDS = 3
"""Synthetic utterances with fewer words are not used by the in-scope classifier."""

SMALL_TFIDF = 0.1
DEFAULT_TFIDF = 1.0

SPACE_RATIO_THRESHOLD = 0.3
"""Share of whitespace tokens above which a language is considered space-delimited."""

OOS_LABEL_PREFIX = "out"
IN_SCOPE_LABEL = "in"


SPECIAL_CHARACTERS = frozenset("¿÷≥≤µ˜∫√≈æÆ…¬˚˙©")
"""Characters ignored by exact matching on top of punctuation and symbols. Some are letters, or
become letters once decomposed (the micro sign turns into a Greek mu)."""
