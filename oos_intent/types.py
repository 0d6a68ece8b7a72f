"""
Data types flowing through training and prediction.

Utterances and tokens are produced by an :class:`~oos_intent.tools.UtteranceBuilder`
and are immutable once built.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import DEFAULT_TFIDF
from .schema import ListEntity, PatternEntity


@dataclass(frozen=True)
class Token:
    """A single lexical unit of an utterance."""
    text: str
    """Surface form, as it appears in the raw text."""
    tfidf: float = DEFAULT_TFIDF
    """Term weight of the token across the training intents."""
    is_word: bool = True
    """False for punctuation, symbols and whitespace."""
    is_space: bool = False

    @property
    def value(self) -> str:
        """Lowercase normalized form."""
        return self.text.lower()


@dataclass(frozen=True)
class Utterance:
    """An ordered sequence of tokens in a given language."""
    tokens: Tuple[Token, ...]
    language: str
    entities: Tuple[str, ...] = ()
    """Names of the list and pattern entities found in the utterance."""

    def to_string(self, lower: bool = False) -> str:
        text = "".join(t.text for t in self.tokens)
        return text.lower() if lower else text

    @property
    def words(self) -> List[Token]:
        return [t for t in self.tokens if t.is_word]

    def __str__(self) -> str:
        return self.to_string()


@dataclass
class Intent:
    """A named category of utterances."""
    name: str
    utterances: List[Utterance]
    contexts: List[str] = field(default_factory=list)
    slot_definitions: List[str] = field(default_factory=list)


@dataclass
class TrainInput:
    """Everything a training run needs."""
    language: str
    intents: List[Intent]
    all_utterances: List[Utterance]
    seed: int
    list_entities: List[ListEntity] = field(default_factory=list)
    pattern_entities: List[PatternEntity] = field(default_factory=list)

    @property
    def entity_names(self) -> List[str]:
        return [e.name for e in self.list_entities] + [e.name for e in self.pattern_entities]


@dataclass(frozen=True)
class IntentPrediction:
    name: str
    confidence: float
    extractor: str


@dataclass
class IntentPredictions:
    """Ranked intents, highest confidence first."""
    intents: List[IntentPrediction]

    @property
    def top(self) -> Optional[IntentPrediction]:
        return self.intents[0] if self.intents else None


@dataclass
class NoneableIntentPredictions(IntentPredictions):
    """Ranked intents plus the independent out-of-scope score."""
    oos: float = 0.0
