"""
Capabilities consumed by the classifiers, as narrow structural interfaces.

Each one can be replaced independently, which is how the tests substitute
fixed stop-words, junk words or optimizers.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .config import Config
from .junk_words import CharacterJunkWordGenerator
from .language import DefaultLexicalResources
from .schema import ListEntity, PatternEntity
from .seeded_random import SeededRandom, SeededRandomProvider
from .svm import Point, ProgressCallback, SklearnSVMOptimizer, SVMOptions, SVMPrediction
from .types import Utterance
from .utterance import RegexUtteranceBuilder


class RandomProvider(Protocol):
    def get_seeded(self, seed: int) -> SeededRandom: ...


class LexicalResources(Protocol):
    def get_stop_words(self, language: str) -> List[str]: ...

    def is_pos_available(self, language: str) -> bool: ...


class JunkWordGenerator(Protocol):
    def generate(self, vocabulary: Sequence[str], language: str) -> List[str]: ...


class UtteranceBuilder(Protocol):
    def build(self, texts: Sequence[str], language: str,
              list_entities: Sequence[ListEntity] = (),
              pattern_entities: Sequence[PatternEntity] = ()) -> List[Utterance]: ...


class SVMPredictor(Protocol):
    def predict(self, features: Sequence[float]) -> List[SVMPrediction]: ...


class Optimizer(Protocol):
    async def train(self, points: Sequence[Point], options: SVMOptions,
                    progress: Optional[ProgressCallback] = None) -> str: ...

    def load(self, model: str) -> SVMPredictor: ...


@dataclass
class Tools:
    lexicon: LexicalResources
    junk_words: JunkWordGenerator
    utterance_builder: UtteranceBuilder
    optimizer: Optimizer
    random: RandomProvider = field(default_factory=SeededRandomProvider)


def make_default_tools(config: Optional[Config] = None) -> Tools:
    """Wires the default implementation of every capability."""
    config = config or Config()
    return Tools(
        lexicon=DefaultLexicalResources(
            pos_languages=config.pos_languages,
            stop_words_file=config.stop_words_file,
            stop_words_language=config.language,
        ),
        junk_words=CharacterJunkWordGenerator(words_per_word=config.junk_words_per_word),
        utterance_builder=RegexUtteranceBuilder(),
        optimizer=SklearnSVMOptimizer(),
        random=SeededRandomProvider(),
    )
