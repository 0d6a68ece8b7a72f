"""Shared test fixtures: fixed lexical resources and junk words, real tokenizer and optimizer."""

import asyncio
from typing import Dict, List, Optional, Sequence

import pytest

from oos_intent import Config, Tools, parse_training_data
from oos_intent.seeded_random import SeededRandomProvider
from oos_intent.svm import SklearnSVMOptimizer
from oos_intent.utterance import RegexUtteranceBuilder

STOP_WORDS = ["the", "a", "is", "to", "of", "and", "you", "my"]
JUNK_WORDS = ["blorf", "zindle", "quaxo", "mip", "trallo", "snerk", "vimble", "oodra", "plinth", "grozz"]

CORPUS = [
    {"intent": "greet", "examples": [
        "hello there", "hi", "good morning", "hey how are you", "hello my friend"]},
    {"intent": "bye", "examples": [
        "goodbye", "see you later", "bye bye", "have a nice day", "talk to you soon"]},
    {"intent": "order", "examples": [
        "where is my order", "track my package", "has my order shipped",
        "when will my parcel arrive", "order status please"]},
]


class FakeLexicon:
    """Fixed stop-words for every language."""

    def __init__(self, stop_words: Optional[List[str]] = None, pos_available: bool = True):
        self.stop_words = list(STOP_WORDS if stop_words is None else stop_words)
        self.pos_available = pos_available

    def get_stop_words(self, language: str) -> List[str]:
        return list(self.stop_words)

    def is_pos_available(self, language: str) -> bool:
        return self.pos_available


class FakeJunkWords:
    """Returns the same junk words whatever the vocabulary."""

    def __init__(self, words: Optional[List[str]] = None):
        self.words = list(JUNK_WORDS if words is None else words)
        self.calls = []

    def generate(self, vocabulary: Sequence[str], language: str) -> List[str]:
        self.calls.append((list(vocabulary), language))
        return list(self.words)


def make_tools(pos_available: bool = True, stop_words: Optional[List[str]] = None) -> Tools:
    return Tools(
        lexicon=FakeLexicon(stop_words, pos_available),
        junk_words=FakeJunkWords(),
        utterance_builder=RegexUtteranceBuilder(),
        optimizer=SklearnSVMOptimizer(),
        random=SeededRandomProvider(),
    )


def make_train_input(tools: Tools, data, language: str = "en", seed: int = 42):
    return parse_training_data(data, language, seed, tools)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def tools() -> Tools:
    return make_tools()


@pytest.fixture
def tools_without_pos() -> Tools:
    return make_tools(pos_available=False)


@pytest.fixture
def config() -> Config:
    return Config(dataset_name="test", language="en", seed=42)


@pytest.fixture
def corpus() -> List[Dict]:
    return [dict(item, examples=list(item["examples"])) for item in CORPUS]
