import logging

import pytest

from oos_intent.junk_words import CharacterJunkWordGenerator
from oos_intent.language import DefaultLexicalResources
from oos_intent.seeded_random import SeededRandom, SeededRandomProvider
from oos_intent.tools import make_default_tools
from oos_intent import Config

# --- Lexical resources ---

def test_builtin_stop_words():
    lexicon = DefaultLexicalResources()
    assert "the" in lexicon.get_stop_words("en")
    assert "les" in lexicon.get_stop_words("fr")


def test_unknown_language_has_no_stop_words(caplog):
    with caplog.at_level(logging.WARNING):
        assert DefaultLexicalResources().get_stop_words("xx") == []
    assert "xx" in caplog.text


def test_stop_words_file(tmp_path):
    path = tmp_path / "stop_words.txt"
    path.write_text("le\n la \n\nle\nles\n", encoding="utf-8")
    lexicon = DefaultLexicalResources(stop_words_file=str(path), stop_words_language="fr")
    assert lexicon.get_stop_words("fr") == ["le", "la", "les"]
    assert "the" in lexicon.get_stop_words("en")


def test_stop_words_file_needs_a_language(tmp_path):
    with pytest.raises(ValueError):
        DefaultLexicalResources(stop_words_file=str(tmp_path / "stop_words.txt"))


def test_pos_availability():
    lexicon = DefaultLexicalResources(pos_languages=["en", "fr"])
    assert lexicon.is_pos_available("en")
    assert not lexicon.is_pos_available("ko")


def test_default_tools_follow_config():
    tools = make_default_tools(Config(language="ko", pos_languages=["ko"], junk_words_per_word=5))
    assert tools.lexicon.is_pos_available("ko")
    assert tools.junk_words.words_per_word == 5

# --- Junk words ---

VOCAB = ["hello", "there", "order", "where", "my", "is", "?"]


def test_junk_words_are_deterministic():
    generator = CharacterJunkWordGenerator()
    assert generator.generate(VOCAB, "en") == generator.generate(list(reversed(VOCAB)), "en")


def test_junk_words_avoid_vocabulary():
    junk = CharacterJunkWordGenerator(words_per_word=3).generate(VOCAB, "en")
    assert junk
    assert not set(junk) & set(VOCAB)
    assert len(junk) == len(set(junk)) <= 3 * 6
    alphabet = set("".join(VOCAB))
    assert all(set(w) <= alphabet for w in junk)


def test_junk_words_without_vocabulary():
    assert CharacterJunkWordGenerator().generate(["?", "!"], "en") == []

# --- Seeded random ---

def test_same_seed_same_draws():
    a, b = SeededRandomProvider().get_seeded(5), SeededRandomProvider().get_seeded(5)
    items = list(range(20))
    assert a.shuffle(items) == b.shuffle(items)
    assert a.sample(items, 4) == b.sample(items, 4)
    assert a.uniform(0, 1) == b.uniform(0, 1)


def test_shuffle_returns_a_copy():
    items = list(range(10))
    shuffled = SeededRandom(0).shuffle(items)
    assert items == list(range(10))
    assert sorted(shuffled) == items


@pytest.mark.parametrize("n, expected", [(3, 3), (10, 5), (0, 0), (-1, 0)])
def test_sample_size(n, expected):
    sample = SeededRandom(0).sample(["a", "b", "c", "d", "e"], n)
    assert len(sample) == expected
    assert len(set(sample)) == expected


def test_uniform_and_integers_bounds():
    rng = SeededRandom(1)
    assert rng.uniform(3, 3) == 3.0
    assert 2 <= rng.uniform(2, 4) < 4
    assert all(0 <= rng.integers(0, 3) < 3 for _ in range(20))
