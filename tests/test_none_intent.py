import pytest

from conftest import JUNK_WORDS, STOP_WORDS, make_train_input
from oos_intent.constants import NONE_INTENT
from oos_intent.none_intent import join_character, low_signal_vocabulary, make_none_intent, nb_none_utterances
from oos_intent.seeded_random import SeededRandom
from oos_intent.types import Token


def synthesize(tools, train_input, seed=42):
    return make_none_intent(train_input.all_utterances, train_input.language, tools, SeededRandom(seed))


def texts_of(intent):
    return [u.to_string() for u in intent.utterances]


@pytest.mark.parametrize("nb_utterances, expected", [
    (0, 20), (2, 20), (30, 20), (45, 30), (100, 67), (300, 200), (5000, 200),
])
def test_nb_none_utterances_is_bounded(nb_utterances, expected):
    assert nb_none_utterances(nb_utterances) == expected


def test_none_intent_shape(tools, corpus):
    train_input = make_train_input(tools, corpus)
    none_intent = synthesize(tools, train_input)

    assert none_intent.name == NONE_INTENT
    assert none_intent.contexts == []
    assert none_intent.slot_definitions == []
    # three batches of 20 for 15 utterances, then every stop word alone
    texts = texts_of(none_intent)
    assert len(texts) == 3 * 20 + len(STOP_WORDS)
    assert texts[-len(STOP_WORDS):] == STOP_WORDS
    assert all(u.language == "en" for u in none_intent.utterances)


def test_synthesis_is_deterministic(tools, corpus):
    train_input = make_train_input(tools, corpus)
    first = texts_of(synthesize(tools, train_input, seed=7))
    second = texts_of(synthesize(tools, train_input, seed=7))
    assert first == second


def test_junk_words_are_requested_with_the_corpus_vocabulary(tools, corpus):
    train_input = make_train_input(tools, corpus)
    synthesize(tools, train_input)
    vocabulary, language = tools.junk_words.calls[-1]
    assert language == "en"
    assert "hello" in vocabulary
    assert len(vocabulary) == len(set(vocabulary))


def test_samples_only_use_known_pools(tools, corpus):
    train_input = make_train_input(tools, corpus)
    none_intent = synthesize(tools, train_input)
    low_signal = low_signal_vocabulary([t for u in train_input.all_utterances for t in u.tokens])
    allowed = set(STOP_WORDS) | set(JUNK_WORDS) | set(low_signal)
    for text in texts_of(none_intent):
        assert set(text.split(" ")) - {""} <= allowed


def test_space_delimited_corpus_joins_with_spaces(tools, corpus):
    train_input = make_train_input(tools, corpus)
    tokens = [t for u in train_input.all_utterances for t in u.tokens]
    assert join_character(tokens) == " "

    texts = texts_of(synthesize(tools, train_input))
    assert any(" " in text for text in texts)


def test_non_space_delimited_corpus_concatenates(tools):
    data = [
        {"intent": "weather", "examples": ["今日は天気", "明日の天気。", "天気予報"]},
        {"intent": "thanks", "examples": ["ありがとう", "どうも。"]},
    ]
    train_input = make_train_input(tools, data, language="ja")
    tokens = [t for u in train_input.all_utterances for t in u.tokens]
    assert join_character(tokens) == ""

    texts = texts_of(synthesize(tools, train_input))
    assert not any(" " in text for text in texts)


def test_join_character_threshold():
    word, space = Token("w"), Token(" ", is_word=False, is_space=True)
    assert join_character([word, word, space]) == " "
    assert join_character([word] * 7 + [space] * 3) == " "
    assert join_character([word] * 8 + [space] * 3) == ""


def test_low_signal_vocabulary_is_sorted_and_lowercase():
    tokens = [
        Token("The", tfidf=0.0), Token("order", tfidf=0.9), Token("a", tfidf=0.05),
        Token("the", tfidf=0.1), Token(" ", is_word=False, is_space=True),
    ]
    assert low_signal_vocabulary(tokens) == ["a", "the"]
