import pytest

from paperchat.core.text import STOPWORDS, normalize, token_set, tokenize


def test_normalize_lowercases_and_replaces_dashes_and_punctuation():
    assert normalize("Deep-Learning — for X!") == "deep learning for x"
    assert normalize("  Graph\tNeural\n\nNetworks (GNNs): a survey. ") == "graph neural networks gnns a survey"


def test_normalize_treats_underscore_as_separator_and_keeps_unicode_letters():
    assert normalize("snake_case") == "snake case"
    assert normalize("Café–Über 2024") == "café über 2024"


def test_normalize_handles_empty_input():
    assert normalize("") == ""
    assert normalize(None) == ""
    assert normalize("?!--") == ""


@pytest.mark.parametrize(
    "text",
    [
        "Deep Learning for X",
        "BanglaBERT: Language-Model Pretraining",
        "  multiple   spaces\tand\ttabs ",
        "Ünïcödé—dashes–and_underscores!!",
        "",
    ],
)
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


def test_tokenize_drops_stop_words_and_empty_tokens():
    assert tokenize("A Study of the Transformer Paper") == ["transformer"]
    assert tokenize("Deep Learning for X") == ["deep", "learning", "x"]


def test_tokenize_never_returns_stop_words():
    text = " ".join(sorted(STOPWORDS)) + " retrieval augmented generation"

    tokens = tokenize(text)

    assert tokens == ["retrieval", "augmented", "generation"]
    assert not set(tokens) & STOPWORDS


def test_token_set_collapses_duplicates():
    assert token_set("Learning to learn learning") == frozenset({"learning", "learn"})
