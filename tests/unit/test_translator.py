"""Tests for the dictionary-first translator."""

from types import MappingProxyType

import pytest

import translit.translator
from translit.models import Gender, Language
from translit.translator import TranslationTables, Translator, UnsupportedPairError, tokenize


def test_tokenize_keeps_delimiters():
    assert tokenize("a, b") == ["a", ",", " ", "b"]
    assert tokenize('"x"(y)') == ['"', "x", '"', "(", "y", ")"]
    assert tokenize("") == []


def test_tokenize_round_trips_text():
    text = "#Perera# [asankha-chamath], 'x' \\ y"

    assert "".join(tokenize(text)) == text


def test_tokenize_hyphen_is_not_a_delimiter():
    assert tokenize("asankha-chamath") == ["asankha-chamath"]


def test_dictionary_routing_by_gender(toy_translator):
    """Any specified gender uses the names map, unspecified the other map."""
    en, si = Language.ENGLISH, Language.SINHALA

    assert toy_translator.translate_word("kama", en, si, Gender.MALE) == "name-kama"
    assert toy_translator.translate_word("kama", en, si, Gender.FEMALE) == "name-kama"
    assert toy_translator.translate_word("kama", en, si, Gender.UNSPECIFIED) == "word-kama"
    assert toy_translator.translate_word("KAMA", en, si) == "word-kama"


def test_dictionary_miss_falls_back_to_rules(toy_translator):
    en, si = Language.ENGLISH, Language.SINHALA

    assert toy_translator.translate_word("mak", en, si, Gender.UNSPECIFIED) == "word-mak"
    assert toy_translator.translate_word("mak", en, si, Gender.MALE) == "MK_"
    assert toy_translator.translate_word("kma", en, si, Gender.FEMALE) == "KMA:"


def test_dictionary_hit_skips_rules(toy_translator, monkeypatch):
    """The phonetic rules are never consulted for a dictionary hit."""
    calls = []
    real_encode = translit.translator.encode

    def spy(word, gender, rules):
        calls.append(word)
        return real_encode(word, gender, rules)

    monkeypatch.setattr(translit.translator, "encode", spy)

    toy_translator.translate_word("kama", Language.ENGLISH, Language.SINHALA, Gender.MALE)
    assert calls == []

    toy_translator.translate_word("kam", Language.ENGLISH, Language.SINHALA, Gender.MALE)
    assert calls == ["kam"]


def test_same_language_is_unsupported(toy_translator):
    with pytest.raises(UnsupportedPairError) as excinfo:
        toy_translator.translate_word("kama", Language.ENGLISH, Language.ENGLISH)

    assert excinfo.value.source is Language.ENGLISH
    assert isinstance(excinfo.value, ValueError)


def test_pair_without_tables_is_unsupported(toy_translator):
    with pytest.raises(UnsupportedPairError):
        toy_translator.translate_word("kama", Language.ENGLISH, Language.TAMIL)

    with pytest.raises(UnsupportedPairError):
        toy_translator.translate_word("kama", Language.SINHALA, Language.ENGLISH)


def test_line_fails_on_pair_before_any_work(toy_translator):
    """Even empty input is refused for an unsupported pair."""
    with pytest.raises(UnsupportedPairError):
        toy_translator.translate_line("", Language.SINHALA, Language.SINHALA)


def test_translate_line_keeps_structure(toy_translator):
    line = '"kama" (mak), k'

    result = toy_translator.translate_line(line, Language.ENGLISH, Language.SINHALA, Gender.MALE)

    assert result == '"name-kama" (MK_), k'


def test_translate_line_copies_single_characters(toy_translator):
    """One-character tokens are copied through without lowercasing."""
    result = toy_translator.translate_line("K a M", Language.ENGLISH, Language.SINHALA)

    assert result == "K a M"


def test_translate_line_empty(toy_translator):
    assert toy_translator.translate_line("", Language.ENGLISH, Language.SINHALA) == ""


def test_missing_dictionary_behaves_as_empty(toy_encode_rules, toy_decode_rules):
    tables = TranslationTables(
        encoders=MappingProxyType({Language.ENGLISH: toy_encode_rules}),
        decoders=MappingProxyType({Language.SINHALA: toy_decode_rules}),
    )
    translator = Translator(tables)

    assert translator.translate_word("kama", Language.ENGLISH, Language.SINHALA, Gender.MALE) == "KM"


def test_supported_pairs(toy_tables):
    assert toy_tables.pairs() == [(Language.ENGLISH, Language.SINHALA)]
    assert toy_tables.supports(Language.ENGLISH, Language.SINHALA)
    assert not toy_tables.supports(Language.SINHALA, Language.ENGLISH)
