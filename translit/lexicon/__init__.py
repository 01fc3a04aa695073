"""Dictionary tables for dictionary-first transliteration."""

from translit.lexicon.dictionary import DictionaryBuilder, DictionaryTable


__all__ = ['DictionaryBuilder', 'DictionaryTable']
