"""Two-stage phonetic rule engine."""

from translit.phonetic.decoder import decode
from translit.phonetic.encoder import encode
from translit.phonetic.rules import DecodeRule, EncodeRule, Pattern, RuleTable


__all__ = ['DecodeRule', 'EncodeRule', 'Pattern', 'RuleTable', 'decode', 'encode']
