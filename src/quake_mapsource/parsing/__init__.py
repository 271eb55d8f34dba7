"""
MAP source parsing package.

Public API:
    - parse(text) / parse_file(path): Parse a whole document into a Map
    - parse_rule(name, text): Apply a single grammar rule to a whole string
    - parse_keypair, parse_keys, parse_point, ...: Per-rule shortcuts
    - MapGrammar: The rule set, one instance per parse call
"""

from .grammar import (
    MapGrammar,
    RULES,
    parse,
    parse_file,
    parse_rule,
    parse_linesep,
    parse_commentline,
    parse_float,
    parse_point,
    parse_keypair,
    parse_keys,
    parse_brushline,
    parse_brush,
    parse_entity,
)

__all__ = [
    'MapGrammar',
    'RULES',
    'parse',
    'parse_file',
    'parse_rule',
    'parse_linesep',
    'parse_commentline',
    'parse_float',
    'parse_point',
    'parse_keypair',
    'parse_keys',
    'parse_brushline',
    'parse_brush',
    'parse_entity',
]
