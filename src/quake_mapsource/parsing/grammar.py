"""
idTech 1 MAP grammar.

Recursive-descent parser with PEG ordered choice: alternatives are tried in
the order written and the first one that matches wins. The document shape:

    // comment
    {
    "classname" "worldspawn"
    {
    ( x1 y1 z1 ) ( x2 y2 z2 ) ( x3 y3 z3 ) TEXTURE offX offY rot scX scY
    ...
    }
    }

Rules (see lexical.py for linesep and float32):
- point:     "( " float32 " " float32 " " float32 " )"
- keypair:   '"' [^"]+ '"' " "+ '"' [^"]+ '"'
- keys:      keypair ++ linesep
- brushline: point " " point " " point " " [A-Za-z_]+ (" " float32){5}
- brush:     "{" linesep brushline ++ linesep linesep "}"
- entity:    "{" linesep keys linesep brush ** linesep linesep? "}"
- map:       linesep* entity ++ linesep linesep* EOF

Sibling repetition is a loop, so stack depth does not grow with the number
of entities, brushes or faces.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..map_types import Brush, BrushPlane, Entity, Map, TexParams
from .lexical import LexicalRules, Match, Rule, rule

logger = logging.getLogger(__name__)

TEXNAME_CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"


class MapGrammar(LexicalRules):
    """Grammar rules for one parse call."""

    # ---------------------------------------------------------------
    # Combinators
    # ---------------------------------------------------------------

    def separated(self, pos: int, item: Rule, sep: Rule,
                  allow_empty: bool = False) -> Optional[Match]:
        """``item ++ sep`` (or ``item ** sep`` with allow_empty).

        A separator is only kept when an item follows it; otherwise the
        repetition ends before the separator.
        """
        first = item(pos)
        if first is None:
            return Match([], pos) if allow_empty else None
        values = [first.value]
        pos = first.pos
        while True:
            s = sep(pos)
            if s is None:
                break
            nxt = item(s.pos)
            if nxt is None:
                break
            values.append(nxt.value)
            pos = nxt.pos
        return Match(values, pos)

    def _sequence_floats(self, pos: int, count: int) -> Optional[Match]:
        """``float32 (" " float32){count-1}``."""
        values = []
        for i in range(count):
            if i:
                pos = self.literal(pos, " ")
                if pos is None:
                    return None
            m = self.float32(pos)
            if m is None:
                return None
            values.append(m.value)
            pos = m.pos
        return Match(values, pos)

    # ---------------------------------------------------------------
    # Values
    # ---------------------------------------------------------------

    @rule
    def point(self, pos: int) -> Optional[Match]:
        pos = self.literal(pos, "( ")
        if pos is None:
            return None
        coords = self._sequence_floats(pos, 3)
        if coords is None:
            return None
        end = self.literal(coords.pos, " )")
        if end is None:
            return None
        x, y, z = coords.value
        return Match((x, y, z), end)

    @rule
    def keypair(self, pos: int) -> Optional[Match]:
        key = self._quoted(pos)
        if key is None:
            return None
        pos = self.repeat_char(key.pos, lambda p: self.literal(p, " "), min_count=1)
        if pos is None:
            return None
        value = self._quoted(pos)
        if value is None:
            return None
        return Match((key.value, value.value), value.pos)

    def _quoted(self, pos: int) -> Optional[Match]:
        pos = self.literal(pos, '"')
        if pos is None:
            return None
        end = self.repeat_char(
            pos, lambda p: self.char_not_in(p, '"', '[^"]'), min_count=1)
        if end is None:
            return None
        close = self.literal(end, '"')
        if close is None:
            return None
        return Match(self.text[pos:end], close)

    @rule
    def keys(self, pos: int) -> Optional[Match]:
        pairs = self.separated(pos, self.keypair, self.linesep)
        if pairs is None:
            return None
        # Repeated keys: the later value wins.
        keys: Dict[str, str] = dict(pairs.value)
        return Match(keys, pairs.pos)

    # ---------------------------------------------------------------
    # Brushes
    # ---------------------------------------------------------------

    @rule
    def brushline(self, pos: int) -> Optional[Match]:
        points = []
        for i in range(3):
            if i:
                pos = self.literal(pos, " ")
                if pos is None:
                    return None
            m = self.point(pos)
            if m is None:
                return None
            points.append(m.value)
            pos = m.pos

        pos = self.literal(pos, " ")
        if pos is None:
            return None
        tex_start = pos
        pos = self.repeat_char(
            pos, lambda p: self.char_in(p, TEXNAME_CHARS, "[A-Za-z_]"), min_count=1)
        if pos is None:
            return None
        texname = self.text[tex_start:pos]

        pos = self.literal(pos, " ")
        if pos is None:
            return None
        numbers = self._sequence_floats(pos, 5)
        if numbers is None:
            return None
        off_x, off_y, rotation, scale_x, scale_y = numbers.value

        p, q, r = points
        plane = BrushPlane(
            p=p, q=q, r=r,
            texname=texname,
            texparams=TexParams(
                offset=(off_x, off_y),
                rotation=rotation,
                scale=(scale_x, scale_y),
            ),
        )
        return Match(plane, numbers.pos)

    @rule
    def brush(self, pos: int) -> Optional[Match]:
        pos = self.literal(pos, "{")
        if pos is None:
            return None
        m = self.linesep(pos)
        if m is None:
            return None
        lines = self.separated(m.pos, self.brushline, self.linesep)
        if lines is None:
            return None
        m = self.linesep(lines.pos)
        if m is None:
            return None
        end = self.literal(m.pos, "}")
        if end is None:
            return None
        return Match(Brush(planes=tuple(lines.value)), end)

    # ---------------------------------------------------------------
    # Entities and documents
    # ---------------------------------------------------------------

    @rule
    def entity(self, pos: int) -> Optional[Match]:
        pos = self.literal(pos, "{")
        if pos is None:
            return None
        m = self.linesep(pos)
        if m is None:
            return None
        keys = self.keys(m.pos)
        if keys is None:
            return None
        m = self.linesep(keys.pos)
        if m is None:
            return None
        brushes = self.separated(m.pos, self.brush, self.linesep, allow_empty=True)
        pos = brushes.pos
        m = self.linesep(pos)
        if m is not None:
            pos = m.pos
        end = self.literal(pos, "}")
        if end is None:
            return None
        return Match(Entity(keys=keys.value, brushes=tuple(brushes.value)), end)

    @rule
    def map_document(self, pos: int) -> Optional[Match]:
        pos = self._skip_lineseps(pos)
        entities = self.separated(pos, self.entity, self.linesep)
        if entities is None:
            return None
        pos = self._skip_lineseps(entities.pos)
        return Match(Map(entities=tuple(entities.value)), pos)

    def _skip_lineseps(self, pos: int) -> int:
        while True:
            m = self.linesep(pos)
            if m is None:
                return pos
            pos = m.pos


# ---------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------

RULES = (
    "linesep",
    "commentline",
    "float32",
    "point",
    "keypair",
    "keys",
    "brushline",
    "brush",
    "entity",
    "map_document",
)


def parse_rule(rule_name: str, text: str, trace: bool = False) -> Any:
    """Apply one grammar rule to the whole of ``text``.

    The rule must consume all input; anything left over is reported as a
    failure expecting EOF.

    Raises:
        ValueError: If rule_name is not a grammar rule
        MapParseError: If the text does not match
    """
    if rule_name not in RULES:
        raise ValueError(f"Unknown grammar rule '{rule_name}'. Available: {list(RULES)}")
    grammar = MapGrammar(text, trace=trace)
    result = getattr(grammar, rule_name)(0)
    if result is not None and grammar.end_of_input(result.pos):
        return result.value
    error = grammar.error()
    logger.debug("Rule `%s` failed: %s", rule_name, error)
    raise error


def parse(text: str, trace: bool = False) -> Map:
    """Parse a complete MAP document.

    Args:
        text: MAP source text
        trace: Log every rule attempt at DEBUG level

    Returns:
        The parsed Map

    Raises:
        MapParseError: If the text is not a valid MAP document
    """
    result: Map = parse_rule("map_document", text, trace=trace)
    logger.debug(
        "Parsed %d entities, %d brushes, %d planes",
        len(result.entities), result.brush_count, result.plane_count,
    )
    return result


def parse_file(path: Union[str, Path], encoding: str = "utf-8", trace: bool = False) -> Map:
    """Read and parse a MAP file.

    I/O and decoding errors propagate unchanged.
    """
    path = Path(path)
    text = path.read_text(encoding=encoding)
    logger.info("Parsing %s (%d characters)", path, len(text))
    return parse(text, trace=trace)


def parse_linesep(text: str) -> None:
    return parse_rule("linesep", text)


def parse_commentline(text: str) -> str:
    return parse_rule("commentline", text)


def parse_float(text: str) -> float:
    return parse_rule("float32", text)


def parse_point(text: str):
    return parse_rule("point", text)


def parse_keypair(text: str):
    return parse_rule("keypair", text)


def parse_keys(text: str) -> Dict[str, str]:
    return parse_rule("keys", text)


def parse_brushline(text: str) -> BrushPlane:
    return parse_rule("brushline", text)


def parse_brush(text: str) -> Brush:
    return parse_rule("brush", text)


def parse_entity(text: str) -> Entity:
    return parse_rule("entity", text)
