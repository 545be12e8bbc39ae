# xvi/parser.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .errors import XviSyntaxError
from .model import ParsedDocument
from .reducer import GridHint, reduce_tree

# every rule that may be used as an entry point of parse()
RULES = (
    "file",
    "xvigrids",
    "xvigrid",
    "xvistations",
    "station",
    "xvishots",
    "shot",
    "xvisketchlines",
    "sketchline",
    "coordinate",
)


# ---------- Load grammar ----------
def _load_grammar() -> str:
    # grammar_xvi.lark lives next to this file
    path = Path(__file__).with_name("grammar_xvi.lark")
    return path.read_text(encoding="utf-8")

_GRAMMAR = _load_grammar()
# LALR with the contextual lexer: a station name such as "2.75" looks like a
# number, but only NAME is acceptable in that position.
_parser = Lark(_GRAMMAR, start=list(RULES), parser="lalr", propagate_positions=True)


# ---------- Errors ----------
def _syntax_error(text: str, e: UnexpectedInput) -> XviSyntaxError:
    at_end = isinstance(e, UnexpectedEOF) or (isinstance(e, UnexpectedToken) and e.token.type == "$END")
    if at_end or e.pos_in_stream is None or e.pos_in_stream < 0:
        offset = len(text)
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    else:
        offset = e.pos_in_stream
        line, column = e.line, e.column

    if isinstance(e, UnexpectedCharacters):
        expected = e.allowed or ()
    else:
        expected = getattr(e, "expected", None) or ()

    # show the offending line
    lines = text.splitlines()
    context = ""
    if 1 <= line <= len(lines):
        caret = " " * (column - 1 if column > 0 else 0) + "^"
        context = f"\n{lines[line - 1]}\n{caret}"
    msg = (f"Syntax error at line {line}, column {column}.{context}\n"
           f"Expected one of: {sorted(expected)}")
    return XviSyntaxError(msg, offset, line, column, expected)


# ---------- Public API ----------
def parse(rule: str, text: str) -> Tree:
    """
    Match the whole of ``text`` against ``rule`` and return the parse tree.
    Raises XviSyntaxError at the first point of mismatch.
    """
    if rule not in RULES:
        raise ValueError(f"unknown entry rule '{rule}', expected one of {RULES}")
    try:
        return _parser.parse(text, start=rule)
    except UnexpectedInput as e:
        raise _syntax_error(text, e) from None


def parse_string(
    text: str,
    on_grid: Optional[Callable[[GridHint], None]] = None,
    require_geometry: bool = False,
) -> ParsedDocument:
    """Parse the contents of an xvi file into a ParsedDocument."""
    return reduce_tree(parse("file", text), on_grid=on_grid, require_geometry=require_geometry)


def parse_file(
    path: Union[str, Path],
    encoding: str = "utf-8-sig",
    on_grid: Optional[Callable[[GridHint], None]] = None,
    require_geometry: bool = False,
) -> ParsedDocument:
    """Read an xvi file and pass it through parse_string()."""
    text = Path(path).read_text(encoding=encoding)
    return parse_string(text, on_grid=on_grid, require_geometry=require_geometry)
