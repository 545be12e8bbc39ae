from typing import Any, Iterable, Optional


class XviError(Exception):
    """Base class for everything the xvi pipeline raises."""

    code = "E.XVI"

    def __init__(self, msg: str):
        super().__init__(f"{self.code}: {msg}")


class XviSyntaxError(XviError):
    """The grammar could not match the input at ``offset``."""

    code = "E.SYNTAX"

    def __init__(
        self,
        msg: str,
        offset: int,
        line: Optional[int] = None,
        column: Optional[int] = None,
        expected: Iterable[str] = (),
    ):
        super().__init__(msg)
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = frozenset(expected)


class DecodeFault(XviError):
    """The parse tree could not be turned into model values.

    Either a token the grammar accepted as numeric did not convert to a finite
    number, or the tree carried a rule the reducer has no handler for.
    """

    code = "E.DECODE"

    def __init__(self, msg: str, rule: Optional[str] = None, value: Any = None):
        super().__init__(msg)
        self.rule = rule
        self.value = value


class EmptyGeometryFault(XviError):
    code = "E.GEOMETRY.EMPTY"
