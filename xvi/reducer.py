from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Union

from lark import Transformer, Tree, v_args
from lark.exceptions import VisitError

from .errors import DecodeFault, XviError
from .model import (
    BoundingBox,
    Coordinate,
    GridDirective,
    GridGeometry,
    ParsedDocument,
    Shot,
    Sketchline,
    Station,
)

log = logging.getLogger(__name__)

GridHint = Union[GridDirective, GridGeometry]


# ---------- Transformer ----------
@v_args(inline=True)
class ToXvi(Transformer):
    """Decodes single records (and the grid sections) into model values."""

    # ----- atoms -----
    def NUMBER(self, tok):
        value = float(tok)
        if not math.isfinite(value):
            raise DecodeFault(f"number {tok!s} at offset {tok.start_pos} is out of range",
                              rule="NUMBER", value=str(tok))
        return value

    def INTEGER(self, tok):
        return int(tok)

    def NAME(self, tok):
        return str(tok)

    def COLOR(self, tok):
        return str(tok)

    # ----- records -----
    def coordinate(self, x, y):
        return Coordinate(x, y)

    def station(self, x, y, name):
        return Station(pos=Coordinate(x, y), name=name)

    def shot(self, start, end):
        return Shot(start=start, end=end)

    def sketchline(self, color, *points):
        return Sketchline(color=color, points=tuple(points))

    # ----- grid hints -----
    def xvigrids(self, value, unit=None):
        return GridDirective(value=value, unit=unit)

    def xvigrid(self, origin, gridsize1, unknown1, unknown2, gridsize2, extent_x, extent_y):
        return GridGeometry(origin, gridsize1, unknown1, unknown2, gridsize2, extent_x, extent_y)

    def __default__(self, data, children, meta):
        raise DecodeFault(f"no decoder for rule '{data}'", rule=str(data))


def _decode(tree: Tree):
    """Run ToXvi over one subtree, surfacing our own faults unwrapped."""
    try:
        return ToXvi().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, XviError):
            raise e.orig_exc from None
        raise DecodeFault(f"cannot decode '{e.rule}': {e.orig_exc}", rule=str(e.rule)) from e


# ---------- Reducer ----------
class _Reducer:
    def __init__(self, on_grid: Optional[Callable[[GridHint], None]]) -> None:
        self.on_grid = on_grid
        self.stations: List[Station] = []
        self.shots: List[Shot] = []
        self.sketchlines: List[Sketchline] = []
        # only used to seed the bounding box
        self.seen: List[Coordinate] = []

    def _grid(self, section: Tree) -> None:
        hint = _decode(section)
        log.debug("%s: %r", section.data, hint)
        if self.on_grid is not None:
            self.on_grid(hint)

    xvigrids = _grid
    xvigrid = _grid

    def xvistations(self, section: Tree) -> None:
        for rec in section.children:
            st = _decode(rec)
            self.stations.append(st)
            self.seen.append(st.pos)

    def xvishots(self, section: Tree) -> None:
        for rec in section.children:
            shot = _decode(rec)
            self.shots.append(shot)
            self.seen.append(shot.start)
            self.seen.append(shot.end)

    def xvisketchlines(self, section: Tree) -> None:
        for rec in section.children:
            line = _decode(rec)
            self.sketchlines.append(line)
            self.seen.extend(line.points)

    def walk(self, tree: Tree) -> None:
        if tree.data != "file":
            raise DecodeFault(f"expected a 'file' tree, got '{tree.data}'", rule=str(tree.data))
        for section in tree.children:
            name = section.data if isinstance(section, Tree) else section.type
            handler = _SECTIONS.get(str(name))
            if handler is None:
                raise DecodeFault(f"no handler for section '{name}'", rule=str(name))
            handler(self, section)


_SECTIONS = {
    "xvigrids": _Reducer.xvigrids,
    "xvigrid": _Reducer.xvigrid,
    "xvistations": _Reducer.xvistations,
    "xvishots": _Reducer.xvishots,
    "xvisketchlines": _Reducer.xvisketchlines,
}


def reduce_tree(
    tree: Tree,
    on_grid: Optional[Callable[[GridHint], None]] = None,
    require_geometry: bool = False,
) -> ParsedDocument:
    """
    Fold a parsed ``file`` tree into a ParsedDocument.

    Sections are handled in document order. Grid hints are decoded and passed
    to ``on_grid``; they never reach the document and do not count towards the
    bounds. With no surveyed coordinates the bounds are None, unless
    ``require_geometry`` is set, in which case EmptyGeometryFault is raised.
    """
    r = _Reducer(on_grid)
    r.walk(tree)

    bounds = None
    if r.seen or require_geometry:
        bounds = BoundingBox.from_points(r.seen)

    log.debug("reduced %d stations, %d shots, %d sketchlines, bounds=%r",
              len(r.stations), len(r.shots), len(r.sketchlines), bounds)
    return ParsedDocument(
        stations=tuple(r.stations),
        shots=tuple(r.shots),
        sketchlines=tuple(r.sketchlines),
        bounds=bounds,
    )
