from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from .errors import EmptyGeometryFault


@dataclass(frozen=True)
class Coordinate:
    x: float
    y: float


@dataclass(frozen=True)
class Station:
    """A fixed named position from which measurements are taken."""
    pos: Coordinate
    name: str


@dataclass(frozen=True)
class Shot:
    """A measurement from a station to another station or to a wall.

    Pure geometry: the endpoints are not resolved to station names.
    """
    start: Coordinate
    end: Coordinate


@dataclass(frozen=True)
class Sketchline:
    """A polyline in a certain color, drawn by hand during the survey."""
    color: str
    points: Tuple[Coordinate, ...]


@dataclass(frozen=True)
class GridDirective:
    """`XVIgrids`: background grid spacing, e.g. ``{1.0 m}``."""
    value: float
    unit: Optional[str] = None


@dataclass(frozen=True)
class GridGeometry:
    """`XVIgrid`: placement of the background display grid.

    ``unknown1`` and ``unknown2`` have no documented meaning (writers emit
    0.0 for both); they are passed through untouched.
    """
    origin: Coordinate
    gridsize1: float
    unknown1: float
    unknown2: float
    gridsize2: float
    extent_x: int
    extent_y: int


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, points: Iterable[Coordinate]) -> BoundingBox:
        """Smallest box containing every point; the first point seeds it."""
        it = iter(points)
        try:
            first = next(it)
        except StopIteration:
            raise EmptyGeometryFault("no coordinates to seed a bounding box from") from None
        min_x = max_x = first.x
        min_y = max_y = first.y
        for p in it:
            min_x = min(min_x, p.x)
            min_y = min(min_y, p.y)
            max_x = max(max_x, p.x)
            max_y = max(max_y, p.y)
        return cls(min_x, min_y, max_x, max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, p: Coordinate) -> bool:
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y


@dataclass(frozen=True)
class ParsedDocument:
    """A parsed xvi file.

    ``bounds`` is None when the document holds no surveyed coordinates.
    """
    stations: Tuple[Station, ...] = ()
    shots: Tuple[Shot, ...] = ()
    sketchlines: Tuple[Sketchline, ...] = ()
    bounds: Optional[BoundingBox] = None

    def points(self) -> Iterator[Coordinate]:
        for st in self.stations:
            yield st.pos
        for shot in self.shots:
            yield shot.start
            yield shot.end
        for line in self.sketchlines:
            yield from line.points
