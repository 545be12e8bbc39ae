"""Parser for therion / xtherion ``.xvi`` background sketch files."""

from .errors import DecodeFault, EmptyGeometryFault, XviError, XviSyntaxError
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
from .parser import parse, parse_file, parse_string

__all__ = [
    "BoundingBox",
    "Coordinate",
    "DecodeFault",
    "EmptyGeometryFault",
    "GridDirective",
    "GridGeometry",
    "ParsedDocument",
    "Shot",
    "Sketchline",
    "Station",
    "XviError",
    "XviSyntaxError",
    "parse",
    "parse_file",
    "parse_string",
]
