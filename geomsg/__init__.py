from msgspec import DecodeError, ValidationError

from .geometry import (
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from ._core import (
    ErrorKind,
    Feature,
    FeatureCollection,
    GeoJSON,
    GeoJSONError,
    GeoJSONType,
    GeometryCollection,
    as_geojson,
)

from . import json
from . import yaml
from ._version import __version__
