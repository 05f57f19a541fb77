from typing import Any, Tuple

import msgspec
from msgspec import ValidationError

from ._utils import at, expect_array, expected, to_position

__all__ = (
    "Point",
    "LineString",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
)


def __dir__():
    return __all__


def _check_members(items, member_type, min_length=0):
    expect_array(items, min_length=min_length)
    for item in items:
        if not isinstance(item, member_type):
            raise expected(member_type.__name__, item)
    return tuple(items)


def _decode_members(obj, path, member_type, min_length=0):
    expect_array(obj, path, min_length=min_length)
    return tuple(
        member_type._decode(item, f"{path}[{i}]") for i, item in enumerate(obj)
    )


class _Sequence(msgspec.Struct):
    """Behavior shared by all types wrapping a single tuple of members.

    Instances are treated as immutable values. Use ``replace`` to get a copy
    with a single member swapped out; the copy goes through the same
    validation as any newly constructed object.
    """

    @property
    def _items(self):
        return getattr(self, self.__struct_fields__[0])

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __iter__(self):
        return iter(self._items)

    def replace(self, index: int, value: Any):
        """Return a copy with the member at ``index`` replaced by ``value``."""
        items = list(self._items)
        items[index] = value
        return type(self)(tuple(items))

    @classmethod
    def from_builtins(cls, obj: Any):
        """Build an instance from the payload member of a GeoJSON object.

        That's ``coordinates`` for geometries, ``geometries`` for a
        `GeometryCollection` and ``features`` for a `FeatureCollection`.

        Parameters
        ----------
        obj : Any
            A tree of builtin JSON values (as returned by ``msgspec.json.decode``).

        Returns
        -------
        out
            A new instance.

        Raises
        ------
        msgspec.ValidationError
            If ``obj`` doesn't have the expected structure.
        """
        try:
            return cls._decode(obj, "$")
        except RecursionError:
            raise ValidationError("Maximum nesting depth exceeded") from None

    def to_builtins(self) -> list:
        """Convert to the payload member of a GeoJSON object."""
        return [item.to_builtins() for item in self._items]


class Point(_Sequence):
    """A single position.

    Parameters
    ----------
    coordinates: Tuple[float, ...]
        The position, with at least two values. Index 0 is the longitude (or
        easting), 1 the latitude (or northing) and 2 the optional altitude.
        Any further values are kept as is.

    Notes
    -----
    Points compare equal only if they have the same number of coordinates and
    every coordinate is exactly equal. No tolerance is applied.
    """

    coordinates: Tuple[float, ...]

    def __post_init__(self):
        self.coordinates = to_position(self.coordinates)

    @classmethod
    def _decode(cls, obj, path):
        return cls(to_position(obj, path))

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def easting(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    @property
    def northing(self) -> float:
        return self.coordinates[1]

    @property
    def altitude(self) -> float:
        """The third coordinate. Raises ``IndexError`` for 2D points."""
        return self.coordinates[2]

    def to_builtins(self) -> list:
        return list(self.coordinates)


class LineString(_Sequence):
    """An ordered sequence of two or more points."""

    points: Tuple[Point, ...]

    def __post_init__(self):
        self.points = _check_members(self.points, Point, min_length=2)

    @classmethod
    def _decode(cls, obj, path):
        return cls(_decode_members(obj, path, Point, min_length=2))

    def is_linear_ring(self) -> bool:
        """Whether this is a closed ring of at least four points, where the
        first and last point are equal"""
        return len(self.points) >= 4 and self.points[0] == self.points[-1]


def _check_rings(rings, path=None):
    for i, ring in enumerate(rings):
        if not ring.is_linear_ring():
            loc = f"{path}[{i}]" if path else None
            raise ValidationError(
                f"Expected a linear ring (>= 4 points, first == last){at(loc)}"
            )
    return rings


class Polygon(_Sequence):
    """A surface bounded by linear rings.

    The first ring is the exterior boundary, any others are holes. Every ring
    must be closed; containment of the holes isn't checked.
    """

    linear_rings: Tuple[LineString, ...]

    def __post_init__(self):
        self.linear_rings = _check_rings(
            _check_members(self.linear_rings, LineString)
        )

    @classmethod
    def _decode(cls, obj, path):
        return cls(_check_rings(_decode_members(obj, path, LineString), path))


class MultiPoint(_Sequence):
    points: Tuple[Point, ...] = ()

    def __post_init__(self):
        self.points = _check_members(self.points, Point)

    @classmethod
    def _decode(cls, obj, path):
        return cls(_decode_members(obj, path, Point))


class MultiLineString(_Sequence):
    line_strings: Tuple[LineString, ...] = ()

    def __post_init__(self):
        self.line_strings = _check_members(self.line_strings, LineString)

    @classmethod
    def _decode(cls, obj, path):
        return cls(_decode_members(obj, path, LineString))


class MultiPolygon(_Sequence):
    polygons: Tuple[Polygon, ...] = ()

    def __post_init__(self):
        self.polygons = _check_members(self.polygons, Polygon)

    @classmethod
    def _decode(cls, obj, path):
        return cls(_decode_members(obj, path, Polygon))
