import pytest

import msgspec

from geomsg import (
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

SQUARE = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]
HOLE = [[0.25, 0.25], [0.75, 0.25], [0.75, 0.75], [0.25, 0.25]]


def test_module_dir():
    import geomsg.geometry

    assert set(dir(geomsg.geometry)) == {
        "Point",
        "LineString",
        "Polygon",
        "MultiPoint",
        "MultiLineString",
        "MultiPolygon",
    }


class TestPoint:
    @pytest.mark.parametrize(
        "coords",
        [
            [0.0, 0.0],
            [1.5, -2.25],
            [100.0, 0.5, 12.0],
            [1.0, 2.0, 3.0, 4.0, 5.0],
        ],
    )
    def test_roundtrip(self, coords):
        point = Point.from_builtins(coords)
        assert point.to_builtins() == coords
        assert len(point) == len(coords)

    def test_ints_converted_to_float(self):
        point = Point.from_builtins([1, 2])
        assert point.coordinates == (1.0, 2.0)
        assert all(type(x) is float for x in point.coordinates)

    @pytest.mark.parametrize("coords", [[], [1.0]])
    def test_too_few_coordinates(self, coords):
        with pytest.raises(msgspec.ValidationError, match="length >= 2"):
            Point.from_builtins(coords)

    def test_not_an_array(self):
        with pytest.raises(
            msgspec.ValidationError, match="Expected `array`, got `str` - at `\\$`"
        ):
            Point.from_builtins("0, 0")

    @pytest.mark.parametrize(
        "coords, typ", [([0, "1"], "str"), ([0, None], "null"), ([0, True], "bool")]
    )
    def test_non_numeric_coordinate(self, coords, typ):
        with pytest.raises(
            msgspec.ValidationError,
            match=f"Expected `float`, got `{typ}` - at `\\$\\[1\\]`",
        ):
            Point.from_builtins(coords)

    def test_integer_out_of_float_range(self):
        with pytest.raises(
            msgspec.ValidationError, match="Number out of range - at `\\$\\[0\\]`"
        ):
            Point.from_builtins([10**400, 0])
        with pytest.raises(msgspec.ValidationError, match="Number out of range"):
            Point((0, -(10**400)))

    def test_large_integer_within_float_range(self):
        assert Point.from_builtins([2**64, 0]).coordinates == (float(2**64), 0.0)

    def test_construct(self):
        assert Point([0, 1]) == Point((0.0, 1.0))
        with pytest.raises(msgspec.ValidationError):
            Point([0])
        with pytest.raises(msgspec.ValidationError):
            Point(["a", "b"])

    def test_equality(self):
        a = Point.from_builtins([0.0, 0.0])
        assert a == Point.from_builtins([0.0, 0.0])
        assert a != Point.from_builtins([0.0, 1.0])
        assert a != Point.from_builtins([0.0, 0.0, 0.0])

    def test_named_coordinates(self):
        point = Point((2.0, 48.0, 35.0))
        assert point.longitude == point.easting == 2.0
        assert point.latitude == point.northing == 48.0
        assert point.altitude == 35.0

    def test_altitude_missing(self):
        with pytest.raises(IndexError):
            Point((2.0, 48.0)).altitude

    def test_indexing(self):
        point = Point((1.0, 2.0, 3.0))
        assert point[0] == 1.0
        assert point[-1] == 3.0
        assert list(point) == [1.0, 2.0, 3.0]

    def test_replace(self):
        point = Point((1.0, 2.0))
        other = point.replace(1, 5)
        assert other == Point((1.0, 5.0))
        assert point == Point((1.0, 2.0))

    def test_replace_validates(self):
        with pytest.raises(msgspec.ValidationError):
            Point((1.0, 2.0)).replace(0, "x")


class TestLineString:
    @pytest.mark.parametrize("coords", [[], [[0.0, 0.0]]])
    def test_too_few_points(self, coords):
        with pytest.raises(
            msgspec.ValidationError,
            match=f"Expected `array` of length >= 2, got {len(coords)}",
        ):
            LineString.from_builtins(coords)

    def test_decode(self):
        line = LineString.from_builtins([[0, 0], [1, 1]])
        assert len(line) == 2
        assert line[0] == Point((0.0, 0.0))
        assert line[1] == Point((1.0, 1.0))
        assert line.to_builtins() == [[0.0, 0.0], [1.0, 1.0]]

    def test_invalid_point_fails_whole(self):
        with pytest.raises(msgspec.ValidationError, match="at `\\$\\[1\\]`"):
            LineString.from_builtins([[0, 0], [1], [2, 2]])

    @pytest.mark.parametrize(
        "coords, expected",
        [
            ([[0, 0], [1, 1], [2, 2], [0, 0]], True),
            ([[0, 0], [1, 1], [2, 2], [3, 3]], False),
            ([[0, 0], [1, 1], [0, 0]], False),
            ([[0, 0], [0, 0]], False),
            ([[0, 0], [1, 1], [2, 2], [0, 0, 0]], False),
            (SQUARE, True),
        ],
    )
    def test_is_linear_ring(self, coords, expected):
        assert LineString.from_builtins(coords).is_linear_ring() is expected

    def test_construct(self):
        a, b = Point((0, 0)), Point((1, 1))
        assert LineString((a, b)).points == (a, b)
        with pytest.raises(msgspec.ValidationError, match="length >= 2, got 1"):
            LineString((a,))
        with pytest.raises(msgspec.ValidationError, match="Expected `Point`"):
            LineString((a, [1.0, 1.0]))

    def test_replace(self):
        line = LineString.from_builtins([[0, 0], [1, 1]])
        other = line.replace(1, Point((5, 5)))
        assert other.to_builtins() == [[0.0, 0.0], [5.0, 5.0]]
        assert line.to_builtins() == [[0.0, 0.0], [1.0, 1.0]]


class TestPolygon:
    def test_decode(self):
        polygon = Polygon.from_builtins([SQUARE, HOLE])
        assert len(polygon) == 2
        assert all(ring.is_linear_ring() for ring in polygon)
        assert polygon.to_builtins() == [SQUARE, HOLE]

    def test_empty(self):
        polygon = Polygon.from_builtins([])
        assert len(polygon) == 0
        assert polygon.to_builtins() == []

    def test_open_ring_fails(self):
        open_ring = [[0, 0], [1, 0], [1, 1], [0, 1]]
        with pytest.raises(
            msgspec.ValidationError, match="linear ring .* - at `\\$\\[1\\]`"
        ):
            Polygon.from_builtins([SQUARE, open_ring])

    def test_invalid_line_string_fails(self):
        with pytest.raises(msgspec.ValidationError):
            Polygon.from_builtins([[[0, 0]]])

    def test_construct_validates_rings(self):
        ring = LineString.from_builtins(SQUARE)
        assert Polygon((ring,)).linear_rings == (ring,)
        line = LineString.from_builtins([[0, 0], [1, 1]])
        with pytest.raises(msgspec.ValidationError, match="linear ring"):
            Polygon((ring, line))

    def test_replace(self):
        polygon = Polygon.from_builtins([SQUARE])
        hole = LineString.from_builtins(HOLE)
        assert polygon.replace(0, hole).to_builtins() == [HOLE]
        with pytest.raises(msgspec.ValidationError):
            polygon.replace(0, LineString.from_builtins([[0, 0], [1, 1]]))


class TestMultiGeometries:
    @pytest.mark.parametrize("cls", [MultiPoint, MultiLineString, MultiPolygon])
    def test_empty(self, cls):
        obj = cls.from_builtins([])
        assert len(obj) == 0
        assert obj.to_builtins() == []
        assert cls() == obj

    @pytest.mark.parametrize(
        "cls, coords",
        [
            (MultiPoint, [[0.0, 0.0], [1.0, 2.0, 3.0]]),
            (MultiLineString, [[[0.0, 0.0], [1.0, 1.0]], [[2.0, 2.0], [3.0, 3.0]]]),
            (MultiPolygon, [[SQUARE], [SQUARE, HOLE]]),
        ],
    )
    def test_roundtrip(self, cls, coords):
        obj = cls.from_builtins(coords)
        assert len(obj) == len(coords)
        assert obj.to_builtins() == coords

    @pytest.mark.parametrize(
        "cls, coords",
        [
            (MultiPoint, [[0.0, 0.0], [1.0]]),
            (MultiLineString, [[[0.0, 0.0], [1.0, 1.0]], [[2.0, 2.0]]]),
            (MultiPolygon, [[SQUARE], [[[0, 0], [1, 1], [2, 2], [3, 3]]]]),
            (MultiPoint, {"coordinates": []}),
        ],
    )
    def test_invalid_member_fails_whole(self, cls, coords):
        with pytest.raises(msgspec.ValidationError):
            cls.from_builtins(coords)

    def test_member_types(self):
        point = Point((0, 0))
        line = LineString((point, Point((1, 1))))
        polygon = Polygon.from_builtins([SQUARE])
        assert MultiPoint((point,))[0] is point
        assert MultiLineString((line,))[0] is line
        assert MultiPolygon((polygon,))[0] is polygon
        with pytest.raises(msgspec.ValidationError, match="Expected `LineString`"):
            MultiLineString((point,))
        with pytest.raises(msgspec.ValidationError, match="Expected `Polygon`"):
            MultiPolygon((line,))

    def test_replace(self):
        multi = MultiPoint.from_builtins([[0, 0], [1, 1]])
        other = multi.replace(0, Point((9, 9)))
        assert other.to_builtins() == [[9.0, 9.0], [1.0, 1.0]]
        assert multi.to_builtins() == [[0.0, 0.0], [1.0, 1.0]]
        with pytest.raises(msgspec.ValidationError):
            multi.replace(0, LineString.from_builtins([[0, 0], [1, 1]]))
