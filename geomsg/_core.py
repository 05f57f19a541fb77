import enum
import logging
from typing import Any, Optional, Tuple

import msgspec
from msgspec import ValidationError

from ._utils import at, expect_array, expect_object, expected, get_field, is_json
from .geometry import (
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    _Sequence,
)

logger = logging.getLogger(__name__)


class GeoJSONType(enum.Enum):
    """The value of the ``type`` member of a GeoJSON object"""

    POINT = "Point"
    MULTI_POINT = "MultiPoint"
    LINE_STRING = "LineString"
    MULTI_LINE_STRING = "MultiLineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"
    FEATURE = "Feature"
    FEATURE_COLLECTION = "FeatureCollection"
    UNKNOWN = ""


_GEOMETRY_TYPES = frozenset(
    [
        GeoJSONType.POINT,
        GeoJSONType.MULTI_POINT,
        GeoJSONType.LINE_STRING,
        GeoJSONType.MULTI_LINE_STRING,
        GeoJSONType.POLYGON,
        GeoJSONType.MULTI_POLYGON,
        GeoJSONType.GEOMETRY_COLLECTION,
    ]
)


class ErrorKind(enum.Enum):
    UNSUPPORTED_TYPE = "UnsupportedType"
    INVALID_GEOJSON_OBJECT = "InvalidGeoJSONObject"


class GeoJSONError(ValidationError):
    """Raised (or carried by a `GeoJSON` value) when an object isn't valid
    GeoJSON.

    Parameters
    ----------
    kind : ErrorKind
        ``UNSUPPORTED_TYPE`` if the ``type`` member named no GeoJSON type,
        ``INVALID_GEOJSON_OBJECT`` for any other failure.
    type : str, optional
        The ``type`` member of the failed object, if one could be read.
    detail : str, optional
        A description of the failure, including where in the message it
        happened.
    """

    def __init__(
        self,
        kind: ErrorKind,
        type: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        self.kind = kind
        self.type = type
        self.detail = detail
        if detail is None:
            if kind is ErrorKind.UNSUPPORTED_TYPE:
                detail = f"Unsupported GeoJSON type `{type}`"
            else:
                detail = "Invalid GeoJSON object"
        super().__init__(detail)

    def __eq__(self, other):
        if not isinstance(other, GeoJSONError):
            return NotImplemented
        return (self.kind, self.type, self.detail) == (
            other.kind,
            other.type,
            other.detail,
        )

    __hash__ = ValidationError.__hash__


def _payload_property(tag):
    def get(self):
        return self.object if self.type is tag else None

    get.__doc__ = f"The payload if this is a ``{tag.value}``, otherwise None"
    return property(get)


class GeoJSON:
    """A GeoJSON object of any type.

    Wraps a payload (`Point`, `Feature`, ...) together with its GeoJSON type.
    Values returned by `GeoJSON.from_builtins` may instead hold an error, in
    which case ``type`` is ``GeoJSONType.UNKNOWN`` and ``object`` is None.

    Parameters
    ----------
    obj : object
        The payload. Its class determines ``type``.

    Raises
    ------
    GeoJSONError
        If ``obj`` isn't one of the GeoJSON payload types.
    """

    __slots__ = ("_type", "_object", "_error")

    def __init__(self, obj: Any):
        try:
            tag = _TYPE_BY_CLASS[obj.__class__]
        except KeyError:
            raise GeoJSONError(
                ErrorKind.UNSUPPORTED_TYPE,
                detail=f"Unsupported GeoJSON payload `{obj.__class__.__name__}`",
            ) from None
        self._type = tag
        self._object = obj
        self._error = None

    @classmethod
    def _failed(cls, error, path):
        logger.debug("Failed decoding GeoJSON at %s: %s", path, error)
        out = cls.__new__(cls)
        out._type = GeoJSONType.UNKNOWN
        out._object = None
        out._error = error
        return out

    @property
    def type(self) -> GeoJSONType:
        return self._type

    @property
    def object(self) -> Any:
        """The payload, or None if decoding failed"""
        return self._object

    @property
    def error(self) -> Optional[GeoJSONError]:
        return self._error

    @classmethod
    def from_builtins(cls, obj: Any) -> "GeoJSON":
        """Build a GeoJSON value from a tree of builtin JSON values.

        This never raises for invalid input. Check ``error`` on the result (or
        call ``unwrap``) to find out whether decoding succeeded.

        Parameters
        ----------
        obj : Any
            A tree of builtin JSON values (as returned by ``msgspec.json.decode``).

        Returns
        -------
        out : GeoJSON

        See Also
        --------
        GeoJSON.to_builtins
        """
        try:
            return cls._decode(obj, "$")
        except RecursionError:
            return cls._failed(
                GeoJSONError(
                    ErrorKind.INVALID_GEOJSON_OBJECT,
                    detail="Maximum nesting depth exceeded",
                ),
                "$",
            )

    @classmethod
    def _decode(cls, obj, path):
        try:
            expect_object(obj, path)
            tag = get_field(obj, "type", path)
            if not isinstance(tag, str):
                raise expected("str", tag, f"{path}.type")
        except ValidationError as exc:
            return cls._failed(
                GeoJSONError(ErrorKind.INVALID_GEOJSON_OBJECT, detail=str(exc)), path
            )

        try:
            geo_type = GeoJSONType(tag)
        except ValueError:
            geo_type = GeoJSONType.UNKNOWN
        if geo_type is GeoJSONType.UNKNOWN:
            return cls._failed(
                GeoJSONError(
                    ErrorKind.UNSUPPORTED_TYPE,
                    tag,
                    f"Unsupported GeoJSON type `{tag}`{at(path)}",
                ),
                path,
            )

        payload_cls, key = _PAYLOADS[geo_type]
        try:
            if key is None:
                payload = payload_cls._decode(obj, path)
            else:
                payload = payload_cls._decode(
                    get_field(obj, key, path), f"{path}.{key}"
                )
        except ValidationError as exc:
            return cls._failed(
                GeoJSONError(ErrorKind.INVALID_GEOJSON_OBJECT, tag, str(exc)), path
            )
        return cls(payload)

    def to_builtins(self) -> dict:
        """Convert to a tree of builtin JSON values.

        Raises
        ------
        GeoJSONError
            If this value holds an error rather than a payload.
        """
        if self.error is not None:
            raise self.error
        _, key = _PAYLOADS[self.type]
        payload = self.object.to_builtins()
        if key is None:
            return payload
        return {"type": self.type.value, key: payload}

    def unwrap(self) -> Any:
        """Return the payload, raising the held error if decoding failed."""
        if self.error is not None:
            raise self.error
        return self.object

    def is_geometry(self) -> bool:
        return self.type in _GEOMETRY_TYPES

    point = _payload_property(GeoJSONType.POINT)
    multi_point = _payload_property(GeoJSONType.MULTI_POINT)
    line_string = _payload_property(GeoJSONType.LINE_STRING)
    multi_line_string = _payload_property(GeoJSONType.MULTI_LINE_STRING)
    polygon = _payload_property(GeoJSONType.POLYGON)
    multi_polygon = _payload_property(GeoJSONType.MULTI_POLYGON)
    geometry_collection = _payload_property(GeoJSONType.GEOMETRY_COLLECTION)
    feature = _payload_property(GeoJSONType.FEATURE)
    feature_collection = _payload_property(GeoJSONType.FEATURE_COLLECTION)

    def __eq__(self, other):
        if not isinstance(other, GeoJSON):
            return NotImplemented
        return (
            self.type is other.type
            and self.object == other.object
            and self.error == other.error
        )

    __hash__ = None

    def __repr__(self):
        if self.error is not None:
            return f"GeoJSON(error={self.error!r})"
        return f"GeoJSON({self.object!r})"


def as_geojson(obj: Any) -> GeoJSON:
    """Wrap a payload object in a `GeoJSON`, passing `GeoJSON` values through"""
    if isinstance(obj, GeoJSON):
        return obj
    return GeoJSON(obj)


def _check_geometry(value, path=None):
    if value.error is not None:
        raise value.error
    if not value.is_geometry():
        raise ValidationError(
            f"Expected a geometry, got `{value.type.value}`{at(path)}"
        )
    return value


def _check_feature(value, path=None):
    if value.error is not None:
        raise value.error
    if value.type is not GeoJSONType.FEATURE:
        raise ValidationError(
            f"Expected `Feature`, got `{value.type.value}`{at(path)}"
        )
    return value


class GeometryCollection(_Sequence):
    """A heterogeneous collection of geometries.

    Members may be any geometry, including other collections, but not
    features. Payload objects passed in are wrapped in `GeoJSON`.
    """

    geometries: Tuple[GeoJSON, ...] = ()

    def __post_init__(self):
        self.geometries = tuple(
            _check_geometry(as_geojson(g)) for g in expect_array(self.geometries)
        )

    @classmethod
    def _decode(cls, obj, path):
        expect_array(obj, path)
        geometries = []
        for i, item in enumerate(obj):
            item_path = f"{path}[{i}]"
            geometries.append(
                _check_geometry(GeoJSON._decode(item, item_path), item_path)
            )
        return cls(tuple(geometries))


class Feature(msgspec.Struct):
    """A spatially bounded thing.

    Parameters
    ----------
    geometry: GeoJSON, optional
        The geometry of the feature, or None if it has none. Payload objects
        (`Point`, ...) are wrapped in `GeoJSON` automatically.
    properties: Any, optional
        Arbitrary JSON data. This is kept as is and never interpreted.
    identifier: str, optional
        The ``id`` of the feature.
    """

    geometry: Optional[GeoJSON] = None
    properties: Any = None
    identifier: Optional[str] = None

    def __post_init__(self):
        if self.geometry is not None:
            self.geometry = _check_geometry(as_geojson(self.geometry))
        if not is_json(self.properties):
            raise ValidationError("`properties` may only contain JSON values")
        if self.identifier is not None and not isinstance(self.identifier, str):
            raise expected("str | null", self.identifier)

    @classmethod
    def from_builtins(cls, obj: Any) -> "Feature":
        """Build a Feature from a complete ``{"type": "Feature", ...}`` object.

        Both ``properties`` and ``geometry`` must be present, though either
        may be null. An ``id`` that isn't a string is ignored.
        """
        try:
            return cls._decode(obj, "$")
        except RecursionError:
            raise ValidationError("Maximum nesting depth exceeded") from None

    @classmethod
    def _decode(cls, obj, path):
        expect_object(obj, path)
        properties = get_field(obj, "properties", path)
        geometry = get_field(obj, "geometry", path)
        if geometry is not None:
            geometry_path = f"{path}.geometry"
            geometry = _check_geometry(
                GeoJSON._decode(geometry, geometry_path), geometry_path
            )
        identifier = obj.get("id")
        if not isinstance(identifier, str):
            identifier = None
        return cls(geometry, properties, identifier)

    def to_builtins(self) -> dict:
        out = {
            "type": GeoJSONType.FEATURE.value,
            "properties": self.properties,
            "geometry": None if self.geometry is None else self.geometry.to_builtins(),
        }
        if self.identifier is not None:
            out["id"] = self.identifier
        return out


class FeatureCollection(_Sequence):
    """An ordered collection of features.

    Members are `GeoJSON` values of type ``Feature``; `Feature` objects
    passed in are wrapped automatically.
    """

    features: Tuple[GeoJSON, ...] = ()

    def __post_init__(self):
        self.features = tuple(
            _check_feature(as_geojson(f)) for f in expect_array(self.features)
        )

    @classmethod
    def _decode(cls, obj, path):
        expect_array(obj, path)
        features = []
        for i, item in enumerate(obj):
            item_path = f"{path}[{i}]"
            features.append(_check_feature(GeoJSON._decode(item, item_path), item_path))
        return cls(tuple(features))


# For each type, the payload class and the member holding the payload. A key
# of None means the payload is decoded from (and encoded to) the whole object.
_PAYLOADS = {
    GeoJSONType.POINT: (Point, "coordinates"),
    GeoJSONType.MULTI_POINT: (MultiPoint, "coordinates"),
    GeoJSONType.LINE_STRING: (LineString, "coordinates"),
    GeoJSONType.MULTI_LINE_STRING: (MultiLineString, "coordinates"),
    GeoJSONType.POLYGON: (Polygon, "coordinates"),
    GeoJSONType.MULTI_POLYGON: (MultiPolygon, "coordinates"),
    GeoJSONType.GEOMETRY_COLLECTION: (GeometryCollection, "geometries"),
    GeoJSONType.FEATURE: (Feature, None),
    GeoJSONType.FEATURE_COLLECTION: (FeatureCollection, "features"),
}

_TYPE_BY_CLASS = {cls: tag for tag, (cls, _) in _PAYLOADS.items()}
