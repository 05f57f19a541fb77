from typing import Any, Iterable, List, Union

import msgspec

from ._core import GeoJSON, as_geojson

__all__ = ("encode", "decode", "Encoder", "Decoder")


def __dir__():
    return __all__


class Encoder:
    """A JSON encoder for GeoJSON values.

    Accepts `GeoJSON` values as well as bare payload objects (`Point`,
    `Feature`, ...), which are wrapped before encoding.
    """

    def __init__(self):
        self._encoder = msgspec.json.Encoder()

    def encode(self, obj: Any) -> bytes:
        """Serialize a GeoJSON value as JSON.

        Parameters
        ----------
        obj : GeoJSON or payload object
            The value to serialize.

        Returns
        -------
        data : bytes
            The serialized object.

        Raises
        ------
        GeoJSONError
            If ``obj`` holds an error, or isn't a GeoJSON type.
        """
        return self._encoder.encode(as_geojson(obj).to_builtins())

    def encode_lines(self, items: Iterable[Any]) -> bytes:
        """Serialize an iterable of GeoJSON values as newline-delimited JSON."""
        return self._encoder.encode_lines(
            [as_geojson(item).to_builtins() for item in items]
        )


class Decoder:
    """A JSON decoder for GeoJSON values.

    Malformed JSON raises ``msgspec.DecodeError``. Well-formed JSON that isn't
    valid GeoJSON is returned as a `GeoJSON` holding the error.
    """

    def __init__(self):
        self._decoder = msgspec.json.Decoder()

    def decode(self, buf: Union[bytes, str]) -> GeoJSON:
        """Deserialize a GeoJSON value from JSON.

        Parameters
        ----------
        buf : bytes-like or str
            The message to decode.

        Returns
        -------
        obj : GeoJSON
            The decoded value. Check ``obj.error`` for GeoJSON level errors.
        """
        return GeoJSON.from_builtins(self._decoder.decode(buf))

    def decode_lines(self, buf: Union[bytes, str]) -> List[GeoJSON]:
        """Deserialize newline-delimited JSON into a list of GeoJSON values."""
        return [GeoJSON.from_builtins(obj) for obj in self._decoder.decode_lines(buf)]


_encoder = Encoder()
_decoder = Decoder()


def encode(obj: Any) -> bytes:
    """Serialize a GeoJSON value as JSON.

    See Also
    --------
    Encoder.encode
    """
    return _encoder.encode(obj)


def decode(buf: Union[bytes, str]) -> GeoJSON:
    """Deserialize a GeoJSON value from JSON.

    See Also
    --------
    Decoder.decode
    """
    return _decoder.decode(buf)
