from typing import Any, Union

from msgspec import DecodeError as _DecodeError

from ._core import GeoJSON, as_geojson

__all__ = ("encode", "decode")


def __dir__():
    return __all__


def _load_pyyaml(func):
    """Import PyYAML on first use; it's only needed for this module."""
    try:
        import yaml
    except ImportError:
        raise ImportError(
            f"PyYAML is needed for `geomsg.yaml.{func}`, but isn't installed.\n\n"
            "It's available through the `yaml` extra:\n\n"
            "  $ python -m pip install 'geomsg[yaml]'"
        ) from None
    return yaml


def encode(obj: Any) -> bytes:
    """Serialize a GeoJSON value as YAML.

    Parameters
    ----------
    obj : GeoJSON or payload object
        The value to serialize.

    Returns
    -------
    data : bytes
        The serialized object.

    Notes
    -----
    This function requires that the third-party `PyYAML library
    <https://pyyaml.org/>`_ is installed.

    See Also
    --------
    decode
    """
    yaml = _load_pyyaml("encode")
    # Use the C extension if available
    Dumper = getattr(yaml, "CSafeDumper", yaml.SafeDumper)

    return yaml.dump_all(
        [as_geojson(obj).to_builtins()],
        encoding="utf-8",
        Dumper=Dumper,
        allow_unicode=True,
        sort_keys=False,
    )


def decode(buf: Union[bytes, str]) -> GeoJSON:
    """Deserialize a GeoJSON value from YAML.

    Parameters
    ----------
    buf : bytes-like or str
        The message to decode.

    Returns
    -------
    obj : GeoJSON
        The decoded value. Check ``obj.error`` for GeoJSON level errors.

    Notes
    -----
    This function requires that the third-party `PyYAML library
    <https://pyyaml.org/>`_ is installed.

    See Also
    --------
    encode
    """
    yaml = _load_pyyaml("decode")
    # Use the C extension if available
    Loader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)
    if not isinstance(buf, (str, bytes)):
        # call `memoryview` first, since `bytes(1)` is actually valid
        buf = bytes(memoryview(buf))
    try:
        obj = yaml.load(buf, Loader)
    except yaml.YAMLError as exc:
        raise _DecodeError(str(exc)) from None

    return GeoJSON.from_builtins(obj)
