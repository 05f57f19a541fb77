from msgspec import ValidationError

# Names used for builtin JSON values in error messages. Matches the names
# msgspec itself uses when reporting decode errors.
_JSON_TYPE_NAMES = {
    type(None): "null",
    bool: "bool",
    int: "int",
    float: "float",
    str: "str",
    list: "array",
    tuple: "array",
    dict: "object",
}


def json_type_name(obj):
    return _JSON_TYPE_NAMES.get(type(obj), type(obj).__name__)


def at(path):
    """The `` - at `$...` `` suffix appended to error messages"""
    return f" - at `{path}`" if path else ""


def expected(name, obj, path=None):
    return ValidationError(f"Expected `{name}`, got `{json_type_name(obj)}`{at(path)}")


def expect_array(obj, path=None, min_length=0):
    """Check that ``obj`` is a JSON array with at least ``min_length`` items.

    Tuples are accepted alongside lists so that objects built in Python
    (rather than decoded from a message) go through the same checks.
    """
    if not isinstance(obj, (list, tuple)):
        raise expected("array", obj, path)
    if len(obj) < min_length:
        raise ValidationError(
            f"Expected `array` of length >= {min_length}, got {len(obj)}{at(path)}"
        )
    return obj


def expect_object(obj, path=None):
    if not isinstance(obj, dict):
        raise expected("object", obj, path)
    return obj


def get_field(obj, name, path=None):
    try:
        return obj[name]
    except KeyError:
        raise ValidationError(
            f"Object missing required field `{name}`{at(path)}"
        ) from None


def to_position(obj, path=None):
    """Convert a JSON array of numbers into a tuple of floats.

    Non-numeric items are rejected, ``bool`` included, even though it's an
    ``int`` subclass in Python.
    """
    expect_array(obj, path, min_length=2)
    out = []
    for i, x in enumerate(obj):
        if type(x) is bool or not isinstance(x, (int, float)):
            raise expected("float", x, f"{path}[{i}]" if path else None)
        try:
            out.append(float(x))
        except OverflowError:
            # Python ints decoded from JSON are unbounded
            raise ValidationError(
                f"Number out of range{at(f'{path}[{i}]' if path else None)}"
            ) from None
    return tuple(out)


def is_json(obj):
    """Whether ``obj`` is a tree made only of builtin JSON values.

    Walks the tree with an explicit stack, so arbitrarily deep ``properties``
    don't hit the recursion limit.
    """
    stack = [obj]
    seen = set()
    while stack:
        x = stack.pop()
        if x is None or isinstance(x, (str, bool, int, float)):
            continue
        if id(x) in seen:
            continue
        seen.add(id(x))
        if isinstance(x, (list, tuple)):
            stack.extend(x)
        elif isinstance(x, dict):
            if not all(isinstance(k, str) for k in x):
                return False
            stack.extend(x.values())
        else:
            return False
    return True
