"""Frontmatter schema: field specs, type matching, allowed-value checks.

A schema maps field name -> field spec:

    {
        "title":  {"type": "string",  "required": True},
        "draft":  {"type": "boolean", "default": False},
        "status": {"type": str, "allowedValues": ["draft", "published"]},
        "tags":   {"type": "array", "default": []},
        "slug":   {"type": is_slug},   # custom predicate
    }
"""

STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"
ARRAY = "array"
OBJECT = "object"
CUSTOM = "custom"

_TAGS = (STRING, NUMBER, BOOLEAN, ARRAY, OBJECT)

# Builtin types map onto the tags so `str` and "string", `list` and "array" behave the same.
_BUILTIN_TAGS = {
    str: STRING,
    int: NUMBER,
    float: NUMBER,
    bool: BOOLEAN,
    list: ARRAY,
    dict: OBJECT,
}


class TypeDescriptor:
    """Tagged declared type: one of the builtin tags, or custom with a predicate."""

    def __init__(self, tag: str, label: str, predicate=None):
        self.tag = tag
        self.label = label
        self.predicate = predicate

    def __repr__(self):
        return f"TypeDescriptor({self.tag!r}, {self.label!r})"


def _nominal(cls):
    def check(value):
        return isinstance(value, cls)

    return check


def describe_type(declared) -> TypeDescriptor:
    """Normalize a declared type (tag string, Python type, or predicate) to a descriptor.

    The label is taken from the declared type's own name ("String", "Number", ...)
    so errors can name the expected type.
    """
    if isinstance(declared, TypeDescriptor):
        return declared
    if isinstance(declared, str):
        tag = declared.strip().lower()
        if tag not in _TAGS:
            raise ValueError(f"Unknown field type: {declared!r}")
        return TypeDescriptor(tag, tag.capitalize())
    if isinstance(declared, type):
        if declared in _BUILTIN_TAGS:
            tag = _BUILTIN_TAGS[declared]
            return TypeDescriptor(tag, tag.capitalize())
        return TypeDescriptor(CUSTOM, declared.__name__, _nominal(declared))
    if callable(declared):
        return TypeDescriptor(CUSTOM, getattr(declared, "__name__", "custom"), declared)
    raise ValueError(f"Unsupported field type: {declared!r}")


def type_label(value) -> str:
    """Runtime category of a frontmatter value, used as the `got` of INVALID_TYPE."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, list):
        return ARRAY
    if isinstance(value, dict):
        return OBJECT
    return type(value).__name__.lower()


def matches_type(value, declared) -> tuple[bool, str]:
    """Return (valid, expected_label) for value against the declared type.

    Callers handle None (EMPTY_VALUE) before calling this.
    """
    descriptor = describe_type(declared)
    if descriptor.tag == CUSTOM:
        valid = bool(descriptor.predicate(value))
    elif descriptor.tag == BOOLEAN:
        valid = isinstance(value, bool)
    elif descriptor.tag == NUMBER:
        valid = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif descriptor.tag == ARRAY:
        valid = isinstance(value, list)
    elif descriptor.tag == OBJECT:
        valid = isinstance(value, dict)
    else:
        valid = isinstance(value, str)
    return valid, descriptor.label


def matches_allowed_value(value, allowed_values) -> bool:
    """Exact membership. No case folding, no coercion (True does not match 1)."""
    label = type_label(value)
    for allowed in allowed_values:
        if type_label(allowed) == label and allowed == value:
            return True
    return False


def load_schema(raw) -> dict:
    """Validate a raw `specs` mapping and return {field: spec} with descriptors resolved.

    Declaration order is preserved; it drives MISSING_PROP ordering.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Frontmatter specs must be a mapping, got {type(raw).__name__}")

    schema = {}
    for field, spec in raw.items():
        if not isinstance(spec, dict):
            raise ValueError(f"Spec for {field!r} must be a mapping")
        if "type" not in spec:
            raise ValueError(f"Spec for {field!r} has no type")
        allowed = spec.get("allowedValues")
        if allowed is not None and not isinstance(allowed, list):
            raise ValueError(f"allowedValues for {field!r} must be a list")
        entry = dict(spec)
        entry["type"] = describe_type(spec["type"])
        entry["required"] = spec.get("required") is True
        schema[field] = entry
    return schema
