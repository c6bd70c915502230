"""Decode errors raised while reading a package description."""

from collections.abc import Collection

from pydantic import ValidationError

from .decoding import MALFORMED_PAYLOAD, MISSING_DISCRIMINATOR

PathComponent = str | int

_EXPECTED_TYPES = {
    "string_type": "string",
    "int_type": "integer",
    "tuple_type": "array",
    "list_type": "array",
    "model_type": "object",
    "model_attributes_type": "object",
    "dict_type": "object",
}


def format_path(path: tuple[PathComponent, ...]) -> str:
    """Render a decode path as ``targets[1].sources[0]``."""
    if not path:
        return "<root>"

    rendered = ""
    for component in path:
        if isinstance(component, int):
            rendered += f"[{component}]"
        elif rendered:
            rendered += f".{component}"
        else:
            rendered = component
    return rendered


class DecodeError(Exception):
    """Base class for every failure to decode a package description.

    Args:
        path: Field names and array indices traversed to reach the bad value
        message: Human-readable description of the failure
    """

    def __init__(self, path: tuple[PathComponent, ...], message: str):
        self.path = tuple(path)
        self.message = message
        super().__init__(f"{message} at {format_path(self.path)}")


class MissingDiscriminatorError(DecodeError):
    """A tagged-union object contained none of its candidate keys."""

    def __init__(self, path: tuple[PathComponent, ...], candidates: tuple[str, ...]):
        self.candidates = candidates
        super().__init__(
            path, f"no matching key found (expected one of: {', '.join(candidates)})"
        )


class UnrecognizedTagError(DecodeError):
    """An enumerated tag held a value outside its closed set."""

    def __init__(self, path: tuple[PathComponent, ...], tag: str, allowed: str):
        self.tag = tag
        self.allowed = allowed
        super().__init__(path, f"unrecognized tag {tag!r} (expected {allowed})")


class MissingRequiredFieldError(DecodeError):
    """A required record field was absent."""

    def __init__(self, path: tuple[PathComponent, ...], key: str):
        self.key = key
        super().__init__(path, f"missing required field {key!r}")


class TypeMismatchError(DecodeError):
    """A JSON value did not have the expected type."""

    def __init__(self, path: tuple[PathComponent, ...], expected: str, found: object):
        self.expected = expected
        self.found = _json_type_name(found)
        super().__init__(path, f"expected {expected}, found {self.found}")


class MalformedPayloadError(DecodeError):
    """A tuple-in-array payload was not an array, or was empty."""


class InvalidJSONError(DecodeError):
    """The input was not valid UTF-8 JSON text, or nested too deeply."""


def from_validation_error(exc: ValidationError, tags: Collection[str] = ()) -> DecodeError:
    """Translate the first error pydantic reported into a DecodeError.

    Args:
        exc: The validation failure
        tags: Union member tags pydantic adds to locations; dropped from paths

    Returns:
        The matching DecodeError subclass, carrying the decode path
    """
    error = exc.errors()[0]
    path = tuple(part for part in error["loc"] if part not in tags)
    kind = error["type"]
    ctx = error.get("ctx", {})

    if kind == "missing":
        return MissingRequiredFieldError(path[:-1], str(path[-1]))
    if kind == "union_tag_not_found":
        return MissingRequiredFieldError(path, str(ctx.get("discriminator", "")).strip("'"))
    if kind == MISSING_DISCRIMINATOR:
        return MissingDiscriminatorError(path, tuple(ctx["candidates"].split(", ")))
    if kind == "union_tag_invalid":
        return UnrecognizedTagError(path, str(ctx["tag"]), ctx["expected_tags"])
    if kind == "enum":
        return UnrecognizedTagError(path, str(error["input"]), ctx["expected"])
    if kind == MALFORMED_PAYLOAD:
        return MalformedPayloadError(path, error["msg"])
    return TypeMismatchError(path, _EXPECTED_TYPES.get(kind, kind), error["input"])


def _json_type_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
