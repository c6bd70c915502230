"""Pydantic building blocks for the package description schema.

The describe output encodes variants in two ad-hoc ways: an object holding
exactly one of several candidate keys, and payloads wrapped in a one-element
array. The helpers here turn both into ordinary pydantic validation so every
failure surfaces as a ``ValidationError`` with its location.
"""

from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Tag
from pydantic_core import PydanticCustomError

MISSING_DISCRIMINATOR = "missing_discriminator"
MALFORMED_PAYLOAD = "malformed_payload"


class DescribedModel(BaseModel):
    """Base for every decoded record: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


def unwrap_single(value: Any) -> Any:
    """Return the first element of an array used as a one-value tuple.

    Elements after the first are ignored.
    """
    if not isinstance(value, (list, tuple)):
        raise PydanticCustomError(MALFORMED_PAYLOAD, "expected an array wrapping the payload")
    if not value:
        raise PydanticCustomError(MALFORMED_PAYLOAD, "payload array is empty")
    return value[0]


def unwrap_payload(data: Any, key: str, field: str) -> Any:
    """Map ``{key: [value]}`` onto ``{field: value}`` for a variant model."""
    if isinstance(data, dict) and key in data:
        return {field: unwrap_single(data[key])}
    return data


def nested_payload(data: Any, key: str) -> Any:
    """Map ``{key: {...}}`` onto the inner object for a variant model."""
    if isinstance(data, dict) and key in data:
        return data[key]
    return data


def key_presence(*cases: tuple[str, type[BaseModel]]) -> Any:
    """Build a union selected by which candidate key an object contains.

    ``cases`` pairs each JSON key with its variant model and is checked in
    order: the first key present wins, even when others are present too.
    Variants are tagged with their class name.
    """
    candidates = ", ".join(key for key, _ in cases)

    def first_present_key(value: Any) -> str | None:
        if isinstance(value, BaseModel):
            return type(value).__name__
        if isinstance(value, dict):
            for key, model in cases:
                if key in value:
                    return model.__name__
        return None

    variants = tuple(Annotated[model, Tag(model.__name__)] for _, model in cases)
    return Annotated[
        Union[variants],
        Discriminator(
            first_present_key,
            custom_error_type=MISSING_DISCRIMINATOR,
            custom_error_message="no matching key found",
            custom_error_context={"candidates": candidates},
        ),
    ]
