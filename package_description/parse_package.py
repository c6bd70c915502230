"""Package description JSON decoding."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from .errors import InvalidJSONError, from_validation_error
from .models import UNION_TAGS, Package

logger = logging.getLogger(__name__)


class PackageParser:
    """Parser for the JSON emitted by a package manager's describe command."""

    def _load(self, data: bytes | str) -> Any:
        """Parse raw JSON text into a generic tree."""
        try:
            text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
            return json.loads(text)
        except UnicodeDecodeError as e:
            raise InvalidJSONError((), f"input is not valid UTF-8: {e.reason}") from e
        except json.JSONDecodeError as e:
            raise InvalidJSONError(
                (), f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"
            ) from e
        except RecursionError as e:
            raise InvalidJSONError((), "JSON nests too deeply") from e

    def parse(self, document: Any) -> Package:
        """Decode an already parsed JSON tree into a Package."""
        try:
            package = Package.model_validate(document)
        except ValidationError as e:
            error = from_validation_error(e, UNION_TAGS)
            logger.debug("Failed to decode package description: %s", error)
            raise error from e
        except RecursionError as e:
            logger.debug("Failed to decode package description: document nests too deeply")
            raise InvalidJSONError((), "document nests too deeply") from e

        logger.debug(
            "Decoded package %r: %d dependencies, %d products, %d targets",
            package.name,
            len(package.dependencies),
            len(package.products),
            len(package.targets),
        )
        return package

    def decode(self, data: bytes | str) -> Package:
        """Decode UTF-8 JSON text into a Package."""
        return self.parse(self._load(data))


def decode(data: bytes | str) -> Package:
    """Decode package description JSON into a Package.

    Args:
        data: UTF-8 JSON text, as bytes or str

    Returns:
        Decoded, immutable Package

    Raises:
        DecodeError: If the text is not valid JSON or does not match the schema
    """
    parser = PackageParser()
    return parser.decode(data)


def parse_package(document: Any) -> Package:
    """Decode an already parsed JSON document into a Package."""
    parser = PackageParser()
    return parser.parse(document)

