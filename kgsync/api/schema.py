"""Validation of reply bodies at the API boundary."""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from kgsync.errors import TransportFailure

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(model: type[ModelT], payload: Any, endpoint: str) -> ModelT:
    """Validate a decoded reply body against ``model``.

    Raises:
        TransportFailure: If the body does not match the expected shape.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.error(
            "Unexpected response shape from %s: %d validation error(s)",
            endpoint,
            e.error_count(),
        )
        raise TransportFailure(f"Malformed response from {endpoint}") from e
