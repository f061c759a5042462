"""
Validation for payloads returned by the external classifier
"""
from pydantic import ValidationError
from typing import Any, Dict, Union
import json
import logging

from smart_search.models.filters import ClassifierResponse

logger = logging.getLogger(__name__)


class ClassifierResponseError(ValueError):
    """Raised when the classifier payload cannot be used as a filter set"""


def parse_classifier_response(
    payload: Union[str, bytes, Dict[str, Any]]
) -> ClassifierResponse:
    """
    Validate a classifier payload before any filters are applied

    Args:
        payload: Raw JSON text/bytes or an already decoded object

    Returns:
        Validated ClassifierResponse

    Raises:
        ClassifierResponseError: If the payload is not JSON, not an object,
            lacks a filters object, or fails model validation
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            logger.error(f"Classifier returned malformed JSON: {e}")
            raise ClassifierResponseError(f"Malformed classifier JSON: {e}") from e

    if not isinstance(payload, dict):
        logger.error(f"Classifier returned {type(payload).__name__}, expected object")
        raise ClassifierResponseError("Classifier response must be a JSON object")

    if not isinstance(payload.get("filters"), dict):
        logger.error("Classifier response has no filters object")
        raise ClassifierResponseError("Classifier response is missing 'filters'")

    try:
        return ClassifierResponse.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Classifier response failed validation: {e}")
        raise ClassifierResponseError(f"Invalid classifier response: {e}") from e
