"""
Decision table evaluation endpoint
"""
import math

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from decision_table.components.contracts import InputRecord
from decision_table.components.evaluator import MissingFieldError, evaluate
from decision_table.core.config import get_settings
from decision_table.core.errors import (
    InvalidParamsFormatError,
    PayloadTooLargeError,
    UnsupportedCombinationError,
    ValueOutOfRangeError,
)
from decision_table.core.logging_config import LoggingConfig
from decision_table.core.metrics import (
    evaluation_failures_total,
    evaluations_total,
)

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(tags=["compute"])


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_input_record(request: Request) -> InputRecord:
    """
    Read and validate the request body as an InputRecord

    Raises:
        InvalidParamsFormatError: wrong content type, malformed JSON or field types
        PayloadTooLargeError: body exceeds the configured limit
    """
    limit = get_settings().max_body_bytes

    if not _is_json_media_type(request.headers.get("content-type", "")):
        raise InvalidParamsFormatError()

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError()

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError()

    try:
        return InputRecord.model_validate_json(bytes(body))
    except ValidationError as e:
        logger.info("Invalid params: %s", e.errors(include_url=False))
        raise InvalidParamsFormatError() from e


@router.post("/compute")
async def compute(record: InputRecord = Depends(read_input_record)):
    """
    Evaluate the decision table for one record

    Returns:
        dict: {"h": outcome tag, "k": computed value}
    """
    logger.info("params %s", record.model_dump(by_alias=True, exclude_none=True, mode="json"))
    rule_set = record.rule_set.value

    try:
        result = evaluate(record)
    except MissingFieldError as e:
        evaluation_failures_total.labels(rule_set=rule_set, field=e.field).inc()
        raise

    evaluations_total.labels(rule_set=rule_set, outcome=result.outcome.value).inc()

    if result.is_error:
        raise UnsupportedCombinationError()
    if not math.isfinite(result.value):
        raise ValueOutOfRangeError()
    return result.to_wire()
