import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config import Config
from ..llm.constants import TaskLLMConfigs
from ..schemas import FileData, ReviewConfiguration, ReviewFeedback
from .compiler import compile_review_prompt

logger = logging.getLogger(__name__)

NO_CONTENT_ERROR = "Please provide text or upload a document to review."
NO_RESPONSE_ERROR = "No response generated from the model."
UNEXPECTED_ERROR = "An unexpected error occurred during analysis."
CONNECTION_ERROR = ("Connection error. The file may be too large or the format is not supported. "
                    "Please try a smaller PDF (under 4MB) or plain text file.")

# Substrings that identify transport-level failures, usually from oversized payloads
TRANSPORT_ERROR_MARKERS = ("Rpc failed", "xhr error", "Connection error", "Server disconnected")


class ReviewRequestError(Exception):
    """A review request failed; the message is safe to show to the user."""


def build_parts(text: str, file: Optional[FileData]) -> List[Dict[str, Any]]:
    """Ordered content parts: the uploaded file first, then the pasted text."""
    parts: List[Dict[str, Any]] = []
    if file is not None:
        parts.append({"inline_data": {"mime_type": file.mime_type, "data": file.data, "name": file.name}})
    if text:
        parts.append({"text": text})
    if not parts:
        raise ReviewRequestError(NO_CONTENT_ERROR)
    return parts


def parse_feedback(response_text: Optional[str]) -> ReviewFeedback:
    """Parse the model output and hold it to the response contract."""
    if not response_text:
        raise ReviewRequestError(NO_RESPONSE_ERROR)
    try:
        data = json.loads(response_text)
    except json.JSONDecodeError as e:
        raise ReviewRequestError(f"The model returned invalid JSON: {e}") from e
    try:
        return ReviewFeedback.model_validate(data)
    except ValidationError as e:
        raise ReviewRequestError(
            f"The model response did not match the review format ({e.error_count()} problems): "
            f"{_first_problem(e)}"
        ) from e


def _first_problem(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(p) for p in first["loc"]) or "response"
    return f"{location}: {first['msg']}"


def classify_error(error: BaseException) -> str:
    """Turn any request failure into one user-facing message."""
    if isinstance(error, ReviewRequestError):
        return str(error) or UNEXPECTED_ERROR
    message = str(error)
    if isinstance(error, ConnectionError) or any(marker in message for marker in TRANSPORT_ERROR_MARKERS):
        return CONNECTION_ERROR
    return message or UNEXPECTED_ERROR


async def analyze_document(llm, configuration: ReviewConfiguration, text: str, file: Optional[FileData],
                           config: Config = None) -> ReviewFeedback:
    """Run one review request against the model. No retries.

    Raises ReviewRequestError carrying the classified, user-facing message,
    whatever step failed.
    """
    task = TaskLLMConfigs.DOCUMENT_REVIEW
    try:
        compiled = compile_review_prompt(
            configuration.category,
            configuration.critique_level,
            configuration.selected_criteria,
            configuration.active_custom_criteria(),
            config=config,
        )
        parts = build_parts(text, file)

        logger.info("Reviewing %s as %s / %s on %d criteria",
                    file.name if file else "pasted text",
                    configuration.category.value, configuration.critique_level.value,
                    len(compiled.criteria_names))
        response_text = await asyncio.to_thread(
            llm.generate_structured,
            parts,
            system=compiled.instruction,
            response_schema=compiled.schema,
            temperature=task.temperature,
            max_tokens=task.max_tokens,
        )
        return parse_feedback(response_text)
    except Exception as e:
        logger.error("Document analysis failed: %s", e)
        raise ReviewRequestError(classify_error(e)) from e
