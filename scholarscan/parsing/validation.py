from typing import List, Optional, Tuple

from ..config import Config
from ..schemas import CustomCriterion, FileData

FILE_TOO_LARGE_ERROR = "File size exceeds 4MB limit. Please try a smaller file."
UNSUPPORTED_FILE_ERROR = "Only PDF and DOCX files are supported."
MISSING_CONTENT_ERROR = "Please upload a document or paste text to review."
MISSING_CRITERIA_ERROR = "Please select at least one evaluation criterion or add a custom one."


def file_extension(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def validate_upload(filename: str, size: int, config: Config = None) -> Tuple[Optional[str], Optional[str]]:
    """Check an upload against the size and extension limits.

    Returns (mime_type, error). Exactly one of the two is set. The MIME type
    comes from the extension; whatever the browser reported is ignored.
    """
    config = config or Config()
    if size > config.max_file_size:
        return None, FILE_TOO_LARGE_ERROR

    mime_type = config.mime_types_by_extension.get(file_extension(filename))
    if mime_type is None:
        return None, UNSUPPORTED_FILE_ERROR
    return mime_type, None


def count_words(text: str) -> int:
    return len(text.split()) if text else 0


def accept_keyword_edit(previous: str, proposed: str, max_words: int = 200) -> bool:
    """Edits may always shrink the keyword text, but may not grow it past the cap."""
    proposed_words = count_words(proposed)
    return not (proposed_words > max_words and proposed_words > count_words(previous))


def check_submission(text: str, file: Optional[FileData], selected_criteria: List[str],
                     custom_criteria: List[CustomCriterion]) -> Optional[str]:
    """Return the first precondition a review request violates, or None."""
    if not text and file is None:
        return MISSING_CONTENT_ERROR

    has_custom = any(c.name.strip() for c in custom_criteria)
    if not selected_criteria and not has_custom:
        return MISSING_CRITERIA_ERROR
    return None
