from dataclasses import dataclass, field
from typing import Dict

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@dataclass
class Config:
    max_file_size: int = 4 * 1024 * 1024  # 4MB to be safe with base64 overhead
    max_keyword_words: int = 200
    # Outgoing MIME type is derived from the extension, not the reported content type
    mime_types_by_extension: Dict[str, str] = field(default_factory=lambda: {
        "pdf": PDF_MIME_TYPE,
        "docx": DOCX_MIME_TYPE,
    })
    feedback_points_per_criterion: int = 3
    visual_bar_length: int = 5
    default_custom_criteria: int = 2
