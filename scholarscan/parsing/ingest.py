import asyncio
import base64
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from ..config import Config
from ..schemas import FileData
from .validation import validate_upload

logger = logging.getLogger(__name__)

READ_FAILED_ERROR = "Failed to read file."

UploadSource = Union[str, os.PathLike, bytes, BinaryIO]


@dataclass
class IngestResult:
    file: Optional[FileData] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.file is not None


def _source_size(source: UploadSource) -> int:
    if isinstance(source, (bytes, bytearray)):
        return len(source)
    if isinstance(source, (str, os.PathLike)):
        return os.path.getsize(source)
    # file-like: measure without consuming it
    pos = source.tell()
    size = source.seek(0, os.SEEK_END)
    source.seek(pos)
    return size - pos


def _read_bytes(source: UploadSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as fh:
            return fh.read()
    return source.read()


async def read_upload(source: UploadSource, filename: Optional[str] = None, config: Config = None) -> IngestResult:
    """Validate and base64-encode an uploaded PDF/DOCX.

    `source` may be a path, raw bytes or a binary file object (e.g. a Streamlit
    UploadedFile). Size and type are checked before anything is read. All
    failures come back as `IngestResult.error`; nothing is raised.
    """
    config = config or Config()
    if filename is None:
        filename = os.path.basename(os.fspath(source)) if isinstance(source, (str, os.PathLike)) \
            else getattr(source, "name", "")

    try:
        size = _source_size(source)
    except OSError as e:
        logger.warning("Could not stat upload %s: %s", filename, e)
        return IngestResult(error=READ_FAILED_ERROR)

    mime_type, error = validate_upload(filename, size, config)
    if error:
        logger.info("Rejected upload %s (%d bytes): %s", filename, size, error)
        return IngestResult(error=error)

    try:
        raw = await asyncio.to_thread(_read_bytes, source)
    except (OSError, ValueError) as e:
        logger.warning("Could not read upload %s: %s", filename, e)
        return IngestResult(error=READ_FAILED_ERROR)

    data = base64.b64encode(raw).decode("ascii")
    logger.debug("Read upload %s as %s (%d bytes)", filename, mime_type, len(raw))
    return IngestResult(file=FileData(name=os.path.basename(filename), mime_type=mime_type, data=data))
