from typing import AsyncIterator, Dict, Optional

from fastapi import Request
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from fashion_variations.api.variations.schemas import UploadedImage
from fashion_variations.config import MAX_UPLOAD_BYTES, UPLOAD_FIELDS
from fashion_variations.exceptions import UploadRejectedError
from fashion_variations.logger import json_logger as logger

MALFORMED_BODY_ERROR = "Malformed multipart body"


class ImagePartCollector:
    """
    python-multipart callbacks that buffer accepted file parts in memory.

    Headers of each part are checked as soon as they are complete, and the
    size ceiling is checked on every data chunk, so a rejected part stops the
    parse without reading the rest of the body. Text fields are discarded.
    """

    def __init__(self):
        self.images: Dict[str, UploadedImage] = {}
        self._headers: Dict[bytes, bytes] = {}
        self._header_field = b""
        self._header_value = b""
        self._field: Optional[str] = None
        self._filename: Optional[str] = None
        self._content_type = ""
        self._buffer: Optional[bytearray] = None

    def callbacks(self) -> dict:
        return {
            "on_part_begin": self.on_part_begin,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
        }

    def on_part_begin(self) -> None:
        self._headers = {}
        self._buffer = None

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._header_field.lower()] = self._header_value
        self._header_field = b""
        self._header_value = b""

    def on_headers_finished(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition", b""))
        if b"filename" not in options:
            return

        field = options.get(b"name", b"").decode("latin-1")
        if field not in UPLOAD_FIELDS or field in self.images:
            logger.warning(f"Rejected upload: unexpected file field '{field}'")
            raise UploadRejectedError("Unexpected field")

        content_type = self._headers.get(b"content-type", b"").decode("latin-1").strip()
        if not content_type.startswith("image/"):
            logger.warning(f"Rejected upload '{field}' with content type '{content_type}'")
            raise UploadRejectedError("Only image files are allowed!")

        self._field = field
        self._filename = options[b"filename"].decode("utf-8", errors="replace")
        self._content_type = content_type
        self._buffer = bytearray()

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        if self._buffer is None:
            return
        self._buffer += data[start:end]
        if len(self._buffer) > MAX_UPLOAD_BYTES:
            logger.warning(f"Rejected upload '{self._field}': exceeds {MAX_UPLOAD_BYTES} bytes")
            raise UploadRejectedError("File too large", status_code=413)

    def on_part_end(self) -> None:
        if self._buffer is not None:
            self.images[self._field] = UploadedImage(
                data=bytes(self._buffer),
                mime_type=self._content_type,
                role=self._field,
                filename=self._filename,
            )
        self._buffer = None


async def parse_upload_stream(content_type_header: str, stream: AsyncIterator[bytes]) -> Dict[str, UploadedImage]:
    """Extract at most one image each under the ``dress`` and ``person`` keys.

    Bodies that are not multipart/form-data yield no images, which the
    generator reports as missing uploads. Files under any other key, or a
    second file under an accepted key, reject the whole request.
    """
    content_type, params = parse_options_header(content_type_header)
    if content_type.lower() != b"multipart/form-data":
        return {}

    boundary = params.get(b"boundary")
    if not boundary:
        raise UploadRejectedError(MALFORMED_BODY_ERROR)

    collector = ImagePartCollector()
    parser = MultipartParser(boundary, collector.callbacks())
    try:
        async for chunk in stream:
            parser.write(chunk)
        parser.finalize()
    except MultipartParseError as e:
        logger.warning(f"Rejected upload: {e}")
        raise UploadRejectedError(MALFORMED_BODY_ERROR) from e
    return collector.images


async def read_variation_uploads(request: Request) -> Dict[str, UploadedImage]:
    """FastAPI dependency wrapping :func:`parse_upload_stream` for the current request."""
    return await parse_upload_stream(request.headers.get("content-type", ""), request.stream())
