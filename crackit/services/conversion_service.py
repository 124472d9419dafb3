from __future__ import annotations

import base64
import binascii
import io
import logging
import zipfile
from pathlib import Path

import requests
from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from lxml import etree

from crackit import config

log = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

NS = {
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
}

UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload a PDF, PPTX, or DOCX file."


class FileConversionError(Exception):
    """Raised when an uploaded file cannot be turned into text.

    `upstream` is set when the failure came from the remote conversion service.
    """

    def __init__(self, message: str, upstream: bool = False):
        super().__init__(message)
        self.upstream = upstream


def detect_kind(filename: str, content_type: str | None) -> str | None:
    """Return "pdf", "pptx" or "docx" for a supported upload, otherwise None."""
    suffix = Path(filename or "").suffix.lower()
    if content_type == PDF_MIME or suffix == ".pdf":
        return "pdf"
    if content_type == PPTX_MIME or suffix == ".pptx":
        return "pptx"
    if content_type == DOCX_MIME or suffix == ".docx":
        return "docx"
    return None


def pdf_to_text(filename: str, data: bytes) -> str:
    """Convert PDF to text through ConvertAPI."""
    secret = config.CONVERT_API_SECRET
    if not secret:
        raise FileConversionError("ConvertAPI key is not configured", upstream=True)

    session = requests.Session()
    try:
        response = session.post(
            f"{config.CONVERT_API_URL}/convert/pdf/to/txt",
            params={"auth": secret},
            files={"File": (Path(filename).name or "upload.pdf", data, PDF_MIME)},
            timeout=config.REQUEST_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as exc:
        log.error("ConvertAPI request for %s failed: %s", filename, exc)
        raise FileConversionError("Failed to convert PDF to text", upstream=True) from exc

    files = payload.get("Files") if isinstance(payload, dict) else None
    file_data = files[0].get("FileData") if files and isinstance(files[0], dict) else None
    if not file_data:
        log.warning("ConvertAPI response for %s has no FileData", filename)
        raise FileConversionError("Invalid response format from ConvertAPI", upstream=True)

    try:
        decoded = base64.b64decode(file_data)
    except (binascii.Error, ValueError) as exc:
        raise FileConversionError("Invalid response format from ConvertAPI", upstream=True) from exc

    text = decoded.decode("utf-8", errors="replace")
    log.info("Converted PDF %s to %d characters via ConvertAPI", filename, len(text))
    return text


def pptx_to_text(data: bytes) -> str:
    """Collect slide text runs in slide order (slide1.xml, slide2.xml, ...)."""
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise FileConversionError("Failed to extract text from PPTX file") from exc

    slides: list[str] = []
    with archive:
        names = set(archive.namelist())
        slide_index = 1
        while f"ppt/slides/slide{slide_index}.xml" in names:
            xml = archive.read(f"ppt/slides/slide{slide_index}.xml")
            try:
                root = etree.fromstring(xml)
            except etree.XMLSyntaxError as exc:
                raise FileConversionError("Failed to extract text from PPTX file") from exc
            runs = [node.text or "" for node in root.iterfind(".//a:t", namespaces=NS)]
            slide_text = " ".join(runs).strip()
            if slide_text:
                slides.append(slide_text)
            slide_index += 1

    return " ".join(slides).strip()


def docx_to_text(data: bytes) -> str:
    """Raw paragraph text of a Word document, table cells included."""
    try:
        document = Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise FileConversionError("Failed to extract text from DOCX file") from exc

    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                lines.extend(paragraph.text for paragraph in cell.paragraphs)
    return "\n".join(lines).strip()


def convert_file_to_text(filename: str, content_type: str | None, data: bytes) -> str:
    """Extract plain text from an uploaded PDF, PPTX or DOCX file."""
    kind = detect_kind(filename, content_type)
    if kind == "pdf":
        return pdf_to_text(filename, data)
    if kind == "pptx":
        return pptx_to_text(data)
    if kind == "docx":
        return docx_to_text(data)
    raise FileConversionError(UNSUPPORTED_MESSAGE)
