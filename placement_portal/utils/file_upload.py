"""
File Upload Utility - Extract text from resume files.

Supported formats:
- PDF (.pdf) using PyPDF2
- Word (.docx) using python-docx
- Plain Text (.txt)

The size limit comes from settings.max_upload_size_mb.
Extracted text feeds the resume analyzer; an empty result is
rejected here so garbled uploads are reported to the student.
The raw upload is kept on disk under settings.resume_dir.
"""

import io
import logging
import os
import uuid
from typing import Tuple
from fastapi import UploadFile, HTTPException
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError
from docx import Document

from placement_portal.core.config import get_settings

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'.pdf', '.docx', '.txt'}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def extract_text_from_file(file: UploadFile) -> Tuple[str, str, bytes]:
    """
    Extract text from uploaded file.

    Args:
        file: FastAPI UploadFile

    Returns:
        Tuple of (extracted_text, filename, raw_content)

    Raises:
        HTTPException on validation/extraction errors
    """
    settings = get_settings()

    # Validate filename
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: PDF, DOCX, TXT"
        )

    # Read content
    content = await file.read()

    # Check size
    if len(content) > settings.max_upload_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {settings.max_upload_size_mb}MB"
        )

    text = extract_text(content, ext)

    if not text.strip():
        raise HTTPException(
            status_code=400,
            detail="Could not extract text from file. File may be empty or corrupted."
        )

    return text, file.filename, content


def save_resume_file(content: bytes, filename: str) -> str:
    """
    Write an uploaded resume under settings.resume_dir.

    Stored names are random so uploads never overwrite each other;
    the original extension is kept for the download content type.

    Returns:
        Path of the stored file
    """
    settings = get_settings()
    os.makedirs(settings.resume_dir, exist_ok=True)
    path = os.path.join(settings.resume_dir, uuid.uuid4().hex + get_file_extension(filename))
    with open(path, "wb") as f:
        f.write(content)
    logger.info("Stored resume file %s as %s", filename, path)
    return path


def extract_text(content: bytes, ext: str) -> str:
    """Dispatch on extension."""
    if ext == '.pdf':
        return extract_from_pdf(content)
    if ext == '.docx':
        return extract_from_docx(content)
    return extract_from_txt(content)


def extract_from_pdf(content: bytes) -> str:
    """Extract text from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(content))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        return '\n'.join(text_parts)
    except (PdfReadError, ValueError, KeyError) as e:
        logger.warning("PDF text extraction failed: %s", e)
        raise HTTPException(status_code=400, detail=f"Error reading PDF: {str(e)}")


def extract_from_docx(content: bytes) -> str:
    """Extract text from DOCX bytes."""
    try:
        doc = Document(io.BytesIO(content))
    except Exception as e:
        # python-docx surfaces zip/xml errors of several types
        logger.warning("DOCX text extraction failed: %s", e)
        raise HTTPException(status_code=400, detail=f"Error reading DOCX: {str(e)}")

    text_parts = []

    # Extract paragraphs
    for para in doc.paragraphs:
        if para.text.strip():
            text_parts.append(para.text)

    # Extract tables
    for table in doc.tables:
        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if row_text:
                text_parts.append(' | '.join(row_text))

    return '\n'.join(text_parts)


def extract_from_txt(content: bytes) -> str:
    """Extract text from TXT bytes."""
    for encoding in ['utf-8', 'cp1252']:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte, so this cannot fail
    return content.decode('latin-1')


def get_supported_formats() -> dict:
    """Get info about supported file formats."""
    settings = get_settings()
    return {
        "supported_formats": [
            {"extension": ".pdf", "name": "PDF"},
            {"extension": ".docx", "name": "Word Document"},
            {"extension": ".txt", "name": "Plain Text"}
        ],
        "max_size_mb": settings.max_upload_size_mb
    }
