# backend/services/extract_service.py

import os
import re
import logging

from PyPDF2 import PdfReader

logger = logging.getLogger(__name__)


BRAND = "Text Alchemist & File Forge"

# text drawn by PDF content streams sits between parentheses: (Hello) Tj
PDF_LITERAL_RE = re.compile(r"\(([^)]+)\)")
PDF_ESCAPE_RE = re.compile(r"\\\\|\\r|\\n|\\t")


def file_size_kb(path: str) -> int:
    return round(os.path.getsize(path) / 1024)


def count_pdf_pages(path: str) -> int | None:
    """Page count from the PDF trailer, or None when PyPDF2 cannot read it."""
    try:
        return len(PdfReader(path).pages)
    except Exception as e:
        logger.debug("Could not read page count of %s: %s", path, e)
        return None


def describe_pdf_file(path: str) -> str:
    size = os.path.getsize(path)
    pages = count_pdf_pages(path)
    lines = [
        "PDF Document Analysis",
        "=====================",
        f"Filename: {os.path.basename(path)}",
        f"Size: {size / 1024:.2f} KB",
        "Type: PDF Document",
    ]
    if pages is not None:
        lines.append(f"Pages: {pages}")
    lines += [
        "",
        f"This PDF document contains {size / 1024:.0f} KB of data.",
        "The content appears to be binary and would require specialized PDF parsing libraries",
        "for full content extraction.",
        "",
        "For a proper conversion, we recommend using a specialized PDF library or online service",
        "that can extract the text content properly.",
    ]
    return "\n".join(lines)


def extract_text(file_path: str, source_format: str) -> str:
    """
    Text for the template formatter.

    PDFs get a canned description. Every other format, text-like or binary,
    is decoded as UTF-8 with replacement characters.
    Never raises: a read failure comes back as an error description.
    """
    try:
        if source_format == "pdf":
            return describe_pdf_file(file_path)

        with open(file_path, "rb") as f:
            data = f.read()
        return data.decode("utf-8", errors="replace")
    except OSError as e:
        logger.error("Error extracting text from %s: %s", file_path, e)
        return f"Error extracting text: {e}"


# ========================================
# Heuristic scraping for merge / split
# ========================================
def scrape_pdf_text(path: str) -> str:
    """
    Join the parenthesised string literals found in the raw PDF bytes.

    Only picks up text that happens to be stored uncompressed, so most real
    PDFs give nothing useful back.
    """
    with open(path, "rb") as f:
        content = f.read().decode("utf-8", errors="replace")

    matches = PDF_LITERAL_RE.findall(content)
    if not matches:
        return ""
    text = " ".join(matches)
    text = PDF_ESCAPE_RE.sub(" ", text)
    return re.sub(r"\s+", " ", text).strip()


def describe_pdf(path: str) -> str:
    """Scraped text under a banner, or a canned description when too little was found."""
    file_name = os.path.basename(path)
    size_kb = file_size_kb(path)
    header = (
        f"CONVERTED PDF: {file_name}\n"
        f"File Size: {size_kb} KB\n"
        f"Converted with: {BRAND}\n"
        "------------------------------------------\n"
    )

    try:
        scraped = scrape_pdf_text(path)
    except OSError as e:
        logger.warning("Error in basic text extraction of %s: %s", path, e)
        scraped = ""

    if len(scraped) > 100:
        return f"{header}\n{scraped}"

    return (
        f"{header}\n"
        "Text Alchemist has created this document based on your PDF.\n"
        "Due to the binary nature of the PDF format, we're providing this\n"
        "simplified text representation.\n"
        "\n"
        "For full PDF content extraction, we'll need to add additional specialized\n"
        "PDF libraries to the application.\n"
    )
