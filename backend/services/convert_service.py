# backend/services/convert_service.py

import asyncio
import enum
import logging
import math
import os
import re
import time
import unicodedata
from dataclasses import dataclass, field

from fastapi.concurrency import run_in_threadpool

from services.extract_service import BRAND, extract_text, describe_pdf, scrape_pdf_text, file_size_kb
from services.format_service import format_content, write_output

logger = logging.getLogger(__name__)

SPLIT_PAGE_COUNT = 3
BANNER = "=" * 65


class ConversionError(Exception):
    pass


class Strategy(enum.Enum):
    MERGE = "merge"
    SPLIT = "split"
    STANDARD = "standard"


@dataclass
class ConversionResult:
    output_path: str
    source_paths: list[str] = field(default_factory=list)
    fallback: bool = False


def sanitize_filename(name: str) -> str:
    # expects a base name without extension
    name = unicodedata.normalize("NFKC", name)
    # characters Windows refuses: \ / : * ? " < > |
    name = re.sub(r'[\\/:*?"<>|]', "_", name)
    return name.strip(" .")


def _stem(path: str) -> str:
    return sanitize_filename(os.path.splitext(os.path.basename(path))[0]) or "document"


def _now_ms() -> int:
    return int(time.time() * 1000)


def plan_strategy(options) -> Strategy:
    """Merge and split only exist for PDFs; everything else is a per-file conversion."""
    if options.from_format == "pdf":
        if options.operation == "merge":
            return Strategy.MERGE
        if options.operation == "split":
            return Strategy.SPLIT
    return Strategy.STANDARD


def validate_input(input_path: str):
    if not os.path.exists(input_path):
        raise ConversionError(f"Input file does not exist: {input_path}")
    if not os.path.isfile(input_path):
        raise ConversionError(f"Not a valid file: {input_path}")
    if os.path.getsize(input_path) == 0:
        raise ConversionError(f"Empty file: {input_path}")
    try:
        with open(input_path, "rb") as f:
            f.read(100)
    except OSError as e:
        raise ConversionError(f"File validation error: {e}") from e


# -------------------------------
# 1) standard conversion
# -------------------------------
def convert_file(input_path: str, output_dir: str, options) -> str:
    validate_input(input_path)
    os.makedirs(output_dir, exist_ok=True)

    base_name = _stem(input_path)
    output_path = os.path.join(output_dir, f"{base_name}_converted.{options.to_format}")
    logger.info("Converting %s to %s (%s -> %s, %s)", input_path, output_path,
                options.from_format, options.to_format, options.operation)

    text = extract_text(input_path, options.from_format)
    logger.debug("Extracted %d characters from %s", len(text), input_path)

    content = format_content(
        text,
        options.to_format,
        base_name,
        options.from_format,
        size_kb=file_size_kb(input_path),
    )
    try:
        write_output(content, output_path, options.to_format)
    except (OSError, ValueError) as e:
        raise ConversionError(f"File conversion failed: {e}") from e
    return output_path


def write_fallback(input_path: str, output_dir: str, options, reason, index: int = 0) -> str:
    """Descriptive stand-in written when a conversion fails."""
    os.makedirs(output_dir, exist_ok=True)
    fallback_path = os.path.join(output_dir, f"converted_{_now_ms()}_{index}.{options.to_format}")
    content = (
        "File conversion attempted but failed.\n"
        f"Original file: {os.path.basename(input_path)}\n"
        f"Original format: {options.from_format}\n"
        f"Requested format: {options.to_format}\n"
        f"Operation: {options.operation}\n"
        f"Reason: {reason}\n"
    )
    with open(fallback_path, "w", encoding="utf-8") as f:
        f.write(content)
    return fallback_path


def _convert_or_fallback(input_path: str, output_dir: str, options, index: int) -> ConversionResult:
    try:
        output_path = convert_file(input_path, output_dir, options)
        logger.info("Conversion successful. Output file: %s", output_path)
        return ConversionResult(output_path, [input_path])
    except Exception as e:
        logger.exception("Conversion of %s failed", input_path)
        return ConversionResult(write_fallback(input_path, output_dir, options, e, index), [input_path], True)


# -------------------------------
# 2) merge
# -------------------------------
def merge_pdf_files(input_paths: list[str], output_dir: str) -> str:
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, f"merged_{_now_ms()}.pdf")

    sections = []
    for index, path in enumerate(input_paths, start=1):
        name = os.path.basename(path)
        try:
            content = describe_pdf(path)
            sections.append(f"--- Document {index}: {name} ---\n\n{content}\n\n")
        except OSError as e:
            logger.warning("Could not extract %s for merge: %s", path, e)
            sections.append(f"--- Document {index}: {name} [Error: Could not extract content] ---\n\n")

    combined = (
        f"{BANNER}\n"
        "MERGED PDF DOCUMENT\n"
        f"{BANNER}\n"
        f"Created with: {BRAND}\n"
        f"Number of source documents: {len(input_paths)}\n"
        f"{BANNER}\n\n"
        + "\n".join(sections)
        + f"\n{BANNER}\n"
        "End of merged document\n"
        f"{BANNER}\n"
    )
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(combined)
    return output_path


# -------------------------------
# 3) split
# -------------------------------
def split_pdf_file(input_path: str, output_dir: str) -> list[str]:
    """Always produces SPLIT_PAGE_COUNT pages, whatever the real page count is."""
    os.makedirs(output_dir, exist_ok=True)
    base_name = _stem(input_path)
    size_kb = file_size_kb(input_path)

    try:
        extracted = scrape_pdf_text(input_path)
    except OSError as e:
        logger.warning("Error extracting text for split of %s: %s", input_path, e)
        extracted = ""

    per_page = math.ceil(len(extracted) / SPLIT_PAGE_COUNT) if extracted else 0
    output_paths = []
    for i in range(SPLIT_PAGE_COUNT):
        page_no = i + 1
        if extracted:
            page_text = extracted[i * per_page:(i + 1) * per_page]
        else:
            page_text = (
                "This page was extracted from the PDF document.\n"
                "Due to the limitations of our current text extraction, we're providing this\n"
                f"simplified representation of page {page_no}.\n"
                "\n"
                "For better PDF splitting capabilities, specialized PDF tools would be needed."
            )

        content = (
            f"{BANNER}\n"
            f"PDF PAGE {page_no} of {SPLIT_PAGE_COUNT}\n"
            f"{BANNER}\n"
            f"Original file: {os.path.basename(input_path)}\n"
            f"File size: {size_kb} KB\n"
            f"Extracted with: {BRAND}\n"
            f"{BANNER}\n\n"
            f"{page_text}\n\n"
            f"{BANNER}\n"
            f"End of page {page_no}\n"
            f"{BANNER}\n"
        )
        page_path = os.path.join(output_dir, f"{base_name}_page_{page_no}.txt")
        with open(page_path, "w", encoding="utf-8") as f:
            f.write(content)
        output_paths.append(page_path)

    return output_paths


# -------------------------------
# 4) dispatcher
# -------------------------------
async def dispatch(input_paths: list[str], output_dir: str, options) -> list[ConversionResult]:
    """
    Run the strategy picked by plan_strategy over the given uploads.

    Missing inputs are skipped. Standard conversions run concurrently and each
    failure is replaced by a fallback file; merge and split errors propagate.
    """
    existing = []
    for path in input_paths:
        if os.path.isfile(path):
            existing.append(path)
        else:
            logger.warning("File not found: %s", path)
    if not existing:
        return []

    strategy = plan_strategy(options)
    logger.info("Dispatching %d file(s) with strategy %s", len(existing), strategy.value)

    if strategy is Strategy.MERGE:
        merged = await run_in_threadpool(merge_pdf_files, existing, output_dir)
        return [ConversionResult(merged, existing)]

    if strategy is Strategy.SPLIT:
        # only the first file is split
        pages = await run_in_threadpool(split_pdf_file, existing[0], output_dir)
        return [ConversionResult(page, [existing[0]]) for page in pages]

    return list(await asyncio.gather(*(
        run_in_threadpool(_convert_or_fallback, path, output_dir, options, index)
        for index, path in enumerate(existing)
    )))


# -------------------------------
# 5) placeholder uploads
# -------------------------------
PLACEHOLDER_PDF = """%PDF-1.4
1 0 obj
<< /Type /Catalog
   /Pages 2 0 R
>>
endobj
2 0 obj
<< /Type /Pages
   /Kids [3 0 R]
   /Count 1
>>
endobj
3 0 obj
<< /Type /Page
   /Parent 2 0 R
   /Resources << /Font << /F1 4 0 R >> >>
   /MediaBox [0 0 612 792]
   /Contents 5 0 R
>>
endobj
4 0 obj
<< /Type /Font
   /Subtype /Type1
   /BaseFont /Helvetica
>>
endobj
5 0 obj
<< /Length {length} >>
stream
{stream}
endstream
endobj
trailer
<< /Size 6
   /Root 1 0 R
>>
%%EOF
"""


def _pdf_literal(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def write_placeholder_document(file_path: str, source_format: str, content: str) -> str:
    """Replace a (near) empty upload with something the converters can work on."""
    if source_format == "pdf":
        stream = f"BT\n/F1 12 Tf\n100 700 Td\n({_pdf_literal(content)}) Tj\nET"
        data = PLACEHOLDER_PDF.replace("{length}", str(len(stream.encode("utf-8")))).replace("{stream}", stream)
    else:
        data = content
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(data)
    return file_path
