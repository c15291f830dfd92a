# backend/services/format_service.py
# Placeholder templates: no round-trip fidelity is attempted.

import html
import re

from docx import Document

from services.extract_service import BRAND

RULE = "=" * 45
FOOTER = f"Converted with {BRAND}"

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <title>Converted Document: {name}</title>
  <meta charset="UTF-8">
  <style>
    body {{ font-family: Arial, sans-serif; margin: 40px; line-height: 1.6; }}
    .header {{ background: #f4f4f4; padding: 20px; border-bottom: 1px solid #ddd; }}
    .content {{ padding: 20px; white-space: pre-wrap; }}
    .footer {{ text-align: center; margin-top: 40px; font-size: 0.8em; color: #777; }}
  </style>
</head>
<body>
  <div class="header">
    <h1>Converted Document: {name}</h1>
    <p>Original format: {source} | Converted to: HTML</p>
  </div>

  <div class="content">
    {body}
  </div>

  <div class="footer">
    <p>{footer}</p>
  </div>
</body>
</html>"""

RTF_HEADER = (
    "{\\rtf1\\ansi\\ansicpg1252\n"
    "{\\fonttbl\\f0\\fswiss\\fcharset0 Helvetica;\\f1\\fswiss\\fcharset0 Helvetica-Bold;}\n"
    "\\margl1440\\margr1440\\vieww11520\\viewh8400\\viewkind0\n"
    "\\pard\\pardirnatural\n"
)


def _wrapper(text: str, filename: str, source_format: str, target: str) -> str:
    return (
        f"CONVERTED DOCUMENT: {filename}\n"
        f"ORIGINAL FORMAT: {source_format}\n"
        f"CONVERTED FORMAT: {target.upper()}\n"
        f"\n{text}\n\n"
        f"{FOOTER}"
    )


def _rtf_escape(text: str) -> str:
    text = text.replace("\\", "\\\\").replace("{", "\\{").replace("}", "\\}")
    # non-ASCII characters become \uN? escapes
    out = []
    for ch in text:
        code = ord(ch)
        if code > 127:
            if code > 32767:
                code -= 65536
            out.append(f"\\u{code}?")
        else:
            out.append(ch)
    return "".join(out).replace("\n", "\\\n")


def to_txt(text, filename, source_format):
    return (
        f"CONVERTED DOCUMENT: {filename}\n"
        f"ORIGINAL FORMAT: {source_format}\n"
        "CONVERTED FORMAT: TXT\n"
        f"{RULE}\n"
        f"\n{text}\n\n"
        f"{RULE}\n"
        f"{FOOTER}\n"
        f"{RULE}\n"
    )


def to_html(text, filename, source_format):
    body = "".join(f"<p>{html.escape(line)}</p>" for line in text.split("\n"))
    return HTML_TEMPLATE.format(
        name=html.escape(filename),
        source=html.escape(source_format),
        body=body,
        footer=FOOTER,
    )


def to_rtf(text, filename, source_format):
    return (
        RTF_HEADER
        + "\\f1\\b\\fs28 "
        + _rtf_escape(
            f"CONVERTED DOCUMENT: {filename}\n"
            f"ORIGINAL FORMAT: {source_format}\n"
            "CONVERTED FORMAT: RTF\n"
        )
        + "\\f0\\b0\\fs24 \\\n"
        + _rtf_escape(f"{text}\n\n{FOOTER}")
        + "\n}"
    )


def to_pdf_text(text, filename, source_format, size_kb=None):
    """PDF output is a text representation: no PDF writer is involved."""
    bar = "=" * 51
    lines = [
        bar,
        f"CONVERTED DOCUMENT: {filename}",
        f"Original Format: {source_format.upper()}",
        "Converted Format: PDF",
    ]
    if size_kb is not None:
        lines.append(f"File Size: {size_kb} KB")
    lines += [bar, "", text, "", bar, FOOTER, bar]
    return "\n".join(lines)


def format_content(text: str, target_format: str, filename: str, source_format: str,
                   size_kb: int | None = None) -> str:
    """Wrap extracted text in a template for the target format."""
    target = (target_format or "").lower()

    if target == "txt":
        return to_txt(text, filename, source_format)
    if target == "html":
        return to_html(text, filename, source_format)
    if target in ("docx", "doc"):
        return _wrapper(text, filename, source_format, target)
    if target == "rtf":
        return to_rtf(text, filename, source_format)
    if target == "pdf":
        return to_pdf_text(text, filename, source_format, size_kb)
    return _wrapper(text, filename, source_format, target or "unknown")


def clean_text(text):
    # python-docx rejects characters that are not valid in XML
    text = re.sub(r"[^\x09\x0A\x0D\x20-\uFFFF]", "", text)
    return text.replace("\uFFFE", "").replace("\uFFFF", "")


def write_output(content: str, output_path: str, target_format: str) -> str:
    """Write formatted content; docx targets are packaged as a real Word file."""
    if (target_format or "").lower() == "docx":
        doc = Document()
        for line in clean_text(content).split("\n"):
            doc.add_paragraph(line)
        doc.save(output_path)
    else:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
    return output_path


def docx_to_text(path: str) -> str:
    doc = Document(path)
    return "\n".join(p.text for p in doc.paragraphs)


def read_preview(path: str) -> str:
    """Text shown to the user for a converted file."""
    if path.lower().endswith(".docx"):
        return docx_to_text(path)
    with open(path, "rb") as f:
        return f.read().decode("utf-8", errors="replace")
