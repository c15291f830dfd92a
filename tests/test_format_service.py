import zipfile

import pytest

from services.format_service import (
    docx_to_text,
    format_content,
    read_preview,
    write_output,
)


def test_txt_starts_with_banner():
    out = format_content("body text", "txt", "report", "pdf")
    assert out.startswith("CONVERTED DOCUMENT: report\nORIGINAL FORMAT: pdf\nCONVERTED FORMAT: TXT")
    assert "body text" in out
    assert "Converted with Text Alchemist & File Forge" in out


def test_html_is_escaped_and_split_into_paragraphs():
    out = format_content("<b>one</b>\ntwo", "html", "a&b", "txt")
    assert out.startswith("<!DOCTYPE html>")
    assert "<p>&lt;b&gt;one&lt;/b&gt;</p><p>two</p>" in out
    assert "Converted Document: a&amp;b" in out
    assert "Original format: txt | Converted to: HTML" in out


@pytest.mark.parametrize("target", ["docx", "doc"])
def test_word_wrapper(target):
    out = format_content("hello", target, "memo", "txt")
    assert out.startswith(f"CONVERTED DOCUMENT: memo\nORIGINAL FORMAT: txt\nCONVERTED FORMAT: {target.upper()}")
    assert out.endswith("Converted with Text Alchemist & File Forge")


def test_rtf_document():
    out = format_content("a {brace} and \\slash", "rtf", "memo", "txt")
    assert out.startswith("{\\rtf1")
    assert out.endswith("}")
    assert "\\{brace\\}" in out
    assert "\\\\slash" in out


def test_pdf_text_representation():
    out = format_content("hello", "pdf", "memo", "docx", size_kb=12)
    assert "CONVERTED DOCUMENT: memo" in out
    assert "Original Format: DOCX" in out
    assert "Converted Format: PDF" in out
    assert "File Size: 12 KB" in out


def test_unknown_target_uses_generic_wrapper():
    out = format_content("hello", "odt", "memo", "txt")
    assert "CONVERTED FORMAT: ODT" in out


def test_docx_output_is_a_real_word_file(tmp_path):
    path = tmp_path / "out.docx"
    content = format_content("line one\nline two\x07", "docx", "memo", "txt")
    write_output(content, str(path), "docx")

    assert zipfile.is_zipfile(path)
    text = docx_to_text(str(path))
    assert text.startswith("CONVERTED DOCUMENT: memo")
    assert "line two" in text
    assert read_preview(str(path)) == text


def test_text_output_and_preview(tmp_path):
    path = tmp_path / "out.html"
    write_output("<p>x</p>", str(path), "html")
    assert read_preview(str(path)) == "<p>x</p>"
