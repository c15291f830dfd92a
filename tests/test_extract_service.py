from services.extract_service import (
    describe_pdf,
    describe_pdf_file,
    extract_text,
    scrape_pdf_text,
)
from services.convert_service import write_placeholder_document


def test_text_formats_are_decoded(tmp_path):
    path = tmp_path / "notes"
    path.write_text("héllo wörld", encoding="utf-8")
    assert extract_text(str(path), "md") == "héllo wörld"


def test_binary_bytes_do_not_raise(tmp_path):
    path = tmp_path / "blob"
    path.write_bytes(b"\xff\xfe\x00abc")
    text = extract_text(str(path), "docx")
    assert text.endswith("abc")


def test_pdf_gets_canned_description(tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4\n" + b"x" * 2048)
    text = extract_text(str(path), "pdf")
    assert text.startswith("PDF Document Analysis")
    assert "Filename: report.pdf" in text
    assert "Size: 2.01 KB" in text


def test_read_error_becomes_description(tmp_path):
    text = extract_text(str(tmp_path / "missing"), "txt")
    assert text.startswith("Error extracting text:")
    text = extract_text(str(tmp_path / "missing.pdf"), "pdf")
    assert text.startswith("Error extracting text:")


def test_scrape_pdf_text_reads_literals(tmp_path):
    path = tmp_path / "small.pdf"
    write_placeholder_document(str(path), "pdf", "Content from small for testing conversion to txt.")
    assert scrape_pdf_text(str(path)) == "Content from small for testing conversion to txt."


def test_scrape_pdf_text_strips_escapes(tmp_path):
    path = tmp_path / "esc.pdf"
    path.write_bytes(b"BT (Hello\\nthere) Tj (  big   gap ) Tj ET")
    assert scrape_pdf_text(str(path)) == "Hello there big gap"


def test_describe_pdf_uses_scraped_text_when_long_enough(tmp_path):
    path = tmp_path / "long.pdf"
    words = " ".join(f"({w})" for w in ["word"] * 40)
    path.write_text(f"BT {words} ET")
    text = describe_pdf(str(path))
    assert text.startswith("CONVERTED PDF: long.pdf")
    assert "word word word" in text


def test_describe_pdf_falls_back_to_canned_text(tmp_path):
    path = tmp_path / "short.pdf"
    path.write_text("BT (hi) Tj ET")
    text = describe_pdf(str(path))
    assert "simplified text representation" in text


def test_describe_pdf_file_tolerates_broken_pdf(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"not a pdf at all")
    text = describe_pdf_file(str(path))
    assert "Pages:" not in text
    assert "Type: PDF Document" in text


def test_every_non_pdf_format_decodes_the_same(tmp_path):
    path = tmp_path / "mixed"
    path.write_bytes("plain ünïcode".encode("utf-8"))
    assert {extract_text(str(path), fmt) for fmt in ("txt", "json", "docx", "xlsx")} == {"plain ünïcode"}
