import pathlib

import pytest

import mdreport.cli
import mdreport.embed


MARKDOWN = "---\ntitle: CLI\n---\n# Heading\n\nSome text.\n"


#============================================
def write_input(tmp_path: pathlib.Path) -> pathlib.Path:
	path = tmp_path / "notes.md"
	path.write_text(MARKDOWN, encoding="utf-8")
	return path


#============================================
def test_infer_format() -> None:
	"""
	The format flag wins, then the output extension, then pdf.
	"""
	assert mdreport.cli.infer_format("deck.slides", None) == "slides"
	assert mdreport.cli.infer_format("deck.SLIDES", None) == "slides"
	assert mdreport.cli.infer_format("report.pdf", None) == "pdf"
	assert mdreport.cli.infer_format("report.html", None) == "pdf"
	assert mdreport.cli.infer_format(None, None) == "pdf"
	assert mdreport.cli.infer_format("report.pdf", "slides") == "slides"


#============================================
def test_render_default_output(tmp_path: pathlib.Path, capsys) -> None:
	"""
	Without -o the PDF lands next to the input.
	"""
	input_path = write_input(tmp_path)
	mdreport.cli.main([str(input_path)])
	output_path = tmp_path / "notes.pdf"
	assert output_path.exists()
	captured = capsys.readouterr()
	assert "Pages written: 1" in captured.out
	assert f"PDF report generated: {output_path}" in captured.out
	assert mdreport.embed.extract_markdown(output_path.read_bytes()) == MARKDOWN


#============================================
def test_render_slides_from_extension(tmp_path: pathlib.Path, capsys) -> None:
	"""
	A .slides output path selects slide mode.
	"""
	input_path = write_input(tmp_path)
	output_path = tmp_path / "deck.slides"
	mdreport.cli.main([str(input_path), "-o", str(output_path), "--no-embed-source"])
	assert output_path.read_bytes().startswith(b"%PDF-")
	captured = capsys.readouterr()
	assert "Format: slides" in captured.out
	assert "Source embedded: no" in captured.out


#============================================
def test_extract_round_trip(tmp_path: pathlib.Path) -> None:
	"""
	--extract writes the embedded markdown back out.
	"""
	input_path = write_input(tmp_path)
	pdf_path = tmp_path / "out.pdf"
	mdreport.cli.main([str(input_path), "-o", str(pdf_path)])
	mdreport.cli.main([str(pdf_path), "--extract"])
	assert (tmp_path / "out.md").read_text(encoding="utf-8") == MARKDOWN


#============================================
def test_extract_without_source_fails(tmp_path: pathlib.Path, capsys) -> None:
	"""
	Extraction failures exit with status 1 and an error line.
	"""
	input_path = write_input(tmp_path)
	pdf_path = tmp_path / "plain.pdf"
	mdreport.cli.main([str(input_path), "-o", str(pdf_path), "--no-embed-source"])
	with pytest.raises(SystemExit) as excinfo:
		mdreport.cli.main([str(pdf_path), "--extract"])
	assert excinfo.value.code == 1
	assert "Error extracting markdown" in capsys.readouterr().err


#============================================
def test_missing_input_fails(tmp_path: pathlib.Path, capsys) -> None:
	"""
	An unreadable input file exits with status 1.
	"""
	with pytest.raises(SystemExit) as excinfo:
		mdreport.cli.main([str(tmp_path / "absent.md")])
	assert excinfo.value.code == 1
	assert "Failed to read" in capsys.readouterr().err


#============================================
def test_list_themes(capsys) -> None:
	"""
	--list-themes needs no input file.
	"""
	mdreport.cli.main(["--list-themes"])
	out = capsys.readouterr().out
	assert "monokai" in out
	assert "gradient-sunset" in out
	assert "top-left-to-bottom-right" in out


#============================================
def test_input_required() -> None:
	"""
	Rendering without an input is a usage error.
	"""
	with pytest.raises(SystemExit) as excinfo:
		mdreport.cli.main([])
	assert excinfo.value.code == 2


#============================================
def test_crlf_source_is_embedded_byte_exact(tmp_path: pathlib.Path) -> None:
	"""
	CRLF and lone CR line endings survive embedding and extraction.
	"""
	source = b"# Title\r\n\r\nline one\r\nline two\rline three\r\n"
	input_path = tmp_path / "crlf.md"
	input_path.write_bytes(source)
	pdf_path = tmp_path / "crlf.pdf"
	mdreport.cli.main([str(input_path), "-o", str(pdf_path)])
	assert mdreport.embed.extract_attachment(pdf_path.read_bytes()) == source
	extracted_path = tmp_path / "extracted.md"
	mdreport.cli.main([str(pdf_path), "--extract", "-o", str(extracted_path)])
	assert extracted_path.read_bytes() == source
