import pytest
import reportlab.pdfbase.pdfmetrics

import mdreport.measure
import mdreport.units


Length = mdreport.units.Length
StyledRun = mdreport.measure.StyledRun

PANGRAM = "The quick brown fox jumps over the lazy dog"


#============================================
def test_monospace_width_is_fixed_advance() -> None:
	"""
	Code text uses 0.6 em per character.
	"""
	width = mdreport.measure.measure_text("abcdef", mdreport.measure.STYLE_CODE, 10.0)
	assert width.to_points() == pytest.approx(6 * 10.0 * 0.6)


#============================================
def test_monospace_matches_courier_metrics() -> None:
	"""
	Code widths match the real Courier metrics.
	"""
	text = "let x = compute(42);"
	width = mdreport.measure.measure_text(text, mdreport.measure.STYLE_CODE, 10.0)
	expected = reportlab.pdfbase.pdfmetrics.stringWidth(text, "Courier", 10.0)
	assert width.to_points() == pytest.approx(expected)


#============================================
def test_regular_width_close_to_helvetica() -> None:
	"""
	The proportional approximation stays within 10 percent of Helvetica.
	"""
	width = mdreport.measure.measure_text(PANGRAM, mdreport.measure.STYLE_NORMAL, 12.0)
	expected = reportlab.pdfbase.pdfmetrics.stringWidth(PANGRAM, "Helvetica", 12.0)
	assert abs(width.to_points() - expected) / expected < 0.10


#============================================
def test_bold_wider_than_regular() -> None:
	"""
	Bold text measures wider than regular text.
	"""
	regular = mdreport.measure.measure_text("Heading", mdreport.measure.STYLE_NORMAL, 12.0)
	bold = mdreport.measure.measure_text("Heading", mdreport.measure.STYLE_BOLD, 12.0)
	assert bold > regular


#============================================
def test_character_classes() -> None:
	"""
	Narrow, default and wide characters scale differently.
	"""
	narrow = mdreport.measure.measure_text("iiii", mdreport.measure.STYLE_NORMAL, 12.0)
	default = mdreport.measure.measure_text("eeee", mdreport.measure.STYLE_NORMAL, 12.0)
	wide = mdreport.measure.measure_text("MMMM", mdreport.measure.STYLE_NORMAL, 12.0)
	assert narrow < default < wide
	assert mdreport.measure.char_relative_width("☃") == 1.0


#============================================
def test_measure_is_pure() -> None:
	"""
	The same input always gives the same width.
	"""
	first = mdreport.measure.measure_text(PANGRAM, mdreport.measure.STYLE_ITALIC, 11.0)
	second = mdreport.measure.measure_text(PANGRAM, mdreport.measure.STYLE_ITALIC, 11.0)
	assert first == second


#============================================
def test_runs_to_words_keeps_styles() -> None:
	"""
	Runs split into measured words on whitespace.
	"""
	runs = [
		StyledRun(mdreport.measure.STYLE_NORMAL, "plain  words "),
		StyledRun(mdreport.measure.STYLE_CODE, "x = 1"),
	]
	words = mdreport.measure.runs_to_words(runs, 12.0)
	assert [word.text for word in words] == ["plain", "words", "x", "=", "1"]
	assert words[0].style == mdreport.measure.STYLE_NORMAL
	assert words[-1].style == mdreport.measure.STYLE_CODE
	assert words[0].width == mdreport.measure.measure_text("plain", mdreport.measure.STYLE_NORMAL, 12.0)


#============================================
def test_weighted_char_count() -> None:
	"""
	Code characters count one and a half times.
	"""
	runs = [
		StyledRun(mdreport.measure.STYLE_NORMAL, "abcd"),
		StyledRun(mdreport.measure.STYLE_CODE, "xy"),
	]
	assert mdreport.measure.weighted_char_count(runs) == 7


#============================================
def test_font_faces() -> None:
	"""
	Styles map onto standard font names.
	"""
	assert mdreport.measure.font_for_style(mdreport.measure.STYLE_CODE).base_font == "Courier"
	assert mdreport.measure.font_for_style(mdreport.measure.STYLE_NORMAL).base_font == "Helvetica"
	assert mdreport.measure.font_for_style(mdreport.measure.STYLE_BOLD).base_font == "Helvetica-Bold"
	face = mdreport.measure.font_for_style(mdreport.measure.STYLE_BOLD_ITALIC)
	assert face.base_font == "Helvetica-BoldOblique"
	assert mdreport.measure.style_for_flags(True, False) == mdreport.measure.STYLE_BOLD
	assert mdreport.measure.style_for_flags(False, True) == mdreport.measure.STYLE_ITALIC
