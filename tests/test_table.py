import pytest

import mdreport.builder
import mdreport.config
import mdreport.measure
import mdreport.table
import mdreport.units


Length = mdreport.units.Length
StyledRun = mdreport.measure.StyledRun


#============================================
def cell(text: str, style: str = mdreport.measure.STYLE_NORMAL) -> list[StyledRun]:
	return [StyledRun(style, text)]


#============================================
def text_baselines(operations: list) -> dict[str, float]:
	"""
	Map each shown word to the baseline of its text section.
	"""
	baselines = {}
	current_y = None
	for operands, operator in operations:
		if operator == b"Td":
			current_y = float(operands[1])
		elif operator == b"Tj":
			text = bytes(operands[0]).decode("cp1252")
			if text.strip():
				baselines.setdefault(text, current_y)
	return baselines


#============================================
def test_column_weights() -> None:
	"""
	Column weight is the largest weighted count in that column.
	"""
	rows = [
		[cell("abc"), cell("x")],
		[cell("a"), cell("xy", mdreport.measure.STYLE_CODE)],
	]
	assert mdreport.table.column_weights(rows) == [3, 3]


#============================================
def test_column_widths_proportional() -> None:
	"""
	Usable width splits in proportion to the weights.
	"""
	widths = mdreport.table.column_widths([1, 3], Length(105.0), Length(5.0))
	assert widths[0].mm == pytest.approx(25.0)
	assert widths[1].mm == pytest.approx(75.0)


#============================================
def test_column_widths_even_when_empty() -> None:
	"""
	Zero total weight divides the width evenly.
	"""
	widths = mdreport.table.column_widths([0, 0], Length(100.0), Length(5.0))
	assert [width.mm for width in widths] == pytest.approx([47.5, 47.5])
	assert mdreport.table.column_widths([], Length(100.0), Length(5.0)) == []


#============================================
def test_row_alignment(report_builder) -> None:
	"""
	The next row starts below the tallest cell of the previous row.
	"""
	long_text = " ".join(["wrapping"] * 40)
	rows = [
		[cell("short"), cell(long_text)],
		[cell("next"), cell("row")],
	]
	start_y = report_builder.cursor
	heights = mdreport.table.render_table(report_builder, rows)
	assert heights[0] > heights[1]
	assert heights[1].mm == pytest.approx(6.0 * 0.8)
	assert report_builder.cursor.mm == pytest.approx((start_y - heights[0] - heights[1]).mm)

	baselines = text_baselines(report_builder.operations)
	assert baselines["short"] == pytest.approx(start_y.to_points())
	assert baselines["wrapping"] == pytest.approx(start_y.to_points())
	second_row_y = (start_y - heights[0]).to_points()
	assert baselines["next"] == pytest.approx(second_row_y)
	assert baselines["row"] == pytest.approx(second_row_y)


#============================================
def test_header_row_bold_with_rule(report_builder) -> None:
	"""
	Header rows use the bold face and get a rule beneath.
	"""
	rows = [
		[cell("Name"), cell("Value")],
		[cell("pages"), cell("3")],
	]
	mdreport.table.render_table(report_builder, rows, header_rows=1)
	assert ("Helvetica", True, False) in report_builder.fonts
	assert ("Helvetica", False, False) in report_builder.fonts
	operators = [operator for _operands, operator in report_builder.operations]
	assert b"l" in operators


#============================================
def test_table_breaks_between_rows(report_builder) -> None:
	"""
	A row that does not fit moves to the next page whole.
	"""
	report_builder.write_text_at("top", mdreport.measure.STYLE_NORMAL, 12.0, Length(20.0), report_builder.cursor)
	report_builder.cursor = Length(40.0)
	long_text = " ".join(["wrapping"] * 40)
	mdreport.table.render_table(report_builder, [[cell(long_text), cell("x")]])
	assert len(report_builder.pages) == 1
	baselines = text_baselines(report_builder.operations)
	assert baselines["x"] == pytest.approx(report_builder.geometry.top.to_points())


#============================================
def test_short_row_uses_leading_columns(report_builder) -> None:
	"""
	A row with fewer cells fills the leading columns only.
	"""
	rows = [
		[cell("alpha"), cell("beta"), cell("gamma")],
		[cell("solo")],
	]
	heights = mdreport.table.render_table(report_builder, rows)
	assert len(heights) == 2
	x_positions = {}
	current_x = None
	for operands, operator in report_builder.operations:
		if operator == b"Td":
			current_x = float(operands[0])
		elif operator == b"Tj":
			x_positions.setdefault(bytes(operands[0]).decode("cp1252"), current_x)
	assert x_positions["solo"] == pytest.approx(x_positions["alpha"])
