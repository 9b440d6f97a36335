"""
Table layout: weighted column widths and row aligned cell wrapping.
"""

# local repo modules
import mdreport.config
import mdreport.measure
import mdreport.units


Length = mdreport.units.Length
StyledRun = mdreport.measure.StyledRun

TABLE_TEXT_SIZE = mdreport.config.TABLE_TEXT_SIZE
TABLE_INDENT = mdreport.config.TABLE_INDENT
TABLE_COLUMN_SPACING = mdreport.config.TABLE_COLUMN_SPACING
CELL_LINE_FACTOR = mdreport.config.CELL_LINE_FACTOR

Cell = list[StyledRun]
Row = list[Cell]


#============================================
def column_weights(rows: list[Row]) -> list[int]:
	"""
	Per column maximum of the weighted character count.

	Args:
		rows: Table rows of cells of styled runs.

	Returns:
		One weight per column.
	"""
	column_count = max((len(row) for row in rows), default=0)
	weights = [0] * column_count
	for row in rows:
		for index, cell in enumerate(row):
			weights[index] = max(weights[index], mdreport.measure.weighted_char_count(cell))
	return weights


#============================================
def column_widths(weights: list[int], available_width: Length, spacing: Length) -> list[Length]:
	"""
	Distribute the usable width proportionally to the column weights.

	Args:
		weights: Column weights.
		available_width: Width for columns plus spacing.
		spacing: Gap between adjacent columns.

	Returns:
		Column widths; equal widths when every weight is zero.
	"""
	if not weights:
		return []
	usable = available_width - spacing * (len(weights) - 1)
	total = sum(weights)
	if total == 0:
		return [usable / len(weights) for _ in weights]
	return [usable * (weight / total) for weight in weights]


#============================================
def bold_cell(cell: Cell) -> Cell:
	"""
	Promote header cell runs to their bold variant.
	"""
	promoted = {
		mdreport.measure.STYLE_NORMAL: mdreport.measure.STYLE_BOLD,
		mdreport.measure.STYLE_ITALIC: mdreport.measure.STYLE_BOLD_ITALIC,
	}
	return [StyledRun(promoted.get(run.style, run.style), run.text) for run in cell]


#============================================
def render_table(builder, rows: list[Row], header_rows: int = 0) -> list[Length]:
	"""
	Lay out a table below the cursor.

	Every cell of a row starts at the same y; the cursor then drops once by
	the tallest cell. Page breaks happen between rows only.

	Args:
		builder: DocumentBuilder.
		rows: Table rows.
		header_rows: Leading rows drawn bold with a rule beneath.

	Returns:
		Height consumed by each row.
	"""
	if not rows:
		return []
	left = builder.left_margin + TABLE_INDENT
	available_width = builder.right_margin - builder.left_margin - TABLE_INDENT * 2
	widths = column_widths(column_weights(rows), available_width, TABLE_COLUMN_SPACING)
	row_heights: list[Length] = []
	for row_index, row in enumerate(rows):
		if row_index < header_rows:
			row = [bold_cell(cell) for cell in row]
		cell_words = [mdreport.measure.runs_to_words(cell, TABLE_TEXT_SIZE) for cell in row]

		line_count = 1
		for words, width in zip(cell_words, widths):
			line_count = max(line_count, builder.cell_line_count(words, TABLE_TEXT_SIZE, width))
		builder.check_page_break(builder.line_height * CELL_LINE_FACTOR * line_count)

		row_start = builder.cursor
		tallest = Length(0.0)
		x = left
		for words, width in zip(cell_words, widths):
			builder.cursor = row_start
			height = builder.write_wrapped_cell(words, x, TABLE_TEXT_SIZE, width)
			tallest = max(tallest, height)
			x = x + width + TABLE_COLUMN_SPACING
		builder.cursor = row_start - tallest
		row_heights.append(tallest)

		if row_index == header_rows - 1:
			rule_y = builder.cursor + builder.line_height * (CELL_LINE_FACTOR / 2.0)
			builder.draw_rule(left, x - TABLE_COLUMN_SPACING, rule_y)
	return row_heights
