"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes

# local repo modules
import mdreport.units


Length = mdreport.units.Length

CREATOR = "mdreport"
SOURCE_ATTACHMENT_NAME = "source"
SOURCE_ATTACHMENT_MIME = "text/markdown"
DEFAULT_CODE_THEME = "default"
DEFAULT_SLIDE_THEME = "light"

FONT_FAMILY_SANS = "Helvetica"
FONT_FAMILY_MONO = "Courier"
TEXT_ENCODING = "cp1252"

BODY_TEXT_SIZE = 12.0
TABLE_TEXT_SIZE = 10.0
CODE_TEXT_SIZE = 10.0
TITLE_TEXT_SIZE = 28.0
BYLINE_TEXT_SIZE = 14.0
HEADING_SIZES = {1: 24.0, 2: 20.0, 3: 16.0}
HEADING_SIZE_DEFAULT = 14.0

# Character width approximation (fraction of the point size)
MONOSPACE_ADVANCE = 0.6
REGULAR_WIDTH_FACTOR = 0.52
BOLD_WIDTH_FACTOR = 0.55

IDEAL_WIDTH_RATIO = 0.95
CELL_LINE_FACTOR = 0.8
CODE_LINE_FACTOR = 0.8
CODE_WEIGHT_FACTOR = 1.5
CODE_INDENT = Length(5.0)
CODE_HEADER_BREAK_FACTOR = 2.0
CODE_HEADER_SPACING_FACTOR = 1.5
CODE_TAB_SIZE = 4
LIST_INDENT = Length(5.0)
LIST_MARKER_GAP = Length(6.0)
QUOTE_INDENT = Length(8.0)
TABLE_INDENT = Length(5.0)
TABLE_COLUMN_SPACING = Length(5.0)
CHECKBOX_SIZE = Length(3.5)
CHECKBOX_PADDING = Length(0.7)
CHECKBOX_BASELINE_DROP = Length(0.4)
STROKE_WIDTH = 0.5

HEADING_SPACING_BEFORE = {1: 1.5, 2: 1.25}
HEADING_SPACING_AFTER = {1: 1.5, 2: 1.25, 3: 1.5}
PARAGRAPH_SPACING = 0.5
LIST_SPACING = 0.5
LIST_ITEM_BREAK_FACTOR = 1.5
CODE_BLOCK_SPACING_BEFORE = 0.5
CODE_BLOCK_SPACING_AFTER = 0.75
TABLE_SPACING_AFTER = 0.5
TITLE_SPACING = 2.5
AUTHOR_SPACING = 1.2
DATE_SPACING = 1.5
TITLE_BREAK_HEIGHT = Length(15.0)
BYLINE_BREAK_HEIGHT = Length(10.0)


@dataclasses.dataclass(frozen=True)
class PageGeometry:
	width: Length
	height: Length
	top: Length
	left_margin: Length
	right_margin: Length
	bottom_margin: Length
	line_height: Length


@dataclasses.dataclass
class RenderConfig:
	slides: bool = False
	code_theme: str | None = None
	embed_source: bool = True
	source_name: str = SOURCE_ATTACHMENT_NAME
	compress: bool = True
	title: str | None = None


@dataclasses.dataclass
class RenderResult:
	pages: int
	embedded_bytes: int
	output_bytes: int


#============================================
def report_geometry() -> PageGeometry:
	"""
	Build the A4 portrait geometry used for reports.

	Returns:
		PageGeometry.
	"""
	page_width, page_height = reportlab.lib.pagesizes.A4
	return PageGeometry(
		width=Length.from_points(page_width),
		height=Length.from_points(page_height),
		top=Length(270.0),
		left_margin=Length(20.0),
		right_margin=Length(190.0),
		bottom_margin=Length(30.0),
		line_height=Length(6.0),
	)


#============================================
def slide_geometry() -> PageGeometry:
	"""
	Build the 16:9 geometry used for slides.

	Returns:
		PageGeometry.
	"""
	return PageGeometry(
		width=Length(254.0),
		height=Length(142.875),
		top=Length(122.875),
		left_margin=Length(15.0),
		right_margin=Length(239.0),
		bottom_margin=Length(20.0),
		line_height=Length(6.0),
	)
