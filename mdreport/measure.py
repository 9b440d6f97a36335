"""
Approximate text measurement and word construction.
"""

# Standard Library
import dataclasses

# local repo modules
import mdreport.config
import mdreport.units


Length = mdreport.units.Length

FONT_FAMILY_SANS = mdreport.config.FONT_FAMILY_SANS
FONT_FAMILY_MONO = mdreport.config.FONT_FAMILY_MONO
MONOSPACE_ADVANCE = mdreport.config.MONOSPACE_ADVANCE
REGULAR_WIDTH_FACTOR = mdreport.config.REGULAR_WIDTH_FACTOR
BOLD_WIDTH_FACTOR = mdreport.config.BOLD_WIDTH_FACTOR
CODE_WEIGHT_FACTOR = mdreport.config.CODE_WEIGHT_FACTOR

STYLE_NORMAL = "normal"
STYLE_BOLD = "bold"
STYLE_ITALIC = "italic"
STYLE_BOLD_ITALIC = "bold_italic"
STYLE_CODE = "code"
STYLES = (STYLE_NORMAL, STYLE_BOLD, STYLE_ITALIC, STYLE_BOLD_ITALIC, STYLE_CODE)

CHAR_WIDTH_CLASSES = (
	("il!|.,;:'`I", 0.5),
	("jftrJ()[]{}\"", 0.7),
	("mw", 1.3),
	("MW", 1.4),
	("ACDGHNOQUVXYZ0", 1.1),
)
CHAR_WIDTHS = {char: factor for chars, factor in CHAR_WIDTH_CLASSES for char in chars}


@dataclasses.dataclass(frozen=True)
class FontFace:
	family: str
	bold: bool = False
	italic: bool = False

	@property
	def key(self) -> tuple[str, bool, bool]:
		return (self.family, self.bold, self.italic)

	@property
	def base_font(self) -> str:
		"""
		Standard 14 PostScript name, e.g. Helvetica-BoldOblique.
		"""
		suffix = ""
		if self.bold:
			suffix += "Bold"
		if self.italic:
			suffix += "Oblique"
		if not suffix:
			return self.family
		return f"{self.family}-{suffix}"


@dataclasses.dataclass(frozen=True)
class StyledRun:
	style: str
	text: str


@dataclasses.dataclass(frozen=True)
class Word:
	text: str
	style: str
	width: Length


#============================================
def font_for_style(style: str) -> FontFace:
	"""
	Map a run style onto the font face used to draw it.

	Args:
		style: One of the STYLE_* constants.

	Returns:
		FontFace.
	"""
	if style == STYLE_CODE:
		return FontFace(FONT_FAMILY_MONO)
	bold = style in (STYLE_BOLD, STYLE_BOLD_ITALIC)
	italic = style in (STYLE_ITALIC, STYLE_BOLD_ITALIC)
	return FontFace(FONT_FAMILY_SANS, bold=bold, italic=italic)


#============================================
def style_for_flags(bold: bool, italic: bool) -> str:
	"""
	Pick the run style for the current strong/emphasis nesting.

	Args:
		bold: Inside strong markup.
		italic: Inside emphasis markup.

	Returns:
		Style constant.
	"""
	if bold and italic:
		return STYLE_BOLD_ITALIC
	if bold:
		return STYLE_BOLD
	if italic:
		return STYLE_ITALIC
	return STYLE_NORMAL


#============================================
def char_relative_width(char: str) -> float:
	return CHAR_WIDTHS.get(char, 1.0)


#============================================
def measure_text(text: str, style: str, size: float) -> Length:
	"""
	Approximate the rendered width of a run of text.

	Args:
		text: Text to measure.
		style: Run style.
		size: Font size in points.

	Returns:
		Width as a Length.
	"""
	if style == STYLE_CODE:
		return Length.from_points(len(text) * size * MONOSPACE_ADVANCE)
	base_factor = REGULAR_WIDTH_FACTOR
	if style in (STYLE_BOLD, STYLE_BOLD_ITALIC):
		base_factor = BOLD_WIDTH_FACTOR
	total = sum(char_relative_width(char) for char in text)
	return Length.from_points(total * size * base_factor)


#============================================
def make_word(text: str, style: str, size: float) -> Word:
	return Word(text=text, style=style, width=measure_text(text, style, size))


#============================================
def runs_to_words(runs: list[StyledRun], size: float) -> list[Word]:
	"""
	Split styled runs into measured words on whitespace.

	Args:
		runs: Styled runs in reading order.
		size: Font size in points.

	Returns:
		List of Word entries.
	"""
	words: list[Word] = []
	for run in runs:
		for token in run.text.split():
			words.append(make_word(token, run.style, size))
	return words


#============================================
def weighted_char_count(runs: list[StyledRun]) -> int:
	"""
	Count characters in a cell, weighting literal code wider.

	Args:
		runs: Styled runs of one table cell.

	Returns:
		Weighted character count.
	"""
	total = 0
	for run in runs:
		if run.style == STYLE_CODE:
			total += int(len(run.text) * CODE_WEIGHT_FACTOR)
		else:
			total += len(run.text)
	return total
