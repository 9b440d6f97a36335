"""
Syntax highlighting backed by Pygments.
"""

# PIP3 modules
import pygments.lexers
import pygments.lexers.special
import pygments.styles
import pygments.util

# local repo modules
import mdreport.config
import mdreport.theme


RGB = mdreport.theme.RGB
DEFAULT_CODE_THEME = mdreport.config.DEFAULT_CODE_THEME
LEXER_OPTIONS = {"stripnl": False, "ensurenl": False}

ColoredRun = tuple[RGB, str]


#============================================
def list_code_themes() -> list[str]:
	return sorted(pygments.styles.get_all_styles())


#============================================
def resolve_style(name: str | None):
	"""
	Look up a Pygments style, falling back to the default theme.

	Args:
		name: Style name or None.

	Returns:
		Tuple of (style name, style class).
	"""
	if name:
		try:
			return (name, pygments.styles.get_style_by_name(name))
		except pygments.util.ClassNotFound:
			pass
	return (DEFAULT_CODE_THEME, pygments.styles.get_style_by_name(DEFAULT_CODE_THEME))


#============================================
def resolve_lexer(language: str, filename: str | None = None):
	"""
	Find a lexer by language alias, then by filename, else plain text.

	Args:
		language: Language identifier or file extension.
		filename: Optional file name from the info string.

	Returns:
		Pygments lexer instance.
	"""
	if language:
		try:
			return pygments.lexers.get_lexer_by_name(language, **LEXER_OPTIONS)
		except pygments.util.ClassNotFound:
			pass
	if filename:
		try:
			return pygments.lexers.get_lexer_for_filename(filename, **LEXER_OPTIONS)
		except pygments.util.ClassNotFound:
			pass
	return pygments.lexers.special.TextLexer(**LEXER_OPTIONS)


class Highlighter:
	"""
	Turns source lines into (color, text) runs.
	"""

	def __init__(self, style_name: str | None = None, default_color: RGB = mdreport.theme.BLACK) -> None:
		self.style_name, self.style = resolve_style(style_name)
		self.default_color = default_color
		self._colors: dict[object, RGB] = {}

	def color_for(self, token_type) -> RGB:
		color = self._colors.get(token_type)
		if color is None:
			value = self.style.style_for_token(token_type).get("color")
			color = mdreport.theme.hex_to_rgb(value) if value else self.default_color
			self._colors[token_type] = color
		return color

	def highlight_lines(
		self,
		language: str,
		lines: list[str],
		filename: str | None = None,
	) -> list[list[ColoredRun]]:
		"""
		Highlight a block, lexing it once so multi-line tokens keep state.

		Args:
			language: Language identifier.
			lines: Source lines without newlines.
			filename: Optional file name used when the language is unknown.

		Returns:
			One list of runs per input line; adjacent runs of the same color
			are merged.
		"""
		lexer = resolve_lexer(language, filename)
		result: list[list[ColoredRun]] = [[]]
		for token_type, value in lexer.get_tokens("\n".join(lines)):
			color = self.color_for(token_type)
			for index, part in enumerate(value.split("\n")):
				if index > 0:
					result.append([])
				if not part:
					continue
				runs = result[-1]
				if runs and runs[-1][0] == color:
					runs[-1] = (color, runs[-1][1] + part)
				else:
					runs.append((color, part))
		while len(result) < len(lines):
			result.append([])
		return result[:len(lines)]

	def highlight(self, language: str, line: str) -> list[ColoredRun]:
		return self.highlight_lines(language, [line])[0]
