"""
Page and document builder: cursor, page breaks, content streams and
shared resources.
"""

# Standard Library
import dataclasses
import typing

# PIP3 modules
import pypdf
import pypdf.generic

# local repo modules
import mdreport.background
import mdreport.config
import mdreport.errors
import mdreport.linebreak
import mdreport.measure
import mdreport.theme
import mdreport.units


Length = mdreport.units.Length
Word = mdreport.measure.Word
FontFace = mdreport.measure.FontFace
PageGeometry = mdreport.config.PageGeometry
Theme = mdreport.theme.Theme
RGB = mdreport.theme.RGB

CREATOR = mdreport.config.CREATOR
TEXT_ENCODING = mdreport.config.TEXT_ENCODING
IDEAL_WIDTH_RATIO = mdreport.config.IDEAL_WIDTH_RATIO
CELL_LINE_FACTOR = mdreport.config.CELL_LINE_FACTOR
CHECKBOX_SIZE = mdreport.config.CHECKBOX_SIZE
CHECKBOX_PADDING = mdreport.config.CHECKBOX_PADDING
STROKE_WIDTH = mdreport.config.STROKE_WIDTH

PAGE_EMPTY = "empty"
PAGE_OPEN = "open"
BUILD_FINALIZED = "finalized"

Operation = tuple[list[pypdf.generic.PdfObject], bytes]


@dataclasses.dataclass
class FinishedPage:
	number: int
	operations: list[Operation]
	fonts: list[str]
	shadings: list[str]
	links: list[tuple[tuple[float, float, float, float], str]]


#============================================
def pdf_number(value: float) -> pypdf.generic.FloatObject:
	return pypdf.generic.FloatObject(round(value, 4))


#============================================
def encode_text(text: str) -> pypdf.generic.ByteStringObject:
	"""
	Encode text for a WinAnsi encoded standard font.

	Args:
		text: Unicode text.

	Returns:
		Byte string operand; unmappable characters become "?".
	"""
	return pypdf.generic.ByteStringObject(text.encode(TEXT_ENCODING, errors="replace"))


#============================================
def color_operands(color: RGB) -> list[pypdf.generic.PdfObject]:
	return [pdf_number(color[0]), pdf_number(color[1]), pdf_number(color[2])]


#============================================
def build_content_stream(operations: list[Operation]) -> pypdf.generic.ContentStream:
	"""
	Wrap page operations in a content stream and serialize them.

	Args:
		operations: (operands, operator) pairs.

	Returns:
		Content stream with its data already written.
	"""
	stream = pypdf.generic.ContentStream(None, None)
	stream.operations = operations
	# flate_encode reads the serialized data, not the operation list
	stream.get_data()
	return stream


class ResourceTable:
	"""
	Insert-or-get table from a resource signature to one PDF object.

	Each signature is registered at most once per document and keeps the
	resource name it was given on first use (F1, F2, ... or Sh1, ...).
	"""

	def __init__(self, writer: pypdf.PdfWriter, prefix: str) -> None:
		self._writer = writer
		self._prefix = prefix
		self._names: dict[object, str] = {}
		self._references: dict[str, pypdf.generic.IndirectObject] = {}
		self.frozen = False

	def ensure(self, key: object, factory: typing.Callable[[], pypdf.generic.PdfObject]) -> str:
		"""
		Return the resource name for key, creating the object on first use.

		Args:
			key: Hashable resource signature.
			factory: Builds the PDF object when the key is new.

		Returns:
			Resource name without the leading slash.
		"""
		name = self._names.get(key)
		if name is not None:
			return name
		if self.frozen:
			raise mdreport.errors.BuilderFinalizedError(
				f"Cannot register new resource {key!r} after finalize()"
			)
		name = f"{self._prefix}{len(self._names) + 1}"
		self._references[name] = self._writer._add_object(factory())
		self._names[key] = name
		return name

	def reference(self, name: str) -> pypdf.generic.IndirectObject:
		return self._references[name]

	def identity(self, key: object) -> int:
		"""
		Object number allocated for a signature.
		"""
		return self._references[self._names[key]].idnum

	def __contains__(self, key: object) -> bool:
		return key in self._names

	def __len__(self) -> int:
		return len(self._names)


class DocumentBuilder:
	"""
	Owns one document build session.

	Page state is PAGE_EMPTY until a content operation is emitted (a
	themed background alone does not open a page), PAGE_OPEN while content
	accumulates, and BUILD_FINALIZED once finalize() has run. Only
	new_page() and finalize() leave PAGE_OPEN.
	"""

	def __init__(
		self,
		geometry: PageGeometry,
		theme: Theme = mdreport.theme.DEFAULT_THEME,
		title: str = "",
		compress: bool = True,
	) -> None:
		self.geometry = geometry
		self.theme = theme
		self.compress = compress
		self.writer = pypdf.PdfWriter()
		self.writer.add_metadata({"/Title": title, "/Creator": CREATOR, "/Producer": CREATOR})
		self.fonts = ResourceTable(self.writer, "F")
		self.shadings = ResourceTable(self.writer, "Sh")
		self.pages: list[FinishedPage] = []
		self.state = PAGE_EMPTY
		self.cursor = geometry.top
		self.in_text_section = False
		self._operations: list[Operation] = []
		self._page_fonts: list[str] = []
		self._page_shadings: list[str] = []
		self._page_links: list[tuple[tuple[float, float, float, float], str]] = []
		self.draw_background()

	@property
	def left_margin(self) -> Length:
		return self.geometry.left_margin

	@property
	def right_margin(self) -> Length:
		return self.geometry.right_margin

	@property
	def line_height(self) -> Length:
		return self.geometry.line_height

	@property
	def operations(self) -> list[Operation]:
		"""
		Operations accumulated for the current page.
		"""
		return self._operations

	#============================================
	def _require_active(self) -> None:
		if self.state == BUILD_FINALIZED:
			raise mdreport.errors.BuilderFinalizedError("Document builder already finalized")

	#============================================
	def emit(self, operator: bytes, operands: list[pypdf.generic.PdfObject] | None = None, content: bool = True) -> None:
		"""
		Append one operation to the current page.

		Args:
			operator: PDF operator, e.g. b"Tj".
			operands: Operand objects.
			content: False for background painting, which leaves an
				empty page empty.
		"""
		self._require_active()
		self._operations.append((operands or [], operator))
		if content:
			self.state = PAGE_OPEN

	#============================================
	def start_text_section(self) -> None:
		if not self.in_text_section:
			self.emit(b"BT")
			self.in_text_section = True

	#============================================
	def end_text_section(self) -> None:
		if self.in_text_section:
			self.emit(b"ET")
			self.in_text_section = False

	#============================================
	def ensure_font(self, face: FontFace) -> str:
		"""
		Register a font face once per document and mark it used on this page.

		Args:
			face: Font face.

		Returns:
			Resource name.
		"""
		self._require_active()

		def build_font() -> pypdf.generic.DictionaryObject:
			return pypdf.generic.DictionaryObject({
				pypdf.generic.NameObject("/Type"): pypdf.generic.NameObject("/Font"),
				pypdf.generic.NameObject("/Subtype"): pypdf.generic.NameObject("/Type1"),
				pypdf.generic.NameObject("/BaseFont"): pypdf.generic.NameObject("/" + face.base_font),
				pypdf.generic.NameObject("/Encoding"): pypdf.generic.NameObject("/WinAnsiEncoding"),
			})

		name = self.fonts.ensure(face.key, build_font)
		if name not in self._page_fonts:
			self._page_fonts.append(name)
		return name

	#============================================
	def ensure_shading(self, key: object, factory: typing.Callable[[], pypdf.generic.PdfObject]) -> str:
		"""
		Register a shading once per document and mark it used on this page.

		Args:
			key: Shading signature.
			factory: Builds the shading dictionary on first use.

		Returns:
			Resource name.
		"""
		self._require_active()
		name = self.shadings.ensure(key, factory)
		if name not in self._page_shadings:
			self._page_shadings.append(name)
		return name

	#============================================
	def add_object(self, obj: pypdf.generic.PdfObject) -> pypdf.generic.IndirectObject:
		self._require_active()
		return self.writer._add_object(obj)

	#============================================
	def draw_background(self) -> None:
		"""
		Paint the theme background onto the current page.
		"""
		self.end_text_section()
		mdreport.background.paint_background(self, self.theme.background)

	#============================================
	def move_down(self, amount: Length) -> None:
		self.cursor = self.cursor - amount

	#============================================
	def check_page_break(self, needed_height: Length) -> bool:
		"""
		Start a new page when needed_height would cross the bottom margin.

		Args:
			needed_height: Height the caller is about to consume.

		Returns:
			True if a page break happened.
		"""
		self._require_active()
		if self.cursor - needed_height < self.geometry.bottom_margin:
			self.new_page()
			return True
		return False

	#============================================
	def new_page(self) -> None:
		"""
		Flush the current page if it has content and reset the cursor.
		"""
		self._require_active()
		self.end_text_section()
		self.cursor = self.geometry.top
		if self.state == PAGE_EMPTY:
			return
		self._flush_page()
		self.state = PAGE_EMPTY
		self.draw_background()

	#============================================
	def _flush_page(self) -> None:
		geometry = self.geometry
		page = self.writer.add_blank_page(
			width=geometry.width.to_points(),
			height=geometry.height.to_points(),
		)

		stream = build_content_stream(self._operations)
		if self.compress:
			stream = stream.flate_encode()
		page[pypdf.generic.NameObject("/Contents")] = self.writer._add_object(stream)

		resources = pypdf.generic.DictionaryObject()
		if self._page_fonts:
			resources[pypdf.generic.NameObject("/Font")] = pypdf.generic.DictionaryObject({
				pypdf.generic.NameObject("/" + name): self.fonts.reference(name) for name in self._page_fonts
			})
		if self._page_shadings:
			resources[pypdf.generic.NameObject("/Shading")] = pypdf.generic.DictionaryObject({
				pypdf.generic.NameObject("/" + name): self.shadings.reference(name) for name in self._page_shadings
			})
		page[pypdf.generic.NameObject("/Resources")] = resources

		if self._page_links:
			annotations = pypdf.generic.ArrayObject()
			for rect, url in self._page_links:
				annotations.append(self.writer._add_object(build_link_annotation(rect, url)))
			page[pypdf.generic.NameObject("/Annots")] = annotations

		self.pages.append(
			FinishedPage(
				number=len(self.pages) + 1,
				operations=self._operations,
				fonts=self._page_fonts,
				shadings=self._page_shadings,
				links=self._page_links,
			)
		)
		self._operations = []
		self._page_fonts = []
		self._page_shadings = []
		self._page_links = []

	#============================================
	def finalize(self) -> pypdf.PdfWriter:
		"""
		Flush the last page and freeze the document.

		An empty document still gets one (possibly themed) page.

		Returns:
			The pypdf writer holding the finished page tree.
		"""
		self._require_active()
		self.end_text_section()
		if self.state == PAGE_OPEN or not self.pages:
			self._flush_page()
		self.fonts.frozen = True
		self.shadings.frozen = True
		self.state = BUILD_FINALIZED
		return self.writer

	#============================================
	def _write_words(self, words: list[Word], x: Length, y: Length, size: float, color: RGB) -> None:
		self.end_text_section()
		self.start_text_section()
		self.emit(b"Td", [pdf_number(x.to_points()), pdf_number(y.to_points())])
		self.emit(b"rg", color_operands(color))
		for index, word in enumerate(words):
			font_name = self.ensure_font(mdreport.measure.font_for_style(word.style))
			self.emit(b"Tf", [pypdf.generic.NameObject("/" + font_name), pdf_number(size)])
			self.emit(b"Tj", [encode_text(word.text)])
			if index < len(words) - 1:
				self.emit(b"Tj", [encode_text(" ")])
		self.end_text_section()

	#============================================
	def write_text_at(
		self,
		text: str,
		style: str,
		size: float,
		x: Length,
		y: Length,
		color: RGB | None = None,
	) -> None:
		"""
		Write one run of text at an absolute position.

		Args:
			text: Text to draw.
			style: Run style.
			size: Font size in points.
			x: Left edge.
			y: Baseline.
			color: Fill color; defaults to the theme text color.
		"""
		if color is None:
			color = self.theme.text_color
		self.end_text_section()
		self.start_text_section()
		font_name = self.ensure_font(mdreport.measure.font_for_style(style))
		self.emit(b"Td", [pdf_number(x.to_points()), pdf_number(y.to_points())])
		self.emit(b"rg", color_operands(color))
		self.emit(b"Tf", [pypdf.generic.NameObject("/" + font_name), pdf_number(size)])
		self.emit(b"Tj", [encode_text(text)])
		self.end_text_section()

	#============================================
	def write_runs_at(
		self,
		runs: list[tuple[RGB, str]],
		style: str,
		size: float,
		x: Length,
		y: Length,
	) -> None:
		"""
		Write differently colored runs left to right inside one text section.

		Args:
			runs: (color, text) pairs.
			style: Run style shared by every run.
			size: Font size in points.
			x: Left edge.
			y: Baseline.
		"""
		self.end_text_section()
		self.start_text_section()
		self.emit(b"Td", [pdf_number(x.to_points()), pdf_number(y.to_points())])
		font_name = self.ensure_font(mdreport.measure.font_for_style(style))
		for color, text in runs:
			self.emit(b"rg", color_operands(color))
			self.emit(b"Tf", [pypdf.generic.NameObject("/" + font_name), pdf_number(size)])
			self.emit(b"Tj", [encode_text(text)])
		self.end_text_section()

	#============================================
	def draw_checkbox(self, x: Length, y: Length, checked: bool) -> None:
		"""
		Draw a task list checkbox, crossed when checked.

		Args:
			x: Left edge of the box.
			y: Bottom edge of the box.
			checked: Draw the X strokes.
		"""
		self.end_text_section()
		size = CHECKBOX_SIZE
		self.emit(b"q")
		self.emit(b"w", [pdf_number(STROKE_WIDTH)])
		self.emit(b"RG", color_operands(self.theme.text_color))
		self.emit(b"re", [
			pdf_number(x.to_points()),
			pdf_number(y.to_points()),
			pdf_number(size.to_points()),
			pdf_number(size.to_points()),
		])
		self.emit(b"S")
		if checked:
			x1 = x + CHECKBOX_PADDING
			y1 = y + CHECKBOX_PADDING
			x2 = x + size - CHECKBOX_PADDING
			y2 = y + size - CHECKBOX_PADDING
			for (start_x, start_y), (end_x, end_y) in (((x1, y1), (x2, y2)), ((x2, y1), (x1, y2))):
				self.emit(b"m", [pdf_number(start_x.to_points()), pdf_number(start_y.to_points())])
				self.emit(b"l", [pdf_number(end_x.to_points()), pdf_number(end_y.to_points())])
				self.emit(b"S")
		self.emit(b"Q")

	#============================================
	def draw_rule(self, x0: Length, x1: Length, y: Length) -> None:
		"""
		Stroke a horizontal line in the theme text color.

		Args:
			x0: Start x.
			x1: End x.
			y: Line y.
		"""
		self.end_text_section()
		self.emit(b"q")
		self.emit(b"w", [pdf_number(STROKE_WIDTH)])
		self.emit(b"RG", color_operands(self.theme.text_color))
		self.emit(b"m", [pdf_number(x0.to_points()), pdf_number(y.to_points())])
		self.emit(b"l", [pdf_number(x1.to_points()), pdf_number(y.to_points())])
		self.emit(b"S")
		self.emit(b"Q")

	#============================================
	def add_link(self, x: Length, y: Length, width: Length, height: Length, url: str) -> None:
		"""
		Attach a URI link annotation to the current page.

		Args:
			x: Left edge.
			y: Bottom edge.
			width: Link area width.
			height: Link area height.
			url: Target URI.
		"""
		self._require_active()
		rect = (x.to_points(), y.to_points(), (x + width).to_points(), (y + height).to_points())
		self._page_links.append((rect, url))

	#============================================
	def space_width(self, size: float) -> Length:
		return mdreport.measure.measure_text(" ", mdreport.measure.STYLE_NORMAL, size)

	#============================================
	def write_wrapped_text(self, words: list[Word], x: Length, size: float) -> None:
		"""
		Wrap words between x and the right margin, breaking pages as needed.

		Args:
			words: Measured words.
			x: Left edge of every line.
			size: Font size in points.
		"""
		if not words:
			return
		max_width = self.right_margin - x
		breaks = mdreport.linebreak.break_lines(
			words,
			max_width * IDEAL_WIDTH_RATIO,
			max_width,
			self.space_width(size),
		)
		for line in mdreport.linebreak.split_lines(words, breaks):
			self.check_page_break(self.line_height)
			self._write_words(line, x, self.cursor, size, self.theme.text_color)
			self.move_down(self.line_height)

	#============================================
	def cell_line_count(self, words: list[Word], size: float, column_width: Length) -> int:
		"""
		Number of lines write_wrapped_cell() would produce.
		"""
		if not words:
			return 0
		breaks = mdreport.linebreak.break_lines(
			words,
			column_width * IDEAL_WIDTH_RATIO,
			column_width,
			self.space_width(size),
		)
		return len(breaks) + 1

	#============================================
	def write_wrapped_cell(self, words: list[Word], x: Length, size: float, column_width: Length) -> Length:
		"""
		Wrap words inside a fixed column without breaking pages.

		Args:
			words: Measured words.
			x: Column left edge.
			size: Font size in points.
			column_width: Column width.

		Returns:
			Vertical height consumed.
		"""
		if not words:
			return Length(0.0)
		start_y = self.cursor
		breaks = mdreport.linebreak.break_lines(
			words,
			column_width * IDEAL_WIDTH_RATIO,
			column_width,
			self.space_width(size),
		)
		for line in mdreport.linebreak.split_lines(words, breaks):
			self._write_words(line, x, self.cursor, size, self.theme.text_color)
			self.move_down(self.line_height * CELL_LINE_FACTOR)
		return start_y - self.cursor

	@property
	def page_count(self) -> int:
		"""
		Finished pages plus the open one, if any.
		"""
		if self.state == PAGE_OPEN:
			return len(self.pages) + 1
		return len(self.pages)


#============================================
def build_link_annotation(rect: tuple[float, float, float, float], url: str) -> pypdf.generic.DictionaryObject:
	"""
	Build a borderless URI link annotation.

	Args:
		rect: (x0, y0, x1, y1) in points.
		url: Target URI.

	Returns:
		Annotation dictionary.
	"""
	action = pypdf.generic.DictionaryObject({
		pypdf.generic.NameObject("/S"): pypdf.generic.NameObject("/URI"),
		pypdf.generic.NameObject("/URI"): pypdf.generic.TextStringObject(url),
	})
	return pypdf.generic.DictionaryObject({
		pypdf.generic.NameObject("/Type"): pypdf.generic.NameObject("/Annot"),
		pypdf.generic.NameObject("/Subtype"): pypdf.generic.NameObject("/Link"),
		pypdf.generic.NameObject("/Rect"): pypdf.generic.ArrayObject([pdf_number(value) for value in rect]),
		pypdf.generic.NameObject("/Border"): pypdf.generic.ArrayObject([pypdf.generic.NumberObject(0), pypdf.generic.NumberObject(0), pypdf.generic.NumberObject(0)]),
		pypdf.generic.NameObject("/A"): action,
	})
