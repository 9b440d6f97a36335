"""
Render markdown documents and slide decks into PDF bytes.
"""

# Standard Library
import dataclasses
import io
import pathlib

# PIP3 modules
import pypdf

# local repo modules
import mdreport.builder
import mdreport.codeblock
import mdreport.config
import mdreport.embed
import mdreport.errors
import mdreport.events
import mdreport.frontmatter
import mdreport.highlight
import mdreport.measure
import mdreport.table
import mdreport.theme
import mdreport.units


Length = mdreport.units.Length
StyledRun = mdreport.measure.StyledRun
Event = mdreport.events.Event
FrontMatter = mdreport.frontmatter.FrontMatter
RenderConfig = mdreport.config.RenderConfig
RenderResult = mdreport.config.RenderResult
DocumentBuilder = mdreport.builder.DocumentBuilder
Theme = mdreport.theme.Theme

config = mdreport.config
BODY_TEXT_SIZE = config.BODY_TEXT_SIZE

CONTEXT_PARAGRAPH = "paragraph"
CONTEXT_HEADING = "heading"
CONTEXT_LIST = "list"
CONTEXT_LIST_ITEM = "list_item"
CONTEXT_BLOCK_QUOTE = "block_quote"
CONTEXT_TABLE = "table"
CONTEXT_TABLE_CELL = "table_cell"
CONTEXT_CODE_BLOCK = "code_block"

# contexts whose inline text is collected into runs
TEXT_CONTEXTS = (CONTEXT_PARAGRAPH, CONTEXT_HEADING, CONTEXT_LIST_ITEM, CONTEXT_TABLE_CELL)


@dataclasses.dataclass
class Context:
	kind: str
	level: int = 0
	ordered: bool = False
	number: int = 1
	checked: bool | None = None
	marker: str = ""
	marker_drawn: bool = False
	info: str = ""
	in_head: bool = False
	head_rows: int = 0
	runs: list[StyledRun] = dataclasses.field(default_factory=list)
	rows: list[list[list[StyledRun]]] = dataclasses.field(default_factory=list)
	row: list[list[StyledRun]] | None = None


#============================================
def select_theme(front_matter: FrontMatter | None, slides: bool) -> Theme:
	"""
	Pick the page theme; reports always use the plain default theme.

	Args:
		front_matter: Parsed front matter or None.
		slides: Slide mode.

	Returns:
		Theme.
	"""
	if not slides or front_matter is None:
		return mdreport.theme.DEFAULT_THEME
	name = front_matter.slide_theme or config.DEFAULT_SLIDE_THEME
	return mdreport.theme.get_theme(name, front_matter.gradient_direction)


#============================================
def select_code_theme(override: str | None, front_matter: FrontMatter | None) -> str:
	if override:
		return override
	if front_matter is not None and front_matter.code_theme:
		return front_matter.code_theme
	return config.DEFAULT_CODE_THEME


#============================================
def render_front_matter(builder: DocumentBuilder, front_matter: FrontMatter) -> None:
	"""
	Write the title block: title, "By <author>" and "Date: <date>".

	Args:
		builder: DocumentBuilder.
		front_matter: Parsed front matter.
	"""
	line_height = builder.line_height
	if front_matter.title:
		builder.check_page_break(config.TITLE_BREAK_HEIGHT)
		builder.write_text_at(
			front_matter.title,
			mdreport.measure.STYLE_BOLD,
			config.TITLE_TEXT_SIZE,
			builder.left_margin,
			builder.cursor,
			builder.theme.heading_color,
		)
		builder.move_down(line_height * config.TITLE_SPACING)
	if front_matter.author:
		builder.check_page_break(config.BYLINE_BREAK_HEIGHT)
		builder.write_text_at(
			f"By {front_matter.author}",
			mdreport.measure.STYLE_NORMAL,
			config.BYLINE_TEXT_SIZE,
			builder.left_margin,
			builder.cursor,
		)
		builder.move_down(line_height * config.AUTHOR_SPACING)
	if front_matter.date:
		builder.check_page_break(config.BYLINE_BREAK_HEIGHT)
		builder.write_text_at(
			f"Date: {front_matter.date}",
			mdreport.measure.STYLE_NORMAL,
			config.BYLINE_TEXT_SIZE,
			builder.left_margin,
			builder.cursor,
		)
		builder.move_down(line_height * config.DATE_SPACING)
	builder.move_down(line_height)


class MarkdownRenderer:
	"""
	Drives a DocumentBuilder from the markdown event stream.

	Formatting state lives on an explicit stack of Context entries; inline
	text always lands in the innermost context that collects text.
	"""

	def __init__(
		self,
		builder: DocumentBuilder,
		highlighter: mdreport.highlight.Highlighter,
		front_matter: FrontMatter | None = None,
		slides: bool = False,
	) -> None:
		self.builder = builder
		self.highlighter = highlighter
		self.front_matter = front_matter
		self.slides = slides
		self.stack: list[Context] = []
		self.bold = 0
		self.italic = 0
		self.previous_heading_level: int | None = None

	#============================================
	def render(self, events: list[Event]) -> None:
		for event in events:
			self.handle(event)

	#============================================
	def handle(self, event: Event) -> None:
		kind = event.kind
		if kind == mdreport.events.KIND_START:
			handler = getattr(self, f"start_{event.tag}")
			handler(event)
		elif kind == mdreport.events.KIND_END:
			handler = getattr(self, f"end_{event.tag}")
			handler(event)
		elif kind == mdreport.events.KIND_TEXT:
			self.add_text(event.text)
		elif kind == mdreport.events.KIND_CODE:
			self.add_run(mdreport.measure.STYLE_CODE, event.text)
		elif kind in (mdreport.events.KIND_SOFT_BREAK, mdreport.events.KIND_HARD_BREAK):
			self.add_text(" ")
		elif kind == mdreport.events.KIND_TASK_MARKER:
			item = self.innermost(CONTEXT_LIST_ITEM)
			if item is not None:
				item.checked = event.checked
		elif kind == mdreport.events.KIND_RULE:
			self.draw_rule()

	#============================================
	# context helpers
	#============================================
	def innermost(self, *kinds: str) -> Context | None:
		for context in reversed(self.stack):
			if context.kind in kinds:
				return context
		return None

	def pop(self, kind: str) -> Context | None:
		if self.stack and self.stack[-1].kind == kind:
			return self.stack.pop()
		return None

	def list_depth(self) -> int:
		return sum(1 for context in self.stack if context.kind == CONTEXT_LIST)

	def quote_depth(self) -> int:
		return sum(1 for context in self.stack if context.kind == CONTEXT_BLOCK_QUOTE)

	def block_left(self) -> Length:
		return self.builder.left_margin + config.QUOTE_INDENT * self.quote_depth()

	def current_style(self) -> str:
		return mdreport.measure.style_for_flags(self.bold > 0, self.italic > 0)

	#============================================
	def add_run(self, style: str, text: str) -> None:
		if self.stack and self.stack[-1].kind == CONTEXT_CODE_BLOCK:
			self.stack[-1].runs.append(StyledRun(style, text))
			return
		context = self.innermost(*TEXT_CONTEXTS)
		if context is None:
			return
		runs = context.runs
		if runs and runs[-1].style == style:
			runs[-1] = StyledRun(style, runs[-1].text + text)
		else:
			runs.append(StyledRun(style, text))

	def add_text(self, text: str) -> None:
		self.add_run(self.current_style(), text)

	#============================================
	# headings
	#============================================
	def start_heading(self, event: Event) -> None:
		self.flush_open_item()
		self.stack.append(Context(CONTEXT_HEADING, level=event.level))

	def end_heading(self, event: Event) -> None:
		context = self.pop(CONTEXT_HEADING)
		if context is None:
			return
		text = "".join(run.text for run in context.runs).strip()
		if not text:
			return
		builder = self.builder
		level = context.level
		if self.slides:
			previous = self.previous_heading_level
			if level == 2 or (previous is not None and level < previous):
				builder.new_page()
		size = config.HEADING_SIZES.get(level, config.HEADING_SIZE_DEFAULT)
		builder.move_down(builder.line_height * config.HEADING_SPACING_BEFORE.get(level, 1.0))
		builder.check_page_break(Length.from_points(size) * 0.5)
		builder.write_text_at(
			text,
			mdreport.measure.STYLE_BOLD,
			size,
			self.block_left(),
			builder.cursor,
			builder.theme.heading_color,
		)
		builder.move_down(builder.line_height * config.HEADING_SPACING_AFTER.get(level, 1.0))
		self.previous_heading_level = level

	#============================================
	# paragraphs
	#============================================
	def start_paragraph(self, event: Event) -> None:
		item = self.stack[-1] if self.stack else None
		if item is not None and item.kind == CONTEXT_LIST_ITEM:
			# loose list paragraphs join the item text
			if item.runs:
				self.add_text(" ")
			return
		self.builder.move_down(self.builder.line_height * config.PARAGRAPH_SPACING)
		self.stack.append(Context(CONTEXT_PARAGRAPH))

	def end_paragraph(self, event: Event) -> None:
		context = self.pop(CONTEXT_PARAGRAPH)
		if context is None:
			return
		words = mdreport.measure.runs_to_words(context.runs, BODY_TEXT_SIZE)
		if not words:
			return
		self.builder.write_wrapped_text(words, self.block_left(), BODY_TEXT_SIZE)
		self.builder.move_down(self.builder.line_height * config.PARAGRAPH_SPACING)

	#============================================
	# lists
	#============================================
	def start_list(self, event: Event) -> None:
		self.flush_open_item()
		if self.list_depth() == 0:
			self.builder.move_down(self.builder.line_height * config.LIST_SPACING)
		self.stack.append(Context(CONTEXT_LIST, ordered=event.ordered, number=event.start))

	def end_list(self, event: Event) -> None:
		if self.pop(CONTEXT_LIST) is None:
			return
		if self.list_depth() == 0:
			self.builder.move_down(self.builder.line_height * config.LIST_SPACING)

	def start_item(self, event: Event) -> None:
		parent = self.innermost(CONTEXT_LIST)
		marker = "- "
		if parent is not None and parent.ordered:
			marker = f"{parent.number}."
			parent.number += 1
		self.stack.append(Context(CONTEXT_LIST_ITEM, marker=marker))

	def end_item(self, event: Event) -> None:
		context = self.innermost(CONTEXT_LIST_ITEM)
		if context is None or self.stack[-1] is not context:
			return
		self.flush_item(context)
		self.stack.pop()

	def flush_open_item(self) -> None:
		"""
		Write pending item text before a nested block starts inside it.
		"""
		if self.stack and self.stack[-1].kind == CONTEXT_LIST_ITEM:
			self.flush_item(self.stack[-1])

	def flush_item(self, item: Context) -> None:
		"""
		Write an item's marker (once) and its wrapped text.

		Args:
			item: List item context.
		"""
		words = mdreport.measure.runs_to_words(item.runs, BODY_TEXT_SIZE)
		item.runs = []
		if not words:
			return
		builder = self.builder
		depth = max(self.list_depth(), 1)
		indent = self.block_left() + config.LIST_INDENT + config.LIST_INDENT * (depth - 1)
		text_indent = indent + config.LIST_MARKER_GAP
		builder.check_page_break(builder.line_height * config.LIST_ITEM_BREAK_FACTOR)
		if not item.marker_drawn:
			if item.checked is not None:
				builder.draw_checkbox(indent, builder.cursor - config.CHECKBOX_BASELINE_DROP, item.checked)
			else:
				builder.write_text_at(
					item.marker,
					mdreport.measure.STYLE_NORMAL,
					BODY_TEXT_SIZE,
					indent,
					builder.cursor,
				)
			item.marker_drawn = True
		builder.write_wrapped_text(words, text_indent, BODY_TEXT_SIZE)

	#============================================
	# emphasis
	#============================================
	def start_strong(self, event: Event) -> None:
		self.bold += 1

	def end_strong(self, event: Event) -> None:
		self.bold = max(self.bold - 1, 0)

	def start_emphasis(self, event: Event) -> None:
		self.italic += 1

	def end_emphasis(self, event: Event) -> None:
		self.italic = max(self.italic - 1, 0)

	#============================================
	# block quotes and rules
	#============================================
	def start_block_quote(self, event: Event) -> None:
		self.flush_open_item()
		self.stack.append(Context(CONTEXT_BLOCK_QUOTE))

	def end_block_quote(self, event: Event) -> None:
		self.pop(CONTEXT_BLOCK_QUOTE)

	def draw_rule(self) -> None:
		builder = self.builder
		self.flush_open_item()
		builder.check_page_break(builder.line_height)
		y = builder.cursor + builder.line_height * 0.5
		builder.draw_rule(self.block_left(), builder.right_margin, y)
		builder.move_down(builder.line_height * 0.5)

	#============================================
	# code blocks
	#============================================
	def start_code_block(self, event: Event) -> None:
		self.flush_open_item()
		self.stack.append(Context(CONTEXT_CODE_BLOCK, info=event.text))

	def end_code_block(self, event: Event) -> None:
		context = self.pop(CONTEXT_CODE_BLOCK)
		if context is None:
			return
		code = "".join(run.text for run in context.runs)
		if not code:
			return
		builder = self.builder
		builder.move_down(builder.line_height * config.CODE_BLOCK_SPACING_BEFORE)
		info = mdreport.codeblock.parse_info_string(context.info)
		mdreport.codeblock.render_code_block(builder, info, code, self.highlighter, self.front_matter)
		builder.move_down(builder.line_height * config.CODE_BLOCK_SPACING_AFTER)

	#============================================
	# tables
	#============================================
	def start_table(self, event: Event) -> None:
		self.flush_open_item()
		self.stack.append(Context(CONTEXT_TABLE))

	def end_table(self, event: Event) -> None:
		context = self.pop(CONTEXT_TABLE)
		if context is None or not context.rows:
			return
		mdreport.table.render_table(self.builder, context.rows, context.head_rows)
		self.builder.move_down(self.builder.line_height * config.TABLE_SPACING_AFTER)

	def start_table_head(self, event: Event) -> None:
		table = self.innermost(CONTEXT_TABLE)
		if table is not None:
			table.in_head = True

	def end_table_head(self, event: Event) -> None:
		table = self.innermost(CONTEXT_TABLE)
		if table is not None:
			table.in_head = False

	def start_table_row(self, event: Event) -> None:
		table = self.innermost(CONTEXT_TABLE)
		if table is not None:
			table.row = []

	def end_table_row(self, event: Event) -> None:
		table = self.innermost(CONTEXT_TABLE)
		if table is None or not table.row:
			return
		table.rows.append(table.row)
		if table.in_head:
			table.head_rows += 1
		table.row = None

	def start_table_cell(self, event: Event) -> None:
		self.stack.append(Context(CONTEXT_TABLE_CELL))

	def end_table_cell(self, event: Event) -> None:
		cell = self.pop(CONTEXT_TABLE_CELL)
		table = self.innermost(CONTEXT_TABLE)
		if cell is None or table is None or table.row is None:
			return
		table.row.append(cell.runs)


#============================================
def render_markdown(
	markdown: str,
	render_config: RenderConfig | None = None,
) -> tuple[pypdf.PdfWriter, DocumentBuilder]:
	"""
	Lay out markdown into a finalized PDF object graph.

	Args:
		markdown: Full markdown text, front matter included.
		render_config: Output options; defaults to a report.

	Returns:
		Tuple of (pypdf writer, finalized builder).

	Raises:
		yaml.YAMLError: The front matter is not valid YAML.
	"""
	if render_config is None:
		render_config = RenderConfig()
	front_matter, body = mdreport.frontmatter.parse_front_matter(markdown)
	theme = select_theme(front_matter, render_config.slides)
	if render_config.slides:
		geometry = config.slide_geometry()
	else:
		geometry = config.report_geometry()

	title = render_config.title
	if title is None:
		title = front_matter.title if front_matter is not None and front_matter.title else ""
	builder = DocumentBuilder(geometry, theme, title=title, compress=render_config.compress)
	highlighter = mdreport.highlight.Highlighter(
		select_code_theme(render_config.code_theme, front_matter),
		default_color=theme.text_color,
	)

	if front_matter is not None:
		render_front_matter(builder, front_matter)
	renderer = MarkdownRenderer(builder, highlighter, front_matter, slides=render_config.slides)
	renderer.render(mdreport.events.markdown_events(body))
	writer = builder.finalize()

	if render_config.embed_source:
		mdreport.embed.embed_attachment(
			writer,
			render_config.source_name,
			config.SOURCE_ATTACHMENT_MIME,
			markdown.encode("utf-8"),
			compress=render_config.compress,
		)
	return (writer, builder)


#============================================
def render_to_bytes(markdown: str, render_config: RenderConfig | None = None) -> tuple[bytes, RenderResult]:
	"""
	Render markdown and serialize the PDF.

	Args:
		markdown: Full markdown text.
		render_config: Output options.

	Returns:
		Tuple of (PDF bytes, RenderResult).
	"""
	if render_config is None:
		render_config = RenderConfig()
	writer, builder = render_markdown(markdown, render_config)
	buffer = io.BytesIO()
	writer.write(buffer)
	pdf_bytes = buffer.getvalue()
	embedded_bytes = 0
	if render_config.embed_source:
		embedded_bytes = len(markdown.encode("utf-8"))
	result = RenderResult(
		pages=len(builder.pages),
		embedded_bytes=embedded_bytes,
		output_bytes=len(pdf_bytes),
	)
	return (pdf_bytes, result)


#============================================
def to_pdf(
	markdown: str,
	*,
	slides: bool = False,
	code_theme: str | None = None,
	embed_source: bool = True,
	compress: bool = True,
) -> bytes:
	"""
	Render markdown to PDF bytes.

	Args:
		markdown: Full markdown text.
		slides: Render a 16:9 slide deck instead of an A4 report.
		code_theme: Pygments style name overriding the front matter.
		embed_source: Attach the exact input text as "source".
		compress: Flate compress page content and the attachment.

	Returns:
		PDF bytes.
	"""
	render_config = RenderConfig(
		slides=slides,
		code_theme=code_theme,
		embed_source=embed_source,
		compress=compress,
	)
	pdf_bytes, _ = render_to_bytes(markdown, render_config)
	return pdf_bytes


#============================================
def read_markdown(input_path: str) -> str:
	"""
	Read a markdown file as UTF-8 with line endings left untouched.

	Raises:
		mdreport.errors.ReportIOError: The file cannot be read.
	"""
	path = pathlib.Path(input_path)
	try:
		return path.read_bytes().decode("utf-8")
	except (OSError, UnicodeDecodeError) as error:
		raise mdreport.errors.ReportIOError("read", str(path), error) from error


#============================================
def write_pdf(
	markdown: str,
	output_path: str,
	render_config: RenderConfig | None = None,
) -> RenderResult:
	"""
	Render markdown and write the PDF to disk.

	Args:
		markdown: Full markdown text.
		output_path: Destination file.
		render_config: Output options.

	Returns:
		RenderResult.

	Raises:
		mdreport.errors.ReportIOError: The output cannot be written.
	"""
	pdf_bytes, result = render_to_bytes(markdown, render_config)
	path = pathlib.Path(output_path)
	try:
		path.write_bytes(pdf_bytes)
	except OSError as error:
		raise mdreport.errors.ReportIOError("write", str(path), error) from error
	return result
