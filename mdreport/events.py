"""
Markdown to layout event stream, built on markdown-it-py.
"""

# Standard Library
import dataclasses

# PIP3 modules
import markdown_it


KIND_START = "start"
KIND_END = "end"
KIND_TEXT = "text"
KIND_CODE = "code"
KIND_SOFT_BREAK = "soft_break"
KIND_HARD_BREAK = "hard_break"
KIND_TASK_MARKER = "task_marker"
KIND_RULE = "rule"

TAG_HEADING = "heading"
TAG_PARAGRAPH = "paragraph"
TAG_CODE_BLOCK = "code_block"
TAG_LIST = "list"
TAG_ITEM = "item"
TAG_STRONG = "strong"
TAG_EMPHASIS = "emphasis"
TAG_TABLE = "table"
TAG_TABLE_HEAD = "table_head"
TAG_TABLE_ROW = "table_row"
TAG_TABLE_CELL = "table_cell"
TAG_BLOCK_QUOTE = "block_quote"

TASK_MARKERS = {"[ ] ": False, "[x] ": True, "[X] ": True}

# markdown-it block token type -> container tag
BLOCK_TAGS = {
	"paragraph": TAG_PARAGRAPH,
	"bullet_list": TAG_LIST,
	"ordered_list": TAG_LIST,
	"list_item": TAG_ITEM,
	"blockquote": TAG_BLOCK_QUOTE,
	"table": TAG_TABLE,
	"thead": TAG_TABLE_HEAD,
	"tr": TAG_TABLE_ROW,
	"th": TAG_TABLE_CELL,
	"td": TAG_TABLE_CELL,
}
INLINE_TAGS = {
	"strong": TAG_STRONG,
	"em": TAG_EMPHASIS,
}


@dataclasses.dataclass(frozen=True)
class Event:
	kind: str
	tag: str | None = None
	text: str = ""
	level: int = 0
	ordered: bool = False
	start: int = 1
	checked: bool = False


_PARSER: markdown_it.MarkdownIt | None = None


#============================================
def get_parser() -> markdown_it.MarkdownIt:
	"""
	CommonMark parser with tables and strikethrough enabled.
	"""
	global _PARSER
	if _PARSER is None:
		_PARSER = markdown_it.MarkdownIt("commonmark", {"html": False}).enable("table").enable("strikethrough")
	return _PARSER


#============================================
def _list_start(token) -> int:
	value = token.attrGet("start")
	if value is None:
		return 1
	try:
		return int(value)
	except (TypeError, ValueError):
		return 1


#============================================
def _strip_task_marker(children: list) -> tuple[bool | None, list]:
	"""
	Detect a leading task list marker in an item's first inline run.

	Args:
		children: Inline child tokens.

	Returns:
		Tuple of (checked flag or None, children with the marker removed).
	"""
	if not children or children[0].type != "text":
		return (None, children)
	first_text = children[0].content
	for marker, checked in TASK_MARKERS.items():
		if first_text.startswith(marker):
			remainder = first_text[len(marker):]
			stripped = children[0].copy(content=remainder)
			return (checked, [stripped] + list(children[1:]))
	return (None, children)


#============================================
def _inline_events(children: list) -> list[Event]:
	events = []
	for child in children:
		kind = child.type
		if kind == "text":
			if child.content:
				events.append(Event(KIND_TEXT, text=child.content))
		elif kind == "code_inline":
			events.append(Event(KIND_CODE, text=child.content))
		elif kind == "softbreak":
			events.append(Event(KIND_SOFT_BREAK))
		elif kind == "hardbreak":
			events.append(Event(KIND_HARD_BREAK))
		elif kind == "image":
			# alt text stands in for the picture
			if child.content:
				events.append(Event(KIND_TEXT, text=child.content))
		elif kind.endswith("_open") and kind[:-5] in INLINE_TAGS:
			events.append(Event(KIND_START, INLINE_TAGS[kind[:-5]]))
		elif kind.endswith("_close") and kind[:-6] in INLINE_TAGS:
			events.append(Event(KIND_END, INLINE_TAGS[kind[:-6]]))
	return events


#============================================
def markdown_events(body: str) -> list[Event]:
	"""
	Convert markdown text into the flat layout event stream.

	Args:
		body: Markdown without front matter.

	Returns:
		Ordered list of events.
	"""
	tokens = get_parser().parse(body)
	events: list[Event] = []
	# set when a list item opened and its first inline run is still pending
	item_pending = False
	for token in tokens:
		kind = token.type
		if kind == "heading_open":
			events.append(Event(KIND_START, TAG_HEADING, level=int(token.tag[1:])))
		elif kind == "heading_close":
			events.append(Event(KIND_END, TAG_HEADING, level=int(token.tag[1:])))
		elif kind in ("fence", "code_block"):
			info = token.info.strip() if kind == "fence" else ""
			events.append(Event(KIND_START, TAG_CODE_BLOCK, text=info))
			events.append(Event(KIND_TEXT, text=token.content))
			events.append(Event(KIND_END, TAG_CODE_BLOCK, text=info))
			item_pending = False
		elif kind == "hr":
			events.append(Event(KIND_RULE))
		elif kind == "inline":
			children = token.children or []
			if item_pending:
				checked, children = _strip_task_marker(children)
				if checked is not None:
					events.append(Event(KIND_TASK_MARKER, checked=checked))
				item_pending = False
			events.extend(_inline_events(children))
		elif kind.endswith("_open") and kind[:-5] in BLOCK_TAGS:
			if token.hidden:
				continue
			name = kind[:-5]
			if name == "ordered_list":
				events.append(Event(KIND_START, TAG_LIST, ordered=True, start=_list_start(token)))
			else:
				events.append(Event(KIND_START, BLOCK_TAGS[name]))
			if name == "list_item":
				item_pending = True
		elif kind.endswith("_close") and kind[:-6] in BLOCK_TAGS:
			if token.hidden:
				continue
			name = kind[:-6]
			events.append(Event(KIND_END, BLOCK_TAGS[name], ordered=(name == "ordered_list")))
			if name == "list_item":
				item_pending = False
	return events
