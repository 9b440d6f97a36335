import mdreport.events


Event = mdreport.events.Event
START = mdreport.events.KIND_START
END = mdreport.events.KIND_END
TEXT = mdreport.events.KIND_TEXT


#============================================
def kinds_and_tags(events: list[Event]) -> list[tuple[str, str | None]]:
	return [(event.kind, event.tag) for event in events]


#============================================
def test_heading_events() -> None:
	"""
	Headings carry their level.
	"""
	events = mdreport.events.markdown_events("## Section\n")
	assert events == [
		Event(START, "heading", level=2),
		Event(TEXT, text="Section"),
		Event(END, "heading", level=2),
	]


#============================================
def test_tight_list_hides_paragraphs() -> None:
	"""
	Tight list items hold text directly.
	"""
	events = mdreport.events.markdown_events("- one\n- two\n")
	assert kinds_and_tags(events) == [
		(START, "list"),
		(START, "item"),
		(TEXT, None),
		(END, "item"),
		(START, "item"),
		(TEXT, None),
		(END, "item"),
		(END, "list"),
	]
	assert not events[0].ordered


#============================================
def test_ordered_list_start() -> None:
	"""
	Ordered lists report their first number.
	"""
	events = mdreport.events.markdown_events("3. three\n4. four\n")
	assert events[0].kind == START
	assert events[0].ordered
	assert events[0].start == 3


#============================================
def test_task_markers() -> None:
	"""
	Task list markers become events and leave the text.
	"""
	events = mdreport.events.markdown_events("- [x] done\n- [ ] todo\n- plain\n")
	markers = [event for event in events if event.kind == mdreport.events.KIND_TASK_MARKER]
	assert [marker.checked for marker in markers] == [True, False]
	texts = [event.text for event in events if event.kind == TEXT]
	assert texts == ["done", "todo", "plain"]


#============================================
def test_inline_styles() -> None:
	"""
	Strong, emphasis and code spans are reported in order.
	"""
	events = mdreport.events.markdown_events("**bold** *it* `code`\n")
	assert kinds_and_tags(events) == [
		(START, "paragraph"),
		(START, "strong"),
		(TEXT, None),
		(END, "strong"),
		(TEXT, None),
		(START, "emphasis"),
		(TEXT, None),
		(END, "emphasis"),
		(TEXT, None),
		(mdreport.events.KIND_CODE, None),
		(END, "paragraph"),
	]


#============================================
def test_fenced_code_block() -> None:
	"""
	Fenced code keeps its info string and raw content.
	"""
	events = mdreport.events.markdown_events("```src/main.rs:3 @ user/repo\nfn main() {}\n```\n")
	assert events[0] == Event(START, "code_block", text="src/main.rs:3 @ user/repo")
	assert events[1] == Event(TEXT, text="fn main() {}\n")
	assert events[2].kind == END


#============================================
def test_table_structure() -> None:
	"""
	Tables report head, rows and cells.
	"""
	events = mdreport.events.markdown_events("| a | b |\n| --- | --- |\n| 1 | 2 |\n")
	tags = kinds_and_tags(events)
	assert tags[0] == (START, "table")
	assert tags[1] == (START, "table_head")
	assert tags.count((START, "table_row")) == 2
	assert tags.count((START, "table_cell")) == 4
	assert tags[-1] == (END, "table")


#============================================
def test_breaks_and_rules() -> None:
	"""
	Line breaks and thematic breaks become leaf events.
	"""
	events = mdreport.events.markdown_events("one\ntwo  \nthree\n\n---\n")
	kinds = [event.kind for event in events]
	assert mdreport.events.KIND_SOFT_BREAK in kinds
	assert mdreport.events.KIND_HARD_BREAK in kinds
	assert kinds[-1] == mdreport.events.KIND_RULE
