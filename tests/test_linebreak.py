import mdreport.linebreak
import mdreport.measure
import mdreport.units


Length = mdreport.units.Length
Word = mdreport.measure.Word

PARAGRAPH = (
	"Paginated layout engines turn a stream of styled words into lines, "
	"lines into pages, and pages into a finished document. Every line must "
	"respect the right margin, except when a single unbreakable token such as "
	"https://example.com/a/very/long/path/that/cannot/be/split is wider than "
	"the whole column."
)


#============================================
def fixed_words(widths: list[float]) -> list[Word]:
	"""
	Build words with exact widths in millimeters.
	"""
	return [Word(f"w{index}", mdreport.measure.STYLE_NORMAL, Length(width)) for index, width in enumerate(widths)]


#============================================
def test_empty_input() -> None:
	"""
	No words means no breaks.
	"""
	assert mdreport.linebreak.break_lines([], Length(95.0), Length(100.0)) == []


#============================================
def test_everything_fits() -> None:
	"""
	A short line produces no break at all.
	"""
	words = fixed_words([10.0, 10.0, 10.0])
	assert mdreport.linebreak.break_lines(words, Length(30.4), Length(32.0), Length(1.0)) == []


#============================================
def test_fills_up_to_max_width() -> None:
	"""
	Lines hold as many words as fit when that is closest to the ideal width.
	"""
	words = fixed_words([10.0] * 7)
	breaks = mdreport.linebreak.break_lines(words, Length(30.4), Length(32.0), Length(1.0))
	assert breaks == [3, 6]
	lines = mdreport.linebreak.split_lines(words, breaks)
	assert [len(line) for line in lines] == [3, 3, 1]


#============================================
def test_prefers_ideal_width() -> None:
	"""
	The break lands closest to the ideal width, not at the maximum.
	"""
	words = fixed_words([10.0] * 5)
	breaks = mdreport.linebreak.break_lines(words, Length(15.0), Length(32.0), Length(1.0))
	assert breaks == [1, 2]


#============================================
def test_oversized_word_sits_alone() -> None:
	"""
	A word wider than the column gets its own line.
	"""
	words = fixed_words([10.0, 50.0, 10.0])
	breaks = mdreport.linebreak.break_lines(words, Length(30.4), Length(32.0), Length(1.0))
	assert breaks == [1, 2]


#============================================
def test_width_bound_holds_for_real_text() -> None:
	"""
	Every line fits within max_width unless it is one oversized word.
	"""
	size = 12.0
	words = mdreport.measure.runs_to_words(
		[mdreport.measure.StyledRun(mdreport.measure.STYLE_NORMAL, PARAGRAPH)],
		size,
	)
	space = mdreport.measure.measure_text(" ", mdreport.measure.STYLE_NORMAL, size)
	for max_mm in (20.0, 45.0, 80.0, 170.0):
		max_width = Length(max_mm)
		breaks = mdreport.linebreak.break_lines(words, max_width * 0.95, max_width, space)
		assert breaks == sorted(set(breaks))
		assert all(0 < index < len(words) for index in breaks)
		lines = mdreport.linebreak.split_lines(words, breaks)
		assert sum(len(line) for line in lines) == len(words)
		for line in lines:
			width = mdreport.linebreak.line_width(line, space)
			assert width.mm <= max_mm + 1e-6 or len(line) == 1
