"""
Code block info strings, repository links and code block rendering.
"""

# Standard Library
import dataclasses

# local repo modules
import mdreport.config
import mdreport.frontmatter
import mdreport.highlight
import mdreport.measure
import mdreport.units


Length = mdreport.units.Length
FrontMatter = mdreport.frontmatter.FrontMatter

CODE_TEXT_SIZE = mdreport.config.CODE_TEXT_SIZE
CODE_INDENT = mdreport.config.CODE_INDENT
CODE_LINE_FACTOR = mdreport.config.CODE_LINE_FACTOR
CODE_HEADER_BREAK_FACTOR = mdreport.config.CODE_HEADER_BREAK_FACTOR
CODE_HEADER_SPACING_FACTOR = mdreport.config.CODE_HEADER_SPACING_FACTOR
CODE_TAB_SIZE = mdreport.config.CODE_TAB_SIZE
REPO_SEPARATOR = " @ "
DEFAULT_REFSPEC = "main"


@dataclasses.dataclass(frozen=True)
class CodeBlockInfo:
	language: str
	filename: str | None = None
	start_line: int | None = None
	repo: str | None = None
	refspec: str | None = None


#============================================
def _extension(filename: str) -> str:
	dot_pos = filename.rfind(".")
	if dot_pos < 0:
		return ""
	return filename[dot_pos + 1:]


#============================================
def parse_info_string(info: str) -> CodeBlockInfo:
	"""
	Parse a fenced code block info string.

	Accepted shapes:
		path/to/file.rs:12 @ owner/repo#refspec
		path/to/file.rs:12
		path/to/file.rs @ owner/repo
		language

	Never fails; text without a recognized structure is a language name.

	Args:
		info: Info string after the opening fence.

	Returns:
		CodeBlockInfo.
	"""
	repo = None
	refspec = None
	file_part = info
	at_pos = info.find(REPO_SEPARATOR)
	if at_pos >= 0:
		file_part = info[:at_pos]
		repo_part = info[at_pos + len(REPO_SEPARATOR):]
		repo, hash_sep, ref = repo_part.partition("#")
		if hash_sep:
			refspec = ref

	colon_pos = file_part.rfind(":")
	if colon_pos >= 0:
		after_colon = file_part[colon_pos + 1:]
		if after_colon.isascii() and after_colon.isdigit():
			filename = file_part[:colon_pos]
			return CodeBlockInfo(
				language=_extension(filename),
				filename=filename,
				start_line=int(after_colon),
				repo=repo,
				refspec=refspec,
			)

	if "/" in file_part or "." in file_part:
		return CodeBlockInfo(
			language=_extension(file_part),
			filename=file_part,
			repo=repo,
			refspec=refspec,
		)

	return CodeBlockInfo(language=file_part, repo=repo, refspec=refspec)


#============================================
def build_github_url(
	filename: str,
	line_number: int | None,
	repo: str,
	refspec: str | None = None,
) -> str:
	"""
	Build a GitHub blob URL for a source file.

	Args:
		filename: Path inside the repository.
		line_number: Optional line anchor.
		repo: owner/name.
		refspec: Branch, tag or commit; defaults to main.

	Returns:
		URL string.
	"""
	fragment = ""
	if line_number is not None:
		fragment = f"#L{line_number}"
	return f"https://github.com/{repo}/blob/{refspec or DEFAULT_REFSPEC}/{filename}{fragment}"


#============================================
def resolve_repo(block_repo: str | None, front_matter: FrontMatter | None) -> str | None:
	"""
	Prefer the code block repository, then the document default.
	"""
	if block_repo:
		return block_repo
	if front_matter is not None:
		return front_matter.repo
	return None


#============================================
def split_code_lines(code: str) -> list[str]:
	"""
	Split code into display lines, dropping the final newline.

	Args:
		code: Raw code block content.

	Returns:
		Lines with tabs expanded.
	"""
	if code.endswith("\n"):
		code = code[:-1]
	return [line.rstrip("\r").expandtabs(CODE_TAB_SIZE) for line in code.split("\n")]


#============================================
def render_code_block(
	builder,
	info: CodeBlockInfo,
	code: str,
	highlighter: "mdreport.highlight.Highlighter",
	front_matter: FrontMatter | None = None,
) -> int:
	"""
	Draw a highlighted code block one source line at a time.

	Args:
		builder: DocumentBuilder.
		info: Parsed info string.
		code: Raw code.
		highlighter: Syntax highlighter.
		front_matter: Document front matter for the default repository.

	Returns:
		Number of source lines drawn.
	"""
	x = builder.left_margin + CODE_INDENT
	if info.filename:
		builder.check_page_break(builder.line_height * CODE_HEADER_BREAK_FACTOR)
		builder.write_text_at(
			info.filename,
			mdreport.measure.STYLE_CODE,
			CODE_TEXT_SIZE,
			x,
			builder.cursor,
		)
		repo = resolve_repo(info.repo, front_matter)
		if repo:
			url = build_github_url(info.filename, info.start_line, repo, info.refspec)
			width = mdreport.measure.measure_text(info.filename, mdreport.measure.STYLE_CODE, CODE_TEXT_SIZE)
			height = Length.from_points(CODE_TEXT_SIZE)
			builder.add_link(x, builder.cursor - height * 0.25, width, height, url)
		builder.move_down(builder.line_height * CODE_HEADER_SPACING_FACTOR)

	lines = split_code_lines(code)
	highlighted = highlighter.highlight_lines(info.language, lines, info.filename)
	for runs in highlighted:
		builder.check_page_break(builder.line_height)
		builder.write_runs_at(runs, mdreport.measure.STYLE_CODE, CODE_TEXT_SIZE, x, builder.cursor)
		builder.move_down(builder.line_height * CODE_LINE_FACTOR)
	return len(lines)
