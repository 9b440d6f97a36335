"""
CLI entry points for markdown report and slide generation.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# PIP3 modules
import yaml

# local repo modules
import mdreport.config
import mdreport.embed
import mdreport.errors
import mdreport.highlight
import mdreport.render
import mdreport.theme


RenderConfig = mdreport.config.RenderConfig

FORMAT_PDF = "pdf"
FORMAT_SLIDES = "slides"
OUTPUT_FORMATS = (FORMAT_PDF, FORMAT_SLIDES)
EXTENSION_FORMATS = {".pdf": FORMAT_PDF, ".slides": FORMAT_SLIDES}

SLIDE_THEME_GROUPS = (
	("Solid themes", ("light", "dark", "blue")),
	("Gradient themes", ("gradient-blue", "gradient-purple", "gradient-sunset")),
	("Radial themes", ("radial-spotlight", "radial-vignette", "radial-corner")),
)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list; defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(
		prog="mdreport",
		description="Generate PDF reports and slide decks from markdown files.",
	)
	parser.add_argument("input", nargs="?", default=None, help="Input markdown file (or PDF with --extract).")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output file path.")
	output_group.add_argument(
		"-f", "--format",
		dest="output_format",
		choices=OUTPUT_FORMATS,
		default=None,
		help="Output format (inferred from the output extension if omitted).",
	)

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("--code-theme", dest="code_theme", default=None, metavar="THEME", help="Code highlighting theme.")
	behavior_group.add_argument(
		"--no-embed-source",
		dest="embed_source",
		action="store_false",
		help="Do not embed the source markdown in the PDF.",
	)
	behavior_group.add_argument("--extract", dest="extract", action="store_true", help="Extract embedded markdown from a PDF.")
	behavior_group.add_argument("--list-themes", dest="list_themes", action="store_true", help="List code and slide themes.")
	parser.set_defaults(embed_source=True, extract=False, list_themes=False)

	args = parser.parse_args(argv)
	if args.input is None and not args.list_themes:
		parser.error("the following arguments are required: input")
	return args


#============================================
def infer_format(output_path: str | None, output_format: str | None) -> str:
	"""
	Pick the output format from the flag or the output file extension.

	Args:
		output_path: Output path or None.
		output_format: Explicit format or None.

	Returns:
		FORMAT_PDF or FORMAT_SLIDES; unknown extensions mean pdf.
	"""
	if output_format:
		return output_format
	if output_path is None:
		return FORMAT_PDF
	return EXTENSION_FORMATS.get(pathlib.Path(output_path).suffix.lower(), FORMAT_PDF)


#============================================
def default_output_path(input_path: str, suffix: str) -> pathlib.Path:
	return pathlib.Path(input_path).with_suffix(suffix)


#============================================
def print_themes() -> None:
	print("Available code syntax highlighting themes:")
	print("  (Use with --code-theme or code_theme front matter)")
	print("")
	for name in mdreport.highlight.list_code_themes():
		print(f"  {name}")
	print("")
	print("Available slide themes:")
	print("  (Use with slide_theme front matter in slides format)")
	for title, names in SLIDE_THEME_GROUPS:
		print("")
		print(f"  {title}:")
		for name in names:
			print(f"    {name:<17} - {mdreport.theme.THEME_DESCRIPTIONS[name]}")
	print("")
	print("Gradient directions (gradient_direction front matter):")
	for direction in mdreport.theme.GRADIENT_DIRECTIONS:
		print(f"  {direction}")


#============================================
def run_extract(args: argparse.Namespace) -> None:
	output_path = args.output_path
	if output_path is None:
		output_path = default_output_path(args.input, ".md")
	output_path = pathlib.Path(output_path)
	print(f"Input PDF: {args.input}")
	markdown = mdreport.embed.extract_markdown_from_file(args.input)
	try:
		output_path.write_bytes(markdown.encode("utf-8"))
	except OSError as error:
		raise mdreport.errors.ReportIOError("write", str(output_path), error) from error
	print(f"Extracted markdown to: {output_path}")


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Render the input markdown file to PDF.

	Args:
		args: Parsed argparse namespace.
	"""
	start_time = time.perf_counter()
	output_format = infer_format(args.output_path, args.output_format)
	output_path = args.output_path
	if output_path is None:
		output_path = default_output_path(args.input, ".pdf")
	print(f"Input: {args.input}")
	print(f"Format: {output_format}")

	markdown = mdreport.render.read_markdown(args.input)
	render_config = RenderConfig(
		slides=(output_format == FORMAT_SLIDES),
		code_theme=args.code_theme,
		embed_source=args.embed_source,
	)
	result = mdreport.render.write_pdf(markdown, str(output_path), render_config)
	print(f"Pages written: {result.pages}")
	if render_config.embed_source:
		print(f"Source embedded: {result.embedded_bytes} bytes")
	else:
		print("Source embedded: no")
	total_time = time.perf_counter() - start_time
	if output_format == FORMAT_SLIDES:
		print(f"Slides PDF generated: {output_path}")
	else:
		print(f"PDF report generated: {output_path}")
	print(f"Timing: total={total_time:.2f}s")


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	if args.list_themes:
		print_themes()
		return
	try:
		if args.extract:
			run_extract(args)
		else:
			run_pipeline(args)
	except mdreport.errors.ExtractionError as error:
		print(f"Error extracting markdown: {error}", file=sys.stderr)
		raise SystemExit(1)
	except (mdreport.errors.ReportIOError, yaml.YAMLError) as error:
		print(f"Error: {error}", file=sys.stderr)
		raise SystemExit(1)


if __name__ == "__main__":
	main()
