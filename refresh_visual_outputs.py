#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render the showcase document in every format and theme for visual review.
"""

# Standard Library
import argparse
import json
import pathlib
import subprocess

# local repo modules
import mdreport.config
import mdreport.render
import mdreport.theme


#============================================
def get_repo_root() -> pathlib.Path:
	"""
	Get the repository root via git.

	Returns:
		Repository root path.
	"""
	result = subprocess.run(
		["git", "rev-parse", "--show-toplevel"],
		capture_output=True,
		text=True,
		check=False,
	)
	if result.returncode != 0:
		# not a checkout; fall back to the script location
		return pathlib.Path(__file__).resolve().parent
	root = result.stdout.strip()
	if not root:
		raise AssertionError("git rev-parse returned empty output")
	return pathlib.Path(root)


#============================================
def write_json(path: pathlib.Path, payload: dict) -> None:
	"""
	Write a JSON payload to disk.

	Args:
		path: Output path.
		payload: JSON payload.
	"""
	text = json.dumps(payload, indent=2, sort_keys=True)
	path.write_text(text, encoding="utf-8")


#============================================
def with_front_matter(body: str, slide_theme: str | None = None, direction: str | None = None) -> str:
	"""
	Prefix a showcase body with a front matter block.

	Args:
		body: Markdown body.
		slide_theme: Optional slide theme name.
		direction: Optional gradient direction.

	Returns:
		Full markdown document.
	"""
	lines = [
		"---",
		"title: Showcase",
		"author: Layout Team",
		"date: 2024-05-01",
		"repo: example/markdown-report",
	]
	if slide_theme:
		lines.append(f"slide_theme: {slide_theme}")
	if direction:
		lines.append(f"gradient_direction: {direction}")
	lines.append("---")
	return "\n".join(lines) + "\n" + body


#============================================
def build_variants(body: str) -> dict[str, tuple[str, bool]]:
	"""
	Enumerate every format, theme and gradient direction combination.

	Args:
		body: Showcase markdown body.

	Returns:
		Map of output stem to (markdown, slides flag).
	"""
	variants = {"report": (with_front_matter(body), False)}
	for theme_name, theme in mdreport.theme.THEMES.items():
		variants[f"slides-{theme_name}"] = (with_front_matter(body, theme_name), True)
		if not isinstance(theme.background, mdreport.theme.LinearGradient):
			continue
		for direction in mdreport.theme.GRADIENT_DIRECTIONS:
			stem = f"slides-{theme_name}-{direction}"
			variants[stem] = (with_front_matter(body, theme_name, direction), True)
	return variants


#============================================
def parse_args() -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Render visual review outputs.")
	parser.add_argument("-o", "--output-dir", dest="output_dir", default=None, help="Output directory.")
	return parser.parse_args()


#============================================
def main() -> None:
	"""
	Render all variants and write a page count manifest.
	"""
	args = parse_args()
	repo_root = get_repo_root()
	output_dir = pathlib.Path(args.output_dir) if args.output_dir else repo_root / "visual_outputs"
	output_dir.mkdir(parents=True, exist_ok=True)
	body = (repo_root / "tests" / "fixtures" / "showcase.md").read_text(encoding="utf-8")

	page_counts = {}
	for stem, (markdown, slides) in build_variants(body).items():
		render_config = mdreport.config.RenderConfig(slides=slides)
		result = mdreport.render.write_pdf(markdown, str(output_dir / f"{stem}.pdf"), render_config)
		page_counts[stem] = result.pages
		print(f"{stem}: {result.pages} pages")
	write_json(output_dir / "manifest.json", page_counts)
	print(f"Updated visual outputs in {output_dir}.")


if __name__ == "__main__":
	main()
