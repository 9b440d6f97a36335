import pytest
import yaml

import mdreport.frontmatter


#============================================
def test_front_matter_fields() -> None:
	"""
	The YAML header is decoded and removed from the body.
	"""
	content = (
		"---\n"
		"title: Hello\n"
		"author: Ada\n"
		"date: 2024-05-01\n"
		"slide_theme: gradient-blue\n"
		"gradient_direction: diagonal\n"
		"repo: user/repo\n"
		"extra: ignored\n"
		"---\n"
		"# Body\n"
	)
	front_matter, body = mdreport.frontmatter.parse_front_matter(content)
	assert front_matter.title == "Hello"
	assert front_matter.author == "Ada"
	assert front_matter.date == "2024-05-01"
	assert front_matter.slide_theme == "gradient-blue"
	assert front_matter.gradient_direction == "diagonal"
	assert front_matter.repo == "user/repo"
	assert front_matter.code_theme is None
	assert body == "# Body\n"


#============================================
def test_no_front_matter() -> None:
	"""
	Documents without an opening or closing fence have no header.
	"""
	content = "# Title\n\ntext\n"
	assert mdreport.frontmatter.parse_front_matter(content) == (None, content)
	unclosed = "---\ntitle: Hello\n# Title\n"
	assert mdreport.frontmatter.parse_front_matter(unclosed) == (None, unclosed)


#============================================
def test_scalars_become_text() -> None:
	"""
	Non-string scalars are stringified.
	"""
	front_matter, _body = mdreport.frontmatter.parse_front_matter("---\ntitle: 3\n---\n")
	assert front_matter.title == "3"


#============================================
def test_invalid_yaml_raises() -> None:
	"""
	Malformed YAML propagates as a YAML error.
	"""
	with pytest.raises(yaml.YAMLError):
		mdreport.frontmatter.parse_front_matter("---\ntitle: [unclosed\n---\nbody\n")
