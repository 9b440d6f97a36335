"""
YAML front matter decoding.
"""

# Standard Library
import dataclasses

# PIP3 modules
import yaml


OPENING_FENCE = "---\n"
CLOSING_FENCE = "\n---\n"


@dataclasses.dataclass(frozen=True)
class FrontMatter:
	title: str | None = None
	author: str | None = None
	date: str | None = None
	code_theme: str | None = None
	slide_theme: str | None = None
	gradient_direction: str | None = None
	repo: str | None = None


FIELD_NAMES = tuple(field.name for field in dataclasses.fields(FrontMatter))


#============================================
def _as_text(value: object) -> str | None:
	if value is None:
		return None
	if hasattr(value, "isoformat"):
		return value.isoformat()
	return str(value)


#============================================
def parse_front_matter(content: str) -> tuple[FrontMatter | None, str]:
	"""
	Split an optional YAML header from the document body.

	Args:
		content: Full markdown text.

	Returns:
		Tuple of (FrontMatter or None, remaining body text).

	Raises:
		yaml.YAMLError: The header is present but is not valid YAML.
	"""
	if not content.startswith(OPENING_FENCE):
		return (None, content)
	after_opening = content[len(OPENING_FENCE):]
	closing_pos = after_opening.find(CLOSING_FENCE)
	if closing_pos < 0:
		return (None, content)
	data = yaml.safe_load(after_opening[:closing_pos])
	if not isinstance(data, dict):
		data = {}
	values = {name: _as_text(data.get(name)) for name in FIELD_NAMES}
	remaining = after_opening[closing_pos + len(CLOSING_FENCE):]
	return (FrontMatter(**values), remaining)
