"""
Slide themes and background specifications.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.colors


RGB = tuple[float, float, float]

WHITE: RGB = (1.0, 1.0, 1.0)
BLACK: RGB = (0.0, 0.0, 0.0)

TOP_TO_BOTTOM = "top-to-bottom"
BOTTOM_TO_TOP = "bottom-to-top"
LEFT_TO_RIGHT = "left-to-right"
RIGHT_TO_LEFT = "right-to-left"
TOP_LEFT_TO_BOTTOM_RIGHT = "top-left-to-bottom-right"
TOP_RIGHT_TO_BOTTOM_LEFT = "top-right-to-bottom-left"
BOTTOM_LEFT_TO_TOP_RIGHT = "bottom-left-to-top-right"
BOTTOM_RIGHT_TO_TOP_LEFT = "bottom-right-to-top-left"
GRADIENT_DIRECTIONS = (
	TOP_TO_BOTTOM,
	BOTTOM_TO_TOP,
	LEFT_TO_RIGHT,
	RIGHT_TO_LEFT,
	TOP_LEFT_TO_BOTTOM_RIGHT,
	TOP_RIGHT_TO_BOTTOM_LEFT,
	BOTTOM_LEFT_TO_TOP_RIGHT,
	BOTTOM_RIGHT_TO_TOP_LEFT,
)
DIRECTION_ALIASES = {"diagonal": TOP_LEFT_TO_BOTTOM_RIGHT}


@dataclasses.dataclass(frozen=True)
class SolidBackground:
	color: RGB


@dataclasses.dataclass(frozen=True)
class LinearGradient:
	start_color: RGB
	end_color: RGB
	direction: str = TOP_TO_BOTTOM


@dataclasses.dataclass(frozen=True)
class RadialGradient:
	center_color: RGB
	edge_color: RGB
	# fractions of page width / height
	center_x: float
	center_y: float
	# fraction of the page diagonal
	radius: float


BackgroundSpec = SolidBackground | LinearGradient | RadialGradient


@dataclasses.dataclass(frozen=True)
class Theme:
	background: BackgroundSpec
	text_color: RGB
	heading_color: RGB


DEFAULT_THEME = Theme(
	background=SolidBackground(WHITE),
	text_color=BLACK,
	heading_color=BLACK,
)

THEMES: dict[str, Theme] = {
	"light": DEFAULT_THEME,
	"dark": Theme(
		background=SolidBackground((0.1, 0.1, 0.1)),
		text_color=(0.9, 0.9, 0.9),
		heading_color=(1.0, 1.0, 1.0),
	),
	"blue": Theme(
		background=SolidBackground((0.1, 0.2, 0.3)),
		text_color=(0.9, 0.95, 1.0),
		heading_color=(0.4, 0.7, 1.0),
	),
	"gradient-blue": Theme(
		background=LinearGradient((0.1, 0.2, 0.4), (0.05, 0.1, 0.2)),
		text_color=(0.9, 0.95, 1.0),
		heading_color=(0.5, 0.8, 1.0),
	),
	"gradient-purple": Theme(
		background=LinearGradient((0.3, 0.1, 0.4), (0.15, 0.05, 0.25)),
		text_color=(0.95, 0.9, 1.0),
		heading_color=(0.8, 0.5, 1.0),
	),
	"gradient-sunset": Theme(
		background=LinearGradient((0.4, 0.2, 0.3), (0.2, 0.1, 0.2)),
		text_color=(1.0, 0.95, 0.9),
		heading_color=(1.0, 0.8, 0.6),
	),
	"radial-spotlight": Theme(
		background=RadialGradient((0.2, 0.25, 0.3), (0.05, 0.05, 0.1), 0.5, 0.5, 0.8),
		text_color=(0.9, 0.95, 1.0),
		heading_color=(0.5, 0.8, 1.0),
	),
	"radial-vignette": Theme(
		background=RadialGradient((0.15, 0.15, 0.15), (0.0, 0.0, 0.0), 0.5, 0.5, 1.0),
		text_color=(0.95, 0.95, 0.95),
		heading_color=(1.0, 1.0, 1.0),
	),
	"radial-corner": Theme(
		background=RadialGradient((0.3, 0.2, 0.4), (0.1, 0.05, 0.15), 0.0, 1.0, 1.2),
		text_color=(0.95, 0.9, 1.0),
		heading_color=(0.8, 0.6, 1.0),
	),
}

THEME_DESCRIPTIONS = {
	"light": "White background with dark text (default)",
	"dark": "Dark gray background with light text",
	"blue": "Dark blue background with light blue text",
	"gradient-blue": "Light to dark blue gradient",
	"gradient-purple": "Light to dark purple gradient",
	"gradient-sunset": "Warm sunset color gradient",
	"radial-spotlight": "Spotlight effect centered on page",
	"radial-vignette": "Vignette effect with dark edges",
	"radial-corner": "Radial gradient from corner",
}


#============================================
def parse_direction(name: str | None) -> str:
	"""
	Normalize a gradient direction name.

	Args:
		name: Direction name from front matter.

	Returns:
		One of GRADIENT_DIRECTIONS; unknown names mean top-to-bottom.
	"""
	if not name:
		return TOP_TO_BOTTOM
	normalized = name.strip().lower()
	normalized = DIRECTION_ALIASES.get(normalized, normalized)
	if normalized in GRADIENT_DIRECTIONS:
		return normalized
	return TOP_TO_BOTTOM


#============================================
def get_theme(name: str | None, direction: str | None = None) -> Theme:
	"""
	Resolve a theme by name, optionally overriding the gradient direction.

	Args:
		name: Theme name; unknown or missing names give the light theme.
		direction: Optional gradient direction name.

	Returns:
		Theme.
	"""
	theme = THEMES.get((name or "").strip().lower(), DEFAULT_THEME)
	if direction is not None and isinstance(theme.background, LinearGradient):
		background = dataclasses.replace(theme.background, direction=parse_direction(direction))
		theme = dataclasses.replace(theme, background=background)
	return theme


#============================================
def hex_to_rgb(value: str) -> RGB:
	"""
	Convert a hex color string into RGB floats.

	Args:
		value: Color like "#aabbcc" or "aabbcc".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	if not value.startswith("#"):
		value = "#" + value
	color = reportlab.lib.colors.HexColor(value)
	return (color.red, color.green, color.blue)
