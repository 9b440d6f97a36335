"""
Theme background painting: solid fills and axial / radial shadings.
"""

# Standard Library
import math

# PIP3 modules
import pypdf.generic

# local repo modules
import mdreport.theme


SolidBackground = mdreport.theme.SolidBackground
LinearGradient = mdreport.theme.LinearGradient
RadialGradient = mdreport.theme.RadialGradient
RGB = mdreport.theme.RGB
WHITE = mdreport.theme.WHITE

SHADING_AXIAL = 2
SHADING_RADIAL = 3


#============================================
def _number(value: float) -> pypdf.generic.FloatObject:
	return pypdf.generic.FloatObject(round(value, 4))


#============================================
def _color_array(color: RGB) -> pypdf.generic.ArrayObject:
	return pypdf.generic.ArrayObject([_number(channel) for channel in color])


#============================================
def gradient_coords(direction: str, width: float, height: float) -> tuple[float, float, float, float]:
	"""
	Axis endpoints spanning the full page for a gradient direction.

	Args:
		direction: One of the theme direction names.
		width: Page width in points.
		height: Page height in points.

	Returns:
		Tuple of (x0, y0, x1, y1) in points, PDF origin at bottom left.
	"""
	coords = {
		mdreport.theme.TOP_TO_BOTTOM: (0.0, height, 0.0, 0.0),
		mdreport.theme.BOTTOM_TO_TOP: (0.0, 0.0, 0.0, height),
		mdreport.theme.LEFT_TO_RIGHT: (0.0, 0.0, width, 0.0),
		mdreport.theme.RIGHT_TO_LEFT: (width, 0.0, 0.0, 0.0),
		mdreport.theme.TOP_LEFT_TO_BOTTOM_RIGHT: (0.0, height, width, 0.0),
		mdreport.theme.TOP_RIGHT_TO_BOTTOM_LEFT: (width, height, 0.0, 0.0),
		mdreport.theme.BOTTOM_LEFT_TO_TOP_RIGHT: (0.0, 0.0, width, height),
		mdreport.theme.BOTTOM_RIGHT_TO_TOP_LEFT: (width, 0.0, 0.0, height),
	}
	return coords.get(direction, coords[mdreport.theme.TOP_TO_BOTTOM])


#============================================
def radial_coords(
	gradient: RadialGradient,
	width: float,
	height: float,
) -> tuple[float, float, float, float, float, float]:
	"""
	Start and end circles for a radial gradient.

	Args:
		gradient: Radial background spec.
		width: Page width in points.
		height: Page height in points.

	Returns:
		Tuple of (x0, y0, r0, x1, y1, r1); the inner radius is zero.
	"""
	center_x = width * gradient.center_x
	center_y = height * gradient.center_y
	radius = math.hypot(width, height) * gradient.radius
	return (center_x, center_y, 0.0, center_x, center_y, radius)


#============================================
def interpolation_function(start: RGB, end: RGB) -> pypdf.generic.DictionaryObject:
	"""
	Two stop linear interpolation function (FunctionType 2, N = 1).

	Args:
		start: Color at t = 0.
		end: Color at t = 1.

	Returns:
		Function dictionary.
	"""
	return pypdf.generic.DictionaryObject({
		pypdf.generic.NameObject("/FunctionType"): pypdf.generic.NumberObject(2),
		pypdf.generic.NameObject("/Domain"): pypdf.generic.ArrayObject([_number(0.0), _number(1.0)]),
		pypdf.generic.NameObject("/C0"): _color_array(start),
		pypdf.generic.NameObject("/C1"): _color_array(end),
		pypdf.generic.NameObject("/N"): _number(1.0),
	})


#============================================
def shading_signature(background: LinearGradient | RadialGradient) -> tuple:
	"""
	Deduplication key for a gradient background.

	Args:
		background: Gradient spec.

	Returns:
		Hashable tuple describing every parameter of the paint.
	"""
	if isinstance(background, LinearGradient):
		return ("axial", background.start_color, background.end_color, background.direction)
	return (
		"radial",
		background.center_color,
		background.edge_color,
		background.center_x,
		background.center_y,
		background.radius,
	)


#============================================
def build_shading(builder, background: LinearGradient | RadialGradient) -> pypdf.generic.DictionaryObject:
	"""
	Build the shading dictionary and its interpolation function object.

	Args:
		builder: DocumentBuilder that owns the object graph.
		background: Gradient spec.

	Returns:
		Shading dictionary.
	"""
	width = builder.geometry.width.to_points()
	height = builder.geometry.height.to_points()
	if isinstance(background, LinearGradient):
		shading_type = SHADING_AXIAL
		coords = gradient_coords(background.direction, width, height)
		function = interpolation_function(background.start_color, background.end_color)
	else:
		shading_type = SHADING_RADIAL
		coords = radial_coords(background, width, height)
		function = interpolation_function(background.center_color, background.edge_color)
	return pypdf.generic.DictionaryObject({
		pypdf.generic.NameObject("/ShadingType"): pypdf.generic.NumberObject(shading_type),
		pypdf.generic.NameObject("/ColorSpace"): pypdf.generic.NameObject("/DeviceRGB"),
		pypdf.generic.NameObject("/Coords"): pypdf.generic.ArrayObject([_number(value) for value in coords]),
		pypdf.generic.NameObject("/Function"): builder.add_object(function),
		# keep edge colors past the axis ends to cover rounding gaps
		pypdf.generic.NameObject("/Extend"): pypdf.generic.ArrayObject([
			pypdf.generic.BooleanObject(True),
			pypdf.generic.BooleanObject(True),
		]),
	})


#============================================
def paint_background(builder, background) -> None:
	"""
	Emit the paint operations for a page background.

	Pure white solid backgrounds draw nothing. Gradients are registered in
	the builder's shading table under their signature, so repeated pages
	share one shading object.

	Args:
		builder: DocumentBuilder receiving the operations.
		background: SolidBackground, LinearGradient or RadialGradient.
	"""
	if isinstance(background, SolidBackground):
		if background.color == WHITE:
			return
		width = builder.geometry.width.to_points()
		height = builder.geometry.height.to_points()
		builder.emit(b"q", content=False)
		builder.emit(b"rg", list(_color_array(background.color)), content=False)
		builder.emit(b"re", [_number(0.0), _number(0.0), _number(width), _number(height)], content=False)
		builder.emit(b"f", content=False)
		builder.emit(b"Q", content=False)
		return
	name = builder.ensure_shading(
		shading_signature(background),
		lambda: build_shading(builder, background),
	)
	builder.emit(b"q", content=False)
	builder.emit(b"sh", [pypdf.generic.NameObject("/" + name)], content=False)
	builder.emit(b"Q", content=False)
