"""
Physical length type used by every layout computation.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.units


POINTS_PER_MM = reportlab.lib.units.mm


@dataclasses.dataclass(frozen=True, order=True)
class Length:
	"""
	A distance in millimeters.

	PDF coordinates are expressed in points; use to_points() when writing
	operators and from_points() when reading page sizes.
	"""
	mm: float = 0.0

	def to_points(self) -> float:
		return self.mm * POINTS_PER_MM

	@classmethod
	def from_points(cls, points: float) -> "Length":
		return cls(points / POINTS_PER_MM)

	def __add__(self, other: "Length") -> "Length":
		if not isinstance(other, Length):
			return NotImplemented
		return Length(self.mm + other.mm)

	def __sub__(self, other: "Length") -> "Length":
		if not isinstance(other, Length):
			return NotImplemented
		return Length(self.mm - other.mm)

	def __mul__(self, factor: float) -> "Length":
		if isinstance(factor, Length):
			return NotImplemented
		return Length(self.mm * factor)

	__rmul__ = __mul__

	def __truediv__(self, other):
		# Length / Length is a plain ratio
		if isinstance(other, Length):
			return self.mm / other.mm
		return Length(self.mm / other)

	def __neg__(self) -> "Length":
		return Length(-self.mm)


ZERO = Length(0.0)
