"""
Greedy line breaking under an ideal and a maximum width.
"""

# local repo modules
import mdreport.measure
import mdreport.units


Length = mdreport.units.Length
Word = mdreport.measure.Word

WIDTH_EPSILON = 1e-9


#============================================
def line_width(words: list[Word], space_width: Length) -> Length:
	"""
	Width of a line of words joined by single spaces.

	Args:
		words: Words on the line.
		space_width: Width of one separator.

	Returns:
		Total width.
	"""
	if not words:
		return Length(0.0)
	total = sum(word.width.mm for word in words)
	return Length(total + space_width.mm * (len(words) - 1))


#============================================
def break_lines(
	words: list[Word],
	ideal_width: Length,
	max_width: Length,
	space_width: Length = Length(0.0),
) -> list[int]:
	"""
	Partition words into lines.

	Each line takes words while the joined width stays within max_width,
	then ends at the candidate whose width is closest to ideal_width. A
	word wider than max_width sits alone on its line. The final boundary
	(len(words)) is implied and never returned.

	Args:
		words: Measured words.
		ideal_width: Preferred line width.
		max_width: Hard line width limit.
		space_width: Width of the separator between words.

	Returns:
		Strictly increasing exclusive end indices, one per line but the last.
	"""
	breaks: list[int] = []
	count = len(words)
	start = 0
	limit = max_width.mm + WIDTH_EPSILON
	while start < count:
		width = words[start].width.mm
		end = start + 1
		best_end = end
		best_gap = abs(ideal_width.mm - width)
		while end < count:
			candidate = width + space_width.mm + words[end].width.mm
			if candidate > limit:
				break
			width = candidate
			end += 1
			gap = abs(ideal_width.mm - width)
			if gap <= best_gap:
				best_end = end
				best_gap = gap
		if end == count:
			# everything left fits on this line
			best_end = count
		if best_end < count:
			breaks.append(best_end)
		start = best_end
	return breaks


#============================================
def split_lines(words: list[Word], breaks: list[int]) -> list[list[Word]]:
	"""
	Slice words into lines at the given break indices.

	Args:
		words: Measured words.
		breaks: Output of break_lines().

	Returns:
		List of non-empty word lists.
	"""
	lines: list[list[Word]] = []
	start = 0
	for end in list(breaks) + [len(words)]:
		if end > start:
			lines.append(words[start:end])
		start = end
	return lines
