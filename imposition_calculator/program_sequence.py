"""
Cutter program sequence: outer trims, internal cuts and gutter back cuts.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.units


PROGRAM_INCH_PRECISION = impcalc.config.PROGRAM_INCH_PRECISION
PROGRAM_MM_PRECISION = impcalc.config.PROGRAM_MM_PRECISION

clamp_to_zero = impcalc.units.clamp_to_zero
to_finite = impcalc.units.to_finite
inches_to_millimeters = impcalc.units.inches_to_millimeters
round_half_up = impcalc.units.round_half_up
read_value = impcalc.units.read_value
read_length = impcalc.units.read_length


@dataclasses.dataclass(frozen=True)
class ProgramStep:
	label: str
	inches: float
	millimeters: float


@dataclasses.dataclass(frozen=True)
class SequenceDetails:
	sheet_width: float
	sheet_length: float
	doc_width: float
	doc_length: float
	gutter_width: float
	gutter_length: float
	docs_across: int
	docs_down: int
	imposed_width: float
	imposed_length: float
	top_margin: float
	left_margin: float


#============================================
def read_margin(layout, side: str) -> float:
	"""
	Read a margin, preferring requested margins over realized ones.
	"""
	for group in ("margins", "realized_margins"):
		value = read_value(layout, group, side)
		if value is None:
			continue
		number = to_finite(value, default=math.nan)
		if math.isfinite(number):
			return clamp_to_zero(number)
	return 0.0


#============================================
def sheet_fit_count(usable: float, doc_size: float, gutter: float) -> int:
	"""
	Count documents that fit a usable sheet span, gutter after each.
	"""
	step = doc_size + gutter
	if doc_size <= 0 or step <= 0:
		return 0
	return max(0, int(math.floor(usable / step)))


#============================================
def resolve_count(layout, axis: str, fallback: int) -> int:
	"""
	Use the layout count when present, else the sheet-based fit.

	Args:
		layout: Layout or partial mapping.
		axis: "across" or "down".
		fallback: Sheet-based count.

	Returns:
		Non-negative count.
	"""
	raw = read_value(layout, "counts", axis)
	if raw is None:
		return fallback
	return max(0, int(math.floor(clamp_to_zero(to_finite(raw)))))


#============================================
def calculate_layout_details(layout) -> SequenceDetails | None:
	"""
	Derive sanitized sequence dimensions from a layout.

	Margins for the program are half the leftover of the raw sheet on each
	axis, the operator's reference from the gripper edge. They need not
	match the solver's realized margins.

	Args:
		layout: Solved Layout or a partial mapping.

	Returns:
		SequenceDetails, or None when layout is missing.
	"""
	if layout is None:
		return None
	sheet_width = read_length(layout, "sheet", "raw_width")
	sheet_length = read_length(layout, "sheet", "raw_height")
	doc_width = read_length(layout, "document", "width")
	doc_length = read_length(layout, "document", "height")
	gutter_width = read_length(layout, "gutter", "horizontal")
	gutter_length = read_length(layout, "gutter", "vertical")

	usable_width = clamp_to_zero(sheet_width - 2.0 * read_margin(layout, "left"))
	usable_length = clamp_to_zero(sheet_length - 2.0 * read_margin(layout, "top"))
	docs_across = resolve_count(
		layout, "across", sheet_fit_count(usable_width, doc_width, gutter_width)
	)
	docs_down = resolve_count(
		layout, "down", sheet_fit_count(usable_length, doc_length, gutter_length)
	)

	imposed_width = docs_across * doc_width + max(0, docs_across - 1) * gutter_width
	imposed_length = docs_down * doc_length + max(0, docs_down - 1) * gutter_length

	return SequenceDetails(
		sheet_width=sheet_width,
		sheet_length=sheet_length,
		doc_width=doc_width,
		doc_length=doc_length,
		gutter_width=gutter_width,
		gutter_length=gutter_length,
		docs_across=docs_across,
		docs_down=docs_down,
		imposed_width=imposed_width,
		imposed_length=imposed_length,
		top_margin=clamp_to_zero((sheet_length - imposed_length) / 2.0),
		left_margin=clamp_to_zero((sheet_width - imposed_width) / 2.0),
	)


#============================================
def append_cuts(
	sequence: list[float],
	count: int,
	size: float,
	gutter: float,
	imposed_size: float,
) -> None:
	"""
	Append internal cuts and gutter back cuts for one axis.

	Internal cuts walk back from the imposed edge one document plus gutter
	at a time. When the gutter is positive, each break also needs a back
	cut at the document size to drop the gutter strip.

	Args:
		sequence: Sequence to extend in place.
		count: Documents on this axis.
		size: Document size.
		gutter: Gutter size.
		imposed_size: Imposed span on this axis.
	"""
	for index in range(1, count):
		sequence.append(clamp_to_zero(imposed_size - index * (size + gutter)))
	if gutter > 0:
		for _ in range(1, count):
			sequence.append(size)


#============================================
def calculate_program_sequence(layout) -> list[ProgramStep]:
	"""
	Build the labeled cutter program for a layout.

	Args:
		layout: Solved Layout or a partial mapping.

	Returns:
		ProgramStep list, outer trims first.
	"""
	details = calculate_layout_details(layout)
	if details is None:
		return []

	sequence: list[float] = [
		clamp_to_zero(details.sheet_length - details.top_margin),
		clamp_to_zero(details.sheet_width - details.left_margin),
		details.imposed_length,
		details.imposed_width,
	]
	append_cuts(
		sequence,
		details.docs_across,
		details.doc_width,
		details.gutter_width,
		details.imposed_width,
	)
	append_cuts(
		sequence,
		details.docs_down,
		details.doc_length,
		details.gutter_length,
		details.imposed_length,
	)

	steps: list[ProgramStep] = []
	for value in sequence:
		inches = round_half_up(to_finite(value), PROGRAM_INCH_PRECISION)
		if inches <= 0:
			continue
		steps.append(
			ProgramStep(
				label=f"Step {len(steps) + 1}",
				inches=inches,
				millimeters=inches_to_millimeters(inches, PROGRAM_MM_PRECISION),
			)
		)
	return steps
