"""
Layout solver: document counts, axis usage and realized margins.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.context
import imposition_calculator.units


CalculationContext = impcalc.context.CalculationContext
PerSide = impcalc.context.PerSide
SheetInfo = impcalc.context.SheetInfo
Size = impcalc.context.Size
Gutter = impcalc.context.Gutter
LayoutArea = impcalc.context.LayoutArea

COUNT_EPSILON = impcalc.config.COUNT_EPSILON

clamp_to_zero = impcalc.units.clamp_to_zero


@dataclasses.dataclass(frozen=True)
class AxisUsage:
	used_span: float
	trailing_margin: float


@dataclasses.dataclass(frozen=True)
class Counts:
	across: int
	down: int


@dataclasses.dataclass(frozen=True)
class Usage:
	horizontal: AxisUsage
	vertical: AxisUsage


@dataclasses.dataclass(frozen=True)
class Layout:
	sheet: SheetInfo
	document: Size
	gutter: Gutter
	margins: PerSide
	layout_area: LayoutArea
	counts: Counts
	usage: Usage
	realized_margins: PerSide


#============================================
def calculate_document_count(available: float, span: float, gutter: float) -> int:
	"""
	Compute how many documents fit along one axis.

	The last document has no trailing gutter, hence the gutter is added to
	the available span. A small epsilon keeps ratios such as 2.9999999
	from losing a document that really fits.

	Args:
		available: Available span.
		span: Document size on this axis.
		gutter: Gutter between documents.

	Returns:
		Non-negative document count.
	"""
	if available <= 0 or span <= 0:
		return 0
	g = clamp_to_zero(gutter)
	ratio = (available + g) / (span + g)
	return max(0, int(math.floor(ratio + COUNT_EPSILON)))


#============================================
def calculate_axis_usage(available: float, span: float, gutter: float, count: int) -> AxisUsage:
	"""
	Compute used span and trailing margin for a count.

	Args:
		available: Available span.
		span: Document size on this axis.
		gutter: Gutter between documents.
		count: Documents on this axis.

	Returns:
		AxisUsage.
	"""
	if count <= 0:
		return AxisUsage(used_span=0.0, trailing_margin=clamp_to_zero(available))
	g = clamp_to_zero(gutter)
	used = count * span + max(0, count - 1) * g
	return AxisUsage(used_span=used, trailing_margin=clamp_to_zero(available - used))


#============================================
def compute_realized_margins(
	sheet: SheetInfo,
	layout_area: LayoutArea,
	usage: Usage,
) -> PerSide:
	"""
	Measure margins from the raw sheet edge to the outermost documents.
	"""
	right_edge = layout_area.origin_x + usage.horizontal.used_span
	bottom_edge = layout_area.origin_y + usage.vertical.used_span
	return PerSide(
		top=clamp_to_zero(layout_area.origin_y),
		right=clamp_to_zero(sheet.raw_width - right_edge),
		bottom=clamp_to_zero(sheet.raw_height - bottom_edge),
		left=clamp_to_zero(layout_area.origin_x),
	)


#============================================
def build_layout(context: CalculationContext, across: int, down: int) -> Layout:
	"""
	Assemble a Layout for explicit counts.

	Args:
		context: Calculation context.
		across: Documents across.
		down: Documents down.

	Returns:
		Layout with usage and realized margins recomputed.
	"""
	area = context.layout_area
	usage = Usage(
		horizontal=calculate_axis_usage(
			area.width, context.document.width, context.gutter.horizontal, across
		),
		vertical=calculate_axis_usage(
			area.height, context.document.height, context.gutter.vertical, down
		),
	)
	return Layout(
		sheet=context.sheet,
		document=context.document,
		gutter=context.gutter,
		margins=context.margins,
		layout_area=area,
		counts=Counts(across=across, down=down),
		usage=usage,
		realized_margins=compute_realized_margins(context.sheet, area, usage),
	)


#============================================
def calculate_layout(context: CalculationContext) -> Layout:
	"""
	Solve the maximum grid for a context.

	Args:
		context: Calculation context.

	Returns:
		Layout at the solver maximum.
	"""
	area = context.layout_area
	max_across = calculate_document_count(
		area.width, context.document.width, context.gutter.horizontal
	)
	max_down = calculate_document_count(
		area.height, context.document.height, context.gutter.vertical
	)
	return build_layout(context, max_across, max_down)


#============================================
def resolve_forced_count(solver_count: int, forced: int | None) -> int:
	"""
	Apply a forced count that may only lower the solver count.
	"""
	if forced is None:
		return solver_count
	return max(0, min(solver_count, int(forced)))


#============================================
def apply_count_overrides(
	layout: Layout,
	force_across: int | None = None,
	force_down: int | None = None,
) -> Layout:
	"""
	Cap the solved counts with optional user overrides.

	Overrides never raise a count past the solver maximum; usage and
	realized margins are recomputed for the capped counts.

	Args:
		layout: Solved layout.
		force_across: Desired documents across, or None.
		force_down: Desired documents down, or None.

	Returns:
		Layout with the effective counts.
	"""
	across = resolve_forced_count(layout.counts.across, force_across)
	down = resolve_forced_count(layout.counts.down, force_down)
	context = CalculationContext(
		sheet=layout.sheet,
		document=layout.document,
		gutter=layout.gutter,
		margins=layout.margins,
		layout_area=layout.layout_area,
	)
	return build_layout(context, across, down)


#============================================
def solve(
	context: CalculationContext,
	force_across: int | None = None,
	force_down: int | None = None,
) -> Layout:
	"""
	Solve a context and apply forced count overrides.
	"""
	return apply_count_overrides(calculate_layout(context), force_across, force_down)


#============================================
def compute_auto_margins(context: CalculationContext, layout: Layout) -> PerSide:
	"""
	Derive symmetric margins that center the used span in the printable area.

	Half of the printable leftover on each axis is added to the
	non-printable band on both sides of that axis.

	Args:
		context: Context the layout was solved from.
		layout: Layout from the first solve.

	Returns:
		PerSide margins for the centering re-solve.
	"""
	band = context.sheet.non_printable
	leftover_x = clamp_to_zero(
		(context.sheet.effective_width - layout.usage.horizontal.used_span) / 2.0
	)
	leftover_y = clamp_to_zero(
		(context.sheet.effective_height - layout.usage.vertical.used_span) / 2.0
	)
	return PerSide(
		top=band.top + leftover_y,
		right=band.right + leftover_x,
		bottom=band.bottom + leftover_y,
		left=band.left + leftover_x,
	)
