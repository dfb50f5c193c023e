"""
Calculation context: sanitized inputs and the clamped layout area.
"""

# Standard Library
import dataclasses

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.units


SIDES = impcalc.config.SIDES

clamp_to_zero = impcalc.units.clamp_to_zero
read_number = impcalc.units.read_number


@dataclasses.dataclass(frozen=True)
class PerSide:
	top: float = 0.0
	right: float = 0.0
	bottom: float = 0.0
	left: float = 0.0


@dataclasses.dataclass(frozen=True)
class Size:
	width: float = 0.0
	height: float = 0.0


@dataclasses.dataclass(frozen=True)
class Gutter:
	horizontal: float = 0.0
	vertical: float = 0.0


@dataclasses.dataclass(frozen=True)
class SheetInfo:
	raw_width: float
	raw_height: float
	non_printable: PerSide
	effective_width: float
	effective_height: float


@dataclasses.dataclass(frozen=True)
class LayoutArea:
	origin_x: float
	origin_y: float
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class CalculationContext:
	sheet: SheetInfo
	document: Size
	gutter: Gutter
	margins: PerSide
	layout_area: LayoutArea


#============================================
def normalize_per_side(values) -> PerSide:
	"""
	Sanitize a per-side mapping.

	Every side is read as a finite number and clamped to zero, so missing
	sides and garbage values both become 0.

	Args:
		values: Mapping, PerSide or None.

	Returns:
		PerSide with non-negative values.
	"""
	sanitized = {side: clamp_to_zero(read_number(values, side)) for side in SIDES}
	return PerSide(**sanitized)


#============================================
def build_context(
	sheet,
	document,
	gutter,
	margins=None,
	non_printable=None,
) -> CalculationContext:
	"""
	Build a calculation context from raw dimensions.

	The layout origin is pushed past the non-printable band whenever the
	band is wider than the requested margin, so the layout area is never
	inset less than the band.

	Args:
		sheet: Object or mapping with width and height.
		document: Object or mapping with width and height.
		gutter: Object or mapping with horizontal and vertical.
		margins: Per-side requested margins.
		non_printable: Per-side non-printable band.

	Returns:
		CalculationContext.
	"""
	m = normalize_per_side(margins)
	np_band = normalize_per_side(non_printable)
	sheet_width = clamp_to_zero(read_number(sheet, "width"))
	sheet_height = clamp_to_zero(read_number(sheet, "height"))
	doc_width = clamp_to_zero(read_number(document, "width"))
	doc_height = clamp_to_zero(read_number(document, "height"))
	gutter_h = clamp_to_zero(read_number(gutter, "horizontal"))
	gutter_v = clamp_to_zero(read_number(gutter, "vertical"))

	effective_width = clamp_to_zero(sheet_width - np_band.left - np_band.right)
	effective_height = clamp_to_zero(sheet_height - np_band.top - np_band.bottom)

	origin_x = max(m.left, np_band.left)
	origin_y = max(m.top, np_band.top)
	extent_x = sheet_width - max(m.right, np_band.right)
	extent_y = sheet_height - max(m.bottom, np_band.bottom)

	return CalculationContext(
		sheet=SheetInfo(
			raw_width=sheet_width,
			raw_height=sheet_height,
			non_printable=np_band,
			effective_width=effective_width,
			effective_height=effective_height,
		),
		document=Size(width=doc_width, height=doc_height),
		gutter=Gutter(horizontal=gutter_h, vertical=gutter_v),
		margins=m,
		layout_area=LayoutArea(
			origin_x=origin_x,
			origin_y=origin_y,
			width=clamp_to_zero(extent_x - origin_x),
			height=clamp_to_zero(extent_y - origin_y),
		),
	)


#============================================
def build_context_from_inputs(inputs: "impcalc.config.Inputs", margins=None) -> CalculationContext:
	"""
	Build a context from an Inputs record.

	Args:
		inputs: Canonical inputs.
		margins: Optional margin override (used by auto centering).

	Returns:
		CalculationContext.
	"""
	return build_context(
		sheet={"width": inputs.sheet_width, "height": inputs.sheet_height},
		document={"width": inputs.document_width, "height": inputs.document_height},
		gutter={"horizontal": inputs.gutter_horizontal, "vertical": inputs.gutter_vertical},
		margins=inputs.margins if margins is None else margins,
		non_printable=inputs.non_printable,
	)
