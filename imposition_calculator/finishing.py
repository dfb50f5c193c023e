"""
Finishing coordinates: cuts, slits, scores, perforations and drilled holes.
"""

# Standard Library
import dataclasses

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.units


Edge = impcalc.config.Edge
Align = impcalc.config.Align
HoleEntry = impcalc.config.HoleEntry
HolePlan = impcalc.config.HolePlan
FinishingOptions = impcalc.config.FinishingOptions
ReadoutPrecision = impcalc.config.ReadoutPrecision

DEFAULT_EDGE = impcalc.config.DEFAULT_EDGE
DEFAULT_ALIGN = impcalc.config.DEFAULT_ALIGN

clamp = impcalc.units.clamp
clamp_to_zero = impcalc.units.clamp_to_zero
to_finite = impcalc.units.to_finite
inches_to_millimeters = impcalc.units.inches_to_millimeters
round_half_up = impcalc.units.round_half_up
read_value = impcalc.units.read_value
read_number = impcalc.units.read_number
read_length = impcalc.units.read_length
read_count = impcalc.units.read_count

_MISSING = object()


@dataclasses.dataclass(frozen=True)
class Readout:
	label: str
	inches: float
	millimeters: float


@dataclasses.dataclass(frozen=True)
class Hole:
	label: str
	x: float
	y: float
	diameter: float
	doc_across: int
	doc_down: int
	hole_index: int


@dataclasses.dataclass(frozen=True)
class AxisReadouts:
	horizontal: list[Readout]
	vertical: list[Readout]


@dataclasses.dataclass(frozen=True)
class FinishingReadout:
	cuts: list[Readout]
	slits: list[Readout]
	scores: AxisReadouts
	perforations: AxisReadouts
	holes: list[Hole]


#============================================
def generate_edge_positions(
	start_offset: float,
	doc_span: float,
	gutter_span: float,
	doc_count: int,
) -> list[float]:
	"""
	Generate leading and trailing document edges along one axis.

	With a zero gutter the trailing edge of one document is the leading
	edge of the next and is emitted once, giving count + 1 positions.
	With a positive gutter both edges are separate knife actions, giving
	2 * count positions.

	Args:
		start_offset: Leading edge of the first document.
		doc_span: Document size on this axis.
		gutter_span: Gutter between documents.
		doc_count: Documents on this axis.

	Returns:
		Ordered edge positions.
	"""
	if doc_count <= 0:
		return []
	g = clamp_to_zero(gutter_span)
	positions: list[float] = []
	lead = start_offset
	positions.append(lead)
	for index in range(doc_count):
		trail = lead + doc_span
		positions.append(trail)
		if index < doc_count - 1:
			lead = trail + g
			if g > 0:
				positions.append(lead)
	return positions


#============================================
def sanitize_fractions(offsets) -> list[float]:
	"""
	Keep finite fractions and clamp them into [0, 1], preserving order.
	"""
	if not isinstance(offsets, (list, tuple)):
		return []
	fractions: list[float] = []
	for raw in offsets:
		if raw is None:
			# null reads as the leading edge
			raw = 0.0
		value = to_finite(raw, default=_MISSING)
		if value is _MISSING:
			continue
		fractions.append(clamp(value, 0.0, 1.0))
	return fractions


#============================================
def generate_score_positions(
	start_offset: float,
	doc_span: float,
	gutter_span: float,
	doc_count: int,
	offsets,
) -> list[float]:
	"""
	Place fractional score or perforation lines inside every document.

	Args:
		start_offset: Leading edge of the first document.
		doc_span: Document size on this axis.
		gutter_span: Gutter between documents.
		doc_count: Documents on this axis.
		offsets: Fractions of the document span.

	Returns:
		Positions, documents outer and fractions inner.
	"""
	fractions = sanitize_fractions(offsets)
	if not fractions or doc_count <= 0:
		return []
	g = clamp_to_zero(gutter_span)
	positions: list[float] = []
	for index in range(doc_count):
		base = start_offset + index * (doc_span + g)
		for fraction in fractions:
			positions.append(base + doc_span * fraction)
	return positions


#============================================
def map_positions_to_readout(
	label: str,
	positions: list[float],
	precision: ReadoutPrecision | None = None,
) -> list[Readout]:
	"""
	Label and round positions for display.

	Millimeters come from the unrounded position, so both columns are
	rounded exactly once.

	Args:
		label: Label prefix such as "Cut".
		positions: Positions in inches.
		precision: Optional decimal places for each unit.

	Returns:
		Readout entries numbered from 1.
	"""
	if precision is None:
		precision = ReadoutPrecision()
	return [
		Readout(
			label=f"{label} {index + 1}",
			inches=round_half_up(position, precision.inches),
			millimeters=inches_to_millimeters(position, precision.millimeters),
		)
		for index, position in enumerate(positions)
	]


#============================================
def normalize_edge(value) -> Edge:
	if isinstance(value, Edge):
		return value
	if isinstance(value, str):
		try:
			return Edge(value.strip().lower())
		except ValueError:
			return DEFAULT_EDGE
	return DEFAULT_EDGE


#============================================
def normalize_align(value) -> Align:
	if isinstance(value, Align):
		return value
	if isinstance(value, str):
		try:
			return Align(value.strip().lower())
		except ValueError:
			return DEFAULT_ALIGN
	return DEFAULT_ALIGN


#============================================
def normalize_hole_entry(entry) -> HoleEntry:
	"""
	Normalize a raw hole entry.

	Unknown edges fall back to left and unknown alignments to center.

	Args:
		entry: HoleEntry, mapping or None.

	Returns:
		HoleEntry with sanitized fields.
	"""
	return HoleEntry(
		edge=normalize_edge(read_value(entry, "edge")),
		align=normalize_align(read_value(entry, "align")),
		axis_offset=read_number(entry, "axis_offset"),
		offset=clamp_to_zero(read_number(entry, "offset")),
	)


#============================================
def resolve_along_edge(length: float, align: Align, axis_offset: float) -> float:
	"""
	Resolve the along-edge coordinate inside a document.

	Args:
		length: Document length along the edge.
		align: Alignment anchor.
		axis_offset: Signed displacement from the anchor.

	Returns:
		Coordinate clamped into [0, length].
	"""
	if align == Align.START:
		return clamp(axis_offset, 0.0, length)
	if align == Align.END:
		return clamp(length - axis_offset, 0.0, length)
	return clamp(length / 2.0 + axis_offset, 0.0, length)


#============================================
def resolve_hole_position(
	entry: HoleEntry,
	doc_width: float,
	doc_height: float,
) -> tuple[float, float]:
	"""
	Resolve a document-local hole center.

	Args:
		entry: Normalized hole entry.
		doc_width: Document width.
		doc_height: Document height.

	Returns:
		Tuple of (x, y) relative to the document origin.
	"""
	if entry.edge == Edge.TOP:
		x = resolve_along_edge(doc_width, entry.align, entry.axis_offset)
		y = clamp(entry.offset, 0.0, doc_height)
	elif entry.edge == Edge.BOTTOM:
		x = resolve_along_edge(doc_width, entry.align, entry.axis_offset)
		y = clamp(doc_height - entry.offset, 0.0, doc_height)
	elif entry.edge == Edge.RIGHT:
		x = clamp(doc_width - entry.offset, 0.0, doc_width)
		y = resolve_along_edge(doc_height, entry.align, entry.axis_offset)
	else:
		x = clamp(entry.offset, 0.0, doc_width)
		y = resolve_along_edge(doc_height, entry.align, entry.axis_offset)
	return (x, y)


#============================================
def generate_holes(layout, hole_plan) -> list[Hole]:
	"""
	Generate hole centers for every document on the sheet.

	Iteration runs rows outer, columns inner and plan entries innermost.

	Args:
		layout: Solved Layout or a partial mapping.
		hole_plan: HolePlan or mapping with diameter and entries.

	Returns:
		Hole records in sheet coordinates.
	"""
	diameter = read_number(hole_plan, "diameter")
	raw_entries = read_value(hole_plan, "entries", default=())
	if not isinstance(raw_entries, (list, tuple)):
		raw_entries = ()
	entries = [normalize_hole_entry(entry) for entry in raw_entries]
	across = read_count(layout, "counts", "across")
	down = read_count(layout, "counts", "down")
	if diameter <= 0 or not entries or across <= 0 or down <= 0:
		return []

	origin_x = read_number(layout, "layout_area", "origin_x")
	origin_y = read_number(layout, "layout_area", "origin_y")
	doc_width = read_length(layout, "document", "width")
	doc_height = read_length(layout, "document", "height")
	gutter_h = read_length(layout, "gutter", "horizontal")
	gutter_v = read_length(layout, "gutter", "vertical")

	holes: list[Hole] = []
	for row in range(down):
		doc_y = origin_y + row * (doc_height + gutter_v)
		for col in range(across):
			doc_x = origin_x + col * (doc_width + gutter_h)
			for entry_index, entry in enumerate(entries):
				local_x, local_y = resolve_hole_position(entry, doc_width, doc_height)
				holes.append(
					Hole(
						label=f"Hole {entry_index + 1} - Doc {col + 1},{row + 1}",
						x=doc_x + local_x,
						y=doc_y + local_y,
						diameter=diameter,
						doc_across=col + 1,
						doc_down=row + 1,
						hole_index=entry_index + 1,
					)
				)
	return holes


#============================================
def calculate_finishing(
	layout,
	options=None,
	precision: ReadoutPrecision | None = None,
) -> FinishingReadout:
	"""
	Compute every finishing readout for a layout.

	Missing layout fields read as zero, so a partial or absent layout
	yields empty channels instead of failing.

	Args:
		layout: Solved Layout, partial mapping or None.
		options: FinishingOptions, mapping or None.
		precision: Optional readout precision.

	Returns:
		FinishingReadout.
	"""
	origin_x = read_number(layout, "layout_area", "origin_x")
	origin_y = read_number(layout, "layout_area", "origin_y")
	doc_width = read_length(layout, "document", "width")
	doc_height = read_length(layout, "document", "height")
	gutter_h = read_length(layout, "gutter", "horizontal")
	gutter_v = read_length(layout, "gutter", "vertical")
	across = read_count(layout, "counts", "across")
	down = read_count(layout, "counts", "down")

	cut_positions = generate_edge_positions(origin_y, doc_height, gutter_v, down)
	slit_positions = generate_edge_positions(origin_x, doc_width, gutter_h, across)

	def vertical_axis(name: str) -> list[float]:
		return generate_score_positions(
			origin_y, doc_height, gutter_v, down, read_value(options, name)
		)

	def horizontal_axis(name: str) -> list[float]:
		return generate_score_positions(
			origin_x, doc_width, gutter_h, across, read_value(options, name)
		)

	return FinishingReadout(
		cuts=map_positions_to_readout("Cut", cut_positions, precision),
		slits=map_positions_to_readout("Slit", slit_positions, precision),
		scores=AxisReadouts(
			horizontal=map_positions_to_readout(
				"Score", vertical_axis("score_horizontal"), precision
			),
			vertical=map_positions_to_readout(
				"Score", horizontal_axis("score_vertical"), precision
			),
		),
		perforations=AxisReadouts(
			horizontal=map_positions_to_readout(
				"Perforation", vertical_axis("perforation_horizontal"), precision
			),
			vertical=map_positions_to_readout(
				"Perforation", horizontal_axis("perforation_vertical"), precision
			),
		),
		holes=generate_holes(layout, read_value(options, "hole_plan")),
	)
