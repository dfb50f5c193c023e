"""
Single entry point: inputs in, context, layout, finishing and program out.
"""

# Standard Library
import dataclasses
import enum
import math

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.context
import imposition_calculator.finishing
import imposition_calculator.layout
import imposition_calculator.presets
import imposition_calculator.program_sequence
import imposition_calculator.units


Inputs = impcalc.config.Inputs
FinishingOptions = impcalc.config.FinishingOptions
HoleEntry = impcalc.config.HoleEntry
HolePlan = impcalc.config.HolePlan
ReadoutPrecision = impcalc.config.ReadoutPrecision
CalculationContext = impcalc.context.CalculationContext
Layout = impcalc.layout.Layout
FinishingReadout = impcalc.finishing.FinishingReadout
ProgramStep = impcalc.program_sequence.ProgramStep

SIDES = impcalc.config.SIDES
MARGIN_WARNING_TOLERANCE = impcalc.config.MARGIN_WARNING_TOLERANCE

read_value = impcalc.units.read_value
to_finite = impcalc.units.to_finite
to_canonical = impcalc.units.to_canonical
normalize_units = impcalc.units.normalize_units
format_measurement = impcalc.units.format_measurement


@dataclasses.dataclass(frozen=True)
class ComputeResult:
	inputs: Inputs
	context: CalculationContext
	layout: Layout
	finishing: FinishingReadout
	program_sequence: list[ProgramStep]
	reconstructed_inputs: Inputs


#============================================
def parse_force(value) -> int | None:
	"""
	Parse an optional forced count; anything below 1 means no override.
	"""
	if value is None:
		return None
	number = to_finite(value, default=math.nan)
	if not math.isfinite(number):
		return None
	count = int(math.floor(number))
	if count < 1:
		return None
	return count


#============================================
def parse_fractions(value) -> tuple:
	if isinstance(value, (list, tuple)):
		return tuple(value)
	return ()


#============================================
def parse_hole_plan(raw, units: str) -> HolePlan:
	"""
	Parse a hole plan, converting its lengths to inches.

	A "preset" name expands through the hole-plan presets; without one the
	entries are taken as given.

	Args:
		raw: Mapping with diameter (or size), entries and optional preset.
		units: Units the lengths are expressed in.

	Returns:
		HolePlan.
	"""
	diameter_raw = read_value(raw, "diameter")
	if diameter_raw is None:
		diameter_raw = read_value(raw, "size")
	diameter = to_canonical(diameter_raw, units)
	raw_entries = read_value(raw, "entries", default=())
	if not isinstance(raw_entries, (list, tuple)):
		raw_entries = ()
	entries = []
	for raw_entry in raw_entries:
		entry = impcalc.finishing.normalize_hole_entry(raw_entry)
		entries.append(
			dataclasses.replace(
				entry,
				axis_offset=to_canonical(entry.axis_offset, units),
				offset=to_canonical(entry.offset, units),
			)
		)
	preset = read_value(raw, "preset")
	if isinstance(preset, str):
		return impcalc.presets.resolve_hole_plan(preset, diameter, tuple(entries))
	return HolePlan(diameter=max(0.0, diameter), entries=tuple(entries))


#============================================
def parse_inputs(raw) -> Inputs:
	"""
	Read a JSON-style input mapping into canonical Inputs.

	Keys may be snake_case or camelCase. Missing numbers read as zero.
	With units "mm" every length is divided by 25.4. Only a JSON true turns
	auto margins on.

	Args:
		raw: Mapping following the input schema, or None.

	Returns:
		Inputs in inches.
	"""
	units = normalize_units(read_value(raw, "units"))

	def length(*path: str) -> float:
		return to_canonical(read_value(raw, *path), units)

	finishing_raw = read_value(raw, "finishing")
	if finishing_raw is None:
		finishing_raw = read_value(raw, "finishing_options")

	finishing = FinishingOptions(
		score_horizontal=parse_fractions(read_value(finishing_raw, "score_horizontal")),
		score_vertical=parse_fractions(read_value(finishing_raw, "score_vertical")),
		perforation_horizontal=parse_fractions(read_value(finishing_raw, "perforation_horizontal")),
		perforation_vertical=parse_fractions(read_value(finishing_raw, "perforation_vertical")),
		hole_plan=parse_hole_plan(read_value(finishing_raw, "hole_plan"), units),
	)

	return Inputs(
		sheet_width=length("sheet", "width"),
		sheet_height=length("sheet", "height"),
		document_width=length("document", "width"),
		document_height=length("document", "height"),
		gutter_horizontal=length("gutter", "horizontal"),
		gutter_vertical=length("gutter", "vertical"),
		margins={side: length("margins", side) for side in SIDES},
		non_printable={side: length("non_printable", side) for side in SIDES},
		auto_margins=read_value(raw, "auto_margins") is True,
		force_across=parse_force(read_value(raw, "force_across")),
		force_down=parse_force(read_value(raw, "force_down")),
		finishing=finishing,
	)


#============================================
def compute(inputs, precision: ReadoutPrecision | None = None) -> ComputeResult:
	"""
	Run the context builder, solver, finishing generator and sequencer.

	In auto-margin mode the first solve ignores requested margins, the
	printable leftover is split evenly on each axis, and the layout is
	solved again with those margins. Forced counts apply to both solves.

	Args:
		inputs: Inputs record or a raw mapping for parse_inputs.
		precision: Optional finishing readout precision.

	Returns:
		ComputeResult.
	"""
	if not isinstance(inputs, Inputs):
		inputs = parse_inputs(inputs)

	first_margins = inputs.margins
	if inputs.auto_margins:
		first_margins = {side: 0.0 for side in SIDES}
	context = impcalc.context.build_context_from_inputs(inputs, margins=first_margins)
	layout = impcalc.layout.solve(context, inputs.force_across, inputs.force_down)

	if inputs.auto_margins:
		centered = impcalc.layout.compute_auto_margins(context, layout)
		context = impcalc.context.build_context_from_inputs(
			inputs, margins=dataclasses.asdict(centered)
		)
		layout = impcalc.layout.solve(context, inputs.force_across, inputs.force_down)

	finishing = impcalc.finishing.calculate_finishing(layout, inputs.finishing, precision)
	program_sequence = impcalc.program_sequence.calculate_program_sequence(layout)

	reconstructed = dataclasses.replace(
		inputs,
		margins=dataclasses.asdict(context.margins),
		auto_margins=False,
		force_across=layout.counts.across or None,
		force_down=layout.counts.down or None,
	)
	return ComputeResult(
		inputs=inputs,
		context=context,
		layout=layout,
		finishing=finishing,
		program_sequence=program_sequence,
		reconstructed_inputs=reconstructed,
	)


#============================================
def _plain_dict_factory(items: list[tuple[str, object]]) -> dict:
	plain = {}
	for key, value in items:
		if isinstance(value, enum.Enum):
			value = value.value
		plain[key] = value
	return plain


#============================================
def result_to_dict(result: ComputeResult) -> dict:
	"""
	Convert a ComputeResult to JSON-ready plain data.

	Args:
		result: Computation result.

	Returns:
		Dict with context, layout, finishing, program_sequence and
		reconstructed_inputs.
	"""
	return dataclasses.asdict(result, dict_factory=_plain_dict_factory)


#============================================
def collect_warnings(result: ComputeResult) -> list[str]:
	"""
	Build host-facing warning messages for a result.

	Args:
		result: Computation result.

	Returns:
		List of warning strings, empty when nothing stands out.
	"""
	warnings: list[str] = []
	counts = result.layout.counts
	if counts.across * counts.down == 0:
		warnings.append(
			f"No documents fit: {counts.across} across x {counts.down} down."
		)
		return warnings
	if result.inputs.auto_margins:
		return warnings
	realized = result.layout.realized_margins
	for side in SIDES:
		requested = to_finite(result.inputs.margins.get(side))
		actual = getattr(realized, side)
		if abs(actual - requested) > MARGIN_WARNING_TOLERANCE:
			warnings.append(
				f"Realized {side} margin {format_measurement(actual, 'in')} "
				f"differs from requested {format_measurement(requested, 'in')}."
			)
	return warnings
