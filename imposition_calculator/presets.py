"""
Preset sheet, document, gutter, layout and hole-plan definitions.

All lengths are canonical inches. Metric presets store the inch
equivalent of their nominal millimeter size.
"""

# Standard Library
import dataclasses

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config


Edge = impcalc.config.Edge
Align = impcalc.config.Align
HoleEntry = impcalc.config.HoleEntry
HolePlan = impcalc.config.HolePlan
FinishingOptions = impcalc.config.FinishingOptions
Inputs = impcalc.config.Inputs

SIDES = impcalc.config.SIDES
DEFAULT_HOLE_DIAMETER = impcalc.config.DEFAULT_HOLE_DIAMETER


@dataclasses.dataclass(frozen=True)
class SizePreset:
	id: str
	label: str
	width: float
	height: float
	systems: tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class LayoutPreset:
	label: str
	sheet: tuple[float, float]
	document: tuple[float, float]
	gutter: tuple[float, float]
	non_printable: float
	score_horizontal: tuple[float, ...] = ()
	score_vertical: tuple[float, ...] = ()
	perforation_horizontal: tuple[float, ...] = ()
	perforation_vertical: tuple[float, ...] = ()


SHEET_PRESETS = (
	SizePreset("sheet-1218", "12x18 in", 12.0, 18.0, ("imperial",)),
	SizePreset("sheet-1319", "13x19 in", 13.0, 19.0, ("imperial",)),
	SizePreset("sheet-a3", "A3 (297x420 mm)", 11.69291, 16.53543, ("metric",)),
	SizePreset("sheet-sra3", "SRA3 (320x450 mm)", 12.59843, 17.71654, ("metric",)),
)

DOCUMENT_PRESETS = (
	SizePreset("doc-35x2", "3.5x2 in (Business Card)", 3.5, 2.0, ("imperial",)),
	SizePreset("doc-8511", "8.5x11 in (Letter)", 8.5, 11.0, ("imperial",)),
	SizePreset("doc-55x85", "5.5x8.5 in", 5.5, 8.5, ("imperial",)),
	SizePreset("doc-35x4", "3.5x4 in", 3.5, 4.0, ("imperial",)),
	SizePreset("doc-a5", "A5 (148x210 mm)", 5.82677, 8.26772, ("metric",)),
	SizePreset("doc-a6", "A6 (105x148 mm)", 4.13386, 5.82677, ("metric",)),
	SizePreset("doc-dl", "DL (99x210 mm)", 3.89764, 8.26772, ("metric",)),
)

# width is the horizontal gutter, height the vertical one
GUTTER_PRESETS = (
	SizePreset("gut-none", "No gutters", 0.0, 0.0, ("imperial", "metric")),
	SizePreset("gut-eighth", "1/8 in (0.125 in)", 0.125, 0.125, ("imperial",)),
	SizePreset("gut-3125x67", "0.3125x0.67 in", 0.3125, 0.67, ("imperial",)),
	SizePreset("gut-1inch", "1 in (1.0 in)", 1.0, 1.0, ("imperial",)),
	SizePreset("gut-3mm", "3 mm", 0.11811, 0.11811, ("metric",)),
	SizePreset("gut-5mm", "5 mm", 0.19685, 0.19685, ("metric",)),
	SizePreset("gut-10mm", "10 mm", 0.3937, 0.3937, ("metric",)),
)

LAYOUT_PRESETS = {
	"folded-business-card": LayoutPreset(
		label="Folded Business Card",
		sheet=(12.0, 18.0),
		document=(3.5, 5.0),
		gutter=(0.125, 0.125),
		non_printable=0.0625,
		score_horizontal=(0.5,),
	),
	"trifold-brochure": LayoutPreset(
		label="Tri-fold Brochure",
		sheet=(12.0, 18.0),
		document=(11.0, 8.5),
		gutter=(0.25, 0.25),
		non_printable=0.125,
		score_vertical=(1.0 / 3.0, 2.0 / 3.0),
	),
	"postcard-gang-run": LayoutPreset(
		label="Postcard Gang Run",
		sheet=(13.0, 19.0),
		document=(4.0, 6.0),
		gutter=(0.125, 0.125),
		non_printable=0.1,
	),
	"event-tickets": LayoutPreset(
		label="Event Tickets",
		sheet=(12.0, 18.0),
		document=(2.0, 5.5),
		gutter=(0.125, 0.25),
		non_printable=0.0625,
		score_vertical=(0.5,),
		perforation_vertical=(0.5,),
	),
	"table-tents": LayoutPreset(
		label="Table Tents",
		sheet=(13.0, 19.0),
		document=(5.0, 7.0),
		gutter=(0.25, 0.25),
		non_printable=0.125,
		score_horizontal=(0.33, 0.66),
	),
}

HOLE_PRESET_NONE = "none"
HOLE_PRESET_THREE_HOLE = "three-hole"
HOLE_PRESET_CUSTOM = "custom"
VALID_HOLE_PRESETS = (HOLE_PRESET_NONE, HOLE_PRESET_THREE_HOLE, HOLE_PRESET_CUSTOM)

THREE_HOLE_ENTRIES = (
	HoleEntry(edge=Edge.LEFT, align=Align.START, axis_offset=0.5, offset=0.3125),
	HoleEntry(edge=Edge.LEFT, align=Align.CENTER, axis_offset=0.0, offset=0.3125),
	HoleEntry(edge=Edge.LEFT, align=Align.END, axis_offset=0.5, offset=0.3125),
)

DEFAULT_CUSTOM_ENTRY = HoleEntry(edge=Edge.TOP, align=Align.CENTER, axis_offset=0.0, offset=0.25)

HOLE_DIAMETERS = {
	0.25: "1/4 in (0.250)",
	0.1875: "3/16 in (0.1875)",
	0.3125: "5/16 in (0.3125)",
	0.375: "3/8 in (0.375)",
}


#============================================
def presets_for_system(presets: tuple[SizePreset, ...], system: str) -> list[SizePreset]:
	"""
	Filter size presets by measurement system.

	Args:
		presets: Preset tuple.
		system: "imperial" or "metric".

	Returns:
		Presets tagged with that system.
	"""
	return [preset for preset in presets if system in preset.systems]


#============================================
def find_size_preset(presets: tuple[SizePreset, ...], preset_id: str) -> SizePreset | None:
	for preset in presets:
		if preset.id == preset_id:
			return preset
	return None


#============================================
def resolve_hole_plan(preset: str | None, diameter: float, entries=()) -> HolePlan:
	"""
	Expand a hole-plan preset into concrete entries.

	Unknown preset names behave as "none". A custom plan with no entries
	gets one default entry so the operator has a row to edit.

	Args:
		preset: Preset name.
		diameter: Requested hole diameter in inches.
		entries: Entries for the custom preset.

	Returns:
		HolePlan with the preset name kept.
	"""
	name = preset if preset in VALID_HOLE_PRESETS else HOLE_PRESET_NONE
	size = diameter if diameter > 0 else DEFAULT_HOLE_DIAMETER
	if name == HOLE_PRESET_THREE_HOLE:
		plan_entries = THREE_HOLE_ENTRIES
	elif name == HOLE_PRESET_CUSTOM:
		plan_entries = tuple(entries) if entries else (DEFAULT_CUSTOM_ENTRY,)
	else:
		plan_entries = ()
	return HolePlan(diameter=size, entries=plan_entries, preset=name)


#============================================
def apply_layout_preset(inputs: Inputs, preset_key: str) -> Inputs:
	"""
	Replace sheet, document, gutter, band and finishing fractions from a preset.

	Margins, overrides, auto mode and the hole plan are kept.

	Args:
		inputs: Current inputs.
		preset_key: Key into LAYOUT_PRESETS.

	Returns:
		Updated Inputs.

	Raises:
		KeyError: If the preset key is unknown.
	"""
	preset = LAYOUT_PRESETS[preset_key]
	finishing = dataclasses.replace(
		inputs.finishing,
		score_horizontal=preset.score_horizontal,
		score_vertical=preset.score_vertical,
		perforation_horizontal=preset.perforation_horizontal,
		perforation_vertical=preset.perforation_vertical,
	)
	return dataclasses.replace(
		inputs,
		sheet_width=preset.sheet[0],
		sheet_height=preset.sheet[1],
		document_width=preset.document[0],
		document_height=preset.document[1],
		gutter_horizontal=preset.gutter[0],
		gutter_vertical=preset.gutter[1],
		non_printable={side: preset.non_printable for side in SIDES},
		finishing=finishing,
	)
