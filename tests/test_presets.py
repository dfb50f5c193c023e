import pytest

import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.engine
import imposition_calculator.presets


#============================================
def test_three_hole_preset() -> None:
	plan = impcalc.presets.resolve_hole_plan("three-hole", 0.3125)
	assert plan.preset == "three-hole"
	assert plan.diameter == 0.3125
	assert len(plan.entries) == 3
	assert {entry.edge for entry in plan.entries} == {impcalc.config.Edge.LEFT}
	assert [entry.align for entry in plan.entries] == [
		impcalc.config.Align.START,
		impcalc.config.Align.CENTER,
		impcalc.config.Align.END,
	]


#============================================
def test_hole_preset_fallbacks() -> None:
	"""
	Ensure unknown names, empty custom plans and bad diameters resolve sanely.
	"""
	unknown = impcalc.presets.resolve_hole_plan("five-hole", 0.25)
	assert unknown.preset == "none"
	assert unknown.entries == ()

	custom = impcalc.presets.resolve_hole_plan("custom", 0.0)
	assert custom.diameter == impcalc.config.DEFAULT_HOLE_DIAMETER
	assert custom.entries == (impcalc.presets.DEFAULT_CUSTOM_ENTRY,)

	entry = impcalc.config.HoleEntry(edge=impcalc.config.Edge.BOTTOM, offset=0.5)
	kept = impcalc.presets.resolve_hole_plan("custom", 0.1875, (entry,))
	assert kept.entries == (entry,)


#============================================
def test_presets_for_system() -> None:
	metric_sheets = impcalc.presets.presets_for_system(impcalc.presets.SHEET_PRESETS, "metric")
	assert [preset.id for preset in metric_sheets] == ["sheet-a3", "sheet-sra3"]
	metric_gutters = impcalc.presets.presets_for_system(impcalc.presets.GUTTER_PRESETS, "metric")
	assert metric_gutters[0].id == "gut-none"
	assert len(metric_gutters) == 4


#============================================
def test_find_size_preset() -> None:
	preset = impcalc.presets.find_size_preset(impcalc.presets.DOCUMENT_PRESETS, "doc-a6")
	assert preset.width == pytest.approx(105 / 25.4, abs=1e-5)
	assert preset.height == pytest.approx(148 / 25.4, abs=1e-5)
	assert impcalc.presets.find_size_preset(impcalc.presets.DOCUMENT_PRESETS, "doc-a0") is None


#============================================
def test_trifold_brochure_preset() -> None:
	"""
	Ensure the tri-fold preset imposes two brochures with two folds each.
	"""
	inputs = impcalc.presets.apply_layout_preset(impcalc.config.default_inputs(), "trifold-brochure")
	assert (inputs.document_width, inputs.document_height) == (11.0, 8.5)
	result = impcalc.engine.compute(inputs)
	assert (result.layout.counts.across, result.layout.counts.down) == (1, 2)
	scores = [entry.inches for entry in result.finishing.scores.vertical]
	assert scores == [3.792, 7.458]
	assert result.finishing.scores.horizontal == []


#============================================
def test_layout_preset_keeps_margins_and_holes() -> None:
	hole_plan = impcalc.presets.resolve_hole_plan("three-hole", 0.25)
	finishing = impcalc.config.FinishingOptions(hole_plan=hole_plan)
	inputs = impcalc.presets.apply_layout_preset(
		impcalc.config.Inputs(auto_margins=True, force_down=2, finishing=finishing),
		"folded-business-card",
	)
	assert inputs.auto_margins is True
	assert inputs.force_down == 2
	assert inputs.finishing.hole_plan == hole_plan
	assert inputs.finishing.score_horizontal == (0.5,)
	result = impcalc.engine.compute(inputs)
	assert (result.layout.counts.across, result.layout.counts.down) == (3, 2)
	assert len(result.finishing.scores.horizontal) == 2


#============================================
def test_unknown_layout_preset() -> None:
	with pytest.raises(KeyError):
		impcalc.presets.apply_layout_preset(impcalc.config.default_inputs(), "poster")
