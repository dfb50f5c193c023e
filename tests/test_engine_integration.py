"""
End-to-end checks from raw input payloads to finishing and program output.
"""

# Standard Library
import copy
import json

# PIP3 modules
import pytest

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.engine
import imposition_calculator.presets


BUSINESS_CARD_CUTS = [
	0.063, 2.063, 2.188, 4.188, 4.313, 6.313, 6.438, 8.438,
	8.563, 10.563, 10.688, 12.688, 12.813, 14.813, 14.938, 16.938,
]
BUSINESS_CARD_SLITS = [0.063, 3.563, 3.688, 7.188, 7.313, 10.813]


#============================================
def to_millimeter_payload(payload: dict) -> dict:
	"""
	Convert every length group of an inch payload to millimeters.
	"""
	converted = copy.deepcopy(payload)
	for group in ("sheet", "document", "gutter", "margins", "non_printable"):
		for key, value in converted.get(group, {}).items():
			converted[group][key] = value * 25.4
	converted["units"] = "mm"
	return converted


#============================================
def test_business_card_job(business_card_payload: dict) -> None:
	"""
	Ensure the default job imposes 3 x 8 with the expected readouts.
	"""
	result = impcalc.engine.compute(business_card_payload)
	layout = result.layout
	assert (layout.counts.across, layout.counts.down) == (3, 8)
	assert layout.usage.horizontal.used_span == pytest.approx(10.75)
	assert layout.usage.horizontal.trailing_margin == pytest.approx(1.125)
	assert layout.usage.vertical.trailing_margin == pytest.approx(1.0)
	assert [entry.inches for entry in result.finishing.cuts] == BUSINESS_CARD_CUTS
	assert [entry.inches for entry in result.finishing.slits] == BUSINESS_CARD_SLITS
	assert len(result.program_sequence) == 22


#============================================
def test_business_card_job_with_auto_margins(business_card_payload: dict) -> None:
	"""
	Ensure auto margins keep the grid and center it on the sheet.
	"""
	payload = dict(business_card_payload, autoMargins=True)
	result = impcalc.engine.compute(payload)
	layout = result.layout
	assert (layout.counts.across, layout.counts.down) == (3, 8)
	assert layout.usage.horizontal.used_span == pytest.approx(10.75)
	assert layout.usage.vertical.trailing_margin == pytest.approx(0.0)
	assert layout.realized_margins.left == pytest.approx(0.625)
	assert layout.realized_margins.right == pytest.approx(0.625)
	assert layout.realized_margins.top == pytest.approx(0.5625)
	assert layout.realized_margins.bottom == pytest.approx(0.5625)
	assert result.finishing.slits[0].inches == 0.625
	assert impcalc.engine.collect_warnings(result) == []


#============================================
def test_default_inputs_match_business_card(business_card_payload: dict) -> None:
	from_payload = impcalc.engine.compute(business_card_payload)
	from_defaults = impcalc.engine.compute(impcalc.config.default_inputs())
	assert from_defaults.layout == from_payload.layout
	assert from_defaults.finishing == from_payload.finishing


#============================================
def test_forced_counts_shrink_the_grid(business_card_payload: dict) -> None:
	payload = dict(business_card_payload, forceAcross=2, forceDown=3)
	result = impcalc.engine.compute(payload)
	assert (result.layout.counts.across, result.layout.counts.down) == (2, 3)
	assert len(result.finishing.slits) == 4
	assert len(result.finishing.cuts) == 6

	larger = impcalc.engine.compute(dict(business_card_payload, force_across=9))
	assert larger.layout.counts.across == 3


#============================================
def test_millimeter_inputs_match_inches(business_card_payload: dict) -> None:
	"""
	Ensure the same job in millimeters gives the same canonical readouts.
	"""
	inch_result = impcalc.engine.compute(business_card_payload)
	mm_result = impcalc.engine.compute(to_millimeter_payload(business_card_payload))
	assert mm_result.layout.counts == inch_result.layout.counts
	assert mm_result.layout.layout_area.origin_x == pytest.approx(0.0625)
	assert mm_result.finishing.cuts == inch_result.finishing.cuts
	assert mm_result.finishing.slits == inch_result.finishing.slits


#============================================
@pytest.mark.parametrize("document_span", [1.0625, 2.1875, 3.5, 1.8125, 0.3125])
@pytest.mark.parametrize("gutter", [0.0, 0.0625, 0.125, 0.1875])
def test_millimeter_round_trip_over_tie_layouts(document_span: float, gutter: float) -> None:
	"""
	Ensure sixteenth-inch jobs read the same entered in inches or millimeters.

	Many edges here land on a fourth-decimal tie, where a one-ulp drift
	from the millimeter conversion must not flip the third decimal.
	"""
	finishing = {
		"score_horizontal": [0.5],
		"score_vertical": [0.25],
		"perforation_horizontal": [0.25],
		"perforation_vertical": [0.5],
		"hole_plan": {"preset": "three-hole"},
	}
	for sixteenths in range(1, 16):
		band = sixteenths / 16.0
		payload = {
			"sheet": {"width": 12.0, "height": 18.0},
			"document": {"width": document_span, "height": document_span},
			"gutter": {"horizontal": gutter, "vertical": gutter},
			"non_printable": {"top": band, "right": band, "bottom": band, "left": band},
			"finishing": finishing,
		}
		inch_result = impcalc.engine.compute(payload)
		mm_result = impcalc.engine.compute(to_millimeter_payload(payload))

		assert mm_result.layout.counts == inch_result.layout.counts
		assert mm_result.finishing.cuts == inch_result.finishing.cuts
		assert mm_result.finishing.slits == inch_result.finishing.slits
		assert mm_result.finishing.scores == inch_result.finishing.scores
		assert mm_result.finishing.perforations == inch_result.finishing.perforations
		assert mm_result.program_sequence == inch_result.program_sequence

		inch_holes = [(hole.x, hole.y) for hole in inch_result.finishing.holes]
		mm_holes = [(hole.x, hole.y) for hole in mm_result.finishing.holes]
		assert len(mm_holes) == len(inch_holes)
		for mm_hole, inch_hole in zip(mm_holes, inch_holes):
			assert mm_hole == pytest.approx(inch_hole, abs=1e-9)


#============================================
def test_reconstructed_inputs_reproduce_result(business_card_payload: dict) -> None:
	"""
	Ensure recomputing the reconstructed inputs yields the same job.
	"""
	for auto_margins in (False, True):
		payload = dict(business_card_payload, auto_margins=auto_margins, force_down=5)
		first = impcalc.engine.compute(payload)
		reconstructed = first.reconstructed_inputs
		assert reconstructed.auto_margins is False
		assert (reconstructed.force_across, reconstructed.force_down) == (3, 5)
		second = impcalc.engine.compute(reconstructed)
		assert second.layout == first.layout
		assert second.finishing == first.finishing
		assert second.program_sequence == first.program_sequence


#============================================
def test_parse_inputs_reads_both_key_styles() -> None:
	raw = {
		"sheet": {"width": 12, "height": 18},
		"document": {"width": 3.5, "height": 2},
		"gutter": {"horizontal": 0.125},
		"nonPrintable": {"top": 0.0625},
		"autoMargins": True,
		"forceAcross": 2.7,
		"force_down": "abc",
		"finishing": {
			"scoreHorizontal": [0.5],
			"holePlan": {"preset": "three-hole", "diameter": 0.1875},
		},
	}
	inputs = impcalc.engine.parse_inputs(raw)
	assert inputs.gutter_horizontal == 0.125
	assert inputs.gutter_vertical == 0.0
	assert inputs.non_printable == {"top": 0.0625, "right": 0.0, "bottom": 0.0, "left": 0.0}
	assert inputs.margins == {"top": 0.0, "right": 0.0, "bottom": 0.0, "left": 0.0}
	assert inputs.auto_margins is True
	assert inputs.force_across == 2
	assert inputs.force_down is None
	assert inputs.finishing.score_horizontal == (0.5,)
	assert inputs.finishing.hole_plan.diameter == 0.1875
	assert inputs.finishing.hole_plan.entries == impcalc.presets.THREE_HOLE_ENTRIES


#============================================
def test_parse_force_rejects_non_positive() -> None:
	assert impcalc.engine.parse_force(None) is None
	assert impcalc.engine.parse_force(0) is None
	assert impcalc.engine.parse_force(-3) is None
	assert impcalc.engine.parse_force(float("nan")) is None
	assert impcalc.engine.parse_force("4") == 4


#============================================
def test_auto_margins_needs_a_real_boolean() -> None:
	"""
	Ensure strings and numbers never switch auto margins on.
	"""
	for value in ("false", "true", "0", 1, 0, None, [True]):
		assert impcalc.engine.parse_inputs({"autoMargins": value}).auto_margins is False
	assert impcalc.engine.parse_inputs({"auto_margins": True}).auto_margins is True
	assert impcalc.engine.parse_inputs({"autoMargins": False}).auto_margins is False


#============================================
def test_parse_hole_plan_in_millimeters() -> None:
	plan = impcalc.engine.parse_hole_plan(
		{"size": 6.35, "entries": [{"edge": "top", "align": "start", "axisOffset": 25.4, "offset": 12.7}]},
		"mm",
	)
	assert plan.diameter == pytest.approx(0.25)
	assert plan.entries[0].edge == impcalc.config.Edge.TOP
	assert plan.entries[0].axis_offset == pytest.approx(1.0)
	assert plan.entries[0].offset == pytest.approx(0.5)


#============================================
def test_empty_payload_produces_zero_result() -> None:
	"""
	Ensure a payload with nothing in it yields zero counts, not an error.
	"""
	result = impcalc.engine.compute({})
	assert (result.layout.counts.across, result.layout.counts.down) == (0, 0)
	assert result.finishing.cuts == []
	assert result.program_sequence == []
	assert result.reconstructed_inputs.force_across is None
	warnings = impcalc.engine.collect_warnings(result)
	assert warnings == ["No documents fit: 0 across x 0 down."]


#============================================
def test_margin_warnings(business_card_payload: dict) -> None:
	"""
	Ensure warnings fire only when realized margins drift from requested ones.
	"""
	result = impcalc.engine.compute(business_card_payload)
	warnings = impcalc.engine.collect_warnings(result)
	assert len(warnings) == 4
	assert warnings[1].startswith("Realized right margin 1.188 in")

	payload = dict(
		business_card_payload,
		margins={"top": 0.0625, "right": 1.1875, "bottom": 1.0625, "left": 0.0625},
	)
	assert impcalc.engine.collect_warnings(impcalc.engine.compute(payload)) == []


#============================================
def test_result_to_dict_is_json_ready(business_card_payload: dict) -> None:
	payload = dict(business_card_payload, finishing={"hole_plan": {"preset": "three-hole"}})
	result = impcalc.engine.compute(payload)
	output = impcalc.engine.result_to_dict(result)
	decoded = json.loads(json.dumps(output))
	assert decoded["layout"]["counts"] == {"across": 3, "down": 8}
	assert decoded["finishing"]["cuts"][0] == {"label": "Cut 1", "inches": 0.063, "millimeters": 1.59}
	assert len(decoded["finishing"]["holes"]) == 3 * 3 * 8
	entries = decoded["reconstructed_inputs"]["finishing"]["hole_plan"]["entries"]
	assert entries[0]["edge"] == "left"
	assert entries[2]["align"] == "end"
	assert decoded["program_sequence"][0]["label"] == "Step 1"
