"""
CLI entry point: JSON inputs in, JSON results out.
"""

# Standard Library
import argparse
import dataclasses
import json
import pathlib
import sys

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.engine
import imposition_calculator.presets
import imposition_calculator.render
import imposition_calculator.summary
import imposition_calculator.units


Inputs = impcalc.config.Inputs

LAYOUT_PRESETS = impcalc.presets.LAYOUT_PRESETS
VALID_HOLE_PRESETS = impcalc.presets.VALID_HOLE_PRESETS
HOLE_DIAMETERS = impcalc.presets.HOLE_DIAMETERS
VALID_UNITS = impcalc.config.VALID_UNITS

format_measurement = impcalc.units.format_measurement
to_canonical = impcalc.units.to_canonical


#============================================
def status(message: str) -> None:
	"""
	Print a status line to stderr; stdout carries the JSON result.
	"""
	print(message, file=sys.stderr)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(
		description="Compute sheet imposition, finishing coordinates and cutter program.",
	)

	io_group = parser.add_argument_group("Input/Output")
	io_group.add_argument("-i", "--input", dest="input_path", default=None, help="Input JSON path (default: stdin).")
	io_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output JSON path (default: stdout).")
	io_group.add_argument("-f", "--proof-pdf", dest="proof_path", default=None, help="Write a proof sheet PDF.")
	io_group.add_argument("-u", "--units", dest="units", choices=VALID_UNITS, default=None, help="Units of CLI lengths and input JSON without a units key.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-p", "--preset", dest="preset", choices=sorted(LAYOUT_PRESETS), default=None, help="Apply a named layout preset.")
	layout_group.add_argument("-a", "--auto-margins", dest="auto_margins", action="store_true", default=None, help="Center the layout automatically.")
	layout_group.add_argument("-A", "--no-auto-margins", dest="auto_margins", action="store_false", help="Use the requested margins.")
	layout_group.add_argument("-x", "--force-across", dest="force_across", type=int, default=None, help="Limit documents across.")
	layout_group.add_argument("-y", "--force-down", dest="force_down", type=int, default=None, help="Limit documents down.")

	hole_group = parser.add_argument_group("Drilling")
	hole_group.add_argument("--hole-preset", dest="hole_preset", choices=VALID_HOLE_PRESETS, default=None, help="Hole plan preset.")
	hole_group.add_argument("--hole-diameter", dest="hole_diameter", type=float, default=None, help="Hole diameter for the hole plan, e.g. " + ", ".join(HOLE_DIAMETERS.values()) + ".")

	run_group = parser.add_argument_group("Run planning")
	run_group.add_argument("--desired-pieces", dest="desired_pieces", type=int, default=None, help="Finished pieces ordered.")
	run_group.add_argument("--overs-percent", dest="overs_percent", type=float, default=0.0, help="Overs as a percentage of the order.")
	run_group.add_argument("--pad-count", dest="pad_count", type=int, default=None, help="Pads to make.")
	run_group.add_argument("--sheets-per-pad", dest="sheets_per_pad", type=int, default=None, help="Pieces per pad.")

	parser.set_defaults(auto_margins=None)

	args = parser.parse_args(argv)
	return args


#============================================
def read_payload(input_path: str | None) -> dict | None:
	"""
	Read the input JSON object.

	Unreadable files, undecodable text and non-object JSON are reported
	and read as an empty object, so the run still produces a (zero) result.

	Args:
		input_path: JSON path, or None for stdin.

	Returns:
		Decoded dict, or None when no input text was given.
	"""
	try:
		if input_path is not None:
			text = pathlib.Path(input_path).read_text(encoding="utf-8")
		elif sys.stdin.isatty():
			text = ""
		else:
			text = sys.stdin.read()
	except (OSError, UnicodeDecodeError) as error:
		status(f"Input unreadable: {error}")
		return {}
	if not text.strip():
		return None
	try:
		payload = json.loads(text)
	except json.JSONDecodeError as error:
		status(f"Input JSON unreadable: {error}")
		return {}
	if not isinstance(payload, dict):
		status("Input JSON is not an object; using an empty input.")
		return {}
	return payload


#============================================
def build_inputs(payload: dict | None, args: argparse.Namespace) -> Inputs:
	"""
	Build canonical inputs from the payload and CLI overrides.

	Without a payload the run starts from the default business-card job.

	Args:
		payload: Decoded input JSON, or None.
		args: Parsed argparse namespace.

	Returns:
		Inputs.
	"""
	if payload is not None:
		if args.units is not None and "units" not in payload:
			payload = dict(payload, units=args.units)
		inputs = impcalc.engine.parse_inputs(payload)
	else:
		inputs = impcalc.config.default_inputs()

	if args.preset is not None:
		inputs = impcalc.presets.apply_layout_preset(inputs, args.preset)
	if args.auto_margins is not None:
		inputs = dataclasses.replace(inputs, auto_margins=args.auto_margins)
	if args.force_across is not None:
		inputs = dataclasses.replace(inputs, force_across=impcalc.engine.parse_force(args.force_across))
	if args.force_down is not None:
		inputs = dataclasses.replace(inputs, force_down=impcalc.engine.parse_force(args.force_down))
	if args.hole_preset is not None or args.hole_diameter is not None:
		inputs = apply_hole_options(inputs, args)
	return inputs


#============================================
def apply_hole_options(inputs: Inputs, args: argparse.Namespace) -> Inputs:
	"""
	Apply --hole-preset and --hole-diameter to the input hole plan.

	A diameter alone resizes the holes of the plan already in the input,
	keeping its preset and entries.

	Args:
		inputs: Current inputs.
		args: Parsed argparse namespace.

	Returns:
		Inputs with the updated hole plan.
	"""
	current = inputs.finishing.hole_plan
	diameter = current.diameter
	if args.hole_diameter is not None:
		diameter = to_canonical(args.hole_diameter, args.units or "in")
	preset = args.hole_preset if args.hole_preset is not None else current.preset
	if preset is not None:
		hole_plan = impcalc.presets.resolve_hole_plan(preset, diameter, current.entries)
	else:
		hole_plan = dataclasses.replace(current, diameter=max(0.0, diameter))
	if args.hole_diameter is not None and not hole_plan.entries:
		status("Hole diameter ignored: the hole plan has no entries.")
	finishing = dataclasses.replace(inputs.finishing, hole_plan=hole_plan)
	return dataclasses.replace(inputs, finishing=finishing)


#============================================
def build_run_planning(args: argparse.Namespace, n_up: int) -> dict:
	"""
	Run the optional run-planning calculators.

	Args:
		args: Parsed argparse namespace.
		n_up: Documents per sheet.

	Returns:
		Dict keyed by calculator name, only for requested calculators.
	"""
	planning = {}
	if args.desired_pieces is not None:
		plan = impcalc.summary.calculate_run_plan(args.desired_pieces, n_up, args.overs_percent)
		planning["run_plan"] = None if plan is None else dataclasses.asdict(plan)
	if args.pad_count is not None and args.sheets_per_pad is not None:
		totals = impcalc.summary.calculate_pad_totals(args.pad_count, args.sheets_per_pad, n_up)
		planning["pad_totals"] = None if totals is None else dataclasses.asdict(totals)
	return planning


#============================================
def run_pipeline(args: argparse.Namespace) -> dict:
	"""
	Compute the job and write the requested outputs.

	Args:
		args: Parsed argparse namespace.

	Returns:
		The JSON-ready output dict.
	"""
	payload = read_payload(args.input_path)
	inputs = build_inputs(payload, args)
	result = impcalc.engine.compute(inputs)

	layout = result.layout
	display_units = args.units or "in"
	n_up = layout.counts.across * layout.counts.down
	status(f"Documents: {layout.counts.across} across x {layout.counts.down} down ({n_up} up)")
	status(
		"Used span: {} x {}".format(
			format_measurement(layout.usage.horizontal.used_span, display_units),
			format_measurement(layout.usage.vertical.used_span, display_units),
		)
	)
	status(f"Program steps: {len(result.program_sequence)}")

	warnings = impcalc.engine.collect_warnings(result)
	for warning in warnings:
		status(f"Warning: {warning}")

	output = impcalc.engine.result_to_dict(result)
	output["warnings"] = warnings
	output.update(build_run_planning(args, n_up))

	if args.proof_path:
		proof_path = impcalc.render.render_proof_pdf(result, pathlib.Path(args.proof_path))
		status(f"Proof PDF written: {proof_path}")

	text = json.dumps(output, indent=2)
	if args.output_path:
		pathlib.Path(args.output_path).write_text(text + "\n", encoding="utf-8")
		status(f"Result written: {args.output_path}")
	else:
		print(text)
	return output


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	run_pipeline(args)
