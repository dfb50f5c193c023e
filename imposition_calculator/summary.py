"""
Run-planning calculators built on the n-up count.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.units


to_finite = impcalc.units.to_finite


@dataclasses.dataclass(frozen=True)
class PadTotals:
	total_pieces: int
	total_sheets: int
	overage_pieces: int


@dataclasses.dataclass(frozen=True)
class RunPlan:
	total_pieces: int
	total_sheets: int
	overs_pieces: int
	overs_sheets: int


@dataclasses.dataclass(frozen=True)
class SheetConversion:
	total_pieces: int
	has_pad_breakdown: bool
	complete_pads: int | None
	remainder_pieces: int | None


#============================================
def sanitize_integer(value) -> int:
	return max(0, int(math.floor(to_finite(value))))


#============================================
def sanitize_float(value) -> float:
	return max(0.0, to_finite(value))


#============================================
def calculate_pad_totals(pad_count=0, sheets_per_pad=0, n_up=0) -> PadTotals | None:
	"""
	Compute press sheets needed for a pad run.

	Args:
		pad_count: Pads to make.
		sheets_per_pad: Finished pieces per pad.
		n_up: Documents per press sheet.

	Returns:
		PadTotals, or None when any input is zero.
	"""
	pads = sanitize_integer(pad_count)
	sheets = sanitize_integer(sheets_per_pad)
	n_up_value = sanitize_integer(n_up)
	if pads <= 0 or sheets <= 0 or n_up_value <= 0:
		return None
	total_pieces = pads * sheets
	total_sheets = math.ceil(total_pieces / n_up_value)
	overage = max(0, total_sheets * n_up_value - total_pieces)
	return PadTotals(total_pieces=total_pieces, total_sheets=total_sheets, overage_pieces=overage)


#============================================
def calculate_run_plan(desired_pieces=0, n_up=0, overs_percent=0.0) -> RunPlan | None:
	"""
	Compute a run including overs.

	Args:
		desired_pieces: Finished pieces ordered.
		n_up: Documents per press sheet.
		overs_percent: Extra pieces as a percentage of the order.

	Returns:
		RunPlan, or None when the order or n-up is zero.
	"""
	desired = sanitize_integer(desired_pieces)
	n_up_value = sanitize_integer(n_up)
	overs = sanitize_float(overs_percent)
	if desired <= 0 or n_up_value <= 0:
		return None
	overs_pieces = math.ceil(desired * overs / 100.0)
	total_pieces = desired + overs_pieces
	base_sheets = math.ceil(desired / n_up_value)
	total_sheets = math.ceil(total_pieces / n_up_value)
	return RunPlan(
		total_pieces=total_pieces,
		total_sheets=total_sheets,
		overs_pieces=overs_pieces,
		overs_sheets=max(0, total_sheets - base_sheets),
	)


#============================================
def calculate_sheet_conversion(sheets_to_run=0, n_up=0, pieces_per_pad=0) -> SheetConversion | None:
	"""
	Convert press sheets into pieces and complete pads.
	"""
	sheets = sanitize_integer(sheets_to_run)
	n_up_value = sanitize_integer(n_up)
	per_pad = sanitize_integer(pieces_per_pad)
	if sheets <= 0 or n_up_value <= 0:
		return None
	total_pieces = sheets * n_up_value
	if per_pad <= 0:
		return SheetConversion(
			total_pieces=total_pieces,
			has_pad_breakdown=False,
			complete_pads=None,
			remainder_pieces=None,
		)
	return SheetConversion(
		total_pieces=total_pieces,
		has_pad_breakdown=True,
		complete_pads=total_pieces // per_pad,
		remainder_pieces=total_pieces % per_pad,
	)
