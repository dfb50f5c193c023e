"""
Unit conversion, numeric sanitizing and total field readers.
"""

# Standard Library
import dataclasses
import decimal
import math
import re

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config


MM_PER_INCH = impcalc.config.MM_PER_INCH
DEFAULT_UNITS = impcalc.config.DEFAULT_UNITS
VALID_UNITS = impcalc.config.VALID_UNITS
READOUT_INCH_PRECISION = impcalc.config.READOUT_INCH_PRECISION
READOUT_MM_PRECISION = impcalc.config.READOUT_MM_PRECISION
NOISE_DECIMALS = impcalc.config.NOISE_DECIMALS

_CAMEL_BOUNDARY = re.compile(r"_([a-z])")


#============================================
def to_finite(value, default: float = 0.0) -> float:
	"""
	Convert a value to a finite float.

	Args:
		value: Number, numeric string, None or anything else.
		default: Fallback for non-numeric or non-finite values.

	Returns:
		Finite float.
	"""
	if isinstance(value, bool) or value is None:
		return default
	try:
		number = float(value)
	except (TypeError, ValueError):
		return default
	if not math.isfinite(number):
		return default
	return number


#============================================
def clamp_to_zero(value: float) -> float:
	"""
	Clamp negatives to zero.
	"""
	return max(0.0, value)


#============================================
def clamp(value: float, low: float, high: float) -> float:
	"""
	Clamp a value into [low, high].

	Args:
		value: Value to clamp.
		low: Lower bound.
		high: Upper bound.

	Returns:
		Clamped value.
	"""
	return min(max(value, low), high)


#============================================
def sanitize_length(value) -> float:
	"""
	Coerce a raw length to a finite non-negative float.
	"""
	return clamp_to_zero(to_finite(value))


#============================================
def round_half_up(value: float, precision: int) -> float:
	"""
	Round a float half-up, ties away from zero.

	The value is first settled to NOISE_DECIMALS places, so 3.6874999999999996
	(3.6875 after a trip through millimeters) and 3.6875 both read 3.688.
	Unlike round(), an exact tie such as 0.0625 goes to 0.063.

	Args:
		value: Finite float.
		precision: Decimal places.

	Returns:
		Rounded float.
	"""
	settled = decimal.Decimal(value).quantize(decimal.Decimal(1).scaleb(-NOISE_DECIMALS))
	quantum = decimal.Decimal(1).scaleb(-precision)
	rounded = settled.quantize(quantum, rounding=decimal.ROUND_HALF_UP)
	return float(rounded)


#============================================
def inches_to_millimeters(inches: float, precision: int | None = READOUT_MM_PRECISION) -> float:
	"""
	Convert inches to millimeters.

	Args:
		inches: Length in inches.
		precision: Decimal places to round to, or None for no rounding.

	Returns:
		Length in millimeters.
	"""
	millimeters = inches * MM_PER_INCH
	if precision is None:
		return millimeters
	return round_half_up(millimeters, precision)


#============================================
def millimeters_to_inches(millimeters: float) -> float:
	"""
	Convert millimeters to inches without rounding.
	"""
	return millimeters / MM_PER_INCH


#============================================
def normalize_units(units) -> str:
	"""
	Normalize a unit tag to "in" or "mm".

	Args:
		units: Raw unit tag.

	Returns:
		"mm" when requested, otherwise "in".
	"""
	if isinstance(units, str) and units.strip().lower() in VALID_UNITS:
		return units.strip().lower()
	return DEFAULT_UNITS


#============================================
def to_canonical(value, units: str) -> float:
	"""
	Convert a raw length in the given units to canonical inches.

	Args:
		value: Raw length.
		units: "in" or "mm".

	Returns:
		Length in inches, zero when not numeric.
	"""
	number = to_finite(value)
	if normalize_units(units) == "mm":
		return millimeters_to_inches(number)
	return number


#============================================
def get_units_label(units: str) -> str:
	return "mm" if normalize_units(units) == "mm" else "in"


#============================================
def format_measurement_value(value: float, units: str, precision: int | None = None) -> str:
	"""
	Format a canonical inch value as a fixed-point string.

	Args:
		value: Length in inches.
		units: Display units.
		precision: Decimal places, defaulting to 2 for mm and 3 for inches.

	Returns:
		Formatted number, or an empty string for non-finite input.
	"""
	if not isinstance(value, (int, float)) or not math.isfinite(value):
		return ""
	units = normalize_units(units)
	if precision is None:
		precision = READOUT_MM_PRECISION if units == "mm" else READOUT_INCH_PRECISION
	converted = value * MM_PER_INCH if units == "mm" else value
	return f"{converted:.{precision}f}"


#============================================
def format_measurement(value: float, units: str, precision: int | None = None) -> str:
	"""
	Format a canonical inch value with its unit label.

	Args:
		value: Length in inches.
		units: Display units.
		precision: Optional decimal places.

	Returns:
		String like "3.500 in", or an empty string.
	"""
	formatted = format_measurement_value(value, units, precision)
	if formatted == "":
		return ""
	return f"{formatted} {get_units_label(units)}"


#============================================
def snake_to_camel(name: str) -> str:
	return _CAMEL_BOUNDARY.sub(lambda match: match.group(1).upper(), name)


#============================================
def read_value(source, *path: str, default=None):
	"""
	Walk a path of field names through dataclasses or mappings.

	Mappings are looked up by the snake_case name first and the camelCase
	name second, so JSON payloads in either style read the same way.

	Args:
		source: Dataclass instance, mapping or None.
		path: Field names to follow.
		default: Value returned when any step is missing.

	Returns:
		The value found, or default.
	"""
	current = source
	for name in path:
		if current is None:
			return default
		if isinstance(current, dict):
			if name in current:
				current = current[name]
				continue
			camel = snake_to_camel(name)
			if camel in current:
				current = current[camel]
				continue
			return default
		if dataclasses.is_dataclass(current) and hasattr(current, name):
			current = getattr(current, name)
			continue
		return default
	if current is None:
		return default
	return current


#============================================
def read_number(source, *path: str) -> float:
	"""
	Read a finite number along a path, zero when missing.
	"""
	return to_finite(read_value(source, *path))


#============================================
def read_length(source, *path: str) -> float:
	"""
	Read a non-negative finite length along a path, zero when missing.
	"""
	return sanitize_length(read_value(source, *path))


#============================================
def read_count(source, *path: str) -> int:
	"""
	Read a non-negative integer count along a path, zero when missing.
	"""
	return int(math.floor(sanitize_length(read_value(source, *path))))
