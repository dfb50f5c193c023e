"""
Shared configuration and constants.
"""

import dataclasses
import enum


MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0

READOUT_INCH_PRECISION = 3
READOUT_MM_PRECISION = 2
PROGRAM_INCH_PRECISION = 4
PROGRAM_MM_PRECISION = 2

# relative to (span + gutter) before flooring a document count
COUNT_EPSILON = 1e-9

# float noise below this many decimals is dropped before half-up rounding
NOISE_DECIMALS = 9

# realized vs requested margin difference worth a host warning
MARGIN_WARNING_TOLERANCE = 1.0 / 64.0

DEFAULT_UNITS = "in"
VALID_UNITS = ("in", "mm")

DEFAULT_SHEET_WIDTH = 12.0
DEFAULT_SHEET_HEIGHT = 18.0
DEFAULT_DOCUMENT_WIDTH = 3.5
DEFAULT_DOCUMENT_HEIGHT = 2.0
DEFAULT_GUTTER = 0.125
DEFAULT_NON_PRINTABLE = 0.0625
DEFAULT_HOLE_DIAMETER = 0.25

SIDES = ("top", "right", "bottom", "left")


class Edge(str, enum.Enum):
	TOP = "top"
	BOTTOM = "bottom"
	LEFT = "left"
	RIGHT = "right"


class Align(str, enum.Enum):
	START = "start"
	CENTER = "center"
	END = "end"


DEFAULT_EDGE = Edge.LEFT
DEFAULT_ALIGN = Align.CENTER


@dataclasses.dataclass(frozen=True)
class ReadoutPrecision:
	inches: int = READOUT_INCH_PRECISION
	millimeters: int = READOUT_MM_PRECISION


@dataclasses.dataclass(frozen=True)
class HoleEntry:
	edge: Edge = DEFAULT_EDGE
	align: Align = DEFAULT_ALIGN
	axis_offset: float = 0.0
	offset: float = 0.0


@dataclasses.dataclass(frozen=True)
class HolePlan:
	diameter: float = 0.0
	entries: tuple[HoleEntry, ...] = ()
	preset: str | None = None


@dataclasses.dataclass(frozen=True)
class FinishingOptions:
	score_horizontal: tuple[float, ...] = ()
	score_vertical: tuple[float, ...] = ()
	perforation_horizontal: tuple[float, ...] = ()
	perforation_vertical: tuple[float, ...] = ()
	hole_plan: HolePlan = dataclasses.field(default_factory=HolePlan)


@dataclasses.dataclass(frozen=True)
class Inputs:
	sheet_width: float = DEFAULT_SHEET_WIDTH
	sheet_height: float = DEFAULT_SHEET_HEIGHT
	document_width: float = DEFAULT_DOCUMENT_WIDTH
	document_height: float = DEFAULT_DOCUMENT_HEIGHT
	gutter_horizontal: float = DEFAULT_GUTTER
	gutter_vertical: float = DEFAULT_GUTTER
	margins: dict[str, float] = dataclasses.field(
		default_factory=lambda: {side: 0.0 for side in SIDES}
	)
	non_printable: dict[str, float] = dataclasses.field(
		default_factory=lambda: {side: DEFAULT_NON_PRINTABLE for side in SIDES}
	)
	auto_margins: bool = False
	force_across: int | None = None
	force_down: int | None = None
	finishing: FinishingOptions = dataclasses.field(default_factory=FinishingOptions)


#============================================
def default_inputs(auto_margins: bool = False) -> Inputs:
	"""
	Build the default business-card inputs.

	Args:
		auto_margins: Whether to center the layout automatically.

	Returns:
		Inputs with the default sheet, document, gutter and band.
	"""
	return Inputs(auto_margins=auto_margins)
