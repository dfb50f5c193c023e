"""
Proof sheet rendering.
"""

# Standard Library
import pathlib

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import imposition_calculator as impcalc
import imposition_calculator.config
import imposition_calculator.engine


ComputeResult = impcalc.engine.ComputeResult

POINTS_PER_INCH = impcalc.config.POINTS_PER_INCH
PROOF_FONT = "Helvetica"
PROOF_FONT_SIZE = 6.0


#============================================
def to_points(inches: float) -> float:
	return inches * POINTS_PER_INCH


#============================================
def draw_sheet_and_band(pdf: reportlab.pdfgen.canvas.Canvas, result: ComputeResult) -> None:
	"""
	Draw the sheet outline and the printable region.

	Args:
		pdf: ReportLab canvas.
		result: Computation result.
	"""
	sheet = result.layout.sheet
	band = sheet.non_printable
	page_height = to_points(sheet.raw_height)
	pdf.setLineWidth(0.6)
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	pdf.rect(0, 0, to_points(sheet.raw_width), page_height, stroke=1, fill=0)

	pdf.setLineWidth(0.3)
	pdf.setStrokeColorRGB(0.8, 0.2, 0.2)
	pdf.setDash(2, 2)
	pdf.rect(
		to_points(band.left),
		page_height - to_points(band.top + sheet.effective_height),
		to_points(sheet.effective_width),
		to_points(sheet.effective_height),
		stroke=1,
		fill=0,
	)
	pdf.setDash()


#============================================
def draw_documents(pdf: reportlab.pdfgen.canvas.Canvas, result: ComputeResult) -> None:
	"""
	Draw every imposed document rectangle.

	Args:
		pdf: ReportLab canvas.
		result: Computation result.
	"""
	layout = result.layout
	page_height = to_points(layout.sheet.raw_height)
	doc_width = layout.document.width
	doc_height = layout.document.height
	pdf.setLineWidth(0.3)
	pdf.setStrokeColorRGB(0.6, 0.6, 0.6)
	for row in range(layout.counts.down):
		for col in range(layout.counts.across):
			doc_x = layout.layout_area.origin_x + col * (doc_width + layout.gutter.horizontal)
			doc_y = layout.layout_area.origin_y + row * (doc_height + layout.gutter.vertical)
			pdf.rect(
				to_points(doc_x),
				page_height - to_points(doc_y + doc_height),
				to_points(doc_width),
				to_points(doc_height),
				stroke=1,
				fill=0,
			)


#============================================
def draw_lines(
	pdf: reportlab.pdfgen.canvas.Canvas,
	result: ComputeResult,
	positions: list[float],
	horizontal: bool,
	color: tuple[float, float, float],
	dashed: bool,
) -> None:
	"""
	Draw full-length finishing lines across the sheet.

	Args:
		pdf: ReportLab canvas.
		result: Computation result.
		positions: Line positions in inches from the top or left edge.
		horizontal: True for lines running across the sheet.
		color: RGB stroke color.
		dashed: Whether to dash the line.
	"""
	sheet = result.layout.sheet
	page_width = to_points(sheet.raw_width)
	page_height = to_points(sheet.raw_height)
	pdf.setLineWidth(0.4)
	pdf.setStrokeColorRGB(*color)
	if dashed:
		pdf.setDash(3, 2)
	for position in positions:
		if horizontal:
			y = page_height - to_points(position)
			pdf.line(0, y, page_width, y)
		else:
			x = to_points(position)
			pdf.line(x, 0, x, page_height)
	pdf.setDash()


#============================================
def draw_holes(pdf: reportlab.pdfgen.canvas.Canvas, result: ComputeResult) -> None:
	page_height = to_points(result.layout.sheet.raw_height)
	pdf.setLineWidth(0.3)
	pdf.setStrokeColorRGB(0.1, 0.1, 0.6)
	for hole in result.finishing.holes:
		pdf.circle(
			to_points(hole.x),
			page_height - to_points(hole.y),
			to_points(hole.diameter / 2.0),
			stroke=1,
			fill=0,
		)


#============================================
def draw_caption(pdf: reportlab.pdfgen.canvas.Canvas, result: ComputeResult) -> None:
	"""
	Write a one-line job caption inside the bottom non-printable band.
	"""
	layout = result.layout
	caption = (
		f"{layout.counts.across} x {layout.counts.down} up, "
		f"document {layout.document.width:.3f} x {layout.document.height:.3f} in, "
		f"sheet {layout.sheet.raw_width:.3f} x {layout.sheet.raw_height:.3f} in"
	)
	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	pdf.setFont(PROOF_FONT, PROOF_FONT_SIZE)
	pdf.drawString(2.0, 2.0, caption)


#============================================
def render_proof_pdf(result: ComputeResult, output_path: pathlib.Path) -> pathlib.Path:
	"""
	Write a one-page proof PDF sized to the sheet.

	Cuts and slits are solid red lines, scores solid green, perforations
	dashed green, holes blue circles.

	Args:
		result: Computation result.
		output_path: Output PDF path.

	Returns:
		The output path.
	"""
	sheet = result.layout.sheet
	page_size = (max(1.0, to_points(sheet.raw_width)), max(1.0, to_points(sheet.raw_height)))
	output_path = pathlib.Path(output_path)
	pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=page_size)

	draw_sheet_and_band(pdf, result)
	draw_documents(pdf, result)

	finishing = result.finishing
	red = (0.85, 0.1, 0.1)
	green = (0.1, 0.55, 0.1)
	draw_lines(pdf, result, [entry.inches for entry in finishing.cuts], True, red, False)
	draw_lines(pdf, result, [entry.inches for entry in finishing.slits], False, red, False)
	draw_lines(pdf, result, [entry.inches for entry in finishing.scores.horizontal], True, green, False)
	draw_lines(pdf, result, [entry.inches for entry in finishing.scores.vertical], False, green, False)
	draw_lines(pdf, result, [entry.inches for entry in finishing.perforations.horizontal], True, green, True)
	draw_lines(pdf, result, [entry.inches for entry in finishing.perforations.vertical], False, green, True)
	draw_holes(pdf, result)
	draw_caption(pdf, result)

	pdf.showPage()
	pdf.save()
	return output_path
