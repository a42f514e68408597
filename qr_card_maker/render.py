"""
Page rendering: one ordered list of draw operations replayed on either the
screen surface or the print surface.
"""

# Standard Library
import dataclasses
import io
import math

# PIP3 modules
import PIL.Image
import reportlab.pdfgen.canvas

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.assets
import qr_card_maker.caption
import qr_card_maker.codegen
import qr_card_maker.config
import qr_card_maker.document
import qr_card_maker.geometry
import qr_card_maker.overlay
import qr_card_maker.placement
import qr_card_maker.rows
import qr_card_maker.surface


Point = qcm.geometry.Point
Rect = qcm.geometry.Rect
DocumentModel = qcm.document.DocumentModel
FontConfig = qcm.document.FontConfig
DataRow = qcm.rows.DataRow
AssetBundle = qcm.assets.AssetBundle

CHECKER_SIZE = qcm.config.CHECKER_SIZE
CHECKER_DARK = qcm.config.CHECKER_DARK
CHECKER_LIGHT = qcm.config.CHECKER_LIGHT
BLEED_OVERLAY_COLOR = qcm.config.BLEED_OVERLAY_COLOR
SAFE_OVERLAY_COLOR = qcm.config.SAFE_OVERLAY_COLOR
OVERLAY_ALPHA = qcm.config.OVERLAY_ALPHA
CODE_RASTER_SCALE = qcm.config.CODE_RASTER_SCALE
PREVIEW_SCALE = qcm.config.PREVIEW_SCALE
PROGRESS_BAR_WIDTH = qcm.config.PROGRESS_BAR_WIDTH


@dataclasses.dataclass(frozen=True)
class FillRect:
	rect: Rect
	color: str
	alpha: float = 1.0
	radius: float = 0.0
	tag: str = ""


@dataclasses.dataclass(frozen=True)
class DrawImage:
	rect: Rect
	image: PIL.Image.Image
	rotation: int = 0
	tag: str = ""


@dataclasses.dataclass(frozen=True)
class DrawText:
	text: str
	x: float
	baseline: float
	font: FontConfig
	color: str
	tag: str = "caption"


@dataclasses.dataclass(frozen=True)
class StrokeText:
	text: str
	x: float
	baseline: float
	font: FontConfig
	color: str
	width: float
	tag: str = "caption-outline"


@dataclasses.dataclass(frozen=True)
class BeginRotation:
	center: Point
	angle: int
	tag: str = ""


@dataclasses.dataclass(frozen=True)
class EndRotation:
	tag: str = ""


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def build_checkerboard_ops(width: float, height: float) -> list[FillRect]:
	"""
	Transparency checkerboard covering the page.

	Args:
		width: Page width in points.
		height: Page height in points.

	Returns:
		Fill operations, light base first.
	"""
	ops = [FillRect(Rect(0.0, 0.0, width, height), CHECKER_LIGHT, tag="checker")]
	columns = int(math.ceil(width / CHECKER_SIZE))
	rows = int(math.ceil(height / CHECKER_SIZE))
	for row in range(rows):
		for col in range(columns):
			if (row + col) % 2 == 0:
				continue
			x = col * CHECKER_SIZE
			y = row * CHECKER_SIZE
			cell = Rect(x, y, min(CHECKER_SIZE, width - x), min(CHECKER_SIZE, height - y))
			ops.append(FillRect(cell, CHECKER_DARK, tag="checker"))
	return ops


#============================================
def check_colors(*colors: str) -> None:
	"""
	Parse each color now so a bad value fails while ops are built.

	Raises:
		ValueError: On the first color that is not hex.
	"""
	for color in colors:
		qcm.surface.parse_hex_color(color)


#============================================
def build_background_ops(doc: DocumentModel, assets: AssetBundle) -> list:
	if assets.background is None:
		return []
	try:
		placement = qcm.placement.resolve_background(
			doc.page,
			doc.bleed,
			doc.safe,
			doc.background,
			assets.background.width,
			assets.background.height,
		)
	except (ValueError, OSError) as error:
		print(f"Warning: background skipped: {error}")
		return []
	if placement is None:
		return []
	return [DrawImage(placement.rect, assets.background.image, placement.rotation, tag="background")]


#============================================
def build_code_ops(
	doc: DocumentModel,
	row: DataRow,
	assets: AssetBundle,
	code_rect: Rect,
	pixels_per_point: float,
) -> list:
	"""
	Code raster plus logo, grouped under the code rotation.

	Args:
		doc: Document snapshot.
		row: Row whose payload is encoded.
		assets: Decoded images.
		code_rect: Resolved code rectangle.
		pixels_per_point: Raster resolution.

	Returns:
		Draw operations; empty when the code cannot be drawn.
	"""
	code = doc.code
	if code_rect.is_empty:
		return []
	logo = code.logo
	use_logo = logo.enabled and assets.logo is not None
	reserve_fraction = 0.0
	if use_logo:
		reserve_fraction = logo.size_pct / 100.0
	pixel_size = max(1, int(round(code_rect.width * pixels_per_point)))
	try:
		raster = qcm.codegen.generate_code_raster(
			row.payload,
			code.style,
			pixel_size,
			pixels_per_point,
			reserve_fraction,
		)
	except (ValueError, OSError) as error:
		print(f"Warning: row {row.index} code skipped: {error}")
		return []

	ops: list = []
	rotated = code.rotation % 360 != 0
	if rotated:
		ops.append(BeginRotation(code_rect.center, code.rotation, tag="code"))
	ops.append(DrawImage(code_rect, raster, tag="code"))
	if use_logo:
		placement = qcm.placement.resolve_logo(code_rect, logo, assets.logo.width, assets.logo.height)
		if placement is not None:
			backing_color = placement.backing_color
			if backing_color is not None:
				try:
					check_colors(backing_color)
				except ValueError as error:
					print(f"Warning: row {row.index} logo backing skipped: {error}")
					backing_color = None
			if backing_color is not None:
				ops.append(
					FillRect(
						placement.box,
						backing_color,
						radius=placement.backing_radius,
						tag="logo-backing",
					)
				)
			ops.append(DrawImage(placement.image_rect, assets.logo.image, tag="logo"))
	if rotated:
		ops.append(EndRotation(tag="code"))
	return ops


#============================================
def build_caption_ops(doc: DocumentModel, row: DataRow, code_rect: Rect) -> list:
	"""
	Caption box, outline and fill text.

	Args:
		doc: Document snapshot.
		row: Row whose label is the caption.
		code_rect: Resolved code rectangle.

	Returns:
		Draw operations; empty when there is no caption.
	"""
	label = doc.label
	try:
		layout = qcm.caption.layout_caption(code_rect, doc.code.rotation, label, row.label)
		if layout is not None:
			check_colors(label.font.color)
			if layout.box_rect is not None:
				check_colors(label.box.color)
			if label.outline.enabled:
				check_colors(label.outline.color)
	except (ValueError, OSError) as error:
		print(f"Warning: row {row.index} caption skipped: {error}")
		return []
	if layout is None:
		return []

	ops: list = []
	if layout.rotation_center is not None:
		ops.append(BeginRotation(layout.rotation_center, layout.rotation, tag="caption"))
	if layout.box_rect is not None:
		ops.append(FillRect(layout.box_rect, label.box.color, radius=label.box.radius_pts, tag="caption-box"))
	outline = label.outline
	for line in layout.lines:
		# outline first so the fill sits on top of the stroke
		if outline.enabled and outline.width_pts > 0:
			ops.append(StrokeText(line.text, line.x, line.baseline, label.font, outline.color, outline.width_pts))
		ops.append(DrawText(line.text, line.x, line.baseline, label.font, label.font.color))
	if layout.rotation_center is not None:
		ops.append(EndRotation(tag="caption"))
	return ops


#============================================
def build_overlay_ops(doc: DocumentModel) -> list[FillRect]:
	ops: list[FillRect] = []
	for band in qcm.overlay.compute_overlay_bands(doc.page, doc.bleed, doc.safe):
		color = BLEED_OVERLAY_COLOR if band.kind == "bleed" else SAFE_OVERLAY_COLOR
		ops.append(FillRect(band.rect, color, alpha=OVERLAY_ALPHA, tag=band.kind))
	return ops


#============================================
def build_page_ops(
	doc: DocumentModel,
	row: DataRow | None,
	assets: AssetBundle,
	include_guides: bool,
	pixels_per_point: float = CODE_RASTER_SCALE,
) -> list:
	"""
	Build every draw operation for one page, in paint order.

	Order: checkerboard, background, code group (raster, logo), caption,
	overlay bands. Checkerboard and overlay bands are guides and only appear
	when include_guides is set. A missing or invalid row yields a page with
	the background only.

	Args:
		doc: Document snapshot.
		row: Row to render, or None.
		assets: Decoded images.
		include_guides: Emit screen-only guides.
		pixels_per_point: Code raster resolution.

	Returns:
		List of draw operations in canonical space.
	"""
	page = doc.page
	ops: list = []
	if include_guides:
		ops += build_checkerboard_ops(page.width_pts, page.height_pts)
	ops += build_background_ops(doc, assets)
	if row is not None and row.is_valid:
		code_rect = qcm.placement.resolve_code_rect(page, doc.code)
		ops += build_code_ops(doc, row, assets, code_rect, pixels_per_point)
		ops += build_caption_ops(doc, row, code_rect)
	if include_guides and doc.overlays.show:
		ops += build_overlay_ops(doc)
	return ops


#============================================
def replay_ops(ops: list, surface) -> None:
	"""
	Emit draw operations onto a surface.

	Args:
		ops: Operations from build_page_ops.
		surface: ImageSurface or PdfSurface.
	"""
	for op in ops:
		if isinstance(op, FillRect):
			surface.fill_rect(op.rect, op.color, op.alpha, op.radius)
		elif isinstance(op, DrawImage):
			surface.draw_image(op.rect, op.image, op.rotation)
		elif isinstance(op, StrokeText):
			surface.stroke_text(op.text, op.x, op.baseline, op.font, op.color, op.width)
		elif isinstance(op, DrawText):
			surface.draw_text(op.text, op.x, op.baseline, op.font, op.color)
		elif isinstance(op, BeginRotation):
			surface.begin_rotation(op.center, op.angle)
		elif isinstance(op, EndRotation):
			surface.end_rotation()
		else:
			raise ValueError(f"Unknown draw operation: {op!r}")


#============================================
def render_preview(
	doc: DocumentModel,
	row: DataRow | None,
	assets: AssetBundle,
	scale: float = PREVIEW_SCALE,
) -> PIL.Image.Image:
	"""
	Render the screen preview of one row into a fresh image.

	Args:
		doc: Document snapshot.
		row: Row to render, or None for a layout-only preview.
		assets: Decoded images.
		scale: Pixels per point.

	Returns:
		RGBA image of the page at the given scale.
	"""
	surface = qcm.surface.ImageSurface(doc.page.width_pts, doc.page.height_pts, scale)
	ops = build_page_ops(doc, row, assets, surface.shows_guides, pixels_per_point=scale)
	replay_ops(ops, surface)
	return surface.finish()


#============================================
def draw_page(
	pdf: reportlab.pdfgen.canvas.Canvas,
	doc: DocumentModel,
	row: DataRow,
	assets: AssetBundle,
) -> None:
	surface = qcm.surface.PdfSurface(pdf, doc.page.width_pts, doc.page.height_pts)
	ops = build_page_ops(doc, row, assets, surface.shows_guides)
	replay_ops(ops, surface)


#============================================
def render_page_pdf(doc: DocumentModel, row: DataRow, assets: AssetBundle) -> bytes:
	"""
	Render one row as a single-page PDF.

	Args:
		doc: Document snapshot.
		row: Row to render.
		assets: Decoded images.

	Returns:
		PDF bytes, page size exactly width_pts x height_pts.
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(
		buffer,
		pagesize=(doc.page.width_pts, doc.page.height_pts),
	)
	draw_page(pdf, doc, row, assets)
	pdf.showPage()
	pdf.save()
	return buffer.getvalue()
