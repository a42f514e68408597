"""
Background image, code and logo placement in canonical space.
"""

# Standard Library
import dataclasses

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.document
import qr_card_maker.geometry


Point = qcm.geometry.Point
Rect = qcm.geometry.Rect
DocumentModel = qcm.document.DocumentModel
PageConfig = qcm.document.PageConfig
MarginConfig = qcm.document.MarginConfig
BackgroundConfig = qcm.document.BackgroundConfig
CodeConfig = qcm.document.CodeConfig
LogoConfig = qcm.document.LogoConfig


@dataclasses.dataclass(frozen=True)
class BackgroundPlacement:
	rect: Rect
	rotation: int
	content_rect: Rect


@dataclasses.dataclass(frozen=True)
class LogoPlacement:
	box: Rect
	image_rect: Rect
	backing_color: str | None
	backing_radius: float


#============================================
def compute_bounds_rect(
	page: PageConfig,
	bleed: MarginConfig,
	safe: MarginConfig,
	placement_bounds: str,
) -> Rect:
	"""
	Compute the rectangle that constrains the background image.

	Args:
		page: Page configuration.
		bleed: Bleed margins.
		safe: Safe margins.
		placement_bounds: bleed-area, canvas or safe-area.

	Returns:
		Bounds rectangle (may be degenerate).
	"""
	bounds = Rect(0.0, 0.0, page.width_pts, page.height_pts)
	if placement_bounds == "bleed-area":
		return bounds
	if placement_bounds not in ("canvas", "safe-area"):
		raise ValueError(f"Unknown placement bounds: {placement_bounds}")
	bounds = bounds.inset(*bleed.effective())
	if placement_bounds == "safe-area":
		bounds = bounds.inset(*safe.effective())
	return bounds


#============================================
def fit_dimensions(
	fit_mode: str,
	lock_aspect_ratio: bool,
	natural_width: float,
	natural_height: float,
	content_width: float,
	content_height: float,
) -> tuple[float, float]:
	"""
	Size an image inside a content rectangle according to a fit mode.

	Args:
		fit_mode: contain, cover, fill-width, fill-height or stretch.
		lock_aspect_ratio: Keep aspect ratio for fill-width / fill-height.
		natural_width: Image width in pixels.
		natural_height: Image height in pixels.
		content_width: Available width in points.
		content_height: Available height in points.

	Returns:
		Tuple of (width, height) in points.
	"""
	image_ratio = natural_width / natural_height
	area_ratio = content_width / content_height
	if fit_mode == "contain":
		if image_ratio > area_ratio:
			return (content_width, content_width / image_ratio)
		return (content_height * image_ratio, content_height)
	if fit_mode == "cover":
		if image_ratio > area_ratio:
			return (content_height * image_ratio, content_height)
		return (content_width, content_width / image_ratio)
	if fit_mode == "fill-width":
		if lock_aspect_ratio:
			return (content_width, content_width / image_ratio)
		return (content_width, content_height)
	if fit_mode == "fill-height":
		if lock_aspect_ratio:
			return (content_height * image_ratio, content_height)
		return (content_width, content_height)
	if fit_mode == "stretch":
		return (content_width, content_height)
	raise ValueError(f"Unknown fit mode: {fit_mode}")


#============================================
def resolve_background(
	page: PageConfig,
	bleed: MarginConfig,
	safe: MarginConfig,
	background: BackgroundConfig,
	natural_width: float,
	natural_height: float,
) -> BackgroundPlacement | None:
	"""
	Compute the drawn rectangle of the background image.

	Args:
		page: Page configuration.
		bleed: Bleed margins.
		safe: Safe margins.
		background: Background image configuration.
		natural_width: Decoded image width in pixels.
		natural_height: Decoded image height in pixels.

	Returns:
		BackgroundPlacement, or None when there is nothing to draw.
	"""
	bounds = compute_bounds_rect(page, bleed, safe, background.placement_bounds)
	padding = background.extra_padding_pts
	content = bounds.inset(padding.top, padding.right, padding.bottom, padding.left)
	if content.is_empty:
		return None
	if natural_width <= 0 or natural_height <= 0:
		return None

	width, height = fit_dimensions(
		background.fit_mode,
		background.lock_aspect_ratio,
		natural_width,
		natural_height,
		content.width,
		content.height,
	)
	if width <= 0 or height <= 0:
		return None

	if background.offset_anchor == "corner":
		x = content.x + background.offset_x_pts
		y = content.y + background.offset_y_pts
	else:
		x = content.x + (content.width - width) / 2.0 + background.offset_x_pts
		y = content.y + (content.height - height) / 2.0 + background.offset_y_pts
	return BackgroundPlacement(
		rect=Rect(x, y, width, height),
		rotation=background.rotation,
		content_rect=content,
	)


#============================================
def resolve_code_rect(page: PageConfig, code: CodeConfig) -> Rect:
	"""
	Compute the code's square in canonical space.

	The canvas anchor picks a point on the page, the offset moves it, and
	the code anchor picks which point of the code lands there.

	Args:
		page: Page configuration.
		code: Code configuration.

	Returns:
		Code rectangle (size_pts x size_pts).
	"""
	anchor = qcm.geometry.anchor_point(code.canvas_anchor, page.width_pts, page.height_pts)
	anchored = Point(anchor.x + code.offset_x_pts, anchor.y + code.offset_y_pts)
	top_left = qcm.geometry.top_left_from_anchor(anchored, code.code_anchor, code.size_pts, code.size_pts)
	return Rect(top_left.x, top_left.y, code.size_pts, code.size_pts)


#============================================
def resolve_logo(
	code_rect: Rect,
	logo: LogoConfig,
	natural_width: float,
	natural_height: float,
) -> LogoPlacement | None:
	"""
	Center a logo on the code, sized as a percentage of the code size.

	Args:
		code_rect: Resolved code rectangle.
		logo: Logo configuration.
		natural_width: Logo image width in pixels.
		natural_height: Logo image height in pixels.

	Returns:
		LogoPlacement, or None when there is nothing to draw.
	"""
	size = code_rect.width * logo.size_pct / 100.0
	if size <= 0 or natural_width <= 0 or natural_height <= 0:
		return None
	box = Rect(
		code_rect.x + (code_rect.width - size) / 2.0,
		code_rect.y + (code_rect.height - size) / 2.0,
		size,
		size,
	)
	aspect = natural_width / natural_height
	image_rect = box
	if aspect > 1.0:
		image_height = size / aspect
		image_rect = Rect(box.x, box.y + (size - image_height) / 2.0, size, image_height)
	elif aspect < 1.0:
		image_width = size * aspect
		image_rect = Rect(box.x + (size - image_width) / 2.0, box.y, image_width, size)
	backing_color = logo.backing_color if logo.backing_enabled else None
	return LogoPlacement(
		box=box,
		image_rect=image_rect,
		backing_color=backing_color,
		backing_radius=logo.backing_radius_pts,
	)


#============================================
def is_point_over_code(page: PageConfig, code: CodeConfig, pointer: Point) -> bool:
	"""
	Generous hit test: within one code size of the code's center.

	Args:
		page: Page configuration.
		code: Code configuration.
		pointer: Pointer location in canonical points.

	Returns:
		True when the pointer grabs the code.
	"""
	center = resolve_code_rect(page, code).center
	return qcm.geometry.distance(pointer, center) < code.size_pts


@dataclasses.dataclass(frozen=True)
class CodeDrag:
	start_pointer: Point
	start_offset: Point

	def offset_for(self, pointer: Point) -> Point:
		"""
		Offset after moving the pointer; the delta is added to the offset
		in effect when the drag started, never to the anchor.
		"""
		return Point(
			self.start_offset.x + pointer.x - self.start_pointer.x,
			self.start_offset.y + pointer.y - self.start_pointer.y,
		)

	def apply(self, doc: DocumentModel, pointer: Point) -> DocumentModel:
		offset = self.offset_for(pointer)
		return qcm.document.apply_update(
			doc,
			"code",
			{"offset_x_pts": offset.x, "offset_y_pts": offset.y},
		)


#============================================
def start_code_drag(doc: DocumentModel, pointer: Point) -> CodeDrag | None:
	"""
	Begin dragging the code if the pointer is over it.

	Args:
		doc: Current snapshot.
		pointer: Pointer location in canonical points.

	Returns:
		CodeDrag, or None when the pointer misses the code.
	"""
	if not is_point_over_code(doc.page, doc.code, pointer):
		return None
	return CodeDrag(
		start_pointer=pointer,
		start_offset=Point(doc.code.offset_x_pts, doc.code.offset_y_pts),
	)
