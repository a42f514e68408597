"""
Drawing surfaces and the coordinate-space adapters they emit through.

Every primitive arrives in canonical space (top-left origin, Y down). A
surface converts coordinates only at the moment it emits a draw call, via
its CoordinateSpace.
"""

# PIP3 modules
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.caption
import qr_card_maker.config
import qr_card_maker.document
import qr_card_maker.geometry


Point = qcm.geometry.Point
Rect = qcm.geometry.Rect
FontConfig = qcm.document.FontConfig

HEX_COLOR_PATTERN = qcm.config.HEX_COLOR_PATTERN


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC" or "#ABC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.

	Raises:
		ValueError: When the value is not a hex color.
	"""
	if not isinstance(value, str) or not HEX_COLOR_PATTERN.match(value):
		raise ValueError(f"Invalid hex color: {value!r}")
	digits = value[1:]
	if len(digits) == 3:
		digits = "".join(char * 2 for char in digits)
	red = int(digits[0:2], 16) / 255.0
	green = int(digits[2:4], 16) / 255.0
	blue = int(digits[4:6], 16) / 255.0
	return (red, green, blue)


def color_to_rgba(value: str, alpha: int = 255) -> tuple[int, int, int, int]:
	red, green, blue = parse_hex_color(value)
	return (int(round(red * 255)), int(round(green * 255)), int(round(blue * 255)), alpha)


#============================================
def flip_y(page_height: float, y: float, height: float) -> float:
	"""
	Convert a canonical top edge to a bottom-left-origin bottom edge.

	Args:
		page_height: Page height in points.
		y: Canonical top of the element.
		height: Element height.

	Returns:
		Print-space y of the element's lower edge.
	"""
	return page_height - y - height


class CoordinateSpace:
	"""
	Canonical space scaled to target units; the base class is Y-down.
	"""

	def __init__(self, page_width: float, page_height: float, scale: float = 1.0):
		self.page_width = page_width
		self.page_height = page_height
		self.scale = scale

	def rect(self, rect: Rect) -> tuple[float, float, float, float]:
		return (rect.x * self.scale, rect.y * self.scale, rect.width * self.scale, rect.height * self.scale)

	def point(self, point: Point) -> tuple[float, float]:
		return (point.x * self.scale, point.y * self.scale)

	def angle(self, angle: float) -> float:
		return angle

	def length(self, value: float) -> float:
		return value * self.scale


class ScreenSpace(CoordinateSpace):
	"""
	Screen pixels: same orientation as canonical space, scaled.
	"""

	def to_canonical(self, x: float, y: float) -> Point:
		return Point(x / self.scale, y / self.scale)


class PrintSpace(CoordinateSpace):
	"""
	PDF user space: bottom-left origin, Y up, one unit per point.
	"""

	def __init__(self, page_width: float, page_height: float):
		super().__init__(page_width, page_height, 1.0)

	def rect(self, rect: Rect) -> tuple[float, float, float, float]:
		return (rect.x, flip_y(self.page_height, rect.y, rect.height), rect.width, rect.height)

	def point(self, point: Point) -> tuple[float, float]:
		return (point.x, self.page_height - point.y)

	def angle(self, angle: float) -> float:
		# clockwise on screen is counter-clockwise in a Y-up space
		return -angle


class ImageSurface:
	"""
	Screen target: draws onto a Pillow RGBA image.
	"""

	shows_guides = True

	def __init__(self, page_width: float, page_height: float, scale: float = 1.0):
		self.space = ScreenSpace(page_width, page_height, scale)
		size = (max(1, int(round(page_width * scale))), max(1, int(round(page_height * scale))))
		self.image = PIL.Image.new("RGBA", size, (255, 255, 255, 255))
		self.layers: list[tuple[PIL.Image.Image, Point, float]] = []

	def target(self) -> PIL.Image.Image:
		if self.layers:
			return self.layers[-1][0]
		return self.image

	def paint_rect(
		self,
		image: PIL.Image.Image,
		box: tuple[float, float, float, float],
		fill: tuple[int, int, int, int],
		radius: float,
	) -> None:
		draw = PIL.ImageDraw.Draw(image)
		if radius > 0:
			draw.rounded_rectangle(box, radius=radius, fill=fill)
			return
		draw.rectangle(box, fill=fill)

	def fill_rect(self, rect: Rect, color: str, alpha: float = 1.0, radius: float = 0.0) -> None:
		x, y, width, height = self.space.rect(rect)
		if width <= 0 or height <= 0:
			return
		target = self.target()
		fill = color_to_rgba(color, int(round(alpha * 255)))
		box = (x, y, x + width - 1, y + height - 1)
		pixel_radius = self.space.length(radius)
		if fill[3] < 255:
			# drawing on RGBA replaces pixels, so translucent fills go through a layer
			layer = PIL.Image.new("RGBA", target.size, (0, 0, 0, 0))
			self.paint_rect(layer, box, fill, pixel_radius)
			target.alpha_composite(layer)
			return
		self.paint_rect(target, box, fill, pixel_radius)

	def draw_image(self, rect: Rect, image: PIL.Image.Image, rotation: int = 0) -> None:
		x, y, width, height = self.space.rect(rect)
		pixel_width = int(round(width))
		pixel_height = int(round(height))
		if pixel_width <= 0 or pixel_height <= 0:
			return
		scaled = image.convert("RGBA").resize((pixel_width, pixel_height), PIL.Image.Resampling.LANCZOS)
		if rotation % 360 != 0:
			scaled = scaled.rotate(-self.space.angle(rotation), expand=True)
			turned = qcm.geometry.rotated_rect(rect, rotation)
			x, y, _width, _height = self.space.rect(turned)
		self.target().paste(scaled, (int(round(x)), int(round(y))), scaled)

	def load_font(self, font: FontConfig) -> PIL.ImageFont.FreeTypeFont:
		size = max(1.0, self.space.length(font.size_pts))
		if font.family == "Custom" and font.custom_font_path:
			return PIL.ImageFont.truetype(font.custom_font_path, size)
		return PIL.ImageFont.load_default(size=size)

	def draw_glyphs(
		self,
		text: str,
		x: float,
		baseline: float,
		font: FontConfig,
		fill: tuple[int, int, int, int],
		stroke_width: float = 0.0,
	) -> None:
		# glyphs are placed one by one using the layout's metrics so the
		# preview matches the measured line widths
		draw = PIL.ImageDraw.Draw(self.target())
		pil_font = self.load_font(font)
		pen_x, pen_y = self.space.point(Point(x, baseline))
		stroke = int(round(self.space.length(stroke_width)))
		for char in text:
			draw.text(
				(pen_x, pen_y),
				char,
				font=pil_font,
				fill=fill,
				anchor="ls",
				stroke_width=stroke,
				stroke_fill=fill,
			)
			advance = qcm.caption.measure_text_width(char, font) + font.letter_spacing_pts
			pen_x += self.space.length(advance)

	def draw_text(self, text: str, x: float, baseline: float, font: FontConfig, color: str) -> None:
		self.draw_glyphs(text, x, baseline, font, color_to_rgba(color))

	def stroke_text(
		self,
		text: str,
		x: float,
		baseline: float,
		font: FontConfig,
		color: str,
		width: float,
	) -> None:
		self.draw_glyphs(text, x, baseline, font, color_to_rgba(color), stroke_width=width / 2.0)

	def begin_rotation(self, center: Point, angle: float) -> None:
		layer = PIL.Image.new("RGBA", self.image.size, (0, 0, 0, 0))
		self.layers.append((layer, center, angle))

	def end_rotation(self) -> None:
		layer, center, angle = self.layers.pop()
		pivot = self.space.point(center)
		turned = layer.rotate(
			-self.space.angle(angle),
			resample=PIL.Image.Resampling.BICUBIC,
			center=pivot,
		)
		self.target().alpha_composite(turned)

	def finish(self) -> PIL.Image.Image:
		while self.layers:
			self.end_rotation()
		return self.image


class PdfSurface:
	"""
	Print target: draws onto the current page of a ReportLab canvas.
	"""

	shows_guides = False

	def __init__(self, pdf: reportlab.pdfgen.canvas.Canvas, page_width: float, page_height: float):
		self.pdf = pdf
		self.space = PrintSpace(page_width, page_height)

	def fill_rect(self, rect: Rect, color: str, alpha: float = 1.0, radius: float = 0.0) -> None:
		x, y, width, height = self.space.rect(rect)
		if width <= 0 or height <= 0:
			return
		red, green, blue = parse_hex_color(color)
		self.pdf.setFillColorRGB(red, green, blue, alpha)
		if radius > 0:
			radius = min(radius, width / 2.0, height / 2.0)
			self.pdf.roundRect(x, y, width, height, radius, stroke=0, fill=1)
			return
		self.pdf.rect(x, y, width, height, stroke=0, fill=1)

	def draw_image(self, rect: Rect, image: PIL.Image.Image, rotation: int = 0) -> None:
		x, y, width, height = self.space.rect(rect)
		if width <= 0 or height <= 0:
			return
		image_reader = reportlab.lib.utils.ImageReader(image)
		if rotation % 360 == 0:
			self.pdf.drawImage(
				image_reader,
				x,
				y,
				width=width,
				height=height,
				mask="auto",
				preserveAspectRatio=False,
				anchor="sw",
			)
			return
		center_x, center_y = self.space.point(rect.center)
		self.pdf.saveState()
		self.pdf.translate(center_x, center_y)
		self.pdf.rotate(self.space.angle(rotation))
		self.pdf.drawImage(
			image_reader,
			-width / 2.0,
			-height / 2.0,
			width=width,
			height=height,
			mask="auto",
			preserveAspectRatio=False,
			anchor="sw",
		)
		self.pdf.restoreState()

	def emit_text(
		self,
		text: str,
		x: float,
		baseline: float,
		font: FontConfig,
		color: str,
		render_mode: int,
		stroke_width: float = 0.0,
	) -> None:
		red, green, blue = parse_hex_color(color)
		pen_x, pen_y = self.space.point(Point(x, baseline))
		text_object = self.pdf.beginText(pen_x, pen_y)
		text_object.setFont(qcm.caption.map_font_name(font), font.size_pts)
		text_object.setCharSpace(font.letter_spacing_pts)
		text_object.setTextRenderMode(render_mode)
		if render_mode == 1:
			self.pdf.setStrokeColorRGB(red, green, blue, 1.0)
			self.pdf.setLineWidth(stroke_width)
		else:
			self.pdf.setFillColorRGB(red, green, blue, 1.0)
		text_object.textOut(text)
		self.pdf.drawText(text_object)

	def draw_text(self, text: str, x: float, baseline: float, font: FontConfig, color: str) -> None:
		self.emit_text(text, x, baseline, font, color, 0)

	def stroke_text(
		self,
		text: str,
		x: float,
		baseline: float,
		font: FontConfig,
		color: str,
		width: float,
	) -> None:
		self.emit_text(text, x, baseline, font, color, 1, stroke_width=width)

	def begin_rotation(self, center: Point, angle: float) -> None:
		center_x, center_y = self.space.point(center)
		self.pdf.saveState()
		self.pdf.translate(center_x, center_y)
		self.pdf.rotate(self.space.angle(angle))
		self.pdf.translate(-center_x, -center_y)

	def end_rotation(self) -> None:
		self.pdf.restoreState()
