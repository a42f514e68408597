"""
Caption wrapping and placement relative to the code.
"""

# Standard Library
import dataclasses
import pathlib
import typing

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.config
import qr_card_maker.document
import qr_card_maker.geometry


Point = qcm.geometry.Point
Rect = qcm.geometry.Rect
FontConfig = qcm.document.FontConfig
LabelConfig = qcm.document.LabelConfig
WrapConfig = qcm.document.WrapConfig

STANDARD_FONTS = qcm.config.STANDARD_FONTS
DEFAULT_FONT_REGULAR = qcm.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = qcm.config.DEFAULT_FONT_BOLD
ELLIPSIS = qcm.config.ELLIPSIS

MeasureFn = typing.Callable[[str, FontConfig], float]


@dataclasses.dataclass(frozen=True)
class CaptionLine:
	text: str
	x: float
	top: float
	baseline: float
	width: float


@dataclasses.dataclass(frozen=True)
class CaptionLayout:
	lines: list[CaptionLine]
	block_rect: Rect
	box_rect: Rect | None
	line_height: float
	rotation_center: Point | None
	rotation: int


#============================================
def map_font_name(font: FontConfig) -> str:
	"""
	Map font settings to a ReportLab font name, registering custom fonts.

	Args:
		font: Font configuration.

	Returns:
		Registered ReportLab font name.
	"""
	if font.family == "Custom":
		if not font.custom_font_path:
			if font.weight == "bold":
				return DEFAULT_FONT_BOLD
			return DEFAULT_FONT_REGULAR
		font_path = pathlib.Path(font.custom_font_path)
		font_name = f"Custom-{font_path.stem}"
		if font_name not in reportlab.pdfbase.pdfmetrics.getRegisteredFontNames():
			try:
				custom_font = reportlab.pdfbase.ttfonts.TTFont(font_name, str(font_path))
			except reportlab.pdfbase.ttfonts.TTFError as error:
				raise ValueError(f"Cannot load font {font_path}: {error}") from error
			reportlab.pdfbase.pdfmetrics.registerFont(custom_font)
		return font_name
	key = (font.family, font.weight)
	if key not in STANDARD_FONTS:
		raise ValueError(f"Unknown font: {font.family} {font.weight}")
	return STANDARD_FONTS[key]


#============================================
def measure_text_width(text: str, font: FontConfig) -> float:
	"""
	Measure a run of text in points, including letter spacing.

	Args:
		text: Text to measure.
		font: Font configuration.

	Returns:
		Width in points.
	"""
	font_name = map_font_name(font)
	width = reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font.size_pts)
	if len(text) > 1:
		width += font.letter_spacing_pts * (len(text) - 1)
	return width


#============================================
def compute_baseline_offset(font: FontConfig, line_height: float) -> float:
	"""
	Distance from the top of a line box to the text baseline.

	The glyph box (ascent to descent) is centered in the line box, so the
	baseline sits half the leading plus the ascent below the line top.

	Args:
		font: Font configuration.
		line_height: Line box height in points.

	Returns:
		Offset in points.
	"""
	font_name = map_font_name(font)
	ascent = reportlab.pdfbase.pdfmetrics.getAscent(font_name) * font.size_pts / 1000.0
	descent = reportlab.pdfbase.pdfmetrics.getDescent(font_name) * font.size_pts / 1000.0
	half_leading = (line_height - (ascent - descent)) / 2.0
	return half_leading + ascent


#============================================
def wrap_text(
	text: str,
	box_width: float,
	wrap: WrapConfig,
	font: FontConfig,
	measure: MeasureFn,
) -> tuple[list[str], bool]:
	"""
	Greedily pack words or characters into lines no wider than the box.

	A single token wider than the box stays whole on its own line.

	Args:
		text: Caption text.
		box_width: Text box width in points.
		wrap: Wrap configuration.
		font: Font configuration.
		measure: Text measurement capability.

	Returns:
		Tuple of (lines, overflowed) where overflowed is True when content
		remained after max_lines lines were closed.
	"""
	if wrap.mode == "none":
		return ([text], False)
	if wrap.mode == "word":
		tokens = text.split(" ")
		joiner = " "
	elif wrap.mode == "char":
		tokens = list(text)
		joiner = ""
	else:
		raise ValueError(f"Unknown wrap mode: {wrap.mode}")

	max_lines = max(1, wrap.max_lines)
	lines: list[str] = []
	current = ""
	for token in tokens:
		candidate = token if not current else current + joiner + token
		if current and measure(candidate, font) > box_width:
			lines.append(current)
			current = token
			if len(lines) >= max_lines:
				return (lines, True)
			continue
		current = candidate
	if current:
		lines.append(current)
	return (lines, False)


#============================================
def truncate_with_ellipsis(
	line: str,
	box_width: float,
	font: FontConfig,
	measure: MeasureFn,
) -> str:
	"""
	Shorten a line one character at a time until it fits with an ellipsis.

	Args:
		line: Last retained line.
		box_width: Text box width in points.
		font: Font configuration.
		measure: Text measurement capability.

	Returns:
		Truncated line ending in "...", or "..." alone.
	"""
	truncated = line
	while truncated:
		candidate = truncated + ELLIPSIS
		if measure(candidate, font) <= box_width:
			return candidate
		truncated = truncated[:-1]
	return ELLIPSIS


#============================================
def fit_caption_lines(
	text: str,
	box_width: float,
	wrap: WrapConfig,
	font: FontConfig,
	measure: MeasureFn,
) -> list[str]:
	lines, overflowed = wrap_text(text, box_width, wrap, font, measure)
	if overflowed and wrap.ellipsis and lines:
		lines[-1] = truncate_with_ellipsis(lines[-1], box_width, font, measure)
	return lines


def text_box_width(label: LabelConfig, code_size: float) -> float:
	if label.text_box_width_mode == "custom" and label.text_box_width_pts is not None:
		return label.text_box_width_pts
	return code_size


#============================================
def layout_caption(
	code_rect: Rect,
	code_rotation: int,
	label: LabelConfig,
	text: str,
	measure: MeasureFn | None = None,
) -> CaptionLayout | None:
	"""
	Wrap the caption and place it beside the code.

	Args:
		code_rect: Resolved code rectangle.
		code_rotation: Code rotation in degrees.
		label: Label configuration.
		text: Caption text.
		measure: Text measurement capability, ReportLab metrics by default.

	Returns:
		CaptionLayout, or None when there is no caption to draw.
	"""
	if not label.enabled or not text:
		return None
	if measure is None:
		measure = measure_text_width
	font = label.font
	box_width = text_box_width(label, code_rect.width)
	lines = fit_caption_lines(text, box_width, label.wrap, font, measure)
	if not lines:
		return None

	line_height = font.size_pts * font.line_height
	total_height = len(lines) * line_height
	x = code_rect.x
	y = code_rect.y
	if label.orientation == "bottom":
		y = code_rect.bottom + label.gap_pts
	elif label.orientation == "top":
		y = code_rect.y - label.gap_pts - total_height
	elif label.orientation == "left":
		x = code_rect.x - label.gap_pts - box_width
	elif label.orientation == "right":
		x = code_rect.right + label.gap_pts
	else:
		raise ValueError(f"Unknown label orientation: {label.orientation}")
	x += label.offset_x_pts
	y += label.offset_y_pts

	baseline_offset = compute_baseline_offset(font, line_height)
	placed: list[CaptionLine] = []
	for index, line in enumerate(lines):
		line_width = measure(line, font)
		if label.align == "center":
			line_x = x + (box_width - line_width) / 2.0
		elif label.align == "end":
			line_x = x + box_width - line_width
		else:
			line_x = x
		top = y + index * line_height
		placed.append(CaptionLine(line, line_x, top, top + baseline_offset, line_width))

	block_rect = Rect(x, y, box_width, total_height)
	box_rect = None
	if label.box.enabled:
		box_rect = block_rect.expand(label.box.padding_pts)

	rotation_center = None
	rotation = 0
	if label.rotate_with_group and code_rotation % 360 != 0:
		rotation_center = code_rect.center
		rotation = code_rotation
	return CaptionLayout(
		lines=placed,
		block_rect=block_rect,
		box_rect=box_rect,
		line_height=line_height,
		rotation_center=rotation_center,
		rotation=rotation,
	)
