"""
Shared configuration, constants and unit conversion.
"""

import dataclasses
import re


POINTS_PER_INCH = 72.0
POINTS_PER_CM = POINTS_PER_INCH / 2.54
POINTS_PER_MM = POINTS_PER_CM / 10.0

UNIT_POINTS = {
	"cm": POINTS_PER_CM,
	"in": POINTS_PER_INCH,
	"mm": POINTS_PER_MM,
}

ANCHORS = ("tl", "tr", "bl", "br", "center")
ROTATIONS = (0, 90, 180, 270)
FIT_MODES = ("contain", "cover", "fill-width", "fill-height", "stretch")
PLACEMENT_BOUNDS = ("bleed-area", "canvas", "safe-area")
OFFSET_ANCHORS = ("corner", "center")
LABEL_ORIENTATIONS = ("bottom", "top", "left", "right")
TEXT_BOX_WIDTH_MODES = ("auto", "custom")
ALIGNMENTS = ("start", "center", "end")
FONT_FAMILIES = ("Helvetica", "TimesRoman", "Courier", "Custom")
FONT_WEIGHTS = ("regular", "bold")
WRAP_MODES = ("word", "char", "none")
CODE_PATTERNS = ("square", "dots", "rounded", "classy", "classy-rounded", "extra-rounded")
CORNER_STYLES = ("dot", "square", "rounded", "extra-rounded", "classy", "classy-rounded")
ECC_LEVELS = ("L", "M", "Q", "H")

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
STANDARD_FONTS = {
	("Helvetica", "regular"): "Helvetica",
	("Helvetica", "bold"): "Helvetica-Bold",
	("TimesRoman", "regular"): "Times-Roman",
	("TimesRoman", "bold"): "Times-Bold",
	("Courier", "regular"): "Courier",
	("Courier", "bold"): "Courier-Bold",
}
ELLIPSIS = "..."
# "#RGB" or "#RRGGBB"
HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")

CHECKER_SIZE = 10.0
CHECKER_DARK = "#E0E0E0"
CHECKER_LIGHT = "#FFFFFF"
BLEED_OVERLAY_COLOR = "#FF0000"
SAFE_OVERLAY_COLOR = "#0066FF"
OVERLAY_ALPHA = 0.15

# raster pixels per point when the code image is embedded in a PDF page
CODE_RASTER_SCALE = 4.0
PREVIEW_SCALE = 2.0
PREVIEW_DEBOUNCE_SECONDS = 0.05
PROGRESS_BAR_WIDTH = 20


@dataclasses.dataclass(frozen=True)
class PagePreset:
	preset_id: str
	name: str
	width_pts: float
	height_pts: float


PAGE_PRESETS = (
	PagePreset("business-us", "Business Card (US) - 3.5in x 2in", 3.5 * POINTS_PER_INCH, 2.0 * POINTS_PER_INCH),
	PagePreset("business-eu", "Business Card (EU) - 85mm x 55mm", 85.0 * POINTS_PER_MM, 55.0 * POINTS_PER_MM),
	PagePreset("business-square", "Business Card (Square) - 2.5in x 2.5in", 2.5 * POINTS_PER_INCH, 2.5 * POINTS_PER_INCH),
	PagePreset("label-square-2", "Square Label - 2in x 2in", 2.0 * POINTS_PER_INCH, 2.0 * POINTS_PER_INCH),
	PagePreset("label-square-3", "Square Label - 3in x 3in", 3.0 * POINTS_PER_INCH, 3.0 * POINTS_PER_INCH),
	PagePreset("label-round-2", "Round Label - 2in diameter", 2.0 * POINTS_PER_INCH, 2.0 * POINTS_PER_INCH),
	PagePreset("label-rect-4x2", "Rectangle Label - 4in x 2in", 4.0 * POINTS_PER_INCH, 2.0 * POINTS_PER_INCH),
	PagePreset("label-avery-5160", "Avery 5160 Label - 2.625in x 1in", 2.625 * POINTS_PER_INCH, 1.0 * POINTS_PER_INCH),
	PagePreset("label-avery-5163", "Avery 5163 Label - 4in x 2in", 4.0 * POINTS_PER_INCH, 2.0 * POINTS_PER_INCH),
	PagePreset("label-avery-22806", "Avery 22806 Square - 2.5in x 2.5in", 2.5 * POINTS_PER_INCH, 2.5 * POINTS_PER_INCH),
	PagePreset("badge-3x4", "Name Badge - 3in x 4in", 3.0 * POINTS_PER_INCH, 4.0 * POINTS_PER_INCH),
	PagePreset("badge-4x3", "Name Badge (Landscape) - 4in x 3in", 4.0 * POINTS_PER_INCH, 3.0 * POINTS_PER_INCH),
	PagePreset("playing-poker", "Playing Card (Poker) - 2.5in x 3.5in", 2.5 * POINTS_PER_INCH, 3.5 * POINTS_PER_INCH),
	PagePreset("playing-bridge", "Playing Card (Bridge) - 2.25in x 3.5in", 2.25 * POINTS_PER_INCH, 3.5 * POINTS_PER_INCH),
	PagePreset("playing-tarot", "Tarot Card - 2.75in x 4.75in", 2.75 * POINTS_PER_INCH, 4.75 * POINTS_PER_INCH),
	PagePreset("gift-tag-small", "Gift Tag (Small) - 2in x 3.5in", 2.0 * POINTS_PER_INCH, 3.5 * POINTS_PER_INCH),
	PagePreset("gift-tag-large", "Gift Tag (Large) - 2.5in x 4in", 2.5 * POINTS_PER_INCH, 4.0 * POINTS_PER_INCH),
	PagePreset("postcard-us", "Postcard (US) - 6in x 4in", 6.0 * POINTS_PER_INCH, 4.0 * POINTS_PER_INCH),
	PagePreset("postcard-a6", "Postcard (A6) - 148mm x 105mm", 148.0 * POINTS_PER_MM, 105.0 * POINTS_PER_MM),
	PagePreset("ticket-standard", "Event Ticket - 5.5in x 2in", 5.5 * POINTS_PER_INCH, 2.0 * POINTS_PER_INCH),
	PagePreset("ticket-wide", "Event Ticket (Wide) - 7in x 2in", 7.0 * POINTS_PER_INCH, 2.0 * POINTS_PER_INCH),
	PagePreset("bookmark", "Bookmark - 2in x 6in", 2.0 * POINTS_PER_INCH, 6.0 * POINTS_PER_INCH),
	PagePreset("luggage-tag", "Luggage Tag - 2.75in x 4.25in", 2.75 * POINTS_PER_INCH, 4.25 * POINTS_PER_INCH),
	PagePreset("hang-tag-small", "Hang Tag (Small) - 2in x 3in", 2.0 * POINTS_PER_INCH, 3.0 * POINTS_PER_INCH),
	PagePreset("hang-tag-large", "Hang Tag (Large) - 3in x 5in", 3.0 * POINTS_PER_INCH, 5.0 * POINTS_PER_INCH),
	PagePreset("wine-label", "Wine Label - 4in x 3in", 4.0 * POINTS_PER_INCH, 3.0 * POINTS_PER_INCH),
	PagePreset("bottle-label-wrap", "Bottle Label (Wrap) - 8in x 3in", 8.0 * POINTS_PER_INCH, 3.0 * POINTS_PER_INCH),
	PagePreset("cd-label", "CD/DVD Label - 4.65in diameter", 4.65 * POINTS_PER_INCH, 4.65 * POINTS_PER_INCH),
	PagePreset("custom", "Custom Size", 3.5 * POINTS_PER_INCH, 2.0 * POINTS_PER_INCH),
)


@dataclasses.dataclass
class ExportResult:
	pdf_bytes: bytes
	pages: int
	total_rows: int
	exported_rows: list[int]
	skipped_rows: list[int]
	failed_rows: list[int]


#============================================
def find_preset(preset_id: str) -> PagePreset:
	"""
	Look up a page preset by id.

	Args:
		preset_id: Preset identifier.

	Returns:
		PagePreset.
	"""
	for preset in PAGE_PRESETS:
		if preset.preset_id == preset_id:
			return preset
	raise ValueError(f"Unknown page preset: {preset_id}")


#============================================
def to_display_unit(points: float, unit: str) -> float:
	"""
	Convert points to a display unit.

	Args:
		points: Value in points.
		unit: One of "cm", "in", "mm".

	Returns:
		Value in the display unit.
	"""
	if unit not in UNIT_POINTS:
		raise ValueError(f"Unknown unit: {unit}")
	return points / UNIT_POINTS[unit]


#============================================
def to_points(value: float, unit: str) -> float:
	"""
	Convert a display unit value to points.

	Args:
		value: Value in the display unit.
		unit: One of "cm", "in", "mm".

	Returns:
		Value in points.
	"""
	if unit not in UNIT_POINTS:
		raise ValueError(f"Unknown unit: {unit}")
	return value * UNIT_POINTS[unit]


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


def round_to(value: float, decimals: int) -> float:
	"""
	Round a converted value for display.
	"""
	multiplier = 10 ** decimals
	return round(value * multiplier) / multiplier
