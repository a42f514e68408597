"""
Document model, defaults, partial-update reducer and JSON persistence.
"""

# Standard Library
import dataclasses
import json
import pathlib
import typing

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.config


POINTS_PER_INCH = qcm.config.POINTS_PER_INCH
POINTS_PER_CM = qcm.config.POINTS_PER_CM


@dataclasses.dataclass(frozen=True)
class PageConfig:
	width_pts: float = 3.5 * POINTS_PER_INCH
	height_pts: float = 2.0 * POINTS_PER_INCH
	unit_preference: str = "cm"
	preset_id: str = "business-us"


@dataclasses.dataclass(frozen=True)
class MarginConfig:
	enabled: bool = True
	top_pts: float = 0.0
	right_pts: float = 0.0
	bottom_pts: float = 0.0
	left_pts: float = 0.0
	linked: bool = True

	def effective(self) -> tuple[float, float, float, float]:
		"""
		Edge distances (top, right, bottom, left), zero when disabled.
		"""
		if not self.enabled:
			return (0.0, 0.0, 0.0, 0.0)
		return (self.top_pts, self.right_pts, self.bottom_pts, self.left_pts)


@dataclasses.dataclass(frozen=True)
class OverlaysConfig:
	show: bool = True


@dataclasses.dataclass(frozen=True)
class Padding:
	top: float = 0.0
	right: float = 0.0
	bottom: float = 0.0
	left: float = 0.0


@dataclasses.dataclass(frozen=True)
class BackgroundConfig:
	rotation: int = 0
	fit_mode: str = "contain"
	placement_bounds: str = "canvas"
	lock_aspect_ratio: bool = True
	offset_anchor: str = "center"
	offset_x_pts: float = 0.0
	offset_y_pts: float = 0.0
	extra_padding_pts: Padding = dataclasses.field(default_factory=Padding)


@dataclasses.dataclass(frozen=True)
class CodeStyle:
	pattern: str = "square"
	corners: str = "square"
	ecc: str = "M"
	fg_color: str = "#000000"
	bg_color: str = "#FFFFFF"
	transparent_bg: bool = False
	quiet_zone_pts: float = 4.0


@dataclasses.dataclass(frozen=True)
class LogoConfig:
	enabled: bool = False
	size_pct: float = 30.0
	backing_enabled: bool = True
	backing_color: str = "#FFFFFF"
	backing_radius_pts: float = 4.0


@dataclasses.dataclass(frozen=True)
class CodeConfig:
	size_pts: float = 1.0 * POINTS_PER_INCH
	canvas_anchor: str = "center"
	code_anchor: str = "center"
	offset_x_pts: float = 0.0
	offset_y_pts: float = 0.0
	rotation: int = 0
	style: CodeStyle = dataclasses.field(default_factory=CodeStyle)
	logo: LogoConfig = dataclasses.field(default_factory=LogoConfig)


@dataclasses.dataclass(frozen=True)
class FontConfig:
	family: str = "Helvetica"
	custom_font_path: str | None = None
	size_pts: float = 10.0
	weight: str = "regular"
	color: str = "#000000"
	line_height: float = 1.2
	letter_spacing_pts: float = 0.0


@dataclasses.dataclass(frozen=True)
class BoxConfig:
	enabled: bool = False
	color: str = "#FFFFFF"
	padding_pts: float = 4.0
	radius_pts: float = 0.0


@dataclasses.dataclass(frozen=True)
class OutlineConfig:
	enabled: bool = False
	color: str = "#FFFFFF"
	width_pts: float = 1.0


@dataclasses.dataclass(frozen=True)
class WrapConfig:
	mode: str = "word"
	max_lines: int = 3
	ellipsis: bool = True


@dataclasses.dataclass(frozen=True)
class LabelConfig:
	enabled: bool = True
	orientation: str = "bottom"
	gap_pts: float = 8.0
	offset_x_pts: float = 0.0
	offset_y_pts: float = 0.0
	text_box_width_mode: str = "auto"
	text_box_width_pts: float | None = None
	align: str = "center"
	rotate_with_group: bool = False
	font: FontConfig = dataclasses.field(default_factory=FontConfig)
	box: BoxConfig = dataclasses.field(default_factory=BoxConfig)
	outline: OutlineConfig = dataclasses.field(default_factory=OutlineConfig)
	wrap: WrapConfig = dataclasses.field(default_factory=WrapConfig)


@dataclasses.dataclass(frozen=True)
class DocumentModel:
	page: PageConfig = dataclasses.field(default_factory=PageConfig)
	bleed: MarginConfig = dataclasses.field(default_factory=MarginConfig)
	safe: MarginConfig = dataclasses.field(default_factory=MarginConfig)
	overlays: OverlaysConfig = dataclasses.field(default_factory=OverlaysConfig)
	background: BackgroundConfig = dataclasses.field(default_factory=BackgroundConfig)
	code: CodeConfig = dataclasses.field(default_factory=CodeConfig)
	label: LabelConfig = dataclasses.field(default_factory=LabelConfig)


SECTIONS = tuple(field.name for field in dataclasses.fields(DocumentModel))
MARGIN_EDGES = ("top_pts", "right_pts", "bottom_pts", "left_pts")


#============================================
def default_document() -> DocumentModel:
	"""
	Build the starting document: a US business card with 0.3cm bleed and
	0.5cm safe margins.

	Returns:
		DocumentModel.
	"""
	bleed = 0.3 * POINTS_PER_CM
	safe = 0.5 * POINTS_PER_CM
	return DocumentModel(
		bleed=MarginConfig(True, bleed, bleed, bleed, bleed, True),
		safe=MarginConfig(True, safe, safe, safe, safe, True),
	)


#============================================
def merge_record(record: typing.Any, patch: dict) -> typing.Any:
	"""
	Shallow-merge a patch dict onto a frozen dataclass record.

	Nested records accept either a replacement instance or a dict, which is
	merged onto the current nested value.

	Args:
		record: Frozen dataclass instance.
		patch: Field values to replace.

	Returns:
		New record.
	"""
	field_names = {field.name for field in dataclasses.fields(record)}
	changes: dict[str, typing.Any] = {}
	for key, value in patch.items():
		if key not in field_names:
			raise ValueError(f"Unknown field for {type(record).__name__}: {key}")
		current = getattr(record, key)
		if dataclasses.is_dataclass(current) and isinstance(value, dict):
			value = merge_record(current, value)
		changes[key] = value
	return dataclasses.replace(record, **changes)


#============================================
def apply_update(doc: DocumentModel, section: str, patch: typing.Any) -> DocumentModel:
	"""
	Apply a partial update to one top-level section.

	Args:
		doc: Current snapshot.
		section: Section name (page, bleed, safe, overlays, background, code, label).
		patch: Dict of field changes or a full replacement record.

	Returns:
		New snapshot; the input is left untouched.
	"""
	if section not in SECTIONS:
		raise ValueError(f"Unknown document section: {section}")
	current = getattr(doc, section)
	if isinstance(patch, dict):
		new_value = merge_record(current, patch)
	elif isinstance(patch, type(current)):
		new_value = patch
	else:
		raise ValueError(f"Unsupported patch for section {section}: {patch!r}")
	return dataclasses.replace(doc, **{section: new_value})


def apply_updates(doc: DocumentModel, patches: dict) -> DocumentModel:
	for section, patch in patches.items():
		doc = apply_update(doc, section, patch)
	return doc


#============================================
def set_margin_edge(margin: MarginConfig, edge: str, value: float) -> MarginConfig:
	"""
	Edit one margin edge; a linked margin writes all four edges.

	Args:
		margin: Current margin.
		edge: One of top_pts, right_pts, bottom_pts, left_pts.
		value: New distance in points.

	Returns:
		New MarginConfig.
	"""
	if edge not in MARGIN_EDGES:
		raise ValueError(f"Unknown margin edge: {edge}")
	if margin.linked:
		return dataclasses.replace(
			margin,
			top_pts=value,
			right_pts=value,
			bottom_pts=value,
			left_pts=value,
		)
	return dataclasses.replace(margin, **{edge: value})


def toggle_margin_link(margin: MarginConfig) -> MarginConfig:
	return dataclasses.replace(margin, linked=not margin.linked)


#============================================
def apply_preset(doc: DocumentModel, preset_id: str) -> DocumentModel:
	"""
	Resize the page to a named preset.

	Args:
		doc: Current snapshot.
		preset_id: Preset identifier from config.PAGE_PRESETS.

	Returns:
		New snapshot.
	"""
	preset = qcm.config.find_preset(preset_id)
	return apply_update(
		doc,
		"page",
		{"width_pts": preset.width_pts, "height_pts": preset.height_pts, "preset_id": preset.preset_id},
	)


#============================================
def check_choice(name: str, value: typing.Any, choices: tuple) -> list[str]:
	if value in choices:
		return []
	return [f"{name}: {value!r} not in {', '.join(str(choice) for choice in choices)}"]


def check_non_negative(name: str, value: float) -> list[str]:
	if value >= 0:
		return []
	return [f"{name}: must be non-negative, got {value}"]


def check_color(name: str, value: typing.Any) -> list[str]:
	if isinstance(value, str) and qcm.config.HEX_COLOR_PATTERN.match(value):
		return []
	return [f"{name}: {value!r} is not a #RRGGBB or #RGB color"]


#============================================
def validate_document(doc: DocumentModel) -> None:
	"""
	Validate enum fields, hex colors and non-negative quantities.

	Args:
		doc: Document to check.

	Raises:
		ValueError: Listing every problem found.
	"""
	config = qcm.config
	problems: list[str] = []
	problems += check_non_negative("page.width_pts", doc.page.width_pts)
	problems += check_non_negative("page.height_pts", doc.page.height_pts)
	problems += check_choice("page.unit_preference", doc.page.unit_preference, tuple(config.UNIT_POINTS))
	for name in ("bleed", "safe"):
		margin = getattr(doc, name)
		for edge in MARGIN_EDGES:
			problems += check_non_negative(f"{name}.{edge}", getattr(margin, edge))

	background = doc.background
	problems += check_choice("background.rotation", background.rotation, config.ROTATIONS)
	problems += check_choice("background.fit_mode", background.fit_mode, config.FIT_MODES)
	problems += check_choice("background.placement_bounds", background.placement_bounds, config.PLACEMENT_BOUNDS)
	problems += check_choice("background.offset_anchor", background.offset_anchor, config.OFFSET_ANCHORS)
	for edge in ("top", "right", "bottom", "left"):
		problems += check_non_negative(
			f"background.extra_padding_pts.{edge}",
			getattr(background.extra_padding_pts, edge),
		)

	code = doc.code
	problems += check_non_negative("code.size_pts", code.size_pts)
	problems += check_choice("code.canvas_anchor", code.canvas_anchor, config.ANCHORS)
	problems += check_choice("code.code_anchor", code.code_anchor, config.ANCHORS)
	problems += check_choice("code.rotation", code.rotation, config.ROTATIONS)
	problems += check_choice("code.style.pattern", code.style.pattern, config.CODE_PATTERNS)
	problems += check_choice("code.style.corners", code.style.corners, config.CORNER_STYLES)
	problems += check_choice("code.style.ecc", code.style.ecc, config.ECC_LEVELS)
	problems += check_non_negative("code.style.quiet_zone_pts", code.style.quiet_zone_pts)
	problems += check_non_negative("code.logo.size_pct", code.logo.size_pct)
	problems += check_color("code.style.fg_color", code.style.fg_color)
	problems += check_color("code.style.bg_color", code.style.bg_color)
	problems += check_color("code.logo.backing_color", code.logo.backing_color)

	label = doc.label
	problems += check_choice("label.orientation", label.orientation, config.LABEL_ORIENTATIONS)
	problems += check_choice("label.text_box_width_mode", label.text_box_width_mode, config.TEXT_BOX_WIDTH_MODES)
	problems += check_choice("label.align", label.align, config.ALIGNMENTS)
	problems += check_choice("label.font.family", label.font.family, config.FONT_FAMILIES)
	problems += check_choice("label.font.weight", label.font.weight, config.FONT_WEIGHTS)
	problems += check_choice("label.wrap.mode", label.wrap.mode, config.WRAP_MODES)
	problems += check_non_negative("label.font.size_pts", label.font.size_pts)
	problems += check_non_negative("label.box.padding_pts", label.box.padding_pts)
	problems += check_color("label.font.color", label.font.color)
	problems += check_color("label.outline.color", label.outline.color)
	problems += check_color("label.box.color", label.box.color)
	if label.text_box_width_pts is not None:
		problems += check_non_negative("label.text_box_width_pts", label.text_box_width_pts)

	if problems:
		raise ValueError("Invalid document:\n" + "\n".join(problems))


#============================================
def document_to_dict(doc: DocumentModel) -> dict:
	return dataclasses.asdict(doc)


#============================================
def document_from_dict(data: dict) -> DocumentModel:
	"""
	Build a document from a (possibly partial) dict, filling gaps from defaults.

	Args:
		data: Dict keyed by section name.

	Returns:
		Validated DocumentModel.
	"""
	doc = default_document()
	for section, patch in data.items():
		doc = apply_update(doc, section, patch)
	validate_document(doc)
	return doc


#============================================
def load_document(path: pathlib.Path) -> DocumentModel:
	"""
	Load a document JSON file.

	Args:
		path: JSON path.

	Returns:
		DocumentModel.
	"""
	text = pathlib.Path(path).read_text(encoding="utf-8")
	return document_from_dict(json.loads(text))


def save_document(doc: DocumentModel, path: pathlib.Path) -> None:
	with pathlib.Path(path).open("w", encoding="utf-8") as handle:
		json.dump(document_to_dict(doc), handle, indent=2, sort_keys=True)
