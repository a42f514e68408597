import dataclasses

import pytest

import qr_card_maker.caption
import qr_card_maker.document
import qr_card_maker.geometry


Point = qr_card_maker.geometry.Point
Rect = qr_card_maker.geometry.Rect
LabelConfig = qr_card_maker.document.LabelConfig
FontConfig = qr_card_maker.document.FontConfig
WrapConfig = qr_card_maker.document.WrapConfig
BoxConfig = qr_card_maker.document.BoxConfig

CODE_RECT = Rect(90.0, 36.0, 72.0, 72.0)


#============================================
def fake_measure(text: str, font: FontConfig) -> float:
	"""
	Fixed-pitch measurement: 6pt per character.
	"""
	return len(text) * 6.0


#============================================
def layout(label: LabelConfig, text: str, rotation: int = 0):
	return qr_card_maker.caption.layout_caption(CODE_RECT, rotation, label, text, fake_measure)


#============================================
def test_hello_world_ellipsis() -> None:
	"""
	A one-line limit truncates with an ellipsis instead of overflowing.
	"""
	label = LabelConfig(
		text_box_width_mode="custom",
		text_box_width_pts=50.0,
		wrap=WrapConfig(mode="word", max_lines=1, ellipsis=True),
	)
	result = layout(label, "Hello World")
	assert [line.text for line in result.lines] == ["Hello..."]

	narrow = dataclasses.replace(label, text_box_width_pts=40.0)
	result = layout(narrow, "Hello World")
	assert result.lines[0].text == "Hel..."
	assert result.lines[0].width <= 40.0

	no_ellipsis = dataclasses.replace(label, wrap=WrapConfig(mode="word", max_lines=1, ellipsis=False))
	assert [line.text for line in layout(no_ellipsis, "Hello World").lines] == ["Hello"]


#============================================
def test_wrap_then_measure_bound() -> None:
	"""
	Every wrapped line fits the box unless it is a single overlong token.
	"""
	wrap = WrapConfig(mode="word", max_lines=10, ellipsis=False)
	font = FontConfig()
	text = "aa bbb cccc dd e supercalifragilistic ff"
	lines, overflowed = qr_card_maker.caption.wrap_text(text, 36.0, wrap, font, fake_measure)
	assert not overflowed
	assert " ".join(lines) == text
	for line in lines:
		assert fake_measure(line, font) <= 36.0 or " " not in line
	assert "supercalifragilistic" in lines


#============================================
def test_wrap_modes() -> None:
	"""
	Character wrap, no wrap, and the max_lines floor of one.
	"""
	font = FontConfig()
	char_lines, _overflowed = qr_card_maker.caption.wrap_text(
		"abcdefgh", 18.0, WrapConfig(mode="char", max_lines=5), font, fake_measure
	)
	assert char_lines == ["abc", "def", "gh"]

	none_lines, overflowed = qr_card_maker.caption.wrap_text(
		"a very long caption", 6.0, WrapConfig(mode="none"), font, fake_measure
	)
	assert none_lines == ["a very long caption"]
	assert not overflowed

	clamped, overflowed = qr_card_maker.caption.wrap_text(
		"one two three", 24.0, WrapConfig(mode="word", max_lines=0), font, fake_measure
	)
	assert clamped == ["one"]
	assert overflowed


#============================================
def test_orientations() -> None:
	"""
	The caption block sits on the chosen side of the code, gap apart.
	"""
	bottom = layout(LabelConfig(orientation="bottom"), "Hi")
	assert bottom.block_rect.y == 116.0
	assert bottom.block_rect.x == 90.0
	assert bottom.block_rect.width == 72.0
	assert bottom.lines[0].x == 120.0

	top = layout(LabelConfig(orientation="top"), "Hi")
	assert top.block_rect.y == pytest.approx(36.0 - 8.0 - 12.0)

	left = layout(LabelConfig(orientation="left"), "Hi")
	assert (left.block_rect.x, left.block_rect.y) == (10.0, 36.0)

	right = layout(LabelConfig(orientation="right"), "Hi")
	assert (right.block_rect.x, right.block_rect.y) == (170.0, 36.0)

	shifted = layout(LabelConfig(orientation="bottom", offset_x_pts=3.0, offset_y_pts=-2.0), "Hi")
	assert (shifted.block_rect.x, shifted.block_rect.y) == (93.0, 114.0)


#============================================
def test_alignment() -> None:
	"""
	Start, center and end alignment inside the text box.
	"""
	assert layout(LabelConfig(align="start"), "Hi").lines[0].x == 90.0
	assert layout(LabelConfig(align="center"), "Hi").lines[0].x == 120.0
	assert layout(LabelConfig(align="end"), "Hi").lines[0].x == 150.0


#============================================
def test_multiline_baselines_and_box() -> None:
	"""
	Lines stack by line height; the box expands the block by its padding.
	"""
	label = LabelConfig(
		wrap=WrapConfig(mode="word", max_lines=3),
		box=BoxConfig(enabled=True, padding_pts=4.0),
	)
	result = layout(label, "alpha beta gamma delta")
	assert len(result.lines) == 2
	assert result.line_height == pytest.approx(12.0)
	assert result.lines[1].top - result.lines[0].top == pytest.approx(12.0)
	offset = qr_card_maker.caption.compute_baseline_offset(label.font, result.line_height)
	assert 0.0 < offset < result.line_height
	for line in result.lines:
		assert line.baseline - line.top == pytest.approx(offset)
	assert result.box_rect == result.block_rect.expand(4.0)
	assert layout(LabelConfig(), "Hi").box_rect is None


#============================================
def test_rotation_with_group() -> None:
	"""
	A caption rotating with the code pivots on the code center.
	"""
	grouped = layout(LabelConfig(rotate_with_group=True), "Hi", rotation=90)
	assert grouped.rotation_center == Point(126.0, 72.0)
	assert grouped.rotation == 90

	independent = layout(LabelConfig(rotate_with_group=False), "Hi", rotation=90)
	assert independent.rotation_center is None
	assert independent.rotation == 0

	unrotated = layout(LabelConfig(rotate_with_group=True), "Hi", rotation=0)
	assert unrotated.rotation_center is None


#============================================
def test_nothing_to_draw() -> None:
	"""
	Disabled labels and empty text produce no layout.
	"""
	assert layout(LabelConfig(enabled=False), "Hi") is None
	assert layout(LabelConfig(), "") is None


#============================================
def test_reportlab_measurement() -> None:
	"""
	Default measurement uses ReportLab metrics plus letter spacing.
	"""
	font = FontConfig(family="Helvetica", size_pts=10.0)
	width = qr_card_maker.caption.measure_text_width("HI", font)
	assert width > 0.0
	spaced = dataclasses.replace(font, letter_spacing_pts=2.0)
	assert qr_card_maker.caption.measure_text_width("HI", spaced) == pytest.approx(width + 2.0)
	assert qr_card_maker.caption.map_font_name(FontConfig(family="TimesRoman", weight="bold")) == "Times-Bold"
	assert qr_card_maker.caption.map_font_name(FontConfig(family="Custom")) == "Helvetica"
	with pytest.raises(ValueError):
		qr_card_maker.caption.map_font_name(FontConfig(family="Custom", custom_font_path="/no/such/font.ttf"))
