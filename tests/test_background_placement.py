import dataclasses

import qr_card_maker.document
import qr_card_maker.geometry
import qr_card_maker.placement


Rect = qr_card_maker.geometry.Rect
PageConfig = qr_card_maker.document.PageConfig
MarginConfig = qr_card_maker.document.MarginConfig
BackgroundConfig = qr_card_maker.document.BackgroundConfig
Padding = qr_card_maker.document.Padding

PAGE = PageConfig(width_pts=252.0, height_pts=144.0)
BLEED = MarginConfig(True, 10.0, 10.0, 10.0, 10.0, True)
SAFE = MarginConfig(True, 5.0, 5.0, 5.0, 5.0, True)


#============================================
def resolve(background: BackgroundConfig, width: float = 100.0, height: float = 50.0):
	"""
	Resolve a background on the 252 x 144 test page.
	"""
	return qr_card_maker.placement.resolve_background(PAGE, BLEED, SAFE, background, width, height)


#============================================
def test_canvas_bounds_exclude_bleed() -> None:
	"""
	Canvas bounds run from (10, 10) to (242, 134) with 10pt bleed.
	"""
	bounds = qr_card_maker.placement.compute_bounds_rect(PAGE, BLEED, SAFE, "canvas")
	assert (bounds.x, bounds.y, bounds.right, bounds.bottom) == (10.0, 10.0, 242.0, 134.0)

	full = qr_card_maker.placement.compute_bounds_rect(PAGE, BLEED, SAFE, "bleed-area")
	assert full == Rect(0.0, 0.0, 252.0, 144.0)

	safe = qr_card_maker.placement.compute_bounds_rect(PAGE, BLEED, SAFE, "safe-area")
	assert safe == Rect(15.0, 15.0, 222.0, 114.0)


#============================================
def test_disabled_margins_contribute_nothing() -> None:
	"""
	A disabled bleed leaves canvas bounds equal to the page.
	"""
	bleed = dataclasses.replace(BLEED, enabled=False)
	bounds = qr_card_maker.placement.compute_bounds_rect(PAGE, bleed, SAFE, "canvas")
	assert bounds == Rect(0.0, 0.0, 252.0, 144.0)


#============================================
def test_fit_modes() -> None:
	"""
	Each fit mode sizes a 2:1 image inside the 232 x 124 canvas area.
	"""
	contain = resolve(BackgroundConfig(fit_mode="contain"))
	assert contain.rect == Rect(10.0, 14.0, 232.0, 116.0)
	assert contain.content_rect == Rect(10.0, 10.0, 232.0, 124.0)

	cover = resolve(BackgroundConfig(fit_mode="cover"))
	assert cover.rect == Rect(2.0, 10.0, 248.0, 124.0)

	stretch = resolve(BackgroundConfig(fit_mode="stretch"))
	assert stretch.rect == Rect(10.0, 10.0, 232.0, 124.0)

	fill_width = resolve(BackgroundConfig(fit_mode="fill-width"))
	assert (fill_width.rect.width, fill_width.rect.height) == (232.0, 116.0)
	unlocked = resolve(BackgroundConfig(fit_mode="fill-width", lock_aspect_ratio=False))
	assert (unlocked.rect.width, unlocked.rect.height) == (232.0, 124.0)

	fill_height = resolve(BackgroundConfig(fit_mode="fill-height"))
	assert (fill_height.rect.width, fill_height.rect.height) == (248.0, 124.0)


#============================================
def test_offsets_and_padding() -> None:
	"""
	Corner offsets start at the content origin; center offsets shift the centered image.
	"""
	corner = resolve(BackgroundConfig(offset_anchor="corner", offset_x_pts=5.0, offset_y_pts=6.0))
	assert (corner.rect.x, corner.rect.y) == (15.0, 16.0)

	center = resolve(BackgroundConfig(offset_anchor="center", offset_x_pts=5.0, offset_y_pts=-4.0))
	assert (center.rect.x, center.rect.y) == (15.0, 10.0)

	padded = resolve(BackgroundConfig(fit_mode="stretch", extra_padding_pts=Padding(2.0, 4.0, 6.0, 8.0)))
	assert padded.rect == Rect(18.0, 12.0, 220.0, 116.0)

	rotated = resolve(BackgroundConfig(rotation=90))
	assert rotated.rotation == 90


#============================================
def test_degenerate_inputs_skip_drawing() -> None:
	"""
	Padding that consumes the bounds, or an empty image, yields None.
	"""
	assert resolve(BackgroundConfig(extra_padding_pts=Padding(70.0, 0.0, 70.0, 0.0))) is None
	assert resolve(BackgroundConfig(), width=0.0, height=50.0) is None
	assert resolve(BackgroundConfig(), width=50.0, height=0.0) is None


#============================================
def test_fit_mode_idempotence() -> None:
	"""
	Resolving twice on identical inputs yields identical rectangles.
	"""
	for fit_mode in ("contain", "cover", "fill-width", "fill-height", "stretch"):
		background = BackgroundConfig(fit_mode=fit_mode, offset_x_pts=3.3, offset_y_pts=-1.7)
		first = resolve(background, 640.0, 427.0)
		second = resolve(background, 640.0, 427.0)
		assert first == second
		assert first.rect.as_tuple() == second.rect.as_tuple()
