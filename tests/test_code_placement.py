import qr_card_maker.config
import qr_card_maker.document
import qr_card_maker.geometry
import qr_card_maker.placement
import qr_card_maker.surface


Point = qr_card_maker.geometry.Point
Rect = qr_card_maker.geometry.Rect
PageConfig = qr_card_maker.document.PageConfig
CodeConfig = qr_card_maker.document.CodeConfig
LogoConfig = qr_card_maker.document.LogoConfig

PAGE = PageConfig(width_pts=252.0, height_pts=144.0)
OFFSETS = [(0.0, 0.0), (-10.0, -10.0), (12.5, -3.25), (40.0, 7.0)]


#============================================
def test_center_scenario() -> None:
	"""
	A 72pt code centered on a 252 x 144 page sits at (90, 36).
	"""
	code = CodeConfig(size_pts=72.0, canvas_anchor="center", code_anchor="center")
	rect = qr_card_maker.placement.resolve_code_rect(PAGE, code)
	assert (rect.x, rect.y) == (90.0, 36.0)
	assert (rect.width, rect.height) == (72.0, 72.0)


#============================================
def test_bottom_right_scenario() -> None:
	"""
	Bottom-right anchors with a (-10, -10) offset land at (170, 62).
	"""
	code = CodeConfig(
		size_pts=72.0,
		canvas_anchor="br",
		code_anchor="br",
		offset_x_pts=-10.0,
		offset_y_pts=-10.0,
	)
	rect = qr_card_maker.placement.resolve_code_rect(PAGE, code)
	assert (rect.x, rect.y) == (170.0, 62.0)


#============================================
def test_coordinate_flip_invariance() -> None:
	"""
	Canonical and print-space tops always sum with the size to the page height.
	"""
	space = qr_card_maker.surface.PrintSpace(PAGE.width_pts, PAGE.height_pts)
	anchors = qr_card_maker.config.ANCHORS
	for canvas_anchor in anchors:
		for code_anchor in anchors:
			for offset_x, offset_y in OFFSETS:
				for rotation in qr_card_maker.config.ROTATIONS:
					code = CodeConfig(
						size_pts=72.0,
						canvas_anchor=canvas_anchor,
						code_anchor=code_anchor,
						offset_x_pts=offset_x,
						offset_y_pts=offset_y,
						rotation=rotation,
					)
					rect = qr_card_maker.placement.resolve_code_rect(PAGE, code)
					print_x, print_y, width, height = space.rect(rect)
					assert print_x == rect.x
					assert print_y + code.size_pts + rect.y == PAGE.height_pts
					assert (width, height) == (72.0, 72.0)


#============================================
def test_hit_test_is_generous() -> None:
	"""
	The pointer grabs the code within one code size of its center.
	"""
	code = CodeConfig(size_pts=72.0)
	center = Point(126.0, 72.0)
	assert qr_card_maker.placement.is_point_over_code(PAGE, code, center)
	assert qr_card_maker.placement.is_point_over_code(PAGE, code, Point(197.0, 72.0))
	assert not qr_card_maker.placement.is_point_over_code(PAGE, code, Point(199.0, 72.0))
	assert not qr_card_maker.placement.is_point_over_code(PAGE, code, Point(0.0, 0.0))


#============================================
def test_drag_updates_offset_only() -> None:
	"""
	Dragging adds the pointer delta to the starting offset.
	"""
	doc = qr_card_maker.document.default_document()
	drag = qr_card_maker.placement.start_code_drag(doc, Point(126.0, 72.0))
	assert drag is not None
	moved = drag.apply(doc, Point(141.0, 67.0))
	assert (moved.code.offset_x_pts, moved.code.offset_y_pts) == (15.0, -5.0)
	assert moved.code.canvas_anchor == doc.code.canvas_anchor
	assert (doc.code.offset_x_pts, doc.code.offset_y_pts) == (0.0, 0.0)

	second = qr_card_maker.placement.start_code_drag(moved, Point(141.0, 67.0))
	again = second.apply(moved, Point(151.0, 77.0))
	assert (again.code.offset_x_pts, again.code.offset_y_pts) == (25.0, 5.0)

	assert qr_card_maker.placement.start_code_drag(doc, Point(0.0, 0.0)) is None


#============================================
def test_logo_centered_and_aspect_fit() -> None:
	"""
	The logo box is size_pct of the code, centered; wide logos keep their aspect.
	"""
	code_rect = Rect(90.0, 36.0, 72.0, 72.0)
	logo = LogoConfig(enabled=True, size_pct=25.0, backing_color="#112233")
	placement = qr_card_maker.placement.resolve_logo(code_rect, logo, 200, 100)
	assert placement.box == Rect(117.0, 63.0, 18.0, 18.0)
	assert placement.image_rect == Rect(117.0, 67.5, 18.0, 9.0)
	assert placement.backing_color == "#112233"

	tall = qr_card_maker.placement.resolve_logo(code_rect, logo, 50, 100)
	assert tall.image_rect == Rect(121.5, 63.0, 9.0, 18.0)

	no_backing = LogoConfig(enabled=True, size_pct=25.0, backing_enabled=False)
	assert qr_card_maker.placement.resolve_logo(code_rect, no_backing, 10, 10).backing_color is None
	assert qr_card_maker.placement.resolve_logo(code_rect, LogoConfig(size_pct=0.0), 10, 10) is None
