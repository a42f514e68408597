import pytest

import qr_card_maker.config
import qr_card_maker.geometry


Point = qr_card_maker.geometry.Point
Rect = qr_card_maker.geometry.Rect

SIZES = [(72.0, 72.0), (10.5, 3.25), (0.0, 0.0), (252.0, 144.0)]


#============================================
def test_anchor_inverse_law() -> None:
	"""
	Placing a box by an anchor and reading that anchor back returns the point.
	"""
	geometry = qr_card_maker.geometry
	point = Point(37.5, 12.25)
	for anchor in qr_card_maker.config.ANCHORS:
		for width, height in SIZES:
			top_left = geometry.top_left_from_anchor(point, anchor, width, height)
			offset = geometry.anchor_point(anchor, width, height)
			assert Point(top_left.x + offset.x, top_left.y + offset.y) == point


#============================================
def test_anchor_points() -> None:
	"""
	Anchor points for a 252 x 144 page.
	"""
	geometry = qr_card_maker.geometry
	assert geometry.anchor_point("tl", 252.0, 144.0) == Point(0.0, 0.0)
	assert geometry.anchor_point("tr", 252.0, 144.0) == Point(252.0, 0.0)
	assert geometry.anchor_point("bl", 252.0, 144.0) == Point(0.0, 144.0)
	assert geometry.anchor_point("br", 252.0, 144.0) == Point(252.0, 144.0)
	assert geometry.anchor_point("center", 252.0, 144.0) == Point(126.0, 72.0)
	with pytest.raises(ValueError):
		geometry.anchor_point("middle", 1.0, 1.0)


#============================================
def test_rotate_point_clockwise() -> None:
	"""
	Rotation is clockwise in the Y-down canonical space.
	"""
	geometry = qr_card_maker.geometry
	origin = Point(0.0, 0.0)
	assert geometry.rotate_point(Point(1.0, 0.0), origin, 90) == Point(0.0, 1.0)
	assert geometry.rotate_point(Point(1.0, 0.0), origin, 180) == Point(-1.0, 0.0)
	assert geometry.rotate_point(Point(1.0, 0.0), origin, 270) == Point(0.0, -1.0)
	assert geometry.rotate_point(Point(3.0, 4.0), Point(1.0, 1.0), 360) == Point(3.0, 4.0)
	turned = geometry.rotate_point(Point(1.0, 0.0), origin, 45)
	assert turned.x == pytest.approx(turned.y)


#============================================
def test_rect_helpers() -> None:
	"""
	Rect inset, expand and rotation bounds.
	"""
	rect = Rect(0.0, 0.0, 20.0, 10.0)
	assert rect.right == 20.0
	assert rect.bottom == 10.0
	assert rect.center == Point(10.0, 5.0)
	assert rect.inset(1.0, 2.0, 3.0, 4.0) == Rect(4.0, 1.0, 14.0, 6.0)
	assert rect.expand(2.0) == Rect(-2.0, -2.0, 24.0, 14.0)
	assert rect.translate(5.0, 5.0).as_tuple() == (5.0, 5.0, 20.0, 10.0)
	assert Rect(0.0, 0.0, 0.0, 5.0).is_empty
	assert rect.inset(6.0, 0.0, 6.0, 0.0).is_empty
	assert qr_card_maker.geometry.rotated_rect(rect, 90) == Rect(5.0, -5.0, 10.0, 20.0)
	assert qr_card_maker.geometry.rotated_rect(rect, 180) == rect
	assert qr_card_maker.geometry.distance(Point(0.0, 0.0), Point(3.0, 4.0)) == 5.0
