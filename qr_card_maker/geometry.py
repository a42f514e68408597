"""
Rectangle, point and anchor math in canonical space.

Canonical space has its origin at the top-left corner of the page with Y
increasing downward. Rotations are clockwise in this space.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.config


ANCHORS = qcm.config.ANCHORS


@dataclasses.dataclass(frozen=True)
class Point:
	x: float
	y: float


@dataclasses.dataclass(frozen=True)
class Rect:
	x: float
	y: float
	width: float
	height: float

	@property
	def right(self) -> float:
		return self.x + self.width

	@property
	def bottom(self) -> float:
		return self.y + self.height

	@property
	def center(self) -> Point:
		return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

	@property
	def is_empty(self) -> bool:
		return self.width <= 0 or self.height <= 0

	def inset(self, top: float, right: float, bottom: float, left: float) -> "Rect":
		return Rect(
			self.x + left,
			self.y + top,
			self.width - left - right,
			self.height - top - bottom,
		)

	def expand(self, amount: float) -> "Rect":
		return Rect(
			self.x - amount,
			self.y - amount,
			self.width + 2.0 * amount,
			self.height + 2.0 * amount,
		)

	def translate(self, dx: float, dy: float) -> "Rect":
		return Rect(self.x + dx, self.y + dy, self.width, self.height)

	def as_tuple(self) -> tuple[float, float, float, float]:
		return (self.x, self.y, self.width, self.height)


#============================================
def anchor_point(anchor: str, width: float, height: float) -> Point:
	"""
	Map an anchor name to a point inside a width x height rectangle.

	This answers "where on the container". The rectangle's origin is its
	top-left corner.

	Args:
		anchor: One of tl, tr, bl, br, center.
		width: Rectangle width.
		height: Rectangle height.

	Returns:
		Point within the rectangle.
	"""
	if anchor == "tl":
		return Point(0.0, 0.0)
	if anchor == "tr":
		return Point(width, 0.0)
	if anchor == "bl":
		return Point(0.0, height)
	if anchor == "br":
		return Point(width, height)
	if anchor == "center":
		return Point(width / 2.0, height / 2.0)
	raise ValueError(f"Unknown anchor: {anchor}")


#============================================
def top_left_from_anchor(point: Point, anchor: str, width: float, height: float) -> Point:
	"""
	Find the top-left corner of a box given where one of its anchors sits.

	This answers "which part of the element" is pinned at the point.

	Args:
		point: Location of the box's anchor.
		anchor: Which anchor of the box sits at the point.
		width: Box width.
		height: Box height.

	Returns:
		Top-left corner of the box.
	"""
	offset = anchor_point(anchor, width, height)
	return Point(point.x - offset.x, point.y - offset.y)


#============================================
def rotate_point(point: Point, center: Point, angle: float) -> Point:
	"""
	Rotate a point clockwise (in canonical space) about a center.

	Args:
		point: Point to rotate.
		center: Rotation center.
		angle: Angle in degrees.

	Returns:
		Rotated point.
	"""
	quarter_turns = angle / 90.0
	if quarter_turns == int(quarter_turns):
		# exact for the 90 degree steps used everywhere in the layout
		dx = point.x - center.x
		dy = point.y - center.y
		turns = int(quarter_turns) % 4
		for _ in range(turns):
			dx, dy = -dy, dx
		return Point(center.x + dx, center.y + dy)
	radians = math.radians(angle)
	cos_a = math.cos(radians)
	sin_a = math.sin(radians)
	dx = point.x - center.x
	dy = point.y - center.y
	return Point(
		center.x + dx * cos_a - dy * sin_a,
		center.y + dx * sin_a + dy * cos_a,
	)


#============================================
def rotated_rect(rect: Rect, angle: float) -> Rect:
	"""
	Bounding box of a rect rotated by a 90 degree step about its center.

	Args:
		rect: Source rectangle.
		angle: One of 0, 90, 180, 270.

	Returns:
		Rectangle with swapped width and height at 90 and 270.
	"""
	if int(angle) % 180 == 0:
		return rect
	center = rect.center
	return Rect(
		center.x - rect.height / 2.0,
		center.y - rect.width / 2.0,
		rect.height,
		rect.width,
	)


def distance(a: Point, b: Point) -> float:
	return math.hypot(a.x - b.x, a.y - b.y)
