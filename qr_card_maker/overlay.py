"""
Bleed and safe-margin guide bands.
"""

# Standard Library
import dataclasses

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.document
import qr_card_maker.geometry


Rect = qcm.geometry.Rect
PageConfig = qcm.document.PageConfig
MarginConfig = qcm.document.MarginConfig


@dataclasses.dataclass(frozen=True)
class OverlayBand:
	kind: str
	edge: str
	rect: Rect


#============================================
def compute_overlay_bands(
	page: PageConfig,
	bleed: MarginConfig,
	safe: MarginConfig,
) -> list[OverlayBand]:
	"""
	Compute the non-overlapping guide bands for bleed and safe margins.

	Bleed bands lie outside the trim line; safe bands lie between the trim
	line and the safe line. Top and bottom bands span the full width of
	their frame, left and right bands fill the remaining height.

	Args:
		page: Page configuration.
		bleed: Bleed margins.
		safe: Safe margins.

	Returns:
		Up to 8 bands.
	"""
	bands: list[OverlayBand] = []
	bleed_top, bleed_right, bleed_bottom, bleed_left = bleed.effective()
	trim = Rect(0.0, 0.0, page.width_pts, page.height_pts).inset(
		bleed_top, bleed_right, bleed_bottom, bleed_left
	)

	if bleed.enabled:
		if bleed_top > 0:
			bands.append(OverlayBand("bleed", "top", Rect(0.0, 0.0, page.width_pts, bleed_top)))
		if bleed_bottom > 0:
			bands.append(OverlayBand("bleed", "bottom", Rect(0.0, trim.bottom, page.width_pts, bleed_bottom)))
		if bleed_left > 0:
			bands.append(OverlayBand("bleed", "left", Rect(0.0, trim.y, bleed_left, trim.height)))
		if bleed_right > 0:
			bands.append(OverlayBand("bleed", "right", Rect(trim.right, trim.y, bleed_right, trim.height)))

	if safe.enabled:
		safe_top, safe_right, safe_bottom, safe_left = safe.effective()
		inner = trim.inset(safe_top, safe_right, safe_bottom, safe_left)
		if safe_top > 0:
			bands.append(OverlayBand("safe", "top", Rect(trim.x, trim.y, trim.width, safe_top)))
		if safe_bottom > 0:
			bands.append(OverlayBand("safe", "bottom", Rect(trim.x, inner.bottom, trim.width, safe_bottom)))
		if safe_left > 0:
			bands.append(OverlayBand("safe", "left", Rect(trim.x, inner.y, safe_left, inner.height)))
		if safe_right > 0:
			bands.append(OverlayBand("safe", "right", Rect(inner.right, inner.y, safe_right, inner.height)))
	return bands
