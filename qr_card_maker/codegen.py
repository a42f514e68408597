"""
QR code raster generation.
"""

# PIP3 modules
import PIL.Image
import PIL.ImageOps
import qrcode
import qrcode.constants
import qrcode.exceptions
import qrcode.image.styledpil
import qrcode.image.styles.moduledrawers.pil

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.document
import qr_card_maker.surface


CodeStyle = qcm.document.CodeStyle
drawers = qrcode.image.styles.moduledrawers.pil

ECC_LEVELS = {
	"L": qrcode.constants.ERROR_CORRECT_L,
	"M": qrcode.constants.ERROR_CORRECT_M,
	"Q": qrcode.constants.ERROR_CORRECT_Q,
	"H": qrcode.constants.ERROR_CORRECT_H,
}
# pixels per module in the intermediate raster, before resizing
MODULE_BOX_SIZE = 16


#============================================
def build_module_drawer(pattern: str) -> drawers.StyledPilQRModuleDrawer:
	"""
	Map a dot pattern name to a qrcode module drawer.

	Args:
		pattern: Pattern name.

	Returns:
		Module drawer instance.
	"""
	if pattern == "square":
		return drawers.SquareModuleDrawer()
	if pattern == "dots":
		return drawers.CircleModuleDrawer()
	if pattern == "rounded":
		return drawers.RoundedModuleDrawer(radius_ratio=0.5)
	if pattern == "classy":
		return drawers.GappedSquareModuleDrawer(size_ratio=0.85)
	if pattern == "classy-rounded":
		return drawers.RoundedModuleDrawer(radius_ratio=0.75)
	if pattern == "extra-rounded":
		return drawers.RoundedModuleDrawer(radius_ratio=1.0)
	raise ValueError(f"Unknown code pattern: {pattern}")


#============================================
def build_eye_drawer(corners: str) -> drawers.StyledPilQRModuleDrawer:
	"""
	Map a corner (finder pattern) style to a qrcode eye drawer.

	Args:
		corners: Corner style name.

	Returns:
		Module drawer instance for the finder patterns.
	"""
	if corners == "square":
		return drawers.SquareModuleDrawer()
	if corners == "dot":
		return drawers.CircleModuleDrawer()
	if corners == "rounded":
		return drawers.RoundedModuleDrawer(radius_ratio=0.5)
	if corners == "extra-rounded":
		return drawers.RoundedModuleDrawer(radius_ratio=1.0)
	if corners == "classy":
		return drawers.GappedSquareModuleDrawer(size_ratio=0.9)
	if corners == "classy-rounded":
		return drawers.RoundedModuleDrawer(radius_ratio=0.75)
	raise ValueError(f"Unknown corner style: {corners}")


#============================================
def build_module_mask(payload: str, style: CodeStyle) -> PIL.Image.Image:
	"""
	Render the QR modules as a grayscale mask (255 = dark module).

	Args:
		payload: Text to encode.
		style: Code style.

	Returns:
		Mode "L" image without a quiet zone.
	"""
	qr = qrcode.QRCode(
		error_correction=ECC_LEVELS[style.ecc],
		box_size=MODULE_BOX_SIZE,
		border=0,
	)
	qr.add_data(payload)
	try:
		qr.make(fit=True)
	except qrcode.exceptions.DataOverflowError as error:
		raise ValueError(f"Payload too long for a QR code ({len(payload)} characters)") from error
	styled = qr.make_image(
		image_factory=qrcode.image.styledpil.StyledPilImage,
		module_drawer=build_module_drawer(style.pattern),
		eye_drawer=build_eye_drawer(style.corners),
	)
	gray = styled.get_image().convert("L")
	return PIL.ImageOps.invert(gray)


#============================================
def generate_code_raster(
	payload: str,
	style: CodeStyle,
	pixel_size: int,
	pixels_per_point: float,
	reserve_fraction: float = 0.0,
) -> PIL.Image.Image:
	"""
	Generate a square, colored QR raster.

	Args:
		payload: Text to encode.
		style: Code style (colors, ecc, quiet zone, drawers).
		pixel_size: Output width and height in pixels.
		pixels_per_point: Raster resolution, used to size the quiet zone.
		reserve_fraction: Side of a centered blank square, as a fraction of
			the raster side, kept clear for a logo.

	Returns:
		RGBA image of pixel_size x pixel_size.
	"""
	if pixel_size <= 0:
		raise ValueError(f"Code raster size must be positive, got {pixel_size}")
	quiet = int(round(style.quiet_zone_pts * pixels_per_point))
	inner = pixel_size - 2 * quiet
	if inner <= 0:
		raise ValueError("Quiet zone leaves no room for the code")

	modules = build_module_mask(payload, style)
	modules = modules.resize((inner, inner), PIL.Image.Resampling.LANCZOS)
	mask = PIL.Image.new("L", (pixel_size, pixel_size), 0)
	mask.paste(modules, (quiet, quiet))

	if reserve_fraction > 0.0:
		side = int(round(pixel_size * min(reserve_fraction, 1.0)))
		start = (pixel_size - side) // 2
		mask.paste(0, (start, start, start + side, start + side))

	background_alpha = 0 if style.transparent_bg else 255
	background = PIL.Image.new(
		"RGBA",
		(pixel_size, pixel_size),
		qcm.surface.color_to_rgba(style.bg_color, background_alpha),
	)
	foreground = PIL.Image.new(
		"RGBA",
		(pixel_size, pixel_size),
		qcm.surface.color_to_rgba(style.fg_color, 255),
	)
	return PIL.Image.composite(foreground, background, mask)
