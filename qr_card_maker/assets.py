"""
Image asset decoding.
"""

# Standard Library
import dataclasses
import io
import pathlib

# PIP3 modules
import PIL.Image


@dataclasses.dataclass(frozen=True)
class DecodedImage:
	width: int
	height: int
	image: PIL.Image.Image


@dataclasses.dataclass(frozen=True)
class AssetBundle:
	background: DecodedImage | None = None
	logo: DecodedImage | None = None


#============================================
def decode_image(data: bytes) -> DecodedImage:
	"""
	Decode image bytes into an RGBA raster.

	Args:
		data: Encoded image bytes (PNG, JPEG, BMP, ...).

	Returns:
		DecodedImage.

	Raises:
		ValueError: When the bytes are not a readable image.
	"""
	try:
		image = PIL.Image.open(io.BytesIO(data))
		image.load()
	except OSError as error:
		raise ValueError(f"Unsupported image data: {error}") from error
	if image.mode != "RGBA":
		image = image.convert("RGBA")
	return DecodedImage(width=image.width, height=image.height, image=image)


#============================================
def load_image_asset(path: pathlib.Path | None, role: str) -> DecodedImage | None:
	"""
	Read and decode an image file, reporting failures instead of raising.

	Args:
		path: Image path or None.
		role: Asset role for messages ("background", "logo").

	Returns:
		DecodedImage, or None when missing or unreadable.
	"""
	if path is None:
		return None
	try:
		data = pathlib.Path(path).read_bytes()
		return decode_image(data)
	except (OSError, ValueError) as error:
		print(f"Warning: {role} image skipped ({path}): {error}")
		return None


def load_assets(background_path: pathlib.Path | None, logo_path: pathlib.Path | None) -> AssetBundle:
	return AssetBundle(
		background=load_image_asset(background_path, "background"),
		logo=load_image_asset(logo_path, "logo"),
	)
