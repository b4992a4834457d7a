"""
Image Transcoder
Resizes image bytes and encodes them to the requested format with Pillow.
"""
import io
import logging
from typing import Optional

from PIL import Image, ImageOps

from generation_errors import TranscodeError

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# nextExtension token -> Pillow encoder
OUTPUT_FORMATS = {
    'jpg': 'JPEG',
    'jpeg': 'JPEG',
    'webp': 'WEBP',
    'png': 'PNG',
    'gif': 'GIF',
    'tif': 'TIFF',
    'tiff': 'TIFF',
    'bmp': 'BMP',
    'avif': 'AVIF',
}

# Encoders that cannot store an alpha channel or a palette as-is
RGB_ONLY_FORMATS = {'JPEG', 'BMP'}

LOSSY_FORMATS = {'JPEG', 'WEBP', 'AVIF'}


def pillow_format(extension: str) -> Optional[str]:
    return OUTPUT_FORMATS.get(extension.lower())


def _target_size(image: Image.Image, width: int, height: Optional[int]) -> tuple:
    if height is not None:
        return width, height
    # Keep aspect ratio when only the width is given
    scaled = round(image.height * width / image.width)
    return width, max(1, scaled)


def _prepare_mode(image: Image.Image, encoder: str) -> Image.Image:
    if image.mode == 'P':
        image = image.convert('RGBA' if 'transparency' in image.info else 'RGB')
    elif image.mode == '1':
        image = image.convert('L')

    if encoder in RGB_ONLY_FORMATS and image.mode not in ('RGB', 'L'):
        image = image.convert('RGB')
    return image


def resize_image(data: bytes, width: int, height: Optional[int], extension: str,
                 quality: int = 80, source_key: str = '', key: str = '') -> bytes:
    """
    Resize an encoded image and re-encode it.

    With only a width the aspect ratio is preserved. With both dimensions
    the image covers the box and is cropped around its centre.

    Args:
        data: Encoded source image
        width: Target width in pixels
        height: Target height in pixels, or None
        extension: Output format token (jpeg, webp, png, ...)
        quality: Encoder quality for lossy formats
        source_key: Source object key, for error messages
        key: Destination object key, for error messages

    Returns:
        Encoded image bytes

    Raises:
        TranscodeError: Unsupported format, undecodable input or encoder failure
    """
    encoder = pillow_format(extension)
    if encoder is None:
        raise TranscodeError(key, f'Unsupported output format "{extension}"', source_key=source_key)

    try:
        with Image.open(io.BytesIO(data)) as original:
            image = ImageOps.exif_transpose(original)
            image = _prepare_mode(image, encoder)
            size = _target_size(image, width, height)

            if height is None:
                resized = image.resize(size, Image.Resampling.LANCZOS)
            else:
                resized = ImageOps.fit(image, size, method=Image.Resampling.LANCZOS)

            buffer = io.BytesIO()
            options = {'quality': quality} if encoder in LOSSY_FORMATS else {}
            resized.save(buffer, format=encoder, **options)
    except Exception as e:
        raise TranscodeError(key, e, source_key=source_key) from e

    output = buffer.getvalue()
    logger.debug(f'Resized "{source_key}" to {size[0]}x{size[1]} {encoder} ({len(output)} bytes)')
    return output
