import base64
import io
import os

from PIL import Image, UnidentifiedImageError

from config import DEFAULT_MIME_TYPE
from errors import EncodingError

# Map file extensions to the media types Gemini accepts
MEDIA_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.webp': 'image/webp',
    '.heic': 'image/heic',
    '.heif': 'image/heif',
}

# multi-frame phone and camera JPEGs are reported as MPO
SNIFFED_FORMATS = {
    'MPO': 'image/jpeg',
}


def read_image_bytes(image):
    """Read raw bytes from a path, a bytes object or a binary file object."""
    if isinstance(image, (bytes, bytearray)):
        return bytes(image)
    try:
        if hasattr(image, "read"):
            return image.read()
        with open(image, "rb") as image_file:
            return image_file.read()
    except (OSError, TypeError) as e:
        raise EncodingError(f"Could not read image: {e}") from e


def detect_mime_type(data, filename=None):
    """
    Work out the media type of an image.

    The image header is sniffed with Pillow first; when Pillow does not
    recognise it, or finds a format Gemini does not take, the file extension
    is used, then the JPEG default.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime_type = SNIFFED_FORMATS.get(img.format, Image.MIME.get(img.format))
        if mime_type in MEDIA_TYPES.values():
            return mime_type
    except (UnidentifiedImageError, OSError):
        pass

    if filename:
        _, ext = os.path.splitext(str(filename).lower())
        if ext in MEDIA_TYPES:
            return MEDIA_TYPES[ext]
    return DEFAULT_MIME_TYPE


def encode_image(image, mime_type=None):
    """
    Encode an image as base64 for inline upload.

    Args:
        image: path to the image, its raw bytes, or a binary file object
        mime_type (str): declared media type, detected when omitted

    Returns:
        tuple: (base64_string, mime_type)
    """
    data = read_image_bytes(image)
    if not mime_type:
        filename = getattr(image, "name", None) if hasattr(image, "read") else image
        if isinstance(filename, (bytes, bytearray)):
            filename = None
        mime_type = detect_mime_type(data, filename)
    return base64.b64encode(data).decode("utf-8"), mime_type
