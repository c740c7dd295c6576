import io
import logging

from PIL import Image, UnidentifiedImageError

THUMBNAIL_SIZE = (160, 160)

logger = logging.getLogger(__name__)


class PreviewHandle:
    """
    Owns the preview resource of one uploaded image.
    release() closes it; calling it again does nothing.
    """
    def __init__(self, image=None):
        self.image = image
        self.released = False

    def release(self):
        if self.released:
            return
        if self.image is not None and hasattr(self.image, "close"):
            self.image.close()
        self.image = None
        self.released = True


def make_thumbnail_preview(data: bytes) -> PreviewHandle:
    """Decodes the upload with Pillow and shrinks it to a thumbnail."""
    try:
        image = Image.open(io.BytesIO(data))
        image.thumbnail(THUMBNAIL_SIZE)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        # The bytes still go to the model; only the thumbnail is missing.
        logger.warning(f"Could not build preview: {e}")
        return PreviewHandle()
    return PreviewHandle(image)


def preview_png_bytes(handle: PreviewHandle) -> bytes | None:
    """PNG bytes of the thumbnail, for st.image. None when there is nothing to show."""
    if handle.image is None:
        return None
    image = handle.image
    if image.mode not in ("RGB", "RGBA", "L", "P"):
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
