import base64
from pathlib import PurePath

from shot2table.errors import InvalidImageError

ALLOWED_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "bmp", "webp")
MAX_IMAGE_BYTES = 20 * 1024 * 1024


def looks_like_image(content: bytes) -> bool:
    if content.startswith(b"\xff\xd8\xff"):  # JPEG
        return True
    if content.startswith(b"\x89PNG\r\n\x1a\n"):  # PNG
        return True
    if content[:6] in {b"GIF87a", b"GIF89a"}:
        return True
    if content.startswith(b"BM") and len(content) >= 14:  # BMP
        return True
    if len(content) >= 12 and content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return True
    return False


def file_extension(name: str) -> str:
    return PurePath(name).suffix.lstrip(".").lower()


def read_image_upload(name: str, content: bytes) -> bytes:
    """Validate one uploaded screenshot and hand back its bytes."""
    extension = file_extension(name)
    if extension not in ALLOWED_EXTENSIONS:
        raise InvalidImageError(
            f"Unsupported file type: .{extension or '?'} (allowed: {', '.join(ALLOWED_EXTENSIONS)})"
        )
    if not content:
        raise InvalidImageError("Image is empty.")
    if len(content) > MAX_IMAGE_BYTES:
        raise InvalidImageError(f"Image exceeds max size of {MAX_IMAGE_BYTES} bytes.")
    if not looks_like_image(content):
        raise InvalidImageError("Uploaded file does not look like a valid supported image.")
    return content


def encode_image(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")
