"""Local asset discovery for a model's photo folder."""

from pathlib import Path

from photo_delivery.domain.errors import NotFoundError

IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".gif"})


def discover_assets(images_root: Path, model_id: str) -> list[Path]:
    """Return the image files in ``images_root/model_id`` sorted by file name."""
    folder = images_root / model_id
    if not folder.is_dir():
        raise NotFoundError(f"Model folder does not exist: {folder}")
    assets = sorted(
        path
        for path in folder.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    )
    if not assets:
        raise NotFoundError(f"No images found in {folder}")
    return assets


def detect_mime_type(content: bytes) -> str:
    """Infer an image MIME type from file signatures."""
    if content.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if content.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if content[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
