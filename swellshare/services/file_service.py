from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from PIL import Image, ImageOps, UnidentifiedImageError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from swellshare.errors import AppError

BOARD_IMAGE_FORMATS = {"png": "PNG", "jpg": "JPEG", "jpeg": "JPEG", "webp": "WEBP"}
MAX_IMAGE_EDGE = 1600


class FileService:
    @staticmethod
    def _extension(filename):
        if "." not in filename:
            return None
        extension = filename.rsplit(".", 1)[1].lower()
        return extension if extension in BOARD_IMAGE_FORMATS else None

    @classmethod
    def save_board_image(cls, storage: FileStorage, upload_root: str, static_url_path: str = "/static"):
        """Store an uploaded board photo and return the URL it is served from.

        The bytes are checked with Pillow before anything touches the disk, then
        the photo is re-encoded: EXIF orientation applied, metadata dropped and
        the longest edge capped at MAX_IMAGE_EDGE.
        """
        if not storage or not storage.filename:
            return None

        extension = cls._extension(secure_filename(storage.filename))
        if not extension:
            raise AppError("Unsupported image format.", 400)

        try:
            Image.open(storage.stream).verify()
            storage.stream.seek(0)
            photo = ImageOps.exif_transpose(Image.open(storage.stream))
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            raise AppError("Invalid image file.", 400) from exc

        photo.thumbnail((MAX_IMAGE_EDGE, MAX_IMAGE_EDGE))
        image_format = BOARD_IMAGE_FORMATS[extension]
        if image_format == "JPEG" and photo.mode not in ("RGB", "L"):
            photo = photo.convert("RGB")

        dated_folder = datetime.now(timezone.utc).strftime("%Y/%m/%d")
        folder = Path(upload_root) / dated_folder
        folder.mkdir(parents=True, exist_ok=True)

        unique_filename = f"{uuid4().hex}.{extension}"
        photo.save(folder / unique_filename, format=image_format)

        return f"{static_url_path}/{Path(upload_root).name}/{dated_folder}/{unique_filename}"
