"""
Loading, saving and displaying images by name.

An :class:`.ImageStore` resolves names relative to the configured image
directory. Writing never silently replaces a file: existing files are
handled according to the ``OVERWRITE`` setting.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import filetype
import PIL.Image

from .config import Settings
from .errors import ImageLoadError, ImageWriteError
from .image import Image

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[Path], bool]
"Callback deciding whether an existing file may be overwritten"


def ask_overwrite(path: Path) -> bool:
    """
    Asks on the console whether an existing file shall be overwritten.

    :param path: The existing file
    :return: True if the user confirmed
    """
    answer = input(f"File {path} exists, overwrite? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


class ImageStore:
    """
    Reads and writes images inside of a single image directory.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        confirm: ConfirmCallback | None = None,
    ):
        """
        :param settings: The settings to use. Read from the environment by default.
        :param confirm: Asked before overwriting a file if the overwrite
            policy is "ask". Prompts on the console by default.
        """
        self.settings = settings if settings is not None else Settings()
        self.confirm = confirm if confirm is not None else ask_overwrite

    @property
    def image_dir(self) -> Path:
        """
        The directory images are read from and written to
        """
        return Path(self.settings.IMAGE_DIR)

    def path_for(self, name: str) -> Path:
        """
        Returns the path of an image to read
        """
        return self.image_dir / name

    def output_path(self, name: str) -> Path:
        """
        Returns the path an image is written to. Any extension of the name is
        replaced by the configured output format.
        """
        if "." in name:
            name = name[: name.rindex(".")]
        return self.image_dir / f"{name}.{self.settings.OUTPUT_FORMAT.lstrip('.').lower()}"

    def read(self, name: str) -> Image:
        """
        Loads and decodes an image.

        :param name: The file name relative to the image directory
        :return: The image

        Raises an ImageLoadError if the file is missing or not an image.
        """
        path = self.path_for(name)
        if not path.is_file():
            raise ImageLoadError(f"Failed to load image '{name}', {path} does not exist")
        kind = filetype.guess(str(path))
        if kind is None or not kind.mime.startswith("image/"):
            raise ImageLoadError(f"Failed to load image '{name}', not an image file")
        try:
            with PIL.Image.open(path) as pil_image:
                image = Image.from_pil(pil_image)
        except (OSError, ValueError) as e:
            raise ImageLoadError(f"Failed to load image '{name}'") from e
        logger.debug(f"Loaded {path} ({image.width}x{image.height})")
        return image

    def write(self, name: str, image: Image) -> Path | None:
        """
        Encodes and writes an image.

        :param name: The name, any extension is replaced
        :param image: The image to store
        :return: The written path or None if an existing file was kept

        Raises an ImageWriteError if the image could not be written.
        """
        path = self.output_path(name)
        if path.exists() and not self._may_overwrite(path):
            logger.warning(f"Skipped writing {path}, the file already exists")
            return None
        pil_image = image.to_pil()
        if path.suffix.lower() in (".jpg", ".jpeg"):
            pil_image = pil_image.convert("RGB")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            pil_image.save(path)
        except (OSError, ValueError) as e:
            raise ImageWriteError(f"Failed to write {path}") from e
        logger.info(f"Wrote {path}")
        return path

    def _may_overwrite(self, path: Path) -> bool:
        policy = self.settings.OVERWRITE
        if policy == "always":
            return True
        if policy == "never":
            return False
        return self.confirm(path)


def show(image: Image, title: str | None = None) -> None:
    """
    Displays an image in the platform's default image viewer.

    :param image: The image
    :param title: Optional window title
    """
    image.to_pil().show(title=title)


__all__ = ["ImageStore", "ConfirmCallback", "ask_overwrite", "show"]
