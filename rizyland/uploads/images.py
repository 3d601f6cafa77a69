"""
Image handling for cover and product uploads.

Uploaded files are staged in a temporary directory, converted to WebP by
ImageMagick's ``convert`` running as a subprocess, and written to the
public directory. The staged file is removed on every exit path.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional, Tuple, Union

from fastapi import UploadFile

logger = logging.getLogger(__name__)

# (width, height) of converted images, centre-cropped to fill
COVER_SIZE: Tuple[int, int] = (400, 520)
PRODUCT_SIZE: Tuple[int, int] = (300, 300)

CHUNK_SIZE = 64 * 1024


class ImageConversionError(RuntimeError):
    """The converter could not be started or exited with a non-zero code."""

    def __init__(self, message: str, returncode: Optional[int] = None) -> None:
        self.returncode = returncode
        super().__init__(message)


class UploadTooLargeError(ValueError):
    """The uploaded file exceeds the configured size limit."""


def build_convert_args(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    size: Tuple[int, int],
    quality: int = 80,
) -> list:
    width, height = size
    geometry = f"{width}x{height}"
    return [
        str(input_path),
        "-quality", str(quality),
        "-resize", f"{geometry}^",
        "-gravity", "center",
        "-extent", geometry,
        str(output_path),
    ]


async def convert_to_webp(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    size: Tuple[int, int],
    quality: int = 80,
    binary: str = "convert",
) -> None:
    """Resize and crop ``input_path`` to ``size`` and write it to ``output_path``.

    Parameters
    ----------
    input_path : str or Path
        Staged upload.
    output_path : str or Path
        Destination file; the extension selects the output format.
    size : Tuple[int, int]
        Target width and height in pixels.
    quality : int
        Encoder quality passed to ImageMagick.
    binary : str
        Converter executable.

    Raises
    ------
    ImageConversionError
        If the process cannot be spawned or exits with a non-zero code.
        The conversion is attempted once.
    """
    args = build_convert_args(input_path, output_path, size, quality)
    try:
        process = await asyncio.create_subprocess_exec(
            binary,
            *args,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise ImageConversionError(f"Could not start {binary}: {exc}") from exc

    _, stderr = await process.communicate()
    if process.returncode != 0:
        logger.warning(
            "%s exited with code %s: %s",
            binary,
            process.returncode,
            (stderr or b"").decode("utf-8", errors="ignore").strip(),
        )
        raise ImageConversionError(
            f"ImageMagick conversion failed with code {process.returncode}",
            returncode=process.returncode,
        )


@asynccontextmanager
async def staged_upload(
    upload: UploadFile, temp_dir: Union[str, Path], max_bytes: int
) -> AsyncIterator[Path]:
    """Copy ``upload`` into ``temp_dir`` and yield the staged path.

    The staged file is deleted when the block exits, whether it finished,
    raised, or the file was rejected for exceeding ``max_bytes``.
    """
    directory = Path(temp_dir)
    directory.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(dir=directory, prefix="upload-")
    path = Path(name)
    try:
        written = 0
        with os.fdopen(fd, "wb") as out:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise UploadTooLargeError(f"File exceeds {max_bytes} bytes")
                out.write(chunk)
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug("Removed staged upload %s", path)
