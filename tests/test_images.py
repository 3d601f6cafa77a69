"""Tests for the ImageMagick wrapper and upload staging."""

import io
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import UploadFile

from rizyland.uploads.images import (
    ImageConversionError,
    UploadTooLargeError,
    build_convert_args,
    convert_to_webp,
    staged_upload,
)


def fake_process(returncode: int, stderr: bytes = b"") -> MagicMock:
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(b"", stderr))
    return process


def test_build_convert_args():
    assert build_convert_args("in.png", "out.webp", (400, 520), quality=80) == [
        "in.png",
        "-quality", "80",
        "-resize", "400x520^",
        "-gravity", "center",
        "-extent", "400x520",
        "out.webp",
    ]


@pytest.mark.asyncio
async def test_convert_success():
    spawn = AsyncMock(return_value=fake_process(0))
    with patch("rizyland.uploads.images.asyncio.create_subprocess_exec", new=spawn):
        await convert_to_webp("in.png", "out.webp", (300, 300), binary="magick-convert")

    args = spawn.call_args.args
    assert args[0] == "magick-convert"
    assert args[1] == "in.png"
    assert args[-1] == "out.webp"


@pytest.mark.asyncio
async def test_convert_non_zero_exit():
    spawn = AsyncMock(return_value=fake_process(1, b"convert: no decode delegate"))
    with patch("rizyland.uploads.images.asyncio.create_subprocess_exec", new=spawn):
        with pytest.raises(ImageConversionError) as excinfo:
            await convert_to_webp("in.png", "out.webp", (300, 300))

    assert excinfo.value.returncode == 1
    assert spawn.await_count == 1


@pytest.mark.asyncio
async def test_convert_missing_binary():
    spawn = AsyncMock(side_effect=FileNotFoundError("convert"))
    with patch("rizyland.uploads.images.asyncio.create_subprocess_exec", new=spawn):
        with pytest.raises(ImageConversionError) as excinfo:
            await convert_to_webp("in.png", "out.webp", (300, 300))

    assert excinfo.value.returncode is None


def make_upload(data: bytes) -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename="cover.png")


@pytest.mark.asyncio
async def test_staged_upload_removed_after_use(tmp_path):
    async with staged_upload(make_upload(b"image-bytes"), tmp_path, max_bytes=1024) as staged:
        assert Path(staged).read_bytes() == b"image-bytes"

    assert not staged.exists()
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_staged_upload_removed_on_error(tmp_path):
    with pytest.raises(ImageConversionError):
        async with staged_upload(make_upload(b"image-bytes"), tmp_path, max_bytes=1024):
            raise ImageConversionError("boom", 1)

    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_staged_upload_rejects_large_files(tmp_path):
    with pytest.raises(UploadTooLargeError):
        async with staged_upload(make_upload(b"x" * 100), tmp_path / "staging", max_bytes=10):
            pass

    assert list((tmp_path / "staging").iterdir()) == []
