"""Wallpaper discovery, thumbnail caching and the default colour palette."""

from __future__ import annotations

import asyncio
import hashlib
import io
import logging
import math
import os
from collections import deque
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path

import platformdirs
from PIL import Image

from settings_pages.corners import round_corners

log = logging.getLogger(__name__)

MAX_WALLPAPERS = 100
DISPLAY_THUMBNAIL_SIZE = (300, 169)
SELECTION_THUMBNAIL_SIZE = (158, 105)
SELECTION_CORNER_RADIUS = (8, 8, 8, 8)
LOAD_CONCURRENCY = 4

RGB = tuple[float, float, float]


@dataclass(frozen=True)
class SingleColor:
    """A solid background colour."""

    color: RGB


@dataclass(frozen=True)
class Gradient:
    """A background gradient through several colours."""

    colors: tuple[RGB, ...]
    radius: float


DEFAULT_COLORS: tuple[SingleColor | Gradient, ...] = (
    SingleColor((0.580, 0.922, 0.922)),
    SingleColor((0.000, 0.286, 0.427)),
    SingleColor((1.000, 0.678, 0.000)),
    SingleColor((0.282, 0.725, 0.78)),
    SingleColor((0.333, 0.278, 0.259)),
    SingleColor((0.969, 0.878, 0.384)),
    SingleColor((0.063, 0.165, 0.298)),
    SingleColor((1.000, 0.843, 0.631)),
    SingleColor((0.976, 0.227, 0.514)),
    SingleColor((1.000, 0.612, 0.867)),
    SingleColor((0.812, 0.490, 1.000)),
    SingleColor((0.835, 0.549, 1.000)),
    SingleColor((0.243, 0.533, 1.000)),
    SingleColor((0.584, 0.769, 0.988)),
    Gradient(((1.000, 0.678, 0.000), (0.282, 0.725, 0.78)), 270.0),
    Gradient(((1.000, 0.843, 0.631), (0.58, 0.922, 0.922)), 270.0),
    Gradient(((1.000, 0.612, 0.867), (0.976, 0.29, 0.514)), 270.0),
    Gradient(((0.584, 0.769, 0.988), (0.063, 0.165, 0.298)), 270.0),
)


@dataclass
class CachedThumbnail:
    """A thumbnail that was found in the cache."""

    image: Image.Image


@dataclass
class GenerateThumbnail:
    """A source image whose thumbnail must be generated, and where to store it."""

    path: Path | None
    image: Image.Image


_DEFAULT_CACHE = object()

_HEIF_BRANDS = {b"heic", b"heix", b"hevc", b"hevx", b"mif1", b"msf1", b"avif", b"avis"}


def _is_image(path: Path) -> bool:
    """Recognise common image formats by their leading bytes."""
    try:
        with path.open("rb") as handle:
            head = handle.read(32)
    except OSError:
        return False
    if head.startswith(
        (
            b"\xff\xd8\xff",
            b"\x89PNG\r\n\x1a\n",
            b"GIF87a",
            b"GIF89a",
            b"BM",
            b"II*\x00",
            b"MM\x00*",
            b"II\xbc",
            b"\x00\x00\x01\x00",
            b"8BPS",
            b"\xff\x0a",
            b"\x00\x00\x00\x0cJXL \r\n\x87\n",
            b"\x00\x00\x00\x0cjP  \r\n\x87\n",
        )
    ):
        return True
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return True
    return head[4:8] == b"ftyp" and head[8:12] in _HEIF_BRANDS


def cache_dir() -> Path | None:
    """Return the directory where wallpaper thumbnails are stored, creating it."""
    try:
        base = Path(platformdirs.user_cache_path())
    except Exception:  # platformdirs may fail without a home directory
        return None
    cache = base / "cosmic-settings" / "wallpapers"
    try:
        cache.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    return cache


def thumbnail_name(path: str | os.PathLike[str], ctime: int) -> str:
    """Return the cache file name for an image path and its creation time."""
    digest = hashlib.blake2b(digest_size=8)
    digest.update(os.fsencode(os.fspath(path)))
    digest.update(b"\0")
    digest.update(str(ctime).encode("ascii"))
    return f"{int.from_bytes(digest.digest(), 'big'):x}.png"


def find_wallpapers(path: str | os.PathLike[str], recurse: bool) -> list[Path]:
    """Find image files under ``path``, sorted, stopping each directory at the limit."""
    pending = [Path(path)]
    wallpapers: set[Path] = set()

    while pending:
        directory = pending.pop()
        try:
            entries = list(os.scandir(directory))
        except OSError:
            continue
        for entry in entries:
            entry_path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError:
                continue
            if recurse and is_dir:
                pending.append(entry_path)
            elif is_file and _is_image(entry_path):
                wallpapers.add(entry_path)
                if len(wallpapers) >= MAX_WALLPAPERS:
                    break

    return sorted(wallpapers)


def _created_ns(path: Path) -> int:
    st = path.stat()
    birth = getattr(st, "st_birthtime", None)
    if birth is not None:
        return int(birth * 1_000_000_000)
    return st.st_ctime_ns


def open_image(path: str | os.PathLike[str]) -> Image.Image | None:
    """Decode an image file, logging and returning None on failure."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as why:
        log.error("error opening image %s: %s", path, why)
        return None
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Exception as why:  # Pillow raises many kinds of decode errors
        log.error("image decode failed for %s: %s", path, why)
        return None
    return image


def load_thumbnail(
    path: str | os.PathLike[str], cache_dir: str | os.PathLike[str] | None
) -> CachedThumbnail | GenerateThumbnail | None:
    """Load a cached thumbnail, or describe how to generate one."""
    path = Path(path)
    if cache_dir is not None:
        try:
            ctime = _created_ns(path)
        except OSError:
            ctime = None
        if ctime is not None:
            thumbnail_path = Path(cache_dir) / thumbnail_name(path, ctime)
            if thumbnail_path.exists():
                cached = open_image(thumbnail_path)
                if cached is not None:
                    return CachedThumbnail(cached)
                try:
                    thumbnail_path.unlink()
                except OSError:
                    pass
            image = open_image(path)
            if image is None:
                return None
            return GenerateThumbnail(thumbnail_path, image)

    image = open_image(path)
    if image is None:
        return None
    return GenerateThumbnail(None, image)


def _fit_within(size: tuple[int, int], bounds: tuple[int, int]) -> tuple[int, int]:
    width, height = size
    ratio = min(bounds[0] / width, bounds[1] / height)
    return (
        max(math.floor(width * ratio + 0.5), 1),
        max(math.floor(height * ratio + 0.5), 1),
    )


def _save_thumbnail(image: Image.Image, path: Path) -> None:
    try:
        image.save(path, format="PNG")
    except (OSError, ValueError) as why:
        log.error("failed to save image thumbnail %s: %s", path, why)
        try:
            path.unlink()
        except OSError:
            pass


def load_image_with_thumbnail(
    path: str | os.PathLike[str], cache=_DEFAULT_CACHE
) -> tuple[Path, Image.Image, Image.Image] | None:
    """Return the path with its display thumbnail and rounded selection thumbnail.

    ``cache`` is the thumbnail cache directory; by default the user cache is
    used, and ``None`` disables caching.
    """
    path = Path(path)
    directory = cache_dir() if cache is _DEFAULT_CACHE else cache
    operation = load_thumbnail(path, directory)
    if operation is None:
        return None

    if isinstance(operation, CachedThumbnail):
        display = operation.image.convert("RGBA")
    else:
        source = operation.image
        display = source.resize(
            _fit_within(source.size, DISPLAY_THUMBNAIL_SIZE), Image.Resampling.BOX
        ).convert("RGBA")
        if operation.path is not None:
            _save_thumbnail(display.copy(), operation.path)

    selection = display.resize(SELECTION_THUMBNAIL_SIZE, Image.Resampling.LANCZOS)
    round_corners(selection, SELECTION_CORNER_RADIUS)
    return path, display, selection


async def load_each_from_path(
    path: str | os.PathLike[str], recurse: bool
) -> AsyncIterator[tuple[Path, Image.Image, Image.Image]]:
    """Yield loaded wallpapers in path order, decoding a few at a time."""
    wallpapers = await asyncio.to_thread(find_wallpapers, path, recurse)
    remaining = iter(wallpapers)
    pending: deque[asyncio.Future] = deque()

    def schedule() -> None:
        next_path = next(remaining, None)
        if next_path is not None:
            pending.append(
                asyncio.ensure_future(
                    asyncio.to_thread(load_image_with_thumbnail, next_path)
                )
            )

    for _ in range(LOAD_CONCURRENCY):
        schedule()

    try:
        while pending:
            task = pending.popleft()
            schedule()
            try:
                result = await task
            except Exception as why:
                log.error("failed to load wallpaper: %s", why)
                continue
            if result is not None:
                yield result
    finally:
        for task in pending:
            task.cancel()