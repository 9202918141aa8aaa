"""
Media helpers for drop and paste: URL and image-extension predicates and
file decoding to data URLs.
"""

from __future__ import annotations
import asyncio
import base64
from urllib.parse import urlsplit

from .events import FileBlob


IMAGE_EXTENSIONS = frozenset([
    "3dv", "ai", "amf", "art", "ase", "awg", "blp", "bmp", "bw", "cd5", "cdr",
    "cgm", "cit", "cmx", "cpt", "cr2", "cur", "cut", "dds", "dib", "djvu", "dxf",
    "e2d", "ecw", "egt", "emf", "eps", "exif", "fs", "gbr", "gif", "gpl", "grf",
    "hdp", "heic", "heif", "icns", "ico", "iff", "int", "inta", "jfif", "jng",
    "jp2", "jpeg", "jpg", "jps", "jxr", "lbm", "liff", "max", "miff", "mng",
    "msp", "nitf", "nrrd", "odg", "ota", "pam", "pbm", "pc1", "pc2", "pc3",
    "pcf", "pct", "pcx", "pdd", "pdn", "pgf", "pgm", "pi1", "pi2", "pi3", "pict",
    "png", "pnm", "pns", "ppm", "psb", "psd", "psp", "px", "pxm", "pxr", "qfx",
    "ras", "raw", "rgb", "rgba", "rle", "sct", "sgi", "sid", "stl", "sun", "svg",
    "sxd", "tga", "tif", "tiff", "v2d", "vnd", "vrml", "vtf", "wdp", "webp",
    "wmf", "x3d", "xar", "xbm", "xcf", "xpm",
])


def is_url(text: str) -> bool:
    """
    True for absolute URLs ("https://host/path") and protocol-relative ones
    ("//host/path"). Anything containing whitespace is not a URL.
    """
    if not text or any(c.isspace() for c in text):
        return False
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.netloc:
        return False
    return bool(parts.scheme) or text.startswith("//")


def is_image(url: str) -> bool:
    """True if the URL path ends with a known image extension."""
    path = urlsplit(url).path if is_url(url) else url
    _, dot, extension = path.rpartition(".")
    return bool(dot) and extension.lower() in IMAGE_EXTENSIONS


def is_image_url(text: str) -> bool:
    return is_url(text) and is_image(text)


def _encode(blob: FileBlob) -> str:
    payload = base64.b64encode(blob.data).decode("ascii")
    return f"data:{blob.mime_type};base64,{payload}"


async def file_to_data_url(blob: FileBlob) -> str:
    """Encode a file blob as a data URL, off the event loop."""
    return await asyncio.to_thread(_encode, blob)
