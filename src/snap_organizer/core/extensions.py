"""File extension tables and name parsing for project items."""

import re

IMAGE_EXTENSIONS = frozenset([
    "jpg", "jpeg", "png", "psd", "tif", "tiff", "gif", "bmp", "ai", "eps", "svg",
])

# CG/VFX formats, stills unless flagged as a sequence
SEQUENCE_CG_EXTENSIONS = frozenset([
    "exr", "dpx", "cin", "hdr",
])

AUDIO_EXTENSIONS = frozenset([
    "mp3", "wav", "aac", "m4a", "aif", "aiff", "ogg", "flac",
])

# "[####]" frame placeholders and ".0001." frame numbers
_FRAME_PLACEHOLDER = re.compile(r"\[#+\]")
_FRAME_NUMBER = re.compile(r"\.\d{4,}\.")


def normalize_extension(value: str) -> str:
    """Lower-case an extension and drop surrounding whitespace and a leading dot."""
    value = (value or "").strip().lower()
    if value.startswith("."):
        value = value[1:]
    return value


def parse_extension(name: str) -> str:
    """Get the lower-cased extension of an item name.

    Frame sequence tokens are removed first, so ``shot.[####].exr`` and
    ``shot.0001.exr`` both yield ``exr``.

    Returns:
        The extension without a dot, or an empty string if the name has none
    """
    clean = _FRAME_PLACEHOLDER.sub("0000", name or "")
    clean = _FRAME_NUMBER.sub(".", clean, count=1)
    parts = clean.split(".")
    if len(parts) > 1:
        return parts[-1].lower()
    return ""


def sequence_type_name(extension: str) -> str:
    """Leaf folder name for a frame sequence, e.g. ``EXR Sequence``."""
    return f"{normalize_extension(extension).upper()} Sequence"
