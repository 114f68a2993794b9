#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdgrid/utils/encoding.py
"""Character encoding detection for Markdown documents read from disk.

Notes exported from other tools are not always UTF-8, so bytes are decoded
with chardet-based detection first and a short list of fallback encodings
after that.
"""

from __future__ import annotations

import logging
from typing import IO

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect the character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to inspect
    sample_size : int, default 8192
        Number of leading bytes handed to chardet
    confidence_threshold : float, default 0.7
        Minimum confidence for the detection to be trusted

    Returns
    -------
    str or None
        Detected encoding name, or None when chardet is unsure

    """
    if not data:
        return None

    import chardet

    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    if not encoding:
        logger.debug("chardet: no encoding detected")
        return None
    if confidence < confidence_threshold:
        logger.debug("chardet confidence %.2f for %s below threshold %.2f", confidence, encoding, confidence_threshold)
        return None

    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)
    return encoding


def decode_text(data: bytes, fallback_encodings: tuple[str, ...] = DEFAULT_FALLBACK_ENCODINGS) -> str:
    """Decode bytes to text: strict UTF-8 (BOM stripped) first, then the detected encoding, then the fallbacks.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : tuple of str
        Encodings tried in order when detection fails

    Returns
    -------
    str
        Decoded text

    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("Input is not UTF-8, detecting encoding")

    detected = detect_encoding(data)
    candidates = (detected, *fallback_encodings) if detected else fallback_encodings

    for encoding in candidates:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("Failed to decode with %s: %s", encoding, e)

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str]) -> str:
    """Read a binary or text stream and return its content as text.

    Raises
    ------
    TypeError
        If ``stream.read()`` returns something other than bytes or str

    """
    content = stream.read()
    if isinstance(content, bytes):
        return decode_text(content)
    if isinstance(content, str):
        return content
    raise TypeError(f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str.")
