"""Turn fetched bytes into CSV text: gzip first, plain UTF-8 second."""

from __future__ import annotations

import codecs
import logging
import zlib

from .model import DecodedText, DecodeError

logger = logging.getLogger(__name__)

# auto-detect gzip or zlib framing, like a browser-side inflate
_GZIP_OR_ZLIB = zlib.MAX_WBITS | 32
_GZIP_MAGIC = b"\x1f\x8b"


def _utf8(data: bytes, *, final: bool, errors: str = "strict") -> str:
    # final=False keeps a multi-byte sequence split at the end out of the text
    return codecs.getincrementaldecoder("utf-8")(errors).decode(data, final=final)


def _inflate_members(data: bytes) -> tuple[bytes, bool]:
    """Inflate every member present. Returns (payload, reached end of stream)."""
    out = []
    while data:
        d = zlib.decompressobj(_GZIP_OR_ZLIB)
        out.append(d.decompress(data))
        out.append(d.flush())
        if not d.eof:
            return b"".join(out), False
        data = d.unused_data.lstrip(b"\x00")
        if not data.startswith(_GZIP_MAGIC):
            # trailing bytes after the last member are not data
            break
    return b"".join(out), True


def _inflate(data: bytes, allow_partial: bool) -> DecodedText:
    inflated, complete = _inflate_members(data)
    if complete:
        # a stray invalid byte in a good stream shows as U+FFFD, like a browser decoder
        return DecodedText(_utf8(inflated, final=True, errors="replace"), used_compression=True)
    if not allow_partial:
        raise EOFError("Compressed file ended before the end-of-stream marker was reached")

    text = _utf8(inflated, final=False, errors="replace")
    # last line of a cut-off stream is a fragment
    cut = text.rfind("\n")
    if cut != -1:
        text = text[:cut + 1]
    return DecodedText(text, used_compression=True, is_partial=True)


def _looks_like_csv(text: str) -> bool:
    return "," in text or "\n" in text


def decode(data: bytes, *, allow_partial: bool = False) -> DecodedText:
    """Decode raw bytes as gzip-compressed text, falling back to plain UTF-8.

    Compression is tried first because it is the common case for the
    terminology bucket, and a damaged gzip stream cannot be told apart
    from a plain file without attempting to inflate it.

    With ``allow_partial`` a gzip stream that stops early (a ranged fetch
    window) is accepted: whatever inflated is kept, cut back to the last
    complete line.
    """
    inflate_error = None
    try:
        decoded = _inflate(data, allow_partial)
        if decoded.text.strip():
            logger.debug("inflated %d bytes to %d chars (partial=%s)",
                         len(data), len(decoded.text), decoded.is_partial)
            return decoded
        logger.debug("gzip payload inflated to blank text, trying plain text")
    except (EOFError, zlib.error) as e:
        inflate_error = e
        logger.debug("decompression failed (%s), trying plain text", e)

    try:
        text = _utf8(data, final=not allow_partial)
    except UnicodeDecodeError as e:
        if inflate_error is not None and data.startswith(_GZIP_MAGIC):
            raise DecodeError(f"Unable to decompress file: {inflate_error}") from e
        raise DecodeError(f"File doesn't appear to be a valid CSV or compressed CSV: {e}") from e

    if not text.strip():
        raise DecodeError("CSV file is empty")
    if not _looks_like_csv(text):
        raise DecodeError("File doesn't appear to be a valid CSV or compressed CSV")
    return DecodedText(text, used_compression=False)
