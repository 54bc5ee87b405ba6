"""Display-safe text truncation."""

from typing import Union

MARKER = "..."

# Longest (historical) UTF-8 sequence.
MAX_BACKOFF = 6


def _truncate_bytes(data: bytes, max_length: int) -> str:
    """Cut raw bytes without ending inside a UTF-8 sequence."""
    if max_length <= 3 or len(data) <= max_length or len(data) <= 3:
        return data.decode("utf-8", errors="replace")

    chunk = bytearray(data[: max_length - 3])
    for _ in range(MAX_BACKOFF):
        if not chunk:
            break
        c = chunk[-1]
        if c & 0x80 == 0:
            break
        del chunk[-1]
        if c & 0xC0 == 0xC0:
            break
    return bytes(chunk).decode("utf-8", errors="replace") + MARKER


def truncate(text: Union[str, bytes], max_length: int) -> str:
    """Shorten ``text`` to at most ``max_length`` characters, ending in "...".

    Text is cut on code points, never inside a character. Text that already
    fits, and any ``max_length`` of 3 or less, leave it unchanged. Bytes that
    are not valid UTF-8 are cut on a byte boundary instead. Never raises.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError:
            return _truncate_bytes(bytes(text), max_length)
    elif not isinstance(text, str):
        text = "" if text is None else str(text)

    if max_length <= 3 or len(text) <= max_length or len(text) <= 3:
        return text
    return text[: max_length - 3] + MARKER
