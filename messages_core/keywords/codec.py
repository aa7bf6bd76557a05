"""
Line-delimited text codec for blocked keyword files.

Format: one keyword per line, each line terminated by ``\\n``, no header, no
escaping and no comments. Reading is deliberately permissive: blank lines are
skipped and undecodable bytes are replaced, so a damaged file still imports
whatever it can.
"""

import codecs
import io
import logging
import os
import re
from typing import IO, Iterable, Union

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r\n|\r|\n")
_BOM = "\ufeff"

Decodable = Union[bytes, bytearray, str, IO[bytes], IO[str]]


class KeywordCodec:
    """Encode and decode keyword sequences in the plain text export format."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def encode(self, keywords: Iterable[str]) -> bytes:
        """
        Serialize keywords, one per line, in the given order.

        Args:
            keywords: Keywords to write

        Returns:
            Encoded file content; empty input gives ``b""``
        """
        return "".join(f"{keyword}\n" for keyword in keywords).encode(self.encoding)

    def decode(self, data: Decodable) -> list[str]:
        """
        Parse keywords from file content or an open stream.

        Lines that are empty after trimming are skipped. Everything else is
        returned unchanged apart from the line terminator.

        Args:
            data: Raw bytes, text, or a binary/text stream positioned at the start

        Returns:
            Keywords in file order (possibly empty)
        """
        if hasattr(data, "read"):
            data = data.read()

        if isinstance(data, (bytes, bytearray)):
            text = bytes(data).decode(self.encoding, errors="replace")
        else:
            text = data

        if text.startswith(_BOM):
            text = text[len(_BOM):]

        keywords = [line for line in _LINE_SPLIT.split(text) if line.strip()]
        logger.debug("Decoded %d keyword line(s)", len(keywords))
        return keywords

    def write(self, keywords: Iterable[str], stream: IO) -> None:
        """
        Write keywords to a stream.

        The whole payload is encoded before anything touches the stream, and
        the bytes always use the codec encoding. Text streams are written
        through their underlying binary buffer; a text stream without one is
        accepted only when its encoding matches. Low-level I/O errors
        propagate to the caller.

        Raises:
            ValueError: If the stream is closed or cannot carry the encoding
        """
        payload = self.encode(keywords)
        if _is_text_stream(stream):
            buffer = getattr(stream, "buffer", None)
            if buffer is not None:
                # flush pending text so it stays ahead of the raw bytes
                stream.flush()
                _write_all(buffer, payload)
                buffer.flush()
                return
            stream_encoding = getattr(stream, "encoding", None)
            if stream_encoding is not None and not _same_encoding(stream_encoding, self.encoding):
                raise ValueError(
                    f"Text stream encoding {stream_encoding!r} does not match {self.encoding!r}"
                )
            stream.write(payload.decode(self.encoding))
        else:
            _write_all(stream, payload)
        stream.flush()

    def read(self, path: Union[str, os.PathLike]) -> list[str]:
        """Read and decode a keyword file. ``OSError`` propagates."""
        with open(path, "rb") as handle:
            return self.decode(handle)


def _is_text_stream(stream: IO) -> bool:
    return isinstance(stream, io.TextIOBase)


def _same_encoding(left: str, right: str) -> bool:
    return codecs.lookup(left).name == codecs.lookup(right).name


def _write_all(stream: IO[bytes], payload: bytes) -> None:
    """Write the payload in full; raw streams may accept only part of it."""
    view = memoryview(payload)
    while view:
        written = stream.write(view)
        if not written:
            raise OSError(f"Stream accepted no bytes ({len(view)} pending)")
        view = view[written:]
