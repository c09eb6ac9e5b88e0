"""
Line-oriented scanner shared by the textual subtitle readers.

Recognises ``\\n``, ``\\r\\n`` and bare ``\\r`` as line terminators and yields
line contents with the terminator stripped. Works on binary and text streams
alike; the yielded lines have the stream's type.
"""

from typing import IO, Iterator, Union

DEFAULT_CHUNK_SIZE = 4096

Line = Union[bytes, str]


class LineScanner:
    """
    Iterate over the lines of a stream read in fixed-size chunks.

    A terminator found at the very end of a chunk is never trusted on its own:
    a trailing ``\\r`` may be the first half of ``\\r\\n``, so more input is
    requested before the line is emitted. The final unterminated fragment is
    yielded at end of stream.

    Example:
        >>> list(LineScanner(io.BytesIO(b"a\\r\\nb\\rc\\nd")))
        [b'a', b'b', b'c', b'd']
    """

    def __init__(self, stream: IO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.stream = stream
        self.chunk_size = chunk_size

    def __iter__(self) -> Iterator[Line]:
        buffer = None
        at_eof = False
        while True:
            if not at_eof:
                chunk = self.stream.read(self.chunk_size)
                if not chunk:
                    at_eof = True
                elif buffer is None:
                    buffer = chunk
                else:
                    buffer += chunk

            if buffer is None:
                return

            cr, lf = ('\r', '\n') if isinstance(buffer, str) else (b'\r', b'\n')

            while buffer:
                token, advance = self._split(buffer, cr, lf, at_eof)
                if advance == 0:
                    break
                buffer = buffer[advance:]
                yield token

            if at_eof:
                return

    @staticmethod
    def _split(data: Line, cr: Line, lf: Line, at_eof: bool):
        """
        Find the next line in ``data``.

        Returns:
            Tuple of (line, advance); advance is 0 when more input is needed
        """
        lf_index = data.find(lf)
        cr_index = data.find(cr)
        candidates = [i for i in (lf_index, cr_index) if i >= 0]
        if not candidates:
            if at_eof:
                return data, len(data)
            return None, 0

        index = min(candidates)
        if data[index:index + 1] == lf:
            return data[:index], index + 1

        # Bare \r at the end of the buffer: wait to see whether \n follows
        if index + 1 == len(data) and not at_eof:
            return None, 0
        if data[index + 1:index + 2] == lf:
            return data[:index], index + 2
        return data[:index], index + 1


def scan_lines(stream: IO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Line]:
    """Shortcut for iterating a LineScanner."""
    return iter(LineScanner(stream, chunk_size))
