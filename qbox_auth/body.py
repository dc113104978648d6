"""
Non-destructive access to request bodies.

Signing may need the full request body, but the same body still has to be
sent over the network (or checked again) afterwards. ``rewound`` reads a
body and puts a stream back where it found it, whatever happens while the
body is in use.
"""

import contextlib
from typing import IO, Iterator, Optional, Union

from .exceptions import BodyReadError

Body = Union[bytes, bytearray, str, IO[bytes]]


class RewindableBody:
    """
    A request body that can be read in full and then restored.

    ``bytes`` and ``str`` bodies are already buffered. Streams must be
    seekable; their read position is recorded on construction and put
    back by ``restore``.
    """

    def __init__(self, body: Body):
        """
        Acquire a body for reading.

        Args:
            body: Buffered body or seekable binary stream

        Raises:
            BodyReadError: If the stream position cannot be recorded
        """
        self._body = body
        self._position: Optional[int] = None

        if not isinstance(body, (bytes, bytearray, str)):
            self._position = self._tell(body)

    @staticmethod
    def _tell(stream) -> int:
        try:
            seekable = getattr(stream, 'seekable', None)
            if callable(seekable) and not seekable():
                raise BodyReadError("request body stream is not seekable")
            return stream.tell()
        except (AttributeError, OSError, ValueError) as e:
            raise BodyReadError(f"cannot record request body position: {e}") from e

    def read_all(self) -> bytes:
        """
        Read the whole body from the recorded position.

        Returns:
            Body bytes (``str`` bodies are UTF-8 encoded)

        Raises:
            BodyReadError: If the stream cannot be read or yields text
        """
        if isinstance(self._body, str):
            return self._body.encode('utf-8')
        if isinstance(self._body, (bytes, bytearray)):
            return bytes(self._body)

        try:
            data = self._body.read()
        except (OSError, ValueError) as e:
            raise BodyReadError(f"failed to read request body: {e}") from e

        if not isinstance(data, (bytes, bytearray)):
            raise BodyReadError(
                f"request body stream must yield bytes, got {type(data).__name__}"
            )
        return bytes(data)

    def restore(self):
        """Seek a stream body back to its recorded position."""
        if self._position is None:
            return

        try:
            self._body.seek(self._position)
        except (OSError, ValueError) as e:
            raise BodyReadError(f"failed to rewind request body: {e}") from e


@contextlib.contextmanager
def rewound(body: Body) -> Iterator[RewindableBody]:
    """
    Scoped acquisition of a request body.

    The body is restored when the block exits, including when it raises.

    Raises:
        BodyReadError: If the body cannot be acquired, read or restored
    """
    source = RewindableBody(body)
    try:
        yield source
    finally:
        source.restore()
