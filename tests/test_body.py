"""
Unit tests for rewindable request bodies.
"""

import io

import pytest

from qbox_auth import BodyReadError, RewindableBody, rewound


class TextStream(io.StringIO):
    pass


class TestRewindableBody:
    """Test non-destructive body reads."""

    def test_bytes_body(self):
        """Test buffered bytes are returned as-is."""
        source = RewindableBody(b"payload")

        assert source.read_all() == b"payload"
        assert source.read_all() == b"payload"
        source.restore()  # Should not raise

    def test_bytearray_body(self):
        """Test bytearray bodies are returned as bytes."""
        assert RewindableBody(bytearray(b"abc")).read_all() == b"abc"

    def test_str_body(self):
        """Test text bodies are UTF-8 encoded."""
        assert RewindableBody("a=é").read_all() == "a=é".encode('utf-8')

    def test_stream_restore(self):
        """Test a stream is put back at its starting position."""
        stream = io.BytesIO(b"headerbody")
        stream.seek(6)
        source = RewindableBody(stream)

        assert source.read_all() == b"body"
        assert stream.tell() == 10

        source.restore()
        assert stream.tell() == 6

    def test_unseekable_stream(self):
        """Test streams reporting seekable() False are refused."""
        class Unseekable(io.BytesIO):
            def seekable(self):
                return False

        with pytest.raises(BodyReadError):
            RewindableBody(Unseekable(b"data"))

    def test_closed_stream(self):
        """Test closed streams are refused."""
        stream = io.BytesIO(b"data")
        stream.close()

        with pytest.raises(BodyReadError):
            RewindableBody(stream)

    def test_object_without_tell(self):
        """Test iterables without a position are refused."""
        with pytest.raises(BodyReadError):
            RewindableBody(iter([b"a", b"b"]))

    def test_text_stream(self):
        """Test streams yielding text are refused."""
        source = RewindableBody(TextStream("text"))

        with pytest.raises(BodyReadError):
            source.read_all()


class TestRewound:
    """Test scoped body acquisition."""

    def test_restores_on_success(self):
        """Test the stream is rewound after a normal exit."""
        stream = io.BytesIO(b"data")

        with rewound(stream) as body:
            assert body.read_all() == b"data"

        assert stream.tell() == 0
        assert stream.read() == b"data"

    def test_restores_on_error(self):
        """Test the stream is rewound when the block raises."""
        stream = io.BytesIO(b"data")

        with pytest.raises(RuntimeError):
            with rewound(stream) as body:
                body.read_all()
                raise RuntimeError("signing aborted")

        assert stream.tell() == 0

    def test_restores_after_failed_read(self):
        """Test the stream is rewound after a read error."""
        class Failing(io.BytesIO):
            def read(self, *args):
                super().read(3)
                raise OSError("broken pipe")

        stream = Failing(b"0123456789")
        stream.seek(2)

        with pytest.raises(BodyReadError):
            with rewound(stream) as body:
                body.read_all()

        assert stream.tell() == 2

    def test_restore_failure(self):
        """Test a failed rewind is reported."""
        class NoRewind(io.BytesIO):
            def seek(self, *args):
                raise OSError("cannot seek")

        with pytest.raises(BodyReadError):
            with rewound(NoRewind(b"data")) as body:
                body.read_all()
