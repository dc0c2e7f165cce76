import logging
import struct

from chunkreader import exceptions as exc
from chunkreader import models
from chunkreader.valuetypes import BIG_ENDIAN, LITTLE_ENDIAN, ValueType
from chunkreader.valuetypes import layout_format


logger = logging.getLogger(__name__)


DISCARD_BLOCK_SIZE = 4 * 2**10  # 4 KiB max requested per discard pull


class ChunkReader(object):
    """
    Bounded reader over the payload of a single chunk.

    The source is shared with the container parser, which reads the
    chunk header and hands the rest of the stream to this reader. The
    reader never requests bytes beyond the declared size, and
    :meth:`finalize` discards whatever the caller left unread so the
    source ends up at the start of whatever follows the payload.

    Fixed-width reads (:meth:`read_le`, :meth:`read_be`,
    :meth:`read_byte`) only advance :attr:`position` when the whole
    value was obtained. Raw reads and skips advance by whatever the
    source actually delivered.

    :ivar tag: The 4 byte chunk tag
    :type tag: bytes
    """
    def __init__(self, tag, size, source):
        """
        :param tag: The chunk tag, exactly 4 bytes
        :param size: Declared number of payload bytes
        :param source:
            Object with a ``read(n)`` method, shared with the caller.
            ``None`` makes an unavailable reader.
        """
        models.validate_tag(tag)
        if size < 0:
            raise ValueError(
                "Chunk size must not be negative, got {size}".format(
                    size=size,
                )
            )
        self.tag = tag
        self._size = size
        self._source = source
        self._position = 0
        self.finalized = False

    def __repr__(self):
        return '{name}(tag={tag!r}, size={size}, position={position})'.format(
            name=self.__class__.__name__,
            tag=self.tag,
            size=self._size,
            position=self._position,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.finalize()

    @property
    def size(self):
        return self._size

    @property
    def position(self):
        """The number of payload bytes consumed so far."""
        return self._position

    @property
    def remaining(self):
        return max(0, self._size - self._position)

    def is_exhausted(self):
        """
        Return True if no payload bytes may be read, either because
        all of them were consumed or because there is no source.
        """
        if self._source is None:
            return True
        return self._size <= self._position

    def readinto(self, buffer):
        """
        Fill as much of ``buffer`` as one pull from the source allows,
        truncated at the end of the chunk, and return the number of
        bytes written. Return 0 once the chunk is exhausted.
        """
        self._check_source()
        if self.is_exhausted():
            return 0
        view = memoryview(buffer).cast('B')
        if view.readonly:
            raise TypeError("readinto() needs a writable buffer")
        data = self._pull(min(len(view), self.remaining))
        view[:len(data)] = data
        return len(data)

    def read(self, n=-1):
        """
        Return up to ``n`` payload bytes (up to the rest of the chunk if
        ``n`` is negative) from a single pull. Return ``b''`` once the
        chunk is exhausted.
        """
        self._check_source()
        if self.is_exhausted():
            return b''
        if n < 0 or n > self.remaining:
            n = self.remaining
        return self._pull(n)

    def read_le(self, layout):
        """
        Read and decode a little endian value.

        :param layout:
            A :class:`ValueType` member, or ``struct`` format codes
            without a byte order prefix for a composite record
        :return: The value, or a tuple of values for composite layouts
        """
        return self._read_value(LITTLE_ENDIAN, layout)

    def read_be(self, layout):
        """
        Read and decode a big endian value. See :meth:`read_le`.
        """
        return self._read_value(BIG_ENDIAN, layout)

    def read_byte(self):
        if self.is_exhausted():
            raise exc.EndOfData(self._end_of_data_message())
        return self.read_le(ValueType.uint8)

    def skip(self, n):
        """
        Discard the next ``n`` payload bytes. Negative and zero counts
        do nothing.

        Raise :exc:`exceptions.ShortSource` if ``n`` is beyond the end
        of the chunk, or if the source ends before ``n`` bytes were
        discarded; in the latter case :attr:`position` still reflects
        the bytes that were discarded.
        """
        if n <= 0:
            return
        self._check_source()
        if n > self.remaining:
            fmt = (
                "Cannot skip {n} bytes, only {remaining} left in chunk "
                "{tag!r} at position {position}"
            )
            raise exc.ShortSource(fmt.format(
                n=n,
                remaining=self.remaining,
                tag=self.tag,
                position=self._position,
            ))
        left = n
        while left > 0:
            data = self._pull(min(DISCARD_BLOCK_SIZE, left))
            if not data:
                fmt = (
                    "Source ended after discarding {done} of {n} bytes "
                    "in chunk {tag!r}"
                )
                raise exc.ShortSource(fmt.format(
                    done=n - left,
                    n=n,
                    tag=self.tag,
                ))
            left -= len(data)

    def finalize(self):
        """
        Discard any unread payload so the source is positioned at the
        end of this chunk. Must be called before the next chunk header
        is read from the same source; calling it again is a no-op.
        """
        if not self.is_exhausted():
            logger.debug(
                "Discarding %d unread bytes of chunk %r",
                self.remaining,
                self.tag,
            )
            self.skip(self.remaining)
        self.finalized = True

    def _read_value(self, byteorder, layout):
        self._check_source()
        if self.is_exhausted():
            raise exc.EndOfData(self._end_of_data_message())
        codes = layout_format(layout)
        try:
            value_struct = struct.Struct(byteorder + codes)
        except struct.error as e:
            raise exc.DecodeError(
                "Invalid layout {codes!r}: {error}".format(
                    codes=codes,
                    error=e,
                )
            ) from e
        if value_struct.size == 0:
            raise exc.DecodeError(
                "Layout {codes!r} is empty".format(codes=codes))
        if value_struct.size > self.remaining:
            fmt = (
                "Layout {layout!r} needs {size} bytes, only {remaining} "
                "left in chunk {tag!r}"
            )
            raise exc.ShortSource(fmt.format(
                layout=value_struct.format,
                size=value_struct.size,
                remaining=self.remaining,
                tag=self.tag,
            ))
        data = self._pull_exact(value_struct.size)
        # Position only moves once the whole value is in hand.
        self._position += len(data)
        values = value_struct.unpack(data)
        if len(values) == 1:
            return values[0]
        return values

    def _pull(self, n):
        """
        Request up to ``n`` bytes from the source once and count
        whatever arrived as consumed.
        """
        data = self._source.read(n)
        assert len(data) <= n, "Read more bytes than requested"
        self._position += len(data)
        return data

    def _pull_exact(self, n):
        """
        Read exactly ``n`` bytes from the source without updating the
        position, or raise :exc:`exceptions.ShortSource`.
        """
        parts = []
        obtained = 0
        while obtained < n:
            data = self._source.read(n - obtained)
            if not data:
                break
            parts.append(data)
            obtained += len(data)
        if obtained < n:
            fmt = (
                "Expected to read {length}, got {actual}, chunk {tag!r} "
                "position {position}"
            )
            raise exc.ShortSource(fmt.format(
                length=n,
                actual=obtained,
                tag=self.tag,
                position=self._position,
            ))
        return b''.join(parts)

    def _check_source(self):
        if self._source is None:
            raise exc.UnavailableSource(
                "Chunk {tag!r} has no source to read from".format(
                    tag=self.tag,
                )
            )

    def _end_of_data_message(self):
        return "Chunk {tag!r} exhausted after {size} bytes".format(
            tag=self.tag,
            size=self._size,
        )
