"""
Reading sequences of chunks from RIFF, RIFX and IFF style containers.
"""
import logging
import struct

from chunkreader import exceptions as exc
from chunkreader import models
from chunkreader.reader import ChunkReader
from chunkreader.valuetypes import BIG_ENDIAN, LITTLE_ENDIAN


logger = logging.getLogger(__name__)


CHUNK_HEADER_SIZE = 8  # 4 byte tag, 32 bit size
FORM_TYPE_SIZE = 4
FORM_BYTE_ORDERS = {
    b'RIFF': LITTLE_ENDIAN,
    b'RIFX': BIG_ENDIAN,
    b'FORM': BIG_ENDIAN,
}


class ChunkStream(object):
    """
    Produces a :class:`reader.ChunkReader` for every chunk in a flat
    sequence of chunks.

    Each chunk must be exhausted (usually by calling its
    :meth:`~reader.ChunkReader.finalize` method) before the next one is
    requested, since all chunks share the one source.

    :ivar position: Total number of bytes consumed from the source
    :type position: int
    :ivar heads: The headers of the chunks read so far
    :type heads: list of :class:`models.ChunkHead`
    """
    def __init__(self, source, byteorder=LITTLE_ENDIAN, align=True):
        """
        :param source: Object with a ``read(n)`` method
        :param byteorder: ``'<'`` for RIFF, ``'>'`` for RIFX and IFF
        :param align:
            Whether odd-sized chunks are followed by a pad byte
        """
        if byteorder not in (LITTLE_ENDIAN, BIG_ENDIAN):
            raise ValueError(
                "Unknown byte order {byteorder!r}".format(byteorder=byteorder)
            )
        self._source = source
        self._header_struct = struct.Struct(byteorder + '4sI')
        self.align = align
        self.position = 0
        self.heads = []
        self._current = None

    def __iter__(self):
        while True:
            self._finish_current()
            start = self.position
            header = self._read(CHUNK_HEADER_SIZE)
            if not header:
                # The stream ended cleanly at a chunk boundary.
                break
            if len(header) < CHUNK_HEADER_SIZE:
                fmt = (
                    "Expected a {length} byte chunk header at position "
                    "{position}, got {actual} bytes"
                )
                raise exc.ShortSource(fmt.format(
                    length=CHUNK_HEADER_SIZE,
                    position=start,
                    actual=len(header),
                ))
            tag, size = self._header_struct.unpack(header)
            head = models.ChunkHead(tag, size, start)
            logger.debug("Read chunk head %r", head)
            self.heads.append(head)
            self._current = ChunkReader(tag, size, self._source)
            yield self._current

    def _finish_current(self):
        """
        Account for the previous chunk and consume its pad byte, if
        there is one.
        """
        chunk = self._current
        if chunk is None:
            return
        if not chunk.is_exhausted():
            raise exc.StreamStateError(
                "Must finish chunk {tag!r} before starting another, "
                "{remaining} bytes left".format(
                    tag=chunk.tag,
                    remaining=chunk.remaining,
                )
            )
        self._current = None
        self.position += chunk.position
        if self.align and self.heads[-1].padded_size > chunk.size:
            pad = self._read(1)
            if pad:
                logger.debug("Skipped pad byte after chunk %r", chunk.tag)
            else:
                logger.debug("Pad byte missing after chunk %r", chunk.tag)

    def _read(self, length):
        """
        Read up to ``length`` bytes from the source and count them in
        :attr:`position`.
        """
        data = _read_full(self._source, length)
        self.position += len(data)
        return data


def _read_full(source, length):
    """
    Read ``length`` bytes from ``source``, stopping early only if the
    source ends.
    """
    parts = []
    actual = 0
    while actual < length:
        data = source.read(length - actual)
        if not data:
            break
        parts.append(data)
        actual += len(data)
    return b''.join(parts)


def open_form(source, align=True):
    """
    Read the outer ``RIFF``, ``RIFX`` or ``FORM`` header and the form
    type from ``source``.

    :return:
        The form type, the outer chunk's reader, and a
        :class:`ChunkStream` over the subchunks inside the outer chunk
    :rtype: tuple of (bytes, :class:`reader.ChunkReader`,
        :class:`ChunkStream`)
    """
    header = _read_full(source, CHUNK_HEADER_SIZE)
    tag = header[:models.CHUNK_TAG_LENGTH]
    if len(tag) == models.CHUNK_TAG_LENGTH and tag not in FORM_BYTE_ORDERS:
        raise exc.UnknownContainer(
            "Unknown container tag {tag!r}".format(tag=tag)
        )
    if len(header) < CHUNK_HEADER_SIZE:
        raise exc.ShortSource(
            "Expected a {length} byte container header, got {header!r}".format(
                length=CHUNK_HEADER_SIZE,
                header=header,
            )
        )
    byteorder = FORM_BYTE_ORDERS[tag]
    _, size = struct.unpack(byteorder + '4sI', header)
    outer = ChunkReader(tag, size, source)
    form_type = outer.read_be('{}s'.format(FORM_TYPE_SIZE))
    logger.debug(
        "Opened %r container of form type %r, %d bytes",
        tag,
        form_type,
        size,
    )
    return form_type, outer, ChunkStream(outer, byteorder, align)
