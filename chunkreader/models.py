import attr


CHUNK_TAG_LENGTH = 4


_valid_bytes = attr.validators.instance_of(bytes)


def validate_tag(value):
    if not isinstance(value, bytes):
        raise TypeError("Chunk tag must be bytes, not {name}".format(
            name=type(value).__name__,
        ))
    if len(value) != CHUNK_TAG_LENGTH:
        raise ValueError(
            "Chunk tag {value!r} must be exactly {length} bytes long".format(
                value=value,
                length=CHUNK_TAG_LENGTH,
            )
        )


def _valid_chunk_tag(instance, attribute, value):
    _valid_bytes(instance, attribute, value)
    validate_tag(value)


@attr.attributes
class ChunkHead:
    """
    The header of a chunk as read by the container parser.

    :ivar tag: The 4 byte chunk tag
    :ivar size: The number of bytes comprising the chunk's payload
    :ivar position: Where the chunk header started in the stream
    """
    tag = attr.attr(validator=_valid_chunk_tag)  # type: bytes
    size = attr.attr()  # type: int
    position = attr.attr()  # type: int

    @property
    def padded_size(self):
        """The payload size rounded up to an even byte count."""
        return self.size + (self.size & 1)
