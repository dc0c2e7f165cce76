"""
Fixed-width value layouts for typed chunk reads.
"""
import enum


LITTLE_ENDIAN = '<'
BIG_ENDIAN = '>'


class ValueType(enum.Enum):
    int8 = 'b'
    uint8 = 'B'
    int16 = 'h'
    uint16 = 'H'
    int32 = 'i'
    uint32 = 'I'
    int64 = 'q'
    uint64 = 'Q'
    float32 = 'f'
    float64 = 'd'


def layout_format(layout):
    """
    Return the ``struct`` format codes for a layout, which is either a
    :class:`ValueType` member or a format string without a byte order
    prefix (``'HHI'`` for a composite record).
    """
    if isinstance(layout, ValueType):
        return layout.value
    if not isinstance(layout, str):
        raise TypeError(
            "layout must be a ValueType or str, not {name}".format(
                name=type(layout).__name__,
            )
        )
    return layout
