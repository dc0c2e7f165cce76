class ChunkError(Exception):
    pass


class UnavailableSource(ChunkError):
    pass


class EndOfData(ChunkError, EOFError):
    pass


class ShortSource(ChunkError):
    pass


class DecodeError(ChunkError):
    pass


class StreamStateError(ChunkError):
    pass


class UnknownContainer(ChunkError):
    pass
