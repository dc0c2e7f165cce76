import sys
import logging

from chunkreader.container import open_form

logger = logging.getLogger(__name__)


def log_chunk_heads(riff_file):
    form_type, outer, chunks = open_form(riff_file)
    logger.info("%r form %r, %d bytes", outer.tag, form_type, outer.size)
    for chunk in chunks:
        logger.info(repr(chunks.heads[-1]))
        chunk.finalize()
    outer.finalize()
    return chunks.heads


def main():
    logging.basicConfig(stream=sys.stderr, level=logging.DEBUG)
    with open(sys.argv[1], 'rb') as riff_file:
        log_chunk_heads(riff_file)
