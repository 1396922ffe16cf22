import io
import logging
from contextlib import contextmanager

import zstandard as zstd

logger = logging.getLogger(__name__)

ZSTD_SUFFIX = '.zst'


def is_compressed(path):
    return str(path).endswith(ZSTD_SUFFIX)


@contextmanager
def open_pitch_capture(path):
    """Open a PITCH capture (plain text or zstd compressed) as an ASCII text stream."""
    if is_compressed(path):
        logger.debug("Streaming zstd capture %s", path)
        with open(path, 'rb') as ifh:
            reader = zstd.ZstdDecompressor().stream_reader(ifh)
            with io.TextIOWrapper(reader, encoding='ascii', errors='surrogateescape', newline='') as text:
                yield text
    else:
        with open(path, 'r', encoding='ascii', errors='surrogateescape', newline='') as text:
            yield text


def decompress_capture(input_file, output_file):
    with open(input_file, 'rb') as ifh, open(output_file, 'wb') as ofh:
        dctx = zstd.ZstdDecompressor()
        read, written = dctx.copy_stream(ifh, ofh)
    logger.info("Decompressed %s to %s (%d -> %d bytes)", input_file, output_file, read, written)
    return written
