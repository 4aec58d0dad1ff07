#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

import io


def make_scgi_header(pairs):
    """Create an SCGI request header for testing.

    Args:
        pairs: list of (name, value) tuples, str or bytes

    Returns:
        bytes: the netstring ``<len>:<name>\\0<value>\\0...,``
    """
    body = b""
    for name, value in pairs:
        if isinstance(name, str):
            name = name.encode("latin-1")
        if isinstance(value, str):
            value = value.encode("latin-1")
        body += name + b"\x00" + value + b"\x00"
    return str(len(body)).encode("ascii") + b":" + body + b","


class TrickleStream:
    """Raw stream returning at most ``step`` bytes per read, like a pipe
    or socket delivering data in small pieces."""

    def __init__(self, data, step=3):
        self.buf = io.BytesIO(data)
        self.step = step

    def read(self, size=-1):
        if size < 0 or size > self.step:
            size = self.step
        return self.buf.read(size)

    def rest(self):
        return self.buf.read()
