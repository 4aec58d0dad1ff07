#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

from scgirun.scgi.errors import (
    StreamTruncated,
    InvalidLengthStart,
    InvalidLengthCharacter,
    LengthOutOfRange,
    HeaderTruncated,
    MissingComma,
    CorruptNameValueTable,
)


# Sanity ceiling on the header length a server may announce
MAX_HEADER_LENGTH = 262144

DIGITS = b"0123456789"


class SCGIRequest:
    """SCGI request header decoder.

    An SCGI request starts with a netstring holding the CGI variables:

        <length>:<name>\\0<value>\\0...<name>\\0<value>\\0,

    ``length`` is the ASCII decimal byte count of everything between the
    ``:`` and the trailing ``,``. Only the header is consumed; anything
    after the comma (the request body) is left unread in the stream so the
    CGI script can read it from the same descriptor.

    The stream must be unbuffered, or at least must not read ahead: pass
    a raw ``io.FileIO`` rather than ``sys.stdin.buffer``.
    """

    def __init__(self, stream, max_header_length=MAX_HEADER_LENGTH,
                 log=None):
        self.stream = stream
        self.max_header_length = max_header_length
        self.log = log
        self.length = None
        self.headers = []

        self.parse(self.stream)

    def parse(self, stream):
        """Read the netstring and decode its name/value table."""
        self.length = self._read_length(stream)
        if self.log is not None:
            self.log.debug("SCGI header length = %d", self.length)

        # +1 is for the comma after the headers
        data = self._read_exact(stream, self.length + 1)
        if len(data) != self.length + 1:
            raise HeaderTruncated(self.length + 1, len(data))

        if data[self.length:] != b",":
            raise MissingComma(data[self.length:])

        self.headers = self._parse_headers(data, self.length)

    def _read_char(self, stream):
        ch = stream.read(1)
        if not ch:
            raise StreamTruncated()
        return ch

    def _read_length(self, stream):
        ch = self._read_char(stream)
        if ch not in DIGITS:
            raise InvalidLengthStart(ch[0])
        length = self._check_length(int(ch))

        while True:
            ch = self._read_char(stream)
            if ch in DIGITS:
                length = self._check_length(length * 10 + int(ch))
            elif ch == b":":
                return length
            else:
                raise InvalidLengthCharacter(ch[0])

    def _check_length(self, length):
        # checked on every digit so an absurd prefix is refused before
        # anything is allocated for it
        if length > self.max_header_length:
            raise LengthOutOfRange(self.max_header_length)
        return length

    def _read_exact(self, stream, size):
        """Read exactly size bytes unless the stream ends first."""
        buf = bytearray()
        while len(buf) < size:
            data = stream.read(size - len(buf))
            if not data:
                break
            buf += data
        return bytes(buf)

    def _parse_headers(self, data, length):
        headers = []
        pos = 0
        while pos < length:
            name_end = data.find(b"\x00", pos, length)
            if name_end < 0:
                raise CorruptNameValueTable(pos)

            value_start = name_end + 1
            if value_start >= length:
                raise CorruptNameValueTable(value_start)

            value_end = data.find(b"\x00", value_start, length)
            if value_end < 0:
                raise CorruptNameValueTable(value_start)

            headers.append((data[pos:name_end], data[value_start:value_end]))
            pos = value_end + 1

        return headers
