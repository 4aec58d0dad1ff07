#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

# We don't need to call super() in __init__ methods of our
# BaseException and Exception classes because we also define
# our own __str__ methods so there is no need to pass 'message'
# to the base class to get a meaningful output from 'str(exc)'.
# pylint: disable=super-init-not-called

from scgirun.errors import SCGIRunError


class SCGIParseException(SCGIRunError):
    """Base exception for SCGI header decoding errors.

    None of these are recoverable: once the netstring framing is lost
    there is nothing left in the stream to resynchronize on.
    """


class StreamTruncated(SCGIParseException):
    """Raised when the stream ends while reading the length prefix."""

    def __str__(self):
        return "SCGI stream truncated"


class InvalidLengthStart(SCGIParseException):
    def __init__(self, ch):
        self.ch = ch

    def __str__(self):
        return ("SCGI stream didn't start with a digit, started with "
                "char 0x%x" % self.ch)


class InvalidLengthCharacter(SCGIParseException):
    def __init__(self, ch):
        self.ch = ch

    def __str__(self):
        return "Invalid character 0x%x in length" % self.ch


class LengthOutOfRange(SCGIParseException):
    def __init__(self, limit):
        self.limit = limit

    def __str__(self):
        return "SCGI Header length is not in the range 0..%d" % self.limit


class HeaderTruncated(SCGIParseException):
    def __init__(self, expected, received):
        self.expected = expected
        self.received = received

    def __str__(self):
        return "SCGI Header truncated"


class MissingComma(SCGIParseException):
    def __init__(self, found):
        self.found = found

    def __str__(self):
        return "SCGI Header: Incomplete netstring, missing comma"


class CorruptNameValueTable(SCGIParseException):
    def __init__(self, offset):
        self.offset = offset

    def __str__(self):
        return "SCGI Header: Corrupt name/value table"
