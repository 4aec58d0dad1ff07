#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

from scgirun.scgi.message import SCGIRequest, MAX_HEADER_LENGTH
from scgirun.scgi.errors import (
    SCGIParseException,
    StreamTruncated,
    InvalidLengthStart,
    InvalidLengthCharacter,
    LengthOutOfRange,
    HeaderTruncated,
    MissingComma,
    CorruptNameValueTable,
)

__all__ = [
    'SCGIRequest',
    'MAX_HEADER_LENGTH',
    'SCGIParseException',
    'StreamTruncated',
    'InvalidLengthStart',
    'InvalidLengthCharacter',
    'LengthOutOfRange',
    'HeaderTruncated',
    'MissingComma',
    'CorruptNameValueTable',
]
