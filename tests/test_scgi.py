#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

import io
import pytest

from scgirun.scgi import (
    SCGIRequest,
    MAX_HEADER_LENGTH,
    SCGIParseException,
    StreamTruncated,
    InvalidLengthStart,
    InvalidLengthCharacter,
    LengthOutOfRange,
    HeaderTruncated,
    MissingComma,
    CorruptNameValueTable,
)
from scgirun.errors import SCGIRunError, INTERNAL_ERROR
from tests.support import make_scgi_header, TrickleStream


class TestHeaderConstruction:
    """Test the header construction helper."""

    def test_empty(self):
        assert make_scgi_header([]) == b"0:,"

    def test_single_pair(self):
        assert make_scgi_header([("A", "bc")]) == b"5:A\x00bc\x00,"


class TestSCGIRequest:

    def test_empty_header(self):
        req = SCGIRequest(io.BytesIO(b"0:,"))
        assert req.length == 0
        assert req.headers == []

    def test_pairs_in_order(self):
        data = make_scgi_header([
            ("CONTENT_LENGTH", "27"),
            ("SCGI", "1"),
            ("REQUEST_METHOD", "POST"),
            ("SCRIPT_FILENAME", "/bin/true"),
        ])
        req = SCGIRequest(io.BytesIO(data))
        assert req.headers == [
            (b"CONTENT_LENGTH", b"27"),
            (b"SCGI", b"1"),
            (b"REQUEST_METHOD", b"POST"),
            (b"SCRIPT_FILENAME", b"/bin/true"),
        ]

    def test_duplicates_are_kept(self):
        data = make_scgi_header([("X", "1"), ("X", "2")])
        req = SCGIRequest(io.BytesIO(data))
        assert req.headers == [(b"X", b"1"), (b"X", b"2")]

    def test_empty_value(self):
        req = SCGIRequest(io.BytesIO(b"3:A\x00\x00,"))
        assert req.headers == [(b"A", b"")]

    def test_binary_value(self):
        data = make_scgi_header([(b"QUERY_STRING", b"\xff\xfe=%20")])
        req = SCGIRequest(io.BytesIO(data))
        assert req.headers == [(b"QUERY_STRING", b"\xff\xfe=%20")]

    def test_leading_zero_length(self):
        req = SCGIRequest(io.BytesIO(b"004:A\x00B\x00,"))
        assert req.length == 4
        assert req.headers == [(b"A", b"B")]

    def test_body_left_in_stream(self):
        stream = io.BytesIO(make_scgi_header([("A", "B")]) + b"body=1")
        SCGIRequest(stream)
        assert stream.read() == b"body=1"

    def test_trickling_stream(self):
        data = make_scgi_header([("REQUEST_METHOD", "GET"),
                                 ("SCRIPT_FILENAME", "/srv/cgi/x.cgi")])
        stream = TrickleStream(data + b"rest", step=2)
        req = SCGIRequest(stream)
        assert req.headers[1] == (b"SCRIPT_FILENAME", b"/srv/cgi/x.cgi")
        assert stream.rest() == b"rest"

    def test_length_logged(self):
        class Log:
            def __init__(self):
                self.messages = []

            def debug(self, msg, *args):
                self.messages.append(msg % args)

        log = Log()
        SCGIRequest(io.BytesIO(b"4:A\x00B\x00,"), log=log)
        assert log.messages == ["SCGI header length = 4"]


class TestSCGIRequestLength:

    def test_empty_stream(self):
        with pytest.raises(StreamTruncated) as exc_info:
            SCGIRequest(io.BytesIO(b""))
        assert str(exc_info.value) == "SCGI stream truncated"

    def test_must_start_with_digit(self):
        with pytest.raises(InvalidLengthStart) as exc_info:
            SCGIRequest(io.BytesIO(b"x4:A\x00B\x00,"))
        assert exc_info.value.ch == 0x78
        assert "didn't start with a digit" in str(exc_info.value)
        assert "0x78" in str(exc_info.value)

    def test_colon_first_is_not_a_digit(self):
        with pytest.raises(InvalidLengthStart):
            SCGIRequest(io.BytesIO(b":,"))

    def test_invalid_terminator(self):
        with pytest.raises(InvalidLengthCharacter) as exc_info:
            SCGIRequest(io.BytesIO(b"12;abc"))
        assert str(exc_info.value) == "Invalid character 0x3b in length"

    def test_sign_is_invalid(self):
        with pytest.raises(InvalidLengthCharacter):
            SCGIRequest(io.BytesIO(b"1-2:"))

    def test_stream_ends_in_length(self):
        with pytest.raises(StreamTruncated):
            SCGIRequest(io.BytesIO(b"12"))

    def test_length_over_ceiling(self):
        data = str(MAX_HEADER_LENGTH + 1).encode() + b":"
        with pytest.raises(LengthOutOfRange) as exc_info:
            SCGIRequest(io.BytesIO(data))
        assert str(exc_info.value) == (
            "SCGI Header length is not in the range 0..%d" % MAX_HEADER_LENGTH)

    def test_huge_length_stops_reading(self):
        # the check fires on the first digit that crosses the ceiling
        stream = io.BytesIO(b"9" * 40 + b":")
        with pytest.raises(LengthOutOfRange):
            SCGIRequest(stream)
        assert stream.tell() == 6

    def test_ceiling_is_configurable(self):
        req = SCGIRequest(io.BytesIO(b"4:A\x00B\x00,"), max_header_length=4)
        assert req.headers == [(b"A", b"B")]

        with pytest.raises(LengthOutOfRange) as exc_info:
            SCGIRequest(io.BytesIO(b"5:A\x00BC\x00,"), max_header_length=4)
        assert exc_info.value.limit == 4


class TestSCGIRequestBlock:

    def test_truncated(self):
        data = make_scgi_header([("SCRIPT_FILENAME", "/bin/true")])
        with pytest.raises(HeaderTruncated) as exc_info:
            SCGIRequest(io.BytesIO(data[:10]))
        assert "truncated" in str(exc_info.value)

    def test_truncated_before_comma(self):
        data = make_scgi_header([("A", "B")])
        with pytest.raises(HeaderTruncated) as exc_info:
            SCGIRequest(io.BytesIO(data[:-1]))
        assert exc_info.value.expected == 5
        assert exc_info.value.received == 4

    def test_missing_comma(self):
        with pytest.raises(MissingComma) as exc_info:
            SCGIRequest(io.BytesIO(b"4:A\x00B\x00;"))
        assert str(exc_info.value) == (
            "SCGI Header: Incomplete netstring, missing comma")

    def test_length_too_short_for_pairs(self):
        # the declared length cuts the block, so the comma check fails
        with pytest.raises(MissingComma):
            SCGIRequest(io.BytesIO(b"3:A\x00B\x00,"))

    @pytest.mark.parametrize("data", [
        b"1:A,",             # name runs into the comma
        b"2:A\x00,",         # name without a value
        b"3:A\x00B,",        # value runs into the comma
        b"6:A\x00B\x00C\x00,",  # trailing name without a value
    ])
    def test_corrupt_table(self, data):
        with pytest.raises(CorruptNameValueTable) as exc_info:
            SCGIRequest(io.BytesIO(data))
        assert str(exc_info.value) == "SCGI Header: Corrupt name/value table"

    def test_errors_are_internal_errors(self):
        for exc in (StreamTruncated(), InvalidLengthStart(0x41),
                    InvalidLengthCharacter(0x41), LengthOutOfRange(10),
                    HeaderTruncated(2, 1), MissingComma(b";"),
                    CorruptNameValueTable(0)):
            assert isinstance(exc, SCGIParseException)
            assert isinstance(exc, SCGIRunError)
            assert exc.status == INTERNAL_ERROR
