#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

"""CGI-style error responses written back through the SCGI server."""

import sys


def error_response(status, mesg):
    return ("Status: %s\r\n"
            "Content-Type: text/plain\r\n"
            "\r\n"
            "%s\r\n") % (status, mesg)


def write_error(status, mesg, out=None):
    if out is None:
        out = sys.stdout.buffer
    out.write(error_response(status, mesg).encode("utf-8", "replace"))
    out.flush()
