#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

"""Turn decoded SCGI headers into a CGI process environment."""

import os

# presence marker the SCGI server adds to every request
SCGI_MARKER = b"SCGI"
GATEWAY_INTERFACE = b"CGI/1.1"


def is_valid_name(name):
    return bool(name) and b"=" not in name and b"\x00" not in name


def build_environ(headers, base=None, log=None):
    """Return the environment for the CGI script as a bytes mapping.

    ``base`` seeds the result (defaults to this process's environment).
    Headers are installed in order so a later duplicate wins. Names the
    OS cannot carry as environment variables are skipped.
    """
    if base is None:
        base = os.environb
    environ = dict(base)

    for name, value in headers:
        if not is_valid_name(name):
            if log is not None:
                log.warning("Skipping invalid variable name %r", name)
            continue
        environ[name] = value
        if log is not None:
            log.debug("Set [%s]=[%s]", os.fsdecode(name), os.fsdecode(value))

    # make things look like a CGI environment
    environ.pop(SCGI_MARKER, None)
    environ[b"GATEWAY_INTERFACE"] = GATEWAY_INTERFACE
    return environ
