#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

# We don't need to call super() in __init__ methods of our
# BaseException and Exception classes because we also define
# our own __str__ methods so there is no need to pass 'message'
# to the base class to get a meaningful output from 'str(exc)'.
# pylint: disable=super-init-not-called

import os

INTERNAL_ERROR = "500 Internal Error"
NOT_FOUND = "404 Not Found"


def _path(path):
    if isinstance(path, bytes):
        return os.fsdecode(path)
    return path


class SCGIRunError(Exception):
    """Base exception for everything reported back through the SCGI
    connection. ``status`` is the CGI status line of the response."""

    status = INTERNAL_ERROR


class ConfigError(SCGIRunError):
    """ Exception raised on config error """


class ScriptError(SCGIRunError):
    """Base exception for script resolution and launch failures."""


class MissingScriptFilename(ScriptError):

    def __str__(self):
        return "CGI environment missing SCRIPT_FILENAME"


class UnsafeScriptPath(ScriptError):
    def __init__(self, path):
        self.path = path

    def __str__(self):
        return "[%s] should not include \"../\"" % _path(self.path)


class ScriptOutsideDirectory(ScriptError):
    def __init__(self, path, directory):
        self.path = path
        self.directory = directory

    def __str__(self):
        return "[%s] doesn't reside under [%s]" % (
            _path(self.path), _path(self.directory))


class ScriptNotFound(ScriptError):
    status = NOT_FOUND

    def __init__(self, path):
        self.path = path

    def __str__(self):
        return "Can't locate CGI script"


class ScriptExecError(ScriptError):
    def __init__(self, path, err):
        self.path = path
        self.err = err

    def __str__(self):
        return ("Unable to execute CGI script, please contact the system "
                "administrator\n%s" % (self.err.strerror or self.err))
