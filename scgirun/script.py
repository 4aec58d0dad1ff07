#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

import os

from scgirun.errors import (
    MissingScriptFilename,
    UnsafeScriptPath,
    ScriptOutsideDirectory,
)

PARENT_DIR = b"../"


class ScriptInvocation:
    """The executable and argument vector handed to execve()."""

    def __init__(self, path, argv, directory=None):
        self.path = path
        self.argv = argv
        self.directory = directory

    def __repr__(self):
        return "<ScriptInvocation %r argv=%r>" % (self.path, self.argv)


def resolve_script(environ, args):
    """Work out which script to run from the environment and arguments.

    ``args`` are the invocation arguments after the program name. A first
    argument ending in ``/`` is a directory every script must live under;
    any other first argument names a fixed script to run instead of
    SCRIPT_FILENAME, with the remaining arguments as its argv.
    """
    args = [os.fsencode(a) for a in args]
    path = environ.get(b"SCRIPT_FILENAME")
    argv = [path]
    directory = None

    if args:
        if args[0].endswith(b"/"):
            directory = args[0]
        else:
            path = args[0]
            argv = args

    check_script(path, directory)
    return ScriptInvocation(path, argv, directory)


def check_script(path, directory=None):
    if not path:
        raise MissingScriptFilename()

    # literal string checks only, no canonicalization
    if PARENT_DIR in path:
        raise UnsafeScriptPath(path)

    if directory is not None and not path.startswith(directory):
        raise ScriptOutsideDirectory(path, directory)
