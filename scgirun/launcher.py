#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

import errno
import os

from scgirun.errors import ScriptNotFound, ScriptExecError


def exec_script(invocation, environ, execve=os.execve):
    """Replace the current process with the CGI script.

    Never returns normally: either the process image is replaced or a
    ScriptError is raised describing why execve() failed.
    """
    try:
        execve(invocation.path, invocation.argv, environ)
    except OSError as e:
        if e.errno == errno.ENOENT:
            raise ScriptNotFound(invocation.path)
        raise ScriptExecError(invocation.path, e)
