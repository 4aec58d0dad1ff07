#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

import io
import os
import sys

from scgirun.config import Config
from scgirun.environ import build_environ
from scgirun.errors import SCGIRunError, INTERNAL_ERROR
from scgirun.glogging import Logger
from scgirun.launcher import exec_script
from scgirun.response import write_error
from scgirun.scgi import SCGIRequest
from scgirun.script import resolve_script


class SCGIRunApplication(object):
    """\
    Run one CGI script for one SCGI connection.

    The SCGI server starts this program per connection with the socket on
    stdin and stdout (inetd style). The request header is decoded into
    the script's environment and the process replaces itself with the
    script, which then reads the body from stdin and writes its CGI
    response to stdout. Failures are answered with a plain text error
    response and exit status 1.
    """

    def __init__(self, usage=None, prog=None, argv=None, stdin=None,
                 stdout=None, environ=None, execve=os.execve):
        self.usage = usage
        self.prog = prog
        self.argv = sys.argv[1:] if argv is None else argv
        self.stdin = stdin
        self.stdout = stdout
        self.environ = environ
        self.execve = execve
        self.cfg = None
        self.args = []
        self.log = None

    def load_config(self):
        self.cfg = Config(self.usage, prog=self.prog)

        parser = self.cfg.parser()
        args = parser.parse_args(self.argv)

        for k, v in vars(args).items():
            if v is None:
                continue
            if k == "args":
                continue
            self.cfg.set(k.lower(), v)

        self.args = args.args
        # "--" ends the options, for a script path starting with "-"
        if self.args[:1] == ["--"]:
            self.args = self.args[1:]

    def input_stream(self):
        if self.stdin is not None:
            return self.stdin
        # unbuffered, so the request body stays on fd 0 for the script
        return io.FileIO(0, closefd=False)

    def output_stream(self):
        if self.stdout is not None:
            return self.stdout
        return sys.stdout.buffer

    def handle(self):
        self.load_config()
        self.log = Logger(self.cfg)
        self.log.debug("-------- Starting, argc=%d", len(self.argv) + 1)
        for i, arg in enumerate([self.prog or sys.argv[0]] + self.argv):
            self.log.debug("argv[%d] == [%s]", i, arg)

        req = SCGIRequest(self.input_stream(),
                          max_header_length=self.cfg.max_header_length,
                          log=self.log)
        environ = build_environ(req.headers, base=self.environ, log=self.log)
        invocation = resolve_script(environ, self.args)
        self.log.info("Executing %r", invocation)

        self.log.close()
        exec_script(invocation, environ, execve=self.execve)

    def run(self):
        try:
            self.handle()
        except SCGIRunError as e:
            self.fail(e.status, str(e))
        except Exception as e:
            if self.log is not None:
                self.log.exception("Unexpected error")
            self.fail(INTERNAL_ERROR, "Unexpected error: %s" % e)

    def fail(self, status, mesg):
        if self.log is not None:
            self.log.error("%s: %s", status, mesg)
        write_error(status, mesg, out=self.output_stream())
        sys.exit(1)


def run(prog=None):
    """\
    The ``scgi-run`` command line runner for launching a CGI script
    over an SCGI connection.
    """
    usage = "%(prog)s [OPTIONS] [DIRECTORY/ | SCRIPT [ARGS ...]]"
    SCGIRunApplication(usage, prog=prog).run()


if __name__ == '__main__':
    run()
