#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

import argparse
import copy
import textwrap

from scgirun import __version__
from scgirun.errors import ConfigError
from scgirun.scgi.message import MAX_HEADER_LENGTH

KNOWN_SETTINGS = []

LOG_LEVEL_NAMES = ("critical", "error", "warning", "info", "debug")


def wrap_method(func):
    def _wrapped(instance, *args, **kwargs):
        return func(*args, **kwargs)
    return _wrapped


def make_settings():
    settings = {}
    for s in KNOWN_SETTINGS:
        setting = s()
        settings[setting.name] = setting.copy()
    return settings


class ConfigArgumentParser(argparse.ArgumentParser):
    """ArgumentParser raising ConfigError instead of exiting, so usage
    problems are reported like any other failure."""

    def error(self, message):
        raise ConfigError(message)


class Config(object):

    def __init__(self, usage=None, prog=None):
        self.settings = make_settings()
        self.usage = usage
        self.prog = prog or "scgi-run"

    def __getattr__(self, name):
        if name not in self.settings:
            raise AttributeError("No configuration setting for: %s" % name)
        return self.settings[name].get()

    def __setattr__(self, name, value):
        if name != "settings" and name in self.settings:
            raise AttributeError("Invalid access!")
        super(Config, self).__setattr__(name, value)

    def set(self, name, value):
        if name not in self.settings:
            raise AttributeError("No configuration setting for: %s" % name)
        self.settings[name].set(value)

    def parser(self):
        kwargs = {
            "usage": self.usage,
            "prog": self.prog
        }
        parser = ConfigArgumentParser(**kwargs)
        parser.add_argument("-v", "--version",
                action="version", default=argparse.SUPPRESS,
                version="%(prog)s (version " + __version__ + ")\n",
                help="show program's version number and exit")
        parser.add_argument("args", nargs=argparse.REMAINDER,
                help="confinement directory (ending in /) or "
                     "script path and its arguments")

        keys = sorted(self.settings, key=lambda k: (
            self.settings[k].section, self.settings[k].order))
        for k in keys:
            self.settings[k].add_option(parser)
        return parser


class SettingMeta(type):
    def __new__(cls, name, bases, attrs):
        super_new = super(SettingMeta, cls).__new__
        parents = [b for b in bases if isinstance(b, SettingMeta)]
        if not parents:
            return super_new(cls, name, bases, attrs)

        attrs["order"] = len(KNOWN_SETTINGS)
        attrs["validator"] = wrap_method(attrs["validator"])

        new_class = super_new(cls, name, bases, attrs)
        new_class.fmt_desc(attrs.get("desc", ""))
        KNOWN_SETTINGS.append(new_class)
        return new_class

    def fmt_desc(cls, desc):
        desc = textwrap.dedent(desc).strip()
        setattr(cls, "desc", desc)
        setattr(cls, "short", desc.splitlines()[0])


class Setting(metaclass=SettingMeta):
    name = None
    value = None
    section = None
    cli = None
    validator = None
    type = None
    meta = None
    action = None
    default = None
    short = None
    desc = None

    def __init__(self):
        if self.default is not None:
            self.set(self.default)

    def add_option(self, parser):
        if not self.cli:
            return
        args = tuple(self.cli)

        help_txt = "%s [%s]" % (self.short, self.default)
        help_txt = help_txt.replace("%", "%%")

        kwargs = {
            "dest": self.name,
            "action": self.action or "store",
            "type": self.type or str,
            "default": None,
            "help": help_txt
        }

        if self.meta is not None:
            kwargs['metavar'] = self.meta

        if kwargs["action"] != "store":
            kwargs.pop("type")

        parser.add_argument(*args, **kwargs)

    def copy(self):
        return copy.copy(self)

    def get(self):
        return self.value

    def set(self, val):
        if not callable(self.validator):
            raise TypeError('Invalid validator: %s' % self.name)
        self.value = self.validator(val)


def validate_pos_int(val):
    if not isinstance(val, int):
        try:
            val = int(val, 0)
        except ValueError:
            raise ConfigError("Not an integer: %r" % val)
    else:
        # Booleans are ints!
        val = int(val)
    if val < 0:
        raise ConfigError("Value must be positive: %s" % val)
    return val


def validate_string(val):
    if val is None:
        return None
    if not isinstance(val, str):
        raise ConfigError("Not a string: %s" % val)
    return val.strip()


def validate_loglevel(val):
    val = validate_string(val)
    if val is None or val.lower() not in LOG_LEVEL_NAMES:
        raise ConfigError("Invalid log level: %s" % val)
    return val.lower()


class MaxHeaderLength(Setting):
    name = "max_header_length"
    section = "Security"
    cli = ["--max-header-length"]
    meta = "INT"
    validator = validate_pos_int
    type = int
    default = MAX_HEADER_LENGTH
    desc = """\
        The largest SCGI header block, in bytes, that will be accepted.

        The length prefix sent by the server is checked against this value
        digit by digit, before any memory is set aside for the header, so a
        broken or hostile peer can't make the process allocate without
        bound.
        """


class DebugLog(Setting):
    name = "debug_log"
    section = "Logging"
    cli = ["--debug-log"]
    meta = "FILE"
    validator = validate_string
    default = None
    desc = """\
        A file to append debug messages to.

        Standard output carries the response back to the SCGI server and
        is never used for logging. Without this setting nothing is logged.
        """


class Loglevel(Setting):
    name = "loglevel"
    section = "Logging"
    cli = ["--log-level"]
    meta = "LEVEL"
    validator = validate_loglevel
    default = "debug"
    desc = """\
        The granularity of messages written to the debug log.

        Valid level names are:

        * debug
        * info
        * warning
        * error
        * critical
        """


class LogConfig(Setting):
    name = "logconfig"
    section = "Logging"
    cli = ["--log-config"]
    meta = "FILE"
    validator = validate_string
    default = None
    desc = """\
        The log config file to use.

        scgi-run uses the standard Python logging module's Configuration
        file format. The ``scgirun.error`` logger receives all messages.
        This overrides ``--debug-log`` and ``--log-level``.
        """
