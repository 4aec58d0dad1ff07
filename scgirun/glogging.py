#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

import logging
from logging.config import fileConfig
import os

from scgirun.errors import ConfigError


CONFIG_DEFAULTS = dict(
        version=1,
        disable_existing_loggers=False,

        loggers={
            "root": {"level": "INFO", "handlers": ["null"]},
            "scgirun.error": {
                "level": "DEBUG",
                "handlers": ["null"],
                "propagate": False,
                "qualname": "scgirun.error"
            }
        },
        handlers={
            "null": {
                "class": "logging.NullHandler",
            }
        },
        formatters={
            "generic": {
                "format": "%(asctime)s [%(process)d] [%(levelname)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "class": "logging.Formatter"
            }
        }
)


class Logger(object):

    LOG_LEVELS = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG
    }
    loglevel = logging.DEBUG

    error_fmt = r"%(asctime)s [%(process)d] [%(levelname)s] %(message)s"
    datefmt = r"%Y-%m-%d %H:%M:%S"

    def __init__(self, cfg):
        self.error_log = logging.getLogger("scgirun.error")
        self.error_log.propagate = False
        self.cfg = cfg
        self.setup(cfg)

    def setup(self, cfg):
        self.loglevel = self.LOG_LEVELS.get(cfg.loglevel.lower(),
                                            logging.DEBUG)
        self.error_log.setLevel(self.loglevel)

        if cfg.logconfig:
            if os.path.exists(cfg.logconfig):
                defaults = CONFIG_DEFAULTS.copy()
                defaults['__file__'] = cfg.logconfig
                defaults['here'] = os.path.dirname(cfg.logconfig)
                fileConfig(cfg.logconfig, defaults=defaults,
                           disable_existing_loggers=False)
            else:
                raise ConfigError("log config '%s' not found"
                                  % cfg.logconfig)
            return

        # stdout is the response channel, so either a file or nothing
        if cfg.debug_log:
            self._set_handler(self.error_log, cfg.debug_log,
                              logging.Formatter(self.error_fmt, self.datefmt))
        else:
            self._set_handler(self.error_log, None, None)

    def error(self, msg, *args, **kwargs):
        self.error_log.error(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.error_log.warning(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self.error_log.info(msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self.error_log.debug(msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs):
        self.error_log.exception(msg, *args, **kwargs)

    def log(self, lvl, msg, *args, **kwargs):
        if isinstance(lvl, str):
            lvl = self.LOG_LEVELS.get(lvl.lower(), logging.INFO)
        self.error_log.log(lvl, msg, *args, **kwargs)

    def close(self):
        """Flush and close every handler before the process image is
        replaced; nothing buffered survives execve()."""
        for handler in self.error_log.handlers:
            handler.acquire()
            try:
                handler.flush()
                handler.close()
            finally:
                handler.release()

    def _get_scgirun_handler(self, log):
        for h in log.handlers:
            if getattr(h, "_scgirun", False):
                return h

    def _set_handler(self, log, output, fmt):
        # remove previous scgirun log handler
        h = self._get_scgirun_handler(log)
        if h:
            log.handlers.remove(h)
            h.close()

        if output is None:
            h = logging.NullHandler()
        else:
            check_is_writeable(output)
            h = logging.FileHandler(output)
            h.setFormatter(fmt)

        h._scgirun = True
        log.addHandler(h)


def check_is_writeable(path):
    try:
        f = open(path, 'a')
    except IOError as e:
        raise ConfigError("Error: '%s' isn't writable [%r]" % (path, e))
    f.close()
