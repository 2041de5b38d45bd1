# Copyright 2015  Zachary T Welch  <zach@mandolincreekfarm.com>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Logging setup for tmv71rig.

Drivers log serial traffic at debug level and VFO drift at warning level.
The console shows warnings and up unless TMV71RIG_DEBUG names another level
(as a number or a name).  TMV71RIG_LOG copies everything to a file as well,
filtered by TMV71RIG_LOG_LEVEL if that is set.
"""

import contextlib
import logging
import os

LOG = logging.getLogger(__name__)

#: Level names accepted in the environment and on the command line
LEVELS = {"critical": logging.CRITICAL,
          "error":    logging.ERROR,
          "warn":     logging.WARNING,
          "warning":  logging.WARNING,
          "info":     logging.INFO,
          "debug":    logging.DEBUG,
          }

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '[%(asctime)s] %(name)s - %(levelname)s: %(message)s'


def parse_level(value, default=logging.DEBUG):
    """Return the logging level for @value, a number or a level name"""
    try:
        level = int(value)
    except ValueError:
        level = LEVELS.get(value.lower(), default)
    return max(logging.DEBUG, min(level, logging.CRITICAL))


class Logger:
    """The console and log-file handlers tmv71rig puts on the root logger"""

    def __init__(self, environ=None):
        if environ is None:
            environ = os.environ

        self.root = logging.getLogger()
        self.root.setLevel(logging.DEBUG)

        self.console = logging.StreamHandler()
        self.console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        debug = environ.get("TMV71RIG_DEBUG")
        self.set_verbosity(parse_level(debug) if debug else logging.WARNING)
        self.root.addHandler(self.console)

        self.logfile = None
        logname = environ.get("TMV71RIG_LOG")
        if logname:
            self.log_to_file(logname, parse_level(
                environ.get("TMV71RIG_LOG_LEVEL", "debug")))

    @property
    def console_level(self):
        return self.console.level

    def set_verbosity(self, level):
        self.console.setLevel(max(logging.DEBUG,
                                  min(level, logging.CRITICAL)))

    def log_to_file(self, filename, level=logging.DEBUG):
        """Also log to @filename, which is truncated first"""
        if self.logfile is not None:
            LOG.error("Already logging to %s", self.logfile.baseFilename)
            return
        self.logfile = logging.FileHandler(filename, mode="w")
        self.logfile.setFormatter(logging.Formatter(FILE_FORMAT))
        self.logfile.setLevel(level)
        self.root.addHandler(self.logfile)

    def remove(self):
        """Take this instance's handlers off the root logger"""
        for handler in (self.console, self.logfile):
            if handler is not None:
                self.root.removeHandler(handler)
                handler.close()


Logger.instance = Logger()


def add_arguments(parser):
    parser.add_argument("-q", "--quiet", action="count", default=0,
                        help="Show fewer messages")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Show more messages (-vv shows serial traffic)")
    parser.add_argument("--log", dest="log_file", metavar="FILE",
                        help="Also log to FILE")
    parser.add_argument("--log-level", default="debug",
                        help="Level for --log: critical, error, warn, "
                        "info, debug (default: %(default)s)")


def handle_options(options):
    logger = Logger.instance

    if options.verbose or options.quiet:
        logger.set_verbosity(
            logging.WARNING + 10 * (options.quiet - options.verbose))

    if options.log_file:
        logger.log_to_file(options.log_file, parse_level(options.log_level))


class HistoryHandler(logging.Handler):
    """Keeps every record it is given"""

    def __init__(self, level=logging.NOTSET):
        super().__init__(level)
        self._records = []

    def emit(self, record):
        self._records.append(record)

    def get_history(self):
        return list(self._records)


@contextlib.contextmanager
def log_history(level, root=None):
    """Collect records at @level and up logged under @root while active"""
    target = logging.getLogger(root)
    handler = HistoryHandler(level)
    target.addHandler(handler)
    try:
        yield handler
    finally:
        target.removeHandler(handler)
