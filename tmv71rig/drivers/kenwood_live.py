# Copyright 2010 Dan Smith <dsmith@danplanet.com>
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

import logging
import threading
import time

import serial

from tmv71rig import errors

LOG = logging.getLogger(__name__)

COMMAND_RESP_BUFSIZE = 8
DELIMITER = "\r"
BAUDS = [9600, 19200, 38400, 57600]


def iserr(result):
    """Returns True if the @result from a radio is an error"""
    return result in ["N", "?"]


class KenwoodTransport:
    """Request/response link to a Kenwood radio in live (PC control) mode.

    Every command is a line of text terminated by a carriage return, and
    the radio answers each one with exactly one line.  The radio refuses
    a command by answering ``N`` (or ``?`` if it did not parse it).
    """

    def __init__(self, pipe, timeout=1.0, retries=3):
        self.pipe = pipe
        self.timeout = timeout
        self.retries = retries
        self._lock = threading.Lock()

    def _write(self, data):
        try:
            data = data.encode('cp1252')
        except UnicodeEncodeError as e:
            raise errors.InvalidValueError(
                "Command %r can not be sent: %s" % (data.strip(), e))
        try:
            self.pipe.write(data)
        except (serial.SerialException, OSError) as e:
            raise errors.TransportError("Failed to write to radio: %s" % e)

    def _read(self):
        try:
            return self.pipe.read(COMMAND_RESP_BUFSIZE).decode('cp1252')
        except (serial.SerialException, OSError) as e:
            raise errors.TransportError("Failed to read from radio: %s" % e)

    def _command(self, cmd):
        start = time.time()

        LOG.debug("PC->RADIO: %s" % cmd)
        self._write(cmd + DELIMITER)

        result = ""
        while DELIMITER not in result:
            result += self._read()
            if (time.time() - start) > self.timeout:
                raise errors.RadioTimeoutError(
                    "Timeout waiting for reply to %s" % cmd)

        result, _, extra = result.partition(DELIMITER)
        if extra:
            LOG.debug("Discarding trailing data %r" % extra)
        LOG.debug("RADIO->PC: %r" % result.strip())
        return result.strip()

    def exchange(self, cmd):
        """Send @cmd and return the radio's reply without the terminator"""
        with self._lock:
            attempt = 0
            while True:
                try:
                    result = self._command(cmd)
                    break
                except errors.RadioTimeoutError:
                    if attempt >= self.retries:
                        raise
                    attempt += 1
                    LOG.warning("No reply to %s, retrying (%i/%i)" % (
                        cmd, attempt, self.retries))

        if iserr(result):
            raise errors.RejectedError("Radio rejected `%s'" % cmd,
                                       reply=result)
        return result


def get_id(transport, bauds=None):
    """Get the model the radio on @transport reports.

    If @bauds is given, each rate is tried on the serial port in turn
    until the radio answers.
    """
    if not bauds:
        resp = transport.exchange("ID")
        if " " not in resp:
            raise errors.RejectedError("Unexpected ID reply", reply=resp)
        return resp.split(" ", 1)[1]

    for baud in bauds:
        LOG.info("Trying ID at baud %i" % baud)
        transport.pipe.baudrate = baud
        try:
            return get_id(transport)
        except (errors.RadioTimeoutError, errors.RejectedError,
                UnicodeDecodeError):
            # Wrong rate, or not a Kenwood radio
            continue

    raise errors.RadioError("No response from radio")


def open_serial(port, baudrate=9600, timeout=0.1, rtscts=False):
    """Open @port for talking to a live-mode radio"""
    try:
        return serial.Serial(port=port, baudrate=baudrate, timeout=timeout,
                             rtscts=rtscts)
    except serial.SerialException as e:
        raise errors.TransportError("Unable to open %s: %s" % (port, e))
