# Copyright 2019 Dan Smith <dsmith@danplanet.com>
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

LOG = logging.getLogger(__name__)

EMPTY_ME = "%03i,0146500000,0,0,0,0,0,0,00,00,000,00000000,0,0000000000,0,0"


class FakeTMV71(object):
    """Answers TM-V71 live-mode commands the way the radio does.

    Memories are kept as the raw ME payload text so tests can check exactly
    what was written.  Every command received is kept in ``commands``, and
    ``replies`` can force the answer to a given command.
    """

    def __init__(self):
        self._buffer = b''
        self._line = b''
        self.commands = []
        self.replies = {}
        self.memories = {}
        self.names = {}
        self.bc = [0, 0]
        self.vm = [1, 1]
        self.mr = [0, 0]
        self.busy = [0, 0]
        self.fo = ["0146520000,0,0,0,0,0,0,08,08,000,00600000,1",
                   "0446000000,0,0,0,0,0,0,08,08,000,05000000,1"]
        self.ptt = False

    def add_memory(self, channel, payload=None):
        self.memories[channel] = payload or EMPTY_ME % channel

    def fields(self, channel):
        return self.memories[channel].split(",")

    def write(self, data):
        self._line += data
        while b'\r' in self._line:
            line, self._line = self._line.split(b'\r', 1)
            cmd = line.decode('cp1252')
            self.commands.append(cmd)
            reply = self.handle(cmd)
            LOG.debug('%r -> %r' % (cmd, reply))
            self._buffer += (reply + '\r').encode('cp1252')

    def read(self, count):
        chunk = self._buffer[:count]
        self._buffer = self._buffer[count:]
        return chunk

    def close(self):
        pass

    def handle(self, cmd):
        if cmd in self.replies:
            return self.replies[cmd]

        name, _, args = cmd.partition(" ")
        args = args.split(",") if args else []
        try:
            handler = getattr(self, 'do_%s' % name)
        except AttributeError:
            return '?'
        try:
            return handler(args)
        except (IndexError, ValueError):
            return '?'

    def do_ID(self, args):
        return 'ID TM-V71'

    def do_ME(self, args):
        channel = int(args[0])
        if len(args) == 1:
            if channel not in self.memories:
                return 'N'
        elif len(args) == 16:
            self.memories[channel] = ",".join(args)
        else:
            return 'N'
        return 'ME %s' % self.memories[channel]

    def do_MN(self, args):
        channel = int(args[0])
        if len(args) > 1:
            self.names[channel] = args[1]
        if self.names.get(channel):
            return 'MN %03i,%s' % (channel, self.names[channel])
        return 'MN %03i' % channel

    def do_BC(self, args):
        if args:
            self.bc = [int(args[0]), int(args[1])]
        return 'BC %i,%i' % tuple(self.bc)

    def do_VM(self, args):
        band = int(args[0])
        if len(args) > 1:
            self.vm[band] = int(args[1])
        return 'VM %i,%i' % (band, self.vm[band])

    def do_MR(self, args):
        band = int(args[0])
        if len(args) > 1:
            channel = int(args[1])
            if channel not in self.memories:
                return 'N'
            self.mr[band] = channel
        return 'MR %i,%03i' % (band, self.mr[band])

    def do_BY(self, args):
        band = int(args[0])
        return 'BY %i,%i' % (band, self.busy[band])

    def do_FO(self, args):
        band = int(args[0])
        if len(args) > 1:
            self.fo[band] = ",".join(args[1:])
        return 'FO %i,%s' % (band, self.fo[band])

    def do_TX(self, args):
        self.ptt = True
        return 'TX %i' % self.bc[1]

    def do_RX(self, args):
        self.ptt = False
        return 'RX %i' % self.bc[1]
