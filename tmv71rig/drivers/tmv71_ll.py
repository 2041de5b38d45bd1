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

"""Record codec and command primitives for the TM-V71 live protocol.

The render_* and parse_* functions are pure: they turn the typed records
below into the exact text the radio expects and back.  A reply that does
not have the expected prefix, field count, or field domains is refused
with RejectedError; nothing is guessed.

The pull_* and push_* functions each send one command over a transport
(anything with an ``exchange(cmd)`` method) and parse the radio's echo.
"""

import collections

from tmv71rig import errors
from tmv71rig import rig_common

BAND_A = 0
BAND_B = 1
BANDS = (BAND_A, BAND_B)

BAND_MODE_VFO = 0
BAND_MODE_MEMORY = 1
BAND_MODE_CALL = 2
BAND_MODE_WX = 3

NAME_LENGTH = 8

ME_FIELDS = ['channel', 'freq', 'step', 'shift', 'reverse',
             'tone', 'ct', 'dcs', 'tone_freq', 'ct_freq', 'dcs_val',
             'offset', 'mode', 'tx_freq', 'tx_step', 'lockout']

# Every ME field except the channel, each None unless it is to change
UPDATE_FIELDS = ME_FIELDS[1:]

FO_FIELDS = ['band'] + ME_FIELDS[1:13]

MemoryRecord = collections.namedtuple('MemoryRecord', ME_FIELDS)
MemoryUpdate = collections.namedtuple('MemoryUpdate', UPDATE_FIELDS,
                                      defaults=(None,) * len(UPDATE_FIELDS))
VFORecord = collections.namedtuple('VFORecord', FO_FIELDS)
BandControl = collections.namedtuple('BandControl', 'ctrl ptt')
BandMode = collections.namedtuple('BandMode', 'band mode')
MemoryChannel = collections.namedtuple('MemoryChannel', 'band channel')
MemoryName = collections.namedtuple('MemoryName', 'channel name')
BusyState = collections.namedtuple('BusyState', 'band busy')

_FLAG = (0, 1)

#: field -> (width, domain) where width is the rendered digit count
_ME_FORMAT = {
    'channel':   (3, range(0, 1000)),
    'freq':      (10, range(0, 10 ** 10)),
    'step':      (1, range(0, len(rig_common.TUNING_STEPS))),
    # Any digit parses; the driver decides what the value means
    'shift':     (1, range(0, 10)),
    'reverse':   (1, _FLAG),
    'tone':      (1, _FLAG),
    'ct':        (1, _FLAG),
    'dcs':       (1, _FLAG),
    'tone_freq': (2, range(0, len(rig_common.TONES))),
    'ct_freq':   (2, range(0, len(rig_common.TONES))),
    'dcs_val':   (3, range(0, len(rig_common.DTCS_CODES))),
    'offset':    (8, range(0, 10 ** 8)),
    'mode':      (1, range(0, 3)),
    'tx_freq':   (10, range(0, 10 ** 10)),
    'tx_step':   (1, range(0, 10)),
    'lockout':   (1, _FLAG),
}
_FO_FORMAT = dict(_ME_FORMAT, band=(1, BANDS))


def empty_record(channel, freq=146500000):
    """Return the record used to provision an unused channel"""
    return MemoryRecord(channel, freq, *([0] * (len(ME_FIELDS) - 2)))


def apply_update(record, update):
    """Overlay the fields set in @update onto @record"""
    changes = {k: v for k, v in update._asdict().items() if v is not None}
    return record._replace(**changes)


def _split(reply, prefix, counts):
    """Strip @prefix from @reply and return its comma-separated fields"""
    if not reply.startswith(prefix + " "):
        raise errors.RejectedError("Expected %s reply" % prefix, reply=reply)
    fields = reply[len(prefix) + 1:].split(",")
    if len(fields) not in counts:
        raise errors.RejectedError(
            "%s reply has %i fields, expected %s" % (
                prefix, len(fields), " or ".join(str(c) for c in counts)),
            reply=reply)
    return fields


def _number(value, domain, reply):
    if not value.isdigit() or not value.isascii():
        raise errors.RejectedError("Field `%s' is not a number" % value,
                                   reply=reply)
    number = int(value, 10)
    if number not in domain:
        raise errors.RejectedError("Field value %i out of range" % number,
                                   reply=reply)
    return number


def _numbers(fields, names, formats, reply):
    return [_number(value, formats[name][1], reply)
            for name, value in zip(names, fields)]


def _render(prefix, record, formats):
    values = []
    for name, value in record._asdict().items():
        width, domain = formats[name]
        if not isinstance(value, int) or value not in domain:
            raise errors.InvalidValueError(
                "Invalid %s value %r for %s" % (name, value, prefix))
        values.append("%0*d" % (width, value))
    return "%s %s" % (prefix, ",".join(values))


def render_me(record):
    return _render("ME", record, _ME_FORMAT)


def parse_me(reply):
    fields = _split(reply, "ME", (len(ME_FIELDS),))
    return MemoryRecord(*_numbers(fields, ME_FIELDS, _ME_FORMAT, reply))


def render_fo(record):
    return _render("FO", record, _FO_FORMAT)


def parse_fo(reply):
    fields = _split(reply, "FO", (len(FO_FIELDS),))
    return VFORecord(*_numbers(fields, FO_FIELDS, _FO_FORMAT, reply))


def _check_band(band):
    if band not in BANDS:
        raise errors.InvalidValueError("Invalid band %r" % band)


def render_bc(record):
    _check_band(record.ctrl)
    _check_band(record.ptt)
    return "BC %i,%i" % (record.ctrl, record.ptt)


def parse_bc(reply):
    fields = _split(reply, "BC", (2,))
    return BandControl(*[_number(f, BANDS, reply) for f in fields])


def render_vm(record):
    _check_band(record.band)
    if record.mode not in range(BAND_MODE_VFO, BAND_MODE_WX + 1):
        raise errors.InvalidValueError("Invalid band mode %r" % record.mode)
    return "VM %i,%i" % (record.band, record.mode)


def parse_vm(reply):
    band, mode = _split(reply, "VM", (2,))
    return BandMode(_number(band, BANDS, reply),
                    _number(mode, range(BAND_MODE_VFO, BAND_MODE_WX + 1),
                            reply))


def render_mr(record):
    _check_band(record.band)
    if record.channel not in range(0, 1000):
        raise errors.InvalidMemoryLocation(
            "Invalid channel %r" % record.channel)
    return "MR %i,%03i" % (record.band, record.channel)


def parse_mr(reply):
    band, channel = _split(reply, "MR", (2,))
    return MemoryChannel(_number(band, BANDS, reply),
                         _number(channel, range(0, 1000), reply))


def check_mn(record):
    """Raise InvalidValueError unless @record can be sent as an MN command"""
    if record.channel not in range(0, 1000):
        raise errors.InvalidMemoryLocation(
            "Invalid channel %r" % record.channel)
    if len(record.name) > NAME_LENGTH:
        raise errors.InvalidValueError("Name %r is too long" % record.name)
    bad = [c for c in record.name if c not in rig_common.CHARSET_NAME]
    if bad:
        raise errors.InvalidValueError(
            "Name %r contains unsupported characters %r" % (
                record.name, "".join(bad)))


def render_mn(record):
    check_mn(record)
    return "MN %03i,%s" % (record.channel, record.name)


def parse_mn(reply):
    if not reply.startswith("MN "):
        raise errors.RejectedError("Expected MN reply", reply=reply)
    # The name may not contain a comma, so only the first one separates
    fields = reply[3:].split(",", 1)
    channel = _number(fields[0], range(0, 1000), reply)
    name = fields[1] if len(fields) == 2 else ""
    if len(name) > NAME_LENGTH:
        raise errors.RejectedError("Name too long", reply=reply)
    return MemoryName(channel, name)


def parse_by(reply):
    band, busy = _split(reply, "BY", (2,))
    return BusyState(_number(band, BANDS, reply),
                     _number(busy, _FLAG, reply))


def _expect(reply, prefix):
    if reply != prefix and not reply.startswith(prefix + " "):
        raise errors.RejectedError("Expected %s reply" % prefix, reply=reply)


def _check_channel(channel):
    if channel not in range(0, 1000):
        raise errors.InvalidMemoryLocation("Invalid channel %r" % channel)


def pull_me(transport, channel):
    _check_channel(channel)
    record = parse_me(transport.exchange("ME %03i" % channel))
    if record.channel != channel:
        raise errors.RejectedError(
            "Asked for channel %i, got %i" % (channel, record.channel))
    return record


def push_me(transport, record):
    return parse_me(transport.exchange(render_me(record)))


def pull_fo(transport, band):
    _check_band(band)
    return parse_fo(transport.exchange("FO %i" % band))


def push_fo(transport, record):
    return parse_fo(transport.exchange(render_fo(record)))


def pull_bc(transport):
    return parse_bc(transport.exchange("BC"))


def push_bc(transport, record):
    return parse_bc(transport.exchange(render_bc(record)))


def pull_vm(transport, band):
    _check_band(band)
    return parse_vm(transport.exchange("VM %i" % band))


def push_vm(transport, record):
    return parse_vm(transport.exchange(render_vm(record)))


def pull_mr(transport, band):
    _check_band(band)
    return parse_mr(transport.exchange("MR %i" % band))


def push_mr(transport, record):
    return parse_mr(transport.exchange(render_mr(record)))


def pull_mn(transport, channel):
    _check_channel(channel)
    return parse_mn(transport.exchange("MN %03i" % channel))


def push_mn(transport, record):
    return parse_mn(transport.exchange(render_mn(record)))


def push_tx(transport):
    _expect(transport.exchange("TX"), "TX")


def push_rx(transport):
    _expect(transport.exchange("RX"), "RX")


def pull_by(transport, band):
    _check_band(band)
    state = parse_by(transport.exchange("BY %i" % band))
    if state.band != band:
        raise errors.RejectedError(
            "Asked for band %i, got %i" % (band, state.band))
    return state
