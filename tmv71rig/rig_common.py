# Copyright 2008 Dan Smith <dsmith@danplanet.com>
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

# 42 Tones (the common 50, less the ones Kenwood does not do)
TONES = (
    67.0, 69.3, 71.9, 74.4, 77.0, 79.7, 82.5,
    85.4, 88.5, 91.5, 94.8, 97.4, 100.0, 103.5,
    107.2, 110.9, 114.8, 118.8, 123.0, 127.3,
    131.8, 136.5, 141.3, 146.2, 151.4, 156.7,
    162.2, 167.9, 173.8, 179.9, 186.2, 192.8,
    203.5, 206.5, 210.7, 218.1, 225.7, 229.1,
    233.6, 241.8, 250.3, 254.1,
)


def VALIDTONE(v):
    return isinstance(v, float) and 50 < v < 300


# 104 DTCS Codes
DTCS_CODES = (
    23,  25,  26,  31,  32,  36,  43,  47,  51,  53,  54,
    65,  71,  72,  73,  74,  114, 115, 116, 122, 125, 131,
    132, 134, 143, 145, 152, 155, 156, 162, 165, 172, 174,
    205, 212, 223, 225, 226, 243, 244, 245, 246, 251, 252,
    255, 261, 263, 265, 266, 271, 274, 306, 311, 315, 325,
    331, 332, 343, 346, 351, 356, 364, 365, 371, 411, 412,
    413, 423, 431, 432, 445, 446, 452, 454, 455, 462, 464,
    465, 466, 503, 506, 516, 523, 526, 532, 546, 565, 606,
    612, 624, 627, 631, 632, 654, 662, 664, 703, 712, 723,
    731, 732, 734, 743, 754,
)

# Index is the step code the radio uses in ME/FO records
TUNING_STEPS = (
    5.0, 6.25, 8.33, 10.0, 12.5, 15.0, 20.0, 25.0, 30.0, 50.0, 100.0,
)

VFO_A = "VFOA"
VFO_B = "VFOB"
VFO_CURR = "currVFO"
VFO_MEM = "MEM"
VFO_VFO = "VFO"
VFOS = [VFO_A, VFO_B, VFO_CURR, VFO_MEM, VFO_VFO]

MODE_WFM = "WFM"
MODE_NFM = "NFM"
MODE_AM = "AM"
# FM is accepted on input and means narrow
MODE_FM = "FM"
MODES = [MODE_WFM, MODE_NFM, MODE_AM, MODE_FM]

#: Passband in Hz for each mode
PASSBANDS = {
    MODE_WFM: 15000,
    MODE_NFM: 5000,
    MODE_AM: 4000,
}

SHIFTS = ["", "+", "-"]

TONE_MODES = ["", "Tone", "TSQL", "DTCS"]

SKIP_VALUES = ["", "L"]

CHARSET_ASCII = "".join([chr(x) for x in range(ord(" "), ord("~") + 1)])

#: Characters the radio accepts in a memory name
CHARSET_NAME = CHARSET_ASCII.replace(",", "")


def parse_freq(freqstr: str) -> int:
    """Parse a frequency string and return the value in integral Hz"""
    freqstr = freqstr.strip()
    if freqstr == "":
        return 0
    elif freqstr.endswith(" MHz"):
        return parse_freq(freqstr.split(" ")[0])
    elif freqstr.endswith(" kHz"):
        return int(freqstr.split(" ")[0]) * 1000

    if "." in freqstr:
        _mhz, _khz = freqstr.split(".")
        if _mhz == "":
            _mhz = "0"
        _khz = _khz.ljust(6, "0")
        if len(_khz) > 6:
            raise ValueError("Invalid kHz value: %s" % _khz)
        mhz = int(_mhz) * 1000000
        khz = int(_khz)
    else:
        mhz = int(freqstr) * 1000000
        khz = 0

    return mhz + khz


def format_freq(freq: int) -> str:
    """Format a frequency given in Hz as a string"""

    return "%i.%06i" % (freq // 1000000, freq % 1000000)


def _in(choices):
    def check(v):
        return v in choices
    return check


def _int(min=0, max=None):
    def checkint(v):
        if not isinstance(v, int) or isinstance(v, bool):
            return False
        if v < min:
            return False
        return max is None or v <= max
    return checkint


def _tone(v):
    return v == 0 or VALIDTONE(v)


def _dtcs(v):
    return v == 0 or v in DTCS_CODES


def _name(v):
    return (isinstance(v, str) and len(v) <= 8 and
            all(c in CHARSET_NAME for c in v))


class Channel:
    """A full memory channel as seen by the host.

    Tone values are in Hz and DCS values are code numbers; zero means the
    tone or code is not in use.  Fields the TM-V71 does not store (bank,
    antenna, RIT, XIT, TX mode and width, scan group) are kept at their
    neutral values so that callers can treat every rig the same way.
    """
    number: int = 0
    name: str = ""
    freq: int = 0
    mode: str = MODE_NFM
    width: int = 0
    tuning_step: float = 5.0
    duplex: str = ""
    offset: int = 0
    reverse: bool = False
    ctcss_tone: float = 0
    ctcss_sql: float = 0
    dcs_sql: int = 0
    tx_freq: int = 0
    tx_step: int = 0
    skip: str = ""

    bank: int = 0
    ant: int = 0
    rit: int = 0
    xit: int = 0
    tx_mode: str = ""
    tx_width: int = 0
    scan_group: int = 0

    _valid_map = {
        "number":       _int(0, 999),
        "name":         _name,
        "freq":         _int(0, 9999999999),
        "mode":         _in(MODES),
        "width":        _int(0),
        "tuning_step":  _in(TUNING_STEPS),
        "duplex":       _in(SHIFTS),
        "offset":       _int(0, 99999999),
        "reverse":      _in([True, False]),
        "ctcss_tone":   _tone,
        "ctcss_sql":    _tone,
        "dcs_sql":      _dtcs,
        "tx_freq":      _int(0, 9999999999),
        "tx_step":      _int(0, 9),
        "skip":         _in(SKIP_VALUES),
    }

    def __init__(self, number=0, name=""):
        self.number = number
        self.name = name

    def __setattr__(self, name, val):
        if not hasattr(self, name):
            raise ValueError("No such attribute `%s'" % name)

        if name in self._valid_map:
            if not self._valid_map[name](val):
                raise ValueError("`%s' is not a valid value for `%s'" % (
                    val, name))

        self.__dict__[name] = val

    def __eq__(self, other):
        return (isinstance(other, Channel) and
                self.debug_dump() == other.debug_dump())

    def __repr__(self):
        return '<Channel %i: %s>' % (
            self.number, ','.join('%s=%r' % item
                                  for item in self.debug_dump()))

    def debug_dump(self):
        return [(k, getattr(self, k)) for k in sorted(self._valid_map)]

    @property
    def tmode(self):
        """The tone mode implied by which tone value is set"""
        if self.ctcss_tone:
            return "Tone"
        elif self.ctcss_sql:
            return "TSQL"
        elif self.dcs_sql:
            return "DTCS"
        return ""

    def format_freq(self):
        """Return a properly-formatted string of this channel's frequency"""
        return format_freq(self.freq)

    def __str__(self):
        return "%3i: %-8s %s %s%s %s" % (
            self.number, self.name, self.format_freq(), self.duplex or " ",
            format_freq(self.offset), self.mode)


def BOOLEAN(v):
    assert v in (True, False)


def LIST(v):
    assert hasattr(v, '__iter__')


def INT(min=0, max=None):
    def checkint(v):
        assert isinstance(v, int)
        assert v >= min
        if max is not None:
            assert v <= max

    return checkint


def TONELIST(v):
    assert all(VALIDTONE(x) for x in v)


class RigCaps:
    """Rig capability declaration"""
    _valid_map = {
        "has_get":              LIST,
        "has_set":              LIST,
        "valid_modes":          LIST,
        "valid_vfos":           LIST,
        "valid_shifts":         LIST,
        "valid_tuning_steps":   LIST,
        "valid_tones":          TONELIST,
        "valid_dtcs_codes":     LIST,
        "valid_name_length":    INT(),
        "valid_characters":     LIST,
        "rx_ranges":            LIST,
        "tx_ranges":            LIST,
        "filters":              LIST,
        "channel_ranges":       LIST,
        "serial_rate_min":      INT(),
        "serial_rate_max":      INT(),
        "timeout":              INT(),
        "retry":                INT(),
        "targetable_freq":      BOOLEAN,
    }

    def __setattr__(self, name, val):
        if name.startswith("_"):
            self.__dict__[name] = val
            return
        elif name not in self._valid_map:
            raise ValueError("No such attribute `%s'" % name)

        try:
            self._valid_map[name](val)
        except AssertionError:
            raise ValueError('Invalid value %r for attribute %r' % (
                val, name))

        self.__dict__[name] = val

    def __init__(self):
        self.has_get = []
        self.has_set = []
        self.valid_modes = []
        self.valid_vfos = []
        self.valid_shifts = list(SHIFTS)
        self.valid_tuning_steps = list(TUNING_STEPS)
        self.valid_tones = list(TONES)
        self.valid_dtcs_codes = list(DTCS_CODES)
        self.valid_name_length = 8
        self.valid_characters = CHARSET_NAME
        self.rx_ranges = []
        self.tx_ranges = []
        self.filters = []
        self.channel_ranges = []
        self.serial_rate_min = 9600
        self.serial_rate_max = 9600
        self.timeout = 1000
        self.retry = 3
        self.targetable_freq = False

    def can_get(self, func):
        return func in self.has_get

    def can_set(self, func):
        return func in self.has_set


class LiveRig:
    """Base class for all live-mode rig drivers"""
    VENDOR = "Unknown"
    MODEL = "Unknown"
    VARIANT = ""
    BAUD_RATE = 9600
    HARDWARE_FLOW = False

    def __init__(self, pipe):
        self.pipe = pipe

    @classmethod
    def get_name(cls):
        """Return a printable name for this rig"""
        return "%s %s" % (cls.VENDOR, cls.MODEL)

    def get_caps(self) -> RigCaps:
        """Return a RigCaps object for this rig"""
        return RigCaps()
