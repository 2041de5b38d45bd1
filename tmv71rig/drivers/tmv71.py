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

"""Kenwood TM-V71(A) live-mode driver.

In VFO mode the TM-V71 will only tune within the band the VFO is currently
on, so to go from 146.52 to 446.0 MHz the band would first have to be
switched by hand.  This driver never uses the radio's VFO mode.  Instead
it keeps both bands in memory mode and uses channels 998 and 999 as
stand-ins for VFO A and VFO B, which can be set to any frequency the
radio supports.
"""

import logging

from tmv71rig import directory
from tmv71rig import errors
from tmv71rig import rig_common
from tmv71rig.drivers import tmv71_ll as ll

LOG = logging.getLogger(__name__)

VFO_CHANNELS = {
    rig_common.VFO_A: 998,
    rig_common.VFO_B: 999,
}
CHANNEL_VFOS = {v: k for k, v in VFO_CHANNELS.items()}

VFO_BANDS = {
    rig_common.VFO_A: ll.BAND_A,
    rig_common.VFO_B: ll.BAND_B,
}
BAND_VFOS = {v: k for k, v in VFO_BANDS.items()}

TMV71_MODES = {
    0: rig_common.MODE_WFM,
    1: rig_common.MODE_NFM,
    2: rig_common.MODE_AM,
}
MODE_CODES = {
    rig_common.MODE_WFM: 0,
    rig_common.MODE_NFM: 1,
    rig_common.MODE_FM: 1,
    rig_common.MODE_AM: 2,
}

TMV71_SHIFTS = {0: "", 1: "+", 2: "-"}
SHIFT_CODES = {v: k for k, v in TMV71_SHIFTS.items()}

#: Channels usable for ordinary memories
MEMORY_BOUNDS = (0, 999)

#: Frequencies at or above this are only tunable in 10 kHz steps
COARSE_THRESHOLD = 470000000
COARSE_STEP = 4

RECONCILE_WARN = "warn"
RECONCILE_ADOPT = "adopt"
RECONCILE_POLICIES = [RECONCILE_WARN, RECONCILE_ADOPT]

# (low, high) in Hz
RX_RANGES = [
    (118000000, 470000000),
    (136000000, 174000000),
    (300000000, 524000000),
    (800000000, 1300000000),
]
TX_RANGES = [
    (144000000, 148000000),
    (430000000, 450000000),
]


def _nearest(freq, grid):
    return (freq + grid // 2) // grid * grid


def snap_frequency(freq):
    """Snap @freq to the closest frequency the radio can store.

    Returns (frequency, step index).  Below 470 MHz the result lies on
    either the 5 kHz or the 6.25 kHz grid, whichever is closer, with ties
    going to 5 kHz.  From 470 MHz up only the 10 kHz grid is used.
    """
    on_5k = _nearest(freq, 5000)
    on_6k25 = _nearest(freq, 6250)

    if abs(on_6k25 - freq) < abs(on_5k - freq):
        snapped, step = on_6k25, 1
    else:
        snapped, step = on_5k, 0

    if snapped >= COARSE_THRESHOLD:
        snapped, step = _nearest(freq, 10000), COARSE_STEP

    return snapped, step


def _opposite(vfo):
    if vfo == rig_common.VFO_A:
        return rig_common.VFO_B
    return rig_common.VFO_A


class SplitState:
    """What the host last asked for in terms of TX/RX VFOs and split"""

    def __init__(self):
        self.tx_vfo = rig_common.VFO_A
        self.rx_vfo = rig_common.VFO_A
        self.split = False

    def __repr__(self):
        return '<SplitState tx=%s rx=%s split=%s>' % (
            self.tx_vfo, self.rx_vfo, self.split)


@directory.register
class TMV71Rig(rig_common.LiveRig):
    """Kenwood TM-V71"""
    VENDOR = "Kenwood"
    MODEL = "TM-V71"
    BAUD_RATE = 9600

    def __init__(self, pipe, reconcile=RECONCILE_WARN):
        super().__init__(pipe)
        if reconcile not in RECONCILE_POLICIES:
            raise errors.InvalidValueError(
                "Unknown reconcile policy `%s'" % reconcile)
        self.reconcile = reconcile
        self._state = None

    def get_caps(self):
        caps = rig_common.RigCaps()
        caps.has_get = ["freq", "split_freq", "mode", "vfo", "ts",
                        "ctcss_tone", "ctcss_sql", "dcs_sql", "split_vfo",
                        "rptr_shift", "rptr_offs", "mem", "channel", "dcd"]
        caps.has_set = ["freq", "split_freq", "mode", "vfo", "ts",
                        "ctcss_tone", "ctcss_sql", "dcs_sql", "split_vfo",
                        "rptr_shift", "rptr_offs", "mem", "channel", "ptt"]
        caps.valid_modes = [rig_common.MODE_WFM, rig_common.MODE_NFM,
                            rig_common.MODE_AM]
        caps.valid_vfos = [rig_common.VFO_A, rig_common.VFO_B,
                           rig_common.VFO_MEM]
        caps.rx_ranges = list(RX_RANGES)
        caps.tx_ranges = list(TX_RANGES)
        caps.filters = [(mode, width)
                        for mode, width in rig_common.PASSBANDS.items()]
        caps.channel_ranges = [(0, 199, "mem"),
                               (200, 219, "edge"),
                               (221, 222, "call")]
        caps.serial_rate_min = 9600
        caps.serial_rate_max = 57600
        caps.timeout = 1000
        caps.retry = 3
        caps.targetable_freq = True
        return caps

    def open(self):
        """Start a session.  The radio itself is left alone until the
        first VFO selection."""
        self._state = SplitState()

    def close(self):
        self._state = None

    @property
    def state(self):
        if self._state is None:
            raise errors.RadioError("Rig session is not open")
        return self._state

    # Channel selection

    def _current_band(self):
        return ll.pull_bc(self.pipe).ctrl

    def vfo_to_channel(self, vfo):
        """Return the memory channel standing in for @vfo.

        The current VFO and MEM both resolve to the virtual channel of the
        band that has control.
        """
        if vfo in VFO_CHANNELS:
            return VFO_CHANNELS[vfo]
        elif vfo in (None, rig_common.VFO_CURR, rig_common.VFO_MEM):
            try:
                return VFO_CHANNELS[BAND_VFOS[self._current_band()]]
            except errors.RadioError as e:
                LOG.warning("Unable to resolve current VFO (%s), "
                            "using VFOA" % e)
                return VFO_CHANNELS[rig_common.VFO_A]
        raise errors.InvalidValueError("Unsupported VFO `%s'" % vfo)

    def _vfo_to_band(self, vfo):
        if vfo in VFO_BANDS:
            return VFO_BANDS[vfo]
        elif vfo in (None, rig_common.VFO_CURR, rig_common.VFO_MEM):
            return self._current_band()
        raise errors.InvalidValueError("Unsupported VFO `%s'" % vfo)

    def _rx_vfo(self, vfo):
        state = self.state
        return state.rx_vfo if state.split else vfo

    def _tx_vfo(self, vfo):
        state = self.state
        return state.tx_vfo if state.split else vfo

    # Memory record access

    def _pull(self, vfo):
        return ll.pull_me(self.pipe, self.vfo_to_channel(vfo))

    def update_memory_channel(self, channel, update):
        """Read @channel, change only the fields set in @update, write it
        back, and return the new record."""
        record = ll.pull_me(self.pipe, channel)
        record = ll.apply_update(record, update)
        return ll.push_me(self.pipe, record)

    def _update(self, vfo, **fields):
        return self.update_memory_channel(self.vfo_to_channel(vfo),
                                          ll.MemoryUpdate(**fields))

    def _provision(self, channel):
        try:
            ll.pull_me(self.pipe, channel)
        except errors.RejectedError:
            LOG.info("Channel %i is empty, creating it" % channel)
            ll.push_me(self.pipe, ll.empty_record(channel))

    # VFO selection

    def set_vfo(self, vfo):
        LOG.debug("set_vfo %s" % vfo)
        state = self.state
        if vfo == rig_common.VFO_VFO:
            vfo = rig_common.VFO_A

        if vfo in VFO_BANDS:
            band = VFO_BANDS[vfo]
            channel = VFO_CHANNELS[vfo]
            ll.push_vm(self.pipe, ll.BandMode(band, ll.BAND_MODE_MEMORY))
            self._provision(channel)
            ll.push_mr(self.pipe, ll.MemoryChannel(band, channel))
            ll.push_bc(self.pipe, ll.BandControl(band, band))
            if not state.split:
                state.tx_vfo = state.rx_vfo = vfo
        elif vfo == rig_common.VFO_MEM:
            band = self._current_band()
            ll.push_vm(self.pipe, ll.BandMode(band, ll.BAND_MODE_MEMORY))
        else:
            raise errors.InvalidValueError("Unsupported VFO `%s'" % vfo)

    def get_vfo(self):
        band = self._current_band()
        channel = ll.pull_mr(self.pipe, band).channel
        vfo = CHANNEL_VFOS.get(channel, rig_common.VFO_MEM)
        LOG.debug("Band %i is on channel %i (%s)" % (band, channel, vfo))
        return vfo

    # Split operation

    def set_split_vfo(self, vfo, split, tx_vfo):
        """Turn split on or off with @tx_vfo as the TX VFO.  The current
        VFO as @tx_vfo means the band that has control."""
        state = self.state
        if tx_vfo in (None, rig_common.VFO_CURR):
            tx_vfo = BAND_VFOS[self._current_band()]
        if tx_vfo not in VFO_BANDS:
            raise errors.InvalidValueError("Unsupported TX VFO `%s'" % tx_vfo)

        band = VFO_BANDS[tx_vfo]
        ll.push_bc(self.pipe, ll.BandControl(band, band))

        if split:
            state.tx_vfo = tx_vfo
            state.rx_vfo = _opposite(tx_vfo)
            state.split = True
            LOG.debug("Split on, TX %s RX %s" % (state.tx_vfo, state.rx_vfo))
        else:
            state.split = False

    def get_split_vfo(self, vfo=None):
        """Returns (split, tx_vfo) as last set by the host"""
        state = self.state
        ptt = ll.pull_bc(self.pipe).ptt

        if BAND_VFOS[ptt] != state.tx_vfo:
            LOG.warning("The PTT band has been changed on the radio to %s, "
                        "but the TX VFO is %s" % (BAND_VFOS[ptt],
                                                  state.tx_vfo))
            if self.reconcile == RECONCILE_ADOPT:
                state.tx_vfo = BAND_VFOS[ptt]
                state.rx_vfo = _opposite(state.tx_vfo)
                LOG.info("Using %s as the TX VFO" % state.tx_vfo)

        return state.split, state.tx_vfo

    # Frequency

    def _check_freq(self, freq):
        if not isinstance(freq, int):
            raise errors.InvalidValueError("Frequency must be in Hz")
        for low, high in RX_RANGES:
            if low <= freq <= high:
                return
        raise errors.InvalidValueError(
            "Frequency %s is out of range" % rig_common.format_freq(freq))

    def _set_freq(self, vfo, freq):
        self._check_freq(freq)
        freq, step = snap_frequency(freq)
        self._update(vfo, freq=freq, step=step)

    def set_freq(self, vfo, freq):
        self._set_freq(self._rx_vfo(vfo), freq)

    def get_freq(self, vfo):
        return self._pull(self._rx_vfo(vfo)).freq

    def set_split_freq(self, vfo, freq):
        self._set_freq(self._tx_vfo(vfo), freq)

    def get_split_freq(self, vfo):
        return self._pull(self._tx_vfo(vfo)).freq

    # Mode and step

    def set_mode(self, vfo, mode, width=None):
        try:
            code = MODE_CODES[mode]
        except KeyError:
            raise errors.InvalidValueError("Unsupported mode `%s'" % mode)
        self._update(self._rx_vfo(vfo), mode=code)

    def get_mode(self, vfo):
        """Returns (mode, passband in Hz)"""
        mode = TMV71_MODES[self._pull(self._rx_vfo(vfo)).mode]
        return mode, rig_common.PASSBANDS[mode]

    def set_ts(self, vfo, ts):
        try:
            step = rig_common.TUNING_STEPS.index(ts)
        except ValueError:
            raise errors.InvalidValueError("Unsupported tuning step %s" % ts)
        self._update(vfo, step=step)

    def get_ts(self, vfo):
        return rig_common.TUNING_STEPS[self._pull(vfo).step]

    # Tones

    def set_ctcss_tone(self, vfo, tone):
        if not tone:
            self._update(vfo, tone=0)
            return
        try:
            index = rig_common.TONES.index(tone)
        except ValueError:
            raise errors.UnsupportedToneError("Tone %s not supported" % tone)
        self._update(vfo, tone=1, ct=0, dcs=0, tone_freq=index)

    def get_ctcss_tone(self, vfo):
        record = self._pull(vfo)
        return rig_common.TONES[record.tone_freq] if record.tone else 0

    def set_ctcss_sql(self, vfo, tone):
        if not tone:
            self._update(vfo, ct=0)
            return
        try:
            index = rig_common.TONES.index(tone)
        except ValueError:
            raise errors.UnsupportedToneError("Tone %s not supported" % tone)
        self._update(vfo, tone=0, ct=1, dcs=0, ct_freq=index)

    def get_ctcss_sql(self, vfo):
        record = self._pull(vfo)
        return rig_common.TONES[record.ct_freq] if record.ct else 0

    def set_dcs_sql(self, vfo, code):
        if not code:
            self._update(vfo, dcs=0)
            return
        try:
            index = rig_common.DTCS_CODES.index(code)
        except ValueError:
            raise errors.UnsupportedToneError("DCS code %s not supported" %
                                              code)
        self._update(vfo, tone=0, ct=0, dcs=1, dcs_val=index)

    def get_dcs_sql(self, vfo):
        record = self._pull(vfo)
        return rig_common.DTCS_CODES[record.dcs_val] if record.dcs else 0

    # Repeater

    def set_rptr_shift(self, vfo, shift):
        try:
            code = SHIFT_CODES[shift]
        except KeyError:
            raise errors.InvalidValueError("Unsupported shift `%s'" % shift)
        self._update(vfo, shift=code)

    def get_rptr_shift(self, vfo):
        return self._decode_shift(self._pull(vfo).shift)

    @staticmethod
    def _decode_shift(code):
        try:
            return TMV71_SHIFTS[code]
        except KeyError:
            raise errors.ProtocolError("Unknown repeater shift %i" % code)

    def set_rptr_offs(self, vfo, offset):
        if not isinstance(offset, int) or not 0 <= offset < 10 ** 8:
            raise errors.InvalidValueError("Invalid offset %r" % offset)
        offset, _step = snap_frequency(offset)
        self._update(vfo, offset=offset)

    def get_rptr_offs(self, vfo):
        return self._pull(vfo).offset

    # Memory channels

    def _check_memory(self, number):
        if not isinstance(number, int) or not (
                MEMORY_BOUNDS[0] <= number <= MEMORY_BOUNDS[1]):
            raise errors.InvalidMemoryLocation(
                "Number must be between %i and %i" % MEMORY_BOUNDS)

    def _check_unreserved(self, number):
        self._check_memory(number)
        if number in CHANNEL_VFOS:
            raise errors.InvalidMemoryLocation(
                "Channel %i is used for %s" % (number, CHANNEL_VFOS[number]))

    def set_mem(self, vfo, number):
        self._check_unreserved(number)
        band = self._vfo_to_band(vfo)
        ll.push_mr(self.pipe, ll.MemoryChannel(band, number))

    def get_mem(self, vfo):
        return ll.pull_mr(self.pipe, self._vfo_to_band(vfo)).channel

    def get_channel(self, number):
        self._check_memory(number)
        record = ll.pull_me(self.pipe, number)

        channel = rig_common.Channel(number)
        channel.freq = record.freq
        channel.mode = TMV71_MODES[record.mode]
        channel.width = rig_common.PASSBANDS[channel.mode]
        channel.tuning_step = rig_common.TUNING_STEPS[record.step]
        channel.duplex = self._decode_shift(record.shift)
        channel.offset = record.offset
        channel.reverse = bool(record.reverse)
        if record.tone:
            channel.ctcss_tone = rig_common.TONES[record.tone_freq]
        if record.ct:
            channel.ctcss_sql = rig_common.TONES[record.ct_freq]
        if record.dcs:
            channel.dcs_sql = rig_common.DTCS_CODES[record.dcs_val]
        channel.tx_freq = record.tx_freq
        channel.tx_step = record.tx_step
        channel.skip = "L" if record.lockout else ""
        channel.name = ll.pull_mn(self.pipe, number).name

        return channel

    def _make_record(self, channel):
        try:
            mode = MODE_CODES[channel.mode]
            step = rig_common.TUNING_STEPS.index(channel.tuning_step)
            shift = SHIFT_CODES[channel.duplex]
            tone_freq = (rig_common.TONES.index(channel.ctcss_tone)
                         if channel.ctcss_tone else 0)
            ct_freq = (rig_common.TONES.index(channel.ctcss_sql)
                       if channel.ctcss_sql else 0)
            dcs_val = (rig_common.DTCS_CODES.index(channel.dcs_sql)
                       if channel.dcs_sql else 0)
        except (KeyError, ValueError) as e:
            raise errors.InvalidValueError(
                "Channel %i can not be stored: %s" % (channel.number, e))

        # Only one of the tone modes may be on
        tone = ct = dcs = 0
        if channel.ctcss_tone:
            tone = 1
        elif channel.ctcss_sql:
            ct = 1
        elif channel.dcs_sql:
            dcs = 1

        return ll.MemoryRecord(
            channel=channel.number,
            freq=channel.freq,
            step=step,
            shift=shift,
            reverse=int(channel.reverse),
            tone=tone,
            ct=ct,
            dcs=dcs,
            tone_freq=tone_freq,
            ct_freq=ct_freq,
            dcs_val=dcs_val,
            offset=channel.offset,
            mode=mode,
            tx_freq=channel.tx_freq,
            tx_step=channel.tx_step,
            lockout=int(channel.skip == "L"))

    def set_channel(self, channel):
        self._check_unreserved(channel.number)
        record = self._make_record(channel)
        name = ll.MemoryName(channel.number, channel.name)
        ll.check_mn(name)
        ll.push_me(self.pipe, record)
        ll.push_mn(self.pipe, name)

    # PTT and carrier detect

    def set_ptt(self, vfo, ptt):
        if ptt:
            ll.push_tx(self.pipe)
        else:
            ll.push_rx(self.pipe)

    def get_dcd(self, vfo):
        band = self._vfo_to_band(vfo)
        return bool(ll.pull_by(self.pipe, band).busy)
