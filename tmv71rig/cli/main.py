#!/usr/bin/env python
#
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

import argparse
import logging
import sys

from tmv71rig import config
from tmv71rig import directory
from tmv71rig import errors
from tmv71rig import logger
from tmv71rig import rig_common
from tmv71rig import TMV71RIG_VERSION
from tmv71rig.drivers import kenwood_live

directory.import_drivers()

LOG = logging.getLogger("tmv71ctl")
RIGS = directory.DRV_TO_RIG


class OnOffAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if values not in ("on", "off"):
            raise argparse.ArgumentError(
                self, "Expected on or off, not `%s'" % values)
        setattr(namespace, self.dest, values == "on")


class VFOAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if values not in rig_common.VFOS:
            raise argparse.ArgumentError(
                self, "Invalid VFO `%s' (%s)" % (
                    values, ", ".join(rig_common.VFOS)))
        setattr(namespace, self.dest, values)


def make_parser(serial_config, rig_config):
    parser = argparse.ArgumentParser(
        prog="tmv71ctl",
        description="Control a Kenwood TM-V71 over its serial port")
    parser.add_argument("--version", action="version",
                        version="tmv71ctl %s" % TMV71RIG_VERSION)
    parser.add_argument("-s", "--serial", dest="serial",
                        default=serial_config.get("port"),
                        help="Serial port (default: %(default)s)")
    parser.add_argument("--baud", type=int,
                        default=serial_config.get_int("baudrate"),
                        help="Serial rate (default: %(default)s)")
    parser.add_argument("-r", "--rig", default="Kenwood_TM-V71",
                        help="Rig model (see --list-rigs)")
    parser.add_argument("--list-rigs", action="store_true",
                        help="List rig models")
    parser.add_argument("--reconcile", choices=["warn", "adopt"],
                        default=rig_config.get("reconcile"),
                        help="What to do when the PTT band was changed "
                        "on the radio (default: %(default)s)")
    parser.add_argument("--vfo", action=VFOAction,
                        default=rig_common.VFO_CURR,
                        help="VFO to operate on (default: %(default)s)")

    parser.add_argument("--id", action="store_true",
                        help="Print the model the radio reports")
    parser.add_argument("--get-vfo", action="store_true",
                        help="Print the selected VFO")
    parser.add_argument("--set-vfo", action=VFOAction,
                        help="Select a VFO (%s)" % ", ".join(
                            rig_common.VFOS))
    parser.add_argument("--get-freq", action="store_true",
                        help="Print the frequency")
    parser.add_argument("--set-freq", metavar="MHZ",
                        help="Set the frequency (in MHz)")
    parser.add_argument("--get-mode", action="store_true",
                        help="Print the mode and passband")
    parser.add_argument("--set-mode",
                        help="Set mode (%s)" % ",".join(rig_common.MODES))
    split = parser.add_mutually_exclusive_group()
    split.add_argument("--split", dest="split", action="store_true",
                       default=None, help="Turn split on")
    split.add_argument("--no-split", dest="split", action="store_false",
                       help="Turn split off")
    parser.add_argument("--tx-vfo", action=VFOAction,
                        help="TX VFO for --split/--no-split (default: "
                        "VFOB with --split, the control band with "
                        "--no-split)")
    parser.add_argument("--get-channel", type=int, metavar="N",
                        help="Print memory channel N")
    parser.add_argument("--ptt", action=OnOffAction,
                        help="Key (on) or unkey (off) the transmitter")
    parser.add_argument("--dcd", action="store_true",
                        help="Print whether the squelch is open")
    logger.add_arguments(parser)
    return parser


def run(rig, options):
    vfo = options.vfo

    if options.set_vfo:
        rig.set_vfo(options.set_vfo)

    if options.split is not None:
        tx_vfo = options.tx_vfo
        if tx_vfo is None:
            tx_vfo = rig_common.VFO_B if options.split else rig_common.VFO_CURR
        rig.set_split_vfo(vfo, options.split, tx_vfo)

    if options.set_mode:
        rig.set_mode(vfo, options.set_mode)

    if options.set_freq:
        try:
            freq = rig_common.parse_freq(options.set_freq)
        except ValueError:
            raise errors.InvalidValueError(
                "Invalid frequency `%s'" % options.set_freq)
        rig.set_freq(vfo, freq)

    if options.ptt is not None:
        rig.set_ptt(vfo, options.ptt)

    if options.get_vfo:
        print(rig.get_vfo())

    if options.get_freq:
        print(rig_common.format_freq(rig.get_freq(vfo)))

    if options.get_mode:
        mode, width = rig.get_mode(vfo)
        print("%s %i" % (mode, width))

    if options.get_channel is not None:
        print(rig.get_channel(options.get_channel))

    if options.dcd:
        print("on" if rig.get_dcd(vfo) else "off")


def main(args=None):
    serial_config = config.get("serial")
    rig_config = config.get("rig")

    parser = make_parser(serial_config, rig_config)
    options = parser.parse_args(args)

    logger.handle_options(options)

    if options.list_rigs:
        print("Supported Rigs:\n\t", "\n\t".join(sorted(RIGS.keys())))
        sys.exit(0)
        return

    status = 0
    try:
        rclass = directory.get_rig(options.rig)
    except Exception as e:
        LOG.error(e)
        sys.exit(1)
        return

    LOG.info("opening %s at %i" % (options.serial, options.baud))
    try:
        pipe = kenwood_live.open_serial(options.serial, options.baud)
    except errors.TransportError as e:
        LOG.error(e)
        sys.exit(1)
        return

    transport = kenwood_live.KenwoodTransport(
        pipe,
        timeout=serial_config.get_float("timeout"),
        retries=serial_config.get_int("retries"))
    try:
        rig = rclass(transport, reconcile=options.reconcile)
    except errors.InvalidValueError as e:
        LOG.error(e)
        pipe.close()
        sys.exit(1)
        return

    rig.open()
    try:
        if options.id:
            print("Model: %s" % kenwood_live.get_id(transport))
        run(rig, options)
    except (errors.RadioError, errors.InvalidValueError) as e:
        LOG.error(e)
        status = 1
    finally:
        rig.close()
        pipe.close()

    sys.exit(status)


if __name__ == "__main__":
    main()
