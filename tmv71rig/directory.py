# Copyright 2010 Dan Smith <dsmith@danplanet.com>
# Copyright 2012 Tom Hayward <tom@tomh.us>
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

import importlib
import logging

LOG = logging.getLogger(__name__)

DRIVERS = ["tmv71"]


def rig_class_id(cls):
    """Return a unique identification string for @cls"""
    ident = "%s_%s" % (cls.VENDOR, cls.MODEL)
    if cls.VARIANT:
        ident += "_%s" % cls.VARIANT
    ident = ident.replace("/", "_")
    ident = ident.replace(" ", "_")
    ident = ident.replace("(", "")
    ident = ident.replace(")", "")
    return ident


def register(cls):
    """Register rig @cls with the directory"""
    ident = rig_class_id(cls)
    if ident in DRV_TO_RIG:
        raise Exception("Duplicate rig driver id `%s'" % ident)
    LOG.debug("Registered %s = %s" % (ident, cls.__name__))
    DRV_TO_RIG[ident] = cls
    RIG_TO_DRV[cls] = ident

    return cls


DRV_TO_RIG = {}
RIG_TO_DRV = {}


def import_drivers():
    """Import all the known drivers so they register themselves"""
    for name in DRIVERS:
        importlib.import_module("tmv71rig.drivers.%s" % name)


def get_rig(driver):
    """Get rig driver class by identification string"""
    if driver in DRV_TO_RIG:
        return DRV_TO_RIG[driver]
    else:
        raise Exception("Unknown rig type `%s'" % driver)


def get_driver(rclass):
    """Get the identification string for a given class"""
    if rclass in RIG_TO_DRV:
        return RIG_TO_DRV[rclass]
    elif rclass.__bases__[0] in RIG_TO_DRV:
        return RIG_TO_DRV[rclass.__bases__[0]]
    else:
        raise Exception("Unknown rig type `%s'" % rclass)


def get_rig_by_model(model):
    """Find the registered class whose MODEL matches what the rig reports"""
    import_drivers()
    for cls in DRV_TO_RIG.values():
        if cls.MODEL.split(" ")[0] == model:
            return cls
    raise Exception("No driver for model `%s'" % model)
