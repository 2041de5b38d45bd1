# Copyright 2011 Dan Smith <dsmith@danplanet.com>
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
import os
from configparser import ConfigParser

from tmv71rig import platform

LOG = logging.getLogger(__name__)

#: Values used when the config file does not define a key
DEFAULTS = {
    "serial": {
        "port": "/dev/ttyUSB0",
        "baudrate": "9600",
        "timeout": "1.0",
        "retries": "3",
    },
    "rig": {
        "reconcile": "warn",
    },
}


class RigConfig:
    def __init__(self, basepath, name="tmv71rig.config"):
        self.__basepath = basepath
        self.__name = name

        self.__config = ConfigParser(interpolation=None)

        cfg = os.path.join(basepath, name)
        if os.path.exists(cfg):
            try:
                self.__config.read(cfg, encoding='utf-8-sig')
            except UnicodeDecodeError:
                LOG.warning('Failed to read config as UTF-8; '
                            'falling back to default encoding')
                self.__config.read(cfg)

    def save(self):
        cfg = os.path.join(self.__basepath, self.__name)
        with open(cfg, "w", encoding='utf-8') as cfg_file:
            self.__config.write(cfg_file)

    def get(self, key, section):
        if not self.__config.has_option(section, key):
            return DEFAULTS.get(section, {}).get(key)

        return self.__config.get(section, key)

    def set(self, key, value, section):
        if not self.__config.has_section(section):
            self.__config.add_section(section)

        self.__config.set(section, key, value)

    def is_defined(self, key, section):
        return self.__config.has_option(section, key)

    def remove_option(self, section, key):
        self.__config.remove_option(section, key)

        if not self.__config.items(section):
            self.__config.remove_section(section)


class RigConfigProxy:
    def __init__(self, config, section="serial"):
        self._config = config
        self._section = section

    def get(self, key, section=None):
        return self._config.get(key, section or self._section)

    def set(self, key, value, section=None):
        return self._config.set(key, value, section or self._section)

    def get_int(self, key, section=None):
        try:
            return int(self.get(key, section))
        except (TypeError, ValueError):
            LOG.warning("Config value %s is not an integer", key)
            return int(DEFAULTS[section or self._section][key])

    def set_int(self, key, value, section=None):
        if not isinstance(value, int):
            raise ValueError("Value is not an integer")

        self.set(key, "%i" % value, section)

    def get_float(self, key, section=None):
        try:
            return float(self.get(key, section))
        except (TypeError, ValueError):
            LOG.warning("Config value %s is not a number", key)
            return float(DEFAULTS[section or self._section][key])

    def set_float(self, key, value, section=None):
        if not isinstance(value, float):
            raise ValueError("Value is not a float")

        self.set(key, "%.3f" % value, section)

    def get_bool(self, key, section=None, default=False):
        val = self.get(key, section)
        if val is None:
            return default
        else:
            return val == "True"

    def set_bool(self, key, value, section=None):
        self.set(key, str(bool(value)), section)

    def is_defined(self, key, section=None):
        return self._config.is_defined(key, section or self._section)

    def remove_option(self, key, section):
        self._config.remove_option(section, key)


_CONFIG = None


def get(section="serial"):
    global _CONFIG

    p = platform.get_platform()

    if not _CONFIG:
        _CONFIG = RigConfig(p.config_dir())

    return RigConfigProxy(_CONFIG, section)
