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

import os
from pathlib import Path


class Platform:
    """Where tmv71rig keeps its per-user files"""

    def __init__(self, basepath):
        self._base = basepath

    def config_dir(self):
        """Return the directory holding tmv71rig.config"""
        return self._base


class UnixPlatform(Platform):
    def __init__(self, basepath=None):
        if not basepath:
            basepath = os.path.join(str(Path.home()), ".tmv71rig")

        Path(basepath).mkdir(exist_ok=True)
        super().__init__(str(basepath))


class Win32Platform(Platform):
    def __init__(self, basepath=None):
        if not basepath:
            appdata = os.getenv("APPDATA") or "C:\\"
            basepath = os.path.abspath(os.path.join(appdata, "tmv71rig"))

        os.makedirs(basepath, exist_ok=True)
        super().__init__(basepath)


def _get_platform(basepath):
    if os.name == "nt":
        return Win32Platform(basepath)
    else:
        return UnixPlatform(basepath)


PLATFORM = None


def get_platform(basepath=None):
    """Return the platform singleton"""
    global PLATFORM

    if not PLATFORM:
        PLATFORM = _get_platform(basepath)

    return PLATFORM
