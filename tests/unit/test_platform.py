import os
import tempfile
from unittest import mock

from tests.unit import base
from tmv71rig import platform


class UnixPlatformTest(base.BaseTest):
    def test_config_dir(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, 'cfg')
            p = platform.UnixPlatform(path)
            self.assertTrue(os.path.isdir(path))
            self.assertEqual(path, p.config_dir())

    def test_default_dir(self):
        with tempfile.TemporaryDirectory() as d:
            with mock.patch('pathlib.Path.home', return_value=d):
                p = platform.UnixPlatform()
            self.assertEqual(os.path.join(d, '.tmv71rig'), p.config_dir())


class Win32PlatformTest(base.BaseTest):
    def test_appdata(self):
        with tempfile.TemporaryDirectory() as d:
            with mock.patch.dict(os.environ, {'APPDATA': d}):
                p = platform.Win32Platform()
            self.assertEqual(os.path.join(d, 'tmv71rig'), p.config_dir())
            self.assertTrue(os.path.isdir(p.config_dir()))


class GetPlatformTest(base.BaseTest):
    def test_singleton(self):
        with tempfile.TemporaryDirectory() as d:
            with mock.patch.object(platform, 'PLATFORM', None):
                first = platform.get_platform(d)
                self.assertIs(first, platform.get_platform())
                self.assertEqual(d, first.config_dir())
