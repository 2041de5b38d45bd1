import shutil
import tempfile
from unittest import mock

from tests import tmv71_simulator
from tests.unit import base
from tmv71rig import config
from tmv71rig import errors
from tmv71rig.cli import main


class TestCLI(base.BaseTest):
    def setUp(self):
        super().setUp()
        self.stdout_lines = []
        self.tempdir = tempfile.mkdtemp()
        self.config = config.RigConfig(self.tempdir)
        self.radio = tmv71_simulator.FakeTMV71()

        self.exit = mock.patch('sys.exit').start()
        mock.patch.object(main, 'print', new=self.fake_print).start()
        mock.patch.object(main.config, 'get',
                          side_effect=self.fake_config).start()
        self.open_serial = mock.patch.object(
            main.kenwood_live, 'open_serial',
            return_value=self.radio).start()

    def tearDown(self):
        mock.patch.stopall()
        shutil.rmtree(self.tempdir)

    def fake_config(self, section="serial"):
        return config.RigConfigProxy(self.config, section)

    def fake_print(self, *a):
        for i in a:
            self.stdout_lines.append(str(i))

    @property
    def stdout(self):
        return '\n'.join(self.stdout_lines)

    def test_list_rigs(self):
        main.main(args=['--list-rigs'])
        self.assertIn('Kenwood_TM-V71', self.stdout)
        self.exit.assert_called_once_with(0)
        self.open_serial.assert_not_called()

    def test_unknown_rig(self):
        main.main(args=['--rig', 'Nobody_Nothing'])
        self.exit.assert_called_once_with(1)
        self.open_serial.assert_not_called()

    def test_serial_settings_from_config(self):
        self.config.set('port', '/dev/ttyS3', 'serial')
        self.config.set('baudrate', '57600', 'serial')
        main.main(args=[])
        self.open_serial.assert_called_once_with('/dev/ttyS3', 57600)
        self.exit.assert_called_once_with(0)

    def test_serial_open_fails(self):
        self.open_serial.side_effect = errors.TransportError('busy')
        main.main(args=['--get-freq'])
        self.exit.assert_called_once_with(1)

    def test_id(self):
        main.main(args=['--id'])
        self.assertEqual('Model: TM-V71', self.stdout)

    def test_set_vfo_and_freq(self):
        main.main(args=['--set-vfo', 'VFOA', '--set-freq', '146.52',
                        '--get-freq'])
        self.assertEqual('146.520000', self.stdout)
        self.assertEqual('146520000', self.radio.fields(998)[1][1:])
        self.assertIn('BC 0,0', self.radio.commands)
        self.exit.assert_called_once_with(0)

    def test_get_vfo(self):
        self.radio.add_memory(999)
        self.radio.bc = [1, 1]
        self.radio.mr = [0, 999]
        main.main(args=['--get-vfo'])
        self.assertEqual('VFOB', self.stdout)

    def test_get_mode(self):
        self.radio.add_memory(998)
        main.main(args=['--get-mode'])
        self.assertEqual('WFM 15000', self.stdout)

    def test_set_mode(self):
        self.radio.add_memory(999)
        main.main(args=['--vfo', 'VFOB', '--set-mode', 'AM'])
        self.assertEqual('2', self.radio.fields(999)[12])

    def test_bad_frequency(self):
        main.main(args=['--set-freq', 'abc'])
        self.exit.assert_called_once_with(1)

    def test_out_of_range_frequency(self):
        self.radio.add_memory(998)
        main.main(args=['--set-freq', '10.0'])
        self.exit.assert_called_once_with(1)
        self.assertEqual([], self.radio.commands)

    def test_split(self):
        main.main(args=['--split', '--tx-vfo', 'VFOB'])
        self.assertEqual([1, 1], self.radio.bc)

    def test_split_default_tx(self):
        main.main(args=['--split'])
        self.assertEqual([1, 1], self.radio.bc)

    def test_no_split_keeps_control_band(self):
        main.main(args=['--no-split'])
        self.assertEqual(['BC', 'BC 0,0'], self.radio.commands)
        self.exit.assert_called_once_with(0)

    def test_bad_reconcile_in_config(self):
        self.config.set('reconcile', 'ignore', 'rig')
        main.main(args=['--get-freq'])
        self.exit.assert_called_once_with(1)
        self.assertEqual([], self.radio.commands)

    def test_get_channel(self):
        self.radio.add_memory(5)
        self.radio.names[5] = 'HOME'
        main.main(args=['--get-channel', '5'])
        self.assertIn('HOME', self.stdout)
        self.assertIn('146.500000', self.stdout)

    def test_ptt(self):
        main.main(args=['--ptt', 'on'])
        self.assertTrue(self.radio.ptt)
        main.main(args=['--ptt', 'off'])
        self.assertFalse(self.radio.ptt)

    def test_dcd(self):
        self.radio.busy = [1, 0]
        main.main(args=['--dcd'])
        self.assertEqual('on', self.stdout)

    def test_radio_error(self):
        main.main(args=['--get-freq'])
        self.exit.assert_called_once_with(1)
