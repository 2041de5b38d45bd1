from tests.unit import base
from tmv71rig import rig_common


class TestFrequencyParsing(base.BaseTest):
    def test_parse_freq_whole(self):
        self.assertEqual(146000000, rig_common.parse_freq("146"))
        self.assertEqual(146000000, rig_common.parse_freq("146.0"))
        self.assertEqual(146000000, rig_common.parse_freq("146 MHz"))

    def test_parse_freq_decimal(self):
        self.assertEqual(146520000, rig_common.parse_freq("146.52"))
        self.assertEqual(146006250, rig_common.parse_freq("146.00625"))
        self.assertEqual(520000, rig_common.parse_freq(".52"))

    def test_parse_freq_khz(self):
        self.assertEqual(600000, rig_common.parse_freq("600 kHz"))

    def test_parse_freq_bad(self):
        self.assertRaises(ValueError, rig_common.parse_freq, "146.5200001")
        self.assertRaises(ValueError, rig_common.parse_freq, "abc")

    def test_format_freq(self):
        self.assertEqual("146.520000", rig_common.format_freq(146520000))
        self.assertEqual("1270.000000", rig_common.format_freq(1270000000))


class TestTables(base.BaseTest):
    def test_tones(self):
        self.assertEqual(42, len(rig_common.TONES))
        self.assertNotIn(159.8, rig_common.TONES)
        self.assertEqual(12, rig_common.TONES.index(100.0))

    def test_dtcs(self):
        self.assertEqual(104, len(rig_common.DTCS_CODES))

    def test_steps(self):
        self.assertEqual(4, rig_common.TUNING_STEPS.index(12.5))
        self.assertEqual(11, len(rig_common.TUNING_STEPS))


class TestChannel(base.BaseTest):
    def test_defaults(self):
        channel = rig_common.Channel(12, "TEST")
        self.assertEqual(12, channel.number)
        self.assertEqual("TEST", channel.name)
        self.assertEqual("", channel.tmode)
        self.assertEqual(0, channel.bank)

    def test_no_such_attribute(self):
        channel = rig_common.Channel()
        self.assertRaises(ValueError, setattr, channel, 'power', 5)

    def test_validation(self):
        channel = rig_common.Channel()
        self.assertRaises(ValueError, setattr, channel, 'mode', 'USB')
        self.assertRaises(ValueError, setattr, channel, 'duplex', 'split')
        self.assertRaises(ValueError, setattr, channel, 'number', 1000)
        self.assertRaises(ValueError, setattr, channel, 'name', 'TOOLONGNAME')
        self.assertRaises(ValueError, setattr, channel, 'name', 'A,B')
        self.assertRaises(ValueError, setattr, channel, 'name', 'A\rTX')
        self.assertRaises(ValueError, setattr, channel, 'name',
                          '\u65e5\u672c')
        self.assertRaises(ValueError, setattr, channel, 'dcs_sql', 24)
        self.assertRaises(ValueError, setattr, channel, 'tuning_step', 7.0)
        self.assertRaises(ValueError, setattr, channel, 'freq', True)

    def test_tmode(self):
        channel = rig_common.Channel()
        channel.dcs_sql = 23
        self.assertEqual("DTCS", channel.tmode)
        channel.ctcss_sql = 88.5
        self.assertEqual("TSQL", channel.tmode)
        channel.ctcss_tone = 88.5
        self.assertEqual("Tone", channel.tmode)

    def test_equal(self):
        a = rig_common.Channel(1, "A")
        b = rig_common.Channel(1, "A")
        self.assertEqual(a, b)
        b.freq = 146520000
        self.assertNotEqual(a, b)

    def test_str(self):
        channel = rig_common.Channel(1, "CALL")
        channel.freq = 146520000
        self.assertIn("146.520000", str(channel))
        self.assertIn("CALL", str(channel))


class TestRigCaps(base.BaseTest):
    def test_defaults(self):
        caps = rig_common.RigCaps()
        self.assertEqual(list(rig_common.TONES), caps.valid_tones)
        self.assertNotIn(",", caps.valid_characters)

    def test_validation(self):
        caps = rig_common.RigCaps()
        self.assertRaises(ValueError, setattr, caps, 'has_foo', True)
        self.assertRaises(ValueError, setattr, caps, 'valid_tones', [1.0])
        self.assertRaises(ValueError, setattr, caps, 'targetable_freq', 3)

    def test_can(self):
        caps = rig_common.RigCaps()
        caps.has_get = ["freq"]
        self.assertTrue(caps.can_get("freq"))
        self.assertFalse(caps.can_set("freq"))
