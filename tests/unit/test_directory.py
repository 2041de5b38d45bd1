from tests.unit import base
from tmv71rig import directory
from tmv71rig import rig_common
from tmv71rig.drivers import tmv71


class TestDirectory(base.BaseTest):
    def test_class_id(self):
        self.assertEqual("Kenwood_TM-V71",
                         directory.rig_class_id(tmv71.TMV71Rig))

    def test_registered(self):
        self.assertIs(tmv71.TMV71Rig, directory.get_rig("Kenwood_TM-V71"))
        self.assertEqual("Kenwood_TM-V71",
                         directory.get_driver(tmv71.TMV71Rig))

    def test_subclass_driver(self):
        class Variant(tmv71.TMV71Rig):
            pass
        self.assertEqual("Kenwood_TM-V71", directory.get_driver(Variant))

    def test_unknown(self):
        self.assertRaises(Exception, directory.get_rig, "Foo_Bar")

    def test_duplicate(self):
        class Dupe(rig_common.LiveRig):
            VENDOR = "Kenwood"
            MODEL = "TM-V71"
        self.assertRaises(Exception, directory.register, Dupe)
        self.assertIs(tmv71.TMV71Rig, directory.get_rig("Kenwood_TM-V71"))

    def test_register_new(self):
        @directory.register
        class FakeRig(rig_common.LiveRig):
            VENDOR = "Dan"
            MODEL = "Foomaster 9000"
            VARIANT = "R (test)"
        try:
            self.assertEqual("Dan_Foomaster_9000_R_test",
                             directory.rig_class_id(FakeRig))
            self.assertIs(FakeRig,
                          directory.get_rig("Dan_Foomaster_9000_R_test"))
        finally:
            del directory.DRV_TO_RIG["Dan_Foomaster_9000_R_test"]
            del directory.RIG_TO_DRV[FakeRig]

    def test_get_rig_by_model(self):
        self.assertIs(tmv71.TMV71Rig, directory.get_rig_by_model("TM-V71"))
        self.assertRaises(Exception, directory.get_rig_by_model, "TS-2000")
