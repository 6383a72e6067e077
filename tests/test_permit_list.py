import os
import subprocess
import tempfile
import unittest
from unittest import mock

from simpleaf.tools.chemistry import Chemistry, chemistry_dict
from simpleaf.tools.exceptions import ConfigError, StageFailure, StageLaunchError
from simpleaf.tools.permit_list import (
    ALREADY_PRESENT,
    DOWNLOAD_SUCCESSFUL,
    UNREGISTERED_CHEMISTRY,
    get_permit_if_absent,
)


class Test_permit_list(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.af_home = os.path.join(self.tmp_dir.name, "afhome")
        self.environ = {"ALEVIN_FRY_HOME": self.af_home}

    def tearDown(self):
        self.tmp_dir.cleanup()

    @mock.patch("subprocess.run")
    def test_unregistered_chemistry(self, run):
        result = get_permit_if_absent(Chemistry("dropseq"), environ={})
        self.assertEqual(result.status, UNREGISTERED_CHEMISTRY)
        self.assertIsNone(result.path)
        run.assert_not_called()
        self.assertFalse(os.path.exists(self.af_home))

    def test_home_unset(self):
        with self.assertRaises(ConfigError):
            get_permit_if_absent(Chemistry("10xv3"), environ={})

    @mock.patch("subprocess.run")
    def test_already_present(self, run):
        plist_dir = os.path.join(self.af_home, "plist")
        os.makedirs(plist_dir)
        plist_file = os.path.join(plist_dir, "10x_v3_permit.txt")
        with open(plist_file, "w") as f:
            f.write("AAACCCAAGAAACACT\n")

        result = get_permit_if_absent(Chemistry("10xv3"), environ=self.environ)
        self.assertEqual(result.status, ALREADY_PRESENT)
        self.assertEqual(result.path, plist_file)
        run.assert_not_called()

    @mock.patch("subprocess.run", return_value=subprocess.CompletedProcess(args=[], returncode=0))
    def test_download(self, run):
        result = get_permit_if_absent(Chemistry("10xv2"), environ=self.environ)

        plist_file = os.path.join(self.af_home, "plist", "10x_v2_permit.txt")
        self.assertEqual(result.status, DOWNLOAD_SUCCESSFUL)
        self.assertEqual(result.path, plist_file)
        self.assertTrue(os.path.isdir(os.path.dirname(plist_file)))
        run.assert_called_once()
        self.assertEqual(
            run.call_args[0][0],
            ["wget", "-v", "-O", plist_file, "-L", chemistry_dict["10xv2"]["url"]],
        )

    @mock.patch("subprocess.run", return_value=subprocess.CompletedProcess(args=[], returncode=4))
    def test_download_failed(self, _run):
        with self.assertRaises(StageFailure) as cm:
            get_permit_if_absent(Chemistry("10xv2"), environ=self.environ)
        self.assertEqual(cm.exception.returncode, 4)

    def test_failed_download_not_cached(self):
        plist_file = os.path.join(self.af_home, "plist", "10x_v3_permit.txt")

        def fake_wget(cmd, **kwargs):
            # wget truncates the -O target before the transfer fails
            open(cmd[3], "w").close()
            return subprocess.CompletedProcess(args=cmd, returncode=4)

        with mock.patch("subprocess.run", side_effect=fake_wget):
            with self.assertRaises(StageFailure):
                get_permit_if_absent(Chemistry("10xv3"), environ=self.environ)
        self.assertFalse(os.path.exists(plist_file))

        with mock.patch("subprocess.run", return_value=subprocess.CompletedProcess(args=[], returncode=0)) as run:
            result = get_permit_if_absent(Chemistry("10xv3"), environ=self.environ)
        self.assertEqual(result.status, DOWNLOAD_SUCCESSFUL)
        run.assert_called_once()

    @mock.patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory", "wget"))
    def test_wget_missing(self, _run):
        with self.assertRaises(StageLaunchError) as cm:
            get_permit_if_absent(Chemistry("10xv2"), environ=self.environ)
        self.assertEqual(cm.exception.stage, "permit list download")
        self.assertIn("wget", str(cm.exception))


if __name__ == "__main__":
    unittest.main()
