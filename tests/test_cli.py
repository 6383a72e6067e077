import contextlib
import io
import os
import subprocess
import tempfile
import unittest
from unittest import mock

from simpleaf.simpleaf import get_parser, main
from simpleaf.tools.exceptions import ResolutionError
from simpleaf.tools.index import index
from simpleaf.tools.prog_utils import ProgInfo, ReqProgs
from simpleaf.tools.quant import quant

REQ_PROGS = ReqProgs({
    "salmon": ProgInfo("/opt/bin/salmon", "1.9.0"),
    "alevin_fry": ProgInfo("/opt/bin/alevin-fry", "0.8.2"),
    "pyroe": ProgInfo("/opt/bin/pyroe", "0.9.3"),
})

QUANT_ARGV = [
    "quant",
    "-i", "idx/index",
    "-1", "a_R1.fq.gz", "b_R1.fq.gz",
    "-2", "a_R2.fq.gz", "b_R2.fq.gz",
    "-r", "cr-like",
    "-c", "10xv3",
    "-m", "t2g.tsv",
    "-o", "quant_out",
]


def parse_error(argv):
    """Returns the exit status of a rejected command line."""
    with contextlib.redirect_stderr(io.StringIO()):
        try:
            get_parser().parse_args(argv)
        except SystemExit as e:
            return e.code
    return None


class Test_parser(unittest.TestCase):

    def test_quant(self):
        args = get_parser().parse_args(QUANT_ARGV + ["--knee"])
        self.assertIs(args.func, quant)
        self.assertEqual(args.reads1, ["a_R1.fq.gz", "b_R1.fq.gz"])
        self.assertEqual(args.reads2, ["a_R2.fq.gz", "b_R2.fq.gz"])
        self.assertTrue(args.knee)
        self.assertIsNone(args.forced_cells)
        self.assertEqual(args.threads, 16)
        self.assertEqual(args.min_reads, 10)
        self.assertEqual(args.t2g_map, "t2g.tsv")

    def test_quant_filter_required(self):
        self.assertEqual(parse_error(QUANT_ARGV), 2)

    def test_quant_filter_exclusive(self):
        self.assertEqual(parse_error(QUANT_ARGV + ["--knee", "--forced-cells", "3000"]), 2)
        self.assertEqual(parse_error(QUANT_ARGV + ["-u", "-e", "500"]), 2)

    def test_index(self):
        args = get_parser().parse_args([
            "index", "-f", "genome.fa", "-g", "genes.gtf", "-r", "91", "-o", "idx", "-d", "-p",
        ])
        self.assertIs(args.func, index)
        self.assertEqual(args.rlen, 91)
        self.assertTrue(args.dedup)
        self.assertTrue(args.sparse)
        self.assertIsNone(args.spliced)

    def test_index_rlen_too_short(self):
        argv = ["index", "-f", "genome.fa", "-g", "genes.gtf", "-r", "5", "-o", "idx"]
        self.assertEqual(parse_error(argv), 2)

    def test_threads_must_be_positive(self):
        self.assertEqual(parse_error(QUANT_ARGV + ["--knee", "-t", "0"]), 2)
        self.assertEqual(parse_error(QUANT_ARGV + ["--knee", "--threads=-4"]), 2)


class Test_main(unittest.TestCase):

    @mock.patch("simpleaf.simpleaf.get_required_progs", side_effect=ResolutionError("could not find `salmon` in your path"))
    def test_error_exit(self, _get_required_progs):
        with self.assertRaises(SystemExit) as cm:
            main(QUANT_ARGV + ["--knee"])
        self.assertEqual(cm.exception.code, 1)

    @mock.patch("simpleaf.simpleaf.get_required_progs", return_value=REQ_PROGS)
    @mock.patch("subprocess.run", return_value=subprocess.CompletedProcess(args=[], returncode=0))
    def test_index_run(self, run, _get_required_progs):
        with tempfile.TemporaryDirectory() as tmp_dir:
            output = os.path.join(tmp_dir, "idx")
            main(["index", "-f", "genome.fa", "-g", "genes.gtf", "-r", "91", "-o", output])
            self.assertTrue(os.path.exists(os.path.join(output, "index_info.json")))
        self.assertEqual(run.call_count, 2)

    @mock.patch("simpleaf.simpleaf.get_required_progs", return_value=REQ_PROGS)
    @mock.patch("subprocess.run", side_effect=[subprocess.CompletedProcess(args=[], returncode=3)])
    def test_stage_failure_exit(self, run, _get_required_progs):
        with tempfile.TemporaryDirectory() as tmp_dir:
            argv = QUANT_ARGV[:-1] + [os.path.join(tmp_dir, "quant_out"), "--knee"]
            with self.assertRaises(SystemExit) as cm:
                main(argv)
        self.assertEqual(cm.exception.code, 1)
        run.assert_called_once()

    @mock.patch("simpleaf.simpleaf.get_required_progs", return_value=REQ_PROGS)
    @mock.patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory", "/opt/bin/salmon"))
    def test_program_missing_exit(self, run, _get_required_progs):
        with tempfile.TemporaryDirectory() as tmp_dir:
            argv = QUANT_ARGV[:-1] + [os.path.join(tmp_dir, "quant_out"), "--knee"]
            with self.assertRaises(SystemExit) as cm:
                main(argv)
        self.assertEqual(cm.exception.code, 1)
        run.assert_called_once()


if __name__ == "__main__":
    unittest.main()
