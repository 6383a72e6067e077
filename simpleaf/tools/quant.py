import os

from simpleaf.__init__ import HELP_DICT
from simpleaf.tools import utils
from simpleaf.tools.__init__ import (
    MAP_OUTPUT_DIR,
    MIN_READS_DEFAULT,
    QUANT_OUTPUT_DIR,
)
from simpleaf.tools.chemistry import Chemistry
from simpleaf.tools.filter_method import get_filter_method
from simpleaf.tools.pipeline import Pipeline


class Quant(Pipeline):
    """
    ## Features
    - Map reads to the splici index with `salmon alevin --sketch`.
    - Call cells with `alevin-fry generate-permit-list`.
    - Collate the mapping records with `alevin-fry collate`.
    - Quantify with `alevin-fry quant`.

    Every stage must exit successfully before the next one starts.

    ## Output
    - `af_map/` Mapping output of salmon alevin.
    - `af_quant/` Permit list, collated records and the count matrix of alevin-fry.
    """

    def __init__(self, args, req_progs):
        super().__init__(args, req_progs)
        self.index = args.index
        self.reads1 = args.reads1
        self.reads2 = args.reads2
        self.resolution = args.resolution
        self.t2g_map = args.t2g_map
        self.chemistry = Chemistry(args.chemistry)
        self.filter_method = None

        # out
        self.map_output = os.path.join(self.output, MAP_OUTPUT_DIR)
        self.gpl_output = os.path.join(self.output, QUANT_OUTPUT_DIR)

    @utils.add_log
    def resolve_filter_method(self):
        self.filter_method = get_filter_method(
            self.chemistry,
            knee=self.args.knee,
            unfiltered_pl=self.args.unfiltered_pl,
            forced_cells=self.args.forced_cells,
            expect_cells=self.args.expect_cells,
            min_reads=getattr(self.args, "min_reads", MIN_READS_DEFAULT),
        )
        self.resolve_filter_method.logger.info("cell filter method: %s", self.filter_method)

    def get_map_cmd(self):
        return [
            self.req_progs.exe("salmon"), "alevin",
            "--index", self.index,
            "-l", "A",
            "-1", ",".join(str(r) for r in self.reads1),
            "-2", ",".join(str(r) for r in self.reads2),
            "--threads", str(self.thread),
            "-o", self.map_output,
            "--sketch",
            self.chemistry.salmon_flag,
        ]

    def get_gpl_cmd(self):
        cmd = [
            self.req_progs.exe("alevin_fry"), "generate-permit-list",
            "-i", self.map_output,
            "-d", "fw",
        ]
        cmd += self.filter_method.to_args()
        cmd += ["-o", self.gpl_output]
        return cmd

    def get_collate_cmd(self):
        return [
            self.req_progs.exe("alevin_fry"), "collate",
            "-i", self.gpl_output,
            "-r", self.map_output,
            "-t", str(self.thread),
        ]

    def get_quant_cmd(self):
        return [
            self.req_progs.exe("alevin_fry"), "quant",
            "-i", self.gpl_output,
            "-o", self.gpl_output,
            "-t", str(self.thread),
            "-m", self.t2g_map,
            "-r", self.resolution,
        ]

    @utils.add_log
    def map_reads(self):
        self.run_stage("salmon alevin [mapping phase]", self.get_map_cmd(), self.map_reads.logger)

    @utils.add_log
    def generate_permit_list(self):
        self.run_stage("generate-permit-list", self.get_gpl_cmd(), self.generate_permit_list.logger)

    @utils.add_log
    def collate(self):
        self.run_stage("collate", self.get_collate_cmd(), self.collate.logger)

    @utils.add_log
    def quant(self):
        self.run_stage("quant", self.get_quant_cmd(), self.quant.logger)

    @utils.add_log
    def run(self):
        self.run.logger.info("index is %s", self.index)
        self.resolve_filter_method()
        utils.check_mkdir(self.output)
        self.map_reads()
        self.generate_permit_list()
        self.collate()
        self.quant()


def quant(args, req_progs):
    runner = Quant(args, req_progs)
    runner.run()


def get_opts_quant(parser):
    Pipeline.opts(parser)
    parser.add_argument("-i", "--index", help="Required. Path to the salmon index.", required=True)
    parser.add_argument(
        "-1", "--reads1",
        help="Required. Read 1 files. Multiple files are separated by whitespace.",
        nargs="+",
        required=True,
    )
    parser.add_argument(
        "-2", "--reads2",
        help="Required. Read 2 files, in the same order as `--reads1`.",
        nargs="+",
        required=True,
    )
    filter_group = parser.add_mutually_exclusive_group(required=True)
    filter_group.add_argument(
        "-k", "--knee", help="Use knee filtering mode. " + HELP_DICT["filter"], action="store_true"
    )
    filter_group.add_argument(
        "-u", "--unfiltered-pl",
        help="Use the unfiltered permit list of the chemistry. Only `10xv2` and `10xv3` have one.",
        action="store_true",
    )
    filter_group.add_argument(
        "-f", "--forced-cells", help="Use a forced number of cells.", type=utils.positive_int
    )
    filter_group.add_argument(
        "-e", "--expect-cells", help="Use an expected number of cells.", type=utils.positive_int
    )
    parser.add_argument(
        "--min-reads",
        help="Minimum read count of a barcode in the unfiltered permit list mode.",
        type=utils.positive_int,
        default=MIN_READS_DEFAULT,
    )
    parser.add_argument("-r", "--resolution", help="Required. " + HELP_DICT["resolution"], required=True)
    parser.add_argument("-c", "--chemistry", help="Required. " + HELP_DICT["chemistry"], required=True)
    parser.add_argument("-m", "--t2g-map", help="Required. Transcript to gene map file.", required=True)
