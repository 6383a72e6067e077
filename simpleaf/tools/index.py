import argparse
import os

from simpleaf.tools import utils
from simpleaf.tools.__init__ import (
    FLANK_TRIM,
    INDEX_DIR,
    INDEX_INFO_FILE,
    REF_DIR,
)
from simpleaf.tools.pipeline import Pipeline


class Index(Pipeline):
    """
    ## Features
    - Build a splici (spliced + intronic) reference with `pyroe make-splici`.
    - Build a salmon index on the splici reference.

    ## Output
    - `index_info.json` Tool versions and arguments of this run.
    - `ref/splici_fl{rlen-5}.fa` The splici reference sequences.
    - `ref/splici_fl{rlen-5}_t2g_3col.tsv` Transcript to gene map, used by `simpleaf quant -m`.
    - `index/` The salmon index, used by `simpleaf quant -i`.
    """

    def __init__(self, args, req_progs):
        super().__init__(args, req_progs)
        self.fasta = args.fasta
        self.gtf = args.gtf
        self.rlen = int(args.rlen)
        self.spliced = args.spliced
        self.unspliced = args.unspliced
        self.dedup = args.dedup
        self.sparse = args.sparse

        flank = self.rlen - FLANK_TRIM
        # out
        self.outref = os.path.join(self.output, REF_DIR)
        self.ref_seq = os.path.join(self.outref, f"splici_fl{flank}.fa")
        self.t2g_file = os.path.join(self.outref, f"splici_fl{flank}_t2g_3col.tsv")
        self.info_file = os.path.join(self.output, INDEX_INFO_FILE)
        self.output_index_dir = os.path.join(self.output, INDEX_DIR)

    def get_index_info(self):
        return {
            "command": "index",
            "version_info": self.req_progs.to_dict(),
            "t2g_file": self.t2g_file,
            "args": {
                "fasta": self.fasta,
                "gtf": self.gtf,
                "rlen": self.rlen,
                "output": self.output,
                "spliced": self.spliced,
                "unspliced": self.unspliced,
                "dedup": self.dedup,
                "sparse": self.sparse,
                "threads": self.thread,
            },
        }

    def get_make_splici_cmd(self):
        cmd = [self.req_progs.exe("pyroe"), "make-splici"]
        if self.dedup:
            cmd.append("--dedup-seqs")
        if self.spliced:
            cmd += ["--extra-spliced", self.spliced]
        if self.unspliced:
            cmd += ["--extra-unspliced", self.unspliced]
        cmd += [self.fasta, self.gtf, str(self.rlen), self.outref]
        return cmd

    def get_salmon_index_cmd(self, thread):
        cmd = [
            self.req_progs.exe("salmon"), "index",
            "-i", self.output_index_dir,
            "-t", self.ref_seq,
        ]
        if self.sparse:
            cmd.append("--sparse")
        cmd += ["--threads", str(thread)]
        return cmd

    @utils.add_log
    def make_splici(self):
        self.run_stage("pyroe make-splici", self.get_make_splici_cmd(), self.make_splici.logger)

    @utils.add_log
    def salmon_index(self):
        thread = utils.clamp_threads(self.thread)
        self.run_stage("salmon index", self.get_salmon_index_cmd(thread), self.salmon_index.logger)

    @utils.add_log
    def run(self):
        utils.check_mkdir(self.output)
        utils.check_mkdir(self.outref)
        # written before any heavy computation
        utils.dump_dict_to_json(self.get_index_info(), self.info_file)
        self.make_splici()
        self.salmon_index()


def index(args, req_progs):
    runner = Index(args, req_progs)
    runner.run()


def rlen_type(value):
    rlen = int(value)
    if rlen <= FLANK_TRIM:
        raise argparse.ArgumentTypeError(f"read length must be greater than {FLANK_TRIM}, got {rlen}")
    return rlen


def get_opts_index(parser):
    Pipeline.opts(parser)
    parser.add_argument("-f", "--fasta", help="Required. Reference genome fasta file.", required=True)
    parser.add_argument("-g", "--gtf", help="Required. Reference GTF file.", required=True)
    parser.add_argument(
        "-r", "--rlen",
        help="Required. The target read length the index will be built for.",
        type=rlen_type,
        required=True,
    )
    parser.add_argument(
        "-s", "--spliced",
        help="Path to FASTA file with extra spliced sequence to add to the index.",
    )
    parser.add_argument(
        "-u", "--unspliced",
        help="Path to FASTA file with extra unspliced sequence to add to the index.",
    )
    parser.add_argument(
        "-d", "--dedup",
        help="Deduplicate identical sequences when building the splici reference.",
        action="store_true",
    )
    parser.add_argument(
        "-p", "--sparse",
        help="Build the sparse rather than dense index for mapping.",
        action="store_true",
    )
