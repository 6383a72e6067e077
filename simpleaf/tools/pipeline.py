import sys

from simpleaf.__init__ import HELP_DICT, __VERSION__
from simpleaf.tools import utils


class Pipeline:
    """
    Base class of the index and quant steps.

    req_progs is the ReqProgs table resolved once by the cli; steps never look
    up the programs themselves.
    """

    def __init__(self, args, req_progs):
        sys.stderr.write(f"simpleaf version: {__VERSION__} ")
        sys.stderr.write(f"Args: {args}\n")
        self.args = args
        self.req_progs = req_progs
        self.output = str(args.output)
        self.thread = int(args.threads)
        self.dry_run = args.dry_run

    def run_stage(self, stage, cmd, logger):
        """
        Run cmd unless this is a dry run. The command is logged either way.
        """
        if self.dry_run:
            logger.info("dry run, skip %s. cmd : %s", stage, utils.cmd_to_str(cmd))
            return
        utils.run_stage(stage, cmd, logger)

    @staticmethod
    def opts(parser):
        parser.add_argument(
            "-o", "--output", help=HELP_DICT["output"], required=True
        )
        parser.add_argument(
            "--dry-run", help=HELP_DICT["dry_run"], action="store_true"
        )
        parser.add_argument(
            "-t", "--threads", help=HELP_DICT["thread"], type=utils.positive_int, default=16
        )
