import argparse
import sys

from simpleaf.tools import utils
from simpleaf.tools.exceptions import SimpleafError
from simpleaf.tools.prog_utils import get_required_progs
from simpleaf.__init__ import HELP_DICT, __VERSION__, STEPS


class ArgFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    pass


def get_parser():
    parser = argparse.ArgumentParser(
        prog="simpleaf",
        description="simplifying alevin-fry workflows",
        formatter_class=ArgFormatter,
    )
    parser.add_argument("-v", "--version", action="version", version=__VERSION__)
    subparsers = parser.add_subparsers(dest="subparser_step")

    for step in STEPS:
        # import function and opts
        step_module = utils.find_step_module(step)
        func = getattr(step_module, step)
        func_opts = getattr(step_module, f"get_opts_{step}")
        parser_step = subparsers.add_parser(
            step,
            help=HELP_DICT[step],
            formatter_class=ArgFormatter,
        )
        func_opts(parser_step)
        parser_step.set_defaults(func=func)

    return parser


@utils.add_log
def run(args):
    # programs are resolved after parsing so that --help works without them
    req_progs = get_required_progs()
    args.func(args, req_progs)


def main(argv=None):
    """simpleaf cli"""
    parser = get_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        # No subcommand was given.
        parser.print_help()
        parser.exit()

    try:
        run(args)
    except SimpleafError as e:
        run.logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
