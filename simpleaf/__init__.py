import os

__VERSION__ = "0.1.0"
__version__ = __VERSION__

STEPS = [
    'index',
    'quant',
]

ROOT_PATH = os.path.dirname(__file__)

# argument help
HELP_DICT = {
    'index': 'Build the splici reference and the salmon index.',
    'quant': 'Map, call cells, collate and quantify a sample.',
    'thread': 'Number of threads to use when running.',
    'output': 'Path to output directory (will be created if it does not exist).',
    'dry_run': 'Only log the commands that would be run and exit. Tool versions are still checked.',
    'chemistry': '''Chemistry of the reads. `10xv2` and `10xv3` are recognized and have a registered permit list.
Any other value is passed to `salmon alevin` as `--{chemistry}`.''',
    'resolution': 'UMI resolution mode passed to `alevin-fry quant`, such as `cr-like` or `cr-like-em`.',
    'filter': 'Exactly one of `--knee`, `--unfiltered-pl`, `--forced-cells` and `--expect-cells` is required.',
}
