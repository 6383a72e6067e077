import argparse
import importlib
import json
import logging
import os
import shlex
import subprocess
import sys
import time
from datetime import timedelta
from functools import wraps

from simpleaf.__init__ import ROOT_PATH
from simpleaf.tools.exceptions import StageFailure, StageLaunchError


def add_log(func):
    """
    logging start and done.
    """
    logFormatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    module = func.__module__
    name = func.__name__
    logger_name = f"{module}.{name}"
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)

    consoleHandler = logging.StreamHandler(sys.stderr)
    consoleHandler.setFormatter(logFormatter)
    logger.addHandler(consoleHandler)

    @wraps(func)
    def wrapper(*args, **kwargs):
        logger.info("start...")
        start = time.time()
        result = func(*args, **kwargs)
        end = time.time()
        used = timedelta(seconds=end - start)
        logger.info("done. time used: %s", used)
        return result

    wrapper.logger = logger
    return wrapper


def check_mkdir(dir_name):
    """if dir_name is not exist, make one"""
    os.makedirs(dir_name, exist_ok=True)


@add_log
def dump_dict_to_json(d, json_file):
    with open(json_file, "w") as f:
        json.dump(d, f, indent=4)


def find_step_module(step):
    file_path = f"{ROOT_PATH}/tools/{step}.py"
    if not os.path.exists(file_path):
        raise ModuleNotFoundError(f"No module found for {step}")
    return importlib.import_module(f"simpleaf.tools.{step}")


def positive_int(value):
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def cmd_to_str(cmd):
    """
    >>> cmd_to_str(['salmon', 'index', '-i', 'my index'])
    "salmon index -i 'my index'"
    """
    return " ".join(shlex.quote(str(arg)) for arg in cmd)


def run_stage(stage, cmd, logger):
    """
    Run one external command and wait for it.

    Args:
        stage: stage name used in the error message
        cmd: argument list, cmd[0] is the executable
        logger: logger of the calling step

    Raises:
        StageLaunchError: if the command cannot be started
        StageFailure: if the command exits with a non-zero status
    """
    cmd = [str(arg) for arg in cmd]
    logger.info("cmd : %s", cmd_to_str(cmd))
    try:
        proc = subprocess.run(cmd)
    except OSError as e:
        raise StageLaunchError(stage, e) from e
    if proc.returncode != 0:
        raise StageFailure(stage, proc.returncode)
    return proc


def get_available_parallelism():
    """
    Number of CPUs this process may run on. None if it cannot be determined.
    """
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0))
    return os.cpu_count()


@add_log
def clamp_threads(thread):
    """
    Returns thread, lowered to the available parallelism if it is larger.
    """
    max_threads = get_available_parallelism()
    if max_threads and thread > max_threads:
        clamp_threads.logger.warning(
            "The maximum available parallelism is %s, but %s threads were requested. "
            "Setting number of threads to %s.",
            max_threads,
            thread,
            max_threads,
        )
        return max_threads
    return thread
