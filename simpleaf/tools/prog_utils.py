"""
Locate the external programs simpleaf drives and check their versions.
"""
import os
import shutil
import subprocess
from collections import namedtuple

from semver import Version

from simpleaf.tools import utils
from simpleaf.tools.__init__ import REQUIRED_PROGS
from simpleaf.tools.exceptions import ResolutionError, VersionError


ProgInfo = namedtuple("ProgInfo", ["exe_path", "version"])


class ReqProgs(dict):
    """
    key: tool name, one of REQUIRED_PROGS
    value: ProgInfo, or None if the tool has not been resolved
    """

    def __init__(self, progs=None):
        super().__init__((name, None) for name in REQUIRED_PROGS)
        if progs:
            self.update(progs)

    def require(self, name):
        """
        Returns the ProgInfo of name.

        Raises:
            ResolutionError: if name was not found or not validated
        """
        prog_info = self.get(name)
        if prog_info is None:
            raise ResolutionError(f"`{name}` is required but was not found or validated.")
        return prog_info

    def exe(self, name):
        return self.require(name).exe_path

    def to_dict(self):
        """json serializable version info"""
        return {
            name: None if prog_info is None else {
                "exe_path": str(prog_info.exe_path),
                "version": prog_info.version,
            }
            for name, prog_info in self.items()
        }


def parse_version(prog_output):
    """
    Parse the last whitespace-delimited token of prog_output as a semantic version.

    >>> str(parse_version('salmon 1.9.0'))
    '1.9.0'

    Raises:
        VersionError: if there is no token or it is not a valid semantic version
    """
    tokens = prog_output.split() if prog_output else []
    if not tokens:
        raise VersionError("invalid version string: program printed nothing")
    try:
        return Version.parse(tokens[-1])
    except ValueError as e:
        raise VersionError(f"could not parse version {tokens[-1]!r}: {e}") from e


def version_matches(version, req_string):
    """
    Check version against every comparator of req_string, such as '>=1.5.1, <2.0.0'.

    >>> version_matches(Version.parse('1.10.2'), '>=1.5.1, <2.0.0')
    True
    >>> version_matches(Version.parse('2.0.0'), '>=1.5.1, <2.0.0')
    False
    """
    comparators = [c.replace(" ", "") for c in req_string.split(",") if c.strip()]
    return all(version.match(c) for c in comparators)


def check_version_constraints(req_string, prog_output):
    """
    Returns:
        semver.Version parsed from prog_output

    Raises:
        VersionError: if the version is missing, unparseable or does not satisfy req_string
    """
    version = parse_version(prog_output)
    if not version_matches(version, req_string):
        raise VersionError(
            f"parsed version {str(version)!r} does not satisfy constraints {req_string!r}"
        )
    return version


@utils.add_log
def search_for_executable(env_key, prog_name, environ=None):
    """
    Returns the path in $env_key if it is set, otherwise the location of prog_name in PATH.

    Raises:
        ResolutionError: if env_key is unset and prog_name is not in PATH
    """
    if environ is None:
        environ = os.environ
    logger = search_for_executable.logger

    exe_path = environ.get(env_key)
    if exe_path:
        return exe_path

    logger.warning("$%s is unset, trying default path.", env_key)
    logger.warning(
        "If a satisfactory version is not found, consider setting the $%s variable.",
        env_key,
    )
    exe_path = shutil.which(prog_name, path=environ.get("PATH"))
    if exe_path is None:
        raise ResolutionError(f"could not find `{prog_name}` in your path")
    logger.info("found `%s` in the PATH at %s", prog_name, exe_path)
    return exe_path


def get_prog_output(exe_path):
    """
    Returns the output of `exe_path --version`.

    Raises:
        VersionError: if the program cannot be run or exits with a non-zero status
    """
    try:
        proc = subprocess.run(
            [str(exe_path), "--version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            universal_newlines=True,
        )
    except OSError as e:
        raise VersionError(f"could not run `{exe_path} --version`: {e}") from e
    if proc.returncode != 0:
        raise VersionError(
            f"`{exe_path} --version` exited with status {proc.returncode}"
        )
    # some programs report their version on stderr
    return proc.stdout if proc.stdout.strip() else proc.stderr


@utils.add_log
def get_required_progs(environ=None):
    """
    Resolve and validate salmon, alevin-fry and pyroe.

    Args:
        environ: mapping used to look up the path overrides, default os.environ

    Returns:
        ReqProgs with every tool set
    """
    req_progs = ReqProgs()
    for name, (env_key, prog_name, req_string) in REQUIRED_PROGS.items():
        exe_path = search_for_executable(env_key, prog_name, environ=environ)
        try:
            version = check_version_constraints(req_string, get_prog_output(exe_path))
        except VersionError as e:
            raise VersionError(f"{prog_name} ({exe_path}): {e}") from e
        req_progs[name] = ProgInfo(exe_path=exe_path, version=str(version))
        get_required_progs.logger.info("using %s %s at %s", prog_name, version, exe_path)
    return req_progs
