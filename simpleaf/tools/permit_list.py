"""
Cached permit lists of the registered chemistries.

The lists are stored in `$ALEVIN_FRY_HOME/plist/` and downloaded with wget
the first time they are needed.
"""
import os
from collections import namedtuple

from simpleaf.tools import utils
from simpleaf.tools.__init__ import ALEVIN_FRY_HOME_ENV, PERMIT_LIST_DIR
from simpleaf.tools.exceptions import ConfigError, SimpleafError

ALREADY_PRESENT = "already_present"
DOWNLOAD_SUCCESSFUL = "download_successful"
UNREGISTERED_CHEMISTRY = "unregistered_chemistry"

PermitListResult = namedtuple("PermitListResult", ["status", "path"])


def get_permit_list_dir(environ=None):
    """
    Raises:
        ConfigError: if $ALEVIN_FRY_HOME is unset
    """
    if environ is None:
        environ = os.environ
    af_home = environ.get(ALEVIN_FRY_HOME_ENV)
    if not af_home:
        raise ConfigError(
            f"could not resolve ${ALEVIN_FRY_HOME_ENV} environment variable. "
            "Set it to a directory where permit lists can be cached."
        )
    return os.path.join(af_home, PERMIT_LIST_DIR)


@utils.add_log
def download_permit_list(url, out_file):
    cmd = ["wget", "-v", "-O", out_file, "-L", url]
    try:
        utils.run_stage("permit list download", cmd, download_permit_list.logger)
    except SimpleafError:
        # wget -O creates out_file before the transfer; a partial list must not be cached
        if os.path.exists(out_file):
            os.remove(out_file)
        raise


@utils.add_log
def get_permit_if_absent(chemistry, environ=None):
    """
    Args:
        chemistry: Chemistry
        environ: mapping used to look up $ALEVIN_FRY_HOME, default os.environ

    Returns:
        PermitListResult. path is None for an unregistered chemistry.
    """
    if not chemistry.is_registered:
        return PermitListResult(UNREGISTERED_CHEMISTRY, None)

    plist_dir = get_permit_list_dir(environ)
    plist_file = os.path.join(plist_dir, chemistry.permit_list)
    if os.path.exists(plist_file):
        get_permit_if_absent.logger.info("using cached permit list %s", plist_file)
        return PermitListResult(ALREADY_PRESENT, plist_file)

    utils.check_mkdir(plist_dir)
    download_permit_list(chemistry.url, plist_file)
    return PermitListResult(DOWNLOAD_SUCCESSFUL, plist_file)
