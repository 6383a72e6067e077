"""
Cell filtering methods of `alevin-fry generate-permit-list`.
"""
from simpleaf.tools import utils
from simpleaf.tools.__init__ import MIN_READS_DEFAULT
from simpleaf.tools.exceptions import ArgumentError, ChemistryError
from simpleaf.tools.permit_list import UNREGISTERED_CHEMISTRY, get_permit_if_absent


class CellFilterMethod:
    def to_args(self):
        """generate-permit-list arguments for this method"""
        return []

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{self.__class__.__name__}({fields})"


class KneeFinding(CellFilterMethod):
    pass


class ForceCells(CellFilterMethod):
    def __init__(self, count):
        self.count = count

    def to_args(self):
        return ["--force-cells", str(self.count)]


class ExpectCells(CellFilterMethod):
    def __init__(self, count):
        self.count = count

    def to_args(self):
        return ["--expect-cells", str(self.count)]


class UnfilteredExternalList(CellFilterMethod):
    def __init__(self, path, min_reads=MIN_READS_DEFAULT):
        self.path = path
        self.min_reads = min_reads

    def to_args(self):
        return ["--unfiltered-pl", str(self.path), "--min-reads", str(self.min_reads)]


@utils.add_log
def get_filter_method(
    chemistry,
    knee=False,
    unfiltered_pl=False,
    forced_cells=None,
    expect_cells=None,
    min_reads=MIN_READS_DEFAULT,
    environ=None,
):
    """
    Select the filter method from the quant options. Exactly one option must be used.

    Returns:
        CellFilterMethod

    Raises:
        ArgumentError: if none or more than one option is used
        ChemistryError: if unfiltered_pl is used with an unregistered chemistry
    """
    used = [
        name for name, value in (
            ("--knee", knee),
            ("--unfiltered-pl", unfiltered_pl),
            ("--forced-cells", forced_cells is not None),
            ("--expect-cells", expect_cells is not None),
        ) if value
    ]
    if len(used) != 1:
        raise ArgumentError(
            "exactly one of --knee, --unfiltered-pl, --forced-cells and --expect-cells "
            f"is required, got {used or 'none'}"
        )

    if unfiltered_pl:
        result = get_permit_if_absent(chemistry, environ=environ)
        if result.status == UNREGISTERED_CHEMISTRY:
            raise ChemistryError(
                f"Cannot use unrecognized chemistry {chemistry.name} with unfiltered permit list."
            )
        return UnfilteredExternalList(result.path, min_reads)
    if forced_cells is not None:
        return ForceCells(forced_cells)
    if expect_cells is not None:
        return ExpectCells(expect_cells)
    return KneeFinding()
