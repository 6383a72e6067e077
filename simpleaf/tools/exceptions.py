class SimpleafError(Exception):
    """Base class of errors that abort a simpleaf run."""
    pass


class ResolutionError(SimpleafError):
    """A required program was not found via its environment variable or in PATH."""
    pass


class VersionError(SimpleafError):
    """A program's version could not be determined or is outside the accepted range."""
    pass


class ConfigError(SimpleafError):
    """A required environment variable is unset."""
    pass


class ChemistryError(SimpleafError):
    """The chemistry has no registered permit list."""
    pass


class ArgumentError(SimpleafError):
    pass


class StageFailure(SimpleafError):
    """
    An external program exited with a non-zero status.

    Attributes:
        stage: name of the pipeline stage, such as `generate-permit-list`
        returncode: exit status of the child process
    """

    def __init__(self, stage, returncode):
        self.stage = stage
        self.returncode = returncode
        super().__init__(f"{stage} failed with exit status {returncode}")


class StageLaunchError(SimpleafError):
    """
    An external program could not be started, e.g. it is not installed.

    Attributes:
        stage: name of the pipeline stage
    """

    def __init__(self, stage, error):
        self.stage = stage
        super().__init__(f"{stage} could not be started: {error}")
