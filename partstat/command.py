import logging
import subprocess
from typing import List, Union

from typing_extensions import Literal

logger = logging.getLogger(__name__)

RAISE = "raise"
IGNORE = "ignore"


class DataSourceError(RuntimeError):
    """
    A Slurm command could not be run or exited with an error.
    """


class Result:
    def __init__(self, stdout: str, stderr: str, returncode: int) -> None:
        self._stdout: str = stdout
        self._stderr: str = stderr
        self._returncode: int = returncode

    @property
    def stdout(self) -> str:
        return self._stdout

    @property
    def stderr(self) -> str:
        return self._stderr

    @property
    def returncode(self) -> int:
        return self._returncode


def run(
    args: List[str], error_handling: Union[Literal["raise"], Literal["ignore"]] = RAISE
) -> Result:
    logger.debug("running %s", " ".join(args))
    try:
        result = subprocess.run(args, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    except OSError as e:
        raise DataSourceError(f"unable to run {args[0]}: {e}") from e

    returncode = result.returncode
    stderr = result.stderr.decode("utf-8", "ignore")
    stdout = result.stdout.decode("utf-8", "ignore")

    if error_handling == RAISE and 0 < returncode:
        raise DataSourceError(f"{args[0]} exited with {returncode}: {stderr.strip()}")
    elif error_handling == IGNORE and 0 < returncode:
        logger.debug("%s exited with %d, ignored", args[0], returncode)

    return Result(stdout, stderr, returncode)
