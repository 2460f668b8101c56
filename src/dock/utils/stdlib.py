"""
Standard library module discovery.

The module names come from the interpreter that will be containerized rather
than the one running dock, so the check asks that interpreter directly.
"""
import logging
import subprocess
from typing import FrozenSet

from .errors import StdlibQueryError

logger = logging.getLogger(__name__)

# Requires Python 3.10+ on the target interpreter (sys.stdlib_module_names).
STDLIB_QUERY = """
import sys

names = set(sys.builtin_module_names) | set(sys.stdlib_module_names)
for name in sorted(n for n in names if not n.startswith("_")):
    print(name)
"""


def get_stdlib_modules(python: str = "python3") -> FrozenSet[str]:
    """
    Get the built-in and standard library module names of an interpreter.

    Names beginning with an underscore are dropped.

    Parameters:
        python (str):
            Interpreter executable to run. Default is "python3".

    Returns:
        FrozenSet[str]: Module names that are never treated as dependencies.

    Raises:
        StdlibQueryError: If the interpreter cannot be started or exits with a
            non-zero status. The error carries the interpreter's stderr.
    """
    try:
        result = subprocess.run(
            [python, "-c", STDLIB_QUERY],
            capture_output=True,
            text=True,
            stdin=subprocess.DEVNULL,
        )
    except OSError as e:
        raise StdlibQueryError(f"Failed to execute {python}: {e}") from e

    if result.returncode != 0:
        raise StdlibQueryError(
            f"Command execution failed with error: {result.stderr.strip()}",
            stderr=result.stderr,
        )

    modules = frozenset(line.strip() for line in result.stdout.splitlines() if line.strip())
    logger.debug("%s reports %d standard library modules", python, len(modules))
    return modules
