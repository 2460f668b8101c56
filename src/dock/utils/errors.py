"""
Exceptions raised while dockerizing a script.

Every failure that should stop a run derives from ``DockError``; the command
line entry point reports it and exits with a non-zero status.
"""


class DockError(Exception):
    """Base class for all dock failures."""


class ScriptPathError(DockError, ValueError):
    """The script path has no usable file name."""


class ScriptReadError(DockError, OSError):
    """The script could not be opened or decoded as text."""


class StdlibQueryError(DockError):
    """
    The target interpreter could not list its standard library modules.

    Attributes:
        stderr (str):
            Standard error captured from the interpreter, empty if it never
            started.
    """

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class RegistryUnavailableError(DockError):
    """The package index could not be reached and the policy is ``abort``."""


class ConfigError(DockError):
    """The configuration file exists but could not be parsed."""


class DockerfileWriteError(DockError, OSError):
    """The generated Dockerfile could not be written."""


class ContainerError(DockError):
    """A container toolchain invocation failed."""


class ContainerBuildError(ContainerError):
    """``docker build`` could not be spawned or exited non-zero."""


class ContainerRunError(ContainerError):
    """``docker run`` could not be spawned or exited non-zero."""
