"""
Data classes for script dependency discovery.

This module contains the dataclasses used to represent import declarations
scanned from a script and the settings that drive a single dock run.
"""
import enum
from dataclasses import dataclass, field
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class ModuleImport:
    """
    A plain ``import X`` declaration.

    Attributes:
        module (str):
            Everything after ``import`` on the line, stripped. The name is kept
            verbatim (``import os, sys`` yields ``"os, sys"``).
    """

    module: str


@dataclass(frozen=True)
class MemberImport:
    """
    A ``from X import Y`` declaration.

    Attributes:
        module (str):
            The module named after ``from``.
        member (str):
            Everything after `` import ``, stripped.

    Example:
        ```python
        decl = MemberImport(module="sklearn", member="svm")
        print(decl.full_name)  # "sklearn.svm"
        ```
    """

    module: str
    member: str

    @property
    def full_name(self) -> str:
        return f"{self.module}.{self.member}"


ImportDeclaration = Union[ModuleImport, MemberImport]


class RegistryErrorPolicy(str, enum.Enum):
    """How a failed package index request is interpreted."""

    ABSENT = "absent"
    PRESENT = "present"
    ABORT = "abort"


@dataclass
class DockConfig:
    """
    Settings for a dock run.

    Built from ``dock.utils.config.DEFAULTS``, overlaid with the user's config
    file and then with command line flags.

    Attributes:
        import_mappings (Dict[str, str]):
            Verified package name to the name written into the Dockerfile
            (e.g., ``{"sklearn": "scikit-learn"}``).
        python_version (str):
            Tag of the ``python`` base image.
        on_registry_error (RegistryErrorPolicy):
            What a network failure during an existence check means.
        container_tool (str):
            Executable used to build and run the image.
        python_executable (str):
            Interpreter queried for its standard library module names.
        registry_url (str):
            Base URL of the package index JSON API.
        registry_timeout (Optional[float]):
            Per-request timeout in seconds. None waits indefinitely.
        jobs (int):
            Maximum number of concurrent existence checks.
    """

    import_mappings: Dict[str, str] = field(default_factory=dict)
    python_version: str = "3.10"
    on_registry_error: RegistryErrorPolicy = RegistryErrorPolicy.ABSENT
    container_tool: str = "docker"
    python_executable: str = "python3"
    registry_url: str = "https://pypi.org/pypi"
    registry_timeout: Optional[float] = None
    jobs: int = 1
