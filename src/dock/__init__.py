"""
dock - Dockerize any Python script.

This package finds a script's third-party imports, confirms them on PyPI,
writes a Dockerfile that installs them, then builds and runs the image.
"""
from .dependencies import discover_dependencies
from .dockerfile import generate_dockerfile
from .docker import build_and_run
from .utils.classes import DockConfig, MemberImport, ModuleImport, RegistryErrorPolicy
from .utils.errors import DockError
from .utils.registry import PackageIndex

__all__ = [
    "discover_dependencies",
    "generate_dockerfile",
    "build_and_run",
    "DockConfig",
    "DockError",
    "MemberImport",
    "ModuleImport",
    "PackageIndex",
    "RegistryErrorPolicy",
]
