"""
Dependency discovery for a single Python script.

Imports are read line by line from the script, anything the target
interpreter ships with is dropped, and the rest is kept only if the package
index knows it.

Pipeline:
    1. Extract ``import X`` / ``from X import Y`` declarations
    2. Drop standard library modules
    3. Confirm the remaining names on the package index
    4. Deduplicate and sort
    5. Apply the user's import mappings

Example:
    ```python
    from dock.dependencies import discover_dependencies
    from dock.utils.registry import PackageIndex
    from dock.utils.stdlib import get_stdlib_modules

    modules = discover_dependencies(
        "./app.py",
        stdlib=get_stdlib_modules(),
        index=PackageIndex(),
        mappings={"sklearn": "scikit-learn"},
    )
    print(modules)  # ["requests", "sklearn.svm"]
    ```
"""
import logging
import pathlib as pl
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from .utils.errors import ScriptPathError
from .utils.import_scanner import extract_imports
from .utils.package_name import remap_packages
from .utils.registry import PackageIndex

logger = logging.getLogger(__name__)


def dedupe_sorted(modules: Iterable[str]) -> List[str]:
    """Remove exact duplicates and sort."""
    return sorted(set(modules))


def resolve_script_path(script: Union[str, pl.Path]) -> Tuple[str, pl.Path]:
    """
    Split a script path into the image tag source and the build context.

    Parameters:
        script (Union[str, pl.Path]):
            Path to the script, relative or absolute.

    Returns:
        Tuple[str, pl.Path]: The script's file name and its containing
            directory. A bare file name resolves to ``.``.

    Raises:
        ScriptPathError: If the path has no file name (``/``, ``.``, ``..``)
            or the file name is not valid UTF-8.
    """
    path = pl.Path(script)
    name = path.name
    if not name or name in (".", ".."):
        raise ScriptPathError(f"Failed to get file name from {str(script)!r}")
    try:
        name.encode("utf-8")
        str(path.parent).encode("utf-8")
    except UnicodeEncodeError:
        raise ScriptPathError(f"Script path {str(script)!r} is not valid UTF-8") from None
    return name, path.parent


def discover_dependencies(
    script: Union[str, pl.Path],
    stdlib: FrozenSet[str],
    index: PackageIndex,
    mappings: Optional[Dict[str, str]] = None,
    jobs: int = 1,
) -> List[str]:
    """
    Discover the third-party packages a script imports.

    Parameters:
        script (Union[str, pl.Path]):
            Path to the script to scan.
        stdlib (FrozenSet[str]):
            Module names supplied by the target interpreter.
        index (PackageIndex):
            Existence checker for candidate package names.
        mappings (Optional[Dict[str, str]]):
            Renames applied after deduplication. Default is None (no renames).
        jobs (int):
            Maximum concurrent existence checks. Default is 1.

    Returns:
        List[str]: Package names for ``pip install``. Sorted before remapping;
            remapping keeps positions.

    Raises:
        ScriptReadError: If the script cannot be read.
        RegistryUnavailableError: If the index is unreachable and its policy
            is ``abort``.
    """
    declarations = extract_imports(pl.Path(script))
    verified = index.verify_all(declarations, stdlib, jobs=jobs)
    modules = remap_packages(dedupe_sorted(verified), mappings)
    logger.info("Detected dependencies: %s", " ".join(modules) if modules else "(none)")
    return modules
