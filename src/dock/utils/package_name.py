"""
Verified name to install name remapping.

Some packages are imported under one name and installed under another
(``import sklearn`` comes from ``scikit-learn``). The index happily confirms
both, so users list the renames they want in the ``import-mappings`` table of
their config file and they are applied just before the Dockerfile is written.

Example:
    ```python
    from dock.utils.package_name import remap_packages

    remap_packages(["sklearn", "requests"], {"sklearn": "scikit-learn"})
    # ["scikit-learn", "requests"]
    ```
"""
from typing import Dict, List, Optional, Sequence


def get_package_override(name: str, mappings: Optional[Dict[str, str]] = None) -> str:
    """
    Get the install name for a verified package name.

    Parameters:
        name (str):
            A verified package name.
        mappings (Optional[Dict[str, str]]):
            User supplied renames. None behaves like an empty mapping.

    Returns:
        str: ``mappings[name]`` if present, otherwise ``name`` unchanged.
    """
    if not mappings:
        return name
    return mappings.get(name, name)


def remap_packages(modules: Sequence[str], mappings: Optional[Dict[str, str]] = None) -> List[str]:
    """Apply ``get_package_override`` to every entry, keeping order and length."""
    return [get_package_override(name, mappings) for name in modules]
