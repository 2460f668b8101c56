"""
Line-based import extraction from Python source files.

This module reads a script and pulls out its top-level ``import X`` and
``from X import Y`` statements by matching line prefixes. It does not parse
the file: multi-line imports, ``as`` aliases and imports mentioned inside
strings or comments are taken at face value or skipped.

Example:
    ```python
    from pathlib import Path
    from dock.utils.import_scanner import extract_imports

    for decl in extract_imports(Path("./app.py")):
        print(decl)
    # ModuleImport(module='requests')
    # MemberImport(module='sklearn', member='svm')
    ```
"""
import logging
import pathlib as pl
from typing import Iterable, List, Optional

from .classes import ImportDeclaration, MemberImport, ModuleImport
from .errors import ScriptReadError

logger = logging.getLogger(__name__)

IMPORT_PREFIX = "import "
FROM_PREFIX = "from "
FROM_SEPARATOR = " import "


def parse_import_line(line: str) -> Optional[ImportDeclaration]:
    """
    Parse a single source line into an import declaration.

    Parameters:
        line (str):
            A raw line of source text. Surrounding whitespace is ignored.

    Returns:
        Optional[ImportDeclaration]: ``ModuleImport`` for ``import X`` lines,
            ``MemberImport`` for ``from X import Y`` lines that contain exactly
            one `` import `` separator, None for anything else.
    """
    stripped = line.strip()
    if stripped.startswith(IMPORT_PREFIX):
        return ModuleImport(stripped[len(IMPORT_PREFIX):].strip())
    if stripped.startswith(FROM_PREFIX):
        parts = stripped[len(FROM_PREFIX):].split(FROM_SEPARATOR)
        if len(parts) == 2:
            return MemberImport(parts[0].strip(), parts[1].strip())
    return None


def extract_imports_from_lines(lines: Iterable[str]) -> List[ImportDeclaration]:
    """Extract import declarations from lines, keeping order and duplicates."""
    imports = []
    for line in lines:
        decl = parse_import_line(line)
        if decl is not None:
            imports.append(decl)
    return imports


def extract_imports(file_path: pl.Path) -> List[ImportDeclaration]:
    """
    Extract import declarations from a Python file.

    Parameters:
        file_path (pl.Path):
            Path to the script to scan.

    Returns:
        List[ImportDeclaration]: Declarations in source order. A module imported
            on several lines appears several times.

    Raises:
        ScriptReadError: If the file cannot be opened or is not valid UTF-8.
    """
    path = pl.Path(file_path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ScriptReadError(f"Failed to read script {path}: {e}") from e

    imports = extract_imports_from_lines(content.splitlines())
    logger.debug("Found %d import declarations in %s", len(imports), path)
    return imports
