import pytest

from dock.utils.classes import MemberImport, ModuleImport
from dock.utils.errors import ScriptReadError
from dock.utils.import_scanner import extract_imports, extract_imports_from_lines, parse_import_line


def test_import_line_is_module_only():
    assert parse_import_line("import requests") == ModuleImport("requests")


def test_import_name_is_not_split():
    assert parse_import_line("import os.path") == ModuleImport("os.path")
    assert parse_import_line("import os, sys") == ModuleImport("os, sys")
    assert parse_import_line("import numpy as np") == ModuleImport("numpy as np")


def test_surrounding_whitespace_is_trimmed():
    assert parse_import_line("    import   yaml   ") == ModuleImport("yaml")


def test_from_line_is_module_with_member():
    assert parse_import_line("from sklearn import svm") == MemberImport("sklearn", "svm")


def test_from_line_keeps_member_list_verbatim():
    assert parse_import_line("from a.b import c, d") == MemberImport("a.b", "c, d")


@pytest.mark.parametrize(
    "line",
    [
        "from x",
        "from x import y import z",
        "from (x) import",
        "x = 1",
        "# import os",
        "importlib.reload(m)",
        "fromage = 3",
        "",
    ],
)
def test_non_matching_lines_are_skipped(line):
    assert parse_import_line(line) is None


def test_order_and_duplicates_are_kept():
    lines = ["import b", "from a import x", "import b", "print('hi')"]
    assert extract_imports_from_lines(lines) == [
        ModuleImport("b"),
        MemberImport("a", "x"),
        ModuleImport("b"),
    ]


def test_extract_imports_reads_file(write_script):
    script = write_script("import os\nimport requests\nfrom sklearn import svm\n")
    assert extract_imports(script) == [
        ModuleImport("os"),
        ModuleImport("requests"),
        MemberImport("sklearn", "svm"),
    ]


def test_missing_file_raises(tmp_path):
    with pytest.raises(ScriptReadError):
        extract_imports(tmp_path / "missing.py")


def test_binary_file_raises(tmp_path):
    path = tmp_path / "blob.py"
    path.write_bytes(b"\xff\xfe\x00import os")
    with pytest.raises(ScriptReadError):
        extract_imports(path)
