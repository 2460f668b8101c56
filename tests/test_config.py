import pytest

from dock.utils.classes import DockConfig, RegistryErrorPolicy
from dock.utils.config import DEFAULTS, get_default, load_config, parse_config
from dock.utils.errors import ConfigError


def test_missing_file_yields_defaults(tmp_path):
    config = load_config(tmp_path / "nope.toml")
    assert config == DockConfig()
    assert config.import_mappings == {}


def test_defaults_match_dataclass():
    config = parse_config({})
    assert config.python_version == get_default("python-version") == "3.10"
    assert config.container_tool == DEFAULTS["container-tool"]
    assert config.on_registry_error is RegistryErrorPolicy.ABSENT


def test_import_mappings_loaded(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[defaults]\n'
        'python-version = "3.12"\n'
        'on-registry-error = "abort"\n'
        'jobs = 4\n'
        '\n'
        '[defaults.import-mappings]\n'
        'sklearn = "scikit-learn"\n'
        '"sklearn.svm" = "scikit-learn"\n',
        encoding="utf-8",
    )
    config = load_config(path)

    assert config.import_mappings == {"sklearn": "scikit-learn", "sklearn.svm": "scikit-learn"}
    assert config.python_version == "3.12"
    assert config.on_registry_error is RegistryErrorPolicy.ABORT
    assert config.jobs == 4


def test_file_without_defaults_table(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[other]\nkey = 1\n', encoding="utf-8")
    assert load_config(path) == DockConfig()


def test_malformed_toml_raises(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[defaults\nbroken = ", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize(
    "defaults",
    [
        {"import-mappings": {"sklearn": 1}},
        {"import-mappings": "sklearn=scikit-learn"},
        {"python-version": 3.1},
        {"on-registry-error": "retry"},
        {"jobs": 0},
        {"jobs": True},
        {"registry-timeout": "soon"},
    ],
)
def test_invalid_values_raise(defaults):
    with pytest.raises(ConfigError):
        parse_config({"defaults": defaults})


def test_registry_timeout_accepts_numbers():
    assert parse_config({"defaults": {"registry-timeout": 5}}).registry_timeout == 5
    assert parse_config({"defaults": {"registry-timeout": 2.5}}).registry_timeout == 2.5


def test_defaults_table_mirrors_dataclass_fields():
    config = DockConfig()
    assert DEFAULTS == {
        "python-version": config.python_version,
        "on-registry-error": config.on_registry_error,
        "container-tool": config.container_tool,
        "python-executable": config.python_executable,
        "registry-url": config.registry_url,
        "registry-timeout": config.registry_timeout,
        "jobs": config.jobs,
    }
