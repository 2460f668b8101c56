import pytest

from dock.dockerfile import (
    DEFAULT_TEMPLATE,
    DOCKERFILE_NAME,
    generate_dockerfile,
    load_template,
    render_dockerfile,
)
from dock.utils.errors import DockerfileWriteError


def test_default_template_when_env_unset():
    assert load_template(env={}) == DEFAULT_TEMPLATE


def test_template_override_from_env(tmp_path):
    template = tmp_path / "Dockerfile.template"
    template.write_text("FROM python:{{PYTHON_VERSION}}-slim\n", encoding="utf-8")
    assert load_template(env={"DOCKERFILE_TEMPLATE": str(template)}) == (
        "FROM python:{{PYTHON_VERSION}}-slim\n"
    )


def test_unreadable_override_falls_back(tmp_path):
    env = {"DOCKERFILE_TEMPLATE": str(tmp_path / "missing.template")}
    assert load_template(env=env) == DEFAULT_TEMPLATE


def test_load_template_reads_process_environment(tmp_path, monkeypatch):
    template = tmp_path / "custom"
    template.write_text("custom", encoding="utf-8")
    monkeypatch.setenv("DOCKERFILE_TEMPLATE", str(template))
    assert load_template() == "custom"


def test_render_substitutes_all_placeholders():
    rendered = render_dockerfile(DEFAULT_TEMPLATE, "3.10", ["requests", "sklearn.svm"], "app.py")

    assert "{{" not in rendered
    assert "FROM python:3.10" in rendered
    assert "RUN pip install requests sklearn.svm" in rendered
    assert "COPY app.py /home/dock/app.py" in rendered
    assert 'ENTRYPOINT ["python3", "app.py"]' in rendered


def test_render_without_placeholders_is_unchanged():
    template = "FROM scratch\nCMD true\n"
    assert render_dockerfile(template, "3.10", ["requests"], "app.py") == template


def test_generate_writes_next_to_script(tmp_path):
    path = generate_dockerfile("3.11", ["requests"], "app.py", tmp_path, template=DEFAULT_TEMPLATE)

    assert path == tmp_path / DOCKERFILE_NAME
    assert path.read_text(encoding="utf-8") == render_dockerfile(
        DEFAULT_TEMPLATE, "3.11", ["requests"], "app.py"
    )


def test_generate_overwrites_existing(tmp_path):
    (tmp_path / "Dockerfile").write_text("old", encoding="utf-8")
    generate_dockerfile("3.10", [], "app.py", tmp_path, template="{{SCRIPT_NAME}}")
    assert (tmp_path / "Dockerfile").read_text(encoding="utf-8") == "app.py"


def test_generate_uses_default_template_when_env_unset(tmp_path):
    path = generate_dockerfile("3.10", ["requests"], "app.py", tmp_path)
    assert path.read_text(encoding="utf-8") == render_dockerfile(
        DEFAULT_TEMPLATE, "3.10", ["requests"], "app.py"
    )


def test_generate_into_missing_directory_raises(tmp_path):
    with pytest.raises(DockerfileWriteError):
        generate_dockerfile("3.10", [], "app.py", tmp_path / "missing", template="x")
