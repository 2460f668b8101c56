"""
Dockerfile generation.

The Dockerfile is produced from a text template with three placeholders:

    - ``{{PYTHON_VERSION}}``: tag of the ``python`` base image
    - ``{{MODULES}}``: space separated packages passed to ``pip install``
    - ``{{SCRIPT_NAME}}``: file name of the script being wrapped

Set ``DOCKERFILE_TEMPLATE`` to the path of a template file to replace the
built-in one.
"""
import logging
import os
import pathlib as pl
from typing import Mapping, Optional, Sequence

from .utils.errors import DockerfileWriteError

logger = logging.getLogger(__name__)

TEMPLATE_ENV_VAR = "DOCKERFILE_TEMPLATE"
DOCKERFILE_NAME = "Dockerfile"

DEFAULT_TEMPLATE = """
FROM python:{{PYTHON_VERSION}}

RUN useradd -ms /bin/bash dock
USER dock

RUN pip install {{MODULES}}

COPY {{SCRIPT_NAME}} /home/dock/{{SCRIPT_NAME}}
WORKDIR /home/dock

ENTRYPOINT ["python3", "{{SCRIPT_NAME}}"]
"""


def load_template(env: Optional[Mapping[str, str]] = None) -> str:
    """
    Load the Dockerfile template.

    Parameters:
        env (Optional[Mapping[str, str]]):
            Environment to read ``DOCKERFILE_TEMPLATE`` from. Default is
            ``os.environ``.

    Returns:
        str: The override file's text if the variable is set and the file is
            readable, otherwise ``DEFAULT_TEMPLATE``.
    """
    env = os.environ if env is None else env
    override = env.get(TEMPLATE_ENV_VAR)
    if not override:
        return DEFAULT_TEMPLATE

    try:
        template = pl.Path(override).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Ignoring %s=%s: %s", TEMPLATE_ENV_VAR, override, e)
        return DEFAULT_TEMPLATE

    logger.debug("Using Dockerfile template from %s", override)
    return template


def render_dockerfile(
    template: str,
    python_version: str,
    modules: Sequence[str],
    script_name: str,
) -> str:
    """Substitute the three placeholders in ``template``."""
    return (
        template.replace("{{PYTHON_VERSION}}", python_version)
        .replace("{{MODULES}}", " ".join(modules))
        .replace("{{SCRIPT_NAME}}", script_name)
    )


def generate_dockerfile(
    python_version: str,
    modules: Sequence[str],
    script_name: str,
    output_dir: pl.Path,
    template: Optional[str] = None,
) -> pl.Path:
    """
    Render the template and write it as ``Dockerfile`` in ``output_dir``.

    An existing Dockerfile is overwritten.

    Parameters:
        python_version (str):
            Base image tag (e.g., "3.10").
        modules (Sequence[str]):
            Packages to install, already deduplicated and remapped.
        script_name (str):
            File name of the script, without directories.
        output_dir (pl.Path):
            Directory holding the script. Also the docker build context.
        template (Optional[str]):
            Template text. Default is ``load_template()``.

    Returns:
        pl.Path: Path of the written Dockerfile.

    Raises:
        DockerfileWriteError: If the file cannot be written.
    """
    if template is None:
        template = load_template()

    content = render_dockerfile(template, python_version, modules, script_name)
    dockerfile_path = pl.Path(output_dir) / DOCKERFILE_NAME
    try:
        dockerfile_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise DockerfileWriteError(f"Failed to write {dockerfile_path}: {e}") from e

    logger.info("Dockerfile generated at: %s", dockerfile_path)
    return dockerfile_path
