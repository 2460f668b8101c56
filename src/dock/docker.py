"""Build and run the generated image with the docker CLI."""
import logging
import os
import pathlib as pl
import subprocess
from typing import Sequence

from .utils.errors import ContainerBuildError, ContainerRunError

logger = logging.getLogger(__name__)


def build_image(tag: str, context_dir: pl.Path, tool: str = "docker") -> None:
    """
    Build an image from the Dockerfile in ``context_dir``.

    BuildKit is enabled through ``DOCKER_BUILDKIT=1``. Build output goes
    straight to the terminal.

    Raises:
        ContainerBuildError: If the tool cannot be started or the build fails.
    """
    env = os.environ.copy()
    env["DOCKER_BUILDKIT"] = "1"
    cmd = [tool, "build", "-t", tag, str(context_dir)]

    logger.info("Building image %s from %s", tag, context_dir)
    try:
        subprocess.run(cmd, check=True, env=env)
    except OSError as e:
        raise ContainerBuildError(f"Failed to build Docker image: {e}") from e
    except subprocess.CalledProcessError as e:
        raise ContainerBuildError(
            f"Failed to build Docker image: {tool} build exited with status {e.returncode}"
        ) from e


def run_container(tag: str, args: Sequence[str] = (), tool: str = "docker") -> None:
    """
    Run the image, forwarding ``args`` to the script's entrypoint.

    The container's stdin, stdout and stderr are inherited.

    Raises:
        ContainerRunError: If the tool cannot be started or the container exits
            non-zero.
    """
    cmd = [tool, "run", tag, *args]

    logger.info("Running image %s", tag)
    try:
        subprocess.run(cmd, check=True)
    except OSError as e:
        raise ContainerRunError(f"Failed to run Docker container: {e}") from e
    except subprocess.CalledProcessError as e:
        raise ContainerRunError(
            f"Failed to run Docker container: {tool} run exited with status {e.returncode}"
        ) from e


def build_and_run(
    tag: str,
    context_dir: pl.Path,
    args: Sequence[str] = (),
    tool: str = "docker",
) -> None:
    """Build the image, then run it. A failed build skips the run."""
    build_image(tag, context_dir, tool=tool)
    run_container(tag, args, tool=tool)
