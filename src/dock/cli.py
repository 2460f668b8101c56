"""
Command line entry point: ``dock SCRIPT [ARGS ...]``.

Generates a Dockerfile next to SCRIPT with its third-party imports installed,
builds an image tagged with the script's file name and runs it, forwarding
ARGS to the script.
"""
import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .dependencies import discover_dependencies, resolve_script_path
from .docker import build_and_run
from .dockerfile import generate_dockerfile
from .utils.classes import DockConfig, RegistryErrorPolicy
from .utils.config import CONFIG_PATH, get_default, load_config
from .utils.errors import DockError
from .utils.registry import PackageIndex
from .utils.stdlib import get_stdlib_modules

logger = logging.getLogger("dock")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dock",
        description="Dockerize any Python script",
        allow_abbrev=False,
    )
    parser.add_argument("script", help="Python script")
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Optional list of args passed to the script inside the container",
    )
    parser.add_argument(
        "--python-version",
        help=f"Tag of the python base image (default: {get_default('python-version')})",
    )
    parser.add_argument(
        "--python",
        dest="python_executable",
        help=f"Interpreter whose standard library is excluded (default: {get_default('python-executable')})",
    )
    parser.add_argument(
        "--on-registry-error",
        choices=[p.value for p in RegistryErrorPolicy],
        help="How to treat a package index request that fails (default: absent)",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=_positive_int,
        help="Number of concurrent package index checks (default: 1)",
    )
    parser.add_argument(
        "--generate-only",
        action="store_true",
        help="Write the Dockerfile and stop before building",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Config file (default: {CONFIG_PATH})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


def apply_overrides(config: DockConfig, args: argparse.Namespace) -> DockConfig:
    """Lay command line flags that were given over the loaded config."""
    if args.python_version:
        config.python_version = args.python_version
    if args.python_executable:
        config.python_executable = args.python_executable
    if args.on_registry_error:
        config.on_registry_error = RegistryErrorPolicy(args.on_registry_error)
    if args.jobs:
        config.jobs = args.jobs
    return config


def _forwarded_args(args: List[str]) -> List[str]:
    if args and args[0] == "--":
        return args[1:]
    return args


def run(args: argparse.Namespace) -> None:
    """Run the whole pipeline. Raises ``DockError`` on the first failure."""
    config = apply_overrides(load_config(args.config), args)
    script_name, context_dir = resolve_script_path(args.script)

    stdlib = get_stdlib_modules(config.python_executable)
    index = PackageIndex(
        base_url=config.registry_url,
        on_error=config.on_registry_error,
        timeout=config.registry_timeout,
    )
    modules = discover_dependencies(
        args.script,
        stdlib=stdlib,
        index=index,
        mappings=config.import_mappings,
        jobs=config.jobs,
    )

    generate_dockerfile(config.python_version, modules, script_name, context_dir)
    if args.generate_only:
        return

    build_and_run(
        script_name,
        context_dir,
        _forwarded_args(args.args),
        tool=config.container_tool,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        run(args)
    except DockError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
