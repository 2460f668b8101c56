"""
Package existence checks against the PyPI JSON API.

A candidate dependency is kept only when ``https://pypi.org/pypi/<name>/json``
answers with a success status. Nothing in the response body is inspected.

Example:
    ```python
    from dock.utils.registry import PackageIndex
    from dock.utils.classes import MemberImport

    index = PackageIndex()
    index.exists("requests")  # True
    index.verify(MemberImport("numpy", "random"), stdlib=frozenset())  # "numpy"
    ```
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Union

import requests

from .classes import ImportDeclaration, MemberImport, ModuleImport, RegistryErrorPolicy
from .errors import RegistryUnavailableError

logger = logging.getLogger(__name__)

PYPI_URL = "https://pypi.org/pypi"


class PackageIndex:
    """
    Existence checks against a package index, memoized for one run.

    Parameters:
        base_url (str):
            Root of the JSON API. Default is "https://pypi.org/pypi".
        session (Optional[requests.Session]):
            Session shared by every lookup. If None, each thread that performs
            lookups gets its own ``requests.Session``.
        on_error (Union[RegistryErrorPolicy, str]):
            How a request that fails before a response arrives is read:
            "absent" treats the package as missing, "present" keeps it and
            "abort" raises ``RegistryUnavailableError``. A dotted name that is
            only assumed present is not kept if its root module can be used
            instead.
        timeout (Optional[float]):
            Per-request timeout in seconds. None waits indefinitely.

    Lookups from ``verify_all`` worker threads can race on the same uncached
    name and both hit the network; they record the same answer.
    """

    def __init__(
        self,
        base_url: str = PYPI_URL,
        session: Optional[requests.Session] = None,
        on_error: Union[RegistryErrorPolicy, str] = RegistryErrorPolicy.ABSENT,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._shared_session = session
        self._local = threading.local()
        self.on_error = RegistryErrorPolicy(on_error)
        self.timeout = timeout
        self._cache: Dict[str, bool] = {}
        self._assumed: Set[str] = set()

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def package_url(self, name: str) -> str:
        return f"{self.base_url}/{name}/json"

    def exists(self, name: str) -> bool:
        """
        Check whether a package name is published on the index.

        Parameters:
            name (str):
                Package name as it appears in the source (e.g., "sklearn.svm").

        Returns:
            bool: True if the index answered with a success status.

        Raises:
            RegistryUnavailableError: If the request failed and the policy is
                ``abort``.
        """
        if name in self._cache:
            return self._cache[name]

        url = self.package_url(name)
        try:
            response = self.session.get(url, timeout=self.timeout)
            found = response.ok
        except requests.RequestException as e:
            found = self._handle_request_error(name, e)
            if found:
                self._assumed.add(name)

        logger.debug("%s -> %s", url, "found" if found else "not found")
        self._cache[name] = found
        return found

    def _handle_request_error(self, name: str, error: requests.RequestException) -> bool:
        if self.on_error is RegistryErrorPolicy.ABORT:
            raise RegistryUnavailableError(
                f"Failed to query package index for '{name}': {error}"
            ) from error
        assumed = self.on_error is RegistryErrorPolicy.PRESENT
        logger.warning(
            "Package index request for '%s' failed (%s); treating it as %s",
            name,
            error,
            "present" if assumed else "absent",
        )
        return assumed

    def verify(self, declaration: ImportDeclaration, stdlib: FrozenSet[str]) -> Optional[str]:
        """
        Resolve an import declaration to a published package name.

        Parameters:
            declaration (ImportDeclaration):
                The import to check.
            stdlib (FrozenSet[str]):
                Standard library module names. A declaration whose module is in
                this set is skipped without any request.

        Returns:
            Optional[str]: For ``import X``, X if it exists. For
                ``from X import Y``, "X.Y" if it exists, otherwise X if it
                exists. None when nothing resolves.
        """
        if declaration.module in stdlib:
            return None

        if isinstance(declaration, MemberImport):
            full_name = declaration.full_name
            full_found = self.exists(full_name)
            if full_found and full_name not in self._assumed:
                return full_name
            if self.exists(declaration.module):
                return declaration.module
            return full_name if full_found else None

        if isinstance(declaration, ModuleImport) and self.exists(declaration.module):
            return declaration.module
        return None

    def verify_all(
        self,
        declarations: Iterable[ImportDeclaration],
        stdlib: FrozenSet[str],
        jobs: int = 1,
    ) -> List[str]:
        """
        Verify many declarations and collect the names that resolved.

        With ``jobs`` of 1 the checks run one at a time in source order.
        Larger values run them on a thread pool of that size; the resulting
        names keep source order either way.

        Returns:
            List[str]: Resolved package names, duplicates retained.
        """
        declarations = list(declarations)
        if jobs <= 1 or len(declarations) <= 1:
            results = [self.verify(decl, stdlib) for decl in declarations]
        else:
            with ThreadPoolExecutor(max_workers=jobs) as pool:
                results = list(pool.map(lambda decl: self.verify(decl, stdlib), declarations))
        return [name for name in results if name is not None]
