"""Collector listing a GitHub repository through the git trees API."""

import re
import types
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

import httpx

from repotree import __version__
from repotree.collectors.base_collector import PathCollector, WarningHandler
from repotree.exceptions import AuthError, InputError, NotFoundError, RateLimitError, UpstreamError
from repotree.exclusion_rules.base_rules import BaseExclusionRules
from repotree.path_entry import PathEntry, split_path
from repotree.types import EntryKind

GITHUB_API_HOST = "api.github.com"
DEFAULT_REF = "main"
DEFAULT_FALLBACK_REF = "master"

_REPOSITORY_URL = re.compile(
    r"^(?:https?://(?:www\.)?github\.com/|ssh://git@github\.com/|git@github\.com:|github\.com/)"
    r"([^/\s]+)/([^/\s?#]+)"
)
_ITEM_KINDS = {"blob": EntryKind.FILE, "tree": EntryKind.DIRECTORY}


def parse_repository_url(url: str) -> Tuple[str, str]:
    """Extract the owner and repository name from a GitHub URL.

    Args:
        url: A URL such as ``https://github.com/<owner>/<repo>``, optionally with
            a ``.git`` suffix or further path components.

    Returns:
        The (owner, repo) pair.

    Raises:
        InputError: If the URL does not name a GitHub repository.

    Example:
        >>> parse_repository_url("https://github.com/psf/requests")
        ('psf', 'requests')
        >>> parse_repository_url("git@github.com:psf/requests.git")
        ('psf', 'requests')
        >>> parse_repository_url("https://github.com/psf/requests/tree/main/docs")
        ('psf', 'requests')
    """
    match = _REPOSITORY_URL.match(url.strip())
    if not match:
        raise InputError(f"Invalid GitHub repository URL: {url}")
    owner, repo = match.groups()
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        raise InputError(f"Invalid GitHub repository URL: {url}")
    return owner, repo


def is_repository_url(source: str) -> bool:
    """Check whether source starts like a GitHub repository URL (``https://github.com/...``, ``git@github.com:...``)."""
    return _REPOSITORY_URL.match(source.strip()) is not None


class GitHubCollector(PathCollector):
    """Collector that lists a GitHub repository with a single recursive trees request.

    The whole tree of a ref is fetched from ``/repos/{owner}/{repo}/git/trees/{ref}?recursive=1``
    and every ``blob`` (file) and ``tree`` (directory) item becomes a PathEntry.
    Other item types, such as submodule commits, are skipped.

    If the primary ref does not exist, the fallback ref is tried once before
    NotFoundError is raised, which covers repositories whose default branch is
    still called ``master``. Any other failure is raised immediately with the
    message from the API passed through unchanged.

    The API token is only ever taken from the constructor. The collector never
    consults the environment.

    Attributes:
        token (Optional[str]): Bearer token sent with every request.
        ref (Optional[str]): Ref to list. None means the repository's default branch.
        fallback_ref (Optional[str]): Ref tried once if ref is not found.
        api_host (str): Hostname of the API.

    Example:
        >>> with GitHubCollector(token="ghp_example") as collector:  # doctest: +SKIP
        ...     entries = collector.collect("https://github.com/psf/requests")
        >>> entries[0].path_string  # doctest: +SKIP
        '.coveragerc'
    """

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        ref: Optional[str] = DEFAULT_REF,
        fallback_ref: Optional[str] = DEFAULT_FALLBACK_REF,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        client: Optional[httpx.Client] = None,
        api_host: str = GITHUB_API_HOST,
        timeout: float = 30.0,
        on_warning: Optional[WarningHandler] = None,
    ) -> None:
        """Initialize a GitHubCollector.

        Args:
            token: API token. Requests are anonymous without one.
            ref: Branch, tag or commit to list. Defaults to "main". None resolves
                the repository's default branch first.
            fallback_ref: Ref tried once when ref is not found. Defaults to "master".
            exclusion_rules: Rules applied to the full path of every item.
            client: HTTP client to use. If omitted, one is created and owned by the
                collector; close() releases it.
            api_host: API hostname. Defaults to api.github.com.
            timeout: Request timeout in seconds for an owned client.
            on_warning: Callable receiving warning messages.
        """
        super().__init__(exclusion_rules, on_warning)
        self.token = token
        self.ref = ref
        self.fallback_ref = fallback_ref
        self.api_host = api_host
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def collect(self, source: str) -> List[PathEntry]:
        """List every file and directory of the repository named by source.

        Args:
            source: Repository URL, or an ``owner/repo`` shorthand.

        Raises:
            InputError: If source does not name a repository.
            NotFoundError: If neither the ref nor the fallback ref exists.
            AuthError: If the API rejects the credentials.
            RateLimitError: If the API rate limit is exhausted.
            UpstreamError: For any other non-200 response or transport failure.
        """
        owner, repo = self.parse_source(source)
        tree_data, _ = self.get_tree_data(owner, repo)
        return self.entries_from_tree(tree_data.get("tree", []))

    @staticmethod
    def parse_source(source: str) -> Tuple[str, str]:
        if is_repository_url(source):
            return parse_repository_url(source)
        parts = split_path(source)
        if len(parts) != 2:
            raise InputError(f"Invalid GitHub repository: {source}")
        return parts[0], parts[1]

    def get_tree_data(self, owner: str, repo: str, ref: Optional[str] = None) -> Tuple[Dict[str, Any], str]:
        """Fetch the recursive tree listing, falling back to the fallback ref once.

        Args:
            owner: Repository owner.
            repo: Repository name.
            ref: Ref to list. Defaults to the collector's ref (or the default branch).

        Returns:
            The decoded API response and the ref that was actually listed.
        """
        ref = ref or self.ref or self.get_default_branch(owner, repo)
        try:
            return self._request(self._tree_path(owner, repo, ref)), ref
        except NotFoundError:
            if not self.fallback_ref or self.fallback_ref == ref:
                raise
        data = self._request(self._tree_path(owner, repo, self.fallback_ref))
        return data, self.fallback_ref

    def get_repository_info(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch the raw repository record (``/repos/{owner}/{repo}``)."""
        return self._request(f"/repos/{owner}/{repo}")

    def get_default_branch(self, owner: str, repo: str) -> str:
        return str(self.get_repository_info(owner, repo)["default_branch"])

    def entries_from_tree(self, items: Iterable[Dict[str, Any]]) -> List[PathEntry]:
        """Convert trees API items into path entries, applying the exclusion rules."""
        entries: List[PathEntry] = []
        checked_dirs: Dict[Tuple[str, ...], bool] = {}
        for item in items:
            kind = _ITEM_KINDS.get(item.get("type", ""))
            path = item.get("path")
            if kind is None or not path:
                continue
            size = item.get("size") if kind is EntryKind.FILE else None
            segments = split_path(path)
            if self.exclusion_rules is not None and self.exclusion_rules.exclude_with_parents(
                segments, size, kind is EntryKind.DIRECTORY, checked_dirs
            ):
                continue
            metadata = {key: item[key] for key in ("sha", "mode", "url") if key in item}
            entries.append(PathEntry.from_path(path, kind, size, metadata))
        return entries

    def _tree_path(self, owner: str, repo: str, ref: str) -> str:
        return f"/repos/{owner}/{repo}/git/trees/{ref}?recursive=1"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": f"repotree/{__version__}",
            "Accept": "application/vnd.github.v3+json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, path: str) -> Dict[str, Any]:
        url = f"https://{self.api_host}{path}"
        try:
            response = self._client.get(url, headers=self._headers())
        except httpx.TransportError as e:
            raise UpstreamError(f"Request to {url} failed: {e}")

        if response.status_code != 200:
            raise _error_for(response)

        try:
            data = response.json()
        except ValueError:
            raise UpstreamError(f"Response from {url} is not valid JSON", status_code=response.status_code)
        if not isinstance(data, dict):
            raise UpstreamError(
                f"Unexpected response from {url}: expected a JSON object", status_code=response.status_code
            )

        if data.get("truncated"):
            self.on_warning(f"Listing for {path} was truncated by the API; the tree is incomplete")
        return data

    def close(self) -> None:
        """Close the HTTP client if it was created by this collector."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "GitHubCollector":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.close()


def _upstream_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    message = data.get("message") if isinstance(data, dict) else None
    return message or "GitHub API request failed"


def _error_for(response: httpx.Response) -> UpstreamError:
    message = _upstream_message(response)
    status = response.status_code

    if status == 404:
        return NotFoundError(message, status_code=status)
    if status == 429 or (
        status == 403 and (response.headers.get("X-RateLimit-Remaining") == "0" or "rate limit" in message.lower())
    ):
        return RateLimitError(message, status_code=status)
    if status in (401, 403):
        return AuthError(message, status_code=status)
    return UpstreamError(message, status_code=status)
