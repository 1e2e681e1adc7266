"""API wrapper for the GitLab REST API v4.

This module talks to the repository, commit and pipeline endpoints of a
single GitLab instance using requests, and translates HTTP failures into our
typed exception hierarchy. It performs no retries: retry policy belongs to
the transport, not to this layer.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests
from requests.exceptions import ConnectionError, Timeout

from .errors import (
    APIUnreachableError,
    InvalidCredentialsError,
    NotFoundError,
    RemoteError,
)
from .models import CommitAction, FileRecord, Page, TreeEntry, TreePage
from .pagination import (
    TOTAL_COUNT_HEADER,
    TOTAL_PAGES_HEADER,
    parse_total_count,
    parse_total_pages,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def _encode(segment: Any) -> str:
    """URL-encode a project id or repository path as a single path segment."""
    return quote(str(segment), safe="")


class GitLabClient:
    """Thin wrapper around the GitLab REST API with error translation.

    The client:
    1. Adds the bearer token supplied by the injected token provider
    2. Builds project-scoped endpoint URLs
    3. Translates non-2xx responses to typed exceptions
    4. Parses pagination metadata from response headers

    Example:
        >>> auth = Authenticator()
        >>> client = GitLabClient("https://gitlab.com", auth.get_token)
        >>> page = client.list_tree_page("group/project", "master", "data/users", 1, 20)
    """

    def __init__(
        self,
        host: str,
        token_provider: Callable[[], str],
        api_version: str = "v4",
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            host: GitLab host, e.g. https://gitlab.com
            token_provider: Callable returning the current bearer token
            api_version: REST API version segment
            timeout: Per-request timeout in seconds, passed to requests
            session: Optional requests session (one is created if omitted)
        """
        self._base_url = "/".join([host.rstrip("/"), "api", api_version])
        self._token_provider = token_provider
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._token_provider()}"}

    def _sanitize_credentials(self, text: str) -> str:
        """Sanitize error text so tokens never reach the logs.

        Example:
            >>> client._sanitize_credentials("Authorization: Bearer abc123")
            "Authorization: ***REDACTED***"
        """
        if not text:
            return text

        sanitized = text

        # URL userinfo (user:pass@host)
        sanitized = re.sub(r'://([\w.-]+):([\w.-]+)@', r'://***:***@', sanitized)

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE,
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE,
        )
        sanitized = re.sub(
            r'(private[-_]token|access_token|token)(["\']?\s*[:=]\s*["\']?)([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE,
        )
        # GitLab personal/OAuth token prefixes
        sanitized = re.sub(r'\bgl(pat|oas|rt)-[\w-]{8,}\b', '***REDACTED***', sanitized)

        return sanitized

    def _translate_error(
        self,
        response: requests.Response,
        operation: str,
        resource_path: str,
    ) -> RemoteError:
        """Translate a non-2xx response to a typed exception.

        Args:
            response: The failed response
            operation: Description of the operation (for logging)
            resource_path: Path or identifier the request targeted

        Returns:
            RemoteError or one of its subclasses
        """
        status = response.status_code
        body = response.text or ""

        if status == 401:
            return InvalidCredentialsError(endpoint=self._base_url, body=body)
        if status == 404:
            return NotFoundError(path=resource_path, body=body)

        safe_body = self._sanitize_credentials(body[:500])
        logger.error(f"GitLab API operation failed: {operation} - HTTP {status} {safe_body}")
        return RemoteError(status_code=status, body=body)

    def _request(
        self,
        method: str,
        endpoint: str,
        operation: str,
        resource_path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        url = f"{self._base_url}/{endpoint}"
        logger.debug(f"{method} {url} params={params}")
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                params=params,
                json=json,
                timeout=self._timeout,
            )
        except (Timeout, ConnectionError) as e:
            logger.error(
                f"GitLab API unreachable during {operation}: "
                f"{self._sanitize_credentials(str(e))}"
            )
            raise APIUnreachableError(endpoint=self._base_url) from e

        if not response.ok:
            raise self._translate_error(response, operation, resource_path)
        return response

    def _json(self, response: requests.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(
                status_code=response.status_code,
                body=response.text or "",
                message=f"GitLab API returned invalid JSON during {operation}",
            ) from e

    def _list_page(
        self,
        endpoint: str,
        operation: str,
        resource_path: str,
        params: Dict[str, Any],
    ) -> Page:
        response = self._request("GET", endpoint, operation, resource_path, params=params)
        items = self._json(response, operation)
        seen = (params["page"] - 1) * params["per_page"] + len(items)
        total = parse_total_count(response.headers.get(TOTAL_COUNT_HEADER), fallback=seen)
        return Page(items=items, total=total)

    # Repository files

    def list_tree_page(
        self,
        project_id: str,
        ref: str,
        path: str,
        page: int,
        per_page: int,
    ) -> TreePage:
        """Fetch one page of the repository tree under path.

        Args:
            project_id: Numeric id or "namespace/project" path
            ref: Branch or tag name
            path: Directory to list
            page: 1-based page number
            per_page: Entries per page

        Returns:
            TreePage with the page's entries and the total page count
            (0 when the response carries no usable page count)

        Raises:
            NotFoundError: If the path or ref does not exist
            RemoteError: On any other non-2xx response
            APIUnreachableError: If the API cannot be reached
        """
        operation = f"list_tree_page({path}, page={page})"
        response = self._request(
            "GET",
            f"projects/{_encode(project_id)}/repository/tree",
            operation,
            path,
            params={"ref": ref, "path": path, "page": page, "per_page": per_page},
        )
        records = self._json(response, operation)
        return TreePage(
            entries=[TreeEntry.from_api(record) for record in records],
            total_pages=parse_total_pages(response.headers.get(TOTAL_PAGES_HEADER)),
        )

    def read_file(self, project_id: str, ref: str, path: str) -> FileRecord:
        """Fetch a single file at ref.

        Raises:
            NotFoundError: If the file does not exist at ref
            RemoteError: On any other non-2xx response
            APIUnreachableError: If the API cannot be reached
        """
        operation = f"read_file({path})"
        response = self._request(
            "GET",
            f"projects/{_encode(project_id)}/repository/files/{_encode(path)}",
            operation,
            path,
            params={"ref": ref},
        )
        body = self._json(response, operation)
        return FileRecord(
            path=body.get("file_path", path),
            content=body.get("content", ""),
            encoding=body.get("encoding", "base64"),
            blob_id=body.get("blob_id"),
            commit_id=body.get("commit_id"),
        )

    def write_commit(
        self,
        project_id: str,
        ref: str,
        message: str,
        actions: List[CommitAction],
    ) -> Dict[str, Any]:
        """Create one commit containing all actions on branch ref.

        GitLab applies multi-action commits atomically: either every action
        lands or the request fails.

        Returns:
            The created commit as returned by GitLab

        Raises:
            RemoteError: On any non-2xx response (e.g. 400 when a created
                file already exists or a deleted file is missing)
            APIUnreachableError: If the API cannot be reached
        """
        operation = f"write_commit({message}, {len(actions)} actions)"
        response = self._request(
            "POST",
            f"projects/{_encode(project_id)}/repository/commits",
            operation,
            ref,
            json={
                "branch": ref,
                "commit_message": message,
                "actions": [action.to_api() for action in actions],
            },
        )
        return self._json(response, operation)

    # Read-only collections

    def list_pipelines(self, project_id: str, ref: str, page: int, per_page: int) -> Page:
        """List CI pipelines for ref, newest first."""
        return self._list_page(
            f"projects/{_encode(project_id)}/pipelines",
            f"list_pipelines(page={page})",
            "pipelines",
            {"ref": ref, "page": page, "per_page": per_page},
        )

    def get_pipeline(self, project_id: str, pipeline_id: str) -> Dict[str, Any]:
        operation = f"get_pipeline({pipeline_id})"
        response = self._request(
            "GET",
            f"projects/{_encode(project_id)}/pipelines/{_encode(pipeline_id)}",
            operation,
            f"pipeline {pipeline_id}",
        )
        return self._json(response, operation)

    def list_branches(self, project_id: str, page: int, per_page: int) -> Page:
        """List repository branches."""
        return self._list_page(
            f"projects/{_encode(project_id)}/repository/branches",
            f"list_branches(page={page})",
            "branches",
            {"page": page, "per_page": per_page},
        )

    def get_branch(self, project_id: str, name: str) -> Dict[str, Any]:
        operation = f"get_branch({name})"
        response = self._request(
            "GET",
            f"projects/{_encode(project_id)}/repository/branches/{_encode(name)}",
            operation,
            f"branch {name}",
        )
        return self._json(response, operation)

    def list_commits(self, project_id: str, ref: str, page: int, per_page: int) -> Page:
        """List the commit log of ref, newest first."""
        return self._list_page(
            f"projects/{_encode(project_id)}/repository/commits",
            f"list_commits(page={page})",
            "commits",
            {"ref_name": ref, "page": page, "per_page": per_page},
        )

    def get_commit(self, project_id: str, sha: str) -> Dict[str, Any]:
        operation = f"get_commit({sha})"
        response = self._request(
            "GET",
            f"projects/{_encode(project_id)}/repository/commits/{_encode(sha)}",
            operation,
            f"commit {sha}",
        )
        return self._json(response, operation)
