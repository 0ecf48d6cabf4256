"""Stash (Bitbucket Server) REST API client using httpx.

Every operation builds one request per attempt, runs it through the fixed
retry policy, classifies the status against the operation's success code and
decodes the body once the call has succeeded. Collection endpoints are walked
page by page into a single result.
"""

import logging
from typing import Callable, TypeVar
from urllib.parse import quote

import httpx

from .errors import ConfigurationError, DecodeError, TransportError, classify
from .models import (
    Branch,
    BranchPermission,
    BranchRestriction,
    BranchRestrictions,
    PullRequest,
    Repository,
    Tag,
)
from .pagination import Page, collect_list, collect_pages
from .request import Credentials, build_request
from .retry import retry
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

API = "/rest/api/1.0"
BRANCH_PERMISSIONS_API = "/rest/branch-permissions/1.0"
BRANCH_UTILS_API = "/rest/branch-utils/1.0"

T = TypeVar("T")

# Per-operation failure reasons. Codes not listed are "unhandled reason".
NOT_FOUND_OR_UNAUTHORIZED = {
    404: "Not found",
    401: "Unauthorized",
}
BAD_REQUEST = {
    400: "Bad request.",
}
CREATE_REPOSITORY_REASONS = {
    400: "The repository was not created due to a validation error.",
    401: "The currently authenticated user has insufficient permissions to create a repository.",
    404: "The resource was not found.  Does the project key exist?",
    409: "A repository with same name already exists.",
}
CREATE_PULL_REQUEST_REASONS = {
    400: "The pull request entity supplied in the request was malformed.",
    401: "The currently authenticated user has insufficient permissions to create a pull request.",
    404: "The specified repository or branch does not exist.",
    409: "A pull request between these branches is already open.",
}
CREATE_BRANCH_RESTRICTION_REASONS = {
    400: "The branch restriction was not created due to a validation error.",
    401: "The currently authenticated user has insufficient permissions to restrict branches.",
    404: "The specified repository does not exist.",
}
DELETE_BRANCH_REASONS = {
    400: "The branch could not be deleted due to a validation error.",
    401: "The currently authenticated user has insufficient permissions to delete the branch.",
    404: "The specified repository or branch does not exist.",
}


def _seg(value) -> str:
    return quote(str(value), safe="")


def _repo_path(api: str, project_key: str, slug: str) -> str:
    return f"{api}/projects/{_seg(project_key)}/repos/{_seg(slug)}"


def _branch_ref(branch: str) -> str:
    return branch if branch.startswith("refs/") else f"refs/heads/{branch}"


class StashClient:
    """Blocking client for one Stash server.

    Credentials and settings are fixed at construction, so one instance may be
    shared between threads.
    """

    def __init__(
        self,
        base_url: str,
        username: str = "",
        password: str = "",
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = settings or get_settings()
        self.base_url = base_url.rstrip("/")
        self.credentials = Credentials(username, password)
        self.page_limit = settings.stash_page_limit
        self.retry_attempts = settings.stash_retry_attempts
        self.retry_interval = settings.stash_retry_interval
        self._client = httpx.Client(
            timeout=settings.stash_timeout,
            verify=settings.stash_verify_tls,
            follow_redirects=True,
            transport=transport,
        )

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # Request execution

    def _attempt(
        self,
        method: str,
        url: str,
        success_code: int,
        reasons: dict[int, str],
        params: dict | None = None,
        body: dict | list | None = None,
        accept_json: bool = True,
    ) -> httpx.Response:
        """One network call plus classification. No retry, no decoding."""
        try:
            request = build_request(
                self._client, method, url, self.credentials,
                params=params, body=body, accept_json=accept_json,
            )
            logger.debug("%s %s", method, request.url)
            resp = self._client.send(request)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{method} {url}: {e}") from e

        err = classify(resp.status_code, success_code, reasons)
        if err is not None:
            raise err
        return resp

    def _call(
        self,
        method: str,
        path: str,
        success_code: int,
        reasons: dict[int, str],
        params: dict | None = None,
        body: dict | list | None = None,
        accept_json: bool = True,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        return retry(
            lambda: self._attempt(method, url, success_code, reasons, params, body, accept_json),
            attempts=self.retry_attempts,
            interval=self.retry_interval,
        )

    @staticmethod
    def _json(resp: httpx.Response):
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON from {resp.request.url}: {e}") from e

    @staticmethod
    def _decode(decode: Callable[[dict], T], data) -> T:
        try:
            return decode(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise DecodeError(f"unexpected payload shape: {e}") from e

    def _page_fetcher(self, path: str, reasons: dict[int, str], params: dict | None = None):
        def fetch_page(start: int, limit: int) -> Page:
            resp = self._call("GET", path, 200, reasons, params={**(params or {}), "start": start, "limit": limit})
            return Page.from_body(self._json(resp))

        return fetch_page

    def _get_one(self, path: str, reasons: dict[int, str], decode: Callable[[dict], T]) -> T:
        resp = self._call("GET", path, 200, reasons)
        return self._decode(decode, self._json(resp))

    # Repositories

    def get_repositories(self) -> dict[int, Repository]:
        """All repositories visible to the user, keyed by repository id."""
        return collect_pages(
            self._page_fetcher(f"{API}/repos", BAD_REQUEST),
            lambda raw: self._decode(Repository.from_dict, raw),
            key=lambda repo: repo.id,
            limit=self.page_limit,
        )

    def get_repository(self, project_key: str, slug: str) -> Repository:
        return self._get_one(_repo_path(API, project_key, slug), NOT_FOUND_OR_UNAUTHORIZED, Repository.from_dict)

    def create_repository(self, project_key: str, slug: str) -> Repository:
        """Create a git repository named slug in the project.

        A repository that already exists raises an HttpStatusError for which
        is_conflict() is true.
        """
        resp = self._call(
            "POST",
            f"{API}/projects/{_seg(project_key)}/repos",
            201,
            CREATE_REPOSITORY_REASONS,
            body={"name": slug, "scmId": "git"},
        )
        return self._decode(Repository.from_dict, self._json(resp))

    # Branches and tags

    def get_branches(self, project_key: str, slug: str) -> dict[str, Branch]:
        """Branches keyed by display id (e.g. "feature/PRJ-447")."""
        return collect_pages(
            self._page_fetcher(f"{_repo_path(API, project_key, slug)}/branches", NOT_FOUND_OR_UNAUTHORIZED),
            lambda raw: self._decode(Branch.from_dict, raw),
            key=lambda branch: branch.display_id,
            limit=self.page_limit,
        )

    def delete_branch(self, project_key: str, slug: str, branch: str) -> None:
        self._call(
            "DELETE",
            f"{_repo_path(BRANCH_UTILS_API, project_key, slug)}/branches",
            204,
            DELETE_BRANCH_REASONS,
            body={"name": _branch_ref(branch), "dryRun": False},
        )

    def get_tags(self, project_key: str, slug: str) -> dict[str, Tag]:
        """Tags keyed by display id."""
        return collect_pages(
            self._page_fetcher(f"{_repo_path(API, project_key, slug)}/tags", NOT_FOUND_OR_UNAUTHORIZED),
            lambda raw: self._decode(Tag.from_dict, raw),
            key=lambda tag: tag.display_id,
            limit=self.page_limit,
        )

    # Branch permissions

    def get_branch_restrictions(self, project_key: str, slug: str) -> BranchRestrictions:
        return self._get_one(
            f"{_repo_path(BRANCH_PERMISSIONS_API, project_key, slug)}/restricted",
            NOT_FOUND_OR_UNAUTHORIZED,
            BranchRestrictions.from_dict,
        )

    def create_branch_restriction(self, project_key: str, slug: str, branch: str, user: str) -> BranchRestriction:
        """Restrict pushes to branch so only user may write to it."""
        # branch-permissions 1.0 answers a create with 200, not 201
        resp = self._call(
            "POST",
            f"{_repo_path(BRANCH_PERMISSIONS_API, project_key, slug)}/restricted",
            200,
            CREATE_BRANCH_RESTRICTION_REASONS,
            body={"type": "BRANCH", "value": _branch_ref(branch), "users": [user]},
        )
        return self._decode(BranchRestriction.from_dict, self._json(resp))

    def delete_branch_restriction(self, project_key: str, slug: str, restriction_id: int) -> None:
        self._call(
            "DELETE",
            f"{_repo_path(BRANCH_PERMISSIONS_API, project_key, slug)}/restricted/{_seg(restriction_id)}",
            204,
            NOT_FOUND_OR_UNAUTHORIZED,
        )

    def get_branch_permissions(self, project_key: str, slug: str) -> BranchPermission:
        return self._get_one(
            f"{_repo_path(BRANCH_PERMISSIONS_API, project_key, slug)}/permitted",
            NOT_FOUND_OR_UNAUTHORIZED,
            BranchPermission.from_dict,
        )

    # Pull requests

    def get_pull_requests(self, project_key: str, slug: str, state: str) -> list[PullRequest]:
        """Pull requests in state (OPEN, DECLINED, MERGED or ALL), in server order."""
        return collect_list(
            self._page_fetcher(f"{_repo_path(API, project_key, slug)}/pull-requests", BAD_REQUEST, {"state": state}),
            lambda raw: self._decode(PullRequest.from_dict, raw),
            limit=self.page_limit,
        )

    def create_pull_request(
        self,
        project_key: str,
        slug: str,
        title: str,
        description: str,
        from_ref: str,
        to_ref: str,
        reviewers: list[str],
    ) -> PullRequest:
        """Open a pull request from from_ref to to_ref within one repository."""
        repository = {"slug": slug, "project": {"key": project_key}}
        body = {
            "title": title,
            "description": description,
            "fromRef": {"id": from_ref, "repository": repository},
            "toRef": {"id": to_ref, "repository": repository},
            "reviewers": [{"user": {"name": name}} for name in reviewers],
        }
        resp = self._call(
            "POST",
            f"{_repo_path(API, project_key, slug)}/pull-requests",
            201,
            CREATE_PULL_REQUEST_REASONS,
            body=body,
        )
        return self._decode(PullRequest.from_dict, self._json(resp))

    # Raw content

    def get_raw_file(self, project_key: str, slug: str, path: str, branch: str) -> bytes:
        """Raw bytes of path at branch. Sends no Accept header."""
        resp = self._call(
            "GET",
            f"/projects/{_seg(project_key.lower())}/repos/{_seg(slug.lower())}/browse/"
            f"{quote(path.lstrip('/'))}?at={quote(branch, safe='')}&raw",
            200,
            NOT_FOUND_OR_UNAUTHORIZED,
            accept_json=False,
        )
        return resp.content


def client_from_settings(settings: Settings | None = None, transport: httpx.BaseTransport | None = None) -> StashClient:
    """Build a client from STASH_URL, STASH_USERNAME and STASH_PASSWORD."""
    settings = settings or get_settings()
    if not settings.stash_url:
        raise ConfigurationError("STASH_URL is not set")
    return StashClient(
        settings.stash_url,
        username=settings.stash_username,
        password=settings.stash_password,
        settings=settings,
        transport=transport,
    )
