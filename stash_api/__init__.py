"""Client for the Stash (Bitbucket Server) REST API.

Retries every call a fixed number of times, walks paged collections into a
single result and raises typed errors that callers can branch on with
is_conflict() and is_not_found().
"""

from .cli import main
from .client import StashClient, client_from_settings
from .errors import (
    ConfigurationError,
    DecodeError,
    DomainHint,
    HttpStatusError,
    StashError,
    TransportError,
    is_conflict,
    is_not_found,
)
from .models import (
    Branch,
    BranchPermission,
    BranchRestriction,
    BranchRestrictions,
    Clone,
    Project,
    PullRequest,
    Ref,
    Repository,
    Tag,
    has_repository,
)

__all__ = [
    "main",
    "StashClient",
    "client_from_settings",
    "StashError",
    "ConfigurationError",
    "TransportError",
    "HttpStatusError",
    "DecodeError",
    "DomainHint",
    "is_conflict",
    "is_not_found",
    "Branch",
    "BranchPermission",
    "BranchRestriction",
    "BranchRestrictions",
    "Clone",
    "Project",
    "PullRequest",
    "Ref",
    "Repository",
    "Tag",
    "has_repository",
]

if __name__ == "__main__":
    main()
