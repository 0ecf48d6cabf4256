"""Resource models decoded from Stash REST responses.

Only the fields callers use are decoded; unknown keys are ignored.
"""

from dataclasses import dataclass, field


@dataclass
class Project:
    key: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(key=data.get("key", ""))


@dataclass
class Clone:
    href: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Clone":
        return cls(href=data.get("href", ""), name=data.get("name", ""))


@dataclass
class Repository:
    id: int = 0
    name: str = ""
    slug: str = ""
    project: Project = field(default_factory=Project)
    scm_id: str = ""
    clones: list[Clone] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Repository":
        links = data.get("links") or {}
        return cls(
            id=data.get("id", 0),
            name=data.get("name", ""),
            slug=data.get("slug", ""),
            project=Project.from_dict(data.get("project") or {}),
            scm_id=data.get("scmId", ""),
            clones=[Clone.from_dict(c) for c in links.get("clone") or []],
        )

    @property
    def ssh_url(self) -> str:
        """SSH clone URL, or "" when the repository has none."""
        for clone in self.clones:
            if clone.name == "ssh":
                return clone.href
        return ""


@dataclass
class Branch:
    id: str = ""
    display_id: str = ""
    latest_changeset: str = ""
    is_default: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Branch":
        return cls(
            id=data.get("id", ""),
            display_id=data.get("displayId", ""),
            latest_changeset=data.get("latestChangeset", ""),
            is_default=data.get("isDefault", False),
        )


@dataclass
class Tag:
    id: str = ""
    display_id: str = ""
    latest_changeset: str = ""
    hash: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Tag":
        return cls(
            id=data.get("id", ""),
            display_id=data.get("displayId", ""),
            latest_changeset=data.get("latestChangeset", ""),
            hash=data.get("hash", ""),
        )


@dataclass
class BranchRestriction:
    id: int = 0
    type: str = ""
    value: str = ""
    branch: Branch | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "BranchRestriction":
        branch = data.get("branch")
        return cls(
            id=data.get("id", 0),
            type=data.get("type", ""),
            value=data.get("value", ""),
            branch=Branch.from_dict(branch) if branch else None,
        )


@dataclass
class BranchRestrictions:
    values: list[BranchRestriction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "BranchRestrictions":
        return cls(values=[BranchRestriction.from_dict(v) for v in data.get("values") or []])


@dataclass
class BranchPermission:
    type: str = ""
    matcher_type: str = ""
    matcher_id: str = ""
    effective: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "BranchPermission":
        return cls(
            type=data.get("type", ""),
            matcher_type=data.get("matcherType", ""),
            matcher_id=data.get("matcherId", ""),
            effective=data.get("effective", False),
        )


@dataclass
class Ref:
    id: str = ""
    display_id: str = ""
    latest_changeset: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Ref":
        return cls(
            id=data.get("id", ""),
            display_id=data.get("displayId", ""),
            latest_changeset=data.get("latestChangeset", ""),
        )


@dataclass
class PullRequest:
    id: int = 0
    version: int = 0
    title: str = ""
    description: str = ""
    state: str = ""
    open: bool = False
    closed: bool = False
    from_ref: Ref = field(default_factory=Ref)
    to_ref: Ref = field(default_factory=Ref)
    reviewers: list[str] = field(default_factory=list)  # user names

    @classmethod
    def from_dict(cls, data: dict) -> "PullRequest":
        return cls(
            id=data.get("id", 0),
            version=data.get("version", 0),
            title=data.get("title", ""),
            description=data.get("description", ""),
            state=data.get("state", ""),
            open=data.get("open", False),
            closed=data.get("closed", False),
            from_ref=Ref.from_dict(data.get("fromRef") or {}),
            to_ref=Ref.from_dict(data.get("toRef") or {}),
            reviewers=[(r.get("user") or {}).get("name", "") for r in data.get("reviewers") or []],
        )


def has_repository(repositories: dict[int, Repository], url: str) -> Repository | None:
    """Find the repository with a clone link equal to url."""
    for repo in repositories.values():
        for clone in repo.clones:
            if clone.href == url:
                return repo
    return None
