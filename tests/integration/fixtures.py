"""Response bodies captured from a Stash 3.x server."""

BASE_URL = "http://stash.example.com:7990"


def repository(repo_id, project, slug, ssh_host="example.com:9999"):
    return {
        "id": repo_id,
        "name": slug,
        "slug": slug,
        "scmId": "git",
        "state": "AVAILABLE",
        "statusMessage": "Available",
        "forkable": True,
        "public": False,
        "project": {"key": project, "id": 107, "name": "Dev", "public": True, "type": "NORMAL"},
        "cloneUrl": f"http://example.com:8888/scm/{project.lower()}/{slug}.git",
        "links": {
            "clone": [
                {"href": f"ssh://git@{ssh_host}/{project.lower()}/{slug}.git", "name": "ssh"},
                {"href": f"http://example.com:8888/scm/{project.lower()}/{slug}.git", "name": "http"},
            ],
            "self": [{"href": f"http://example.com:8888/projects/{project}/repos/{slug}/browse"}],
        },
    }


REPOS = {
    "nextPageStart": 44,
    "isLastPage": True,
    "filter": None,
    "limit": 25,
    "values": [
        repository(300, "TEAMP", "apa"),
        repository(359, "PSC", "apac"),
        repository(171, "TEAMI", "rabbit"),
    ],
    "size": 3,
    "start": 0,
}

BRANCHES = {
    "isLastPage": True,
    "filter": None,
    "values": [
        {"displayId": "develop", "isDefault": True,
         "latestChangeset": "e680a10f3e0afb5e3a5978dea02d37ac884da21", "id": "refs/heads/develop"},
        {"displayId": "master", "isDefault": False,
         "latestChangeset": "8d0f23745dfe4bacef9509bb4ecd7722b9aff82", "id": "refs/heads/master"},
        {"displayId": "feature/PRJ-447", "isDefault": False,
         "latestChangeset": "8d9c0642da6b3f06629cf115683da105d8e0654", "id": "refs/heads/feature/PRJ-447"},
        {"displayId": "bug/PRJ-442", "isDefault": False,
         "latestChangeset": "a57a403996161f24d1d0605ea8b5030927a0d3d", "id": "refs/heads/bug/PRJ-442"},
    ],
    "limit": 25,
    "start": 0,
    "size": 4,
}

TAGS = {
    "isLastPage": True,
    "filter": None,
    "values": [
        {"displayId": "acme-release-99.8", "hash": "c505d5eac54dc0239c610274f0c972845b4d71c3",
         "id": "refs/tags/acme-release-99.8", "latestChangeset": "fa6618112e8014934dfdfc3337e94f52b6de5708"},
        {"displayId": "acme-release-99.9", "hash": "cd301bcf63344a9c2a4acf88591961ff9a7bc44b",
         "id": "refs/tags/acme-release-99.9", "latestChangeset": "f0910c480a77b6ccf919fb384ab87f7ab4fd479e"},
    ],
    "limit": 25,
    "start": 0,
    "size": 2,
}

BRANCH_RESTRICTION = {
    "id": 41,
    "type": "BRANCH",
    "value": "refs/heads/develop",
    "branch": {
        "id": "refs/heads/develop",
        "displayId": "develop",
        "latestChangeset": "d81c71b179c08715eb21251824635ce9a1d7f6f3",
        "isDefault": False,
    },
}

BRANCH_RESTRICTIONS = {
    "size": 1,
    "limit": 100,
    "isLastPage": True,
    "values": [BRANCH_RESTRICTION],
    "start": 0,
    "filter": None,
}

BRANCH_PERMISSION = {
    "type": "type",
    "matcherType": "matcherType",
    "matcherId": "matcherId",
    "effective": True,
}


def _pr_ref(ref_id, display_id):
    return {
        "id": ref_id,
        "displayId": display_id,
        "latestChangeset": "aead30bdfe27e176316bb2e2aedd530052730092",
        "repository": repository(1419, "PLAT", "test-repo", ssh_host="localhost:7999"),
    }


def pull_request(pr_id, title="a title", from_ref="feature/file1", to_ref="develop"):
    return {
        "id": pr_id,
        "version": 0,
        "title": title,
        "description": "a description",
        "state": "OPEN",
        "open": True,
        "closed": False,
        "createdDate": 1435759062673,
        "updatedDate": 1435759062673,
        "fromRef": _pr_ref(f"refs/heads/{from_ref}", from_ref),
        "toRef": _pr_ref(f"refs/heads/{to_ref}", to_ref),
        "author": {"user": {"name": "mike", "displayName": "Mike"}, "role": "AUTHOR", "approved": False},
        "reviewers": [
            {"user": {"name": "bob", "displayName": "Bob"}, "role": "REVIEWER", "approved": False},
            {"user": {"name": "bill", "displayName": "Bill"}, "role": "REVIEWER", "approved": False},
        ],
        "participants": [],
    }
