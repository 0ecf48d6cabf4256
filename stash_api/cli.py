"""CLI commands for querying a Stash server."""

import argparse
import json
import logging
import sys
from dataclasses import asdict

from .errors import StashError


def main():
    parser = argparse.ArgumentParser(
        description="Query a Stash (Bitbucket Server) instance. "
        "Connection details come from STASH_URL, STASH_USERNAME and STASH_PASSWORD.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log request URLs and retries",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # repos subcommand
    subparsers.add_parser(
        "repos",
        help="List all repositories",
    )

    # repo subcommand
    repo_parser = subparsers.add_parser(
        "repo",
        help="Show one repository as JSON",
    )
    repo_parser.add_argument("project", help="Project key")
    repo_parser.add_argument("slug", help="Repository slug")

    # branches / tags subcommands
    for name, help_text in (("branches", "List branch names"), ("tags", "List tag names")):
        ref_parser = subparsers.add_parser(name, help=help_text)
        ref_parser.add_argument("project", help="Project key")
        ref_parser.add_argument("slug", help="Repository slug")

    # pull-requests subcommand
    pr_parser = subparsers.add_parser(
        "pull-requests",
        help="List pull requests",
    )
    pr_parser.add_argument("project", help="Project key")
    pr_parser.add_argument("slug", help="Repository slug")
    pr_parser.add_argument(
        "--state",
        default="OPEN",
        help="OPEN, DECLINED, MERGED or ALL (default: OPEN)",
    )

    # raw-file subcommand
    raw_parser = subparsers.add_parser(
        "raw-file",
        help="Write a file's raw content to stdout",
    )
    raw_parser.add_argument("project", help="Project key")
    raw_parser.add_argument("slug", help="Repository slug")
    raw_parser.add_argument("path", help="File path within the repository")
    raw_parser.add_argument(
        "--branch",
        default="master",
        help="Branch to read from (default: master)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        return

    from . import client as client_mod

    try:
        with client_mod.client_from_settings() as client:
            _run(client, args)
    except StashError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


def _run(client, args):
    if args.command == "repos":
        repositories = client.get_repositories()
        for repo_id in sorted(repositories):
            repo = repositories[repo_id]
            print(f"{repo.id}\t{repo.project.key}/{repo.slug}\t{repo.ssh_url}")
    elif args.command == "repo":
        repo = client.get_repository(args.project, args.slug)
        json.dump(asdict(repo), sys.stdout, indent=2)
        sys.stdout.write("\n")
    elif args.command == "branches":
        for name in sorted(client.get_branches(args.project, args.slug)):
            print(name)
    elif args.command == "tags":
        for name in sorted(client.get_tags(args.project, args.slug)):
            print(name)
    elif args.command == "pull-requests":
        for pr in client.get_pull_requests(args.project, args.slug, args.state):
            print(f"#{pr.id}\t{pr.state}\t{pr.from_ref.display_id} -> {pr.to_ref.display_id}\t{pr.title}")
    elif args.command == "raw-file":
        sys.stdout.buffer.write(client.get_raw_file(args.project, args.slug, args.path, args.branch))
        sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
