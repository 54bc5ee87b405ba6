#!/usr/bin/env python3
"""
examples/push_demo.py

Demonstrates the GitHerald push discovery node. Pass the same three values a
post-receive hook gets on stdin (old revision, new revision, ref name) and the
demo prints the commits, file changes and tag range the notification would be
built from.
"""

import argparse
import os
import sys

from loguru import logger

from githerald.config import load_settings
from githerald.models.base import ZERO_ID
from githerald.models.errors import GitHeraldError
from githerald.models.state import PushState
from githerald.nodes.push_discovery_node import push_discovery_node
from githerald.text import truncate


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Demonstrate GitHerald's push discovery")
    parser.add_argument(
        "--repo-path",
        type=str,
        default=os.getcwd(),
        help="Path to Git repository (default: current directory)",
    )
    parser.add_argument("--old", type=str, default=ZERO_ID, help="Revision before the push")
    parser.add_argument("--new", type=str, default="HEAD", help="Revision after the push")
    parser.add_argument("--ref", type=str, default="HEAD", help="Ref that was updated, e.g. refs/heads/main")
    parser.add_argument("--width", type=int, default=72, help="Maximum subject width")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def main():
    """Run the push discovery demo."""
    args = parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    initial_state: PushState = {
        "repo_path": args.repo_path,
        "old_rev": args.old,
        "new_rev": args.new,
        "ref_name": args.ref,
        "settings": load_settings(),
    }

    try:
        state = push_discovery_node(initial_state)
    except GitHeraldError as e:
        print(f"Error running push discovery: {e}", file=sys.stderr)
        return 1

    print(f"Repository: {state['repo_name']}")
    print(f"Now at: {state['description'] or 'deleted'}")
    print(f"\n{state['commit_count']} new commits")
    for commit in state["commits"]:
        print(f"  {state['short_ids'][commit]}")

    change_set = state["change_set"]
    if change_set is not None:
        for kind in ("added", "modified", "deleted", "renamed"):
            for path in sorted(getattr(change_set, kind)):
                print(f"  {kind:<9} {path}")

    if state["tag_info"] is not None:
        print(f"\nTag: {state['tag_info'].subject}")
        for entry in state["tag_commits"]:
            print(f"  {entry.commit[:8]} {truncate(entry.subject, args.width)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
