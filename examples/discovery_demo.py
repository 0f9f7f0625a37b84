#!/usr/bin/env python3
"""
Pull Request Discovery Demo

Lists the open pull requests of a repository and shows which ones the
changed-file filter would keep.

Usage:
    python examples/discovery_demo.py <owner> <repo> <inclusion_regex> [exclusion_regex]

Example:
    python examples/discovery_demo.py jenkinsci github-branch-source-plugin 'src/main/.*' '.*\\.md'
"""

import sys
import os
import logging

from pr_change_filter.discovery import GitHubDiscoveryRequest, filter_heads
from pr_change_filter.filtering import PathBasedPullRequestFilterTrait, RegexSyntaxError, validate_patterns
from pr_change_filter.github.client import GitHubClient, GitHubAPIError


def setup_logging():
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main():
    """Main demo function."""
    setup_logging()
    logger = logging.getLogger(__name__)

    if len(sys.argv) not in (4, 5):
        print("Usage: python discovery_demo.py <owner> <repo> <inclusion_regex> [exclusion_regex]")
        sys.exit(1)

    owner, repo, inclusion = sys.argv[1:4]
    exclusion = sys.argv[4] if len(sys.argv) == 5 else None

    for result in validate_patterns(inclusion, exclusion):
        if result.message:
            print(f"{result.kind.value.upper()} {result.field}: {result.message}")

    try:
        trait = PathBasedPullRequestFilterTrait(inclusion, exclusion)
    except RegexSyntaxError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        token = os.getenv('GITHUB_TOKEN')
        client = GitHubClient(token)

        if token:
            success, user_info = client.test_authentication()
            if not success:
                print("Error: GitHub authentication failed")
                sys.exit(1)
            print(f"Authenticated as: {user_info.get('login', 'Unknown')}")

        discovery = GitHubDiscoveryRequest.from_github(client, owner, repo, output=sys.stdout)
    except GitHubAPIError as e:
        logger.error(f"GitHub API error: {e}")
        print(f"Error: {e}")
        sys.exit(1)

    heads = discovery.heads()
    kept = filter_heads(trait, discovery, heads)

    print(f"\nOpen pull requests: {len(heads)}")
    print(f"Buildable after filtering: {len(kept)}")
    for head in kept:
        pull_request = discovery.get_pull_request(head.number)
        print(f"   - {head.name} {pull_request.html_url or ''}".rstrip())


if __name__ == '__main__':
    main()
