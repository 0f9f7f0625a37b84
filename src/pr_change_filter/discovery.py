"""
Pull Request Discovery

Discovery request carrying the open pull requests of one pass, and the
pruning of discovered heads through a head filter.
"""

import logging
from typing import Dict, Iterable, List, Optional, TextIO

from .github.client import GitHubClient
from .github.parser import PullRequestParser
from .models.pull_request import Head, PullRequest, PullRequestHead


logger = logging.getLogger(__name__)


class GitHubDiscoveryRequest:
    """
    Pull requests discovered on a GitHub repository during one pass.

    Changed files are resolved when the request is built. The request is
    discarded after the pass, so nothing is cached between passes.
    """

    def __init__(self, pull_requests: Iterable[PullRequest], output: Optional[TextIO] = None):
        """
        Initialize the request.

        Args:
            pull_requests: Open pull requests with their changed files
            output: Sink receiving informational build lines
        """
        self.pull_requests: List[PullRequest] = list(pull_requests)
        self.output = output
        self._by_number: Dict[int, PullRequest] = {pr.number: pr for pr in self.pull_requests}

    @classmethod
    def from_github(cls, client: GitHubClient, owner: str, repo: str,
                    output: Optional[TextIO] = None,
                    parser: Optional[PullRequestParser] = None) -> "GitHubDiscoveryRequest":
        """
        Fetch open pull requests and their changed files.

        Args:
            client: GitHub API client
            owner: Repository owner
            repo: Repository name
            output: Sink receiving informational build lines
            parser: Payload parser (a new one by default)
        """
        parser = parser or PullRequestParser()
        pull_requests = []
        for pr_data in client.list_pull_requests(owner, repo):
            files_data = client.get_pull_request_files(owner, repo, pr_data['number'])
            pull_requests.append(parser.parse_pull_request(pr_data, files_data))

        logger.info(f"Discovered {len(pull_requests)} open PRs on {owner}/{repo}")
        return cls(pull_requests, output)

    def get_pull_request(self, number: int) -> Optional[PullRequest]:
        return self._by_number.get(number)

    def heads(self) -> List[PullRequestHead]:
        return [PullRequestHead(pr.number) for pr in self.pull_requests]


def filter_heads(head_filter, request, heads: Iterable[Head]) -> List[Head]:
    """
    Prune discovered heads.

    Args:
        head_filter: Object exposing include_category(category) and
            is_excluded(request, head)
        request: Discovery request handed to the filter
        heads: Candidate heads

    Returns:
        Heads that remain buildable, in their original order
    """
    kept = []
    for head in heads:
        if head_filter.include_category(head.category) and head_filter.is_excluded(request, head):
            logger.info(f"Excluding head {head.name}")
            continue
        kept.append(head)
    return kept
