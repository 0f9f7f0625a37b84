"""
Path Based Pull Request Filter Trait

Discovery trait that only keeps GitHub pull request heads whose changed
files match the configured patterns.
"""

import logging
from typing import Optional

from ..discovery import GitHubDiscoveryRequest
from ..models.pull_request import Head, HeadCategory, PullRequestHead
from .policy import FilterConfiguration, DEFAULT_MATCH_ALL_REGEX


logger = logging.getLogger(__name__)


class PathBasedPullRequestFilterTrait:
    """
    Head filter for GitHub pull requests.

    Only heads in the change request category are considered. Heads of any
    other kind, or requests that are not GitHub discovery requests, are
    never excluded.
    """

    display_name = "Include discovered GitHub pull requests by changed files via regex"

    def __init__(self, inclusion_pattern: str = DEFAULT_MATCH_ALL_REGEX,
                 exclusion_pattern: Optional[str] = None, *,
                 configuration: Optional[FilterConfiguration] = None):
        """
        Initialize the trait.

        Args:
            inclusion_pattern: Regex for changed paths that make a PR buildable
            exclusion_pattern: Regex for changed paths to ignore
            configuration: Prebuilt configuration; the patterns are ignored when given

        Raises:
            RegexSyntaxError: If either pattern does not compile
        """
        if configuration is None:
            configuration = FilterConfiguration.build(inclusion_pattern, exclusion_pattern)
        self.configuration = configuration

    @classmethod
    def from_configuration(cls, configuration: FilterConfiguration) -> "PathBasedPullRequestFilterTrait":
        return cls(configuration=configuration)

    @property
    def inclusion_pattern(self) -> str:
        return self.configuration.inclusion_pattern

    @property
    def exclusion_pattern(self) -> Optional[str]:
        return self.configuration.exclusion_pattern

    def include_category(self, category: HeadCategory) -> bool:
        return category == HeadCategory.CHANGE_REQUEST

    def is_excluded(self, request, head: Head) -> bool:
        """
        Decide whether a discovered head should be pruned.

        Args:
            request: Discovery request holding the open pull requests
            head: Head under consideration

        Returns:
            True if the head should not be built
        """
        if not isinstance(request, GitHubDiscoveryRequest) or not isinstance(head, PullRequestHead):
            return False

        pull_request = request.get_pull_request(head.number)
        if pull_request is None:
            logger.info(f"PR #{head.number} not found in discovery request, excluding {head.name}")
            return True

        return self.configuration.is_excluded(pull_request.number, pull_request.files, request.output)
