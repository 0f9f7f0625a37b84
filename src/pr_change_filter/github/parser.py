"""
Pull Request Parser

Converts GitHub API pull request and file payloads into the models the
filter evaluates.
"""

import logging
from typing import Dict, List

from ..models.pull_request import ChangedFile, PullRequest


logger = logging.getLogger(__name__)


class PullRequestParser:
    """Parser for GitHub pull request data."""

    def parse_changed_file(self, file_data: Dict) -> ChangedFile:
        """
        Parse individual file change data.

        Args:
            file_data: File change data from GitHub API

        Returns:
            ChangedFile with current and, for renames, previous path
        """
        return ChangedFile(
            path=file_data.get('filename'),
            previous_path=file_data.get('previous_filename'),
            status=file_data.get('status'),
        )

    def parse_changed_files(self, files_data: List[Dict]) -> List[ChangedFile]:
        return [self.parse_changed_file(file_data) for file_data in files_data]

    def parse_pull_request(self, pr_data: Dict, files_data: List[Dict]) -> PullRequest:
        """
        Parse PR data and files into a PullRequest.

        Args:
            pr_data: PR information from GitHub API
            files_data: List of file changes from GitHub API

        Returns:
            PullRequest with its changed files
        """
        files = self.parse_changed_files(files_data)
        renamed = sum(1 for f in files if f.is_rename)
        logger.debug(f"Parsed PR #{pr_data.get('number')}: {len(files)} files, {renamed} renamed")

        return PullRequest(
            number=pr_data['number'],
            files=files,
            title=pr_data.get('title') or "",
            html_url=pr_data.get('html_url'),
        )
