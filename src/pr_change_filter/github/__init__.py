"""
GitHub Integration Layer

This module provides GitHub API integration for open pull request
enumeration and changed file retrieval.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .parser import PullRequestParser

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'PullRequestParser']
