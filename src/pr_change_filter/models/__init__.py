"""
Data Models

Pull request, changed file and SCM head models used by the filter
"""

from .pull_request import (
    ChangedFile,
    PullRequest,
    HeadCategory,
    BranchHead,
    PullRequestHead,
    TagHead,
    Head,
    ChangedFileRequest,
    PatternRequest,
    EvaluationRequest,
)

__all__ = [
    "ChangedFile",
    "PullRequest",
    "HeadCategory",
    "BranchHead",
    "PullRequestHead",
    "TagHead",
    "Head",
    "ChangedFileRequest",
    "PatternRequest",
    "EvaluationRequest",
]
