"""
Pull Request Data Models

Changed files, pull requests and the SCM head variants the filter sees.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, validator


class HeadCategory(Enum):
    """Category of a discovered SCM head."""
    BRANCH = "branch"
    CHANGE_REQUEST = "change_request"
    TAG = "tag"


@dataclass(frozen=True)
class ChangedFile:
    """A single file touched by a pull request."""
    path: Optional[str]
    previous_path: Optional[str] = None  # renames/moves only
    status: Optional[str] = None

    @property
    def is_rename(self) -> bool:
        return bool(self.previous_path) and self.previous_path != self.path


@dataclass
class PullRequest:
    """An open pull request with its fully resolved changed-file list."""
    number: int
    files: List[ChangedFile] = field(default_factory=list)
    title: str = ""
    html_url: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if self.number <= 0:
            raise ValueError("PR number must be positive")

    @property
    def display_name(self) -> str:
        return f"#{self.number}"


@dataclass(frozen=True)
class BranchHead:
    name: str

    @property
    def category(self) -> HeadCategory:
        return HeadCategory.BRANCH


@dataclass(frozen=True)
class PullRequestHead:
    """Head discovered for a pull request, named ``PR-<number>`` by default."""
    number: int
    name: str = ""

    def __post_init__(self):
        if self.number <= 0:
            raise ValueError("PR number must be positive")
        if not self.name:
            object.__setattr__(self, "name", f"PR-{self.number}")

    @property
    def category(self) -> HeadCategory:
        return HeadCategory.CHANGE_REQUEST


@dataclass(frozen=True)
class TagHead:
    name: str

    @property
    def category(self) -> HeadCategory:
        return HeadCategory.TAG


Head = Union[BranchHead, PullRequestHead, TagHead]


# Pydantic models for API validation
class ChangedFileRequest(BaseModel):
    """API 요청용 ChangedFile 모델"""
    filename: Optional[str] = None
    previous_filename: Optional[str] = None
    status: Optional[str] = None

    def to_changed_file(self) -> ChangedFile:
        return ChangedFile(
            path=self.filename,
            previous_path=self.previous_filename,
            status=self.status,
        )


class PatternRequest(BaseModel):
    """API 요청용 패턴 모델"""
    inclusion_pattern: str = ".*"
    exclusion_pattern: Optional[str] = None


class EvaluationRequest(PatternRequest):
    """API 요청용 평가 모델"""
    pr_number: int
    files: List[ChangedFileRequest] = []

    @validator('pr_number')
    def validate_pr_number(cls, v):
        if v <= 0:
            raise ValueError('PR number must be positive')
        return v

    def changed_files(self) -> List[ChangedFile]:
        return [f.to_changed_file() for f in self.files]
