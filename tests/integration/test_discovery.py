"""
Integration tests for pull request discovery and head pruning.

The GitHub API is mocked at the session level; the client, parser,
discovery request and trait run unmodified.
"""

import io
from unittest.mock import Mock, patch

from pr_change_filter.discovery import GitHubDiscoveryRequest, filter_heads
from pr_change_filter.filtering.trait import PathBasedPullRequestFilterTrait
from pr_change_filter.github.client import GitHubClient
from pr_change_filter.models.pull_request import (
    BranchHead,
    ChangedFile,
    PullRequest,
    PullRequestHead,
    TagHead,
)


def make_response(payload):
    response = Mock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = payload
    response.headers = {'X-RateLimit-Remaining': '4999'}
    return response


PULLS = [
    {'number': 1, 'title': 'Code change', 'html_url': 'https://github.com/o/r/pull/1'},
    {'number': 2, 'title': 'Docs only', 'html_url': 'https://github.com/o/r/pull/2'},
    {'number': 3, 'title': 'Move source', 'html_url': 'https://github.com/o/r/pull/3'},
]

FILES = {
    1: [{'filename': 'README.md'}, {'filename': 'src/main.py'}],
    2: [{'filename': 'docs/index.md'}],
    3: [{'filename': 'lib/main.py', 'previous_filename': 'src/main.py', 'status': 'renamed'}],
}


def fake_request(method, url, **kwargs):
    if url.endswith('/pulls'):
        return make_response(PULLS)
    number = int(url.rstrip('/').split('/')[-2])
    return make_response(FILES[number])


class TestGitHubDiscovery:

    @patch('requests.Session.request', side_effect=fake_request)
    def test_from_github(self, mock_request):
        request = GitHubDiscoveryRequest.from_github(GitHubClient("test_token"), 'o', 'r')

        assert [pr.number for pr in request.pull_requests] == [1, 2, 3]
        assert request.get_pull_request(3).files == [
            ChangedFile('lib/main.py', 'src/main.py', 'renamed'),
        ]
        assert mock_request.call_count == 4

    @patch('requests.Session.request', side_effect=fake_request)
    def test_filter_discovered_heads(self, mock_request):
        output = io.StringIO()
        request = GitHubDiscoveryRequest.from_github(GitHubClient("test_token"), 'o', 'r', output=output)
        trait = PathBasedPullRequestFilterTrait(r'src/.*\.py', r'.*\.md')

        kept = filter_heads(trait, request, request.heads())

        assert [head.name for head in kept] == ['PR-1', 'PR-3']
        log = output.getvalue()
        assert 'Will Build PR #1. Found matching file : src/main.py' in log
        assert 'Will Build PR #3. Found matching (previous) file : src/main.py' in log
        assert '#2' not in log


class TestFilterHeads:

    def test_non_pull_request_heads_pass_through(self):
        trait = PathBasedPullRequestFilterTrait('.*', '.*')
        request = GitHubDiscoveryRequest([PullRequest(1, [ChangedFile('a.txt')])])
        heads = [BranchHead('main'), PullRequestHead(1), TagHead('v1.0')]

        kept = filter_heads(trait, request, heads)

        assert kept == [BranchHead('main'), TagHead('v1.0')]

    def test_order_preserved(self):
        trait = PathBasedPullRequestFilterTrait(r'.*\.py')
        request = GitHubDiscoveryRequest([
            PullRequest(1, [ChangedFile('a.py')]),
            PullRequest(2, [ChangedFile('b.txt')]),
            PullRequest(3, [ChangedFile('c.py')]),
        ])

        kept = filter_heads(trait, request, request.heads())

        assert kept == [PullRequestHead(1), PullRequestHead(3)]

    def test_empty_pull_request_excluded(self):
        trait = PathBasedPullRequestFilterTrait()
        request = GitHubDiscoveryRequest([PullRequest(1, [])])

        assert filter_heads(trait, request, request.heads()) == []
