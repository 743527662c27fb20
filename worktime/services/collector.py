"""
Activity collector: turns GitHub history into per-repository activity records.

For every repository of an organisation:
1. List the author's commits since the start date
2. Mark commits created by squash-merging a pull request
3. Replace squash merges with the pull request's own commits
4. Drop duplicates by sha and fetch statistics for what remains
5. List the author's issue events since the start date
6. Write everything through the ActivityStore
"""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from worktime.core.timeutils import parse_instant
from worktime.services.github import (
    CommitRecord,
    GitHubAPIError,
    GitHubReadOperations,
    IssueEventRecord,
    find_pull_request_id,
)
from worktime.services.storage import ActivityStore
from worktime.services.timeline.types import (
    EventProvenance,
    PlainCommit,
    PullRequestCommit,
    SquashMergeCommit,
)

logger = logging.getLogger(__name__)

# GitHub answers 409 when listing commits of a repository without any
EMPTY_REPOSITORY_STATUS = 409


@dataclass
class RepoActivity:
    """Collected activity of one repository."""

    repo: str
    commits: list[CommitRecord] = field(default_factory=list)
    issues: list[IssueEventRecord] = field(default_factory=list)


def _login(user: dict[str, Any] | None) -> str | None:
    return user.get("login") if user else None


def normalize_commit(data: dict[str, Any], provenance: EventProvenance) -> CommitRecord:
    """
    Convert a raw GitHub commit object to a CommitRecord.

    The author login is missing when the commit email is not linked to a
    GitHub account; the git author name is used instead.
    """
    git_author = data["commit"]["author"]
    return CommitRecord(
        sha=data["sha"],
        author=_login(data.get("author")) or git_author.get("name", ""),
        date=git_author["date"],
        message=data["commit"]["message"],
        provenance=provenance,
    )


def tag_branch_commits(raw_commits: Iterable[dict[str, Any]]) -> list[CommitRecord]:
    """Attach PlainCommit or SquashMergeCommit provenance to branch commits."""
    commits: list[CommitRecord] = []
    for data in raw_commits:
        pr_id = find_pull_request_id(data["commit"]["message"])
        provenance: EventProvenance = (
            SquashMergeCommit(pr_id=pr_id) if pr_id is not None else PlainCommit()
        )
        commits.append(normalize_commit(data, provenance))
    return commits


def dedupe_commits(commits: Iterable[CommitRecord]) -> list[CommitRecord]:
    """Drop commits whose sha was already seen, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[CommitRecord] = []
    for commit in commits:
        if commit.sha in seen:
            logger.debug(f"Skipping duplicate commit {commit.sha[:8]}")
            continue
        seen.add(commit.sha)
        unique.append(commit)
    return unique


def plain_commits(commits: Iterable[CommitRecord]) -> list[CommitRecord]:
    """Filter out squash-merge commits and duplicates."""
    return dedupe_commits(c for c in commits if not isinstance(c.provenance, SquashMergeCommit))


class ActivityCollector:
    """Collects one author's commits and issue events from GitHub."""

    def __init__(
        self,
        github: GitHubReadOperations,
        store: ActivityStore,
        author: str,
        since: str,
    ):
        self.github = github
        self.store = store
        self.author = author
        self.since = since
        self._since_instant: datetime = parse_instant(since, "--from")

    async def collect_commits(self, owner: str, repo: str) -> list[CommitRecord]:
        """
        Collect the author's commits of a repository, with statistics.

        Squash-merge commits are replaced by the commits of the pull request
        they were created from, so the timeline sees when the work was
        actually done rather than when it was merged.
        """
        try:
            raw = await self.github.list_commits(owner, repo, self.since, self.author)
        except GitHubAPIError as e:
            if e.status_code != EMPTY_REPOSITORY_STATUS:
                raise
            logger.info(f"{owner}/{repo} has no commits yet")
            return []

        commits = tag_branch_commits(raw)
        pr_ids = [
            c.provenance.pr_id for c in commits if isinstance(c.provenance, SquashMergeCommit)
        ]
        logger.info(f"Got {len(commits)} commits in {owner}/{repo}, {len(pr_ids)} from PRs")

        for pr_id in pr_ids:
            pr_commits = await self.github.list_pull_request_commits(owner, repo, pr_id)
            provenance = PullRequestCommit(pr_id=pr_id)
            for data in pr_commits:
                commit = normalize_commit(data, provenance)
                # Pull requests can carry commits of co-authors
                if commit.author != self.author:
                    continue
                commits.append(commit)

        result = plain_commits(commits)
        for commit in result:
            commit.stats = await self.github.get_commit_stats(owner, repo, commit.sha)

        logger.info(f"Kept {len(result)} plain commits in {owner}/{repo}")
        return result

    async def collect_issue_events(self, owner: str, repo: str) -> list[IssueEventRecord]:
        """Collect the author's issue events of a repository since the start date."""
        raw = await self.github.list_issue_events(owner, repo)

        events: list[IssueEventRecord] = []
        for data in raw:
            if _login(data.get("actor")) != self.author:
                continue
            created_at = parse_instant(
                data.get("created_at"), f"{owner}/{repo} event {data.get('id')}"
            )
            if created_at < self._since_instant:
                continue
            events.append(
                IssueEventRecord(
                    id=data["id"],
                    author=self.author,
                    date=data["created_at"],
                    event_type=data["event"],
                    issue_id=data["issue"]["number"],
                )
            )

        counter = Counter(e.event_type for e in events)
        summary = ", ".join(f"{event_type}: {count}" for event_type, count in sorted(counter.items()))
        logger.info(f"Got {len(events)} issue events in {owner}/{repo} {summary}".rstrip())
        return events

    async def collect_repo(self, owner: str, repo: str) -> RepoActivity:
        """Collect and store the activity of one repository."""
        logger.info(f"Repository: {owner}/{repo}")
        activity = RepoActivity(
            repo=repo,
            commits=await self.collect_commits(owner, repo),
            issues=await self.collect_issue_events(owner, repo),
        )
        self.store.write(repo, activity.commits, activity.issues)
        return activity

    async def collect_organisation(self, org: str) -> list[RepoActivity]:
        """Collect and store the activity of every repository of an organisation."""
        repos = await self.github.list_org_repos(org)
        logger.info(f"Got {len(repos)} repositories in {org}")
        logger.debug(f"Repositories: {', '.join(r.full_name for r in repos)}")
        return [await self.collect_repo(org, r.name) for r in repos]
