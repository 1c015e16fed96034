#!/usr/bin/env python3

import logging
from typing import Any, Dict, List

import requests
from github import Github

from reviewbot.models import PRDetails

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
REVIEW_BODY = "AI Code Reviewer Comments"


class GitHubClientError(RuntimeError):
    """Raised when GitHub does not return the requested diff."""


class GitHubClient:
    """Handles all interactions with GitHub API."""

    def __init__(self, github_token: str, api_url: str = GITHUB_API_URL, timeout: int = 30):
        """
        Initialize GitHub client with authentication token.

        Args:
            github_token: GitHub authentication token
            api_url: Base URL of the REST API
            timeout: Timeout in seconds for raw diff requests
        """
        self.github_token = github_token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.gh = Github(github_token)

    def get_pr_details(self, event_data: Dict[str, Any]) -> PRDetails:
        """
        Retrieves details of the pull request named by a GitHub Actions event payload.

        Args:
            event_data: Parsed event payload

        Returns:
            PRDetails object containing PR information
        """
        # Handle comment trigger differently from direct PR events
        if "issue" in event_data and "pull_request" in event_data["issue"]:
            pull_number = event_data["issue"]["number"]
        else:
            pull_number = event_data["number"]
        repo_full_name = event_data["repository"]["full_name"]

        owner, repo = repo_full_name.split("/")

        pr = self.gh.get_repo(repo_full_name).get_pull(pull_number)

        return PRDetails(owner, repo, pull_number, pr.title or "", pr.body or "")

    def get_diff(self, owner: str, repo: str, pull_number: int) -> str:
        """
        Fetches the diff of the pull request from GitHub API.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number

        Returns:
            String containing the diff
        """
        logger.info("Getting diff for %s/%s PR#%s", owner, repo, pull_number)
        return self._get_raw_diff(f"{self.api_url}/repos/{owner}/{repo}/pulls/{pull_number}")

    def get_compare_diff(self, owner: str, repo: str, base: str, head: str) -> str:
        """
        Fetches the diff between two commits, used when new commits are pushed to a PR.

        Args:
            owner: Repository owner
            repo: Repository name
            base: Commit the PR head pointed to before the push
            head: Commit the PR head points to after the push

        Returns:
            String containing the diff
        """
        logger.info("Getting diff for %s/%s between %s and %s", owner, repo, base, head)
        return self._get_raw_diff(f"{self.api_url}/repos/{owner}/{repo}/compare/{base}...{head}")

    def _get_raw_diff(self, url: str) -> str:
        headers = {
            'Authorization': f'Bearer {self.github_token}',
            'Accept': DIFF_MEDIA_TYPE,
        }

        response = requests.get(url, headers=headers, timeout=self.timeout)

        if response.status_code != 200:
            raise GitHubClientError(
                f"Failed to get diff from {url}: status {response.status_code}: {response.text}"
            )

        diff = response.text
        logger.info("Retrieved diff length: %d", len(diff))
        return diff

    def create_review_comment(
            self,
            owner: str,
            repo: str,
            pull_number: int,
            comments: List[Dict[str, Any]],
    ) -> None:
        """
        Submits all review comments to the GitHub API as a single review.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number
            comments: List of comments to create, each with path, line and body
        """
        logger.info("Creating review with %d comments", len(comments))

        pr = self.gh.get_repo(f"{owner}/{repo}").get_pull(pull_number)
        review = pr.create_review(
            body=REVIEW_BODY,
            comments=comments,
            event="COMMENT",
        )
        logger.info("Review created successfully with ID: %s", review.id)
