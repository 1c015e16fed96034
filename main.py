#!/usr/bin/env python3

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

from config import Config, load_config
from reviewbot.github_client import GitHubClient
from reviewbot.models import PRDetails
from reviewbot.pipeline import ReviewPipeline
from reviewbot.reviewers.code_reviewer import AICodeReviewer

logger = logging.getLogger("reviewbot")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def load_event(event_path: Optional[str] = None) -> Dict[str, Any]:
    """Reads the GitHub Actions event payload."""
    with open(event_path or os.environ["GITHUB_EVENT_PATH"], "r") as f:
        return json.load(f)


def get_event_diff(github: GitHubClient, event_data: Dict[str, Any], pr_details: PRDetails) -> Optional[str]:
    """
    Fetches the diff to review for the event.

    Returns:
        The diff, or None for events that are not reviewed
    """
    action = event_data.get("action")

    if action == "opened":
        return github.get_diff(pr_details.owner, pr_details.repo, pr_details.pull_number)

    if action == "synchronize":
        return github.get_compare_diff(
            pr_details.owner, pr_details.repo, event_data["before"], event_data["after"]
        )

    logger.error("Unsupported event: %s (action %s)", os.environ.get("GITHUB_EVENT_NAME"), action)
    return None


def run(config: Config, event_data: Dict[str, Any]) -> int:
    """
    Reviews the pull request named by the event.

    Returns:
        Process exit status
    """
    github = GitHubClient(config.github_token)

    pr_details = github.get_pr_details(event_data)
    logger.info("Analyzing PR #%s in repo %s/%s", pr_details.pull_number, pr_details.owner, pr_details.repo)

    diff = get_event_diff(github, event_data, pr_details)
    if diff is None:
        return 1
    if not diff.strip():
        logger.info("No diff found. Exiting.")
        return 0

    pipeline = ReviewPipeline(config, AICodeReviewer(config.model), github)
    comments = pipeline.review_diff(diff, pr_details)
    logger.info("Published %d review comments", len(comments))
    return 0


def main() -> None:
    """Main function to execute the code review process."""
    try:
        config = load_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.log_level)
    logger.info("Starting PR review bot...")

    missing_vars = config.validate()
    if missing_vars:
        logger.error("Missing required environment variables: %s", ", ".join(missing_vars))
        sys.exit(1)

    try:
        status = run(config, load_event())
    except Exception:
        logger.exception("Error in main execution")
        sys.exit(1)

    sys.exit(status)


if __name__ == "__main__":
    main()
