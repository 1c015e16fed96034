#!/usr/bin/env python3

import logging
from typing import Any, List, Sequence

from config import Config
from reviewbot.comment_mapper import create_comments
from reviewbot.diff_parser import DiffParser
from reviewbot.file_filter import filter_files
from reviewbot.models import ChangedFile, PRDetails, PublishableComment, ReviewFailure
from reviewbot.prompt_builder import create_prompt
from reviewbot.reviewers.base_reviewer import BaseReviewer

logger = logging.getLogger(__name__)


class ReviewPipeline:
    """
    Reviews every eligible hunk of a diff and publishes the comments.

    Hunks are reviewed one at a time, in file order and then hunk order, so
    the published comments keep the order of the diff.
    """

    def __init__(self, config: Config, reviewer: BaseReviewer, publisher: Any):
        """
        Args:
            config: Application configuration
            reviewer: Reviewer that answers hunk prompts
            publisher: Object with a create_review_comment(owner, repo,
                pull_number, comments) method, usually a GitHubClient
        """
        self.config = config
        self.reviewer = reviewer
        self.publisher = publisher

    def review_diff(self, diff: str, pr_details: PRDetails) -> List[PublishableComment]:
        """
        Parses the diff and reviews it.

        Raises:
            DiffParseError: if the diff is malformed; nothing is published
        """
        parsed_files = DiffParser.parse_diff(diff)
        return self.run(parsed_files, pr_details)

    def select_files(self, files: Sequence[ChangedFile]) -> List[ChangedFile]:
        filters = self.config.filters
        selected = filter_files(files, filters.allowed_extensions, filters.exclude_patterns)
        if filters.report_skipped_files and len(selected) < len(files):
            logger.info("Skipped %d of %d files", len(files) - len(selected), len(files))
        return selected

    def run(self, files: Sequence[ChangedFile], pr_details: PRDetails) -> List[PublishableComment]:
        """
        Reviews all hunks of the eligible files.

        Args:
            files: Parsed files from the diff
            pr_details: Pull request details

        Returns:
            All comments, in file, hunk and review order
        """
        files = self.select_files(files)
        logger.info("Number of files to analyze: %d", len(files))

        comments = []
        for changed_file in files:
            logger.info("Processing file: %s (%d hunks)", changed_file.target_path, len(changed_file.hunks))

            for index, hunk in enumerate(changed_file.hunks):
                prompt = create_prompt(changed_file, hunk, pr_details)
                result = self.reviewer.review_prompt(prompt)

                if isinstance(result, ReviewFailure):
                    logger.error(
                        "Skipping hunk %d of %s: %s", index, changed_file.target_path, result.reason
                    )
                    continue

                if not result.reviews:
                    continue

                new_comments = create_comments(changed_file, result.reviews)
                logger.info("Found %d issues in hunk %d of %s", len(new_comments), index, changed_file.target_path)
                comments.extend(new_comments)

        if comments:
            self.publish(pr_details, comments)
        else:
            logger.info("No issues found to comment on.")

        return comments

    def publish(self, pr_details: PRDetails, comments: List[PublishableComment]) -> None:
        self.publisher.create_review_comment(
            pr_details.owner,
            pr_details.repo,
            pr_details.pull_number,
            [comment.to_github() for comment in comments],
        )
