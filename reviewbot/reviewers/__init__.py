"""
Reviewer modules for PR code review.

This package contains the reviewers that answer a single hunk prompt.
Available reviewers:
- AICodeReviewer: Uses OpenAI (or Azure OpenAI) to review a hunk
"""

from reviewbot.reviewers.base_reviewer import BaseReviewer
from reviewbot.reviewers.code_reviewer import AICodeReviewer

__all__ = [
    'AICodeReviewer',
    'BaseReviewer',
]
