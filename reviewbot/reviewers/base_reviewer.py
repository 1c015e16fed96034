#!/usr/bin/env python3

from abc import ABC, abstractmethod

from reviewbot.models import ReviewResult


class BaseReviewer(ABC):
    """
    Base class for reviewers that answer a hunk prompt.
    Each reviewer should implement the review_prompt method.
    """

    def __init__(self):
        self.name = self.__class__.__name__

    @abstractmethod
    def review_prompt(self, prompt: str) -> ReviewResult:
        """
        Review one hunk prompt.

        Args:
            prompt: Prompt built for a single hunk

        Returns:
            ReviewSuccess with the (possibly empty) reviews, or ReviewFailure
            when the model could not be asked or answered with invalid JSON
        """
        pass
