"""AI pull request reviewer: turns a diff into line anchored review comments."""

__version__ = "1.0.0"
