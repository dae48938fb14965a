"""
Controllers Package

Submission orchestration.
"""

from submission.controllers.submission import Submission
from submission.controllers.submission_controller import SubmissionController

__all__ = [
    "Submission",
    "SubmissionController",
]
