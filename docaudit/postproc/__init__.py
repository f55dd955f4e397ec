"""Post-processing of fixture files from collected stats."""

from .expected_issues import ExpectedIssuesBlock, FixtureCommentSynchronizer, group_by_file

__all__ = ["ExpectedIssuesBlock", "FixtureCommentSynchronizer", "group_by_file"]
