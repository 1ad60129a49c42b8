"""Tests for resolving the staff member an admin's query is about"""
import asyncio

from hrdesk.engine.subject_resolver import (
    SubjectResolver,
    build_name_pattern,
    extract_candidates,
    extract_subject_candidate,
)
from tests.fakes import staff_doc


class TestCandidates:
    def test_stops_at_next_for_clause(self):
        query = "Download payslip PDF for John Doe for June 2025"
        assert extract_candidates(query) == ["John Doe", "June"]
        assert extract_subject_candidate(query) == "John Doe"

    def test_month_is_not_a_subject(self):
        assert extract_subject_candidate("Payroll summary for June 2025") is None

    def test_all_staff_is_not_a_subject(self):
        assert extract_subject_candidate("Sum of basic for all staff") is None

    def test_email_candidate(self):
        assert extract_subject_candidate("Show leave history for jane.smith@example.com") == "jane.smith@example.com"

    def test_trailing_dot_trimmed(self):
        assert extract_subject_candidate("Show pending leave for Jane Smith.") == "Jane Smith"

    def test_no_for_clause(self):
        assert extract_subject_candidate("Show my tasks") is None

    def test_email_with_digits_is_kept_whole(self):
        assert extract_subject_candidate("Show leave history for john2@example.com") == "john2@example.com"

    def test_accented_name(self):
        assert extract_subject_candidate("Show approved leave for Zoë Adams?") == "Zoë Adams"

    def test_name_glued_to_digits_is_kept_whole(self):
        assert extract_subject_candidate("Show approved leave for john2 please") == "john2"

    def test_name_pattern_escapes_and_joins(self):
        assert build_name_pattern("john   doe") == "john.*doe"
        assert build_name_pattern("o'neil jr.") == "o'neil.*jr\\."


class TestSubjectResolver:
    def resolve(self, staff_repo, actor, query):
        return asyncio.run(SubjectResolver(staff_repo).resolve(actor, query))

    def test_no_candidate_keeps_actor(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show my leave history")
        assert result.subject == admin
        assert not result.is_terminal

    def test_unique_name(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show approved leave for John Doe")
        assert result.subject.user_id == "u-john"
        assert result.subject.full_name == "John Doe"

    def test_name_match_is_case_insensitive(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show approved leave for jane smith")
        assert result.subject.user_id == "u-smith"

    def test_ambiguous_name(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show approved leave for Doe")
        assert result.is_terminal
        assert result.message == (
            "Multiple staff found matching 'Doe': John Doe, Jane Doe. "
            "Please specify the full name or email."
        )

    def test_unknown_name(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show approved leave for Unknown Person")
        assert result.message == "No staff found with Unknown Person."

    def test_other_organization_is_invisible(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show approved leave for John Outsider")
        assert result.message == "No staff found with John Outsider."

    def test_email_lookup(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show leave history for jane.smith@example.com")
        assert result.subject.user_id == "u-smith"

    def test_unknown_email(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show leave history for outsider@example.com")
        assert result.message == "No staff found with outsider@example.com."

    def test_email_with_digits_uses_email_lookup(self, staff_repo, admin):
        staff_repo.docs["u-j2"] = staff_doc("u-j2", "Jon Second", "john2@example.com")
        result = self.resolve(staff_repo, admin, "Show leave history for john2@example.com")
        assert result.subject.user_id == "u-j2"

    def test_accented_name_resolves(self, staff_repo, admin):
        staff_repo.docs["u-zoe"] = staff_doc("u-zoe", "Zoë Adams", "zoe@example.com")
        staff_repo.docs["u-zola"] = staff_doc("u-zola", "Zola Adams", "zola@example.com")
        result = self.resolve(staff_repo, admin, "Show approved leave for Zoë Adams")
        assert result.subject.user_id == "u-zoe"

    def test_name_with_digits_is_not_matched_by_prefix(self, staff_repo, admin):
        result = self.resolve(staff_repo, admin, "Show approved leave for john2")
        assert result.message == "No staff found with john2."
