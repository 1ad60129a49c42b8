"""Subject Resolver - Work out which staff member an admin's query is about"""
import re
from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from ..domain.models import ActorContext, StaffMember
from ..utils.logger import get_logger
from ..utils.periods import names_month

if TYPE_CHECKING:
    from ..repositories.staff_repo import StaffRepository

logger = get_logger(__name__)

# "for <clause>", up to another " for " or the end of the query
_FOR_CLAUSE = re.compile(r"\bfor\s+(.+?)(?=\s+for\s|\s*$)", re.IGNORECASE)
_EMAIL = re.compile(r"[\w.+'-]+@[\w.-]+")
_NAME_RUN = re.compile(r"(?:[^\W\d_]|[ .'-])*")
_NAME_TEXT = re.compile(r"(?:[^\W\d_]|[ .'-])+")
_CLOSING_PUNCTUATION = "?!,;:)"
_ALL_STAFF = re.compile(r"\ball staff\b", re.IGNORECASE)


@dataclass(frozen=True)
class SubjectResolution:
    """
    Result of subject resolution.

    Exactly one of ``subject`` and ``message`` is set. A message is a
    terminal answer (no match, or several matches) for the caller.
    """
    subject: Optional[StaffMember] = None
    message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.message is not None


def _clause_candidate(clause: str) -> str:
    """
    The email or name a ``for`` clause starts with.

    A name ends at the end of the clause, at whitespace before other text
    ("June 2025") or at closing punctuation. A name glued to some other
    character ("john2") is returned with that word whole, so it is never
    looked up by its prefix.
    """
    email = _EMAIL.match(clause)
    if email:
        return email.group().rstrip(".")

    name = _NAME_RUN.match(clause).group()
    if not name.strip(" ."):
        return ""
    rest = clause[len(name):]
    if rest and not name[-1].isspace() and rest[0] not in _CLOSING_PUNCTUATION:
        name += rest.split(None, 1)[0]
    return name.strip(" .")


def extract_candidates(query_text: str) -> List[str]:
    """All ``for <candidate>`` clauses in the query, in order, trimmed of spaces and dots"""
    candidates = []
    for match in _FOR_CLAUSE.finditer(query_text):
        candidate = _clause_candidate(match.group(1))
        if candidate:
            candidates.append(candidate)
    return candidates


def is_subject_candidate(candidate: str) -> bool:
    """Month names and "all staff" never name a staff member"""
    return not names_month(candidate) and not _ALL_STAFF.search(candidate)


def extract_subject_candidate(query_text: str) -> Optional[str]:
    """First ``for`` clause that could name a staff member"""
    for candidate in extract_candidates(query_text):
        if is_subject_candidate(candidate):
            return candidate
    return None


def build_name_pattern(candidate: str) -> str:
    """
    Case-insensitive full-name pattern for user text.

    Each whitespace-separated token is escaped and tokens are joined with
    ``.*``, so "john   doe" matches "John A. Doe" and regex metacharacters
    in the text match literally.
    """
    return ".*".join(re.escape(token) for token in candidate.split())


class SubjectResolver:
    """
    Redirects an admin's query to the staff member named in it.

    Lookup order: exact email within the organization when the candidate
    holds an ``@``, otherwise a name-pattern match within the organization.
    One match is the subject, none or several end the query with a message.
    """

    def __init__(self, staff_repo: "StaffRepository"):
        self._staff_repo = staff_repo

    async def resolve(self, actor: ActorContext, query_text: str) -> SubjectResolution:
        candidate = extract_subject_candidate(query_text)
        if candidate is None:
            return SubjectResolution(subject=actor)

        if "@" in candidate:
            doc = await self._staff_repo.get_by_email_in_org(candidate, actor.organization_id)
            if doc is None:
                return self._not_found(actor, candidate)
            return SubjectResolution(subject=StaffMember.from_document(doc))

        if not _NAME_TEXT.fullmatch(candidate):
            return self._not_found(actor, candidate)

        matches = await self._staff_repo.find_by_name_pattern_in_org(
            build_name_pattern(candidate), actor.organization_id
        )
        if not matches:
            return self._not_found(actor, candidate)

        if len(matches) > 1:
            names = ", ".join(doc.get("fullName", "") for doc in matches)
            logger.info(
                f"Subject '{candidate}' is ambiguous ({len(matches)} matches)",
                extra={"user_id": actor.user_id, "organization_id": actor.organization_id}
            )
            return SubjectResolution(
                message=f"Multiple staff found matching '{candidate}': {names}. "
                        f"Please specify the full name or email."
            )

        return SubjectResolution(subject=StaffMember.from_document(matches[0]))

    @staticmethod
    def _not_found(actor: ActorContext, candidate: str) -> SubjectResolution:
        logger.info(
            f"No staff matches subject '{candidate}'",
            extra={"user_id": actor.user_id, "organization_id": actor.organization_id}
        )
        return SubjectResolution(message=f"No staff found with {candidate}.")
