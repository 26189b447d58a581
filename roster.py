from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from catalog import Catalog
from config import DEFAULT_POLICY, LendingPolicy
from exceptions import (
    DuplicateIdError,
    HasActiveBorrowsError,
    InWaitlistError,
    MemberNotFoundError,
)
from ledger import Ledger
from models import Member, MemberType


logger = logging.getLogger("library.roster")

# Menu codes used by the front end: 1 = Student, 2 = Faculty
_TYPE_CODES = {1: MemberType.STUDENT, 2: MemberType.FACULTY}


class Roster:
    """
    Owns every Member, in registration order.
    """

    def __init__(self, policy: LendingPolicy = DEFAULT_POLICY) -> None:
        self.policy = policy
        self.members: Dict[int, Member] = {}

    def find(self, member_id: int) -> Optional[Member]:
        return self.members.get(member_id)

    def get(self, member_id: int) -> Member:
        """
        Retrieves a member by id or raises MemberNotFoundError.
        """
        if member_id not in self.members:
            raise MemberNotFoundError(f"Member not found: id={member_id}")
        return self.members[member_id]

    def register(
        self,
        member_id: int,
        name: str,
        member_type: Union[MemberType, str, int, None] = MemberType.STUDENT,
    ) -> Member:
        """
        Registers a new member with no books out.

        An unrecognised member_type falls back to Student.

        Raises:
            DuplicateIdError: If member_id already exists.
            ValueError: If member_id is not an int.
        """
        logger.info("register called | id=%s name=%s", member_id, name)

        if not isinstance(member_id, int) or isinstance(member_id, bool):
            raise ValueError("member id must be an int")
        if member_id in self.members:
            raise DuplicateIdError(f"Member already exists: id={member_id}")

        member = Member(id=member_id, name=name, type=self._resolve_type(member_type))
        self.members[member_id] = member
        logger.info(
            "Member registered successfully | id=%s type=%s", member_id, member.type.value
        )
        return member

    def delete(self, member_id: int, ledger: Ledger, catalog: Catalog) -> Member:
        """
        Deletes a member with no open loans who is not waiting on any book.

        Raises:
            MemberNotFoundError
            HasActiveBorrowsError
            InWaitlistError
        """
        logger.info("delete called | id=%s", member_id)

        member = self.get(member_id)
        if ledger.has_active_for_member(member_id):
            raise HasActiveBorrowsError(f"Member {member_id} has active borrowed books.")
        if catalog.is_member_waitlisted(member_id):
            raise InWaitlistError(f"Member {member_id} is in a waitlist.")

        del self.members[member_id]
        logger.info("Member deleted successfully | id=%s", member_id)
        return member

    def max_books_allowed(self, member: Member) -> int:
        if member.type is MemberType.STUDENT:
            return self.policy.max_books_student
        if member.type is MemberType.FACULTY:
            return self.policy.max_books_faculty
        return 0

    def list(self) -> List[Member]:
        return list(self.members.values())

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, member_id: int) -> bool:
        return member_id in self.members

    @staticmethod
    def _resolve_type(member_type: Union[MemberType, str, int, None]) -> MemberType:
        if isinstance(member_type, MemberType):
            return member_type
        if (
            isinstance(member_type, int)
            and not isinstance(member_type, bool)
            and member_type in _TYPE_CODES
        ):
            return _TYPE_CODES[member_type]
        if isinstance(member_type, str):
            for t in MemberType:
                if member_type.strip().lower() == t.value.lower():
                    return t

        logger.warning("Invalid member type %r | setting as Student", member_type)
        return MemberType.STUDENT
