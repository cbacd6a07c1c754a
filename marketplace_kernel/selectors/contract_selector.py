"""
Module: marketplace_kernel.selectors.contract_selector
Responsibility: Read-only contract lookups scoped to the caller.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - A caller only ever sees contracts where it is the client or the
      contractor.  A contract belonging to others is reported exactly like a
      missing one.
"""

from uuid import UUID

from sqlalchemy import or_, select

from marketplace_kernel.domain.dtos import ContractInfo
from marketplace_kernel.exceptions import ContractNotFoundError
from marketplace_kernel.models import ACTIVE_STATUSES, Contract
from marketplace_kernel.selectors.base import BaseSelector


def _is_party(caller_id: UUID):
    return or_(Contract.client_id == caller_id, Contract.contractor_id == caller_id)


class ContractSelector(BaseSelector[Contract]):
    """Contract queries for a single caller."""

    def get_for_party(self, caller_id: UUID, contract_id: UUID) -> ContractInfo:
        """
        Get a contract the caller is a party to.

        Raises:
            ContractNotFoundError: No such contract, or caller is not a party.
        """
        stmt = select(Contract).where(Contract.id == contract_id, _is_party(caller_id))
        contract = self.session.execute(stmt).scalar_one_or_none()
        if contract is None:
            raise ContractNotFoundError(str(contract_id))
        return ContractInfo.from_model(contract)

    def list_active_for_party(self, caller_id: UUID) -> list[ContractInfo]:
        """Non-terminated contracts the caller is a party to, oldest first."""
        stmt = (
            select(Contract)
            .where(
                Contract.status.in_([s.value for s in ACTIVE_STATUSES]),
                _is_party(caller_id),
            )
            .order_by(Contract.created_at, Contract.id)
        )
        return [ContractInfo.from_model(c) for c in self.session.execute(stmt).scalars()]
