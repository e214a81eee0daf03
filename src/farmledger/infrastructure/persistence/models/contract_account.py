from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from farmledger.domain.enums import ContractKind
from farmledger.infrastructure.persistence.database import Base
from farmledger.infrastructure.persistence.models.mixins import ADDRESS_LENGTH


class ContractAccount(Base):
    """
    A deployed contract.

    The address is derived from (deployer, nonce); the nonce is the number of
    contracts the deployer had deployed before this one.
    """

    __tablename__ = "contract_account"

    address: Mapped[str] = mapped_column(String(ADDRESS_LENGTH), primary_key=True)
    kind: Mapped[str] = mapped_column(String, nullable=False, index=True)
    deployer: Mapped[str] = mapped_column(String(ADDRESS_LENGTH), nullable=False, index=True)
    nonce: Mapped[int] = mapped_column(Integer, nullable=False)
    deployed_at: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("deployer", "nonce", name="uq_contract_account_deployer_nonce"),
        CheckConstraint(f"kind IN {tuple(ContractKind.values())}", name="contract_kind_check"),
    )
