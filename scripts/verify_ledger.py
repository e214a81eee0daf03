"""Create missing ledger tables and verify the event log hash chain"""
import asyncio
import sys

from farmledger.infrastructure.ledger import Ledger
from farmledger.infrastructure.persistence.database import (
    create_schema, create_session_factory, get_engine)
from farmledger.shared.logging import setup_logging


async def verify_ledger() -> bool:
    setup_logging()
    engine = get_engine()
    await create_schema(engine)

    ledger = Ledger(create_session_factory(engine))
    async with ledger.view() as tx:
        result = await tx.verification().verify_chain()

    if result.is_chain_valid:
        print(f"✅ Event log valid ({result.total_events} entries)")
        return True

    broken = result.first_invalid
    print(f"❌ Event log invalid: {result.invalid_events} of {result.total_events} entries")
    print(f"  First failure: sequence {broken.sequence} ({broken.error_type})")
    print(f"  {broken.error_message}")
    return False


if __name__ == "__main__":
    sys.exit(0 if asyncio.run(verify_ledger()) else 1)
