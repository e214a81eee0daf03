"""End-to-end flows across AuthorityCenter, Farm and ChickenEggTracker"""

import pytest
from sqlalchemy import select, update

from farmledger.domain.exceptions import (ChickenNotAliveError,
                                          UnauthorizedError)
from farmledger.infrastructure.persistence.database import Base
from farmledger.infrastructure.persistence.models import LedgerEvent


async def snapshot(session_factory) -> dict[str, list[tuple]]:
    """Every row of every ledger table"""
    state = {}
    async with session_factory() as session:
        for table in Base.metadata.sorted_tables:
            result = await session.execute(select(table))
            state[table.name] = sorted((tuple(row) for row in result.all()), key=repr)
    return state


@pytest.mark.asyncio
async def test_certified_farm_lifecycle(ledger, owner, inspector, farmer):
    """
    GIVEN an AuthorityCenter with an inspector and a farm owned by a farmer
    WHEN the inspector certifies the farm and the farmer records a hen and her eggs
    THEN ids count up from 1 and a removed hen can no longer lay
    """
    async with ledger.transaction() as tx:
        center = await tx.deployer.deploy_authority_center(owner)
        await (await tx.authority_center(center)).add_authority(owner, inspector)
        farm = await tx.deployer.deploy_farm(farmer, farmer, "Green Acres", "", authority_center=center)

    async with ledger.transaction() as tx:
        await (await tx.authority_center(center)).register_farm(inspector, farm)
    async with ledger.view() as tx:
        assert await (await tx.authority_center(center)).is_certified_farm(farm) is True

    async with ledger.transaction() as tx:
        contract = await tx.farm(farm)
        assert await contract.register_chicken(farmer, "ipfs://a") == 1
        assert await contract.chicken_count() == 1
        assert await contract.register_egg(farmer, 1, "ipfs://b") == 1
        assert await contract.egg_count() == 1
        await contract.remove_chicken(farmer, 1)
        assert (await contract.get_chicken(1)).is_alive is False

    with pytest.raises(ChickenNotAliveError) as exc_info:
        async with ledger.transaction() as tx:
            await (await tx.farm(farm)).register_egg(farmer, 1, "ipfs://c")

    assert exc_info.value.error_code == "INVALID_STATE"
    async with ledger.view() as tx:
        assert await (await tx.farm(farm)).egg_count() == 1
        assert (await tx.verification().verify_chain()).is_chain_valid is True


@pytest.mark.asyncio
async def test_ids_monotonic_after_removals(ledger, farm, farmer):
    async with ledger.transaction() as tx:
        contract = await tx.farm(farm)
        ids = [await contract.register_chicken(farmer, f"ipfs://{n}") for n in range(5)]
        for chicken_id in (2, 4):
            await contract.remove_chicken(farmer, chicken_id)

    async with ledger.view() as tx:
        assert await (await tx.farm(farm)).chicken_count() == 5
    assert ids == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_authority_membership_round_trip(ledger, center, owner, inspector):
    async with ledger.transaction() as tx:
        await (await tx.authority_center(center)).add_authority(owner, inspector)
    async with ledger.view() as tx:
        assert await (await tx.authority_center(center)).is_authority(inspector) is True

    async with ledger.transaction() as tx:
        await (await tx.authority_center(center)).remove_authority(owner, inspector)
    async with ledger.view() as tx:
        assert await (await tx.authority_center(center)).is_authority(inspector) is False


UNAUTHORIZED_CALLS = {
    "add_authority": lambda tx, ctx: _center_call(tx, ctx, "add_authority", ctx["outsider"]),
    "remove_authority": lambda tx, ctx: _center_call(tx, ctx, "remove_authority", ctx["owner"]),
    "register_farm": lambda tx, ctx: _center_call(tx, ctx, "register_farm", ctx["farm"]),
    "remove_farm": lambda tx, ctx: _center_call(tx, ctx, "remove_farm", ctx["farm"]),
    "update_info": lambda tx, ctx: _farm_call(tx, ctx, "update_info", "X", ""),
    "register_chicken": lambda tx, ctx: _farm_call(tx, ctx, "register_chicken", ""),
    "remove_chicken": lambda tx, ctx: _farm_call(tx, ctx, "remove_chicken", 1),
    "update_chicken_metadata": lambda tx, ctx: _farm_call(tx, ctx, "update_chicken_metadata", 1, ""),
    "register_egg": lambda tx, ctx: _farm_call(tx, ctx, "register_egg", 1, ""),
    "update_egg_metadata": lambda tx, ctx: _farm_call(tx, ctx, "update_egg_metadata", 1, ""),
    "tracker_register_chicken": lambda tx, ctx: _tracker_call(
        tx, ctx, "register_chicken", "hen-2", "", "", ""
    ),
    "tracker_update_chicken_info": lambda tx, ctx: _tracker_call(tx, ctx, "update_chicken_info", "hen-1", ""),
    "tracker_remove_chicken": lambda tx, ctx: _tracker_call(tx, ctx, "remove_chicken", "hen-1"),
    "tracker_register_egg": lambda tx, ctx: _tracker_call(tx, ctx, "register_egg", "egg-2", "hen-1", "", ""),
    "tracker_update_egg_info": lambda tx, ctx: _tracker_call(tx, ctx, "update_egg_info", "egg-1", ""),
    "tracker_remove_egg": lambda tx, ctx: _tracker_call(tx, ctx, "remove_egg", "egg-1"),
}


async def _center_call(tx, ctx, name, *args):
    contract = await tx.authority_center(ctx["center"])
    await getattr(contract, name)(ctx["caller"], *args)


async def _farm_call(tx, ctx, name, *args):
    contract = await tx.farm(ctx["farm"])
    await getattr(contract, name)(ctx["caller"], *args)


async def _tracker_call(tx, ctx, name, *args):
    contract = await tx.chicken_egg_tracker(ctx["tracker"])
    await getattr(contract, name)(ctx["caller"], *args)


@pytest.fixture
async def populated(ledger, owner, inspector, farmer, outsider, center, farm, tracker):
    """Every contract holds one record of each kind"""
    async with ledger.transaction() as tx:
        await (await tx.authority_center(center)).add_authority(owner, inspector)
        await (await tx.authority_center(center)).register_farm(owner, farm)
        contract = await tx.farm(farm)
        await contract.register_chicken(farmer, "ipfs://hen")
        await contract.register_egg(farmer, 1, "ipfs://egg")
        tracked = await tx.chicken_egg_tracker(tracker)
        await tracked.register_chicken(farmer, "hen-1", "Leghorn", "2024-01-01", "Qm1")
        await tracked.register_egg(farmer, "egg-1", "hen-1", "2024-02-01", "Qm2")
    return {
        "center": center,
        "farm": farm,
        "tracker": tracker,
        "owner": owner,
        "outsider": outsider,
        "caller": outsider,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("call", list(UNAUTHORIZED_CALLS))
async def test_unauthorized_calls_leave_state_unchanged(ledger, session_factory, populated, call):
    """
    GIVEN contracts populated with records
    WHEN a caller without the required role invokes a mutating operation
    THEN it reverts with UNAUTHORIZED and no table changes
    """
    before = await snapshot(session_factory)

    with pytest.raises(UnauthorizedError):
        async with ledger.transaction() as tx:
            await UNAUTHORIZED_CALLS[call](tx, populated)

    assert await snapshot(session_factory) == before


@pytest.mark.asyncio
async def test_tampered_log_detected(ledger, session_factory, center, owner, inspector, farm):
    """
    GIVEN a valid event log
    WHEN an entry is rewritten behind the ORM's back
    THEN verification reports the entry
    """
    async with ledger.transaction() as tx:
        authority_center = await tx.authority_center(center)
        await authority_center.add_authority(owner, inspector)
        await authority_center.register_farm(owner, farm)
        await authority_center.remove_farm(owner, farm)

    async with session_factory() as session:
        await session.execute(
            update(LedgerEvent)
            .where(LedgerEvent.sequence == 2)
            .values(args={"farm": inspector.value})
            .execution_options(synchronize_session=False)
        )
        await session.commit()

    async with ledger.view() as tx:
        result = await tx.verification().verify_chain()

    assert result.is_chain_valid is False
    assert result.total_events == 3
    assert result.first_invalid.sequence == 2
    assert result.first_invalid.error_type == "HASH_MISMATCH"
