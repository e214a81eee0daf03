"""Tests for ChickenEggTracker: string-keyed ledger gated by farm ownership"""

import pytest

from farmledger.application.services.authorization_service import \
    RoleTableAuthorization
from farmledger.domain.exceptions import (ChickenAlreadyRegisteredError,
                                          ChickenNotAliveError,
                                          ChickenNotFoundError,
                                          ChickenNotRegisteredError,
                                          ContractNotFoundError,
                                          EggAlreadyRegisteredError,
                                          EggNotFoundError, OnlyFarmOwnerError,
                                          ValidationException)


async def register_chicken(ledger, tracker, caller, chicken_id="hen-1", breed="Leghorn"):
    async with ledger.transaction() as tx:
        contract = await tx.chicken_egg_tracker(tracker)
        return await contract.register_chicken(caller, chicken_id, breed, "2024-01-01", "QmHen")


async def register_egg(ledger, tracker, caller, egg_id="egg-1", chicken_id="hen-1"):
    async with ledger.transaction() as tx:
        contract = await tx.chicken_egg_tracker(tracker)
        return await contract.register_egg(caller, egg_id, chicken_id, "2024-03-01", "QmEgg")


class TestChickens:
    @pytest.mark.asyncio
    async def test_farm_owner_registers_chicken(self, ledger, tracker, farmer, clock):
        """
        GIVEN a tracker bound to a farm
        WHEN the farm owner registers a chicken
        THEN its info reads back active, stamped with the block time
        """
        await register_chicken(ledger, tracker, farmer)

        async with ledger.view() as tx:
            info = await (await tx.chicken_egg_tracker(tracker)).get_chicken_info("hen-1")
            events = await tx.event_log.query(tracker)

        assert info.as_tuple() == ("hen-1", "Leghorn", "2024-01-01", "QmHen", True, clock.now())
        assert events[-1].event_type == "ChickenRegistered"
        assert events[-1].args == {"chicken_id": "hen-1", "breed": "Leghorn"}

    @pytest.mark.asyncio
    async def test_non_owner_rejected(self, ledger, tracker, outsider):
        with pytest.raises(OnlyFarmOwnerError) as exc_info:
            await register_chicken(ledger, tracker, outsider)

        assert exc_info.value.message == "Only farm owner can call this function"
        async with ledger.view() as tx:
            with pytest.raises(ChickenNotFoundError):
                await (await tx.chicken_egg_tracker(tracker)).get_chicken_info("hen-1")

    @pytest.mark.asyncio
    async def test_duplicate_rejected(self, ledger, tracker, farmer):
        await register_chicken(ledger, tracker, farmer, breed="Leghorn")

        with pytest.raises(ChickenAlreadyRegisteredError):
            await register_chicken(ledger, tracker, farmer, breed="Sussex")

        async with ledger.view() as tx:
            info = await (await tx.chicken_egg_tracker(tracker)).get_chicken_info("hen-1")
        assert info.breed == "Leghorn"

    @pytest.mark.asyncio
    async def test_empty_id_rejected(self, ledger, tracker, farmer):
        """
        GIVEN an empty chicken id
        WHEN the farm owner registers it
        THEN the call fails as malformed input and nothing is stored
        """
        with pytest.raises(ValidationException) as exc_info:
            await register_chicken(ledger, tracker, farmer, chicken_id="")

        assert exc_info.value.error_code == "VALIDATION_ERROR"
        assert exc_info.value.details == {"field": "chicken_id"}
        async with ledger.view() as tx:
            assert await tx.event_log.query(tracker) == []

    @pytest.mark.asyncio
    async def test_update_changes_only_ipfs_hash(self, ledger, tracker, farmer, clock):
        await register_chicken(ledger, tracker, farmer)
        registered_at = clock.now()
        clock.advance(30)

        async with ledger.transaction() as tx:
            await (await tx.chicken_egg_tracker(tracker)).update_chicken_info(farmer, "hen-1", "QmNew")

        async with ledger.view() as tx:
            info = await (await tx.chicken_egg_tracker(tracker)).get_chicken_info("hen-1")
        assert info.as_tuple() == ("hen-1", "Leghorn", "2024-01-01", "QmNew", True, registered_at)

    @pytest.mark.asyncio
    async def test_remove_deactivates(self, ledger, tracker, farmer):
        await register_chicken(ledger, tracker, farmer)

        async with ledger.transaction() as tx:
            await (await tx.chicken_egg_tracker(tracker)).remove_chicken(farmer, "hen-1")

        async with ledger.view() as tx:
            info = await (await tx.chicken_egg_tracker(tracker)).get_chicken_info("hen-1")
        assert info.is_active is False

    @pytest.mark.asyncio
    async def test_update_unknown_chicken(self, ledger, tracker, farmer):
        with pytest.raises(ChickenNotFoundError):
            async with ledger.transaction() as tx:
                contract = await tx.chicken_egg_tracker(tracker)
                await contract.update_chicken_info(farmer, "ghost", "Qm")

    @pytest.mark.asyncio
    async def test_remove_unknown_chicken(self, ledger, tracker, farmer):
        with pytest.raises(ChickenNotFoundError):
            async with ledger.transaction() as tx:
                contract = await tx.chicken_egg_tracker(tracker)
                await contract.remove_chicken(farmer, "ghost")


class TestEggs:
    @pytest.mark.asyncio
    async def test_register_egg(self, ledger, tracker, farmer, clock):
        await register_chicken(ledger, tracker, farmer)

        egg = await register_egg(ledger, tracker, farmer)

        assert egg.as_tuple() == ("egg-1", "hen-1", "2024-03-01", "QmEgg", True, clock.now())

    @pytest.mark.asyncio
    async def test_unregistered_parent_rejected(self, ledger, tracker, farmer):
        """
        GIVEN no chicken "hen-1"
        WHEN an egg is registered for it
        THEN the call reverts with "Chicken not registered"
        """
        with pytest.raises(ChickenNotRegisteredError) as exc_info:
            await register_egg(ledger, tracker, farmer)

        assert exc_info.value.message == "Chicken not registered"
        assert exc_info.value.error_code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_inactive_parent_accepted_by_default(self, ledger, tracker, farmer):
        await register_chicken(ledger, tracker, farmer)
        async with ledger.transaction() as tx:
            await (await tx.chicken_egg_tracker(tracker)).remove_chicken(farmer, "hen-1")

        egg = await register_egg(ledger, tracker, farmer)

        assert egg.chicken_id == "hen-1"

    @pytest.mark.asyncio
    async def test_inactive_parent_rejected_when_required(self, make_ledger, tracker, farmer):
        """
        GIVEN a tracker configured to require active parents
        WHEN an egg is registered for a removed chicken
        THEN the call reverts with "Chicken is not alive"
        """
        strict = make_ledger(tracker_require_active_parent=True)
        await register_chicken(strict, tracker, farmer)
        async with strict.transaction() as tx:
            await (await tx.chicken_egg_tracker(tracker)).remove_chicken(farmer, "hen-1")

        with pytest.raises(ChickenNotAliveError) as exc_info:
            await register_egg(strict, tracker, farmer)

        assert exc_info.value.message == "Chicken is not alive"

    @pytest.mark.asyncio
    async def test_duplicate_egg_rejected(self, ledger, tracker, farmer):
        await register_chicken(ledger, tracker, farmer)
        await register_egg(ledger, tracker, farmer)

        with pytest.raises(EggAlreadyRegisteredError):
            await register_egg(ledger, tracker, farmer)

    @pytest.mark.asyncio
    async def test_non_owner_rejected(self, ledger, tracker, farmer, outsider):
        await register_chicken(ledger, tracker, farmer)

        with pytest.raises(OnlyFarmOwnerError):
            await register_egg(ledger, tracker, outsider)

    @pytest.mark.asyncio
    async def test_update_and_remove_egg(self, ledger, tracker, farmer):
        await register_chicken(ledger, tracker, farmer)
        await register_egg(ledger, tracker, farmer)

        async with ledger.transaction() as tx:
            contract = await tx.chicken_egg_tracker(tracker)
            await contract.update_egg_info(farmer, "egg-1", "QmNew")
            await contract.remove_egg(farmer, "egg-1")

        async with ledger.view() as tx:
            egg = await (await tx.chicken_egg_tracker(tracker)).get_egg_info("egg-1")
            events = await tx.event_log.query(tracker)
        assert (egg.ipfs_hash, egg.is_active) == ("QmNew", False)
        assert [event.event_type for event in events][-2:] == ["EggInfoUpdated", "EggRemoved"]

    @pytest.mark.asyncio
    async def test_unknown_egg(self, ledger, tracker):
        async with ledger.view() as tx:
            with pytest.raises(EggNotFoundError):
                await (await tx.chicken_egg_tracker(tracker)).get_egg_info("ghost")


class TestAuthorization:
    @pytest.mark.asyncio
    async def test_injected_role_table(self, ledger, tracker, outsider):
        """
        GIVEN a tracker bound with a role table listing `outsider`
        WHEN `outsider` registers a chicken
        THEN the call succeeds although it does not own the farm
        """
        async with ledger.transaction() as tx:
            contract = await tx.chicken_egg_tracker(
                tracker, authorization=RoleTableAuthorization([outsider])
            )
            await contract.register_chicken(outsider, "hen-9", "Silkie", "2024-01-01", "Qm9")

        async with ledger.view() as tx:
            info = await (await tx.chicken_egg_tracker(tracker)).get_chicken_info("hen-9")
        assert info.breed == "Silkie"

    @pytest.mark.asyncio
    async def test_unknown_tracker(self, ledger, farm):
        async with ledger.view() as tx:
            with pytest.raises(ContractNotFoundError):
                await tx.chicken_egg_tracker(farm)
