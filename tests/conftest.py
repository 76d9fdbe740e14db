import asyncio

import pytest

from epicgame.platform import (
    ContractFactory,
    ContractPlatform,
    DeployedContract,
    PendingDeployment,
)
from epicgame.roster import BossRecord, GameConfig, RosterEntry

DEPLOYED_ADDRESS = "0xABC123"


# In-memory contract platform
class FakePendingDeployment(PendingDeployment):
    def __init__(self, address=DEPLOYED_ADDRESS, confirmation_error=None, hang=False):
        self.address = address
        self.confirmation_error = confirmation_error
        self.hang = hang
        self.confirmed = False

    async def wait_for_confirmation(self):
        if self.hang:
            await asyncio.Event().wait()
        if self.confirmation_error:
            raise self.confirmation_error
        self.confirmed = True
        return DeployedContract(address=self.address)


class FakeContractFactory(ContractFactory):
    def __init__(self, platform):
        self.platform = platform

    async def deploy(self, *args):
        self.platform.deploy_calls.append(args)
        if self.platform.deploy_error:
            raise self.platform.deploy_error
        pending = FakePendingDeployment(
            address=self.platform.address,
            confirmation_error=self.platform.confirmation_error,
            hang=self.platform.hang,
        )
        self.platform.pending.append(pending)
        return pending


class FakePlatform(ContractPlatform):
    def __init__(
        self,
        address=DEPLOYED_ADDRESS,
        factory_error=None,
        deploy_error=None,
        confirmation_error=None,
        hang=False,
        publish_error=None,
    ):
        self.address = address
        self.factory_error = factory_error
        self.deploy_error = deploy_error
        self.confirmation_error = confirmation_error
        self.hang = hang
        self.publish_error = publish_error
        self.requested_contracts = []
        self.deploy_calls = []
        self.pending = []
        self.published = []

    async def get_contract_factory(self, contract_name):
        self.requested_contracts.append(contract_name)
        if self.factory_error:
            raise self.factory_error
        return FakeContractFactory(self)

    async def publish_contract(self, contract):
        if self.publish_error:
            raise self.publish_error
        self.published.append(contract)

    def print_deployment_info(self):
        print("Account: fake")


# Fixtures
@pytest.fixture
def game_config():
    return GameConfig.default()


@pytest.fixture
def small_config():
    roster = [
        RosterEntry(name="Hexagon", image_uri="https://example.com/hexagon.png", hp=50, attack=5),
        RosterEntry(name="Star", image_uri="https://example.com/star.png", hp=70, attack=15),
    ]
    boss = BossRecord(name="Blob", image_uri="https://example.com/blob.png", hp=500, attack=40)
    return GameConfig(roster=roster, boss=boss, contract_name="TinyGame")


@pytest.fixture
def platform():
    return FakePlatform()
