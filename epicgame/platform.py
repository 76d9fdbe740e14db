import asyncio
from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional

from ape import chain, networks
from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts import ContractContainer
from ape.exceptions import ChainError

from epicgame.constants import CONFIRMATION_POLL_INTERVAL
from epicgame.utils import check_etherscan_plugin, get_contract_container, verify_contract


class ConfirmationTimeout(TimeoutError):
    pass


class DeployedContract(NamedTuple):
    """A contract whose deployment the platform has confirmed."""

    address: str
    instance: Any = None
    receipt: Any = None


#
# Platform interface
#


class PendingDeployment(ABC):
    """A submitted deployment that has not been confirmed yet."""

    @abstractmethod
    async def wait_for_confirmation(self) -> DeployedContract:
        raise NotImplementedError


class ContractFactory(ABC):
    @abstractmethod
    async def deploy(self, *args) -> PendingDeployment:
        """Submits a deployment using ``args`` as the positional constructor arguments."""
        raise NotImplementedError


class ContractPlatform(ABC):
    """Builds and deploys contracts on behalf of the deployer."""

    @abstractmethod
    async def get_contract_factory(self, contract_name: str) -> ContractFactory:
        raise NotImplementedError

    async def publish_contract(self, contract: DeployedContract) -> None:
        """Publishes the source of a confirmed contract to the block explorer."""
        raise NotImplementedError


#
# ape
#


class ApePendingDeployment(PendingDeployment):
    """
    Waits for a mined deployment receipt to reach the required number of
    confirmations by polling the chain height.
    """

    def __init__(
        self,
        container: ContractContainer,
        receipt: ReceiptAPI,
        required_confirmations: int,
        timeout: Optional[float] = None,
        poll_interval: float = CONFIRMATION_POLL_INTERVAL,
        chain_manager=chain,
    ):
        self.container = container
        self.receipt = receipt
        self.required_confirmations = required_confirmations
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._chain = chain_manager

    def _get_height(self) -> int:
        return self._chain.blocks.height

    async def _await_confirmations(self) -> None:
        # the block holding the receipt counts as the first confirmation
        target_height = self.receipt.block_number + max(self.required_confirmations - 1, 0)
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout if self.timeout else None
        while True:
            height = await asyncio.to_thread(self._get_height)
            if height >= target_height:
                return
            if deadline is not None and loop.time() >= deadline:
                raise ConfirmationTimeout(
                    f"Deployment {self.receipt.txn_hash} not confirmed after {self.timeout}s "
                    f"(at block {height}, waiting for {target_height})"
                )
            await asyncio.sleep(self.poll_interval)

    async def wait_for_confirmation(self) -> DeployedContract:
        if self.required_confirmations:
            print(f"Waiting for {self.required_confirmations} confirmation(s)...")
        await self._await_confirmations()

        self.receipt.raise_for_status()
        address = self.receipt.contract_address
        if not address:
            raise ChainError(f"'{self.receipt.txn_hash}' did not create a contract.")

        instance = self.container.at(address)
        return DeployedContract(address=instance.address, instance=instance, receipt=self.receipt)


class ApeContractFactory(ContractFactory):
    def __init__(self, container: ContractContainer, platform: "ApePlatform"):
        self.container = container
        self.platform = platform

    def _submit(self, *args) -> ReceiptAPI:
        account = self.platform.get_account()
        # confirmations are awaited separately
        txn = self.container(*args, sender=account.address, required_confirmations=0)
        return account.call(txn)

    async def deploy(self, *args) -> PendingDeployment:
        print(f"\nSubmitting {self.container.contract_type.name} deployment...")
        receipt = await asyncio.to_thread(self._submit, *args)
        print(f"Transaction hash: {receipt.txn_hash}")
        return ApePendingDeployment(
            container=self.container,
            receipt=receipt,
            required_confirmations=self.platform.get_required_confirmations(),
            timeout=self.platform.timeout,
        )


class ApePlatform(ContractPlatform):
    """
    Represents an ape account plus the connected network, deploying
    contracts from the ape project.
    """

    def __init__(
        self,
        account: Optional[AccountAPI] = None,
        autosign: bool = False,
        publish: bool = False,
        timeout: Optional[float] = None,
        required_confirmations: Optional[int] = None,
    ):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
            self._account.set_autosign(autosign)
        if publish:
            check_etherscan_plugin()
        self.publish = publish
        self.timeout = timeout
        self.required_confirmations = required_confirmations

    def get_account(self) -> AccountAPI:
        return self._account

    def get_required_confirmations(self) -> int:
        if self.required_confirmations is not None:
            return self.required_confirmations
        return networks.provider.network.required_confirmations

    async def get_contract_factory(self, contract_name: str) -> ContractFactory:
        container = await asyncio.to_thread(get_contract_container, contract_name)
        return ApeContractFactory(container=container, platform=self)

    async def publish_contract(self, contract: DeployedContract) -> None:
        await asyncio.to_thread(verify_contract, contract.instance)

    def print_deployment_info(self) -> None:
        print(
            f"Account: {self.get_account().address}",
            f"Verify: {self.publish}",
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Network: {networks.provider.network.name}",
            f"Chain ID: {networks.provider.network.chain_id}",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )
