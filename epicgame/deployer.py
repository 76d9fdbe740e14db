import asyncio
import sys
from enum import Enum
from typing import NamedTuple, Optional

from epicgame.constants import DEPLOYED_MESSAGE, EXIT_FAILURE, EXIT_SUCCESS
from epicgame.platform import ContractPlatform, DeployedContract, PendingDeployment
from epicgame.roster import GameConfig


class DeploymentError(Exception):
    """Wraps an error raised by the contract platform."""

    def __init__(self, error: Exception):
        super().__init__(str(error))
        self.error = error


class SubmissionFailed(DeploymentError):
    pass


class ConfirmationFailed(DeploymentError):
    pass


class DeploymentStatus(Enum):
    CONFIRMED = "confirmed"
    SUBMISSION_FAILED = "submission failed"
    CONFIRMATION_FAILED = "confirmation failed"


class DeploymentResult(NamedTuple):
    status: DeploymentStatus
    contract: Optional[DeployedContract] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == DeploymentStatus.CONFIRMED


async def submit(
    platform: ContractPlatform, config: GameConfig, contract_name: Optional[str] = None
) -> PendingDeployment:
    """Resolves the contract factory and submits the deployment."""
    contract_name = contract_name or config.contract_name
    try:
        factory = await platform.get_contract_factory(contract_name)
        return await factory.deploy(*config.constructor_args())
    except Exception as e:
        raise SubmissionFailed(e) from e


async def confirm(pending: PendingDeployment) -> DeployedContract:
    try:
        return await pending.wait_for_confirmation()
    except Exception as e:
        raise ConfirmationFailed(e) from e


async def deploy(
    platform: ContractPlatform, config: GameConfig, contract_name: Optional[str] = None
) -> DeploymentResult:
    """
    Deploys the game contract in a single attempt.
    Platform errors are reported in the result, never raised.
    """
    try:
        pending = await submit(platform, config, contract_name)
    except SubmissionFailed as e:
        return DeploymentResult(status=DeploymentStatus.SUBMISSION_FAILED, error=e.error)

    try:
        contract = await confirm(pending)
    except ConfirmationFailed as e:
        return DeploymentResult(status=DeploymentStatus.CONFIRMATION_FAILED, error=e.error)

    return DeploymentResult(status=DeploymentStatus.CONFIRMED, contract=contract)


def report(result: DeploymentResult) -> int:
    """Prints the outcome of a deployment and returns the process exit code."""
    if result.ok:
        print(DEPLOYED_MESSAGE.format(address=result.contract.address))
        return EXIT_SUCCESS
    print(repr(result.error))
    return EXIT_FAILURE


async def publish(platform: ContractPlatform, contract: DeployedContract) -> bool:
    """
    Publishes a confirmed contract to the block explorer. A failure is printed
    and leaves the deployment itself untouched.
    """
    try:
        await platform.publish_contract(contract)
    except Exception as e:
        print(f"(!) Verification of {contract.address} failed: {e!r}")
        return False
    return True


async def run(
    platform: ContractPlatform, config: GameConfig, contract_name: Optional[str] = None
) -> int:
    result = await deploy(platform, config, contract_name)
    return report(result)


def main(
    platform: ContractPlatform,
    config: Optional[GameConfig] = None,
    contract_name: Optional[str] = None,
) -> None:
    config = config or GameConfig.default()
    exit_code = asyncio.run(run(platform, config, contract_name))
    sys.exit(exit_code)
