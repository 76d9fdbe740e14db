#!/usr/bin/python3

import asyncio
import sys

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, account_option, network_option

from epicgame.confirm import _confirm_resolution
from epicgame.deployer import deploy, publish, report
from epicgame.options import (
    auto_option,
    contract_name_option,
    params_filepath_option,
    registry_filepath_option,
    timeout_option,
    verify_option,
)
from epicgame.platform import ApePlatform
from epicgame.registry import registry_from_deployment
from epicgame.roster import GameConfig, GameConfigError


@click.command(cls=ConnectedProviderCommand, name="deploy-my-epic-game")
@network_option(required=True)
@account_option()
@params_filepath_option
@contract_name_option
@registry_filepath_option
@timeout_option
@auto_option
@verify_option
def cli(network, account, params_filepath, contract_name, registry_filepath, timeout, auto, verify):
    """Deploy the game contract with its roster and boss."""
    try:
        config = GameConfig.from_yaml(params_filepath)
    except GameConfigError as e:
        raise click.BadParameter(str(e), param_hint="--params-filepath")
    contract_name = contract_name or config.contract_name

    click.echo(f"Connected to {network.name} network.")
    platform = ApePlatform(account=account, autosign=auto, publish=verify, timeout=timeout)
    platform.print_deployment_info()
    if not auto:
        _confirm_resolution(config.constructor_params(), contract_name)

    result = asyncio.run(deploy(platform, config, contract_name))
    exit_code = report(result)
    if result.ok and registry_filepath:
        registry_from_deployment(
            deployment=result.contract,
            chain_id=networks.active_provider.chain_id,
            output_filepath=registry_filepath,
        )
    if result.ok and verify:
        asyncio.run(publish(platform, result.contract))
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
