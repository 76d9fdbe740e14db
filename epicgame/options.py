from pathlib import Path

import click

from epicgame.constants import DEFAULT_PARAMS_FILEPATH
from epicgame.types import MinInt

params_filepath_option = click.option(
    "--params-filepath",
    "-p",
    help="YAML file with the roster and boss to deploy the game with.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    default=DEFAULT_PARAMS_FILEPATH,
    show_default=True,
)

contract_name_option = click.option(
    "--contract-name",
    "-c",
    help="Name of the game contract; defaults to the one named in the params file.",
    type=click.STRING,
    required=False,
)

registry_filepath_option = click.option(
    "--registry-filepath",
    "-r",
    help="Registry file to record the deployment in.",
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
)

timeout_option = click.option(
    "--timeout",
    "-t",
    help="Seconds to wait for the deployment to be confirmed.",
    type=MinInt(1),
    required=False,
)

auto_option = click.option(
    "--auto",
    help="Automatically sign transactions.",
    is_flag=True,
)

verify_option = click.option(
    "--verify",
    help="Publish the contract source to the block explorer.",
    is_flag=True,
)
