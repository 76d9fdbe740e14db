from pathlib import Path

import epicgame

#
# Filesystem
#

EPICGAME_DIR = Path(epicgame.__file__).parent
CONSTRUCTOR_PARAMS_DIR = EPICGAME_DIR / "constructor_params"
DEFAULT_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "my_epic_game.yml"

#
# Contracts
#

GAME_CONTRACT_NAME = "MyEpicGame"

#
# Networks
#

LOCAL_NETWORKS = ["local"]

# How often the chain height is checked while waiting for confirmations.
CONFIRMATION_POLL_INTERVAL = 1  # seconds

#
# Process exit codes
#

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

DEPLOYED_MESSAGE = "Contract deployed to: {address}"
