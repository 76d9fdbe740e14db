from typing import Any, Dict


def _confirm_resolution(resolved_params: Dict[str, Any], contract_name: str) -> None:
    """Asks the user to confirm the constructor parameters of the contract to deploy."""
    print(f"\nConstructor parameters for {contract_name}")
    for name, resolved_value in resolved_params.items():
        print(f"\t{name}={resolved_value}")
    answer = input(f"Deploy {contract_name} Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        exit(-1)
