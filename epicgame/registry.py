import json
from collections import defaultdict
from pathlib import Path
from typing import List, NamedTuple

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from eth_typing import ABI

from epicgame.platform import DeployedContract
from epicgame.utils import _load_json

ChainId = int
ContractName = str


STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}


class RegistryEntry(NamedTuple):
    """Represents a single deployed contract in a registry file."""

    chain_id: ChainId
    name: ContractName
    address: ChecksumAddress
    abi: ABI
    tx_hash: str
    block_number: int
    deployer: str


def _get_abi(deployment: DeployedContract) -> ABI:
    contract_abi = list()
    for entry in deployment.instance.contract_type.abi:
        contract_abi.append(entry.model_dump(by_alias=True, mode="json"))
    return contract_abi


def _get_entry(deployment: DeployedContract, chain_id: ChainId) -> RegistryEntry:
    receipt = deployment.receipt
    entry = RegistryEntry(
        chain_id=chain_id,
        name=deployment.instance.contract_type.name,
        address=to_checksum_address(deployment.address),
        abi=_get_abi(deployment),
        tx_hash=receipt.txn_hash,
        block_number=receipt.block_number,
        deployer=receipt.transaction.sender,
    )
    return entry


def read_registry(filepath: Path) -> List[RegistryEntry]:
    data = _load_json(filepath)
    registry_entries = list()
    for chain_id, entries in data.items():
        for contract_name, artifacts in entries.items():
            registry_entry = RegistryEntry(
                chain_id=int(chain_id),
                name=contract_name,
                address=artifacts["address"],
                abi=artifacts["abi"],
                tx_hash=artifacts["tx_hash"],
                block_number=artifacts["block_number"],
                deployer=artifacts["deployer"],
            )
            registry_entries.append(registry_entry)
    return registry_entries


def write_registry(entries: List[RegistryEntry], filepath: Path, silent: bool = False) -> Path:
    """
    Writes a contract registry to a file, merging it into an existing registry.
    Chains already present in the existing file are never overwritten; the
    registry is written next to it as ``*.unmerged.json`` instead.
    """

    if not entries:
        print("No entries provided.")
        return filepath

    entries = sorted(entries, key=lambda entry: (str(entry.chain_id), entry.name))

    data = defaultdict(dict)
    for entry in entries:
        entry_abi = list(entry.abi)
        entry_abi.sort(key=lambda d: (d["type"], d.get("name", "")))

        data[str(entry.chain_id)][entry.name] = {
            "address": entry.address,
            "abi": entry_abi,
            "tx_hash": entry.tx_hash,
            "block_number": int(entry.block_number),
            "deployer": entry.deployer,
        }

    filepath.parent.mkdir(parents=True, exist_ok=True)

    if filepath.exists():
        if not silent:
            print(f"Updating existing registry at {filepath}.")
        existing_data = _load_json(filepath)

        if any(chain_id in existing_data for chain_id in data):
            filepath = filepath.with_suffix(".unmerged.json")
            if not silent:
                print(
                    "Cannot merge registries with overlapping chain IDs.\n"
                    f"Writing to {filepath} to avoid overwriting existing data."
                )
        else:
            existing_data.update(data)
            data = existing_data
    elif not silent:
        print(f"Creating new registry at {filepath}.")

    with open(filepath, "w") as file:
        json.dump(data, file, **STANDARD_REGISTRY_JSON_FORMAT)

    return filepath


def registry_from_deployment(
    deployment: DeployedContract, chain_id: ChainId, output_filepath: Path
) -> Path:
    """Records a confirmed deployment in a registry file."""
    entry = _get_entry(deployment=deployment, chain_id=chain_id)
    output_filepath = write_registry(entries=[entry], filepath=output_filepath)
    print(f"(i) Registry written to {output_filepath}!")
    return output_filepath
