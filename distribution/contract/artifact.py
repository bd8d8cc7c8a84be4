import json
import logging
from pathlib import Path
from typing import Optional, Type

from ..components.logs import configure_logging
from ..rpc import RPCQueryProvider
from .contract import Contract
from .errors import ArtifactError, NotDeployedError

EMPTY_CODE: tuple = (None, "", "0x", "0x0")

configure_logging()
logger = logging.getLogger(__name__)


class Artifact:
    """
    Truffle build artifact: the contract ABI and its deployment address per network.
    """

    def __init__(self, name: str, abi: list[dict], networks: Optional[dict] = None):
        self.name = name
        self.abi = abi
        self.networks = networks or {}

    @classmethod
    def load(cls, path: str, name: Optional[str] = None) -> "Artifact":
        try:
            with open(Path(path), "r") as file:
                data = json.load(file)
        except FileNotFoundError:
            raise ArtifactError(f"Artifact not found: {path}, compile and migrate the contracts")
        except json.JSONDecodeError as err:
            raise ArtifactError(f"Artifact {path} is not valid JSON: {err}")

        if not isinstance(data, dict) or not isinstance(data.get("abi"), list):
            raise ArtifactError(f"Artifact {path} has no ABI")

        artifact_name = data.get("contractName") or name or Path(path).stem
        if name and artifact_name != name:
            logger.warning(
                "Artifact name differs from the configured contract",
                {"artifact": artifact_name, "configured": name},
            )

        return cls(artifact_name, data["abi"], data.get("networks"))

    def address_for(self, network_id: str) -> Optional[str]:
        network = self.networks.get(str(network_id)) or {}
        return network.get("address")

    async def deployed(
        self,
        provider: RPCQueryProvider,
        address: Optional[str] = None,
        contract_cls: Type[Contract] = Contract,
        **kwargs,
    ) -> Contract:
        """
        Gets a handle on the deployed instance of the contract.
        :param provider: the RPC provider of the network
        :param address: overrides the address recorded in the artifact
        :param contract_cls: the handle class to instantiate
        :returns: the contract handle
        """
        if not address:
            network_id = await provider.net_version()
            address = self.address_for(network_id)

            if not address:
                raise NotDeployedError(
                    f"{self.name} has not been deployed to detected network ({network_id})"
                )

        code = await provider.get_code(address)
        if code in EMPTY_CODE:
            raise NotDeployedError(f"No contract code at {address} for {self.name}")

        contract = contract_cls(provider, address, self.abi, **kwargs)
        logger.info("Contract instance acquired", {"contract": self.name, "address": address})

        return contract

    def __repr__(self):
        return f"Artifact({self.name}, networks={list(self.networks)})"
