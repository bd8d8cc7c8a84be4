import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .components.config_parser import OrganizationParams, Parameters
from .components.logs import configure_logging
from .components.metrics import SCENARIO_STEPS
from .components.utils import Utils
from .contract import AbiError, Artifact, ContractError, DistributionERC20
from .contract.abi import encode_call, find_function
from .rpc import ProviderError, RPCQueryProvider

configure_logging()
logger = logging.getLogger(__name__)


class StepStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    name: str
    status: StepStatus
    values: list[tuple[str, int]] = field(default_factory=list)
    error: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status.value,
            "values": [{"label": label, "value": str(value)} for label, value in self.values],
            "error": self.error,
        }


@dataclass
class ScenarioReport:
    steps: list[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(step.status is StepStatus.SUCCESS for step in self.steps)

    @property
    def values(self) -> list[tuple[str, int]]:
        return [value for step in self.steps for value in step.values]

    def as_dict(self) -> dict:
        return {"ok": self.ok, "steps": [step.as_dict() for step in self.steps]}


class DistributionScenario:
    """
    Drives a deployed DistributionERC20: registers the organization batches, reads the
    lock values, sets the start time and reads them again. Steps run one after the other,
    the first failing step stops the run.
    """

    STEPS: tuple = (
        "deploy",
        "set_organization",
        "inspect_before_start",
        "set_start_time",
        "inspect_after_start",
    )

    def __init__(
        self,
        params: Parameters,
        provider: RPCQueryProvider,
        artifact: Artifact,
        now: Optional[float] = None,
    ):
        self.params = params
        self.provider = provider
        self.artifact = artifact
        self.now = now

        self.contract: Optional[DistributionERC20] = None
        self.accounts: Optional[list[str]] = None

    async def node_accounts(self) -> list[str]:
        if self.accounts is None:
            self.accounts = await self.provider.accounts()
            logger.debug("Node accounts loaded", {"count": len(self.accounts)})

        return self.accounts

    async def resolve(self, references: list[str]) -> list[str]:
        if not any(str(reference).strip().isdigit() for reference in references):
            return list(references)

        accounts = await self.node_accounts()
        return [Utils.resolve_account(reference, accounts) for reference in references]

    #### STEPS ####
    async def deploy(self) -> list[tuple[str, int]]:
        self.contract = await self.artifact.deployed(
            self.provider,
            address=self.params.contract.address or None,
            contract_cls=DistributionERC20,
            sender=self.params.transaction.sender or None,
            gas=self.params.transaction.gas,
            receipt_timeout=self.params.rpc.receipt_timeout,
            poll_interval=self.params.rpc.poll_interval,
        )
        return []

    async def set_organization(self) -> list[tuple[str, int]]:
        for organization in self.params.organizations:
            accounts = await self.resolve(organization.beneficiaries)
            await self.contract.set_organization(
                organization.type, accounts, organization.amounts_wei
            )
        return []

    async def inspect(self) -> list[tuple[str, int]]:
        values = []

        for account in await self.resolve(self.params.inspection.lock_accounts):
            values.append((f"lockNum({account})", await self.contract.lock_num(account)))

        for account in await self.resolve(self.params.inspection.test_accounts):
            values.append((f"test({account})", await self.contract.test(account)))

        values.append(("testA()", await self.contract.test_a()))

        for label, value in values:
            logger.info("Contract value", {"label": label, "value": str(value)})

        return values

    async def set_start_time(self) -> list[tuple[str, int]]:
        timestamp = Utils.start_time(self.params.start_time, self.now)
        await self.contract.set_start_time(timestamp)
        return [("startTime", timestamp)]

    #### RUN ####
    async def run(self) -> ScenarioReport:
        handlers = {
            "deploy": self.deploy,
            "set_organization": self.set_organization,
            "inspect_before_start": self.inspect,
            "set_start_time": self.set_start_time,
            "inspect_after_start": self.inspect,
        }

        report = ScenarioReport()
        failed = False

        for name in self.STEPS:
            if failed:
                report.steps.append(StepResult(name, StepStatus.SKIPPED))
                SCENARIO_STEPS.labels(name, StepStatus.SKIPPED.value).inc()
                continue

            logger.info("Running step", {"step": name})
            try:
                values = await handlers[name]()
            except (ContractError, ProviderError, ValueError) as err:
                logger.error("Step failed", {"step": name, "error": str(err)})
                report.steps.append(StepResult(name, StepStatus.FAILED, error=str(err)))
                SCENARIO_STEPS.labels(name, StepStatus.FAILED.value).inc()
                failed = True
                continue

            report.steps.append(StepResult(name, StepStatus.SUCCESS, values))
            SCENARIO_STEPS.labels(name, StepStatus.SUCCESS.value).inc()

        logger.info("Scenario finished", {"ok": report.ok})
        return report

    async def plan(self) -> list[tuple[str, str]]:
        """
        Encodes the state-mutating calls of the scenario without sending them.
        :returns: (signature, calldata) pairs in sending order
        """
        abi = DistributionERC20.merged_abi(self.artifact.abi)

        calls = []
        for organization in self.params.organizations:
            calls.append(await self._encode_organization(abi, organization))

        timestamp = Utils.start_time(self.params.start_time, self.now)
        fn = find_function(abi, "setStartTime", 1)
        calls.append(("setStartTime", encode_call(fn, [timestamp])))

        return calls

    async def _encode_organization(self, abi: list[dict], organization: OrganizationParams):
        accounts = await self.resolve(organization.beneficiaries)
        fn = find_function(abi, "setOrganization", 3)

        try:
            return "setOrganization", encode_call(
                fn, [organization.type, accounts, organization.amounts_wei]
            )
        except AbiError as err:
            raise ValueError(f"Invalid organization batch {organization}: {err}")
