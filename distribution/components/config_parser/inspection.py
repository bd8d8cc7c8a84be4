from dataclasses import dataclass

from .base_classes import ExplicitParams


@dataclass(init=False)
class InspectionParams(ExplicitParams):
    lock_accounts: list[str]
    test_accounts: list[str]
