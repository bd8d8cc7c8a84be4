from dataclasses import dataclass

from ..balance import parse_ether
from .base_classes import ExplicitParams


@dataclass(init=False)
class OrganizationParams(ExplicitParams):
    type: int
    beneficiaries: list[str]
    amounts: list[str]

    def post_init(self):
        if not hasattr(self, "beneficiaries") or not hasattr(self, "amounts"):
            return

        if len(self.beneficiaries) != len(self.amounts):
            raise ValueError(
                f"Organization batch has {len(self.beneficiaries)} beneficiaries "
                + f"but {len(self.amounts)} amounts"
            )

        if hasattr(self, "type") and self.type < 0:
            raise ValueError(f"Organization type must not be negative: {self.type}")

        # fail early on amounts that cannot be scaled to wei
        for amount in self.amounts:
            parse_ether(amount)

    @property
    def amounts_wei(self) -> list[int]:
        return [parse_ether(amount) for amount in self.amounts]
