from . import config_parser
from .address import Address
from .balance import Balance, parse_ether
from .utils import Utils

__all__ = [
    "Address",
    "Balance",
    "config_parser",
    "parse_ether",
    "Utils",
]
