from eth_utils import is_address, is_checksum_address, remove_0x_prefix, to_checksum_address


class Address:
    """
    Class that represents an account or contract address.
    """

    def __init__(self, native: str):
        """
        Create a new Address from a hex encoded address.
        :param native: The address, checksummed or not.
        """
        self.native: str = native

    @property
    def native(self) -> str:
        return self._native

    @native.setter
    def native(self, value: str):
        if not isinstance(value, str) or not is_address(value):
            raise ValueError(f"Invalid address: {value}")

        # mixed case means EIP-55, which must then be correct
        digits = remove_0x_prefix(value)
        mixed_case = digits not in (digits.lower(), digits.upper())
        if mixed_case and not is_checksum_address("0x" + digits):
            raise ValueError(f"Invalid address checksum: {value}")

        self._native = to_checksum_address(value)

    @property
    def lower(self) -> str:
        return self._native.lower()

    def __eq__(self, other):
        if isinstance(other, str):
            return self.lower == other.lower()
        if not isinstance(other, Address):
            return False

        return self.lower == other.lower

    def __hash__(self):
        return hash(self.lower)

    def __str__(self):
        return self.native

    def __repr__(self):
        return f"Address({self.native})"
