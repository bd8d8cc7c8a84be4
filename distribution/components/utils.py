import re
import time
from datetime import datetime, timezone
from typing import Optional, Union


class Utils:
    @classmethod
    def start_time(
        cls, value: Optional[Union[str, int]] = None, now: Optional[float] = None
    ) -> int:
        """
        Resolves a distribution start time to a Unix timestamp in seconds.
        :param value: "now" (or None), a timestamp, or an ISO-8601 datetime.
        :param now: the current time, defaults to the wall clock.
        :returns: the timestamp truncated to seconds.
        """
        if value is None or (isinstance(value, str) and value.strip().lower() in ("", "now")):
            return int(time.time() if now is None else now)

        if isinstance(value, bool):
            raise ValueError(f"Invalid start time: {value}")

        if isinstance(value, int):
            timestamp = value
        elif isinstance(value, str) and value.strip().isdigit():
            timestamp = int(value.strip())
        elif isinstance(value, str):
            try:
                moment = datetime.fromisoformat(re.sub(r"[zZ]$", "+00:00", value.strip()))
            except ValueError:
                raise ValueError(f"Invalid start time: {value}")

            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=timezone.utc)
            timestamp = int(moment.timestamp())
        else:
            raise ValueError(f"Invalid start time: {value}")

        if timestamp < 0:
            raise ValueError(f"Start time must not be negative: {value}")

        return timestamp

    @classmethod
    def resolve_account(cls, reference: Union[str, int], accounts: list[str]) -> str:
        """
        Resolves a beneficiary reference to an address. Digits are indices in the
        node accounts list, anything else is taken as an address.
        """
        reference = str(reference).strip()

        if reference.isdigit():
            index = int(reference)
            if index >= len(accounts):
                raise ValueError(
                    f"Account index {index} out of range, node exposes {len(accounts)} accounts"
                )
            return accounts[index]

        return reference
