"""Sender and chat authorization."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Authorizer:
    """Checks identities against the configured maintainer and control group."""
    maintainer_id: int
    control_group_id: int

    def is_maintainer(self, user_id: Optional[int]) -> bool:
        return user_id is not None and user_id == self.maintainer_id

    def is_from_control_group(self, chat_id: Optional[int]) -> bool:
        return chat_id is not None and chat_id == self.control_group_id
