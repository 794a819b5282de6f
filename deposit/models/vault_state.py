from typing import Optional

from pydantic import BaseModel, ConfigDict


class VaultState(BaseModel):
    model_config = ConfigDict(frozen=True)

    vault: str
    depositor: str
    asset: str
    balance: int
    allowance: int
    max_deposit: int
    share_balance: Optional[int] = None
