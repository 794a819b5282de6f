from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from deposit.services.transaction_submitter import TransactionSubmitter


class DepositRequest(BaseModel):
    """
    A request to deposit `amount` (asset base units) into `vault` on behalf of `depositor`.

    `amount` is kept exactly as supplied; DepositPlanner validates it so that
    non-integer input is reported as InvalidAmountError.
    With a `submitter` the planner executes the deposit, without one it only quotes it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    depositor: str
    vault: str
    amount: Any
    submitter: Optional[TransactionSubmitter] = None
