from pydantic import BaseModel, ConfigDict

from deposit.models.receipt import TransactionReceipt


class ExecutionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    transaction_hash: str
    receipt: TransactionReceipt
