from pydantic import BaseModel, ConfigDict

from constants.constants import TX_STATUS_SUCCESS


class TransactionReceipt(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    transaction_hash: str
    status: int | None = None
    from_address: str | None = None
    to_address: str | None = None
    block_hash: str | None = None
    block_number: int | None = None
    transaction_index: int | None = None
    gas_used: int | None = None
    cumulative_gas_used: int | None = None
    effective_gas_price: int | None = None
    contract_address: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == TX_STATUS_SUCCESS
