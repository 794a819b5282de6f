from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionDescriptor(BaseModel):
    """Unsent deposit transaction. Deposits never carry native currency, so `value` is always 0."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    to: str
    from_address: str = Field(alias="from")
    data: str
    value: int = 0
    gas_limit: int = Field(alias="gas", gt=0)

    @field_validator("value")
    @classmethod
    def _check_no_native_value(cls, value: int) -> int:
        if value != 0:
            raise ValueError(f"deposit transactions carry no native value, got {value}")
        return value

    def to_tx_params(self) -> Dict[str, Any]:
        return {
            "to": self.to,
            "from": self.from_address,
            "data": self.data,
            "value": self.value,
            "gas": self.gas_limit,
        }
