from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class EstimateFeeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str
    body: str
    ignore_chksig: bool = Field(True, alias='ignoreChksig')
    init_code: str = Field('', alias='initCode')
    init_data: str = Field('', alias='initData')


class SourceFees(BaseModel):
    in_fwd_fee: int
    storage_fee: int
    gas_fee: int
    fwd_fee: int

    @property
    def total(self) -> int:
        return self.in_fwd_fee + self.storage_fee + self.gas_fee + self.fwd_fee


class EstimateFeeResult(BaseModel):
    source_fees: SourceFees


class EstimateFeeResponse(BaseModel):
    ok: bool
    result: Optional[EstimateFeeResult] = None
    error: Optional[str] = None
