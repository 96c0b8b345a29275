# app/schemas/entry_data.py

from pydantic import BaseModel, Field
from typing import Any, Dict, Literal, Optional, Union

# Payload `data` de cada tipo de registro. A variante é escolhida pelo `type`
# do registro e serializada no dicionário plano gravado no banco.


class AttendanceData(BaseModel):
    status: Literal["check_in", "check_out"]


class SleepData(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None


class ToiletData(BaseModel):
    toilet_time: str = Field(alias="toiletTime")
    toilet_kind: Literal["urine", "bm"] = Field(alias="toiletKind")

    class Config:
        populate_by_name = True


class TextData(BaseModel):
    text: str


class EmptyData(BaseModel):
    pass


EntryData = Union[AttendanceData, SleepData, ToiletData, TextData, EmptyData]


def to_storage(data: EntryData) -> Dict[str, Any]:
    return data.model_dump(by_alias=True, exclude_none=True)
