from dataclasses import dataclass
from typing import Any

from .frame_header import FrameHeader, DataType


@dataclass(frozen=True)
class OpaquePayload:
    """
    a payload that was drained from the stream but not interpreted
    """
    data_type: DataType
    length: int

    def to_dict(self) -> dict[str, Any]:
        return {"data_type": self.data_type.name, "length": self.length}


@dataclass(frozen=True)
class Frame:
    header: FrameHeader
    payload: Any
    raw_data: bytes

    @property
    def data_type(self) -> DataType:
        return self.header.data_type

    def is_opaque(self) -> bool:
        return isinstance(self.payload, OpaquePayload)

    def to_dict(self) -> dict[str, Any]:
        return {"header": self.header.to_dict(), "payload": self.payload.to_dict()}
