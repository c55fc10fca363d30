from typing import Any, Callable

from .frame import Frame, OpaquePayload
from .frame_header import FrameHeader, DataType
from .typing import ReadableBuffer
from . import logger

PayloadDecoder = Callable[[ReadableBuffer], Any]


class FrameParser:
    registry: dict[DataType, PayloadDecoder]

    def __init__(self):
        self.registry = {}

    def register_type(self, data_type: DataType, decoder: PayloadDecoder):
        self.registry[DataType(data_type)] = decoder

    def parse(self, header: FrameHeader, payload: bytes) -> Frame:
        """
        :raise PayloadError: the registered decoder rejected the payload
        """
        data_type = header.data_type
        raw_data = header.encode() + payload
        if data_type not in self.registry:
            logger.debug(f"Keep the undecoded {data_type.name} payload with length {len(payload)} opaque")
            return Frame(header, OpaquePayload(data_type, len(payload)), raw_data)
        return Frame(header, self.registry[data_type](payload), raw_data)
