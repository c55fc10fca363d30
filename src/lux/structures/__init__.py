from typing import Iterable, Optional

from ibeo import FrameParser, DataType
from ibeo.frame_parser import PayloadDecoder
from .geometry import Point2D, Size2D
from .scan_data import ScanDataHeader, ScanPoint, ScanData, decode_scan
from .object_data import ObjectDataHeader, ObjectInfoHeader, ObjectInfo, ObjectData, decode_objects

DECODERS: dict[DataType, PayloadDecoder] = {
    DataType.SCAN_DATA: decode_scan,
    DataType.OBJECT_DATA: decode_objects,
}

__all__ = [
    'Point2D', 'Size2D', 'ScanDataHeader', 'ScanPoint', 'ScanData', 'decode_scan',
    'ObjectDataHeader', 'ObjectInfoHeader', 'ObjectInfo', 'ObjectData', 'decode_objects',
    'DECODERS', 'get_parser'
]


def get_parser(data_types: Optional[Iterable[DataType]] = None) -> FrameParser:
    """
    a parser that decodes the given data types, scan and object data by default.
    every other type is drained and kept opaque.
    """
    if data_types is None:
        data_types = DECODERS.keys()
    parser = FrameParser()
    for data_type in data_types:
        if data_type not in DECODERS:
            raise ValueError(f"no decoder for {DataType(data_type).name}")
        parser.register_type(data_type, DECODERS[data_type])
    return parser
