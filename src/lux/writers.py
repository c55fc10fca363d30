from abc import ABC, abstractmethod
from typing import BinaryIO, Collection, Optional, TextIO

import yaml

from ibeo import Frame, DataType


class FrameWriter(ABC):
    @abstractmethod
    def accept(self, frame: Frame) -> None: ...

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class YamlFrameWriter(FrameWriter):
    """
    one YAML document per frame
    """
    fp: TextIO
    data_types: Optional[Collection[DataType]]
    written: int

    def __init__(self, fp: TextIO, data_types: Optional[Collection[DataType]] = (DataType.OBJECT_DATA,)):
        """
        :param fp: an open text stream
        :param data_types: frame types to write, None for every type
        """
        self.fp = fp
        self.data_types = data_types
        self.written = 0

    def accept(self, frame: Frame) -> None:
        if self.data_types is not None and frame.data_type not in self.data_types:
            return
        yaml.safe_dump(frame.to_dict(), self.fp, explicit_start=True, sort_keys=False)
        self.written += 1

    def close(self) -> None:
        self.fp.flush()


class RawFrameWriter(FrameWriter):
    """
    keeps the exact frame bytes so a capture can be read back with from_stream
    """
    fp: BinaryIO

    def __init__(self, fp: BinaryIO):
        self.fp = fp

    def accept(self, frame: Frame) -> None:
        self.fp.write(frame.raw_data)

    def close(self) -> None:
        self.fp.flush()
