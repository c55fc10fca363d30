import array
import mmap
from typing import Union, Callable

ReadOnlyBuffer = bytes
WriteableBuffer = Union[bytearray, memoryview, array.array, mmap.mmap]
ReadableBuffer = Union[ReadOnlyBuffer, WriteableBuffer]

ErrorHandler = Callable[[Exception], None]
