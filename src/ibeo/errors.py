class HeaderError(ValueError):
    """
    a frame header that can't be trusted. the 24 header bytes are dropped and the reader moves on.
    """


class UnknownDataTypeError(HeaderError):
    def __init__(self, code: int):
        super().__init__(f"unknown data type code 0x{code:04x}")
        self.code = code


class TruncatedHeaderError(HeaderError):
    def __init__(self, size: int, expected: int = 24):
        super().__init__(f"frame header needs {expected} bytes, got {size}")
        self.size = size
        self.expected = expected


class InvalidMagicWordError(HeaderError):
    def __init__(self, magic_word: int):
        super().__init__(f"invalid magic word 0x{magic_word:08x}")
        self.magic_word = magic_word


class PayloadError(ValueError):
    """
    a payload whose count fields disagree with its length. the whole frame is dropped.
    """


class TruncatedPayloadError(PayloadError):
    def __init__(self, what: str, needed: int, available: int):
        super().__init__(f"{what} needs {needed} bytes but only {available} remain")
        self.what = what
        self.needed = needed
        self.available = available


class CountMismatchError(PayloadError):
    def __init__(self, declared: int, decoded: int):
        super().__init__(f"payload declares {declared} records but only {decoded} fit")
        self.declared = declared
        self.decoded = decoded


class TransportError(ConnectionError):
    pass


class TransportClosedError(TransportError):
    pass


class TransportIOError(TransportError):
    pass
