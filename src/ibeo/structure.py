from typing import Any


class StructureMixin:
    """
    shared behaviour of the wire structures. must be listed before the ctypes base class.
    """
    _fields_: list

    def to_dict(self) -> dict[str, Any]:
        result = {}
        # noinspection PyProtectedMember
        for field_name, *_ in self._fields_:
            value = getattr(self, field_name)
            if isinstance(value, StructureMixin):
                value = value.to_dict()
            result[field_name] = value
        return result

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return bytes(self) == bytes(other)

    def __hash__(self):
        return hash((type(self), bytes(self)))

    def __repr__(self):
        show = {name: getattr(self, name) for name, *_ in self._fields_}
        return f'<{type(self).__name__} {show}>'
