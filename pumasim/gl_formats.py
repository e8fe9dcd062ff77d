"""Texture and index-buffer format rules, and bookkeeping of bound texture units."""

from __future__ import annotations

import enum
from typing import Dict, List, Tuple


class TextureType(enum.IntEnum):
    """Texture targets."""

    TEXTURE_2D = 0x0DE1
    TEXTURE_2D_ARRAY = 0x8C1A
    CUBE_MAP = 0x8513


class InternalFormat(enum.IntEnum):
    """Storage formats of texture images.

    N - normalized, U - unsigned, I - integer, F - float.
    """

    DEPTH_24NUI_STENCIL_8NUI = 0x88F0
    DEPTH_32F_STENCIL_8NUI = 0x8CAD
    DEPTH_16NUI = 0x81A5
    DEPTH_24NUI = 0x81A6
    DEPTH_32F = 0x81A7
    RGBA_8NUI = 0x8058
    RGBA_16NUI = 0x805B
    RGBA_8I = 0x8D8E
    RGBA_16I = 0x8D88
    RGBA_32I = 0x8D82
    RGBA_16F = 0x881A
    RGBA_32F = 0x8814
    RGB_8NUI = 0x8051
    RGB_16NUI = 0x8054
    RGB_8I = 0x8D8F
    RGB_16I = 0x8D89
    RGB_32I = 0x8D83
    RGB_16F = 0x881B
    RGB_32F = 0x8815
    SRGB_NUI = 0x8C40
    SRGBA_NUI = 0x8C42
    R_8NUI = 0x8229
    R_8I = 0x8231
    R_16I = 0x8233
    R_32I = 0x8235
    R_16F = 0x822D
    R_32F = 0x822E


class DataFormat(enum.IntEnum):
    """Layout of pixel data handed to a texture."""

    RGB = 0x1907
    RGBA = 0x1908
    RED = 0x1903
    DEPTH_COMPONENT = 0x1902
    DEPTH_STENCIL = 0x84F9


class DataType(enum.IntEnum):
    """Component type of pixel data handed to a texture."""

    UNSIGNED_BYTE = 0x1401
    BYTE = 0x1400
    UNSIGNED_INT = 0x1405
    UNSIGNED_INT_24_8 = 0x84FA
    INT = 0x1404
    FLOAT = 0x1406
    FLOAT_32_UNSIGNED_INT_24_8_REV = 0x8DAD


class DepthCompareFunc(enum.IntEnum):
    """Comparison used when sampling a depth texture; NONE turns comparison off."""

    LESS_OR_EQUAL = 0x0203
    GREATER_OR_EQUAL = 0x0206
    LESS = 0x0201
    GREATER = 0x0204
    EQUAL = 0x0202
    NOT_EQUAL = 0x0205
    ALWAYS = 0x0207
    NEVER = 0x0200
    NONE = 0


class IndexType(enum.IntEnum):
    """Element types of an index buffer."""

    UBYTE = 0x1401
    USHORT = 0x1403
    UINT = 0x1405


_DEPTH_ONLY = frozenset(
    {InternalFormat.DEPTH_16NUI, InternalFormat.DEPTH_24NUI, InternalFormat.DEPTH_32F}
)
_DEPTH_STENCIL = frozenset(
    {InternalFormat.DEPTH_24NUI_STENCIL_8NUI, InternalFormat.DEPTH_32F_STENCIL_8NUI}
)
_PACKED_TYPES = frozenset(
    {DataType.UNSIGNED_INT_24_8, DataType.FLOAT_32_UNSIGNED_INT_24_8_REV}
)
_INDEX_SIZES = {IndexType.UBYTE: 1, IndexType.USHORT: 2, IndexType.UINT: 4}


def _coerce(enum_cls, value, name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(f"invalid {name}: {int(value)}") from None


def is_depth_format(internal_format) -> bool:
    """Whether ``internal_format`` stores depth (with or without stencil)."""
    fmt = _coerce(InternalFormat, internal_format, "internal format")
    return fmt in _DEPTH_ONLY or fmt in _DEPTH_STENCIL


def matching_format_and_type(internal_format) -> Tuple[DataFormat, DataType]:
    """Data format and type suitable for allocating storage of ``internal_format``."""
    fmt = _coerce(InternalFormat, internal_format, "internal format")
    if fmt is InternalFormat.DEPTH_24NUI_STENCIL_8NUI:
        return DataFormat.DEPTH_STENCIL, DataType.UNSIGNED_INT_24_8
    if fmt is InternalFormat.DEPTH_32F_STENCIL_8NUI:
        return DataFormat.DEPTH_STENCIL, DataType.FLOAT_32_UNSIGNED_INT_24_8_REV
    if fmt in _DEPTH_ONLY:
        return DataFormat.DEPTH_COMPONENT, DataType.FLOAT
    return DataFormat.RGBA, DataType.FLOAT


def validate_format_correspondence(internal_format, data_format, data_type) -> bool:
    """Whether pixel data of ``data_format``/``data_type`` may fill ``internal_format``."""
    fmt = _coerce(InternalFormat, internal_format, "internal format")
    data_format = _coerce(DataFormat, data_format, "data format")
    data_type = _coerce(DataType, data_type, "data type")
    if fmt in _DEPTH_STENCIL:
        return data_format is DataFormat.DEPTH_STENCIL and data_type in _PACKED_TYPES
    if fmt in _DEPTH_ONLY:
        return data_format is DataFormat.DEPTH_COMPONENT and data_type not in _PACKED_TYPES
    return (
        data_format not in (DataFormat.DEPTH_COMPONENT, DataFormat.DEPTH_STENCIL)
        and data_type not in _PACKED_TYPES
    )


def index_type_size(index_type) -> int:
    """Size in bytes of one index of ``index_type``."""
    try:
        return _INDEX_SIZES[IndexType(index_type)]
    except ValueError:
        raise ValueError(f"invalid index type: {int(index_type)}") from None


class TextureUnitRegistry:
    """Tracks which texture is bound to each texture unit."""

    def __init__(self) -> None:
        self._units: Dict[int, int] = {}

    @staticmethod
    def _check_unit(unit) -> int:
        unit = int(unit)
        if unit < 0:
            raise ValueError(f"texture unit must not be negative, got {unit}")
        return unit

    def texture_at(self, unit) -> int:
        """Id of the texture bound to ``unit``, or 0 if none is."""
        return self._units.get(self._check_unit(unit), 0)

    def bind(self, texture_id, unit) -> bool:
        """Bind the texture to ``unit``, replacing any other; return whether anything changed."""
        unit = self._check_unit(unit)
        if self._units.get(unit) == texture_id:
            return False
        self._units[unit] = texture_id
        return True

    def unbind(self, texture_id, unit) -> bool:
        """Free ``unit`` if this texture holds it; return whether it did."""
        unit = self._check_unit(unit)
        if self._units.get(unit) != texture_id:
            return False
        del self._units[unit]
        return True

    def unbind_all(self, texture_id) -> List[int]:
        """Free every unit the texture holds and return those units."""
        units = self.bound_units(texture_id)
        for unit in units:
            del self._units[unit]
        return units

    def bound_units(self, texture_id) -> List[int]:
        """Units holding the texture, in ascending order."""
        return sorted(unit for unit, bound in self._units.items() if bound == texture_id)