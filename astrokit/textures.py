"""Texture enumerations and the OpenGL format rules that follow from them."""

from __future__ import annotations

from enum import IntEnum
from typing import Union

# OpenGL enumerants used for sized internal formats and pixel transfer formats.
_GL_RGBA = 0x1908
_GL_RED = 0x1903
_GL_DEPTH_COMPONENT = 0x1902
_GL_RGBA_INTEGER = 0x8D99
_GL_RED_INTEGER = 0x8D94

_GL_RGBA4 = 0x8056
_GL_RGBA8 = 0x8058
_GL_RGBA16 = 0x805B
_GL_RGBA16F = 0x881A
_GL_RGBA32F = 0x8814
_GL_RGBA8UI = 0x8D7C
_GL_RGBA16UI = 0x8D76
_GL_RGBA32UI = 0x8D70
_GL_RGBA8I = 0x8D8E
_GL_RGBA16I = 0x8D88
_GL_RGBA32I = 0x8D82

_GL_DEPTH_COMPONENT16 = 0x81A5
_GL_DEPTH_COMPONENT32 = 0x81A7
_GL_DEPTH_COMPONENT32F = 0x8CAC

_GL_R8 = 0x8229
_GL_R16 = 0x822A
_GL_R16F = 0x822D
_GL_R32F = 0x822E
_GL_R8I = 0x8231
_GL_R8UI = 0x8232
_GL_R16I = 0x8233
_GL_R16UI = 0x8234
_GL_R32I = 0x8235
_GL_R32UI = 0x8236


class TextureDataType(IntEnum):
    """Component data type of texel storage."""

    UINT = 0x1405
    FLOAT = 0x1406
    UBYTE = 0x1401
    INT = 0x1404


class TextureType(IntEnum):
    """Texture target."""

    TEXTURE_2D = 0x0DE1
    CUBEMAP = 0x8513


class TextureUse(IntEnum):
    """What a texture holds; valued by its base pixel format."""

    COLOR = _GL_RGBA
    DEPTH = _GL_DEPTH_COMPONENT
    GRAYSCALE = _GL_RED


class TextureBitSize(IntEnum):
    """Requested bits per component."""

    BIT4 = 0
    BIT8 = 1
    BIT16 = 2
    BIT32 = 3


class TextureWrapType(IntEnum):
    CLAMP = 0x812F
    REPEAT = 0x2901
    MIRRORED_REPEAT = 0x8370
    MIRRORED_CLAMP = 0x8743


class TextureMagFilterType(IntEnum):
    NEAREST = 0x2600
    LINEAR = 0x2601


class TextureMinFilterType(IntEnum):
    NEAREST = 0x2600
    LINEAR = 0x2601
    NEAREST_MIP_NEAREST = 0x2700
    LINEAR_MIP_LINEAR = 0x2703
    NEAREST_MIP_LINEAR = 0x2702
    LINEAR_MIP_NEAREST = 0x2701


class CubemapSide(IntEnum):
    """Cubemap face, as an offset from the positive-X face target."""

    FRONT = 0
    BACK = 1
    TOP = 2
    BOTTOM = 3
    RIGHT = 4
    LEFT = 5


_B = TextureBitSize
_D = TextureDataType

_INTERNAL: dict[tuple[TextureUse, TextureDataType], dict[TextureBitSize, int]] = {
    (TextureUse.COLOR, _D.UINT): {
        _B.BIT4: _GL_RGBA8UI, _B.BIT8: _GL_RGBA8UI,
        _B.BIT16: _GL_RGBA16UI, _B.BIT32: _GL_RGBA32UI,
    },
    (TextureUse.COLOR, _D.FLOAT): {
        _B.BIT4: _GL_RGBA16F, _B.BIT8: _GL_RGBA16F,
        _B.BIT16: _GL_RGBA16F, _B.BIT32: _GL_RGBA32F,
    },
    (TextureUse.COLOR, _D.UBYTE): {
        _B.BIT4: _GL_RGBA4, _B.BIT8: _GL_RGBA8,
        _B.BIT16: _GL_RGBA16, _B.BIT32: _GL_RGBA,
    },
    (TextureUse.COLOR, _D.INT): {
        _B.BIT4: _GL_RGBA8I, _B.BIT8: _GL_RGBA8I,
        _B.BIT16: _GL_RGBA16I, _B.BIT32: _GL_RGBA32I,
    },
    (TextureUse.DEPTH, _D.FLOAT): dict.fromkeys(_B, _GL_DEPTH_COMPONENT32F),
    (TextureUse.DEPTH, _D.UBYTE): {
        _B.BIT4: _GL_DEPTH_COMPONENT16, _B.BIT8: _GL_DEPTH_COMPONENT16,
        _B.BIT16: _GL_DEPTH_COMPONENT16, _B.BIT32: _GL_DEPTH_COMPONENT32,
    },
    (TextureUse.DEPTH, _D.UINT): dict.fromkeys(_B, _GL_DEPTH_COMPONENT),
    (TextureUse.DEPTH, _D.INT): dict.fromkeys(_B, _GL_DEPTH_COMPONENT),
    (TextureUse.GRAYSCALE, _D.UINT): {
        _B.BIT4: _GL_R8UI, _B.BIT8: _GL_R8UI,
        _B.BIT16: _GL_R16UI, _B.BIT32: _GL_R32UI,
    },
    (TextureUse.GRAYSCALE, _D.FLOAT): {
        _B.BIT4: _GL_R16F, _B.BIT8: _GL_R16F,
        _B.BIT16: _GL_R16F, _B.BIT32: _GL_R32F,
    },
    (TextureUse.GRAYSCALE, _D.UBYTE): {
        _B.BIT4: _GL_R8, _B.BIT8: _GL_R8,
        _B.BIT16: _GL_R16, _B.BIT32: _GL_RED,
    },
    (TextureUse.GRAYSCALE, _D.INT): {
        _B.BIT4: _GL_R8I, _B.BIT8: _GL_R8I,
        _B.BIT16: _GL_R16I, _B.BIT32: _GL_R32I,
    },
}

_INTEGER_TYPES = frozenset({TextureDataType.UINT, TextureDataType.INT})


def internal_format(
    use: Union[TextureUse, int],
    data_type: Union[TextureDataType, int],
    bit_size: Union[TextureBitSize, int] = TextureBitSize.BIT32,
) -> int:
    """Sized internal format for a texture; raises ValueError for unknown inputs."""
    use = TextureUse(use)
    data_type = TextureDataType(data_type)
    bit_size = TextureBitSize(bit_size)
    return _INTERNAL[use, data_type][bit_size]


def pixel_format(use: Union[TextureUse, int], data_type: Union[TextureDataType, int]) -> int:
    """Pixel transfer format for a texture; raises ValueError for unknown inputs."""
    use = TextureUse(use)
    data_type = TextureDataType(data_type)
    integer = data_type in _INTEGER_TYPES
    if use is TextureUse.COLOR:
        return _GL_RGBA_INTEGER if integer else _GL_RGBA
    if use is TextureUse.GRAYSCALE:
        return _GL_RED_INTEGER if integer else _GL_RED
    return _GL_DEPTH_COMPONENT


def channel_count(use: Union[TextureUse, int]) -> int:
    """Number of colour channels a texture of this use stores."""
    return 1 if TextureUse(use) is TextureUse.GRAYSCALE else 4