"""Mapping of legacy DDS pixel format blocks to DXGI formats."""

from __future__ import annotations

from .formats import DxgiFormat
from .header import (
    DDS_ALPHA,
    DDS_BUMPDUDV,
    DDS_FOURCC,
    DDS_LUMINANCE,
    DDS_RGB,
    PixelFormat,
    make_fourcc,
)

_F = DxgiFormat

_Masks = tuple[int, int, int, int]

# Keyed by (bit count, (r, g, b, a) masks).  sRGB formats are only expressible
# through the DX10 extension header, so none appear here.
_RGB: dict[tuple[int, _Masks], DxgiFormat] = {
    (32, (0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000)): _F.R8G8B8A8_UNORM,
    (32, (0x00FF0000, 0x0000FF00, 0x000000FF, 0xFF000000)): _F.B8G8R8A8_UNORM,
    (32, (0x00FF0000, 0x0000FF00, 0x000000FF, 0)): _F.B8G8R8X8_UNORM,
    # Many writers swap the red and blue masks for 10:10:10:2 data; the
    # swapped layout is taken to mean R10G10B10A2.
    (32, (0x3FF00000, 0x000FFC00, 0x000003FF, 0xC0000000)): _F.R10G10B10A2_UNORM,
    (32, (0x0000FFFF, 0xFFFF0000, 0, 0)): _F.R16G16_UNORM,
    (32, (0xFFFFFFFF, 0, 0, 0)): _F.R32_FLOAT,
    (16, (0x7C00, 0x03E0, 0x001F, 0x8000)): _F.B5G5R5A1_UNORM,
    (16, (0xF800, 0x07E0, 0x001F, 0)): _F.B5G6R5_UNORM,
    (16, (0x0F00, 0x00F0, 0x000F, 0xF000)): _F.B4G4R4A4_UNORM,
    (16, (0x00FF, 0, 0, 0xFF00)): _F.R8G8_UNORM,
    (16, (0xFFFF, 0, 0, 0)): _F.R16_UNORM,
    (8, (0xFF, 0, 0, 0)): _F.R8_UNORM,
}

_LUMINANCE: dict[tuple[int, _Masks], DxgiFormat] = {
    (16, (0xFFFF, 0, 0, 0)): _F.R16_UNORM,
    (16, (0x00FF, 0, 0, 0xFF00)): _F.R8G8_UNORM,
    (8, (0xFF, 0, 0, 0)): _F.R8_UNORM,
    # Some writers give a bit count of 8 for 8:8 luminance-alpha data.
    (8, (0x00FF, 0, 0, 0xFF00)): _F.R8G8_UNORM,
}

_BUMP_DUDV: dict[tuple[int, _Masks], DxgiFormat] = {
    (32, (0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000)): _F.R8G8B8A8_SNORM,
    (32, (0x0000FFFF, 0xFFFF0000, 0, 0)): _F.R16G16_SNORM,
    (16, (0x00FF, 0xFF00, 0, 0)): _F.R8G8_SNORM,
}

_FOURCC: dict[int, DxgiFormat] = {
    make_fourcc("DXT1"): _F.BC1_UNORM,
    make_fourcc("DXT3"): _F.BC2_UNORM,
    make_fourcc("DXT5"): _F.BC3_UNORM,
    # Pre-multiplied alpha variants share the block layout of BC2 and BC3.
    make_fourcc("DXT2"): _F.BC2_UNORM,
    make_fourcc("DXT4"): _F.BC3_UNORM,
    make_fourcc("ATI1"): _F.BC4_UNORM,
    make_fourcc("BC4U"): _F.BC4_UNORM,
    make_fourcc("BC4S"): _F.BC4_SNORM,
    make_fourcc("ATI2"): _F.BC5_UNORM,
    make_fourcc("BC5U"): _F.BC5_UNORM,
    make_fourcc("BC5S"): _F.BC5_SNORM,
    make_fourcc("RGBG"): _F.R8G8_B8G8_UNORM,
    make_fourcc("GRGB"): _F.G8R8_G8B8_UNORM,
    make_fourcc("YUY2"): _F.YUY2,
    # Direct3D 9 format enumerators stored directly in the fourcc field.
    36: _F.R16G16B16A16_UNORM,
    110: _F.R16G16B16A16_SNORM,
    111: _F.R16_FLOAT,
    112: _F.R16G16_FLOAT,
    113: _F.R16G16B16A16_FLOAT,
    114: _F.R32_FLOAT,
    115: _F.R32G32_FLOAT,
    116: _F.R32G32B32A32_FLOAT,
}


def _masks(pf: PixelFormat) -> _Masks:
    return (pf.r_mask, pf.g_mask, pf.b_mask, pf.a_mask)


def format_from_pixel_format(pf: PixelFormat) -> DxgiFormat:
    """Return the DXGI format a legacy pixel format block describes, or UNKNOWN."""
    key = (pf.rgb_bit_count, _masks(pf))
    if pf.flags & DDS_RGB:
        return _RGB.get(key, _F.UNKNOWN)
    if pf.flags & DDS_LUMINANCE:
        return _LUMINANCE.get(key, _F.UNKNOWN)
    if pf.flags & DDS_ALPHA:
        return _F.A8_UNORM if pf.rgb_bit_count == 8 else _F.UNKNOWN
    if pf.flags & DDS_BUMPDUDV:
        return _BUMP_DUDV.get(key, _F.UNKNOWN)
    if pf.flags & DDS_FOURCC:
        return _FOURCC.get(pf.fourcc, _F.UNKNOWN)
    return _F.UNKNOWN