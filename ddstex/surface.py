"""Byte layout of a single texture surface for a given DXGI format."""

from __future__ import annotations

from dataclasses import dataclass

from .formats import DxgiFormat, InvalidDataError, NotSupportedError, bits_per_pixel

_F = DxgiFormat

# Block-compressed formats and the bytes per 4x4 block.
_BLOCK_BYTES: dict[DxgiFormat, int] = {
    **dict.fromkeys(
        (
            _F.BC1_TYPELESS, _F.BC1_UNORM, _F.BC1_UNORM_SRGB,
            _F.BC4_TYPELESS, _F.BC4_UNORM, _F.BC4_SNORM,
        ),
        8,
    ),
    **dict.fromkeys(
        (
            _F.BC2_TYPELESS, _F.BC2_UNORM, _F.BC2_UNORM_SRGB,
            _F.BC3_TYPELESS, _F.BC3_UNORM, _F.BC3_UNORM_SRGB,
            _F.BC5_TYPELESS, _F.BC5_UNORM, _F.BC5_SNORM,
            _F.BC6H_TYPELESS, _F.BC6H_UF16, _F.BC6H_SF16,
            _F.BC7_TYPELESS, _F.BC7_UNORM, _F.BC7_UNORM_SRGB,
        ),
        16,
    ),
}

# Packed formats (two pixels share one element) and the bytes per element.
_PACKED_BYTES: dict[DxgiFormat, int] = {
    _F.R8G8_B8G8_UNORM: 4,
    _F.G8R8_G8B8_UNORM: 4,
    _F.YUY2: 4,
    _F.Y210: 8,
    _F.Y216: 8,
}

# Planar 4:2:0 formats and the bytes per element of the luma plane pair.
_PLANAR_BYTES: dict[DxgiFormat, int] = {
    _F.NV12: 2,
    _F.OPAQUE_420: 2,
    _F.P010: 4,
    _F.P016: 4,
}


@dataclass(frozen=True)
class SurfaceInfo:
    """Size of one surface: total bytes, bytes per row, and number of rows."""

    num_bytes: int
    row_bytes: int
    num_rows: int


def _known(fmt: int) -> DxgiFormat | None:
    try:
        return DxgiFormat(fmt)
    except ValueError:
        return None


def surface_info(width: int, height: int, fmt: int) -> SurfaceInfo:
    """Compute the memory layout of a ``width`` x ``height`` surface in ``fmt``.

    Raises InvalidDataError for planar formats with an odd height and
    NotSupportedError for formats whose size is unknown.
    """
    known = _known(fmt)

    if known in _BLOCK_BYTES:
        bpe = _BLOCK_BYTES[known]
        blocks_wide = max(1, (width + 3) // 4) if width > 0 else 0
        blocks_high = max(1, (height + 3) // 4) if height > 0 else 0
        row_bytes = blocks_wide * bpe
        return SurfaceInfo(row_bytes * blocks_high, row_bytes, blocks_high)

    if known in _PACKED_BYTES:
        row_bytes = ((width + 1) >> 1) * _PACKED_BYTES[known]
        return SurfaceInfo(row_bytes * height, row_bytes, height)

    if known is DxgiFormat.NV11:
        row_bytes = ((width + 3) >> 2) * 4
        # Twice the height is a simplification larger than the real 4:1:1 data.
        num_rows = height * 2
        return SurfaceInfo(row_bytes * num_rows, row_bytes, num_rows)

    if known in _PLANAR_BYTES:
        if height % 2:
            raise InvalidDataError(f"{known.name} requires an even height, got {height}")
        row_bytes = ((width + 1) >> 1) * _PLANAR_BYTES[known]
        luma = row_bytes * height
        num_bytes = luma + ((luma + 1) >> 1)
        num_rows = height + ((height + 1) >> 1)
        return SurfaceInfo(num_bytes, row_bytes, num_rows)

    bpp = bits_per_pixel(fmt)
    if not bpp:
        raise NotSupportedError(f"format {fmt} has no known pixel size")
    row_bytes = (width * bpp + 7) // 8
    return SurfaceInfo(row_bytes * height, row_bytes, height)