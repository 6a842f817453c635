"""Turning a parsed DDS file into a validated texture description with its subresources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from os import PathLike

from .formats import (
    DdsError,
    DxgiFormat,
    EndOfDataError,
    InvalidDataError,
    NotSupportedError,
    bits_per_pixel,
    make_linear,
    make_srgb,
)
from .header import (
    DDS_CUBEMAP,
    DDS_CUBEMAP_ALLFACES,
    DDS_HEADER_FLAGS_VOLUME,
    DDS_HEIGHT,
    AlphaMode,
    DdsFile,
    alpha_mode,
    parse_dds,
    read_dds,
)
from .pixelformat import format_from_pixel_format
from .surface import surface_info

_F = DxgiFormat

_UINT32_MAX = 0xFFFFFFFF

RESOURCE_MISC_TEXTURECUBE = 0x4

# Hardware limits that the DDS metadata is not trusted to exceed.
REQ_MIP_LEVELS = 15
REQ_TEXTURE1D_ARRAY_AXIS_DIMENSION = 2048
REQ_TEXTURE1D_U_DIMENSION = 16384
REQ_TEXTURE2D_ARRAY_AXIS_DIMENSION = 2048
REQ_TEXTURE2D_U_OR_V_DIMENSION = 16384
REQ_TEXTURECUBE_DIMENSION = 16384
REQ_TEXTURE3D_U_V_OR_W_DIMENSION = 2048


class ResourceDimension(IntEnum):
    """Resource dimensions as numbered in DDS DX10 headers."""

    UNKNOWN = 0
    BUFFER = 1
    TEXTURE1D = 2
    TEXTURE2D = 3
    TEXTURE3D = 4


class LoaderFlags(IntFlag):
    """Options that adjust how the format of a loaded texture is chosen."""

    DEFAULT = 0
    FORCE_SRGB = 0x1
    IGNORE_SRGB = 0x2


@dataclass(frozen=True)
class Subresource:
    """The bytes of one mip level of one array item, with its pitches."""

    data: bytes
    row_pitch: int
    slice_pitch: int


@dataclass(frozen=True)
class InitData:
    """Subresources kept after skipping mips larger than the size limit."""

    width: int
    height: int
    depth: int
    skip_mip: int
    subresources: tuple[Subresource, ...]


@dataclass(frozen=True)
class TextureDescription:
    """Everything needed to create a texture resource from a DDS file."""

    dimension: ResourceDimension
    width: int
    height: int
    depth: int
    mip_levels: int
    array_size: int
    format: int
    is_cube_map: bool
    alpha_mode: AlphaMode
    subresources: tuple[Subresource, ...]


def fill_init_data(width, height, depth, mip_count, array_size, fmt, max_size, bit_data) -> InitData:
    """Split surface bytes into subresources, skipping mips above ``max_size``.

    A ``max_size`` of 0 means no limit. Raises EndOfDataError if the data is
    too short, and DdsError if no mip level fits within the limit.
    """
    data = bytes(bit_data)
    end = len(data)
    offset = 0
    subresources: list[Subresource] = []
    skip_mip = 0
    twidth = theight = tdepth = 0

    for item in range(array_size):
        w, h, d = width, height, depth
        for _ in range(mip_count):
            info = surface_info(w, h, fmt)
            if info.num_bytes > _UINT32_MAX or info.row_bytes > _UINT32_MAX:
                raise NotSupportedError("surface size overflows 32 bits")

            size = info.num_bytes * d
            fits = mip_count <= 1 or not max_size or (w <= max_size and h <= max_size and d <= max_size)
            if offset + size > end:
                raise EndOfDataError("DDS data ends before all surfaces")
            if fits:
                if not twidth:
                    twidth, theight, tdepth = w, h, d
                subresources.append(Subresource(data[offset:offset + size], info.row_bytes, info.num_bytes))
            elif item == 0:
                skip_mip += 1
            offset += size

            w, h, d = max(1, w >> 1), max(1, h >> 1), max(1, d >> 1)

    if not subresources:
        raise DdsError("no mip level fits within the size limit")
    return InitData(twidth, theight, tdepth, skip_mip, tuple(subresources))


def _check_dx10_format(fmt: int, dimension: int, width: int, height: int) -> None:
    if fmt in (_F.NV12, _F.P010, _F.P016, _F.OPAQUE_420):
        if dimension != ResourceDimension.TEXTURE2D or width % 2 or height % 2:
            raise NotSupportedError("planar 4:2:0 formats need an even-sized 2D texture")
    elif fmt in (_F.YUY2, _F.Y210, _F.Y216, _F.P208):
        if width % 2:
            raise NotSupportedError("packed 4:2:2 formats need an even width")
    elif fmt == _F.NV11:
        if width % 4:
            raise NotSupportedError("NV11 needs a width that is a multiple of 4")
    elif fmt in (_F.AI44, _F.IA44, _F.P8, _F.A8P8):
        raise NotSupportedError("palettized formats are not supported")
    elif bits_per_pixel(fmt) == 0:
        raise NotSupportedError(f"format {fmt} is not supported")


def _check_bounds(dimension, width, height, depth, array_size, is_cube_map) -> None:
    if dimension == ResourceDimension.TEXTURE1D:
        too_big = array_size > REQ_TEXTURE1D_ARRAY_AXIS_DIMENSION or width > REQ_TEXTURE1D_U_DIMENSION
    elif dimension == ResourceDimension.TEXTURE2D:
        limit = REQ_TEXTURECUBE_DIMENSION if is_cube_map else REQ_TEXTURE2D_U_OR_V_DIMENSION
        too_big = array_size > REQ_TEXTURE2D_ARRAY_AXIS_DIMENSION or width > limit or height > limit
    elif dimension == ResourceDimension.TEXTURE3D:
        limit = REQ_TEXTURE3D_U_V_OR_W_DIMENSION
        too_big = array_size > 1 or width > limit or height > limit or depth > limit
    else:
        raise NotSupportedError(f"resource dimension {dimension} is not supported")
    if too_big:
        raise NotSupportedError("texture exceeds the supported size")


def _as_format(fmt: int) -> int:
    try:
        return DxgiFormat(fmt)
    except ValueError:
        return fmt


def describe_texture(dds: DdsFile, max_size=0, load_flags=LoaderFlags.DEFAULT) -> TextureDescription:
    """Validate a parsed DDS file and describe the texture it holds."""
    header = dds.header
    width = header.width
    height = header.height
    depth = header.depth
    array_size = 1
    is_cube_map = False
    mip_count = header.mip_map_count or 1

    if header.ddspf.is_dx10:
        ext = dds.dxt10
        if ext is None:
            raise InvalidDataError("DDS data announces a DX10 header but has none")
        array_size = ext.array_size
        if array_size == 0:
            raise InvalidDataError("DX10 header has an array size of 0")
        _check_dx10_format(ext.dxgi_format, ext.resource_dimension, width, height)
        fmt = _as_format(ext.dxgi_format)

        dim = ext.resource_dimension
        if dim == ResourceDimension.TEXTURE1D:
            if header.flags & DDS_HEIGHT and height != 1:
                raise InvalidDataError("1D texture has a height other than 1")
            height = depth = 1
        elif dim == ResourceDimension.TEXTURE2D:
            if ext.misc_flag & RESOURCE_MISC_TEXTURECUBE:
                array_size *= 6
                is_cube_map = True
            depth = 1
        elif dim == ResourceDimension.TEXTURE3D:
            if not header.flags & DDS_HEADER_FLAGS_VOLUME:
                raise InvalidDataError("3D texture lacks the volume flag")
            if array_size > 1:
                raise NotSupportedError("3D texture arrays are not supported")
        else:
            raise NotSupportedError(f"resource dimension {dim} is not supported")
        dimension = ResourceDimension(dim)
    else:
        fmt = format_from_pixel_format(header.ddspf)
        if fmt == _F.UNKNOWN:
            raise NotSupportedError("pixel format has no DXGI equivalent")
        if header.flags & DDS_HEADER_FLAGS_VOLUME:
            dimension = ResourceDimension.TEXTURE3D
        else:
            if header.caps2 & DDS_CUBEMAP:
                if header.caps2 & DDS_CUBEMAP_ALLFACES != DDS_CUBEMAP_ALLFACES:
                    raise NotSupportedError("cube map does not define all six faces")
                array_size = 6
                is_cube_map = True
            depth = 1
            dimension = ResourceDimension.TEXTURE2D

    if mip_count > REQ_MIP_LEVELS:
        raise NotSupportedError(f"{mip_count} mip levels exceed the limit of {REQ_MIP_LEVELS}")
    _check_bounds(dimension, width, height, depth, array_size, is_cube_map)

    init = fill_init_data(width, height, depth, mip_count, array_size, fmt, max_size, dds.data)

    flags = LoaderFlags(load_flags)
    if flags & LoaderFlags.FORCE_SRGB:
        fmt = make_srgb(fmt)
    elif flags & LoaderFlags.IGNORE_SRGB:
        fmt = make_linear(fmt)

    return TextureDescription(
        dimension=dimension,
        width=init.width,
        height=init.height,
        depth=init.depth,
        mip_levels=mip_count - init.skip_mip,
        array_size=array_size,
        format=fmt,
        is_cube_map=is_cube_map,
        alpha_mode=alpha_mode(dds),
        subresources=init.subresources,
    )


def load_texture_from_memory(data, max_size=0, load_flags=LoaderFlags.DEFAULT) -> TextureDescription:
    """Parse DDS bytes and describe the texture they hold."""
    return describe_texture(parse_dds(data), max_size, load_flags)


def load_texture_from_file(path: str | PathLike[str], max_size=0, load_flags=LoaderFlags.DEFAULT) -> TextureDescription:
    """Read a DDS file and describe the texture it holds."""
    return describe_texture(read_dds(path), max_size, load_flags)