"""DDS file headers: parsing, packing and alpha-mode detection."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from os import PathLike
from pathlib import Path

from .formats import InvalidDataError

DDS_MAGIC = 0x20534444  # "DDS "

# Pixel format flags.
DDS_FOURCC = 0x00000004
DDS_RGB = 0x00000040
DDS_LUMINANCE = 0x00020000
DDS_ALPHA = 0x00000002
DDS_BUMPDUDV = 0x00080000

# Header flags.
DDS_HEADER_FLAGS_VOLUME = 0x00800000
DDS_HEIGHT = 0x00000002

# Cube map flags in caps2.
DDS_CUBEMAP_POSITIVEX = 0x00000600
DDS_CUBEMAP_NEGATIVEX = 0x00000A00
DDS_CUBEMAP_POSITIVEY = 0x00001200
DDS_CUBEMAP_NEGATIVEY = 0x00002200
DDS_CUBEMAP_POSITIVEZ = 0x00004200
DDS_CUBEMAP_NEGATIVEZ = 0x00008200
DDS_CUBEMAP_ALLFACES = (
    DDS_CUBEMAP_POSITIVEX
    | DDS_CUBEMAP_NEGATIVEX
    | DDS_CUBEMAP_POSITIVEY
    | DDS_CUBEMAP_NEGATIVEY
    | DDS_CUBEMAP_POSITIVEZ
    | DDS_CUBEMAP_NEGATIVEZ
)
DDS_CUBEMAP = 0x00000200

DDS_MISC_FLAGS2_ALPHA_MODE_MASK = 0x7

_UINT32_MAX = 0xFFFFFFFF

_PIXEL_FORMAT = struct.Struct("<8I")
_HEADER_HEAD = struct.Struct("<7I")
_RESERVED1 = struct.Struct("<11I")
_HEADER_TAIL = struct.Struct("<5I")
_DXT10 = struct.Struct("<5I")
_MAGIC = struct.Struct("<I")

PIXEL_FORMAT_SIZE = _PIXEL_FORMAT.size
HEADER_SIZE = _HEADER_HEAD.size + _RESERVED1.size + PIXEL_FORMAT_SIZE + _HEADER_TAIL.size
DXT10_HEADER_SIZE = _DXT10.size


class AlphaMode(IntEnum):
    """How the alpha channel of a texture is to be interpreted."""

    UNKNOWN = 0
    STRAIGHT = 1
    PREMULTIPLIED = 2
    OPAQUE = 3
    CUSTOM = 4


def make_fourcc(code: str | bytes) -> int:
    """Return the little-endian 32-bit value of a four-character code."""
    raw = code.encode("latin-1") if isinstance(code, str) else bytes(code)
    if len(raw) != 4:
        raise ValueError(f"a four-character code needs exactly 4 characters, got {code!r}")
    return int.from_bytes(raw, "little")


_FOURCC_DX10 = make_fourcc("DX10")
_FOURCC_DXT2 = make_fourcc("DXT2")
_FOURCC_DXT4 = make_fourcc("DXT4")


@dataclass
class PixelFormat:
    """The pixel format block embedded in a DDS header."""

    size: int = PIXEL_FORMAT_SIZE
    flags: int = 0
    fourcc: int = 0
    rgb_bit_count: int = 0
    r_mask: int = 0
    g_mask: int = 0
    b_mask: int = 0
    a_mask: int = 0

    def pack(self) -> bytes:
        """Return the 32-byte on-disk form."""
        return _PIXEL_FORMAT.pack(
            self.size,
            self.flags,
            self.fourcc,
            self.rgb_bit_count,
            self.r_mask,
            self.g_mask,
            self.b_mask,
            self.a_mask,
        )

    @property
    def is_dx10(self) -> bool:
        """True if this pixel format announces a DX10 extension header."""
        return bool(self.flags & DDS_FOURCC) and self.fourcc == _FOURCC_DX10


@dataclass
class DdsHeader:
    """The main DDS header that follows the magic number."""

    size: int = HEADER_SIZE
    flags: int = 0
    height: int = 0
    width: int = 0
    pitch_or_linear_size: int = 0
    depth: int = 0
    mip_map_count: int = 0
    reserved1: tuple[int, ...] = field(default_factory=lambda: (0,) * 11)
    ddspf: PixelFormat = field(default_factory=PixelFormat)
    caps: int = 0
    caps2: int = 0
    caps3: int = 0
    caps4: int = 0
    reserved2: int = 0

    def pack(self) -> bytes:
        """Return the 124-byte on-disk form."""
        if len(self.reserved1) != 11:
            raise ValueError("reserved1 must hold exactly 11 values")
        return b"".join(
            (
                _HEADER_HEAD.pack(
                    self.size,
                    self.flags,
                    self.height,
                    self.width,
                    self.pitch_or_linear_size,
                    self.depth,
                    self.mip_map_count,
                ),
                _RESERVED1.pack(*self.reserved1),
                self.ddspf.pack(),
                _HEADER_TAIL.pack(self.caps, self.caps2, self.caps3, self.caps4, self.reserved2),
            )
        )


@dataclass
class Dxt10Header:
    """The DX10 extension header that follows the main header when present."""

    dxgi_format: int = 0
    resource_dimension: int = 0
    misc_flag: int = 0
    array_size: int = 1
    misc_flags2: int = 0

    def pack(self) -> bytes:
        """Return the 20-byte on-disk form."""
        return _DXT10.pack(
            self.dxgi_format,
            self.resource_dimension,
            self.misc_flag,
            self.array_size,
            self.misc_flags2,
        )


@dataclass
class DdsFile:
    """A parsed DDS file: its headers and the surface bytes that follow them."""

    header: DdsHeader = field(default_factory=DdsHeader)
    dxt10: Dxt10Header | None = None
    data: bytes = b""

    def to_bytes(self) -> bytes:
        """Return the complete file contents, magic number included."""
        parts = [_MAGIC.pack(DDS_MAGIC), self.header.pack()]
        if self.dxt10 is not None:
            parts.append(self.dxt10.pack())
        parts.append(bytes(self.data))
        return b"".join(parts)


def _unpack_header(buf: bytes, offset: int) -> DdsHeader:
    head = _HEADER_HEAD.unpack_from(buf, offset)
    offset += _HEADER_HEAD.size
    reserved1 = _RESERVED1.unpack_from(buf, offset)
    offset += _RESERVED1.size
    ddspf = PixelFormat(*_PIXEL_FORMAT.unpack_from(buf, offset))
    offset += _PIXEL_FORMAT.size
    caps, caps2, caps3, caps4, reserved2 = _HEADER_TAIL.unpack_from(buf, offset)
    size, flags, height, width, pitch, depth, mips = head
    return DdsHeader(
        size=size,
        flags=flags,
        height=height,
        width=width,
        pitch_or_linear_size=pitch,
        depth=depth,
        mip_map_count=mips,
        reserved1=tuple(reserved1),
        ddspf=ddspf,
        caps=caps,
        caps2=caps2,
        caps3=caps3,
        caps4=caps4,
        reserved2=reserved2,
    )


def parse_dds(data: bytes | bytearray | memoryview) -> DdsFile:
    """Validate and split DDS data into its headers and surface bytes."""
    buf = bytes(data)
    if len(buf) > _UINT32_MAX:
        raise InvalidDataError("DDS data is too large")
    if len(buf) < _MAGIC.size + HEADER_SIZE:
        raise InvalidDataError("DDS data is too short to hold a header")
    (magic,) = _MAGIC.unpack_from(buf, 0)
    if magic != DDS_MAGIC:
        raise InvalidDataError("DDS data does not start with the DDS magic number")

    header = _unpack_header(buf, _MAGIC.size)
    if header.size != HEADER_SIZE or header.ddspf.size != PIXEL_FORMAT_SIZE:
        raise InvalidDataError("DDS header has an unexpected size")

    offset = _MAGIC.size + HEADER_SIZE
    dxt10 = None
    if header.ddspf.is_dx10:
        if len(buf) < offset + DXT10_HEADER_SIZE:
            raise InvalidDataError("DDS data is too short to hold the DX10 header")
        dxt10 = Dxt10Header(*_DXT10.unpack_from(buf, offset))
        offset += DXT10_HEADER_SIZE

    return DdsFile(header=header, dxt10=dxt10, data=buf[offset:])


def read_dds(path: str | PathLike[str]) -> DdsFile:
    """Read and parse a DDS file from disk."""
    return parse_dds(Path(path).read_bytes())


def alpha_mode(dds: DdsFile) -> AlphaMode:
    """Return the alpha mode a DDS file declares, or UNKNOWN."""
    pf = dds.header.ddspf
    if not pf.flags & DDS_FOURCC:
        return AlphaMode.UNKNOWN
    if pf.fourcc == _FOURCC_DX10:
        if dds.dxt10 is None:
            return AlphaMode.UNKNOWN
        mode = dds.dxt10.misc_flags2 & DDS_MISC_FLAGS2_ALPHA_MODE_MASK
        try:
            return AlphaMode(mode)
        except ValueError:
            return AlphaMode.UNKNOWN
    if pf.fourcc in (_FOURCC_DXT2, _FOURCC_DXT4):
        return AlphaMode.PREMULTIPLIED
    return AlphaMode.UNKNOWN