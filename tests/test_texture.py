import pytest

from ddstex.formats import DdsError, DxgiFormat, EndOfDataError, InvalidDataError, NotSupportedError
from ddstex.header import (
    DDS_CUBEMAP,
    DDS_CUBEMAP_ALLFACES,
    DDS_CUBEMAP_POSITIVEX,
    DDS_FOURCC,
    DDS_HEADER_FLAGS_VOLUME,
    DDS_HEIGHT,
    DDS_RGB,
    AlphaMode,
    DdsFile,
    DdsHeader,
    Dxt10Header,
    PixelFormat,
    make_fourcc,
)
from ddstex.surface import surface_info
from ddstex.texture import (
    LoaderFlags,
    ResourceDimension,
    describe_texture,
    fill_init_data,
    load_texture_from_file,
    load_texture_from_memory,
)


def rgba_pf():
    return PixelFormat(
        flags=DDS_RGB, rgb_bit_count=32,
        r_mask=0x000000FF, g_mask=0x0000FF00, b_mask=0x00FF0000, a_mask=0xFF000000,
    )


def dx10_pf():
    return PixelFormat(flags=DDS_FOURCC, fourcc=make_fourcc("DX10"))


def make_dds(width, height, *, pf=None, mips=0, flags=0, depth=0, caps2=0, dxt10=None, data=b""):
    header = DdsHeader(
        flags=flags, width=width, height=height, depth=depth,
        mip_map_count=mips, ddspf=pf or rgba_pf(), caps2=caps2,
    )
    return DdsFile(header=header, dxt10=dxt10, data=data).to_bytes()


def rgba_size(w, h):
    return surface_info(w, h, DxgiFormat.R8G8B8A8_UNORM).num_bytes


def test_legacy_dxt1_single_mip():
    pf = PixelFormat(flags=DDS_FOURCC, fourcc=make_fourcc("DXT1"))
    data = bytes(range(8))
    tex = load_texture_from_memory(make_dds(4, 4, pf=pf, data=data))
    assert tex.format == DxgiFormat.BC1_UNORM
    assert tex.dimension == ResourceDimension.TEXTURE2D
    assert (tex.width, tex.height, tex.depth) == (4, 4, 1)
    assert tex.mip_levels == 1
    assert len(tex.subresources) == 1
    assert tex.subresources[0].data == data
    assert tex.subresources[0].row_pitch == 8


def test_mip_chain_splits_data_in_order():
    sizes = [rgba_size(4, 4), rgba_size(2, 2), rgba_size(1, 1)]
    data = bytes(i % 256 for i in range(sum(sizes)))
    tex = load_texture_from_memory(make_dds(4, 4, mips=3, data=data))
    assert tex.mip_levels == 3
    assert [len(s.data) for s in tex.subresources] == sizes
    assert b"".join(s.data for s in tex.subresources) == data


def test_truncated_data_raises_end_of_data():
    data = bytes(rgba_size(4, 4) - 1)
    with pytest.raises(EndOfDataError):
        load_texture_from_memory(make_dds(4, 4, data=data))


def test_cube_map_missing_faces_not_supported():
    with pytest.raises(NotSupportedError):
        load_texture_from_memory(make_dds(2, 2, caps2=DDS_CUBEMAP | DDS_CUBEMAP_POSITIVEX, data=bytes(1024)))


def test_full_cube_map_has_six_faces():
    face = rgba_size(2, 2)
    data = bytes(i % 256 for i in range(face * 6))
    tex = load_texture_from_memory(make_dds(2, 2, caps2=DDS_CUBEMAP | DDS_CUBEMAP_ALLFACES, data=data))
    assert tex.is_cube_map
    assert tex.array_size == 6
    assert len(tex.subresources) == 6
    assert tex.subresources[1].data == data[face:2 * face]


def test_legacy_volume_texture():
    slice_size = rgba_size(2, 2)
    data = bytes(slice_size * 2)
    tex = load_texture_from_memory(make_dds(2, 2, depth=2, flags=DDS_HEADER_FLAGS_VOLUME, data=data))
    assert tex.dimension == ResourceDimension.TEXTURE3D
    assert tex.depth == 2
    assert tex.subresources[0].slice_pitch == slice_size
    assert len(tex.subresources[0].data) == slice_size * 2


def test_unknown_legacy_format_not_supported():
    pf = PixelFormat(flags=DDS_RGB, rgb_bit_count=24, r_mask=0xFF0000, g_mask=0xFF00, b_mask=0xFF)
    with pytest.raises(NotSupportedError):
        load_texture_from_memory(make_dds(2, 2, pf=pf, data=bytes(64)))


def dx10_file(width, height, fmt=DxgiFormat.R8G8B8A8_UNORM, dim=ResourceDimension.TEXTURE2D,
              array_size=1, misc_flag=0, misc_flags2=0, flags=0, depth=0, data=None):
    ext = Dxt10Header(dxgi_format=fmt, resource_dimension=dim, misc_flag=misc_flag,
                      array_size=array_size, misc_flags2=misc_flags2)
    if data is None:
        data = bytes(4096)
    return make_dds(width, height, pf=dx10_pf(), dxt10=ext, flags=flags, depth=depth, data=data)


def test_dx10_zero_array_size_invalid():
    with pytest.raises(InvalidDataError):
        load_texture_from_memory(dx10_file(2, 2, array_size=0))


def test_dx10_palettized_not_supported():
    with pytest.raises(NotSupportedError):
        load_texture_from_memory(dx10_file(2, 2, fmt=DxgiFormat.AI44))


def test_dx10_nv12_odd_width_not_supported():
    with pytest.raises(NotSupportedError):
        load_texture_from_memory(dx10_file(3, 2, fmt=DxgiFormat.NV12))


def test_dx10_1d_with_height_invalid():
    with pytest.raises(InvalidDataError):
        load_texture_from_memory(dx10_file(4, 2, dim=ResourceDimension.TEXTURE1D, flags=DDS_HEIGHT))


def test_dx10_1d_texture():
    tex = load_texture_from_memory(dx10_file(4, 1, dim=ResourceDimension.TEXTURE1D, flags=DDS_HEIGHT))
    assert tex.dimension == ResourceDimension.TEXTURE1D
    assert (tex.width, tex.height, tex.depth) == (4, 1, 1)


def test_dx10_3d_without_volume_flag_invalid():
    with pytest.raises(InvalidDataError):
        load_texture_from_memory(dx10_file(2, 2, dim=ResourceDimension.TEXTURE3D, depth=2))


def test_dx10_3d_array_not_supported():
    with pytest.raises(NotSupportedError):
        load_texture_from_memory(dx10_file(2, 2, dim=ResourceDimension.TEXTURE3D, depth=2,
                                           flags=DDS_HEADER_FLAGS_VOLUME, array_size=2))


def test_dx10_unknown_dimension_not_supported():
    with pytest.raises(NotSupportedError):
        load_texture_from_memory(dx10_file(2, 2, dim=ResourceDimension.BUFFER))


def test_dx10_cube_flag_multiplies_array_size():
    tex = load_texture_from_memory(dx10_file(2, 2, misc_flag=0x4))
    assert tex.is_cube_map
    assert tex.array_size == 6


def test_too_many_mips_not_supported():
    with pytest.raises(NotSupportedError):
        load_texture_from_memory(make_dds(4, 4, mips=16, data=bytes(256)))


def test_oversized_2d_not_supported():
    with pytest.raises(NotSupportedError):
        load_texture_from_memory(make_dds(16385, 1, data=b""))


def test_force_srgb():
    tex = load_texture_from_memory(dx10_file(2, 2), load_flags=LoaderFlags.FORCE_SRGB)
    assert tex.format == DxgiFormat.R8G8B8A8_UNORM_SRGB


def test_ignore_srgb():
    tex = load_texture_from_memory(dx10_file(2, 2, fmt=DxgiFormat.R8G8B8A8_UNORM_SRGB),
                                   load_flags=LoaderFlags.IGNORE_SRGB)
    assert tex.format == DxgiFormat.R8G8B8A8_UNORM


def test_dx10_alpha_mode_reported():
    tex = load_texture_from_memory(dx10_file(2, 2, misc_flags2=int(AlphaMode.OPAQUE)))
    assert tex.alpha_mode == AlphaMode.OPAQUE


def test_dxt2_is_premultiplied():
    pf = PixelFormat(flags=DDS_FOURCC, fourcc=make_fourcc("DXT2"))
    tex = load_texture_from_memory(make_dds(4, 4, pf=pf, data=bytes(16)))
    assert tex.alpha_mode == AlphaMode.PREMULTIPLIED
    assert tex.format == DxgiFormat.BC2_UNORM


def test_max_size_skips_large_mips():
    sizes = [rgba_size(8, 8), rgba_size(4, 4), rgba_size(2, 2), rgba_size(1, 1)]
    data = bytes(i % 256 for i in range(sum(sizes)))
    tex = load_texture_from_memory(make_dds(8, 8, mips=4, data=data), max_size=4)
    assert (tex.width, tex.height) == (4, 4)
    assert tex.mip_levels == 3
    assert len(tex.subresources) == 3
    assert tex.subresources[0].data == data[sizes[0]:sizes[0] + sizes[1]]


def test_fill_init_data_nothing_fits():
    fmt = DxgiFormat.R8G8B8A8_UNORM
    data = bytes(rgba_size(8, 8) + rgba_size(4, 4))
    with pytest.raises(DdsError):
        fill_init_data(8, 8, 1, 2, 1, fmt, 1, data)


def test_fill_init_data_array_items():
    fmt = DxgiFormat.R8G8B8A8_UNORM
    item = rgba_size(2, 2) + rgba_size(1, 1)
    data = bytes(i % 256 for i in range(item * 3))
    init = fill_init_data(2, 2, 1, 2, 3, fmt, 0, data)
    assert init.skip_mip == 0
    assert (init.width, init.height, init.depth) == (2, 2, 1)
    assert len(init.subresources) == 6
    assert b"".join(s.data for s in init.subresources) == data


def test_load_from_file(tmp_path):
    data = bytes(rgba_size(2, 2))
    path = tmp_path / "tex.dds"
    path.write_bytes(make_dds(2, 2, data=data))
    tex = load_texture_from_file(path)
    assert tex.format == DxgiFormat.R8G8B8A8_UNORM
    assert tex.subresources[0].data == data


def test_bad_magic_rejected():
    raw = bytearray(make_dds(2, 2, data=bytes(16)))
    raw[0:4] = b"XXXX"
    with pytest.raises(InvalidDataError):
        load_texture_from_memory(bytes(raw))