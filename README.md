# ddstex

`ddstex` reads DirectDraw Surface (`.dds`) texture files in pure Python. It checks
the header, including the DX10 extension header. It works out the DXGI pixel format
from legacy pixel-format descriptions. It then splits the pixel data into
subresources, one for each mip level of each array slice, with row and slice
pitches. It needs no graphics API and has no dependencies outside the standard
library.

## Installation

```
pip install ddstex
```

To run the tests:

```
pip install "ddstex[test]"
pytest
```

## Usage

Load a texture from a file or from bytes in memory:

```python
from ddstex.texture import load_texture_from_file, load_texture_from_memory, LoaderFlags

texture = load_texture_from_file("stone.dds")
print(texture.dimension, texture.width, texture.height, texture.mip_levels)

with open("stone.dds", "rb") as fh:
    texture = load_texture_from_memory(fh.read(), 0, LoaderFlags.FORCE_SRGB)
```

The result is a `TextureDescription`. It has these fields:

- `dimension`: a `ResourceDimension`, one of 1D, 2D or 3D.
- `width`, `height` and `depth`: the size of the largest mip level that was kept.
- `mip_levels`: the number of mip levels that were kept.
- `array_size`: the number of array slices. A cube map counts six per cube.
- `format`: the DXGI format, after `LoaderFlags.FORCE_SRGB` or `LoaderFlags.IGNORE_SRGB` has been applied.
- `is_cube_map`: whether the texture is a cube map.
- `alpha_mode`: the `AlphaMode` that the file declares.
- `subresources`: a tuple of `Subresource` values, each holding `data`, `row_pitch` and `slice_pitch`.

Pass a non-zero `max_size` to drop the top mip levels whose width, height or depth
is larger than that size. `describe_texture` does the same work on a `DdsFile` that
has already been parsed. `fill_init_data` splits raw surface bytes into
subresources directly and returns an `InitData`.

### Lower-level helpers

```python
from ddstex.header import parse_dds, read_dds, alpha_mode, make_fourcc
from ddstex.pixelformat import format_from_pixel_format
from ddstex.surface import surface_info
from ddstex.formats import DxgiFormat, bits_per_pixel, make_srgb, make_linear

dds = read_dds("stone.dds")
print(dds.header.width, dds.header.height, alpha_mode(dds))
print(format_from_pixel_format(dds.header.ddspf))

info = surface_info(256, 256, DxgiFormat.BC1_UNORM)
print(info.num_bytes, info.row_bytes, info.num_rows)

assert bits_per_pixel(DxgiFormat.R8G8B8A8_UNORM) == 32
assert make_srgb(DxgiFormat.BC3_UNORM) is DxgiFormat.BC3_UNORM_SRGB
assert make_linear(DxgiFormat.BC3_UNORM_SRGB) is DxgiFormat.BC3_UNORM
```

`DdsFile`, `DdsHeader`, `PixelFormat` and `Dxt10Header` are dataclasses. Each one
can be packed back into its on-disk bytes with `pack()`. `DdsFile.to_bytes()`
returns a complete file, which makes it easy to build DDS data from scratch.

### Errors

Problems found in DDS data raise `ddstex.formats.DdsError` or one of its
subclasses:

- `InvalidDataError`: the data is malformed or inconsistent. This also covers a planar format with an odd height.
- `NotSupportedError`: the format, the resource dimension or the size is not supported.
- `EndOfDataError`: the pixel data is shorter than the header says.
- `DdsError` itself: no mip level fits within `max_size`.

`DdsError` is a subclass of `ValueError`. Reading a file that cannot be opened
raises the usual `OSError`.

## What it does not do

`ddstex` only describes textures and lays out their bytes:

- It does not decode or decompress pixels. Block-compressed data stays compressed.
- It does not create GPU resources.
- It does not generate mip levels.
- It has no command-line tool.