# settings-pages

This package holds the logic behind three desktop settings pages. It has no user interface of its own.

- **About this system** (`settings_pages.about`) collects the hardware model, processor, memory, disk capacity, operating system, architecture, graphics adapters, windowing system and desktop environment.
- **Date and time** (`settings_pages.timeinfo`) reports whether NTP is available, the configured time zone, and the current time.
- **Wallpapers** (`settings_pages.wallpapers`, `settings_pages.corners`) finds images in a directory and builds cached thumbnails with rounded corners.

## Installation

```sh
pip install .
```

To install the test tools too:

```sh
pip install ".[test]"
```

## System information

```python
from settings_pages.about import Info, format_size, parse_os_release

info = Info.load()
print(info.hardware_model, info.processor, info.memory)
print(info.operating_system, info.os_architecture)
print(info.graphics)

print(format_size(8 * 1024**3))      # "8.00 GiB"
print(parse_os_release('PRETTY_NAME="Example OS 1.0"\n'))  # "Example OS 1.0"
```

`Info.load()` reads these sources:

- DMI files under `/sys/devices/virtual/dmi/id`
- `/proc/sys/kernel/arch`
- `/etc/os-release`
- `/proc/cpuinfo`
- the host name
- total memory and the summed size of mounted partitions, both from `psutil`
- the `XDG_SESSION_TYPE` environment variable
- the first of `XDG_SESSION_DESKTOP`, `XDG_CURRENT_DESKTOP` and `DESKTOP_SESSION` that is set
- the VGA lines printed by `lspci`

A file that cannot be read leaves its field empty. Sizes are formatted with `format_size`, which uses binary units and two decimals.

The parsing helpers take text, so you can pass them data from any source:

- `parse_os_release`
- `parse_cpu_model`
- `parse_lspci`
- `capitalize_first`

`architecture`, `hardware_model`, `operating_system` and `processor_name` each accept a path, so you can point them at other files.

## Date and time

`TimeInfo.load(proxy)` is a coroutine. It takes any object with async `can_ntp()` and `timezone()` methods.

The package includes `TimeDateProxy`, which provides both methods:

- `timezone()` returns the zone name that the `/etc/localtime` symlink points to.
- `can_ntp()` reports whether any `*.list` file in the systemd `ntp-units.d` directories names a unit.

The zone may be an IANA name or a fixed offset such as `Z`, `+02:00` or `-0530`. `load` returns `None` when the zone cannot be understood. Otherwise it returns a `TimeInfo` with these fields:

- `can_ntp`
- `timezone`, a `tzinfo`
- `local_time`, the current time as a naive `datetime`, built from whole seconds since the Unix epoch

```python
import asyncio
from settings_pages.timeinfo import TimeDateProxy, TimeInfo

info = asyncio.run(TimeInfo.load(TimeDateProxy()))
```

## Wallpapers

```python
import asyncio
from settings_pages.wallpapers import load_each_from_path

async def main():
    async for path, display, selection in load_each_from_path("/usr/share/backgrounds", True):
        print(path, display.size, selection.size)

asyncio.run(main())
```

### Finding images

`find_wallpapers(path, recurse)` returns a sorted list of image files. It recognises images by their leading bytes. It stops scanning a directory once 100 images have been found.

### Loading images

`load_each_from_path` yields results in path order and decodes up to four images at a time.

`load_image_with_thumbnail(path, cache)` returns a tuple of the path, a display thumbnail and a selection thumbnail:

- The display thumbnail is RGBA and fits within 300×169 pixels.
- The selection thumbnail is 158×105 pixels with 8-pixel rounded corners.

### Thumbnail cache

By default, display thumbnails are stored as PNG files in the directory that `cache_dir()` returns. Each file is named by `thumbnail_name` from the image path and its creation time. Pass `cache=None` to disable caching.

### Rounded corners

`settings_pages.corners.round_corners(img, radius)` gives an RGBA image antialiased rounded corners, in place. `radius` lists the top-left, top-right, bottom-right and bottom-left radii, in that order. It raises `ValueError` when the image is not RGBA or when the radii do not fit the image.

## What this package does not do

- It does not draw any settings window.
- It does not change system settings. It cannot set the time, time zone or NTP state.
- It does not apply or store a chosen wallpaper or background colour. `DEFAULT_COLORS` is only a palette of `SingleColor` and `Gradient` values.
- It does not list connected displays.

## Running the tests

```sh
pytest
```