"""Anti-aliased rounding of image corners."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from PIL import Image

Coordinates = Callable[[int, int], "tuple[int, int]"]


def round_corners(img: Image.Image, radius: Sequence[int]) -> None:
    """Round the corners of an RGBA image in place.

    ``radius`` gives the radii of the top left, top right, bottom right and
    bottom left corners, in that order.
    """
    if img.mode != "RGBA":
        raise ValueError(f"expected an RGBA image, got mode {img.mode!r}")
    top_left, top_right, bottom_right, bottom_left = radius
    width, height = img.size
    if top_left + top_right > width or bottom_left + bottom_right > width:
        raise ValueError("corner radii exceed the image width")
    if top_left + bottom_left > height or top_right + bottom_right > height:
        raise ValueError("corner radii exceed the image height")

    border_radius(img, top_left, lambda x, y: (x - 1, y - 1))
    border_radius(img, top_right, lambda x, y: (width - x, y - 1))
    border_radius(img, bottom_right, lambda x, y: (width - x, height - y))
    border_radius(img, bottom_left, lambda x, y: (x - 1, height - y))


def border_radius(img: Image.Image, r: int, coordinates: Coordinates) -> None:
    """Cut one rounded corner of radius ``r`` into the alpha channel of ``img``.

    ``coordinates`` maps corner-relative positions (1-based, counted from the
    corner's centre outwards) to pixel positions in the image.
    """
    if r == 0:
        return
    pixels = img.load()
    r0 = r

    # 16x antialiasing: a 16x16 grid per pixel gives 256 possible shades.
    r = 16 * r

    def clear(i: int, j: int) -> None:
        pos = coordinates(r0 - i, r0 - j)
        red, green, blue, _ = pixels[pos]
        pixels[pos] = (red, green, blue, 0)

    def draw(alpha: int, i: int, j: int) -> None:
        pos = coordinates(r0 - i, r0 - j)
        red, green, blue, current = pixels[pos]
        pixels[pos] = (red, green, blue, (alpha * current + 128) // 256)

    x = 0
    y = r - 1
    p = 2 - r
    alpha = 0
    skip_draw = True

    finished = False
    while not finished:
        # Remove contents beyond the current position, and its mirror.
        column = x // 16
        for j in range(y // 16 + 1, r0):
            clear(column, j)
        row = x // 16
        for i in range(y // 16 + 1, r0):
            clear(i, row)

        # Draw when moving to the next pixel in the x direction.
        if not skip_draw:
            draw(alpha, x // 16 - 1, y // 16)
            draw(alpha, y // 16, x // 16 - 1)
            alpha = 0

        for _ in range(16):
            skip_draw = False
            if x >= y:
                finished = True
                break

            alpha += y % 16 + 1
            if p < 0:
                x += 1
                p += 2 * x + 2
            else:
                # Draw when moving to the next pixel in the y direction.
                if y % 16 == 0:
                    draw(alpha, x // 16, y // 16)
                    draw(alpha, y // 16, x // 16)
                    skip_draw = True
                    alpha = (x + 1) % 16 * 16
                x += 1
                p -= 2 * (y - x) + 2
                y -= 1

    # One corner pixel left.
    if x // 16 == y // 16:
        # The column under the current position may not be accounted for yet.
        if x == y:
            alpha += y % 16 + 1
        s = y % 16 + 1
        draw(2 * alpha - s * s, x // 16, y // 16)

    # Remove the remaining square of content in the corner.
    remaining = range(y // 16 + 1, r0)
    for i in remaining:
        for j in remaining:
            clear(i, j)