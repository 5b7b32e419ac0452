from io import BytesIO

import pytest
from PIL import Image


def make_image(width=40, height=100, fmt="PNG", mode="RGB") -> bytes:
    img = Image.new(mode, (width, height), "white")
    # one dark row every 10 px so crops can be told apart
    for y in range(0, height, 10):
        for x in range(width):
            img.putpixel((x, y), (0, 0, 0) if mode == "RGB" else 0)
    buf = BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    return make_image()
