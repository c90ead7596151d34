"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

ACCENT = "#0078D4"


def create_icon_image(today: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA calendar leaf: accent band on top, day of month below."""
    size = 64
    band = 14
    img = Image.new("RGBA", (size, size), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, size - 1, band), fill=ACCENT)

    day = str((today or date.today()).day)
    box = size - band - 4

    # Find the largest font size that fits below the band
    font_size = 60
    font = None
    while font_size > 10:
        try:
            font = ImageFont.truetype("segoeuib.ttf", font_size)
        except OSError:
            font = ImageFont.load_default()
            break
        bbox = draw.textbbox((0, 0), day, font=font)
        tw = bbox[2] - bbox[0]
        th = bbox[3] - bbox[1]
        if tw <= size - 4 and th <= box:
            break
        font_size -= 1

    # Centre the visible pixels in the area under the band
    bbox = draw.textbbox((0, 0), day, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = band + 2 + (box - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), day, fill="black", font=font)

    return img
