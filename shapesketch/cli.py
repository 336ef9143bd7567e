"""Classify a stroke saved as an image file.

    python -m shapesketch.cli drawing.png [--json] [--preview]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from PIL import Image, UnidentifiedImageError

from shapesketch.config import settings
from shapesketch.engine.classifier import classify_context
from shapesketch.engine.config import ClassifierConfig
from shapesketch.utils.rasterizer import mask_to_halfblock


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="shapesketch",
        description="Classify a single stroke as square, ellipse or line.",
    )
    parser.add_argument("image", help="PNG (or any Pillow-readable image) with a transparent background")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--preview", action="store_true", help="Print the ink mask as text")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        with Image.open(args.image) as img:
            img.load()
            image = img.convert("RGBA")
    except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
        print(f"Cannot read image: {args.image} ({e})", file=sys.stderr)
        return 1

    ctx = classify_context(image, config=ClassifierConfig.from_settings(settings))

    if args.preview and ctx.mask is not None:
        print(mask_to_halfblock(ctx.mask))

    if args.json:
        out = ctx.summary()
        out["width"] = ctx.width
        out["height"] = ctx.height
        out["stage_errors"] = ctx.stage_errors
        print(json.dumps(out, indent=2))
    else:
        print(ctx.label or "no shape")
    return 0


if __name__ == "__main__":
    sys.exit(main())
