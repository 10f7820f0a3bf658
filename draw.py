import os
import sys
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_suppress_messages = (not _cli_verbose) and os.environ.get("TF_CPP_MIN_LOG_LEVEL") != "0"

if _suppress_messages and "TF_CPP_MIN_LOG_LEVEL" not in os.environ:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import PIL.Image

from mandelpix import (
    BACKENDS,
    BLACK,
    MandelbrotImage,
    Palette,
    ULTRA_FRACTAL,
    Viewport,
    parse_hex_color,
    plane_bounds,
    render_image,
)


@dataclass
class OutputConfig:
    image_path: Path
    image_format: str


def build_parser():
    parser = ArgumentParser(description='Render the Mandelbrot set to an image file.')

    parser.add_argument('--width', type=int,
                        dest='width', help='image width in pixels',
                        metavar='WIDTH', default=512)

    parser.add_argument('--height', type=int,
                        dest='height', help='image height in pixels',
                        metavar='HEIGHT', default=512)

    parser.add_argument('--center-x', type=float,
                        dest='center_x', help='real part of the point at the image center',
                        metavar='CENTER_X', default=-0.75)

    parser.add_argument('--center-y', type=float,
                        dest='center_y', help='imaginary part of the point at the image center',
                        metavar='CENTER_Y', default=0.0)

    parser.add_argument('--magnification', type=float,
                        dest='magnification', help='zoom factor; 1.0 spans 4 plane units across the shorter side',
                        metavar='MAGNIFICATION', default=1.0)

    parser.add_argument('--limit', type=int,
                        dest='limit', help='maximum number of iterations per point',
                        metavar='LIMIT', default=1000)

    parser.add_argument('--output', dest='output', type=str, default=None,
                        help='Destination file. Defaults to mandelbrot.<format> in the working directory.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for the image. Can be any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('--backend', choices=BACKENDS, default='python',
                        help='Escape-time evaluator: per-pixel "python" loop or vectorized "tensorflow" kernel.')

    parser.add_argument('--lazy', action='store_true',
                        help='Pull every pixel on demand through the image adapter instead of rendering a buffer.')

    parser.add_argument('--device', type=str, default=None,
                        help='TensorFlow device for the tensorflow backend, e.g. "/CPU:0".')

    parser.add_argument('--colormap', type=str,
                        dest='colormap', help='matplotlib colormap to build the palette from (e.g. "viridis"). Defaults to the Ultra Fractal colors.',
                        metavar='COLORMAP', default=None)

    parser.add_argument('--palette-size', type=int, default=16,
                        help='Number of colors sampled from --colormap.')

    parser.add_argument('--inside-color', type=str, default=None,
                        help='Hex color for points inside the Mandelbrot set. Default: #000000.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    image_format = (getattr(opt, "format", "png") or "png").lower().lstrip(".")
    if not image_format:
        image_format = "png"

    output_arg = getattr(opt, "output", None)
    if not output_arg:
        return OutputConfig(
            image_path=Path(f"mandelbrot.{image_format}").expanduser().resolve(),
            image_format=image_format,
        )

    output_path = Path(output_arg).expanduser()
    if str(output_arg).endswith(tuple(filter(None, {os.sep, os.altsep}))):
        parser.error("--output must be a file path.")
    if output_path.exists() and output_path.is_dir():
        parser.error("--output must point to a file, not a directory.")

    expected_suffix = f".{image_format}"
    if output_path.suffix:
        if output_path.suffix.lower() != expected_suffix.lower():
            parser.error(f"--output extension {output_path.suffix} does not match --format {image_format}.")
    else:
        output_path = output_path.with_suffix(expected_suffix)

    return OutputConfig(image_path=output_path.resolve(), image_format=image_format)


def resolve_palette(opt, parser: ArgumentParser) -> Palette:
    interior = BLACK
    if opt.inside_color is not None:
        try:
            interior = parse_hex_color(opt.inside_color)
        except ValueError as exc:
            parser.error(f"Invalid --inside-color '{opt.inside_color}': {exc}")

    if opt.colormap is None:
        return Palette(colors=ULTRA_FRACTAL.colors, interior=interior)
    try:
        return Palette.from_colormap(opt.colormap, size=opt.palette_size, interior=interior)
    except ValueError as exc:
        parser.error(str(exc))


def write_single_image(image: PIL.Image.Image, output_path: Path, image_format: str) -> None:
    """Write a single image to ``output_path`` using the provided format."""

    pil_format = _pil_format_name(image_format)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if pil_format == "JPEG":
        image = image.convert("RGB")
    image.save(str(output_path), format=pil_format)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    output_config = resolve_output_config(opt, parser)
    palette = resolve_palette(opt, parser)

    try:
        viewport = Viewport.from_center(
            opt.width,
            opt.height,
            opt.center_x,
            opt.center_y,
            opt.magnification,
            opt.limit,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if opt.lazy and opt.backend != 'python':
        parser.error("--lazy samples pixels one at a time and only supports the python backend.")

    x_min, y_min, x_max, y_max = plane_bounds(viewport)
    log(f"Rendering {viewport.width}x{viewport.height} px, limit {viewport.limit}")
    log(f"X: [{x_min:.6g}, {x_max:.6g}]  Y: [{y_min:.6g}, {y_max:.6g}]")

    if opt.lazy:
        log("Sampling pixels through the image adapter")
        image = MandelbrotImage(viewport, palette).to_pil()
    else:
        log(f"Using the {opt.backend} backend")
        image = render_image(viewport, palette, backend=opt.backend, device=opt.device)

    write_single_image(image, output_config.image_path, output_config.image_format)
    log(f"Wrote {output_config.image_path}")


if __name__ == '__main__':
    main()
