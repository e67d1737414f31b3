"""
Image encoder.

Clamps the float framebuffer to 8-bit RGB and serializes it with Pillow.
Binary PPM is the native output; any other format Pillow knows is picked
from the file suffix.
"""

from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image


def to_rgb8(framebuffer: np.ndarray) -> np.ndarray:
    """
    Convert an unclamped float framebuffer to uint8.

    Args:
        framebuffer: (H, W, 3) float array, nominal range [0, 1].

    Returns:
        (H, W, 3) uint8 array; channels are clamped to [0, 255] and
        truncated.
    """
    return np.clip(255.0 * framebuffer, 0, 255).astype(np.uint8)


def encode_ppm(framebuffer: np.ndarray) -> bytes:
    """Serialize the framebuffer as a binary (P6) PPM image."""
    buf = BytesIO()
    Image.fromarray(to_rgb8(framebuffer)).save(buf, format="PPM")
    return buf.getvalue()


def write_image(framebuffer: np.ndarray, output_path: Path) -> Path:
    """
    Write the framebuffer to disk.

    Args:
        framebuffer: (H, W, 3) float array.
        output_path: Destination; the suffix picks the format (PPM if none).

    Returns:
        Path to the output file.

    Raises:
        RuntimeError: The image could not be created or written.
    """
    output_path = Path(output_path)
    is_ppm = output_path.suffix.lower() in ("", ".ppm")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if is_ppm:
            output_path.write_bytes(encode_ppm(framebuffer))
        else:
            Image.fromarray(to_rgb8(framebuffer)).save(output_path)
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"Could not write image {output_path}: {exc}") from exc

    return output_path
