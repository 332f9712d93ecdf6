"""
Performance demonstration for the live mask preview.

Compares the downsampled, sampled preview rasterizer with exact per-pixel
evaluation (the path used by polygon coverage analysis) on synthetic images
of increasing size.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import time

import numpy as np
from PIL import Image

from PT_Libs.MaskLib.mask_models import MaskSet
from PT_Libs.MaskLib.mask_rasterizer import MaskRasterizer
from PT_Libs.MaskLib.polygon_coverage import PolygonCoverageAnalyzer


def make_gradient_image(size):
    """Square RGB gradient: red grows left to right, green top to bottom."""
    ramp = np.linspace(0, 255, size, dtype=np.uint8)
    pixels = np.zeros((size, size, 3), dtype=np.uint8)
    pixels[..., 0] = ramp[None, :]
    pixels[..., 1] = ramp[:, None]
    pixels[..., 2] = 64
    return Image.fromarray(pixels).convert("RGBA")


def make_mask_set():
    mask_set = MaskSet()
    mask_set.add_color((200, 40, 64))
    mask_set.add_color((250, 90, 64))
    mask_set.add_mask("negative")
    mask_set.add_color((225, 65, 64))
    return mask_set


def benchmark_preview(size, iterations=3):
    """Benchmark preview rasterization against exact evaluation."""
    print(f"\nBenchmarking {size}x{size} image")
    print("-" * 60)

    image = make_gradient_image(size)
    mask_set = make_mask_set()
    analyzer = PolygonCoverageAnalyzer()

    times_preview = []
    for i in range(iterations):
        # fresh rasterizer each run so the cache does not hide the work
        rasterizer = MaskRasterizer()
        start = time.time()
        result = rasterizer.rasterize(image, mask_set)
        elapsed = time.time() - start
        times_preview.append(elapsed)
        print(f"  Preview run {i+1}: {elapsed:.3f}s "
              f"(factor {result.downsample_factor}, sample rate {result.sample_rate})")

    times_exact = []
    for i in range(iterations):
        start = time.time()
        analyzer.rasterize_mask(image, mask_set)
        elapsed = time.time() - start
        times_exact.append(elapsed)
        print(f"  Exact run {i+1}: {elapsed:.3f}s")

    avg_preview = sum(times_preview[1:]) / len(times_preview[1:])
    avg_exact = sum(times_exact[1:]) / len(times_exact[1:])
    print(f"Average preview (excluding warmup): {avg_preview:.3f}s")
    print(f"Average exact (excluding warmup): {avg_exact:.3f}s")

    return avg_preview, avg_exact


def main():
    """Run performance benchmarks."""
    print("=" * 60)
    print("Mask Preview Performance Demonstration")
    print("=" * 60)

    results = []
    for size in (500, 1500, 2500, 3500, 5000):
        try:
            avg_preview, avg_exact = benchmark_preview(size)
            results.append((size, avg_preview, avg_exact))
        except KeyboardInterrupt:
            print("\n\nBenchmark interrupted by user")
            break
        except MemoryError as e:
            print(f"\nOut of memory at {size}x{size}: {e}")
            break

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print("Size         Preview   Exact     Speedup")
    print("-" * 60)
    for size, avg_preview, avg_exact in results:
        speedup = avg_exact / avg_preview if avg_preview > 0 else 1.0
        print(f"{size:5d}x{size:<5d} {avg_preview:6.3f}s  {avg_exact:6.3f}s  {speedup:5.2f}x")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
