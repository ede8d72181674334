# image_to_sinogram.py
import logging

import numpy as np
import matplotlib.pyplot as plt
from sinoct import ScanConfig, IncrementalScheduler, FrameLoop, blank_canvas


def paint_phantom(size=512):
    """A few colored disks and a bar on the black drawing canvas."""
    canvas = blank_canvas(size, size)
    yy, xx = np.mgrid[0:size, 0:size]
    shapes = [
        (0.50, 0.50, 0.35, (200, 200, 200)),
        (0.38, 0.45, 0.08, (255, 40, 40)),
        (0.62, 0.45, 0.08, (40, 255, 40)),
        (0.50, 0.68, 0.06, (40, 80, 255)),
    ]
    for cx, cy, r, color in shapes:
        mask = (xx - cx * size) ** 2 + (yy - cy * size) ** 2 <= (r * size) ** 2
        canvas[mask, :3] = color
    canvas[int(0.2 * size):int(0.25 * size), int(0.3 * size):int(0.7 * size), :3] = (255, 220, 0)
    return canvas


def main():
    logging.basicConfig(level=logging.INFO)
    image = paint_phantom()
    config = ScanConfig(angle_count=180, rotation_count=1)

    fig, (ax_img, ax_sino) = plt.subplots(1, 2, figsize=(12, 5))
    ax_img.imshow(image)
    ax_img.axis("off")
    ax_img.set_title("Drawing")
    sino_artist = ax_sino.imshow(np.zeros((config.angle_count, config.detector_count, 4), dtype=np.uint8),
                                 aspect='auto')
    ax_sino.set_xlabel("Detector")
    ax_sino.set_ylabel("Angle index")
    plt.show(block=False)

    def show(raster):
        sino_artist.set_data(raster)
        fig.canvas.draw_idle()
        plt.pause(0.001)

    # FrameLoop stands in for the browser frame callback; plt.pause keeps the figure live
    loop = FrameLoop()
    scheduler = IncrementalScheduler(loop.request, on_render=show, on_status=ax_sino.set_title)
    scheduler.start(image, config)
    loop.run_until_idle()

    sino = scheduler.result()
    print("Sinogram min/max:", sino.extremes.minimum, sino.extremes.maximum)
    plt.show()


if __name__ == "__main__":
    main()
