"""Cooperative, row-by-row scheduling of sinogram runs.

The scheduler performs one row of work per host frame and hands control back
to the host in between, so an interactive surface stays responsive while a
large sinogram is computed. Starting a new run supersedes the previous one:
every scheduled tick carries the generation of the run it belongs to and
ticks of older generations are discarded unexecuted.
"""

import enum
import logging
from collections import deque
from functools import partial

from tqdm import tqdm

from .constants import STATUS_COMPLETE, STATUS_ROW_DONE, STATUS_STARTING
from .sinogram import Sinogram


class SchedulerError(RuntimeError):
    """Raised when a scheduler is queried before any run was started."""


class RunState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class FrameLoop:
    """Minimal host loop delivering per-frame callbacks in FIFO order.

    Callbacks requested while a frame is being processed run on the next
    frame, like ``requestAnimationFrame`` in a browser.
    """

    def __init__(self):
        self._pending = deque()
        self.frames = 0

    def __len__(self):
        return len(self._pending)

    def request(self, callback):
        self._pending.append(callback)

    def step(self):
        """Run one frame. Returns the number of callbacks executed."""
        batch, self._pending = self._pending, deque()
        for callback in batch:
            callback()
        self.frames += 1
        return len(batch)

    def run_until_idle(self, max_frames=None):
        """Run frames until no callback is pending or `max_frames` were run."""
        ran = 0
        while self._pending and (max_frames is None or ran < max_frames):
            self.step()
            ran += 1
        return ran


class IncrementalScheduler:
    """State machine driving a :class:`Sinogram` one row per host frame.

    Parameters
    ----------
    request_frame : callable
        Host hook taking a zero-argument callback to invoke on the next
        frame, e.g. :meth:`FrameLoop.request`.
    on_render : callable, optional
        Receives the rendered RGBA raster after every computed row. When
        omitted, no intermediate rasters are rendered.
    on_status : callable, optional
        Receives every status string.

    Examples
    --------
    >>> loop = FrameLoop()
    >>> scheduler = IncrementalScheduler(loop.request, on_status=print)
    >>> scheduler.start(blank_canvas(32, 32), ScanConfig(angle_count=2, detector_count=40))
    Starting sinogram...
    1
    >>> loop.run_until_idle()
    Row 1/2 done...
    Row 2/2 done...
    Sinogram complete!
    2
    """

    def __init__(self, request_frame, on_render=None, on_status=None):
        self.logger = logging.getLogger(__name__)
        self._request_frame = request_frame
        self.on_render = on_render
        self.on_status = on_status

        self.state = RunState.IDLE
        self.generation = 0
        self.sinogram = None
        self.status = ""

    @property
    def cursor(self):
        """Index of the next row to compute, or None before the first run."""
        return None if self.sinogram is None else self.sinogram.rows_done

    def start(self, image, config):
        """Begin a new run, superseding any run in progress.

        Parameters
        ----------
        image : numpy.ndarray or torch.Tensor
            Source raster, read once at this moment.
        config : ScanConfig
            Scan parameters.

        Returns
        -------
        int
            Generation number of the new run.

        Raises
        ------
        ConfigurationError
            If `config` is invalid. The current run, if any, is left as is.
        """
        sinogram = Sinogram(image, config)

        self.generation += 1
        self.sinogram = sinogram
        self.state = RunState.RUNNING
        self.logger.info(
            f"Run {self.generation} started: {config.angle_count} angles x "
            f"{config.detector_count} detectors on a {sinogram.width}x{sinogram.height} raster"
        )
        self._report(STATUS_STARTING)
        self._schedule()
        return self.generation

    def tick(self, generation):
        """Compute one row of run `generation`.

        Returns
        -------
        bool
            False when the tick belongs to a superseded or finished run and
            was discarded.
        """
        if generation != self.generation or self.state is not RunState.RUNNING:
            self.logger.debug(f"Discarding tick of run {generation} (current run {self.generation})")
            return False

        sinogram = self.sinogram
        row = sinogram.compute_row()
        if self.on_render is not None:
            self.on_render(sinogram.render())
        self._report(STATUS_ROW_DONE.format(row=row + 1, total=sinogram.config.angle_count))

        if sinogram.complete:
            self.state = RunState.DONE
            self.logger.info(
                f"Run {generation} complete: value range "
                f"[{sinogram.extremes.minimum}, {sinogram.extremes.maximum}]"
            )
            self._report(STATUS_COMPLETE)
        else:
            self._schedule()
        return True

    def result(self):
        """The sinogram of the current run (possibly still in progress)."""
        if self.sinogram is None:
            raise SchedulerError("No sinogram run has been started")
        return self.sinogram

    def _schedule(self):
        self._request_frame(partial(self.tick, self.generation))

    def _report(self, status):
        self.status = status
        if self.on_status is not None:
            self.on_status(status)


def compute_sinogram(image, config, progress=True):
    """Compute a full sinogram, blocking until the last row is done.

    Parameters
    ----------
    image : numpy.ndarray or torch.Tensor
        Source raster of shape (H, W, 3) or (H, W, 4).
    config : ScanConfig
        Scan parameters.
    progress : bool, optional
        Show a tqdm progress bar (default: True).

    Returns
    -------
    Sinogram
        The completed sinogram.

    Examples
    --------
    >>> sino = compute_sinogram(blank_canvas(), ScanConfig(angle_count=90), progress=False)
    >>> sino.render().shape
    (90, 600, 4)
    """
    config.validate()
    loop = FrameLoop()
    scheduler = IncrementalScheduler(loop.request)

    with tqdm(total=config.angle_count, desc="Computing sinogram", unit="row",
              disable=not progress) as bar:
        scheduler.on_status = lambda _: bar.update(scheduler.cursor - bar.n)
        scheduler.start(image, config)
        loop.run_until_idle()

    return scheduler.result()
