"""Live camera processing with switchable filters."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Callable

import numpy as np
import pygame
import pygame.camera

from framefilters.filters import (
    BlurFilter,
    EdgeDetectionFilter,
    Filter,
    GrayscaleFilter,
    SepiaFilter,
)

WINDOW_PROCESSED = "Processed Frame"
FRAME_SIZE = (640, 480)
THUMBNAIL_SCALE = 0.2
THUMBNAIL_PADDING = 10
ESCAPE = 27


class CameraError(OSError):
    """Raised when the camera cannot be opened or used."""


def _source_positions(dst: int, src: int):
    pos = (np.arange(dst) + 0.5) * (src / dst) - 0.5
    pos = np.clip(pos, 0, src - 1)
    low = np.floor(pos).astype(int)
    high = np.minimum(low + 1, src - 1)
    return low, high, pos - low


def _resize(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Bilinear resize to ``width`` x ``height``."""
    src_h, src_w = image.shape[:2]
    if (src_w, src_h) == (width, height):
        return image.copy()
    data = image.astype(np.float64)
    extra = (1,) * (image.ndim - 2)

    y0, y1, fy = _source_positions(height, src_h)
    fy = fy.reshape(-1, 1, *extra)
    data = data[y0] * (1 - fy) + data[y1] * fy

    x0, x1, fx = _source_positions(width, src_w)
    fx = fx.reshape(1, -1, *extra)
    data = data[:, x0] * (1 - fx) + data[:, x1] * fx
    return np.clip(np.rint(data), 0, 255).astype(image.dtype)


@dataclass
class _Trackbar:
    name: str
    value: int
    maximum: int
    on_change: Callable[[int], None]


class _Window:
    """A display window showing frames with optional trackbars below them."""

    _BAR_HEIGHT = 30
    _LABEL_WIDTH = 110
    _VALUE_WIDTH = 40

    def __init__(self, title: str) -> None:
        pygame.display.init()
        pygame.font.init()
        pygame.display.set_caption(title)
        self._font = pygame.font.Font(None, 20)
        self._screen = None
        self._frame = None
        self._trackbars: list[_Trackbar] = []

    def create_trackbar(self, name, value, maximum, on_change) -> None:
        value = min(max(int(value), 0), maximum)
        self._trackbars.append(_Trackbar(name, value, maximum, on_change))
        if self._frame is not None:
            self._draw()

    def show(self, image: np.ndarray) -> None:
        self._frame = image
        self._draw()

    def _bar_span(self, width: int) -> tuple[int, int]:
        start = self._LABEL_WIDTH
        return start, max(start + 1, width - self._VALUE_WIDTH)

    def _draw(self) -> None:
        height, width = self._frame.shape[:2]
        size = (width, height + len(self._trackbars) * self._BAR_HEIGHT)
        if self._screen is None or self._screen.get_size() != size:
            self._screen = pygame.display.set_mode(size)
        rgb = np.ascontiguousarray(self._frame[..., ::-1].swapaxes(0, 1))
        self._screen.blit(pygame.surfarray.make_surface(rgb), (0, 0))

        start, end = self._bar_span(width)
        for row, bar in enumerate(self._trackbars):
            top = height + row * self._BAR_HEIGHT
            middle = top + self._BAR_HEIGHT // 2
            pygame.draw.rect(
                self._screen, (40, 40, 40), (0, top, width, self._BAR_HEIGHT)
            )
            label = self._font.render(bar.name, True, (230, 230, 230))
            self._screen.blit(label, (6, top + 8))
            pygame.draw.line(
                self._screen, (150, 150, 150), (start, middle), (end, middle), 2
            )
            knob = start + (end - start) * bar.value // max(bar.maximum, 1)
            pygame.draw.circle(self._screen, (220, 120, 40), (knob, middle), 6)
            text = self._font.render(str(bar.value), True, (230, 230, 230))
            self._screen.blit(text, (end + 8, top + 8))
        pygame.display.flip()

    def _drag(self, position) -> None:
        if self._frame is None:
            return
        height, width = self._frame.shape[:2]
        x, y = position
        if y < height:
            return
        row = (y - height) // self._BAR_HEIGHT
        if row >= len(self._trackbars):
            return
        bar = self._trackbars[row]
        start, end = self._bar_span(width)
        fraction = min(max((x - start) / (end - start), 0.0), 1.0)
        value = round(fraction * bar.maximum)
        if value != bar.value:
            bar.value = value
            bar.on_change(value)
            self._draw()

    def wait_key(self, delay_ms: int):
        """Wait ``delay_ms`` and return the first key pressed, or None."""
        pygame.time.wait(delay_ms)
        key = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                if key is None:
                    key = ESCAPE
            elif event.type == pygame.KEYDOWN:
                if key is None:
                    if event.key == pygame.K_ESCAPE:
                        key = ESCAPE
                    elif event.unicode:
                        key = ord(event.unicode)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._drag(event.pos)
            elif event.type == pygame.MOUSEMOTION and event.buttons[0]:
                self._drag(event.pos)
        return key

    def close(self) -> None:
        pygame.display.quit()


class VideoProcessor:
    """Reads camera frames, filters them and shows the result."""

    def __init__(self, camera_index: int | None = None) -> None:
        self._camera = None
        self._window: _Window | None = None
        self.filters: dict[str, Filter] = {}
        self.filter_names: dict[str, str] = {}
        self.current_filter: Filter | None = None
        self._register_filters()
        if camera_index is not None:
            self.open_camera(camera_index)

    def _register_filters(self) -> None:
        self.filters = {
            "g": GrayscaleFilter(),
            "b": BlurFilter(),
            "e": EdgeDetectionFilter(),
            "s": SepiaFilter(),
        }
        self.filter_names = {
            "g": "Grayscale",
            "b": "Blur",
            "e": "Edge Detection",
            "s": "Sepia",
        }
        self.current_filter = self.filters["g"]

    def open_camera(self, index: int = 0) -> None:
        """Open the camera at ``index``, replacing any open one."""
        self._release_camera()
        failure = f"Failed to open camera at index {index}"
        if index < 0:
            raise CameraError(failure)
        try:
            pygame.camera.init()
            names = pygame.camera.list_cameras()
            if index >= len(names):
                raise CameraError(failure)
            camera = pygame.camera.Camera(names[index], FRAME_SIZE)
            camera.start()
        except CameraError:
            raise
        except Exception as exc:
            raise CameraError(failure) from exc
        self._camera = camera

    def is_opened(self) -> bool:
        return self._camera is not None

    def _release_camera(self) -> None:
        if self._camera is not None:
            try:
                self._camera.stop()
            except pygame.error:
                pass
            self._camera = None

    def _read_frame(self) -> np.ndarray | None:
        try:
            surface = self._camera.get_image()
        except pygame.error:
            return None
        pixels = pygame.surfarray.array3d(surface)
        if pixels.size == 0:
            return None
        return np.ascontiguousarray(pixels.swapaxes(0, 1)[..., ::-1])

    def _switch_filter(self, key: str) -> None:
        self.current_filter = self.filters[key]
        name = self.filter_names.get(key, "Unknown")
        print(f"[INFO] Switched to filter: {name} (key '{key}')")
        if self._window is not None:
            self.current_filter.create_trackbar(self._window)

    def process_frames(self) -> None:
        """Run the capture loop until ESC, Q or the window is closed."""
        self._register_filters()
        if not self.is_opened():
            raise CameraError("Camera is not opened.")

        self._window = _Window(WINDOW_PROCESSED)
        print("[INFO] Press ESC or Q to exit.")
        try:
            while True:
                frame = self._read_frame()
                if frame is None:
                    print("[WARNING] Empty frame captured.", file=sys.stderr)
                    break
                frame = _resize(frame, *FRAME_SIZE)
                self._window.show(self.apply_filter(frame))

                key = self._window.wait_key(10)
                if key is None:
                    continue
                if key in (ESCAPE, ord("q"), ord("Q")):
                    break
                char = chr(key)
                if char in self.filters:
                    self._switch_filter(char)
        finally:
            self._window.close()
            self._window = None

    def apply_filter(self, frame) -> np.ndarray:
        """Filter ``frame`` and inset a thumbnail of it in the bottom-left."""
        frame = np.asarray(frame)
        if self.current_filter is not None:
            output = self.current_filter.apply(frame)
        else:
            output = frame.copy()

        rows, cols = frame.shape[:2]
        thumb_w = round(cols * THUMBNAIL_SCALE)
        thumb_h = round(rows * THUMBNAIL_SCALE)
        if thumb_w == 0 or thumb_h == 0:
            return output
        thumbnail = _resize(frame, thumb_w, thumb_h)

        x = THUMBNAIL_PADDING
        y = output.shape[0] - thumb_h - THUMBNAIL_PADDING
        if (
            y >= 0
            and x + thumb_w <= output.shape[1]
            and y + thumb_h <= output.shape[0]
            and thumbnail.shape[2:] == output.shape[2:]
        ):
            output[y : y + thumb_h, x : x + thumb_w] = thumbnail
        return output

    def close(self) -> None:
        """Release the camera and close any open window."""
        self._release_camera()
        if self._window is not None:
            self._window.close()
            self._window = None

    def __enter__(self) -> "VideoProcessor":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Show a camera feed through switchable filters "
        "(g: grayscale, b: blur, e: edges, s: sepia; ESC or Q quits)."
    )
    parser.add_argument("--camera", type=int, default=0, help="camera index")
    args = parser.parse_args(argv)

    with VideoProcessor() as processor:
        try:
            processor.open_camera(args.camera)
        except CameraError as exc:
            print(f"[ERROR] {exc}", file=sys.stderr)
            return 1
        try:
            processor.process_frames()
        except Exception as exc:
            print(f"[FATAL] Exception: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())