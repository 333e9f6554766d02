# framefilters

framefilters shows a live camera feed with an image filter applied to it.
While the feed is running you can switch between filters from the keyboard.
A thumbnail of the unfiltered frame, one fifth of its size, sits 10 pixels
in from the bottom-left corner.

## Installation

```
pip install framefilters
```

To run the tests as well:

```
pip install "framefilters[test]"
pytest
```

## Running the viewer

```
framefilters
```

This opens camera 0 through `pygame.camera` and shows the processed feed in
a window titled "Processed Frame". Pick another camera with `--camera`:

```
framefilters --camera 1
```

Frames are scaled to 640x480 before they are filtered. If the camera cannot
be opened, or an error stops the loop, a message is printed to standard
error and the command exits with status 1. The loop also ends when the
camera yields an empty frame.

Keys:

| Key           | Action                          |
|---------------|---------------------------------|
| `g`           | Grayscale (the starting filter) |
| `b`           | Gaussian blur                   |
| `e`           | Edge detection                  |
| `s`           | Sepia                           |
| `q`, `Q`, Esc | Quit                            |

Closing the window quits as well. Each switch prints the name of the new
filter.

When the blur filter is first selected, a "Blur Size" slider appears under
the frame; drag it with the left mouse button. The slider sets the kernel
size from 1 to 31, and an even size is rounded up to the next odd one.

## Using the filters in code

`framefilters.filters` holds the filters. Each takes a frame and returns a
new one. A frame is a NumPy array of 8-bit pixels with shape
`(height, width, 3)` in BGR channel order; the grayscale, edge and sepia
filters raise `ValueError` for any other shape. Every filter returns three
channels, the grayscale and edge images included.

```python
import numpy as np
from framefilters.filters import BlurFilter, EdgeDetectionFilter, GrayscaleFilter, SepiaFilter

frame = np.zeros((480, 640, 3), dtype=np.uint8)

gray = GrayscaleFilter().apply(frame)
edges = EdgeDetectionFilter().apply(frame)   # Canny, thresholds 100 and 200
sepia = SepiaFilter().apply(frame)

blur = BlurFilter()          # kernel size 11 to start with
blur.set_blur_size(7)        # values below 1 become 1
blurred = blur.apply(frame)
```

To write a filter of your own, subclass `Filter` and implement `apply`.
Override `create_trackbar` if the filter has a setting to expose in the
viewer window.

## The processor

`framefilters.processor.VideoProcessor` runs the capture loop. It works as
a context manager and releases the camera and window when the block ends.
`open_camera(index)` raises `CameraError` if the camera cannot be opened,
and `process_frames()` raises `CameraError` if no camera is open.

```python
from framefilters.processor import CameraError, VideoProcessor

with VideoProcessor() as processor:
    try:
        processor.open_camera(0)
    except CameraError as exc:
        print(exc)
    else:
        processor.process_frames()
```

`apply_filter(frame)` runs the current filter (grayscale to start with) on
one frame and insets the thumbnail, without needing a camera or a window.

## What it does not do

The viewer shows only the processed feed; there is no separate window for
the raw frames. It does not record or save video or images, and reads only
from cameras that `pygame.camera` can list.