"""Camera viewer and BGR image filters: grayscale, blur, edges and sepia."""

__version__ = "0.1.0"
__all__ = ["filters", "processor"]