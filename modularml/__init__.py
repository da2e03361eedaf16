"""Row-major tensors, swappable tensor operations and ONNX-style graph nodes."""

__version__ = "0.1.0"