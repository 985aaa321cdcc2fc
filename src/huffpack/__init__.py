"""huffpack: byte-level Huffman file compressor."""

__version__ = "0.1.0"
