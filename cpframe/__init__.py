"""Game framework utilities: logging, diagnostics, hashing and encoding, compression, file I/O, AES encryption, serialization, math and input tracking."""

__version__ = "0.1.0"