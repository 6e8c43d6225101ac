"""Ed25519 signing, ZIP215 verification and batch verification in pure Python."""

__version__ = "2.1.0"