"""Structured logging cores, tees, write syncers, an in-memory observer and line and gRPC-style adapters."""

__version__ = "0.1.0"
__all__ = ["core", "write_syncer", "testwriters", "observer", "iowriter", "grpclog"]