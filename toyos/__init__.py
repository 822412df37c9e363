"""Toy operating-system services: a block file system, a logged key-value store and a syscall dispatcher."""

__version__ = "0.1.0"