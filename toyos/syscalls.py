"""A tiny system-call dispatcher returning descriptive strings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence


def _require(args: Sequence[str], count: int, name: str) -> None:
    if len(args) < count:
        raise ValueError(f"{name} expects {count} argument(s), got {len(args)}")


def syscall_open(args: Sequence[str]) -> str:
    _require(args, 1, "open")
    return f"Opened file: {args[0]}"


def syscall_read(args: Sequence[str]) -> str:
    _require(args, 1, "read")
    return f"Read from fd: {args[0]}"


def syscall_write(args: Sequence[str]) -> str:
    _require(args, 2, "write")
    return f"Wrote to fd: {args[0]} content: {args[1]}"


_SYSCALLS: dict[str, Callable[[Sequence[str]], str]] = {
    "open": syscall_open,
    "read": syscall_read,
    "write": syscall_write,
}


def dispatch_syscall(syscall: str, args: Sequence[str]) -> str:
    """Run the named call; an unknown name yields "Unknown syscall"."""
    handler = _SYSCALLS.get(syscall)
    if handler is None:
        return "Unknown syscall"
    return handler(args)


@dataclass(frozen=True)
class SyscallResponse:
    """Status 0 with a result on success, status 1 with an error otherwise."""

    status: int
    result: str = ""
    error: str = ""


def handle_syscall(syscall: str, args: Sequence[str]) -> SyscallResponse:
    try:
        return SyscallResponse(status=0, result=dispatch_syscall(syscall, list(args)))
    except Exception as exc:
        return SyscallResponse(status=1, error=str(exc))