"""System call numbers, error codes and the exception that carries them."""

from __future__ import annotations

import enum

_WORD_MASK = (1 << 64) - 1

MIN_ERROR = -100


class Errno(enum.IntEnum):
    """Negative error codes returned by system calls."""

    E_AGAIN = -11
    E_BADF = -9
    E_BUSY = -16
    E_CHILD = -10
    E_FAULT = -14
    E_FBIG = -27
    E_INTR = -4
    E_INVAL = -22
    E_IO = -5
    E_MFILE = -24
    E_NAMETOOLONG = -36
    E_NFILE = -23
    E_NOENT = -2
    E_NOEXEC = -8
    E_NOMEM = -12
    E_NOSPC = -28
    E_NOSYS = -38
    E_NXIO = -6
    E_OVERFLOW = -75
    E_PERM = -1
    E_PIPE = -32
    E_RANGE = -34
    E_SPIPE = -29
    E_SRCH = -3
    E_TXTBSY = -26
    E_2BIG = -7

    @property
    def description(self) -> str:
        """A short human-readable description of the error."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    Errno.E_AGAIN: "Try again",
    Errno.E_BADF: "Bad file number",
    Errno.E_BUSY: "Resource busy",
    Errno.E_CHILD: "No child processes",
    Errno.E_FAULT: "Bad address",
    Errno.E_FBIG: "File too large",
    Errno.E_INTR: "Interrupted system call",
    Errno.E_INVAL: "Invalid argument",
    Errno.E_IO: "I/O error",
    Errno.E_MFILE: "Too many open files",
    Errno.E_NAMETOOLONG: "File name too long",
    Errno.E_NFILE: "File table overflow",
    Errno.E_NOENT: "No such file or directory",
    Errno.E_NOEXEC: "Exec format error",
    Errno.E_NOMEM: "Out of memory",
    Errno.E_NOSPC: "No space left on device",
    Errno.E_NOSYS: "Invalid system call number",
    Errno.E_NXIO: "No such device or address",
    Errno.E_OVERFLOW: "Value too large for data type",
    Errno.E_PERM: "Operation not permitted",
    Errno.E_PIPE: "Broken pipe",
    Errno.E_RANGE: "Out of range",
    Errno.E_SPIPE: "Illegal seek",
    Errno.E_SRCH: "No such process",
    Errno.E_TXTBSY: "Text file busy",
    Errno.E_2BIG: "Argument list too long",
}


class Syscall(enum.IntEnum):
    """System call numbers."""

    GETPID = 1
    YIELD = 2
    PAUSE = 3
    CONSOLETYPE = 4
    PANIC = 5
    PAGE_ALLOC = 6
    FORK = 7
    EXIT = 8
    READ = 9
    WRITE = 10
    CLOSE = 11
    DUP2 = 12
    PIPE = 13
    EXECV = 14
    OPEN = 15
    UNLINK = 16
    READDISKFILE = 17
    SYNC = 18
    LSEEK = 19
    FTRUNCATE = 20
    RENAME = 21
    GETTID = 22
    CLONE = 23
    TEXIT = 24
    KTEST = 25
    GETUSAGE = 128
    NASTY = 129
    TESTBUDDY = 130
    SLEEP = 131
    GETPPID = 132
    WAITPID = 133


def is_error(r: int) -> bool:
    """Return True if raw system call return value `r` encodes an error.

    The value is interpreted as an unsigned 64-bit word, so both small
    negative numbers and their two's-complement forms count as errors.
    """
    return (int(r) & _WORD_MASK) >= (MIN_ERROR & _WORD_MASK)


class ChickadeeError(Exception):
    """An error identified by an `Errno` code."""

    def __init__(self, errno: int, message: str | None = None) -> None:
        self.errno = Errno(errno)
        self.message = message if message is not None else self.errno.description
        super().__init__(f"{self.errno.name}: {self.message}")