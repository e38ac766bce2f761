"""On-disk structures of the chickadee file system and its journal.

All multi-byte fields are stored little-endian. Each structure packs to
exactly its on-disk size and unpacks from the start of a buffer that is at
least that long.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import ClassVar, Union

Buffer = Union[bytes, bytearray, memoryview]

BLOCKSIZE = 4096
BITSPERBLOCK = BLOCKSIZE * 8

SUPERBLOCK_OFFSET = 512
MAGIC = 0xFBBFBB003EE9BEEF

NDIRECT = 4
INODESIZE = 64
INODESPERBLOCK = BLOCKSIZE // INODESIZE
EXTENTSIZE = 8
EXTENTSPERBLOCK = BLOCKSIZE // EXTENTSIZE

MAXNAMELEN = 123
DIRENTSIZE = 128

TYPE_REGULAR = 1
TYPE_DIRECTORY = 2

JOURNALMAGIC = 0xFBBFBB009EEBCEED
NOCHECKSUM = 0x82600A5F
REF_SIZE = (BLOCKSIZE // 4 - 7) // 3

# Offset within a journal metablock at which its checksum starts.
CHECKSUM_OFFSET = 16

_TID_MASK = 0xFFFF


class JournalFlag(enum.IntFlag):
    """Bits of `JMetaBlock.flags`."""

    META = 0x01
    ERROR = 0x02
    CORRUPT = 0x04
    START = 0x10
    COMMIT = 0x20
    COMPLETE = 0x40


class BlockRefFlag(enum.IntFlag):
    """Bits of `JBlockRef.bflags`."""

    ESCAPED = 0x100
    NONJOURNALED = 0x200
    OVERWRITTEN = 0x400


def _tiddiff(x: int, y: int) -> int:
    d = (x - y) & _TID_MASK
    return d - 0x10000 if d & 0x8000 else d


def tid_lt(x: int, y: int) -> bool:
    """Return True if transaction id `x` precedes `y`, modulo wraparound."""
    return _tiddiff(x, y) < 0


def tid_le(x: int, y: int) -> bool:
    return _tiddiff(x, y) <= 0


def tid_ge(x: int, y: int) -> bool:
    return _tiddiff(x, y) >= 0


def tid_gt(x: int, y: int) -> bool:
    return _tiddiff(x, y) > 0


def _pack(fmt: struct.Struct, *values: object) -> bytes:
    try:
        return fmt.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


def _unpack(fmt: struct.Struct, data: Buffer, offset: int = 0) -> tuple:
    if offset < 0 or len(data) - offset < fmt.size:
        raise ValueError(f"need {fmt.size} bytes at offset {offset}, have {len(data)}")
    return fmt.unpack_from(data, offset)


_SUPERBLOCK = struct.Struct("<QIIiIIIIII4x")
_EXTENT = struct.Struct("<II")
_INODE_HEAD = struct.Struct("<IIIIII")
_DIRENT = struct.Struct(f"<i{MAXNAMELEN + 1}s")
_JBLOCKREF = struct.Struct("<IIH2x")
_JMETA_HEAD = struct.Struct("<QI4xHHHHHH")


@dataclass
class Superblock:
    """File system layout description, stored at `SUPERBLOCK_OFFSET` in block 0."""

    SIZE: ClassVar[int] = _SUPERBLOCK.size

    magic: int = MAGIC
    nblocks: int = 0
    nswap: int = 0
    ninodes: int = 0
    njournal: int = 0
    swap_bn: int = 0
    fbb_bn: int = 0
    inode_bn: int = 0
    data_bn: int = 0
    journal_bn: int = 0

    def pack(self) -> bytes:
        return _pack(
            _SUPERBLOCK,
            self.magic,
            self.nblocks,
            self.nswap,
            self.ninodes,
            self.njournal,
            self.swap_bn,
            self.fbb_bn,
            self.inode_bn,
            self.data_bn,
            self.journal_bn,
        )

    @classmethod
    def unpack(cls, data: Buffer) -> Superblock:
        return cls(*_unpack(_SUPERBLOCK, data))


@dataclass(frozen=True)
class Extent:
    """A run of `count` blocks starting at `first`; count 0 ends a list."""

    SIZE: ClassVar[int] = _EXTENT.size

    first: int = 0
    count: int = 0

    def pack(self) -> bytes:
        return _pack(_EXTENT, self.first, self.count)

    @classmethod
    def unpack(cls, data: Buffer) -> Extent:
        return cls(*_unpack(_EXTENT, data))


def _empty_direct() -> tuple[Extent, ...]:
    return tuple(Extent() for _ in range(NDIRECT))


@dataclass
class Inode:
    """A file's metadata and its block extents."""

    SIZE: ClassVar[int] = INODESIZE

    type: int = 0
    size: int = 0
    nlink: int = 0
    flags: int = 0
    mlock: int = 0
    mbcindex: int = 0
    direct: tuple[Extent, ...] = field(default_factory=_empty_direct)
    indirect: Extent = field(default_factory=Extent)

    def pack(self) -> bytes:
        if len(self.direct) != NDIRECT:
            raise ValueError(f"inode needs exactly {NDIRECT} direct extents")
        head = _pack(
            _INODE_HEAD,
            self.type,
            self.size,
            self.nlink,
            self.flags,
            self.mlock,
            self.mbcindex,
        )
        return head + b"".join(e.pack() for e in self.direct) + self.indirect.pack()

    @classmethod
    def unpack(cls, data: Buffer) -> Inode:
        if len(data) < INODESIZE:
            raise ValueError(f"need {INODESIZE} bytes, have {len(data)}")
        view = memoryview(data)
        head = _unpack(_INODE_HEAD, view)
        base = _INODE_HEAD.size
        extents = [
            Extent.unpack(view[base + k * EXTENTSIZE :]) for k in range(NDIRECT + 1)
        ]
        return cls(*head, direct=tuple(extents[:NDIRECT]), indirect=extents[NDIRECT])


@dataclass
class Dirent:
    """A directory entry; `inum` 0 marks an unused slot."""

    SIZE: ClassVar[int] = DIRENTSIZE

    inum: int = 0
    name: str = ""

    def pack(self) -> bytes:
        raw = self.name.encode("utf-8", "surrogateescape")
        if b"\0" in raw:
            raise ValueError("name must not contain NUL")
        if len(raw) > MAXNAMELEN:
            raise ValueError(f"name longer than {MAXNAMELEN} bytes")
        return _pack(_DIRENT, self.inum, raw)

    @classmethod
    def unpack(cls, data: Buffer) -> Dirent:
        inum, raw = _unpack(_DIRENT, data)
        name = raw.split(b"\0", 1)[0].decode("utf-8", "surrogateescape")
        return cls(inum, name)


@dataclass(frozen=True)
class JBlockRef:
    """A journal metablock's reference to one journaled data block."""

    SIZE: ClassVar[int] = _JBLOCKREF.size

    bn: int = 0
    bchecksum: int = 0
    bflags: int = 0

    def pack(self) -> bytes:
        return _pack(_JBLOCKREF, self.bn, self.bchecksum, self.bflags)

    @classmethod
    def unpack(cls, data: Buffer) -> JBlockRef:
        return cls(*_unpack(_JBLOCKREF, data))


@dataclass
class JMetaBlock:
    """A journal metablock. `nref` is the number of entries in `refs`."""

    SIZE: ClassVar[int] = BLOCKSIZE

    magic: int = JOURNALMAGIC
    checksum: int = NOCHECKSUM
    seq: int = 0
    tid: int = 0
    commit_boundary: int = 0
    complete_boundary: int = 0
    flags: int = JournalFlag.META
    refs: list[JBlockRef] = field(default_factory=list)

    @property
    def nref(self) -> int:
        return len(self.refs)

    def is_valid_meta(self) -> bool:
        """Return True if this block is flagged as a metablock without error."""
        mask = JournalFlag.META | JournalFlag.ERROR
        return (self.flags & mask) == JournalFlag.META

    def pack(self) -> bytes:
        if len(self.refs) > REF_SIZE:
            raise ValueError(f"at most {REF_SIZE} block references fit")
        head = _pack(
            _JMETA_HEAD,
            self.magic,
            self.checksum,
            self.seq,
            self.tid,
            self.commit_boundary,
            self.complete_boundary,
            int(self.flags),
            len(self.refs),
        )
        body = head + b"".join(r.pack() for r in self.refs)
        return body + bytes(BLOCKSIZE - len(body))

    @classmethod
    def unpack(cls, data: Buffer) -> JMetaBlock:
        if len(data) < BLOCKSIZE:
            raise ValueError(f"need {BLOCKSIZE} bytes, have {len(data)}")
        view = memoryview(data)
        magic, checksum, seq, tid, commit, complete, flags, nref = _unpack(
            _JMETA_HEAD, view
        )
        if nref > REF_SIZE:
            raise ValueError(f"metablock claims {nref} references, at most {REF_SIZE}")
        base = _JMETA_HEAD.size
        refs = [JBlockRef.unpack(view[base + k * JBlockRef.SIZE :]) for k in range(nref)]
        return cls(magic, checksum, seq, tid, commit, complete, flags, refs)