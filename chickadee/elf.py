"""Structures and constants of 64-bit little-endian ELF executables."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar, Union

Buffer = Union[bytes, bytearray, memoryview]

ELF_MAGIC = 0x464C457F  # "\x7FELF" read as a little-endian word

ELF_ET_EXEC = 2

ELF_PTYPE_LOAD = 1

ELF_PFLAG_EXEC = 1
ELF_PFLAG_WRITE = 2
ELF_PFLAG_READ = 4

ELF_SHT_NULL = 0
ELF_SHT_PROGBITS = 1
ELF_SHT_SYMTAB = 2
ELF_SHT_STRTAB = 3
ELF_SHT_NOBITS = 8

ELF_SHF_ALLOC = 2

ELF_STN_UNDEF = 0

ELF_SHN_UNDEF = 0
ELF_SHN_ABS = 0xFFF1
ELF_SHN_COMMON = 0xFFF2

ELF_STB_MASK = 0xF0
ELF_STB_LOCAL = 0x00
ELF_STB_GLOBAL = 0x10
ELF_STB_WEAK = 0x20
ELF_STT_MASK = 0x0F
ELF_STT_OBJECT = 0x01
ELF_STT_FUNC = 0x02

_HEADER = struct.Struct("<I12sHHIQQQIHHHHHH")
_PROGRAM = struct.Struct("<IIQQQQQQ")
_SECTION = struct.Struct("<IIQQQQIIQQ")
_SYMBOL = struct.Struct("<IBBHQQ")


def _pack(fmt: struct.Struct, *values: object) -> bytes:
    try:
        return fmt.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


def _unpack(fmt: struct.Struct, data: Buffer, offset: int) -> tuple:
    if offset < 0 or len(data) - offset < fmt.size:
        raise ValueError(f"need {fmt.size} bytes at offset {offset}, have {len(data)}")
    return fmt.unpack_from(data, offset)


@dataclass
class ElfHeader:
    """The executable header at the start of an ELF file."""

    SIZE: ClassVar[int] = _HEADER.size

    e_magic: int = ELF_MAGIC
    e_elf: bytes = bytes(12)
    e_type: int = 0
    e_machine: int = 0
    e_version: int = 0
    e_entry: int = 0
    e_phoff: int = 0
    e_shoff: int = 0
    e_flags: int = 0
    e_ehsize: int = 0
    e_phentsize: int = 0
    e_phnum: int = 0
    e_shentsize: int = 0
    e_shnum: int = 0
    e_shstrndx: int = 0

    def pack(self) -> bytes:
        if len(self.e_elf) > 12:
            raise ValueError("e_elf holds at most 12 bytes")
        return _pack(
            _HEADER,
            self.e_magic,
            bytes(self.e_elf),
            self.e_type,
            self.e_machine,
            self.e_version,
            self.e_entry,
            self.e_phoff,
            self.e_shoff,
            self.e_flags,
            self.e_ehsize,
            self.e_phentsize,
            self.e_phnum,
            self.e_shentsize,
            self.e_shnum,
            self.e_shstrndx,
        )

    @classmethod
    def unpack(cls, data: Buffer, offset: int = 0) -> ElfHeader:
        return cls(*_unpack(_HEADER, data, offset))


@dataclass
class ElfProgram:
    """A program header: one segment for the loader."""

    SIZE: ClassVar[int] = _PROGRAM.size

    p_type: int = 0
    p_flags: int = 0
    p_offset: int = 0
    p_va: int = 0
    p_pa: int = 0
    p_filesz: int = 0
    p_memsz: int = 0
    p_align: int = 0

    def pack(self) -> bytes:
        return _pack(
            _PROGRAM,
            self.p_type,
            self.p_flags,
            self.p_offset,
            self.p_va,
            self.p_pa,
            self.p_filesz,
            self.p_memsz,
            self.p_align,
        )

    @classmethod
    def unpack(cls, data: Buffer, offset: int = 0) -> ElfProgram:
        return cls(*_unpack(_PROGRAM, data, offset))


@dataclass
class ElfSection:
    """A section header."""

    SIZE: ClassVar[int] = _SECTION.size

    sh_name: int = 0
    sh_type: int = 0
    sh_flags: int = 0
    sh_addr: int = 0
    sh_offset: int = 0
    sh_size: int = 0
    sh_link: int = 0
    sh_info: int = 0
    sh_addralign: int = 0
    sh_entsize: int = 0

    def pack(self) -> bytes:
        return _pack(
            _SECTION,
            self.sh_name,
            self.sh_type,
            self.sh_flags,
            self.sh_addr,
            self.sh_offset,
            self.sh_size,
            self.sh_link,
            self.sh_info,
            self.sh_addralign,
            self.sh_entsize,
        )

    @classmethod
    def unpack(cls, data: Buffer, offset: int = 0) -> ElfSection:
        return cls(*_unpack(_SECTION, data, offset))


@dataclass
class ElfSymbol:
    """A symbol table entry."""

    SIZE: ClassVar[int] = _SYMBOL.size

    st_name: int = 0
    st_info: int = 0
    st_other: int = 0
    st_shndx: int = 0
    st_value: int = 0
    st_size: int = 0

    @property
    def binding(self) -> int:
        return self.st_info & ELF_STB_MASK

    @property
    def kind(self) -> int:
        return self.st_info & ELF_STT_MASK

    def pack(self) -> bytes:
        return _pack(
            _SYMBOL,
            self.st_name,
            self.st_info,
            self.st_other,
            self.st_shndx,
            self.st_value,
            self.st_size,
        )

    @classmethod
    def unpack(cls, data: Buffer, offset: int = 0) -> ElfSymbol:
        return cls(*_unpack(_SYMBOL, data, offset))


def program_headers(data: Buffer) -> list[ElfProgram]:
    """Return the program headers of the ELF image in `data`.

    Raises ValueError if the magic number is wrong, the header entry size
    does not match, or the image is truncated.
    """
    header = ElfHeader.unpack(data)
    if header.e_magic != ELF_MAGIC:
        raise ValueError("not an ELF image")
    if header.e_phnum and header.e_phentsize != ElfProgram.SIZE:
        raise ValueError(f"unexpected program header size {header.e_phentsize}")
    return [
        ElfProgram.unpack(data, header.e_phoff + k * ElfProgram.SIZE)
        for k in range(header.e_phnum)
    ]