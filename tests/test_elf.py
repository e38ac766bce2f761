import pytest
from hypothesis import given
from hypothesis import strategies as st

from chickadee.elf import (
    ELF_ET_EXEC,
    ELF_MAGIC,
    ELF_PFLAG_EXEC,
    ELF_PFLAG_READ,
    ELF_PFLAG_WRITE,
    ELF_PTYPE_LOAD,
    ELF_SHT_SYMTAB,
    ELF_STB_GLOBAL,
    ELF_STT_FUNC,
    ElfHeader,
    ElfProgram,
    ElfSection,
    ElfSymbol,
    program_headers,
)

u64 = st.integers(0, 2**64 - 1)


def _image(programs):
    header = ElfHeader(
        e_type=ELF_ET_EXEC,
        e_entry=0x100000,
        e_phoff=ElfHeader.SIZE,
        e_phentsize=ElfProgram.SIZE,
        e_phnum=len(programs),
    )
    return header.pack() + b"".join(p.pack() for p in programs)


def test_header_starts_with_elf_magic():
    assert ElfHeader().pack()[:4] == b"\x7fELF"


def test_header_field_offsets():
    h = ElfHeader(e_entry=0x1122334455667788, e_phoff=0xABCD, e_phnum=3)
    packed = h.pack()
    assert packed[0x18:0x20] == (0x1122334455667788).to_bytes(8, "little")
    assert packed[0x20:0x28] == (0xABCD).to_bytes(8, "little")
    assert packed[0x38:0x3A] == (3).to_bytes(2, "little")
    assert len(packed) == 0x40


def test_header_round_trip_at_offset():
    h = ElfHeader(e_elf=b"\x02\x01\x01" + bytes(9), e_type=ELF_ET_EXEC, e_shnum=4)
    data = b"junk" + h.pack()
    assert ElfHeader.unpack(data, 4) == h


def test_header_rejects_long_ident():
    with pytest.raises(ValueError):
        ElfHeader(e_elf=bytes(13)).pack()


@given(u64, u64, u64)
def test_program_round_trip(offset, va, size):
    p = ElfProgram(ELF_PTYPE_LOAD, ELF_PFLAG_READ | ELF_PFLAG_WRITE, offset, va, 0,
                   size, size, 4096)
    packed = p.pack()
    assert len(packed) == ElfProgram.SIZE
    assert ElfProgram.unpack(packed) == p


def test_program_field_offsets():
    p = ElfProgram(p_va=0x400000, p_memsz=0x2000)
    packed = p.pack()
    assert packed[0x10:0x18] == (0x400000).to_bytes(8, "little")
    assert packed[0x28:0x30] == (0x2000).to_bytes(8, "little")


def test_section_round_trip():
    s = ElfSection(sh_name=1, sh_type=ELF_SHT_SYMTAB, sh_offset=500, sh_size=48,
                   sh_link=2, sh_entsize=ElfSymbol.SIZE)
    assert ElfSection.unpack(s.pack()) == s


def test_symbol_round_trip_and_info():
    sym = ElfSymbol(st_name=5, st_info=ELF_STB_GLOBAL | ELF_STT_FUNC, st_shndx=1,
                    st_value=0x100000, st_size=32)
    back = ElfSymbol.unpack(sym.pack())
    assert back == sym
    assert back.binding == ELF_STB_GLOBAL
    assert back.kind == ELF_STT_FUNC


def test_program_headers_lists_segments():
    programs = [
        ElfProgram(ELF_PTYPE_LOAD, ELF_PFLAG_READ | ELF_PFLAG_EXEC, 0x1000, 0x100000,
                   0, 0x500, 0x500, 0x1000),
        ElfProgram(ELF_PTYPE_LOAD, ELF_PFLAG_READ | ELF_PFLAG_WRITE, 0x2000, 0x101000,
                   0, 0x100, 0x800, 0x1000),
    ]
    assert program_headers(_image(programs)) == programs


def test_program_headers_empty():
    assert program_headers(_image([])) == []


def test_program_headers_bad_magic():
    data = bytearray(_image([ElfProgram()]))
    data[0] = 0
    with pytest.raises(ValueError):
        program_headers(bytes(data))


def test_program_headers_truncated():
    data = _image([ElfProgram(), ElfProgram()])
    with pytest.raises(ValueError):
        program_headers(data[:-1])


def test_program_headers_wrong_entry_size():
    header = ElfHeader(e_phoff=ElfHeader.SIZE, e_phentsize=ElfProgram.SIZE + 8, e_phnum=1)
    with pytest.raises(ValueError):
        program_headers(header.pack() + bytes(ElfProgram.SIZE + 8))


def test_magic_constant_matches_bytes():
    assert ElfHeader.unpack(_image([])).e_magic == ELF_MAGIC