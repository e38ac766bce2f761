# chickadee

Pure-Python support code for a small x86-64 teaching kernel: bit
arithmetic, typed address ranges, intrusive lists, a printf engine, a CGA
text console model, and the on-disk layouts of its file system, journal
and ELF executables. It uses only the standard library.

## Modules

- `chickadee.bits`: `msb`, `lsb`, `round_down`, `round_up`,
  `round_down_pow2`, `round_up_pow2`, and `BitsetView`, a bit array over a
  mutable sequence of 64-bit words with `find_lsb` / `find_lsz` searches.
- `chickadee.errors`: the `Errno` and `Syscall` number enumerations,
  `is_error`, and the `ChickadeeError` exception carrying an `Errno`.
- `chickadee.memrange`: `MemRangeSet`, a bounded set of typed address
  ranges over `[0, limit)` that merges neighbouring ranges of the same
  type. `set` raises `MemRangeSetFull`, leaving the set unchanged, when a
  change would need more ranges than `maxsize`. `log_lines` describes the
  ranges as text.
- `chickadee.dlist`: `LinkedList` and `ListLinks`, an intrusive doubly
  linked list; items carry a `ListLinks` in the attribute the list is told
  about.
- `chickadee.text`: C-style character classes (`isspace`, `isdigit`,
  `tolower`, ...) and string functions (`strcmp`, `strncasecmp`,
  `strchr`, `strstr`, `memcmp`, `strlcpy`, ...). A NUL ends a string early.
- `chickadee.numconv`: `from_chars`, `to_chars`, `strtol` and `strtoul`,
  with base-prefix detection and 64-bit overflow rules. `from_chars` and
  `to_chars` raise `ChickadeeError`; `strtol` and `strtoul` saturate.
- `chickadee.rand`: a linear congruential generator, as `rand`, `srand`
  and `rand_between` over shared state, and `RandEngine`, a generator that
  keeps its own state.
- `chickadee.printf`: a printf engine (`Printer`, `StringPrinter`,
  `snprintf`, `sprintf`) supporting `d i u x X p s c` and the `C` color
  conversion, flags, widths and precisions.
- `chickadee.console`: an 80×25 CGA text console model that understands
  ANSI `ESC [ ... m` color escapes (`Console`, `ConsolePrinter`,
  `AnsiEscapeBuffer`, `cpos`).
- `chickadee.chkfs`: pack and unpack the file system and journal
  structures (`Superblock`, `Extent`, `Inode`, `Dirent`, `JBlockRef`,
  `JMetaBlock`) and compare transaction ids with `tid_lt` and friends.
- `chickadee.elf`: pack and unpack ELF headers, program headers, sections
  and symbols, and list an image's program headers with `program_headers`.

## Example

```python
from chickadee.printf import sprintf
from chickadee.memrange import MemRangeSet
from chickadee.console import Console, cpos

sprintf("%08x|%-5d|%s", 0xBEEF, 42, "hi")

ranges = MemRangeSet(0x10000, 16)
ranges.set(0x1000, 0x3000, 1)
ranges.type(0x2000)  # 1

con = Console()
con.printf(cpos(0, 0), "\x1b[32mhello\n")
con.row_text(0)
```

## What it does not do

The package has no command-line tools. It reads and writes individual
file system, journal and ELF structures, but it does not build or check
whole file system images, replay a journal, or load programs. The console
is an in-memory model only; nothing is drawn to a screen.

## Running the tests

```
pip install -e .[test]
pytest
```