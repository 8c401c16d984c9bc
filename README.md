# samlib

A collection of small helpers for system programs. Errors are raised as
exceptions (`OSError`, `ValueError` and the like) rather than returned as
status codes.

## Installation

```
pip install samlib
```

To run the test suite from a checkout:

```
pip install .[test]
pytest
```

## Modules

| Module | What it offers |
| --- | --- |
| `samlib.strfmt` | `strfmt(fmt, *args)`, a `printf` subset (`%s %c %d %o %u %x %f`, an `l` modifier, widths, `-` for left-justified strings, a leading `0` for zero-padded numbers); `strfmt_buffer` for a fixed-size result plus the untruncated length; `int2str`, `uint2str`, `hex2str`, `octal2str`, `double2fixed`. |
| `samlib.strutil` | Bounded copies where sizes include a terminator: `strlcpy`, `strlcat`, `safecpy`, `safecat`, `strconcat`. |
| `samlib.timeutil` | `get_month`, the `Timeval` dataclass, `delta_timeval`, `timeval_delta`, `timeval_delta_d`, `timeval_delta2`, `timeval_delta_valid`, and `mbs` for throughput in MiB per second. |
| `samlib.slackware` | `pkgparse` splits a Slackware package name or path into a `SlackPackage` (name, version, arch, build_tag). |
| `samlib.tea` | Tiny Encryption Algorithm with a 16-byte key: `tea_encrypt` (pads a trailing partial block with zeros), `tea_decrypt`, `tea_bag_size`. |
| `samlib.xoroshiro` | `Xoroshiro128Plus`, seeded from the system entropy source or a clock, and a shared generator behind `init_seed`, `finish_seed`, `rand128`. |
| `samlib.md5`, `samlib.sha256` | Incremental `MD5` and `SHA256` objects (`update`, `digest`, `hexdigest`), one-shot `md5` / `sha256`, `md5str` / `sha256str`, and `md5sum` / `md5sum_fileobj` for files. |
| `samlib.globmatch` | `fnmatch(pattern, string, flags)` with `FnmFlag` options: `PATHNAME`, `NOESCAPE`, `PERIOD`, `LEADING_DIR`, `CASEFOLD` and `EXTMATCH` for `?(..) *(..) +(..) @(..) !(..)` patterns. |
| `samlib.walkfiles` | `Walker` visits a file or directory tree with ignore regexes, glob or regex name filters and `WalkFlag` options; `walkfiles` uses a shared walker. |
| `samlib.lines` | `readfile` and `readcmd` pass each line to a callback (`ReadFlag` skips empty or `#` comment lines); `do_system` runs a shell command and returns its status. |
| `samlib.files` | `create_file`, `mktempfile`, `tmpfilename`, `mkdir_p`, `is_elf`. |
| `samlib.proc` | `readproccmdline`, `readproccmd`, `readprocstat` (a `ProcStat`), `findpid`, `dump_stack`. Uses `/proc` where present and psutil otherwise; `readprocstat` needs `/proc`. |
| `samlib.netinfo` | `get_interfaces`, `ip_addr`, `get_gateway`, `get_address`, `get_address4`. |
| `samlib.sockets` | `socket_listen`, `socket_accept`, `socket_connect` with `SockFlag.LOCAL` and `SockFlag.NONBLOCKING`. |
| `samlib.threads` | `SamThread` / `samthread_create` / `samthread_join` for threads returning an int, `samthread_tid`, and `Mutex` and `Spinlock` (both usable as context managers). |
| `samlib.mpool` | `MPool`, an LRU cache of fixed-size `Page`s over a regular file, with pinning, dirty write-back, `sync` and optional in/out page filters. |

## Examples

```python
from samlib.strfmt import strfmt
from samlib.sha256 import sha256, sha256str
from samlib.slackware import pkgparse

strfmt("%-6s|%05d|%x", "ab", 42, 255)   # 'ab    |00042|ff'
sha256str(sha256(b"abc"))               # 'ba7816bf...'
pkg = pkgparse("/var/pkgs/bash-5.2-x86_64-1.txz")
pkg.name, pkg.version, pkg.arch         # ('bash', '5.2', 'x86_64')
```

Walking a tree:

```python
from samlib.walkfiles import Walker

walker = Walker()
walker.add_filter("*.c")
walker.add_ignore(r"/build/")
walker.walk("src", lambda path, st: print(path) or 0, 0)
```

Reading a command's output line by line:

```python
from samlib.lines import readcmd

lines = []
status = readcmd(lambda line: lines.append(line), "ls /")
```

## What it does not do

- There is no command-line program; everything is a library call.
- `MPool` is only a page cache. There is no key/value store or B-tree
  built on top of it.
## What it does not do