# cpackget

A library for working with CMSIS software packs: parsing pack identifiers,
file names and versions, reading and editing PDSC pack descriptions and PIDX
pack indexes, and downloading and extracting pack archives with size limits
and path checks.

## Installation

```
pip install cpackget
```

## Modules

| Module | What it holds |
| --- | --- |
| `cpackget.packs` | `extract_pack_info`, `PackInfo`, `VersionModifier`, `format_pack_version`, name and version validators |
| `cpackget.semver` | `semver_compare`, `semver_compare_range`, `semver_major`, `semver_major_minor`, `semver_strip_meta` |
| `cpackget.pdsc` | `PdscXML`, `ReleaseTag`, `PackagesTag`, `PackageTag` |
| `cpackget.pidx` | `PidxXML`, `PdscTag` |
| `cpackget.xmlio` | `read_xml`, `write_xml` |
| `cpackget.transfer` | `download_file`, `check_connection`, `copy_file`, `move_file`, `Settings` |
| `cpackget.security` | `secure_copy`, `secure_inflate_file` |
| `cpackget.signals` | `start_signal_watcher`, `stop_signal_watcher`, `should_abort`, `set_abort_check` |
| `cpackget.progress` | `EncodedProgress` |
| `cpackget.fsutils` | file and directory helpers (`file_exists`, `ensure_dir`, `list_dir`, `set_read_only_recursive`, ...) |
| `cpackget.textutils` | `is_base64`, `rand_string_bytes`, `count_lines`, `filter_pack_id` |
| `cpackget.errors` | `CpackgetError` and its subclasses |

## Pack names and versions

```python
from cpackget.packs import extract_pack_info, format_pack_version, VersionModifier

info = extract_pack_info("TheVendor::ThePack@^1.0.0")
assert info.vendor == "TheVendor"
assert info.pack == "ThePack"
assert info.version == "1.0.0"
assert info.is_pack_id
assert info.version_modifier is VersionModifier.GREATEST_COMPATIBLE

format_pack_version(["Pack", "TheVendor", "1.0.0:_"])  # 'TheVendor::Pack@>=1.0.0'
```

Accepted forms are `Vendor.Pack`, `Vendor.Pack.x.y.z`, `Vendor::Pack`,
`Vendor::Pack` followed by `@`, `@^`, `@~`, `@>=` or `>=` and a version (or
`@latest`), and file names or URLs such as `Vendor.Pack.x.y.z.pack`,
`Vendor.Pack.x.y.z.zip` or `Vendor.Pack.pdsc`. For a file name, `location`
becomes the URL directory, or a `file://localhost/` URL of the absolute local
directory. A name matching none of these raises
`cpackget.errors.BadPackNameError`.

Versions are compared as semantic versions that tolerate leading zeros and
ignore a `:high` range suffix:

```python
from cpackget.semver import semver_compare, semver_compare_range, semver_major_minor

semver_compare("01.02.03", "1.2.3")           # 0
semver_compare_range("1.2.3", "1.2.0:1.2.4")  # 0, inside the range
semver_compare_range("1.2.3", "1.2.4")        # -1, below the minimum
semver_major_minor("01.02.03")                # '1.2'
```

## PDSC and PIDX files

```python
from cpackget.pdsc import PdscXML
from cpackget.pidx import PidxXML, PdscTag

pdsc = PdscXML("TheVendor.DevPack.pdsc")
pdsc.read()
print(pdsc.latest_version(), pdsc.pack_url(""))
print(pdsc.dependencies())   # [(name, vendor, version), ...] or None

index = PidxXML("local_repository.pidx")
index.read()                 # creates an empty index file if there is none
index.add_pdsc(PdscTag(vendor="TheVendor", name="ThePack",
                       version="0.0.1", url="http://vendor.example.com/"))
index.write()
```

`PidxXML.add_pdsc` raises `PdscEntryExistsError` for a duplicate entry and
`remove_pdsc` raises `PdscEntryNotFoundError` when nothing matches; removing a
tag without a version removes that URL's entry from every version of the pack.
`PdscXML.save` writes the fields the class knows back to a file.

## Transfers and extraction

```python
from cpackget import transfer

transfer.settings.cache_dir = "/tmp/packs"
path = transfer.download_file("https://vendor.example.com/TheVendor.ThePack.1.0.0.pack", timeout=30)
```

`download_file` reuses a file already present in the cache directory and
otherwise fetches it, showing a progress bar on an interactive terminal or
encoded progress lines (`EncodedProgress`) when `settings.encoded_progress` is
set. `check_connection` raises `ConnectionOfflineError` when a URL cannot be
reached.

`secure_copy` copies in 4 KiB chunks and raises `FileTooBigError` past
`MAX_DOWNLOAD_SIZE` (20G). `secure_inflate_file` extracts one member of a
`zipfile.ZipFile`, refusing names containing `../` or `..\` with
`InsecureZipFileNameError`. Once `start_signal_watcher()` has run, Ctrl+C or
SIGTERM makes an ongoing copy stop with `TerminatedByUserError`.

All errors raised by the package derive from `cpackget.errors.CpackgetError`.

## What this package does not do

It is a library of building blocks only. It has no command-line program, and it
does not manage a pack root: it does not install, list, update or remove packs,
keep a public index up to date, or handle licence agreements. Those workflows
have to be assembled from the functions above.

## Running the tests

```
pip install cpackget[test]
pytest
```