"""The PIDX pack index file format."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .errors import PdscEntryExistsError, PdscEntryNotFoundError
from .fsutils import file_exists
from .xmlio import read_xml, write_xml

log = logging.getLogger(__name__)


@dataclass
class PdscTag:
    """A ``<pdsc>`` entry of a pack index."""

    vendor: str = ""
    url: str = ""
    name: str = ""
    version: str = ""

    def key(self) -> str:
        """Unique key of the entry: ``Vendor.Name.Version``."""
        return f"{self.vendor}.{self.name}.{self.version}"

    def yaml_pack_id(self) -> str:
        """Pack id in the ``Vendor::Name@Version`` form."""
        return f"{self.vendor}::{self.name}@{self.version}"

    def pack_url(self) -> str:
        """URL of the pack file this entry describes."""
        return self.url + self.key() + ".pack"

    def to_element(self) -> ET.Element:
        """Build the ``<pdsc>`` element for this entry."""
        return ET.Element(
            "pdsc",
            {"vendor": self.vendor, "url": self.url, "name": self.name, "version": self.version},
        )

    @classmethod
    def from_element(cls, element: ET.Element) -> PdscTag:
        """Build an entry from a ``<pdsc>`` element."""
        return cls(
            vendor=element.get("vendor", ""),
            url=element.get("url", ""),
            name=element.get("name", ""),
            version=element.get("version", ""),
        )


def _child_text(parent: ET.Element, tag: str) -> str:
    element = parent.find(tag)
    if element is None:
        return ""
    return element.text or ""


class PidxXML:
    """A pack index file holding ``<pdsc>`` entries grouped by their key."""

    def __init__(self, file_name: str | os.PathLike) -> None:
        log.debug('Initializing PidxXML object for "%s"', file_name)
        self.file_name = os.fspath(file_name)
        self.schema_version = ""
        self.vendor = ""
        self.url = ""
        self._pdscs: dict[str, list[PdscTag]] = {}

    def add_pdsc(self, pdsc: PdscTag) -> None:
        """Add an entry; raise ``PdscEntryExistsError`` if it is already there."""
        log.debug('Adding pdsc tag "%s" to "%s"', pdsc, self.file_name)
        if self.has_pdsc(pdsc) is not None:
            raise PdscEntryExistsError()
        self._pdscs.setdefault(pdsc.key(), []).append(pdsc)

    def remove_pdsc(self, pdsc: PdscTag) -> None:
        """Remove an entry.

        Without a version, the entry with the same URL is removed from every
        version of the pack. Raises ``PdscEntryNotFoundError`` if nothing matched.
        """
        log.debug('Removing pdsc tag "%s" from "%s"', pdsc, self.file_name)
        to_remove: list[tuple[str, int]] = []
        if pdsc.version:
            index = self.has_pdsc(pdsc)
            if index is not None:
                to_remove.append((pdsc.key(), index))
        else:
            target = pdsc.key()
            for key, tags in self._pdscs.items():
                if target not in key:
                    continue
                index = next((i for i, tag in enumerate(tags) if tag.url == pdsc.url), None)
                if index is not None:
                    to_remove.append((key, index))

        if not to_remove:
            raise PdscEntryNotFoundError()

        for key, index in to_remove:
            log.debug('Removing "%s:%d"', key, index)
            tags = self._pdscs[key]
            del tags[index]
            if not tags:
                del self._pdscs[key]

    def has_pdsc(self, pdsc: PdscTag) -> int | None:
        """Return the position of the matching entry among its key, or ``None``."""
        tags = self._pdscs.get(pdsc.key(), [])
        index = next((i for i, tag in enumerate(tags) if tag.url == pdsc.url), None)
        log.debug(
            'Checking if pidx "%s" contains "%s (%s)": %s', self.file_name, pdsc.key(), pdsc.url, index
        )
        return index

    def list_pdsc_tags(self) -> list[PdscTag]:
        """Return every entry of the index."""
        return [tag for tags in self._pdscs.values() for tag in tags]

    def find_pdsc_tags(self, pdsc: PdscTag) -> list[PdscTag]:
        """Return the entries matching ``pdsc``; without a version, those of every version."""
        log.debug('Searching for pdsc "%s"', pdsc.key())
        target = pdsc.key()
        if pdsc.version:
            found = list(self._pdscs.get(target, []))
        else:
            found = [tag for key, tags in self._pdscs.items() if target in key for tag in tags]
        log.debug('"%s" contains %d pdsc tag(s) for "%s"', self.file_name, len(found), target)
        return found

    def read(self) -> None:
        """Load the index file, creating an empty one if it does not exist."""
        log.debug('Reading pidx from file "%s"', self.file_name)
        self._pdscs = {}

        if not file_exists(self.file_name):
            log.debug('"%s" not found. Creating a new one.', self.file_name)
            self.schema_version = "1.1.0"
            vendor_name = "local_repository.pidx" if not self.url else os.path.basename(self.file_name)
            self.vendor = os.path.splitext(vendor_name)[0]
            self.write()
            return

        root = read_xml(self.file_name)
        if root.tag != "index":
            raise ValueError(f"expected element type <index> but have <{root.tag}>")

        self.schema_version = root.get("schemaVersion", "")
        self.vendor = _child_text(root, "vendor")
        self.url = _child_text(root, "url")

        pindex = root.find("pindex")
        for element in pindex.findall("pdsc") if pindex is not None else ():
            tag = PdscTag.from_element(element)
            log.debug('Registering "%s"', tag.key())
            self._pdscs.setdefault(tag.key(), []).append(tag)

    def write(self) -> None:
        """Save the index to its file."""
        log.debug('Writing pidx file to "%s"', self.file_name)
        root = ET.Element("index", {"schemaVersion": self.schema_version})
        ET.SubElement(root, "vendor").text = self.vendor
        ET.SubElement(root, "url").text = self.url
        pindex = ET.SubElement(root, "pindex")
        pindex.extend(tag.to_element() for tag in self.list_pdsc_tags())
        write_xml(self.file_name, root)