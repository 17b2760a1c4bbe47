"""The PDSC pack description file format (the parts cpackget needs)."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .pidx import PdscTag
from .semver import semver_compare, semver_strip_meta
from .xmlio import read_xml, write_xml

log = logging.getLogger(__name__)


@dataclass
class ReleaseTag:
    """A ``<release>`` entry."""

    version: str = ""
    date: str = ""
    url: str = ""


@dataclass
class PackageTag:
    """A pack this pack requires."""

    vendor: str = ""
    name: str = ""
    version: str = ""


@dataclass
class PackagesTag:
    """A ``<packages>`` group of required packs."""

    packages: list[PackageTag] = field(default_factory=list)


def _child_text(parent: ET.Element, tag: str) -> str:
    element = parent.find(tag)
    if element is None:
        return ""
    return element.text or ""


@dataclass
class PdscXML:
    """Vendor, name, URL, releases and requirements of a pack."""

    file_name: str = ""
    vendor: str = ""
    url: str = ""
    name: str = ""
    license: str = ""
    releases: list[ReleaseTag] = field(default_factory=list)
    requirements: list[PackagesTag] = field(default_factory=list)

    def read(self) -> None:
        """Load ``file_name`` into this object."""
        log.debug('Reading pdsc from file "%s"', self.file_name)
        root = read_xml(self.file_name)
        if root.tag != "package":
            raise ValueError(f"expected element type <package> but have <{root.tag}>")

        self.vendor = _child_text(root, "vendor")
        self.url = _child_text(root, "url")
        self.name = _child_text(root, "name")
        self.license = _child_text(root, "license")

        releases = root.find("releases")
        self.releases = [
            ReleaseTag(
                version=element.get("version", ""),
                date=element.get("Date", ""),
                url=element.get("url", ""),
            )
            for element in (releases.findall("release") if releases is not None else ())
        ]

        requirements = root.find("requirements")
        self.requirements = [
            PackagesTag(
                [
                    PackageTag(
                        vendor=package.get("vendor", ""),
                        name=package.get("name", ""),
                        version=package.get("version", ""),
                    )
                    for package in group.findall("package")
                ]
            )
            for group in (requirements.findall("packages") if requirements is not None else ())
        ]

    def save(self, path: str | os.PathLike | None = None) -> None:
        """Write the known fields to ``path`` (``file_name`` by default)."""
        root = ET.Element("package")
        ET.SubElement(root, "vendor").text = self.vendor
        ET.SubElement(root, "url").text = self.url
        ET.SubElement(root, "name").text = self.name
        ET.SubElement(root, "license").text = self.license
        releases = ET.SubElement(root, "releases")
        for release in self.releases:
            ET.SubElement(
                releases, "release", {"version": release.version, "Date": release.date, "url": release.url}
            )
        requirements = ET.SubElement(root, "requirements")
        for group in self.requirements:
            packages = ET.SubElement(requirements, "packages")
            for package in group.packages:
                ET.SubElement(
                    packages,
                    "package",
                    {"vendor": package.vendor, "name": package.name, "version": package.version},
                )
        write_xml(self.file_name if path is None else path, root)

    def latest_version(self) -> str:
        """Version of the first release listed, or an empty string."""
        return self.releases[0].version if self.releases else ""

    def all_releases(self) -> list[str]:
        """Versions of every release listed."""
        return [release.version for release in self.releases]

    def find_release_tag_by_version(self, version: str) -> ReleaseTag | None:
        """Return the release matching ``version`` (the first one if empty)."""
        if not self.releases:
            return None
        if not version:
            return self.releases[0]
        return next(
            (release for release in self.releases if semver_compare(release.version, version) == 0),
            None,
        )

    def tag(self) -> PdscTag:
        """Index entry describing the latest release of this pack."""
        return PdscTag(vendor=self.vendor, url=self.url, name=self.name, version=self.latest_version())

    def pack_url(self, version: str = "") -> str:
        """URL of the pack file for ``version`` (the latest if empty)."""
        base_url = self.url
        if base_url and not base_url.endswith("/"):
            base_url += "/"
        if not version:
            version = self.latest_version()
        return f"{base_url}{self.vendor}.{self.name}.{semver_strip_meta(version)}.pack"

    def dependencies(self) -> list[tuple[str, str, str]] | None:
        """Required packs as ``(name, vendor, version)``; ``None`` without ``<packages>``.

        The version is ``latest`` when none is given, ``x.y.z:_`` for a minimum
        version and ``a.b.c:x.y.z`` for a range.
        """
        if not self.requirements:
            return None
        dependencies = []
        for group in self.requirements:
            for package in group.packages:
                version = package.version
                if not version:
                    version = "latest"
                elif ":" not in version:
                    version += ":_"
                dependency = (package.name, package.vendor, version)
                log.debug("found %s dependency", dependency)
                dependencies.append(dependency)
        return dependencies