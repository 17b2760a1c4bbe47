import pytest

from cpackget.pdsc import PackagesTag, PackageTag, PdscXML, ReleaseTag
from cpackget.semver import semver_compare

DEVPACK = """<?xml version="1.0" encoding="UTF-8"?>
<package schemaVersion="1.4">
  <vendor>TheVendor</vendor>
  <name>DevPack</name>
  <url>file:///testdata/devpack/1.2.3/</url>
  <license>LICENSE.txt</license>
  <releases>
    <release version="1.2.3+meta3">Third release</release>
    <release version="1.2.2">Second release</release>
  </releases>
  <requirements>
    <packages>
      <package vendor="ARM" name="CMSIS" version="5.6.0"/>
      <package vendor="ARM" name="Other"/>
    </packages>
  </requirements>
</package>
"""


@pytest.fixture
def devpack(tmp_path):
    path = tmp_path / "TheVendor.DevPack.pdsc"
    path.write_text(DEVPACK)
    pdsc = PdscXML(str(path))
    pdsc.read()
    return pdsc


def _dependencies_for(version):
    pdsc = PdscXML()
    pdsc.requirements.append(PackagesTag([PackageTag(vendor="TheVendor", name="TheName", version=version)]))
    return pdsc.dependencies()


def test_latest_version():
    pdsc = PdscXML(vendor="TheVendor", url="http://the.url/", name="TheName")
    assert pdsc.find_release_tag_by_version("") is None
    assert pdsc.latest_version() == ""
    pdsc.releases.append(ReleaseTag(version="0.0.2"))
    pdsc.releases.append(ReleaseTag(version="0.0.1"))
    assert pdsc.latest_version() == "0.0.2"


def test_all_releases():
    pdsc = PdscXML(vendor="TheVendor", url="http://the.url/", name="TheName")
    pdsc.releases += [ReleaseTag(version="0.0.2"), ReleaseTag(version="0.0.1")]
    assert sorted(pdsc.all_releases()) == ["0.0.1", "0.0.2"]


def test_tag_generation():
    pdsc = PdscXML(vendor="TheVendor", url="http://the.url/", name="TheName")
    pdsc.releases.append(ReleaseTag(version="0.0.1"))
    tag = pdsc.tag()
    assert tag.vendor == "TheVendor"
    assert tag.url == "http://the.url/"
    assert tag.name == "TheName"
    assert tag.version == "0.0.1"


def test_reading_pdsc_file(devpack):
    assert devpack.vendor == "TheVendor"
    assert devpack.url == "file:///testdata/devpack/1.2.3/"
    assert devpack.name == "DevPack"
    assert devpack.license == "LICENSE.txt"
    assert semver_compare(devpack.latest_version(), "1.2.3") == 0
    assert devpack.latest_version() == "1.2.3+meta3"


def test_finding_release_tag(devpack):
    assert devpack.find_release_tag_by_version("1.2.3").version == "1.2.3+meta3"
    assert devpack.find_release_tag_by_version("1.2.3+meta0").version == "1.2.3+meta3"
    assert devpack.find_release_tag_by_version("1.2.2").version == "1.2.2"
    assert devpack.find_release_tag_by_version("1.2.2+meta").version == "1.2.2"
    assert devpack.find_release_tag_by_version("").version == "1.2.3+meta3"
    assert devpack.find_release_tag_by_version("9.9.9") is None


def test_reading_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PdscXML(str(tmp_path / "missing.pdsc")).read()


def test_building_pack_url():
    pdsc = PdscXML(vendor="TheVendor", url="http://the.url", name="TheName")
    pdsc.releases.append(ReleaseTag(version="0.0.1"))
    expected = "http://the.url/TheVendor.TheName.0.0.1.pack"
    assert pdsc.pack_url("") == expected
    assert pdsc.pack_url("0.0.1") == expected


def test_pack_url_strips_meta(devpack):
    assert devpack.pack_url("") == "file:///testdata/devpack/1.2.3/TheVendor.DevPack.1.2.3.pack"


def test_dependencies_minimum_version():
    assert _dependencies_for("0.0.1") == [("TheName", "TheVendor", "0.0.1:_")]


def test_dependencies_range():
    assert _dependencies_for("0.0.1:0.0.2") == [("TheName", "TheVendor", "0.0.1:0.0.2")]


def test_dependencies_latest():
    assert _dependencies_for("") == [("TheName", "TheVendor", "latest")]


def test_dependencies_none():
    assert PdscXML().dependencies() is None


def test_dependencies_from_file(devpack):
    assert devpack.dependencies() == [
        ("CMSIS", "ARM", "5.6.0:_"),
        ("Other", "ARM", "latest"),
    ]


def test_save_round_trip(devpack, tmp_path):
    devpack.releases[0].version = "1.2.4"
    out = tmp_path / "saved.pdsc"
    devpack.save(str(out))
    again = PdscXML(str(out))
    again.read()
    assert again.latest_version() == "1.2.4"
    assert again.all_releases() == ["1.2.4", "1.2.2"]
    assert again.vendor == "TheVendor"
    assert again.dependencies() == devpack.dependencies()