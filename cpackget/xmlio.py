"""Reading and writing XML documents."""

from __future__ import annotations

import copy
import logging
import os
import xml.etree.ElementTree as ET

log = logging.getLogger(__name__)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'


def read_xml(path: str | os.PathLike) -> ET.Element:
    """Parse the XML file at ``path`` and return its root element.

    Raises ``OSError`` when the file cannot be read and
    ``xml.etree.ElementTree.ParseError`` when it is not well-formed XML.
    The encoding declared by the document is honoured.
    """
    log.debug('Reading XML from "%s"', path)
    with open(path, "rb") as stream:
        contents = stream.read()
    return ET.fromstring(contents)


def write_xml(path: str | os.PathLike, root: ET.Element) -> None:
    """Write ``root`` to ``path`` with an XML header and one-space indentation.

    Empty elements are written as an open and a close tag. The element passed
    in is left untouched.
    """
    log.debug('Writing XML to "%s"', path)
    tree = copy.deepcopy(root)
    ET.indent(tree, space=" ")
    body = ET.tostring(tree, encoding="unicode", short_empty_elements=False)
    with open(path, "w", encoding="utf-8", newline="") as stream:
        stream.write(XML_HEADER + body)