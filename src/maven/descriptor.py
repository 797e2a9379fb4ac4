"""Read module identifiers from ``pom.xml`` descriptors."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from errors import DescriptorError

_LOGGER = logging.getLogger(__name__)

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
_NS = {"maven": POM_NAMESPACE}


def read_artifact_id(path: Path) -> str:
    """Return the project's own ``artifactId`` from a POM file.

    Only the direct child of ``<project>`` counts; the ``<parent>`` and
    dependency artifact ids are ignored. Both namespaced and bare POMs are
    accepted.

    Returns
    -------
    str
        Module identifier.

    Raises
    ------
    DescriptorError
        Raised when the file cannot be read or parsed, or declares no
        artifactId.
    """
    try:
        root = ET.parse(path).getroot()
    except (OSError, ET.ParseError) as exc:
        msg = f"Cannot read module descriptor {path}: {exc}"
        raise DescriptorError(msg) from exc
    element = root.find("maven:artifactId", _NS)
    if element is None:
        element = root.find("artifactId")
    text = (element.text or "").strip() if element is not None else ""
    if not text:
        msg = f"Module descriptor {path} declares no artifactId."
        raise DescriptorError(msg)
    _LOGGER.debug("Read artifactId %s from %s", text, path)
    return text


__all__ = ["POM_NAMESPACE", "read_artifact_id"]
