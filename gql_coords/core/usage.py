"""Coordinate usage across a corpus of documents.

Aggregates how many documents reference each coordinate, for coverage and
deprecation tracking.
"""

import logging
import os
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from .errors import CoordinateError
from .extractor import CoordinateExtractor, parse_document
from .ir import TypeIndex

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = (".graphql", ".gql")


@dataclass
class UsageReport:
    """Per-coordinate document counts for a set of documents."""
    counts: Counter = field(default_factory=Counter)
    documents: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    def add(self, name: str, coordinates: Iterable[str]):
        """Record the coordinates of one document."""
        self.documents.append(name)
        self.counts.update(set(coordinates))

    def unknown(self, index: TypeIndex) -> list[str]:
        """Return referenced coordinates the schema does not declare."""
        return sorted(c for c in self.counts if not index.knows(c))

    def unused(self, index: TypeIndex) -> list[str]:
        """Return declared `Type.field` coordinates no document references."""
        aliases = index.aliases
        declared = {
            f"{info.name}.{field_name}"
            for key, info in index.types.items()
            if key not in aliases
            for field_name in info.fields
        }
        return sorted(declared - set(self.counts))

    def as_dict(self) -> dict:
        return {
            "documents": len(self.documents),
            "coordinates": dict(sorted(self.counts.items())),
            "failures": dict(self.failures),
        }


def collect_documents(path: str, extensions=DOCUMENT_EXTENSIONS) -> list[str]:
    """Collect all document files from a file or directory path."""
    if os.path.isfile(path):
        return [path]
    files = []
    for root, _, filenames in os.walk(path):
        for filename in filenames:
            if filename.endswith(extensions):
                files.append(os.path.join(root, filename))
    return sorted(files)


def build_usage_report(index: TypeIndex, documents: Iterable[str]) -> UsageReport:
    """Extract coordinates from each document file into one report.

    A document that cannot be read, fails to parse, or contains a
    subscription is recorded under `failures` and does not contribute coordinates.
    """
    report = UsageReport()
    extractor = CoordinateExtractor(index)

    for file_path in documents:
        try:
            with open(file_path, encoding="utf-8") as f:
                content = f.read()
            coordinates = extractor.extract(parse_document(content, file_path))
        except (CoordinateError, OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", file_path, e)
            report.failures[file_path] = str(e)
            continue
        logger.debug("%s: %d coordinates", file_path, len(coordinates))
        report.add(file_path, coordinates)

    return report
