"""Manifest generation for table directories."""

import logging
from pathlib import Path

from translit.ingest.loader import LoadReport
from translit.models import TableArtifact, TableManifest, create_timestamp
from translit.utils.hashing import hash_file


MANIFEST_VERSION = 1


def build_manifest(report: LoadReport, data_dir: Path, logger: logging.Logger) -> TableManifest:
    """
    Build a manifest of the table files behind a load report.

    Args:
        report: Loader output
        data_dir: Directory the tables were loaded from
        logger: Logger instance

    Returns:
        Manifest with one artifact per table file
    """
    data_dir = Path(data_dir)
    artifacts = []

    for file_report in report.files:
        path = file_report.path
        artifacts.append(
            TableArtifact(
                path=path.name,
                kind=file_report.kind,
                hash=hash_file(path),
                size_bytes=path.stat().st_size,
                record_count=file_report.record_count,
                rejected_count=len(file_report.rejected),
            )
        )
        logger.debug(f"Added {path.name} to manifest")

    pairs = report.tables.pairs()
    manifest = TableManifest(
        data_dir=str(data_dir),
        version=MANIFEST_VERSION,
        created_at=create_timestamp(),
        artifacts=artifacts,
        metadata={
            "pairs": [f"{source.value}-{target.value}" for source, target in pairs],
            "total_records": sum(a.record_count for a in artifacts),
        },
    )

    logger.info(f"Built manifest with {len(artifacts)} table files")
    return manifest
