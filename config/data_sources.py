"""
Data source configuration for grant filtering.

The UI shows friendly data source names while the backend expects the
identifiers stored in its data_sources table. This table is a read-only copy
of that mapping.
"""

import re
from typing import Dict, List

# Display names, abbreviations and database names -> backend UUIDs
DATA_SOURCE_MAPPING: Dict[str, str] = {
    # Common abbreviations
    "NIH": "5d2ad9ba-b18c-4c6d-9926-e08e58d97a2e",
    "NSF": "2a7b0850-aaa7-49f0-8615-6797dc21e5b1",
    "DOE": "35662128-107f-450c-904e-feaeba3caa2c",  # published through Grants.gov
    "USDA": "35662128-107f-450c-904e-feaeba3caa2c",  # published through Grants.gov
    "NASA": "35662128-107f-450c-904e-feaeba3caa2c",  # published through Grants.gov
    # Full names
    "California Grants Portal": "9d0483f6-0620-40ac-85f7-ccf047a2879b",
    "Canadian Open Government": "4f0acd83-72f4-4d98-b157-e8570c31d7f7",
    "EU Funding & Tenders Portal": "cba84e15-d24d-4b27-81c0-24cc583fa0bb",
    "Federal Register": "2b1c9d18-38a3-4686-866d-9c9ec87a5693",
    "Grants.gov": "35662128-107f-450c-904e-feaeba3caa2c",
    "New York State Data": "d044f897-bcd0-4aa6-aba6-8d9b3115773e",
    "NIH RePORTER": "5d2ad9ba-b18c-4c6d-9926-e08e58d97a2e",
    "NSF Awards": "2a7b0850-aaa7-49f0-8615-6797dc21e5b1",
    "OpenAlex": "3da411cd-5ecd-4832-920e-46726c69aed1",
    "SAM.gov Entity Management": "8c3b76b2-1b2e-4cce-88b2-80388e8d0f14",
    "UKRI Gateway to Research": "ac988b94-b89a-4b17-acc5-a57f0f45cfa7",
    "USAspending.gov": "d57417a7-e665-47f7-9432-6a64fea5155e",
    "World Bank Projects": "07fbd9b2-e725-470e-a527-a4d36c8706a2",
    # Database names
    "california_grants": "9d0483f6-0620-40ac-85f7-ccf047a2879b",
    "canadian_open_gov": "4f0acd83-72f4-4d98-b157-e8570c31d7f7",
    "eu_funding_portal": "cba84e15-d24d-4b27-81c0-24cc583fa0bb",
    "federal_register": "2b1c9d18-38a3-4686-866d-9c9ec87a5693",
    "grants_gov": "35662128-107f-450c-904e-feaeba3caa2c",
    "ny_state": "d044f897-bcd0-4aa6-aba6-8d9b3115773e",
    "nih_reporter": "5d2ad9ba-b18c-4c6d-9926-e08e58d97a2e",
    "nsf_awards": "2a7b0850-aaa7-49f0-8615-6797dc21e5b1",
    "openalex": "3da411cd-5ecd-4832-920e-46726c69aed1",
    "sam_gov": "8c3b76b2-1b2e-4cce-88b2-80388e8d0f14",
    "ukri_gateway": "ac988b94-b89a-4b17-acc5-a57f0f45cfa7",
    "usaspending": "d57417a7-e665-47f7-9432-6a64fea5155e",
    "world_bank": "07fbd9b2-e725-470e-a527-a4d36c8706a2",
}

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def is_uuid(value: str) -> bool:
    """Check if a value already looks like a backend UUID."""
    return bool(UUID_PATTERN.match(value))


def map_data_source_to_uuid(data_source: str) -> str:
    """
    Map a data source name to its UUID.

    Values that are already UUIDs, or that are not in the mapping, are
    returned unchanged.
    """
    if is_uuid(data_source):
        return data_source
    return DATA_SOURCE_MAPPING.get(data_source, data_source)


def map_data_sources_to_uuids(data_sources: List[str]) -> List[str]:
    """Map a list of data source names to UUIDs, preserving order."""
    return [map_data_source_to_uuid(source) for source in data_sources]


def get_data_source_options() -> List[str]:
    """Get list of data source display names (database names excluded)."""
    return [name for name in DATA_SOURCE_MAPPING if not re.match(r"^[a-z_]+$", name)]
