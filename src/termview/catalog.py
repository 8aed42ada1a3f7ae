"""Known terminology files and how to address them on the public bucket."""

from __future__ import annotations

from typing import List
from urllib.parse import urlparse

BASE_DOMAIN = "https://tuva-public-resources.s3.amazonaws.com"
DEFAULT_FOLDER = "versioned_terminology"
PROVIDER_FOLDER = "versioned_provider_data"

VERSIONS = ("0.14.9", "0.14.11", "0.14.12")
DEFAULT_VERSION = "0.14.12"
DEFAULT_FILE = "admit_source.csv_0_0_0.csv.gz"

TERMINOLOGY_FILES = (
    "admit_source.csv_0_0_0.csv.gz",
    "admit_type.csv_0_0_0.csv.gz",
    "apr_drg.csv_0_0_0.csv.gz",
    "bill_type.csv_0_0_0.csv.gz",
    "ccs_services_procedures.csv_0_0_0.csv.gz",
    "claim_type.csv_0_0_0.csv.gz",
    "discharge_disposition.csv_0_0_0.csv.gz",
    "encounter_type.csv_0_0_0.csv.gz",
    "ethnicity.csv_0_0_0.csv.gz",
    "gender.csv_0_0_0.csv.gz",
    "hcpcs_level_2.csv_0_0_0.csv.gz",
    "hcpcs_to_rbcs.csv_0_0_0.csv.gz",
    "icd_10_pcs_cms_ontology.csv_0_0_0.csv.gz",
    "icd_10_cm.csv_0_0_0.csv.gz",
    "icd_10_pcs.csv_0_0_0.csv.gz",
    "icd_9_cm.csv_0_0_0.csv.gz",
    "icd_9_pcs.csv_0_0_0.csv.gz",
    "loinc.csv_0_0_0.csv.gz",
    "loinc_deprecated_mapping.csv_0_0_0.csv.gz",
    "mdc.csv_0_0_0.csv.gz",
    "medicare_dual_eligibility.csv_0_0_0.csv.gz",
    "medicare_orec.csv_0_0_0.csv.gz",
    "medicare_status.csv_0_0_0.csv.gz",
    "ms_drg.csv_0_0_0.csv.gz",
    "ms_drg_weights_los.csv_0_0_0.csv.gz",
    "ndc.csv_0_0_0.csv.gz",
    "nitos.csv_0_0_0.csv.gz",
    "other_provider_taxonomy.csv_0_0_0.csv.gz",
    "payer_type.csv_0_0_0.csv.gz",
    "place_of_service.csv_0_0_0.csv.gz",
    "present_on_admission.csv_0_0_0.csv.gz",
    "provider.csv_0_0_0.csv.gz",
    "race.csv_0_0_0.csv.gz",
    "revenue_center.csv_0_0_0.csv.gz",
    "rxnorm_brand_generic.csv_0_0_0.csv.gz",
    "rxnorm_to_atc.csv_0_0_0.csv.gz",
    "snomed_ct.csv_0_0_0.csv.gz",
    "snomed_ct_transitive_closures.csv_0_0_0.csv.gz",
    "snomed_icd_10_map.csv_0_0_0.csv.gz",
)


def base_url(file_name: str, version: str = DEFAULT_VERSION, *, base_domain: str = BASE_DOMAIN) -> str:
    """Folder URL for a file: provider data lives apart from the terminology sets."""
    folder = PROVIDER_FOLDER if "provider" in file_name else DEFAULT_FOLDER
    return f"{base_domain.rstrip('/')}/{folder}/{version}/"


def build_locator(file_name: str, version: str = DEFAULT_VERSION, *, base_domain: str = BASE_DOMAIN) -> str:
    if version not in VERSIONS:
        raise ValueError(f"Unknown terminology version {version!r}; expected one of {', '.join(VERSIONS)}")
    return base_url(file_name, version, base_domain=base_domain) + file_name


def search_files(term: str = "") -> List[str]:
    """Catalog entries containing `term`, case-insensitively."""
    term = term.lower()
    return [name for name in TERMINOLOGY_FILES if term in name.lower()]


def file_name_from_locator(locator: str) -> str:
    path = urlparse(str(locator)).path or str(locator)
    return path.rstrip("/").rsplit("/", 1)[-1]
