"""
YAML catalogue parser.
"""

import logging
from typing import Any, Dict, List

import yaml

from ..errors import CatalogueError
from .registry import build_matcher
from .schema import Catalogue, ExpectationSpec

logger = logging.getLogger(__name__)


def parse_catalogue(yaml_content: str) -> Catalogue:
    """Parse a catalogue from YAML content."""
    data = yaml.safe_load(yaml_content)
    return _parse_catalogue_dict(data)


def load_catalogue(file_path: str) -> Catalogue:
    """Load a catalogue from a YAML file."""
    with open(file_path, 'r') as f:
        return parse_catalogue(f.read())


def _parse_catalogue_dict(data: Dict[str, Any]) -> Catalogue:
    """Parse a catalogue from a dictionary."""
    if not isinstance(data, dict):
        raise CatalogueError("Catalogue must be a mapping")

    # Validate required fields
    for field in ["name", "expectations"]:
        if field not in data:
            raise CatalogueError(f"Missing required field: {field}")

    expectations = _parse_expectations(data["expectations"])
    logger.debug("Parsed catalogue %s with %d expectations", data["name"], len(expectations))

    return Catalogue(
        name=data["name"],
        description=data.get("description", ""),
        expectations=expectations,
    )


def _parse_expectations(data: List[Dict[str, Any]]) -> List[ExpectationSpec]:
    """Parse expectation list."""
    if not isinstance(data, list):
        raise CatalogueError("'expectations' must be a list")

    expectations = []
    for index, expectation_data in enumerate(data):
        for field in ["subject", "matcher"]:
            if field not in expectation_data:
                raise CatalogueError(f"Expectation {index}: missing required field: {field}")
        try:
            matcher = build_matcher(expectation_data["matcher"])
        except CatalogueError as e:
            raise CatalogueError(f"Expectation {index}: {e}") from e

        expectations.append(ExpectationSpec(
            subject=expectation_data["subject"],
            matcher=matcher,
            description=expectation_data.get("description", ""),
            negate=bool(expectation_data.get("negate", False)),
        ))

    return expectations
