"""
Case Loader

Loads validation cases from JSON files.
Supports both the case library format ({"library_id": ..., "cases": [...]}) and
the individual case format.
"""

import json
from dataclasses import dataclass
from pathlib import Path

from capability_validation.domain.constants import CATEGORIES, DIFFICULTIES
from capability_validation.domain.entities import (
    Case,
    ExpectedResult,
    ExpectedType,
    Scenario,
    ScoringWeights,
)
from capability_validation.domain.errors import CaseFormatError
from capability_validation.infrastructure.repositories import InMemoryCaseRepository


@dataclass
class CaseLibrary:
    """Case library definition"""
    library_id: str
    name: str
    description: str
    cases: list[Case]

    def to_repository(self) -> InMemoryCaseRepository:
        return InMemoryCaseRepository(self.cases)


def _parse_expected(data: dict, case_id: str) -> ExpectedResult:
    """Create an ExpectedResult, validating the variant"""
    raw_type = data.get("type")
    try:
        expected_type = ExpectedType(raw_type)
    except ValueError:
        valid = [t.value for t in ExpectedType]
        raise CaseFormatError(f"Case {case_id}: invalid expected type '{raw_type}'. Valid values: {valid}")

    return ExpectedResult(
        type=expected_type,
        content=data.get("content"),
        pattern=data.get("pattern"),
        criteria=data.get("criteria"),
        examples=data.get("examples"),
    )


def parse_case(data: dict) -> Case:
    """
    Create a Case object from dictionary data

    Args:
        data: Case data dictionary

    Returns:
        Case: Case object

    Raises:
        CaseFormatError: If a required field is missing or a value is invalid
    """
    for required in ("id", "scenario", "expected"):
        if required not in data:
            raise CaseFormatError(f"Required field '{required}' is missing: {data.get('id', '<unknown>')}")

    case_id = data["id"]
    scenario_data = data["scenario"]
    if "task" not in scenario_data:
        raise CaseFormatError(f"Case {case_id}: scenario.task is required")

    category = data.get("category", "custom")
    if category not in CATEGORIES:
        raise CaseFormatError(f"Case {case_id}: invalid category '{category}'. Valid values: {CATEGORIES}")
    difficulty = data.get("difficulty", "intermediate")
    if difficulty not in DIFFICULTIES:
        raise CaseFormatError(f"Case {case_id}: invalid difficulty '{difficulty}'. Valid values: {DIFFICULTIES}")

    try:
        scoring = ScoringWeights(**data.get("scoring", {}))
    except (TypeError, ValueError) as e:
        raise CaseFormatError(f"Case {case_id}: invalid scoring weights: {e}") from e

    return Case(
        id=case_id,
        title=data.get("title", ""),
        description=data.get("description", ""),
        category=category,
        difficulty=difficulty,
        tags=data.get("tags", []),
        scenario=Scenario(
            task=scenario_data["task"],
            context=scenario_data.get("context", ""),
            input=scenario_data.get("input", ""),
            constraints=scenario_data.get("constraints") or [],
        ),
        expected=_parse_expected(data["expected"], case_id),
        scoring=scoring,
        version=data.get("version", "1.0.0"),
    )


def load_case_library(file_path: str) -> CaseLibrary:
    """
    Load a case library JSON (a single-case file becomes a one-case library)

    Args:
        file_path: Path to the JSON file

    Returns:
        CaseLibrary: Case library object

    Raises:
        FileNotFoundError: If the file does not exist
        CaseFormatError: If a case is malformed
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if "cases" not in data:
        case = parse_case(data)
        return CaseLibrary(
            library_id=case.id,
            name=case.title or case.id,
            description=case.description,
            cases=[case],
        )

    cases = [parse_case(case_data) for case_data in data["cases"]]
    ids = [c.id for c in cases]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise CaseFormatError(f"Duplicate case ids in {file_path}: {duplicates}")

    return CaseLibrary(
        library_id=data.get("library_id", Path(file_path).stem),
        name=data.get("name", Path(file_path).stem),
        description=data.get("description", ""),
        cases=cases,
    )
