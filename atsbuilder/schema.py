from typing import Any, Dict, List, Tuple

from .dates import parse_date

PROFILE_LISTS = ["experience", "education", "skills", "projects"]
JOB_LISTS = ["requirements", "skills", "keywords"]
ENTRY_LISTS = {
    "experience": ["achievements", "technologies"],
    "education": ["achievements"],
    "projects": ["technologies", "highlights"],
}
DATE_FIELDS = ["startDate", "endDate", "start_date", "end_date"]
MAX_GPA = 10

KNOWN_LEVELS = {"entry", "junior", "mid", "senior", "lead", "principal"}
REQUIREMENT_CATEGORIES = {"required", "preferred"}
REQUIREMENT_TYPES = {"skill", "experience", "education", "certification"}


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _valid_date(v: Any) -> bool:
    try:
        parse_date(v)
        return True
    except (ValueError, TypeError):
        return False


def _check_lists(data: Dict[str, Any], names: List[str], errors: List[str]) -> None:
    for name in names:
        if name not in data or data[name] is None:
            errors.append(f"Missing required list: {name}")
        elif not isinstance(data[name], list):
            errors.append(f"Field '{name}' must be a list")


def validate_profile(data: Any) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.

    Checks structure only. Partial entries (a skill without a name, a GPA
    that is not a number or is off the 0-10 scale) are left for the scorer
    to treat as empty or absent.
    """
    if data is None:
        return ["Candidate profile is required"]
    if not isinstance(data, dict):
        return ["Candidate profile must be an object"]

    errors: List[str] = []
    _check_lists(data, PROFILE_LISTS, errors)

    info = data.get("personalInfo", data.get("personal_info"))
    if info is not None and not isinstance(info, dict):
        errors.append("Field 'personalInfo' must be an object if provided")

    summary = data.get("summary")
    if summary is not None and not isinstance(summary, str):
        errors.append("Field 'summary' must be a string if provided")

    for section in PROFILE_LISTS:
        entries = data.get(section)
        if not isinstance(entries, list):
            continue
        for i, entry in enumerate(entries):
            where = f"{section}[{i}]"
            if not isinstance(entry, dict):
                errors.append(f"Entry '{where}' must be an object")
                continue
            for list_field in ENTRY_LISTS.get(section, []):
                if list_field in entry and entry[list_field] is not None and not isinstance(entry[list_field], list):
                    errors.append(f"Field '{where}.{list_field}' must be a list if provided")
            for date_field in DATE_FIELDS:
                if date_field in entry and not _valid_date(entry[date_field]):
                    errors.append(f"Field '{where}.{date_field}' is not a valid date")
            if section == "experience" and entry.get("startDate", entry.get("start_date")) in (None, ""):
                errors.append(f"Missing required field: {where}.startDate")

    return errors


def validate_job_analysis(data: Any) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if data is None:
        return ["Job analysis is required"]
    if not isinstance(data, dict):
        return ["Job analysis must be an object"]

    errors: List[str] = []
    _check_lists(data, JOB_LISTS, errors)

    level = data.get("experienceLevel", data.get("experience_level"))
    if level is not None and not isinstance(level, str):
        errors.append("Field 'experienceLevel' must be a string if provided")

    for name in ("skills", "keywords"):
        values = data.get(name)
        if isinstance(values, list) and not all(isinstance(v, str) for v in values):
            errors.append(f"Field '{name}' must contain only strings")

    requirements = data.get("requirements")
    if isinstance(requirements, list):
        for i, req in enumerate(requirements):
            if not isinstance(req, dict):
                errors.append(f"Entry 'requirements[{i}]' must be an object")
            elif not isinstance(req.get("text"), str):
                errors.append(f"Field 'requirements[{i}].text' must be a string")

    return errors


def validate_profile_strict(data: Any) -> Tuple[bool, List[str]]:
    """Structural validation plus date ordering, skill names and GPA checks."""
    errors = validate_profile(data)
    if errors:
        return False, errors

    for section in ("experience", "education", "projects"):
        for i, entry in enumerate(data[section]):
            start = parse_date(entry.get("startDate", entry.get("start_date")))
            end = parse_date(entry.get("endDate", entry.get("end_date")))
            if start and end and start > end:
                errors.append(f"Field '{section}[{i}]': start date must be before end date")

    for i, entry in enumerate(data["skills"]):
        if not _is_non_empty_str(entry.get("name")):
            errors.append(f"Field 'skills[{i}].name' must be a non-empty string")

    for i, entry in enumerate(data["education"]):
        gpa = entry.get("gpa")
        if gpa is None:
            continue
        if not _is_number(gpa):
            errors.append(f"Field 'education[{i}].gpa' must be a number")
        elif not 0 <= gpa <= MAX_GPA:
            errors.append(f"Field 'education[{i}].gpa' must be between 0 and {MAX_GPA}")

    return len(errors) == 0, errors


def validate_job_analysis_strict(data: Any) -> Tuple[bool, List[str]]:
    """Structural validation plus enumerations for level, category and type."""
    errors = validate_job_analysis(data)
    if errors:
        return False, errors

    level = data.get("experienceLevel", data.get("experience_level"))
    if not isinstance(level, str) or level.lower() not in KNOWN_LEVELS:
        errors.append(
            f"Unknown experienceLevel: {level!r}. Must be one of: {', '.join(sorted(KNOWN_LEVELS))}"
        )

    for i, req in enumerate(data["requirements"]):
        if req.get("category") not in REQUIREMENT_CATEGORIES:
            errors.append(f"Field 'requirements[{i}].category' must be 'required' or 'preferred'")
        if req.get("type") not in REQUIREMENT_TYPES:
            errors.append(f"Field 'requirements[{i}].type' must be one of: {', '.join(sorted(REQUIREMENT_TYPES))}")
        importance = req.get("importance")
        if isinstance(importance, bool) or not isinstance(importance, (int, float)) or not 0 <= importance <= 1:
            errors.append(f"Field 'requirements[{i}].importance' must be a number between 0 and 1")

    return len(errors) == 0, errors
