from datetime import datetime, timezone

from bson import ObjectId

EMPLOYEE_COLLECTION = "employees"

# Fields returned by GET /api/employees (the _id is always included)
LIST_PROJECTION = {
    "personal.name": 1,
    "personal.email": 1,
    "personal.phone": 1,
    "createdAt": 1,
    "updatedAt": 1,
}
LIST_SORT = [("createdAt", -1), ("_id", -1)]


def _personal_defaults():
    return {
        "name": "",
        "fatherName": "",
        "phone": "",
        "address": "",
        "presentAddress": "",
        "email": "",
        "dob": None,
        "nationality": "",
        "gender": "",
        "maritalStatus": "",
        "spouseName": "",
        "childrenNames": [],
    }


def _family_defaults():
    return {
        "motherName": "",
        "fatherName": "",
        "siblings": "",
        "emergencyContact": "",
    }


def _education_defaults():
    return {
        "tenthStream": "",
        "tenthPercent": 0,
        "twelfthStream": "",
        "twelfthPercent": 0,
        "ugPercent": 0,
    }


def _bank_details_defaults():
    return {
        "ifscCode": "",
        "accountNumber": "",
    }


def experience_entry(companyName="", position="", fromDate=None, toDate=None) -> dict:
    return {
        "companyName": companyName,
        "position": position,
        "fromDate": fromDate,
        "toDate": toDate,
    }


def upload_descriptor(filename: str, path: str, mimetype: str, size: int) -> dict:
    return {
        "filename": filename,
        "path": path,
        "mimetype": mimetype,
        "size": size,
    }


def new_employee_document(personal=None, family=None, education=None, previous_experience=None,
                          bank_details=None, documents=None, now=None) -> dict:
    """
    Build a complete Employee document ready for insert.

    Every group starts from its empty defaults, so sections (or fields) the
    caller leaves out are stored as ""/0/None/[] rather than missing.
    Document slots without an upload are simply absent from ``documents``.
    """
    # stored as naive UTC, the way the driver returns it
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    return {
        "personal": {**_personal_defaults(), **(personal or {})},
        "family": {**_family_defaults(), **(family or {})},
        "education": {**_education_defaults(), **(education or {})},
        "previousExperience": [experience_entry(**entry) for entry in (previous_experience or [])],
        "bankDetails": {**_bank_details_defaults(), **(bank_details or {})},
        "documents": dict(documents or {}),
        "createdAt": now,
        "updatedAt": now,
    }


def _iso(value: datetime) -> str:
    # The driver hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_json(value):
    """Convert a stored document into JSON-safe primitives."""
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_json(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return _iso(value)
    return value
