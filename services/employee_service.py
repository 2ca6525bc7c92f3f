import logging

from models.employee import LIST_PROJECTION, LIST_SORT, new_employee_document, to_json
from utils.coercion import to_date, to_number, to_text
from utils.constants import EXPERIENCE_FIELDS
from utils.upload import check_document_files, save_documents
from utils.validators import ValidationError, parse_experience, validate_onboarding_payload

logger = logging.getLogger(__name__)


def _children_names(value) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value]
    return [to_text(name) for name in value]


def _experience(value) -> list:
    entries = []
    for entry in parse_experience(value):
        entry = {key: entry.get(key) for key in EXPERIENCE_FIELDS}
        entries.append({
            "companyName": to_text(entry["companyName"]),
            "position": to_text(entry["position"]),
            "fromDate": to_date(entry["fromDate"]),
            "toDate": to_date(entry["toDate"]),
        })
    return entries


def build_employee_document(payload: dict, documents: dict | None = None) -> dict:
    """
    Map flat onboarding fields onto the nested Employee document.

    The payload must already have passed validate_onboarding_payload().
    """
    get = payload.get

    personal = {
        "name": to_text(get("name")),
        "fatherName": to_text(get("fatherName")),
        "phone": to_text(get("phone")),
        "address": to_text(get("address")),
        "presentAddress": to_text(get("presentAddress")),
        "email": to_text(get("email")),
        "dob": to_date(get("dob")),
        "nationality": to_text(get("nationality")),
        "gender": to_text(get("gender")),
        "maritalStatus": to_text(get("maritalStatus")),
        "spouseName": to_text(get("spouseName")),
        "childrenNames": _children_names(get("childrenNames")),
    }
    family = {
        "motherName": to_text(get("motherName")),
        # Either field works; the family copy wins only when it is filled in
        "fatherName": to_text(get("fatherNameFamily") or get("fatherName")),
        "siblings": to_text(get("siblings")),
        "emergencyContact": to_text(get("emergencyContact")),
    }
    education = {
        "tenthStream": to_text(get("tenthStream")),
        "tenthPercent": to_number(get("tenthPercent")),
        "twelfthStream": to_text(get("twelfthStream")),
        "twelfthPercent": to_number(get("twelfthPercent")),
        "ugPercent": to_number(get("ugPercent")),
    }
    bank_details = {
        "ifscCode": to_text(get("ifscCode")),
        "accountNumber": to_text(get("accountNumber")),
    }

    return new_employee_document(
        personal=personal,
        family=family,
        education=education,
        previous_experience=_experience(get("previousExperience")),
        bank_details=bank_details,
        documents=documents,
    )


def create_employee(store, payload: dict, files=None, uploads_dir: str | None = None) -> str:
    """
    Validate, store uploads, and insert one onboarding record.

    Returns the new record's id. Raises ValidationError/UploadError before
    anything touches disk or the store; OSError/PyMongoError propagate as-is.
    """
    errors = validate_onboarding_payload(payload)
    if errors:
        raise ValidationError(errors)

    documents = {}
    if files:
        check_document_files(files)
        documents = save_documents(files, uploads_dir)

    employee = build_employee_document(payload, documents)
    result = store.employees.insert_one(employee)
    logger.info(f"Onboarded employee {result.inserted_id} with {len(documents)} document(s)")
    return str(result.inserted_id)


def list_employees(store) -> list:
    """Name/email/phone of every record, newest first."""
    cursor = store.employees.find({}, LIST_PROJECTION).sort(LIST_SORT)
    return [to_json(employee) for employee in cursor]
