import json

from utils.constants import GENDERS, MARITAL_STATUSES

# Scalar request fields; none of them may be a list or object
SCALAR_FIELDS = [
    'name', 'fatherName', 'phone', 'address', 'presentAddress', 'email', 'dob',
    'nationality', 'gender', 'maritalStatus', 'spouseName',
    'motherName', 'fatherNameFamily', 'siblings', 'emergencyContact',
    'tenthStream', 'tenthPercent', 'twelfthStream', 'twelfthPercent', 'ugPercent',
    'ifscCode', 'accountNumber'
]

# Request field -> stored path, for enumerated values
ENUM_FIELDS = {
    'gender': ('personal.gender', GENDERS),
    'maritalStatus': ('personal.maritalStatus', MARITAL_STATUSES),
}


class ValidationError(ValueError):
    """Raised when an onboarding payload cannot be stored.

    ``errors`` maps the stored field path to a human readable message.
    """

    def __init__(self, errors: dict):
        self.errors = errors
        details = ", ".join(f"{path}: {message}" for path, message in errors.items())
        super().__init__(f"Employee validation failed: {details}")


def parse_experience(value):
    """
    Normalise ``previousExperience`` to a list of dicts.

    Forms send it as a JSON string; JSON bodies send the list itself.
    Raises ValueError for anything that is not a list of objects.
    """
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"must be a JSON array ({e.msg})")
    if not isinstance(value, list):
        raise ValueError("must be an array of objects")
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ValueError(f"entry {index} must be an object")
    return value


def validate_onboarding_payload(payload: dict) -> dict:
    """
    Check an onboarding payload before anything is written.

    Returns a dict of {field path: message}; empty when the payload is valid.
    """
    errors = {}

    for field in SCALAR_FIELDS:
        if isinstance(payload.get(field), (list, dict)):
            errors[field] = f'Cast to string failed for value of type {type(payload[field]).__name__}'

    for field, (path, allowed) in ENUM_FIELDS.items():
        value = payload.get(field)
        if value is None or field in errors:
            continue
        if value not in allowed:
            errors[path] = f'`{value}` is not a valid enum value for path `{path}`.'

    children = payload.get('childrenNames')
    if children is not None and not isinstance(children, (list, str)):
        errors['personal.childrenNames'] = 'must be a list of names'
    elif isinstance(children, list) and any(isinstance(c, (list, dict)) for c in children):
        errors['personal.childrenNames'] = 'must be a list of names'

    try:
        entries = parse_experience(payload.get('previousExperience'))
    except ValueError as e:
        errors['previousExperience'] = str(e)
    else:
        # keys outside EXPERIENCE_FIELDS are dropped when the document is built
        for index, entry in enumerate(entries):
            for key in ('companyName', 'position'):
                if isinstance(entry.get(key), (list, dict)):
                    errors[f'previousExperience.{index}.{key}'] = 'Cast to string failed'

    return errors
