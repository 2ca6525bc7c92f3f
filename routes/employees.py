import logging

from flask import Blueprint, current_app, jsonify, request

from models import get_store
from services.employee_service import create_employee, list_employees
from utils.validators import ValidationError

logger = logging.getLogger(__name__)

employees_bp = Blueprint("employees", __name__)


def _onboarding_payload():
    """Return (payload, files) from a JSON body or a multipart/urlencoded form."""
    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValidationError({"body": "must be a JSON object"})
        return payload, None

    payload = request.form.to_dict()
    children = request.form.getlist("childrenNames") or request.form.getlist("childrenNames[]")
    payload.pop("childrenNames[]", None)
    if children:
        payload["childrenNames"] = children
    return payload, request.files


@employees_bp.route("/onboard", methods=["POST"])
def onboard_employee():
    """
    Employee Onboarding Endpoint

    Accepts multipart/form-data (or JSON without files).

    Scalar fields: name, fatherName, phone, address, presentAddress, email, dob,
    nationality, gender, maritalStatus, spouseName, motherName, fatherNameFamily,
    siblings, emergencyContact, tenthStream, tenthPercent, twelfthStream,
    twelfthPercent, ugPercent, ifscCode, accountNumber

    List fields: childrenNames (repeat the field), previousExperience (JSON array
    of {companyName, position, fromDate, toDate})

    File fields (one file each): tenthMarksheet, twelfthMarksheet,
    degreeCertificate, aadhar, pan, photo

    Nothing is required. Returns 201 {"ok": true, "id": ...} or
    400 {"ok": false, "error": ...}.
    """
    try:
        payload, files = _onboarding_payload()
        employee_id = create_employee(
            get_store(),
            payload,
            files=files,
            uploads_dir=current_app.config["UPLOADS_DIR"],
        )
        return jsonify({"ok": True, "id": employee_id}), 201
    except Exception as e:
        logger.exception(f"Onboard error: {e}")
        return jsonify({"ok": False, "error": str(e)}), 400


@employees_bp.route("/employees", methods=["GET"])
def get_employees():
    """All employees (name, email, phone), latest first."""
    try:
        return jsonify(list_employees(get_store())), 200
    except Exception as e:
        logger.exception(f"GET /api/employees error: {e}")
        return jsonify({"ok": False, "error": str(e)}), 500
