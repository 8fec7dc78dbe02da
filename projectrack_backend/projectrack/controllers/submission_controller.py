from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_current_user

from ..schemas.submission_schema import submission_schema, submissions_schema
from ..services.submission_service import submit_document, list_submissions

submission_blueprint = Blueprint('submission_blueprint', __name__)

# Form field carrying the PDF.
FILE_FIELD = 'projectDocument'


@submission_blueprint.route('/project/<int:project_id>', methods=['POST'])
@jwt_required()
def upload_submission(project_id):
    # Only the named field is accepted; other file parts are ignored.
    file = request.files.get(FILE_FIELD)
    description = request.form.get('description')

    submission = submit_document(get_current_user(), project_id, file, description)
    return jsonify({
        "message": "File uploaded and submission recorded successfully.",
        "submission": submission_schema.dump(submission),
    }), 201


@submission_blueprint.route('/project/<int:project_id>', methods=['GET'])
@jwt_required()
def list_submissions_route(project_id):
    submissions = list_submissions(get_current_user(), project_id)
    return submissions_schema.jsonify(submissions), 200
