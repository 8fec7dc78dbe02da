import logging

from flask import current_app
from flask_jwt_extended import create_access_token

from .. import bcrypt
from ..errors import AuthenticationError, ConflictError, InfrastructureError, ValidationError
from ..models.user_model import Role
from ..repositories import user_repository
from ..repositories.transaction import atomic
from .inputs import stripped, text


logger = logging.getLogger(__name__)


def parse_year(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("Year must be a whole number.")


def as_list(value):
    """Areas of expertise may arrive as a list or a single string."""
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [value] if value else []


def register(data):
    email = stripped(data.get('email'), "Email")
    password = text(data.get('password'), "Password")
    role = text(data.get('role'), "Role")

    if not email or not password or not role:
        raise ValidationError("Email, password, and role are required.")
    if role not in Role.ALL:
        raise ValidationError("Invalid role specified. Must be STUDENT or TEACHER.")

    fields = {
        'email': email,
        'name': text(data.get('name'), "Name"),
        'role': role,
    }

    if role == Role.STUDENT:
        roll_number = text(data.get('roll_number'), "Roll number")
        program = text(data.get('program'), "Program")
        year = data.get('year')
        if not roll_number or not program or year is None or year == '':
            raise ValidationError("Roll number, program, and year are required for students.")
        fields.update(roll_number=roll_number, program=program, year=parse_year(year))
    else:
        department = text(data.get('department'), "Department")
        areas_of_expertise = data.get('areas_of_expertise')
        # An empty list is a valid answer; a missing field is not.
        if not department or areas_of_expertise is None or areas_of_expertise == '':
            raise ValidationError("Department and areas of expertise are required for teachers.")
        fields.update(department=department, areas_of_expertise=as_list(areas_of_expertise))

    if user_repository.find_by_email(email):
        raise ConflictError("User with this email already exists.")
    if role == Role.STUDENT and user_repository.find_by_roll_number(fields['roll_number']):
        raise ConflictError("This roll number is already registered.")

    fields['password'] = bcrypt.generate_password_hash(password).decode('utf-8')

    with atomic():
        user = user_repository.create(**fields)

    logger.info("Registered %s user %s", role, user.id)
    return user


def login(email, password):
    email = text(email, "Email")
    password = text(password, "Password")
    if not email or not password:
        raise ValidationError("Email and password are required.")

    user = user_repository.find_by_email(email)
    # Same message for unknown email and wrong password.
    if not user or not bcrypt.check_password_hash(user.password, password):
        raise AuthenticationError("Invalid email or password.")

    if not current_app.config.get('JWT_SECRET_KEY'):
        logger.error("JWT_SECRET_KEY is not configured")
        raise InfrastructureError("Server configuration error.")

    token = create_access_token(
        identity=str(user.id),
        additional_claims={'email': user.email, 'role': user.role, 'name': user.name},
        expires_delta=current_app.config['JWT_ACCESS_TOKEN_EXPIRES'],
    )
    return token, user


def resolve_session_user(jwt_data):
    """
    Loads the user a verified token was issued to.

    Returns None when the user no longer exists, which fails the request
    even though the token itself is valid.
    """
    try:
        user_id = int(jwt_data.get('sub'))
    except (TypeError, ValueError):
        return None
    return user_repository.find_by_id(user_id)


def update_profile(user, data):
    changes = {}

    if 'name' in data:
        changes['name'] = text(data['name'], "Name")

    if 'email' in data and data['email'] != user.email:
        email = stripped(data['email'], "Email")
        if not email:
            raise ValidationError("Email cannot be empty.")
        existing = user_repository.find_by_email(email)
        if existing and existing.id != user.id:
            raise ConflictError("This email address is already in use by another account.")
        changes['email'] = email

    # Only the fields belonging to the caller's own role are applied.
    if user.role == Role.STUDENT:
        if 'roll_number' in data:
            roll_number = text(data['roll_number'], "Roll number")
            if not roll_number:
                raise ValidationError("Roll number cannot be empty.")
            if roll_number != user.roll_number and user_repository.find_by_roll_number(roll_number, exclude_user_id=user.id):
                raise ConflictError("This roll number is already registered by another student.")
            changes['roll_number'] = roll_number
        if 'program' in data:
            changes['program'] = text(data['program'], "Program")
        if 'year' in data:
            year = data['year']
            changes['year'] = parse_year(year) if year not in (None, '') else None
    elif user.role == Role.TEACHER:
        if 'department' in data:
            changes['department'] = text(data['department'], "Department")
        if 'areas_of_expertise' in data:
            changes['areas_of_expertise'] = as_list(data['areas_of_expertise'])

    if not changes:
        raise ValidationError("No fields provided for update.")

    with atomic():
        user_repository.update(user, changes)

    logger.info("Updated profile of user %s (%s)", user.id, ", ".join(sorted(changes)))
    return user
