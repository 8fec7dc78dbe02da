from .. import db
from datetime import datetime


class Role:
    STUDENT = 'STUDENT'
    TEACHER = 'TEACHER'

    ALL = (STUDENT, TEACHER)


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(100), nullable=False)
    name = db.Column(db.String(120), nullable=True)
    role = db.Column(db.String(20), nullable=False)

    # Student-only
    roll_number = db.Column(db.String(50), unique=True, nullable=True)
    program = db.Column(db.String(120), nullable=True)
    year = db.Column(db.Integer, nullable=True)

    # Teacher-only
    department = db.Column(db.String(120), nullable=True)
    areas_of_expertise = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
