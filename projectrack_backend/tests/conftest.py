import io
import os

import pytest

from projectrack import create_app, db


TEST_SECRET = "test-secret-key-for-testing-only-0123456789"


@pytest.fixture
def make_app(tmp_path):
    apps = []

    def _make_app(**overrides):
        config = {
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': 'sqlite://',
            'JWT_SECRET_KEY': TEST_SECRET,
            'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
            'BCRYPT_LOG_ROUNDS': 4,
        }
        config.update(overrides)
        app = create_app(config)
        apps.append(app)
        return app

    yield _make_app

    for app in apps:
        with app.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upload_dir(app):
    return app.config['UPLOAD_FOLDER']


def stored_files(folder):
    return os.listdir(folder) if os.path.isdir(folder) else []


def pdf_upload(content=b'%PDF-1.4 sample document', name='report.pdf', mimetype='application/pdf', description=None):
    data = {'projectDocument': (io.BytesIO(content), name, mimetype)}
    if description is not None:
        data['description'] = description
    return data


class Api:
    """Thin helper over the test client for setting up users, groups and projects."""

    def __init__(self, client):
        self.client = client
        self._roll = 0

    @staticmethod
    def auth(token):
        return {'Authorization': f'Bearer {token}'}

    def signup_student(self, email, roll_number=None, name=None):
        self._roll += 1
        response = self.client.post('/auth/signup', json={
            'email': email,
            'password': 'secret123',
            'name': name or email.split('@')[0],
            'role': 'STUDENT',
            'roll_number': roll_number or f'R{self._roll:03d}',
            'program': 'BSc Computer Science',
            'year': 3,
        })
        assert response.status_code == 201, response.get_json()
        return response.get_json()['user']

    def signup_teacher(self, email, name=None):
        response = self.client.post('/auth/signup', json={
            'email': email,
            'password': 'secret123',
            'name': name or email.split('@')[0],
            'role': 'TEACHER',
            'department': 'Computer Science',
            'areas_of_expertise': ['Databases', 'Distributed Systems'],
        })
        assert response.status_code == 201, response.get_json()
        return response.get_json()['user']

    def login(self, email, password='secret123'):
        response = self.client.post('/auth/login', json={'email': email, 'password': password})
        assert response.status_code == 200, response.get_json()
        return self.auth(response.get_json()['token'])

    def student(self, email, **kwargs):
        user = self.signup_student(email, **kwargs)
        return user, self.login(email)

    def teacher(self, email, **kwargs):
        user = self.signup_teacher(email, **kwargs)
        return user, self.login(email)

    def create_group(self, headers, name):
        response = self.client.post('/groups', json={'name': name}, headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['group']

    def invite(self, headers, group_id, email):
        return self.client.post(f'/groups/{group_id}/invitations',
                                json={'invited_user_email': email}, headers=headers)

    def respond(self, headers, invitation_id, action):
        return self.client.patch(f'/groups/invitations/{invitation_id}/respond',
                                 json={'action': action}, headers=headers)

    def add_member(self, leader_headers, group_id, email, member_headers):
        invitation = self.invite(leader_headers, group_id, email).get_json()['invitation']
        response = self.respond(member_headers, invitation['id'], 'ACCEPT')
        assert response.status_code == 200, response.get_json()
        return invitation

    def propose(self, headers, group_id, supervisor_id, title='Smart Campus'):
        return self.client.post('/projects', json={
            'group_id': group_id,
            'title': title,
            'description': 'IoT sensors for room occupancy.',
            'supervisor_id': supervisor_id,
        }, headers=headers)

    def decide(self, headers, project_id, status, rejection_reason=None):
        body = {'status': status}
        if rejection_reason is not None:
            body['rejection_reason'] = rejection_reason
        return self.client.patch(f'/projects/{project_id}/status', json=body, headers=headers)

    def add_milestone(self, headers, project_id, **body):
        return self.client.post(f'/projects/{project_id}/milestones', json=body, headers=headers)


@pytest.fixture
def api(client):
    return Api(client)


@pytest.fixture
def team(api):
    """Leader A with member B in group Alpha, teacher T and outsider C."""
    a, a_headers = api.student('a@uni.edu', roll_number='S1')
    b, b_headers = api.student('b@uni.edu', roll_number='S2')
    c, c_headers = api.student('c@uni.edu', roll_number='S3')
    t, t_headers = api.teacher('t@uni.edu')
    group = api.create_group(a_headers, 'Alpha')
    api.add_member(a_headers, group['id'], 'b@uni.edu', b_headers)
    return {
        'a': (a, a_headers),
        'b': (b, b_headers),
        'c': (c, c_headers),
        't': (t, t_headers),
        'group': group,
    }


@pytest.fixture
def proposed_project(api, team):
    _, a_headers = team['a']
    t, _ = team['t']
    response = api.propose(a_headers, team['group']['id'], t['id'])
    assert response.status_code == 201, response.get_json()
    return response.get_json()['project']


@pytest.fixture
def approved_project(api, team, proposed_project):
    _, t_headers = team['t']
    response = api.decide(t_headers, proposed_project['id'], 'APPROVED')
    assert response.status_code == 200, response.get_json()
    return response.get_json()['project']
