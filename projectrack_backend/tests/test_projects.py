import pytest


def test_propose_project(api, team, proposed_project):
    a, _ = team['a']
    t, _ = team['t']
    assert proposed_project['status'] == 'PROPOSED'
    assert proposed_project['proposed_by']['id'] == a['id']
    assert proposed_project['supervisor']['id'] == t['id']
    assert proposed_project['approved_at'] is None
    assert proposed_project['rejection_reason'] is None


def test_propose_requires_fields(api, client, team):
    _, a_headers = team['a']
    response = client.post('/projects', json={'group_id': team['group']['id'], 'title': 'X'}, headers=a_headers)
    assert response.status_code == 400


def test_propose_failures(api, team):
    _, a_headers = team['a']
    _, b_headers = team['b']
    t, _ = team['t']
    c, _ = team['c']
    group_id = team['group']['id']

    assert api.propose(a_headers, 999, t['id']).status_code == 404
    assert api.propose(b_headers, group_id, t['id']).status_code == 403
    assert api.propose(a_headers, group_id, 999).status_code == 404
    assert api.propose(a_headers, group_id, c['id']).status_code == 400


@pytest.mark.parametrize('decision', [None, 'APPROVED', 'REJECTED'])
def test_one_project_per_group_regardless_of_status(api, team, proposed_project, decision):
    _, a_headers = team['a']
    t, t_headers = team['t']
    if decision:
        assert api.decide(t_headers, proposed_project['id'], decision).status_code == 200

    response = api.propose(a_headers, team['group']['id'], t['id'], title='Second try')
    assert response.status_code == 409
    assert 'already exists' in response.get_json()['message']


def test_list_proposals_for_supervisor(api, client, team, proposed_project):
    _, t_headers = team['t']
    _, a_headers = team['a']
    other_teacher, other_headers = api.teacher('t2@uni.edu')

    _, d_headers = api.student('d@uni.edu')
    beta = api.create_group(d_headers, 'Beta')
    api.propose(d_headers, beta['id'], team['t'][0]['id'], title='Library bot')

    response = client.get('/projects/proposals/my', headers=t_headers)
    proposals = response.get_json()
    assert response.status_code == 200
    assert [project['title'] for project in proposals] == ['Library bot', 'Smart Campus']
    alpha = proposals[1]['group']
    assert alpha['leader']['email'] == 'a@uni.edu'
    assert sorted(member['roll_number'] for member in alpha['members']) == ['S1', 'S2']
    assert proposals[1]['proposed_by']['email'] == 'a@uni.edu'

    assert client.get('/projects/proposals/my', headers=other_headers).get_json() == []
    assert client.get('/projects/proposals/my', headers=a_headers).status_code == 403


def test_approve_sets_approved_at(api, team, approved_project):
    assert approved_project['status'] == 'APPROVED'
    assert approved_project['approved_at'] is not None
    assert approved_project['rejection_reason'] is None


def test_scenario_reject_with_reason_then_decide_again(api, team, proposed_project):
    _, t_headers = team['t']
    response = api.decide(t_headers, proposed_project['id'], 'REJECTED', 'scope too broad')
    project = response.get_json()['project']
    assert response.status_code == 200
    assert project['status'] == 'REJECTED'
    assert project['rejection_reason'] == 'scope too broad'

    response = api.decide(t_headers, proposed_project['id'], 'APPROVED')
    assert response.status_code == 409
    assert 'PROPOSED' in response.get_json()['message']


def test_reject_without_reason_stores_null(api, team, proposed_project):
    _, t_headers = team['t']
    response = api.decide(t_headers, proposed_project['id'], 'REJECTED', '  ')
    assert response.get_json()['project']['rejection_reason'] is None


def test_approval_ignores_rejection_reason(api, team, proposed_project):
    _, t_headers = team['t']
    response = api.decide(t_headers, proposed_project['id'], 'APPROVED', 'not used')
    assert response.get_json()['project']['rejection_reason'] is None


def test_decide_failures(api, team, proposed_project):
    _, a_headers = team['a']
    _, t_headers = team['t']
    _, other_headers = api.teacher('t2@uni.edu')
    project_id = proposed_project['id']

    assert api.decide(t_headers, project_id, 'ACTIVE').status_code == 400
    assert api.decide(a_headers, project_id, 'APPROVED').status_code == 403
    assert api.decide(t_headers, 999, 'APPROVED').status_code == 404
    assert api.decide(other_headers, project_id, 'APPROVED').status_code == 403


def test_project_detail_visibility(api, client, team, proposed_project):
    project_id = proposed_project['id']
    for key in ('a', 'b', 't'):
        response = client.get(f'/projects/{project_id}', headers=team[key][1])
        assert response.status_code == 200
        assert response.get_json()['progress'] == 0

    assert client.get(f'/projects/{project_id}', headers=team['c'][1]).status_code == 403
    assert client.get('/projects/999', headers=team['a'][1]).status_code == 404


def test_progress_reflects_completed_milestones(api, client, team, approved_project):
    _, a_headers = team['a']
    project_id = approved_project['id']
    ids = [api.add_milestone(a_headers, project_id, title=f'Step {n}').get_json()['milestone']['id']
           for n in range(3)]
    client.patch(f'/milestones/{ids[0]}', json={'is_completed': True}, headers=a_headers)

    detail = client.get(f'/projects/{project_id}', headers=team['t'][1]).get_json()
    assert detail['progress'] == 33
    assert [milestone['id'] for milestone in detail['milestones']] == ids


@pytest.mark.parametrize('status', [['APPROVED'], {'status': 'APPROVED'}, 1])
def test_decide_rejects_non_string_status(api, team, proposed_project, status):
    _, t_headers = team['t']
    assert api.decide(t_headers, proposed_project['id'], status).status_code == 400


def test_propose_rejects_non_string_title(api, client, team):
    _, a_headers = team['a']
    t, _ = team['t']
    response = client.post('/projects', json={
        'group_id': team['group']['id'], 'title': ['Smart Campus'],
        'description': 'IoT sensors.', 'supervisor_id': t['id'],
    }, headers=a_headers)
    assert response.status_code == 400
