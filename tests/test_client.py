import io

import httpx
import pytest

from userdir.client.api_client import ApiNotFoundError, ApiServerError, ApiValidationError, UserApiClient
from userdir.client.cache import UserCollectionCache
from userdir.client.cli import build_parser, run
from userdir.client.controller import FORM_DEFAULTS, UserListController
from userdir.helpers.enums import SortDirection, SortField


@pytest.fixture
def controller(api) -> UserListController:
    return UserListController(api, page_size=2)


def _unreachable_api() -> UserApiClient:
    def handler(request):
        raise httpx.ConnectError('connection refused', request=request)
    return UserApiClient(base_url='http://users.invalid/api', client=httpx.Client(transport=httpx.MockTransport(handler)))


# API client

def test_client_round_trip(api, user_payload):
    created = api.create_user(user_payload)

    assert api.fetch_users() == [created]
    assert api.fetch_user(created.id) == created

    updated = api.update_user(created.id, {'position': 'Manager'})
    assert updated.position == 'Manager'

    api.delete_user(created.id)
    assert api.fetch_users() == []


def test_client_maps_validation_errors(api, user_payload):
    with pytest.raises(ApiValidationError) as exc_info:
        api.create_user({**user_payload, 'email': 'broken'})

    assert exc_info.value.status_code == 400
    assert exc_info.value.errors == {'email': 'Invalid email'}


def test_client_maps_not_found(api):
    with pytest.raises(ApiNotFoundError) as exc_info:
        api.delete_user(12345)

    assert exc_info.value.message == 'User not found'


def test_client_maps_transport_failure():
    with pytest.raises(ApiServerError):
        _unreachable_api().fetch_users()


def test_client_maps_server_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={'message': 'Internal server error'}))
    api = UserApiClient(base_url='http://users.invalid/api', client=httpx.Client(transport=transport))

    with pytest.raises(ApiServerError) as exc_info:
        api.fetch_users()

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == 'Internal server error'


# Cache

def test_cache_reuses_snapshot_until_invalidated():
    calls = []

    def fetch():
        calls.append(1)
        return ['snapshot']

    cache = UserCollectionCache(fetch)
    assert cache.is_stale
    cache.get()
    cache.get()
    assert len(calls) == 1

    cache.invalidate()
    assert cache.is_stale
    cache.get()
    assert len(calls) == 2


# Controller: list state

def test_view_reflects_store(controller, create_user):
    create_user(fullName='Cid', email='cid@example.com')
    create_user(fullName='Ann', email='ann@example.com')
    create_user(fullName='Bob', email='bob@example.com')

    result = controller.view()

    assert [user.full_name for user in result.data] == ['Ann', 'Bob']
    assert result.total == 3


def test_view_failure_shows_error_state():
    controller = UserListController(_unreachable_api())

    assert controller.view() is None
    assert 'Could not reach the user service' in controller.load_error


def test_request_sort_toggles_direction_on_the_active_field(controller):
    assert controller.params.sort_by == SortField.FULL_NAME
    assert controller.params.order == SortDirection.ASC

    controller.request_sort(SortField.FULL_NAME)
    assert controller.params.order == SortDirection.DESC

    controller.request_sort(SortField.FULL_NAME)
    assert controller.params.order == SortDirection.ASC

    controller.request_sort(SortField.FULL_NAME)
    controller.request_sort(SortField.EMAIL)
    assert controller.params.sort_by == SortField.EMAIL
    assert controller.params.order == SortDirection.ASC


def test_search_that_shrinks_results_keeps_page_and_yields_empty_page(controller, create_user):
    for name in ('Ann', 'Bob', 'Cid'):
        create_user(fullName=name, email=f"{name.lower()}@example.com")
    controller.set_page(1)
    controller.set_search('ann')

    result = controller.view()

    assert result.data == []
    assert result.total == 1


# Controller: form

def test_new_form_starts_from_defaults(controller):
    controller.form.open_new()

    assert controller.form.is_open
    assert controller.form.is_new
    assert controller.form.values == FORM_DEFAULTS


def test_invalid_submit_keeps_form_open(controller):
    controller.form.open_new()

    saved = controller.form.submit({'fullName': 'Ann', 'email': 'bad'})

    assert saved is None
    assert controller.form.is_open
    assert controller.form.errors == {'email': 'Invalid email', 'phone': 'Phone is required'}


def test_create_through_form_invalidates_cache(controller, user_payload):
    assert controller.view().total == 0

    controller.form.open_new()
    saved = controller.form.submit(user_payload)

    assert saved.email == user_payload['email']
    assert not controller.form.is_open
    assert controller.cache.is_stale
    assert controller.view().total == 1


def test_duplicate_email_keeps_form_open_with_server_error(controller, create_user, user_payload):
    create_user()

    controller.form.open_new()
    saved = controller.form.submit({**user_payload, 'fullName': 'Copy'})

    assert saved is None
    assert controller.form.is_open
    assert controller.form.submit_error == 'Email already exists'
    assert controller.form.errors == {'email': 'Email already exists'}


def test_edit_form_prefills_and_updates(controller, create_user, api):
    created = create_user()
    controller.form.open_edit(api.fetch_user(created['id']))

    assert controller.form.values['fullName'] == created['fullName']
    assert controller.form.values['birthDate'] == created['birthDate']

    saved = controller.form.submit({'position': ''})

    assert saved.id == created['id']
    assert saved.position is None
    assert not controller.form.is_open


def test_edit_of_deleted_user_keeps_form_open(controller, create_user, api, client):
    created = create_user()
    controller.form.open_edit(api.fetch_user(created['id']))
    client.delete(f"/api/users/{created['id']}")

    saved = controller.form.submit({'phone': '42'})

    assert saved is None
    assert controller.form.is_open
    assert controller.form.submit_error == 'User not found'


# Controller: staged deletion

def test_cancelled_deletion_has_no_effect(controller, create_user, api):
    created = create_user()

    controller.deletion.request(created['id'])
    assert controller.deletion.is_pending
    controller.deletion.cancel()

    assert not controller.deletion.is_pending
    assert len(api.fetch_users()) == 1


def test_confirmed_deletion_removes_record(controller, create_user):
    created = create_user()
    assert controller.view().total == 1

    controller.deletion.request(created['id'])
    assert controller.deletion.confirm()

    assert not controller.deletion.is_pending
    assert controller.view().total == 0


def test_confirm_without_staged_id_is_a_noop(controller):
    assert controller.deletion.confirm() is False


def test_failed_deletion_reports_error(controller):
    controller.deletion.request(999)

    assert controller.deletion.confirm() is False
    assert controller.deletion.error == 'User not found'
    assert not controller.deletion.is_pending


# Terminal front end

def _run(controller, argv, answer='y'):
    out = io.StringIO()
    code = run(build_parser().parse_args(argv), controller, confirm=lambda prompt: answer, out=out)
    return code, out.getvalue()


def test_cli_list_renders_table(controller, create_user):
    create_user(fullName='Ann', email='ann@example.com', role='admin')
    create_user(fullName='Bob', email='bob@example.com', role='user')

    code, output = _run(controller, ['list', '--sort', 'fullName', '--desc'])

    assert code == 0
    lines = output.splitlines()
    assert lines[0].split()[:3] == ['ID', 'Full', 'name']
    assert 'Bob' in lines[2] and 'User' in lines[2]
    assert 'Ann' in lines[3] and 'Administrator' in lines[3]
    assert lines[-1] == 'Page 1 of 1 (2 users)'


def test_cli_create_reports_field_errors(controller):
    code, output = _run(controller, ['create', '--full-name', 'Ann', '--email', 'bad', '--phone', '1'])

    assert code == 1
    assert 'email: Invalid email' in output


def test_cli_create_update_and_delete(controller, api):
    code, output = _run(controller, [
        'create', '--full-name', 'Ann Lee', '--email', 'ann@example.com', '--phone', '555', '--role', 'admin',
    ])
    assert code == 0
    user_id = api.fetch_users()[0].id

    code, _ = _run(controller, ['update', str(user_id), '--position', 'CTO', '--inactive'])
    assert code == 0
    updated = api.fetch_user(user_id)
    assert updated.position == 'CTO'
    assert updated.is_active is False

    code, output = _run(controller, ['delete', str(user_id)], answer='n')
    assert output.strip() == 'Cancelled'
    assert len(api.fetch_users()) == 1

    code, output = _run(controller, ['delete', str(user_id)], answer='y')
    assert code == 0
    assert api.fetch_users() == []


@pytest.mark.parametrize('page_size', ['0', '-3', 'ten'])
def test_cli_rejects_bad_page_size(page_size):
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(['list', '--page-size', page_size])

    assert exc_info.value.code == 2
