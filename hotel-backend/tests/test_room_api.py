import pytest

ROOM = {
    'number': 101,
    'room_count': 2,
    'floor': 1,
    'sleeping_places': 3,
    'room_type': 'Deluxe',
}


@pytest.fixture
def room_id(client):
    response = client.post('/api/rooms', json=ROOM)
    assert response.status_code == 201
    return response.get_json()['room_id']


class TestCreateRoom:
    def test_created_room_is_listed(self, client, room_id):
        response = client.get('/api/rooms')

        assert response.status_code == 200
        assert response.get_json() == [{
            'id': room_id,
            'number': 101,
            'room_count': 2,
            'is_occupied': False,
            'floor': 1,
            'sleeping_places': 3,
            'room_type': 'Deluxe',
            'need_cleaning': False,
        }]

    def test_duplicate_number_is_409(self, client, room_id):
        response = client.post('/api/rooms', json=dict(ROOM, floor=2))

        assert response.status_code == 409
        assert response.get_json() == {'message': 'room number already exists'}

    def test_client_supplied_id_is_ignored(self, client):
        response = client.post('/api/rooms', json=dict(ROOM, id=77))

        assert response.status_code == 201
        assert response.get_json()['room_id'] == 1

    @pytest.mark.parametrize('payload', [
        dict(ROOM, floor=0),
        dict(ROOM, room_type='Penthouse'),
        dict(ROOM, is_occupied=True, need_cleaning=True),
        dict(ROOM, price=120),
    ])
    def test_invalid_room_is_400(self, client, payload):
        response = client.post('/api/rooms', json=payload)

        assert response.status_code == 400
        assert client.get('/api/rooms').status_code == 409

    @pytest.mark.parametrize('body', ['not json', '[1, 2]'])
    def test_malformed_body_is_400(self, client, body):
        response = client.post('/api/rooms', data=body, content_type='application/json')

        assert response.status_code == 400
        assert response.get_json()['message'].startswith('Invalid JSON')


class TestListAndFilter:
    def test_empty_database_is_409(self, client):
        response = client.get('/api/rooms')

        assert response.status_code == 409
        assert response.get_json() == {'message': 'database is clear'}

    def test_empty_filter_body_lists_all(self, client, room_id):
        response = client.post('/api/rooms/filter')

        assert response.status_code == 200
        assert [room['id'] for room in response.get_json()] == [room_id]

    def test_filter_is_keyed_by_value(self, client, room_id):
        second = client.post('/api/rooms', json=dict(ROOM, number=102, floor=2)).get_json()['room_id']

        response = client.post('/api/rooms/filter', json={'floor': 2, 'room_type': 'Deluxe'})

        assert response.status_code == 200
        assert response.get_json() == {'2': [second], 'Deluxe': [room_id, second]}

    def test_unknown_filter_column_is_400(self, client, room_id):
        response = client.post('/api/rooms/filter', json={'price': 10})

        assert response.status_code == 400

    @pytest.mark.parametrize('filters', [
        {'is_occupied': 'yes'},
        {'room_type': 'Penthouse'},
        {'floor': 'abc'},
    ])
    def test_filter_value_of_wrong_type_is_400(self, client, room_id, filters):
        response = client.post('/api/rooms/filter', json=filters)

        assert response.status_code == 400

    def test_filter_can_be_keyed_by_column(self, make_app):
        client = make_app(FILTER_RESULT_KEY='column').test_client()
        room_id = client.post('/api/rooms', json=ROOM).get_json()['room_id']

        response = client.post('/api/rooms/filter', json={'floor': 1, 'need_cleaning': True})

        assert response.get_json() == {'floor': [room_id], 'need_cleaning': []}


class TestPatchRoom:
    def test_patch_updates_only_given_fields(self, client, room_id):
        response = client.patch(f'/api/rooms/{room_id}', json={'floor': 4, 'need_cleaning': True})

        assert response.status_code == 200
        assert response.get_json() == {'status': 'rooms updated'}
        room = client.get('/api/rooms').get_json()[0]
        assert room['floor'] == 4
        assert room['need_cleaning'] is True
        assert room['room_count'] == 2

    def test_empty_patch_is_accepted(self, client, room_id):
        response = client.patch(f'/api/rooms/{room_id}', json={})

        assert response.status_code == 200

    def test_missing_room_is_404(self, client):
        response = client.patch('/api/rooms/42', json={'floor': 2})

        assert response.status_code == 404

    @pytest.mark.parametrize('patch', [
        {'number': 5},
        {'floor': -1},
        {'is_occupied': True, 'need_cleaning': True},
    ])
    def test_invalid_patch_is_400(self, client, room_id, patch):
        response = client.patch(f'/api/rooms/{room_id}', json=patch)

        assert response.status_code == 400


class TestDeleteRoom:
    def test_free_room_is_removed(self, client, room_id):
        response = client.delete(f'/api/rooms/{room_id}')

        assert response.status_code == 200
        assert response.get_json() == {'message': f'Removed Room id: {room_id}'}
        assert client.get('/api/rooms').status_code == 409

    def test_occupied_room_is_kept(self, client, room_id):
        client.patch(f'/api/rooms/{room_id}', json={'is_occupied': True})

        response = client.delete(f'/api/rooms/{room_id}')

        assert response.status_code == 400
        assert response.get_json() == {'message': 'room is occupied'}

    def test_missing_room_is_404(self, client):
        assert client.delete('/api/rooms/42').status_code == 404

    def test_zero_id_is_400(self, client):
        assert client.delete('/api/rooms/0').status_code == 400


def test_unknown_route_is_json_404(client):
    response = client.get('/api/suites')

    assert response.status_code == 404
    assert response.get_json() == {'message': 'Resource not found'}


def test_swagger_document_is_served(client):
    response = client.get('/static/swagger.json')

    assert response.status_code == 200
    assert '/rooms' in response.get_json()['paths']
