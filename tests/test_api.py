from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from ring_of_fire import db


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_cards_returns_catalog(client):
    res = client.get('/cards')
    assert res.status_code == 200
    data = res.get_json()
    assert len(data['cards']) == 52
    codes = {c['code'] for c in data['cards']}
    assert len(codes) == 52
    assert set(data['rules']) == codes
    assert data['cards'][0].keys() == {'code', 'title', 'href'}


def test_card_image_served(client):
    res = client.get('/card/back.svg')
    assert res.status_code == 200
    assert b'<svg' in res.data


def test_card_image_missing(client):
    assert client.get('/card/nope.png').status_code == 404


def test_card_image_from_configured_dir(flask_app, client, tmp_path):
    (tmp_path / 'AS.png').write_bytes(b'fake-png')
    flask_app.config['CARD_ASSETS_DIR'] = str(tmp_path)
    res = client.get('/card/AS.png')
    assert res.status_code == 200
    assert res.data == b'fake-png'


def test_create_and_list_decks(client):
    res = client.post('/deck', json={
        'name': 'House rules',
        'cards': [{'code': 'AS', 'title': 'Ace of Spades', 'href': 'AS.svg'}],
        'rules': {'AS': 'Everyone drinks'},
    })
    assert res.status_code == 201
    created = res.get_json()
    assert created['name'] == 'House rules'
    assert created['rules'] == {'AS': 'Everyone drinks'}

    res = client.get('/decks')
    assert res.status_code == 200
    decks = res.get_json()
    assert [d['name'] for d in decks] == ['House rules']
    assert decks[0]['cards'][0]['code'] == 'AS'


def test_create_deck_requires_name(client):
    assert client.post('/deck', json={'cards': []}).status_code == 400
    assert client.post('/deck', json=['not', 'an', 'object']).status_code == 400
    assert client.post('/deck', json={'name': 'x', 'cards': 'nope'}).status_code == 400


def _fail(*args, **kwargs):
    raise OperationalError('SELECT 1', {}, Exception('database is down'))


def test_create_deck_database_failure(client, monkeypatch):
    monkeypatch.setattr(Session, 'commit', _fail)
    res = client.post('/deck', json={'name': 'Broken'})
    assert res.status_code == 500
    assert res.get_json() == {'error': 'Server error'}


def test_list_decks_database_failure(client):
    db.drop_all()
    res = client.get('/decks')
    assert res.status_code == 500
    db.create_all()
