from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from fastapi import HTTPException
from httpx import ASGITransport

from litview.api.views import Views
from litview.app.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url='http://test') as client:
        yield client


@pytest.mark.anyio
async def test_home_page_renders_view_with_partial(client) -> None:
    # Act
    resp = await client.get('/')

    # Assert
    assert resp.status_code == 200
    assert resp.headers['content-type'].startswith('text/html')
    assert '<h1>Welcome!</h1>' in resp.text
    assert '<p>3 features, no build step.</p>' in resp.text
    assert '<li>partials</li>' in resp.text


@pytest.mark.anyio
async def test_about_page_ternary(client) -> None:
    resp = await client.get('/about', params={'maintained_by': 'Good Samaritans'})
    assert 'a template engine maintained by Good Samaritans.' in resp.text

    resp = await client.get('/about')
    assert 'not maintained anymore.' in resp.text


@pytest.mark.anyio
async def test_precompiled_greeting(client) -> None:
    resp = await client.get('/greet/jessica')

    assert resp.status_code == 200
    assert resp.text == 'Hello jessica, welcome to litview!'


@pytest.mark.anyio
async def test_render_inline_template(client) -> None:
    resp = await client.post('/v1/render', json={'template': '${title}', 'locals': {'title': 'Welcome!'}})

    assert resp.status_code == 200
    assert resp.json() == {'ok': True, 'output': 'Welcome!', 'error_type': None, 'error': None}


@pytest.mark.anyio
async def test_render_inline_template_reports_errors(client) -> None:
    resp = await client.post('/v1/render', json={'template': '${missing}'})

    body = resp.json()
    assert resp.status_code == 200
    assert body['ok'] is False
    assert body['error_type'] == 'EvaluationError'
    assert 'missing is not defined' in body['error']


@pytest.fixture
def views(tmp_path):
    (tmp_path / 'page.html').write_text('<h1>${title}</h1>', encoding='utf-8')
    (tmp_path / 'broken.html').write_text('${title.nope.deeper}', encoding='utf-8')
    (tmp_path / 'notes.txt').write_text('ignored', encoding='utf-8')
    return Views(directory=tmp_path, extension='html')


@pytest.mark.anyio
async def test_views_render_adds_default_extension(views) -> None:
    resp = await views.render('page', {'title': 'Hi'}, status_code=201)

    assert resp.status_code == 201
    assert resp.body == b'<h1>Hi</h1>'


@pytest.mark.anyio
async def test_views_missing_view_is_404(views) -> None:
    with pytest.raises(HTTPException) as exc:
        await views.render('nope')

    assert exc.value.status_code == 404


@pytest.mark.anyio
async def test_views_evaluation_failure_is_500(views) -> None:
    with pytest.raises(HTTPException) as exc:
        await views.render('broken', {'title': 'x'})

    assert exc.value.status_code == 500
    assert 'Cannot read properties of undefined' in exc.value.detail


@pytest.mark.anyio
async def test_views_unregistered_extension_is_500(views) -> None:
    with pytest.raises(HTTPException) as exc:
        await views.render('notes.txt')

    assert exc.value.status_code == 500


@pytest.mark.anyio
async def test_views_accepts_callback_style_engines(views) -> None:
    # Arrange: an engine that only reports through its callback
    seen = {}

    def upper_engine(file_path, options, callback):
        seen['path'] = file_path
        seen['options'] = options
        callback(None, Path(file_path).read_text(encoding='utf-8').upper())

    views.engine('txt', upper_engine)

    # Act
    resp = await views.render('notes.txt', {'a': 1})

    # Assert
    assert resp.body == b'IGNORED'
    assert seen['path'].endswith('notes.txt')
    assert seen['options'] == {'locals': {'a': 1}, 'partials': {}}
    assert set(views.engines) == {'.html', '.txt'}


@pytest.mark.anyio
async def test_render_inline_template_with_view_partial(client) -> None:
    resp = await client.post('/v1/render', json={
        'template': '<main>${main}</main>',
        'locals': {'features': ['a', 'b']},
        'partials': {'main': 'partials/main.html'},
    })

    assert resp.json()['output'] == '<main><p>2 features, no build step.</p>\n</main>'


@pytest.mark.anyio
@pytest.mark.parametrize('partial', ['/etc/hostname', '../main.py', 'partials/../../main.py'])
async def test_render_inline_rejects_partials_outside_views_dir(client, partial) -> None:
    # Act
    resp = await client.post('/v1/render', json={'template': '${x}', 'partials': {'x': partial}})

    # Assert
    body = resp.json()
    assert resp.status_code == 200
    assert body['ok'] is False
    assert body['output'] is None
    assert body['error_type'] == 'FileReadError'
    assert 'outside the template directory' in body['error']


@pytest.mark.anyio
async def test_views_relative_directory_resolves_against_working_dir(tmp_path, monkeypatch) -> None:
    # Arrange
    (tmp_path / 'tpl').mkdir()
    (tmp_path / 'tpl' / 'page.html').write_text('<body>${main}</body>', encoding='utf-8')
    (tmp_path / 'tpl' / 'main.html').write_text('<p>${title}</p>', encoding='utf-8')
    monkeypatch.chdir(tmp_path)

    # Act
    views = Views(directory='tpl')
    resp = await views.render('page', {'title': 'Hi'}, partials={'main': 'main.html'})

    # Assert
    assert views.directory == tmp_path.resolve() / 'tpl'
    assert resp.body == b'<body><p>Hi</p></body>'
