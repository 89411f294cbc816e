"""
Server-rendered website: views, redirect-on-write and error pages.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from acronyms.schemas import Acronym, AcronymPayload
from core.dependencies import get_acronym_repository
from fakes import InMemoryAcronymRepository
from website.contexts import IndexContext
from website.rendering import Renderer, get_renderer


class RecordingRenderer(Renderer):
    def __init__(self, directory):
        super().__init__(directory)
        self.rendered = []

    def render(self, request, name, context, *, status_code=200):
        self.rendered.append((name, context))
        return super().render(request, name, context, status_code=status_code)


@pytest.fixture()
def renderer(app):
    from core import settings
    recording = RecordingRenderer(settings.templates_dir())
    app.dependency_overrides[get_renderer] = lambda: recording
    return recording


@pytest.fixture()
def acronym(store, user):
    acronym = Acronym(id=store.next_acronym_id(), short="LOL", long="laugh out loud", user_id=user.id)
    store.acronyms[acronym.id] = acronym
    return acronym


def test_index_passes_none_when_there_are_no_acronyms(client, renderer):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "There aren't any acronyms yet!" in resp.text

    name, context = renderer.rendered[-1]
    assert name == "index.html"
    assert isinstance(context, IndexContext)
    assert context.title == "Homepage"
    assert context.acronyms is None


def test_index_lists_acronyms(client, renderer, acronym):
    resp = client.get("/")
    assert resp.status_code == 200
    assert f'href="/acronyms/{acronym.id}"' in resp.text
    assert "laugh out loud" in resp.text
    assert renderer.rendered[-1][1].acronyms == [acronym]


def test_acronym_page_shows_acronym_and_owner(client, renderer, acronym, user):
    resp = client.get(f"/acronyms/{acronym.id}")
    assert resp.status_code == 200
    assert "<title>LOL | Acronyms</title>" in resp.text
    assert "@timc" in resp.text

    name, context = renderer.rendered[-1]
    assert name == "acronym.html"
    assert context.title == "LOL"
    assert context.user == user


@pytest.mark.parametrize("raw_id", ["999", "abc", "%C2%B2"])
def test_acronym_page_for_unknown_id_renders_404_page(client, raw_id):
    resp = client.get(f"/acronyms/{raw_id}")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("text/html")
    assert "<h1>404</h1>" in resp.text


def test_create_form_lists_users(client, renderer, user):
    resp = client.get("/acronyms/create")
    assert resp.status_code == 200
    assert "Create An Acronym" in resp.text
    assert f'<option value="{user.id}"' in resp.text
    assert renderer.rendered[-1][0] == "createAcronym.html"


def test_create_redirects_to_new_acronym(client, store, user):
    resp = client.post(
        "/acronyms/create",
        data={"short": "OMG", "long": "oh my god", "userID": str(user.id)},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/acronyms/1"
    assert store.acronyms[1].short == "OMG"
    assert store.acronyms[1].user_id == user.id


def test_create_with_incomplete_form_is_400(client, store, user):
    resp = client.post("/acronyms/create", data={"short": "OMG"}, follow_redirects=False)
    assert resp.status_code == 400
    assert "<h1>400</h1>" in resp.text
    assert store.acronyms == {}


def test_create_without_saved_id_is_500(app, client, user):
    class NoIdRepository(InMemoryAcronymRepository):
        async def insert(self, payload: AcronymPayload) -> Acronym:
            return Acronym(id=None, **payload.model_dump())

    app.dependency_overrides[get_acronym_repository] = lambda: NoIdRepository(None)
    resp = client.post(
        "/acronyms/create",
        data={"short": "OMG", "long": "oh my god", "userID": str(user.id)},
        follow_redirects=False,
    )
    assert resp.status_code == 500
    assert "location" not in resp.headers


def test_edit_form_is_prefilled(client, renderer, acronym):
    resp = client.get(f"/acronyms/{acronym.id}/edit")
    assert resp.status_code == 200
    assert 'value="LOL"' in resp.text
    assert 'value="laugh out loud"' in resp.text

    name, context = renderer.rendered[-1]
    assert name == "createAcronym.html"
    assert context.title == "Edit Acronym"
    assert context.editing is True


@pytest.mark.parametrize("raw_id", ["12", "%C2%B2"])
def test_edit_form_for_unknown_id_is_404(client, raw_id):
    assert client.get(f"/acronyms/{raw_id}/edit").status_code == 404


@pytest.mark.parametrize("raw_id", ["12", "%C2%B2"])
def test_delete_unknown_id_is_404(client, raw_id):
    assert client.post(f"/acronyms/{raw_id}/delete", follow_redirects=False).status_code == 404


def test_edit_overwrites_and_redirects(client, store, acronym, user):
    resp = client.post(
        f"/acronyms/{acronym.id}/edit",
        data={"short": "LOL", "long": "lots of love", "userID": str(user.id)},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == f"/acronyms/{acronym.id}"
    assert store.acronyms[acronym.id].long == "lots of love"


@pytest.mark.parametrize("raw_id", ["nope", "%C2%B2"])
def test_edit_unknown_id_is_404(client, user, raw_id):
    resp = client.post(
        f"/acronyms/{raw_id}/edit",
        data={"short": "LOL", "long": "lots of love", "userID": str(user.id)},
        follow_redirects=False,
    )
    assert resp.status_code == 404


def test_delete_redirects_home(client, store, acronym):
    resp = client.post(f"/acronyms/{acronym.id}/delete", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    assert store.acronyms == {}

    assert client.post(f"/acronyms/{acronym.id}/delete", follow_redirects=False).status_code == 404
    assert client.get(f"/acronyms/{acronym.id}").status_code == 404


def test_broken_template_is_500_not_partial_page(app, tmp_path):
    (tmp_path / "index.html").write_text("<h1>{{ title }}</h1>{% for x in %}", encoding="utf-8")
    broken = Renderer(tmp_path)
    app.dependency_overrides[get_renderer] = lambda: broken
    app.state.renderer = broken

    resp = TestClient(app).get("/")
    assert resp.status_code == 500
    assert "<h1>" not in resp.text


def test_unknown_web_path_renders_404_page(client):
    resp = client.get("/no/such/page")
    assert resp.status_code == 404
    assert "<h1>404</h1>" in resp.text


def test_unknown_api_path_stays_json(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not Found"}
