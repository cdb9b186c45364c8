"""
Tests éditeur — états LOADING/EMPTY/READY/ERROR, mutations d'attributs,
aperçu serveur, panneau HTML, sources RestClient / LocalDataSource.
"""
import gc
import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
import requests

from wcw_contributors.blocks import BLOCK_NAME, ContributorsAttributes, SelectOption, show_all
from wcw_contributors.config import BlockConfig
from wcw_contributors.editor import (
    ContributorsEditor, EditorDataSource, EditorState, LocalDataSource, RestClient,
    contributor_from_rest, tag_from_rest,
)
from wcw_contributors.models import ContributorRecord, TagRecord


# ── Helpers ───────────────────────────────────────────────────────────────

class FakeSource:
    def __init__(self, contributors=None, tags=None, gate=None, fail_tags=False):
        self._contributors = contributors if contributors is not None else [
            ContributorRecord(id=1, title="Alice"), ContributorRecord(id=2, title="Bob"),
        ]
        self._tags = tags if tags is not None else [TagRecord(id=5, name="Music", slug="music")]
        self.gate = gate
        self.fail_tags = fail_tags
        self.render_calls = []

    def list_contributors(self):
        if self.gate is not None:
            self.gate.wait(5)
        return list(self._contributors)

    def list_tags(self):
        if self.fail_tags:
            raise requests.ConnectionError("host unreachable")
        return list(self._tags)

    def render_block(self, name, attributes):
        self.render_calls.append((name, attributes))
        return f"<div>preview {len(self.render_calls)}</div>"


def ready_editor(source=None, attributes=None):
    editor = ContributorsEditor(source or FakeSource(), attributes)
    assert editor.wait(5) == EditorState.READY
    return editor


LEGACY = {
    "contributorApiDataFetched": True,
    "tagApiDataFetched": True,
    "selectedTags": [{"value": 5, "label": "Music"}],
    "contributorOptions": [{"value": 0, "label": "Show All"}],
}


# ── États ─────────────────────────────────────────────────────────────────

class TestEditorState:
    def test_loading_before_load(self):
        with ContributorsEditor(FakeSource()) as editor:
            assert editor.state == EditorState.LOADING
            assert editor.contributors == []

    def test_loading_until_requests_complete(self):
        gate = threading.Event()
        with ContributorsEditor(FakeSource(gate=gate)) as editor:
            editor.load()
            assert editor.state == EditorState.LOADING
            assert "is-loading" in editor.render()
            gate.set()
            assert editor.wait(5) == EditorState.READY

    def test_ready(self):
        with ready_editor() as editor:
            assert [c.title for c in editor.contributors] == ["Alice", "Bob"]
            assert [t.name for t in editor.tags] == ["Music"]

    def test_empty_when_no_contributors(self):
        with ContributorsEditor(FakeSource(contributors=[])) as editor:
            assert editor.wait(5) == EditorState.EMPTY
            assert editor.render() == '<div class="wcw-contributors-editor is-empty">No contributors found</div>'

    def test_error_when_a_request_fails(self):
        with ContributorsEditor(FakeSource(fail_tags=True)) as editor:
            assert editor.wait(5) == EditorState.ERROR
            assert editor.tags == []
            assert "is-error" in editor.render()

    def test_load_only_once(self):
        with ready_editor() as editor:
            first = editor.load()
            assert editor.load() == first

    def test_ready_is_sticky(self):
        with ready_editor() as editor:
            editor.set_orderby("date")
            assert editor.state == EditorState.READY


# ── Pool d'exécution ──────────────────────────────────────────────────────

def test_close_shuts_down_private_pool():
    editor = ready_editor()
    pool = editor._executor
    editor.close()
    with pytest.raises(RuntimeError):
        pool.submit(print)


def test_private_pool_released_with_editor():
    editor = ready_editor()
    pool = editor._executor
    del editor
    gc.collect()
    with pytest.raises(RuntimeError):
        pool.submit(print)


def test_caller_pool_left_running():
    with ThreadPoolExecutor(max_workers=2) as pool:
        editor = ContributorsEditor(FakeSource(), executor=pool)
        editor.wait(5)
        editor.close()
        assert pool.submit(lambda: 42).result(5) == 42


# ── Options ───────────────────────────────────────────────────────────────

def test_options_start_with_show_all():
    with ready_editor() as editor:
        assert editor.contributor_options[0] == show_all()
        assert [o.id for o in editor.contributor_options] == [0, 1, 2]
        assert editor.tag_options == [show_all(), SelectOption(id=5, label="Music")]


# ── Mutations ─────────────────────────────────────────────────────────────

class TestMutations:
    def test_legacy_attributes_migrated(self):
        with ContributorsEditor(FakeSource(), LEGACY) as editor:
            assert isinstance(editor.attributes, ContributorsAttributes)
            assert editor.attributes.orderby == "date"
            assert editor.attributes.selected_tags == [SelectOption(id=5, label="Music")]

    def test_legacy_orderby_survives_migration(self):
        with ContributorsEditor(FakeSource(), {**LEGACY, "orderby": "title"}) as editor:
            assert editor.attributes.orderby == "title"

    def test_toggle_twice_restores_selection(self):
        attrs = ContributorsAttributes(
            selected_tags=[SelectOption(id=5, label="Music")],
            selected_contributors=[SelectOption(id=2, label="Bob")],
        )
        with ContributorsEditor(FakeSource(), attrs) as editor:
            editor.toggle_select_by_contributor()
            assert editor.attributes.select_by_contributor is True
            assert editor.attributes.selected_tags == attrs.selected_tags
            editor.toggle_select_by_contributor()
            assert editor.attributes == attrs

    def test_select_contributors_replaces_one_attribute(self):
        with ContributorsEditor(FakeSource()) as editor:
            editor.select_contributors([{"value": 2, "label": "Bob"}])
            assert editor.attributes.selected_contributors == [SelectOption(id=2, label="Bob")]
            assert editor.attributes.selected_tags == [show_all()]

    def test_select_tags_empty_list(self):
        with ContributorsEditor(FakeSource()) as editor:
            editor.select_tags([])
            assert editor.attributes.selected_tags == []

    def test_set_attributes_accepts_camel_case(self):
        with ContributorsEditor(FakeSource()) as editor:
            editor.set_attributes(selectByContributor=True, orderby="date")
            assert editor.attributes.select_by_contributor is True
            assert editor.attributes.orderby == "date"

    def test_set_attributes_unknown_key(self):
        with ContributorsEditor(FakeSource()) as editor:
            with pytest.raises(ValueError, match="inconnu"):
                editor.set_attributes(columns=3)

    def test_set_orderby_outside_choices(self):
        with ContributorsEditor(FakeSource()) as editor:
            with pytest.raises(ValueError):
                editor.set_orderby("rand")
            assert editor.attributes.orderby == "title"


# ── Aperçu ────────────────────────────────────────────────────────────────

class TestPreview:
    def test_preview_uses_current_attributes(self):
        source = FakeSource()
        with ready_editor(source) as editor:
            editor.set_orderby("date")
            assert editor.preview() == "<div>preview 1</div>"
            name, attributes = source.render_calls[0]
            assert name == BLOCK_NAME
            assert attributes["orderby"] == "date"
            assert attributes["selectByContributor"] is False

    def test_preview_cached_until_change(self):
        source = FakeSource()
        with ready_editor(source) as editor:
            editor.preview()
            editor.preview()
            assert len(source.render_calls) == 1
            editor.toggle_select_by_contributor()
            assert editor.preview() == "<div>preview 2</div>"


# ── Panneau ───────────────────────────────────────────────────────────────

class TestPanel:
    def test_loading_placeholder(self):
        with ContributorsEditor(FakeSource()) as editor:
            assert editor.render() == '<div class="wcw-contributors-editor is-loading">Loading...</div>'

    def test_tag_mode_panel(self):
        with ready_editor() as editor:
            html = editor.render()
        assert '<select multiple name="selectedTags">' in html
        assert '<option value="0" selected>Show All</option>' in html
        assert '<option value="5">Music</option>' in html
        assert '<option value="title" selected>First name</option>' in html
        assert '<div class="wcw-contributors-editor__preview"><div>preview 1</div></div>' in html
        assert "&lt;!-- wp:wcw/block-contributors /--&gt;" in html
        assert " checked" not in html

    def test_contributor_mode_panel(self):
        attrs = ContributorsAttributes(select_by_contributor=True, selected_contributors=[SelectOption(id=2, label="Bob")])
        with ready_editor(attributes=attrs) as editor:
            html = editor.render(with_preview=False)
        assert 'name="selectByContributor" checked' in html
        assert '<select multiple name="selectedContributors">' in html
        assert '<option value="2" selected>Bob</option>' in html
        assert "__preview" not in html

    def test_panel_french(self):
        with ready_editor() as editor:
            html = editor.render(lang="fr", with_preview=False)
        assert "Étiquettes" in html
        assert "Trier par :" in html
        assert '<option value="0" selected>Tout afficher</option>' in html
        assert "<label>Balisage enregistré</label>" in html

    def test_preview_label(self):
        with ready_editor() as editor:
            html = editor.render()
        assert "<label>Preview</label>" in html
        assert "<label>Saved markup</label>" in html


# ── LocalDataSource (SQLAlchemy) ──────────────────────────────────────────

def test_local_source_matches_protocol(db):
    assert isinstance(LocalDataSource(db), EditorDataSource)
    assert isinstance(FakeSource(), EditorDataSource)


def test_editor_on_local_source(seeded, db):
    # une session SQLAlchemy → un seul worker
    with ThreadPoolExecutor(max_workers=1) as pool:
        editor = ContributorsEditor(LocalDataSource(db), {"orderby": "date"}, executor=pool)
        assert editor.wait(5) == EditorState.READY
        assert [c.title for c in editor.contributors] == ["Alice", "Bob", "Carol", "Dave"]
        assert [t.name for t in editor.tags] == ["Art", "Food", "Music"]
        preview = editor.preview()
    assert preview.startswith('<div class="wp-block-wcw-block-contributors contributor-grid">')
    assert preview.index("Dave") < preview.index("Alice")


# ── RestClient (requests) ─────────────────────────────────────────────────

def _response(payload):
    r = MagicMock()
    r.json.return_value = payload
    r.raise_for_status.return_value = None
    return r


class TestRestClient:
    CONFIG = BlockConfig(rest_url="https://example.test/wp-json")

    def test_list_contributors(self):
        session = MagicMock()
        session.get.return_value = _response([
            {"id": 3, "title": {"rendered": "Carol"}, "content": {"rendered": "<p>Hi</p>"},
             "featured_media_url": "", "date": "2021-03-15T00:00:00", "tags": [1, 2]},
        ])
        [c] = RestClient(self.CONFIG, session=session).list_contributors()
        session.get.assert_called_once_with("https://example.test/wp-json/wp/v2/contributor", params={"per_page": 100})
        assert c.title == "Carol"
        assert c.thumbnail_url is None
        assert c.tag_ids == [1, 2]

    def test_list_tags(self):
        session = MagicMock()
        session.get.return_value = _response([{"id": 1, "name": "Music", "slug": "music", "count": 2}])
        assert RestClient(self.CONFIG, session=session).list_tags() == [TagRecord(id=1, name="Music", slug="music")]

    def test_render_block_posts_attributes(self):
        session = MagicMock()
        session.post.return_value = _response({"rendered": "<div>grid</div>"})
        html = RestClient(self.CONFIG, session=session).render_block(BLOCK_NAME, {"orderby": "date"})
        assert html == "<div>grid</div>"
        session.post.assert_called_once_with(
            "https://example.test/wp-json/wp/v2/block-renderer/wcw/block-contributors",
            json={"attributes": {"orderby": "date"}},
        )

    def test_http_error_puts_editor_in_error(self):
        session = MagicMock()
        failing = MagicMock()
        failing.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        session.get.return_value = failing
        with ContributorsEditor(RestClient(self.CONFIG, session=session)) as editor:
            assert editor.wait(5) == EditorState.ERROR

    def test_rendered_fields_accept_plain_strings(self):
        c = contributor_from_rest({"id": 1, "title": "Alice", "content": None})
        assert (c.title, c.content) == ("Alice", "")
        assert tag_from_rest({"id": 2}).name == ""


def test_rest_client_against_host_api(client, seeded):
    # TestClient expose la même API que requests.Session
    rest = RestClient(BlockConfig(rest_url="http://testserver/wp-json/"), session=client)
    assert sorted(c.title for c in rest.list_contributors()) == ["Alice", "Bob", "Carol", "Dave"]
    assert {t.slug for t in rest.list_tags()} == {"music", "art", "food"}

    with ThreadPoolExecutor(max_workers=1) as pool:
        editor = ContributorsEditor(rest, {"orderby": "date"}, executor=pool)
        assert editor.wait(10) == EditorState.READY
        preview = editor.preview()
    assert preview.index("Dave") < preview.index("Alice")
