"""Panneau éditeur HTML — placeholders d'état ou contrôles + aperçu."""
from html import escape
from typing import TYPE_CHECKING, Iterable, List

from ..blocks.base import SHOW_ALL_ID, SelectOption
from ..content.serializer import serialize_contributors_block
from ..core.i18n import i18n_resolve

if TYPE_CHECKING:
    from .selector import ContributorsEditor

_ROOT_CLASS = "wcw-contributors-editor"


def _options_html(options: Iterable[SelectOption], selected: List[SelectOption], show_all_label: str) -> str:
    selected_ids = {o.id for o in selected}
    return "".join(
        f'<option value="{o.id}"{" selected" if o.id in selected_ids else ""}>'
        f'{escape(show_all_label if o.id == SHOW_ALL_ID else o.label)}</option>'
        for o in options
    )


def render_panel(editor: "ContributorsEditor", lang: str = "en", with_preview: bool = True) -> str:
    from .selector import ORDERBY_CHOICES, EditorState

    t = lambda key: i18n_resolve(key, lang)
    state = editor.state

    if state == EditorState.LOADING:
        return f'<div class="{_ROOT_CLASS} is-loading">{t("@editor.loading")}</div>'
    if state == EditorState.EMPTY:
        return f'<div class="{_ROOT_CLASS} is-empty">{t("@editor.empty")}</div>'
    if state == EditorState.ERROR:
        return f'<div class="{_ROOT_CLASS} is-error">{t("@editor.error")}</div>'

    a = editor.attributes
    checked = " checked" if a.select_by_contributor else ""

    if a.select_by_contributor:
        label, name = t("@editor.contributors_label"), "selectedContributors"
        options = _options_html(editor.contributor_options, a.selected_contributors, t("@editor.show_all"))
    else:
        label, name = t("@editor.tags_label"), "selectedTags"
        options = _options_html(editor.tag_options, a.selected_tags, t("@editor.show_all"))

    orderby_html = "".join(
        f'<option value="{value}"{" selected" if value == a.orderby else ""}>{t(key)}</option>'
        for value, key in ORDERBY_CHOICES
    )

    preview_html = ""
    if with_preview:
        preview_html = (f'\n  <label>{t("@editor.preview")}</label>'
                        f'\n  <div class="{_ROOT_CLASS}__preview">{editor.preview()}</div>')

    markup = escape(serialize_contributors_block(a))

    return f"""<div class="{_ROOT_CLASS}">
  <label>{t("@editor.toggle_label")}</label>
  <br>
  <input type="checkbox" class="components-form-toggle__input" name="selectByContributor"{checked}>
  <br>
  <label>{label}</label>
  <select multiple name="{name}">{options}</select>
  <label>{t("@editor.orderby_label")}</label>
  <select name="orderby">{orderby_html}</select>{preview_html}
  <label>{t("@editor.markup")}</label>
  <pre class="{_ROOT_CLASS}__markup">{markup}</pre>
</div>"""
