"""Éditeur — sources de données, sélecteur à états, panneau HTML."""
from .client import EditorDataSource, RestClient, LocalDataSource, contributor_from_rest, tag_from_rest
from .selector import ContributorsEditor, EditorState, ORDERBY_CHOICES
from .panel import render_panel

__all__ = [
    "EditorDataSource", "RestClient", "LocalDataSource", "contributor_from_rest", "tag_from_rest",
    "ContributorsEditor", "EditorState", "ORDERBY_CHOICES",
    "render_panel",
]
