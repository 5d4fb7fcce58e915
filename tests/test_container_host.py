"""Tests for the headless document/container host model."""

from __future__ import annotations

import pytest

from ggraphs.errors import ContainerNotFoundError
from ggraphs.services.container_host import ContainerStyle, Document, StaticContainer, container_from_tag


def test_static_container_notifies_listeners():
    c = StaticContainer("x", 100, 50)
    seen = []
    listener = lambda: seen.append(c.client_size())  # noqa: E731
    c.add_resize_listener(listener)
    c.add_resize_listener(listener)
    assert c.listener_count == 1
    c.resize(120, 60)
    assert seen == [(120, 60)]
    c.remove_resize_listener(listener)
    c.resize(10, 10)
    assert len(seen) == 1


def test_document_lookup_and_errors():
    doc = Document()
    c = doc.add_container(StaticContainer("a"))
    assert doc.get_container("a") is c
    doc.remove_container("a")
    with pytest.raises(ContainerNotFoundError) as exc:
        doc.get_container("a")
    assert exc.value.context == {"container_id": "a"}


def test_tables_are_not_containers():
    doc = Document('<table id="t"><tbody></tbody></table>')
    assert doc.find_table("t") is not None
    with pytest.raises(ContainerNotFoundError):
        doc.get_container("t")


def test_container_from_markup_style():
    doc = Document(
        '<div id="box" style="width:320px;height:200; font-family: Georgia, serif; background-color:#eee"></div>'
    )
    c = container_from_tag(doc.soup.find(id="box"))
    assert c.client_size() == (320, 200)
    assert c.computed_style().font_family == "Georgia, serif"
    assert c.computed_style().background_color == "#eee"


def test_container_defaults_without_inline_size():
    doc = Document('<div id="plain"></div>')
    c = doc.get_container("plain")
    assert c.client_size() == (300, 150)
    assert c.computed_style() == ContainerStyle()
    assert doc.get_container("plain") is c
