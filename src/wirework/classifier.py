"""Structural classification of parameter nodes.

A parameter's shape is decided purely from its children:

* no element children: a :class:`~wirework.domain.Scalar` holding its text,
* children carrying key/value attributes: a :class:`~wirework.domain.KeyValueMap`,
* anything else: an :class:`~wirework.domain.OrderedList` of child texts.

Example:
    <timeout>30</timeout>                                  -> Scalar("30")
    <prefixes><p>a/</p><p>b/</p></prefixes>                -> OrderedList(("a/", "b/"))
    <headers><h key="k" value="v"/></headers>              -> KeyValueMap({"k": "v"})
    <rename><r from="title" to="dc:title"/></rename>       -> KeyValueMap({"title": "dc:title"})
"""

from typing import Optional
from xml.etree import ElementTree

from wirework.document import element_children, local_name, text_content
from wirework.domain import KeyValueMap, OrderedList, ParamValue, Scalar
from wirework.errors import MalformedMapEntryError

__all__ = ["KEY_ATTRIBUTES", "VALUE_ATTRIBUTES", "classify"]

KEY_ATTRIBUTES = ("from", "key")
VALUE_ATTRIBUTES = ("to", "value")


def classify(parameter_node: ElementTree.Element) -> ParamValue:
    """Decide the shape of a parameter node and extract its value.

    Args:
        parameter_node: An element child of a ``params`` section.

    Returns:
        The classified value.

    Raises:
        MalformedMapEntryError: If the node is map-shaped but one of its entries
            lacks a key or value attribute.
    """
    children = element_children(parameter_node)
    if not children:
        return Scalar(text_content(parameter_node))
    if any(_is_map_entry(child) for child in children):
        return _to_map(parameter_node, children)
    return _to_list(children)


def _first_attribute(node: ElementTree.Element, names: tuple[str, ...]) -> Optional[str]:
    return next((node.get(n) for n in names if node.get(n) is not None), None)


def _is_map_entry(node: ElementTree.Element) -> bool:
    return (
        _first_attribute(node, KEY_ATTRIBUTES) is not None
        and _first_attribute(node, VALUE_ATTRIBUTES) is not None
    )


def _to_map(parameter_node: ElementTree.Element, children: list[ElementTree.Element]) -> KeyValueMap:
    name = local_name(parameter_node.tag)
    entries: dict[str, str] = {}
    for child in children:
        key = _first_attribute(child, KEY_ATTRIBUTES)
        value = _first_attribute(child, VALUE_ATTRIBUTES)
        if key is None:
            raise MalformedMapEntryError(
                f"must specify a 'key' or 'from' value in a map object: {name}", name
            )
        if value is None:
            raise MalformedMapEntryError(
                f"must specify a 'value' or 'to' value in a map object: {name}", name
            )
        entries[key] = value
    return KeyValueMap(entries)


def _to_list(children: list[ElementTree.Element]) -> OrderedList:
    texts = (text_content(child) for child in children)
    return OrderedList(tuple(t for t in texts if t.strip()))
