"""Localized UI strings used in generated pages.

Labels are looked up by key; a site configuration may override any default.
Some labels are templates filled with :meth:`str.format` keyword arguments.

Examples
--------
>>> labels = Labels()
>>> labels.label("deprecated")
'Deprecated.'
>>> labels.label("inherited_from", kind="Methods", type_kind="class")
'Methods inherited from class'
"""

from __future__ import annotations

import typing as typ

DEFAULT_LABELS: dict[str, str] = {
    "class": "Class",
    "interface": "Interface",
    "enum": "Enum",
    "annotation": "Annotation Type",
    "record": "Record",
    "package": "Package",
    "fields": "Fields",
    "field": "Field",
    "field_summary": "Field Summary",
    "field_details": "Field Details",
    "constructors": "Constructors",
    "constructor": "Constructor",
    "constructor_summary": "Constructor Summary",
    "constructor_details": "Constructor Details",
    "methods": "Methods",
    "method": "Method",
    "method_summary": "Method Summary",
    "method_details": "Method Details",
    "nested_classes": "Nested Classes",
    "nested_class": "Class",
    "nested_class_summary": "Nested Class Summary",
    "elements": "Elements",
    "element": "Element",
    "element_summary": "Element Summary",
    "element_details": "Element Details",
    "modifier_and_type": "Modifier and Type",
    "description": "Description",
    "deprecated": "Deprecated.",
    "default": "default",
    "throws": "throws",
    "extends": "extends",
    "inherited_from": "{kind} inherited from {type_kind}",
    "inherited_row": "Inherited from",
    "parameters": "Parameters:",
    "returns": "Returns:",
    "throws_tag": "Throws:",
    "since": "Since:",
    "see_also": "See Also:",
    "author": "Author:",
}


class Labels:
    """Label lookup with per-site overrides on top of :data:`DEFAULT_LABELS`."""

    def __init__(self, overrides: typ.Mapping[str, str] | None = None) -> None:
        self._labels = dict(DEFAULT_LABELS)
        if overrides:
            self._labels.update({str(k): str(v) for k, v in overrides.items()})

    def label(self, key: str, **values: str) -> str:
        """Return the label for ``key``, formatted with ``values`` if given.

        Raises
        ------
        KeyError
            If ``key`` has no default and no override.
        """
        try:
            text = self._labels[key]
        except KeyError:
            msg = f"No label defined for '{key}'."
            raise KeyError(msg) from None
        return text.format(**values) if values else text

    def __contains__(self, key: object) -> bool:
        return key in self._labels


__all__ = ["DEFAULT_LABELS", "Labels"]
