"""HTML attribute bags and tag rendering used by menu items."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Union

AttributeValue = Union[str, Iterable[str], None]


def _split_classes(value: AttributeValue) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    names: List[str] = []
    for entry in value:
        names.extend(str(entry).split())
    return names


class Attributes:
    """Ordered attribute bag with class-list merging.

    ``class`` is multi-valued: values are split on whitespace and merged without
    duplicates. Every other key is last-write-wins but keeps the position at
    which it was first inserted, so rendering is deterministic.
    """

    def __init__(self, attributes: Mapping[str, AttributeValue] | None = None) -> None:
        self._attributes: Dict[str, str] = {}
        self._classes: List[str] = []
        if attributes:
            self.set_attributes(attributes)

    def set_attribute(self, key: str, value: AttributeValue = "") -> "Attributes":
        if key == "class":
            return self.add_class(value)

        if value is None:
            value = ""
        elif not isinstance(value, str):
            value = " ".join(str(entry) for entry in value)
        self._attributes[key] = value
        return self

    def set_attributes(self, attributes: Mapping[str, AttributeValue]) -> "Attributes":
        for key, value in attributes.items():
            self.set_attribute(key, value)
        return self

    def unset(self, key: str) -> "Attributes":
        if key == "class":
            self._classes = []
        self._attributes.pop(key, None)
        return self

    def add_class(self, names: AttributeValue) -> "Attributes":
        new_names = _split_classes(names)
        if not new_names:
            return self
        # The class slot keeps its first insertion position.
        self._attributes.setdefault("class", "")
        for name in new_names:
            if name not in self._classes:
                self._classes.append(name)
        return self

    def merge_with(self, other: "Attributes") -> "Attributes":
        for key, value in other._attributes.items():
            if key == "class":
                self.add_class(other._classes)
            else:
                self._attributes[key] = value
        return self

    def get(self, key: str, default: str | None = None) -> str | None:
        if key == "class":
            return " ".join(self._classes) if self._classes else default
        return self._attributes.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._attributes

    def classes(self) -> List[str]:
        return list(self._classes)

    def is_empty(self) -> bool:
        return not self._attributes

    def to_dict(self) -> Dict[str, str]:
        return {key: self.get(key, "") or "" for key in self._attributes}

    def copy(self) -> "Attributes":
        clone = Attributes()
        clone._attributes = dict(self._attributes)
        clone._classes = list(self._classes)
        return clone

    def render(self) -> str:
        parts: List[str] = []
        for key, value in self.to_dict().items():
            parts.append(key if value == "" else f'{key}="{value}"')
        return " ".join(parts)

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attributes):
            return NotImplemented
        return self.to_dict() == other.to_dict() and list(self) == list(other)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Attributes({self.to_dict()!r})"


def as_attributes(attributes: Attributes | Mapping[str, AttributeValue] | None) -> Attributes:
    """Return ``attributes`` as an :class:`Attributes` instance."""

    if isinstance(attributes, Attributes):
        return attributes
    return Attributes(attributes)


class Tag:
    """A tag name plus attributes, rendered around some contents."""

    def __init__(self, name: str, attributes: Attributes | Mapping[str, AttributeValue] | None = None) -> None:
        self.name = name
        self.attributes = as_attributes(attributes)

    @classmethod
    def make(cls, name: str, attributes: Attributes | Mapping[str, AttributeValue] | None = None) -> "Tag":
        return cls(name, attributes)

    def open(self) -> str:
        rendered = self.attributes.render()
        if rendered:
            return f"<{self.name} {rendered}>"
        return f"<{self.name}>"

    def close(self) -> str:
        return f"</{self.name}>"

    def with_contents(self, contents: str | Iterable[str]) -> str:
        if not isinstance(contents, str):
            contents = "".join(contents)
        return f"{self.open()}{contents}{self.close()}"


__all__ = ["Attributes", "Tag", "as_attributes"]
